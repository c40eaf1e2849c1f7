"""logpeek - interactive terminal viewer for structured (JSON) log streams."""

__version__ = "0.1.0"
