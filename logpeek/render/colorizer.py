"""
JSON-aware colorizer.

Colors serialized JSON by lexical role (key, value, bracket) in a single
left-to-right scan, without parsing it. The original field order and
whitespace are kept exactly as they appear in the input.
"""

from dataclasses import dataclass, field

from rich.text import Text


@dataclass(frozen=True)
class Theme:
    """Maps the lexical roles to rich styles."""
    name: str
    key: str
    value: str
    bracket: str

    def style_for(self, role: str) -> str:
        return getattr(self, role)


ERROR_THEME = Theme(name="error", key="bold red", value="green", bracket="bold white")
STANDARD_THEME = Theme(name="standard", key="bold blue", value="green", bracket="bold white")
DEBUG_THEME = Theme(
    name="debug",
    key="dim bright_white",
    value="dim bright_white",
    bracket="dim bright_white",
)

KEY = "key"
VALUE = "value"
BRACKET = "bracket"
PLAIN = None

_OPENERS = "{["
_CLOSERS = "}]"


@dataclass
class JsonScanner:
    """
    Classifies JSON text one character at a time.

    Tracks whether the scan is inside a string (honouring backslash escapes)
    and whether the next string is an object key. Open containers are kept
    on a stack so strings inside arrays and nested objects get the right role.
    """

    inside_quotes: bool = False
    parsing_key: bool = True
    escaped: bool = False
    stack: list[str] = field(default_factory=list)

    def feed(self, char: str) -> str | None:
        """Consume one character and return its role (None for plain text)."""
        if self.inside_quotes:
            role = KEY if self.parsing_key else VALUE
            if self.escaped:
                self.escaped = False
            elif char == "\\":
                self.escaped = True
            elif char == '"':
                self.inside_quotes = False
            return role

        if char == '"':
            self.inside_quotes = True
            return KEY if self.parsing_key else VALUE

        if char in _OPENERS:
            self.stack.append(char)
            self.parsing_key = char == "{"
            return BRACKET

        if char in _CLOSERS:
            if self.stack:
                self.stack.pop()
            self.parsing_key = False
            return BRACKET

        if char == ":":
            self.parsing_key = False
            return BRACKET

        if char == ",":
            # Top level (no stack) behaves like an object
            self.parsing_key = not self.stack or self.stack[-1] == "{"
            return BRACKET

        if char.isspace() or self.parsing_key:
            return PLAIN

        # Numbers, true, false, null
        return VALUE


def colorize(source: str | bytes, theme: Theme) -> Text:
    """
    Colorize serialized JSON with the given theme.

    Consecutive characters sharing a role are emitted as one styled span, so
    ``colorize(s, theme).plain == s`` always holds.

    Args:
        source: Serialized JSON (bytes are decoded as UTF-8)
        theme: Role-to-style mapping to apply

    Returns:
        rich Text carrying the styled content
    """
    if isinstance(source, bytes):
        source = source.decode("utf-8")

    scanner = JsonScanner()
    text = Text()

    run: list[str] = []
    run_role: str | None = PLAIN

    for char in source:
        role = scanner.feed(char)
        if role != run_role and run:
            text.append("".join(run), style=_style(theme, run_role))
            run = []
        run_role = role
        run.append(char)

    if run:
        text.append("".join(run), style=_style(theme, run_role))

    return text


def _style(theme: Theme, role: str | None) -> str | None:
    if role is PLAIN:
        return None
    return theme.style_for(role)
