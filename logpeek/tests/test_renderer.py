"""
Unit tests for the render engine.
"""

import json

import pytest

from conftest import ERROR_LINE, INFO_LINE, make_record, styles_of
from logpeek.models.log_record import Level, parse_record
from logpeek.render.colorizer import DEBUG_THEME, ERROR_THEME, STANDARD_THEME
from logpeek.render.renderer import (
    render_expanded,
    render_list,
    render_packed,
    theme_for,
    visible_window,
)


class TestThemeFor:
    """Tests for theme selection by severity."""

    def test_theme_mapping(self):
        """Test error, debug and the other levels pick their themes."""
        assert theme_for(Level.ERROR) is ERROR_THEME
        assert theme_for(Level.DEBUG) is DEBUG_THEME
        assert theme_for(Level.INFO) is STANDARD_THEME
        assert theme_for(Level.WARN) is STANDARD_THEME
        assert theme_for(Level.FATAL) is STANDARD_THEME


class TestRenderPacked:
    """Tests for render_packed function."""

    def test_info_record(self):
        """Test an info row shows level and msg plus a hidden count."""
        text = render_packed(parse_record(INFO_LINE))

        assert text.plain == '{"level":"info","msg":"ok"} ... 0 hidden fields'
        assert styles_of(text, '"level"') == {"bold blue"}

    def test_error_record_shows_all_fields(self):
        """Test an error row shows every field and no hidden count."""
        text = render_packed(parse_record(ERROR_LINE))

        assert text.plain == ERROR_LINE
        assert "hidden" not in text.plain
        assert styles_of(text, '"code"') == {"bold red"}

    def test_debug_record_is_faint(self):
        """Test a debug row uses the debug theme."""
        text = render_packed(make_record("debug", "quiet", a=1))

        assert styles_of(text, '"level"') == {"dim bright_white"}
        assert text.plain.endswith(" ... 1 hidden fields")

    @pytest.mark.parametrize("extra", [0, 1, 4, 12])
    def test_hidden_field_count(self, extra):
        """Test the hidden count equals the number of extra fields."""
        record = make_record("warn", "busy", **{f"f{i}": i for i in range(extra)})
        text = render_packed(record)

        assert text.plain.endswith(f" ... {extra} hidden fields")
        assert extra == len(record.fields) - 2

    def test_only_promoted_fields_shown(self):
        """Test level and msg are shown without the other fields."""
        record = parse_record('{"msg":"first","x":1,"level":"info"}')

        assert render_packed(record).plain.startswith('{"level":"info","msg":"first"}')


class TestRenderExpanded:
    """Tests for render_expanded function."""

    def test_pretty_prints_every_field(self):
        """Test the expanded view is the indented serialization of all fields."""
        record = parse_record(ERROR_LINE)
        text = render_expanded(record)

        assert text.plain == json.dumps(record.fields, indent=2)
        assert '"code": 500' in text.plain

    def test_error_theme(self):
        """Test error records are expanded with the error theme."""
        text = render_expanded(parse_record(ERROR_LINE))

        assert styles_of(text, '"code"') == {"bold red"}

    def test_standard_theme_for_debug(self):
        """Test non-error records, debug included, use the standard theme."""
        text = render_expanded(make_record("debug", "quiet"))

        assert styles_of(text, '"msg"') == {"bold blue"}

    def test_idempotent(self):
        """Test rendering the same record twice gives identical output."""
        record = make_record("info", "ok", nested={"a": [1, 2]})

        assert render_expanded(record) == render_expanded(record)

    def test_custom_indent(self):
        """Test the indentation width can be changed."""
        text = render_expanded(parse_record(INFO_LINE), indent=4)

        assert '\n    "level"' in text.plain


class TestVisibleWindow:
    """Tests for visible_window function."""

    def test_anchored_to_newest(self):
        """Test the window shows the newest records when the cursor is 0."""
        assert visible_window(10, 0, 3) == range(7, 10)

    def test_follows_cursor(self):
        """Test the window slides back to keep the cursor row visible."""
        window = visible_window(10, 5, 3)

        assert 10 - 6 in window
        assert len(window) == 3

    def test_oldest_record(self):
        """Test the window reaches the start of the list."""
        assert visible_window(10, 9, 3) == range(0, 3)

    def test_short_list(self):
        """Test a list shorter than the region is shown whole."""
        assert visible_window(2, 0, 10) == range(0, 2)

    def test_empty(self):
        """Test nothing is shown for an empty list or region."""
        assert len(visible_window(0, 0, 10)) == 0
        assert len(visible_window(5, 0, 0)) == 0


class TestRenderList:
    """Tests for render_list function."""

    def test_marks_cursor_row(self):
        """Test the cursor row is prefixed with the marker."""
        records = [parse_record(ERROR_LINE), parse_record(INFO_LINE)]
        lines = render_list(records, cursor=1, height=10).plain.split("\n")

        assert lines[0] == "> " + ERROR_LINE
        assert lines[1].startswith('{"level":"info"')

    def test_window_height(self):
        """Test only as many rows as fit are rendered."""
        records = [make_record(msg=str(i)) for i in range(20)]
        lines = render_list(records, cursor=0, height=5).plain.split("\n")

        assert len(lines) == 5
        assert lines[-1].startswith('> {"level":"info","msg":"19"}')


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
