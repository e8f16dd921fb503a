#!/usr/bin/env python3
"""Unit tests for tui_themes module."""

from prompt_toolkit.styles import Style

from config import VALID_THEMES
from interface.tui_themes import DEFAULT_THEME, THEMES, build_style, get_theme_palette


class TestThemes:
    """Tests for THEMES constant."""

    def test_every_configurable_theme_exists(self):
        assert set(VALID_THEMES) == set(THEMES)
        assert DEFAULT_THEME in THEMES

    def test_theme_structure(self):
        """Each theme styles every class the renderer emits."""
        required_keys = {
            "",
            "text",
            "text.dim",
            "title",
            "title.inactive",
            "header",
            "selected",
            "priority.a",
            "priority.b",
            "priority.c",
            "priority.d",
            "priority.other",
            "due.overdue",
            "due.today",
            "due.future",
            "done",
            "checkbox",
            "status",
            "status.ok",
            "status.fail",
            "help.key",
            "help.category",
        }
        for theme_name, theme_dict in THEMES.items():
            missing = required_keys - set(theme_dict.keys())
            assert not missing, f"Theme {theme_name} missing keys: {missing}"


class TestGetThemePalette:
    """Tests for get_theme_palette function."""

    def test_existing_theme(self):
        palette = get_theme_palette("nord")
        assert palette == THEMES["nord"]

    def test_unknown_theme_falls_back_to_default(self):
        assert get_theme_palette("no-such-theme") == THEMES[DEFAULT_THEME]

    def test_returns_copy(self):
        palette = get_theme_palette(DEFAULT_THEME)
        palette["text"] = "#000000"
        assert THEMES[DEFAULT_THEME]["text"] != "#000000"


class TestBuildStyle:
    """Tests for build_style function."""

    def test_builds_style_for_every_theme(self):
        for name in THEMES:
            assert isinstance(build_style(name), Style)
