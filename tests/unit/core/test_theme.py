"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import pytest
import tidyfs.core.theme as theme_module
from rich.theme import Theme
from tidyfs.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_bundled_theme_path,
    get_rich_theme,
    get_theme,
    load_theme,
)


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.error == "#f53263"

    def test_short_hex_accepted(self) -> None:
        """Three-digit hex codes are valid."""
        assert ThemeColors(renamed="#abc").renamed == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        """Colors without a # prefix are rejected."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        """Colors with the wrong length are rejected."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(text="#ff")

    def test_invalid_hex_chars(self) -> None:
        """Non-hex characters are rejected."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")

    def test_unknown_key_rejected(self) -> None:
        """Unknown color names are rejected."""
        with pytest.raises(ValueError):
            ThemeColors(sparkle="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file returns None."""
        assert _load_toml_colors(tmp_path / "nope.toml") is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML returns None."""
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")

        assert _load_toml_colors(path) is None

    def test_non_string_values_dropped(self, tmp_path: Path) -> None:
        """Only string values are kept."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\ntext = "#000000"\nmuted = 5\n')

        assert _load_toml_colors(path) == {"text": "#000000"}


class TestLoadTheme:
    """Tests for load_theme."""

    def test_bundled_theme_exists(self) -> None:
        """The package ships a default theme."""
        assert Path(get_bundled_theme_path()).is_file()

    def test_user_override(self, isolated_home: Path) -> None:
        """User colors override bundled ones."""
        user_theme = isolated_home / ".config" / "tidyfs" / "theme.toml"
        user_theme.parent.mkdir(parents=True)
        user_theme.write_text('[colors]\nrenamed = "#123456"\n')

        colors = load_theme()

        assert colors.renamed == "#123456"

    def test_invalid_user_theme_falls_back(self, isolated_home: Path) -> None:
        """An invalid user color falls back to defaults."""
        user_theme = isolated_home / ".config" / "tidyfs" / "theme.toml"
        user_theme.parent.mkdir(parents=True)
        user_theme.write_text('[colors]\ntext = "red"\n')

        assert load_theme() == ThemeColors()


class TestRichTheme:
    """Tests for Rich theme generation."""

    def test_styles_present(self) -> None:
        """Every style used by the CLI is defined."""
        theme = get_rich_theme(ThemeColors())

        for name in ("success", "warning", "error", "info", "renamed", "collision", "deleted"):
            assert name in theme.styles

    def test_get_theme_cached(self) -> None:
        """get_theme loads once and reuses the result."""
        with patch.object(theme_module, "_cached_theme", None):
            first = get_theme()
            second = get_theme()

        assert isinstance(first, Theme)
        assert first is second
