"""Unit tests for theme loading."""

from pathlib import Path

import pytest
from rich.theme import Theme
from vaultsweep.core.theme import (
    ThemeColors,
    get_rich_theme,
    get_user_theme_path,
    load_theme,
    read_theme_file,
)


class TestThemeColors:
    """Tests for ThemeColors."""

    def test_defaults(self) -> None:
        """Candidate kind colors have defaults."""
        colors = ThemeColors()
        assert colors.attachment.startswith("#")
        assert colors.folder.startswith("#")

    def test_rejects_bad_hex(self) -> None:
        """Invalid colors are rejected."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")


class TestLoadTheme:
    """Tests for theme file loading."""

    def test_no_file(self) -> None:
        """Without a theme file the defaults apply."""
        assert load_theme() == ThemeColors()

    def test_user_override(self) -> None:
        """A [colors] table overrides individual colors."""
        path = get_user_theme_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text('[colors]\nfolder = "#123456"\n')

        assert load_theme().folder == "#123456"

    def test_invalid_override_falls_back(self) -> None:
        """An invalid color makes the whole theme fall back to defaults."""
        path = get_user_theme_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text('[colors]\nfolder = "red"\n')

        assert load_theme() == ThemeColors()

    def test_broken_toml(self, tmp_path: Path) -> None:
        """Unparseable files read as None."""
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")
        assert read_theme_file(path) is None

    def test_non_table_colors(self, tmp_path: Path) -> None:
        """A [colors] value that is not a table is ignored."""
        path = tmp_path / "theme.toml"
        path.write_text('colors = "red"\n')
        assert read_theme_file(path) is None


class TestGetRichTheme:
    """Tests for get_rich_theme."""

    def test_styles(self) -> None:
        """Candidate kind styles are defined."""
        theme = get_rich_theme(ThemeColors())
        assert isinstance(theme, Theme)
        for name in ("attachment", "document", "folder", "error", "success"):
            assert name in theme.styles

    def test_bold_styles(self) -> None:
        """Errors and folders render bold."""
        theme = get_rich_theme(ThemeColors())
        assert theme.styles["folder"].bold
        assert not theme.styles["attachment"].bold
