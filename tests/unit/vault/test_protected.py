"""Tests for protected vault paths."""

from vaultsweep.vault.protected import PROTECTED_PATH_PATTERNS, is_protected_path


class TestProtectedPathPatterns:
    """Tests for the PROTECTED_PATH_PATTERNS list."""

    def test_patterns_contain_host_config(self) -> None:
        """Host configuration folder is protected."""
        assert ".obsidian/*" in PROTECTED_PATH_PATTERNS
        assert ".trash/*" in PROTECTED_PATH_PATTERNS


class TestIsProtectedPath:
    """Tests for is_protected_path."""

    def test_root_protected(self) -> None:
        """The vault root itself is never deletable."""
        assert is_protected_path("/") is True
        assert is_protected_path("") is True

    def test_config_folder_protected(self) -> None:
        """.obsidian and its content are protected."""
        assert is_protected_path(".obsidian") is True
        assert is_protected_path(".obsidian/workspace.json") is True

    def test_trash_protected(self) -> None:
        """The vault trash is protected."""
        assert is_protected_path(".trash/old.png") is True

    def test_nested_hidden_protected(self) -> None:
        """Hidden entries below the root are protected."""
        assert is_protected_path("Notes/.DS_Store") is True

    def test_regular_paths_not_protected(self) -> None:
        """Notes and attachments are not protected."""
        assert is_protected_path("Notes/idea.md") is False
        assert is_protected_path("image.png") is False
