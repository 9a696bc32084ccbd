"""
Tests for keeping the store directory in .gitignore.
"""

from superenv.core.gitignore import ensure_ignored, is_ignored, GitignoreStatus


class TestIsIgnored:
    """Test line matching in .gitignore content."""

    def test_exact_line(self):
        assert is_ignored("node_modules\n.superenv\n", ".superenv")

    def test_anchored_and_directory_forms(self):
        assert is_ignored("/.superenv\n", ".superenv")
        assert is_ignored(".superenv/\n", ".superenv")
        assert is_ignored("  .superenv  \n", ".superenv")

    def test_substring_does_not_count(self):
        """Longer entries containing the name should not match."""
        assert not is_ignored(".superenv-backup\n", ".superenv")
        assert not is_ignored("# .superenv\n", ".superenv")


class TestEnsureIgnored:
    """Test append-if-absent behavior."""

    def test_creates_missing_file(self, tmp_path):
        """Missing .gitignore should be created with the entry."""
        gitignore = tmp_path / ".gitignore"

        assert ensure_ignored(gitignore, ".superenv") == GitignoreStatus.CREATED
        assert gitignore.read_text() == ".superenv\n"

    def test_appends_to_existing_file(self, tmp_path):
        """Entry should be appended after existing lines."""
        gitignore = tmp_path / ".gitignore"
        gitignore.write_text("node_modules\n")

        assert ensure_ignored(gitignore, ".superenv") == GitignoreStatus.ADDED
        assert gitignore.read_text() == "node_modules\n.superenv\n"

    def test_adds_missing_trailing_newline(self, tmp_path):
        """Entry should land on its own line."""
        gitignore = tmp_path / ".gitignore"
        gitignore.write_text("node_modules")

        ensure_ignored(gitignore, ".superenv")
        assert gitignore.read_text() == "node_modules\n.superenv\n"

    def test_present_exactly_once(self, tmp_path):
        """Repeated calls should never duplicate the entry."""
        gitignore = tmp_path / ".gitignore"

        ensure_ignored(gitignore, ".superenv")
        assert ensure_ignored(gitignore, ".superenv") == GitignoreStatus.ALREADY_PRESENT
        assert ensure_ignored(gitignore, ".superenv") == GitignoreStatus.ALREADY_PRESENT

        lines = gitignore.read_text().splitlines()
        assert lines.count(".superenv") == 1
