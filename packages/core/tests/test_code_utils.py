"""Tests for file filtering utilities."""

from peerreview_core.utils.code import is_reviewable_file, language_for


class TestIsReviewableFile:
    def test_python_file_is_reviewable(self):
        assert is_reviewable_file("app/services/user.py") is True

    def test_tsx_file_is_reviewable(self):
        assert is_reviewable_file("src/components/Button.tsx") is True

    def test_infra_and_config_are_reviewable(self):
        assert is_reviewable_file("infra/main.tf") is True
        assert is_reviewable_file("deploy/values.yaml") is True
        assert is_reviewable_file("db/migrate.sql") is True

    def test_image_is_not_reviewable(self):
        assert is_reviewable_file("assets/logo.png") is False

    def test_lock_file_is_not_reviewable(self):
        assert is_reviewable_file("poetry.lock") is False

    def test_extension_match_is_case_insensitive(self):
        assert is_reviewable_file("scripts/SETUP.SH") is True
        assert is_reviewable_file("README.MD") is True

    def test_conventional_filenames_without_extension(self):
        assert is_reviewable_file("Dockerfile") is True
        assert is_reviewable_file("build/Makefile") is True
        assert is_reviewable_file("Containerfile") is True

    def test_unknown_extensionless_file_is_not_reviewable(self):
        assert is_reviewable_file("LICENSE") is False


class TestLanguageFor:
    def test_known_extension(self):
        assert language_for("src/auth.ts") == "typescript"
        assert language_for("main.py") == "python"

    def test_case_insensitive(self):
        assert language_for("Script.PS1") == "powershell"

    def test_unknown_extension_is_text(self):
        assert language_for("Dockerfile") == "text"
        assert language_for("notes.txt") == "text"
