"""
Tests for filename validation and the icon lookup table.
"""
import pytest

from prompto.services.backup_manager import InvalidBackupName, validate_filename
from prompto.services.icons import FALLBACK_ICON, resolve_icon


@pytest.mark.parametrize(
    "filename",
    ["backup-2024-01-01_10-00-00.db", "pre-restore-2024-01-01_10-00-00.db", "x.db"],
)
def test_valid_filenames(filename):
    assert validate_filename(filename) == filename


@pytest.mark.parametrize(
    "filename",
    ["", "../prompto.db", "..db", "sub/backup.db", "sub\\backup.db", "backup.sqlite", "backup.db.txt"],
)
def test_invalid_filenames(filename):
    with pytest.raises(InvalidBackupName):
        validate_filename(filename)


def test_resolve_icon_known_names():
    assert resolve_icon("Code") == "Code"
    assert resolve_icon(" gitbranch ") == "GitBranch"


@pytest.mark.parametrize("name", [None, "", "DefinitelyNotAnIcon"])
def test_resolve_icon_fallback(name):
    assert resolve_icon(name) == FALLBACK_ICON
