"""Tests for Maildir storage.

Uses pytest tmp_path fixture for isolated filesystem tests.
"""

from pathlib import Path

import pytest

from missive.storage.maildir import MaildirStorage, split_filename


@pytest.fixture
def storage(tmp_path: Path) -> MaildirStorage:
    """Create a MaildirStorage instance with a temporary directory."""
    return MaildirStorage(tmp_path)


def make_folder(path: Path) -> Path:
    """Create cur/, new/ and tmp/ under path."""
    for subdir in ("cur", "new", "tmp"):
        (path / subdir).mkdir(parents=True, exist_ok=True)
    return path


def put(storage: MaildirStorage, name: str, content: bytes = b"x", folder: str = "INBOX") -> Path:
    """Write a message file; names with an S flag land in cur/."""
    folder_path = make_folder(storage.base_path / folder)
    _, flags = split_filename(name)
    path = folder_path / ("cur" if "S" in flags else "new") / name
    path.write_bytes(content)
    return path


class TestFolderPath:
    """Tests for folder_path method."""

    def test_existing_folder(self, storage: MaildirStorage):
        make_folder(storage.base_path / "Sent")
        assert storage.folder_path("Sent") == storage.base_path / "Sent"

    def test_nested_folder(self, storage: MaildirStorage):
        make_folder(storage.base_path / "Archive" / "2024")
        assert storage.folder_path("Archive/2024") == storage.base_path / "Archive" / "2024"

    def test_missing_folder(self, storage: MaildirStorage):
        assert storage.folder_path("Nope") is None

    def test_plain_directory_is_not_a_folder(self, storage: MaildirStorage):
        (storage.base_path / "Notes").mkdir()
        assert storage.folder_path("Notes") is None

    def test_inbox_at_root(self, storage: MaildirStorage):
        """INBOX falls back to the root when the root is a Maildir."""
        make_folder(storage.base_path)

        assert storage.folder_path("INBOX") == storage.base_path
        assert storage.folder_path("inbox") == storage.base_path

    def test_inbox_subfolder_preferred(self, storage: MaildirStorage):
        make_folder(storage.base_path)
        make_folder(storage.base_path / "INBOX")

        assert storage.folder_path("INBOX") == storage.base_path / "INBOX"


class TestSplitFilename:
    def test_with_flags(self):
        assert split_filename("1700000000.M1P2Q3.host:2,FS") == ("1700000000.M1P2Q3.host", "FS")

    def test_without_flags(self):
        assert split_filename("1700000000.M1P2Q3.host:2,") == ("1700000000.M1P2Q3.host", "")

    def test_without_info(self):
        assert split_filename("1700000000.M1P2Q3.host") == ("1700000000.M1P2Q3.host", "")


class TestGetMessagePath:
    def test_finds_in_new_and_cur(self, storage: MaildirStorage):
        unseen = put(storage, "1:2,")
        seen = put(storage, "2:2,S")

        assert storage.get_message_path("INBOX", "1") == unseen
        assert storage.get_message_path("INBOX", "2") == seen

    def test_finds_file_without_info(self, storage: MaildirStorage):
        path = put(storage, "3")

        assert storage.get_message_path("INBOX", "3") == path

    def test_unknown_id(self, storage: MaildirStorage):
        put(storage, "1:2,")
        assert storage.get_message_path("INBOX", "missing") is None

    def test_unknown_folder(self, storage: MaildirStorage):
        assert storage.get_message_path("Nope", "anything") is None

    def test_id_prefix_does_not_match(self, storage: MaildirStorage):
        path = put(storage, "12:2,S")

        assert storage.get_message_path("INBOX", "1") is None
        assert storage.get_message_path("INBOX", "12") == path


class TestAddFlags:
    def test_moves_new_to_cur(self, storage: MaildirStorage):
        path = put(storage, "1:2,", b"1")

        new_path = storage.add_flags(path, "S")

        assert not path.exists()
        assert new_path == storage.base_path / "INBOX" / "cur" / "1:2,S"
        assert new_path.read_bytes() == b"1"

    def test_merges_and_sorts_flags(self, storage: MaildirStorage):
        path = put(storage, "1:2,RS")

        new_path = storage.add_flags(path, "F")

        assert new_path.name == "1:2,FRS"

    def test_already_flagged_is_noop(self, storage: MaildirStorage):
        path = put(storage, "1:2,S")

        assert storage.add_flags(path, "S") == path
        assert path.exists()
