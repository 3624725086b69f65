"""Tests for the file-based note store."""

from datetime import date

import pytest

from notefold.adapters.file_notes import FileNoteStore
from notefold.config import Config
from notefold.core.notes import MonthArchive, NoteDocument


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def store(tmp_path, config):
    return FileNoteStore(tmp_path, config)


class TestFileNoteStore:
    def test_creates_directory(self, tmp_path, config):
        store = FileNoteStore(tmp_path / "a" / "b", config)
        assert store.note_dir.is_dir()

    def test_overwrite_and_read(self, store, config, tmp_path):
        note = NoteDocument(config, date(2024, 4, 5))
        note.set_section("TODO", "buy milk")
        store.overwrite(note)

        assert (tmp_path / "2024-04-05.txt").exists()
        loaded = NoteDocument(config, date(2024, 4, 5))
        store.read(loaded)
        assert loaded.get_section("TODO") == "buy milk"

    def test_overwrite_replaces_and_leaves_no_temp_file(self, store, config, tmp_path):
        archive = MonthArchive(config, date(2024, 4, 1))
        (tmp_path / archive.path_name).write_text("old content")

        store.overwrite(archive)

        assert "old content" not in (tmp_path / archive.path_name).read_text()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["archive-Apr2024.txt"]

    def test_read_missing_raises(self, store, config):
        with pytest.raises(FileNotFoundError):
            store.read(NoteDocument(config, date(2024, 4, 5)))

    def test_exists(self, store, config):
        note = NoteDocument(config, date(2024, 4, 5))
        assert not store.exists(note)
        store.overwrite(note)
        assert store.exists(note)

    def test_list_note_files_filters_and_sorts(self, store, tmp_path):
        for name in ["2024-04-05.txt", "2024-03-31.txt", "archive-Mar2024.txt", "2024-04-01.md", "readme.txt"]:
            (tmp_path / name).write_text("")
        (tmp_path / "2024-04-02.txt").mkdir()

        assert store.list_note_files() == ["2024-03-31.txt", "2024-04-05.txt"]

    def test_list_note_files_sorts_by_date(self, tmp_path):
        store = FileNoteStore(tmp_path, Config(file_time_format="%d-%m-%Y"))
        for name in ["05-04-2024.txt", "01-05-2024.txt", "10-03-2024.txt"]:
            (tmp_path / name).write_text("")

        assert store.list_note_files() == ["10-03-2024.txt", "05-04-2024.txt", "01-05-2024.txt"]

    def test_delete(self, store, tmp_path):
        (tmp_path / "2024-04-05.txt").write_text("")
        store.delete("2024-04-05.txt")
        assert not (tmp_path / "2024-04-05.txt").exists()

    def test_non_ascii_text_is_utf8(self, store, config, tmp_path):
        note = NoteDocument(config, date(2024, 4, 5))
        note.set_section("NOTES", "café ☕")
        store.overwrite(note)

        assert "café ☕".encode("utf-8") in (tmp_path / "2024-04-05.txt").read_bytes()
        loaded = NoteDocument(config, date(2024, 4, 5))
        store.read(loaded)
        assert loaded.get_section("NOTES") == "café ☕"
