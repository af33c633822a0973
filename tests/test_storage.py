"""Unit tests for core/storage.py"""
import pytest
import os
import json
import stat
import sys

from core.errors import StorageError
from core.models import Todo
from core.storage import TodoStorage


class TestTodoStorage:
    """Tests for TodoStorage class"""

    @pytest.fixture
    def todos_path(self, temp_dir):
        return os.path.join(temp_dir, "todos.json")

    @pytest.fixture
    def temp_storage(self, todos_path):
        """TodoStorage pointing at a file that does not exist yet"""
        return TodoStorage(todos_path)

    @pytest.fixture
    def storage_with_data(self, temp_todos_file):
        """TodoStorage with pre-existing data"""
        return TodoStorage(temp_todos_file)

    def test_load_missing_file_creates_empty_array(self, temp_storage, todos_path):
        """A missing file is created containing an empty JSON array"""
        assert temp_storage.load() == []
        assert os.path.exists(todos_path)
        with open(todos_path, 'r', encoding='utf-8') as f:
            assert f.read() == "[]\n"

    def test_load_parses_correctly(self, storage_with_data):
        todos = storage_with_data.load()
        assert [t.id for t in todos] == [1, 2, 3]
        assert todos[0].description == "buy milk"
        assert todos[1].completed is True

    def test_save_format(self, temp_storage, todos_path):
        """Two-space indentation, fixed key order, trailing newline"""
        temp_storage.save([Todo(id=1, description="test task")])
        with open(todos_path, 'r', encoding='utf-8') as f:
            content = f.read()
        assert content == (
            '[\n'
            '  {\n'
            '    "id": 1,\n'
            '    "description": "test task",\n'
            '    "completed": false\n'
            '  }\n'
            ']\n'
        )

    def test_save_load_is_byte_stable(self, storage_with_data, temp_todos_file):
        """save(load()) twice in a row produces identical bytes"""
        storage_with_data.save(storage_with_data.load())
        with open(temp_todos_file, 'rb') as f:
            first = f.read()
        storage_with_data.save(storage_with_data.load())
        with open(temp_todos_file, 'rb') as f:
            second = f.read()
        assert first == second

    def test_unicode_written_as_is(self, temp_storage, todos_path):
        temp_storage.save([Todo(id=1, description="Задача 🎉")])
        with open(todos_path, 'r', encoding='utf-8') as f:
            assert "Задача 🎉" in f.read()
        assert temp_storage.load()[0].description == "Задача 🎉"

    def test_save_leaves_no_temp_files(self, temp_storage, temp_dir):
        temp_storage.save([Todo(id=1, description="a")])
        temp_storage.save([Todo(id=1, description="b")])
        assert os.listdir(temp_dir) == ["todos.json"]

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_save_keeps_file_mode(self, storage_with_data, temp_todos_file):
        os.chmod(temp_todos_file, 0o640)
        storage_with_data.save([])
        assert stat.S_IMODE(os.stat(temp_todos_file).st_mode) == 0o640

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_new_file_mode(self, temp_storage, todos_path):
        temp_storage.save([])
        assert stat.S_IMODE(os.stat(todos_path).st_mode) == 0o644


class TestTodoStorageLoadErrors:
    """Every malformed file is a fatal load error"""

    def _write(self, temp_dir, content):
        path = os.path.join(temp_dir, "todos.json")
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_load_corrupted_json(self, temp_dir):
        path = self._write(temp_dir, "{ invalid json }")
        with pytest.raises(StorageError, match="Unable to unmarshal"):
            TodoStorage(path).load()

    def test_load_non_array(self, temp_dir):
        path = self._write(temp_dir, '{"id": 1}')
        with pytest.raises(StorageError, match="expected a JSON array"):
            TodoStorage(path).load()

    def test_unknown_field_rejected(self, temp_dir):
        path = self._write(temp_dir, json.dumps([
            {"id": 1, "description": "x", "completed": False, "due": "tomorrow"}
        ]))
        with pytest.raises(StorageError, match="due"):
            TodoStorage(path).load()

    def test_wrong_type_rejected(self, temp_dir):
        path = self._write(temp_dir, json.dumps([
            {"id": 1, "description": "x", "completed": "no"}
        ]))
        with pytest.raises(StorageError, match="entry 0"):
            TodoStorage(path).load()

    def test_lenient_mode_ignores_unknown_fields(self, temp_dir):
        path = self._write(temp_dir, json.dumps([
            {"id": 1, "description": "x", "completed": False, "due": "tomorrow"}
        ]))
        todos = TodoStorage(path, strict=False).load()
        assert todos[0].to_dict() == {"id": 1, "description": "x", "completed": False}

    def test_load_does_not_rewrite_bad_file(self, temp_dir):
        path = self._write(temp_dir, "not json")
        with pytest.raises(StorageError):
            TodoStorage(path).load()
        with open(path, 'r', encoding='utf-8') as f:
            assert f.read() == "not json"


class TestAtomicSave:
    """The canonical file is never left half-written"""

    def test_failed_rename_keeps_previous_file(self, temp_todos_file, sample_todos_data, temp_dir, monkeypatch, read_json):
        """Crash between temp write and rename: old content survives"""
        storage = TodoStorage(temp_todos_file)

        def broken_replace(src, dst):
            raise OSError("disk on fire")

        monkeypatch.setattr(os, "replace", broken_replace)

        with pytest.raises(StorageError, match="failed to rename file"):
            storage.save([Todo(id=1, description="new state")])

        assert read_json(temp_todos_file) == sample_todos_data
        assert os.listdir(temp_dir) == ["todos.json"]

    def test_failed_write_keeps_previous_file(self, temp_todos_file, sample_todos_data, temp_dir, monkeypatch, read_json):
        storage = TodoStorage(temp_todos_file)

        def broken_fsync(fd):
            raise OSError("no space left on device")

        monkeypatch.setattr(os, "fsync", broken_fsync)

        with pytest.raises(StorageError, match="failed to write temp file"):
            storage.save([])

        assert read_json(temp_todos_file) == sample_todos_data
        assert os.listdir(temp_dir) == ["todos.json"]

    def test_missing_directory(self, temp_dir):
        storage = TodoStorage(os.path.join(temp_dir, "missing", "todos.json"))
        with pytest.raises(StorageError, match="failed to create temp file"):
            storage.save([])

    def test_unencodable_description_is_a_storage_error(self, temp_todos_file, sample_todos_data, temp_dir, read_json):
        """Lone surrogate from a surrogateescape-decoded stdin"""
        storage = TodoStorage(temp_todos_file)

        with pytest.raises(StorageError, match="Unable to marshal todos"):
            storage.save([Todo(id=1, description="bad\udcff")])

        assert read_json(temp_todos_file) == sample_todos_data
        assert os.listdir(temp_dir) == ["todos.json"]

    def test_interrupted_write_removes_temp_file(self, temp_todos_file, sample_todos_data, temp_dir, monkeypatch, read_json):
        """Non-OSError exceptions still clean up and propagate unchanged"""
        storage = TodoStorage(temp_todos_file)

        def interrupted_fsync(fd):
            raise KeyboardInterrupt

        monkeypatch.setattr(os, "fsync", interrupted_fsync)

        with pytest.raises(KeyboardInterrupt):
            storage.save([Todo(id=1, description="new state")])

        assert read_json(temp_todos_file) == sample_todos_data
        assert os.listdir(temp_dir) == ["todos.json"]

    def test_non_ascii_description_is_written_as_utf8(self, temp_dir):
        path = os.path.join(temp_dir, "todos.json")
        TodoStorage(path).save([Todo(id=1, description="café ✓")])
        with open(path, 'rb') as f:
            assert "café ✓".encode('utf-8') in f.read()
