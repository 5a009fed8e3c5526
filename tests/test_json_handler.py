"""Tests for the JSON task store."""
import json

import pytest
from json_handler import MAX_TIMESTAMP_MS, JsonHandler, coerce_task
from models import StorageLocation, Task

NOW = 1_700_000_000_000


def write(path, content):
    path.write_text(content, encoding="utf-8")
    return path


class TestFileLocations:
    """Test storage paths and startup location detection."""

    def test_file_paths(self, handler):
        project = handler.get_file_path(StorageLocation.PROJECT)
        global_path = handler.get_file_path(StorageLocation.GLOBAL)
        assert project == handler.project_dir / ".notex.json"
        assert global_path == handler.home_dir / ".notex-global.json"

    def test_defaults_to_cwd_and_home(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        default = JsonHandler()
        assert default.project_dir == tmp_path

    def test_detect_prefers_project(self, handler):
        write(handler.get_file_path(StorageLocation.PROJECT), "[]")
        write(handler.get_file_path(StorageLocation.GLOBAL), "[]")
        assert handler.detect_initial_location() is StorageLocation.PROJECT

    def test_detect_falls_back_to_global(self, handler):
        write(handler.get_file_path(StorageLocation.GLOBAL), "[]")
        assert handler.detect_initial_location() is StorageLocation.GLOBAL

    def test_detect_with_no_files(self, handler):
        assert handler.detect_initial_location() is StorageLocation.PROJECT

    def test_directory_is_not_a_file(self, handler):
        path = handler.get_file_path(StorageLocation.PROJECT)
        path.mkdir()
        assert not handler.file_exists(path)
        assert handler.detect_initial_location() is StorageLocation.PROJECT


class TestLoadTasks:
    """Test reading and coercing task files."""

    def test_missing_file(self, handler, tmp_path):
        assert handler.load_tasks(tmp_path / "nope.json") == []

    @pytest.mark.parametrize("content", ["", "   \n", "{not json", '"text"', "42", '{"items": []}'])
    def test_unusable_content_yields_empty(self, handler, tmp_path, content):
        assert handler.load_tasks(write(tmp_path / "t.json", content)) == []

    def test_deeply_nested_json_yields_empty(self, handler, tmp_path):
        path = write(tmp_path / "t.json", "[" * 200_000 + "]" * 200_000)
        assert handler.load_tasks(path) == []

    def test_oversized_number_does_not_escape(self, handler, tmp_path):
        content = '{"tasks":[{"text":"x","createdAt":' + "9" * 5000 + "}]}"
        tasks = handler.load_tasks(write(tmp_path / "t.json", content))
        assert all(0 <= t.created_at <= MAX_TIMESTAMP_MS for t in tasks)

    def test_unrepresentable_created_at_replaced(self, handler, tmp_path):
        path = write(tmp_path / "t.json", '{"tasks":[{"id":1,"text":"x","createdAt":1e20}]}')
        [task] = handler.load_tasks(path)
        assert task.created_at <= MAX_TIMESTAMP_MS

    def test_wrapped_document(self, handler, tmp_path):
        path = write(tmp_path / "t.json", json.dumps({"tasks": [
            {"id": 7, "text": "Write", "done": True, "createdAt": 10, "completedAt": 20},
        ]}))
        assert handler.load_tasks(path) == [Task(7, "Write", True, 10, 20)]

    def test_bare_array(self, handler, tmp_path):
        path = write(tmp_path / "t.json", json.dumps([{"id": "a", "text": "One", "createdAt": 5}]))
        assert handler.load_tasks(path) == [Task("a", "One", False, 5, None)]

    def test_minimal_record_is_filled_in(self, handler, tmp_path):
        path = write(tmp_path / "t.json", '{"tasks":[{"text":"x"}]}')
        [task] = handler.load_tasks(path)
        assert task.text == "x"
        assert task.done is False
        assert task.completed_at is None
        assert isinstance(task.id, int)
        assert task.created_at == task.id

    def test_unicode_text(self, handler, tmp_path):
        path = write(tmp_path / "t.json", json.dumps([{"id": 1, "text": "café ☕", "createdAt": 1}]))
        assert handler.load_tasks(path)[0].text == "café ☕"


class TestCoercion:
    """Test coercion of loosely-typed records."""

    def test_string_records_become_tasks(self, handler):
        tasks = handler.coerce_tasks(["first", "second"], NOW)
        assert [t.text for t in tasks] == ["first", "second"]
        assert [t.id for t in tasks] == [NOW, NOW + 1]

    def test_non_object_records_skipped(self, handler):
        tasks = handler.coerce_tasks([1, None, ["x"], {"text": "kept"}], NOW)
        assert [t.text for t in tasks] == ["kept"]

    def test_generated_ids_avoid_existing(self, handler):
        tasks = handler.coerce_tasks([{"id": NOW, "text": "a"}, {"text": "b"}], NOW)
        assert tasks[1].id == NOW + 1

    def test_invalid_id_replaced(self):
        assert coerce_task({"id": True, "text": "x"}, NOW).id == NOW
        assert coerce_task({"id": [1], "text": "x"}, NOW).id == NOW
        assert coerce_task({"id": 3.5, "text": "x"}, NOW).id == 3.5

    def test_text_is_stringified(self):
        assert coerce_task({"text": 12}, NOW).text == "12"
        assert coerce_task({"text": None}, NOW).text == ""
        assert coerce_task({}, NOW).text == ""

    def test_done_uses_truthiness(self):
        assert coerce_task({"done": 1}, NOW).done is True
        assert coerce_task({"done": ""}, NOW).done is False
        assert coerce_task({"done": "yes"}, NOW).done is True

    def test_non_numeric_created_at_replaced(self):
        assert coerce_task({"createdAt": "yesterday"}, NOW).created_at == NOW
        assert coerce_task({"createdAt": False}, NOW).created_at == NOW

    @pytest.mark.parametrize("value", [1e20, float("nan"), float("inf"), -5, 10 ** 30])
    def test_out_of_range_timestamps_replaced(self, value):
        task = coerce_task({"done": True, "createdAt": value, "completedAt": value}, NOW)
        assert task.created_at == NOW
        assert task.completed_at == NOW

    def test_done_without_completed_at_gets_now(self):
        task = coerce_task({"done": True}, NOW)
        assert task.completed_at == NOW

    def test_not_done_drops_completed_at(self):
        task = coerce_task({"done": False, "completedAt": 99}, NOW)
        assert task.completed_at is None


class TestSaveTasks:
    """Test writing task files."""

    def test_save_writes_wrapped_camel_case(self, handler, tmp_path, sample_tasks):
        path = tmp_path / "out.json"
        assert handler.save_tasks(sample_tasks, path) is True
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["tasks"][1] == {
            "id": 2, "text": "Call mom", "done": True, "createdAt": 2000, "completedAt": 2500,
        }
        assert data["tasks"][0]["completedAt"] is None

    def test_save_is_pretty_printed(self, handler, tmp_path, sample_tasks):
        path = tmp_path / "out.json"
        handler.save_tasks(sample_tasks, path)
        assert '\n  "tasks": [' in path.read_text(encoding="utf-8")

    def test_save_then_load(self, handler, tmp_path, sample_tasks):
        path = tmp_path / "out.json"
        handler.save_tasks(sample_tasks, path)
        assert tuple(handler.load_tasks(path)) == sample_tasks

    def test_save_empty_collection(self, handler, tmp_path):
        path = tmp_path / "out.json"
        handler.save_tasks([], path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"tasks": []}

    def test_save_failure_returns_false(self, handler, tmp_path, sample_tasks):
        target = tmp_path / "blocked"
        target.mkdir()
        assert handler.save_tasks(sample_tasks, target) is False

    def test_save_into_missing_directory_fails(self, handler, tmp_path, sample_tasks):
        assert handler.save_tasks(sample_tasks, tmp_path / "missing" / "t.json") is False
