"""Pytest configuration and fixtures"""
import pytest
import os
import sys
import json

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for tests (as str, like os.path APIs expect)"""
    return str(tmp_path)


@pytest.fixture
def sample_todos_data():
    """Sample todos.json data for testing"""
    return [
        {"id": 1, "description": "buy milk", "completed": False},
        {"id": 2, "description": "write report", "completed": True},
        {"id": 3, "description": "call mom", "completed": False},
    ]


@pytest.fixture
def temp_todos_file(temp_dir, sample_todos_data):
    """Create a temporary todos.json file"""
    file_path = os.path.join(temp_dir, "todos.json")
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(sample_todos_data, f, ensure_ascii=False, indent=2)
        f.write("\n")
    return file_path


@pytest.fixture
def read_json():
    """Read a JSON file back for assertions"""
    def _read(path):
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    return _read
