"""Tests for the persistence stores."""
import json
import os
import pytest
from persistence import HISTORY_KEY, LAST_WEATHER_KEY, JsonFileStore, MemoryStore
from weather_data import WeatherData


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return JsonFileStore(str(tmp_path / "state.json"))


def test_empty_store(store):
    assert store.load_last_weather() is None
    assert store.load_history() == []


def test_last_weather_roundtrip(store, sample_weather):
    store.save_last_weather(sample_weather)
    assert store.load_last_weather() == sample_weather


def test_last_weather_overwritten(store, sample_weather, sample_openweather_response):
    store.save_last_weather(sample_weather)
    sample_openweather_response["name"] = "Cairo"
    cairo = WeatherData.from_dict(sample_openweather_response)

    store.save_last_weather(cairo)

    assert store.load_last_weather() == cairo


def test_history_roundtrip(store):
    store.save_history(["Paris", "Cairo"])
    assert store.load_history() == ["Paris", "Cairo"]


def test_history_replaced_wholesale(store):
    store.save_history(["Paris", "Cairo"])
    store.save_history(["Oslo"])
    assert store.load_history() == ["Oslo"]


def test_keys_are_independent(store, sample_weather):
    store.save_history(["Paris"])
    store.save_last_weather(sample_weather)
    assert store.load_history() == ["Paris"]


def test_load_history_returns_copy(store):
    store.save_history(["Paris"])
    store.load_history().append("Cairo")
    assert store.load_history() == ["Paris"]


def test_corrupt_weather_reads_as_missing():
    store = MemoryStore({LAST_WEATHER_KEY: {"name": "Paris"}})
    assert store.load_last_weather() is None


def test_corrupt_weather_string_reads_as_missing():
    store = MemoryStore({LAST_WEATHER_KEY: "{truncated"})
    assert store.load_last_weather() is None


def test_weather_stored_as_json_text(sample_weather):
    store = MemoryStore({LAST_WEATHER_KEY: sample_weather.to_json()})
    assert store.load_last_weather() == sample_weather


@pytest.mark.parametrize("raw", ["Paris", ["Paris", 3], {"0": "Paris"}])
def test_corrupt_history_reads_as_empty(raw):
    store = MemoryStore({HISTORY_KEY: raw})
    assert store.load_history() == []


def test_file_store_survives_restart(tmp_path, sample_weather):
    path = str(tmp_path / "state.json")
    JsonFileStore(path).save_last_weather(sample_weather)
    JsonFileStore(path).save_history(["Paris"])

    reopened = JsonFileStore(path)

    assert reopened.load_last_weather() == sample_weather
    assert reopened.load_history() == ["Paris"]


def test_file_store_document_layout(tmp_path):
    path = tmp_path / "state.json"
    JsonFileStore(str(path)).save_history(["Paris"])

    assert json.loads(path.read_text(encoding="utf-8")) == {HISTORY_KEY: ["Paris"]}


def test_file_store_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "state.json"
    JsonFileStore(str(path)).save_history(["Paris"])
    assert path.exists()


def test_file_store_leaves_no_temp_files(tmp_path):
    store = JsonFileStore(str(tmp_path / "state.json"))
    store.save_history(["Paris"])
    store.save_history(["Paris", "Cairo"])
    assert os.listdir(tmp_path) == ["state.json"]


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", ""])
def test_file_store_corrupt_file_reads_as_empty(tmp_path, content):
    path = tmp_path / "state.json"
    path.write_text(content, encoding="utf-8")
    store = JsonFileStore(str(path))

    assert store.load_last_weather() is None
    assert store.load_history() == []


def test_file_store_recovers_from_corrupt_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(str(path))

    store.save_history(["Paris"])

    assert store.load_history() == ["Paris"]


def test_file_store_expands_user(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    store = JsonFileStore("~/state.json")
    assert store.path == os.path.join(str(tmp_path), "state.json")


DEEPLY_NESTED = "[" * 200000 + "]" * 200000


def test_deeply_nested_weather_reads_as_missing():
    store = MemoryStore({LAST_WEATHER_KEY: DEEPLY_NESTED})
    assert store.load_last_weather() is None


def test_file_store_deeply_nested_file_reads_as_empty(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(DEEPLY_NESTED, encoding="utf-8")
    store = JsonFileStore(str(path))

    assert store.load_history() == []
    assert store.load_last_weather() is None
