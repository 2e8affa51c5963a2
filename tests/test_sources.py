"""Tests for the JSON file and HTTP exercise sources."""

import json
from pathlib import Path

import httpx
import pytest

import storage
from storage import (
    DEFAULT_DATA_DIR,
    HttpExerciseSource,
    JsonFileExerciseSource,
    LoadError,
    get_exercise_source,
)


class TestJsonFileExerciseSource:
    """Tests for JsonFileExerciseSource."""

    def test_loads_array(self, data_dir, sample_records):
        records = JsonFileExerciseSource(data_dir).load("faelle", "a1")
        assert records == sample_records

    def test_topic_and_level_case_insensitive(self, data_dir):
        assert JsonFileExerciseSource(data_dir).load("Faelle", "A1")

    def test_missing_file_raises_load_error(self, data_dir):
        with pytest.raises(LoadError):
            JsonFileExerciseSource(data_dir).load("faelle", "c2")

    def test_invalid_json_raises_load_error(self, data_dir):
        (data_dir / "faelle" / "b1.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(LoadError):
            JsonFileExerciseSource(data_dir).load("faelle", "b1")

    def test_non_array_raises_load_error(self, data_dir):
        (data_dir / "faelle" / "b1.json").write_text(json.dumps({"items": []}), encoding="utf-8")
        with pytest.raises(LoadError):
            JsonFileExerciseSource(data_dir).load("faelle", "b1")

    def test_items_are_not_validated(self, data_dir):
        (data_dir / "faelle" / "b1.json").write_text(json.dumps([1, "x", None]), encoding="utf-8")
        assert JsonFileExerciseSource(data_dir).load("faelle", "b1") == [1, "x", None]

    def test_available_topics(self, data_dir):
        assert JsonFileExerciseSource(data_dir).available_topics() == ["faelle", "wortschatz"]

    def test_bundled_data_ships_with_the_package(self):
        """The default data directory should live inside the installed storage package."""
        assert DEFAULT_DATA_DIR.parent == Path(storage.__file__).parent
        assert list(DEFAULT_DATA_DIR.glob("*/a1.json"))

    def test_bundled_data_loads(self):
        """Every bundled topic file should be a readable JSON array."""
        source = JsonFileExerciseSource(DEFAULT_DATA_DIR)
        topics = source.available_topics()
        assert {"artikel", "faelle", "grammatik", "wortschatz"} <= set(topics)
        for topic in topics:
            assert source.load(topic, "a1")


def mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestHttpExerciseSource:
    """Tests for HttpExerciseSource using httpx.MockTransport."""

    def test_url_layout(self):
        source = HttpExerciseSource("https://example.org/data/")
        assert source.url_for("Faelle", "A1") == "https://example.org/data/faelle/a1.json"

    def test_loads_array(self, sample_records):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(request)
            return httpx.Response(200, json=sample_records)

        source = HttpExerciseSource("https://example.org/data", client=mock_client(handler))
        assert source.load("faelle", "a1") == sample_records
        assert str(requested[0].url) == "https://example.org/data/faelle/a1.json"
        assert requested[0].headers["Cache-Control"] == "no-store"

    def test_http_error_raises_load_error(self):
        source = HttpExerciseSource(
            "https://example.org/data",
            client=mock_client(lambda request: httpx.Response(404)),
        )
        with pytest.raises(LoadError):
            source.load("faelle", "a1")

    def test_network_error_raises_load_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        source = HttpExerciseSource("https://example.org/data", client=mock_client(handler))
        with pytest.raises(LoadError):
            source.load("faelle", "a1")

    def test_malformed_body_raises_load_error(self):
        source = HttpExerciseSource(
            "https://example.org/data",
            client=mock_client(lambda request: httpx.Response(200, text="<html>")),
        )
        with pytest.raises(LoadError):
            source.load("faelle", "a1")

    def test_non_array_raises_load_error(self):
        source = HttpExerciseSource(
            "https://example.org/data",
            client=mock_client(lambda request: httpx.Response(200, json={"a": 1})),
        )
        with pytest.raises(LoadError):
            source.load("faelle", "a1")


class TestGetExerciseSource:
    def test_files_by_default(self, data_dir):
        assert isinstance(get_exercise_source(data_dir), JsonFileExerciseSource)

    def test_http_when_url_given(self, data_dir):
        source = get_exercise_source(data_dir, "https://example.org/data")
        assert isinstance(source, HttpExerciseSource)
