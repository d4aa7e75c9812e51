"""Tests for the export coordinator and sinks."""

import io
import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from time_tracker.config.paths import LOGS_KEY
from time_tracker.exceptions import ExportError, SinkError
from time_tracker.services.export_service import (
    DirectorySink,
    ExportCoordinator,
    ExportSink,
    StreamSink,
    build_export_payload,
    suggest_file_name,
)
from time_tracker.services.log_store import LogStore


class RecordingSink(ExportSink):
    """Sink keeping delivered payloads in memory."""

    key = "recording"

    def __init__(self) -> None:
        self.deliveries: list[tuple[str, str]] = []

    def deliver(self, payload: str, suggested_file_name: str) -> None:
        self.deliveries.append((payload, suggested_file_name))


class BrokenSink(ExportSink):
    """Sink that always fails."""

    key = "broken"

    def deliver(self, payload: str, suggested_file_name: str) -> None:
        raise SinkError("share sheet dismissed")


class CrashingSink(ExportSink):
    """Sink failing with an error outside the sink contract."""

    key = "crashing"

    def deliver(self, payload: str, suggested_file_name: str) -> None:
        raise RuntimeError("upload client crashed")


@pytest.fixture
def filled_store(store: LogStore) -> LogStore:
    store.record_activity("Work")
    store.add_comment_to_latest("Focused session")
    store.record_activity("Break")
    return store


def test_suggested_file_name_is_filesystem_safe() -> None:
    name = suggest_file_name(datetime(2025, 4, 9, 15, 0, 5, 42000, tzinfo=UTC))

    assert name == "activity_logs_2025-04-09T15_00_05.042Z.json"
    assert ":" not in name


def test_suggested_file_name_custom_prefix() -> None:
    name = suggest_file_name(datetime(2025, 4, 9, tzinfo=UTC), prefix="work_log")

    assert name.startswith("work_log_2025-04-09T00_00_00.000Z")


def test_payload_is_indented_json_in_field_order(filled_store: LogStore) -> None:
    payload = build_export_payload(filled_store.snapshot())

    assert payload.startswith("[\n  {\n    \"activity\": \"Work\",")
    data = json.loads(payload)
    assert data == [
        {
            "activity": "Work",
            "timestamp": "2025-04-09T15:00:00.000Z",
            "comments": ["Focused session"],
        },
        {"activity": "Break", "timestamp": "2025-04-09T15:30:00.000Z", "comments": []},
    ]
    assert all(list(entry) == ["activity", "timestamp", "comments"] for entry in data)


class TestExportCoordinator:
    """Tests for ExportCoordinator.export_all."""

    def test_success_delivers_and_clears(self, filled_store: LogStore, storage, clock) -> None:
        sink = RecordingSink()
        expected = build_export_payload(filled_store.snapshot())

        result = ExportCoordinator(filled_store, clock=clock).export_all(sink)

        assert result["record_count"] == 2
        assert result["cleared"] is True
        assert sink.deliveries == [(expected, result["file_name"])]
        assert filled_store.snapshot() == []
        assert json.loads(storage.get_item(LOGS_KEY)) == []

    def test_sink_failure_leaves_log_unchanged(self, filled_store: LogStore, storage, clock) -> None:
        before = filled_store.snapshot()
        persisted_before = storage.get_item(LOGS_KEY)

        with pytest.raises(ExportError) as exc_info:
            ExportCoordinator(filled_store, clock=clock).export_all(BrokenSink())

        assert exc_info.value.delivered is False
        assert isinstance(exc_info.value.cause, SinkError)
        assert filled_store.snapshot() == before
        assert storage.get_item(LOGS_KEY) == persisted_before

    def test_unexpected_sink_error_wrapped(self, filled_store: LogStore, storage, clock) -> None:
        persisted_before = storage.get_item(LOGS_KEY)

        with pytest.raises(ExportError) as exc_info:
            ExportCoordinator(filled_store, clock=clock).export_all(CrashingSink())

        assert exc_info.value.delivered is False
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert len(filled_store.snapshot()) == 2
        assert storage.get_item(LOGS_KEY) == persisted_before

    def test_clear_failure_after_delivery(self, filled_store: LogStore, storage, clock) -> None:
        sink = RecordingSink()
        storage.fail_writes = True

        with pytest.raises(ExportError) as exc_info:
            ExportCoordinator(filled_store, clock=clock).export_all(sink)

        assert exc_info.value.delivered is True
        assert len(sink.deliveries) == 1
        assert len(filled_store.snapshot()) == 2

    def test_empty_log_exports_empty_list(self, store: LogStore, clock) -> None:
        sink = RecordingSink()

        result = ExportCoordinator(store, clock=clock).export_all(sink)

        assert result["record_count"] == 0
        assert json.loads(sink.deliveries[0][0]) == []


class TestSinks:
    """Tests for the shipped sinks."""

    def test_directory_sink_writes_file(self, filled_store: LogStore, tmp_path: Path, clock) -> None:
        sink = DirectorySink(tmp_path / "exports")

        result = ExportCoordinator(filled_store, clock=clock).export_all(sink)

        written = tmp_path / "exports" / result["file_name"]
        assert written.is_file()
        assert [e["activity"] for e in json.loads(written.read_text(encoding="utf-8"))] == [
            "Work",
            "Break",
        ]
        assert sink.describe(result["file_name"]) == str(written)

    def test_directory_sink_failure_keeps_log(self, filled_store: LogStore, tmp_path: Path, clock) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way", encoding="utf-8")

        with pytest.raises(ExportError):
            ExportCoordinator(filled_store, clock=clock).export_all(DirectorySink(blocker))

        assert len(filled_store.snapshot()) == 2

    def test_stream_sink_writes_payload(self, filled_store: LogStore, clock) -> None:
        stream = io.StringIO()

        ExportCoordinator(filled_store, clock=clock).export_all(StreamSink(stream))

        assert len(json.loads(stream.getvalue())) == 2

    def test_closed_stream_is_sink_error(self) -> None:
        stream = io.StringIO()
        stream.close()

        with pytest.raises(SinkError):
            StreamSink(stream).deliver("[]", "x.json")
