"""Tests for the log store."""

import json
import threading
from datetime import UTC, datetime, timedelta

import pytest

from time_tracker.config.paths import LOGS_KEY
from time_tracker.exceptions import (
    CorruptStore,
    InvalidActivity,
    NoRecordsError,
    RecordIndexError,
    StoreWriteError,
)
from time_tracker.services.log_store import LogStore, display_to_storage_index


def persisted(storage) -> list[dict]:
    raw = storage.get_item(LOGS_KEY)
    return json.loads(raw) if raw is not None else []


class TestDisplayToStorageIndex:
    """Tests for the newest-first to creation-order translation."""

    @pytest.mark.parametrize("length", [1, 2, 3, 10])
    def test_zero_is_most_recent(self, length: int) -> None:
        assert display_to_storage_index(0, length) == length - 1

    @pytest.mark.parametrize("length", [1, 2, 3, 10])
    def test_last_is_oldest(self, length: int) -> None:
        assert display_to_storage_index(length - 1, length) == 0

    def test_middle(self) -> None:
        assert display_to_storage_index(1, 4) == 2

    @pytest.mark.parametrize(("index", "length"), [(-1, 3), (3, 3), (0, 0), (5, 2)])
    def test_out_of_range(self, index: int, length: int) -> None:
        with pytest.raises(RecordIndexError):
            display_to_storage_index(index, length)

    def test_error_is_an_index_error(self) -> None:
        with pytest.raises(IndexError):
            display_to_storage_index(1, 1)


class TestLoad:
    """Tests for hydrating the store."""

    def test_absent_log_is_empty(self, store: LogStore) -> None:
        assert store.load() == []
        assert store.snapshot() == []

    def test_hydrates_persisted_records(self, storage, clock) -> None:
        storage.set_item(
            LOGS_KEY,
            json.dumps(
                [
                    {
                        "activity": "Work",
                        "timestamp": "2025-04-09T15:00:00.000Z",
                        "comments": ["Focused session", "Wrote report"],
                    },
                    {"activity": "Break", "timestamp": "2025-04-09T15:30:00.000Z", "comments": []},
                ]
            ),
        )

        records = LogStore(storage, clock=clock).init()

        assert [r.activity for r in records] == ["Work", "Break"]
        assert records[0].comments == ["Focused session", "Wrote report"]

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            '{"activity": "Work"}',
            '[{"activity": "Work"}]',
            '[{"activity": "", "timestamp": "2025-04-09T15:00:00.000Z", "comments": []}]',
            '[{"activity": "   ", "timestamp": "2025-04-09T15:00:00.000Z", "comments": []}]',
            '[{"activity": "Work", "timestamp": "yesterday", "comments": []}]',
        ],
    )
    def test_corrupt_log_raises(self, storage, clock, raw: str) -> None:
        storage.set_item(LOGS_KEY, raw)

        with pytest.raises(CorruptStore):
            LogStore(storage, clock=clock).load()

    def test_corrupt_log_never_partially_loads(self, storage, clock) -> None:
        storage.set_item(
            LOGS_KEY,
            json.dumps(
                [
                    {"activity": "Work", "timestamp": "2025-04-09T15:00:00.000Z", "comments": []},
                    {"activity": 5},
                ]
            ),
        )

        records = LogStore(storage, clock=clock).init()

        assert records == []

    def test_unreadable_log_recovers_empty(self, storage, clock, data_dir) -> None:
        data_dir.mkdir(parents=True)
        (data_dir / LOGS_KEY).write_bytes(b"\xff\xfe not utf-8")

        assert LogStore(storage, clock=clock).init() == []

    def test_init_recovers_empty_and_keeps_file_until_next_write(self, storage, clock) -> None:
        storage.set_item(LOGS_KEY, "garbage")

        store = LogStore(storage, clock=clock)
        store.init()

        assert store.snapshot() == []
        assert storage.get_item(LOGS_KEY) == "garbage"


class TestRecordActivity:
    """Tests for record_activity."""

    def test_appends_in_call_order_and_persists(self, store: LogStore, storage) -> None:
        for label in ["Work", "Break", "Exercise", "Work"]:
            store.record_activity(label)

        snapshot = store.snapshot()
        assert [r.activity for r in snapshot] == ["Work", "Break", "Exercise", "Work"]
        assert [r["activity"] for r in persisted(storage)] == ["Work", "Break", "Exercise", "Work"]

    def test_timestamps_distinct_and_non_decreasing(self, storage) -> None:
        frozen = datetime(2025, 4, 9, 15, 0, tzinfo=UTC)
        store = LogStore(storage, clock=lambda: frozen)
        store.init()

        for _ in range(5):
            store.record_activity("Work")

        stamps = [r.timestamp for r in store.snapshot()]
        assert stamps == sorted(stamps)
        assert len(set(stamps)) == 5
        assert stamps[0] == frozen

    def test_clock_going_backwards_keeps_order(self, storage) -> None:
        times = iter(
            [
                datetime(2025, 4, 9, 15, 0, tzinfo=UTC),
                datetime(2025, 4, 9, 14, 0, tzinfo=UTC),
            ]
        )
        store = LogStore(storage, clock=lambda: next(times))
        store.init()

        store.record_activity("Work")
        store.record_activity("Break")

        first, second = store.snapshot()
        assert second.timestamp == first.timestamp + timedelta(milliseconds=1)

    def test_blank_label_rejected_without_write(self, store: LogStore, storage) -> None:
        with pytest.raises(InvalidActivity):
            store.record_activity("  ")

        assert storage.get_item(LOGS_KEY) is None

    def test_write_failure_not_applied(self, store: LogStore, storage) -> None:
        store.record_activity("Work")
        storage.fail_writes = True

        with pytest.raises(StoreWriteError):
            store.record_activity("Break")

        assert [r.activity for r in store.snapshot()] == ["Work"]
        assert [r["activity"] for r in persisted(storage)] == ["Work"]

    def test_concurrent_calls_are_serialized(self, store: LogStore, storage) -> None:
        threads = [
            threading.Thread(target=store.record_activity, args=(f"Task {i}",)) for i in range(20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store.snapshot()) == 20
        assert len(persisted(storage)) == 20


class TestAddCommentToLatest:
    """Tests for add_comment_to_latest."""

    def test_scenario_work_break_comment(self, store: LogStore) -> None:
        store.record_activity("Work")
        store.record_activity("Break")
        store.add_comment_to_latest("short break")

        snapshot = store.snapshot()
        assert [(r.activity, r.comments) for r in snapshot] == [
            ("Work", []),
            ("Break", ["short break"]),
        ]

    def test_empty_log_fails_without_write(self, store: LogStore, storage) -> None:
        with pytest.raises(NoRecordsError):
            store.add_comment_to_latest("hello")

        assert storage.get_item(LOGS_KEY) is None

    def test_comment_persisted(self, store: LogStore, storage) -> None:
        store.record_activity("Work")
        store.add_comment_to_latest("first")
        store.add_comment_to_latest("second")

        assert persisted(storage)[0]["comments"] == ["first", "second"]

    def test_write_failure_not_applied(self, store: LogStore, storage) -> None:
        store.record_activity("Work")
        storage.fail_writes = True

        with pytest.raises(StoreWriteError):
            store.add_comment_to_latest("lost")

        assert store.snapshot()[0].comments == []


class TestEditAt:
    """Tests for edit_at."""

    def test_edit_by_creation_position(self, store: LogStore, storage) -> None:
        for label in ["Work", "Break", "Exercise"]:
            store.record_activity(label)

        store.edit_at(0, "Reading", "chapter 1")

        snapshot = store.snapshot()
        assert snapshot[0].activity == "Reading"
        assert snapshot[0].comments == ["chapter 1"]
        assert persisted(storage)[0]["activity"] == "Reading"

    def test_displayed_zero_targets_last_created(self, store: LogStore) -> None:
        for label in ["Work", "Break", "Exercise"]:
            store.record_activity(label)
        before = store.snapshot()

        store.edit_at(
            display_to_storage_index(0, len(store)), "Gym", "warmup, cardio, stretch"
        )

        after = store.snapshot()
        assert after[-1].activity == "Gym"
        assert after[-1].comments == ["warmup", "cardio", "stretch"]
        assert after[-1].timestamp == before[-1].timestamp
        assert after[:-1] == before[:-1]

    def test_omitted_comments_kept_verbatim(self, store: LogStore, storage) -> None:
        store.record_activity("Work")
        store.add_comment_to_latest("met Bob, Alice")
        store.add_comment_to_latest("")

        store.edit_at(0, "Gym")

        assert store.snapshot()[0].comments == ["met Bob, Alice", ""]
        assert persisted(storage)[0]["comments"] == ["met Bob, Alice", ""]

    def test_empty_log(self, store: LogStore) -> None:
        with pytest.raises(NoRecordsError):
            store.edit_at(0, "Gym", "")

    @pytest.mark.parametrize("position", [-1, 2, 10])
    def test_out_of_range(self, store: LogStore, position: int) -> None:
        store.record_activity("Work")
        store.record_activity("Break")

        with pytest.raises(RecordIndexError):
            store.edit_at(position, "Gym", "")


class TestSnapshotAndClear:
    """Tests for snapshot isolation and clear."""

    def test_snapshot_is_a_copy(self, store: LogStore) -> None:
        store.record_activity("Work")

        snapshot = store.snapshot()
        snapshot[0].comments.append("sneaky")
        snapshot.append(snapshot[0])

        assert len(store.snapshot()) == 1
        assert store.snapshot()[0].comments == []

    def test_display_snapshot_newest_first(self, store: LogStore) -> None:
        for label in ["Work", "Break", "Exercise"]:
            store.record_activity(label)

        assert [r.activity for r in store.display_snapshot()] == ["Exercise", "Break", "Work"]
        assert [r.activity for r in store.snapshot()] == ["Work", "Break", "Exercise"]

    def test_clear_persists_empty_log(self, store: LogStore, storage) -> None:
        store.record_activity("Work")

        store.clear()

        assert store.snapshot() == []
        assert persisted(storage) == []

    def test_duplicates_allowed(self, store: LogStore) -> None:
        store.record_activity("Work")
        store.record_activity("Work")

        assert [r.activity for r in store.snapshot()] == ["Work", "Work"]

    def test_persisted_format(self, store: LogStore, storage) -> None:
        store.record_activity("Work")

        assert persisted(storage) == [
            {"activity": "Work", "timestamp": "2025-04-09T15:00:00.000Z", "comments": []}
        ]
