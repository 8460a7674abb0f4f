from __future__ import annotations

from typing import List

import pytest

from markup_history.annotations import AnnotationRecord
from markup_history.history import DEFAULT_CAPACITY, HistoryConfigError, HistoryLog


def make_record(index: int, *, kind: str = "highlight") -> AnnotationRecord:
    return AnnotationRecord(
        id=f"ann-{index}",
        kind=kind,
        x=float(index),
        y=float(index * 2),
        created_at="2024-01-01T00:00:00+00:00",
    )


def make_state(*indices: int) -> List[AnnotationRecord]:
    return [make_record(index) for index in indices]


def test_seeded_log_exposes_initial_state() -> None:
    seed = make_state(1, 2)
    log = HistoryLog(seed)

    assert log.current() == seed
    assert not log.can_undo()
    assert not log.can_redo()
    assert len(log) == 1
    assert log.cursor == 0


def test_empty_seed_is_still_a_snapshot() -> None:
    log = HistoryLog()

    assert log.current() == []
    assert len(log) == 1
    assert log.undo() is None


def test_undo_walks_back_through_commits() -> None:
    s1, s2, s3 = make_state(1), make_state(1, 2), make_state(1, 2, 3)
    log = HistoryLog()
    log.commit(s1)
    log.commit(s2)
    log.commit(s3)

    assert log.undo() == s2
    assert log.undo() == s1
    assert log.undo() == []
    assert log.undo() is None


def test_redo_replays_undone_states() -> None:
    s1, s2, s3 = make_state(1), make_state(1, 2), make_state(1, 2, 3)
    log = HistoryLog(s1)
    log.commit(s2)
    log.commit(s3)
    log.undo()
    log.undo()

    assert log.redo() == s2
    assert log.redo() == s3
    assert log.redo() is None
    assert log.current() == s3


def test_commit_discards_redo_branch() -> None:
    s1, s2, s3, s4 = make_state(1), make_state(2), make_state(3), make_state(4)
    log = HistoryLog(s1)
    log.commit(s2)
    log.commit(s3)
    log.undo()
    log.undo()

    log.commit(s4)

    assert log.redo() is None
    assert not log.can_redo()
    assert len(log) == 2
    assert log.undo() == s1


def test_capacity_keeps_most_recent_states() -> None:
    log = HistoryLog(make_state(0))
    for index in range(1, 61):
        log.commit(make_state(index))

    assert len(log) == DEFAULT_CAPACITY
    assert log.cursor == DEFAULT_CAPACITY - 1
    assert log.current() == make_state(60)

    oldest = log.current()
    while log.can_undo():
        oldest = log.undo()

    assert oldest == make_state(11)
    assert log.undo() is None


def test_capacity_eviction_after_undo_keeps_cursor_on_newest() -> None:
    log = HistoryLog(make_state(0), capacity=3)
    log.commit(make_state(1))
    log.commit(make_state(2))
    log.undo()

    log.commit(make_state(3))
    log.commit(make_state(4))

    assert len(log) == 3
    assert log.cursor == 2
    assert log.current() == make_state(4)
    assert log.undo() == make_state(3)
    assert log.undo() == make_state(1)
    assert log.undo() is None


def test_capacity_of_one_never_offers_undo() -> None:
    log = HistoryLog(make_state(0), capacity=1)
    log.commit(make_state(1))

    assert len(log) == 1
    assert log.current() == make_state(1)
    assert not log.can_undo()


def test_mutating_committed_list_does_not_touch_history() -> None:
    state = make_state(1)
    log = HistoryLog()
    log.commit(state)
    log.commit(make_state(2))

    state[0].move_to(500, 500)
    state.append(make_record(9))

    assert log.undo() == make_state(1)


def test_mutating_returned_state_does_not_touch_history() -> None:
    log = HistoryLog(make_state(1))
    log.commit(make_state(2))

    restored = log.undo()
    assert restored is not None
    restored[0].resize(10, 10)
    restored.clear()

    assert log.current() == make_state(1)
    assert log.redo() == make_state(2)


def test_noop_undo_and_redo_leave_current_unchanged() -> None:
    log = HistoryLog(make_state(1))

    assert log.undo() is None
    assert log.current() == make_state(1)
    assert log.redo() is None
    assert log.current() == make_state(1)


def test_stats_reflect_cursor_position() -> None:
    log = HistoryLog(capacity=5)
    log.commit(make_state(1))
    log.commit(make_state(2))
    log.undo()

    stats = log.stats()

    assert stats.length == 3
    assert stats.cursor == 1
    assert stats.capacity == 5
    assert stats.can_undo is True
    assert stats.can_redo is True


def test_capacity_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MARKUP_HISTORY_CAPACITY", "4")

    log = HistoryLog()
    for index in range(10):
        log.commit(make_state(index))

    assert log.capacity == 4
    assert len(log) == 4


def test_explicit_capacity_overrides_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("MARKUP_HISTORY_CAPACITY", "4")

    assert HistoryLog(capacity=7).capacity == 7


@pytest.mark.parametrize("capacity", [0, -3])
def test_rejects_non_positive_capacity(capacity: int) -> None:
    with pytest.raises(HistoryConfigError) as excinfo:
        HistoryLog(capacity=capacity)

    assert excinfo.value.value == capacity
