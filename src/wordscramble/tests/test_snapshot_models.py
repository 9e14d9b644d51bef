"""Tests for training snapshots."""
import json

import pytest

from wordscramble.exceptions import SnapshotError
from wordscramble.models.snapshot_models import TaskSnapshot, TrainingSnapshot


def valid_state() -> dict:
    return {
        "maxErrCount": 3,
        "maxTaskCount": 2,
        "currentTaskIndex": 1,
        "tasks": [
            {"word": "sun", "randomizedWord": "nsu", "wordProgress": "sun",
             "currentLetterIndex": 0, "currentErrCount": 3, "maxErrorCount": 3},
            {"word": "data", "randomizedWord": "ata", "wordProgress": "d",
             "currentLetterIndex": 1, "currentErrCount": 1, "maxErrorCount": 3},
        ],
    }


def test_from_dict_reads_wire_format() -> None:
    snapshot = TrainingSnapshot.from_dict(valid_state())
    assert snapshot.max_err_count == 3
    assert snapshot.max_task_count == 2
    assert snapshot.current_task_index == 1
    assert snapshot.tasks[1] == TaskSnapshot(
        word="data",
        randomized_word="ata",
        word_progress="d",
        current_letter_index=1,
        current_err_count=1,
        max_error_count=3,
    )


def test_to_dict_writes_wire_format() -> None:
    """Test the dict form uses the same keys it was read from."""
    state = valid_state()
    assert TrainingSnapshot.from_dict(state).to_dict() == state


def test_json_round_trip() -> None:
    snapshot = TrainingSnapshot.from_dict(valid_state())
    text = snapshot.to_json()
    assert json.loads(text)["tasks"][0]["wordProgress"] == "sun"
    assert TrainingSnapshot.from_json(text) == snapshot


def test_task_max_error_count_is_optional() -> None:
    state = valid_state()
    for task in state["tasks"]:
        del task["maxErrorCount"]
    snapshot = TrainingSnapshot.from_dict(state)
    assert all(task.max_error_count == 3 for task in snapshot.tasks)


def test_standalone_task_requires_max_error_count() -> None:
    raw = valid_state()["tasks"][1]
    del raw["maxErrorCount"]
    with pytest.raises(SnapshotError, match="maxErrorCount"):
        TaskSnapshot.from_dict(raw)


@pytest.mark.parametrize("key", ["maxErrCount", "maxTaskCount", "currentTaskIndex", "tasks"])
def test_missing_training_field(key: str) -> None:
    state = valid_state()
    del state[key]
    with pytest.raises(SnapshotError, match=key):
        TrainingSnapshot.from_dict(state)


@pytest.mark.parametrize("key", ["word", "randomizedWord", "wordProgress", "currentLetterIndex", "currentErrCount"])
def test_missing_task_field(key: str) -> None:
    state = valid_state()
    del state["tasks"][1][key]
    with pytest.raises(SnapshotError, match=key):
        TrainingSnapshot.from_dict(state)


@pytest.mark.parametrize("key, value", [
    ("currentLetterIndex", "1"),
    ("currentErrCount", True),
    ("currentErrCount", -1),
    ("word", 7),
    ("randomizedWord", None),
])
def test_invalid_task_field_type(key: str, value) -> None:
    state = valid_state()
    state["tasks"][1][key] = value
    with pytest.raises(SnapshotError):
        TrainingSnapshot.from_dict(state)


def test_task_count_must_match() -> None:
    state = valid_state()
    state["maxTaskCount"] = 3
    with pytest.raises(SnapshotError, match="expected 3 tasks"):
        TrainingSnapshot.from_dict(state)


def test_errors_cannot_exceed_budget() -> None:
    state = valid_state()
    state["tasks"][1]["currentErrCount"] = 4
    with pytest.raises(SnapshotError, match="exceeds budget"):
        TrainingSnapshot.from_dict(state)


def test_scramble_must_match_word() -> None:
    state = valid_state()
    state["tasks"][1]["randomizedWord"] = "atx"
    with pytest.raises(SnapshotError, match="scrambled letters"):
        TrainingSnapshot.from_dict(state)


def test_progress_must_be_prefix() -> None:
    state = valid_state()
    state["tasks"][1]["wordProgress"] = "a"
    state["tasks"][1]["randomizedWord"] = "dta"
    with pytest.raises(SnapshotError, match="prefix"):
        TrainingSnapshot.from_dict(state)


def test_failed_task_must_show_word() -> None:
    state = valid_state()
    state["tasks"][0]["wordProgress"] = ""
    with pytest.raises(SnapshotError, match="full word"):
        TrainingSnapshot.from_dict(state)


def test_tasks_before_current_must_be_finished() -> None:
    state = valid_state()
    state["currentTaskIndex"] = 2
    with pytest.raises(SnapshotError, match="not finished"):
        TrainingSnapshot.from_dict(state)


def test_current_task_must_be_unfinished() -> None:
    state = valid_state()
    state["tasks"][1].update(randomizedWord="", wordProgress="data", currentLetterIndex=4)
    with pytest.raises(SnapshotError, match="already finished"):
        TrainingSnapshot.from_dict(state)


def test_current_task_out_of_attempts_is_rejected() -> None:
    state = valid_state()
    state["tasks"][1].update(wordProgress="data", currentErrCount=3)
    with pytest.raises(SnapshotError, match="already finished"):
        TrainingSnapshot.from_dict(state)


@pytest.mark.parametrize("changes", [
    {"currentErrCount": 2},
    {"randomizedWord": "ata", "wordProgress": "d", "currentLetterIndex": 1},
])
def test_tasks_after_current_must_be_untouched(changes: dict) -> None:
    state = valid_state()
    state["currentTaskIndex"] = 0
    state["tasks"][0].update(randomizedWord="nu", wordProgress="s", currentLetterIndex=1, currentErrCount=0)
    state["tasks"][1].update(randomizedWord="tada", wordProgress="", currentLetterIndex=0, currentErrCount=0)
    TrainingSnapshot.from_dict(state)

    state["tasks"][1].update(changes)
    with pytest.raises(SnapshotError, match="already been started"):
        TrainingSnapshot.from_dict(state)


def test_empty_training_is_rejected() -> None:
    state = {"maxErrCount": 3, "maxTaskCount": 0, "currentTaskIndex": 0, "tasks": []}
    with pytest.raises(SnapshotError, match="maxTaskCount must be positive"):
        TrainingSnapshot.from_dict(state)


@pytest.mark.parametrize("text", ["", "not json", "[]", "null"])
def test_from_json_rejects_garbage(text: str) -> None:
    with pytest.raises(SnapshotError):
        TrainingSnapshot.from_json(text)
