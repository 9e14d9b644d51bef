"""Serializable snapshots of a training and its tasks.

The dict form uses the camelCase keys of the persisted state so snapshots
written by earlier sessions stay readable:

    {"maxErrCount": 3, "maxTaskCount": 6, "currentTaskIndex": 1,
     "tasks": [{"word": "sun", "randomizedWord": "nu", "wordProgress": "s",
                "currentLetterIndex": 1, "currentErrCount": 0,
                "maxErrorCount": 3}, ...]}
"""
import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from wordscramble.exceptions import SnapshotError


def _require(data: Mapping[str, Any], key: str, kind: type, where: str) -> Any:
    """Fetch a required field and check its type."""
    if key not in data:
        raise SnapshotError(f"{where}: missing field '{key}'")
    value = data[key]
    # bool is a subclass of int, but True is not a valid counter
    if kind is int and isinstance(value, bool):
        raise SnapshotError(f"{where}: field '{key}' must be an integer, got bool")
    if not isinstance(value, kind):
        raise SnapshotError(f"{where}: field '{key}' must be {kind.__name__}, got {type(value).__name__}")
    if kind is int and value < 0:
        raise SnapshotError(f"{where}: field '{key}' cannot be negative")
    return value


@dataclass
class TaskSnapshot:
    """Serializable state of a single task."""
    word: str
    randomized_word: str
    word_progress: str
    current_letter_index: int
    current_err_count: int
    max_error_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "randomizedWord": self.randomized_word,
            "wordProgress": self.word_progress,
            "currentLetterIndex": self.current_letter_index,
            "currentErrCount": self.current_err_count,
            "maxErrorCount": self.max_error_count,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], max_error_count: Optional[int] = None,
                  where: str = "task") -> "TaskSnapshot":
        """Build a task snapshot, validating field presence and types.

        ``max_error_count`` overrides the stored per-task budget; the stored
        value is only required when no override is given.
        """
        if not isinstance(data, Mapping):
            raise SnapshotError(f"{where}: expected an object, got {type(data).__name__}")
        word = _require(data, "word", str, where)
        if max_error_count is None:
            max_error_count = _require(data, "maxErrorCount", int, where)
        snapshot = cls(
            word=word,
            randomized_word=_require(data, "randomizedWord", str, where),
            word_progress=_require(data, "wordProgress", str, where),
            current_letter_index=_require(data, "currentLetterIndex", int, where),
            current_err_count=_require(data, "currentErrCount", int, where),
            max_error_count=max_error_count,
        )
        snapshot.validate(where)
        return snapshot

    def validate(self, where: str = "task") -> None:
        """Check that the stored progress could have been produced by real input."""
        if not self.word:
            raise SnapshotError(f"{where}: word cannot be empty")
        if self.current_err_count > self.max_error_count:
            raise SnapshotError(
                f"{where}: error count {self.current_err_count} exceeds budget {self.max_error_count}"
            )
        if self.current_letter_index > len(self.word):
            raise SnapshotError(f"{where}: letter index {self.current_letter_index} is past the end of '{self.word}'")
        if self.current_err_count == self.max_error_count:
            # Failed tasks have their progress filled with the whole word
            if self.word_progress != self.word:
                raise SnapshotError(f"{where}: failed task must show the full word")
            return
        if not self.word.startswith(self.word_progress):
            raise SnapshotError(f"{where}: progress '{self.word_progress}' is not a prefix of '{self.word}'")
        if self.current_letter_index != len(self.word_progress):
            raise SnapshotError(f"{where}: letter index does not match progress length")
        if Counter(self.randomized_word + self.word_progress) != Counter(self.word):
            raise SnapshotError(f"{where}: scrambled letters do not match '{self.word}'")


@dataclass
class TrainingSnapshot:
    """Serializable state of a whole training."""
    max_err_count: int
    max_task_count: int
    current_task_index: int
    tasks: List[TaskSnapshot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maxErrCount": self.max_err_count,
            "maxTaskCount": self.max_task_count,
            "currentTaskIndex": self.current_task_index,
            "tasks": [task.to_dict() for task in self.tasks],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrainingSnapshot":
        """Build a training snapshot, raising SnapshotError on malformed data."""
        if not isinstance(data, Mapping):
            raise SnapshotError(f"training: expected an object, got {type(data).__name__}")
        max_err_count = _require(data, "maxErrCount", int, "training")
        max_task_count = _require(data, "maxTaskCount", int, "training")
        current_task_index = _require(data, "currentTaskIndex", int, "training")
        raw_tasks = _require(data, "tasks", list, "training")

        if max_err_count < 1:
            raise SnapshotError("training: maxErrCount must be positive")
        if max_task_count < 1:
            raise SnapshotError("training: maxTaskCount must be positive")
        if len(raw_tasks) != max_task_count:
            raise SnapshotError(f"training: expected {max_task_count} tasks, got {len(raw_tasks)}")
        if current_task_index > len(raw_tasks):
            raise SnapshotError(f"training: task index {current_task_index} is out of range")

        tasks = [
            TaskSnapshot.from_dict(raw, max_error_count=max_err_count, where=f"tasks[{i}]")
            for i, raw in enumerate(raw_tasks)
        ]
        for i, task in enumerate(tasks[:current_task_index]):
            finished = task.current_err_count == max_err_count or task.word_progress == task.word
            if not finished:
                raise SnapshotError(f"tasks[{i}]: task before the current one is not finished")
        if current_task_index < len(tasks):
            current = tasks[current_task_index]
            if current.current_err_count == max_err_count or current.word_progress == current.word:
                raise SnapshotError(f"tasks[{current_task_index}]: current task is already finished")
        for i, task in enumerate(tasks[current_task_index + 1:], start=current_task_index + 1):
            if task.word_progress or task.current_err_count or task.current_letter_index:
                raise SnapshotError(f"tasks[{i}]: task after the current one has already been started")

        return cls(
            max_err_count=max_err_count,
            max_task_count=max_task_count,
            current_task_index=current_task_index,
            tasks=tasks,
        )

    @classmethod
    def from_json(cls, text: str) -> "TrainingSnapshot":
        try:
            data = json.loads(text)
        except (TypeError, json.JSONDecodeError) as e:
            raise SnapshotError(f"training: invalid JSON: {e}") from e
        return cls.from_dict(data)
