"""Training session state: single-word tasks and the ordered training."""
import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from wordscramble.config import settings
from wordscramble.exceptions import SnapshotError, TrainingFinishedError
from wordscramble.models.snapshot_models import TaskSnapshot, TrainingSnapshot
from wordscramble.models.training_models import InputResult
from wordscramble.services.scrambler import randomize_entity, scramble_word
from wordscramble.services.word_source import DEFAULT_WORDS


logger = logging.getLogger(__name__)


class Task:
    """One word to be typed by picking its scrambled letters in order."""

    def __init__(self, word: str, max_error_count: int, randomized_word: Optional[str] = None,
                 word_progress: str = "", current_letter_index: int = 0, current_err_count: int = 0):
        self.word = word
        self.max_error_count = max_error_count
        # An empty scramble is valid state for a fully typed word
        self.randomized_word = scramble_word(word) if randomized_word is None else randomized_word
        self.word_progress = word_progress
        self.current_letter_index = current_letter_index
        self.current_err_count = current_err_count

    def __repr__(self) -> str:
        return (f"Task(word={self.word!r}, randomized_word={self.randomized_word!r}, "
                f"word_progress={self.word_progress!r}, errors={self.current_err_count}/{self.max_error_count})")

    @property
    def current_letter_symbol(self) -> Optional[str]:
        """The letter the task expects next."""
        if self.current_letter_index >= len(self.word):
            return None
        return self.word[self.current_letter_index]

    @property
    def is_error(self) -> bool:
        return self.current_err_count >= self.max_error_count

    @property
    def is_complete(self) -> bool:
        return self.word_progress == self.word and not self.is_error

    @property
    def is_finished(self) -> bool:
        return self.is_complete or self.is_error

    def handle_letter(self, letter: str) -> bool:
        """Apply a selected letter; return True if it was the expected one."""
        if self.is_finished:
            logger.debug(f"Ignoring letter '{letter}' for finished task '{self.word}'")
            return False

        if letter == self.current_letter_symbol:
            self.increment_progress(letter)
            return True

        self.set_error()
        return False

    def increment_progress(self, letter: str) -> None:
        randomized = list(self.randomized_word)
        if letter in randomized:
            randomized.remove(letter)

        self.current_letter_index += 1
        self.word_progress += letter
        self.randomized_word = "".join(randomized)

    def set_error(self) -> None:
        self.current_err_count += 1
        if self.current_err_count == self.max_error_count:
            self.word_progress = self.word

    def to_snapshot(self) -> TaskSnapshot:
        return TaskSnapshot(
            word=self.word,
            randomized_word=self.randomized_word,
            word_progress=self.word_progress,
            current_letter_index=self.current_letter_index,
            current_err_count=self.current_err_count,
            max_error_count=self.max_error_count,
        )

    @classmethod
    def from_snapshot(cls, snapshot: TaskSnapshot, max_error_count: int) -> "Task":
        """Recreate a task exactly as stored, without scrambling it again."""
        return cls(
            word=snapshot.word,
            max_error_count=max_error_count,
            randomized_word=snapshot.randomized_word,
            word_progress=snapshot.word_progress,
            current_letter_index=snapshot.current_letter_index,
            current_err_count=snapshot.current_err_count,
        )


class Training:
    """An ordered session of tasks with aggregate statistics.

    A training is either built fresh from a random sample of ``words`` or
    restored verbatim from a snapshot. Letters go in through
    ``handle_input``; everything else is a read-only query.
    """

    def __init__(self, state: Optional[Union[TrainingSnapshot, Mapping[str, Any]]] = None,
                 words: Optional[Sequence[str]] = None,
                 max_task_count: Optional[int] = None,
                 max_err_count: Optional[int] = None):
        self.words: List[str] = list(words) if words is not None else list(DEFAULT_WORDS)
        self.max_task_count: int = settings.training.max_task_count if max_task_count is None else max_task_count
        self.max_err_count: int = settings.training.max_err_count if max_err_count is None else max_err_count
        if self.max_task_count < 1:
            raise ValueError("max_task_count must be positive")
        if self.max_err_count < 1:
            raise ValueError("max_err_count must be positive")
        self.current_task_index: int = 0
        self.tasks: List[Task] = []

        if state is not None:
            self.restore_state(state)
            return

        self.tasks = self.randomize_tasks()

    @property
    def current_task(self) -> Optional[Task]:
        if self.current_task_index >= len(self.tasks):
            return None
        return self.tasks[self.current_task_index]

    @property
    def task_number(self) -> int:
        """1-based number of the current task, capped at the task count."""
        return min(self.current_task_index + 1, len(self.tasks))

    @property
    def is_complete(self) -> bool:
        return all(task.is_finished for task in self.tasks)

    @property
    def error_count(self) -> int:
        return sum(task.current_err_count for task in self.tasks)

    @property
    def tasks_without_errors(self) -> int:
        return len([task for task in self.tasks if task.current_err_count == 0])

    @property
    def most_broken_task(self) -> Optional[str]:
        """Word of the first task with the highest error count."""
        if not self.tasks:
            return None
        max_err_count = max(task.current_err_count for task in self.tasks)
        return next(task.word for task in self.tasks if task.current_err_count == max_err_count)

    @property
    def finished_task_indexes(self) -> List[int]:
        return [i for i, task in enumerate(self.tasks) if task.is_finished]

    def handle_input(self, letter: str) -> InputResult:
        """Feed one letter to the current task and advance if it finished."""
        task = self.current_task
        if task is None:
            raise TrainingFinishedError("Training is already finished")

        is_success = task.handle_letter(letter)
        result = InputResult(
            success=is_success,
            task_complete=task.is_complete,
            task_error=task.is_error,
            training_complete=False,
        )

        if task.is_complete or task.is_error:
            self.current_task_index += 1
            result.training_complete = self.is_complete
            logger.debug(f"Task '{task.word}' finished ({'complete' if task.is_complete else 'error'}), "
                         f"moving to task {self.current_task_index}")

        return result

    def randomize_tasks(self) -> List[Task]:
        """Build ``max_task_count`` tasks from distinct random words."""
        if len(self.words) < self.max_task_count:
            raise ValueError(f"Need at least {self.max_task_count} words, got {len(self.words)}")

        randomized_indexes = randomize_entity(len(self.words), self.max_task_count)
        return [Task(self.words[index], self.max_err_count) for index in randomized_indexes]

    def restore_state(self, state: Union[TrainingSnapshot, Mapping[str, Any]]) -> None:
        """Rehydrate the training from a snapshot without re-scrambling.

        Raises SnapshotError on malformed input; the instance is left as it
        was in that case.
        """
        if isinstance(state, TrainingSnapshot):
            # Round-trip through the dict form so dataclass snapshots get validated too
            snapshot = TrainingSnapshot.from_dict(state.to_dict())
        elif isinstance(state, Mapping):
            snapshot = TrainingSnapshot.from_dict(state)
        else:
            raise SnapshotError(f"Cannot restore training from {type(state).__name__}")

        self.max_task_count = snapshot.max_task_count
        self.max_err_count = snapshot.max_err_count
        self.current_task_index = snapshot.current_task_index
        self.tasks = [Task.from_snapshot(task, self.max_err_count) for task in snapshot.tasks]

    def to_snapshot(self) -> TrainingSnapshot:
        return TrainingSnapshot(
            max_err_count=self.max_err_count,
            max_task_count=self.max_task_count,
            current_task_index=self.current_task_index,
            tasks=[task.to_snapshot() for task in self.tasks],
        )
