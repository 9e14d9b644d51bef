"""Service tying a training to its storage, history and metrics."""
import logging
from typing import Optional, Sequence

from wordscramble import monitoring
from wordscramble.exceptions import InvalidLetterError
from wordscramble.models.training_models import InputResult
from wordscramble.services.result_service import ResultService
from wordscramble.services.storage_service import SnapshotStorage
from wordscramble.services.training import Task, Training
from wordscramble.services.word_source import load_words


logger = logging.getLogger(__name__)


def is_valid_letter(letter: Optional[str]) -> bool:
    """Check that input is exactly one latin letter."""
    return bool(letter) and len(letter) == 1 and letter.isascii() and letter.isalpha()


class SessionService:
    """Runs one user's training: resume, input, persistence.

    The storage always holds the state after the last input, so a session
    can be dropped at any point and resumed later. A finished training is
    removed from storage and, when a result service is given, recorded in
    the user's history.
    """

    def __init__(self, storage: SnapshotStorage, words: Optional[Sequence[str]] = None,
                 results: Optional[ResultService] = None, user_id: Optional[int] = None):
        self.storage = storage
        self.words = list(words) if words is not None else load_words()
        self.results = results
        self.user_id = user_id
        self.training: Optional[Training] = None

    def has_saved_training(self) -> bool:
        return self.storage.load() is not None

    def new_training(self) -> Training:
        self.training = Training(words=self.words)
        self.storage.save(self.training.to_snapshot())
        monitoring.trainings_started.labels(origin="new").inc()
        logger.info(f"Started new training for user {self.user_id}: {[t.word for t in self.training.tasks]}")
        return self.training

    def load(self) -> Optional[Training]:
        """Reload the stored training, if any, to continue feeding it input."""
        snapshot = self.storage.load()
        if snapshot is None:
            return None
        self.training = Training(state=snapshot, words=self.words)
        return self.training

    def resume(self) -> Training:
        """Restore the stored training, or start a new one if there is none."""
        if self.load() is None:
            return self.new_training()

        monitoring.trainings_started.labels(origin="restored").inc()
        logger.info(f"Restored training for user {self.user_id} at task {self.training.current_task_index}")
        return self.training

    def restart(self) -> Training:
        self.storage.clear()
        return self.new_training()

    def start(self, resume: bool = True) -> Training:
        return self.resume() if resume else self.restart()

    def handle_input(self, letter: str) -> InputResult:
        """Feed a letter to the active training and persist the outcome."""
        if not is_valid_letter(letter):
            raise InvalidLetterError(f"Expected a single letter, got {letter!r}")
        if self.training is None:
            self.resume()

        letter = letter.lower()
        result = self.training.handle_input(letter)
        monitoring.letters_handled.labels(result="success" if result.success else "error").inc()

        if result.task_finished:
            monitoring.tasks_finished.labels(outcome="complete" if result.task_complete else "error").inc()

        if result.training_complete:
            self.storage.clear()
            monitoring.trainings_completed.inc()
            if self.results is not None and self.user_id is not None:
                self.results.record_training(self.user_id, self.training)
            logger.info(f"Training finished for user {self.user_id}: {self.training.error_count} errors")
        else:
            self.storage.save(self.training.to_snapshot())

        return result

    def view_task(self, index: int) -> Task:
        """Return a finished task or the current one, for history navigation."""
        if self.training is None:
            self.resume()
        if index in self.training.finished_task_indexes or index == self.training.current_task_index:
            if 0 <= index < len(self.training.tasks):
                return self.training.tasks[index]
        raise IndexError(f"Task {index} is not available yet")
