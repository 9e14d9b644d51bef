"""Models for training-related data structures."""
from dataclasses import dataclass


@dataclass
class InputResult:
    """Outcome of a single letter fed to a training."""
    success: bool
    task_complete: bool
    task_error: bool
    training_complete: bool = False

    @property
    def task_finished(self) -> bool:
        """True when the input moved the training to the next task."""
        return self.task_complete or self.task_error
