"""Text views of a training for the chat front end."""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from wordscramble.models.training_models import InputResult
from wordscramble.services.training import Training


STATE_ACTIVE = "active"
STATE_COMPLETE = "complete"
STATE_ERROR = "error"


@dataclass
class TaskView:
    """Everything needed to draw one task."""
    header: str
    answer: str
    state: str
    # (position in the scrambled word, letter)
    letters: List[Tuple[int, str]] = field(default_factory=list)

    @property
    def text(self) -> str:
        answer = " ".join(self.answer.upper()) if self.answer else "_"
        if self.state == STATE_COMPLETE:
            return f"{self.header}\n\n✅ {answer}"
        if self.state == STATE_ERROR:
            return f"{self.header}\n\n❌ {answer}"
        return f"{self.header}\n\n{answer}\n\nPick the next letter:"


def render_task(training: Training, task_index: Optional[int] = None) -> TaskView:
    """Render the current task, or the task at ``task_index``."""
    if task_index is None:
        task_index = min(training.current_task_index, len(training.tasks) - 1)
    task = training.tasks[task_index]
    header = f"Task {task_index + 1} of {training.max_task_count}"

    if task.is_complete:
        return TaskView(header=header, answer=task.word_progress, state=STATE_COMPLETE)
    if task.is_error:
        return TaskView(header=header, answer=task.word_progress, state=STATE_ERROR)

    return TaskView(
        header=header,
        answer=task.word_progress,
        state=STATE_ACTIVE,
        letters=list(enumerate(task.randomized_word)),
    )


def render_stats(training: Training) -> str:
    return (
        "🏁 Training complete!\n\n"
        f"Errors: {training.error_count}\n"
        f"Tasks without errors: {training.tasks_without_errors}\n"
        f"Most mistakes in: \"{training.most_broken_task}\""
    )


def render_result(result: InputResult, letter: str) -> str:
    """Short popup line for a single input."""
    if result.task_error:
        return "❌ Out of attempts for this word"
    if result.task_complete:
        return "✅ Word complete!"
    if result.success:
        return f"👍 {letter.upper()}"
    return f"⚠️ {letter.upper()} is not the next letter"
