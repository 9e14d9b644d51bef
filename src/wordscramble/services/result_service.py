"""Service for storing statistics of finished trainings."""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from wordscramble.models.models import TrainingResult
from wordscramble.services.training import Training


logger = logging.getLogger(__name__)


@dataclass
class UserStatistics:
    """Aggregated results of all finished trainings of a user."""
    trainings: int = 0
    tasks: int = 0
    errors: int = 0
    clean_tasks: int = 0
    last_most_broken_task: Optional[str] = None


class ResultService:
    """Service for recording and summarizing finished trainings."""

    def __init__(self, db: Session):
        """Initialize the service with a database session."""
        self.db = db

    def record_training(self, user_id: int, training: Training) -> TrainingResult:
        """Store the final statistics of a training."""
        result = TrainingResult(
            user_id=user_id,
            task_count=len(training.tasks),
            error_count=training.error_count,
            tasks_without_errors=training.tasks_without_errors,
            most_broken_task=training.most_broken_task,
        )
        self.db.add(result)
        self.db.commit()
        self.db.refresh(result)
        logger.info(f"Recorded training result for user {user_id}: {result.error_count} errors, "
                    f"{result.tasks_without_errors}/{result.task_count} clean tasks")
        return result

    def get_user_results(self, user_id: int, limit: int = 10) -> List[TrainingResult]:
        """Get the most recent results of a user, newest first."""
        return (
            self.db.query(TrainingResult)
            .filter(TrainingResult.user_id == user_id)
            .order_by(TrainingResult.id.desc())
            .limit(limit)
            .all()
        )

    def get_user_statistics(self, user_id: int) -> UserStatistics:
        """Get totals over all finished trainings of a user."""
        trainings, tasks, errors, clean_tasks = (
            self.db.query(
                func.count(TrainingResult.id),
                func.coalesce(func.sum(TrainingResult.task_count), 0),
                func.coalesce(func.sum(TrainingResult.error_count), 0),
                func.coalesce(func.sum(TrainingResult.tasks_without_errors), 0),
            )
            .filter(TrainingResult.user_id == user_id)
            .one()
        )
        last = self.get_user_results(user_id, limit=1)
        return UserStatistics(
            trainings=trainings,
            tasks=tasks,
            errors=errors,
            clean_tasks=clean_tasks,
            last_most_broken_task=last[0].most_broken_task if last else None,
        )
