"""Database models for the trainer."""
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
)

from wordscramble.models.base import Base, TimestampMixin


class TrainingState(Base, TimestampMixin):
    """Persisted snapshot of a user's unfinished training."""

    __tablename__ = "training_states"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, unique=True, index=True, nullable=False)
    state = Column(Text, nullable=False)  # TrainingSnapshot as JSON


class TrainingResult(Base, TimestampMixin):
    """Statistics of a finished training."""

    __tablename__ = "training_results"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, index=True, nullable=False)
    task_count = Column(Integer, nullable=False)
    error_count = Column(Integer, default=0)
    tasks_without_errors = Column(Integer, default=0)
    most_broken_task = Column(String, nullable=True)
