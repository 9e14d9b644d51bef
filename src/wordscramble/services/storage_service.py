"""Storage adapters for unfinished training snapshots."""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.orm import Session

from wordscramble import monitoring
from wordscramble.exceptions import SnapshotError
from wordscramble.models.models import TrainingState
from wordscramble.models.snapshot_models import TrainingSnapshot


logger = logging.getLogger(__name__)


class SnapshotStorage(ABC):
    """Port through which a session saves and resumes its training."""

    @abstractmethod
    def load(self) -> Optional[TrainingSnapshot]:
        """Return the stored snapshot, or None when there is nothing to resume."""
        raise NotImplementedError("Subclasses must implement this method")

    @abstractmethod
    def save(self, snapshot: TrainingSnapshot) -> None:
        raise NotImplementedError("Subclasses must implement this method")

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError("Subclasses must implement this method")


class MemorySnapshotStorage(SnapshotStorage):
    """Keeps the serialized snapshot in memory."""

    def __init__(self, state: Optional[str] = None):
        self.state = state

    def load(self) -> Optional[TrainingSnapshot]:
        if self.state is None:
            return None
        try:
            return TrainingSnapshot.from_json(self.state)
        except SnapshotError as e:
            logger.error(f"Discarding invalid stored training: {e}")
            monitoring.snapshot_errors.inc()
            self.state = None
            return None

    def save(self, snapshot: TrainingSnapshot) -> None:
        self.state = snapshot.to_json()

    def clear(self) -> None:
        self.state = None


class DatabaseSnapshotStorage(SnapshotStorage):
    """Keeps one snapshot per user in the ``training_states`` table."""

    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id

    def _get_row(self) -> Optional[TrainingState]:
        return self.db.query(TrainingState).filter(TrainingState.user_id == self.user_id).first()

    def load(self) -> Optional[TrainingSnapshot]:
        row = self._get_row()
        if row is None:
            return None
        try:
            return TrainingSnapshot.from_json(row.state)
        except SnapshotError as e:
            logger.error(f"Discarding invalid stored training for user {self.user_id}: {e}")
            monitoring.snapshot_errors.inc()
            self.db.delete(row)
            self.db.commit()
            return None

    def save(self, snapshot: TrainingSnapshot) -> None:
        row = self._get_row()
        if row is None:
            row = TrainingState(user_id=self.user_id, state=snapshot.to_json())
            self.db.add(row)
        else:
            row.state = snapshot.to_json()
        self.db.commit()
        logger.debug(f"Saved training for user {self.user_id} at task {snapshot.current_task_index}")

    def clear(self) -> None:
        deleted = self.db.query(TrainingState).filter(TrainingState.user_id == self.user_id).delete()
        self.db.commit()
        if deleted:
            logger.debug(f"Cleared stored training for user {self.user_id}")
