"""Test configuration."""
import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Set test environment before any imports
os.environ["ENV"] = "test"

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("TASK_PAUSE_SECONDS", "0")

# Import after environment setup
from wordscramble.models.base import SessionLocal, init_db
from wordscramble.models.models import TrainingResult, TrainingState


@pytest.fixture
def db():
    """Create a fresh database session for each test."""
    init_db()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.query(TrainingState).delete()
        db.query(TrainingResult).delete()
        db.commit()
        db.close()
