"""Configuration settings for the trainer."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Define data directories from environment variables
DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))

# Training defaults
DEFAULT_MAX_TASK_COUNT = 6
DEFAULT_MAX_ERR_COUNT = 3
DEFAULT_PAUSE_SECONDS = 1.0


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


@dataclass
class TrainingSettings:
    """Training session settings."""
    max_task_count: int = int(os.getenv("MAX_TASK_COUNT", str(DEFAULT_MAX_TASK_COUNT)))
    max_err_count: int = int(os.getenv("MAX_ERR_COUNT", str(DEFAULT_MAX_ERR_COUNT)))
    words_file: Optional[str] = os.getenv("WORDS_FILE") or None
    pause_seconds: float = float(os.getenv("TASK_PAUSE_SECONDS", str(DEFAULT_PAUSE_SECONDS)))


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///wordscramble.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class BotSettings:
    """Bot configuration settings."""
    token: str = os.getenv("TELEGRAM_BOT_TOKEN", "")


@dataclass
class MonitoringSettings:
    """Prometheus exporter settings."""
    enabled: bool = os.getenv("MONITORING_ENABLED", "false").lower() == "true"
    port: int = int(os.getenv("MONITORING_PORT", "9090"))


def get_training_settings() -> TrainingSettings:
    """Get training settings."""
    return TrainingSettings()


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_bot_settings() -> BotSettings:
    """Get bot settings."""
    return BotSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    training: TrainingSettings = field(default_factory=get_training_settings)
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    bot: BotSettings = field(default_factory=get_bot_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if self.training.max_task_count < 1:
            raise ValueError("MAX_TASK_COUNT must be positive")

        if self.training.max_err_count < 1:
            raise ValueError("MAX_ERR_COUNT must be positive")

        if self.training.pause_seconds < 0:
            raise ValueError("TASK_PAUSE_SECONDS cannot be negative")


# Create global settings instance
settings = Settings()
settings.validate()
