"""Main entry point for the trainer bot."""
import logging

from wordscramble.app import ScrambleBot
from wordscramble.config import ensure_directories
from wordscramble.logging_config import setup_logging


logger = logging.getLogger(__name__)


def main() -> None:
    ensure_directories()
    setup_logging("Starting WordScramble ...")
    ScrambleBot().run()


if __name__ == "__main__":
    main()
