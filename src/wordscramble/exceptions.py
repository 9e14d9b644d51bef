"""Exceptions raised by the trainer.

A wrong letter is a normal outcome of an input and is reported through
``InputResult``; the errors below are reserved for callers that break the
contract (bad snapshots, bad word lists, input after the end of a session).
"""


class TrainingFinishedError(ValueError):
    """Input was fed to a training that has no active task left."""


class SnapshotError(ValueError):
    """A persisted training snapshot is missing fields or is inconsistent."""


class WordListError(ValueError):
    """A word list contains entries that cannot be scrambled."""


class InvalidLetterError(ValueError):
    """Input is not a single alphabetic character."""
