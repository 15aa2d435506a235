from __future__ import annotations


class IntakeError(Exception):
    """Base class for submission intake failures."""


class SubmissionValidationError(IntakeError):
    """The client payload failed validation; carries the human-readable reason."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class StorageInitError(IntakeError):
    """The data directory or one of the output files could not be created."""


class PersistError(IntakeError):
    """Appending a validated submission to the output files failed."""
