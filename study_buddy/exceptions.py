class StudyBuddyException(Exception):
    """Base exception for the study buddy service."""


class StorageError(StudyBuddyException):
    """Key-value store could not be read or written."""


class GenerationError(StudyBuddyException):
    """Flashcard generation failed; no cards were committed."""


class FlashcardNotFoundError(StudyBuddyException):
    """No flashcard with the requested id exists in the collection."""


class InvalidSessionStateError(StudyBuddyException):
    """A study session operation was called from a state that does not allow it."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while session is {state}")


class NoActiveSessionError(StudyBuddyException):
    """A study operation was requested before any session was started."""
