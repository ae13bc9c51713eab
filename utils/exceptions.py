class DomainError(Exception):
    """Base exception for attendance business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateSessionId(DomainError):
    """Raised when a session is created with an id that already exists."""

    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id!r} already exists")
        self.session_id = session_id


class AlreadyRecorded(DomainError):
    """Raised when an admission already exists for a (session, claimant) pair."""

    def __init__(self, session_id: str, claimant_id: str):
        super().__init__(f"Attendance already recorded for {claimant_id!r} in session {session_id!r}")
        self.session_id = session_id
        self.claimant_id = claimant_id


class StorageUnavailable(DomainError):
    """Raised when a lookup or write fails at the storage boundary. Retryable."""
