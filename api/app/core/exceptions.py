"""
Custom exceptions for the application.
"""


class StudySchedulerException(Exception):
    """Base exception for all study scheduler application exceptions."""
    pass


class ValidationError(StudySchedulerException):
    """Raised when validation fails."""
    pass


class InvalidGradeError(ValidationError):
    """Raised when a review quality grade is outside the 0-5 scale."""

    def __init__(self, quality):
        self.quality = quality
        super().__init__(f"Quality must be an integer between 0 and 5, got {quality!r}")


class NotFoundError(StudySchedulerException):
    """Raised when a requested resource is not found."""
    pass


class PersistenceError(StudySchedulerException):
    """Raised when reading from or writing to the database fails."""
    pass
