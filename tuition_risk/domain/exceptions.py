"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CompletionServiceError(DomainException):
    """Text-completion service returned an error or is unavailable"""

    pass


class PredictionFailedError(DomainException):
    """Risk prediction could not be obtained from the completion service"""

    pass
