"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class UnknownLoanPurposeError(DomainException):
    """Loan purpose is not in the catalog"""

    pass


class RenderServiceError(DomainException):
    """PDF rendering service returned an error or is unavailable"""

    pass


class ChatServiceError(DomainException):
    """Language model API returned an error or is unavailable"""

    pass


class EmptyChatResponseError(ChatServiceError):
    """Language model API answered without any usable message"""

    pass
