"""
DomainError - Common base of every domain exception.
"""


class DomainError(Exception):
    """Base class carrying the HTTP status the boundary should answer with."""

    status_code: int = 500

    def __init__(self, message: str = "Domain error"):
        super().__init__(message)
        self.message = message
