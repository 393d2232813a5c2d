"""
Custom exceptions for the application.
"""


class SnippetDojoException(Exception):
    """Base exception for all Snippet Dojo application exceptions."""
    pass


class ValidationError(SnippetDojoException):
    """Raised when validation fails."""
    pass


class NotFoundError(SnippetDojoException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(SnippetDojoException):
    """Raised when there's a conflict (e.g., deleting a category still in use)."""
    pass


class UpstreamError(SnippetDojoException):
    """Raised when an external collaborator (e.g., the LLM API) fails."""
    pass
