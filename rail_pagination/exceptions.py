"""
Custom exceptions for pagination resolvers.

Build-time errors are raised by ``prepare_pagination_resolver`` and are fatal
to construction. ``PaginationError`` is the only error raised while a
pagination query runs; failures of the delegated count or list operations
propagate unchanged.
"""

from typing import Optional


class PaginationResolverError(Exception):
    """Base exception for pagination resolver errors."""

    def __init__(self, message: str, type_name: Optional[str] = None):
        self.type_name = type_name
        super().__init__(message)


class InvalidArgument(PaginationResolverError):
    """Raised when the type descriptor does not expose named operations."""

    pass


class MissingOption(PaginationResolverError):
    """Raised when a required resolver option is empty or absent."""

    def __init__(
        self,
        message: str,
        option_name: Optional[str] = None,
        type_name: Optional[str] = None,
    ):
        self.option_name = option_name
        super().__init__(message, type_name)


class UnknownOperation(PaginationResolverError):
    """Raised when a named operation does not exist on the type descriptor."""

    def __init__(
        self,
        message: str,
        operation_name: Optional[str] = None,
        type_name: Optional[str] = None,
    ):
        self.operation_name = operation_name
        super().__init__(message, type_name)


class PaginationError(PaginationResolverError):
    """Raised when pagination parameters are invalid."""

    def __init__(
        self,
        message: str,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ):
        self.page = page
        self.per_page = per_page
        super().__init__(message)
