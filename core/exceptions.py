"""
Custom exceptions for the dynamic field engine.

This module defines application-specific exceptions that carry a message
plus a context dictionary describing where the failure happened.
"""

from typing import Optional, Any


class DynamicFieldError(Exception):
    """Base exception for all dynamic field engine errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class ConfigurationError(DynamicFieldError):
    """Raised when settings cannot be loaded, saved or validated."""

    def __init__(self, message: str, config_file: Optional[str] = None, field: Optional[str] = None):
        context = {}
        if config_file:
            context['config_file'] = config_file
        if field:
            context['field'] = field
        super().__init__(message, context)


class DatabaseError(DynamicFieldError):
    """Raised when there are database connection or query issues."""

    def __init__(self, message: str, query: Optional[str] = None, params: Optional[list] = None):
        context = {}
        if query:
            context['query'] = query
        if params:
            context['params'] = str(params)
        super().__init__(message, context)


class DataSourceError(DatabaseError):
    """Raised by a data source when a read-only query cannot be executed."""


class ValidationError(DynamicFieldError):
    """Raised when a value fails validation."""

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None):
        context = {}
        if field:
            context['field'] = field
        if value is not None:
            context['value'] = str(value)
        super().__init__(message, context)


class SecurityError(DynamicFieldError):
    """Raised when a query is refused by the safety check."""

    def __init__(self, message: str, security_check: Optional[str] = None, input_value: Optional[str] = None):
        context = {}
        if security_check:
            context['security_check'] = security_check
        if input_value:
            context['input_value'] = input_value
        super().__init__(message, context)
