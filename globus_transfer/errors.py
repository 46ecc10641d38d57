"""Exceptions raised by the transfer client."""

from typing import Any, Iterable, Optional


class GlobusClientError(Exception):
    """Base exception for transfer client errors."""

    pass


class ConfigError(GlobusClientError):
    """Configuration file missing or malformed."""

    pass


class TransportError(GlobusClientError):
    """The request never produced a usable response.

    Raised for connection failures, timeouts and non-2xx responses whose
    body is not JSON. Domain failures reported through a JSON ``code``
    field are returned to the caller instead.
    """

    def __init__(
        self,
        message: str,
        url: str = None,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code
        self.body = body


class InvalidOptionsError(GlobusClientError):
    """Options are missing required fields, carry unknown fields or have bad values."""

    def __init__(
        self,
        operation: str,
        missing: Iterable[str] = (),
        unknown: Iterable[str] = (),
        invalid: Iterable[str] = (),
    ):
        self.operation = operation
        self.missing = list(missing)
        self.unknown = list(unknown)
        self.invalid = list(invalid)
        parts = []
        if self.missing:
            parts.append(f"missing required option(s): {', '.join(self.missing)}")
        if self.unknown:
            parts.append(f"unknown option(s): {', '.join(self.unknown)}")
        if self.invalid:
            parts.append(f"invalid option(s): {'; '.join(self.invalid)}")
        super().__init__(f"{operation}: {'; '.join(parts) or 'invalid options'}")


class UnknownOperationError(GlobusClientError, ValueError):
    """No operation with this name exists."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"unknown operation: {operation!r}")


class OperationNotImplementedError(GlobusClientError, NotImplementedError):
    """Operation is declared but not supported yet."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} is not implemented")
