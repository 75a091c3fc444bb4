from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    EMPTY_RESULT = "empty_result"
    ENCODING = "encoding"


class EnhancementError(Exception):
    """Base class for every failure the session controller knows how to report."""
    kind: ErrorKind = ErrorKind.TRANSPORT


class TransportError(EnhancementError):
    """The model call itself failed (network, auth, quota, bad request)."""
    kind = ErrorKind.TRANSPORT


class EmptyResultError(EnhancementError):
    """The model answered but no candidate part carried inline image data."""
    kind = ErrorKind.EMPTY_RESULT


class EncodingError(EnhancementError):
    """Image bytes could not be read, decoded or encoded."""
    kind = ErrorKind.ENCODING


class ConfigError(ValueError):
    """Raised at startup when required configuration is missing."""


def error_kind(exc: BaseException) -> ErrorKind:
    """
    Classify any exception raised below the controller.

    Exceptions outside the EnhancementError hierarchy count as transport
    failures: they come from the service call or whatever stands in for it.
    """
    if isinstance(exc, EnhancementError):
        return exc.kind
    return ErrorKind.TRANSPORT
