"""Error types for VOD service calls."""

from __future__ import annotations

from enum import Enum

CREDENTIAL_ERROR_CODES = frozenset({"SignatureDoesNotMatch", "InvalidCredential"})


class ErrorKind(str, Enum):
    """Where a failed VOD call broke down."""

    TRANSPORT = "transport"
    SERVICE = "service"
    CREDENTIAL = "credential"


class VodError(Exception):
    """
    A failed call to the VOD service.

    Service and credential errors use the remote error code as their message,
    transport errors keep the message of the underlying exception.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        code: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.code = code
        self.cause = cause

    @classmethod
    def transport(cls, exc: BaseException) -> VodError:
        return cls(ErrorKind.TRANSPORT, str(exc) or type(exc).__name__, cause=exc)

    @classmethod
    def from_code(cls, code: str) -> VodError:
        kind = ErrorKind.CREDENTIAL if code in CREDENTIAL_ERROR_CODES else ErrorKind.SERVICE
        return cls(kind, code, code=code)

    @property
    def is_credential_error(self) -> bool:
        return self.kind is ErrorKind.CREDENTIAL
