"""Custom exception hierarchy for pypassport.

Every exception carries a :class:`ErrorKind` tag in ``kind`` so callers
can dispatch on the failure category without an ``isinstance`` ladder::

    try:
        await client.get("settings")
    except PassportError as exc:
        match exc.kind:
            case ErrorKind.NOT_LOGGED_IN:
                ...
            case ErrorKind.TRANSPORT:
                ...
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Failure categories surfaced by the library."""

    GENERIC = "generic"
    CONFIG = "config"
    STORAGE = "storage"
    NOT_LOGGED_IN = "not_logged_in"
    MISSING_LANDING_CREDENTIAL = "missing_landing_credential"
    DUPLICATE_KEY = "duplicate_key"
    MALFORMED_ENCODING = "malformed_encoding"
    SERVICE_RESPONSE = "service_response"
    TRANSPORT = "transport"
    REMOTE_OPERATION_FAILED = "remote_operation_failed"


class PassportError(Exception):
    """Base exception for all pypassport errors."""

    kind: ErrorKind = ErrorKind.GENERIC


class PassportConfigError(PassportError):
    """Invalid or missing configuration."""

    kind = ErrorKind.CONFIG


class PassportStorageError(PassportError):
    """Credential storage could not be read or written."""

    kind = ErrorKind.STORAGE


class PassportNotLoggedInError(PassportError):
    """No durable credential is present but the operation requires one."""

    kind = ErrorKind.NOT_LOGGED_IN


class PassportMissingLandingCredentialError(PassportError):
    """Landing capture was attempted on a URL without a ``key`` parameter."""

    kind = ErrorKind.MISSING_LANDING_CREDENTIAL


class PassportDuplicateKeyError(PassportError):
    """``add()`` was called for a name already present in the local cache.

    This is a local-only check: a name that exists remotely but has not
    been fetched yet will not trigger it.
    """

    kind = ErrorKind.DUPLICATE_KEY

    def __init__(self, message: str, *, name: str = "") -> None:
        self.name = name
        super().__init__(message)


class PassportMalformedEncodingError(PassportError):
    """A wire value is not a valid marker-prefixed hex encoding of JSON."""

    kind = ErrorKind.MALFORMED_ENCODING


class PassportServiceResponseError(PassportError):
    """The service answered with a non-success HTTP status."""

    kind = ErrorKind.SERVICE_RESPONSE

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        reason: str = "",
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.endpoint = endpoint
        super().__init__(message)


class PassportTransportError(PassportError):
    """Network-level failure before a usable response was obtained.

    Covers unreachable hosts, timeouts, aborted connections and bodies
    that are not a JSON object.
    """

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class PassportRemoteOperationFailedError(PassportError):
    """The service answered 200 but reported an ``error`` in the body."""

    kind = ErrorKind.REMOTE_OPERATION_FAILED

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)
