"""pypassport - Async Python client for the Passport authentication service."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pypassport")
except PackageNotFoundError:
    __version__ = "0+local"
from pypassport._codec import decode, encode, is_wire_value
from pypassport.client import PassportClient
from pypassport.config import PassportConfig
from pypassport.data import AccountDataClient
from pypassport.exceptions import (
    ErrorKind,
    PassportConfigError,
    PassportDuplicateKeyError,
    PassportError,
    PassportMalformedEncodingError,
    PassportMissingLandingCredentialError,
    PassportNotLoggedInError,
    PassportRemoteOperationFailedError,
    PassportServiceResponseError,
    PassportStorageError,
    PassportTransportError,
)
from pypassport.result import Err, Ok, attempt
from pypassport.session import SessionManager, SessionState
from pypassport.storage import CredentialStore, FileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "__version__",
    "AccountDataClient",
    "CredentialStore",
    "Err",
    "ErrorKind",
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "Ok",
    "PassportClient",
    "PassportConfig",
    "PassportConfigError",
    "PassportDuplicateKeyError",
    "PassportError",
    "PassportMalformedEncodingError",
    "PassportMissingLandingCredentialError",
    "PassportNotLoggedInError",
    "PassportRemoteOperationFailedError",
    "PassportServiceResponseError",
    "PassportStorageError",
    "PassportTransportError",
    "SessionManager",
    "SessionState",
    "attempt",
    "decode",
    "encode",
    "is_wire_value",
]
