"""AnalysisError — the single failure type raised by the analysis core."""
from enum import Enum
from typing import Optional

from turnover.constants import (
    MSG_ERR_CREDENTIAL_MISSING,
    MSG_ERR_INCOMPLETE_RESPONSE,
    MSG_ERR_INVALID_CREDENTIAL,
    MSG_ERR_INVALID_RESPONSE,
    MSG_ERR_INVALID_RESPONSE_FORMAT,
    MSG_ERR_INVALID_URL,
    MSG_ERR_NETWORK,
    MSG_ERR_RATE_LIMITED,
    MSG_ERR_SERVER_ERROR,
    MSG_ERR_UNKNOWN,
)


class ErrorKind(str, Enum):
    CREDENTIAL_MISSING = "credential_missing"
    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    INVALID_CREDENTIAL = "invalid_credential"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    INVALID_RESPONSE_FORMAT = "invalid_response_format"
    INCOMPLETE_RESPONSE = "incomplete_response"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"

    @property
    def needs_settings(self) -> bool:
        """True when the user has to fix configuration rather than retry."""
        return self in _SETTINGS_KINDS

    @property
    def is_transient(self) -> bool:
        return self in _TRANSIENT_KINDS


_SETTINGS_KINDS = frozenset(
    {ErrorKind.CREDENTIAL_MISSING, ErrorKind.INVALID_CREDENTIAL, ErrorKind.INVALID_URL}
)
_TRANSIENT_KINDS = frozenset(
    {
        ErrorKind.NETWORK_ERROR,
        ErrorKind.INVALID_RESPONSE,
        ErrorKind.RATE_LIMITED,
        ErrorKind.SERVER_ERROR,
    }
)

_MESSAGES = {
    ErrorKind.CREDENTIAL_MISSING: MSG_ERR_CREDENTIAL_MISSING,
    ErrorKind.INVALID_URL: MSG_ERR_INVALID_URL,
    ErrorKind.INVALID_RESPONSE: MSG_ERR_INVALID_RESPONSE,
    ErrorKind.INVALID_CREDENTIAL: MSG_ERR_INVALID_CREDENTIAL,
    ErrorKind.RATE_LIMITED: MSG_ERR_RATE_LIMITED,
    ErrorKind.INVALID_RESPONSE_FORMAT: MSG_ERR_INVALID_RESPONSE_FORMAT,
    ErrorKind.INCOMPLETE_RESPONSE: MSG_ERR_INCOMPLETE_RESPONSE,
    ErrorKind.NETWORK_ERROR: MSG_ERR_NETWORK,
    ErrorKind.UNKNOWN: MSG_ERR_UNKNOWN,
}


class AnalysisError(Exception):
    """Raised when an image cannot be turned into an AnalysisResult."""

    def __init__(self, kind: ErrorKind, status_code: Optional[int] = None) -> None:
        self.kind = kind
        self.status_code = status_code
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        match self.kind:
            case ErrorKind.SERVER_ERROR:
                return MSG_ERR_SERVER_ERROR % self.status_code
            case kind:
                return _MESSAGES[kind]

    def __repr__(self) -> str:
        match self.status_code:
            case None:
                return f"AnalysisError({self.kind.value})"
            case code:
                return f"AnalysisError({self.kind.value}, status_code={code})"
