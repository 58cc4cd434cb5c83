# ==============================================
# Outcome (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of response classification.
#
# ENUMS:
# ------
# - OutcomeKind(Enum): SUCCESS, CLIENT_ERROR, REQUEST_ERROR, SYSTEM_ERROR
# - ErrorClassification(Enum): REQUEST_ERROR, SYSTEM_ERROR
#     As reported by the remote API in each error entry.
#
# CLASSES:
# --------
# - ErrorEntry (dataclass)
#     One entry of an "Errors" field.
#     - long_message: str
#     - code: scalar | None
#     - classification: ErrorClassification
#
# - ResponseOutcome (dataclass)
#     - kind: OutcomeKind
#     - data: normalized envelope content (None for client errors)
#     - message: composite failure message ("" on success)
#     - errors: list[ErrorEntry]
#     - envelope_key: the key the payload was read from
#
#     Methods:
#     --------
#     - ok (property)      → kind is SUCCESS
#     - error (property)   → matching ApiError subclass, or None
#     - unwrap()           → data, or raise error
#     - to_dict()          → JSON-serializable summary
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import ApiClientError, ApiError, ApiRequestError, ApiSystemError
from ..normalization.element import ElementKind, kind_of


class OutcomeKind(Enum):
    """
    Result of classifying one response.

    - SUCCESS: Ack was exactly "Success"
    - CLIENT_ERROR: the response envelope was missing
    - REQUEST_ERROR: business-level failure reported by the API
    - SYSTEM_ERROR: internal failure reported by the API
    """
    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    REQUEST_ERROR = "request_error"
    SYSTEM_ERROR = "system_error"


class ErrorClassification(Enum):
    REQUEST_ERROR = "RequestError"
    SYSTEM_ERROR = "SystemError"


_ERROR_TYPES = {
    OutcomeKind.CLIENT_ERROR: ApiClientError,
    OutcomeKind.REQUEST_ERROR: ApiRequestError,
    OutcomeKind.SYSTEM_ERROR: ApiSystemError,
}


@dataclass
class ErrorEntry:
    """
    A single error reported by the API, already flattened.
    """
    long_message: str
    code: Optional[Any] = None
    classification: ErrorClassification = ErrorClassification.REQUEST_ERROR

    UNKNOWN_MESSAGE = "Unknown error"

    @property
    def is_system_error(self) -> bool:
        return self.classification is ErrorClassification.SYSTEM_ERROR

    def describe(self) -> str:
        """
        Render as ``"<LongMessage> (<ErrorCode>)"``, dropping the code
        when there is none.
        """
        if self.code is None or self.code == "":
            return self.long_message
        return f"{self.long_message} ({self.code})"

    @classmethod
    def from_element(cls, element: Any) -> "ErrorEntry":
        if kind_of(element) is not ElementKind.MAPPING:
            return cls(long_message=str(element))

        message = element.get("LongMessage")
        if message is None or message == "":
            message = element.get("ShortMessage")
        if message is None or message == "":
            message = cls.UNKNOWN_MESSAGE

        classification = ErrorClassification.REQUEST_ERROR
        if element.get("ErrorClassification") == ErrorClassification.SYSTEM_ERROR.value:
            classification = ErrorClassification.SYSTEM_ERROR

        return cls(
            long_message=str(message),
            code=element.get("ErrorCode"),
            classification=classification,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "long_message": self.long_message,
            "code": self.code,
            "classification": self.classification.value,
        }


@dataclass
class ResponseOutcome:
    kind: OutcomeKind
    data: Any = None
    message: str = ""
    errors: List[ErrorEntry] = field(default_factory=list)
    envelope_key: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def error(self) -> Optional[ApiError]:
        """
        Build the exception matching this outcome.

        Returns:
            ApiClientError / ApiRequestError / ApiSystemError, or None on success
        """
        error_type = _ERROR_TYPES.get(self.kind)
        if error_type is None:
            return None
        return error_type(self.message, self.data)

    def unwrap(self) -> Any:
        error = self.error
        if error is not None:
            raise error
        return self.data

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.kind.value,
            "envelope_key": self.envelope_key,
            "message": self.message,
            "errors": [entry.to_dict() for entry in self.errors],
            "data": self.data,
        }
