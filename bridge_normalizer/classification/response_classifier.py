# ==============================================
# ResponseClassifier
# ==============================================
#
# PURPOSE:
#   Top-level driver. Takes a whole bridged response, normalizes it,
#   finds the response envelope and decides whether the call
#   succeeded.
#
# STEPS (classify):
# -----------------
#   1. Flatten the whole payload (response_max_depth, default 5)
#   2. Envelope key = first key matching /[A-Za-z]+Response$/,
#      falling back to "<op_type>Response"
#   3. Envelope missing → CLIENT_ERROR ("Response missing <key> element")
#   4. Normalize "ack" -> "Ack" and re-flatten Ack with the default depth
#   5. Ack == "Success" → SUCCESS. Anything else, "Warning" included,
#      is a failure.
#   6. Failure message, first match wins:
#        - "Errors"       → "<LongMessage> (<ErrorCode>)", joined by ", "
#                           SYSTEM_ERROR if any entry says SystemError
#        - "errorMessage" → flattened; structures are pretty-printed
#        - otherwise      → "Bad ack code: <Ack>"
#
#   The flattened envelope content is returned on failure too, so
#   callers keep the diagnostic context.
#
# ==============================================

import logging
import pprint
import re
from typing import Any, List, Optional, Tuple

from ..config import AppConfig, get_config, load_exception_table
from ..normalization.array_keys import ArrayKeyPolicy
from ..normalization.context import RequestContext
from ..normalization.element import is_mapping, is_sequence
from ..normalization.flatten import FlattenEngine
from .outcome import ErrorEntry, OutcomeKind, ResponseOutcome

logger = logging.getLogger(__name__)


class ResponseClassifier:
    """
    Normalizes a bridged API response and classifies it as success or
    one of the error kinds.
    """

    ENVELOPE_KEY_PATTERN = re.compile(r'[A-Za-z]+Response$')
    SUCCESS_ACK = "Success"
    DEFAULT_RESPONSE_MAX_DEPTH = 5

    def __init__(self, engine: Optional[FlattenEngine] = None,
                 response_max_depth: int = DEFAULT_RESPONSE_MAX_DEPTH):
        self.engine = engine or FlattenEngine()
        self.response_max_depth = response_max_depth

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "ResponseClassifier":
        """
        Wire a classifier from application configuration.

        Args:
            config: Application configuration. If None, loads from environment.

        Returns:
            ResponseClassifier using the configured depths and array key table
        """
        config = config or get_config()
        engine = FlattenEngine(
            ArrayKeyPolicy(load_exception_table(config)),
            default_max_depth=config.flatten.default_max_depth,
        )
        return cls(engine, response_max_depth=config.flatten.response_max_depth)

    def classify(self, payload: Any, context: RequestContext) -> ResponseOutcome:
        """
        Classify one response.

        Args:
            payload: Whole response as produced by the XML -> JSON bridge
            context: Endpoint the response came from

        Returns:
            ResponseOutcome, never raises for a bad response
        """
        flattened = self.engine.flatten(payload, self.response_max_depth, context)

        envelope_key = self.find_envelope_key(flattened, context)
        logger.debug("looking for response key %s", envelope_key)

        if not is_mapping(flattened) or envelope_key not in flattened:
            return ResponseOutcome(
                kind=OutcomeKind.CLIENT_ERROR,
                message=f"Response missing {envelope_key} element",
                envelope_key=envelope_key,
            )

        data = self._normalize_ack(flattened[envelope_key], context)
        ack = data.get("Ack") if is_mapping(data) else None

        if ack == self.SUCCESS_ACK:
            return ResponseOutcome(kind=OutcomeKind.SUCCESS, data=data, envelope_key=envelope_key)

        message, entries = self._describe_failure(data, ack, context)
        kind = OutcomeKind.REQUEST_ERROR
        if any(entry.is_system_error for entry in entries):
            kind = OutcomeKind.SYSTEM_ERROR

        logger.debug("response error %s (ack=%r): %s", kind.value, ack, message)

        return ResponseOutcome(
            kind=kind,
            data=data,
            message=message,
            errors=entries,
            envelope_key=envelope_key,
        )

    def parse(self, payload: Any, context: RequestContext) -> Any:
        """
        Like classify(), but returns the envelope content on success and
        raises ApiClientError / ApiRequestError / ApiSystemError otherwise.
        """
        return self.classify(payload, context).unwrap()

    @classmethod
    def find_envelope_key(cls, payload: Any, context: RequestContext) -> str:
        if is_mapping(payload):
            for key in payload:
                if isinstance(key, str) and cls.ENVELOPE_KEY_PATTERN.search(key):
                    return key
        return context.envelope_key

    def _normalize_ack(self, data: Any, context: RequestContext) -> Any:
        if not is_mapping(data):
            return data

        data = dict(data)
        if "ack" in data:
            data["Ack"] = data.pop("ack")
        if "Ack" in data:
            data["Ack"] = self.engine.flatten(data["Ack"], None, context)
        return data

    def _describe_failure(self, data: Any, ack: Any,
                          context: RequestContext) -> Tuple[str, List[ErrorEntry]]:
        entries: List[ErrorEntry] = []
        message = ""

        if is_mapping(data) and "Errors" in data:
            errors = data["Errors"]
            if not is_sequence(errors):
                errors = [errors]
            entries = [
                ErrorEntry.from_element(self.engine.flatten(error, None, context))
                for error in errors
            ]
            message = ", ".join(entry.describe() for entry in entries)

        elif is_mapping(data) and "errorMessage" in data:
            error_message = self.engine.flatten(data["errorMessage"], None, context)
            if is_mapping(error_message) or is_sequence(error_message):
                message = pprint.pformat(error_message, depth=4)
            elif error_message:
                message = str(error_message)

        if not message:
            message = f"Bad ack code: {ack}"

        return message, entries
