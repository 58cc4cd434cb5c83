# ==============================================
# ValuePairNormalizer
# ==============================================
#
# PURPOSE:
#   The XML bridge represents some name/value attributes as a
#   two-field object:
#
#     { "@key": "Color", "__value__": "Red" }
#
#   Consumers want a direct key-value mapping instead:
#
#     { "Color": "Red" }
#
# RULES:
# ------
#   1. Exactly two entries
#   2. First key starts with "@"
#   3. Second key is literally "__value__"
#   4. The first entry's value must be a scalar (it becomes the new key)
#
#   Rewriting is idempotent: the result has a single entry, so it can
#   never match again.
#
# ==============================================

import logging
import re
from typing import Any

from .element import ElementKind, kind_of

logger = logging.getLogger(__name__)


class ValuePairNormalizer:
    """Detects and rewrites the ``{@key, __value__}`` attribute idiom."""

    ATTRIBUTE_KEY_PATTERN = re.compile(r'^@')
    VALUE_KEY = "__value__"

    @classmethod
    def is_value_pair(cls, value: Any) -> bool:
        if kind_of(value) is not ElementKind.MAPPING or len(value) != 2:
            return False

        first_key, second_key = list(value.keys())
        if not cls.ATTRIBUTE_KEY_PATTERN.match(str(first_key)) or second_key != cls.VALUE_KEY:
            return False

        # the attribute value becomes a dict key, so it has to be a scalar
        return kind_of(value[first_key]) is ElementKind.SCALAR

    @classmethod
    def normalize(cls, value: Any) -> Any:
        """
        Rewrite a value pair into a single-entry mapping.

        Args:
            value: Any bridged element

        Returns:
            ``{attribute_value: value}`` for a value pair, otherwise the
            input unchanged
        """
        if not cls.is_value_pair(value):
            return value

        name, pair_value = list(value.values())
        if not isinstance(name, str):
            name = str(name)

        logger.debug("converting key-value pair %r", value)
        return {name: pair_value}
