import math
import re
from typing import Any, Optional, Union


class TypeCoercer:
    """
    Turns stringified scalars coming out of the XML bridge back into
    native numbers and booleans.

    Only ``str`` values are ever inspected. Everything else, containers
    included, is returned as-is; nested values get coerced when the
    flatten engine recurses into them.
    """

    BOOL_TRUE = "true"
    BOOL_FALSE = "false"

    INT_PATTERN = re.compile(r'^[+-]?\d+$', re.ASCII)
    NUMBER_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$', re.ASCII)

    @classmethod
    def coerce(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value

        number = cls.parse_number(value)
        if number is not None:
            return number

        if value == cls.BOOL_TRUE:
            return True
        if value == cls.BOOL_FALSE:
            return False

        return value

    @classmethod
    def parse_number(cls, value: str) -> Optional[Union[int, float]]:
        """
        Parse a string that is entirely numeric.

        Args:
            value: Raw string (surrounding whitespace is ignored)

        Returns:
            int or float on success, None if the string is not a number
        """
        stripped = value.strip()
        if not stripped:
            return None

        if cls.INT_PATTERN.match(stripped):
            return int(stripped)

        if cls.NUMBER_PATTERN.match(stripped):
            number = float(stripped)
            # "1e400" overflows to inf, which JSON cannot carry
            if math.isfinite(number):
                return number

        return None

