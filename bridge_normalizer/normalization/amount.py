# ==============================================
# AmountStructureConverter
# ==============================================
#
# PURPOSE:
#   Currency amounts arrive from the XML bridge as text content plus
#   attributes:
#
#     { "_": "12.34", "$": { "currencyID": "USD" } }
#
#   This converter turns them into a flat mapping:
#
#     { "amount": 12.34, "currencyID": "USD" }
#
# RULES:
# ------
#   - "amount" is the numeric parse of the "_" text. Text that is not a
#     number is kept as the original string.
#   - "$" may be a mapping or a sequence of mappings; every attribute
#     is merged in at the top level.
#   - Any other sibling entries are kept.
#   - Sequences are converted element by element.
#   - Anything without the "_" / "$" shape is returned unchanged, which
#     makes the conversion idempotent.
#
# ==============================================

from typing import Any, Dict

from .element import ElementKind, kind_of
from .type_coercer import TypeCoercer


class AmountStructureConverter:
    TEXT_KEY = "_"
    ATTRIBUTES_KEY = "$"
    AMOUNT_KEY = "amount"

    @classmethod
    def is_amount_structure(cls, value: Any) -> bool:
        return (
            kind_of(value) is ElementKind.MAPPING
            and cls.TEXT_KEY in value
            and cls.ATTRIBUTES_KEY in value
        )

    @classmethod
    def convert(cls, value: Any) -> Any:
        kind = kind_of(value)

        if kind is ElementKind.SEQUENCE:
            return [cls.convert(item) for item in value]

        if not cls.is_amount_structure(value):
            return value

        converted: Dict[str, Any] = {
            key: child for key, child in value.items()
            if key not in (cls.TEXT_KEY, cls.ATTRIBUTES_KEY)
        }
        converted[cls.AMOUNT_KEY] = cls._parse_amount(value[cls.TEXT_KEY])
        converted.update(cls._collect_attributes(value[cls.ATTRIBUTES_KEY]))
        return converted

    @classmethod
    def _parse_amount(cls, text: Any) -> Any:
        if isinstance(text, str):
            number = TypeCoercer.parse_number(text)
            return text if number is None else number
        return text

    @classmethod
    def _collect_attributes(cls, attributes: Any) -> Dict[str, Any]:
        kind = kind_of(attributes)
        if kind is ElementKind.MAPPING:
            return dict(attributes)

        merged: Dict[str, Any] = {}
        if kind is ElementKind.SEQUENCE:
            for item in attributes:
                if kind_of(item) is ElementKind.MAPPING:
                    merged.update(item)
        return merged
