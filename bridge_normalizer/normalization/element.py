# ==============================================
# Element Kinds
# ==============================================
#
# PURPOSE:
#   The XML -> JSON bridge hands us plain Python values. Every
#   transform in this package needs to know which of three shapes
#   a value has before it touches it:
#
#     - MAPPING  → dict   (keys unique, insertion order kept)
#     - SEQUENCE → list / tuple
#     - SCALAR   → str, int, float, bool, None
#
#   kind_of() is the single place that answers that question, so the
#   transforms can branch on an ElementKind instead of scattering
#   isinstance() checks around.
#
# ==============================================

from enum import Enum
from typing import Any


class ElementKind(Enum):
    """Shape of a bridged JSON value."""
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def kind_of(value: Any) -> ElementKind:
    if isinstance(value, dict):
        return ElementKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ElementKind.SEQUENCE
    return ElementKind.SCALAR


def is_mapping(value: Any) -> bool:
    return kind_of(value) is ElementKind.MAPPING


def is_sequence(value: Any) -> bool:
    return kind_of(value) is ElementKind.SEQUENCE
