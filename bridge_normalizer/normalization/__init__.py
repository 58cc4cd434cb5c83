# ==============================================
# NORMALIZATION
# ==============================================
#
# This package turns JSON produced by an XML -> JSON bridge into a
# canonical shape: single-value lists collapsed, attribute idioms
# rewritten, stringified scalars turned back into native types.
#
# Modules:
# --------
# - element.py          → ElementKind (mapping / sequence / scalar)
# - type_coercer.py     → "42" -> 42, "true" -> True
# - value_pair.py       → {"@key": K, "__value__": V} -> {K: V}
# - amount.py           → {"_": "1.5", "$": {...}} -> {"amount": 1.5, ...}
# - context.py          → RequestContext (service name + op type)
# - array_keys.py       → Which keys must stay lists
# - known_array_keys.py → Bundled per-endpoint array keys
# - plural_array.py     → "OrderArray": [{"Order": [...]}] -> "Orders": [...]
# - flatten.py          → FlattenEngine, ties all of the above together
#
# ==============================================

from .element import ElementKind, kind_of
from .type_coercer import TypeCoercer
from .value_pair import ValuePairNormalizer
from .amount import AmountStructureConverter
from .context import RequestContext
from .array_keys import ArrayKeyExceptionTable, ArrayKeyPolicy
from .known_array_keys import DEFAULT_ARRAY_KEYS
from .plural_array import PluralArrayExpander
from .flatten import FlattenEngine

__all__ = [
    "ElementKind",
    "kind_of",
    "TypeCoercer",
    "ValuePairNormalizer",
    "AmountStructureConverter",
    "RequestContext",
    "ArrayKeyExceptionTable",
    "ArrayKeyPolicy",
    "DEFAULT_ARRAY_KEYS",
    "PluralArrayExpander",
    "FlattenEngine",
]
