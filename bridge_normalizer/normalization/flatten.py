# ==============================================
# FlattenEngine
# ==============================================
#
# PURPOSE:
#   Undo the damage done by the XML -> JSON bridge, which turns every
#   element into a list and every value into a string.
#
#   flatten() walks a bridged value recursively (bounded by max_depth)
#   and, at every level:
#
#     1. Collapses a one-element list into its sole element
#     2. Rewrites {"@key": K, "__value__": V} into {K: V}
#     3. For each key of a mapping:
#          a. "<Noun>Array"           → PluralArrayExpander ("<Noun>s")
#          b. /Amount|Cost|Price/     → AmountStructureConverter
#          c. ArrayKeyPolicy says yes → recurse into the child
#             ArrayKeyPolicy says no  → keep the list, recurse into members
#     4. Recurses into the members of any remaining list
#     5. Coerces string scalars to numbers / booleans (always, even
#        past max_depth)
#
# NOTE:
#   This is heuristic. A response with a single value can look
#   different from one with several, which is what the exception
#   table in ArrayKeyPolicy is there to mitigate.
#
#   Step 3c can flatten grandchildren before a parent-level rule sees
#   them, so every transform used here must be idempotent.
#
# ==============================================

import logging
import re
from typing import Any, Dict, Optional, Set

from .amount import AmountStructureConverter
from .array_keys import ArrayKeyPolicy
from .context import RequestContext
from .element import ElementKind, kind_of
from .plural_array import PluralArrayExpander
from .type_coercer import TypeCoercer
from .value_pair import ValuePairNormalizer

logger = logging.getLogger(__name__)


class FlattenEngine:
    """
    Bounded recursive normalizer for XML-bridged JSON.

    The engine holds no per-call state; the same instance can be shared
    by any number of callers.
    """

    DEFAULT_MAX_DEPTH = 10
    AMOUNT_KEY_PATTERN = re.compile(r'Amount|Cost|Price')

    def __init__(self, policy: Optional[ArrayKeyPolicy] = None,
                 default_max_depth: int = DEFAULT_MAX_DEPTH):
        self.policy = policy or ArrayKeyPolicy()
        self.default_max_depth = default_max_depth if default_max_depth >= 1 else self.DEFAULT_MAX_DEPTH
        self._plural_expander = PluralArrayExpander(self.flatten)

    def flatten(self, value: Any, max_depth: Optional[int] = None,
                context: Optional[RequestContext] = None, depth: int = 0) -> Any:
        """
        Normalize a bridged value.

        Args:
            value: Any JSON-like value
            max_depth: Levels to restructure below this call; None or < 1
                means the engine default
            context: Endpoint the value came from (for array key exceptions)
            depth: Current recursion level, 0 for external callers

        Returns:
            A new, normalized value. The input is not modified.
        """
        if max_depth is None or max_depth < 1:
            max_depth = self.default_max_depth

        if depth == 0:
            logger.debug("flattening (max_depth=%s, context=%s)", max_depth, context)

        if depth <= max_depth:
            value = self._restructure(value, max_depth, context, depth)

        return TypeCoercer.coerce(value)

    def _restructure(self, value: Any, max_depth: int,
                     context: Optional[RequestContext], depth: int) -> Any:
        # collapse 1-item lists, regardless of the key they sit under
        if kind_of(value) is ElementKind.SEQUENCE and len(value) == 1:
            value = value[0]

        value = ValuePairNormalizer.normalize(value)

        kind = kind_of(value)
        if kind is ElementKind.MAPPING:
            return self._flatten_mapping(value, max_depth, context, depth)
        if kind is ElementKind.SEQUENCE:
            return [self.flatten(item, max_depth, context, depth + 1) for item in value]
        return value

    def _flatten_mapping(self, value: Dict[str, Any], max_depth: int,
                         context: Optional[RequestContext], depth: int) -> Dict[str, Any]:
        result = dict(value)
        expanded_keys: Set[str] = set()

        for key in list(value.keys()):
            if key in expanded_keys:
                continue

            if PluralArrayExpander.matches(key):
                _, new_key = PluralArrayExpander.split_key(key)
                result = self._plural_expander.expand(result, key, context)
                expanded_keys.add(new_key)
                continue

            child = result[key]
            if self.AMOUNT_KEY_PATTERN.search(key):
                child = AmountStructureConverter.convert(child)

            if self.policy.can_flatten(key, context):
                child = self.flatten(child, max_depth, context, depth + 1)
            elif kind_of(child) is ElementKind.SEQUENCE:
                # the list itself stays, its members are still normalized
                child = [self.flatten(item, max_depth, context, depth + 1) for item in child]

            result[key] = child

        return result
