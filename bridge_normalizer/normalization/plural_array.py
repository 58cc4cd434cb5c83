# ==============================================
# PluralArrayExpander
# ==============================================
#
# PURPOSE:
#   Some legacy endpoints wrap repeated elements twice:
#
#     "OrderArray": [ { "Order": [ {...}, {...} ] } ]
#
#   After expansion the parent holds a single plural list instead:
#
#     "Orders": [ {...}, {...} ]
#
#   Each item is flattened from scratch with the default max depth.
#
# TOLERATED WRAPPER SHAPES:
# -------------------------
#   - [ { "Order": [...] } ]   → normal bridge output
#   - [ { "Order": {...} } ]   → already collapsed, wrapped back into a list
#   - { "Order": [...] }       → outer list already collapsed
#   - [] / "" / missing "Order" → no items
#
# The parent mapping is never modified; expand() returns a new one
# with the plural key at the position the "*Array" key held.
#
# ==============================================

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from .context import RequestContext
from .element import ElementKind, kind_of

logger = logging.getLogger(__name__)

FlattenFn = Callable[[Any, Optional[int], Optional[RequestContext]], Any]


class PluralArrayExpander:
    """Rewrites ``<Noun>Array: [{<Noun>: [...]}]`` into ``<Noun>s: [...]``."""

    KEY_PATTERN = re.compile(r'^(.+)Array$')

    def __init__(self, flatten: FlattenFn):
        self._flatten = flatten

    @classmethod
    def matches(cls, key: str) -> bool:
        return bool(cls.KEY_PATTERN.match(key))

    @classmethod
    def split_key(cls, key: str) -> Tuple[str, str]:
        """
        Derive the singular wrapper key and the plural result key.

        Args:
            key: e.g. "OrderArray"

        Returns:
            (sub_key, new_key), e.g. ("Order", "Orders")

        Raises:
            ValueError: If the key does not end in "Array"
        """
        match = cls.KEY_PATTERN.match(key)
        if not match:
            raise ValueError(f"'{key}' is not a <Noun>Array key")
        sub_key = match.group(1)
        return sub_key, sub_key + "s"

    def expand(self, parent: Dict[str, Any], key: str,
               context: Optional[RequestContext] = None) -> Dict[str, Any]:
        sub_key, new_key = self.split_key(key)
        items = self.expand_items(parent[key], sub_key, context)

        logger.debug("expanding %s into %s (%d items)", key, new_key, len(items))

        expanded: Dict[str, Any] = {}
        for existing_key, child in parent.items():
            if existing_key == key:
                expanded[new_key] = items
            elif existing_key != new_key:
                expanded[existing_key] = child
        return expanded

    def expand_items(self, wrapper: Any, sub_key: str,
                     context: Optional[RequestContext] = None) -> List[Any]:
        kind = kind_of(wrapper)
        if kind is ElementKind.SEQUENCE:
            wrapper = wrapper[0] if len(wrapper) else None

        if kind_of(wrapper) is not ElementKind.MAPPING or sub_key not in wrapper:
            return []

        items = wrapper[sub_key]
        # might have already been flattened
        if kind_of(items) is not ElementKind.SEQUENCE:
            items = [items]

        return [self._flatten(item, -1, context) for item in items]
