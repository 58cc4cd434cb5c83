# ==============================================
# ArrayKeyExceptionTable / ArrayKeyPolicy
# ==============================================
#
# PURPOSE:
#   The XML bridge turns every element into a list, so the flatten
#   engine collapses single-value lists by default. That is wrong for
#   keys that are *really* lists and merely happen to hold one value
#   in this response. This module decides, key by key, whether a
#   value may be collapsed.
#
# CLASSES:
# --------
# - ArrayKeyExceptionTable
#     Read-only lookup: service name -> op type -> set of key names.
#     Built once from configuration and shared by every call.
#
#     Methods:
#     --------
#     - contains(context, key) -> bool
#     - merged_with(other) -> ArrayKeyExceptionTable
#     - from_json_file(path) -> ArrayKeyExceptionTable  (classmethod)
#     - to_dict() -> dict
#
# - ArrayKeyPolicy
#     - can_flatten(key, context) -> bool
#
# RULES (can_flatten):
# --------------------
#   1. "*Array" / "*List" keys are assumed to be real arrays → False
#   2. Key listed for (service_name, op_type) in the table     → False
#   3. Otherwise                                                → True
#
# ==============================================

import json
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Union

from .context import RequestContext


class ArrayKeyExceptionTable:
    """
    Immutable per-endpoint list of keys that must remain arrays.
    """

    def __init__(self, entries: Optional[Mapping[str, Mapping[str, Iterable[str]]]] = None):
        """
        Build the table.

        Args:
            entries: ``{service_name: {op_type: [key, ...]}}``

        Raises:
            TypeError: If the structure is not nested mappings of key lists
        """
        table: Dict[str, Mapping[str, FrozenSet[str]]] = {}

        for service_name, operations in (entries or {}).items():
            if not isinstance(operations, Mapping):
                raise TypeError(
                    f"Array keys for service '{service_name}' must be a mapping of op type -> keys"
                )
            ops: Dict[str, FrozenSet[str]] = {}
            for op_type, keys in operations.items():
                if isinstance(keys, str) or not isinstance(keys, Iterable):
                    raise TypeError(
                        f"Array keys for '{service_name}.{op_type}' must be a list of key names"
                    )
                ops[op_type] = frozenset(keys)
            table[service_name] = MappingProxyType(ops)

        self._table = MappingProxyType(table)

    def contains(self, context: Optional[RequestContext], key: str) -> bool:
        if context is None or not context.service_name or not context.op_type:
            return False

        operations = self._table.get(context.service_name)
        if operations is None:
            return False

        keys = operations.get(context.op_type)
        return keys is not None and key in keys

    def merged_with(self, other: "ArrayKeyExceptionTable") -> "ArrayKeyExceptionTable":
        """
        Combine two tables. Keys listed in either table are kept.

        Args:
            other: Table to merge in

        Returns:
            A new table; neither input is modified
        """
        merged = {
            service: {op: set(keys) for op, keys in ops.items()}
            for service, ops in self._table.items()
        }
        for service, ops in other._table.items():
            target = merged.setdefault(service, {})
            for op, keys in ops.items():
                target.setdefault(op, set()).update(keys)
        return ArrayKeyExceptionTable(merged)

    def to_dict(self) -> Dict[str, Dict[str, list]]:
        return {
            service: {op: sorted(keys) for op, keys in ops.items()}
            for service, ops in self._table.items()
        }

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "ArrayKeyExceptionTable":
        """
        Load a table from a JSON file shaped like ``{service: {op: [keys]}}``.

        Args:
            path: Location of the JSON file

        Returns:
            ArrayKeyExceptionTable

        Raises:
            ValueError: If the file does not hold a JSON object
        """
        with open(path, "r") as f:
            data: Any = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Array keys file {path} must contain a JSON object")

        return cls(data)

    def __len__(self) -> int:
        return sum(len(ops) for ops in self._table.values())

    def __repr__(self) -> str:
        return f"ArrayKeyExceptionTable({self.to_dict()!r})"


class ArrayKeyPolicy:
    """Decides whether a key's value may be collapsed from a list to a scalar."""

    ARRAY_SUFFIX_PATTERN = re.compile(r'Array$')
    LIST_SUFFIX_PATTERN = re.compile(r'List$')

    def __init__(self, table: Optional[ArrayKeyExceptionTable] = None):
        self.table = table if table is not None else ArrayKeyExceptionTable()

    def can_flatten(self, key: str, context: Optional[RequestContext] = None) -> bool:
        # '*Array' and '*List' elements are assumed to be arrays
        if self.ARRAY_SUFFIX_PATTERN.search(key) or self.LIST_SUFFIX_PATTERN.search(key):
            return False

        if self.table.contains(context, key):
            return False

        return True
