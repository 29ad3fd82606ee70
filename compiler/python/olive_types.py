#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import Dict, Optional

from olive_diagnostics import TypeMismatchError

# ===========================================
# The semantic type registry for Olive.
# ===========================================

OLIVE_TYPE_NAMES = (
    "bool", "int", "float", "string", "none",
    "tuple", "matrix", "dictionary", "set", "templateliteral",
)


@dataclass(frozen=True)
class Type:
    """
    A nominal type tag. There is exactly one instance per name.
    """
    name: str

    def is_compatible_with(self, other: "Type") -> bool:
        # Nominal identity; no implicit widening.
        return self is other

    def must_be(self, target: "Type", message: str, node: Optional[object] = None) -> None:
        if not self.is_compatible_with(target):
            raise TypeMismatchError(message, node=node)

    def must_be_mutually_compatible(self, other: "Type", message: str, node: Optional[object] = None) -> None:
        if not (self.is_compatible_with(other) or other.is_compatible_with(self)):
            raise TypeMismatchError(message, node=node)


_TYPE_CACHE: Dict[str, Type] = {name: Type(name) for name in OLIVE_TYPE_NAMES}

BOOL = _TYPE_CACHE["bool"]
INT = _TYPE_CACHE["int"]
FLOAT = _TYPE_CACHE["float"]
STRING = _TYPE_CACHE["string"]
NONE = _TYPE_CACHE["none"]
TUPLE = _TYPE_CACHE["tuple"]
MATRIX = _TYPE_CACHE["matrix"]
DICTIONARY = _TYPE_CACHE["dictionary"]
SET = _TYPE_CACHE["set"]
TEMPLATE_LITERAL = _TYPE_CACHE["templateliteral"]


def for_name(name: str) -> Optional[Type]:
    """
    Get the canonical Type for a registered name, or None.
    """
    return _TYPE_CACHE.get(name)


def format_type(t: Optional[Type]) -> str:
    if t is None:
        return "<none>"
    return t.name
