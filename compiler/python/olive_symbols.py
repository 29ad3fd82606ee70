#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Tuple

from olive_types import Type


class EntityKind(Enum):
    VARIABLE = auto()
    PARAM = auto()
    FUNCTION = auto()


@dataclass(eq=False)
class Entity:
    """
    The compile-time record for a declared name.

    Entities compare and hash by identity: two declarations sharing a source
    name are distinct entities. For functions, `type` is the result type.
    """
    name: str
    kind: EntityKind
    type: Type
    is_mutable: bool = False
    param_types: Tuple[Type, ...] = field(default_factory=tuple)
    is_builtin: bool = False

    @property
    def is_function(self) -> bool:
        return self.kind is EntityKind.FUNCTION

    @property
    def arity(self) -> int:
        return len(self.param_types)


def make_variable(name: str, typ: Type, *, is_mutable: bool) -> Entity:
    return Entity(name=name, kind=EntityKind.VARIABLE, type=typ, is_mutable=is_mutable)


def make_param(name: str, typ: Type) -> Entity:
    return Entity(name=name, kind=EntityKind.PARAM, type=typ)


def make_function(name: str, param_types: Tuple[Type, ...], result: Type, *, is_builtin: bool = False) -> Entity:
    return Entity(
        name=name,
        kind=EntityKind.FUNCTION,
        type=result,
        param_types=tuple(param_types),
        is_builtin=is_builtin,
    )
