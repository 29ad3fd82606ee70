"""
Builtin library contract.

The root scope and the JavaScript generator both read this table, so the set
of builtin names, their signatures, and their target bodies stay in agreement.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import Tuple

from olive_types import Type, STRING, NONE, FLOAT


@dataclass(frozen=True)
class BuiltinFunction:
    name: str
    param_types: Tuple[Type, ...]
    result: Type
    js_params: Tuple[str, ...]
    js_body: str


BUILTIN_FUNCTIONS: Tuple[BuiltinFunction, ...] = (
    BuiltinFunction("print", (STRING,), NONE, ("_",), "console.log(_);"),
    BuiltinFunction("sqrt", (FLOAT,), FLOAT, ("_",), "return Math.sqrt(_);"),
)
