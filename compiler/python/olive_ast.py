#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from olive_symbols import Entity
from olive_types import Type, TUPLE, MATRIX, DICTIONARY, SET


# ==========================
# AST definitions
# ==========================
#
# Nodes are built by the (external) parser without annotations. Analysis
# fills in `type` on expressions and the entity fields on declaring nodes;
# annotations and spans never take part in node equality.


@dataclass
class Span:
    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass
class Node:
    span: Optional[Span] = field(default=None, repr=False, compare=False, kw_only=True)


def _annotation(default=None):
    return field(default=default, repr=False, compare=False, kw_only=True)


# --- expressions ---

@dataclass
class Expr(Node):
    type: Optional[Type] = _annotation()


@dataclass
class BoolLiteral(Expr):
    value: bool


@dataclass
class IntLiteral(Expr):
    value: int


@dataclass
class FloatLiteral(Expr):
    value: float


@dataclass
class StringLiteral(Expr):
    value: str  # unquoted, already unescaped


@dataclass
class NoneLiteral(Expr):
    pass


@dataclass
class VarRef(Expr):
    name: str
    referent: Optional[Entity] = _annotation()


@dataclass
class UnaryOp(Expr):
    op: str
    operand: Expr


@dataclass
class BinaryOp(Expr):
    op: str
    left: Expr
    right: Expr


@dataclass
class CallExpr(Expr):
    callee: VarRef
    args: List[Expr]


# --- composite literals (typed at construction) ---

@dataclass
class TupleLiteral(Expr):
    values: List[Expr]

    def __post_init__(self) -> None:
        self.type = TUPLE


@dataclass
class MatrixLiteral(Expr):
    values: List[Expr]

    def __post_init__(self) -> None:
        self.type = MATRIX


@dataclass
class SetLiteral(Expr):
    values: List[Expr]

    def __post_init__(self) -> None:
        self.type = SET


@dataclass
class KeyValuePair(Node):
    key: Expr
    value: Expr


@dataclass
class DictLiteral(Expr):
    pairs: List[KeyValuePair]

    def __post_init__(self) -> None:
        self.type = DICTIONARY


@dataclass
class Interpolation(Node):
    """An embedded `{expr}` segment of an interpolated string."""
    value: Expr


@dataclass
class StringInterpolation(Expr):
    parts: List[Union[StringLiteral, Interpolation]]


# --- statements ---

@dataclass
class Stmt(Node):
    pass


@dataclass
class Block(Stmt):
    stmts: List[Stmt]


@dataclass
class Binding(Stmt):
    """`a, b := 1, 2` (immutable) or `a, b = 1, 2` (mutable)."""
    names: List[str]
    is_mutable: bool
    values: List[Expr]
    # One entity per name; `declares[i]` is False when a mutable target
    # re-assigns an existing variable.
    targets: List[Entity] = _annotation(None)
    declares: List[bool] = _annotation(None)


@dataclass
class ExprStmt(Stmt):
    expr: Expr


@dataclass
class ReturnStmt(Stmt):
    value: Optional[Expr]


@dataclass
class WhileStmt(Stmt):
    cond: Expr
    body: Block


@dataclass
class Case(Node):
    test: Expr
    body: List[Stmt]


@dataclass
class IfStmt(Stmt):
    cases: List[Case]
    alternate: Optional[List[Stmt]]


@dataclass
class RangeClause(Node):
    """`[start:step:end)` style range; bound inclusivity follows the brackets."""
    start: Expr
    end: Expr
    step: Optional[Expr] = None
    inclusive_start: bool = True
    inclusive_end: bool = False


@dataclass
class ForStmt(Stmt):
    var: str
    range: RangeClause
    body: Block
    entity: Optional[Entity] = _annotation()


@dataclass
class Param(Node):
    name: str
    param_type: Type
    entity: Optional[Entity] = _annotation()


@dataclass
class FuncDecl(Stmt):
    name: str
    params: List[Param]
    return_type: Type
    body: Block
    entity: Optional[Entity] = _annotation()


# --- root ---

@dataclass
class Program(Node):
    block: Block
