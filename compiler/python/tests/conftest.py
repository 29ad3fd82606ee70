#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Sequence, Tuple, Union

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from olive_analyzer import SemanticAnalyzer
from olive_ast import (
    Program, Block, Binding, ExprStmt, ReturnStmt, WhileStmt, IfStmt, Case, FuncDecl, Param, Stmt, Expr,
    BoolLiteral, IntLiteral, FloatLiteral, StringLiteral, NoneLiteral, VarRef, BinaryOp, UnaryOp, CallExpr,
)
from olive_context import CompilationContext
from olive_driver import OliveDriver
from olive_scope_context import ScopeContext
from olive_types import Type, NONE


# ============================================================================
# Tree builders (the parser is not part of this package)
# ============================================================================


def program(*stmts: Stmt) -> Program:
    return Program(Block(list(stmts)))


def lit(value) -> Expr:
    if isinstance(value, bool):
        return BoolLiteral(value)
    if isinstance(value, int):
        return IntLiteral(value)
    if isinstance(value, float):
        return FloatLiteral(value)
    if isinstance(value, str):
        return StringLiteral(value)
    if value is None:
        return NoneLiteral()
    raise TypeError(f"no Olive literal for {value!r}")


def ref(name: str) -> VarRef:
    return VarRef(name)


def _expr(value) -> Expr:
    return value if isinstance(value, Expr) else lit(value)


def bind(names: Union[str, Sequence[str]], *values, mutable: bool = False) -> Binding:
    """`bind("x", 1)` is `x := 1`; `bind(["a", "b"], 1, 2, mutable=True)` is `a, b = 1, 2`."""
    if isinstance(names, str):
        names = [names]
    return Binding(list(names), mutable, [_expr(v) for v in values])


def binop(op: str, left, right) -> BinaryOp:
    return BinaryOp(op, _expr(left), _expr(right))


def unop(op: str, operand) -> UnaryOp:
    return UnaryOp(op, _expr(operand))


def call(name: str, *args) -> CallExpr:
    return CallExpr(VarRef(name), [_expr(a) for a in args])


def stmt(expr) -> ExprStmt:
    return ExprStmt(_expr(expr))


def ret(value=...) -> ReturnStmt:
    return ReturnStmt(None if value is ... else _expr(value))


def while_(cond, *body: Stmt) -> WhileStmt:
    return WhileStmt(_expr(cond), Block(list(body)))


def if_(*cases: Tuple[object, List[Stmt]], alternate: List[Stmt] | None = None) -> IfStmt:
    return IfStmt([Case(_expr(test), list(body)) for test, body in cases], alternate)


def func(name: str, params: Sequence[Tuple[str, Type]], *body: Stmt, returns: Type = NONE) -> FuncDecl:
    return FuncDecl(name, [Param(n, t) for n, t in params], returns, Block(list(body)))


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def context() -> CompilationContext:
    return CompilationContext.default()


@pytest.fixture
def analyze(context: CompilationContext):
    """Analyze a program against a fresh root scope; raises on the first error.

    Usage:
        def test_something(analyze):
            prog = analyze(program(bind("x", 1)))
    """

    def _analyze(prog: Program) -> Program:
        return SemanticAnalyzer(context).analyze(prog, ScopeContext.initial())

    return _analyze


@pytest.fixture
def compile_js(context: CompilationContext):
    """Run the full pipeline and return the CompilationResult."""

    def _compile(prog: Program, sink=None):
        return OliveDriver(context).compile(prog, sink=sink)

    return _compile


@pytest.fixture
def user_lines(compile_js):
    """Generated JavaScript lines after the builtin prelude."""

    def _lines(prog: Program) -> List[str]:
        result = compile_js(prog)
        assert not result.has_errors(), [d.format() for d in result.diagnostics]
        return result.lines[PRELUDE_LINES:]

    return _lines


PRELUDE_LINES = 2


def has_error_code(diagnostics, code: str) -> bool:
    """Check if any diagnostic contains the given error code.

    Args:
        diagnostics: List of Diagnostic objects
        code: Error code string like "TYP-0010" or "[TYP-0010]"

    Returns:
        True if any diagnostic message contains the error code
    """
    if not code.startswith("["):
        code = f"[{code}]"
    return any(code in diag.message for diag in diagnostics)
