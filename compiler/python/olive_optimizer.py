"""
Tree optimizer.

Runs on an analyzed tree, bottom-up. Every rewrite builds new nodes with
`dataclasses.replace`, so annotations (types, referents, declared entities)
carry over and the input tree is left untouched. A statement that optimizes
to None is elided from the list that contained it.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from olive_ast import (
    Stmt, Block, Binding, ExprStmt, ReturnStmt, WhileStmt, IfStmt, Case, ForStmt, FuncDecl, Program,
    Expr, BoolLiteral, IntLiteral, FloatLiteral, StringLiteral, NoneLiteral, VarRef, UnaryOp, BinaryOp, CallExpr,
    TupleLiteral, MatrixLiteral, SetLiteral, DictLiteral, StringInterpolation, Interpolation,
)
from olive_context import CompilationContext
from olive_internal_error import ice
from olive_logger import log_counts, log_stage
from olive_types import BOOL, INT

_INT_ARITHMETIC = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
}

_COMPARISONS = {
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">=": lambda a, b: a >= b,
    ">": lambda a, b: a > b,
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
}

_LITERALS = (BoolLiteral, IntLiteral, FloatLiteral, StringLiteral)


def is_bool_literal(expr: Optional[Expr], value: bool) -> bool:
    return isinstance(expr, BoolLiteral) and expr.value is value


@dataclass
class Optimizer:
    context: CompilationContext = field(default_factory=CompilationContext.default)

    _folded: int = 0
    _elided: int = 0

    def optimize(self, program: Program) -> Program:
        log_stage(self.context, "Optimizing", "optimize")
        self._folded = 0
        self._elided = 0
        result = replace(program, block=self._optimize_block(program.block))
        log_counts(self.context, "optimize", folded=self._folded, elided=self._elided)
        return result

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _optimize_block(self, block: Block) -> Block:
        return replace(block, stmts=self._optimize_stmts(block.stmts))

    def _optimize_stmts(self, stmts: List[Stmt]) -> List[Stmt]:
        out: List[Stmt] = []
        for stmt in stmts:
            new_stmt = self._optimize_stmt(stmt)
            if new_stmt is None:
                self._elided += 1
                continue
            out.append(new_stmt)
        return out

    def _optimize_stmt(self, stmt: Stmt) -> Optional[Stmt]:
        if isinstance(stmt, Binding):
            return replace(stmt, values=[self._optimize_expr(v) for v in stmt.values])

        if isinstance(stmt, ExprStmt):
            return replace(stmt, expr=self._optimize_expr(stmt.expr))

        if isinstance(stmt, ReturnStmt):
            if stmt.value is None:
                return stmt
            return replace(stmt, value=self._optimize_expr(stmt.value))

        if isinstance(stmt, WhileStmt):
            cond = self._optimize_expr(stmt.cond)
            if is_bool_literal(cond, False):
                # The loop never runs.
                return None
            return replace(stmt, cond=cond, body=self._optimize_block(stmt.body))

        if isinstance(stmt, IfStmt):
            return self._optimize_if(stmt)

        if isinstance(stmt, ForStmt):
            rng = stmt.range
            new_range = replace(
                rng,
                start=self._optimize_expr(rng.start),
                end=self._optimize_expr(rng.end),
                step=self._optimize_expr(rng.step) if rng.step is not None else None,
            )
            return replace(stmt, range=new_range, body=self._optimize_block(stmt.body))

        if isinstance(stmt, FuncDecl):
            return replace(stmt, body=self._optimize_block(stmt.body))

        if isinstance(stmt, Block):
            block = self._optimize_block(stmt)
            return block if block.stmts else None

        raise ice(f"[ICE-1110] unsupported statement type for optimization: {type(stmt).__name__}", node=stmt)

    def _optimize_if(self, stmt: IfStmt) -> Optional[Stmt]:
        cases = [self._optimize_case(c) for c in stmt.cases]
        alternate = self._optimize_stmts(stmt.alternate) if stmt.alternate is not None else None
        if not alternate:
            alternate = None

        if self.context.prune_constant_branches:
            kept: List[Case] = []
            for case in cases:
                if is_bool_literal(case.test, False):
                    continue
                kept.append(case)
                if is_bool_literal(case.test, True):
                    # Later cases and the alternate are unreachable.
                    alternate = None
                    break
            cases = kept
            if not cases:
                return Block(stmts=alternate, span=stmt.span) if alternate else None
            if len(cases) == 1 and is_bool_literal(cases[0].test, True):
                return Block(stmts=cases[0].body, span=stmt.span) if cases[0].body else None

        return replace(stmt, cases=cases, alternate=alternate)

    def _optimize_case(self, case: Case) -> Case:
        return replace(case, test=self._optimize_expr(case.test), body=self._optimize_stmts(case.body))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _optimize_expr(self, expr: Expr) -> Expr:
        if isinstance(expr, (BoolLiteral, IntLiteral, FloatLiteral, StringLiteral, NoneLiteral, VarRef)):
            return expr

        if isinstance(expr, BinaryOp):
            new_expr = replace(expr, left=self._optimize_expr(expr.left), right=self._optimize_expr(expr.right))
            return self._fold_binary(new_expr) if self.context.fold_constants else new_expr

        if isinstance(expr, UnaryOp):
            new_expr = replace(expr, operand=self._optimize_expr(expr.operand))
            return self._fold_unary(new_expr) if self.context.fold_constants else new_expr

        if isinstance(expr, CallExpr):
            return replace(expr, args=[self._optimize_expr(a) for a in expr.args])

        if isinstance(expr, (TupleLiteral, MatrixLiteral, SetLiteral)):
            return replace(expr, values=[self._optimize_expr(v) for v in expr.values])

        if isinstance(expr, DictLiteral):
            pairs = [replace(p, key=self._optimize_expr(p.key), value=self._optimize_expr(p.value)) for p in expr.pairs]
            return replace(expr, pairs=pairs)

        if isinstance(expr, StringInterpolation):
            parts = [
                replace(p, value=self._optimize_expr(p.value)) if isinstance(p, Interpolation) else p
                for p in expr.parts
            ]
            return replace(expr, parts=parts)

        raise ice(f"[ICE-1120] unsupported expression type for optimization: {type(expr).__name__}", node=expr)

    def _fold_binary(self, expr: BinaryOp) -> Expr:
        left, right = expr.left, expr.right
        if not isinstance(left, _LITERALS) or type(left) is not type(right):
            return expr

        if isinstance(left, IntLiteral) and expr.op in _INT_ARITHMETIC:
            self._folded += 1
            return IntLiteral(_INT_ARITHMETIC[expr.op](left.value, right.value), span=expr.span, type=INT)

        if isinstance(left, BoolLiteral) and expr.op in ("and", "or"):
            value = (left.value and right.value) if expr.op == "and" else (left.value or right.value)
            self._folded += 1
            return BoolLiteral(value, span=expr.span, type=BOOL)

        if expr.op in ("==", "!=") or (isinstance(left, IntLiteral) and expr.op in _COMPARISONS):
            self._folded += 1
            return BoolLiteral(_COMPARISONS[expr.op](left.value, right.value), span=expr.span, type=BOOL)

        return expr

    def _fold_unary(self, expr: UnaryOp) -> Expr:
        operand = expr.operand
        if expr.op == "not" and isinstance(operand, BoolLiteral):
            self._folded += 1
            return BoolLiteral(not operand.value, span=expr.span, type=operand.type)
        if expr.op == "-" and isinstance(operand, (IntLiteral, FloatLiteral)):
            self._folded += 1
            return type(operand)(-operand.value, span=expr.span, type=operand.type)
        return expr
