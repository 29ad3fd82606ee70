#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from olive_ast import (
    Stmt, Block, Binding, ExprStmt, ReturnStmt, WhileStmt, IfStmt, Case, ForStmt, FuncDecl, Program,
    Expr, BoolLiteral, IntLiteral, FloatLiteral, StringLiteral, NoneLiteral, VarRef, UnaryOp, BinaryOp, CallExpr,
    TupleLiteral, MatrixLiteral, SetLiteral, DictLiteral, StringInterpolation, Interpolation,
)
from olive_context import CompilationContext
from olive_diagnostics import ArityMismatchError, TypeMismatchError
from olive_internal_error import ice
from olive_logger import log_debug, log_stage
from olive_scope_context import ScopeContext
from olive_symbols import Entity, make_function, make_param, make_variable
from olive_types import BOOL, INT, FLOAT, STRING, NONE, TEMPLATE_LITERAL, format_type

RELATIONAL_OPS = ("<", "<=", ">=", ">")
EQUALITY_OPS = ("==", "!=")
LOGICAL_OPS = ("and", "or")


@dataclass
class SemanticAnalyzer:
    """Type checker and name binder for Olive programs.

    Walks the tree root-to-leaf, threading one ScopeContext per lexical
    scope. Annotates the tree in place:
      - `type` on every expression,
      - `referent` on every variable reference,
      - the declared entities on bindings, parameters, functions and loops.

    The first violated rule raises a SemanticError; nothing is accumulated.
    """
    context: CompilationContext = field(default_factory=CompilationContext.default)

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------

    def analyze(self, program: Program, root: ScopeContext) -> Program:
        log_stage(self.context, "Analyzing", "analyze")
        self._analyze_block(program.block, root)
        return program

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _analyze_block(self, block: Block, scope: ScopeContext) -> None:
        local = scope.child_for_block()
        self._analyze_stmts(block.stmts, local)

    def _analyze_stmts(self, stmts: List[Stmt], scope: ScopeContext) -> None:
        for stmt in stmts:
            self._analyze_stmt(stmt, scope)

    def _analyze_stmt(self, stmt: Stmt, scope: ScopeContext) -> None:
        if isinstance(stmt, Binding):
            self._analyze_binding(stmt, scope)

        elif isinstance(stmt, ExprStmt):
            self._analyze_expr(stmt.expr, scope)

        elif isinstance(stmt, ReturnStmt):
            if stmt.value is not None:
                self._analyze_expr(stmt.value, scope)
            scope.assert_in_function("[CTX-0010] return statement outside function", node=stmt)

        elif isinstance(stmt, WhileStmt):
            self._analyze_expr(stmt.cond, scope)
            stmt.cond.type.must_be(
                BOOL,
                f"[TYP-0010] condition in 'while' statement must be boolean, got '{format_type(stmt.cond.type)}'",
                node=stmt.cond,
            )
            self._analyze_block(stmt.body, scope)

        elif isinstance(stmt, IfStmt):
            for case in stmt.cases:
                self._analyze_case(case, scope.child_for_block())
            if stmt.alternate is not None:
                # Each alternate statement gets a scope of its own.
                for alt in stmt.alternate:
                    self._analyze_stmt(alt, scope.child_for_block())

        elif isinstance(stmt, ForStmt):
            self._analyze_for(stmt, scope)

        elif isinstance(stmt, FuncDecl):
            self._analyze_func(stmt, scope)

        elif isinstance(stmt, Block):
            self._analyze_block(stmt, scope)

        else:
            raise ice(f"[ICE-1010] unsupported statement type for analysis: {type(stmt).__name__}", node=stmt)

    def _analyze_binding(self, stmt: Binding, scope: ScopeContext) -> None:
        if len(stmt.names) != len(stmt.values):
            raise ArityMismatchError(
                f"[ARI-0010] number of variables ({len(stmt.names)}) does not equal "
                f"number of initializers ({len(stmt.values)})",
                node=stmt,
            )

        # Initializers see the scope as it was before this line, so that
        # `x := x` refers to an outer `x`.
        for value in stmt.values:
            self._analyze_expr(value, scope)

        targets: List[Entity] = []
        declares: List[bool] = []
        for name, value in zip(stmt.names, stmt.values):
            if stmt.is_mutable:
                existing = scope.resolve(name)
                if existing is not None and existing.is_mutable:
                    existing.type.must_be_mutually_compatible(
                        value.type,
                        f"[TYP-0040] cannot assign a value of type '{format_type(value.type)}' "
                        f"to '{name}' of type '{format_type(existing.type)}'",
                        node=value,
                    )
                    targets.append(existing)
                    declares.append(False)
                    continue
            else:
                scope.variable_must_not_be_already_declared(name, node=stmt)

            entity = make_variable(name, value.type, is_mutable=stmt.is_mutable)
            scope.declare(name, entity, node=stmt)
            targets.append(entity)
            declares.append(True)

        stmt.targets = targets
        stmt.declares = declares
        log_debug(
            self.context,
            "Bound " + ", ".join(f"{e.name}: {format_type(e.type)}" for e in targets)
            + (" (mutable)" if stmt.is_mutable else ""),
            "analyze",
        )

    def _analyze_case(self, case: Case, scope: ScopeContext) -> None:
        self._analyze_expr(case.test, scope)
        case.test.type.must_be(
            BOOL,
            f"[TYP-0011] test in 'if' statement must be boolean, got '{format_type(case.test.type)}'",
            node=case.test,
        )
        self._analyze_stmts(case.body, scope.child_for_block())

    def _analyze_for(self, stmt: ForStmt, scope: ScopeContext) -> None:
        rng = stmt.range
        for bound in (rng.start, rng.end, rng.step):
            if bound is None:
                continue
            self._analyze_expr(bound, scope)
            bound.type.must_be(
                INT,
                f"[TYP-0050] range bounds and step must be int, got '{format_type(bound.type)}'",
                node=bound,
            )

        loop_scope = scope.child_for_block()
        entity = make_variable(stmt.var, INT, is_mutable=False)
        loop_scope.declare(stmt.var, entity, node=stmt)
        stmt.entity = entity
        self._analyze_block(stmt.body, loop_scope)

    def _analyze_func(self, decl: FuncDecl, scope: ScopeContext) -> None:
        entity = make_function(decl.name, tuple(p.param_type for p in decl.params), decl.return_type)
        scope.variable_must_not_be_already_declared(decl.name, node=decl)
        # Declared before the body so that the function can call itself.
        scope.declare(decl.name, entity, node=decl)
        decl.entity = entity

        func_scope = scope.child_for_function()
        for param in decl.params:
            func_scope.variable_must_not_be_already_declared(param.name, node=param)
            param.entity = make_param(param.name, param.param_type)
            func_scope.declare(param.name, param.entity, node=param)

        # The function body uses the parameter scope directly.
        self._analyze_stmts(decl.body.stmts, func_scope)
        log_debug(self.context, f"Analyzed function '{decl.name}' ({len(decl.params)} parameter(s))", "analyze")

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _analyze_expr(self, expr: Expr, scope: ScopeContext) -> None:
        if isinstance(expr, BoolLiteral):
            expr.type = BOOL
        elif isinstance(expr, IntLiteral):
            expr.type = INT
        elif isinstance(expr, FloatLiteral):
            expr.type = FLOAT
        elif isinstance(expr, StringLiteral):
            expr.type = STRING
        elif isinstance(expr, NoneLiteral):
            expr.type = NONE

        elif isinstance(expr, VarRef):
            expr.referent = scope.lookup(expr.name, node=expr)
            expr.type = expr.referent.type

        elif isinstance(expr, UnaryOp):
            # No constraint on the operand; the result has the operand's type.
            self._analyze_expr(expr.operand, scope)
            expr.type = expr.operand.type

        elif isinstance(expr, BinaryOp):
            self._analyze_binary(expr, scope)

        elif isinstance(expr, CallExpr):
            self._analyze_call(expr, scope)

        elif isinstance(expr, (TupleLiteral, MatrixLiteral, SetLiteral)):
            # Typed at construction; elements only need their names bound.
            for value in expr.values:
                self._analyze_expr(value, scope)

        elif isinstance(expr, DictLiteral):
            for pair in expr.pairs:
                self._analyze_expr(pair.key, scope)
                self._analyze_expr(pair.value, scope)

        elif isinstance(expr, StringInterpolation):
            for part in expr.parts:
                if isinstance(part, Interpolation):
                    self._analyze_expr(part.value, scope)
                else:
                    self._analyze_expr(part, scope)
            expr.type = TEMPLATE_LITERAL

        else:
            raise ice(f"[ICE-1020] unsupported expression type for analysis: {type(expr).__name__}", node=expr)

    def _analyze_binary(self, expr: BinaryOp, scope: ScopeContext) -> None:
        self._analyze_expr(expr.left, scope)
        self._analyze_expr(expr.right, scope)
        lt, rt = expr.left.type, expr.right.type
        operands = f"'{format_type(lt)}' and '{format_type(rt)}'"

        if expr.op in RELATIONAL_OPS:
            self._must_have_operands_of(expr, INT, f"[TYP-0020] operands of '{expr.op}' must be int, got {operands}")
            expr.type = BOOL
        elif expr.op in EQUALITY_OPS:
            lt.must_be_mutually_compatible(
                rt, f"[TYP-0021] operands of '{expr.op}' are not compatible: {operands}", node=expr
            )
            expr.type = BOOL
        elif expr.op in LOGICAL_OPS:
            self._must_have_operands_of(expr, BOOL, f"[TYP-0022] operands of '{expr.op}' must be bool, got {operands}")
            expr.type = BOOL
        else:
            # All other binary operators are integer arithmetic.
            self._must_have_operands_of(expr, INT, f"[TYP-0023] operands of '{expr.op}' must be int, got {operands}")
            expr.type = INT

    @staticmethod
    def _must_have_operands_of(expr: BinaryOp, expected, message: str) -> None:
        expr.left.type.must_be(expected, message, node=expr)
        expr.right.type.must_be(expected, message, node=expr)

    def _analyze_call(self, expr: CallExpr, scope: ScopeContext) -> None:
        self._analyze_expr(expr.callee, scope)
        for arg in expr.args:
            self._analyze_expr(arg, scope)

        func = expr.callee.referent
        if not func.is_function:
            raise TypeMismatchError(f"[TYP-0030] '{expr.callee.name}' is not a function", node=expr.callee)
        if len(expr.args) != func.arity:
            raise ArityMismatchError(
                f"[ARI-0020] function '{func.name}' expects {func.arity} argument(s), got {len(expr.args)}",
                node=expr,
            )
        for index, (arg, param_type) in enumerate(zip(expr.args, func.param_types), start=1):
            arg.type.must_be_mutually_compatible(
                param_type,
                f"[TYP-0031] argument {index} of '{func.name}' must be '{format_type(param_type)}', "
                f"got '{format_type(arg.type)}'",
                node=arg,
            )
        expr.type = func.type
