"""
Olive Code Generation Backend

Orchestrates JavaScript generation from an analyzed, optimized Olive program.

The backend handles the "WHAT" and "WHEN" of code generation (traversal
order, which form of binding to emit, builtin prelude), while delegating the
"HOW" to the JSEmitter.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from typing import List, NoReturn, Optional

from olive_ast import (
    Stmt, Block, Binding, ExprStmt, ReturnStmt, WhileStmt, IfStmt, ForStmt, FuncDecl, Program, RangeClause,
    Expr, BoolLiteral, IntLiteral, FloatLiteral, StringLiteral, NoneLiteral, VarRef, UnaryOp, BinaryOp, CallExpr,
    TupleLiteral, MatrixLiteral, SetLiteral, DictLiteral, StringInterpolation, Interpolation,
)
from olive_builtins import BUILTIN_FUNCTIONS
from olive_context import CompilationContext
from olive_internal_error import ice
from olive_js_emitter import JSCodeBuilder, JSEmitter, LineSink
from olive_logger import log_counts, log_stage
from olive_scope_context import ScopeContext
from olive_symbols import Entity

_LITERAL_KEYS = (BoolLiteral, IntLiteral, FloatLiteral, StringLiteral, NoneLiteral)


@dataclass
class Backend:
    """
    Code generation backend.

    `root_scope` must be the scope the program was analyzed against: the
    builtin prelude is emitted from its entities so that user references to
    builtins get the same hygienic names.
    """

    program: Program
    root_scope: ScopeContext
    context: CompilationContext = field(default_factory=CompilationContext.default)
    sink: Optional[LineSink] = None

    # Target-specific emitter (handles all code emission)
    emitter: Optional[JSEmitter] = None

    def __post_init__(self):
        if self.emitter is None:
            self.emitter = JSEmitter(out=JSCodeBuilder(indent_str=self.context.indent_str, sink=self.sink))

    def generate(self) -> str:
        """
        Main entry point: generate JavaScript for the whole program.

        Returns the JavaScript source as a string.
        """
        log_stage(self.context, "Generating JavaScript", "generate")
        self._emit_library_functions()
        self._emit_stmts(self.program.block.stmts)
        log_counts(self.context, "generate", lines=len(self.emitter.out.lines))
        return self.emitter.get_output()

    def ice(self, message: str, *, node=None) -> NoReturn:
        raise ice(message, node=node, filename=self.context.filename)

    def _emit_library_functions(self) -> None:
        for builtin in BUILTIN_FUNCTIONS:
            entity = self.root_scope.declarations.get(builtin.name)
            if entity is None or not entity.is_builtin:
                self.ice(f"[ICE-1210] builtin '{builtin.name}' missing from the root scope")
            self.emitter.emit_library_stub(self.emitter.js_name(entity), builtin.js_params, builtin.js_body)

    def _entity_name(self, entity: Optional[Entity], node) -> str:
        if entity is None:
            self.ice(f"[ICE-1220] missing entity for {type(node).__name__}; was the program analyzed?", node=node)
        return self.emitter.js_name(entity)

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def _emit_stmts(self, stmts: List[Stmt]) -> None:
        for stmt in stmts:
            self._emit_stmt(stmt)

    def _emit_stmt(self, stmt: Stmt) -> None:
        if isinstance(stmt, Binding):
            self._emit_binding(stmt)

        elif isinstance(stmt, ExprStmt):
            self.emitter.emit_expr_stmt(self._emit_expr(stmt.expr))

        elif isinstance(stmt, ReturnStmt):
            self.emitter.emit_return_stmt(self._emit_expr(stmt.value) if stmt.value is not None else None)

        elif isinstance(stmt, WhileStmt):
            self.emitter.emit_while_header(self._emit_expr(stmt.cond))
            self._emit_stmts(stmt.body.stmts)
            self.emitter.emit_block_end()

        elif isinstance(stmt, IfStmt):
            self._emit_if(stmt)

        elif isinstance(stmt, ForStmt):
            self._emit_for(stmt)

        elif isinstance(stmt, FuncDecl):
            js_name = self._entity_name(stmt.entity, stmt)
            params = [self._entity_name(p.entity, p) for p in stmt.params]
            self.emitter.emit_function_header(js_name, params)
            self._emit_stmts(stmt.body.stmts)
            self.emitter.emit_block_end()

        elif isinstance(stmt, Block):
            self.emitter.emit_block_start()
            self._emit_stmts(stmt.stmts)
            self.emitter.emit_block_end()

        else:
            self.ice(f"[ICE-1250] unsupported statement type for code generation: {type(stmt).__name__}", node=stmt)

    def _emit_binding(self, stmt: Binding) -> None:
        if stmt.targets is None or stmt.declares is None:
            self.ice("[ICE-1230] binding has no resolved targets", node=stmt)
        targets = [self._entity_name(e, stmt) for e in stmt.targets]
        values = [self._emit_expr(v) for v in stmt.values]

        if not stmt.is_mutable:
            self.emitter.emit_const_binding(targets, values)
        elif all(stmt.declares):
            self.emitter.emit_let_binding(targets, values)
        else:
            fresh = [name for name, declares in zip(targets, stmt.declares) if declares]
            if fresh:
                self.emitter.emit_let_decl(fresh)
            self.emitter.emit_assignment(targets, values)

    def _emit_if(self, stmt: IfStmt) -> None:
        if not stmt.cases:
            self.ice("[ICE-1240] 'if' statement without cases", node=stmt)
        for index, case in enumerate(stmt.cases):
            js_test = self._emit_expr(case.test)
            if index == 0:
                self.emitter.emit_if_header(js_test)
            else:
                self.emitter.emit_else_if_header(js_test)
            self._emit_stmts(case.body)
        if stmt.alternate:
            self.emitter.emit_else()
            self._emit_stmts(stmt.alternate)
        self.emitter.emit_block_end()

    def _emit_for(self, stmt: ForStmt) -> None:
        rng: RangeClause = stmt.range
        var = self._entity_name(stmt.entity, stmt)
        js_start = self._emit_expr(rng.start)
        js_step = self._emit_expr(rng.step) if rng.step is not None else "1"
        js_init = js_start if rng.inclusive_start else f"{js_start} + {js_step}"

        if self._is_negative_literal(rng.step):
            comparison = ">=" if rng.inclusive_end else ">"
        else:
            comparison = "<=" if rng.inclusive_end else "<"

        self.emitter.emit_for_header(var, js_init, comparison, self._emit_expr(rng.end), js_step)
        self._emit_stmts(stmt.body.stmts)
        self.emitter.emit_block_end()

    @staticmethod
    def _is_bare_key(key: Expr, js_key: str) -> bool:
        # A signed number is not a valid property name; `{-1: v}` must be `{[-1]: v}`.
        return isinstance(key, _LITERAL_KEYS) and not js_key.startswith("-")

    @staticmethod
    def _is_negative_literal(expr: Optional[Expr]) -> bool:
        if isinstance(expr, IntLiteral):
            return expr.value < 0
        if isinstance(expr, UnaryOp) and expr.op == "-" and isinstance(expr.operand, IntLiteral):
            return expr.operand.value > 0
        return False

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def _emit_expr(self, expr: Expr) -> str:
        """Emit an expression and return the JavaScript code as a string."""
        if isinstance(expr, BoolLiteral):
            return self.emitter.emit_bool_literal(expr.value)

        elif isinstance(expr, IntLiteral):
            return self.emitter.emit_int_literal(expr.value)

        elif isinstance(expr, FloatLiteral):
            return self.emitter.emit_float_literal(expr.value)

        elif isinstance(expr, StringLiteral):
            return self.emitter.emit_string_literal(expr.value)

        elif isinstance(expr, NoneLiteral):
            return self.emitter.emit_none_literal()

        elif isinstance(expr, VarRef):
            # The referent was fixed during analysis; never re-resolved here.
            return self._entity_name(expr.referent, expr)

        elif isinstance(expr, UnaryOp):
            return self.emitter.emit_unary_op(expr.op, self._emit_expr(expr.operand))

        elif isinstance(expr, BinaryOp):
            return self.emitter.emit_binary_op(expr.op, self._emit_expr(expr.left), self._emit_expr(expr.right))

        elif isinstance(expr, CallExpr):
            callee = self._entity_name(expr.callee.referent, expr.callee)
            return self.emitter.emit_function_call(callee, [self._emit_expr(a) for a in expr.args])

        elif isinstance(expr, (TupleLiteral, MatrixLiteral)):
            return self.emitter.emit_array_literal([self._emit_expr(v) for v in expr.values])

        elif isinstance(expr, SetLiteral):
            return self.emitter.emit_set_literal([self._emit_expr(v) for v in expr.values])

        elif isinstance(expr, DictLiteral):
            pairs = []
            for p in expr.pairs:
                js_key = self._emit_expr(p.key)
                pairs.append((js_key, self._emit_expr(p.value), self._is_bare_key(p.key, js_key)))
            return self.emitter.emit_object_literal(pairs)

        elif isinstance(expr, StringInterpolation):
            segments = []
            for part in expr.parts:
                if isinstance(part, Interpolation):
                    segments.append((self._emit_expr(part.value), True))
                elif isinstance(part, StringLiteral):
                    segments.append((part.value, False))
                else:
                    self.ice(f"[ICE-1260] unexpected interpolation segment: {type(part).__name__}", node=part)
            return self.emitter.emit_template_literal(segments)

        self.ice(f"[ICE-1270] unsupported expression type for code generation: {type(expr).__name__}", node=expr)
