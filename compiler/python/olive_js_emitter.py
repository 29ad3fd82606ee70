"""
JavaScript Code Emitter

Handles JavaScript-specific code emission. Knows how to emit JS syntax, but not
why or when. All traversal and decisions live in the Backend.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import json
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from olive_symbols import Entity

LineSink = Callable[[str], None]

# Olive operators with a different JavaScript spelling. Anything not listed
# passes through unchanged.
JS_OPERATORS: Dict[str, str] = {
    "not": "!",
    "and": "&&",
    "or": "||",
    "==": "===",
    "!=": "!==",
}


@dataclass
class JSCodeBuilder:
    """
    Helper for building JavaScript code with indentation tracking.

    Every completed line is also handed to `sink`, if one is set.
    """
    lines: List[str] = field(default_factory=list)
    indent_level: int = 0
    indent_str: str = "  "
    sink: Optional[LineSink] = None

    def indent(self) -> None:
        self.indent_level += 1

    def dedent(self) -> None:
        assert self.indent_level > 0, "dedent below zero"
        self.indent_level -= 1

    def emit(self, line: str = "") -> None:
        """Emit a line with current indentation."""
        text = self.indent_str * self.indent_level + line if line else ""
        self.lines.append(text)
        if self.sink is not None:
            self.sink(text)

    def to_string(self) -> str:
        return "\n".join(self.lines)


def bracket_if_necessary(items: Sequence[str]) -> str:
    """`x` for one item, `[x, y]` for several (destructuring form)."""
    if len(items) == 1:
        return items[0]
    return f"[{', '.join(items)}]"


def js_op(op: str) -> str:
    return JS_OPERATORS.get(op, op)


@dataclass
class JSEmitter:
    """
    JavaScript-specific code emitter.

    Responsibilities:
    - Emit JS syntax for statements and expressions
    - Hygienic naming: each Entity gets a unique `<name>_<n>` identifier,
      assigned on first use and never reassigned

    Does NOT:
    - Walk the tree or decide what to emit
    - Perform semantic analysis
    """

    out: JSCodeBuilder = field(default_factory=JSCodeBuilder)

    # Generated-name table (entity identity -> JS identifier)
    _names: Dict[Entity, str] = field(default_factory=dict)
    _last_id: int = 0

    def get_output(self) -> str:
        """Returns the complete generated JavaScript code."""
        return self.out.to_string()

    # ============================================================================
    # Hygienic naming
    # ============================================================================

    def js_name(self, entity: Entity) -> str:
        name = self._names.get(entity)
        if name is None:
            self._last_id += 1
            name = f"{entity.name}_{self._last_id}"
            self._names[entity] = name
        return name

    # ============================================================================
    # Expression Emission
    # ============================================================================

    def emit_bool_literal(self, value: bool) -> str:
        return "true" if value else "false"

    def emit_int_literal(self, value: int) -> str:
        return str(value)

    def emit_float_literal(self, value: float) -> str:
        return repr(value)

    def emit_string_literal(self, value: str) -> str:
        return json.dumps(value)

    def emit_none_literal(self) -> str:
        return "null"

    def emit_unary_op(self, op: str, js_operand: str) -> str:
        op = js_op(op)
        sep = " " if op[-1].isalpha() else ""
        return f"({op}{sep}{js_operand})"

    def emit_binary_op(self, op: str, js_left: str, js_right: str) -> str:
        return f"({js_left} {js_op(op)} {js_right})"

    def emit_function_call(self, js_func_name: str, js_args: Sequence[str]) -> str:
        return f"{js_func_name}({', '.join(js_args)})"

    def emit_array_literal(self, js_values: Sequence[str]) -> str:
        return f"[{', '.join(js_values)}]"

    def emit_set_literal(self, js_values: Sequence[str]) -> str:
        return f"new Set({self.emit_array_literal(js_values)})"

    def emit_object_literal(self, js_pairs: Sequence[Tuple[str, str, bool]]) -> str:
        """Pairs are (key, value, key_is_literal); other keys are computed."""
        entries = [
            f"{key}: {value}" if literal_key else f"[{key}]: {value}"
            for key, value, literal_key in js_pairs
        ]
        return f"{{{', '.join(entries)}}}"

    def emit_template_literal(self, segments: Sequence[Tuple[str, bool]]) -> str:
        """Segments are (text, is_expression)."""
        body = []
        for text, is_expression in segments:
            if is_expression:
                body.append(f"${{{text}}}")
            else:
                body.append(text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${"))
        return f"`{''.join(body)}`"

    # ============================================================================
    # Statement Emission
    # ============================================================================

    def emit_library_stub(self, js_name: str, params: Sequence[str], body: str) -> None:
        self.out.emit(f"function {js_name}({', '.join(params)}) {{{body}}}")

    def emit_const_binding(self, js_targets: Sequence[str], js_values: Sequence[str]) -> None:
        self.out.emit(f"const {bracket_if_necessary(js_targets)} = {bracket_if_necessary(js_values)};")

    def emit_let_binding(self, js_targets: Sequence[str], js_values: Sequence[str]) -> None:
        self.out.emit(f"let {bracket_if_necessary(js_targets)} = {bracket_if_necessary(js_values)};")

    def emit_let_decl(self, js_names: Sequence[str]) -> None:
        self.out.emit(f"let {', '.join(js_names)};")

    def emit_assignment(self, js_targets: Sequence[str], js_values: Sequence[str]) -> None:
        self.out.emit(f"{bracket_if_necessary(js_targets)} = {bracket_if_necessary(js_values)};")

    def emit_expr_stmt(self, js_expr: str) -> None:
        self.out.emit(f"{js_expr};")

    def emit_return_stmt(self, js_value: Optional[str]) -> None:
        if js_value is not None:
            self.out.emit(f"return {js_value};")
        else:
            self.out.emit("return;")

    def emit_block_start(self) -> None:
        self.out.emit("{")
        self.out.indent()

    def emit_block_end(self) -> None:
        self.out.dedent()
        self.out.emit("}")

    def emit_while_header(self, js_cond: str) -> None:
        self.out.emit(f"while ({js_cond}) {{")
        self.out.indent()

    def emit_if_header(self, js_cond: str) -> None:
        self.out.emit(f"if ({js_cond}) {{")
        self.out.indent()

    def emit_else_if_header(self, js_cond: str) -> None:
        self.out.dedent()
        self.out.emit(f"}} else if ({js_cond}) {{")
        self.out.indent()

    def emit_else(self) -> None:
        self.out.dedent()
        self.out.emit("} else {")
        self.out.indent()

    def emit_for_header(self, js_var: str, js_init: str, comparison: str, js_end: str, js_step: str) -> None:
        self.out.emit(f"for (let {js_var} = {js_init}; {js_var} {comparison} {js_end}; {js_var} += {js_step}) {{")
        self.out.indent()

    def emit_function_header(self, js_name: str, js_params: Sequence[str]) -> None:
        self.out.emit(f"function {js_name}({', '.join(js_params)}) {{")
        self.out.indent()
