#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import is_dataclass, fields
from typing import Any, List, Optional

from olive_ast import Span, Node, Expr, Program
from olive_types import Type


def _format_span(span: Optional[Span]) -> str:
    if span is None:
        return ""
    return f" @{span.start_line}:{span.start_column}-{span.end_line}:{span.end_column}"


def _format_scalar(value: Any) -> str:
    if isinstance(value, Type):
        return value.name
    return repr(value)


def format_node(node: Any, indent: int = 0) -> List[str]:
    """
    Reflection-based AST pretty-printer.

    - Shows the node class name, with `: type` once an expression is analyzed.
    - Prints simple scalar fields inline; annotation fields are skipped.
    - Recursively prints child Node / list-of-Node fields on new indented lines.
    """
    ind = "  " * indent

    if isinstance(node, list):
        lines: List[str] = []
        for elem in node:
            lines.extend(format_node(elem, indent))
        return lines

    if isinstance(node, Node) and is_dataclass(node):
        # Only fields that take part in equality describe the tree itself.
        data_fields = [f for f in fields(node) if f.compare]
        simple_parts = []
        child_fields = []

        for f in data_fields:
            value = getattr(node, f.name)
            if isinstance(value, Node) or (isinstance(value, list) and value and isinstance(value[0], Node)):
                child_fields.append((f.name, value))
            else:
                simple_parts.append((f.name, value))

        header = node.__class__.__name__
        if simple_parts:
            inner = ", ".join(f"{name}={_format_scalar(value)}" for name, value in simple_parts if value is not None)
            header = f"{header}({inner})"
        if isinstance(node, Expr) and node.type is not None:
            header += f": {node.type.name}"
        header += _format_span(node.span)

        lines = [ind + header]
        for name, value in child_fields:
            if value is None:
                continue
            if isinstance(value, list):
                if not value:
                    continue
                lines.append(ind + "  " + f"{name}:")
                for elem in value:
                    lines.extend(format_node(elem, indent + 2))
            else:
                lines.append(ind + "  " + f"{name}:")
                lines.extend(format_node(value, indent + 2))
        return lines

    return [ind + repr(node)]


def format_program(program: Program) -> str:
    return "\n".join(format_node(program, indent=0))
