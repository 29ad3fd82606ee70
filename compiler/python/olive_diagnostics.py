#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import os
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from olive_ast import Node


DIAGNOSTIC_CODE_FAMILIES = {
    "TYP": [
        "TYP-0010",
        "TYP-0011",
        "TYP-0020",
        "TYP-0021",
        "TYP-0022",
        "TYP-0023",
        "TYP-0030",
        "TYP-0031",
        "TYP-0040",
        "TYP-0050",
    ],
    "RES": [
        "RES-0010",
        "RES-0020",
        "RES-0021",
    ],
    "ARI": [
        "ARI-0010",
        "ARI-0020",
    ],
    "CTX": [
        "CTX-0010",
    ],
    # ICE codes are internal compiler errors raised as exceptions,
    # not user-facing diagnostics; they are excluded from this registry.
}

_CODE_RE = re.compile(r"\[([A-Z]{3}-\d{4})]")


@dataclass
class Diagnostic:
    kind: str  # "error" or "warning"
    message: str
    filename: Optional[str] = None  # file path

    # Primary location (start of the span)
    line: Optional[int] = None
    column: Optional[int] = None

    # Optional end of span (exclusive)
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    @property
    def code(self) -> Optional[str]:
        m = _CODE_RE.search(self.message)
        return m.group(1) if m else None

    def format(self) -> str:
        loc = ""
        if self.filename is not None:
            loc += f"{os.path.abspath(str(self.filename))}"
        if self.line is not None:
            loc += f":{self.line}"
            if self.column is not None:
                loc += f":{self.column}"
        if loc:
            loc += ": "
        return f"{loc}{self.kind}: {self.message}"


def diag_from_node(
        kind: str,
        message: str,
        *,
        filename: Optional[str],
        node: Optional["Node"],
) -> Diagnostic:
    line = column = end_line = end_column = None
    span = getattr(node, "span", None) if node is not None else None
    if span is not None:
        line = span.start_line
        column = span.start_column
        end_line = span.end_line
        end_column = span.end_column
    return Diagnostic(
        kind=kind,
        message=message,
        filename=filename,
        line=line,
        column=column,
        end_line=end_line,
        end_column=end_column,
    )


# ==========================
# Semantic errors
# ==========================


class SemanticError(Exception):
    """
    A violated semantic rule. Analysis stops at the first one raised.
    """

    def __init__(self, message: str, node: Optional["Node"] = None):
        super().__init__(message)
        self.message = message
        self.node = node

    def to_diagnostic(self, filename: Optional[str] = None) -> Diagnostic:
        return diag_from_node("error", self.message, filename=filename, node=self.node)


class TypeMismatchError(SemanticError):
    """An operand or condition has the wrong type for its construct."""
    pass


class RedeclarationError(SemanticError):
    """An immutable name is declared twice in the same scope."""
    pass


class UnresolvedIdentifierError(SemanticError):
    """A name has no declaration anywhere in the scope chain."""
    pass


class ArityMismatchError(SemanticError):
    """Target/initializer or argument/parameter counts differ."""
    pass


class ContextViolationError(SemanticError):
    """A construct appears outside the context it requires."""
    pass
