"""
Internal compiler errors.

An ICE reports a broken pipeline invariant: a node kind a pass does not know,
a reference reaching generation without a referent, a builtin missing from
the root scope. Mistakes in the user's program are SemanticErrors instead.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from olive_ast import Span

UNCODED_ICE = "ICE-9999"

_ICE_CODE_RE = re.compile(r"\[(ICE-\d{4})]")


@dataclass(frozen=True)
class ICELocation:
    filename: Optional[str]
    span: Optional[Span]

    def prefix(self) -> str:
        """`file:line:col`, `file`, or empty; a span alone is not reported."""
        if not self.filename:
            return ""
        if self.span is None:
            return self.filename
        return f"{self.filename}:{self.span.start_line}:{self.span.start_column}"


class InternalCompilerError(RuntimeError):
    def __init__(self, message: str, loc: ICELocation | None = None, node: Optional[object] = None):
        super().__init__(message)
        self.message = message
        self.loc = loc
        self.node = node

    @property
    def code(self) -> str:
        m = _ICE_CODE_RE.search(self.message)
        return m.group(1) if m else UNCODED_ICE

    def format(self) -> str:
        message = self.message if _ICE_CODE_RE.search(self.message) else f"[{UNCODED_ICE}] {self.message}"
        where = self.loc.prefix() if self.loc is not None else ""
        if where:
            return f"{where}: internal compiler error: {message}"
        return f"internal compiler error: {message}"


def ice(message: str, node: Optional[object] = None, filename: Optional[str] = None) -> InternalCompilerError:
    """Build an ICE located at `node` (if it has a span)."""
    span = getattr(node, "span", None) if node is not None else None
    return InternalCompilerError(message, ICELocation(filename=filename, span=span), node=node)
