#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from typing import List, Optional

from olive_ast import Program
from olive_context import CompilationContext
from olive_diagnostics import Diagnostic
from olive_scope_context import ScopeContext


@dataclass
class CompilationResult:
    """
    Products of one compilation.

    - program: the input tree, annotated in place by analysis
    - optimized: the tree returned by the optimizer (None if analysis failed)
    - root_scope: the fresh root scope this compilation used
    - code: generated JavaScript (None if analysis failed)
    - diagnostics: at most one error; analysis stops at the first violation
    """
    program: Program
    context: CompilationContext = field(default_factory=CompilationContext.default)
    root_scope: Optional[ScopeContext] = None
    optimized: Optional[Program] = None
    code: Optional[str] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.diagnostics)

    @property
    def lines(self) -> List[str]:
        return self.code.split("\n") if self.code else []
