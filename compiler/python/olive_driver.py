#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from olive_analyzer import SemanticAnalyzer
from olive_ast import Program
from olive_ast_printer import format_program
from olive_backend import Backend
from olive_compilation import CompilationResult
from olive_context import CompilationContext, LogLevel
from olive_diagnostics import SemanticError
from olive_js_emitter import LineSink
from olive_logger import log_debug, log_error, log_info
from olive_optimizer import Optimizer
from olive_scope_context import ScopeContext


class OliveDriver:
    """
    Pipeline driver:
      - analyze (type-check and bind names; stops at the first error)
      - optimize (fold constants, drop dead statements)
      - generate JavaScript, line by line, into an optional sink

    Every call builds a fresh root scope and a fresh generated-name table;
    nothing is shared between compilations.
    """

    def __init__(self, context: CompilationContext | None = None):
        self.context = context or CompilationContext.default()

    # --- Public API ---

    def analyze(self, program: Program) -> CompilationResult:
        """
        Run semantic analysis only. On failure the result carries exactly one
        error diagnostic.
        """
        result = CompilationResult(program=program, context=self.context)
        result.root_scope = ScopeContext.initial()
        try:
            SemanticAnalyzer(self.context).analyze(program, result.root_scope)
        except SemanticError as e:
            diag = e.to_diagnostic(self.context.filename)
            result.diagnostics.append(diag)
            log_error(self.context, diag.format())
        return result

    def compile(self, program: Program, sink: LineSink | None = None) -> CompilationResult:
        """
        Full pipeline. Optimization and generation are never reached when
        analysis fails.
        """
        log_info(self.context, "Starting compilation")
        result = self.analyze(program)
        if result.has_errors():
            return result

        result.optimized = Optimizer(self.context).optimize(program)
        if self.context.log_level >= LogLevel.DEBUG:
            log_debug(self.context, format_program(result.optimized))

        backend = Backend(result.optimized, result.root_scope, self.context, sink=sink)
        result.code = backend.generate()
        log_info(self.context, "Compilation complete")
        return result
