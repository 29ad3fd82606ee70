"""
Compilation context for cross-cutting compiler options.

This module defines the CompilationContext dataclass which holds compiler
options that affect multiple stages of compilation (optimization, code
generation, diagnostics, logging).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class LogLevel(IntEnum):
    """Hierarchical logging levels for the Olive compiler."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages
    DEBUG = 30      # Detailed diagnostic information


@dataclass
class CompilationContext:
    """
    Holds cross-cutting compiler options that affect multiple compilation stages.

    Attributes:
        indent_str:                 Indent unit applied once per nesting depth in generated code.
        fold_constants:             If True, the optimizer folds operators applied to literals.
        prune_constant_branches:    If True, the optimizer drops 'if' cases whose test is a
                                    literal and everything a literal-true test makes unreachable.
        filename:                   Source file name reported in diagnostics (optional).
        log_rich_format:            If True, emit logs in rich format: log level and timestamp.
        log_level:                  Current logging level.
    """
    indent_str: str = "  "
    fold_constants: bool = True
    prune_constant_branches: bool = False
    filename: Optional[str] = None
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING

    @staticmethod
    def default() -> 'CompilationContext':
        """Create a CompilationContext with default settings."""
        return CompilationContext(log_level=LogLevel.WARNING)
