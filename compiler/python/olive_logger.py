"""
Logging utilities for the Olive compiler.

Messages go to stderr when the CompilationContext log level allows them.
Messages emitted by a pass carry its name (`analyze`, `optimize`, `generate`)
as a `[pass]` tag.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import sys
import time
from typing import Optional

from olive_context import CompilationContext, LogLevel

_LEVEL_TAGS = {
    LogLevel.ERROR: "ERROR",
    LogLevel.WARNING: "WARNING",
    LogLevel.INFO: "INFO",
    LogLevel.DEBUG: "DEBUG",
}


def _prefix(context: CompilationContext, log_level: LogLevel, pass_name: Optional[str]) -> str:
    prefix = ""
    if context.log_rich_format and log_level in _LEVEL_TAGS:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = f"{timestamp} [{_LEVEL_TAGS[log_level]}] "
    if pass_name:
        prefix += f"[{pass_name}] "
    return prefix


def log(
        context: Optional[CompilationContext],
        log_level: LogLevel,
        message: str,
        pass_name: Optional[str] = None,
) -> None:
    """
    Log a message if the context's logging level is at least `log_level`.

    Args:
        context:    The compilation context containing logging level.
        log_level:  The level of the message to log.
        message:    The message to log.
        pass_name:  Optional name of the pass emitting the message.
    """
    if context is None:
        print("No context provided for logging.", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        return
    if context.log_level < log_level:
        return
    print(f"{_prefix(context, log_level, pass_name)}{message}", file=sys.stderr)


def log_error(context: Optional[CompilationContext], message: str, pass_name: Optional[str] = None) -> None:
    log(context, LogLevel.ERROR, message, pass_name)


def log_warning(context: Optional[CompilationContext], message: str, pass_name: Optional[str] = None) -> None:
    log(context, LogLevel.WARNING, message, pass_name)


def log_info(context: Optional[CompilationContext], message: str, pass_name: Optional[str] = None) -> None:
    log(context, LogLevel.INFO, message, pass_name)


def log_debug(context: Optional[CompilationContext], message: str, pass_name: Optional[str] = None) -> None:
    log(context, LogLevel.DEBUG, message, pass_name)


def log_stage(context: Optional[CompilationContext], stage: str, pass_name: Optional[str] = None) -> None:
    """
    Log the start of a pass, naming the source file when the context has one:
    `Analyzing...` or `Analyzing 'main.olv'...`.
    """
    filename = context.filename if context is not None else None
    if filename:
        log(context, LogLevel.INFO, f"{stage} '{filename}'...", pass_name)
    else:
        log(context, LogLevel.INFO, f"{stage}...", pass_name)


def log_counts(context: Optional[CompilationContext], pass_name: str, **counts: int) -> None:
    """
    Log a pass's end-of-run counters at DEBUG, e.g. `[optimize] folded=2 elided=1`.
    """
    summary = " ".join(f"{name}={value}" for name, value in counts.items())
    log(context, LogLevel.DEBUG, summary, pass_name)
