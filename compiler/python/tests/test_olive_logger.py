#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from conftest import program, bind
from olive_context import CompilationContext, LogLevel
from olive_driver import OliveDriver
from olive_logger import log, log_counts, log_debug, log_info, log_stage


def test_level_filtering(capsys):
    context = CompilationContext(log_level=LogLevel.INFO)
    log_info(context, "shown")
    log_debug(context, "hidden")

    assert capsys.readouterr().err == "shown\n"


def test_pass_name_is_tagged(capsys):
    context = CompilationContext(log_level=LogLevel.DEBUG)
    log_debug(context, "Bound x: int", "analyze")

    assert capsys.readouterr().err == "[analyze] Bound x: int\n"


def test_rich_format_puts_level_before_pass(capsys):
    context = CompilationContext(log_level=LogLevel.INFO, log_rich_format=True)
    log_info(context, "Optimizing...", "optimize")

    err = capsys.readouterr().err
    assert err.endswith(" [INFO] [optimize] Optimizing...\n")


def test_stage_names_the_source_file(capsys):
    context = CompilationContext(log_level=LogLevel.INFO, filename="main.olv")
    log_stage(context, "Analyzing", "analyze")
    log_stage(CompilationContext(log_level=LogLevel.INFO), "Analyzing")

    assert capsys.readouterr().err == "[analyze] Analyzing 'main.olv'...\nAnalyzing...\n"


def test_counts_are_logged_at_debug(capsys):
    log_counts(CompilationContext(log_level=LogLevel.INFO), "generate", lines=3)
    assert capsys.readouterr().err == ""

    log_counts(CompilationContext(log_level=LogLevel.DEBUG), "generate", lines=3, stubs=2)
    assert capsys.readouterr().err == "[generate] lines=3 stubs=2\n"


def test_missing_context_still_prints(capsys):
    log(None, LogLevel.DEBUG, "orphan")

    assert capsys.readouterr().err == "No context provided for logging.\norphan\n"


def test_compile_reports_generated_line_count(capsys):
    OliveDriver(CompilationContext(log_level=LogLevel.DEBUG)).compile(program(bind("x", 1)))

    assert "[generate] lines=3" in capsys.readouterr().err
