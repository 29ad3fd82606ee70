#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import re

import pytest

from conftest import PROJECT_ROOT, program, lit, ref, bind, binop, call, stmt, ret, while_, if_, func, has_error_code
from olive_ast import Block, ForStmt, RangeClause
from olive_diagnostics import DIAGNOSTIC_CODE_FAMILIES, Diagnostic
from olive_types import INT

TRIGGERS = {
    "TYP-0010": lambda: program(while_(1, stmt(1))),
    "TYP-0011": lambda: program(if_(("yes", [stmt(1)]))),
    "TYP-0020": lambda: program(stmt(binop("<", "a", 1))),
    "TYP-0021": lambda: program(stmt(binop("==", 1, "1"))),
    "TYP-0022": lambda: program(stmt(binop("and", 1, True))),
    "TYP-0023": lambda: program(stmt(binop("*", 1.0, 2.0))),
    "TYP-0030": lambda: program(bind("x", 1), stmt(call("x"))),
    "TYP-0031": lambda: program(stmt(call("print", 42))),
    "TYP-0040": lambda: program(bind("n", 1, mutable=True), bind("n", 1.5, mutable=True)),
    "TYP-0050": lambda: program(ForStmt("i", RangeClause(lit("a"), lit(3)), Block([]))),
    "RES-0010": lambda: program(stmt(ref("nowhere"))),
    "RES-0020": lambda: program(bind("x", 1), bind("x", 2)),
    "RES-0021": lambda: program(bind("x", 1), bind("x", 2, mutable=True)),
    "ARI-0010": lambda: program(bind(["a", "b"], 1)),
    "ARI-0020": lambda: program(func("f", [("a", INT)]), stmt(call("f"))),
    "CTX-0010": lambda: program(while_(True, ret())),
}


def _all_codes() -> list[str]:
    codes: list[str] = []
    for family in DIAGNOSTIC_CODE_FAMILIES.values():
        codes.extend(family)
    return codes


@pytest.mark.parametrize("code", _all_codes())
def test_diagnostic_code_triggers(code, compile_js):
    result = compile_js(TRIGGERS[code]())

    assert result.has_errors()
    assert len(result.diagnostics) == 1
    assert has_error_code(result.diagnostics, code)
    assert result.diagnostics[0].code == code
    assert result.code is None


def test_every_code_in_sources_is_registered():
    registered = set(_all_codes())
    code_re = re.compile(r"\[([A-Z]{3}-\d{4})]")

    used = set()
    for path in PROJECT_ROOT.glob("olive_*.py"):
        for code in code_re.findall(path.read_text(encoding="utf-8")):
            if not code.startswith("ICE-"):
                used.add(code)

    assert used == registered


def test_codes_are_unique():
    codes = _all_codes()
    assert len(codes) == len(set(codes))


def test_diagnostic_format():
    diag = Diagnostic("error", "[RES-0010] identifier 'x' has not been declared")
    assert diag.format() == "error: [RES-0010] identifier 'x' has not been declared"
    assert diag.code == "RES-0010"

    located = Diagnostic("error", "boom", line=2, column=5)
    assert located.format() == ":2:5: error: boom"
    assert located.code is None


def test_diagnostic_format_with_filename(tmp_path):
    path = tmp_path / "prog.olv"
    diag = Diagnostic("error", "[CTX-0010] x", filename=str(path), line=1, column=1)

    assert diag.format() == f"{path}:1:1: error: [CTX-0010] x"
