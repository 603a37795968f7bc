"""Architectural tests for the dashboard package.

Static, file/AST-based checks; no application code is executed. They pin
the layering (routes -> logic -> db), keep SQL bound and ordinal writes in
one place, and keep the client package independent of the server.
"""

from __future__ import annotations

import ast
import re
from pathlib import Path
from typing import Iterable, List, Set

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
PKG_DIR = PROJECT_ROOT / "dashboard"


def _parse(path: Path) -> ast.AST:
    try:
        return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except SyntaxError as exc:
        pytest.fail(f"Cannot parse {path}: {exc}")


def _py_files(*parts: str) -> List[Path]:
    root = PKG_DIR.joinpath(*parts)
    return sorted(root.rglob("*.py")) if root.is_dir() else [root]


def _imported_modules(tree: ast.AST) -> Set[str]:
    found: Set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            found.add(node.module)
    return found


def _rel(path: Path) -> str:
    return str(path.relative_to(PROJECT_ROOT))


def _offenders(files: Iterable[Path], banned_prefixes: Iterable[str]) -> List[str]:
    banned = tuple(banned_prefixes)
    bad = []
    for path in files:
        for mod in _imported_modules(_parse(path)):
            if mod in banned or mod.startswith(tuple(b + "." for b in banned)):
                bad.append(f"{_rel(path)} imports {mod}")
    return bad


def test_routes_do_not_touch_the_database_directly():
    assert _offenders(_py_files("routes"), ("sqlalchemy", "dashboard.db")) == []


def test_client_is_independent_of_server_modules():
    banned = (
        "dashboard.routes",
        "dashboard.logic",
        "dashboard.db",
        "dashboard.http",
        "dashboard.main",
        "fastapi",
        "sqlalchemy",
    )
    assert _offenders(_py_files("client"), banned) == []


def test_logic_does_not_depend_on_http_layer():
    assert _offenders(_py_files("logic"), ("fastapi", "starlette", "dashboard.routes", "dashboard.http")) == []


def _sql_text_calls(tree: ast.AST) -> Iterable[ast.Call]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Call):
            fn = node.func
            name = fn.id if isinstance(fn, ast.Name) else getattr(fn, "attr", "")
            if name in {"sql_text", "text"}:
                yield node


def test_reorder_sql_is_static_and_bound():
    tree = _parse(PKG_DIR / "logic" / "order_sequences.py")
    calls = list(_sql_text_calls(tree))
    assert calls, "expected sql_text() statements in order_sequences"
    for call in calls:
        arg = call.args[0] if call.args else None
        assert isinstance(arg, ast.Constant) and isinstance(arg.value, str), (
            f"order_sequences.py:{call.lineno} builds SQL dynamically"
        )


def test_sort_order_updates_live_in_order_sequences():
    pattern = re.compile(r"SET\s+sort_order\s*=", re.IGNORECASE)
    writers = [
        _rel(p)
        for p in _py_files()
        if pattern.search(p.read_text(encoding="utf-8"))
    ]
    assert writers == ["dashboard/logic/order_sequences.py"]


def test_error_responses_go_through_global_handlers():
    offenders = [_rel(p) for p in _py_files("routes") if "JSONResponse" in p.read_text(encoding="utf-8")]
    assert offenders == []


def test_password_hash_is_never_selected_for_customers():
    from_source = (PKG_DIR / "logic" / "repository_customers.py").read_text(encoding="utf-8")
    tree = _parse(PKG_DIR / "logic" / "repository_customers.py")
    for node in ast.walk(tree):
        if isinstance(node, ast.AnnAssign) and getattr(node.target, "id", "") == "CUSTOMER_COLUMNS":
            cols = ast.literal_eval(node.value)
            assert "password_hash" not in cols
            break
    else:
        pytest.fail("CUSTOMER_COLUMNS not found")
    assert "SELECT *" not in from_source
