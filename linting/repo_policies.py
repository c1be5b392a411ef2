#!/usr/bin/env python
"""Repository policy checks for the channel_voice package.

Checks (runtime package unless noted):
- one top-level non-dataclass class per file
- `__all__` assigned once, as the last top-level statement (package and tests)
- no top-level function or class defined twice in one module (package and tests)
- at most 300 code lines per file and 60 per function; blank, comment-only and
  docstring lines are not counted, barrel `__init__.py` files are exempt
- no two files in one directory sharing a first underscore-delimited segment
- no function-local imports in the session and runtime layers
- no lazy singleton module state

Run `python linting/repo_policies.py` from anywhere; exits non-zero on violations.
"""

from __future__ import annotations

import ast
import sys
import argparse
import tokenize
from pathlib import Path
from collections import defaultdict
from collections.abc import Callable, Iterator

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = "channel_voice"

FILE_LIMIT = 300
FUNCTION_LIMIT = 60
MIN_PREFIX_PARTS = 2
IMPORT_STABLE_DIRS = ("runtime", "session")
SINGLETON_STATE_NAMES = {"_STATE", "STATE", "_INSTANCE", "INSTANCE"}
SINGLETON_FN_NAMES = {"get_instance", "reset_instance"}

Check = Callable[[Path, ast.Module, str], list[str]]


def _iter_py(base: Path) -> Iterator[Path]:
    if not base.is_dir():
        return
    for path in sorted(base.rglob("*.py")):
        if "__pycache__" not in path.parts:
            yield path


def _parse(path: Path) -> tuple[ast.Module, str] | None:
    try:
        source = path.read_text(encoding="utf-8")
        return ast.parse(source, filename=str(path)), source
    except (OSError, UnicodeDecodeError, SyntaxError):
        return None


def _rel(path: Path) -> str:
    try:
        return str(path.relative_to(ROOT))
    except ValueError:
        return str(path)


def _non_code_lines(path: Path, tree: ast.Module) -> set[int]:
    skipped: set[int] = set()
    try:
        with path.open("rb") as f:
            for tok in tokenize.tokenize(f.readline):
                if tok.type == tokenize.COMMENT:
                    skipped.add(tok.start[0])
    except tokenize.TokenError:
        pass
    for node in ast.walk(tree):
        if not isinstance(node, (ast.Module, ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)) or not node.body:
            continue
        first = node.body[0]
        if isinstance(first, ast.Expr) and isinstance(first.value, ast.Constant) and isinstance(first.value.value, str):
            skipped.update(range(first.lineno, (first.end_lineno or first.lineno) + 1))
    return skipped


def _code_lines(lines: list[str], skipped: set[int], start: int, end: int) -> int:
    return sum(1 for no in range(start, end + 1) if no not in skipped and lines[no - 1].strip())


def _is_dataclass(node: ast.ClassDef) -> bool:
    for decorator in node.decorator_list:
        target = decorator.func if isinstance(decorator, ast.Call) else decorator
        name = target.id if isinstance(target, ast.Name) else getattr(target, "attr", "")
        if name == "dataclass":
            return True
    return False


def _is_barrel_init(path: Path, tree: ast.Module) -> bool:
    if path.name != "__init__.py":
        return False
    for node in tree.body:
        if isinstance(node, (ast.Import, ast.ImportFrom, ast.Pass)):
            continue
        if isinstance(node, ast.Expr) and isinstance(node.value, ast.Constant):
            continue
        if isinstance(node, (ast.Assign, ast.AnnAssign)) and _assigns_all(node):
            continue
        return False
    return True


def _assigns_all(node: ast.stmt) -> bool:
    if isinstance(node, ast.Assign):
        return any(isinstance(t, ast.Name) and t.id == "__all__" for t in node.targets)
    if isinstance(node, (ast.AnnAssign, ast.AugAssign)):
        return isinstance(node.target, ast.Name) and node.target.id == "__all__"
    return False


def check_one_class(path: Path, tree: ast.Module, _source: str) -> list[str]:
    classes = [n.name for n in tree.body if isinstance(n, ast.ClassDef) and not _is_dataclass(n)]
    if len(classes) <= 1:
        return []
    return [f"  {_rel(path)}: {len(classes)} classes ({', '.join(classes)})"]


def check_all_at_bottom(path: Path, tree: ast.Module, _source: str) -> list[str]:
    positions = [i for i, node in enumerate(tree.body) if _assigns_all(node)]
    if not positions:
        return []
    rel = _rel(path)
    if len(positions) > 1 or not isinstance(tree.body[positions[0]], (ast.Assign, ast.AnnAssign)):
        return [f"  {rel}: `__all__` must be set once via a single top-level assignment"]
    return [f"  {rel}:{node.lineno} statement defined after `__all__`" for node in tree.body[positions[0] + 1 :]]


def check_duplicate_defs(path: Path, tree: ast.Module, _source: str) -> list[str]:
    seen: dict[str, int] = {}
    violations: list[str] = []
    for node in tree.body:
        if not isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            continue
        if node.name in seen:
            violations.append(f"  {_rel(path)}:{node.lineno} `{node.name}` shadows the definition at line {seen[node.name]}")
        else:
            seen[node.name] = node.lineno
    return violations


def check_lengths(path: Path, tree: ast.Module, source: str) -> list[str]:
    lines = source.splitlines()
    skipped = _non_code_lines(path, tree)
    violations: list[str] = []
    if not _is_barrel_init(path, tree):
        total = _code_lines(lines, skipped, 1, len(lines))
        if total > FILE_LIMIT:
            violations.append(f"  {_rel(path)}: {total} code lines (limit {FILE_LIMIT})")
    for node in ast.walk(tree):
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            size = _code_lines(lines, skipped, node.lineno, node.end_lineno or node.lineno)
            if size > FUNCTION_LIMIT:
                violations.append(f"  {_rel(path)}:{node.lineno} {node.name} -> {size} code lines (limit {FUNCTION_LIMIT})")
    return violations


def check_local_imports(path: Path, tree: ast.Module, _source: str) -> list[str]:
    violations: list[str] = []
    for scope in ast.walk(tree):
        if not isinstance(scope, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            continue
        for node in ast.walk(scope):
            if isinstance(node, (ast.Import, ast.ImportFrom)):
                violations.append(f"  {_rel(path)}:{node.lineno} local import is forbidden")
    return sorted(set(violations))


def check_singletons(path: Path, tree: ast.Module, _source: str) -> list[str]:
    violations: list[str] = []
    for node in tree.body:
        if isinstance(node, ast.ClassDef) and node.name.endswith("Singleton"):
            violations.append(f"  {_rel(path)}:{node.lineno} class `{node.name}` uses singleton naming")
        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name in SINGLETON_FN_NAMES:
            violations.append(f"  {_rel(path)}:{node.lineno} function `{node.name}` suggests singleton lifecycle")
        elif isinstance(node, ast.Assign) and isinstance(node.value, ast.Constant) and node.value.value is None:
            names = [t.id for t in node.targets if isinstance(t, ast.Name)]
            if any(n in SINGLETON_STATE_NAMES or n.lower().endswith("_instance") for n in names):
                violations.append(f"  {_rel(path)}:{node.lineno} lazy singleton module state: {', '.join(names)}")
    return violations


def check_prefix_collisions(package_dir: Path) -> list[str]:
    violations: list[str] = []
    directories = sorted({p.parent for p in _iter_py(package_dir)})
    for directory in directories:
        groups: dict[str, list[str]] = defaultdict(list)
        for path in directory.glob("*.py"):
            parts = path.stem.split("_")
            if path.name == "__init__.py" or path.stem.startswith("_") or len(parts) < MIN_PREFIX_PARTS:
                continue
            groups[parts[0]].append(path.name)
        for prefix, names in sorted(groups.items()):
            if len(names) > 1:
                violations.append(f"  {_rel(directory)}/: prefix '{prefix}' shared by {', '.join(sorted(names))}")
    return violations


def _run(paths: list[Path], checks: list[Check]) -> list[str]:
    violations: list[str] = []
    for path in paths:
        parsed = _parse(path)
        if parsed is None:
            continue
        tree, source = parsed
        for check in checks:
            violations.extend(check(path, tree, source))
    return violations


def collect_violations(root: Path = ROOT) -> dict[str, list[str]]:
    package_dir = root / PACKAGE
    package_files = list(_iter_py(package_dir))
    stable_files = [p for d in IMPORT_STABLE_DIRS for p in _iter_py(package_dir / d)]
    return {
        "one non-dataclass class per file": _run(package_files, [check_one_class]),
        "__all__ placement": _run(package_files + list(_iter_py(root / "tests")), [check_all_at_bottom]),
        "duplicate definitions": _run(package_files + list(_iter_py(root / "tests")), [check_duplicate_defs]),
        "code length": _run(package_files, [check_lengths]),
        "local imports": _run(stable_files, [check_local_imports]),
        "lazy singletons": _run(package_files, [check_singletons]),
        "prefix collisions": check_prefix_collisions(package_dir),
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run repository policy checks.")
    parser.add_argument("--root", default=str(ROOT), help="Project root (default: repository root)")
    args = parser.parse_args(argv)

    failed = False
    for title, violations in collect_violations(Path(args.root).resolve()).items():
        if not violations:
            continue
        failed = True
        print(f"{title} violations:", file=sys.stderr)
        for violation in violations:
            print(violation, file=sys.stderr)
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
