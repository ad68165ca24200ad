from __future__ import annotations

import ast
from pathlib import Path


def _semrel_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _direct_subprocess_calls(tree: ast.AST) -> list[int]:
    lines: list[int] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        func = node.func
        if not isinstance(func, ast.Attribute):
            continue
        if func.attr not in {"run", "call", "check_call", "check_output", "Popen"}:
            continue
        if not isinstance(func.value, ast.Name) or func.value.id != "subprocess":
            continue
        lines.append(node.lineno)
    return lines


def test_direct_subprocess_usage_is_constrained_to_process_module() -> None:
    root = _semrel_root()
    allowlist = {"platform/process.py"}

    offenders: list[str] = []
    for file_path in sorted(root.rglob("*.py")):
        rel = file_path.relative_to(root)
        if rel.parts[0] in {"test", "__pycache__"}:
            continue
        if rel.as_posix() in allowlist:
            continue

        tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
        for line in _direct_subprocess_calls(tree):
            offenders.append(f"{rel}:{line}: direct subprocess call outside allowlist")

    assert not offenders, "Subprocess policy violations:\n" + "\n".join(offenders)
