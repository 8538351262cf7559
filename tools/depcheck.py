from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Sequence

SRC_ROOT = Path(__file__).resolve().parents[1] / "src" / "fenui"

FRAMEWORK_MODULES = frozenset(
    {
        "fastapi",
        "starlette",
        "pydantic",
        "sqlalchemy",
        "alembic",
        "redis",
        "httpx",
        "bcrypt",
        "opentelemetry",
        "prometheus_client",
    }
)

# Imports each layer may never reach for, keyed by package directory name.
LAYER_RULES: Mapping[str, frozenset[str]] = {
    "domain": FRAMEWORK_MODULES
    | {"fenui.application", "fenui.infrastructure", "fenui.api", "fenui.client"},
    "application": frozenset(
        {"fastapi", "starlette", "sqlalchemy", "redis", "httpx", "bcrypt"}
    )
    | {"fenui.infrastructure", "fenui.api", "fenui.client"},
    "client": frozenset({"fastapi", "starlette", "sqlalchemy", "redis"})
    | {"fenui.application", "fenui.infrastructure", "fenui.api"},
}

DEFAULT_LAYER = "domain"


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str
    layer: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _is_forbidden(module: str, forbidden: Iterable[str]) -> bool:
    return any(module == name or module.startswith(f"{name}.") for name in forbidden)


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and not node.level:
            yield node.lineno, node.module


def _scan_file(file_path: Path, layer: str) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    forbidden = LAYER_RULES[layer]
    return [
        Violation(file_path=file_path, line=line, module=module, layer=layer)
        for line, module in _imported_modules(tree)
        if _is_forbidden(module, forbidden)
    ]


def find_violations(paths: Sequence[Path], layer: str = DEFAULT_LAYER) -> list[Violation]:
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            violations.extend(_scan_file(file_path, layer))
    return violations


def check_source_tree(src_root: Path = SRC_ROOT) -> list[Violation]:
    violations: list[Violation] = []
    for layer in LAYER_RULES:
        violations.extend(find_violations([src_root / layer], layer))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Layer import policy check for src/fenui."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to every layer under src/fenui.",
    )
    parser.add_argument(
        "--layer",
        choices=sorted(LAYER_RULES),
        default=DEFAULT_LAYER,
        help="Rule set applied to --path entries.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.path:
        violations = find_violations([Path(item) for item in args.path], args.layer)
    else:
        violations = check_source_tree()

    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} [{violation.layer}] -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
