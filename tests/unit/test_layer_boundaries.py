"""Hexagonal layer rules for the taskflow package.

- domain/ imports nothing from other taskflow layers
- config/ imports from domain/ only
- application/ imports from domain/ and config/ (plus the correlation
  helper used by the logging mixin)
- infrastructure/ never imports from api/ or bootstrap/
"""

import ast
from pathlib import Path

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parents[2] / "taskflow"

ALLOWED_IMPORTS: dict[str, set[str]] = {
    "domain": {"domain"},
    "config": {"config", "domain"},
    "application": {"application", "config", "domain"},
    "infrastructure": {"infrastructure", "application", "config", "domain"},
}

# Modules outside the allowed layers that a layer may still import
EXCEPTIONS: dict[str, set[str]] = {
    "application": {"taskflow.infrastructure.observability.correlation"},
}


def _taskflow_imports(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            modules.append(node.module)
        elif isinstance(node, ast.Import):
            modules.extend(alias.name for alias in node.names)
    return [m for m in modules if m == "taskflow" or m.startswith("taskflow.")]


@pytest.mark.parametrize("layer", sorted(ALLOWED_IMPORTS))
def test_layer_imports_respect_boundaries(layer: str) -> None:
    violations: list[str] = []
    for path in sorted((PACKAGE_ROOT / layer).rglob("*.py")):
        for module in _taskflow_imports(path):
            parts = module.split(".")
            if len(parts) < 2 or module in EXCEPTIONS.get(layer, set()):
                continue
            if parts[1] not in ALLOWED_IMPORTS[layer]:
                violations.append(f"{path.relative_to(PACKAGE_ROOT)}: {module}")

    assert violations == [], "\n".join(violations)


def test_every_layer_exists() -> None:
    for layer in [*ALLOWED_IMPORTS, "api", "bootstrap"]:
        assert (PACKAGE_ROOT / layer / "__init__.py").exists(), layer
