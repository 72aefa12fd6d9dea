#!/usr/bin/env python3
"""Check chatfilter's layer import boundaries.

Layering rules:
- domain/: models, errors and normalization; imports no other chatfilter layer
- application/: ports and services; imports domain/ only
- infrastructure/: adapters, logging, metrics; imports domain/ and application/
- config/: settings; imports domain/ only
- bootstrap/: wiring; may import every other layer

Usage:
    python scripts/check_imports.py [package_directory]

Exit codes:
    0: No violations found
    1: Violations found
"""
import ast
import sys
from pathlib import Path

PACKAGE_NAME = "chatfilter"

# Lower number = more inner layer
LAYER_HIERARCHY: dict[str, int] = {
    "domain": 0,
    "application": 1,
    "config": 1,
    "infrastructure": 2,
    "bootstrap": 3,
}

ALLOWED_IMPORTS: dict[str, set[str]] = {
    "domain": set(),
    "application": {"domain"},
    "config": {"domain"},
    "infrastructure": {"domain", "application"},
    "bootstrap": {"domain", "application", "config", "infrastructure"},
}


def get_import_module(node: ast.Import | ast.ImportFrom) -> str | None:
    """Extract the module name from an import statement."""
    if isinstance(node, ast.ImportFrom):
        return node.module
    if isinstance(node, ast.Import) and node.names:
        return node.names[0].name
    return None


def get_file_layer(py_file: Path, package_dir: Path) -> str | None:
    """Layer a file belongs to, or None for files outside every layer."""
    try:
        parts = py_file.relative_to(package_dir).parts
    except ValueError:
        return None
    if len(parts) < 2:
        return None
    return parts[0] if parts[0] in LAYER_HIERARCHY else None


def import_violation(module: str, file_layer: str) -> str | None:
    """Error message if ``module`` may not be imported from ``file_layer``."""
    parts = module.split(".")
    if len(parts) < 2 or parts[0] != PACKAGE_NAME:
        return None

    target_layer = parts[1]
    if target_layer not in LAYER_HIERARCHY or target_layer == file_layer:
        return None
    if target_layer not in ALLOWED_IMPORTS[file_layer]:
        return f"{file_layer} layer cannot import from {target_layer}"
    return None


def check_file_imports(py_file: Path, package_dir: Path) -> list[tuple[str, int, str]]:
    """Check a single file for import boundary violations.

    Returns:
        List of (file_path, line_number, violation_message) tuples
    """
    file_layer = get_file_layer(py_file, package_dir)
    if file_layer is None:
        return []

    try:
        tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    except (SyntaxError, UnicodeDecodeError) as e:
        print(f"Warning: Could not parse {py_file}: {e}", file=sys.stderr)
        return []

    violations: list[tuple[str, int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, (ast.Import, ast.ImportFrom)):
            module = get_import_module(node)
            if module:
                message = import_violation(module, file_layer)
                if message:
                    violations.append((str(py_file), node.lineno, message))
    return violations


def check_import_boundaries(package_dir: Path) -> list[tuple[str, int, str]]:
    """Check every module under ``package_dir``."""
    violations: list[tuple[str, int, str]] = []
    if not package_dir.exists():
        print(f"Error: Package directory '{package_dir}' does not exist", file=sys.stderr)
        return violations

    for py_file in sorted(package_dir.rglob("*.py")):
        violations.extend(check_file_imports(py_file, package_dir))
    return violations


def format_violations(violations: list[tuple[str, int, str]]) -> str:
    """Format violations for human-readable output."""
    if not violations:
        return ""

    lines = ["Import boundary violations found:", ""]
    for file_path, line_no, message in sorted(violations):
        lines.append(f"  {file_path}:{line_no}: {message}")
    lines.append("")
    lines.append(f"Total: {len(violations)} violation(s)")
    return "\n".join(lines)


def main() -> int:
    """Main entry point.

    Returns:
        0 if no violations, 1 if violations found
    """
    if len(sys.argv) > 1:
        package_dir = Path(sys.argv[1])
    else:
        package_dir = Path(__file__).parent.parent / PACKAGE_NAME

    violations = check_import_boundaries(package_dir)
    if violations:
        print(format_violations(violations))
        return 1

    print("No import boundary violations found.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
