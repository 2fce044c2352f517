"""
Tests for the start-up file check in main.py.

main.py imports the Qt UI at module level, so the module list is read from its source
instead of importing it.
"""

import ast
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent


def required_modules():
    tree = ast.parse((PROJECT_ROOT / "main.py").read_text(encoding="utf-8"))
    for node in tree.body:
        if isinstance(node, ast.Assign) and any(
            isinstance(target, ast.Name) and target.id == "REQUIRED_MODULES" for target in node.targets
        ):
            return ast.literal_eval(node.value)
    raise AssertionError("REQUIRED_MODULES not found in main.py")


def test_every_package_module_is_checked():
    package_modules = {path.name for path in (PROJECT_ROOT / "calcpad").glob("*.py")}
    assert set(required_modules()) == package_modules


def test_no_duplicates():
    modules = required_modules()
    assert len(modules) == len(set(modules))
