from pathlib import Path


ALLOWED_TOP_LEVEL_PY_FILES = set()


def test_no_rogue_python_modules():
    """Fail if stray *.py files live at repo root (outside src/)."""
    repo_root = Path(__file__).resolve().parent.parent

    for py_file in repo_root.glob("*.py"):
        if py_file.name in ALLOWED_TOP_LEVEL_PY_FILES:
            continue
        raise AssertionError(
            f"Unexpected top-level python module detected: {py_file.name}. "
            "Move it under src/fsgate/ or delete the duplicate."
        )
