"""Top-level pytest configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest


def pytest_collection_modifyitems(config: Any, items: list[Any]) -> None:  # pragma: no cover
    """Apply directory markers.

    Keeps ``-m unit`` / ``-m integration`` selection consistent even if a file
    forgets its module-level mark.
    """
    root = Path(str(config.rootpath)).resolve()

    for item in items:
        try:
            rel = Path(str(item.fspath)).resolve().relative_to(root)
        except ValueError:
            continue

        rel_path = rel.as_posix()

        if rel_path.startswith("tests/integration/"):
            item.add_marker(pytest.mark.integration)
        elif rel_path.startswith("tests/unit/"):
            item.add_marker(pytest.mark.unit)
        elif rel_path.startswith("tests/property/"):
            item.add_marker(pytest.mark.property)
