"""Pytest configuration shared by the whole repository."""

import sys
from pathlib import Path

# ``tests``, ``stats`` and ``benchmarks`` are imported as top-level packages
# from the repository root; ``src`` is added so an uninstalled checkout works.
_project_root = Path(__file__).resolve().parent
for _path in (str(_project_root / "src"), str(_project_root)):
    if _path not in sys.path:
        sys.path.insert(0, _path)
