"""core/tuning.py — Data-driven economy constants.

Degradation rates, cost fractions, disaster thresholds, market
fluctuation and route gates live in ``data/tuning.toml``.  Engines read
them with a default so they run unchanged when the file is missing::

    from core.tuning import get
    rate = get("efficiency.degradation", "tech", 1.5)

Call ``reload()`` to re-read the file while the dashboard is running.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib                # pip install tomli


_data: dict = {}
_path: Path | None = None


def default_path() -> Path:
    """``data/tuning.toml`` next to the ``core`` package."""
    return Path(__file__).resolve().parent.parent / "data" / "tuning.toml"


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*."""
    global _data, _path

    path = default_path() if path is None else Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found, using built-in defaults")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk."""
    load(_path)


def override(values: dict) -> None:
    """Replace the loaded table wholesale (used by tests and the dashboard)."""
    global _data
    _data = dict(values)


def _walk(section_path: str):
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation for nested tables, so
    ``"market.gates"`` looks up ``[market.gates]``.

    >>> get("efficiency", "floor", 20)
    20
    """
    node = _walk(section)
    if isinstance(node, dict):
        return node.get(key, default)
    return default


def section(section_path: str) -> dict:
    """Return an entire section dict (shallow copy), or an empty dict."""
    node = _walk(section_path)
    return dict(node) if isinstance(node, dict) else {}


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
