"""
core/data.py — TOML → catalog loader

Reads static definition files (disasters, research nodes, trade routes,
buildings) into read-only dataclasses.  Each top-level table becomes one
definition keyed by its table name.

The mapping from sub-table keys to component classes lives here:

    loader = CatalogLoader(NaturalDisaster)
    loader.register("effects", DisasterEffects)   # [id.effects] → DisasterEffects
    disasters = loader.load("data/disasters.toml")  # {id: NaturalDisaster}

Arrays become tuples and unregistered tables read-only mappings, so a
loaded definition cannot be edited in place.
"""

from __future__ import annotations
try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib
from pathlib import Path
from dataclasses import fields
from types import MappingProxyType


DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def read_table(path: str | Path) -> dict:
    """Parse a TOML file, or return ``{}`` if it does not exist."""
    path = Path(path)
    if not path.exists():
        print(f"[DATA] {path} not found, catalog is empty")
        return {}
    with open(path, "rb") as f:
        return tomllib.load(f)


class CatalogLoader:
    def __init__(self, root_type: type, id_field: str = "id"):
        self.root_type = root_type
        self.id_field = id_field
        self._registry: dict[str, type] = {}

    def register(self, key: str, comp_type: type):
        """Map a sub-table (or array of tables) to a dataclass.

        In the TOML file:
            [earthquake.effects]
            building_damage = 40

        With register("effects", DisasterEffects), the definition gets
        ``effects=DisasterEffects(building_damage=40)``.  An array of
        tables (``[[metropolis.goods]]``) becomes a tuple of instances.
        """
        self._registry[key] = comp_type

    def build(self, def_id: str, section: dict):
        kwargs: dict = {self.id_field: def_id}
        for key, value in section.items():
            comp_type = self._registry.get(key)
            if comp_type is not None and isinstance(value, dict):
                kwargs[key] = build_component(comp_type, value)
            elif comp_type is not None and isinstance(value, list):
                kwargs[key] = tuple(build_component(comp_type, v)
                                    for v in value if isinstance(v, dict))
            else:
                kwargs[key] = _freeze(value)
        return build_component(self.root_type, kwargs)

    def load(self, path: str | Path) -> dict:
        """Load a TOML file. Returns ``{id: definition}`` in file order."""
        data = read_table(path)
        catalog: dict = {}
        for def_id, section in data.items():
            if not isinstance(section, dict):
                continue
            catalog[def_id] = self.build(def_id, section)
        if data:
            print(f"[DATA] Loaded {len(catalog)} {self.root_type.__name__} "
                  f"definitions from {Path(path).name}")
        return catalog


def build_component(comp_type: type, kwargs: dict):
    """Build a dataclass instance, skipping unknown fields."""
    valid = {f.name for f in fields(comp_type)} if hasattr(comp_type, '__dataclass_fields__') else set()
    if valid:
        filtered = {k: _freeze(v) for k, v in kwargs.items() if k in valid}
        return comp_type(**filtered)
    return comp_type(**kwargs)


def _freeze(value):
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    return value
