"""Loading grammars and presets from TOML files.

A preset file mirrors :class:`PlantPreset` (angle in degrees)::

    name = "fern"
    axiom = "X"
    iterations = 4
    angle = 25.0

    [[rules]]
    input = "X"
    output = "F[+X][-X]FX"

    [seasonal_materials.summer]
    flower_mesh_file = ""

A grammar file mirrors :class:`Grammar`; give the angle either as
``angle_degrees`` or as ``angle`` in radians.
"""

import math
from pathlib import Path
from typing import Any, Dict, Iterable, Union

import toml
from pydantic import TypeAdapter, ValidationError

from .engine import Grammar
from .presets import PlantPreset, PresetRegistry, default_registry

PathLike = Union[str, Path]

_preset_adapter = TypeAdapter(PlantPreset)
_grammar_adapter = TypeAdapter(Grammar)


class ConfigError(ValueError):
    pass


def _load_toml(path: PathLike) -> Dict[str, Any]:
    with open(path, "r") as f:
        try:
            return toml.load(f)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def load_preset(path: PathLike) -> PlantPreset:
    data = _load_toml(path)
    data.setdefault("name", Path(path).stem)
    try:
        return _preset_adapter.validate_python(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid preset in {path}: {e}") from e


def load_grammar(path: PathLike) -> Grammar:
    data = _load_toml(path)
    if "angle_degrees" in data:
        if "angle" in data:
            raise ConfigError(f"{path}: set either 'angle' or 'angle_degrees', not both")
        data["angle"] = math.radians(data.pop("angle_degrees"))
    try:
        return _grammar_adapter.validate_python(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid grammar in {path}: {e}") from e


def load_registry(
    paths: Iterable[PathLike], include_defaults: bool = True
) -> PresetRegistry:
    """Built-in presets (optionally) plus the presets in ``paths``; files win on name clashes."""
    registry = default_registry() if include_defaults else PresetRegistry()
    return registry.merged(*(load_preset(path) for path in paths))
