import logging
import math
from enum import Enum
from typing import Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..engine import Grammar, PrimitiveType, Rule
from ..engine.grammar import Vector3, normalize_initial_left
from ..material import Material, default_lsystem_material

logger = logging.getLogger(__name__)


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


class SeasonalMaterials(BaseModel):
    model_config = ConfigDict(frozen=True)

    leaf_materials: List[Material] = Field(default_factory=list)
    flower_materials: List[Material] = Field(default_factory=list)
    flower_mesh_file: str = Field(default="", description="Empty when the season has no flowers")
    has_leaves: bool = True


class PlantPreset(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    axiom: str
    rules: List[Rule] = Field(default_factory=list)
    iterations: int = Field(default=0, ge=0)
    angle: float = Field(default=25.0, description="Default turn angle in degrees")
    step: float = 1.0
    initial_left: Vector3 = (-1.0, 0.0, 0.0)

    stem_primitive: PrimitiveType = PrimitiveType.CYLINDER
    leaf_primitive: PrimitiveType = PrimitiveType.CONE
    stem_material: Material = Field(default_factory=default_lsystem_material)
    seasonal_materials: Dict[Season, SeasonalMaterials] = Field(default_factory=dict)

    @field_validator("initial_left")
    @classmethod
    def _check_initial_left(cls, value: Vector3) -> Vector3:
        return normalize_initial_left(value)


def _resolve(path: str, base_path: str) -> str:
    if path and base_path:
        return f"{base_path}/{path}"
    return path


def create_lsystem_data(
    preset: PlantPreset, season: Season = Season.SUMMER, base_path: str = ""
) -> Grammar:
    """Grammar for ``preset`` dressed in the materials of ``season``.

    A missing season falls back to summer. File references are prefixed
    with ``base_path`` when one is given.
    """
    seasonal = preset.seasonal_materials.get(season)
    if seasonal is None:
        logger.warning(
            "Preset %r has no %s materials, using summer", preset.name, season.value
        )
        seasonal = preset.seasonal_materials.get(Season.SUMMER)
    if seasonal is None:
        logger.error("Preset %r has no seasonal materials", preset.name)
        seasonal = SeasonalMaterials(has_leaves=False)

    return Grammar(
        axiom=preset.axiom,
        rules=preset.rules,
        iterations=preset.iterations,
        angle=math.radians(preset.angle),
        step=preset.step,
        initial_left=preset.initial_left,
        stem_primitive=preset.stem_primitive,
        leaf_primitive=preset.leaf_primitive,
        stem_material=preset.stem_material.with_base_path(base_path),
        leaf_materials=seasonal.leaf_materials if seasonal.has_leaves else [],
        flower_materials=seasonal.flower_materials,
        flower_mesh_file=_resolve(seasonal.flower_mesh_file, base_path),
    )


class PresetRegistry(BaseModel):
    """Named catalogue of plant presets. Build it once and pass it around."""

    model_config = ConfigDict(frozen=True)

    presets: Mapping[str, PlantPreset] = Field(default_factory=dict)

    @classmethod
    def from_presets(cls, presets: List[PlantPreset]) -> "PresetRegistry":
        return cls(presets={preset.name: preset for preset in presets})

    def get(self, name: str) -> Optional[PlantPreset]:
        return self.presets.get(name, None)

    def names(self) -> List[str]:
        return sorted(self.presets)

    def merged(self, *presets: PlantPreset) -> "PresetRegistry":
        """New registry with ``presets`` added, replacing any with the same name."""
        combined = dict(self.presets)
        combined.update((preset.name, preset) for preset in presets)
        return PresetRegistry(presets=combined)

    def create_lsystem_data(
        self,
        preset: Union[str, PlantPreset],
        season: Season = Season.SUMMER,
        base_path: str = "",
    ) -> Grammar:
        if isinstance(preset, str):
            found = self.get(preset)
            if found is None:
                raise KeyError(f"Unknown preset {preset!r}, available: {self.names()}")
            preset = found
        return create_lsystem_data(preset, season, base_path)
