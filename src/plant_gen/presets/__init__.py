from .registry import (
    PlantPreset,
    PresetRegistry,
    Season,
    SeasonalMaterials,
    create_lsystem_data,
)
from .utils import add_rule, make_material, make_stem_material
from .oak_tree import create_oak_tree_preset
from .bush import create_bush_preset
from .flower_plant import create_flower_plant_preset


def default_registry() -> PresetRegistry:
    """Registry holding the built-in presets."""
    return PresetRegistry.from_presets(
        [
            create_oak_tree_preset(),
            create_bush_preset(),
            create_flower_plant_preset(),
        ]
    )


__all__ = [
    "PlantPreset",
    "PresetRegistry",
    "Season",
    "SeasonalMaterials",
    "create_lsystem_data",
    "add_rule",
    "make_material",
    "make_stem_material",
    "create_oak_tree_preset",
    "create_bush_preset",
    "create_flower_plant_preset",
    "default_registry",
]
