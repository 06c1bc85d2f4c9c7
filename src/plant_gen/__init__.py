from .engine import (
    ConditionWarning,
    ExpressionError,
    Grammar,
    LSystem,
    PrimitiveType,
    Rule,
    Symbol,
    expand,
    tokenize,
)
from .material import Material, TextureMap
from .transform_3d import Transform3D
from .turtle import PlantGeometry, StemData, TurtleState, interpret
from .plant import generate_plant
from .instancing import ShapeInstance, build_shape_instances
from .presets import PlantPreset, PresetRegistry, Season, default_registry

__all__ = [
    "ConditionWarning",
    "ExpressionError",
    "Grammar",
    "LSystem",
    "PrimitiveType",
    "Rule",
    "Symbol",
    "expand",
    "tokenize",
    "Material",
    "TextureMap",
    "Transform3D",
    "PlantGeometry",
    "StemData",
    "TurtleState",
    "interpret",
    "generate_plant",
    "ShapeInstance",
    "build_shape_instances",
    "PlantPreset",
    "PresetRegistry",
    "Season",
    "default_registry",
]
