import math
from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..material import Material, default_lsystem_material
from .rule import Rule


Vector3 = Tuple[float, float, float]


def normalize_initial_left(value: Vector3) -> Vector3:
    """Unit left vector of the starting frame.

    It must lie along X to stay orthogonal to the initial heading (+Y) and up (+Z).
    """
    x, y, z = value
    if y != 0.0 or z != 0.0 or x == 0.0 or not math.isfinite(x):
        raise ValueError(f"initial_left must be a non-zero vector along X, got {tuple(value)}")
    return (math.copysign(1.0, x), 0.0, 0.0)


class PrimitiveType(str, Enum):
    CUBE = "cube"
    CONE = "cone"
    CYLINDER = "cylinder"
    SPHERE = "sphere"
    MESH = "mesh"


class Grammar(BaseModel):
    """Everything needed to grow one plant: the L-system plus pass-through render data."""

    model_config = ConfigDict(frozen=True)

    axiom: str
    rules: List[Rule] = Field(default_factory=list)
    iterations: int = Field(default=0, ge=0)
    angle: float = Field(default=math.radians(25.0), description="Default turn angle in radians")
    step: float = Field(default=1.0, description="Default segment length")

    stem_primitive: PrimitiveType = PrimitiveType.CYLINDER
    leaf_primitive: PrimitiveType = PrimitiveType.CONE
    stem_material: Material = Field(default_factory=default_lsystem_material)
    leaf_materials: List[Material] = Field(default_factory=list)
    flower_materials: List[Material] = Field(default_factory=list)
    flower_mesh_file: str = ""

    initial_left: Vector3 = Field(
        default=(-1.0, 0.0, 0.0), description="Turtle left vector before any rotation"
    )

    @field_validator("initial_left")
    @classmethod
    def _check_initial_left(cls, value: Vector3) -> Vector3:
        return normalize_initial_left(value)
