from typing import List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict

from .engine import Grammar, PrimitiveType, make_rng
from .engine.rule import RandomSource
from .material import Material
from .turtle import PlantGeometry

# Stem size at which textures repeat exactly once
REFERENCE_THICKNESS = 1.0
REFERENCE_LENGTH = 1.0


class ShapeInstance(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    primitive: PrimitiveType
    material: Material
    ctm: np.ndarray
    mesh_file: str = ""


def build_shape_instances(
    grammar: Grammar,
    geometry: PlantGeometry,
    parent_ctm: Optional[np.ndarray] = None,
    rng: RandomSource = None,
) -> List[ShapeInstance]:
    """Pair every emitted transform with a primitive and a material.

    Flowers need both flower materials and a flower mesh; leaves need leaf
    materials (a leafless winter preset has none). Leaf and flower materials
    are picked at random per instance.
    """
    rng = make_rng(rng)
    parent = np.identity(4) if parent_ctm is None else np.asarray(parent_ctm, dtype=float)
    shapes: List[ShapeInstance] = []

    if grammar.flower_materials and grammar.flower_mesh_file:
        for local in geometry.flowers:
            material = grammar.flower_materials[rng.integers(len(grammar.flower_materials))]
            shapes.append(
                ShapeInstance(
                    primitive=PrimitiveType.MESH,
                    material=material,
                    ctm=parent @ local,
                    mesh_file=grammar.flower_mesh_file,
                )
            )

    for stem in geometry.stems:
        material = grammar.stem_material.with_texture_repeat(
            stem.thickness / REFERENCE_THICKNESS, stem.length / REFERENCE_LENGTH
        )
        shapes.append(
            ShapeInstance(
                primitive=grammar.stem_primitive,
                material=material,
                ctm=parent @ stem.transform,
            )
        )

    if grammar.leaf_materials:
        for local in geometry.leaves:
            material = grammar.leaf_materials[rng.integers(len(grammar.leaf_materials))]
            shapes.append(
                ShapeInstance(
                    primitive=grammar.leaf_primitive,
                    material=material,
                    ctm=parent @ local,
                )
            )

    return shapes
