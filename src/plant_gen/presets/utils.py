from typing import List, Optional, Sequence, Tuple

from ..engine import Rule
from ..material import Material, TextureMap

RGB = Tuple[float, float, float]


def make_material(diffuse: RGB, ambient: RGB, specular: RGB, shininess: float) -> Material:
    return Material(
        diffuse=(*diffuse, 1.0),
        ambient=(*ambient, 1.0),
        specular=(*specular, 1.0),
        shininess=shininess,
    )


def make_stem_material(
    diffuse: RGB,
    ambient: RGB,
    specular: RGB,
    shininess: float,
    texture_file: str = "",
    normal_map_file: str = "",
    blend: float = 0.5,
) -> Material:
    material = make_material(diffuse, ambient, specular, shininess)
    update = {}
    if texture_file:
        update["texture_map"] = TextureMap(is_used=True, filename=texture_file)
        update["blend"] = blend
    if normal_map_file:
        update["normal_map"] = TextureMap(is_used=True, filename=normal_map_file)
    return material.model_copy(update=update)


def add_rule(
    rules: List[Rule],
    input: str,
    output: str,
    probability: float = 1.0,
    params: Optional[Sequence[str]] = None,
    condition: str = "",
) -> None:
    rules.append(
        Rule(
            input=input,
            output=output,
            probability=probability,
            params=list(params or []),
            condition=condition,
        )
    )
