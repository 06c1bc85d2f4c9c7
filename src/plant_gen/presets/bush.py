from typing import List

from ..engine import PrimitiveType, Rule
from ..material import Material
from .registry import PlantPreset, Season, SeasonalMaterials
from .utils import RGB, add_rule, make_material

PARAMS = ["len", "thick"]

BRIGHT_GREENS = [
    make_material((0.557, 0.678, 0.224), (0.22, 0.27, 0.09), (0.2, 0.2, 0.2), 15.0),
    make_material((0.522, 0.620, 0.247), (0.21, 0.25, 0.10), (0.2, 0.2, 0.2), 15.0),
]


def _petal(diffuse: RGB, ambient: RGB) -> Material:
    return make_material(diffuse, ambient, (0.4, 0.4, 0.4), 8.0)


def create_bush_preset() -> PlantPreset:
    rules: List[Rule] = []

    add_rule(
        rules,
        "A",
        "[&F(len,thick)L(1)A(len*0.9,thick*0.7)]/////"
        "[^+F(len*0.9,thick*0.7)L(1)A(len*0.81,thick*0.49)]/////"
        "[&-F(len*0.81,thick*0.49)L(1)A(len*0.73,thick*0.34)]",
        1.0,
        PARAMS,
        "thick > 0.05",
    )
    # Tips, some of them flowering
    add_rule(rules, "A", "[^^L(1)]//[&+L(1)]///[^-W(0.5)]", 0.3, PARAMS, "thick <= 0.05")
    add_rule(rules, "A", "[^^L(1)]//[&+L(1)]///[^-L(1)]///[&L(1)]", 0.7, PARAMS, "thick <= 0.05")

    add_rule(rules, "F", "S(len,thick)/////F(len*0.9,thick*0.85)", 1.0, PARAMS, "thick > 0.05")
    add_rule(rules, "F", "F(len*0.5,thick)L(1)", 1.0, PARAMS, "thick <= 0.05")

    add_rule(rules, "S", "F(len,thick)L(1)", 1.0, PARAMS, "thick > 0.05")
    add_rule(rules, "S", "L(1)", 1.0, PARAMS, "thick <= 0.05")

    return PlantPreset(
        name="bush",
        axiom="A(0.5,0.7)",
        rules=rules,
        iterations=7,
        angle=22.5,
        step=1.0,
        stem_primitive=PrimitiveType.CYLINDER,
        leaf_primitive=PrimitiveType.CONE,
        stem_material=make_material((0.4, 0.28, 0.18), (0.16, 0.11, 0.07), (0.1, 0.1, 0.1), 5.0),
        seasonal_materials={
            Season.SUMMER: SeasonalMaterials(
                leaf_materials=BRIGHT_GREENS,
                flower_mesh_file="meshes/Lilly.obj",
                flower_materials=[
                    _petal((0.98, 0.98, 0.95), (0.5, 0.5, 0.48)),
                    _petal((1.0, 1.0, 0.97), (0.5, 0.5, 0.49)),
                    _petal((1.0, 0.88, 0.9), (0.5, 0.44, 0.45)),
                    _petal((0.85, 0.92, 1.0), (0.43, 0.46, 0.5)),
                    _petal((1.0, 1.0, 0.8), (0.5, 0.5, 0.4)),
                ],
            ),
            Season.SPRING: SeasonalMaterials(
                leaf_materials=BRIGHT_GREENS,
                flower_mesh_file="meshes/Lilly.obj",
                flower_materials=[
                    _petal((1.0, 0.85, 0.9), (0.5, 0.43, 0.45)),
                    _petal((0.98, 0.75, 0.82), (0.49, 0.38, 0.41)),
                    _petal((1.0, 0.55, 0.7), (0.5, 0.28, 0.35)),
                    _petal((0.9, 0.75, 1.0), (0.45, 0.38, 0.5)),
                    _petal((1.0, 0.8, 0.7), (0.5, 0.4, 0.35)),
                    _petal((1.0, 0.98, 0.98), (0.5, 0.49, 0.49)),
                ],
            ),
            Season.FALL: SeasonalMaterials(
                leaf_materials=[
                    make_material((0.5, 0.5, 0.15), (0.2, 0.2, 0.06), (0.15, 0.15, 0.15), 10.0),
                    make_material((0.55, 0.45, 0.12), (0.22, 0.18, 0.05), (0.15, 0.15, 0.15), 10.0),
                    make_material((0.45, 0.4, 0.1), (0.18, 0.16, 0.04), (0.15, 0.15, 0.15), 10.0),
                ],
            ),
            Season.WINTER: SeasonalMaterials(has_leaves=False),
        },
    )
