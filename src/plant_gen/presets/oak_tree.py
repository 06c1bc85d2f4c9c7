from typing import List

from ..engine import PrimitiveType, Rule
from .registry import PlantPreset, Season, SeasonalMaterials
from .utils import add_rule, make_material, make_stem_material

PARAMS = ["len", "thick", "angle"]

SUMMER_GREENS = [
    make_material((0.557, 0.678, 0.224), (0.22, 0.27, 0.09), (0.2, 0.2, 0.2), 15.0),
    make_material((0.522, 0.620, 0.247), (0.21, 0.25, 0.10), (0.2, 0.2, 0.2), 15.0),
]


def create_oak_tree_preset() -> PlantPreset:
    rules: List[Rule] = []

    # Growing trunk and branches while they are thick enough
    add_rule(
        rules,
        "A",
        "F(len*0.62,thick)[+(angle*0.95)^(6)B(len*1.5,thick*0.4,angle*1.12)]"
        "F(len*0.15,thick)L(1)/(117)[+(angle*1.3)^(12)B(len*1.5,thick*0.4,angle*0.92)]"
        "F(len*0.09,thick)L(1)/(122)[+(angle*0.85)^(3)B(len*1.5,thick*0.4,angle*0.88)]"
        "F(len*0.11,thick)L(1)A(len*0.93,thick*0.55,angle*1.05)",
        0.3,
        PARAMS,
        "thick > 0.05",
    )
    add_rule(
        rules,
        "B",
        "F(len*0.6,thick)L(1)^(6)[+(angle*0.78)B(len*0.88,thick*0.55,angle*0.82)]"
        "F(len*0.1,thick)L(1)/(142)[+(angle*0.62)B(len*0.88,thick*0.55,angle*0.9)]"
        "F(len*0.08,thick)L(1)/(127)[+(angle*0.95)B(len*0.88,thick*0.55,angle*0.88)]"
        "F(len*0.07,thick)L(1)",
        0.3,
        PARAMS,
        "thick > 0.05",
    )
    add_rule(
        rules,
        "B",
        "F(len*0.65,thick)L(1)^(10)[+(angle*1.12)B(len*0.88,thick*0.55,angle*0.98)]"
        "F(len*0.12,thick)L(1)/(135)[+(angle*0.52)B(len*0.88,thick*0.55,angle*0.85)]"
        "F(len*0.09,thick)L(1)/(148)[+(angle*1.18)B(len*0.88,thick*0.55,angle*0.92)]"
        "F(len*0.06,thick)L(1)",
        0.3,
        PARAMS,
        "thick > 0.05",
    )
    add_rule(
        rules,
        "B",
        "F(len*0.45,thick)L(1)^(4)[+(angle*0.92)B(len*0.88,thick*0.55,angle*0.95)]"
        "F(len*0.11,thick)L(1)/(118)[+(angle*0.55)B(len*0.88,thick*0.55,angle*0.92)]"
        "F(len*0.07,thick)L(1)/(155)[+(angle*0.85)B(len*0.88,thick*0.55,angle*0.9)]"
        "F(len*0.05,thick)L(1)",
        0.4,
        PARAMS,
        "thick > 0.05",
    )

    # Terminal tips
    add_rule(
        rules,
        "A",
        "F(len*0.2,thick)[+(angle*0.8)L(1)]F(len*0.15,thick)[/(90)L(1)]"
        "F(len*0.12,thick)[/(180)L(1)]F(len*0.1,thick)[/(270)L(1)]"
        "F(len*0.08,thick)[^(20)L(1)][&(20)]",
        1.0,
        PARAMS,
        "thick <= 0.05",
    )
    add_rule(
        rules,
        "B",
        "F(len*0.15,thick)[+(angle*0.6)L(1)]F(len*0.12,thick)[/(72)L(1)]"
        "F(len*0.1,thick)[/(144)L(1)]F(len*0.08,thick)[/(216)L(1)]"
        "F(len*0.06,thick)[/(288)L(1)]F(len*0.05,thick)[^(15)L(1)][&(15)W(0.5)]",
        0.3,
        PARAMS,
        "thick <= 0.05",
    )
    add_rule(
        rules,
        "B",
        "F(len*0.15,thick)[+(angle*0.6)L(1)]F(len*0.12,thick)[/(72)L(1)]"
        "F(len*0.1,thick)[/(144)L(1)]F(len*0.08,thick)[/(216)L(1)]"
        "F(len*0.06,thick)[/(288)L(1)]F(len*0.05,thick)[^(15)L(1)][&(15)L(1)]",
        0.7,
        PARAMS,
        "thick <= 0.05",
    )

    return PlantPreset(
        name="oak_tree",
        axiom="F(10,3.0)A(4.5,3.0,40)",
        rules=rules,
        iterations=8,
        angle=35.0,
        step=1.0,
        stem_primitive=PrimitiveType.CYLINDER,
        leaf_primitive=PrimitiveType.CONE,
        stem_material=make_stem_material(
            (0.35, 0.2, 0.12),
            (0.15, 0.08, 0.04),
            (0.1, 0.1, 0.1),
            2.0,
            texture_file="textures/pls.jpg",
            normal_map_file="textures/plsN.jpg",
            blend=0.5,
        ),
        seasonal_materials={
            Season.SUMMER: SeasonalMaterials(leaf_materials=SUMMER_GREENS),
            Season.SPRING: SeasonalMaterials(
                leaf_materials=SUMMER_GREENS,
                flower_mesh_file="meshes/Lilly.obj",
                flower_materials=[
                    make_material((0.988, 0.976, 0.910), (0.5, 0.5, 0.5), (0.5, 0.5, 0.5), 3.0),
                    make_material((1.0, 0.8, 0.9), (0.5, 0.4, 0.45), (0.5, 0.5, 0.5), 3.0),
                    make_material((0.95, 0.7, 0.75), (0.47, 0.35, 0.37), (0.5, 0.5, 0.5), 3.0),
                ],
            ),
            Season.FALL: SeasonalMaterials(
                leaf_materials=[
                    make_material((0.922, 0.647, 0.294), (0.37, 0.26, 0.12), (0.2, 0.2, 0.2), 15.0),
                    make_material((0.949, 0.780, 0.161), (0.38, 0.31, 0.06), (0.2, 0.2, 0.2), 15.0),
                    make_material((0.969, 0.596, 0.224), (0.39, 0.24, 0.09), (0.2, 0.2, 0.2), 15.0),
                    make_material((0.969, 0.384, 0.224), (0.39, 0.15, 0.09), (0.2, 0.2, 0.2), 15.0),
                ],
            ),
            Season.WINTER: SeasonalMaterials(has_leaves=False),
        },
    )
