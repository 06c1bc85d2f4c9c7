from typing import List

from ..engine import PrimitiveType, Rule
from .registry import PlantPreset, Season, SeasonalMaterials
from .utils import add_rule, make_material


def create_flower_plant_preset() -> PlantPreset:
    rules: List[Rule] = []

    # P: plant, I: internode, S: segment, K: leaf, O: flower stalk, D: stalk body
    add_rule(rules, "P", "I+[P+O]--//[--K]I[++K]-[PO]++PO", 0.4)
    add_rule(rules, "P", "I+[P+O]--//[--K]I[++K]-[P]++PO", 0.3)
    add_rule(rules, "P", "I++[P+O]---//[--K]I[+++K]-[PO]+PO", 0.2)
    add_rule(rules, "P", "I[++K][-K]+[P]//I-[PO]++P", 0.1)

    add_rule(rules, "I", "FS[//&&K][//^^K]FS", 0.5)
    add_rule(rules, "I", "FS[//&K]FS[//^K]", 0.3)
    add_rule(rules, "I", "FSF[//&&K][//^^K]S", 0.2)

    add_rule(rules, "S", "SFS", 0.5)
    add_rule(rules, "S", "SF", 0.3)
    add_rule(rules, "S", "SFFS", 0.2)

    add_rule(rules, "K", "L(1)", 0.5)
    add_rule(rules, "K", "L(1.2)", 0.25)
    add_rule(rules, "K", "L(0.8)", 0.25)

    add_rule(rules, "O", "[&&&D/////////////////W(0.15)]", 0.6)
    add_rule(rules, "O", "[&&D///////////////W(0.12)]", 0.25)
    add_rule(rules, "O", "[&&&&D///////////////////W(0.18)]", 0.15)

    add_rule(rules, "D", "FF", 0.6)
    add_rule(rules, "D", "FFF", 0.25)
    add_rule(rules, "D", "F", 0.15)

    return PlantPreset(
        name="flower_plant",
        axiom="P",
        rules=rules,
        iterations=5,
        angle=18.0,
        step=0.2,
        stem_primitive=PrimitiveType.CYLINDER,
        leaf_primitive=PrimitiveType.CONE,
        stem_material=make_material((0.2, 0.35, 0.1), (0.08, 0.14, 0.04), (0.1, 0.1, 0.1), 5.0),
        seasonal_materials={
            Season.SUMMER: SeasonalMaterials(
                leaf_materials=[
                    make_material((0.2, 0.55, 0.15), (0.08, 0.22, 0.06), (0.15, 0.15, 0.15), 10.0),
                    make_material((0.18, 0.5, 0.12), (0.07, 0.2, 0.05), (0.15, 0.15, 0.15), 10.0),
                ],
                flower_mesh_file="meshes/Lilly.obj",
                flower_materials=[
                    make_material((0.95, 0.95, 0.9), (0.5, 0.5, 0.45), (0.4, 0.4, 0.4), 8.0),
                    make_material((1.0, 0.98, 0.92), (0.5, 0.49, 0.46), (0.4, 0.4, 0.4), 8.0),
                ],
            ),
            Season.SPRING: SeasonalMaterials(
                leaf_materials=[
                    make_material((0.22, 0.58, 0.16), (0.09, 0.23, 0.06), (0.15, 0.15, 0.15), 10.0),
                    make_material((0.2, 0.52, 0.14), (0.08, 0.21, 0.06), (0.15, 0.15, 0.15), 10.0),
                ],
                flower_mesh_file="meshes/Lilly.obj",
                flower_materials=[
                    make_material((1.0, 0.95, 0.3), (0.5, 0.48, 0.15), (0.4, 0.4, 0.3), 8.0),
                    make_material((1.0, 0.88, 0.2), (0.5, 0.44, 0.1), (0.4, 0.4, 0.3), 8.0),
                ],
            ),
            Season.FALL: SeasonalMaterials(
                leaf_materials=[
                    make_material((0.35, 0.4, 0.12), (0.14, 0.16, 0.05), (0.15, 0.15, 0.15), 10.0),
                    make_material((0.4, 0.38, 0.1), (0.16, 0.15, 0.04), (0.15, 0.15, 0.15), 10.0),
                ],
                flower_mesh_file="meshes/Lilly.obj",
                flower_materials=[
                    make_material((1.0, 0.55, 0.15), (0.5, 0.28, 0.08), (0.4, 0.35, 0.3), 8.0),
                    make_material((0.95, 0.45, 0.1), (0.48, 0.23, 0.05), (0.4, 0.35, 0.3), 8.0),
                ],
            ),
            Season.WINTER: SeasonalMaterials(
                leaf_materials=[
                    make_material((0.25, 0.3, 0.1), (0.1, 0.12, 0.04), (0.1, 0.1, 0.1), 10.0),
                    make_material((0.22, 0.28, 0.08), (0.09, 0.11, 0.03), (0.1, 0.1, 0.1), 10.0),
                ],
            ),
        },
    )
