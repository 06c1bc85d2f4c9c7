from typing import Optional

from .engine import Grammar, expand, make_rng
from .engine.rule import RandomSource
from .turtle import PlantGeometry, interpret


def generate_plant(
    grammar: Grammar,
    seed: RandomSource = None,
    max_length: Optional[int] = None,
) -> PlantGeometry:
    """Expand ``grammar`` and interpret the result with a single random generator.

    The same seed always produces the same geometry.
    """
    rng = make_rng(seed)
    symbols = expand(grammar, rng=rng, max_length=max_length)
    return interpret(grammar, symbols, rng=rng)
