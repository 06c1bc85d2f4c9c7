import logging
from typing import List, Optional

from pydantic import BaseModel

from .grammar import Grammar
from .rule import RandomSource, apply_rules, make_rng
from .symbol import Symbol
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class LSystem(BaseModel):
    grammar: Grammar
    world: Optional[str] = None
    generation: int = 0

    def model_post_init(self, __context) -> None:
        if self.world is None:
            self.world = self.grammar.axiom

    @property
    def symbols(self) -> List[Symbol]:
        return tokenize(self.world)

    def step(self, rng: RandomSource = None, max_length: Optional[int] = None) -> bool:
        """Rewrite every symbol once.

        When the new world would grow past ``max_length`` characters the
        step is abandoned, the world is left as it was and ``False`` is
        returned.
        """
        rng = make_rng(rng)
        rules = self.grammar.rules
        pieces: List[str] = []
        length = 0
        for symbol in self.symbols:
            piece = apply_rules(symbol, rules, rng)
            length += len(piece)
            if max_length is not None and length > max_length:
                logger.warning(
                    "Stopping expansion at generation %d: next generation exceeds %d characters",
                    self.generation,
                    max_length,
                )
                return False
            pieces.append(piece)
        self.world = "".join(pieces)
        self.generation += 1
        return True

    def iterate(
        self,
        n: int = 1,
        rng: RandomSource = None,
        max_length: Optional[int] = None,
    ) -> None:
        rng = make_rng(rng)
        for _ in range(n):
            if not self.step(rng, max_length=max_length):
                return
            logger.debug(
                "Generation %d: %d characters", self.generation, len(self.world)
            )


def expand(
    grammar: Grammar,
    rng: RandomSource = None,
    max_length: Optional[int] = None,
) -> List[Symbol]:
    """Rewrite the axiom ``grammar.iterations`` times and tokenize the result."""
    lsystem = LSystem(grammar=grammar)
    lsystem.iterate(grammar.iterations, rng=rng, max_length=max_length)
    return lsystem.symbols
