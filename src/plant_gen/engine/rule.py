from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .expression import evaluate_condition, substitute_parameters
from .symbol import Symbol

RandomSource = Union[None, int, np.random.Generator]


def make_rng(source: RandomSource = None) -> np.random.Generator:
    """Normalise a seed, a generator or ``None`` (fresh, unseeded) into a generator."""
    if isinstance(source, np.random.Generator):
        return source
    return np.random.default_rng(source)


class Rule(BaseModel):
    model_config = ConfigDict(frozen=True)

    input: str
    output: str
    probability: float = Field(
        default=1.0, ge=0.0, description="Relative weight among matching rules"
    )
    params: List[str] = Field(
        default_factory=list, description="Names bound positionally to the symbol's parameters"
    )
    condition: str = Field(default="", description="Guard over the bound parameters")

    def matches(self, symbol: Symbol) -> bool:
        return self.input == symbol.name and len(self.params) == len(symbol.params)

    def bind(self, symbol: Symbol) -> Dict[str, float]:
        return dict(zip(self.params, symbol.params))

    def is_applicable(self, values: Dict[str, float]) -> bool:
        return evaluate_condition(self.condition, values)

    def produce(self, values: Dict[str, float]) -> str:
        return substitute_parameters(self.output, values)

    def __str__(self) -> str:
        head = self.input
        if self.params:
            head += f"({','.join(self.params)})"
        if self.condition:
            head += f" : {self.condition}"
        return f"{head} -> {self.output} [{self.probability:g}]"


Candidate = Tuple[Rule, Dict[str, float]]


def candidate_rules(symbol: Symbol, rules: Sequence[Rule]) -> List[Candidate]:
    """Rules that can rewrite ``symbol``, in declaration order, with their bindings."""
    candidates: List[Candidate] = []
    for rule in rules:
        if not rule.matches(symbol):
            continue
        values = rule.bind(symbol)
        if rule.is_applicable(values):
            candidates.append((rule, values))
    return candidates


def select_rule(
    candidates: Sequence[Candidate], rng: Optional[np.random.Generator] = None
) -> Candidate:
    """Weighted choice: the first candidate whose cumulative weight reaches a uniform draw."""
    if not candidates:
        raise ValueError("select_rule() needs at least one candidate")

    total = sum(rule.probability for rule, _ in candidates)
    if total <= 0.0:
        return candidates[-1]

    r = make_rng(rng).uniform(0.0, total)
    cumulative = 0.0
    for candidate in candidates:
        cumulative += candidate[0].probability
        if cumulative >= r:
            return candidate
    return candidates[-1]


def apply_rules(
    symbol: Symbol, rules: Sequence[Rule], rng: Optional[np.random.Generator] = None
) -> str:
    """Replacement text for one symbol in one rewriting step."""
    candidates = candidate_rules(symbol, rules)
    if not candidates:
        return str(symbol)
    rule, values = select_rule(candidates, rng)
    return rule.produce(values)
