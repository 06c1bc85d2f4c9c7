from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field


def format_number(value: float) -> str:
    """Shortest text that parses back to the same float."""
    return repr(float(value))


class Symbol(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    params: Tuple[float, ...] = Field(default_factory=tuple)

    def __str__(self) -> str:
        if not self.params:
            return self.name
        return f"{self.name}({','.join(format_number(p) for p in self.params)})"

    def param(self, index: int, default: float) -> float:
        if index < len(self.params):
            return self.params[index]
        return default


def serialize(symbols: Iterable[Symbol]) -> str:
    return "".join(str(symbol) for symbol in symbols)
