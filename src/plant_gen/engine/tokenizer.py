from typing import List, Optional

from .symbol import Symbol

OPERATORS = frozenset("+-[]&^\\/")


def is_symbol_name(char: str) -> bool:
    return (char.isascii() and char.isalpha()) or char in OPERATORS


def find_closing(text: str, open_index: int) -> Optional[int]:
    """Index of the ``)`` matching the ``(`` at ``open_index``, if any."""
    depth = 0
    for index in range(open_index, len(text)):
        if text[index] == "(":
            depth += 1
        elif text[index] == ")":
            depth -= 1
            if depth == 0:
                return index
    return None


def split_arguments(text: str) -> List[str]:
    """Split on commas that are not nested inside parentheses."""
    parts: List[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(text[start:index])
            start = index + 1
    parts.append(text[start:])
    return parts


def parse_param(text: str) -> float:
    text = text.strip()
    # float() also takes digit separators, which are not number literals here
    if "_" in text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def tokenize(text: str) -> List[Symbol]:
    """Turn grammar text into symbols.

    Unknown characters are skipped and parameters that are not numbers
    become ``0.0``, so any string tokenizes.
    """
    symbols: List[Symbol] = []
    index = 0
    while index < len(text):
        char = text[index]
        index += 1
        if not is_symbol_name(char):
            continue

        if index < len(text) and text[index] == "(":
            closing = find_closing(text, index)
            if closing is not None:
                inner = text[index + 1 : closing]
                params = (
                    tuple(parse_param(arg) for arg in split_arguments(inner))
                    if inner.strip()
                    else ()
                )
                symbols.append(Symbol(name=char, params=params))
                index = closing + 1
                continue

        symbols.append(Symbol(name=char))
    return symbols
