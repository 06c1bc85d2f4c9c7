import numpy as np

from plant_gen.engine import Grammar, tokenize
from plant_gen.turtle import interpret
from plant_gen.visualize import stem_segments, symbol_graph, symbols_as_markdown


def test_markdown_indents_branches() -> None:
    markdown = symbols_as_markdown(tokenize("F[+L(2)]F"))
    assert markdown.splitlines() == ["- F", "- [", "  - +", "  - L(2.0)", "- ]", "- F"]


def test_graph_returns_to_branch_point() -> None:
    node_ids, labels, edges = symbol_graph(tokenize("F[L]F"))
    assert node_ids == ["0", "1", "2", "3", "4"]
    assert labels == ["F", "[", "L", "]", "F"]
    assert edges == [("0", "1"), ("1", "2"), ("2", "3"), ("0", "4")]


def test_stem_segments() -> None:
    geometry = interpret(Grammar(axiom=""), tokenize("F(2)+(90)F"))
    first, second = stem_segments(geometry)
    np.testing.assert_allclose(first, [[0.0, 0.0, 0.0], [0.0, 2.0, 0.0]], atol=1e-12)
    np.testing.assert_allclose(second, [[0.0, 2.0, 0.0], [-1.0, 2.0, 0.0]], atol=1e-12)
