import math

import numpy as np
import pytest
from pydantic import ValidationError

from plant_gen.engine import Grammar, Rule, expand, tokenize
from plant_gen.turtle import (
    DEFAULT_FLOWER_SIZE,
    DEFAULT_THICKNESS,
    LEAF_SCALE,
    TurtleState,
    interpret,
)


@pytest.fixture
def grammar() -> Grammar:
    return Grammar(
        axiom="F",
        rules=[Rule(input="F", output="F+F")],
        iterations=1,
        angle=math.pi / 2,
        step=1.0,
    )


def walk(grammar: Grammar, text: str, rng=0):
    state = TurtleState.initial(grammar.initial_left)
    geometry = interpret(grammar, tokenize(text), rng=rng, state=state)
    return geometry, state


class TestStems:
    def test_two_segments_with_a_quarter_turn(self, grammar: Grammar) -> None:
        symbols = expand(grammar)
        geometry, state = walk(grammar, "F+F")

        assert [s.name for s in symbols] == ["F", "+", "F"]
        assert len(geometry.stems) == 2
        np.testing.assert_allclose(state.heading, [-1.0, 0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(state.position, [-1.0, 1.0, 0.0], atol=1e-12)

    def test_stem_transform(self, grammar: Grammar) -> None:
        geometry, _ = walk(grammar, "F+F")
        first, second = geometry.stems

        np.testing.assert_allclose(first.transform[:3, 3], [0.0, 0.5, 0.0], atol=1e-12)
        np.testing.assert_allclose(first.transform[:3, 0], [-DEFAULT_THICKNESS, 0.0, 0.0])
        np.testing.assert_allclose(first.transform[:3, 1], [0.0, 1.0, 0.0])
        np.testing.assert_allclose(first.transform[:3, 2], [0.0, 0.0, DEFAULT_THICKNESS])
        np.testing.assert_allclose(first.transform[3], [0.0, 0.0, 0.0, 1.0])

        np.testing.assert_allclose(second.transform[:3, 3], [-0.5, 1.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(second.transform[:3, 1], [-1.0, 0.0, 0.0], atol=1e-12)

    def test_stem_parameters(self, grammar: Grammar) -> None:
        geometry, state = walk(grammar, "F(2,0.3)F")
        first, second = geometry.stems
        assert (first.length, first.thickness) == (2.0, 0.3)
        assert (second.length, second.thickness) == (grammar.step, DEFAULT_THICKNESS)
        assert state.last_thickness == DEFAULT_THICKNESS
        np.testing.assert_allclose(state.position, [0.0, 3.0, 0.0])

    def test_one_segment_per_f(self) -> None:
        grammar = Grammar(
            axiom="X",
            rules=[Rule(input="X", output="F[+X][-X]FX"), Rule(input="F", output="FF")],
            iterations=3,
        )
        symbols = expand(grammar)
        geometry = interpret(grammar, symbols)
        assert len(geometry.stems) == sum(1 for s in symbols if s.name == "F")

    def test_initial_left_sets_handedness(self) -> None:
        grammar = Grammar(axiom="F", initial_left=(1.0, 0.0, 0.0))
        geometry, _ = walk(grammar, "F")
        np.testing.assert_allclose(geometry.stems[0].transform[:3, 0], [DEFAULT_THICKNESS, 0.0, 0.0])

    def test_initial_left_is_normalized(self) -> None:
        grammar = Grammar(axiom="F", initial_left=(-3.0, 0.0, 0.0))
        assert grammar.initial_left == (-1.0, 0.0, 0.0)
        geometry, _ = walk(grammar, "F")
        assert np.linalg.norm(geometry.stems[0].transform[:3, 0]) == pytest.approx(DEFAULT_THICKNESS)

    @pytest.mark.parametrize(
        "left", [(0.0, 1.0, 0.0), (0.0, 0.0, 0.0), (1.0, 0.0, 1.0), (math.inf, 0.0, 0.0)]
    )
    def test_initial_left_off_axis_is_rejected(self, left) -> None:
        with pytest.raises(ValidationError):
            Grammar(axiom="F+F", initial_left=left)


class TestRotations:
    def test_turn_right_with_explicit_angle(self) -> None:
        grammar = Grammar(axiom="", angle=0.1)
        _, state = walk(grammar, "-(90)")
        np.testing.assert_allclose(state.heading, [1.0, 0.0, 0.0], atol=1e-12)

    def test_explicit_angle_overrides_default(self) -> None:
        grammar = Grammar(axiom="", angle=0.1)
        _, state = walk(grammar, "+(90)")
        np.testing.assert_allclose(state.heading, [-1.0, 0.0, 0.0], atol=1e-12)

    def test_pitch(self) -> None:
        _, state = walk(Grammar(axiom=""), "&(90)")
        np.testing.assert_allclose(state.heading, [0.0, 0.0, -1.0], atol=1e-12)
        np.testing.assert_allclose(state.left, [-1.0, 0.0, 0.0], atol=1e-12)

    def test_roll(self) -> None:
        _, state = walk(Grammar(axiom=""), "\\(90)")
        np.testing.assert_allclose(state.heading, [0.0, 1.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(state.left, [0.0, 0.0, 1.0], atol=1e-12)
        np.testing.assert_allclose(state.up, [1.0, 0.0, 0.0], atol=1e-12)

    def test_pitch_up(self) -> None:
        _, state = walk(Grammar(axiom=""), "^(90)")
        np.testing.assert_allclose(state.heading, [0.0, 0.0, 1.0], atol=1e-12)
        np.testing.assert_allclose(state.up, [0.0, -1.0, 0.0], atol=1e-12)

    def test_roll_right(self) -> None:
        _, state = walk(Grammar(axiom=""), "/(90)")
        np.testing.assert_allclose(state.heading, [0.0, 1.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(state.left, [0.0, 0.0, -1.0], atol=1e-12)
        np.testing.assert_allclose(state.up, [-1.0, 0.0, 0.0], atol=1e-12)

    def test_frame_stays_orthonormal(self) -> None:
        _, state = walk(Grammar(axiom=""), "+(13)&(27)\\(41)^(7)/(3)" * 200)
        frame = state.frame
        np.testing.assert_allclose(frame.T @ frame, np.identity(3), atol=1e-9)
        # Default left vector makes the frame left-handed
        assert np.linalg.det(frame) == pytest.approx(-1.0)


class TestBranches:
    def test_branch_restores_state(self) -> None:
        grammar = Grammar(axiom="")
        _, with_branch = walk(grammar, "F[+F&F/F(2,0.5)L]F")
        _, without = walk(grammar, "FF")
        assert with_branch.is_close(without)

    def test_unmatched_pop_is_ignored(self) -> None:
        geometry, state = walk(Grammar(axiom=""), "]]F")
        assert len(geometry.stems) == 1
        np.testing.assert_allclose(state.position, [0.0, 1.0, 0.0])

    def test_unclosed_push(self) -> None:
        geometry, state = walk(Grammar(axiom=""), "[F")
        assert len(geometry.stems) == 1
        np.testing.assert_allclose(state.position, [0.0, 1.0, 0.0])

    def test_structural_symbols_do_nothing(self) -> None:
        geometry, state = walk(Grammar(axiom=""), "ABIKSODPX")
        assert not geometry.stems and not geometry.leaves and not geometry.flowers
        assert state.is_close(TurtleState.initial())


class TestLeavesAndFlowers:
    def test_leaf_sits_on_branch_surface(self) -> None:
        geometry, state = walk(Grammar(axiom=""), "F(1,0.2)L(2)")
        (leaf,) = geometry.leaves
        offset = leaf[:3, 3] - state.position
        assert np.linalg.norm(offset) == pytest.approx(0.1)
        assert np.dot(offset, state.heading) == pytest.approx(0.0, abs=1e-12)
        np.testing.assert_allclose(
            np.linalg.norm(leaf[:3, :3], axis=0), [LEAF_SCALE * 2] * 3
        )

    def test_leaves_follow_the_seed(self) -> None:
        grammar = Grammar(axiom="")
        first, _ = walk(grammar, "FLLL", rng=3)
        second, _ = walk(grammar, "FLLL", rng=3)
        for a, b in zip(first.leaves, second.leaves):
            np.testing.assert_allclose(a, b)
        assert not np.allclose(first.leaves[0], first.leaves[1])

    def test_leaf_does_not_move_turtle(self) -> None:
        _, state = walk(Grammar(axiom=""), "FL")
        np.testing.assert_allclose(state.position, [0.0, 1.0, 0.0])

    def test_flower_default_size(self) -> None:
        geometry, _ = walk(Grammar(axiom=""), "W")
        (flower,) = geometry.flowers
        np.testing.assert_allclose(flower[:3, 3], [0.0, 0.0, 0.0])
        np.testing.assert_allclose(
            flower[:3, :3], np.diag([-1.0, 1.0, 1.0]) * DEFAULT_FLOWER_SIZE
        )

    def test_flower_size(self) -> None:
        geometry, _ = walk(Grammar(axiom=""), "F+W(0.5)")
        (flower,) = geometry.flowers
        np.testing.assert_allclose(np.linalg.norm(flower[:3, :3], axis=0), [0.5] * 3)
        np.testing.assert_allclose(flower[:3, 3], [0.0, 1.0, 0.0])
