"""Turtle interpretation of an expanded symbol sequence.

The turtle walks the symbols keeping a frame (heading, left, up) and emits
one transform per stem segment (``F``), leaf (``L``) and flower (``W``).

    F(len, thick)   draw a stem segment and move forward
    L(size)         leaf on the branch surface, random azimuth and twist
    W(size)         flower at the turtle position
    + -             turn about up
    & ^             pitch about left
    \\ /             roll about heading
    [ ]             push / pop the turtle state

Turn symbols take an optional angle in degrees, otherwise the grammar angle
is used. Any other symbol only structures the grammar and is ignored here.
"""

import math
from typing import List, Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field
from scipy.spatial.transform import Rotation

from .engine import Grammar, Symbol, make_rng
from .engine.rule import RandomSource
from .transform_3d import Transform3D

DEFAULT_THICKNESS = 0.05
DEFAULT_FLOWER_SIZE = 0.25
LEAF_SCALE = 0.1
LEAF_TILT = math.radians(60.0)

HEADING = np.array([0.0, 1.0, 0.0])
UP = np.array([0.0, 0.0, 1.0])


def rotate_vectors(axis: np.ndarray, angle: float, *vectors: np.ndarray) -> List[np.ndarray]:
    """Rotate ``vectors`` by ``angle`` radians counter-clockwise about ``axis``."""
    norm = np.linalg.norm(axis)
    if norm < 1e-12:
        return list(vectors)
    rotation = Rotation.from_rotvec(axis / norm * angle)
    return [rotation.apply(v) for v in vectors]


class StemData(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    transform: np.ndarray
    thickness: float
    length: float


class PlantGeometry(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    stems: List[StemData] = Field(default_factory=list)
    leaves: List[np.ndarray] = Field(default_factory=list)
    flowers: List[np.ndarray] = Field(default_factory=list)


class TurtleState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    position: np.ndarray = Field(default_factory=lambda: np.zeros(3))
    heading: np.ndarray = Field(default_factory=lambda: HEADING.copy())
    left: np.ndarray = Field(default_factory=lambda: np.array([-1.0, 0.0, 0.0]))
    up: np.ndarray = Field(default_factory=lambda: UP.copy())
    last_thickness: float = DEFAULT_THICKNESS

    @classmethod
    def initial(cls, left=(-1.0, 0.0, 0.0)) -> "TurtleState":
        return cls(left=np.array(left, dtype=float))

    @property
    def frame(self) -> np.ndarray:
        """3x3 matrix with left, heading and up as columns."""
        return np.column_stack([self.left, self.heading, self.up])

    def is_close(self, other: "TurtleState", atol: float = 1e-9) -> bool:
        return (
            np.allclose(self.position, other.position, atol=atol)
            and np.allclose(self.heading, other.heading, atol=atol)
            and np.allclose(self.left, other.left, atol=atol)
            and np.allclose(self.up, other.up, atol=atol)
            and math.isclose(self.last_thickness, other.last_thickness, abs_tol=atol)
        )

    def turn(self, angle: float) -> None:
        self.heading, self.left = rotate_vectors(self.up, angle, self.heading, self.left)
        self.orthonormalize()

    def pitch(self, angle: float) -> None:
        self.heading, self.up = rotate_vectors(self.left, angle, self.heading, self.up)
        self.orthonormalize()

    def roll(self, angle: float) -> None:
        self.left, self.up = rotate_vectors(self.heading, angle, self.left, self.up)
        self.orthonormalize()

    def orthonormalize(self) -> None:
        # Gram-Schmidt in heading, left, up order keeps the handedness
        heading = self.heading / np.linalg.norm(self.heading)
        left = self.left - np.dot(self.left, heading) * heading
        left /= np.linalg.norm(left)
        up = self.up - np.dot(self.up, heading) * heading - np.dot(self.up, left) * left
        up /= np.linalg.norm(up)
        self.heading, self.left, self.up = heading, left, up

    def forward(self, length: float) -> None:
        self.position = self.position + self.heading * length

    def stem(self, length: float, thickness: float) -> StemData:
        center = self.position + self.heading * (length * 0.5)
        transform = Transform3D.from_frame(
            center, self.left, self.heading, self.up, scale=(thickness, length, thickness)
        )
        return StemData(transform=transform.as_matrix(), thickness=thickness, length=length)

    def leaf(self, size: float, rng: np.random.Generator) -> np.ndarray:
        azimuth = rng.uniform(0.0, 2.0 * math.pi)
        twist = rng.uniform(0.0, 2.0 * math.pi)
        around_branch = Rotation.from_euler("y", azimuth)
        local = around_branch * Rotation.from_euler("z", -LEAF_TILT) * Rotation.from_euler("y", twist)

        outward = self.frame @ around_branch.apply([1.0, 0.0, 0.0])
        transform = Transform3D(
            position=self.position + outward * (self.last_thickness * 0.5),
            basis=self.frame @ local.as_matrix(),
            scale=np.full(3, LEAF_SCALE * size),
        )
        return transform.as_matrix()

    def flower(self, size: float) -> np.ndarray:
        transform = Transform3D.from_frame(
            self.position, self.left, self.heading, self.up, scale=size
        )
        return transform.as_matrix()


def _angle(symbol: Symbol, default: float) -> float:
    if symbol.params:
        return math.radians(symbol.params[0])
    return default


def interpret(
    grammar: Grammar,
    symbols: Sequence[Symbol],
    rng: RandomSource = None,
    state: Optional[TurtleState] = None,
) -> PlantGeometry:
    """Walk ``symbols`` and collect stem, leaf and flower transforms.

    ``state`` is updated in place when given, which lets callers inspect
    where the turtle ended up.
    """
    rng = make_rng(rng)
    turtle = state if state is not None else TurtleState.initial(grammar.initial_left)
    stack: List[TurtleState] = []
    geometry = PlantGeometry()

    for symbol in symbols:
        name = symbol.name

        if name == "F":
            length = symbol.param(0, grammar.step)
            thickness = symbol.param(1, DEFAULT_THICKNESS)
            geometry.stems.append(turtle.stem(length, thickness))
            turtle.forward(length)
            turtle.last_thickness = thickness

        elif name == "L":
            geometry.leaves.append(turtle.leaf(symbol.param(0, 1.0), rng))

        elif name == "W":
            geometry.flowers.append(turtle.flower(symbol.param(0, DEFAULT_FLOWER_SIZE)))

        elif name == "+":
            turtle.turn(_angle(symbol, grammar.angle))

        elif name == "-":
            turtle.turn(-_angle(symbol, grammar.angle))

        elif name == "&":
            # Pitch down
            turtle.pitch(_angle(symbol, grammar.angle))

        elif name == "^":
            turtle.pitch(-_angle(symbol, grammar.angle))

        elif name == "\\":
            # Roll left
            turtle.roll(_angle(symbol, grammar.angle))

        elif name == "/":
            turtle.roll(-_angle(symbol, grammar.angle))

        elif name == "[":
            stack.append(turtle.model_copy(deep=True))

        elif name == "]":
            if stack:
                saved = stack.pop()
                turtle.position = saved.position
                turtle.heading = saved.heading
                turtle.left = saved.left
                turtle.up = saved.up
                turtle.last_thickness = saved.last_thickness

    return geometry
