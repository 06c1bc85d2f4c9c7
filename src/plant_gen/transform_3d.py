import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class Transform3D(BaseModel):
    """Position, local basis and per-axis scale of one emitted shape.

    ``basis`` columns are the local x/y/z axes in world space. It is a plain
    matrix rather than a ``Rotation`` because the turtle frame may be
    left-handed.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    position: np.ndarray = Field(default_factory=lambda: np.zeros(3))
    basis: np.ndarray = Field(default_factory=lambda: np.identity(3))
    scale: np.ndarray = Field(default_factory=lambda: np.ones(3))

    @classmethod
    def from_frame(
        cls,
        position: np.ndarray,
        left: np.ndarray,
        heading: np.ndarray,
        up: np.ndarray,
        scale=1.0,
    ) -> "Transform3D":
        return cls(
            position=np.asarray(position, dtype=float),
            basis=np.column_stack([left, heading, up]).astype(float),
            scale=np.broadcast_to(np.asarray(scale, dtype=float), (3,)).copy(),
        )

    def as_matrix(self) -> np.ndarray:
        """Return the transform as a 4x4 transformation matrix."""
        matrix = np.identity(4)
        matrix[:3, :3] = self.basis * self.scale
        matrix[:3, 3] = self.position
        return matrix
