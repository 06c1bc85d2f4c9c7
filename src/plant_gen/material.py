from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

Color = Tuple[float, float, float, float]


class TextureMap(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_used: bool = False
    filename: str = ""
    repeat_u: float = Field(default=1.0, description="Horizontal wraps (around a stem)")
    repeat_v: float = Field(default=1.0, description="Vertical wraps (along a stem)")
    strength: float = Field(default=1.0, description="Normal map strength")

    def with_base_path(self, base_path: str) -> "TextureMap":
        if not self.is_used or not base_path:
            return self
        return self.model_copy(update={"filename": f"{base_path}/{self.filename}"})

    def scaled(self, u: float, v: float) -> "TextureMap":
        if not self.is_used:
            return self
        return self.model_copy(
            update={"repeat_u": self.repeat_u * u, "repeat_v": self.repeat_v * v}
        )


class Material(BaseModel):
    """Surface description handed through to the renderer untouched."""

    model_config = ConfigDict(frozen=True)

    diffuse: Color = (0.0, 0.0, 0.0, 1.0)
    ambient: Color = (0.0, 0.0, 0.0, 1.0)
    specular: Color = (0.0, 0.0, 0.0, 1.0)
    shininess: float = 0.0
    blend: float = 0.0
    texture_map: TextureMap = Field(default_factory=TextureMap)
    normal_map: TextureMap = Field(default_factory=TextureMap)
    bump_map: TextureMap = Field(default_factory=TextureMap)

    def with_base_path(self, base_path: Optional[str]) -> "Material":
        """Prefix the used texture and normal map filenames with ``base_path``.

        The bump map is left as given.
        """
        if not base_path:
            return self
        return self.model_copy(
            update={
                "texture_map": self.texture_map.with_base_path(base_path),
                "normal_map": self.normal_map.with_base_path(base_path),
            }
        )

    def with_texture_repeat(self, u: float, v: float) -> "Material":
        return self.model_copy(
            update={
                "texture_map": self.texture_map.scaled(u, v),
                "normal_map": self.normal_map.scaled(u, v),
                "bump_map": self.bump_map.scaled(u, v),
            }
        )


def default_lsystem_material() -> Material:
    """Red placeholder used when a grammar names no stem material."""
    return Material(
        diffuse=(1.0, 0.0, 0.0, 1.0),
        ambient=(0.2, 0.0, 0.0, 1.0),
        specular=(1.0, 1.0, 1.0, 1.0),
        shininess=25.0,
    )
