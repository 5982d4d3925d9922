"""Distortion effects."""

from typing import ClassVar

from pydantic import Field

from heroforge.layers.document import ViewportConfig

from .base import BaseEffect, ShaderSpec, pack_uniforms
from .registry import register_effect


@register_effect("chromaticAberration")
class ChromaticAberrationEffect(BaseEffect):
    """Offset the color channels against each other."""

    effect_type: ClassVar[str] = "chromaticAberration"
    display_name: ClassVar[str] = "Chromatic Aberration"
    VERSION: ClassVar[int] = 1

    intensity: float = Field(default=3.0, ge=0.0, le=20.0,
                             json_schema_extra={"step": 0.1, "suffix": "px"})

    def shader_spec(self, viewport: ViewportConfig, scale: float) -> ShaderSpec:
        # Channel offset angle is fixed at 0
        uniforms = pack_uniforms(self.intensity, 0.0, viewport.width, viewport.height)
        return ShaderSpec(shader="chromaticAberration", uniforms=uniforms,
                          buffer_size=uniforms.nbytes)
