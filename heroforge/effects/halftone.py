"""Halftone effects. Dot and line sizes are in pixels and follow the preview scale."""

from typing import ClassVar

from pydantic import Field

from heroforge.layers.document import ViewportConfig

from .base import BaseEffect, ShaderSpec, pack_uniforms, scale_value
from .registry import register_effect


@register_effect("dotHalftone")
class DotHalftoneEffect(BaseEffect):
    """Print-style dot screen."""

    effect_type: ClassVar[str] = "dotHalftone"
    display_name: ClassVar[str] = "Dot Halftone"
    VERSION: ClassVar[int] = 1

    dot_size: float = Field(default=8, ge=2, le=30, alias='dotSize',
                            json_schema_extra={"step": 1, "suffix": "px"})
    spacing: float = Field(default=16, ge=4, le=60,
                           json_schema_extra={"step": 1, "suffix": "px"})
    angle: float = Field(default=45, ge=0, le=90,
                         json_schema_extra={"step": 1, "suffix": "°"})

    def shader_spec(self, viewport: ViewportConfig, scale: float) -> ShaderSpec:
        uniforms = pack_uniforms(
            scale_value(self.dot_size, scale),
            scale_value(self.spacing, scale),
            self.angle,
            0.0,
            viewport.width,
            viewport.height,
        )
        return ShaderSpec(shader="dotHalftone", uniforms=uniforms, buffer_size=uniforms.nbytes)


@register_effect("lineHalftone")
class LineHalftoneEffect(BaseEffect):
    """Engraving-style line screen."""

    effect_type: ClassVar[str] = "lineHalftone"
    display_name: ClassVar[str] = "Line Halftone"
    VERSION: ClassVar[int] = 1

    line_width: float = Field(default=4, ge=1, le=20, alias='lineWidth',
                              json_schema_extra={"step": 1, "suffix": "px"})
    spacing: float = Field(default=12, ge=4, le=40,
                           json_schema_extra={"step": 1, "suffix": "px"})
    angle: float = Field(default=45, ge=0, le=180,
                         json_schema_extra={"step": 1, "suffix": "°"})

    def shader_spec(self, viewport: ViewportConfig, scale: float) -> ShaderSpec:
        uniforms = pack_uniforms(
            scale_value(self.line_width, scale),
            scale_value(self.spacing, scale),
            self.angle,
            0.0,
            viewport.width,
            viewport.height,
        )
        return ShaderSpec(shader="lineHalftone", uniforms=uniforms, buffer_size=uniforms.nbytes)
