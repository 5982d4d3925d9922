"""Mosaic effects (pixelate, hexagon and voronoi cells)."""

from typing import ClassVar

from pydantic import Field

from heroforge.layers.document import ViewportConfig

from .base import BaseEffect, ShaderSpec, pack_uniforms, scale_value
from .registry import register_effect


@register_effect("pixelate")
class PixelateEffect(BaseEffect):
    """Square block mosaic."""

    effect_type: ClassVar[str] = "pixelate"
    display_name: ClassVar[str] = "Pixelate"
    VERSION: ClassVar[int] = 1

    block_size: float = Field(default=16, ge=4, le=64, alias='blockSize',
                              json_schema_extra={"step": 1, "suffix": "px"})
    noise_scale: float = Field(default=0.0, ge=0.0, le=1.0, alias='noiseScale',
                               json_schema_extra={"step": 0.01})

    def shader_spec(self, viewport: ViewportConfig, scale: float) -> ShaderSpec:
        uniforms = pack_uniforms(scale_value(self.block_size, scale), self.noise_scale,
                                 viewport.width, viewport.height)
        return ShaderSpec(shader="pixelate", uniforms=uniforms, buffer_size=uniforms.nbytes)


@register_effect("hexagonMosaic")
class HexagonMosaicEffect(BaseEffect):
    """Hexagonal cell mosaic."""

    effect_type: ClassVar[str] = "hexagonMosaic"
    display_name: ClassVar[str] = "Hexagon Mosaic"
    VERSION: ClassVar[int] = 1

    cell_size: float = Field(default=24, ge=8, le=80, alias='cellSize',
                             json_schema_extra={"step": 1, "suffix": "px"})
    noise_scale: float = Field(default=0.0, ge=0.0, le=1.0, alias='noiseScale',
                               json_schema_extra={"step": 0.01})

    def shader_spec(self, viewport: ViewportConfig, scale: float) -> ShaderSpec:
        uniforms = pack_uniforms(scale_value(self.cell_size, scale), self.noise_scale,
                                 viewport.width, viewport.height)
        return ShaderSpec(shader="hexagonMosaic", uniforms=uniforms, buffer_size=uniforms.nbytes)


@register_effect("voronoiMosaic")
class VoronoiMosaicEffect(BaseEffect):
    """Voronoi cell mosaic. Cell count is resolution independent."""

    effect_type: ClassVar[str] = "voronoiMosaic"
    display_name: ClassVar[str] = "Voronoi Mosaic"
    VERSION: ClassVar[int] = 1

    cell_count: int = Field(default=12, ge=4, le=32, alias='cellCount',
                            json_schema_extra={"step": 1})
    seed: int = Field(default=0, ge=0, le=1000, json_schema_extra={"step": 1})
    show_edges: bool = Field(default=False, alias='showEdges')
    edge_width: float = Field(default=2, ge=1, le=8, alias='edgeWidth',
                              json_schema_extra={"step": 1, "suffix": "px"})
    noise_scale: float = Field(default=0.0, ge=0.0, le=1.0, alias='noiseScale',
                               json_schema_extra={"step": 0.01})

    def shader_spec(self, viewport: ViewportConfig, scale: float) -> ShaderSpec:
        uniforms = pack_uniforms(
            self.cell_count,
            self.seed,
            1.0 if self.show_edges else 0.0,
            scale_value(self.edge_width, scale),
            self.noise_scale,
            viewport.width,
            viewport.height,
        )
        return ShaderSpec(shader="voronoiMosaic", uniforms=uniforms, buffer_size=uniforms.nbytes)
