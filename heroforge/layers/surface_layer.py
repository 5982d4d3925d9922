"""
Surface layers - nodes that paint a surface pattern.

``surface`` is the current variant. ``base`` is the older name for a
background surface; it is still accepted in documents and behaves the same.
"""

from typing import Literal, Optional

from pydantic import Field

from .base import BaseLayer
from .shapes import NormalizedSurfaceConfig, SurfaceColorsConfig


class SurfaceLayer(BaseLayer):
    """
    Layer painting a surface pattern.

    Serialization format:
    {
        "type": "surface",
        "id": "background",
        "name": "Surface",
        "visible": true,
        "surface": {"id": "solid", "params": {}},
        "colors": {"primary": "B", "secondary": "auto"}
    }
    """

    layer_type: Literal["surface"] = Field(default="surface", alias="type")
    name: str = Field(default='Surface')
    surface: NormalizedSurfaceConfig = Field(default_factory=lambda: NormalizedSurfaceConfig(id='solid'))

    # Per-surface palette keys (None = inherit document defaults)
    colors: Optional[SurfaceColorsConfig] = Field(default=None)


class BaseSurfaceLayer(BaseLayer):
    """Deprecated ``base`` variant of a surface layer."""

    layer_type: Literal["base"] = Field(default="base", alias="type")
    name: str = Field(default='Background')
    surface: NormalizedSurfaceConfig = Field(default_factory=lambda: NormalizedSurfaceConfig(id='solid'))
    colors: Optional[SurfaceColorsConfig] = Field(default=None)
