"""
Canonical surface and mask shape descriptors.

Both use the normalized ``{id, params}`` form. The legacy flat form
(``{type, ...params}``) is handled by :mod:`heroforge.formats.normalize`.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


SURFACE_TYPES: tuple[str, ...] = (
    'solid',
    'stripe',
    'grid',
    'polkaDot',
    'checker',
    'image',
    'gradientGrain',
    'triangle',
    'hexagon',
    'asanoha',
    'seigaiha',
    'wave',
    'scales',
    'ogee',
    'sunburst',
)

MASK_SHAPE_TYPE_IDS: tuple[str, ...] = (
    'circle',
    'rect',
    'blob',
    'perlin',
    'linearGradient',
    'radialGradient',
    'boxGradient',
    'wavyLine',
)


class NormalizedSurfaceConfig(BaseModel):
    """Surface pattern descriptor: ``{"id": "stripe", "params": {...}}``."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: str
    params: dict[str, Any] = Field(default_factory=dict)


class NormalizedMaskConfig(BaseModel):
    """Mask shape descriptor: ``{"id": "circle", "params": {...}}``."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: str
    params: dict[str, Any] = Field(default_factory=dict)


class SurfaceColorsConfig(BaseModel):
    """Per-surface palette keys."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    # Palette key, or 'auto' to pick by contrast
    primary: str = Field(default='auto')
    secondary: str = Field(default='auto')


DEFAULT_LAYER_BACKGROUND_COLORS = SurfaceColorsConfig(primary='B', secondary='auto')
DEFAULT_LAYER_MASK_COLORS = SurfaceColorsConfig(primary='auto', secondary='auto')
