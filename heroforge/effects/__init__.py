"""
Post effects applied by processor nodes.

Each effect is a Pydantic model registered under its effect id. The model
class is the effect definition: ``get_params_schema()`` for the editor UI,
``create_default_config()`` for new slots and ``create_shader_spec()`` for
renderers.

Registry order (also the slot order of the legacy effect struct):
    vignette, chromaticAberration, dotHalftone, lineHalftone, blur,
    pixelate, hexagonMosaic, voronoiMosaic
"""

from .base import BaseEffect, ShaderSpec, pack_uniforms, scale_value
from .registry import (
    effect_registry,
    get_effect_definition,
    get_effect_types,
    is_valid_effect_type,
    load_builtin_effects,
    create_single_effect_config,
    lookup_effect_definition,
    register_effect,
)

load_builtin_effects()

from .blur import BLUR_MASK_SHAPES, BlurEffect  # noqa: E402
from .distortion import ChromaticAberrationEffect  # noqa: E402
from .halftone import DotHalftoneEffect, LineHalftoneEffect  # noqa: E402
from .mosaic import HexagonMosaicEffect, PixelateEffect, VoronoiMosaicEffect  # noqa: E402
from .vignette import VIGNETTE_SHAPES, VignetteEffect  # noqa: E402

# All effect ids, in registry order
EFFECT_TYPES: tuple[str, ...] = get_effect_types()

__all__ = [
    'BaseEffect',
    'ShaderSpec',
    'pack_uniforms',
    'scale_value',
    'effect_registry',
    'register_effect',
    'load_builtin_effects',
    'get_effect_types',
    'get_effect_definition',
    'lookup_effect_definition',
    'create_single_effect_config',
    'is_valid_effect_type',
    'EFFECT_TYPES',
    'VignetteEffect',
    'VIGNETTE_SHAPES',
    'ChromaticAberrationEffect',
    'DotHalftoneEffect',
    'LineHalftoneEffect',
    'BlurEffect',
    'BLUR_MASK_SHAPES',
    'PixelateEffect',
    'HexagonMosaicEffect',
    'VoronoiMosaicEffect',
]
