"""
Layer node models for hero view documents.

Layer hierarchy:
    BaseLayer (common fields: id, name, visible, type)
    ├── BaseSurfaceLayer (type='base', deprecated surface variant)
    ├── SurfaceLayer (type='surface', surface pattern)
    ├── TextLayer (type='text', typography)
    ├── Model3DLayer (type='model3d', 3D transform)
    ├── ImageLayer (type='image', asset bitmap)
    ├── LayerGroup (type='group', owns children)
    └── ProcessorLayer (type='processor', owns modifiers)

Document:
    HeroViewConfig (viewport, colors, layers, foreground)
"""

from typing import Any

from .base import BaseLayer, LayerType
from .document import (
    ForegroundElementConfig,
    ForegroundLayerConfig,
    HeroColorsConfig,
    HeroViewConfig,
    HsvColor,
    ViewportConfig,
    create_default_colors_config,
    create_default_foreground_config,
    create_default_hero_view_config,
)
from .factories import (
    create_group_layer_config,
    create_processor_layer_config,
    create_surface_layer_config,
    generate_layer_id,
)
from .guards import (
    has_surface,
    is_base_layer,
    is_group,
    is_image_layer,
    is_model3d_layer,
    is_processor,
    is_surface_layer,
    is_text_layer,
    match_layer_node,
)
from .image_layer import ImageLayer, ImagePositionConfig
from .layer_group import LayerGroup
from .model3d_layer import Model3DLayer, Vector3
from .modifiers import (
    MaskProcessorConfig,
    Modifier,
    SingleEffectConfig,
    create_default_mask_processor_config,
    find_mask_modifier_index,
    get_effects_before_mask,
    get_preceding_effects,
    is_effect_modifier,
    is_mask_modifier,
)
from .node import LayerNode
from .processor_layer import ProcessorLayer, get_processor_effects, get_processor_mask
from .shapes import (
    MASK_SHAPE_TYPE_IDS,
    SURFACE_TYPES,
    NormalizedMaskConfig,
    NormalizedSurfaceConfig,
    SurfaceColorsConfig,
)
from .surface_layer import BaseSurfaceLayer, SurfaceLayer
from .text_layer import TextLayer, TextPosition


# Layer type registry for deserialization
_LAYER_REGISTRY: dict[str, type[BaseLayer]] = {
    LayerType.BASE.value: BaseSurfaceLayer,
    LayerType.SURFACE.value: SurfaceLayer,
    LayerType.TEXT.value: TextLayer,
    LayerType.MODEL3D.value: Model3DLayer,
    LayerType.IMAGE.value: ImageLayer,
    LayerType.GROUP.value: LayerGroup,
    LayerType.PROCESSOR.value: ProcessorLayer,
}


def get_layer_class(layer_type: str) -> type[BaseLayer]:
    """
    Get the layer class for a type string.

    Args:
        layer_type: Layer type ('surface', 'group', ...)

    Returns:
        Layer class

    Raises:
        ValueError: If the type is not a layer node type
    """
    layer_class = _LAYER_REGISTRY.get(layer_type)
    if layer_class is None:
        raise ValueError(f"Unknown layer type: {layer_type}")
    return layer_class


def layer_from_dict(data: dict[str, Any]) -> LayerNode:
    """
    Create a layer node from a serialized dict, migrating legacy shapes.

    Args:
        data: Serialized layer node

    Returns:
        Layer node of the matching class
    """
    from heroforge.formats.migration import migrate_layer_config

    data = migrate_layer_config(data)
    return get_layer_class(data.get('type', 'surface')).model_validate(data)


__all__ = [
    # Base
    'BaseLayer',
    'LayerType',
    # Layer types
    'BaseSurfaceLayer',
    'SurfaceLayer',
    'TextLayer',
    'TextPosition',
    'Model3DLayer',
    'Vector3',
    'ImageLayer',
    'ImagePositionConfig',
    'LayerGroup',
    'ProcessorLayer',
    'get_processor_mask',
    'get_processor_effects',
    'LayerNode',
    # Shapes
    'NormalizedSurfaceConfig',
    'NormalizedMaskConfig',
    'SurfaceColorsConfig',
    'SURFACE_TYPES',
    'MASK_SHAPE_TYPE_IDS',
    # Modifiers
    'Modifier',
    'SingleEffectConfig',
    'MaskProcessorConfig',
    'create_default_mask_processor_config',
    'find_mask_modifier_index',
    'get_preceding_effects',
    'get_effects_before_mask',
    'is_effect_modifier',
    'is_mask_modifier',
    # Guards
    'is_base_layer',
    'is_surface_layer',
    'is_text_layer',
    'is_model3d_layer',
    'is_image_layer',
    'is_group',
    'is_processor',
    'has_surface',
    'match_layer_node',
    # Document
    'HeroViewConfig',
    'ViewportConfig',
    'HeroColorsConfig',
    'HsvColor',
    'ForegroundElementConfig',
    'ForegroundLayerConfig',
    'create_default_colors_config',
    'create_default_foreground_config',
    'create_default_hero_view_config',
    # Factories
    'create_group_layer_config',
    'create_surface_layer_config',
    'create_processor_layer_config',
    'generate_layer_id',
    # Registry
    'get_layer_class',
    'layer_from_dict',
]
