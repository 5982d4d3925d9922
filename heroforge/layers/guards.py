"""
Type guards and exhaustive dispatch over layer nodes.

Exactly one of the variant guards is true for any node. ``match_layer_node``
requires a handler per variant, so adding a variant breaks every caller
until it is handled.
"""

from typing import Any, Callable, TypeGuard, TypeVar, assert_never

from .image_layer import ImageLayer
from .layer_group import LayerGroup
from .model3d_layer import Model3DLayer
from .node import LayerNode
from .processor_layer import ProcessorLayer
from .surface_layer import BaseSurfaceLayer, SurfaceLayer
from .text_layer import TextLayer

T = TypeVar('T')


def is_base_layer(node: Any) -> TypeGuard[BaseSurfaceLayer]:
    return isinstance(node, BaseSurfaceLayer)


def is_surface_layer(node: Any) -> TypeGuard[SurfaceLayer]:
    return isinstance(node, SurfaceLayer)


def is_text_layer(node: Any) -> TypeGuard[TextLayer]:
    return isinstance(node, TextLayer)


def is_model3d_layer(node: Any) -> TypeGuard[Model3DLayer]:
    return isinstance(node, Model3DLayer)


def is_image_layer(node: Any) -> TypeGuard[ImageLayer]:
    return isinstance(node, ImageLayer)


def is_group(node: Any) -> TypeGuard[LayerGroup]:
    return isinstance(node, LayerGroup)


def is_processor(node: Any) -> TypeGuard[ProcessorLayer]:
    return isinstance(node, ProcessorLayer)


def has_surface(node: Any) -> TypeGuard[BaseSurfaceLayer | SurfaceLayer]:
    """Check for nodes that paint a surface pattern (base and surface)."""
    return isinstance(node, (BaseSurfaceLayer, SurfaceLayer))


def match_layer_node(
    node: LayerNode,
    *,
    base: Callable[[BaseSurfaceLayer], T],
    surface: Callable[[SurfaceLayer], T],
    text: Callable[[TextLayer], T],
    model3d: Callable[[Model3DLayer], T],
    image: Callable[[ImageLayer], T],
    group: Callable[[LayerGroup], T],
    processor: Callable[[ProcessorLayer], T],
) -> T:
    """
    Dispatch on the node variant.

    Every handler is a required keyword argument, so a missing variant is
    a TypeError at the call site and a type-checker error before that.

    Args:
        node: Layer node to dispatch on
        base, surface, text, model3d, image, group, processor: Handlers

    Returns:
        The selected handler's result
    """
    if isinstance(node, BaseSurfaceLayer):
        return base(node)
    elif isinstance(node, SurfaceLayer):
        return surface(node)
    elif isinstance(node, TextLayer):
        return text(node)
    elif isinstance(node, Model3DLayer):
        return model3d(node)
    elif isinstance(node, ImageLayer):
        return image(node)
    elif isinstance(node, LayerGroup):
        return group(node)
    elif isinstance(node, ProcessorLayer):
        return processor(node)
    else:
        assert_never(node)
