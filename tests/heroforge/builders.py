"""Layer node builders shared by the heroforge tests."""

from heroforge.layers import (
    LayerGroup,
    NormalizedSurfaceConfig,
    ProcessorLayer,
    SingleEffectConfig,
    SurfaceLayer,
    create_default_mask_processor_config,
)


def make_surface(layer_id: str, surface_id: str = 'solid') -> SurfaceLayer:
    return SurfaceLayer(id=layer_id, name=layer_id, surface=NormalizedSurfaceConfig(id=surface_id, params={}))


def make_group(layer_id: str, children=None) -> LayerGroup:
    return LayerGroup(id=layer_id, name=layer_id, children=list(children or []))


def make_processor(layer_id: str, modifiers=None) -> ProcessorLayer:
    """Processor with a blur effect and a circle mask unless modifiers are given."""
    if modifiers is None:
        modifiers = [
            SingleEffectConfig(id='blur', params={'radius': 8}),
            create_default_mask_processor_config(),
        ]
    return ProcessorLayer(id=layer_id, name=layer_id, modifiers=modifiers)
