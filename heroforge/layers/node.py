"""
LayerNode - the closed union of layer node variants.

The union is discriminated on ``type``. The discriminator works on both raw
dicts (during validation) and model instances (when trees are rebuilt with
``model_copy``).
"""

from typing import Annotated, Any, Optional, Union

from pydantic import Discriminator, Tag

from .image_layer import ImageLayer
from .layer_group import LayerGroup
from .model3d_layer import Model3DLayer
from .processor_layer import ProcessorLayer
from .surface_layer import BaseSurfaceLayer, SurfaceLayer
from .text_layer import TextLayer


def _layer_type_of(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return value.get('type')
    return getattr(value, 'layer_type', None)


LayerNode = Annotated[
    Union[
        Annotated[BaseSurfaceLayer, Tag("base")],
        Annotated[SurfaceLayer, Tag("surface")],
        Annotated[TextLayer, Tag("text")],
        Annotated[Model3DLayer, Tag("model3d")],
        Annotated[ImageLayer, Tag("image")],
        Annotated[LayerGroup, Tag("group")],
        Annotated[ProcessorLayer, Tag("processor")],
    ],
    Discriminator(_layer_type_of),
]

# LayerGroup.children refers to LayerNode
LayerGroup.model_rebuild()
