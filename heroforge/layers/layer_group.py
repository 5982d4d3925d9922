"""
LayerGroup - Container owning an ordered list of child nodes.

Children are owned exclusively: a node belongs to exactly one parent.
Child order is paint order, later children paint over earlier ones.
"""

from typing import Literal, Optional

from pydantic import Field

from .base import BaseLayer


GroupBlendMode = Literal[
    'normal',
    'multiply',
    'screen',
    'overlay',
    'darken',
    'lighten',
    'color-dodge',
    'color-burn',
    'hard-light',
    'soft-light',
    'difference',
    'exclusion',
]


class LayerGroup(BaseLayer):
    """
    Layer group.

    Serialization format:
    {
        "type": "group",
        "id": "background-group",
        "name": "Background",
        "visible": true,
        "children": [...],
        "blendMode": "normal"
    }
    """

    layer_type: Literal["group"] = Field(default="group", alias="type")
    name: str = Field(default='Group')

    # Resolved in heroforge.layers.node once every variant is defined
    children: list['LayerNode'] = Field(default_factory=list)

    # Blend mode for compositing onto layers below (None = normal)
    blend_mode: Optional[GroupBlendMode] = Field(default=None, alias='blendMode')

    def is_group(self) -> bool:
        return True
