"""Model3DLayer - a 3D model placed in the hero view."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseLayer


class Vector3(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    x: float = Field(default=0)
    y: float = Field(default=0)
    z: float = Field(default=0)


class Model3DLayer(BaseLayer):
    """
    3D model layer.

    The loaded model data is owned by the renderer, keyed by this node's id.
    Callers release it when the node is removed.
    """

    # model_url would otherwise collide with pydantic's model_ namespace
    model_config = ConfigDict(protected_namespaces=())

    layer_type: Literal["model3d"] = Field(default="model3d", alias="type")
    name: str = Field(default='3D Model')

    model_url: str = Field(default='', alias='modelUrl')
    position: Vector3 = Field(default_factory=Vector3)
    rotation: Vector3 = Field(default_factory=Vector3)
    scale: float = Field(default=1.0, gt=0)
