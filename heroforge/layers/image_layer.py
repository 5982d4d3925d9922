"""ImageLayer - a bitmap from the asset repository."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseLayer


class ImagePositionConfig(BaseModel):
    """Placement for ``positioned`` images, normalized to the viewport."""

    model_config = ConfigDict(populate_by_name=True)

    x: float = Field(default=0)
    y: float = Field(default=0)
    width: float = Field(default=1)
    height: float = Field(default=1)
    # Radians
    rotation: Optional[float] = Field(default=None)
    opacity: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class ImageLayer(BaseLayer):
    """
    Image layer.

    ``mode='cover'`` fills the viewport; ``mode='positioned'`` uses
    ``position``.
    """

    layer_type: Literal["image"] = Field(default="image", alias="type")
    name: str = Field(default='Image')

    # Object URL or asset id
    image_id: str = Field(default='', alias='imageId')
    mode: Literal["cover", "positioned"] = Field(default='cover')
    position: Optional[ImagePositionConfig] = Field(default=None)
