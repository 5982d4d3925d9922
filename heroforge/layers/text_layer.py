"""TextLayer - canvas text rendered into the hero view."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseLayer


class TextPosition(BaseModel):
    """Normalized text anchor position (0-1 relative to the viewport)."""

    model_config = ConfigDict(populate_by_name=True)

    x: float = Field(default=0.5)
    y: float = Field(default=0.5)
    anchor: str = Field(default='center')


class TextLayer(BaseLayer):
    """Text layer with typography fields."""

    layer_type: Literal["text"] = Field(default="text", alias="type")
    name: str = Field(default='Text')

    text: str = Field(default='Text')
    font_family: str = Field(default='Inter', alias='fontFamily')
    font_size: float = Field(default=48, gt=0, alias='fontSize')
    font_weight: int = Field(default=400, ge=100, le=900, alias='fontWeight')
    letter_spacing: float = Field(default=0, alias='letterSpacing')
    line_height: float = Field(default=1.2, alias='lineHeight')
    color: str = Field(default='#000000')
    position: TextPosition = Field(default_factory=TextPosition)
    rotation: float = Field(default=0)
