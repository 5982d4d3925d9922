"""
HeroViewConfig - Pydantic model for a whole hero view document.

Serialization format:
{
    "_version": 1,
    "viewport": {"width": 1280, "height": 720},
    "colors": {"semanticContext": "canvas", ...},
    "layers": [...],
    "foreground": {"elements": [...]}
}

Documents loaded from storage go through ``from_api_dict``, which migrates
legacy shapes before validation.
"""

from typing import Any, ClassVar, Iterator, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from heroforge.config import settings

from .layer_group import LayerGroup
from .modifiers import create_default_mask_processor_config
from .node import LayerNode
from .processor_layer import ProcessorLayer
from .shapes import (
    DEFAULT_LAYER_BACKGROUND_COLORS,
    DEFAULT_LAYER_MASK_COLORS,
    NormalizedSurfaceConfig,
    SurfaceColorsConfig,
)
from .surface_layer import SurfaceLayer


class ViewportConfig(BaseModel):
    """Canvas size in CSS pixels."""

    model_config = ConfigDict(populate_by_name=True)

    width: int = Field(default_factory=lambda: settings.VIEWPORT_WIDTH, ge=1)
    height: int = Field(default_factory=lambda: settings.VIEWPORT_HEIGHT, ge=1)


class HsvColor(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hue: float = Field(default=0)
    saturation: float = Field(default=0)
    value: float = Field(default=0)


class HeroColorsConfig(BaseModel):
    """Document-level color state. Palette math is owned by the color subsystem."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    semantic_context: Literal['canvas', 'sectionNeutral', 'sectionTint', 'sectionContrast'] = Field(
        default='canvas', alias='semanticContext'
    )
    background: Optional[SurfaceColorsConfig] = Field(default=None)
    mask: Optional[SurfaceColorsConfig] = Field(default=None)
    brand: Optional[HsvColor] = Field(default=None)
    accent: Optional[HsvColor] = Field(default=None)
    foundation: Optional[HsvColor] = Field(default=None)


GridPosition = Literal[
    'top-left', 'top-center', 'top-right',
    'middle-left', 'middle-center', 'middle-right',
    'bottom-left', 'bottom-center', 'bottom-right',
]

ForegroundElementType = Literal['title', 'description']


class ForegroundElementConfig(BaseModel):
    """A title or description rendered as HTML above the canvas."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=False, extra='ignore')

    id: str
    element_type: ForegroundElementType = Field(alias='type')
    visible: bool = Field(default=True)
    position: GridPosition = Field(default='middle-center')
    content: str = Field(default='')
    font_id: Optional[str] = Field(default=None, alias='fontId')
    font_size: Optional[float] = Field(default=None, alias='fontSize')
    # 100-900
    font_weight: Optional[int] = Field(default=None, ge=100, le=900, alias='fontWeight')
    # em units
    letter_spacing: Optional[float] = Field(default=None, alias='letterSpacing')
    line_height: Optional[float] = Field(default=None, alias='lineHeight')
    # Palette key or 'auto'
    color_key: Optional[str] = Field(default=None, alias='colorKey')


class ForegroundLayerConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    elements: list[ForegroundElementConfig] = Field(default_factory=list)


def _iter_layer_ids(layers: list[LayerNode]) -> Iterator[str]:
    for layer in layers:
        yield layer.id
        if isinstance(layer, LayerGroup):
            yield from _iter_layer_ids(layer.children)


class HeroViewConfig(BaseModel):
    """
    Hero view document.

    ``_version`` tags the schema. Documents without it are checked
    structurally for legacy shapes when loaded.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=False,
        extra='ignore',
    )

    # Serialization version
    VERSION: ClassVar[int] = settings.SCHEMA_VERSION
    version: int = Field(default=VERSION, alias='_version')

    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    colors: HeroColorsConfig = Field(default_factory=HeroColorsConfig)
    layers: list[LayerNode] = Field(default_factory=list)
    foreground: ForegroundLayerConfig = Field(default_factory=ForegroundLayerConfig)

    @model_validator(mode="after")
    def _validate_unique_layer_ids(self) -> "HeroViewConfig":
        """Layer ids must be unique across the whole tree, not just siblings."""
        seen = set()
        for layer_id in _iter_layer_ids(self.layers):
            if layer_id in seen:
                raise ValueError(f"Duplicate layer id: {layer_id}")
            seen.add(layer_id)
        return self

    def to_api_dict(self) -> dict[str, Any]:
        """
        Convert to the serialized document shape.

        Returns:
            Dict with camelCase keys and the current ``_version``
        """
        data = self.model_dump(by_alias=True, mode='json', exclude_none=True)
        data['_version'] = self.VERSION
        return data

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> 'HeroViewConfig':
        """
        Create a document from serialized data, migrating legacy shapes.

        Args:
            data: Serialized document (canonical or legacy)

        Returns:
            Validated HeroViewConfig
        """
        # Import here to avoid circular imports
        from heroforge.formats.migration import migrate_hero_view_config

        return cls.model_validate(migrate_hero_view_config(data))

    def get_layer(self, layer_id: str) -> Optional[LayerNode]:
        """
        Get a layer anywhere in the tree by id.

        Args:
            layer_id: Layer id to find

        Returns:
            Layer node or None if not found
        """
        from heroforge.tree.ops import find_layer_in_tree

        return find_layer_in_tree(self.layers, layer_id)


# ============================================================================
# Factories
# ============================================================================


def create_default_colors_config() -> HeroColorsConfig:
    return HeroColorsConfig(
        semantic_context='canvas',
        background=DEFAULT_LAYER_BACKGROUND_COLORS.model_copy(),
        mask=DEFAULT_LAYER_MASK_COLORS.model_copy(),
        brand=HsvColor(hue=198, saturation=70, value=65),
        accent=HsvColor(hue=30, saturation=80, value=60),
        foundation=HsvColor(hue=0, saturation=0, value=97),
    )


def create_default_foreground_config() -> ForegroundLayerConfig:
    return ForegroundLayerConfig(elements=[
        ForegroundElementConfig(
            id='title-1',
            element_type='title',
            visible=True,
            position='middle-center',
            content='Build Amazing',
        ),
        ForegroundElementConfig(
            id='description-1',
            element_type='description',
            visible=True,
            position='middle-center',
            content='Create beautiful, responsive websites.\nDesign with confidence.',
        ),
    ])


def create_default_hero_view_config() -> HeroViewConfig:
    """
    Create the starter document.

    A background group with a solid surface, and a clip group whose surface
    is cut by a circle mask processor.
    """
    return HeroViewConfig(
        viewport=ViewportConfig(),
        colors=create_default_colors_config(),
        layers=[
            LayerGroup(
                id='background-group',
                name='Background',
                children=[
                    SurfaceLayer(
                        id='background',
                        name='Surface',
                        surface=NormalizedSurfaceConfig(id='solid', params={}),
                        colors=DEFAULT_LAYER_BACKGROUND_COLORS.model_copy(),
                    ),
                ],
            ),
            LayerGroup(
                id='clip-group',
                name='Clip Group',
                children=[
                    SurfaceLayer(
                        id='surface-mask',
                        name='Surface',
                        surface=NormalizedSurfaceConfig(id='solid', params={}),
                        colors=DEFAULT_LAYER_MASK_COLORS.model_copy(),
                    ),
                    ProcessorLayer(
                        id='processor-mask',
                        name='Mask',
                        modifiers=[create_default_mask_processor_config()],
                    ),
                ],
            ),
        ],
        foreground=create_default_foreground_config(),
    )
