"""
Vignette effect with shape-dependent parameters.

The base fields (intensity, softness, color) are shared by every shape.
Each shape adds its own parameter set:

    ellipse:   radius, centerX, centerY, aspectRatio
    circle:    radius, centerX, centerY
    rectangle: centerX, centerY, width, height, cornerRadius
    linear:    angle, startOffset, endOffset

Changing the shape re-derives a complete config for the new shape through
``create_config_for_shape``, so no fields from the old shape survive.
"""

from typing import Any, ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from heroforge.layers.document import ViewportConfig

from .base import BaseEffect, ShaderSpec, _model_params_schema, pack_uniforms
from .registry import register_effect

VignetteShape = Literal['ellipse', 'circle', 'rectangle', 'linear']

VIGNETTE_SHAPES: tuple[str, ...] = ('ellipse', 'circle', 'rectangle', 'linear')


class _ShapeParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class EllipseVignetteShape(_ShapeParams):
    radius: float = Field(default=0.8, ge=0.2, le=1.5, json_schema_extra={"step": 0.01})
    center_x: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerX',
                            json_schema_extra={"step": 0.01, "display_name": "Center X"})
    center_y: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerY',
                            json_schema_extra={"step": 0.01, "display_name": "Center Y"})
    # None = viewport aspect ratio
    aspect_ratio: Optional[float] = Field(default=1.0, ge=0.25, le=4.0, alias='aspectRatio',
                                          json_schema_extra={"step": 0.05})


class CircleVignetteShape(_ShapeParams):
    radius: float = Field(default=0.8, ge=0.2, le=1.5, json_schema_extra={"step": 0.01})
    center_x: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerX',
                            json_schema_extra={"step": 0.01, "display_name": "Center X"})
    center_y: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerY',
                            json_schema_extra={"step": 0.01, "display_name": "Center Y"})


class RectangleVignetteShape(_ShapeParams):
    center_x: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerX',
                            json_schema_extra={"step": 0.01, "display_name": "Center X"})
    center_y: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerY',
                            json_schema_extra={"step": 0.01, "display_name": "Center Y"})
    width: float = Field(default=0.8, ge=0.1, le=1.0, json_schema_extra={"step": 0.01})
    height: float = Field(default=0.6, ge=0.1, le=1.0, json_schema_extra={"step": 0.01})
    corner_radius: float = Field(default=0.0, ge=0.0, le=0.5, alias='cornerRadius',
                                 json_schema_extra={"step": 0.01})


class LinearVignetteShape(_ShapeParams):
    angle: float = Field(default=0.0, ge=0.0, le=360.0, json_schema_extra={"step": 1, "suffix": "°"})
    start_offset: float = Field(default=0.3, ge=0.0, le=1.0, alias='startOffset',
                                json_schema_extra={"step": 0.01, "display_name": "Start"})
    end_offset: float = Field(default=0.7, ge=0.0, le=1.0, alias='endOffset',
                              json_schema_extra={"step": 0.01, "display_name": "End"})


VIGNETTE_SHAPE_SCHEMAS: dict[str, type[_ShapeParams]] = {
    'ellipse': EllipseVignetteShape,
    'circle': CircleVignetteShape,
    'rectangle': RectangleVignetteShape,
    'linear': LinearVignetteShape,
}


def migrate_vignette_config(config: dict[str, Any]) -> dict[str, Any]:
    """Treat pre-shape vignette configs (no ``shape`` key) as ellipses."""
    if 'shape' in config:
        return config
    migrated = {
        'shape': 'ellipse',
        'intensity': config.get('intensity', 0.5),
        'softness': config.get('softness', 0.4),
        'color': [0, 0, 0, 1],
        'radius': config.get('radius', 0.8),
        'centerX': 0.5,
        'centerY': 0.5,
        'aspectRatio': 1,
    }
    if 'enabled' in config:
        migrated['enabled'] = config['enabled']
    return migrated


@register_effect("vignette")
class VignetteEffect(BaseEffect):
    """Darken (or tint) the frame edges."""

    effect_type: ClassVar[str] = "vignette"
    display_name: ClassVar[str] = "Vignette"
    VERSION: ClassVar[int] = 1

    shape_schemas: ClassVar[dict[str, type[_ShapeParams]]] = VIGNETTE_SHAPE_SCHEMAS

    # Shape-specific params live next to the base fields in serialized form
    model_config = ConfigDict(extra='allow')

    shape: VignetteShape = Field(default='ellipse',
                                 json_schema_extra={"options": list(VIGNETTE_SHAPES)})
    intensity: float = Field(default=0.5, ge=0.0, le=1.0, json_schema_extra={"step": 0.01})
    softness: float = Field(default=0.4, ge=0.01, le=1.0, json_schema_extra={"step": 0.01})
    # RGBA, 0-1
    color: list[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0, 1.0])

    @classmethod
    def create_default_config(cls) -> dict[str, Any]:
        return cls.create_config_for_shape('ellipse')

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> 'VignetteEffect':
        params = migrate_vignette_config(params)
        shape = params.get('shape', 'ellipse')
        # Unknown shapes get no defaults and fail validation on ``shape``
        defaults = cls.create_config_for_shape(shape) if shape in VIGNETTE_SHAPE_SCHEMAS else {}
        return cls.model_validate({**defaults, **params})

    @classmethod
    def create_config_for_shape(
        cls,
        shape: VignetteShape,
        existing: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Build a complete config for ``shape``.

        Base fields (enabled, intensity, softness, color) carry over from
        ``existing``; shape fields are reset to the new shape's defaults.

        Args:
            shape: Target vignette shape
            existing: Current config, possibly partial or for another shape

        Returns:
            Config dict with exactly the base fields and the shape's fields
        """
        existing = existing or {}
        shape_params = VIGNETTE_SHAPE_SCHEMAS[shape]().model_dump(by_alias=True, mode='json')
        return {
            'enabled': existing.get('enabled', False),
            'shape': shape,
            'intensity': existing.get('intensity', 0.5),
            'softness': existing.get('softness', 0.4),
            'color': list(existing.get('color', [0, 0, 0, 1])),
            **shape_params,
        }

    @classmethod
    def get_shape_params_schema(cls, shape: VignetteShape) -> list[dict[str, Any]]:
        return _model_params_schema(VIGNETTE_SHAPE_SCHEMAS[shape])

    def shape_params(self) -> _ShapeParams:
        return VIGNETTE_SHAPE_SCHEMAS[self.shape].model_validate(self.model_extra or {})

    def shader_spec(self, viewport: ViewportConfig, scale: float) -> ShaderSpec:
        color = (list(self.color) + [0.0, 0.0, 0.0, 1.0])[:4]
        shape = self.shape_params()
        head = (*color, self.intensity, self.softness, viewport.width, viewport.height)

        if isinstance(shape, CircleVignetteShape):
            uniforms = pack_uniforms(*head, shape.radius, shape.center_x, shape.center_y)
        elif isinstance(shape, RectangleVignetteShape):
            uniforms = pack_uniforms(*head, shape.center_x, shape.center_y,
                                     shape.width, shape.height, shape.corner_radius)
        elif isinstance(shape, LinearVignetteShape):
            uniforms = pack_uniforms(*head, shape.angle, shape.start_offset, shape.end_offset)
        else:
            aspect = shape.aspect_ratio
            if aspect is None:
                aspect = viewport.width / viewport.height
            uniforms = pack_uniforms(*head, shape.radius, shape.center_x, shape.center_y, aspect)

        return ShaderSpec(
            shader=f"{self.shape}Vignette",
            uniforms=uniforms,
            buffer_size=uniforms.nbytes,
        )
