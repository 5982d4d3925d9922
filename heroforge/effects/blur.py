"""Blur effect with an optional focus mask."""

from typing import Any, ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from heroforge.layers.document import ViewportConfig

from .base import BaseEffect, ShaderSpec, _model_params_schema, pack_uniforms, scale_value
from .registry import register_effect

BlurMaskShape = Literal['none', 'linear', 'radial', 'rectangular']

BLUR_MASK_SHAPES: tuple[str, ...] = ('none', 'linear', 'radial', 'rectangular')


class _MaskParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class NoBlurMask(_MaskParams):
    pass


class LinearBlurMask(_MaskParams):
    angle: float = Field(default=0.0, ge=0.0, le=360.0, json_schema_extra={"step": 1, "suffix": "°"})
    center_x: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerX', json_schema_extra={"step": 0.01})
    center_y: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerY', json_schema_extra={"step": 0.01})
    focus_width: float = Field(default=0.3, ge=0.0, le=1.0, alias='focusWidth', json_schema_extra={"step": 0.01})
    feather: float = Field(default=0.2, ge=0.01, le=1.0, json_schema_extra={"step": 0.01})


class RadialBlurMask(_MaskParams):
    center_x: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerX', json_schema_extra={"step": 0.01})
    center_y: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerY', json_schema_extra={"step": 0.01})
    inner_radius: float = Field(default=0.2, ge=0.0, le=1.0, alias='innerRadius', json_schema_extra={"step": 0.01})
    outer_radius: float = Field(default=0.6, ge=0.01, le=1.5, alias='outerRadius', json_schema_extra={"step": 0.01})
    aspect_ratio: float = Field(default=1.0, ge=0.25, le=4.0, alias='aspectRatio', json_schema_extra={"step": 0.05})


class RectangularBlurMask(_MaskParams):
    center_x: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerX', json_schema_extra={"step": 0.01})
    center_y: float = Field(default=0.5, ge=0.0, le=1.0, alias='centerY', json_schema_extra={"step": 0.01})
    width: float = Field(default=0.6, ge=0.1, le=1.0, json_schema_extra={"step": 0.01})
    height: float = Field(default=0.4, ge=0.1, le=1.0, json_schema_extra={"step": 0.01})
    feather: float = Field(default=0.1, ge=0.01, le=0.5, json_schema_extra={"step": 0.01})
    corner_radius: float = Field(default=0.0, ge=0.0, le=0.5, alias='cornerRadius', json_schema_extra={"step": 0.01})


BLUR_MASK_SCHEMAS: dict[str, type[_MaskParams]] = {
    'none': NoBlurMask,
    'linear': LinearBlurMask,
    'radial': RadialBlurMask,
    'rectangular': RectangularBlurMask,
}


@register_effect("blur")
class BlurEffect(BaseEffect):
    """Gaussian-style blur, optionally limited by a focus mask."""

    effect_type: ClassVar[str] = "blur"
    display_name: ClassVar[str] = "Blur"
    VERSION: ClassVar[int] = 1

    # Mask-specific params live next to the base fields in serialized form
    model_config = ConfigDict(extra='allow')

    radius: float = Field(default=8, ge=1, le=30,
                          json_schema_extra={"step": 1, "suffix": "px", "display_name": "Blur Radius"})
    mask_shape: BlurMaskShape = Field(default='none', alias='maskShape',
                                      json_schema_extra={"options": list(BLUR_MASK_SHAPES)})
    invert: bool = Field(default=False, json_schema_extra={"display_name": "Invert Mask"})

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> 'BlurEffect':
        # Configs from before masks existed have no maskShape
        mask_shape = params.get('maskShape', 'none')
        defaults = cls.create_config_for_shape(mask_shape) if mask_shape in BLUR_MASK_SCHEMAS else {}
        return cls.model_validate({**defaults, **params})

    @classmethod
    def create_config_for_shape(
        cls,
        mask_shape: BlurMaskShape,
        existing: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Build a complete blur config for a mask shape.

        Keeps enabled, radius and invert from ``existing``; mask fields are
        reset to the new shape's defaults.
        """
        existing = existing or {}
        mask_params = BLUR_MASK_SCHEMAS[mask_shape]().model_dump(by_alias=True, mode='json')
        return {
            'enabled': existing.get('enabled', False),
            'radius': existing.get('radius', 8),
            'invert': existing.get('invert', False),
            'maskShape': mask_shape,
            **mask_params,
        }

    @classmethod
    def get_mask_params_schema(cls, mask_shape: BlurMaskShape) -> list[dict[str, Any]]:
        return _model_params_schema(BLUR_MASK_SCHEMAS[mask_shape])

    def mask_params(self) -> _MaskParams:
        return BLUR_MASK_SCHEMAS[self.mask_shape].model_validate(self.model_extra or {})

    def shader_spec(self, viewport: ViewportConfig, scale: float) -> ShaderSpec:
        mask = self.mask_params()
        values = [
            scale_value(self.radius, scale),
            viewport.width,
            viewport.height,
            float(BLUR_MASK_SHAPES.index(self.mask_shape)),
            1.0 if self.invert else 0.0,
        ]
        values.extend(float(v) for v in mask.model_dump().values())
        uniforms = pack_uniforms(*values)
        return ShaderSpec(shader="blur", uniforms=uniforms, buffer_size=uniforms.nbytes)
