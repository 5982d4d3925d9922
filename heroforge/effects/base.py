"""Base effect class using Pydantic BaseModel."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional, get_origin

import numpy as np
from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

from heroforge.layers.document import ViewportConfig


class ShaderSpec(BaseModel):
    """
    Render parameters for one post effect.

    ``uniforms`` is a little-endian float32 buffer padded to 16-byte
    alignment; ``buffer_size`` is its length in bytes.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    shader: str
    uniforms: np.ndarray
    buffer_size: int = Field(alias='bufferSize')


def scale_value(value: float, scale: float) -> int:
    """Scale a pixel-sized parameter for preview rendering (never below 1)."""
    # Round half up
    return max(1, int(np.floor(value * scale + 0.5)))


def pack_uniforms(*values: float) -> np.ndarray:
    """Pack floats into a float32 buffer padded to a multiple of 4 floats."""
    padded = len(values) + (-len(values) % 4)
    buffer = np.zeros(max(padded, 4), dtype='<f4')
    buffer[:len(values)] = values
    return buffer


class BaseEffect(BaseModel, ABC):
    """Base class for all post effects.

    Instance fields are the effect parameters. Serialized params use the
    camelCase aliases (``dotSize``, ``centerX``). The registry maps each
    effect id to its subclass, which doubles as the effect definition:
    parameter schema, default config and shader spec derivation.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=False,
        extra='ignore',
    )

    # ClassVar metadata (not serialized as fields)
    effect_type: ClassVar[str] = "base"
    display_name: ClassVar[str] = "Base Effect"
    VERSION: ClassVar[int] = 1

    # Only meaningful in the legacy exclusive-effect struct
    enabled: bool = Field(default=False)

    # Fields that are infrastructure, not algorithm params
    _BASE_FIELDS: ClassVar[frozenset[str]] = frozenset({'enabled'})

    @abstractmethod
    def shader_spec(self, viewport: ViewportConfig, scale: float) -> Optional[ShaderSpec]:
        """Build the shader spec from this instance's params.

        Args:
            viewport: Render target size
            scale: Preview scale for pixel-sized params

        Returns:
            ShaderSpec, or None if the effect renders nothing
        """
        pass

    # ------------------------------------------------------------------
    # Definition API
    # ------------------------------------------------------------------

    @classmethod
    def create_default_config(cls) -> dict[str, Any]:
        """Default config in the legacy slot shape (includes ``enabled: False``)."""
        return cls().model_dump(by_alias=True, mode='json')

    @classmethod
    def default_params(cls) -> dict[str, Any]:
        """Default params without ``enabled``."""
        config = cls.create_default_config()
        config.pop('enabled', None)
        return config

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> 'BaseEffect':
        """Validate params merged over the defaults."""
        return cls.model_validate({**cls.default_params(), **params})

    @classmethod
    def create_shader_spec(
        cls,
        params: dict[str, Any],
        viewport: ViewportConfig,
        scale: float = 1.0,
    ) -> Optional[ShaderSpec]:
        """Derive the shader spec for a pipeline entry's params."""
        return cls.from_params(params).shader_spec(viewport, scale)

    @classmethod
    def get_params_schema(cls) -> list[dict[str, Any]]:
        """Auto-generate param schema from model_fields for the editor UI."""
        return _model_params_schema(cls, cls._BASE_FIELDS)


def _model_params_schema(model: type[BaseModel], skip: frozenset[str] = frozenset()) -> list[dict[str, Any]]:
    schema = []
    for field_name, field_info in model.model_fields.items():
        if field_name in skip:
            continue
        param = _field_to_param_schema(field_name, field_info)
        if param:
            schema.append(param)
    return schema


def _field_to_param_schema(field_name: str, field_info: FieldInfo) -> dict[str, Any] | None:
    """Map a Pydantic FieldInfo to the editor schema dict format."""
    extra = field_info.json_schema_extra or {}

    annotation = field_info.annotation
    if annotation is None:
        return None

    schema_type = 'range'  # default
    if annotation is bool:
        schema_type = 'checkbox'
    elif extra.get('options'):
        schema_type = 'select'
    elif 'color' in field_name.lower():
        schema_type = 'color'
    elif annotation is str or get_origin(annotation) is list:
        schema_type = 'text'

    param_id = field_info.alias or field_name
    param: dict[str, Any] = {
        'id': param_id,
        'name': extra.get('display_name', field_name.replace('_', ' ').title()),
        'type': schema_type,
        'default': field_info.get_default(call_default_factory=True),
    }

    # Range constraints from Field(ge=, le=)
    for meta in (field_info.metadata or []):
        if hasattr(meta, 'ge') and meta.ge is not None:
            param['min'] = meta.ge
        if hasattr(meta, 'le') and meta.le is not None:
            param['max'] = meta.le
        if hasattr(meta, 'gt') and meta.gt is not None:
            param['min'] = meta.gt
        if hasattr(meta, 'lt') and meta.lt is not None:
            param['max'] = meta.lt

    # Extra schema hints
    for key in ('step', 'suffix', 'options'):
        if key in extra:
            param[key] = extra[key]

    return param
