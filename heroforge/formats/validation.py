"""Structural validation of serialized hero view documents."""

from typing import Any, Mapping

from pydantic import BaseModel, Field

from heroforge.effects import is_valid_effect_type
from heroforge.layers.shapes import MASK_SHAPE_TYPE_IDS, SURFACE_TYPES

from .effect_migration import is_legacy_effect_filter_config


class ConfigValidationError(BaseModel):
    """One problem found in a document, located by a JSON-style path."""

    path: str
    message: str


class ConfigValidationResult(BaseModel):
    valid: bool = True
    errors: list[ConfigValidationError] = Field(default_factory=list)


def _check_shape(shape: Any, path: str, known_ids: tuple[str, ...], kind: str,
                 errors: list[ConfigValidationError]) -> None:
    if not isinstance(shape, Mapping):
        errors.append(ConfigValidationError(path=path, message=f"{kind} config must be an object"))
        return
    shape_id = shape.get('id')
    if shape_id is None:
        errors.append(ConfigValidationError(path=f"{path}.id", message=f"{kind} config has no id"))
    elif shape_id not in known_ids:
        errors.append(ConfigValidationError(path=f"{path}.id", message=f"Unknown {kind} type: {shape_id}"))
    if not isinstance(shape.get('params'), Mapping):
        errors.append(ConfigValidationError(path=f"{path}.params", message=f"{kind} params must be an object"))


def _check_modifier(modifier: Any, path: str, errors: list[ConfigValidationError]) -> None:
    if not isinstance(modifier, Mapping):
        errors.append(ConfigValidationError(path=path, message="Modifier must be an object"))
        return
    modifier_type = modifier.get('type')
    if modifier_type == 'mask':
        _check_shape(modifier.get('shape'), f"{path}.shape", MASK_SHAPE_TYPE_IDS, 'Mask', errors)
    elif modifier_type == 'effect':
        if is_legacy_effect_filter_config(modifier):
            errors.append(ConfigValidationError(path=path, message="Legacy effect config needs migration"))
            return
        effect_id = modifier.get('id')
        if not isinstance(effect_id, str) or not is_valid_effect_type(effect_id):
            errors.append(ConfigValidationError(path=f"{path}.id", message=f"Unknown effect type: {effect_id}"))
        if not isinstance(modifier.get('params'), Mapping):
            errors.append(ConfigValidationError(path=f"{path}.params", message="Effect params must be an object"))
    else:
        errors.append(ConfigValidationError(path=f"{path}.type", message=f"Unknown modifier type: {modifier_type}"))


def _check_layer(layer: Any, path: str, seen_ids: set[str], errors: list[ConfigValidationError]) -> None:
    if not isinstance(layer, Mapping):
        errors.append(ConfigValidationError(path=path, message="Layer must be an object"))
        return
    layer_id = layer.get('id')
    if not layer_id:
        errors.append(ConfigValidationError(path=f"{path}.id", message="Layer has no id"))
    elif layer_id in seen_ids:
        errors.append(ConfigValidationError(path=f"{path}.id", message=f"Duplicate layer id: {layer_id}"))
    else:
        seen_ids.add(layer_id)

    layer_type = layer.get('type')
    if layer_type in ('base', 'surface'):
        _check_shape(layer.get('surface'), f"{path}.surface", SURFACE_TYPES, 'Surface', errors)
    elif layer_type == 'processor':
        for index, modifier in enumerate(layer.get('modifiers') or []):
            _check_modifier(modifier, f"{path}.modifiers[{index}]", errors)
    elif layer_type == 'group':
        for index, child in enumerate(layer.get('children') or []):
            _check_layer(child, f"{path}.children[{index}]", seen_ids, errors)


def validate_hero_view_config(data: Mapping[str, Any]) -> ConfigValidationResult:
    """
    Validate a serialized document after migration.

    Checks surface and mask ids against the known type lists, effect ids
    against the effect registry, and layer ids for uniqueness across the
    whole tree, recursing into groups.

    Args:
        data: Serialized HeroViewConfig

    Returns:
        Result listing every problem with its path, e.g.
        ``layers[0].children[1].surface.id``
    """
    errors: list[ConfigValidationError] = []
    seen_ids: set[str] = set()
    layers = data.get('layers')
    if not isinstance(layers, list):
        errors.append(ConfigValidationError(path='layers', message="Layers must be a list"))
    else:
        for index, layer in enumerate(layers):
            _check_layer(layer, f"layers[{index}]", seen_ids, errors)
    return ConfigValidationResult(valid=not errors, errors=errors)
