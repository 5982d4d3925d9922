"""
Surface and mask shape normalization.

Two serialized shapes exist for both surfaces and mask shapes:

    legacy:     {"type": "stripe", "width1": 20, "angle": 45}
    normalized: {"id": "stripe", "params": {"width1": 20, "angle": 45}}

``normalize_*`` accepts either and returns the normalized form.
``denormalize_*`` is its inverse, for callers that must emit the legacy
form. Values already in the requested form are returned unchanged (same
object).
"""

from typing import Any, Mapping

from pydantic import BaseModel


def _as_dict(config: Any) -> Any:
    if isinstance(config, BaseModel):
        return config.model_dump(by_alias=True, mode='json')
    return config


def _is_normalized(config: Any) -> bool:
    return (
        isinstance(config, Mapping)
        and 'id' in config
        and 'params' in config
        and 'type' not in config
    )


def _is_legacy_type(config: Any) -> bool:
    return isinstance(config, Mapping) and 'type' in config and 'id' not in config


def _normalize(config: Any, kind: str) -> dict[str, Any]:
    config = _as_dict(config)
    if _is_normalized(config):
        return config
    if _is_legacy_type(config):
        params = {key: value for key, value in config.items() if key != 'type'}
        return {'id': config['type'], 'params': params}
    raise ValueError(f"Unrecognized {kind} config: {config!r}")


def _denormalize(config: Any, kind: str) -> dict[str, Any]:
    config = _as_dict(config)
    if not _is_normalized(config):
        raise ValueError(f"Expected normalized {kind} config, got: {config!r}")
    return {'type': config['id'], **config['params']}


# ============================================================================
# Surfaces
# ============================================================================


def is_normalized_surface_config(config: Any) -> bool:
    return _is_normalized(config)


def is_legacy_type_surface_config(config: Any) -> bool:
    return _is_legacy_type(config)


def normalize_surface_config(config: Any) -> dict[str, Any]:
    """
    Convert a surface config to the normalized form.

    Args:
        config: Legacy or normalized surface config (dict or model)

    Returns:
        ``{"id": ..., "params": {...}}``

    Raises:
        ValueError: If the value is in neither form
    """
    return _normalize(config, 'surface')


def denormalize_surface_config(config: Any) -> dict[str, Any]:
    """
    Convert a normalized surface config to the legacy flat form.

    Raises:
        ValueError: If the value is not normalized
    """
    return _denormalize(config, 'surface')


def get_surface_as_normalized(config: Any) -> dict[str, Any]:
    return normalize_surface_config(config)


def get_surface_as_legacy(config: Any) -> dict[str, Any]:
    config = _as_dict(config)
    if _is_legacy_type(config):
        return config
    return denormalize_surface_config(config)


# ============================================================================
# Mask shapes
# ============================================================================


def is_normalized_mask_config(config: Any) -> bool:
    return _is_normalized(config)


def is_legacy_type_mask_config(config: Any) -> bool:
    return _is_legacy_type(config)


def normalize_mask_config(config: Any) -> dict[str, Any]:
    """Convert a mask shape config to the normalized form."""
    return _normalize(config, 'mask')


def denormalize_mask_config(config: Any) -> dict[str, Any]:
    """Convert a normalized mask shape config to the legacy flat form."""
    return _denormalize(config, 'mask')


def get_mask_as_normalized(config: Any) -> dict[str, Any]:
    return normalize_mask_config(config)


def get_mask_as_legacy(config: Any) -> dict[str, Any]:
    config = _as_dict(config)
    if _is_legacy_type(config):
        return config
    return denormalize_mask_config(config)
