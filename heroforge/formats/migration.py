"""
Document migration from legacy serialized shapes.

Migration runs on the JSON dict before model validation. Legacy shapes are
detected structurally:

- surfaces stored as ``{type, ...params}`` on base and surface layers
- mask shapes stored as ``{type, ...params}`` in mask modifiers
- effect modifiers stored as the legacy effect-filter struct
- groups carrying the UI-only ``expanded`` flag

Documents stamped with the current ``_version`` are trusted as canonical and
skip the legacy check. Subtrees that need no rewrite are returned as the same
objects, so migrating a canonical document returns its input.
"""

import logging
from typing import Any

from heroforge.config import settings

from .effect_migration import has_legacy_effect_configs, migrate_effect_configs_in_modifiers
from .normalize import (
    is_legacy_type_mask_config,
    is_legacy_type_surface_config,
    normalize_mask_config,
    normalize_surface_config,
)

logger = logging.getLogger(__name__)

VERSION_KEY = '_version'

_SURFACE_LAYER_TYPES = ('base', 'surface')


def _layer_needs_migration(layer: dict[str, Any]) -> bool:
    layer_type = layer.get('type')
    if layer_type in _SURFACE_LAYER_TYPES and is_legacy_type_surface_config(layer.get('surface')):
        return True
    if layer_type == 'processor':
        modifiers = layer.get('modifiers') or []
        if has_legacy_effect_configs(modifiers):
            return True
        return any(
            m.get('type') == 'mask' and is_legacy_type_mask_config(m.get('shape'))
            for m in modifiers
        )
    if layer_type == 'group':
        if 'expanded' in layer:
            return True
        return any(_layer_needs_migration(child) for child in layer.get('children') or [])
    return False


def _migrate_modifier(modifier: dict[str, Any]) -> dict[str, Any]:
    if modifier.get('type') == 'mask' and is_legacy_type_mask_config(modifier.get('shape')):
        return {**modifier, 'shape': normalize_mask_config(modifier['shape'])}
    return modifier


def migrate_layer_config(layer: dict[str, Any]) -> dict[str, Any]:
    """
    Migrate one serialized layer node and its descendants.

    Args:
        layer: Serialized layer node

    Returns:
        The same dict when it is canonical, otherwise a migrated copy
    """
    if not _layer_needs_migration(layer):
        return layer

    layer_type = layer.get('type')
    migrated = dict(layer)

    if layer_type in _SURFACE_LAYER_TYPES:
        migrated['surface'] = normalize_surface_config(layer['surface'])
    elif layer_type == 'processor':
        modifiers = migrate_effect_configs_in_modifiers(layer.get('modifiers') or [])
        migrated['modifiers'] = [_migrate_modifier(m) for m in modifiers]
    elif layer_type == 'group':
        migrated.pop('expanded', None)
        migrated['children'] = [migrate_layer_config(child) for child in layer.get('children') or []]

    return migrated


def config_needs_migration(data: dict[str, Any]) -> bool:
    """
    Check whether a serialized document holds any legacy shape.

    Args:
        data: Serialized HeroViewConfig

    Returns:
        False for documents at the current schema version or with no legacy
        shape anywhere in the layer tree
    """
    version = data.get(VERSION_KEY)
    if isinstance(version, int) and version >= settings.SCHEMA_VERSION:
        return False
    return any(_layer_needs_migration(layer) for layer in data.get('layers') or [])


def migrate_hero_view_config(data: dict[str, Any]) -> dict[str, Any]:
    """
    Upgrade a serialized document to the canonical shape.

    Idempotent: the result never needs migration again, and canonical input
    is returned unchanged.

    Args:
        data: Serialized HeroViewConfig

    Returns:
        The input when no migration is needed, otherwise a migrated copy
        stamped with the current schema version
    """
    if not config_needs_migration(data):
        return data

    migrated = dict(data)
    migrated['layers'] = [migrate_layer_config(layer) for layer in data.get('layers') or []]
    migrated[VERSION_KEY] = settings.SCHEMA_VERSION
    logger.info(f"Migrated hero view config to schema version {settings.SCHEMA_VERSION}")
    return migrated


def extract_expanded_layer_ids(layers: list[dict[str, Any]]) -> set[str]:
    """Collect the ids of groups flagged ``expanded`` in a serialized tree."""
    expanded_ids = set()
    for layer in layers:
        if layer.get('type') != 'group':
            continue
        if layer.get('expanded'):
            expanded_ids.add(layer['id'])
        expanded_ids |= extract_expanded_layer_ids(layer.get('children') or [])
    return expanded_ids


def migrate_expanded_from_config(layers: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Strip the ``expanded`` flag from every group in a serialized tree."""
    result = []
    for layer in layers:
        if layer.get('type') == 'group':
            layer = {key: value for key, value in layer.items() if key != 'expanded'}
            layer['children'] = migrate_expanded_from_config(layer.get('children') or [])
        result.append(layer)
    return result
