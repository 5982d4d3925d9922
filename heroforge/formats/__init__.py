"""
Serialized document formats.

- normalize: legacy and normalized surface and mask shapes
- effect_migration: legacy effect-filter struct and effect pipelines
- migration: whole-document upgrade of legacy shapes
- validation: structural checks on serialized documents
"""

from .effect_migration import (
    create_default_effect_filter_config,
    create_default_layer_effect_config,
    get_effect_configs_from_modifiers,
    has_legacy_effect_configs,
    is_legacy_effect_filter_config,
    is_lossy_legacy_conversion,
    is_single_effect_config,
    migrate_effect_configs_in_modifiers,
    migrate_legacy_effect_config,
    to_legacy_effect_config,
)
from .migration import (
    config_needs_migration,
    extract_expanded_layer_ids,
    migrate_expanded_from_config,
    migrate_hero_view_config,
    migrate_layer_config,
)
from .normalize import (
    denormalize_mask_config,
    denormalize_surface_config,
    get_mask_as_legacy,
    get_mask_as_normalized,
    get_surface_as_legacy,
    get_surface_as_normalized,
    is_legacy_type_mask_config,
    is_legacy_type_surface_config,
    is_normalized_mask_config,
    is_normalized_surface_config,
    normalize_mask_config,
    normalize_surface_config,
)
from .validation import ConfigValidationError, ConfigValidationResult, validate_hero_view_config

__all__ = [
    # Normalization
    'is_normalized_surface_config',
    'is_legacy_type_surface_config',
    'normalize_surface_config',
    'denormalize_surface_config',
    'get_surface_as_normalized',
    'get_surface_as_legacy',
    'is_normalized_mask_config',
    'is_legacy_type_mask_config',
    'normalize_mask_config',
    'denormalize_mask_config',
    'get_mask_as_normalized',
    'get_mask_as_legacy',
    # Effects
    'is_single_effect_config',
    'is_legacy_effect_filter_config',
    'create_default_layer_effect_config',
    'create_default_effect_filter_config',
    'migrate_legacy_effect_config',
    'to_legacy_effect_config',
    'is_lossy_legacy_conversion',
    'has_legacy_effect_configs',
    'migrate_effect_configs_in_modifiers',
    'get_effect_configs_from_modifiers',
    # Documents
    'config_needs_migration',
    'migrate_hero_view_config',
    'migrate_layer_config',
    'extract_expanded_layer_ids',
    'migrate_expanded_from_config',
    # Validation
    'ConfigValidationError',
    'ConfigValidationResult',
    'validate_hero_view_config',
]
