"""
Conversion between effect pipelines and the legacy effect-filter struct.

Older documents stored effects as one exclusive struct per processor, with a
slot for every effect and an ``enabled`` flag on each slot:

    {"type": "effect", "enabled": true, "config": {
        "vignette": {"enabled": true, "shape": "ellipse", ...},
        "chromaticAberration": {"enabled": false, "intensity": 3},
        ...
    }}

The canonical form is an ordered pipeline of ``SingleEffectConfig`` entries.
A disabled slot has no pipeline entry.

Converting a pipeline back to the struct is lossy. Only the first entry per
effect id survives, and entries without a slot are dropped.
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from heroforge.config import settings
from heroforge.effects import EFFECT_TYPES, get_effect_definition
from heroforge.layers.modifiers import SingleEffectConfig

logger = logging.getLogger(__name__)

EffectLike = Union[SingleEffectConfig, Mapping[str, Any]]


def is_single_effect_config(config: Any) -> bool:
    """Check for a canonical pipeline entry (``type``, ``id`` and ``params``)."""
    if isinstance(config, SingleEffectConfig):
        return True
    return (
        isinstance(config, Mapping)
        and config.get('type') == 'effect'
        and 'id' in config
        and 'params' in config
    )


def is_legacy_effect_filter_config(config: Any) -> bool:
    """Check for the legacy wrapper (``type`` effect with ``config`` and no ``id``)."""
    return (
        isinstance(config, Mapping)
        and config.get('type') == 'effect'
        and 'config' in config
        and 'id' not in config
    )


def create_default_layer_effect_config() -> dict[str, dict[str, Any]]:
    """Legacy slot map with every registered effect at its defaults, disabled."""
    return {
        effect_type: get_effect_definition(effect_type).create_default_config()
        for effect_type in EFFECT_TYPES
    }


def create_default_effect_filter_config() -> dict[str, Any]:
    """Legacy wrapper with all slots disabled."""
    return {
        'type': 'effect',
        'enabled': True,
        'config': create_default_layer_effect_config(),
    }


def migrate_legacy_effect_config(legacy: Mapping[str, Any]) -> list[SingleEffectConfig]:
    """
    Convert a legacy effect struct to a pipeline.

    Slots are visited in registry order, whatever order the struct lists
    them in. Each enabled slot becomes one entry whose params are the slot's
    fields minus ``enabled``.

    Args:
        legacy: The ``{type, enabled, config}`` wrapper or a bare slot map

    Returns:
        Pipeline with one entry per enabled slot; empty when the wrapper
        itself is disabled
    """
    if is_legacy_effect_filter_config(legacy):
        if not legacy.get('enabled', False):
            return []
        slots = legacy['config'] or {}
    else:
        slots = legacy

    effects = []
    for effect_type in EFFECT_TYPES:
        slot = slots.get(effect_type)
        if not slot or not slot.get('enabled', False):
            continue
        params = {key: value for key, value in slot.items() if key != 'enabled'}
        effects.append(SingleEffectConfig(id=effect_type, params=params))
    return effects


def _entry_id_and_params(effect: EffectLike) -> tuple[str, dict[str, Any]]:
    if isinstance(effect, SingleEffectConfig):
        return effect.id, effect.params
    return effect['id'], effect.get('params', {})


def is_lossy_legacy_conversion(pipeline: Iterable[EffectLike]) -> bool:
    """Check whether ``to_legacy_effect_config`` would drop pipeline entries."""
    seen = set()
    for effect in pipeline:
        effect_type, _ = _entry_id_and_params(effect)
        if effect_type in seen or effect_type not in EFFECT_TYPES:
            return True
        seen.add(effect_type)
    return False


def to_legacy_effect_config(
    pipeline: Iterable[EffectLike],
    default_config: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> dict[str, Any]:
    """
    Convert a pipeline to the legacy effect-filter wrapper.

    Every slot starts from ``default_config`` (registry defaults when
    omitted) with ``enabled`` false. The first entry for each effect id
    enables its slot and merges its params over the defaults. Later entries
    with the same id are dropped, as are ids without a slot.

    Args:
        pipeline: Canonical pipeline entries
        default_config: Slot map to start from

    Returns:
        ``{"type": "effect", "enabled": ..., "config": {...}}``
    """
    defaults = default_config if default_config is not None else create_default_layer_effect_config()
    slots: dict[str, dict[str, Any]] = {
        effect_type: {**defaults.get(effect_type, {}), 'enabled': False}
        for effect_type in EFFECT_TYPES
    }

    applied: set[str] = set()
    dropped: list[str] = []
    for effect in pipeline:
        effect_type, params = _entry_id_and_params(effect)
        if effect_type not in slots or effect_type in applied:
            dropped.append(effect_type)
            continue
        slots[effect_type] = {**slots[effect_type], **params, 'enabled': True}
        applied.add(effect_type)

    if dropped and settings.WARN_ON_LOSSY_EXPORT:
        logger.warning(f"Legacy effect export dropped pipeline entries: {', '.join(dropped)}")

    return {
        'type': 'effect',
        'enabled': bool(applied),
        'config': slots,
    }


def has_legacy_effect_configs(modifiers: Iterable[Any]) -> bool:
    return any(is_legacy_effect_filter_config(m) for m in modifiers)


def migrate_effect_configs_in_modifiers(modifiers: list[Any]) -> list[Any]:
    """
    Expand legacy effect wrappers in a serialized modifier list.

    Masks and canonical entries are kept as they are. Each legacy wrapper is
    replaced in place by its pipeline entries.

    Args:
        modifiers: Serialized modifiers

    Returns:
        The same list when nothing is legacy, otherwise a new list
    """
    if not has_legacy_effect_configs(modifiers):
        return modifiers

    result = []
    for modifier in modifiers:
        if is_legacy_effect_filter_config(modifier):
            result.extend(e.to_api_dict() for e in migrate_legacy_effect_config(modifier))
        else:
            result.append(modifier)
    return result


def get_effect_configs_from_modifiers(modifiers: Iterable[Any]) -> list[SingleEffectConfig]:
    """Collect the pipeline from modifiers in either format, skipping masks."""
    effects = []
    for modifier in modifiers:
        if isinstance(modifier, SingleEffectConfig):
            effects.append(modifier)
        elif is_single_effect_config(modifier):
            effects.append(SingleEffectConfig.model_validate(modifier))
        elif is_legacy_effect_filter_config(modifier):
            effects.extend(migrate_legacy_effect_config(modifier))
    return effects
