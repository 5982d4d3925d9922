"""
Tests for converting between effect pipelines and the legacy effect struct.
"""

import pytest

from heroforge.effects import EFFECT_TYPES, create_single_effect_config
from heroforge.formats import (
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
from heroforge.layers import SingleEffectConfig


@pytest.fixture
def legacy_filter():
    """Legacy wrapper with every slot disabled."""
    return create_default_effect_filter_config()


class TestLegacyChecks:
    """Test format detection of effect modifiers."""

    def test_single_effect_config(self):
        """Canonical entries have id and params."""
        assert is_single_effect_config({'type': 'effect', 'id': 'blur', 'params': {}})
        assert is_single_effect_config(SingleEffectConfig(id='blur'))
        assert not is_single_effect_config({'type': 'mask', 'shape': {}})

    def test_legacy_filter_config(self, legacy_filter):
        """The legacy wrapper has config and no id."""
        assert is_legacy_effect_filter_config(legacy_filter)
        assert not is_legacy_effect_filter_config({'type': 'effect', 'id': 'blur', 'params': {}})
        assert has_legacy_effect_configs([{'type': 'mask'}, legacy_filter])
        assert not has_legacy_effect_configs([{'type': 'effect', 'id': 'blur', 'params': {}}])

    def test_default_filter_has_every_slot(self, legacy_filter):
        """The default legacy struct has one disabled slot per effect."""
        assert legacy_filter['enabled'] is True
        assert tuple(legacy_filter['config']) == EFFECT_TYPES
        assert all(slot['enabled'] is False for slot in legacy_filter['config'].values())


class TestMigrateLegacyEffectConfig:
    """Test legacy struct to pipeline conversion."""

    def test_enabled_slots_in_registry_order(self, legacy_filter):
        """Enabled slots come out in registry order, not struct order."""
        legacy_filter['config'] = {
            'blur': {'enabled': True, 'radius': 12},
            'dotHalftone': {'enabled': False, 'dotSize': 8},
            'vignette': {**legacy_filter['config']['vignette'], 'enabled': True},
        }
        pipeline = migrate_legacy_effect_config(legacy_filter)
        assert [e.id for e in pipeline] == ['vignette', 'blur']
        assert pipeline[1].params == {'radius': 12}

    def test_params_kept_verbatim(self, legacy_filter):
        """All params except ``enabled`` are copied unchanged."""
        legacy_filter['config']['dotHalftone'] = {'enabled': True, 'dotSize': 12, 'spacing': 20, 'angle': 30}
        (entry,) = migrate_legacy_effect_config(legacy_filter)
        assert entry.id == 'dotHalftone'
        assert entry.params == {'dotSize': 12, 'spacing': 20, 'angle': 30}

    def test_disabled_wrapper_yields_nothing(self, legacy_filter):
        """A disabled wrapper migrates to an empty pipeline."""
        legacy_filter['enabled'] = False
        legacy_filter['config']['blur']['enabled'] = True
        assert migrate_legacy_effect_config(legacy_filter) == []

    def test_bare_slot_map(self):
        """The slot map without the wrapper is accepted too."""
        pipeline = migrate_legacy_effect_config({'chromaticAberration': {'enabled': True, 'intensity': 5}})
        assert pipeline == [SingleEffectConfig(id='chromaticAberration', params={'intensity': 5})]

    def test_older_struct_without_mosaic_slots(self):
        """Structs from before the mosaic effects migrate without them."""
        slots = create_default_layer_effect_config()
        for key in ('pixelate', 'hexagonMosaic', 'voronoiMosaic'):
            del slots[key]
        slots['lineHalftone']['enabled'] = True
        pipeline = migrate_legacy_effect_config({'type': 'effect', 'enabled': True, 'config': slots})
        assert [e.id for e in pipeline] == ['lineHalftone']


class TestToLegacyEffectConfig:
    """Test pipeline to legacy struct conversion."""

    def test_every_slot_present(self):
        """Slots without a pipeline entry are disabled defaults."""
        legacy = to_legacy_effect_config([SingleEffectConfig(id='blur', params={'radius': 15})])
        assert legacy['type'] == 'effect'
        assert legacy['enabled'] is True
        assert tuple(legacy['config']) == EFFECT_TYPES
        assert legacy['config']['blur']['enabled'] is True
        assert legacy['config']['blur']['radius'] == 15
        assert legacy['config']['vignette']['enabled'] is False

    def test_empty_pipeline_disables_wrapper(self):
        """An empty pipeline produces a disabled wrapper."""
        assert to_legacy_effect_config([])['enabled'] is False

    def test_first_duplicate_wins(self, heroforge_logs):
        """Only the first entry per effect id is kept, with a warning."""
        pipeline = [
            SingleEffectConfig(id='blur', params={'radius': 4}),
            SingleEffectConfig(id='blur', params={'radius': 20}),
        ]
        assert is_lossy_legacy_conversion(pipeline)
        legacy = to_legacy_effect_config(pipeline)
        assert legacy['config']['blur']['radius'] == 4
        assert "dropped" in heroforge_logs.text

    def test_custom_defaults(self):
        """Slots start from the given default config."""
        defaults = create_default_layer_effect_config()
        defaults['blur']['radius'] = 3
        legacy = to_legacy_effect_config([], defaults)
        assert legacy['config']['blur'] == {**defaults['blur'], 'enabled': False}

    def test_lossless_pipeline(self):
        """One entry per known effect id is not lossy."""
        assert not is_lossy_legacy_conversion([SingleEffectConfig(id='blur'), SingleEffectConfig(id='vignette')])
        assert is_lossy_legacy_conversion([SingleEffectConfig(id='sparkle')])

    def test_round_trip_normalizes_to_registry_order(self):
        """Lossless pipelines survive the round trip, reordered by registry."""
        pipeline = [
            create_single_effect_config('blur'),
            create_single_effect_config('pixelate'),
            create_single_effect_config('vignette'),
        ]
        restored = migrate_legacy_effect_config(to_legacy_effect_config(pipeline))
        assert [e.id for e in restored] == ['vignette', 'blur', 'pixelate']
        by_id = {e.id: e for e in pipeline}
        for entry in restored:
            assert entry == by_id[entry.id]


class TestModifierLists:
    """Test legacy expansion inside modifier lists."""

    def test_expands_legacy_in_place(self, legacy_filter):
        """Legacy wrappers expand where they were; masks stay."""
        legacy_filter['config']['blur'] = {'enabled': True, 'radius': 8}
        mask = {'type': 'mask', 'enabled': True, 'shape': {'id': 'circle', 'params': {}}}
        modifiers = [legacy_filter, mask]
        migrated = migrate_effect_configs_in_modifiers(modifiers)
        assert migrated == [{'type': 'effect', 'id': 'blur', 'params': {'radius': 8}}, mask]

    def test_canonical_list_returned_as_is(self):
        """Lists without legacy entries are not copied."""
        modifiers = [{'type': 'effect', 'id': 'blur', 'params': {}}]
        assert migrate_effect_configs_in_modifiers(modifiers) is modifiers

    def test_collects_effects_from_both_forms(self, legacy_filter):
        """Effects are gathered from canonical and legacy entries, masks skipped."""
        legacy_filter['config']['vignette']['enabled'] = True
        modifiers = [
            {'type': 'effect', 'id': 'blur', 'params': {'radius': 2}},
            {'type': 'mask', 'shape': {'id': 'circle', 'params': {}}},
            legacy_filter,
        ]
        effects = get_effect_configs_from_modifiers(modifiers)
        assert [e.id for e in effects] == ['blur', 'vignette']
