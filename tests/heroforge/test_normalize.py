"""Tests for surface and mask shape normalization."""

import pytest

from heroforge.formats import (
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
from heroforge.layers import NormalizedSurfaceConfig


class TestSurfaceNormalization:
    """Test surface shape conversion."""

    def test_shape_checks(self):
        """Legacy and normalized shapes are told apart structurally."""
        legacy = {'type': 'stripe', 'width1': 20, 'angle': 45}
        normalized = {'id': 'stripe', 'params': {'width1': 20, 'angle': 45}}
        assert is_legacy_type_surface_config(legacy)
        assert not is_normalized_surface_config(legacy)
        assert is_normalized_surface_config(normalized)
        assert not is_legacy_type_surface_config(normalized)

    def test_normalize_legacy(self):
        """Legacy params move under ``params`` and ``type`` becomes ``id``."""
        result = normalize_surface_config({'type': 'stripe', 'width1': 20, 'angle': 45})
        assert result == {'id': 'stripe', 'params': {'width1': 20, 'angle': 45}}

    def test_normalize_is_identity_on_normalized(self):
        """Normalized input is returned as is."""
        normalized = {'id': 'solid', 'params': {}}
        assert normalize_surface_config(normalized) is normalized
        assert get_surface_as_normalized(normalized) is normalized

    def test_normalize_rejects_garbage(self):
        """Values in neither form raise ValueError."""
        with pytest.raises(ValueError):
            normalize_surface_config({'color': 'red'})

    def test_denormalize(self):
        """Denormalize flattens params next to ``type``."""
        assert denormalize_surface_config({'id': 'grid', 'params': {'size': 10}}) == {'type': 'grid', 'size': 10}

    def test_denormalize_accepts_models(self):
        """Model instances are dumped before conversion."""
        surface = NormalizedSurfaceConfig(id='checker', params={'cellSize': 8})
        assert denormalize_surface_config(surface) == {'type': 'checker', 'cellSize': 8}

    def test_denormalize_rejects_legacy(self):
        """Denormalizing a legacy value is an error."""
        with pytest.raises(ValueError):
            denormalize_surface_config({'type': 'grid', 'size': 10})

    def test_get_as_legacy_passes_legacy_through(self):
        """get_surface_as_legacy accepts both forms."""
        legacy = {'type': 'grid', 'size': 10}
        assert get_surface_as_legacy(legacy) is legacy
        assert get_surface_as_legacy({'id': 'grid', 'params': {'size': 10}}) == legacy


class TestMaskNormalization:
    """Test mask shape conversion."""

    def test_normalize_and_back(self):
        """Mask shapes convert in both directions."""
        legacy = {'type': 'circle', 'centerX': 0.5, 'centerY': 0.5, 'radius': 0.3, 'cutout': True}
        normalized = normalize_mask_config(legacy)
        assert normalized == {
            'id': 'circle',
            'params': {'centerX': 0.5, 'centerY': 0.5, 'radius': 0.3, 'cutout': True},
        }
        assert is_normalized_mask_config(normalized)
        assert denormalize_mask_config(normalized) == legacy

    def test_shape_checks(self):
        """A value with both ``id`` and ``type`` is neither form."""
        ambiguous = {'id': 'circle', 'type': 'circle', 'params': {}}
        assert not is_normalized_mask_config(ambiguous)
        assert not is_legacy_type_mask_config(ambiguous)
        assert is_legacy_type_mask_config({'type': 'blob'})

    def test_get_helpers(self):
        """The get-as helpers convert only when needed."""
        normalized = {'id': 'rect', 'params': {'left': 0.1}}
        assert get_mask_as_normalized(normalized) is normalized
        assert get_mask_as_legacy(normalized) == {'type': 'rect', 'left': 0.1}
