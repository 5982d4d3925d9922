"""Tests for moving modifiers within and between processors."""

import pytest

from heroforge.errors import InvalidMoveError
from heroforge.layers import SingleEffectConfig, create_default_mask_processor_config
from heroforge.tree import ModifierDropPosition, can_move_modifier_in_tree, move_modifier_in_tree

from builders import make_group, make_processor, make_surface


def _effect(effect_id):
    return SingleEffectConfig(id=effect_id, params={})


def _modifier_ids(tree, node_index):
    return [getattr(m, 'id', 'mask') for m in tree[node_index].modifiers]


def drop(position_type, node_id, index):
    return ModifierDropPosition(type=position_type, targetNodeId=node_id, targetIndex=index)


@pytest.fixture
def processor_tree():
    """Two processors separated by a surface."""
    return [
        make_surface('s'),
        make_processor('p1', [_effect('blur'), _effect('vignette'), _effect('pixelate')]),
        make_processor('p2', [create_default_mask_processor_config()]),
        make_processor('empty', []),
    ]


class TestMoveWithinProcessor:
    """Test reordering inside one processor."""

    def test_move_down(self, processor_tree):
        """Dropping after a later modifier moves the source behind it."""
        moved = move_modifier_in_tree(processor_tree, 'p1', 0, drop('after', 'p1', 2))
        assert _modifier_ids(moved, 1) == ['vignette', 'pixelate', 'blur']

    def test_move_up(self, processor_tree):
        """Dropping before an earlier modifier moves the source ahead of it."""
        moved = move_modifier_in_tree(processor_tree, 'p1', 2, drop('before', 'p1', 0))
        assert _modifier_ids(moved, 1) == ['pixelate', 'blur', 'vignette']

    def test_before_next_is_same_position(self, processor_tree):
        """Dropping just behind itself is a no-op."""
        assert not can_move_modifier_in_tree(processor_tree, 'p1', 0, drop('before', 'p1', 1))
        assert move_modifier_in_tree(processor_tree, 'p1', 0, drop('before', 'p1', 1)) is processor_tree
        assert move_modifier_in_tree(processor_tree, 'p1', 1, drop('after', 'p1', 0)) is processor_tree

    def test_input_unchanged(self, processor_tree):
        """The input tree keeps its modifier order."""
        move_modifier_in_tree(processor_tree, 'p1', 0, drop('after', 'p1', 2))
        assert _modifier_ids(processor_tree, 1) == ['blur', 'vignette', 'pixelate']


class TestMoveBetweenProcessors:
    """Test dragging a modifier to another processor."""

    def test_move_to_other_processor(self, processor_tree):
        """The modifier leaves the source and lands at the drop index."""
        moved = move_modifier_in_tree(processor_tree, 'p1', 1, drop('before', 'p2', 0))
        assert _modifier_ids(moved, 1) == ['blur', 'pixelate']
        assert _modifier_ids(moved, 2) == ['vignette', 'mask']
        assert moved[0] is processor_tree[0]

    def test_move_into_empty_processor(self, processor_tree):
        """An empty processor accepts a drop at index zero."""
        assert can_move_modifier_in_tree(processor_tree, 'p2', 0, drop('before', 'empty', 0))
        moved = move_modifier_in_tree(processor_tree, 'p2', 0, drop('before', 'empty', 0))
        assert moved[2].modifiers == []
        assert moved[3].get_mask() is not None

    def test_move_into_nested_processor(self, processor_tree):
        """Processors inside groups are reachable."""
        tree = [*processor_tree, make_group('g', [make_surface('x'), make_processor('inner', [])])]
        moved = move_modifier_in_tree(tree, 'p1', 2, drop('after', 'inner', 0))
        assert [m.id for m in moved[4].children[1].modifiers] == ['pixelate']


class TestRejectedMoves:
    """Test invalid modifier moves."""

    def test_non_processor_target(self, processor_tree):
        """Only processors hold modifiers."""
        assert not can_move_modifier_in_tree(processor_tree, 'p1', 0, drop('before', 's', 0))
        with pytest.raises(InvalidMoveError):
            move_modifier_in_tree(processor_tree, 'p1', 0, drop('before', 's', 0))

    def test_index_out_of_range(self, processor_tree):
        """Source and drop indices must exist."""
        assert not can_move_modifier_in_tree(processor_tree, 'p1', 3, drop('before', 'p2', 0))
        assert not can_move_modifier_in_tree(processor_tree, 'p1', 0, drop('before', 'p2', 1))
        assert not can_move_modifier_in_tree(processor_tree, 'p1', 0, drop('before', 'empty', 1))
        with pytest.raises(InvalidMoveError):
            move_modifier_in_tree(processor_tree, 'p1', 0, drop('after', 'p2', 4))

    def test_unknown_ids_are_noops(self, processor_tree):
        """Unknown node ids leave the tree alone."""
        assert not can_move_modifier_in_tree(processor_tree, 'missing', 0, drop('before', 'p2', 0))
        assert move_modifier_in_tree(processor_tree, 'missing', 0, drop('before', 'p2', 0)) is processor_tree
        assert move_modifier_in_tree(processor_tree, 'p1', 0, drop('before', 'missing', 0)) is processor_tree
