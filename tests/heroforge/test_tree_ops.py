"""
Tests for layer tree operations.

Trees are lists of root nodes. Every operation must return a new list and
share untouched subtrees with its input.

Run with: pytest tests/heroforge/test_tree_ops.py -v
"""

import re

import pytest
from pydantic import ValidationError

from heroforge.errors import DuplicateLayerIdError, InvalidLayerPatchError, InvalidMoveError
from heroforge.layers import LayerGroup, ProcessorLayer, TextLayer
from heroforge.tree import (
    DropPosition,
    can_move_layer_in_tree,
    collect_layer_ids,
    find_layer_in_tree,
    find_parent_layer_in_tree,
    flatten_layers_in_tree,
    insert_layer_in_tree,
    move_layer_in_tree,
    remove_layer_from_tree,
    update_layer_in_tree,
    validate_move,
    wrap_layer_in_group_in_tree,
    wrap_layer_with_mask_in_tree,
)

from builders import make_group, make_surface


def _ids(nodes):
    return [node.id for node in nodes]


def before(target_id):
    return DropPosition(type='before', targetId=target_id)


def after(target_id):
    return DropPosition(type='after', targetId=target_id)


def into(target_id):
    return DropPosition(type='into', targetId=target_id)


class TestFind:
    """Test lookups."""

    def test_find_root_and_nested(self, flat_tree):
        """Nodes are found at any depth."""
        assert find_layer_in_tree(flat_tree, 'layer-2').id == 'layer-2'
        assert find_layer_in_tree(flat_tree, 'child-2').id == 'child-2'
        assert find_layer_in_tree(flat_tree, 'missing') is None

    def test_flatten_pre_order(self, flat_tree):
        """Flattening lists groups before their children."""
        assert _ids(flatten_layers_in_tree(flat_tree)) == [
            'layer-1', 'layer-2', 'group-1', 'child-1', 'child-2', 'layer-3',
        ]

    def test_find_parent(self, flat_tree):
        """Parents are groups; root nodes and unknown ids have none."""
        assert find_parent_layer_in_tree(flat_tree, 'child-1').id == 'group-1'
        assert find_parent_layer_in_tree(flat_tree, 'layer-1') is None
        assert find_parent_layer_in_tree(flat_tree, 'missing') is None


class TestUpdate:
    """Test patching nodes."""

    def test_update_nested(self, flat_tree):
        """A nested node is patched and the input is left alone."""
        updated = update_layer_in_tree(flat_tree, 'child-1', {'name': 'Renamed', 'visible': False})
        node = find_layer_in_tree(updated, 'child-1')
        assert node.name == 'Renamed'
        assert node.visible is False
        assert find_layer_in_tree(flat_tree, 'child-1').name == 'child-1'

    def test_path_copy_shares_siblings(self, flat_tree):
        """Only the path to the node is copied."""
        updated = update_layer_in_tree(flat_tree, 'child-1', {'name': 'Renamed'})
        assert updated is not flat_tree
        assert updated[0] is flat_tree[0]
        assert updated[1] is flat_tree[1]
        assert updated[3] is flat_tree[3]
        assert updated[2] is not flat_tree[2]
        assert updated[2].children[1] is flat_tree[2].children[1]

    def test_alias_keys(self):
        """Patches may use JSON keys."""
        tree = [TextLayer(id='t')]
        updated = update_layer_in_tree(tree, 't', {'fontSize': 64})
        assert updated[0].font_size == 64

    def test_patch_values_validated(self):
        """Patched values go through field validation."""
        tree = [TextLayer(id='t')]
        with pytest.raises(ValidationError):
            update_layer_in_tree(tree, 't', {'fontSize': -1})

    def test_identity_fields_rejected(self, flat_tree):
        """id and type cannot be patched."""
        with pytest.raises(InvalidLayerPatchError):
            update_layer_in_tree(flat_tree, 'layer-1', {'id': 'other'})
        with pytest.raises(InvalidLayerPatchError):
            update_layer_in_tree(flat_tree, 'layer-1', {'type': 'group'})

    def test_unknown_field_rejected(self, flat_tree):
        """Fields the node does not have are rejected."""
        with pytest.raises(InvalidLayerPatchError):
            update_layer_in_tree(flat_tree, 'layer-1', {'children': []})

    def test_unknown_id_is_noop(self, flat_tree):
        """Updating a missing id returns the input."""
        assert update_layer_in_tree(flat_tree, 'missing', {'name': 'x'}) is flat_tree

    def test_children_patch_rejects_taken_ids(self, flat_tree):
        """Patched children may not reuse ids from elsewhere or among themselves."""
        with pytest.raises(DuplicateLayerIdError):
            update_layer_in_tree(flat_tree, 'group-1', {'children': [make_surface('layer-1')]})
        with pytest.raises(DuplicateLayerIdError):
            update_layer_in_tree(flat_tree, 'group-1', {'children': [make_surface('group-1')]})
        with pytest.raises(DuplicateLayerIdError):
            update_layer_in_tree(flat_tree, 'group-1', {'children': [make_surface('x'), make_surface('x')]})

    def test_children_patch_keeps_own_ids(self, flat_tree):
        """Children may be replaced by a subtree reusing the group's current child ids."""
        updated = update_layer_in_tree(
            flat_tree, 'group-1', {'children': [make_surface('child-2'), make_surface('new')]})
        assert _ids(updated[2].children) == ['child-2', 'new']
        assert len(collect_layer_ids(updated)) == len(flatten_layers_in_tree(updated))

    def test_group_children_kept(self, flat_tree):
        """Patching a group keeps its children instances."""
        updated = update_layer_in_tree(flat_tree, 'group-1', {'blendMode': 'multiply'})
        assert updated[2].blend_mode == 'multiply'
        assert updated[2].children[0] is flat_tree[2].children[0]


class TestRemove:
    """Test removal."""

    def test_remove_group_removes_subtree(self, flat_tree):
        """Removing a group drops its children."""
        removed = remove_layer_from_tree(flat_tree, 'group-1')
        assert _ids(flatten_layers_in_tree(removed)) == ['layer-1', 'layer-2', 'layer-3']

    def test_remove_nested(self, flat_tree):
        """Nested nodes are removed from their group."""
        removed = remove_layer_from_tree(flat_tree, 'child-2')
        assert _ids(removed[2].children) == ['child-1']
        assert _ids(flat_tree[2].children) == ['child-1', 'child-2']

    def test_remove_unknown_is_noop(self, flat_tree):
        """Removing a missing id returns the input."""
        assert remove_layer_from_tree(flat_tree, 'missing') is flat_tree


class TestMove:
    """Test drag-and-drop moves."""

    def test_move_before(self, flat_tree):
        """A node moves in front of the target."""
        moved = move_layer_in_tree(flat_tree, 'layer-3', before('layer-1'))
        assert _ids(moved) == ['layer-3', 'layer-1', 'layer-2', 'group-1']

    def test_move_after(self, flat_tree):
        """A node moves behind the target."""
        moved = move_layer_in_tree(flat_tree, 'layer-1', after('layer-3'))
        assert _ids(moved) == ['layer-2', 'group-1', 'layer-3', 'layer-1']

    def test_move_into_group_appends(self, flat_tree):
        """``into`` makes the node the group's last child."""
        moved = move_layer_in_tree(flat_tree, 'layer-1', into('group-1'))
        assert _ids(moved[1].children) == ['child-1', 'child-2', 'layer-1']

    def test_move_out_of_group(self, flat_tree):
        """A nested node moves to the root level."""
        moved = move_layer_in_tree(flat_tree, 'child-1', after('layer-3'))
        assert _ids(moved) == ['layer-1', 'layer-2', 'group-1', 'layer-3', 'child-1']
        assert _ids(moved[2].children) == ['child-2']

    def test_self_into_rejected(self):
        """Moving a group into itself raises and the tree is untouched."""
        tree = [make_group('g1', [make_surface('s1')])]
        assert not can_move_layer_in_tree(tree, 'g1', into('g1'))
        with pytest.raises(InvalidMoveError):
            move_layer_in_tree(tree, 'g1', into('g1'))
        assert _ids(tree[0].children) == ['s1']

    def test_move_into_descendant_rejected(self):
        """A group cannot be moved into its own descendant."""
        tree = [make_group('outer', [make_group('inner', [make_surface('s')])])]
        assert not can_move_layer_in_tree(tree, 'outer', into('inner'))
        assert not can_move_layer_in_tree(tree, 'outer', before('s'))
        with pytest.raises(InvalidMoveError):
            move_layer_in_tree(tree, 'outer', into('inner'))

    def test_into_non_group_rejected(self, flat_tree):
        """Only groups accept ``into`` drops."""
        assert not can_move_layer_in_tree(flat_tree, 'layer-1', into('layer-2'))
        with pytest.raises(InvalidMoveError):
            move_layer_in_tree(flat_tree, 'layer-1', into('layer-2'))

    def test_relative_to_self_rejected(self, flat_tree):
        """Before/after the node itself is rejected."""
        assert not can_move_layer_in_tree(flat_tree, 'layer-1', before('layer-1'))
        with pytest.raises(InvalidMoveError):
            move_layer_in_tree(flat_tree, 'layer-1', after('layer-1'))

    def test_unknown_ids(self, flat_tree):
        """Unknown node or target ids cannot move and are no-ops."""
        assert not can_move_layer_in_tree(flat_tree, 'missing', before('layer-1'))
        assert not can_move_layer_in_tree(flat_tree, 'layer-1', before('missing'))
        assert move_layer_in_tree(flat_tree, 'missing', before('layer-1')) is flat_tree
        assert move_layer_in_tree(flat_tree, 'layer-1', before('missing')) is flat_tree

    def test_validate_move_reason(self, flat_tree):
        """Rejections come with a reason."""
        result = validate_move(flat_tree, 'layer-1', into('layer-2'))
        assert not result.valid
        assert 'not a group' in result.reason
        assert validate_move(flat_tree, 'layer-1', into('group-1')).valid

    def test_rejected_move_logged(self, flat_tree, heroforge_logs):
        """Rejected moves are logged at debug level."""
        with pytest.raises(InvalidMoveError):
            move_layer_in_tree(flat_tree, 'layer-1', into('layer-2'))
        assert 'Rejected move of layer-1' in heroforge_logs.text

    def test_no_cycle_for_any_node(self, flat_tree):
        """No node can move into itself or below itself."""
        for node in flatten_layers_in_tree(flat_tree):
            assert not can_move_layer_in_tree(flat_tree, node.id, into(node.id))
            for descendant in flatten_layers_in_tree(getattr(node, 'children', [])):
                for position in (before, after, into):
                    assert not can_move_layer_in_tree(flat_tree, node.id, position(descendant.id))

    def test_predicate_and_mutator_agree(self, flat_tree):
        """The mutator succeeds exactly when the predicate allows the move."""
        ids = collect_layer_ids(flat_tree)
        for node_id in ids:
            for target_id in ids:
                for position in (before(target_id), after(target_id), into(target_id)):
                    if can_move_layer_in_tree(flat_tree, node_id, position):
                        moved = move_layer_in_tree(flat_tree, node_id, position)
                        assert collect_layer_ids(moved) == ids
                    else:
                        with pytest.raises(InvalidMoveError):
                            move_layer_in_tree(flat_tree, node_id, position)


class TestInsert:
    """Test inserting new nodes."""

    def test_insert_positions(self, flat_tree):
        """New nodes land before, after or into the target."""
        assert _ids(insert_layer_in_tree(flat_tree, make_surface('new'), before('layer-2')))[:3] == [
            'layer-1', 'new', 'layer-2',
        ]
        assert _ids(insert_layer_in_tree(flat_tree, make_surface('new'), after('layer-1')))[:3] == [
            'layer-1', 'new', 'layer-2',
        ]
        inserted = insert_layer_in_tree(flat_tree, make_surface('new'), into('group-1'))
        assert _ids(inserted[2].children) == ['child-1', 'child-2', 'new']

    def test_insert_appends_without_position(self, flat_tree):
        """Without a position the node is appended at the root."""
        assert _ids(insert_layer_in_tree(flat_tree, make_surface('new')))[-1] == 'new'

    def test_duplicate_ids_rejected(self, flat_tree):
        """Inserting a subtree with a taken id raises."""
        with pytest.raises(DuplicateLayerIdError):
            insert_layer_in_tree(flat_tree, make_surface('layer-1'))
        with pytest.raises(DuplicateLayerIdError):
            insert_layer_in_tree(flat_tree, make_group('fresh', [make_surface('child-1')]))

    def test_insert_into_non_group(self, flat_tree):
        """``into`` a non-group raises."""
        with pytest.raises(InvalidMoveError):
            insert_layer_in_tree(flat_tree, make_surface('new'), into('layer-1'))

    def test_unknown_target_is_noop(self, flat_tree):
        """An unknown target returns the input."""
        assert insert_layer_in_tree(flat_tree, make_surface('new'), before('missing')) is flat_tree


class TestWrap:
    """Test wrapping nodes in groups."""

    def test_wrap_root_layer(self):
        """The wrapping group takes the node's place and holds only it."""
        s1 = make_surface('s1')
        tree = [make_surface('s0'), s1, make_surface('s2')]
        wrapped = wrap_layer_in_group_in_tree(tree, 's1', 'new-group')
        assert _ids(wrapped) == ['s0', 'new-group', 's2']
        group = wrapped[1]
        assert isinstance(group, LayerGroup)
        assert group.children == [s1]
        assert group.children[0] is s1

    def test_wrap_nested_layer(self, flat_tree):
        """Nested nodes are wrapped in place."""
        wrapped = wrap_layer_in_group_in_tree(flat_tree, 'child-1', 'new-group')
        assert _ids(wrapped[2].children) == ['new-group', 'child-2']
        assert _ids(wrapped[2].children[0].children) == ['child-1']

    def test_generated_group_id(self, flat_tree):
        """Without an id the group gets ``group-<ms>``."""
        wrapped = wrap_layer_in_group_in_tree(flat_tree, 'layer-1')
        assert re.fullmatch(r'group-\d+', wrapped[0].id)

    def test_wrap_unknown_is_noop(self, flat_tree):
        """Wrapping a missing id returns the input."""
        assert wrap_layer_in_group_in_tree(flat_tree, 'missing', 'new-group') is flat_tree

    def test_wrap_with_taken_group_id(self, flat_tree):
        """A group id already in the tree is rejected."""
        with pytest.raises(DuplicateLayerIdError):
            wrap_layer_in_group_in_tree(flat_tree, 'layer-1', 'group-1')

    def test_wrap_with_mask(self, flat_tree):
        """Mask wrapping adds a processor with the default mask after the node."""
        wrapped = wrap_layer_with_mask_in_tree(flat_tree, 'layer-2', 'masked', 'mask-proc')
        group = wrapped[1]
        assert group.id == 'masked'
        assert group.name == 'Masked Group'
        surface, processor = group.children
        assert surface is flat_tree[1]
        assert isinstance(processor, ProcessorLayer)
        assert processor.id == 'mask-proc'
        assert processor.name == 'Mask'
        assert processor.get_mask().shape.id == 'circle'

    def test_wrap_group_with_mask_rejected(self, flat_tree):
        """Groups cannot be used as masks."""
        with pytest.raises(InvalidMoveError):
            wrap_layer_with_mask_in_tree(flat_tree, 'group-1')

    def test_wrap_with_mask_generates_distinct_ids(self, flat_tree):
        """Generated group and processor ids are new to the tree."""
        wrapped = wrap_layer_with_mask_in_tree(flat_tree, 'layer-1')
        ids = _ids(flatten_layers_in_tree(wrapped))
        assert len(ids) == len(set(ids))
        assert len(ids) == len(flatten_layers_in_tree(flat_tree)) + 2
