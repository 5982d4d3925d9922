"""
Layer tree operations.

All operations take the list of root layer nodes and return a new list,
path-copying the nodes they change.
"""

from .modifiers import can_move_modifier_in_tree, move_modifier_in_tree
from .ops import (
    LayerTree,
    can_move_layer_in_tree,
    collect_layer_ids,
    find_layer_in_tree,
    find_parent_layer_in_tree,
    flatten_layers_in_tree,
    insert_layer_in_tree,
    is_descendant,
    move_layer_in_tree,
    remove_layer_from_tree,
    replace_layer_in_tree,
    update_layer_in_tree,
    validate_move,
    wrap_layer_in_group_in_tree,
    wrap_layer_with_mask_in_tree,
)
from .positions import DropPosition, ModifierDropPosition, MoveValidation
from .processors import get_processor_target_pairs, get_processor_targets, has_processor_below, is_processor_target

__all__ = [
    'LayerTree',
    'DropPosition',
    'ModifierDropPosition',
    'MoveValidation',
    'find_layer_in_tree',
    'find_parent_layer_in_tree',
    'flatten_layers_in_tree',
    'collect_layer_ids',
    'is_descendant',
    'replace_layer_in_tree',
    'update_layer_in_tree',
    'remove_layer_from_tree',
    'validate_move',
    'can_move_layer_in_tree',
    'move_layer_in_tree',
    'insert_layer_in_tree',
    'wrap_layer_in_group_in_tree',
    'wrap_layer_with_mask_in_tree',
    'can_move_modifier_in_tree',
    'move_modifier_in_tree',
    'is_processor_target',
    'has_processor_below',
    'get_processor_targets',
    'get_processor_target_pairs',
]
