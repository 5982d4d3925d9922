"""Drag-and-drop of modifiers within and between processor nodes."""

import logging

from heroforge.errors import InvalidMoveError
from heroforge.layers.processor_layer import ProcessorLayer

from .ops import LayerTree, find_layer_in_tree, replace_layer_in_tree
from .positions import ModifierDropPosition

logger = logging.getLogger(__name__)


def _insert_index(position: ModifierDropPosition) -> int:
    if position.position_type == 'after':
        return position.target_index + 1
    return position.target_index


def _is_same_position(source_node_id: str, source_index: int, position: ModifierDropPosition) -> bool:
    if position.target_node_id != source_node_id:
        return False
    if position.position_type == 'before':
        return position.target_index in (source_index, source_index + 1)
    return position.target_index in (source_index, source_index - 1)


def _check_move(
    tree: LayerTree,
    source_node_id: str,
    source_index: int,
    position: ModifierDropPosition,
) -> str | None:
    """Reason a modifier move is invalid, or None."""
    source = find_layer_in_tree(tree, source_node_id)
    target = find_layer_in_tree(tree, position.target_node_id)
    if not isinstance(source, ProcessorLayer):
        return f"Source is not a processor: {source_node_id}"
    if not isinstance(target, ProcessorLayer):
        return f"Drop target is not a processor: {position.target_node_id}"
    if not 0 <= source_index < len(source.modifiers):
        return f"Modifier index out of range: {source_index}"
    if target.modifiers:
        if not 0 <= position.target_index < len(target.modifiers):
            return f"Drop index out of range: {position.target_index}"
    elif position.target_index != 0:
        return f"Drop index out of range: {position.target_index}"
    return None


def can_move_modifier_in_tree(
    tree: LayerTree,
    source_node_id: str,
    source_index: int,
    position: ModifierDropPosition,
) -> bool:
    """
    Check whether a modifier can be dropped at ``position``.

    False for non-processor nodes, out-of-range indices and drops that would
    leave the modifier where it is.
    """
    if _check_move(tree, source_node_id, source_index, position) is not None:
        return False
    return not _is_same_position(source_node_id, source_index, position)


def move_modifier_in_tree(
    tree: LayerTree,
    source_node_id: str,
    source_index: int,
    position: ModifierDropPosition,
) -> LayerTree:
    """
    Move one modifier within a processor or to another processor.

    Args:
        tree: Root layer nodes
        source_node_id: Processor holding the modifier
        source_index: Modifier index in the source processor
        position: Drop position in the target processor

    Returns:
        New tree; the input for unknown node ids and same-position drops

    Raises:
        InvalidMoveError: If either node is not a processor or an index is
            out of range
    """
    if (find_layer_in_tree(tree, source_node_id) is None
            or find_layer_in_tree(tree, position.target_node_id) is None):
        return tree

    reason = _check_move(tree, source_node_id, source_index, position)
    if reason is not None:
        logger.debug(f"Rejected modifier move from {source_node_id}[{source_index}]: {reason}")
        raise InvalidMoveError(reason)
    if _is_same_position(source_node_id, source_index, position):
        return tree

    source = find_layer_in_tree(tree, source_node_id)
    modifier = source.modifiers[source_index]
    insert_at = _insert_index(position)

    if position.target_node_id == source_node_id:
        modifiers = list(source.modifiers)
        del modifiers[source_index]
        if source_index < insert_at:
            insert_at -= 1
        modifiers.insert(insert_at, modifier)
        return replace_layer_in_tree(
            tree, source_node_id, lambda node: [node.model_copy(update={'modifiers': modifiers})])

    remaining = [m for i, m in enumerate(source.modifiers) if i != source_index]
    tree = replace_layer_in_tree(
        tree, source_node_id, lambda node: [node.model_copy(update={'modifiers': remaining})])

    def insert(node: ProcessorLayer) -> list[ProcessorLayer]:
        modifiers = list(node.modifiers)
        modifiers.insert(insert_at, modifier)
        return [node.model_copy(update={'modifiers': modifiers})]

    return replace_layer_in_tree(tree, position.target_node_id, insert)
