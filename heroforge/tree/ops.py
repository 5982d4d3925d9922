"""
Structural operations on layer trees.

A tree is the list of root layer nodes. Every operation returns a new list
and never mutates a node: only the nodes on the path from the root to the
changed node are copied, everything else is shared with the input. An
operation that changes nothing returns its input list itself.

Unknown ids are no-ops. Moves that would break the tree (cycles, drops into
non-groups) raise ``InvalidMoveError``; ``can_move_layer_in_tree`` gives
the same answer without raising.
"""

import logging
from typing import Any, Callable, Iterator, Optional

from heroforge.errors import DuplicateLayerIdError, InvalidLayerPatchError, InvalidMoveError
from heroforge.layers.factories import create_group_layer_config, create_processor_layer_config, generate_layer_id
from heroforge.layers.layer_group import LayerGroup
from heroforge.layers.modifiers import create_default_mask_processor_config
from heroforge.layers.node import LayerNode

from .positions import DropPosition, MoveValidation

logger = logging.getLogger(__name__)

LayerTree = list[LayerNode]

# Fields a patch may never touch
_IMMUTABLE_FIELDS = frozenset({'id', 'layer_type'})


def _iter_nodes(tree: LayerTree) -> Iterator[LayerNode]:
    for node in tree:
        yield node
        if isinstance(node, LayerGroup):
            yield from _iter_nodes(node.children)


def replace_layer_in_tree(
    tree: LayerTree,
    layer_id: str,
    replace: Callable[[LayerNode], list[LayerNode]],
) -> LayerTree:
    """Replace the first node with ``layer_id`` by ``replace(node)``, path-copying."""
    for index, node in enumerate(tree):
        if node.id == layer_id:
            return [*tree[:index], *replace(node), *tree[index + 1:]]
        if isinstance(node, LayerGroup):
            children = replace_layer_in_tree(node.children, layer_id, replace)
            if children is not node.children:
                return [*tree[:index], node.model_copy(update={'children': children}), *tree[index + 1:]]
    return tree


# ============================================================================
# Queries
# ============================================================================


def find_layer_in_tree(tree: LayerTree, layer_id: str) -> Optional[LayerNode]:
    """
    Find a node by id, depth-first in pre-order.

    Args:
        tree: Root layer nodes
        layer_id: Node id

    Returns:
        First matching node, or None
    """
    for node in _iter_nodes(tree):
        if node.id == layer_id:
            return node
    return None


def find_parent_layer_in_tree(tree: LayerTree, layer_id: str) -> Optional[LayerGroup]:
    """
    Find the group directly containing a node.

    Returns None both for root-level nodes and for unknown ids; use
    ``find_layer_in_tree`` to tell them apart.
    """
    for node in _iter_nodes(tree):
        if isinstance(node, LayerGroup) and any(child.id == layer_id for child in node.children):
            return node
    return None


def flatten_layers_in_tree(tree: LayerTree) -> list[LayerNode]:
    """Every node of the tree in pre-order."""
    return list(_iter_nodes(tree))


def collect_layer_ids(tree: LayerTree) -> set[str]:
    return {node.id for node in _iter_nodes(tree)}


def _check_new_ids(existing: set[str], nodes: LayerTree) -> None:
    """Raise if ``nodes`` repeat an id among themselves or from ``existing``."""
    seen = set(existing)
    clashes = set()
    for node in _iter_nodes(nodes):
        if node.id in seen:
            clashes.add(node.id)
        seen.add(node.id)
    if clashes:
        raise DuplicateLayerIdError(f"Layer id already in tree: {', '.join(sorted(clashes))}")


def is_descendant(node: LayerNode, layer_id: str) -> bool:
    """Check whether ``layer_id`` lies strictly inside ``node``'s subtree."""
    if not isinstance(node, LayerGroup):
        return False
    return find_layer_in_tree(node.children, layer_id) is not None


# ============================================================================
# Update / remove
# ============================================================================


def _resolve_patch(node: LayerNode, patch: dict[str, Any]) -> dict[str, Any]:
    fields = {}
    for key, value in patch.items():
        name = key
        if key not in type(node).model_fields:
            name = next(
                (n for n, info in type(node).model_fields.items() if info.alias == key),
                None,
            )
            if name is None:
                raise InvalidLayerPatchError(f"Unknown field for {node.layer_type} layer: {key}")
        if name in _IMMUTABLE_FIELDS:
            raise InvalidLayerPatchError(f"Layer field cannot be patched: {key}")
        fields[name] = value
    return fields


def _apply_patch(node: LayerNode, fields: dict[str, Any]) -> LayerNode:
    # Validate through the model so patched values get coerced; unchanged
    # nested models are passed through as the same instances
    current = {name: getattr(node, name) for name in type(node).model_fields}
    return type(node).model_validate({**current, **fields})


def update_layer_in_tree(tree: LayerTree, layer_id: str, patch: dict[str, Any]) -> LayerTree:
    """
    Apply a shallow patch to one node.

    Args:
        tree: Root layer nodes
        layer_id: Node to update
        patch: Field values keyed by field name or JSON alias

    Returns:
        New tree; siblings off the path to the node are shared with the input.
        The input itself when the id is unknown.

    Raises:
        InvalidLayerPatchError: If the patch touches ``id`` or ``type`` or
            names a field the node does not have
        DuplicateLayerIdError: If patched ``children`` repeat an id
            found elsewhere in the tree or among themselves
    """
    node = find_layer_in_tree(tree, layer_id)
    if node is None:
        return tree
    fields = _resolve_patch(node, patch)
    updated = _apply_patch(node, fields)
    if 'children' in fields:
        # New children must not bring ids that live elsewhere in the tree
        outside = collect_layer_ids(remove_layer_from_tree(tree, layer_id)) | {layer_id}
        _check_new_ids(outside, updated.children)
    return replace_layer_in_tree(tree, layer_id, lambda _: [updated])


def remove_layer_from_tree(tree: LayerTree, layer_id: str) -> LayerTree:
    """Remove a node (with its subtree, for groups). Unknown ids are a no-op."""
    return replace_layer_in_tree(tree, layer_id, lambda _: [])


# ============================================================================
# Moves
# ============================================================================


def validate_move(tree: LayerTree, node_id: str, position: DropPosition) -> MoveValidation:
    """
    Check a drag-and-drop move and explain a rejection.

    Args:
        tree: Root layer nodes
        node_id: Node being dragged
        position: Drop position

    Returns:
        MoveValidation with ``reason`` set when the move is invalid
    """
    node = find_layer_in_tree(tree, node_id)
    if node is None:
        return MoveValidation(valid=False, reason=f"Unknown layer: {node_id}")
    target = find_layer_in_tree(tree, position.target_id)
    if target is None:
        return MoveValidation(valid=False, reason=f"Unknown drop target: {position.target_id}")
    if target.id == node.id:
        return MoveValidation(valid=False, reason="Cannot drop a layer onto itself")
    if is_descendant(node, target.id):
        return MoveValidation(valid=False, reason="Cannot move a group into its own descendant")
    if position.position_type == 'into' and not isinstance(target, LayerGroup):
        return MoveValidation(valid=False, reason=f"Drop target is not a group: {target.id}")
    return MoveValidation(valid=True)


def can_move_layer_in_tree(tree: LayerTree, node_id: str, position: DropPosition) -> bool:
    return validate_move(tree, node_id, position).valid


def _insert_at(tree: LayerTree, node: LayerNode, position: DropPosition) -> LayerTree:
    if position.position_type == 'before':
        return replace_layer_in_tree(tree, position.target_id, lambda target: [node, target])
    if position.position_type == 'after':
        return replace_layer_in_tree(tree, position.target_id, lambda target: [target, node])
    return replace_layer_in_tree(
        tree,
        position.target_id,
        lambda group: [group.model_copy(update={'children': [*group.children, node]})],
    )


def move_layer_in_tree(tree: LayerTree, node_id: str, position: DropPosition) -> LayerTree:
    """
    Move a node before, after or into a target node.

    ``into`` appends the node as the target group's last child.

    Args:
        tree: Root layer nodes
        node_id: Node to move
        position: Drop position

    Returns:
        New tree, or the input when either id is unknown

    Raises:
        InvalidMoveError: If the target is the node itself, lies inside the
            node, or is not a group for an ``into`` drop
    """
    node = find_layer_in_tree(tree, node_id)
    if node is None or find_layer_in_tree(tree, position.target_id) is None:
        return tree

    validation = validate_move(tree, node_id, position)
    if not validation.valid:
        logger.debug(f"Rejected move of {node_id} to {position.position_type} {position.target_id}: "
                     f"{validation.reason}")
        raise InvalidMoveError(validation.reason)

    return _insert_at(remove_layer_from_tree(tree, node_id), node, position)


# ============================================================================
# Insert / wrap
# ============================================================================


def insert_layer_in_tree(
    tree: LayerTree,
    layer: LayerNode,
    position: Optional[DropPosition] = None,
) -> LayerTree:
    """
    Insert a new node (with its subtree) into the tree.

    Args:
        tree: Root layer nodes
        layer: Node to insert
        position: Drop position; appended at the root when omitted

    Returns:
        New tree, or the input when the target id is unknown

    Raises:
        DuplicateLayerIdError: If any id in ``layer`` already exists
        InvalidMoveError: If an ``into`` target is not a group
    """
    _check_new_ids(collect_layer_ids(tree), [layer])

    if position is None:
        return [*tree, layer]

    target = find_layer_in_tree(tree, position.target_id)
    if target is None:
        return tree
    if position.position_type == 'into' and not isinstance(target, LayerGroup):
        raise InvalidMoveError(f"Drop target is not a group: {target.id}")
    return _insert_at(tree, layer, position)


def _new_group_id(tree: LayerTree, group_id: Optional[str]) -> str:
    existing = collect_layer_ids(tree)
    if group_id is None:
        return generate_layer_id('group', existing)
    if group_id in existing:
        raise DuplicateLayerIdError(f"Layer id already in tree: {group_id}")
    return group_id


def wrap_layer_in_group_in_tree(
    tree: LayerTree,
    layer_id: str,
    group_id: Optional[str] = None,
) -> LayerTree:
    """
    Replace a node by a new group holding just that node.

    Args:
        tree: Root layer nodes
        layer_id: Node to wrap, keeps its id
        group_id: Id for the new group; ``group-<ms>`` when omitted

    Returns:
        New tree, or the input when the id is unknown

    Raises:
        DuplicateLayerIdError: If ``group_id`` is already taken
    """
    if find_layer_in_tree(tree, layer_id) is None:
        return tree
    new_id = _new_group_id(tree, group_id)
    return replace_layer_in_tree(tree, layer_id, lambda node: [create_group_layer_config([node], id=new_id)])


def wrap_layer_with_mask_in_tree(
    tree: LayerTree,
    layer_id: str,
    group_id: Optional[str] = None,
    processor_id: Optional[str] = None,
) -> LayerTree:
    """
    Wrap a node in a "Masked Group" of the node followed by a mask processor.

    Raises:
        InvalidMoveError: If the node is a group
        DuplicateLayerIdError: If a given id is already taken
    """
    node = find_layer_in_tree(tree, layer_id)
    if node is None:
        return tree
    if isinstance(node, LayerGroup):
        raise InvalidMoveError(f"Groups cannot be used as a mask: {layer_id}")

    new_group_id = _new_group_id(tree, group_id)
    existing = collect_layer_ids(tree) | {new_group_id}
    if processor_id is None:
        processor_id = generate_layer_id('processor', existing)
    elif processor_id in existing:
        raise DuplicateLayerIdError(f"Layer id already in tree: {processor_id}")

    def wrap(target: LayerNode) -> list[LayerNode]:
        processor = create_processor_layer_config(
            [create_default_mask_processor_config()],
            id=processor_id,
            name='Mask',
        )
        return [create_group_layer_config([target, processor], id=new_group_id, name='Masked Group')]

    return replace_layer_in_tree(tree, layer_id, wrap)
