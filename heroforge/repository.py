"""In-memory hero view repository with change notification."""

import logging
from typing import Any, Callable, Optional, TypeVar

from pydantic import BaseModel

from heroforge.layers.document import (
    ForegroundLayerConfig,
    HeroColorsConfig,
    HeroViewConfig,
    ViewportConfig,
    create_default_hero_view_config,
)
from heroforge.layers.factories import generate_layer_id
from heroforge.layers.layer_group import LayerGroup
from heroforge.layers.node import LayerNode
from heroforge.tree import (
    DropPosition,
    ModifierDropPosition,
    collect_layer_ids,
    find_layer_in_tree,
    insert_layer_in_tree,
    move_layer_in_tree,
    move_modifier_in_tree,
    remove_layer_from_tree,
    update_layer_in_tree,
    wrap_layer_in_group_in_tree,
    wrap_layer_with_mask_in_tree,
)

logger = logging.getLogger(__name__)

Listener = Callable[[HeroViewConfig], None]
ModelT = TypeVar('ModelT', bound=BaseModel)


def _merge(model: ModelT, updates: dict[str, Any]) -> ModelT:
    """Shallow-merge updates (field names or aliases) and re-validate."""
    fields = type(model).model_fields
    aliases = {info.alias: name for name, info in fields.items() if info.alias}
    resolved = {aliases.get(key, key): value for key, value in updates.items()}
    current = {name: getattr(model, name) for name in fields}
    return type(model).model_validate({**current, **resolved})


class HeroViewInMemoryRepository:
    """
    Holds the current document and notifies subscribers on every commit.

    Tree operations are applied as ``set(op(get()))``: each change replaces
    the document with a new one. Operations that change nothing do not
    notify.
    """

    def __init__(self, initial: Optional[HeroViewConfig] = None):
        self._config = initial if initial is not None else create_default_hero_view_config()
        self._listeners: list[Listener] = []

    def get(self) -> HeroViewConfig:
        return self._config

    def set(self, config: HeroViewConfig) -> None:
        self._config = config
        logger.debug(f"Committed hero view config with {len(config.layers)} root layers")
        for listener in list(self._listeners):
            listener(config)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_layers(self, layers: list[LayerNode]) -> None:
        if layers is self._config.layers:
            return
        self.set(self._config.model_copy(update={'layers': layers}))

    # ------------------------------------------------------------------
    # Document sections
    # ------------------------------------------------------------------

    def update_colors(self, updates: dict[str, Any]) -> None:
        colors: HeroColorsConfig = _merge(self._config.colors, updates)
        self.set(self._config.model_copy(update={'colors': colors}))

    def update_viewport(self, updates: dict[str, Any]) -> None:
        viewport: ViewportConfig = _merge(self._config.viewport, updates)
        self.set(self._config.model_copy(update={'viewport': viewport}))

    def update_foreground(self, updates: dict[str, Any]) -> None:
        foreground: ForegroundLayerConfig = _merge(self._config.foreground, updates)
        self.set(self._config.model_copy(update={'foreground': foreground}))

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------

    def find_layer(self, layer_id: str) -> Optional[LayerNode]:
        return find_layer_in_tree(self._config.layers, layer_id)

    def update_layer(self, layer_id: str, patch: dict[str, Any]) -> None:
        self._set_layers(update_layer_in_tree(self._config.layers, layer_id, patch))

    def add_layer(self, layer: LayerNode, index: Optional[int] = None) -> None:
        """
        Insert a root layer at ``index``.

        Appended when the index is missing or out of range.

        Raises:
            DuplicateLayerIdError: If any id in ``layer`` is already in the tree
        """
        current = self._config.layers
        layers = insert_layer_in_tree(current, layer)
        if index is not None and 0 <= index < len(current):
            layers = [*current[:index], layer, *current[index:]]
        self._set_layers(layers)

    def remove_layer(self, layer_id: str) -> None:
        self._set_layers(remove_layer_from_tree(self._config.layers, layer_id))

    def reorder_layers(self, layer_ids: list[str]) -> None:
        """
        Reorder the root layers by id.

        Root layers missing from ``layer_ids`` keep their relative order at
        the end; unknown ids are ignored.
        """
        by_id = {layer.id: layer for layer in self._config.layers}
        ordered = [by_id[layer_id] for layer_id in layer_ids if layer_id in by_id]
        listed = set(layer_ids)
        ordered.extend(layer for layer in self._config.layers if layer.id not in listed)
        if ordered == self._config.layers:
            return
        self._set_layers(ordered)

    def wrap_layer_in_group(self, layer_id: str, group_id: Optional[str] = None) -> Optional[str]:
        """
        Wrap a layer in a new group.

        Returns:
            Id of the new group, or None if the layer does not exist
        """
        if self.find_layer(layer_id) is None:
            return None
        if group_id is None:
            group_id = generate_layer_id('group', collect_layer_ids(self._config.layers))
        self._set_layers(wrap_layer_in_group_in_tree(self._config.layers, layer_id, group_id))
        return group_id

    def wrap_layer_with_mask(self, layer_id: str) -> Optional[str]:
        """
        Wrap a layer in a masked group.

        Returns:
            Id of the new group, or None if the layer does not exist or is a group
        """
        layer = self.find_layer(layer_id)
        if layer is None or isinstance(layer, LayerGroup):
            return None
        group_id = generate_layer_id('group', collect_layer_ids(self._config.layers))
        self._set_layers(wrap_layer_with_mask_in_tree(self._config.layers, layer_id, group_id))
        return group_id

    def move_layer(self, layer_id: str, position: DropPosition) -> None:
        self._set_layers(move_layer_in_tree(self._config.layers, layer_id, position))

    def move_modifier(self, source_node_id: str, source_index: int, position: ModifierDropPosition) -> None:
        self._set_layers(
            move_modifier_in_tree(self._config.layers, source_node_id, source_index, position)
        )
