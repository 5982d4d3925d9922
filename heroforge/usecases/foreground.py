"""
Foreground element editing.

Foreground elements (titles and descriptions) live in a flat list next to
the layer tree. Selecting an element clears the canvas-layer selection; the
two selections are exclusive by convention of this usecase, not by shared
state.
"""

import time
from typing import Any, Callable, Optional, Protocol

from heroforge.layers.document import ForegroundElementConfig, ForegroundElementType, ForegroundLayerConfig

_ELEMENT_DEFAULTS: dict[str, dict[str, Any]] = {
    'title': {'font_size': 3, 'content': 'New Title'},
    'description': {'font_size': 1, 'content': 'New description text'},
}


class ForegroundConfigPort(Protocol):
    """Storage for the current foreground config."""

    def get(self) -> ForegroundLayerConfig: ...

    def set(self, config: ForegroundLayerConfig) -> None: ...


class SelectionPort(Protocol):
    """Selection state owned by the editor UI."""

    def get_selected_id(self) -> Optional[str]: ...

    def set_selected_id(self, element_id: Optional[str]) -> None: ...

    def clear_canvas_selection(self) -> None: ...


# Identity of an element; updates may not change these
_FIXED_FIELDS = frozenset({'id', 'element_type'})


def _resolve_update(updates: dict[str, Any]) -> dict[str, Any]:
    # Accept both field names and JSON aliases
    fields = ForegroundElementConfig.model_fields
    aliases = {info.alias: name for name, info in fields.items() if info.alias}
    resolved = {}
    for key, value in updates.items():
        name = aliases.get(key, key)
        if name not in fields or name in _FIXED_FIELDS:
            raise ValueError(f"Cannot update foreground element field: {key}")
        resolved[name] = value
    return resolved


def _merge_element(element: ForegroundElementConfig, fields: dict[str, Any]) -> ForegroundElementConfig:
    current = {name: getattr(element, name) for name in ForegroundElementConfig.model_fields}
    return ForegroundElementConfig.model_validate({**current, **fields})


class ForegroundElementUsecase:
    """
    Add, select, update and remove foreground elements.

    Args:
        config_port: Reads and writes the foreground config
        selection_port: Reads and writes the selected element id
        clock: Time source in seconds, used for generated ids
    """

    def __init__(
        self,
        config_port: ForegroundConfigPort,
        selection_port: SelectionPort,
        clock: Callable[[], float] = time.time,
    ):
        self._config = config_port
        self._selection = selection_port
        self._clock = clock

    def get_selected_element(self) -> Optional[ForegroundElementConfig]:
        selected_id = self._selection.get_selected_id()
        if selected_id is None:
            return None
        return next((e for e in self._config.get().elements if e.id == selected_id), None)

    def select_element(self, element_id: Optional[str]) -> None:
        """Select an element; ``None`` deselects and leaves the canvas selection alone."""
        self._selection.set_selected_id(element_id)
        if element_id is not None:
            self._selection.clear_canvas_selection()

    def add_element(self, element_type: ForegroundElementType) -> ForegroundElementConfig:
        """
        Append a new element with type-specific defaults and select it.

        Args:
            element_type: 'title' or 'description'

        Returns:
            The new element
        """
        element = ForegroundElementConfig(
            id=f"{element_type}-{int(self._clock() * 1000)}",
            element_type=element_type,
            visible=True,
            position='middle-center',
            **_ELEMENT_DEFAULTS[element_type],
        )
        config = self._config.get()
        self._config.set(config.model_copy(update={'elements': [*config.elements, element]}))
        self.select_element(element.id)
        return element

    def remove_element(self, element_id: str) -> None:
        config = self._config.get()
        self._config.set(config.model_copy(update={
            'elements': [e for e in config.elements if e.id != element_id],
        }))
        if self._selection.get_selected_id() == element_id:
            self._selection.set_selected_id(None)

    def update_element(self, element_id: str, updates: dict[str, Any]) -> None:
        """
        Shallow-merge ``updates`` onto one element.

        Args:
            element_id: Element to update
            updates: Field values keyed by field name or JSON alias

        Raises:
            ValueError: If an update names ``id``, ``type`` or an unknown field
            pydantic.ValidationError: If a value is invalid for its field
        """
        fields = _resolve_update(updates)
        config = self._config.get()
        elements = [
            _merge_element(e, fields) if e.id == element_id else e
            for e in config.elements
        ]
        self._config.set(config.model_copy(update={'elements': elements}))

    def update_selected_element(self, updates: dict[str, Any]) -> None:
        """Update the selected element; does nothing when none is selected."""
        selected_id = self._selection.get_selected_id()
        if selected_id is None:
            return
        self.update_element(selected_id, updates)
