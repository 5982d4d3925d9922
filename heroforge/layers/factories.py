"""Factories that assign ids and defaults to new layer nodes."""

import time
from typing import Callable, Collection, Optional

from .layer_group import LayerGroup
from .modifiers import Modifier
from .node import LayerNode
from .processor_layer import ProcessorLayer
from .shapes import NormalizedSurfaceConfig, SurfaceColorsConfig
from .surface_layer import SurfaceLayer


def generate_layer_id(
    prefix: str,
    existing_ids: Collection[str] = (),
    clock: Callable[[], float] = time.time,
) -> str:
    """
    Generate ``<prefix>-<milliseconds>``, bumped until unused.

    Args:
        prefix: Id prefix such as 'group' or 'processor'
        existing_ids: Ids already present in the tree
        clock: Time source in seconds

    Returns:
        Id not contained in existing_ids
    """
    stamp = int(clock() * 1000)
    candidate = f"{prefix}-{stamp}"
    while candidate in existing_ids:
        stamp += 1
        candidate = f"{prefix}-{stamp}"
    return candidate


def create_group_layer_config(
    children: Optional[list[LayerNode]] = None,
    *,
    id: Optional[str] = None,
    name: str = 'Group',
    visible: bool = True,
) -> LayerGroup:
    """
    Create a group node.

    Args:
        children: Initial children (owned by the new group)
        id: Group id, generated when omitted
        name: Display name
        visible: Visibility flag

    Returns:
        New LayerGroup
    """
    return LayerGroup(
        id=id or generate_layer_id('group'),
        name=name,
        visible=visible,
        children=list(children or []),
    )


def create_surface_layer_config(
    surface: Optional[NormalizedSurfaceConfig] = None,
    *,
    id: Optional[str] = None,
    name: str = 'Surface',
    colors: Optional[SurfaceColorsConfig] = None,
) -> SurfaceLayer:
    return SurfaceLayer(
        id=id or generate_layer_id('surface'),
        name=name,
        surface=surface or NormalizedSurfaceConfig(id='solid', params={}),
        colors=colors,
    )


def create_processor_layer_config(
    modifiers: Optional[list[Modifier]] = None,
    *,
    id: Optional[str] = None,
    name: str = 'Processor',
) -> ProcessorLayer:
    return ProcessorLayer(
        id=id or generate_layer_id('processor'),
        name=name,
        modifiers=list(modifiers or []),
    )
