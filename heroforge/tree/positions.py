"""Drop positions for drag-and-drop moves."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class DropPosition(BaseModel):
    """Where a dragged layer node lands, relative to ``target_id``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    position_type: Literal['before', 'after', 'into'] = Field(alias='type')
    target_id: str = Field(alias='targetId')


class ModifierDropPosition(BaseModel):
    """
    Where a dragged modifier lands.

    ``before`` inserts at ``target_index``; ``after`` inserts behind it.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    position_type: Literal['before', 'after'] = Field(alias='type')
    target_node_id: str = Field(alias='targetNodeId')
    target_index: int = Field(alias='targetIndex')


class MoveValidation(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    reason: Optional[str] = None
