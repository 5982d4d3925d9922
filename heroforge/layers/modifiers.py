"""
Processor modifiers - the entries of a processor node's pipeline.

A modifier is either a single effect or a mask:

    {"type": "effect", "id": "blur", "params": {"radius": 8}}
    {"type": "mask", "enabled": true, "shape": {...}, "invert": false, "feather": 0}

Array order is execution order: index 0 applies first.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from .shapes import NormalizedMaskConfig


class SingleEffectConfig(BaseModel):
    """One effect slot in a pipeline. The same effect id may appear repeatedly."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=False, extra='ignore')

    modifier_type: Literal["effect"] = Field(default="effect", alias="type")
    id: str
    params: dict[str, Any] = Field(default_factory=dict)

    def to_api_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')


class MaskProcessorConfig(BaseModel):
    """Mask modifier with a normalized shape."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=False, extra='ignore')

    modifier_type: Literal["mask"] = Field(default="mask", alias="type")
    enabled: bool = Field(default=True)
    shape: NormalizedMaskConfig
    invert: bool = Field(default=False)
    feather: float = Field(default=0, ge=0)

    def to_api_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')


def _modifier_type_of(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return value.get('type')
    return getattr(value, 'modifier_type', None)


Modifier = Annotated[
    Union[
        Annotated[SingleEffectConfig, Tag("effect")],
        Annotated[MaskProcessorConfig, Tag("mask")],
    ],
    Discriminator(_modifier_type_of),
]


def create_default_mask_processor_config() -> MaskProcessorConfig:
    """Create the circle mask used when a layer is wrapped as a mask."""
    return MaskProcessorConfig(
        enabled=True,
        shape=NormalizedMaskConfig(
            id='circle',
            params={'centerX': 0.5, 'centerY': 0.5, 'radius': 0.3, 'cutout': False},
        ),
        invert=False,
        feather=0,
    )


def is_effect_modifier(modifier: Modifier) -> bool:
    return isinstance(modifier, SingleEffectConfig)


def is_mask_modifier(modifier: Modifier) -> bool:
    return isinstance(modifier, MaskProcessorConfig)


def find_mask_modifier_index(modifiers: list[Modifier]) -> int:
    """
    Find the first mask in a modifier list.

    Args:
        modifiers: Processor modifiers

    Returns:
        Index of the first mask, or -1 if there is none
    """
    for index, modifier in enumerate(modifiers):
        if is_mask_modifier(modifier):
            return index
    return -1


def get_preceding_effects(modifiers: list[Modifier], before_index: int) -> list[SingleEffectConfig]:
    """
    Get the effects that run before a given modifier index.

    Used to preview a mask with the effects ahead of it applied.

    Args:
        modifiers: Processor modifiers
        before_index: Exclusive upper bound

    Returns:
        Effect modifiers in pipeline order
    """
    if before_index <= 0:
        return []
    return [m for m in modifiers[:before_index] if is_effect_modifier(m)]


def get_effects_before_mask(modifiers: list[Modifier]) -> list[SingleEffectConfig]:
    """Get effects ahead of the first mask (all effects when there is no mask)."""
    mask_index = find_mask_modifier_index(modifiers)
    if mask_index == -1:
        return [m for m in modifiers if is_effect_modifier(m)]
    return get_preceding_effects(modifiers, mask_index)
