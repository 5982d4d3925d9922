"""
ProcessorLayer - node applying a modifier pipeline to preceding siblings.

A processor paints nothing itself. Its modifiers run, in order, on the
siblings ahead of it in the same parent, back to the previous processor.
"""

from typing import Literal

from pydantic import Field

from .base import BaseLayer
from .modifiers import MaskProcessorConfig, Modifier, SingleEffectConfig


class ProcessorLayer(BaseLayer):
    """Processor node with effect and mask modifiers."""

    layer_type: Literal["processor"] = Field(default="processor", alias="type")
    name: str = Field(default='Processor')
    modifiers: list[Modifier] = Field(default_factory=list)

    def is_processor(self) -> bool:
        return True

    def get_mask(self) -> MaskProcessorConfig | None:
        """Get the first mask modifier, if any."""
        for modifier in self.modifiers:
            if isinstance(modifier, MaskProcessorConfig):
                return modifier
        return None

    def get_effects(self) -> list[SingleEffectConfig]:
        """Get effect modifiers in pipeline order."""
        return [m for m in self.modifiers if isinstance(m, SingleEffectConfig)]


def get_processor_mask(processor: ProcessorLayer) -> MaskProcessorConfig | None:
    return processor.get_mask()


def get_processor_effects(processor: ProcessorLayer) -> list[SingleEffectConfig]:
    return processor.get_effects()
