"""
Effect pipeline operations.

A pipeline is the ordered list of effect entries of one processor; index 0
runs first. The functions here never mutate their input and never raise for
bad indices: an out-of-range index returns the input list unchanged.
"""

import logging
from typing import Any, Optional

from heroforge.config import settings
from heroforge.effects import ShaderSpec, create_single_effect_config, lookup_effect_definition
from heroforge.layers.document import ViewportConfig
from heroforge.layers.modifiers import SingleEffectConfig

logger = logging.getLogger(__name__)

EffectPipeline = list[SingleEffectConfig]


def add_effect(
    pipeline: EffectPipeline,
    effect_type: str,
    params: Optional[dict[str, Any]] = None,
) -> EffectPipeline:
    """
    Append an effect. The same effect id may appear any number of times.

    Args:
        pipeline: Current pipeline
        effect_type: Effect id
        params: Effect params; registry defaults when omitted

    Returns:
        New pipeline

    Raises:
        UnknownEffectTypeError: If the effect id is not registered
    """
    return [*pipeline, create_single_effect_config(effect_type, params)]


def remove_effect(pipeline: EffectPipeline, index: int) -> EffectPipeline:
    if not 0 <= index < len(pipeline):
        return pipeline
    return [*pipeline[:index], *pipeline[index + 1:]]


def update_effect_at(pipeline: EffectPipeline, index: int, params: dict[str, Any]) -> EffectPipeline:
    """Shallow-merge ``params`` onto the entry at ``index``."""
    if not 0 <= index < len(pipeline):
        return pipeline
    entry = pipeline[index]
    updated = entry.model_copy(update={'params': {**entry.params, **params}})
    return [*pipeline[:index], updated, *pipeline[index + 1:]]


def reorder_effects(pipeline: EffectPipeline, from_index: int, to_index: int) -> EffectPipeline:
    """
    Move the entry at ``from_index`` so it ends up at ``to_index``.

    Equal or out-of-range indices return the input.
    """
    if from_index == to_index:
        return pipeline
    if not (0 <= from_index < len(pipeline) and 0 <= to_index < len(pipeline)):
        return pipeline
    result = list(pipeline)
    entry = result.pop(from_index)
    result.insert(to_index, entry)
    return result


def set_effect_pipeline(pipeline: EffectPipeline, new_pipeline: EffectPipeline) -> EffectPipeline:
    return list(new_pipeline)


def clear_effects(pipeline: EffectPipeline) -> EffectPipeline:
    return []


def create_shader_specs(
    pipeline: EffectPipeline,
    viewport: ViewportConfig,
    scale: Optional[float] = None,
) -> list[ShaderSpec]:
    """
    Derive shader specs for a pipeline, in execution order.

    Entry params are merged over the registry defaults, so partial params
    are fine. Effects that render nothing are left out.

    Raises:
        UnknownEffectTypeError: If an entry names an unregistered effect
    """
    if scale is None:
        scale = settings.PREVIEW_SCALE
    specs = []
    for entry in pipeline:
        spec = lookup_effect_definition(entry.id).create_shader_spec(entry.params, viewport, scale)
        if spec is not None:
            specs.append(spec)
    return specs


class EffectManager:
    """
    Per-layer effect pipelines.

    Each editor owns its own manager; there is no shared instance. Pipelines
    are replaced on every change, never mutated.
    """

    def __init__(self):
        self._pipelines: dict[str, EffectPipeline] = {}

    def get_pipeline(self, layer_id: str) -> EffectPipeline:
        return self._pipelines.get(layer_id, [])

    def layer_ids(self) -> list[str]:
        return list(self._pipelines)

    def _commit(self, layer_id: str, pipeline: EffectPipeline) -> EffectPipeline:
        if pipeline is not self._pipelines.get(layer_id):
            self._pipelines[layer_id] = pipeline
            logger.debug(f"Effect pipeline of {layer_id} now has {len(pipeline)} entries")
        return pipeline

    def add_effect(
        self,
        layer_id: str,
        effect_type: str,
        params: Optional[dict[str, Any]] = None,
    ) -> EffectPipeline:
        return self._commit(layer_id, add_effect(self.get_pipeline(layer_id), effect_type, params))

    def remove_effect(self, layer_id: str, index: int) -> EffectPipeline:
        return self._commit(layer_id, remove_effect(self.get_pipeline(layer_id), index))

    def update_effect_at(self, layer_id: str, index: int, params: dict[str, Any]) -> EffectPipeline:
        return self._commit(layer_id, update_effect_at(self.get_pipeline(layer_id), index, params))

    def reorder_effects(self, layer_id: str, from_index: int, to_index: int) -> EffectPipeline:
        return self._commit(layer_id, reorder_effects(self.get_pipeline(layer_id), from_index, to_index))

    def set_effect_pipeline(self, layer_id: str, pipeline: EffectPipeline) -> EffectPipeline:
        return self._commit(layer_id, set_effect_pipeline(self.get_pipeline(layer_id), pipeline))

    def clear_effects(self, layer_id: str) -> EffectPipeline:
        return self._commit(layer_id, clear_effects(self.get_pipeline(layer_id)))

    def remove_layer(self, layer_id: str) -> None:
        """Drop the pipeline of a removed layer."""
        self._pipelines.pop(layer_id, None)

    def create_shader_specs(
        self,
        layer_id: str,
        viewport: ViewportConfig,
        scale: Optional[float] = None,
    ) -> list[ShaderSpec]:
        return create_shader_specs(self.get_pipeline(layer_id), viewport, scale)
