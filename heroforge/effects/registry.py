"""Effect registry."""

from typing import Any, Optional, Type

from heroforge.errors import UnknownEffectTypeError
from heroforge.layers.modifiers import SingleEffectConfig

from .base import BaseEffect

# Global effect registry, in declaration order
effect_registry: dict[str, Type[BaseEffect]] = {}


def register_effect(effect_id: str):
    """Decorator to register an effect class.

    Sets effect_type on the class and appends it to effect_registry.
    Registration order is the order legacy effect structs are migrated in.
    """

    def decorator(cls: Type[BaseEffect]):
        if effect_id in effect_registry:
            raise ValueError(f"Effect type already registered: {effect_id}")
        cls.effect_type = effect_id  # type: ignore[attr-defined]
        effect_registry[effect_id] = cls
        return cls

    return decorator


def load_builtin_effects():
    """Import all built-in effect modules to trigger registration."""
    from . import vignette, distortion, halftone, blur, mosaic  # noqa: F401


def get_effect_types() -> tuple[str, ...]:
    """All registered effect ids in registry order."""
    return tuple(effect_registry)


def is_valid_effect_type(effect_type: str) -> bool:
    """Check an untrusted effect id (e.g. loaded from a file) before lookup."""
    return effect_type in effect_registry


def get_effect_definition(effect_type: str) -> Type[BaseEffect]:
    """
    Get the definition for an effect id known to be registered.

    Passing an unregistered id is a programming error; ids from documents
    or user input go through lookup_effect_definition instead.

    Args:
        effect_type: Registered effect id

    Returns:
        Effect class
    """
    assert effect_type in effect_registry, f"Unregistered effect type: {effect_type}"
    return effect_registry[effect_type]


def lookup_effect_definition(effect_type: str) -> Type[BaseEffect]:
    """
    Get the definition for an effect id from external input.

    Args:
        effect_type: Untrusted effect id

    Returns:
        Effect class

    Raises:
        UnknownEffectTypeError: If the id is not registered
    """
    if not is_valid_effect_type(effect_type):
        raise UnknownEffectTypeError(effect_type)
    return effect_registry[effect_type]


def create_single_effect_config(effect_type: str, params: Optional[dict[str, Any]] = None) -> SingleEffectConfig:
    """
    Create a pipeline entry for an effect.

    Args:
        effect_type: Effect id, validated against the registry
        params: Effect params; the registry defaults when omitted

    Returns:
        New SingleEffectConfig owning its own params dict

    Raises:
        UnknownEffectTypeError: If the id is not registered
    """
    definition = lookup_effect_definition(effect_type)
    if params is None:
        params = definition.default_params()
    return SingleEffectConfig(id=effect_type, params=dict(params))
