"""Exception classes for hero view documents."""


class HeroForgeError(Exception):
    """Base exception for heroforge errors."""

    pass


class LayerTreeError(HeroForgeError):
    """Base exception for rejected layer tree mutations."""

    pass


class InvalidMoveError(LayerTreeError, ValueError):
    """Raised when a layer or modifier move would corrupt the tree."""

    pass


class DuplicateLayerIdError(LayerTreeError, ValueError):
    """Raised when an operation would introduce an id already in the tree."""

    pass


class InvalidLayerPatchError(LayerTreeError, ValueError):
    """Raised for patches touching identity fields or unknown fields."""

    pass


class UnknownEffectTypeError(HeroForgeError, ValueError):
    """Raised when an externally supplied effect id is not registered."""

    def __init__(self, effect_type: str):
        super().__init__(f"Unknown effect type: {effect_type}")
        self.effect_type = effect_type
