"""
BaseLayer - Common base model for all layer node types.

Provides the fields every node shares:
- Identity: id, type
- Appearance: name, visible

Uses Pydantic v2 with camelCase aliases for JSON compatibility. Nodes are
treated as immutable values: tree operations replace nodes through
``model_copy(update=...)`` and never assign to an existing instance.
"""

from enum import Enum
from typing import Any
import uuid

from pydantic import BaseModel, ConfigDict, Field


class LayerType(str, Enum):
    """Layer node type identifiers (the ``type`` discriminator)."""
    BASE = "base"
    SURFACE = "surface"
    TEXT = "text"
    MODEL3D = "model3d"
    IMAGE = "image"
    GROUP = "group"
    PROCESSOR = "processor"


class BaseLayer(BaseModel):
    """
    Base model for all layer node types.

    Serializes to:
    {
        "type": "surface",
        "id": "background",
        "name": "Surface",
        "visible": true,
        ...variant fields
    }
    """

    model_config = ConfigDict(
        # Allow both snake_case and camelCase input
        populate_by_name=True,
        # Nodes are replaced, never mutated in place
        validate_assignment=False,
        # Allow extra fields for forward compatibility
        extra='ignore',
        # Serialize enums by value
        use_enum_values=True,
    )

    # Discriminator (overridden in subclasses with Literal types)
    layer_type: str = Field(default=LayerType.SURFACE.value, alias='type')
    id: str = Field(default_factory=lambda: f"layer-{uuid.uuid4().hex[:12]}")
    name: str = Field(default='Layer')
    visible: bool = Field(default=True)

    def to_api_dict(self) -> dict[str, Any]:
        """
        Convert to the serialized document shape.

        Returns:
            Dict with camelCase keys, optional fields that are unset omitted
        """
        return self.model_dump(by_alias=True, mode='json', exclude_none=True)

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> 'BaseLayer':
        """
        Create a layer node from a serialized dictionary.

        Dispatches on ``type`` so calling this on BaseLayer returns the
        matching subclass.

        Args:
            data: Dictionary in the serialized document shape

        Returns:
            Layer node instance of the matching subclass
        """
        # Import here to avoid circular imports
        from heroforge.layers import layer_from_dict

        return layer_from_dict(data)

    def is_group(self) -> bool:
        """Check if this node can own children."""
        return False

    def is_processor(self) -> bool:
        """Check if this node carries a modifier pipeline."""
        return False
