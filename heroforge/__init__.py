"""
HeroForge - editable document core for hero-section visuals.

Models the layer tree of a hero view (surfaces, text, 3D models, images,
groups and processor nodes), the effect registry and the migration layer
that upgrades legacy serialized documents to the canonical form.
"""

__version__ = "0.1.0"
