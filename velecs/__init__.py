"""A small entity-component system with names, parent/child relationships and cached transforms."""

__version__ = "0.1.0"
__all__ = ["builder", "entity", "relationship", "transform"]