"""Fluent construction of entities with their default components."""

from __future__ import annotations

from typing import Any, Sequence

from velecs.entity import Component, Entity, Name
from velecs.relationship import Relationship
from velecs.transform import Transform


class EntityBuilder:
    """Creates an entity with Name, Relationship and Transform and configures it by chaining.

    Each ``with_*`` method returns the builder itself; ``build()`` (or the
    ``entity`` property) gives the entity that was created.
    """

    def __init__(self) -> None:
        self._entity = Entity(Entity.registry().create())
        self._name = self._entity.add_component(Name, "Entity")
        self._relationship = self._entity.add_component(Relationship)
        self._transform = self._entity.add_component(Transform)

    def __repr__(self) -> str:
        return f"EntityBuilder({self._entity!r})"

    @property
    def entity(self) -> Entity:
        """The entity being built."""
        return self._entity

    def build(self) -> Entity:
        """Return the configured entity."""
        return self._entity

    def with_name(self, name: str) -> EntityBuilder:
        self._name.name = name
        return self

    def with_parent(self, parent: Entity) -> EntityBuilder:
        self._relationship.set_parent(parent)
        return self

    def with_pos(self, pos: Sequence[float]) -> EntityBuilder:
        self._transform.pos = pos
        return self

    def with_scale(self, scale: Sequence[float]) -> EntityBuilder:
        self._transform.scale = scale
        return self

    def with_rot(self, rot: Sequence[float]) -> EntityBuilder:
        """Set the rotation from a quaternion given as (w, x, y, z)."""
        self._transform.rot = rot
        return self

    def with_euler_angles(self, euler_angles: Sequence[float]) -> EntityBuilder:
        """Set the rotation from (pitch, yaw, roll) in radians."""
        self._transform.euler_angles = euler_angles
        return self

    def with_euler_angles_deg(self, euler_angles_deg: Sequence[float]) -> EntityBuilder:
        """Set the rotation from (pitch, yaw, roll) in degrees."""
        self._transform.euler_angles_deg = euler_angles_deg
        return self

    def with_component(
        self, component_type: type[Component], *args: Any, **kwargs: Any
    ) -> EntityBuilder:
        """Construct a component from the arguments and attach it."""
        self._entity.add_component(component_type, *args, **kwargs)
        return self