"""Entities, the registry that owns their components, and the basic component and tag types."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Any, Iterator, TypeVar

if TYPE_CHECKING:
    from velecs.builder import EntityBuilder
    from velecs.relationship import Relationship
    from velecs.transform import Transform

T = TypeVar("T")


class Registry:
    """Stores entity handles and, per type, the item each entity holds of that type."""

    def __init__(self) -> None:
        self._counter = itertools.count()
        self._alive: dict[int, None] = {}
        self._pools: dict[type, dict[int, Any]] = {}
        self._owners: dict[int, int] = {}

    def create(self) -> int:
        """Create a new entity and return its handle."""
        handle = next(self._counter)
        self._alive[handle] = None
        return handle

    def destroy(self, handle: int) -> None:
        """Destroy an entity together with everything it holds."""
        if not self.valid(handle):
            raise KeyError(f"entity {handle!r} is not alive")
        for pool in self._pools.values():
            item = pool.pop(handle, None)
            if item is not None:
                self._owners.pop(id(item), None)
        del self._alive[handle]

    def valid(self, handle: int | None) -> bool:
        """Whether the handle names a living entity."""
        return handle is not None and handle in self._alive

    def emplace(self, handle: int, item: T) -> T:
        """Attach an item to an entity, keyed by the item's type."""
        if not self.valid(handle):
            raise ValueError(f"entity {handle!r} is not alive")
        pool = self._pools.setdefault(type(item), {})
        if handle in pool:
            raise ValueError(
                f"entity {handle!r} already has a {type(item).__name__}"
            )
        pool[handle] = item
        self._owners[id(item)] = handle
        return item

    def remove(self, handle: int, kind: type) -> int:
        """Detach the item of the given type; return how many were removed."""
        item = self._pools.get(kind, {}).pop(handle, None)
        if item is None:
            return 0
        self._owners.pop(id(item), None)
        return 1

    def try_get(self, handle: int, kind: type[T]) -> T | None:
        """Return the entity's item of the given type, or None."""
        return self._pools.get(kind, {}).get(handle)

    def has(self, handle: int, kind: type) -> bool:
        """Whether the entity holds an item of the given type."""
        return handle in self._pools.get(kind, {})

    def view(self, kind: type) -> list[int]:
        """Handles of all entities holding an item of the given type."""
        return list(self._pools.get(kind, {}))

    def owner_of(self, component: Any) -> int | None:
        """Handle of the entity that holds this item, or None."""
        return self._owners.get(id(component))


_REGISTRY = Registry()


def _require_subclass(kind: Any, base: type) -> None:
    if not (isinstance(kind, type) and issubclass(kind, base)):
        raise TypeError(f"{kind!r} is not a subclass of {base.__name__}")


class Component:
    """Base class for data attached to entities."""

    def owner(self) -> Entity:
        """The entity this component is attached to, or Entity.INVALID."""
        handle = _REGISTRY.owner_of(self)
        return Entity.INVALID if handle is None else Entity(handle)

    def _on_attach(self) -> None:
        """Called once the component has been attached to its owner."""


class Tag:
    """Base class for data-free markers put on entities."""


class DestroyTag(Tag):
    """Marks an entity for destruction at the next queue pass."""


class Name(Component):
    """Human-readable name of an entity."""

    def __init__(self, name: str = "Entity") -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Name({self.name!r})"


class Entity:
    """A lightweight handle to an entity in the shared registry."""

    __slots__ = ("_handle",)

    INVALID: Entity

    def __init__(self, handle: int | None = None) -> None:
        self._handle = handle

    @property
    def handle(self) -> int | None:
        return self._handle

    @staticmethod
    def create() -> EntityBuilder:
        """Start building a new entity with default components."""
        from velecs.builder import EntityBuilder

        return EntityBuilder()

    @staticmethod
    def registry() -> Registry:
        """The registry every entity lives in."""
        return _REGISTRY

    def is_valid(self) -> bool:
        return _REGISTRY.valid(self._handle)

    def __bool__(self) -> bool:
        return self.is_valid()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self._handle == other._handle

    def __hash__(self) -> int:
        return hash(self._handle)

    def __repr__(self) -> str:
        return f"Entity({self._handle!r})"

    @property
    def name(self) -> str:
        return self.get_component(Name).name

    @name.setter
    def name(self, new_name: str) -> None:
        self.get_component(Name).name = new_name

    @property
    def relationship(self) -> Relationship:
        from velecs.relationship import Relationship

        return self.get_component(Relationship)

    @property
    def transform(self) -> Transform:
        from velecs.transform import Transform

        return self.get_component(Transform)

    def add_tag(self, tag_type: type[Tag]) -> None:
        """Mark the entity with a tag."""
        _require_subclass(tag_type, Tag)
        _REGISTRY.emplace(self._handle, tag_type())

    def has_tag(self, tag_type: type[Tag]) -> bool:
        _require_subclass(tag_type, Tag)
        return _REGISTRY.has(self._handle, tag_type)

    def add_component(self, component_type: type[T], *args: Any, **kwargs: Any) -> T:
        """Construct a component from the arguments and attach it."""
        _require_subclass(component_type, Component)
        component = _REGISTRY.emplace(self._handle, component_type(*args, **kwargs))
        component._on_attach()
        return component

    def remove_component(self, component_type: type[Component]) -> None:
        _require_subclass(component_type, Component)
        _REGISTRY.remove(self._handle, component_type)

    def try_get_component(self, component_type: type[T]) -> T | None:
        """The component of the given type, or None if absent."""
        _require_subclass(component_type, Component)
        return _REGISTRY.try_get(self._handle, component_type)

    def get_component(self, component_type: type[T]) -> T:
        """The component of the given type; raises KeyError if absent."""
        component = self.try_get_component(component_type)
        if component is None:
            raise KeyError(f"{self!r} has no {component_type.__name__}")
        return component

    @staticmethod
    def request_destroy(entity: Entity) -> None:
        """Queue a valid entity for destruction."""
        if entity and not entity.has_tag(DestroyTag):
            entity.add_tag(DestroyTag)

    @staticmethod
    def process_destruction_queue() -> None:
        """Destroy every entity queued for destruction."""
        for entity in [Entity(h) for h in _REGISTRY.view(DestroyTag)]:
            if entity:
                entity._destroy(True)

    def _children(self) -> Iterator[Entity]:
        from velecs.relationship import Relationship

        relationship = self.try_get_component(Relationship)
        return iter(()) if relationship is None else iter(list(reversed(relationship)))

    def _destroy(self, remove_parent: bool) -> None:
        from velecs.relationship import Relationship

        relationship = self.try_get_component(Relationship)
        if relationship is not None:
            count = relationship.child_count
            if count > 0:
                noun = "child" if count == 1 else "children"
                print(f"Destroying the {count} {noun} of '{self.name}':")
                for child in list(reversed(relationship)):
                    if child:
                        child._destroy(False)
                    else:
                        print("ERROR: child entity is not valid!")
            if remove_parent:
                relationship.set_parent(Entity.INVALID)

        print(f"Destroying '{self.name}'!")
        _REGISTRY.destroy(self._handle)


Entity.INVALID = Entity()