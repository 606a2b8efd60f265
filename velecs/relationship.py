"""Parent/child links between entities, kept as a circular list of siblings."""

from __future__ import annotations

from itertools import islice
from typing import Iterator

from velecs.entity import Component, Entity


def _mark_world_dirty(entity: Entity) -> None:
    from velecs.transform import Transform

    transform = entity.try_get_component(Transform) if entity else None
    if transform is not None:
        transform._set_world_dirty()


class Relationship(Component):
    """Links an entity to its parent and to its children.

    Children form a circular doubly linked list through their own
    relationships; the parent keeps the first child and the count.
    Iterating yields the children in the order they were added.
    """

    def __init__(self) -> None:
        self._parent = Entity.INVALID
        self._first_child = Entity.INVALID
        self._prev_sibling = Entity.INVALID
        self._next_sibling = Entity.INVALID
        self._child_count = 0

    def _on_attach(self) -> None:
        owner = self.owner()
        self._prev_sibling = owner
        self._next_sibling = owner

    def __repr__(self) -> str:
        return (
            f"Relationship(parent={self._parent!r}, "
            f"children={self._child_count})"
        )

    def _chain(self, start: Entity, forward: bool) -> Iterator[Entity]:
        current = start
        while True:
            yield current
            relationship = current.relationship
            current = (
                relationship._next_sibling if forward else relationship._prev_sibling
            )

    def __iter__(self) -> Iterator[Entity]:
        if self._child_count == 0:
            return iter(())
        return islice(self._chain(self._first_child, True), self._child_count)

    def __reversed__(self) -> Iterator[Entity]:
        if self._child_count == 0:
            return iter(())
        last = self._first_child.relationship._prev_sibling
        return islice(self._chain(last, False), self._child_count)

    def __len__(self) -> int:
        return self._child_count

    @property
    def parent(self) -> Entity:
        return self._parent

    def set_parent(self, new_parent: Entity) -> None:
        """Attach the owner to a new parent, or detach it with Entity.INVALID."""
        if self._parent == new_parent:
            return
        owner = self.owner()
        if new_parent == owner:
            return
        if new_parent:
            new_parent.relationship.add_child(owner)
            return
        if self._parent:
            self._parent.relationship.remove_child(owner)
        self._parent = Entity.INVALID
        _mark_world_dirty(owner)

    @property
    def prev_sibling(self) -> Entity:
        return self._prev_sibling

    @property
    def next_sibling(self) -> Entity:
        return self._next_sibling

    @property
    def child_count(self) -> int:
        return self._child_count

    @property
    def first_child(self) -> Entity:
        return self._first_child

    def add_child(self, child: Entity) -> None:
        """Append a child at the end of the sibling list."""
        owner = self.owner()
        if child == owner:
            return
        child_rel = child.relationship
        if child_rel._parent == owner:
            return
        if child_rel._parent:
            child_rel._parent.relationship.remove_child(child)
        else:
            child_rel._prev_sibling = child
            child_rel._next_sibling = child

        if self._child_count == 0:
            self._first_child = child
            child_rel._prev_sibling = child
            child_rel._next_sibling = child
        else:
            first = self._first_child
            first_rel = first.relationship
            last = first_rel._prev_sibling
            last_rel = last.relationship

            first_rel._prev_sibling = child
            last_rel._next_sibling = child

            child_rel._prev_sibling = last
            child_rel._next_sibling = first

        child_rel._parent = owner
        self._child_count += 1
        _mark_world_dirty(child)

    def remove_child(self, child: Entity) -> bool:
        """Unlink a child; return whether it was one of this entity's children."""
        if self.owner() == child:
            return False
        if not any(current == child for current in self):
            return False

        child_rel = child.relationship
        prev = child_rel._prev_sibling
        nxt = child_rel._next_sibling
        prev.relationship._next_sibling = nxt
        nxt.relationship._prev_sibling = prev

        if child == self._first_child:
            self._first_child = Entity.INVALID if self._child_count == 1 else nxt

        child_rel._parent = Entity.INVALID
        child_rel._prev_sibling = child
        child_rel._next_sibling = child

        self._child_count -= 1
        _mark_world_dirty(child)
        return True