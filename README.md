# velecs

A small entity-component system for Python. All entities live in one shared
registry. Each entity made through the builder carries three components:

- a `Name`, which defaults to `"Entity"`,
- a `Relationship`, which holds a parent and a ring of children,
- a `Transform`, which holds position, scale and rotation and caches its model
  and world matrices.

Entities are not destroyed at once. You request destruction, then process the
queue. Destroying an entity also destroys all its descendants.

## Installation

```
pip install .
```

The package needs Python 3.10 or newer and numpy.

## Modules

- `velecs.entity`: `Registry`, `Entity`, `Component`, `Tag`, `DestroyTag`, `Name`
- `velecs.relationship`: `Relationship`
- `velecs.transform`: `Transform`
- `velecs.builder`: `EntityBuilder`

## Usage

```python
import numpy as np

from velecs.builder import EntityBuilder
from velecs.entity import Entity

parent = (
    EntityBuilder()
    .with_name("Parent Entity")
    .with_pos(np.array([0.0, 0.0, 1.0]))
    .build()
)

child = (
    EntityBuilder()
    .with_name("Child Entity")
    .with_parent(parent)
    .with_pos(np.array([0.0, 0.0, 10.0]))
    .build()
)

print(child.relationship.parent.name)     # Parent Entity
print(child.transform.world_matrix)       # parent's world matrix @ child's model matrix

for c in parent.relationship:             # children in the order they were added
    print(c.name)

Entity.request_destroy(parent)            # adds a DestroyTag
Entity.process_destruction_queue()        # destroys parent and child
print(bool(child))                        # False
```

`Entity.create()` also returns a fresh `EntityBuilder`. The builder's
`entity` property and `build()` both return the entity it made.

While the queue is processed, each destruction is reported on standard
output: a line such as `Destroying 'Child Entity'!`, and, for an entity with
children, a line naming how many children are destroyed first.

### Entities

An `Entity` is a handle. It is true while it names a living entity, and two
entities compare equal when they hold the same handle. `Entity.INVALID` names
no entity. `name` can be read and set. `relationship` and `transform` return
those components.

### Components and tags

Subclass `Component` for your own data, and `Tag` for empty markers:

```python
from velecs.entity import Component, Entity, Tag

class Health(Component):
    def __init__(self, points=100):
        self.points = points

class Player(Tag):
    pass

entity = Entity.create().with_component(Health, 50).build()
entity.add_tag(Player)

health = entity.try_get_component(Health)   # None if absent
assert health.owner() == entity
assert entity.has_tag(Player)
```

`get_component` raises `KeyError` when the component is absent.
`add_component` and `add_tag` raise `ValueError` when the entity already holds
one of that type, and `TypeError` when the type is not a `Component` or `Tag`
subclass. `remove_component` detaches a component.

`Entity.registry()` returns the shared `Registry`. Its `view(kind)` lists the
handles that hold a given component or tag.

### Relationships

`Relationship.set_parent(entity)` moves the owner under a new parent.
`set_parent(Entity.INVALID)` detaches it. `add_child` and `remove_child` work
from the parent's side, and `remove_child` returns whether the entity was a
child. A relationship iterates its children in order. `reversed()` walks them
backwards, and `len()` and `child_count` give how many there are.
`first_child`, `prev_sibling` and `next_sibling` expose the sibling ring.

### Transforms

A `Transform` exposes `pos`, `scale`, `rot` (a quaternion as w, x, y, z),
`euler_angles` (pitch, yaw, roll in radians) and `euler_angles_deg` as
properties. Setting any of them marks the model matrix dirty. It also marks
the world matrix dirty for the entity and all its descendants. Changing an
entity's parent marks its world matrix dirty as well.

`model_matrix` is translation × rotation × scale and acts on column vectors.
`world_matrix` is the parent's world matrix times the model matrix, or the
model matrix alone when there is no parent. Both return copies.

## What it does not do

There is one registry per process and no way to create separate worlds. Nothing
is saved to disk. There are no systems, scheduling or rendering beyond the
components above, and there is no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```