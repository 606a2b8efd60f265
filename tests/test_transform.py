import math

import numpy as np
import pytest

from velecs.entity import Entity, Name
from velecs.relationship import Relationship
from velecs.transform import Transform


def make(name):
    entity = Entity(Entity.registry().create())
    entity.add_component(Name, name)
    entity.add_component(Relationship)
    entity.add_component(Transform)
    return entity


def test_defaults_are_identity():
    t = make("e").transform
    assert np.array_equal(t.pos, np.zeros(3))
    assert np.array_equal(t.scale, np.ones(3))
    assert np.array_equal(t.rot, [1.0, 0.0, 0.0, 0.0])
    assert np.allclose(t.model_matrix, np.eye(4))
    assert np.allclose(t.world_matrix, np.eye(4))


def test_position_goes_into_translation_column():
    t = make("e").transform
    t.pos = (1.5, -2.0, 3.0)
    assert np.allclose(t.pos, [1.5, -2.0, 3.0])
    assert np.allclose(t.model_matrix[:3, 3], [1.5, -2.0, 3.0])


def test_scale_goes_onto_diagonal():
    t = make("e").transform
    t.scale = (2.0, 3.0, 4.0)
    assert np.allclose(np.diag(t.model_matrix)[:3], [2.0, 3.0, 4.0])


def test_quarter_turn_about_z_maps_x_to_y():
    t = make("e").transform
    half = math.sqrt(0.5)
    t.rot = (half, 0.0, 0.0, half)
    point = t.model_matrix @ np.array([1.0, 0.0, 0.0, 1.0])
    assert np.allclose(point, [0.0, 1.0, 0.0, 1.0])


def test_euler_round_trip_radians():
    t = make("e").transform
    t.euler_angles = (0.1, 0.2, 0.3)
    assert np.allclose(t.euler_angles, [0.1, 0.2, 0.3])
    assert np.isclose(np.linalg.norm(t.rot), 1.0)


def test_euler_round_trip_degrees():
    t = make("e").transform
    t.euler_angles_deg = (10.0, -20.0, 30.0)
    assert np.allclose(t.euler_angles_deg, [10.0, -20.0, 30.0])
    assert np.allclose(np.radians(t.euler_angles_deg), t.euler_angles)


def test_euler_and_quaternion_agree():
    a = make("a").transform
    b = make("b").transform
    a.euler_angles = (0.0, 0.0, math.pi / 2)
    half = math.sqrt(0.5)
    b.rot = (half, 0.0, 0.0, half)
    assert np.allclose(a.model_matrix, b.model_matrix)


def test_rotation_matrix_is_orthonormal():
    t = make("e").transform
    t.euler_angles = (0.4, -0.7, 1.1)
    r = t.model_matrix[:3, :3]
    assert np.allclose(r @ r.T, np.eye(3))
    assert np.isclose(np.linalg.det(r), 1.0)


def test_root_world_equals_model():
    t = make("e").transform
    t.pos = (1.0, 2.0, 3.0)
    t.euler_angles = (0.3, 0.2, 0.1)
    assert np.allclose(t.world_matrix, t.model_matrix)


def test_child_world_is_parent_world_times_model():
    parent = make("p")
    child = make("c")
    child.relationship.set_parent(parent)
    parent.transform.pos = (0.0, 0.0, 1.0)
    parent.transform.scale = (2.0, 2.0, 2.0)
    child.transform.pos = (0.0, 0.0, 10.0)
    expected = parent.transform.world_matrix @ child.transform.model_matrix
    assert np.allclose(child.transform.world_matrix, expected)


def test_parent_change_invalidates_child_world():
    parent = make("p")
    child = make("c")
    grandchild = make("g")
    child.relationship.set_parent(parent)
    grandchild.relationship.set_parent(child)
    grandchild.transform.pos = (1.0, 0.0, 0.0)
    before = grandchild.transform.world_matrix
    parent.transform.pos = (0.0, 5.0, 0.0)
    after = grandchild.transform.world_matrix
    assert not np.allclose(before, after)
    expected = (
        parent.transform.world_matrix
        @ child.transform.model_matrix
        @ grandchild.transform.model_matrix
    )
    assert np.allclose(after, expected)


def test_reparenting_invalidates_world():
    parent = make("p")
    child = make("c")
    parent.transform.pos = (3.0, 0.0, 0.0)
    alone = child.transform.world_matrix
    assert np.allclose(alone, child.transform.model_matrix)
    child.relationship.set_parent(parent)
    assert np.allclose(
        child.transform.world_matrix,
        parent.transform.world_matrix @ child.transform.model_matrix,
    )
    child.relationship.set_parent(Entity.INVALID)
    assert np.allclose(child.transform.world_matrix, child.transform.model_matrix)


def test_returned_values_are_copies():
    t = make("e").transform
    matrix = t.model_matrix
    matrix[0, 0] = 42.0
    pos = t.pos
    pos[0] = 42.0
    assert np.allclose(t.model_matrix, np.eye(4))
    assert np.array_equal(t.pos, np.zeros(3))


def test_unattached_transform_world_is_model():
    t = Transform()
    t.pos = (1.0, 1.0, 1.0)
    assert np.allclose(t.world_matrix, t.model_matrix)
    assert t.owner() == Entity.INVALID


@pytest.mark.parametrize("attr, value", [
    ("pos", (1.0, 2.0)),
    ("scale", (1.0, 2.0, 3.0, 4.0)),
    ("rot", (1.0, 0.0, 0.0)),
    ("euler_angles", (0.0,)),
    ("euler_angles_deg", (0.0, 0.0)),
])
def test_wrong_shape_raises(attr, value):
    t = make("e").transform
    with pytest.raises(ValueError):
        setattr(t, attr, value)
    assert np.allclose(t.model_matrix, np.eye(4))
    assert np.array_equal(t.pos, np.zeros(3))
    assert np.array_equal(t.scale, np.ones(3))
    assert np.array_equal(t.rot, [1.0, 0.0, 0.0, 0.0])