"""Position, scale and rotation of an entity, with cached model and world matrices."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from velecs.entity import Component, Entity
from velecs.relationship import Relationship


def _vec3(value: Sequence[float]) -> np.ndarray:
    arr = np.array(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected 3 components, got shape {arr.shape}")
    return arr


def _quat(value: Sequence[float]) -> np.ndarray:
    arr = np.array(value, dtype=float)
    if arr.shape != (4,):
        raise ValueError(f"expected 4 components (w, x, y, z), got shape {arr.shape}")
    return arr


def _quat_from_euler(angles: np.ndarray) -> np.ndarray:
    cx, cy, cz = np.cos(angles * 0.5)
    sx, sy, sz = np.sin(angles * 0.5)
    return np.array(
        [
            cx * cy * cz + sx * sy * sz,
            sx * cy * cz - cx * sy * sz,
            cx * sy * cz + sx * cy * sz,
            cx * cy * sz - sx * sy * cz,
        ]
    )


def _quat_to_euler(q: np.ndarray) -> np.ndarray:
    w, x, y, z = q
    pitch = math.atan2(2.0 * (y * z + w * x), w * w - x * x - y * y + z * z)
    yaw = math.asin(max(-1.0, min(1.0, -2.0 * (x * z - w * y))))
    roll = math.atan2(2.0 * (x * y + w * z), w * w + x * x - y * y - z * z)
    return np.array([pitch, yaw, roll])


def _quat_to_matrix(q: np.ndarray) -> np.ndarray:
    w, x, y, z = q
    m = np.eye(4)
    m[:3, :3] = [
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ]
    return m


def _translation(pos: np.ndarray) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = pos
    return m


def _scaling(scale: np.ndarray) -> np.ndarray:
    return np.diag([*scale, 1.0])


class Transform(Component):
    """Local position, scale and rotation (quaternion as w, x, y, z).

    Matrices act on column vectors; the world matrix is the parent's world
    matrix times this transform's model matrix.
    """

    def __init__(self) -> None:
        self._pos = np.zeros(3)
        self._scale = np.ones(3)
        self._rot = np.array([1.0, 0.0, 0.0, 0.0])
        self._model_dirty = True
        self._model = np.eye(4)
        self._world_dirty = True
        self._world = np.eye(4)

    def __repr__(self) -> str:
        return (
            f"Transform(pos={self._pos.tolist()}, scale={self._scale.tolist()}, "
            f"rot={self._rot.tolist()})"
        )

    @property
    def pos(self) -> np.ndarray:
        return self._pos.copy()

    @pos.setter
    def pos(self, new_pos: Sequence[float]) -> None:
        self._pos = _vec3(new_pos)
        self._set_dirty()

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @scale.setter
    def scale(self, new_scale: Sequence[float]) -> None:
        self._scale = _vec3(new_scale)
        self._set_dirty()

    @property
    def rot(self) -> np.ndarray:
        return self._rot.copy()

    @rot.setter
    def rot(self, new_rot: Sequence[float]) -> None:
        self._rot = _quat(new_rot)
        self._set_dirty()

    @property
    def euler_angles(self) -> np.ndarray:
        """Rotation as (pitch, yaw, roll) in radians."""
        return _quat_to_euler(self._rot)

    @euler_angles.setter
    def euler_angles(self, new_angles: Sequence[float]) -> None:
        self._rot = _quat_from_euler(_vec3(new_angles))
        self._set_dirty()

    @property
    def euler_angles_deg(self) -> np.ndarray:
        """Rotation as (pitch, yaw, roll) in degrees."""
        return np.degrees(_quat_to_euler(self._rot))

    @euler_angles_deg.setter
    def euler_angles_deg(self, new_angles_deg: Sequence[float]) -> None:
        self._rot = _quat_from_euler(np.radians(_vec3(new_angles_deg)))
        self._set_dirty()

    @property
    def model_matrix(self) -> np.ndarray:
        if self._model_dirty:
            self._model = (
                _translation(self._pos)
                @ _quat_to_matrix(self._rot)
                @ _scaling(self._scale)
            )
            self._model_dirty = False
        return self._model.copy()

    @property
    def world_matrix(self) -> np.ndarray:
        if self._world_dirty:
            self._world = self._calculate_world()
            self._world_dirty = False
        return self._world.copy()

    def _relationship(self) -> Relationship | None:
        owner = self.owner()
        return owner.try_get_component(Relationship) if owner else None

    def _calculate_world(self) -> np.ndarray:
        relationship = self._relationship()
        parent = relationship.parent if relationship is not None else Entity.INVALID
        parent_transform = parent.try_get_component(Transform) if parent else None
        if parent_transform is None:
            return self.model_matrix
        return parent_transform.world_matrix @ self.model_matrix

    def _set_world_dirty(self) -> None:
        self._world_dirty = True
        relationship = self._relationship()
        if relationship is None:
            return
        for child in relationship:
            transform = child.try_get_component(Transform)
            if transform is not None:
                transform._set_world_dirty()

    def _set_dirty(self) -> None:
        self._model_dirty = True
        self._set_world_dirty()