"""
Procedural clown figure built from primitive meshes.

The figure's origin is the point between its feet. Every part is placed
as an offset from there: legs hang down from the hips at leg height,
the torso sits on top of the legs, the arms attach to the torso surface
45 degrees above its equator, and the head sits on top of the torso.

All builders return a fresh, unparented `Node` sub-tree. Nothing is
cached; `Clown.redraw` throws away the previous build and starts over.
"""
from __future__ import annotations

import copy
import math

import numpy as np

import logutil
from clown_params import merge_update
from config import (
    BLUE, MAGENTA, MINT, SKULL_COLOR, PURPLE, SMILE_COLOR,
    SHOULDER_RADIUS, ARM_RADIUS, HAND_RADIUS, HAND_OVERLAP,
    LEG_RADIUS, FOOT_RADIUS, HIP_OFFSET, TORSO_NUDGE, NECK_NUDGE,
    FOOT_Z_FIGHT_EPSILON, SMOOTH_SEGMENTS, FOOT_WIDTH_SEGMENTS, FOOT_HEIGHT_SEGMENTS,
)
from geometry import (
    GeometryError, sphere_geometry, cylinder_geometry, torus_geometry, circle_geometry,
)
from scene import Material, Mesh, Node


def build_arm(length):
    """Arm with its origin at the shoulder joint, hanging down -y."""
    arm = Node('arm')
    arm.add(Mesh(sphere_geometry(SHOULDER_RADIUS), Material(MAGENTA), name='shoulder'))
    # Move the limb down to keep origin at the shoulder
    arm.add(Mesh(
        cylinder_geometry(ARM_RADIUS, ARM_RADIUS, length),
        Material(BLUE),
        name='limb',
        position=(0, -length / 2, 0),
    ))
    arm.add(Mesh(
        sphere_geometry(HAND_RADIUS),
        Material(MINT),
        name='hand',
        position=(0, HAND_OVERLAP - length, 0),
    ))
    return arm


def build_leg(length):
    """Leg with its origin at the hip joint, foot resting at y = -length."""
    leg = Node('leg')
    leg.add(Mesh(
        cylinder_geometry(LEG_RADIUS, LEG_RADIUS, length),
        Material(MAGENTA),
        name='limb',
        position=(0, -length / 2, 0),
    ))

    foot_mat = Material(MINT)
    dome = sphere_geometry(
        FOOT_RADIUS, FOOT_WIDTH_SEGMENTS, FOOT_HEIGHT_SEGMENTS,
        0, 2 * math.pi, 0, math.pi / 2,
    )
    leg.add(Mesh(dome, foot_mat, name='foot', position=(0, -length, 0)))
    # Sole closes the open underside of the dome
    leg.add(Mesh(
        circle_geometry(FOOT_RADIUS),
        foot_mat,
        name='sole',
        position=(0, -length - FOOT_Z_FIGHT_EPSILON, 0),
        rotation=(math.pi / 2, 0, 0),
    ))
    return leg


def build_hat():
    hat = Node('hat')
    hat_mat = Material(BLUE)
    hat.add(Mesh(cylinder_geometry(8, 8, 0.5, SMOOTH_SEGMENTS, SMOOTH_SEGMENTS), hat_mat, name='rim'))
    # Crown base rests on the rim
    hat.add(Mesh(
        cylinder_geometry(4.5, 5, 6, SMOOTH_SEGMENTS, SMOOTH_SEGMENTS),
        hat_mat,
        name='crown',
        position=(0, 3, 0),
    ))
    return hat


def build_head(head_params):
    """
    Head with its origin at the neck (bottom of the skull), including
    the hat. The whole sub-tree is scaled by the head scale factors;
    head rotation is left to the caller.
    """
    head = Node('head')
    head.add(Mesh(
        sphere_geometry(5, SMOOTH_SEGMENTS, SMOOTH_SEGMENTS),
        Material(SKULL_COLOR),
        name='skull',
        position=(0, 5, 0),
    ))

    # ears, eyes and nose share one material
    purple = Material(PURPLE)
    ear_geom = sphere_geometry(1.5, SMOOTH_SEGMENTS, SMOOTH_SEGMENTS)
    head.add(
        Mesh(ear_geom, purple, name='left_ear', position=(-5, 5, 0)),
        Mesh(ear_geom, purple, name='right_ear', position=(5, 5, 0)),
    )
    eye_geom = sphere_geometry(0.5, SMOOTH_SEGMENTS, SMOOTH_SEGMENTS)
    head.add(
        Mesh(eye_geom, purple, name='left_eye', position=(-1.5, 5, 4.75)),
        Mesh(eye_geom, purple, name='right_eye', position=(1.5, 5, 4.75)),
    )
    head.add(Mesh(sphere_geometry(0.3), purple, name='nose', position=(0, 4.25, 4.85)))

    head.add(Mesh(
        torus_geometry(2.5, 0.25, SMOOTH_SEGMENTS, SMOOTH_SEGMENTS, math.pi / 3),
        Material(SMILE_COLOR),
        name='smile',
        position=(0, 5.25, 4.25),
        rotation=(0, 0, -math.pi / 1.65),
    ))

    hat = build_hat()
    hat.position = np.array([0.5, 7.5, -0.5])
    hat.rotation = np.array([-math.pi / 12, 0, -math.pi / 12])
    head.add(hat)

    head.scale = np.array([head_params['scaleX'], head_params['scaleY'], head_params['scaleZ']], dtype=float)
    return head


def shoulder_offset(body_params, legs_params):
    """(x, y) of the left shoulder joint in figure coordinates."""
    radius = body_params['radius']
    stretch_y = body_params['stretchY']
    body_offset = radius * stretch_y
    x_shoulder = math.cos(math.pi / 4) * radius
    y_shoulder = math.sin(math.pi / 4) * radius * stretch_y + legs_params['length'] + body_offset
    return x_shoulder, y_shoulder


def head_offset(body_params, legs_params):
    """Height of the neck above the figure origin."""
    return legs_params['length'] + 2 * body_params['radius'] * body_params['stretchY'] - NECK_NUDGE


def build_body(body_params, arms_params, legs_params):
    """Torso with both arms and both legs attached."""
    body = Node('body')
    radius = body_params['radius']
    stretch_y = body_params['stretchY']
    leg_length = legs_params['length']
    body_offset = radius * stretch_y

    body.add(Mesh(
        sphere_geometry(radius, SMOOTH_SEGMENTS, SMOOTH_SEGMENTS),
        Material(BLUE),
        name='torso',
        position=(0, leg_length + body_offset - TORSO_NUDGE, 0),
        scale=(1, stretch_y, 1),
    ))

    x_shoulder, y_shoulder = shoulder_offset(body_params, legs_params)
    for name, sign, side in (('left_arm', 1, 'leftArm'), ('right_arm', -1, 'rightArm')):
        rot = arms_params[side]
        arm = build_arm(arms_params['length'])
        arm.name = name
        arm.position = np.array([sign * x_shoulder, y_shoulder, 0], dtype=float)
        arm.rotation = np.array([rot['rotX'], rot['rotY'], rot['rotZ']], dtype=float)
        body.add(arm)

    for name, sign in (('left_leg', 1), ('right_leg', -1)):
        leg = build_leg(leg_length)
        leg.name = name
        leg.position = np.array([sign * HIP_OFFSET, leg_length, 0], dtype=float)
        body.add(leg)

    return body


def build_clown(params):
    clown = Node('clown')
    clown.add(build_body(params['body'], params['arms'], params['legs']))

    head_params = params['head']
    head = build_head(head_params)
    head.rotation = np.array([head_params['rotX'], head_params['rotY'], head_params['rotZ']], dtype=float)
    head.position = np.array([0, head_offset(params['body'], params['legs']), 0], dtype=float)
    clown.add(head)
    return clown


class Clown:
    """
    A clown figure owning a transform node.

    The generated parts hang under `node` as a single sub-tree that is
    replaced wholesale by `redraw`. Position, rotation and scale of the
    whole figure are set on `node` and survive redraws.

        clown = Clown({'legs': {'length': 12}})
        scene.add(clown.node)
        clown.redraw({'arms': {'leftArm': {'rotY': 1}}})
    """

    def __init__(self, params=None, node=None):
        self.node = node if node is not None else Node('figure')
        self._params = None
        self._clown = None
        self.redraw(params)

    @property
    def params(self):
        """Copy of the resolved parameters of the current build."""
        return copy.deepcopy(self._params)

    @property
    def current(self):
        return self._clown

    @property
    def built(self):
        return self._clown is not None

    @property
    def position(self):
        return self.node.position

    @position.setter
    def position(self, value):
        self.node.position = np.array(value, dtype=float)

    @property
    def rotation(self):
        return self.node.rotation

    @rotation.setter
    def rotation(self, value):
        self.node.rotation = np.array(value, dtype=float)

    @property
    def scale(self):
        return self.node.scale

    @scale.setter
    def scale(self, value):
        self.node.scale = np.array(value, dtype=float)

    def set_transform(self, position=None, rotation=None, scale=None):
        if position is not None:
            self.position = position
        if rotation is not None:
            self.rotation = rotation
        if scale is not None:
            self.scale = scale

    def redraw(self, params=None):
        """
        Merge `params` into the current parameters and rebuild the figure.

        On GeometryError the previous parameters and parts are kept and
        the error is re-raised.
        """
        options = merge_update(self._params, params)
        try:
            clown = build_clown(options)
        except GeometryError as exc:
            logutil.log("BUILD", f"rebuild rejected, keeping previous figure: {exc}", level="WARN")
            raise

        if self._clown is not None:
            self.node.remove(self._clown)
        self._params = options
        self._clown = clown
        self.node.add(clown)
        logutil.log(
            "BUILD",
            f"rebuilt clown meshes={sum(1 for n in clown.traverse() if isinstance(n, Mesh))} params={options}",
            level="DEBUG",
        )
        return clown
