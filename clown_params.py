"""
Parameter record for the clown figure.

A clown is described by a nested dictionary with four sections::

    {
        'arms': {'length': 10,
                 'leftArm': {'rotX': 0, 'rotY': 0, 'rotZ': pi/6},
                 'rightArm': {'rotX': 0, 'rotY': 0, 'rotZ': -pi/6}},
        'legs': {'length': 10},
        'body': {'radius': 6, 'stretchY': 1.25},
        'head': {'scaleX': 1, 'scaleY': 1, 'scaleZ': 1,
                 'rotX': 0, 'rotY': 0, 'rotZ': 0},
    }

Angles are radians. Partial records use the same shape with any subset
of fields present.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from config import DEFAULT_CLOWN_PARAMS

SECTIONS = ('arms', 'legs', 'body', 'head')
ARM_SIDES = ('leftArm', 'rightArm')

ClownParams = Dict[str, Dict[str, Any]]


def default_params() -> ClownParams:
    """Return a fresh copy of the default clown parameters."""
    return copy.deepcopy(DEFAULT_CLOWN_PARAMS)


def merge_update(current: Optional[ClownParams], partial: Optional[Dict[str, Any]] = None) -> ClownParams:
    """
    Merge a partial parameter record into `current` and return the result.

    Each section is merged one field at a time: fields present in
    `partial` replace the current value and everything else is kept.
    The arm sub-records (`leftArm`/`rightArm`) are merged the same way
    one level further down, so `{'arms': {'leftArm': {'rotY': 1}}}`
    leaves the other arm angles and the arm length alone. Nothing deeper
    is merged.

    Values are not validated. `current` is not modified; when it is None
    the defaults are used as the starting point.
    """
    base = default_params() if current is None else current
    partial = partial or {}

    merged = {name: dict(section) for name, section in base.items()}
    for side in ARM_SIDES:
        merged['arms'][side] = dict(base['arms'][side])

    arms = partial.get('arms')
    if arms:
        merged['arms'].update(arms)
        for side in ARM_SIDES:
            merged['arms'][side] = {
                **base['arms'][side],
                **(arms.get(side) or {}),
            }

    for name in ('legs', 'body', 'head'):
        section = partial.get(name)
        if section:
            merged[name].update(section)

    return merged
