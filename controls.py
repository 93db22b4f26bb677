"""
Control panel for the clown viewer.

The panel is a list of sliders grouped in folders (Arms, Left Arm, ...,
Position, Rotation, Scale). It does not draw anything; the viewer maps
keys onto `select`/`nudge` and shows `lines()` in its HUD. Parameter
sliders push a one-field partial record through `Clown.redraw`,
transform sliders go through `Clown.set_transform`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import config
from clown_params import default_params


@dataclass(frozen=True)
class Control:
    folder: str
    path: Tuple
    minimum: float
    maximum: float

    @property
    def is_transform(self):
        return self.path[0] == 'transform'

    @property
    def label(self):
        if self.is_transform:
            return f"{self.folder} {'xyz'[self.path[2]]}"
        return f"{self.folder} {self.path[-1]}"

    def clamp(self, value):
        return max(self.minimum, min(self.maximum, value))

    def partial(self, value):
        """Nested partial parameter record setting this control's field."""
        record = {self.path[-1]: value}
        for key in reversed(self.path[:-1]):
            record = {key: record}
        return record


def build_controls(ranges=None):
    ranges = config.CONTROL_RANGES if ranges is None else ranges
    return [Control(folder, tuple(path), lo, hi) for folder, path, (lo, hi) in ranges]


class ControlPanel:
    def __init__(self, figure, on_change=None, controls=None):
        self.figure = figure
        self.on_change = on_change
        self.controls = build_controls() if controls is None else list(controls)
        self.selected = 0

    @property
    def current(self):
        return self.controls[self.selected]

    def select(self, offset):
        self.selected = (self.selected + offset) % len(self.controls)
        return self.current

    def value(self, control):
        if control.is_transform:
            _, attr, axis = control.path
            return float(getattr(self.figure, attr)[axis])
        value = self.figure.params
        for key in control.path:
            value = value[key]
        return value

    def set_value(self, control, value):
        value = control.clamp(value)
        if control.is_transform:
            _, attr, axis = control.path
            vec = getattr(self.figure, attr).copy()
            vec[axis] = value
            self.figure.set_transform(**{attr: vec})
        else:
            self.figure.redraw(control.partial(value))
        if self.on_change is not None:
            self.on_change()
        return value

    def nudge(self, direction, fine=False):
        control = self.current
        steps = getattr(config, 'CONTROL_FINE_STEPS' if fine else 'CONTROL_STEPS', 50)
        step = (control.maximum - control.minimum) / steps
        return self.set_value(control, self.value(control) + direction * step)

    def reset(self):
        self.figure.redraw(default_params())
        self.figure.set_transform(position=(0, 0, 0), rotation=(0, 0, 0), scale=(1, 1, 1))
        if self.on_change is not None:
            self.on_change()

    def lines(self):
        out = []
        folder = None
        for i, control in enumerate(self.controls):
            if control.folder != folder:
                folder = control.folder
                out.append(f"[{folder}]")
            marker = '>' if i == self.selected else ' '
            out.append(f"{marker} {control.label:<16} {self.value(control):7.3f}")
        return out
