import math
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import config
from clown_params import default_params, merge_update


def test_merge_from_nothing_gives_defaults():
    params = merge_update(None, {})
    assert params == config.DEFAULT_CLOWN_PARAMS
    assert params['arms']['length'] == 10
    assert params['legs']['length'] == 10
    assert params['body'] == {'radius': 6, 'stretchY': 1.25}
    assert params['arms']['leftArm']['rotZ'] == math.pi / 6
    assert params['arms']['rightArm']['rotZ'] == -math.pi / 6


def test_defaults_are_independent_copies():
    params = default_params()
    params['arms']['leftArm']['rotX'] = 3
    params['legs']['length'] = 99
    assert config.DEFAULT_CLOWN_PARAMS['arms']['leftArm']['rotX'] == 0
    assert config.DEFAULT_CLOWN_PARAMS['legs']['length'] == 10


def test_merge_single_field_keeps_everything_else():
    current = default_params()
    merged = merge_update(current, {'legs': {'length': 15}})
    expected = default_params()
    expected['legs']['length'] = 15
    assert merged == expected


def test_merge_does_not_touch_current():
    current = default_params()
    merge_update(current, {'body': {'radius': 2}, 'arms': {'leftArm': {'rotY': 1}}})
    assert current == default_params()


def test_merge_recurses_into_arm_records():
    current = default_params()
    merged = merge_update(current, {'arms': {'leftArm': {'rotY': 1}}})
    assert merged['arms']['leftArm'] == {'rotX': 0, 'rotY': 1, 'rotZ': math.pi / 6}
    assert merged['arms']['rightArm'] == current['arms']['rightArm']
    assert merged['arms']['length'] == 10


def test_merge_arm_length_keeps_arm_rotations():
    current = merge_update(None, {'arms': {'rightArm': {'rotX': 0.5}}})
    merged = merge_update(current, {'arms': {'length': 7}})
    assert merged['arms']['length'] == 7
    assert merged['arms']['rightArm'] == {'rotX': 0.5, 'rotY': 0, 'rotZ': -math.pi / 6}
    assert merged['arms']['leftArm'] == current['arms']['leftArm']


def test_merge_several_sections():
    merged = merge_update(None, {
        'body': {'stretchY': 1.5},
        'head': {'scaleX': 0.5, 'rotZ': 0.25},
    })
    assert merged['body'] == {'radius': 6, 'stretchY': 1.5}
    assert merged['head'] == {'scaleX': 0.5, 'scaleY': 1, 'scaleZ': 1, 'rotX': 0, 'rotY': 0, 'rotZ': 0.25}
    assert merged['legs'] == {'length': 10}


def test_merge_accepts_out_of_range_values():
    merged = merge_update(None, {'legs': {'length': -3}, 'body': {'radius': float('inf')},
                                 'head': {'rotY': 40.0}})
    assert merged['legs']['length'] == -3
    assert merged['body']['radius'] == float('inf')
    assert merged['head']['rotY'] == 40.0


def test_merge_none_partial_is_noop():
    current = merge_update(None, {'legs': {'length': 12}})
    assert merge_update(current, None) == current
    assert merge_update(current, {}) == current
