import math

# Default parameters used when a clown is first built. Any field can be
# overridden by a partial update (see clown_params.merge_update).
DEFAULT_CLOWN_PARAMS = {
    'arms': {
        'length': 10,
        'leftArm': {
            'rotX': 0,
            'rotY': 0,
            'rotZ': math.pi/6,
        },
        'rightArm': {
            'rotX': 0,
            'rotY': 0,
            'rotZ': -math.pi/6,
        },
    },
    'legs': {
        'length': 10,
    },
    'body': {
        'radius': 6,
        'stretchY': 1.25,
    },
    'head': {
        'scaleX': 1,
        'scaleY': 1,
        'scaleZ': 1,
        'rotX': 0,
        'rotY': 0,
        'rotZ': 0,
    },
}

# Part colors (0xRRGGBB)
BLUE = 0x00a9fe
MAGENTA = 0xf030d9
MINT = 0x19efb3
SKULL_COLOR = 0xb8fee4
PURPLE = 0x45266a
SMILE_COLOR = 0xff9fe8
ORIGIN_COLOR = 0xffff00

# Fixed part dimensions
SHOULDER_RADIUS = 2
ARM_RADIUS = 0.9
HAND_RADIUS = 1.5
HAND_OVERLAP = 0.75
LEG_RADIUS = 0.8
FOOT_RADIUS = 2
HIP_OFFSET = 2
TORSO_NUDGE = 1
NECK_NUDGE = 1.5

# The sole sits this far below the foot dome so the two never z-fight.
FOOT_Z_FIGHT_EPSILON = 0.001

# Segment counts for the smooth parts. Parts not listed use the
# geometry module defaults.
SMOOTH_SEGMENTS = 32
FOOT_WIDTH_SEGMENTS = 8
FOOT_HEIGHT_SEGMENTS = 6

# Control panel: (folder, path) -> (min, max). Paths are tuples into the
# clown parameter record, or ('transform', attr, axis) for the figure.
CONTROL_RANGES = [
    ('Arms', ('arms', 'length'), (5, 15)),
    ('Left Arm', ('arms', 'leftArm', 'rotX'), (-math.pi, math.pi)),
    ('Left Arm', ('arms', 'leftArm', 'rotY'), (-math.pi, math.pi)),
    ('Left Arm', ('arms', 'leftArm', 'rotZ'), (-math.pi, math.pi)),
    ('Right Arm', ('arms', 'rightArm', 'rotX'), (-math.pi, math.pi)),
    ('Right Arm', ('arms', 'rightArm', 'rotY'), (-math.pi, math.pi)),
    ('Right Arm', ('arms', 'rightArm', 'rotZ'), (-math.pi, math.pi)),
    ('Legs', ('legs', 'length'), (5, 15)),
    ('Body', ('body', 'radius'), (5, 7)),
    ('Body', ('body', 'stretchY'), (1, 1.5)),
    ('Head', ('head', 'scaleX'), (0.5, 1.5)),
    ('Head', ('head', 'scaleY'), (0.5, 1.5)),
    ('Head', ('head', 'scaleZ'), (0.5, 1.5)),
    ('Head', ('head', 'rotX'), (-math.pi/4, math.pi/6)),
    ('Head', ('head', 'rotY'), (-math.pi/4, math.pi/4)),
    ('Head', ('head', 'rotZ'), (-math.pi/6, math.pi/6)),
    ('Position', ('transform', 'position', 0), (-10, 10)),
    ('Position', ('transform', 'position', 1), (-10, 10)),
    ('Position', ('transform', 'position', 2), (-10, 10)),
    ('Rotation', ('transform', 'rotation', 0), (-math.pi, math.pi)),
    ('Rotation', ('transform', 'rotation', 1), (-math.pi, math.pi)),
    ('Rotation', ('transform', 'rotation', 2), (-math.pi, math.pi)),
    ('Scale', ('transform', 'scale', 0), (0.5, 2)),
    ('Scale', ('transform', 'scale', 1), (0.5, 2)),
    ('Scale', ('transform', 'scale', 2), (0.5, 2)),
]

# Number of arrow-key presses to sweep a full control range.
CONTROL_STEPS = 50
CONTROL_FINE_STEPS = 500

# Viewer
WINDOW_WIDTH = 960
WINDOW_HEIGHT = 720
FIELD_OF_VIEW = 45
ORIGIN_MARKER_RADIUS = 0.5
BACKGROUND_COLOR = (0.92, 0.92, 0.92, 1.0)
LIGHT_DIR = (0.35, 1.0, 0.65)
# Scene bounding box the camera initially frames.
CAMERA_BOUNDS = {
    'minx': -10, 'maxx': 10,
    'miny': 14, 'maxy': 25,
    'minz': 0, 'maxz': 15,
}
ORBIT_SPEED = 0.01
ZOOM_FACTOR = 1.1

# Enable ANSI colors in logs.
LOG_COLOR = True

# Emit DEBUG level messages.
LOG_DEBUG = False

# Log every figure rebuild.
LOG_BUILDS = True
