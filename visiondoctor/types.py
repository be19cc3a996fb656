"""Enumerations for the inspection station data model.

Every enum is ``str``-valued so members compare equal to, and serialize as,
their display strings (``LightFixture.RING == "Ring"``).
"""

from __future__ import annotations

from enum import Enum


class SensorFormat(str, Enum):
    """Named optical sensor formats."""

    TYPE_1_3 = '1/3"'
    TYPE_1_2 = '1/2"'
    TYPE_1_1_8 = '1/1.8"'
    TYPE_2_3 = '2/3"'
    TYPE_1 = '1"'
    FULL_FRAME = "Full Frame (35mm)"


class ObjectType(str, Enum):
    """Objects that can be placed under the camera."""

    PCB = "PCB Board"
    GLASS_BOTTLE = "Glass Bottle (Amber)"
    ALUMINUM_CAN = "Aluminum Can"
    MATTE_BLOCK = "Matte Block"
    BOTTLE_CAP = "Bottle Cap"


class ObjectOrientation(str, Enum):
    """Face of the object presented to the camera.

    CUSTOM activates the six-axis shift/rotation fields of the state.
    """

    FRONT = "Front"
    SIDE = "Side"
    BACK = "Back"
    TOP = "Top"
    BOTTOM = "Bottom"
    CUSTOM = "Custom"


class ViewFocus(str, Enum):
    """Part of the object the camera is framed on."""

    WHOLE = "Whole"
    TOP = "Top"
    MIDDLE = "Middle"
    BOTTOM = "Bottom"


class LensFilter(str, Enum):
    NONE = "None"
    POLARIZER = "Polarizer"
    RED_BANDPASS = "Red Bandpass"
    BLUE_BANDPASS = "Blue Bandpass"
    IR_CUT = "IR Cut"


class LightFixture(str, Enum):
    """Physical lighting equipment type."""

    RING = "Ring"
    BAR = "Bar"
    SPOT = "Spot"
    PANEL = "Panel"
    COAXIAL = "Coaxial"
    DOME = "Dome"
    TUNNEL = "Tunnel"


class LightPosition(str, Enum):
    """Mounting position of the fixture relative to camera and object."""

    CAMERA_AXIS = "CameraAxis"
    BACKLIGHT = "Backlight"
    TOP = "Top"
    SIDE = "Side"
    LOW_ANGLE = "LowAngle"
    SURROUNDING = "Surrounding"


class LightConfig(str, Enum):
    """Fixture size/arrangement variant."""

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    SINGLE = "Single"
    DUAL = "Dual"
    QUAD = "Quad"
    NARROW = "Narrow"
    WIDE = "Wide"


class LightColor(str, Enum):
    WHITE = "White"
    RED = "Red"
    BLUE = "Blue"
    IR = "Infrared"
    UV = "UV"


class GlobalEnv(str, Enum):
    """Ambient light environment. STUDIO means no ambient light."""

    STUDIO = "Studio"
    FACTORY = "Factory"
    SUNLIGHT = "Sunlight"


class BackgroundPattern(str, Enum):
    NONE = "None"
    GRID = "Grid"
    STRIPES = "Stripes"
    NOISE = "Noise"


class LightingGeometry(str, Enum):
    """Illumination technique, derived from fixture and position."""

    SILHOUETTE = "Silhouette"
    DARK_FIELD = "Dark Field"
    BRIGHT_FIELD = "Bright Field"
    DIFFUSE = "Diffuse"
    DIRECTIONAL = "Directional"
