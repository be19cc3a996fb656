"""Lighting compatibility rules for inspection fixtures.

Each fixture type supports a fixed set of mounting positions and a fixed set
of configurations. The state must never hold a combination outside these
sets; ``reconcile`` repairs any edit that would produce one. Invalid
combinations are never reported as errors.

Validity sets::

    Fixture  | Positions                          | Configs
    ---------|------------------------------------|----------------------
    Ring     | CameraAxis, LowAngle               | Single
    Bar      | Backlight, Top, Side, LowAngle     | Single, Dual, Quad
    Spot     | Top, Side                          | Narrow, Wide
    Panel    | Backlight, Top, Side               | Small, Medium, Large
    Coaxial  | CameraAxis                         | Single
    Dome     | Surrounding                        | Single
    Tunnel   | Surrounding                        | Single
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, FrozenSet, List, Mapping, Tuple

from loguru import logger

from visiondoctor.config.base import SimulationState, coerce_update
from visiondoctor.types import LightConfig, LightFixture, LightingGeometry, LightPosition


_P = LightPosition
_C = LightConfig

# Ordered tuples: the first config listed is the fallback when Single is invalid
FIXTURE_POSITIONS: Dict[LightFixture, Tuple[LightPosition, ...]] = {
    LightFixture.RING: (_P.CAMERA_AXIS, _P.LOW_ANGLE),
    LightFixture.BAR: (_P.BACKLIGHT, _P.TOP, _P.SIDE, _P.LOW_ANGLE),
    LightFixture.SPOT: (_P.TOP, _P.SIDE),
    LightFixture.PANEL: (_P.BACKLIGHT, _P.TOP, _P.SIDE),
    LightFixture.COAXIAL: (_P.CAMERA_AXIS,),
    LightFixture.DOME: (_P.SURROUNDING,),
    LightFixture.TUNNEL: (_P.SURROUNDING,),
}

FIXTURE_CONFIGS: Dict[LightFixture, Tuple[LightConfig, ...]] = {
    LightFixture.RING: (_C.SINGLE,),
    LightFixture.BAR: (_C.SINGLE, _C.DUAL, _C.QUAD),
    LightFixture.SPOT: (_C.NARROW, _C.WIDE),
    LightFixture.PANEL: (_C.SMALL, _C.MEDIUM, _C.LARGE),
    LightFixture.COAXIAL: (_C.SINGLE,),
    LightFixture.DOME: (_C.SINGLE,),
    LightFixture.TUNNEL: (_C.SINGLE,),
}

DEFAULT_POSITIONS: Dict[LightFixture, LightPosition] = {
    LightFixture.RING: _P.CAMERA_AXIS,
    LightFixture.COAXIAL: _P.CAMERA_AXIS,
    LightFixture.PANEL: _P.BACKLIGHT,
    LightFixture.BAR: _P.TOP,
    LightFixture.SPOT: _P.TOP,
    LightFixture.DOME: _P.SURROUNDING,
    LightFixture.TUNNEL: _P.SURROUNDING,
}

GEOMETRY_FIXTURES: Dict[LightingGeometry, Tuple[LightFixture, ...]] = {
    LightingGeometry.SILHOUETTE: (LightFixture.PANEL,),
    LightingGeometry.DARK_FIELD: (LightFixture.BAR, LightFixture.RING),
    LightingGeometry.BRIGHT_FIELD: (LightFixture.COAXIAL, LightFixture.RING, LightFixture.SPOT),
    LightingGeometry.DIFFUSE: (LightFixture.DOME, LightFixture.TUNNEL),
    LightingGeometry.DIRECTIONAL: (LightFixture.BAR, LightFixture.SPOT),
}

GEOMETRY_POSITIONS: Dict[LightingGeometry, LightPosition] = {
    LightingGeometry.SILHOUETTE: _P.BACKLIGHT,
    LightingGeometry.DARK_FIELD: _P.LOW_ANGLE,
    LightingGeometry.BRIGHT_FIELD: _P.CAMERA_AXIS,
    LightingGeometry.DIFFUSE: _P.SURROUNDING,
    LightingGeometry.DIRECTIONAL: _P.SIDE,
}


def valid_positions(fixture: LightFixture) -> FrozenSet[LightPosition]:
    """Mounting positions a fixture supports."""
    return frozenset(FIXTURE_POSITIONS[LightFixture(fixture)])


def valid_configs(fixture: LightFixture) -> FrozenSet[LightConfig]:
    """Configurations a fixture supports."""
    return frozenset(FIXTURE_CONFIGS[LightFixture(fixture)])


def default_position(fixture: LightFixture) -> LightPosition:
    """Canonical mounting position used when a fixture is (re)selected."""
    return DEFAULT_POSITIONS[LightFixture(fixture)]


def default_config(fixture: LightFixture) -> LightConfig:
    """Canonical configuration: Single where allowed, else the first listed."""
    configs = FIXTURE_CONFIGS[LightFixture(fixture)]
    return _C.SINGLE if _C.SINGLE in configs else configs[0]


def is_valid_combination(
    fixture: LightFixture, position: LightPosition, config: LightConfig
) -> bool:
    return position in valid_positions(fixture) and config in valid_configs(fixture)


def reconcile(previous: SimulationState, update: Mapping[str, Any]) -> SimulationState:
    """Merge ``update`` over ``previous`` and repair the lighting combination.

    Fixture swap (``update`` carries a different ``light_type``): config
    always resets to the fixture's canonical config and position snaps to
    the canonical default. A position supplied in the same update is kept
    if the new fixture supports it, so presets that set fixture and
    position together pass unchanged.

    Same fixture: an unsupported position snaps to the canonical default and
    an unsupported config to the canonical config; supported values are kept.

    Applying it to an already valid state with an empty update is a no-op.

    Args:
        previous: State before the edit
        update: Partial update (field name -> value). Enum fields accept
            members, display strings or member names

    Returns:
        New state satisfying the fixture validity sets

    Raises:
        ValidationError: On unknown fields or unknown enum values
    """
    update = coerce_update(update)
    merged = replace(previous, **update) if update else previous
    fixture = LightFixture(merged.light_type)
    positions = valid_positions(fixture)
    configs = valid_configs(fixture)

    repairs: Dict[str, Any] = {}
    swapped = "light_type" in update and update["light_type"] != previous.light_type

    if swapped:
        requested_position = update.get("light_position")
        position = (
            requested_position if requested_position in positions else default_position(fixture)
        )
        config = default_config(fixture)
        if position != merged.light_position:
            repairs["light_position"] = position
        if config != merged.light_config:
            repairs["light_config"] = config
    else:
        if merged.light_position not in positions:
            repairs["light_position"] = default_position(fixture)
        if merged.light_config not in configs:
            repairs["light_config"] = default_config(fixture)

    if not repairs:
        return merged

    logger.debug(
        f"Lighting repaired for {fixture.value}: "
        + ", ".join(f"{k}={v.value}" for k, v in repairs.items())
    )
    return replace(merged, **repairs)


def ensure_valid(state: SimulationState) -> SimulationState:
    """Standing invariant check: repair a state without applying any edit."""
    return reconcile(state, {})


def classify_geometry(state: SimulationState) -> LightingGeometry:
    """Name the illumination technique of the current fixture/position."""
    pos = state.light_position
    if pos is _P.BACKLIGHT:
        return LightingGeometry.SILHOUETTE
    if pos is _P.LOW_ANGLE:
        return LightingGeometry.DARK_FIELD
    if pos is _P.SURROUNDING:
        return LightingGeometry.DIFFUSE
    if pos in (_P.SIDE, _P.TOP):
        return LightingGeometry.DIRECTIONAL
    return LightingGeometry.BRIGHT_FIELD


def fixtures_for_geometry(geometry: LightingGeometry) -> List[LightFixture]:
    """Fixtures offered for an illumination technique, preferred first."""
    return list(GEOMETRY_FIXTURES[LightingGeometry(geometry)])


def geometry_update(geometry: LightingGeometry) -> Dict[str, Any]:
    """Partial update that switches the station to an illumination technique.

    Uses the technique's preferred fixture, its characteristic position and
    the fixture's canonical config.
    """
    geometry = LightingGeometry(geometry)
    fixture = GEOMETRY_FIXTURES[geometry][0]
    return {
        "light_type": fixture,
        "light_position": GEOMETRY_POSITIONS[geometry],
        "light_config": default_config(fixture),
    }
