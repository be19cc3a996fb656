"""Recommended station presets.

Using presets::

    from visiondoctor.scenarios import resolve

    preset = resolve("PCB Board", "Check Solder Bridges (Shorts)")
    store.apply(preset)
"""

from __future__ import annotations

from visiondoctor.scenarios.presets import (
    RECOMMENDED_PRESETS,
    get_preset_description,
    list_presets,
    print_all_presets,
    reconcile_goal,
    resolve,
)


__all__ = [
    "RECOMMENDED_PRESETS",
    "get_preset_description",
    "list_presets",
    "print_all_presets",
    "reconcile_goal",
    "resolve",
]
