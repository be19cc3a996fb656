"""
Entry point for the Vision Doctor CLI.

The entry point:
1. Parses arguments and loads settings
2. Configures logging
3. Builds the station through the configuration store
4. Runs the selected subcommand and reports results with rich
"""

from __future__ import annotations

import argparse
from typing import Any, Callable, Dict, List, Optional

import yaml
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from visiondoctor.advisor.doctor import DEFAULT_ADVICE_TEXT, VisionDoctor
from visiondoctor.catalog import goals_for
from visiondoctor.cli.parser import create_main_parser, station_update
from visiondoctor.config.base import coerce_update
from visiondoctor.config.settings import AdvisorSettings, load_settings
from visiondoctor.config.validation import ValidationError
from visiondoctor.core.lighting import (
    FIXTURE_CONFIGS,
    FIXTURE_POSITIONS,
    classify_geometry,
    default_config,
    default_position,
)
from visiondoctor.core.store import ConfigurationStore
from visiondoctor.scenarios.presets import print_all_presets
from visiondoctor.types import LightFixture
from visiondoctor.utils.logging_config import setup_logging


STATUS_STYLES = {
    "good": "green",
    "none": "green",
    "acceptable": "yellow",
    "warning": "yellow",
}


def print_station(console: Console, store: ConfigurationStore) -> None:
    """Print configuration summary, metrics, render factors and checks."""
    state, metrics = store.state, store.metrics
    factors = store.render_factors

    console.print(
        f"[bold]{escape(state.object_type.value)}[/bold] - {escape(state.inspection_goal)}"
    )
    console.print(
        f"Lens: {state.focal_length_mm:g}mm f/{state.aperture:g} @ "
        f"{state.working_distance_mm:g}mm on {escape(state.sensor_format.value)}"
    )
    console.print(
        f"Light: {state.light_color.value} {state.light_type.value} @ "
        f"{state.light_position.value} ({state.light_config.value}), "
        f"{classify_geometry(state).value}"
    )

    table = Table(title="Optical Metrics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("FOV", f"{metrics.fov_width_mm:.1f} x {metrics.fov_height_mm:.1f} mm")
    table.add_row("Magnification", f"{metrics.magnification:.4f}x")
    table.add_row("Depth of field", f"{metrics.dof_mm:.2f} mm")
    table.add_row("Pixel density", f"{metrics.pixel_density_px_per_mm:.2f} px/mm")
    table.add_row("Motion blur", f"{metrics.motion_blur_px:.2f} px")
    table.add_row("Exposure value", f"{metrics.exposure_value:.2f}")
    table.add_row("Exposure factor", f"{factors.exposure_factor:.2f}")
    table.add_row("Noise opacity", f"{factors.noise_opacity:.2f}")
    table.add_row("Blur radius", f"{factors.blur_radius_px:.2f} px")
    console.print(table)

    check = store.scenario_check()
    checks = Table(title="Scenario Check", show_header=True)
    checks.add_column("Aspect", style="cyan")
    checks.add_column("Verdict")
    for aspect in ("roi", "resolution", "exposure", "focus", "stability", "glare", "technique"):
        verdict = getattr(check, aspect)
        if aspect == "technique" and check.technique_reason:
            verdict = f"{verdict} ({check.technique_reason})"
        style = STATUS_STYLES.get(getattr(check, aspect), "red")
        checks.add_row(aspect, f"[{style}]{verdict}[/{style}]")
    console.print(checks)

    if store.advice is None:
        console.print(f"[dim]{escape(DEFAULT_ADVICE_TEXT)}[/dim]")


def apply_station(store: ConfigurationStore, update: Dict[str, Any]) -> None:
    """Apply station flags, selecting the goal after any object change."""
    update = dict(update)
    goal = update.pop("inspection_goal", None)
    store.apply(update)
    if goal is not None:
        store.apply({"inspection_goal": goal})


def metrics_command(args: argparse.Namespace, console: Console) -> int:
    store = ConfigurationStore()
    apply_station(store, station_update(args))
    print_station(console, store)
    return 0


def presets_command(args: argparse.Namespace, console: Console) -> int:
    object_type = None
    if args.object_type is not None:
        object_type = coerce_update({"object_type": args.object_type})["object_type"]
    print_all_presets(console, object_type)
    return 0


def preset_command(args: argparse.Namespace, console: Console) -> int:
    object_type = coerce_update({"object_type": args.object_type})["object_type"]
    if args.goal not in goals_for(object_type):
        raise ValidationError(
            f"Goal '{args.goal}' is not registered for {object_type.value}. "
            f"Available: {list(goals_for(object_type))}"
        )

    store = ConfigurationStore()
    store.apply({"object_type": object_type})
    store.apply({"inspection_goal": args.goal})
    if not store.apply_preset():
        console.print("No preset available for this goal; configuration unchanged")
        return 0
    print_station(console, store)
    return 0


def fixtures_command(args: argparse.Namespace, console: Console) -> int:
    table = Table(title="Fixture Compatibility", show_header=True)
    table.add_column("Fixture", style="cyan")
    table.add_column("Positions")
    table.add_column("Configs")
    for fixture in LightFixture:
        positions = ", ".join(
            f"{p.value}*" if p is default_position(fixture) else p.value
            for p in FIXTURE_POSITIONS[fixture]
        )
        configs = ", ".join(
            f"{c.value}*" if c is default_config(fixture) else c.value
            for c in FIXTURE_CONFIGS[fixture]
        )
        table.add_row(fixture.value, positions, configs)
    console.print(table)
    console.print("* applied when the fixture is selected")
    return 0


def analyze_command(
    args: argparse.Namespace, console: Console, settings: AdvisorSettings
) -> int:
    with ConfigurationStore() as store:
        apply_station(store, station_update(args))
        doctor = VisionDoctor(settings)
        advice = store.request_advice(doctor).result()

    style = "green" if advice.score >= 70 else "yellow" if advice.score >= 40 else "red"
    body = "\n".join(f"- {escape(item)}" for item in advice.details)
    console.print(
        Panel(
            body,
            title=f"Vision Doctor: {escape(advice.summary)}",
            subtitle=f"Score {advice.score}/100",
            border_style=style,
        )
    )
    console.print(f"Score: {advice.score}/100")
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace, Console], int]] = {
    "metrics": metrics_command,
    "presets": presets_command,
    "preset": preset_command,
    "fixtures": fixtures_command,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Run the Vision Doctor CLI.

    Parameters
    ----------
    argv : list of str, optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code (0 for success, 1 for error)
    """
    parser = create_main_parser()
    args = parser.parse_args(argv)
    console = Console()

    try:
        settings = load_settings(args.settings)
        setup_logging(level=args.log_level or settings.log_level, log_file=args.log_file)
        logger.debug(f"Running '{args.command}'")

        if args.command == "analyze":
            return analyze_command(args, console, settings)
        return COMMANDS[args.command](args, console)
    except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
        # ValidationError and OpticsDomainError are ValueErrors
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1
