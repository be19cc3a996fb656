"""Single source of truth for the station configuration.

The store owns one ``SimulationState``, the metrics derived from it and the
latest advisor response. Every edit, manual or preset, goes through
``apply`` so goal and lighting repairs happen in one place.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Tuple

from loguru import logger

from visiondoctor.config.base import SimulationState, coerce_update
from visiondoctor.core.lighting import ensure_valid, geometry_update, reconcile
from visiondoctor.core.optics import (
    OpticalMetrics,
    RenderFactors,
    compute_metrics,
    compute_render_factors,
)
from visiondoctor.core.scenario_check import ScenarioCheck, check_scenario
from visiondoctor.scenarios.presets import reconcile_goal, resolve
from visiondoctor.types import LightingGeometry


if TYPE_CHECKING:
    from visiondoctor.advisor.doctor import DoctorAdvice, VisionDoctor


Renderer = Callable[[SimulationState, OpticalMetrics], None]


class ConfigurationStore:
    """Holds the current configuration and applies partial updates.

    Parameters
    ----------
    initial : SimulationState, optional
        Starting configuration, defaults to ``SimulationState.default()``
    renderer : callable, optional
        Called with ``(state, metrics)`` after every successful update

    Notes
    -----
    Not thread-safe for concurrent ``apply`` calls. Advisor requests run on
    a single background worker and only swap the ``advice`` reference.

    Examples
    --------
    >>> store = ConfigurationStore()
    >>> state, metrics = store.apply({"focal_length_mm": 25})
    >>> round(metrics.fov_width_mm, 1)
    105.6
    """

    def __init__(
        self,
        initial: Optional[SimulationState] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        state = ensure_valid(initial or SimulationState.default())
        state.validate()
        self._state = state
        self._metrics = compute_metrics(state)
        self._advice: Optional[DoctorAdvice] = None
        self._renderer = renderer
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def metrics(self) -> OpticalMetrics:
        return self._metrics

    @property
    def render_factors(self) -> RenderFactors:
        return compute_render_factors(self._state, self._metrics)

    @property
    def advice(self) -> Optional[DoctorAdvice]:
        """Latest advisor response, or None before the first completes."""
        return self._advice

    def apply(self, partial: Mapping[str, Any]) -> Tuple[SimulationState, OpticalMetrics]:
        """Merge a partial update and recompute metrics.

        Fields are merged last-write-wins. An object change resets the goal,
        lighting combinations are repaired, then ranges are validated. The
        stored state is only replaced once the new state is fully valid.

        Args:
            partial: Field name -> new value. Enum fields accept members,
                display strings or member names

        Returns:
            (state, metrics) after the update

        Raises:
            ValidationError: On unknown fields or out-of-domain values
        """
        previous = self._state
        update = coerce_update(partial)

        merged = replace(previous, **update) if update else previous
        update.update(reconcile_goal(previous, merged, update))

        state = reconcile(previous, update)
        state.validate()
        metrics = compute_metrics(state)

        self._state = state
        self._metrics = metrics
        logger.debug(f"Applied update: {sorted(partial)}")

        if self._renderer is not None:
            self._renderer(state, metrics)
        return state, metrics

    def apply_preset(self) -> bool:
        """Apply the preset for the current (object, goal) pair.

        Returns:
            True if a preset existed and was applied, False otherwise
        """
        preset = resolve(self._state.object_type, self._state.inspection_goal)
        if preset is None:
            logger.info(
                f"No preset for {self._state.object_type.value} / "
                f"{self._state.inspection_goal}, configuration unchanged"
            )
            return False
        self.apply(preset)
        logger.info(f"Applied preset for {self._state.inspection_goal}")
        return True

    def select_geometry(
        self, geometry: LightingGeometry
    ) -> Tuple[SimulationState, OpticalMetrics]:
        """Switch the lighting to an illumination technique."""
        return self.apply(geometry_update(geometry))

    def scenario_check(self) -> ScenarioCheck:
        return check_scenario(self._state, self._metrics)

    def request_advice(self, doctor: VisionDoctor) -> Future:
        """Ask the advisor about the current configuration in the background.

        The state and metrics are snapshotted at call time; editing continues
        while the request runs. Responses are stored as they complete, so the
        most recently completed response wins. Earlier requests are never
        cancelled.

        Returns:
            Future resolving to the DoctorAdvice
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="vision-doctor"
            )
        state, metrics = self._state, self._metrics
        future = self._executor.submit(doctor.analyze, state, metrics)
        future.add_done_callback(self._store_advice)
        return future

    def _store_advice(self, future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error(f"Advisor request failed: {error}")
            return
        self._advice = future.result()

    def close(self) -> None:
        """Wait for pending advisor requests and release the worker."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> ConfigurationStore:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
