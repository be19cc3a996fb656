"""
Module: visiondoctor.advisor.doctor
Purpose: AI critique of a station configuration ("Vision Doctor")
Dependencies: ollama, json, re, loguru

Sends a snapshot of the configuration and its metrics to a language model
and returns structured advice. The advisor is purely advisory: it never
raises, and every failure becomes placeholder advice with score 0.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, TypedDict

import ollama
from loguru import logger

from visiondoctor.config.base import SimulationState
from visiondoctor.config.settings import AdvisorSettings
from visiondoctor.core.optics import OpticalMetrics


@dataclass(frozen=True)
class DoctorAdvice:
    """Structured critique returned by the advisor.

    Attributes:
        summary: One-sentence verdict
        details: Technical advice bullets (3-4 expected)
        score: Suitability score 0-100
    """

    summary: str
    details: Tuple[str, ...] = ()
    score: int = 0


class AdvisorSnapshot(TypedDict):
    """Fields sent to the advisory service."""

    object_type: str
    inspection_goal: str
    object_orientation: str
    view_focus: str
    sensor_format: str
    focal_length_mm: float
    aperture: float
    working_distance_mm: float
    light_color: str
    light_type: str
    fov_width_mm: float
    fov_height_mm: float
    magnification: float
    dof_mm: float


DEFAULT_ADVICE_TEXT = "Run 'vision-doctor analyze' to get AI feedback on your optical configuration."

NOT_CONFIGURED_ADVICE = DoctorAdvice(
    summary="API Key Missing",
    details=(
        "Please configure the VISION_DOCTOR_API_KEY environment variable "
        "to use the Vision Doctor AI.",
    ),
    score=0,
)

ANALYSIS_FAILED_ADVICE = DoctorAdvice(
    summary="Analysis Failed",
    details=(
        "Could not connect to the Vision Doctor AI.",
        "Check your network connection, host or API key.",
    ),
    score=0,
)

ADVICE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {
            "type": "string",
            "description": "A one-sentence summary of the setup quality.",
        },
        "details": {
            "type": "array",
            "items": {"type": "string"},
            "description": "3-4 bullet points of technical advice.",
        },
        "score": {
            "type": "integer",
            "description": "Suitability score from 0 to 100.",
        },
    },
    "required": ["summary", "details", "score"],
}

PROMPT_TEMPLATE = """You are an expert Machine Vision Engineer ("Vision Doctor").
Analyze the following optical setup for industrial inspection.

Target Application:
- Object: {object_type}
- Specific Goal: {inspection_goal}
- Object Orientation: {object_orientation}
- Camera View: Focusing on {view_focus}

Current Setup:
- Sensor: {sensor_format}
- Focal Length: {focal_length_mm}mm
- Aperture: f/{aperture}
- Working Distance: {working_distance_mm}mm
- Lighting: {light_color} {light_type}

Calculated Metrics:
- FOV: {fov_width_mm:.1f} x {fov_height_mm:.1f} mm
- Magnification: {magnification:.3f}x
- Depth of Field: {dof_mm:.2f} mm

Task:
Provide a critique of this setup specifically for the goal: "{inspection_goal}".
1. Is the resolution/magnification sufficient for this specific goal?
2. Is the lighting type and color appropriate for the material and defect type?
   (e.g. Low angle for scratches, Backlight for dimensions/fill level).
3. Is the view angle correct? (e.g. Top view for caps, Side view for labels).
4. Give a suitability score (0-100).

Return ONLY a JSON object: {{"summary": str, "details": [str, ...], "score": int}}
"""


def build_snapshot(state: SimulationState, metrics: OpticalMetrics) -> AdvisorSnapshot:
    """Collect the configuration fields and metrics the advisor needs."""
    return AdvisorSnapshot(
        object_type=state.object_type.value,
        inspection_goal=state.inspection_goal,
        object_orientation=state.object_orientation.value,
        view_focus=state.view_focus.value,
        sensor_format=state.sensor_format.value,
        focal_length_mm=state.focal_length_mm,
        aperture=state.aperture,
        working_distance_mm=state.working_distance_mm,
        light_color=state.light_color.value,
        light_type=state.light_type.value,
        fov_width_mm=metrics.fov_width_mm,
        fov_height_mm=metrics.fov_height_mm,
        magnification=metrics.magnification,
        dof_mm=metrics.dof_mm,
    )


def build_prompt(snapshot: AdvisorSnapshot) -> str:
    return PROMPT_TEMPLATE.format(**snapshot)


def _extract_json(content: str) -> Dict[str, Any]:
    """Extract a JSON object from model output (handles markdown code blocks).

    Raises:
        ValueError: If no JSON object can be extracted
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    patterns = [
        r"```json\s*(.*?)\s*```",
        r"```\s*(.*?)\s*```",
        r"\{.*\}",
    ]
    for pattern in patterns:
        match = re.search(pattern, content, re.DOTALL)
        if match:
            json_str = match.group(1) if "```" in pattern else match.group(0)
            try:
                return json.loads(json_str)
            except json.JSONDecodeError:
                continue

    raise ValueError(f"Could not extract JSON from response: {content[:200]}")


def parse_advice(content: str) -> DoctorAdvice:
    """Validate a model reply into DoctorAdvice.

    Raises:
        ValueError: If the reply is not a well-formed advice object
    """
    data = _extract_json(content)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    summary = data.get("summary")
    details = data.get("details")
    score = data.get("score")

    if not isinstance(summary, str) or not summary.strip():
        raise ValueError("Advice 'summary' must be a non-empty string")
    if (
        not isinstance(details, list)
        or not details
        or not all(isinstance(item, str) for item in details)
    ):
        raise ValueError("Advice 'details' must be a non-empty list of strings")
    if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= 100:
        raise ValueError(f"Advice 'score' must be an integer in [0, 100], got {score!r}")

    return DoctorAdvice(summary=summary.strip(), details=tuple(details), score=score)


class VisionDoctor:
    """Advisory client backed by an ollama-compatible chat endpoint.

    Parameters
    ----------
    settings : AdvisorSettings
        Credential, host, model and temperature
    client : ollama.Client, optional
        Pre-built client. Built lazily from ``settings`` when omitted

    Examples
    --------
    >>> doctor = VisionDoctor(load_settings())
    >>> advice = doctor.analyze(store.state, store.metrics)
    >>> advice.score
    72
    """

    def __init__(
        self, settings: AdvisorSettings, client: Optional[ollama.Client] = None
    ) -> None:
        self.settings = settings
        self._client = client

    @property
    def configured(self) -> bool:
        return self.settings.configured

    def _get_client(self) -> ollama.Client:
        if self._client is None:
            self._client = ollama.Client(
                host=self.settings.host,
                headers={"Authorization": f"Bearer {self.settings.api_key}"},
            )
        return self._client

    def analyze(self, state: SimulationState, metrics: OpticalMetrics) -> DoctorAdvice:
        """Critique the configuration for its inspection goal.

        Never raises: a missing key yields ``NOT_CONFIGURED_ADVICE`` and any
        transport or parsing failure yields ``ANALYSIS_FAILED_ADVICE``.
        """
        if not self.configured:
            logger.info("Vision Doctor not configured, skipping analysis")
            return NOT_CONFIGURED_ADVICE

        snapshot = build_snapshot(state, metrics)
        logger.info(
            f"Requesting analysis for {snapshot['object_type']} / "
            f"{snapshot['inspection_goal']} with {self.settings.model}"
        )

        try:
            response = self._get_client().chat(
                model=self.settings.model,
                messages=[{"role": "user", "content": build_prompt(snapshot)}],
                format=ADVICE_SCHEMA,
                options={"temperature": self.settings.temperature},
            )
            content = response["message"]["content"]
            if not content:
                raise ValueError("Empty response from model")
            advice = parse_advice(content)
        except Exception as e:
            logger.warning(f"Vision Doctor analysis failed: {e}")
            return ANALYSIS_FAILED_ADVICE

        logger.info(f"Vision Doctor score: {advice.score}")
        return advice
