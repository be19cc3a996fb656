"""Vision Doctor: optical metrics and lighting configuration engine for machine-vision stations"""

from __future__ import annotations


__version__ = "0.1.0"

# Import submodules for easier access
from visiondoctor import advisor, config, core, scenarios, utils
from visiondoctor.utils.logging_config import setup_logging


__all__ = [
    "advisor",
    "config",
    "core",
    "scenarios",
    "utils",
    "setup_logging",
    "__version__",
]
