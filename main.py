"""
Vision Doctor - optical metrics and lighting advisor for machine-vision stations.

Usage
-----
Metrics for a station (unset flags keep the defaults):
    python main.py metrics --focal 25 --wd 400 --light Bar --position LowAngle

Recommended presets:
    python main.py presets --object "PCB Board"
    python main.py preset "PCB Board" "Check Solder Bridges (Shorts)"

AI critique (needs VISION_DOCTOR_API_KEY):
    python main.py analyze --object "Aluminum Can"

For full usage options:
    python main.py --help
"""

import sys

from visiondoctor.cli.entry_points import main


if __name__ == "__main__":
    sys.exit(main())
