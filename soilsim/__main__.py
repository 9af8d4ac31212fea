"""Entry point for ``python -m soilsim``.

Loads the default YAML config, builds an initialized simulation engine,
and opens a Pygame window to watch and steer soil moisture.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from soilsim.simulation.config import SimulationConfig
from soilsim.simulation.engine import SimulationEngine
from soilsim.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="soilsim",
        description="soilsim - interactive soil moisture simulation",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=40,
        help="Pixel size per grid cell (default: 40)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=1.0,
        help="Simulation ticks per second while running (default: 1)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def main() -> None:
    """Parse CLI args, create engine, launch renderer."""
    args = build_parser().parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    if args.config.exists():
        config = SimulationConfig.from_yaml(args.config)
    else:
        logging.getLogger(__name__).warning(
            "Config %s not found, using defaults",
            args.config,
        )
        config = SimulationConfig()
    engine = SimulationEngine.from_config(config)

    renderer = PygameRenderer(
        engine=engine,
        cell_size=args.cell_size,
        ticks_per_second=args.speed,
    )
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
