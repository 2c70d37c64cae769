#!/usr/bin/env python3
"""
magicscreen - Sketching Toy Simulator

Two dials (or the arrow keys) steer a stylus across a grey screen;
the shake button fades the drawing away.
"""

import argparse
import cProfile
import sys
import time

t_pyqt = time.perf_counter()
from PyQt6.QtWidgets import QApplication

from logging_utils import log_event, set_log_level


def run_app(app_argv: list[str], log_level: str | None = None) -> int:
    app = QApplication(app_argv)
    app.setStyle("Fusion")
    log_event("INFO", "Startup", "GUI framework loaded",
              ms=round((time.perf_counter() - t_pyqt) * 1000))

    from config_persistence import load_config
    from main import MagicScreenWindow

    config = load_config()
    if log_level:
        config.log_level = log_level
    set_log_level(config.log_level)

    window = MagicScreenWindow(config)
    window.show()
    log_event("INFO", "Startup", "Window shown")

    return app.exec()


def main() -> None:
    parser = argparse.ArgumentParser(description="Run magicscreen")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level for this run",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Enable cProfile and save stats to --profile-out",
    )
    parser.add_argument(
        "--profile-out",
        default="profile.prof",
        help="Path to save cProfile stats (default: profile.prof)",
    )
    args = parser.parse_args()

    # Keep Qt argument list clean; avoid passing our flags downstream
    app_argv = [sys.argv[0]]

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        exit_code = run_app(app_argv, args.log_level)
        profiler.disable()
        profiler.dump_stats(args.profile_out)
    else:
        exit_code = run_app(app_argv, args.log_level)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
