"""
PolySolver - Entry point.

Launch the terminal polynomial calculator.
"""

import logging
import sys

from cli import PolySolverApp
from polysolver.config import load_settings


def main() -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, stream=sys.stderr)
    app = PolySolverApp(settings=settings)
    app.mainloop()


if __name__ == "__main__":
    main()
