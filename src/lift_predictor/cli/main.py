"""
CLI entry point using Typer.

Provides commands for logging sets and forecasting strength:
- log / history / delete: manage the workout log
- exercises: list the exercise catalog
- one-rm: estimate a 1RM from a single set, with training zones
- analyze: progression analysis for a weighted exercise
- predict: future 1RM and next-milestone forecast
- records: personal records
"""

from .app import app
from .commands import analysis, logs  # noqa: F401  (register commands)


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
