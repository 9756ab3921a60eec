"""Entry point for running hexobot as a module: python -m hexobot."""

from hexobot.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
