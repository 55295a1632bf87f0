"""Allow running via ``python -m bff``."""

from bff.cli import run

if __name__ == "__main__":  # pragma: no cover
    run()
