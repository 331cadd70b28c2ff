"""Run the validator with `python -m lessonlint`."""

from __future__ import annotations

from .main import run


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main()
