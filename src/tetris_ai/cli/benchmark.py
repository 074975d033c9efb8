# src/tetris_ai/cli/benchmark.py
from __future__ import annotations

from typing import Optional, Sequence

from tetris_ai.apps.benchmark.entrypoint import parse_args, run_benchmark


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_benchmark(parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
