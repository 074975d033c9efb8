# tests/test_benchmark.py
from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from tetris_ai.apps.benchmark.entrypoint import BenchTotals
from tetris_ai.cli.benchmark import main
from tetris_ai.utils.seed import seed32_from


def test_bench_totals_averages() -> None:
    t = BenchTotals()
    t.push_game(score=300, lines=3, pieces=20, topped_out=True, searches=20, search_s=0.4, divergences=0)
    t.push_game(score=100, lines=1, pieces=10, topped_out=False, searches=10, search_s=0.2, divergences=1)
    d = t.to_dict()

    assert d["games"] == 2
    assert d["top_outs"] == 1
    assert d["avg_score_per_game"] == pytest.approx(200.0)
    assert d["avg_pieces_per_game"] == pytest.approx(15.0)
    assert d["best_lines"] == 3
    assert d["search_ms_per_move"] == pytest.approx(20.0)


def test_cli_json_run(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["--games", "2", "--max-pieces", "6", "--seed", "5", "--lookahead", "0", "--json", "--no-progress"])

    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["games"] == 2
    assert out["pieces"] == 12
    assert out["lookahead_depth"] == 0
    assert out["seed"] == 5


def test_cli_rejects_out_of_range_lookahead() -> None:
    with pytest.raises(ValidationError):
        main(["--games", "1", "--lookahead", "7", "--json", "--no-progress"])


def test_seed_streams_are_deterministic_and_distinct() -> None:
    a = seed32_from(base_seed=5, stream_id=0)
    assert a == seed32_from(base_seed=5, stream_id=0)
    assert a != seed32_from(base_seed=5, stream_id=1)
    assert 0 <= a < 2**31


def test_cli_reads_autoplay_section_from_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "bench.yaml"
    p.write_text("autoplay:\n  step_ms: 200\n  reset_on_top_out: true\n  max_pieces: 4\n", encoding="utf-8")

    rc = main(["--config", str(p), "--games", "1", "--seed", "5", "--lookahead", "0", "--json", "--no-progress"])

    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["max_pieces"] == 4
    assert out["pieces"] == 4


def test_cli_rejects_negative_max_pieces() -> None:
    with pytest.raises(ValidationError):
        main(["--games", "1", "--max-pieces", "-1", "--json", "--no-progress"])
