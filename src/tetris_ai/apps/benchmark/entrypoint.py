# src/tetris_ai/apps/benchmark/entrypoint.py
from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from tqdm.rich import tqdm

from tetris_ai.agents.config import AutoPlayConfig, SearchConfig
from tetris_ai.agents.executor import AutoPlayer
from tetris_ai.agents.search import MoveSearch
from tetris_ai.config.io import load_app_config
from tetris_ai.config.root import AppConfig
from tetris_ai.game.config import GameConfig
from tetris_ai.game.core.game import TetrisGame
from tetris_ai.utils.logging import LOG_LEVELS, setup_logger
from tetris_ai.utils.seed import seed32_from


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Benchmark the heuristic move search by playing headless Tetris games."
    )
    ap.add_argument("--config", type=Path, default=None, help="app config YAML (defaults apply when omitted)")

    # --- benchmark controls ---
    ap.add_argument("--games", type=int, default=5, help="number of games to play")
    ap.add_argument(
        "--max-pieces", type=int, default=None, help="override cfg.autoplay.max_pieces (0 = play until top-out)"
    )
    ap.add_argument("--seed", type=int, default=None, help="base seed (overrides cfg.game.seed)")

    # --- search / game overrides ---
    ap.add_argument("--lookahead", type=int, default=None, help="override cfg.search.lookahead_depth")
    ap.add_argument("--discount", type=float, default=None, help="override cfg.search.discount")
    ap.add_argument("--piece-rule", type=str, default=None, choices=["uniform", "bag7"])

    # --- output ---
    ap.add_argument("--json", action="store_true", help="print final stats as JSON only")
    ap.add_argument("--no-progress", action="store_true", help="disable progress bar")
    ap.add_argument("--log-level", type=str, default=None, choices=list(LOG_LEVELS))

    return ap.parse_args(None if argv is None else list(argv))


@dataclass
class BenchTotals:
    games: int = 0
    pieces: int = 0
    lines: int = 0
    score: int = 0
    top_outs: int = 0
    divergences: int = 0

    searches: int = 0
    search_s: float = 0.0

    best_score: int = 0
    best_lines: int = 0

    def push_game(
            self,
            *,
            score: int,
            lines: int,
            pieces: int,
            topped_out: bool,
            searches: int,
            search_s: float,
            divergences: int,
    ) -> None:
        self.games += 1
        self.score += int(score)
        self.lines += int(lines)
        self.pieces += int(pieces)
        self.searches += int(searches)
        self.search_s += float(search_s)
        self.divergences += int(divergences)
        if bool(topped_out):
            self.top_outs += 1
        self.best_score = max(self.best_score, int(score))
        self.best_lines = max(self.best_lines, int(lines))

    def to_dict(self) -> dict[str, Any]:
        denom_games = float(max(1, self.games))
        denom_searches = float(max(1, self.searches))
        return {
            "games": int(self.games),
            "pieces": int(self.pieces),
            "lines": int(self.lines),
            "score": int(self.score),
            "top_outs": int(self.top_outs),
            "divergences": int(self.divergences),
            "avg_score_per_game": float(self.score / denom_games),
            "avg_lines_per_game": float(self.lines / denom_games),
            "avg_pieces_per_game": float(self.pieces / denom_games),
            "best_score": int(self.best_score),
            "best_lines": int(self.best_lines),
            "search_s_total": float(self.search_s),
            "search_ms_per_move": float(1000.0 * self.search_s / denom_searches),
        }


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    cfg = load_app_config(args.config)

    search_data = cfg.search.model_dump()
    if args.lookahead is not None:
        search_data["lookahead_depth"] = int(args.lookahead)
    if args.discount is not None:
        search_data["discount"] = float(args.discount)

    game_data = cfg.game.model_dump()
    if args.seed is not None:
        game_data["seed"] = int(args.seed)
    if args.piece_rule is not None:
        game_data["piece_rule"] = str(args.piece_rule).strip().lower()

    # headless runs are uncapped and stop at the first top-out
    autoplay_data = cfg.autoplay.model_dump()
    autoplay_data["step_ms"] = 0
    autoplay_data["reset_on_top_out"] = False
    if args.max_pieces is not None:
        autoplay_data["max_pieces"] = int(args.max_pieces)

    data = cfg.model_dump()
    data["search"] = SearchConfig.model_validate(search_data).model_dump()
    data["game"] = GameConfig.model_validate(game_data).model_dump()
    data["autoplay"] = AutoPlayConfig.model_validate(autoplay_data).model_dump()
    if args.log_level is not None:
        data["log_level"] = str(args.log_level)
    return AppConfig.model_validate(data)


def _render_report_table(*, meta: dict[str, Any], stats: dict[str, Any]) -> Table:
    table = Table(title="[bench] RESULT", box=box.SIMPLE_HEAVY)
    table.add_column("Metric", style="bold")
    table.add_column("Value")

    def add_row(label: str, value: Any) -> None:
        table.add_row(str(label), str(value))

    add_row("seed", meta.get("seed", "-"))
    add_row("piece_rule", meta.get("piece_rule", "-"))
    add_row("lookahead", meta.get("lookahead_depth", "-"))
    add_row("discount", meta.get("discount", "-"))
    add_row("max_pieces", meta.get("max_pieces", "-"))

    table.add_section()
    add_row("games", int(stats["games"]))
    add_row("pieces", int(stats["pieces"]))
    add_row("lines", int(stats["lines"]))
    add_row("score", int(stats["score"]))
    add_row("top-outs", int(stats["top_outs"]))

    table.add_section()
    add_row("score/game", f"{stats['avg_score_per_game']:.1f}")
    add_row("lines/game", f"{stats['avg_lines_per_game']:.1f}")
    add_row("pieces/game", f"{stats['avg_pieces_per_game']:.1f}")
    add_row("best score", int(stats["best_score"]))
    add_row("best lines", int(stats["best_lines"]))

    table.add_section()
    add_row("search total", f"{stats['search_s_total']:.2f}s")
    add_row("search/move", f"{stats['search_ms_per_move']:.2f}ms")
    add_row("divergences", int(stats["divergences"]))

    return table


def run_benchmark(args: argparse.Namespace) -> int:
    games = int(args.games)
    if games <= 0:
        raise ValueError(f"--games must be > 0, got {games}")

    cfg = _resolve_config(args)
    max_pieces = int(cfg.autoplay.max_pieces)

    # JSON mode: only warnings and errors reach the log
    level = "warning" if bool(args.json) else cfg.log_level
    logger = setup_logger(name="tetris_ai", use_rich=bool(cfg.use_rich), level=level)

    meta = {
        "seed": int(cfg.game.seed),
        "piece_rule": str(cfg.game.piece_rule),
        "preview_size": int(cfg.game.preview_size),
        "lookahead_depth": int(cfg.search.lookahead_depth),
        "discount": float(cfg.search.discount),
        "max_pieces": int(max_pieces),
    }
    logger.info(
        "[bench] games=%d max_pieces=%d seed=%d piece_rule=%s lookahead=%d discount=%.3f",
        games,
        max_pieces,
        meta["seed"],
        meta["piece_rule"],
        meta["lookahead_depth"],
        meta["discount"],
    )

    search = MoveSearch(cfg.search)
    totals = BenchTotals()

    use_bar = (not bool(args.no_progress)) and (not bool(args.json))
    pbar = tqdm(total=games, unit="game", dynamic_ncols=True) if use_bar else None

    try:
        for i in range(games):
            game = TetrisGame(cfg.game)
            game.reset(seed=seed32_from(base_seed=int(cfg.game.seed), stream_id=i))

            player = AutoPlayer(game, search, cfg.autoplay)
            stats = player.run()

            totals.push_game(
                score=game.score,
                lines=game.lines,
                pieces=stats.pieces,
                topped_out=stats.top_outs > 0,
                searches=stats.searches,
                search_s=stats.search_s,
                divergences=stats.divergences,
            )
            logger.debug(
                "[bench] game=%d score=%d lines=%d pieces=%d top_out=%s",
                i,
                game.score,
                game.lines,
                stats.pieces,
                stats.top_outs > 0,
            )

            if pbar is not None:
                pbar.update(1)
                d = totals.to_dict()
                pbar.set_postfix(
                    lines=f"{d['avg_lines_per_game']:.1f}",
                    score=f"{d['avg_score_per_game']:.0f}",
                    ms_move=f"{d['search_ms_per_move']:.1f}",
                )
    finally:
        if pbar is not None:
            pbar.close()

    stats_out = totals.to_dict()
    out = {**meta, **stats_out}

    if bool(args.json):
        print(json.dumps(out, indent=2, sort_keys=True))
    else:
        Console().print(_render_report_table(meta=meta, stats=stats_out))
        # single line for copy/paste and quick diffing
        logger.info("[bench] json: %s", json.dumps(out, sort_keys=True))

    return 0


__all__ = ["BenchTotals", "parse_args", "run_benchmark"]
