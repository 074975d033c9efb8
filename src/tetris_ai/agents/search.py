# src/tetris_ai/agents/search.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence, Tuple

import numpy as np

from tetris_ai.agents.config import MAX_LOOKAHEAD_DEPTH, SearchConfig
from tetris_ai.agents.evaluator import score_metrics
from tetris_ai.errors import SearchDepthError
from tetris_ai.game.core.board import as_grid
from tetris_ai.game.core.pieces import PieceKind, PieceLike, piece_kind
from tetris_ai.game.core.placements import Placement, enumerate_placements
from tetris_ai.game.core.simulate import simulate_placement
from tetris_ai.game.core.types import GameSnapshot

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class BestMove:
    """
    Winning placement of one search.

    use_hold:
      True when the placement is for the held piece (swap first).
    score:
      immediate Φ plus the discounted lookahead value.
    cleared_lines:
      lines removed by this placement alone.
    """
    placement: Placement
    use_hold: bool
    score: float
    cleared_lines: int

    @property
    def kind(self) -> PieceKind:
        return self.placement.kind

    @property
    def rot(self) -> int:
        return self.placement.rot

    @property
    def x(self) -> int:
        return self.placement.x

    @property
    def y(self) -> int:
        return self.placement.y


class MoveSearch:
    """
    Heuristic placement search Φ with optional recursive lookahead.

    Candidates:
      - the current piece, then the held piece if one is given
      - for each: every placement from enumerate_placements(unique=True),
        i.e. rotation ascending, x ascending

    Score of a placement:
      Φ(s') + discount * best(s', queue[0], held', queue[1:], depth - 1)
    where held' is the held piece when the current one is placed, and the
    current piece when the held one is swapped in. depth 0 (or an empty
    queue) uses Φ(s') only; a future level with no legal placement adds
    nothing.

    Ties keep the first candidate in enumeration order (strict '>').

    Stateless: every call only reads its inputs and allocates new boards.
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        self.config = config or SearchConfig()

    def find_best_move(
            self,
            board: Any,
            current: PieceLike,
            held: Optional[PieceLike] = None,
            queue: Sequence[PieceLike] = (),
            *,
            lookahead_depth: Optional[int] = None,
    ) -> Optional[BestMove]:
        """
        Return the best move, or None when neither the current nor the held
        piece has a legal placement (top-out).

        Raises InvalidPieceError / BoardShapeError for malformed inputs and
        SearchDepthError for a depth outside [0, MAX_LOOKAHEAD_DEPTH].
        """
        grid = as_grid(board)
        cur = piece_kind(current)
        hold = None if held is None else piece_kind(held)
        upcoming = tuple(piece_kind(k) for k in queue)

        depth = self.config.lookahead_depth if lookahead_depth is None else int(lookahead_depth)
        if depth < 0 or depth > MAX_LOOKAHEAD_DEPTH:
            raise SearchDepthError(f"lookahead_depth must be in [0, {MAX_LOOKAHEAD_DEPTH}], got {depth}")

        best: Optional[BestMove] = None
        n_candidates = 0
        for score, placement, use_hold, cleared in self._scored(grid, cur, hold, upcoming, depth):
            n_candidates += 1
            if best is None or score > best.score:
                best = BestMove(placement=placement, use_hold=use_hold, score=float(score), cleared_lines=cleared)

        if best is None:
            LOG.debug("search: no legal placement (current=%s held=%s)", cur.letter, getattr(hold, "letter", None))
        else:
            LOG.debug(
                "search: current=%s held=%s queue=%s depth=%d candidates=%d -> %s rot=%d x=%d y=%d hold=%s score=%.4f",
                cur.letter,
                getattr(hold, "letter", None),
                "".join(k.letter for k in upcoming),
                depth,
                n_candidates,
                best.kind.letter,
                best.rot,
                best.x,
                best.y,
                best.use_hold,
                best.score,
            )
        return best

    def find_best_move_for(self, snapshot: GameSnapshot) -> Optional[BestMove]:
        return self.find_best_move(
            snapshot.grid,
            snapshot.current,
            snapshot.usable_held,
            snapshot.queue,
        )

    # ---- internals -----------------------------------------------------------------

    def _scored(
            self,
            grid: np.ndarray,
            current: PieceKind,
            held: Optional[PieceKind],
            queue: Tuple[PieceKind, ...],
            depth: int,
    ) -> Iterator[Tuple[float, Placement, bool, int]]:
        """Yield (score, placement, use_hold, cleared_lines) in enumeration order."""
        candidates = [(current, False, held)]
        if held is not None:
            candidates.append((held, True, current))

        weights = self.config.weights
        discount = float(self.config.discount)

        for kind, use_hold, next_held in candidates:
            for placement in enumerate_placements(grid, kind, unique=True):
                sim = simulate_placement(grid, placement)
                score = score_metrics(sim.metrics_after, cleared_lines=sim.cleared_lines, weights=weights)

                if depth > 0 and queue:
                    future = self._best_score(sim.grid_after, queue[0], next_held, queue[1:], depth - 1)
                    if future is not None:
                        score += discount * future

                yield score, placement, use_hold, int(sim.cleared_lines)

    def _best_score(
            self,
            grid: np.ndarray,
            current: PieceKind,
            held: Optional[PieceKind],
            queue: Tuple[PieceKind, ...],
            depth: int,
    ) -> Optional[float]:
        best: Optional[float] = None
        for score, _p, _h, _c in self._scored(grid, current, held, queue, depth):
            if best is None or score > best:
                best = score
        return best


def find_best_move(
        board: Any,
        current: PieceLike,
        held: Optional[PieceLike] = None,
        queue: Sequence[PieceLike] = (),
        lookahead_depth: Optional[int] = None,
        *,
        config: SearchConfig | None = None,
) -> Optional[BestMove]:
    """Functional form of MoveSearch.find_best_move; lookahead_depth=None uses the config depth."""
    return MoveSearch(config).find_best_move(board, current, held, queue, lookahead_depth=lookahead_depth)


__all__ = ["BestMove", "MoveSearch", "find_best_move"]
