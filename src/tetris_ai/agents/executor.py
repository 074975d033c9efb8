# src/tetris_ai/agents/executor.py
from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from tetris_ai.agents.config import AutoPlayConfig
from tetris_ai.agents.search import BestMove, MoveSearch
from tetris_ai.errors import TetrisAIError
from tetris_ai.game.core.collision import piece_collides
from tetris_ai.game.core.constants import SPAWN_X
from tetris_ai.game.core.game import TetrisGame
from tetris_ai.game.core.types import Action, ActivePiece

LOG = logging.getLogger(__name__)


def plan_actions(active: ActivePiece, move: BestMove) -> List[Action]:
    """
    Translate a BestMove into game actions.

    Order: HOLD (if the move uses the held piece), rotations, horizontal
    shifts, HARD_DROP. A hold respawns the swapped-in piece at the spawn
    pose, so the plan after a hold starts from rotation 0 at SPAWN_X.
    """
    actions: List[Action] = []
    rot, x = int(active.rot), int(active.x)
    if move.use_hold:
        actions.append(Action.HOLD)
        rot, x = 0, SPAWN_X

    actions.extend([Action.ROT_CW] * ((int(move.rot) - rot) % 4))

    dx = int(move.x) - x
    if dx < 0:
        actions.extend([Action.LEFT] * (-dx))
    elif dx > 0:
        actions.extend([Action.RIGHT] * dx)

    actions.append(Action.HARD_DROP)
    return actions


@dataclass(frozen=True)
class MovePlan:
    """
    Output of one planning step.

    move is None when there is nothing to play; no_move_reason then says why
    ("game_over", "no_legal_placement" or an engine error message).
    """
    move: Optional[BestMove]
    actions: Tuple[Action, ...] = ()
    no_move_reason: Optional[str] = None
    search_s: float = 0.0

    @property
    def has_move(self) -> bool:
        return self.move is not None


@dataclass
class AutoPlayStats:
    pieces: int = 0
    lines: int = 0
    top_outs: int = 0
    searches: int = 0
    search_s: float = 0.0
    divergences: int = 0


class AutoPlayer:
    """
    Drives one TetrisGame with one MoveSearch at a fixed action cadence.

    Contracts:
      - tick() applies at most ONE action.
      - A new search only runs when the previous action sequence is exhausted;
        plan() raises RuntimeError otherwise.
      - A missing move or a game over counts as top-out. With
        reset_on_top_out the game restarts, otherwise the player stops.
    """

    def __init__(
            self,
            game: TetrisGame,
            search: MoveSearch | None = None,
            config: AutoPlayConfig | None = None,
    ) -> None:
        self.game = game
        self.search = search or MoveSearch()
        self.config = config or AutoPlayConfig()
        self.stats = AutoPlayStats()
        self.stopped = False

        self._pending: Deque[Action] = deque()
        self._current: Optional[MovePlan] = None

    @property
    def in_flight(self) -> bool:
        return bool(self._pending)

    def plan(self) -> MovePlan:
        if self._pending:
            raise RuntimeError(f"action sequence still in flight ({len(self._pending)} actions left)")

        snap = self.game.snapshot()
        if snap.game_over:
            return MovePlan(move=None, no_move_reason="game_over")

        t0 = time.perf_counter()
        try:
            move = self.search.find_best_move_for(snap)
        except TetrisAIError as e:
            LOG.error("search failed: %s", e)
            return MovePlan(move=None, no_move_reason=str(e), search_s=time.perf_counter() - t0)
        dt = time.perf_counter() - t0

        self.stats.searches += 1
        self.stats.search_s += dt

        if move is None:
            return MovePlan(move=None, no_move_reason="no_legal_placement", search_s=dt)
        return MovePlan(move=move, actions=tuple(plan_actions(snap.active, move)), search_s=dt)

    def tick(self) -> Optional[Action]:
        """Apply the next planned action; returns it, or None when nothing was played."""
        if self.stopped:
            return None
        if self.game.game_over:
            self._top_out("game_over")
            return None

        if not self._pending:
            p = self.plan()
            if not p.has_move:
                self._top_out(str(p.no_move_reason))
                return None
            self._current = p
            self._pending.extend(p.actions)

        action = self._pending.popleft()
        if action == Action.HARD_DROP:
            self._check_landing()

        _snap, cleared, game_over, info = self.game.step(action)
        if info.get("locked"):
            self.stats.pieces += 1
            self.stats.lines += int(cleared)
            self._current = None
        if game_over:
            self._top_out("spawn_collision")
        return action

    def run(self, *, max_pieces: Optional[int] = None, step_ms: Optional[int] = None) -> AutoPlayStats:
        """
        Tick until `max_pieces` pieces are locked (0 = until the player stops).

        step_ms: ms between actions, 0 = uncapped. Defaults come from the config.
        """
        budget = int(self.config.max_pieces if max_pieces is None else max_pieces)
        interval = int(self.config.step_ms if step_ms is None else step_ms)
        if budget < 0:
            raise ValueError(f"max_pieces must be >= 0, got {budget}")
        if interval < 0:
            raise ValueError(f"step_ms must be >= 0, got {interval}")
        if budget == 0 and self.config.reset_on_top_out:
            raise ValueError("max_pieces=0 with reset_on_top_out would never stop")

        while not self.stopped and (budget == 0 or self.stats.pieces < budget):
            self.tick()
            if interval > 0:
                time.sleep(interval / 1000.0)
        return self.stats

    # ---- internals -----------------------------------------------------------------

    def _check_landing(self) -> None:
        p = self._current
        if p is None or p.move is None:
            return
        ap = self.game.active
        target = p.move.placement
        landed_y = ap.y
        while not piece_collides(board=self.game.board, kind=ap.kind, rot=ap.rot, px=ap.x, py=landed_y + 1):
            landed_y += 1
        if (ap.kind, ap.rot, ap.x, landed_y) != (target.kind, target.rot, target.x, target.y):
            self.stats.divergences += 1
            LOG.warning(
                "landing differs from plan: got %s rot=%d x=%d y=%s, planned %s rot=%d x=%d y=%d",
                ap.kind.letter,
                ap.rot,
                ap.x,
                landed_y,
                target.kind.letter,
                target.rot,
                target.x,
                target.y,
            )

    def _top_out(self, reason: str) -> None:
        self.stats.top_outs += 1
        self._pending.clear()
        self._current = None
        LOG.info(
            "top-out (%s): score=%d lines=%d pieces=%d",
            reason,
            self.game.score,
            self.game.lines,
            self.game.pieces_placed,
        )
        if self.config.reset_on_top_out:
            self.game.reset()
        else:
            self.stopped = True


__all__ = ["plan_actions", "MovePlan", "AutoPlayStats", "AutoPlayer"]
