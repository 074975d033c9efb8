# src/tetris_ai/game/core/game.py
from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, Dict, Optional, Tuple

import numpy as np

from tetris_ai.game.config import GameConfig
from tetris_ai.game.core.board import Board
from tetris_ai.game.core.collision import piece_collides, try_rotate
from tetris_ai.game.core.constants import BOARD_H, BOARD_W, SPAWN_X, SPAWN_Y
from tetris_ai.game.core.piece_rules import PieceRule, make_piece_rule
from tetris_ai.game.core.pieces import PieceKind, piece_shape
from tetris_ai.game.core.rules import ScoreConfig, level_for_lines, score_for_clears
from tetris_ai.game.core.types import Action, ActivePiece, GameSnapshot

LOG = logging.getLogger(__name__)


class TetrisGame:
    """
    Minimal playable engine with preview queue and hold.

    Contracts:

      - board.grid is the authoritative LOCKED board (uint8 ids, 0=empty, kind+1 otherwise).
      - snapshot() returns COPIES; the search never sees live state.
      - step() returns cleared_lines (0..4) as a game event.
      - Spawning places the next piece at (SPAWN_X, SPAWN_Y) rotation 0. A spawn
        that collides ends the game (top-out).

      - Hold:
          held empty -> the active kind is reserved and the next piece spawns
          held set   -> active and held kinds swap; the swapped-in piece respawns
        Either way hold is unavailable until the next spawn from the queue.
    """

    def __init__(
            self,
            config: GameConfig | None = None,
            *,
            piece_rule: PieceRule | None = None,
            height: int = BOARD_H,
            width: int = BOARD_W,
    ) -> None:
        self.config = config or GameConfig()
        self.h = int(height)
        self.w = int(width)
        if self.h <= 0 or self.w <= 0:
            raise ValueError(f"board dimensions must be positive, got h={self.h} w={self.w}")

        self.preview_size = int(self.config.preview_size)
        self.score_cfg = ScoreConfig()
        self._piece_rule: PieceRule = piece_rule or make_piece_rule(self.config.piece_rule)
        self._rng: np.random.Generator = np.random.default_rng(int(self.config.seed))

        self.board = Board.empty(h=self.h, w=self.w)
        self.queue: Deque[PieceKind] = deque()
        self.active = ActivePiece(kind=PieceKind.I, rot=0, x=SPAWN_X, y=SPAWN_Y)
        self.held: Optional[PieceKind] = None
        self.can_hold = True

        self.score = 0
        self.lines = 0
        self.level = 1
        self.game_over = False
        self.pieces_placed = 0

        self.reset()

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        if seed is not None:
            self._rng = np.random.default_rng(int(seed))

        self.board = Board.empty(h=self.h, w=self.w)
        self.score = 0
        self.lines = 0
        self.level = 1
        self.game_over = False
        self.pieces_placed = 0
        self.held = None
        self.can_hold = True

        self._piece_rule.reset(rng=self._rng, kinds=list(PieceKind))
        self.queue = deque(self._piece_rule.next_piece() for _ in range(self.preview_size))

        self._spawn(self._pop_next())
        return self.snapshot()

    def step(self, action: Any) -> Tuple[GameSnapshot, int, bool, Dict[str, object]]:
        """
        Apply an action and return:

          (snapshot, cleared_lines, game_over, info)

        Actions after game over are ignored.
        """
        if self.game_over:
            return self.snapshot(), 0, True, {}

        a = self._normalize_action(action)
        cleared_lines = 0
        info: Dict[str, object] = {}

        if a == Action.LEFT:
            info["moved"] = self._try_move(dx=-1, dy=0)
        elif a == Action.RIGHT:
            info["moved"] = self._try_move(dx=+1, dy=0)
        elif a == Action.SOFT_DROP:
            if not self._try_move(dx=0, dy=+1):
                cleared_lines = self._lock_and_advance()
                info["locked"] = True
        elif a == Action.HARD_DROP:
            while self._try_move(dx=0, dy=+1):
                pass
            cleared_lines = self._lock_and_advance()
            info["locked"] = True
        elif a == Action.ROT_CW:
            info["moved"] = self._rotate(dir=+1)
        elif a == Action.ROT_CCW:
            info["moved"] = self._rotate(dir=-1)
        elif a == Action.HOLD:
            info["hold"] = self._hold()

        return self.snapshot(), int(cleared_lines), bool(self.game_over), info

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            grid=self.board.occupancy(),
            active=self.active,
            held=self.held,
            can_hold=bool(self.can_hold),
            queue=tuple(self.queue),
            score=int(self.score),
            lines=int(self.lines),
            level=int(self.level),
            game_over=bool(self.game_over),
        )

    # ---- internals -----------------------------------------------------------------

    def _normalize_action(self, action: Any) -> Action:
        if isinstance(action, Action):
            return action
        s = str(action).lower()
        mapping = {
            "left": Action.LEFT,
            "right": Action.RIGHT,
            "soft_drop": Action.SOFT_DROP,
            "down": Action.SOFT_DROP,
            "hard_drop": Action.HARD_DROP,
            "drop": Action.HARD_DROP,
            "rot_cw": Action.ROT_CW,
            "rotate": Action.ROT_CW,
            "cw": Action.ROT_CW,
            "rot_ccw": Action.ROT_CCW,
            "ccw": Action.ROT_CCW,
            "hold": Action.HOLD,
        }
        try:
            return mapping[s]
        except KeyError as e:
            raise ValueError(f"unknown action {action!r}") from e

    def _pop_next(self) -> PieceKind:
        kind = self.queue.popleft()
        self.queue.append(self._piece_rule.next_piece())
        return kind

    def _spawn(self, kind: PieceKind) -> None:
        ap = ActivePiece(kind=kind, rot=0, x=SPAWN_X, y=SPAWN_Y)
        self.active = ap
        if piece_collides(board=self.board, kind=ap.kind, rot=ap.rot, px=ap.x, py=ap.y):
            self.game_over = True
            LOG.info("top-out: score=%d lines=%d pieces=%d", self.score, self.lines, self.pieces_placed)

    def _hold(self) -> str:
        if not self.can_hold:
            return "unavailable"
        cur = self.active.kind
        if self.held is None:
            self.held = cur
            self._spawn(self._pop_next())
        else:
            swapped = self.held
            self.held = cur
            self._spawn(swapped)
        self.can_hold = False
        return "ok"

    def _try_move(self, dx: int, dy: int) -> bool:
        ap = self.active
        nx, ny = ap.x + dx, ap.y + dy
        if piece_collides(board=self.board, kind=ap.kind, rot=ap.rot, px=nx, py=ny):
            return False
        self.active = ActivePiece(kind=ap.kind, rot=ap.rot, x=nx, y=ny)
        return True

    def _rotate(self, dir: int) -> bool:
        ap = self.active
        nrot = try_rotate(board=self.board, kind=ap.kind, rot=ap.rot, px=ap.x, py=ap.y, dir=dir)
        self.active = ActivePiece(kind=ap.kind, rot=nrot, x=ap.x, y=ap.y)
        return nrot != ap.rot

    def _lock_and_advance(self) -> int:
        """
        Lock the active piece, clear lines, update score/lines/level, then spawn next.

        Cells resting above the top row are discarded.
        """
        ap = self.active
        m = piece_shape(ap.kind, ap.rot)
        board_id = int(ap.kind) + 1

        mh, mw = m.shape
        for yy in range(mh):
            for xx in range(mw):
                if not m[yy, xx]:
                    continue
                x = ap.x + xx
                y = ap.y + yy
                if 0 <= x < self.w and 0 <= y < self.h:
                    self.board.grid[y, x] = board_id

        cleared = int(self.board.clear_full_lines())
        self.score += score_for_clears(cleared, self.score_cfg, level=self.level)
        self.lines += cleared
        self.level = level_for_lines(self.lines)
        self.pieces_placed += 1

        self.can_hold = True
        self._spawn(self._pop_next())
        return cleared


__all__ = ["TetrisGame"]
