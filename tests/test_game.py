# tests/test_game.py
from __future__ import annotations

import numpy as np
import pytest

from tetris_ai.game.config import GameConfig
from tetris_ai.game.core.game import TetrisGame
from tetris_ai.game.core.piece_rules import Bag7PieceRule, UniformPieceRule, make_piece_rule
from tetris_ai.game.core.pieces import PieceKind
from tetris_ai.game.core.rules import ScoreConfig, level_for_lines, score_for_clears
from tetris_ai.game.core.types import Action, ActivePiece


def _game(**kw: object) -> TetrisGame:
    return TetrisGame(GameConfig(seed=7, **kw))


def test_reset_spawns_at_fixed_pose_with_preview_queue() -> None:
    g = _game()
    snap = g.snapshot()

    assert (snap.active.rot, snap.active.x, snap.active.y) == (0, 3, 0)
    assert len(snap.queue) == 3
    assert snap.held is None and snap.can_hold is True
    assert (snap.score, snap.lines, snap.level) == (0, 0, 1)
    assert snap.game_over is False
    assert snap.grid.dtype == np.bool_ and not snap.grid.any()


def test_preview_size_is_configurable() -> None:
    assert len(_game(preview_size=1).snapshot().queue) == 1
    assert len(_game(preview_size=5).snapshot().queue) == 5


def test_same_seed_same_piece_sequence() -> None:
    def sequence(seed: int) -> list[PieceKind]:
        g = TetrisGame(GameConfig(seed=seed))
        out = []
        for _ in range(12):
            out.append(g.active.kind)
            g.step(Action.HARD_DROP)
            if g.game_over:
                break
        return out

    assert sequence(11) == sequence(11)


def test_reset_with_seed_restarts_sequence() -> None:
    g = _game()
    first = g.reset(seed=99)
    g.step(Action.HARD_DROP)
    again = g.reset(seed=99)

    assert first.current == again.current
    assert first.queue == again.queue
    assert not again.grid.any()


def test_snapshot_is_a_copy() -> None:
    g = _game()
    snap = g.snapshot()
    snap.grid[19, :] = True
    assert not g.board.occupancy().any()


def test_hold_into_empty_slot_takes_next_piece() -> None:
    g = _game()
    cur = g.active.kind
    nxt = g.queue[0]

    snap, cleared, over, info = g.step(Action.HOLD)

    assert info["hold"] == "ok"
    assert snap.held == cur
    assert snap.current == nxt
    assert snap.can_hold is False
    assert (cleared, over) == (0, False)


def test_hold_is_once_per_spawn() -> None:
    g = _game()
    g.step(Action.HOLD)
    active = g.active
    held = g.held

    _snap, _c, _o, info = g.step(Action.HOLD)

    assert info["hold"] == "unavailable"
    assert g.active == active and g.held == held


def test_hold_swaps_after_lock() -> None:
    g = _game()
    a = g.active.kind
    g.step(Action.HOLD)
    g.step(Action.HARD_DROP)
    assert g.can_hold is True

    c = g.active.kind
    snap, _cleared, _over, _info = g.step("hold")

    assert snap.held == c
    assert snap.current == a
    assert (snap.active.rot, snap.active.x, snap.active.y) == (0, 3, 0)


def test_hard_drop_locks_piece_and_spawns_next() -> None:
    g = _game()
    nxt = g.queue[0]

    snap, cleared, over, info = g.step(Action.HARD_DROP)

    assert info["locked"] is True
    assert cleared == 0 and over is False
    assert int(snap.grid.sum()) == 4
    assert snap.current == nxt
    assert g.pieces_placed == 1
    assert len(snap.queue) == 3


def test_moves_and_rotations_respect_walls() -> None:
    g = _game()
    for _ in range(10):
        g.step(Action.LEFT)
    assert g.active.x == 0
    _snap, _c, _o, info = g.step(Action.LEFT)
    assert info["moved"] is False


def test_line_clear_scores_by_level() -> None:
    g = _game()
    g.board.grid[19, :9] = 1
    g.active = ActivePiece(kind=PieceKind.I, rot=1, x=9, y=0)

    _snap, cleared, _over, _info = g.step(Action.HARD_DROP)

    assert cleared == 1
    assert g.score == 100
    assert g.lines == 1
    assert g.level == 1


def test_level_rises_every_ten_lines() -> None:
    g = _game()
    g.lines = 9
    g.board.grid[19, :9] = 1
    g.active = ActivePiece(kind=PieceKind.I, rot=1, x=9, y=0)

    g.step(Action.HARD_DROP)

    assert g.lines == 10
    assert g.level == 2
    assert g.score == 100


def test_score_table() -> None:
    cfg = ScoreConfig()
    assert [score_for_clears(n, cfg) for n in range(5)] == [0, 100, 300, 500, 800]
    assert score_for_clears(4, cfg, level=3) == 2400
    assert [level_for_lines(n) for n in (0, 9, 10, 25)] == [1, 1, 2, 3]


def test_top_out_on_spawn_collision() -> None:
    g = _game()
    g.board.grid[2:, :9] = 1

    for _ in range(10):
        _snap, _c, over, _info = g.step(Action.HARD_DROP)
        if over:
            break

    assert g.game_over is True
    snap, cleared, over, info = g.step(Action.LEFT)
    assert (cleared, over, info) == (0, True, {})
    assert snap.game_over is True


def test_unknown_action_raises() -> None:
    with pytest.raises(ValueError, match="unknown action"):
        _game().step("teleport")


def test_bag7_deals_every_kind_once_per_bag() -> None:
    rule = Bag7PieceRule()
    rule.reset(rng=np.random.default_rng(0), kinds=list(PieceKind))
    for _ in range(3):
        bag = [rule.next_piece() for _ in range(7)]
        assert sorted(bag) == sorted(PieceKind)


def test_uniform_rule_requires_reset() -> None:
    with pytest.raises(RuntimeError, match="reset"):
        UniformPieceRule().next_piece()


def test_make_piece_rule() -> None:
    assert isinstance(make_piece_rule("BAG7"), Bag7PieceRule)
    assert isinstance(make_piece_rule("uniform"), UniformPieceRule)
    with pytest.raises(ValueError, match="unknown piece_rule"):
        make_piece_rule("seven")
