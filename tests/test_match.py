import random
import typing

import pytest

from config import GRID, PADDLE_H, BALL_MAX_SPEED, WIN_SCORE, DIFFS, PADDLE_MAX_SPEED, MIN_W, MIN_H
from core import Vec2
from match import FrameEvents, Match, IDLE, RUNNING, PAUSED, SCORED, GAME_OVER


def snapshot(m):
    return (
        m.ball.pos.x, m.ball.pos.y, m.ball.vel.x, m.ball.vel.y,
        m.left.pos.y, m.right.pos.y, m.left.score, m.right.score,
    )


def in_bounds(m, p):
    return m.top <= p.pos.y <= m.height - GRID - PADDLE_H


def park_ball(m):
    m.ball.pos = Vec2(m.width / 2, m.height / 2)
    m.ball.vel = Vec2(0, 0)


def test_new_match_is_idle_and_does_not_tick():
    m = Match(800, 400)
    assert m.state == IDLE
    before = snapshot(m)
    events = m.tick()
    assert snapshot(m) == before
    assert not events.paddle_bounce and not events.scored and not events.wall_bounce


def test_initial_layout():
    m = Match(800, 400)
    assert m.left.pos.x == GRID * 2
    assert m.right.pos.x == 800 - GRID * 3
    assert m.left.pos.y == 200 - PADDLE_H / 2
    assert m.ball.pos == Vec2(400, 200)


@pytest.mark.parametrize("w,h", [(0, 400), (800, -1), (800, MIN_H - 1), (MIN_W - 1, 400)])
def test_rejects_bad_arena(w, h):
    with pytest.raises(ValueError):
        Match(w, h)


def test_rejects_unknown_difficulty(match):
    with pytest.raises(ValueError):
        match.set_difficulty("nightmare")
    with pytest.raises(ValueError):
        Match(800, 400, difficulty="nightmare")


@pytest.mark.parametrize("level", list(DIFFS))
def test_set_difficulty_serves_and_starts(level):
    m = Match(800, 400, rng=random.Random(3))
    m.set_difficulty(level)
    base = DIFFS[level]["ball_speed"]
    assert m.state == RUNNING
    assert m.paddle_speed == DIFFS[level]["paddle_speed"]
    assert abs(m.ball.vel.x) == pytest.approx(base)
    assert abs(m.ball.vel.y) == pytest.approx(base * 0.7)
    assert m.ball.pos == Vec2(400, 200)
    assert not m.ball.resetting


def test_serve_signs_vary():
    m = Match(800, 400, rng=random.Random(11))
    signs = set()
    for _ in range(40):
        m.set_difficulty("easy")
        signs.add((m.ball.vel.x > 0, m.ball.vel.y > 0))
    assert len(signs) == 4


def test_one_tick_without_collision(match):
    w, h = match.width, match.height
    match.ball.pos = Vec2(w / 2, h / 2)
    match.ball.vel = Vec2(5, 3)
    events = match.tick()
    assert match.ball.pos == Vec2(w / 2 + 5, h / 2 + 3)
    assert not events.wall_bounce and events.paddle_bounce is None and events.scored is None


def test_paddles_stay_in_bounds(match):
    park_ball(match)
    match.press("LEFT_UP")
    match.press("RIGHT_DOWN")
    for _ in range(200):
        match.tick()
        assert in_bounds(match, match.left)
        assert in_bounds(match, match.right)
    assert match.left.pos.y == match.top
    assert match.right.pos.y == match.height - GRID - PADDLE_H


def test_release_only_stops_matching_direction(match):
    match.press("LEFT_UP")
    match.press("LEFT_DOWN")
    match.release("LEFT_UP")
    assert match.left.dy == match.paddle_speed
    match.release("LEFT_DOWN")
    assert match.left.dy == 0


def test_unknown_intent(match):
    with pytest.raises(ValueError):
        match.press("JUMP")
    with pytest.raises(ValueError):
        match.release("JUMP")


def test_wall_bounce_event(match):
    match.ball.pos = Vec2(match.width / 2, GRID + 10)
    match.ball.vel = Vec2(3, -4)
    events = match.tick()
    assert events.wall_bounce
    assert match.ball.vel.y == 4


def test_left_paddle_bounce(match):
    p = match.left
    match.ball.pos = Vec2(p.pos.x + p.w + 11, p.center_y)
    match.ball.vel = Vec2(-5, 0)
    events = match.tick()
    assert events.paddle_bounce == "LEFT"
    assert match.ball.pos.x == p.pos.x + p.w + match.ball.r
    assert match.ball.vel.x > 0
    assert match.ball.vel.length() == pytest.approx(5.5)
    assert match.paddle_speed == pytest.approx(6.2)


def test_right_paddle_bounce(match):
    p = match.right
    match.ball.pos = Vec2(p.pos.x - 11, p.center_y)
    match.ball.vel = Vec2(5, 0)
    events = match.tick()
    assert events.paddle_bounce == "RIGHT"
    assert match.ball.pos.x == p.pos.x - match.ball.r
    assert match.ball.vel.x < 0


def test_no_bounce_when_moving_away(match):
    p = match.left
    match.ball.pos = Vec2(p.pos.x + p.w + 3, p.center_y)
    match.ball.vel = Vec2(1, 0)
    events = match.tick()
    assert events.paddle_bounce is None
    assert match.ball.vel == Vec2(1, 0)
    assert match.paddle_speed == 6


def test_paddle_speed_caps(match):
    match.paddle_speed = 7.9
    p = match.left
    match.ball.pos = Vec2(p.pos.x + p.w + 11, p.center_y)
    match.ball.vel = Vec2(-5, 0)
    match.tick()
    assert match.paddle_speed == PADDLE_MAX_SPEED


def test_insane_paddle_speed_drops_to_cap(match):
    match.set_difficulty("insane")
    p = match.left
    match.ball.pos = Vec2(p.pos.x + p.w + 11, p.center_y)
    match.ball.vel = Vec2(-5, 0)
    match.tick()
    assert match.paddle_speed == PADDLE_MAX_SPEED


def test_left_exit_scores_right_once(match):
    seen = []
    match.on_score = lambda left, right: seen.append((left, right))
    match.ball.pos = Vec2(4, match.height / 2)
    match.ball.vel = Vec2(-5, 0)
    events = match.tick()

    assert events.scored == "RIGHT"
    assert match.scores == (0, 1)
    assert match.state == SCORED
    assert match.message == "Player 1 Missed!"
    assert match.ball.resetting
    assert seen == [(0, 1)]

    # a host that keeps ticking, even one that forces the loop back on,
    # cannot count the same exit twice
    for _ in range(5):
        match.tick()
    match.state = RUNNING
    for _ in range(5):
        assert match.tick().scored is None
    assert match.scores == (0, 1)
    assert seen == [(0, 1)]


def test_right_exit_scores_left(match):
    match.ball.pos = Vec2(match.width - 4, match.height / 2)
    match.ball.vel = Vec2(5, 0)
    events = match.tick()
    assert events.scored == "LEFT"
    assert match.scores == (1, 0)
    assert match.message == "Player 2 Missed!"


def test_continue_reserves(match):
    match.ball.pos = Vec2(4, match.height / 2)
    match.ball.vel = Vec2(-5, 0)
    match.tick()
    assert match.continue_play()
    assert match.state == RUNNING
    assert match.message == ""
    assert not match.ball.resetting
    assert match.ball.pos == Vec2(match.width / 2, match.height / 2)
    assert abs(match.ball.vel.x) == pytest.approx(7.0)
    assert abs(match.ball.vel.y) == pytest.approx(4.9)


def test_continue_only_after_a_point(match):
    assert not match.continue_play()
    assert match.state == RUNNING


def test_game_over_is_terminal(match):
    winners = []
    match.on_match_end = winners.append
    match.right.score = WIN_SCORE - 1
    match.press("LEFT_DOWN")
    match.ball.pos = Vec2(4, match.height / 2)
    match.ball.vel = Vec2(-5, 0)
    events = match.tick()

    assert events.winner == "Player 2"
    assert match.state == GAME_OVER
    assert match.winner == "Player 2"
    assert match.message == "Player 2 Wins!"
    assert winners == ["Player 2"]

    before = snapshot(match)
    for _ in range(10):
        match.tick()
    assert snapshot(match) == before
    assert not match.continue_play()
    match.toggle_pause()
    match.start()
    assert match.state == GAME_OVER


def test_difficulty_after_game_over_starts_fresh(match):
    match.left.score = WIN_SCORE - 1
    match.ball.pos = Vec2(match.width - 4, match.height / 2)
    match.ball.vel = Vec2(5, 0)
    match.tick()
    assert match.state == GAME_OVER

    match.set_difficulty("easy")
    assert match.state == RUNNING
    assert match.scores == (0, 0)
    assert match.winner is None
    assert match.paddle_speed == DIFFS["easy"]["paddle_speed"]
    assert abs(match.ball.vel.x) == pytest.approx(4.0)


def test_difficulty_while_scored_resumes(match):
    match.ball.pos = Vec2(4, match.height / 2)
    match.ball.vel = Vec2(-5, 0)
    match.tick()
    match.set_difficulty("insane")
    assert match.state == RUNNING
    assert match.message == ""
    assert not match.ball.resetting
    assert match.scores == (0, 1)


def test_new_match_resets_everything(match):
    match.left.score, match.right.score = 3, 2
    match.paddle_speed = 8.0
    match.press("RIGHT_UP")
    match.new_match()
    assert match.scores == (0, 0)
    assert match.right.dy == 0
    assert match.paddle_speed == DIFFS["hard"]["paddle_speed"]
    assert match.state == RUNNING


def test_pause_toggle(match):
    match.toggle_pause()
    assert match.state == PAUSED
    assert match.message == "Paused"
    before = snapshot(match)
    match.tick()
    assert snapshot(match) == before
    match.toggle_pause()
    assert match.state == RUNNING
    assert match.message == ""


def test_stop_prevents_ticks(match):
    match.stop()
    assert not match.running
    before = snapshot(match)
    match.tick()
    assert snapshot(match) == before


def test_resize(match):
    match.resize(640, 360)
    assert match.right.pos.x == 640 - GRID * 3
    assert match.bottom == 360 - GRID
    assert match.ball.pos == Vec2(320, 180)
    assert in_bounds(match, match.left) and in_bounds(match, match.right)
    with pytest.raises(ValueError):
        match.resize(0, 360)
    with pytest.raises(ValueError):
        match.resize(800, 100)
    assert (match.width, match.height) == (640, 360)


def test_smallest_arena_keeps_paddles_in_bounds():
    m = Match(MIN_W, MIN_H, rng=random.Random(5))
    m.set_difficulty("hard")
    assert in_bounds(m, m.left) and in_bounds(m, m.right)
    m.press("LEFT_DOWN")
    m.press("RIGHT_UP")
    for _ in range(50):
        m.tick()
        assert in_bounds(m, m.left) and in_bounds(m, m.right)
        if m.state == SCORED:
            m.continue_play()
        elif m.state == GAME_OVER:
            break


def test_start_from_idle_serves():
    m = Match(800, 400, rng=random.Random(9))
    assert m.ball.vel == Vec2(0, 0)
    m.start()
    assert m.running
    assert abs(m.ball.vel.x) == pytest.approx(DIFFS["hard"]["ball_speed"])
    before = m.ball.pos.x
    m.tick()
    assert m.ball.pos.x != before


def test_long_rally_keeps_invariants():
    m = Match(960, 540, rng=random.Random(42))
    m.set_difficulty("insane")
    last = (0, 0)
    for _ in range(20000):
        # both paddles chase the ball, with some lag
        for p in (m.left, m.right):
            if m.ball.pos.y < p.center_y - 10:
                m.press("LEFT_UP" if p is m.left else "RIGHT_UP")
            elif m.ball.pos.y > p.center_y + 10:
                m.press("LEFT_DOWN" if p is m.left else "RIGHT_DOWN")
        m.tick()
        assert m.ball.vel.length() <= BALL_MAX_SPEED + 1e-9
        assert in_bounds(m, m.left) and in_bounds(m, m.right)
        assert m.scores[0] >= last[0] and m.scores[1] >= last[1]
        assert sum(m.scores) - sum(last) <= 1
        last = m.scores
        if m.state == SCORED:
            m.continue_play()
        elif m.state == GAME_OVER:
            assert max(m.scores) == WIN_SCORE
            break


def test_frame_events_default_to_nothing():
    hints = typing.get_type_hints(FrameEvents)
    assert hints["paddle_bounce"] == typing.Optional[str]
    assert hints["winner"] == typing.Optional[str]
    events = FrameEvents()
    assert (events.wall_bounce, events.paddle_bounce, events.scored, events.winner) == (False, None, None, None)
