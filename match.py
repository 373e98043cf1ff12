import logging
import random
from dataclasses import dataclass
from typing import Optional
from config import (
    W, H, GRID, PADDLE_W, PADDLE_H, BALL_R, WIN_SCORE, DIFFS, DEFAULT_DIFFICULTY,
    PADDLE_SPEED_STEP, PADDLE_MAX_SPEED, MIN_W, MIN_H,
)
from core import (
    Vec2, Paddle, Ball, collides, move_paddle, move_ball, wall_collide_ball,
    moving_towards, bounce_off_paddle, serve_velocity, center_ball, check_out,
)

logger = logging.getLogger(__name__)

IDLE = "IDLE"
RUNNING = "RUNNING"
PAUSED = "PAUSED"
SCORED = "SCORED"
GAME_OVER = "GAME_OVER"

INTENTS = {
    "LEFT_UP": ("left", -1),
    "LEFT_DOWN": ("left", 1),
    "RIGHT_UP": ("right", -1),
    "RIGHT_DOWN": ("right", 1),
}

PLAYER_LABELS = {"LEFT": "Player 1", "RIGHT": "Player 2"}


def check_arena(width, height):
    if width < MIN_W or height < MIN_H:
        raise ValueError(f"arena must be at least {MIN_W}x{MIN_H}, got {width}x{height}")


@dataclass
class FrameEvents:
    wall_bounce: bool = False
    paddle_bounce: Optional[str] = None
    scored: Optional[str] = None
    winner: Optional[str] = None


class Match:
    """Owns both paddles, the ball and the match flow.

    One `tick()` advances the simulation by a single frame and returns the
    FrameEvents that happened in it. Nothing moves unless the state is RUNNING.
    """

    def __init__(self, width=W, height=H, difficulty=DEFAULT_DIFFICULTY,
                 on_score=None, on_match_end=None, rng=None):
        check_arena(width, height)
        if difficulty not in DIFFS:
            raise ValueError(f"unknown difficulty: {difficulty!r}")
        self.width = width
        self.height = height
        self.top = GRID
        self.bottom = height - GRID
        self.rng = rng if rng is not None else random
        self.on_score = on_score
        self.on_match_end = on_match_end

        self.left = Paddle(Vec2(GRID * 2, 0), PADDLE_W, PADDLE_H)
        self.right = Paddle(Vec2(0, 0), PADDLE_W, PADDLE_H)
        self.ball = Ball(Vec2(0, 0), BALL_R)

        self.difficulty = difficulty
        self.paddle_speed = DIFFS[difficulty]["paddle_speed"]
        self.state = IDLE
        self.message = ""
        self.winner = None
        self.reset_positions()

    @property
    def running(self):
        return self.state == RUNNING

    @property
    def base_speed(self):
        return DIFFS[self.difficulty]["ball_speed"]

    @property
    def scores(self):
        return self.left.score, self.right.score

    def reset_positions(self):
        self.right.pos.x = self.width - GRID * 3
        for p in (self.left, self.right):
            p.pos.y = self.height / 2 - p.h / 2
        center_ball(self.ball, self.width, self.height)

    def resize(self, width, height):
        check_arena(width, height)
        self.width = width
        self.height = height
        self.bottom = height - GRID
        self.reset_positions()
        logger.debug("arena resized to %sx%s", width, height)

    def serve(self):
        center_ball(self.ball, self.width, self.height)
        self.ball.vel = serve_velocity(self.base_speed, self.rng)

    def start(self):
        if self.state == IDLE and self.ball.vel.length() == 0:
            self.serve()
        if self.state in (IDLE, PAUSED, SCORED):
            self.state = RUNNING
            self.message = ""

    def stop(self):
        if self.state != GAME_OVER:
            self.state = IDLE

    def toggle_pause(self):
        if self.state == RUNNING:
            self.state = PAUSED
            self.message = "Paused"
        elif self.state == PAUSED:
            self.state = RUNNING
            self.message = ""
        else:
            return
        logger.debug("pause toggled, state=%s", self.state)

    def set_difficulty(self, level):
        if level not in DIFFS:
            raise ValueError(f"unknown difficulty: {level!r}")
        self.difficulty = level
        if self.state == GAME_OVER:
            self.new_match()
            logger.info("difficulty set to %s", level)
            return
        self.paddle_speed = DIFFS[level]["paddle_speed"]
        self.serve()
        self.notify_score()
        self.start()
        logger.info("difficulty set to %s", level)

    def new_match(self):
        for p in (self.left, self.right):
            p.score = 0
            p.dy = 0.0
        self.paddle_speed = DIFFS[self.difficulty]["paddle_speed"]
        self.winner = None
        self.message = ""
        self.reset_positions()
        self.serve()
        self.state = IDLE
        self.notify_score()
        self.start()
        logger.info("new match started on %s", self.difficulty)

    def continue_play(self):
        if self.state != SCORED:
            return False
        self.serve()
        self.start()
        return True

    def press(self, intent):
        side, sign = self._intent(intent)
        getattr(self, side).dy = sign * self.paddle_speed

    def release(self, intent):
        side, sign = self._intent(intent)
        paddle = getattr(self, side)
        if paddle.dy * sign > 0:
            paddle.dy = 0.0

    def _intent(self, intent):
        try:
            return INTENTS[intent]
        except KeyError:
            raise ValueError(f"unknown input intent: {intent!r}") from None

    def notify_score(self):
        if self.on_score:
            self.on_score(self.left.score, self.right.score)

    def tick(self):
        events = FrameEvents()
        if self.state != RUNNING:
            return events

        ball = self.ball
        for p in (self.left, self.right):
            move_paddle(p, self.top, self.bottom)

        move_ball(ball)
        events.wall_bounce = wall_collide_ball(ball, self.top, self.bottom)

        for side, paddle in (("LEFT", self.left), ("RIGHT", self.right)):
            if collides(ball, paddle) and moving_towards(ball, side):
                bounce_off_paddle(ball, paddle, side, self.width, self.rng)
                self.paddle_speed = min(self.paddle_speed + PADDLE_SPEED_STEP, PADDLE_MAX_SPEED)
                events.paddle_bounce = side

        out = check_out(ball, self.width)
        if out and not ball.resetting:
            self._point(out, events)
        return events

    def _point(self, out_side, events):
        scorer_side = "RIGHT" if out_side == "LEFT" else "LEFT"
        scorer = self.right if scorer_side == "RIGHT" else self.left
        scorer.score += 1
        self.ball.resetting = True
        events.scored = scorer_side
        self.notify_score()
        logger.info("point to %s, score %d:%d", PLAYER_LABELS[scorer_side],
                    self.left.score, self.right.score)

        if scorer.score >= WIN_SCORE:
            self.state = GAME_OVER
            self.winner = PLAYER_LABELS[scorer_side]
            self.message = f"{self.winner} Wins!"
            events.winner = self.winner
            logger.info("game over, %s wins", self.winner)
            if self.on_match_end:
                self.on_match_end(self.winner)
            return

        self.state = SCORED
        self.message = f"{PLAYER_LABELS[out_side]} Missed!"
