import math
import random
from dataclasses import dataclass
from typing import Optional
from config import (
    BALL_MAX_SPEED, BALL_SPEEDUP, SERVE_DY_RATIO, MAX_BOUNCE_ANGLE, BOUNCE_JITTER,
)

class Vec2:
    __slots__ = ("x", "y")
    def __init__(self, x=0.0, y=0.0):
        self.x = float(x)
        self.y = float(y)
    def __add__(self, o): return Vec2(self.x + o.x, self.y + o.y)
    def __sub__(self, o): return Vec2(self.x - o.x, self.y - o.y)
    def __mul__(self, k): return Vec2(self.x * k, self.y * k)
    def __eq__(self, o): return isinstance(o, Vec2) and self.x == o.x and self.y == o.y
    def __repr__(self): return f"Vec2({self.x:g}, {self.y:g})"
    def length(self): return math.hypot(self.x, self.y)

@dataclass
class Paddle:
    pos: Vec2
    w: float
    h: float
    dy: float = 0.0
    score: int = 0

    @property
    def center_y(self):
        return self.pos.y + self.h / 2

@dataclass
class Ball:
    pos: Vec2
    r: float
    vel: Optional[Vec2] = None
    resetting: bool = False
    def __post_init__(self):
        if self.vel is None:
            self.vel = Vec2(0, 0)

def clamp(v, a, b):
    return max(a, min(b, v))

def collides(ball: Ball, paddle: Paddle) -> bool:
    """Exact circle-vs-rectangle test using the closest point on the paddle."""
    closest_x = clamp(ball.pos.x, paddle.pos.x, paddle.pos.x + paddle.w)
    closest_y = clamp(ball.pos.y, paddle.pos.y, paddle.pos.y + paddle.h)
    dx = ball.pos.x - closest_x
    dy = ball.pos.y - closest_y
    return dx * dx + dy * dy < ball.r * ball.r

def move_paddle(p: Paddle, top: float, bottom: float):
    p.pos.y = clamp(p.pos.y + p.dy, top, bottom - p.h)

def move_ball(ball: Ball):
    ball.pos = ball.pos + ball.vel

def wall_collide_ball(ball: Ball, top: float, bottom: float) -> bool:
    # only flip while still heading into the wall, so one crossing = one reflection
    if ball.pos.y - ball.r < top and ball.vel.y < 0:
        ball.vel.y = -ball.vel.y
        return True
    if ball.pos.y + ball.r > bottom and ball.vel.y > 0:
        ball.vel.y = -ball.vel.y
        return True
    return False

def moving_towards(ball: Ball, side: str) -> bool:
    if side == "LEFT":
        return ball.vel.x < 0
    return ball.vel.x > 0

def bounce_angle(ball: Ball, paddle: Paddle, jitter: float = 0.0) -> float:
    half = paddle.h / 2
    normalized = (paddle.center_y - ball.pos.y) / half
    return normalized * MAX_BOUNCE_ANGLE + jitter

def bounce_off_paddle(ball: Ball, paddle: Paddle, side: str, arena_w: float, rng=random) -> float:
    """Reflect the ball off a paddle it has just touched.

    The ball is placed flush against the paddle face first so it cannot sink
    into or tunnel through the paddle on the next tick. The outgoing angle
    depends on how far from the paddle centre the contact happened, and the
    speed grows by BALL_SPEEDUP up to BALL_MAX_SPEED.

    Returns the new ball speed.
    """
    if side == "LEFT":
        ball.pos.x = paddle.pos.x + paddle.w + ball.r
    else:
        ball.pos.x = paddle.pos.x - ball.r

    angle = bounce_angle(ball, paddle, rng.uniform(-BOUNCE_JITTER, BOUNCE_JITTER))
    speed = min(ball.vel.length() + BALL_SPEEDUP, BALL_MAX_SPEED)
    direction = 1 if ball.pos.x < arena_w / 2 else -1

    ball.vel = Vec2(speed * math.cos(angle) * direction, -speed * math.sin(angle))
    return speed

def serve_velocity(base_speed: float, rng=random) -> Vec2:
    sx = 1 if rng.random() > 0.5 else -1
    sy = 1 if rng.random() > 0.5 else -1
    return Vec2(sx * base_speed, sy * base_speed * SERVE_DY_RATIO)

def center_ball(ball: Ball, arena_w: float, arena_h: float):
    ball.pos = Vec2(arena_w / 2, arena_h / 2)
    ball.resetting = False

def check_out(ball: Ball, arena_w: float):
    """Side of the arena the ball has left through, or None while in play."""
    if ball.pos.x - ball.r < 0:
        return "LEFT"
    if ball.pos.x + ball.r > arena_w:
        return "RIGHT"
    return None
