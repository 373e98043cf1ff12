import math
import random
import pygame
from config import SPARK_LIFE, SPARK_N, SPARK_DRAG, BALL_INNER, BALL_OUTER, WHITE, ACCENT

CONFETTI_COLORS = [BALL_INNER, BALL_OUTER, WHITE, ACCENT, (245, 220, 80)]

def advance(parts, dt, steer=None):
    """Age particles by dt and move the survivors; steer(p, dt) adjusts velocity first."""
    alive = []
    for p in parts:
        p["life"] -= dt
        if p["life"] <= 0:
            continue
        if steer:
            steer(p, dt)
        pos, vel = p["p"], p["v"]
        pos[0] += vel[0] * dt
        pos[1] += vel[1] * dt
        alive.append(p)
    return alive

class Confetti:
    def __init__(self, rng=random):
        self.parts = []
        self.rng = rng

    def burst(self, center, n=260):
        rng = self.rng
        cx, cy = center
        for _ in range(n):
            a = rng.random() * math.tau
            s = rng.uniform(220, 900)
            self.parts.append({
                "p": [cx + rng.uniform(-10, 10), cy + rng.uniform(-10, 10)],
                "v": [math.cos(a) * s, math.sin(a) * s],
                "g": rng.uniform(600, 1100),
                "life": rng.uniform(1.4, 2.6),
                "size": rng.randint(2, 5),
                "col": rng.choice(CONFETTI_COLORS),
                "spin": rng.uniform(-10, 10),
                "ang": rng.uniform(0, math.tau),
            })

    @staticmethod
    def _fall(p, dt):
        p["v"][1] += p["g"] * dt
        p["ang"] += p["spin"] * dt

    def update(self, dt):
        self.parts = advance(self.parts, dt, self._fall)

    def clear(self):
        self.parts = []

    def draw(self, surf):
        # each flake is a short spinning stroke
        for p in self.parts:
            (x, y), size = p["p"], p["size"]
            hx, hy = math.cos(p["ang"]) * size, math.sin(p["ang"]) * size
            pygame.draw.line(surf, p["col"], (x - hx, y - hy), (x + hx, y + hy), size)

class Sparks:
    def __init__(self, rng=random):
        self.parts = []
        self.rng = rng

    def burst(self, center, color, n=SPARK_N, spread=math.tau, heading=0.0):
        """Emit n sparks from center; spread narrows them into a cone around heading."""
        rng = self.rng
        cx, cy = center
        for _ in range(n):
            a = heading + (rng.random() - 0.5) * spread
            s = rng.uniform(180, 760)
            self.parts.append({
                "p": [cx, cy],
                "v": [math.cos(a) * s, math.sin(a) * s],
                "life": rng.uniform(*SPARK_LIFE),
                "size": rng.randint(2, 4),
                "col": color,
            })

    @staticmethod
    def _drag(p, dt):
        k = SPARK_DRAG ** (dt * 60.0)
        p["v"][0] *= k
        p["v"][1] *= k

    def update(self, dt):
        self.parts = advance(self.parts, dt, self._drag)

    def clear(self):
        self.parts = []

    def draw(self, surf):
        for p in self.parts:
            x, y = p["p"]
            pygame.draw.circle(surf, p["col"], (int(x), int(y)), p["size"])

def emit_frame_fx(events, match, sparks, confetti):
    """Turn one tick's FrameEvents into particle bursts."""
    ball = match.ball
    pos = (ball.pos.x, ball.pos.y)
    if events.paddle_bounce == "LEFT":
        sparks.burst(pos, BALL_INNER, spread=math.pi * 0.8, heading=0.0)
    elif events.paddle_bounce == "RIGHT":
        sparks.burst(pos, BALL_OUTER, spread=math.pi * 0.8, heading=math.pi)
    if events.wall_bounce:
        heading = math.pi / 2 if ball.vel.y > 0 else -math.pi / 2
        sparks.burst(pos, WHITE, n=SPARK_N // 3, spread=math.pi * 0.6, heading=heading)
    if events.winner:
        confetti.burst((match.width / 2, match.height / 2))
