import math

W, H = 960, 540
FPS = 60

BG = (0, 0, 0)
WHITE = (235, 235, 235)
GRAY = (130, 130, 130)
ACCENT = (0, 242, 255)
BALL_INNER = (255, 110, 199)
BALL_OUTER = (0, 242, 255)

GRID = 15
PADDLE_W = GRID
PADDLE_H = GRID * 5
BALL_R = 8

# smallest arena that fits both paddles between the margins with room for the ball
MIN_W = GRID * 6 + BALL_R * 4
MIN_H = GRID * 2 + PADDLE_H

WIN_SCORE = 5

BALL_MAX_SPEED = 14.0
BALL_SPEEDUP = 0.5
SERVE_DY_RATIO = 0.7

MAX_BOUNCE_ANGLE = math.pi / 4
BOUNCE_JITTER = 0.1

PADDLE_SPEED_STEP = 0.2
PADDLE_MAX_SPEED = 8.0

DIFFS = {
    "easy":   {"ball_speed": 4.0,  "paddle_speed": 4.0},
    "hard":   {"ball_speed": 7.0,  "paddle_speed": 6.0},
    "insane": {"ball_speed": 10.0, "paddle_speed": 9.0},
}
DEFAULT_DIFFICULTY = "hard"

SPARK_LIFE = (0.20, 0.48)
SPARK_N = 22
SPARK_DRAG = 0.90

SFX_VOL = 0.8
