import pygame
from config import BG, WHITE, GRAY, ACCENT, BALL_INNER, BALL_OUTER, GRID, DIFFS

def lerp_color(c1, c2, t):
    t = max(0.0, min(1.0, t))
    return tuple(int(round(a + (b - a) * t)) for a, b in zip(c1, c2))

def draw_arena(surf, w, h):
    surf.fill(BG)
    pygame.draw.rect(surf, WHITE, (0, 0, w, GRID))
    pygame.draw.rect(surf, WHITE, (0, h - GRID, w, GRID))
    for y in range(GRID, h - GRID, GRID * 2):
        pygame.draw.rect(surf, WHITE, (w // 2 - GRID // 2, y, GRID, GRID))

def draw_paddles(surf, match):
    for p in (match.left, match.right):
        pygame.draw.rect(surf, WHITE, (int(p.pos.x), int(p.pos.y), int(p.w), int(p.h)))

def draw_gradient_circle(surf, center, r, inner, outer, inner_r=2):
    """Filled circle shaded from inner colour at inner_r out to outer colour at r."""
    cx, cy = int(center[0]), int(center[1])
    r = int(r)
    if r <= 0:
        return
    span = max(1, r - inner_r)
    for rr in range(r, 0, -1):
        t = (rr - inner_r) / span
        pygame.draw.circle(surf, lerp_color(inner, outer, t), (cx, cy), rr)

def draw_ball(surf, ball):
    draw_gradient_circle(surf, (ball.pos.x, ball.pos.y), ball.r, BALL_INNER, BALL_OUTER)

def draw_scoreboard(surf, font, score_left, score_right, w):
    left = font.render(f"{score_left}", True, BALL_INNER)
    right = font.render(f"{score_right}", True, BALL_OUTER)
    colon = font.render(":", True, WHITE)
    y = GRID + 30
    surf.blit(left, left.get_rect(center=(w // 2 - 60, y)))
    surf.blit(colon, colon.get_rect(center=(w // 2, y)))
    surf.blit(right, right.get_rect(center=(w // 2 + 60, y)))

def button(surf, font, rect, text, active=False):
    bg = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
    bg.fill((255, 255, 255, 26 if not active else 70))
    surf.blit(bg, rect.topleft)
    pygame.draw.rect(surf, ACCENT if active else GRAY, rect, 2, border_radius=10)
    t = font.render(text, True, ACCENT if active else (210, 210, 210))
    surf.blit(t, t.get_rect(center=rect.center))

def difficulty_buttons(w, h):
    bw, bh, gap = 110, 30, 14
    total = len(DIFFS) * bw + (len(DIFFS) - 1) * gap
    x = w // 2 - total // 2
    y = h - GRID - bh - 12
    rects = {}
    for i, name in enumerate(DIFFS):
        rects[name] = pygame.Rect(x + i * (bw + gap), y, bw, bh)
    return rects

def draw_difficulty_buttons(surf, font, rects, active):
    for i, (name, rect) in enumerate(rects.items(), start=1):
        button(surf, font, rect, f"{i} {name.upper()}", active=(name == active))

def continue_button(w, h):
    rect = pygame.Rect(0, 0, 180, 40)
    rect.center = (w // 2, h // 2 + 40)
    return rect

def draw_overlay(surf, big, small, msg, hint, w, h, btn=None):
    panel = pygame.Surface((w, h), pygame.SRCALPHA)
    panel.fill((0, 0, 0, 150))
    surf.blit(panel, (0, 0))
    if msg:
        t = big.render(msg, True, ACCENT)
        surf.blit(t, t.get_rect(center=(w // 2, h // 2 - 40)))
    if hint:
        t = small.render(hint, True, GRAY)
        surf.blit(t, t.get_rect(center=(w // 2, h // 2 + 90)))
    if btn is not None:
        button(surf, small, btn, "CONTINUE", active=True)

def draw_help(surf, small):
    t = small.render("W/S  Up/Down  P pause  R restart  Esc quit", True, GRAY)
    surf.blit(t, (14, GRID + 6))
