import argparse
import logging
import os
import sys
import pygame
from config import W, H, MIN_W, MIN_H, FPS, DIFFS, DEFAULT_DIFFICULTY, SFX_VOL, BALL_INNER, BALL_OUTER
from match import Match, RUNNING, PAUSED, SCORED, GAME_OVER
from fx import Sparks, Confetti, emit_frame_fx
from ui import (
    draw_arena, draw_paddles, draw_ball, draw_scoreboard, draw_overlay, draw_help,
    difficulty_buttons, draw_difficulty_buttons, continue_button,
)

logger = logging.getLogger(__name__)

KEY_INTENTS = {
    pygame.K_w: "LEFT_UP",
    pygame.K_s: "LEFT_DOWN",
    pygame.K_UP: "RIGHT_UP",
    pygame.K_DOWN: "RIGHT_DOWN",
}

KEY_DIFFS = {
    pygame.K_1: "easy",
    pygame.K_2: "hard",
    pygame.K_3: "insane",
}


def safe_sound(path):
    if not pygame.mixer.get_init():
        return None
    if not os.path.isfile(path):
        logger.warning("sound file missing: %s", path)
        return None
    try:
        snd = pygame.mixer.Sound(path)
    except pygame.error as e:
        logger.warning("could not load %s: %s", path, e)
        return None
    snd.set_volume(SFX_VOL)
    return snd


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Neon Pong. Two players, one keyboard, first to 5.")
    parser.add_argument("--difficulty", "-d", choices=list(DIFFS), default=DEFAULT_DIFFICULTY,
                        help="Starting difficulty tier. Default: %(default)s")
    parser.add_argument("--width", type=int, default=W, help="Window width. Default: %(default)s")
    parser.add_argument("--height", type=int, default=H, help="Window height. Default: %(default)s")
    parser.add_argument("--fps", type=int, default=FPS, help="Frame cap, 0 for unlimited. Default: %(default)s")
    parser.add_argument("--mute", action="store_true", help="Disable sound effects.")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Default: %(default)s")
    args = parser.parse_args(argv)
    if args.width < MIN_W or args.height < MIN_H:
        parser.error(f"window must be at least {MIN_W}x{MIN_H}")
    return args


def run(args):
    pygame.init()
    if not args.mute:
        try:
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning("audio disabled: %s", e)

    base_dir = os.path.dirname(os.path.abspath(__file__))
    audio_dir = os.path.join(base_dir, "audio")
    hit_sfx = wall_sfx = score_sfx = None
    if not args.mute:
        hit_sfx = safe_sound(os.path.join(audio_dir, "hit.mp3"))
        wall_sfx = safe_sound(os.path.join(audio_dir, "wall.mp3"))
        score_sfx = safe_sound(os.path.join(audio_dir, "score.mp3"))

    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    pygame.display.set_caption("Neon Pong")
    clock = pygame.time.Clock()

    font = pygame.font.SysFont("consolas", 48)
    small = pygame.font.SysFont("consolas", 18)
    big = pygame.font.SysFont("consolas", 56)

    sparks = Sparks()
    confetti = Confetti()

    def on_score(left, right):
        pygame.display.set_caption(f"Neon Pong  {left} : {right}")

    def on_match_end(winner):
        logger.info("%s takes the match", winner)

    match = Match(args.width, args.height, difficulty=args.difficulty,
                  on_score=on_score, on_match_end=on_match_end)

    def play(snd):
        if snd:
            snd.play()

    def new_match():
        sparks.clear()
        confetti.clear()
        match.new_match()

    match.set_difficulty(args.difficulty)

    running = True
    while running:
        dt = clock.tick(args.fps) / 1000.0
        if dt > 0.05:
            dt = 0.05

        w, h = match.width, match.height
        diff_rects = difficulty_buttons(w, h)
        btn_continue = continue_button(w, h)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False

            elif e.type == pygame.VIDEORESIZE:
                w, h = max(MIN_W, e.w), max(MIN_H, e.h)
                if (w, h) != (e.w, e.h):
                    screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
                match.resize(w, h)

            elif e.type == pygame.KEYDOWN:
                if e.key == pygame.K_ESCAPE:
                    running = False
                elif e.key in KEY_INTENTS:
                    match.press(KEY_INTENTS[e.key])
                elif e.key in KEY_DIFFS:
                    if match.state == GAME_OVER:
                        confetti.clear()
                    match.set_difficulty(KEY_DIFFS[e.key])
                elif e.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    match.continue_play()
                elif e.key == pygame.K_p:
                    match.toggle_pause()
                elif e.key == pygame.K_r:
                    new_match()

            elif e.type == pygame.KEYUP:
                if e.key in KEY_INTENTS:
                    match.release(KEY_INTENTS[e.key])

            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                mx, my = e.pos
                if match.state == SCORED and btn_continue.collidepoint(mx, my):
                    match.continue_play()
                    continue
                for name, r in diff_rects.items():
                    if r.collidepoint(mx, my):
                        if match.state == GAME_OVER:
                            confetti.clear()
                        match.set_difficulty(name)

        events = match.tick()
        if events.wall_bounce:
            play(wall_sfx)
        if events.paddle_bounce:
            play(hit_sfx)
        if events.scored:
            play(score_sfx)
        emit_frame_fx(events, match, sparks, confetti)

        if match.state != PAUSED:
            sparks.update(dt)
            confetti.update(dt)

        w, h = match.width, match.height
        draw_arena(screen, w, h)
        draw_paddles(screen, match)
        if match.state in (RUNNING, PAUSED):
            draw_ball(screen, match.ball)
        sparks.draw(screen)
        draw_scoreboard(screen, font, *match.scores, w)
        draw_help(screen, small)
        draw_difficulty_buttons(screen, small, difficulty_buttons(w, h), match.difficulty)

        if match.state == SCORED:
            draw_overlay(screen, big, small, match.message, "Press Enter or click Continue",
                         w, h, btn=continue_button(w, h))
        elif match.state == PAUSED:
            draw_overlay(screen, big, small, match.message, "Press P to resume", w, h)
        elif match.state == GAME_OVER:
            color = BALL_INNER if match.winner == "Player 1" else BALL_OUTER
            draw_overlay(screen, big, small, match.message,
                         "Press R for a rematch or pick a difficulty", w, h)
            confetti.draw(screen)
            pygame.draw.rect(screen, color, (0, 0, w, h), 4)

        pygame.display.flip()

    return 0


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        return run(args)
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130
    except Exception:
        logger.exception("neon pong crashed")
        return 1
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())
