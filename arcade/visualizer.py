"""Pygame frontend — draws the session every frame and maps keys to aim, power and curve."""

import math
import random

try:
    import pygame
except ImportError:
    pygame = None

from penalty.keeper import DIFFICULTY_LEVELS
from penalty.session import ShotSession, result_message
from penalty.stats import accuracy, load_stats, record_game
from penalty import pitch

SCALE = 4
HUD_H = 90
WIN_W = pitch.FIELD_WIDTH * SCALE
WIN_H = pitch.FIELD_HEIGHT * SCALE + HUD_H

# Colors
BG_COLOR = (26, 28, 44)
FIELD_GREEN = (56, 183, 100)
FIELD_LIGHT = (76, 198, 115)
LINE_WHITE = (244, 244, 244)
NET_GRAY = (139, 155, 180)
POST_GOLD = (255, 205, 117)
KEEPER_RED = (228, 59, 68)
TEXT_WHITE = (224, 224, 224)
TEXT_DIM = (136, 136, 136)
AIM_YELLOW = (255, 217, 61)

RESULT_TEXT = {
    "goal": ("GOAL!", FIELD_LIGHT),
    "save": ("SAVED!", KEEPER_RED),
    "miss": ("MISS!", NET_GRAY),
}

AIM_STEP = 1.5
POWER_STEP = 1.0
CURVE_STEP = 4.0


def _px(value):
    return int(value * SCALE)


def _draw_field(surface):
    stripe = 20
    for x in range(0, pitch.FIELD_WIDTH, stripe * 2):
        pygame.draw.rect(surface, FIELD_LIGHT, (_px(x), 0, _px(stripe), _px(pitch.FIELD_HEIGHT)))
    spot = (_px(pitch.BALL_START_X), _px(pitch.BALL_START_Y))
    pygame.draw.circle(surface, LINE_WHITE, spot, 3)
    pygame.draw.line(surface, LINE_WHITE, (0, _px(pitch.GOAL_BOTTOM + 30)),
                     (WIN_W, _px(pitch.GOAL_BOTTOM + 30)), 2)


def _draw_goal(surface):
    left, top = _px(pitch.GOAL_LEFT), _px(pitch.GOAL_Y)
    width, height = _px(pitch.GOAL_WIDTH), _px(pitch.GOAL_HEIGHT)
    for gx in range(left, left + width, 16):
        pygame.draw.line(surface, NET_GRAY, (gx, top), (gx, top + height), 1)
    for gy in range(top, top + height, 16):
        pygame.draw.line(surface, NET_GRAY, (left, gy), (left + width, gy), 1)
    post = _px(pitch.POST_WIDTH)
    pygame.draw.rect(surface, POST_GOLD, (left, top, post, height))
    pygame.draw.rect(surface, POST_GOLD, (left + width - post, top, post, height))
    pygame.draw.rect(surface, POST_GOLD, (left, top - post, width, post))


def _draw_keeper(surface, keeper):
    x = _px(keeper["x"])
    y = _px(pitch.KEEPER_Y)
    w, h = _px(pitch.KEEPER_WIDTH), _px(pitch.KEEPER_HEIGHT)
    if keeper["dive_state"] == "idle":
        pygame.draw.rect(surface, KEEPER_RED, (x, y, w, h))
        return
    # Lean the body over as the dive progresses
    lean = keeper["dive_progress"] * (h * 0.6)
    sign = -1 if keeper["dive_state"] == "diving-left" else 1
    body = [(x, y + h), (x + w, y + h), (x + w + sign * lean, y), (x + sign * lean, y)]
    pygame.draw.polygon(surface, KEEPER_RED, body)


def _draw_ball(surface, ball):
    pos = (_px(ball["x"]), _px(ball["y"]))
    pygame.draw.circle(surface, (20, 20, 30), (pos[0] + 3, pos[1] + 4), _px(pitch.BALL_RADIUS))
    pygame.draw.circle(surface, LINE_WHITE, pos, _px(pitch.BALL_RADIUS))


def _draw_aim(surface, aim, power, curve):
    # Dotted preview of the straight-line direction, length scaled by power
    angle = math.radians(aim)
    length = 25 + power * 0.6
    sx, sy = pitch.BALL_START_X, pitch.BALL_START_Y
    for i in range(1, 8):
        t = i / 8 * length
        bend = curve / 100 * (t / length) ** 2 * 10
        px = sx + math.sin(angle) * t + bend
        py = sy - math.cos(angle) * t
        pygame.draw.circle(surface, AIM_YELLOW, (_px(px), _px(py)), 3)


def _draw_hud(surface, snap, difficulty, aim, power, curve, fonts):
    top = _px(pitch.FIELD_HEIGHT)
    pygame.draw.rect(surface, BG_COLOR, (0, top, WIN_W, HUD_H))
    t = snap["tally"]
    line1 = (f"Shots left: {t['shots_remaining']}   Goals: {t['goals']}   "
             f"Saves: {t['saves']}   Misses: {t['misses']}   Streak: {t['streak']}")
    line2 = f"Aim {aim:+.0f}°   Power {power:.0f}%   Curve {curve:+.0f}   [{difficulty}]"
    line3 = "←/→ aim  ↑/↓ power  A/D curve  SPACE shoot  R reset  1/2/3 level  N new  Q quit"
    surface.blit(fonts["md"].render(line1, True, TEXT_WHITE), (12, top + 10))
    surface.blit(fonts["md"].render(line2, True, AIM_YELLOW), (12, top + 36))
    surface.blit(fonts["sm"].render(line3, True, TEXT_DIM), (12, top + 64))


def _draw_banner(surface, text, color, font, sub=None, sub_font=None):
    label = font.render(text, True, color)
    rect = label.get_rect(center=(WIN_W // 2, _px(pitch.FIELD_HEIGHT) // 2))
    surface.blit(label, rect)
    if sub:
        sub_label = sub_font.render(sub, True, TEXT_WHITE)
        surface.blit(sub_label, sub_label.get_rect(center=(WIN_W // 2, rect.bottom + 24)))


def run_visualizer(difficulty="medium", stats_path=None):
    """Launch the Pygame frontend."""
    if pygame is None:
        print("ERROR: pygame is not installed. Run: pip install pygame")
        return

    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("Pixel Penalty")
    clock = pygame.time.Clock()

    fonts = {
        "sm": pygame.font.SysFont("monospace", 12),
        "md": pygame.font.SysFont("monospace", 16),
        "xl": pygame.font.SysFont("monospace", 48, bold=True),
    }

    session = ShotSession(difficulty, rng=random.Random())
    aim, power, curve = 0.0, 70.0, 0.0
    career = load_stats(stats_path)
    stats_recorded = False

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_q, pygame.K_ESCAPE):
                    running = False
                elif event.key == pygame.K_SPACE:
                    session.take_shot(aim, power, curve)
                elif event.key == pygame.K_r:
                    session.reset_shot()
                    curve = 0.0
                elif event.key == pygame.K_n:
                    session.start_game()
                    stats_recorded = False
                elif event.unicode in ("1", "2", "3"):
                    level = list(DIFFICULTY_LEVELS)[int(event.unicode) - 1]
                    session.start_game(level)
                    stats_recorded = False

        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            aim -= AIM_STEP
        if keys[pygame.K_RIGHT]:
            aim += AIM_STEP
        if keys[pygame.K_UP]:
            power += POWER_STEP
        if keys[pygame.K_DOWN]:
            power -= POWER_STEP
        if keys[pygame.K_a]:
            curve -= CURVE_STEP
        if keys[pygame.K_d]:
            curve += CURVE_STEP
        aim = max(pitch.AIM_RANGE[0], min(pitch.AIM_RANGE[1], aim))
        power = max(pitch.POWER_RANGE[0], min(pitch.POWER_RANGE[1], power))
        curve = max(pitch.CURVE_RANGE[0], min(pitch.CURVE_RANGE[1], curve))

        session.tick()
        snap = session.snapshot()

        if session.game_over and not stats_recorded:
            career = record_game(session.tally, session.total_shots, stats_path) or career
            stats_recorded = True

        screen.fill(FIELD_GREEN)
        _draw_field(screen)
        _draw_goal(screen)
        _draw_keeper(screen, snap["keeper"])
        _draw_ball(screen, snap["ball"])
        if session.can_shoot:
            _draw_aim(screen, aim, power, curve)
        if snap["showing_result"]:
            text, color = RESULT_TEXT[snap["shot_result"]]
            _draw_banner(screen, text, color, fonts["xl"])
        elif session.game_over:
            t = snap["tally"]
            sub = (f"{result_message(t['goals'], t['max_streak'], session.total_shots)}  "
                   f"Career {accuracy(career)}%")
            _draw_banner(screen, f"{t['goals']} / {session.total_shots}", LINE_WHITE,
                         fonts["xl"], sub, fonts["md"])
        _draw_hud(screen, snap, session.difficulty.label, aim, power, curve, fonts)

        pygame.display.flip()
        clock.tick(pitch.TICK_RATE_HZ)

    pygame.quit()
