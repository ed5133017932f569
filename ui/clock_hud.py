from __future__ import annotations

import math
from typing import List, Optional

import pygame

from settings import DAY_LENGTH_TICKS
from world.time.time_value import time_of_day

COLOR_SKY_DAY = (120, 180, 240)
COLOR_SKY_NIGHT = (10, 12, 30)
COLOR_TEXT = (240, 240, 240)
COLOR_SUBTITLE = (180, 180, 200)
COLOR_PANEL = (0, 0, 0, 150)

# Tick 0 is 06:00, so noon sits a quarter of the way into the day
TICKS_PER_HOUR = DAY_LENGTH_TICKS // 24
NOON_TICKS = 6 * TICKS_PER_HOUR


def format_clock(ticks: int) -> str:
    """Format a raw tick count as "Day N, HH:MM"."""
    tod = time_of_day(ticks)
    day = ticks // DAY_LENGTH_TICKS
    hours = (tod // TICKS_PER_HOUR + 6) % 24
    minutes = (tod % TICKS_PER_HOUR) * 60 // TICKS_PER_HOUR
    return f"Day {day + 1}, {hours:02d}:{minutes:02d}"


def daylight(ticks: int) -> float:
    """Ambient light in [0, 1]: 1 at noon, 0 at midnight."""
    angle = 2.0 * math.pi * (time_of_day(ticks) - NOON_TICKS) / DAY_LENGTH_TICKS
    return 0.5 + 0.5 * math.cos(angle)


def sky_color(ticks: int) -> tuple[int, int, int]:
    t = daylight(ticks)
    return tuple(
        int(night + (day - night) * t)
        for night, day in zip(COLOR_SKY_NIGHT, COLOR_SKY_DAY)
    )


def draw_clock(
    surface: pygame.Surface,
    font: pygame.font.Font,
    ticks: int,
    status_lines: Optional[List[str]] = None,
) -> None:
    """
    Fill the surface with the sky colour for ``ticks`` and draw the clock panel.
    """
    surface.fill(sky_color(ticks))

    lines = [format_clock(ticks)] + list(status_lines or [])
    line_height = font.get_linesize()
    panel_w = 320
    panel_h = 16 + line_height * len(lines)

    panel = pygame.Surface((panel_w, panel_h), pygame.SRCALPHA)
    panel.fill(COLOR_PANEL)
    surface.blit(panel, (12, 12))

    for i, text in enumerate(lines):
        color = COLOR_TEXT if i == 0 else COLOR_SUBTITLE
        text_surface = font.render(text, True, color)
        surface.blit(text_surface, (24, 20 + i * line_height))
