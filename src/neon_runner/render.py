"""Pygame rendering of frame snapshots.

Purely cosmetic: the renderer reads a FrameSnapshot and never touches
gameplay state. Used by the interactive engine (window surface) and the
Gymnasium environment (offscreen surface converted to an RGB array).
"""

import math
from typing import Optional, Tuple

import numpy as np
import pygame

from .config import GameConfig
from .course import ColumnTag
from .run import FrameSnapshot, RunState


# Colors (RGB)
COLOR_BG = (26, 26, 26)
COLOR_GROUND = (11, 11, 11)
COLOR_GRID = (34, 34, 34)
COLOR_BLOCK = (0, 250, 255)
COLOR_BLOCK_HIGHLIGHT = (120, 255, 255)
COLOR_HAZARD = (255, 77, 109)
COLOR_RUNNER = (0, 250, 255)
COLOR_TRAIL = (124, 255, 0)
COLOR_PROGRESS_TRACK = (40, 40, 40)
COLOR_PROGRESS = (0, 120, 130)
COLOR_TEXT = (255, 255, 255)

GRID_SPACING = 80


class Renderer:
    """Draws snapshots onto a pygame surface.

    Args:
        config: Game configuration (screen size).
        surface: Target surface. An offscreen surface of the configured
            screen size is created if None.
    """

    def __init__(self, config: Optional[GameConfig] = None, surface: Optional[pygame.Surface] = None):
        self.config = config or GameConfig()
        if not pygame.get_init():
            pygame.init()
        self.surface = surface or pygame.Surface(
            (self.config.screen_width, self.config.screen_height)
        )
        self._font: Optional[pygame.font.Font] = None

    def _world_to_screen(self, x: float, y: float, camera_x: float) -> Tuple[int, int]:
        """World and screen share the y-down axis; only the camera shifts x."""
        return int(x - camera_x), int(y)

    def draw(self, snap: FrameSnapshot) -> pygame.Surface:
        """Render one frame and return the surface."""
        surf = self.surface
        width, height = surf.get_size()
        surf.fill(COLOR_BG)

        # Background grid scrolls slower than the world for a parallax feel
        offset = int(snap.camera_x * 0.5) % GRID_SPACING
        for gx in range(-offset, width, GRID_SPACING):
            pygame.draw.line(surf, COLOR_GRID, (gx, 0), (gx, height))

        ground_top = int(snap.ground_y)
        pygame.draw.rect(surf, COLOR_GROUND, (0, ground_top, width, height - ground_top))

        for obs in snap.obstacles:
            sx, sy = self._world_to_screen(obs.x, obs.y, snap.camera_x)
            w, h = int(obs.width), int(obs.height)
            if obs.tag is ColumnTag.HAZARD:
                pygame.draw.polygon(surf, COLOR_HAZARD, [
                    (sx, sy + h), (sx + w // 2, sy), (sx + w, sy + h),
                ])
            else:
                pygame.draw.rect(surf, COLOR_BLOCK, (sx, sy, w, h))
                pygame.draw.rect(surf, COLOR_BLOCK_HIGHLIGHT, (sx, sy, w, 6))

        self._draw_particles(snap)
        if snap.state is not RunState.DEAD:
            self._draw_runner(snap)
        self._draw_progress(snap)
        if snap.status:
            self._draw_status(snap.status)
        return surf

    def _draw_runner(self, snap: FrameSnapshot) -> None:
        size = max(1, int(snap.size))
        body = pygame.Surface((size, size), pygame.SRCALPHA)
        body.fill(COLOR_RUNNER)
        pygame.draw.rect(body, COLOR_TEXT, (0, 0, size, size), width=2)
        # Screen y points down, so a positive angle turns clockwise
        rotated = pygame.transform.rotate(body, -math.degrees(snap.angle))
        cx, cy = self._world_to_screen(snap.x + snap.size / 2, snap.y + snap.size / 2, snap.camera_x)
        self.surface.blit(rotated, rotated.get_rect(center=(cx, cy)))

    def _draw_particles(self, snap: FrameSnapshot) -> None:
        for p in snap.particles:
            size = max(1, int(p.size))
            square = pygame.Surface((size, size), pygame.SRCALPHA)
            square.fill((*COLOR_TRAIL, int(255 * p.alpha * 0.6)))
            sx, sy = self._world_to_screen(p.x - size / 2, p.y - size / 2, snap.camera_x)
            self.surface.blit(square, (sx, sy))

    def _draw_progress(self, snap: FrameSnapshot) -> None:
        width, height = self.surface.get_size()
        track = pygame.Rect(10, height - 36, width - 20, 20)
        pygame.draw.rect(self.surface, COLOR_PROGRESS_TRACK, track)
        filled = track.copy()
        filled.width = int(track.width * snap.progress)
        pygame.draw.rect(self.surface, COLOR_PROGRESS, filled)

    def _draw_status(self, text: str) -> None:
        if self._font is None:
            self._font = pygame.font.Font(None, 48)
        text_surface = self._font.render(text, True, COLOR_TEXT)
        width, height = self.surface.get_size()
        self.surface.blit(text_surface, text_surface.get_rect(center=(width // 2, height // 2)))

    def to_array(self, size: Optional[Tuple[int, int]] = None) -> np.ndarray:
        """Current surface as an (H, W, 3) uint8 array, optionally rescaled to (H, W)."""
        surf = self.surface
        if size is not None:
            out_h, out_w = size
            surf = pygame.transform.scale(surf, (out_w, out_h))
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(surf)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)
