"""The runner body: kinematic integration, jumping, landing and death.

The body never probes the terrain. It integrates its own motion and clears
``grounded`` at the end of every step; whether it is supported next frame is
decided solely by the collision resolver calling ``land_on``.
"""

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import CollisionConfig, RunnerConfig


def normalize_angle(angle: float) -> float:
    """Wrap an angle in radians into (-pi, pi]."""
    while angle > math.pi:
        angle -= 2 * math.pi
    while angle <= -math.pi:
        angle += 2 * math.pi
    return angle


@dataclass
class Particle:
    """Cosmetic particle for the trail and the death burst. No collision."""
    x: float
    y: float
    vx: float
    vy: float
    life: float
    size: float
    angle: float = 0.0
    lifetime: float = 1.0

    @property
    def alpha(self) -> float:
        """Remaining life as a fraction of the initial lifetime."""
        return max(0.0, min(1.0, self.life / self.lifetime))


class Runner:
    """Player-controlled body moving forward at constant speed.

    State is screen-space: (x, y) is the top-left corner of the square body.

    Args:
        config: Body parameters. Uses defaults if None.
        rng: Random source for cosmetic particles.
    """

    def __init__(self, config: Optional[RunnerConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or RunnerConfig()
        self.rng = rng or random.Random()
        self.width = self.config.size
        self.height = self.config.size
        self.trail: List[Particle] = []
        self.burst: List[Particle] = []
        self.reset()

    def reset(self) -> None:
        """Return to the spawn point, airborne and upright, with no particles."""
        self.x, self.y = self.config.spawn
        self.vx = self.config.run_speed
        self.vy = 0.0
        self.angle = 0.0
        self.grounded = False
        self.prev_y = self.y
        self.trail = []
        self.burst = []

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.vx, self.vy

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def advance(self, dt: float, pressed_edge: bool = False, held: bool = False) -> None:
        """Integrate one frame.

        Args:
            dt: Elapsed time in seconds, already clamped by the caller.
            pressed_edge: True on the single frame a press began.
            held: True while the press is held. Only the controller's landing
                rebound uses it; integration itself reacts to the edge only.
        """
        self.prev_y = self.y

        self.x += self.vx * dt

        if pressed_edge and self.grounded:
            self.jump()

        self.vy += self.config.gravity * dt
        self.y += self.vy * dt

        if not self.grounded:
            self.angle += self.config.spin_rate * dt
        self.angle = normalize_angle(self.angle)

        self.grounded = False

        self._emit_trail()
        self.update_particles(dt)

    def land_on(self, surface_top: float) -> None:
        """Rest flush on a surface and square up the rotation."""
        self.grounded = True
        self.vy = 0.0
        self.y = surface_top - self.height
        quarter = math.pi / 2
        self.angle = normalize_angle(round(self.angle / quarter) * quarter)

    def jump(self) -> None:
        self.vy = self.config.jump_speed
        self.grounded = False

    def kill(self) -> None:
        """Stop forward motion. Pose and particles are left as they are."""
        self.vx = 0.0

    def death_box(self, shrink: Optional[float] = None) -> Tuple[float, float, float, float]:
        """Shrunk hitbox (x, y, width, height), centered on the visual box.

        ``shrink`` defaults to ``CollisionConfig.death_box_shrink``.
        """
        if shrink is None:
            shrink = CollisionConfig().death_box_shrink
        sx = self.width * shrink
        sy = self.height * shrink
        return self.x + sx / 2, self.y + sy / 2, self.width - sx, self.height - sy

    # ------------------------------------------------------------------
    # Cosmetic particles
    # ------------------------------------------------------------------

    def _emit_trail(self) -> None:
        cx, cy = self.center
        lifetime = self.config.trail_lifetime
        self.trail.append(Particle(
            x=cx,
            y=cy,
            vx=-self.vx * 0.05,
            vy=(self.rng.random() - 0.5) * 20,
            life=lifetime,
            size=max(4.0, min(self.width, self.height) * 0.6),
            angle=self.angle,
            lifetime=lifetime,
        ))
        if len(self.trail) > self.config.trail_max:
            del self.trail[0]

    def spawn_burst(self) -> None:
        """Scatter the death burst from the body's center."""
        cx, cy = self.center
        for _ in range(self.config.burst_count):
            heading = self.rng.random() * 2 * math.pi
            speed = 100 + self.rng.random() * 200
            self.burst.append(Particle(
                x=cx,
                y=cy,
                vx=math.cos(heading) * speed,
                vy=math.sin(heading) * speed * 0.5 - 80,
                life=1.0,
                size=6 + self.rng.random() * 6,
            ))

    def update_particles(self, dt: float) -> None:
        """Move, shrink and expire particles."""
        for p in self.trail:
            p.life -= dt
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.size *= 1 - dt * 3
        self.trail = [p for p in self.trail if p.life > 0 and p.size > 0.5]

        for p in self.burst:
            p.life -= dt
            p.vy += self.config.gravity * dt * 0.5
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.size *= 1 - dt * 1.5
        self.burst = [p for p in self.burst if p.life > 0]
