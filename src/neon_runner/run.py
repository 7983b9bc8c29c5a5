"""Run controller: owns the runner, the course and the run lifecycle.

One ``tick`` is one rendered frame:
clamp dt -> advance body -> frame camera -> query colliders -> resolve ->
apply landing/death -> landing rebound if held -> update progress.

State machine::

    ACTIVE --fatal--> DEAD --reset--> ACTIVE
    ACTIVE --end of course--> COMPLETE --reset--> ACTIVE

While DEAD or COMPLETE gameplay time stops; only cosmetic particles decay.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .body import Particle, Runner
from .collision import CollisionResult, Impact, resolve
from .config import GameConfig
from .course import ColumnTag, Course, Obstacle
from .input import InputSignals

logger = logging.getLogger(__name__)


class RunState(Enum):
    ACTIVE = "active"
    DEAD = "dead"
    COMPLETE = "complete"


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view of one frame for renderers and agents."""
    x: float
    y: float
    angle: float
    size: float
    vx: float
    vy: float
    grounded: bool
    state: RunState
    impact: Optional[Impact]
    camera_x: float
    ground_y: float
    progress: float  # Fraction of the course covered, in [0, 1]
    status: str
    obstacles: Tuple[Obstacle, ...] = ()
    particles: Tuple[Particle, ...] = field(default=(), repr=False)

    @property
    def alive(self) -> bool:
        return self.state is not RunState.DEAD


class RunController:
    """Drives a single run frame by frame.

    Args:
        config: Game configuration. Uses defaults if None.
        seed: Seed for the shared random source (course and particles).
            Unseeded if None.
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        self.config = config or GameConfig()
        self.rng = random.Random(seed)

        self.course = Course(self.config.course, ground_y=self.config.ground_y, rng=self.rng)
        self.runner = Runner(self.config.runner, rng=self.rng)

        self.state = RunState.ACTIVE
        self.impact: Optional[Impact] = None
        self.progress = 0.0
        self.camera_x = 0.0
        self.frames = 0

    @property
    def active(self) -> bool:
        return self.state is RunState.ACTIVE

    @property
    def progress_fraction(self) -> float:
        return min(1.0, max(0.0, self.progress / self.config.progress_span))

    @property
    def status_text(self) -> str:
        if self.state is RunState.DEAD:
            cause = self.impact.value if self.impact else "crash"
            return f"You died ({cause}). Press Space to restart"
        if self.state is RunState.COMPLETE:
            return "Course Complete! Press Space to play again"
        return ""

    def reset(self, seed: Optional[int] = None) -> None:
        """Start a fresh run: new course, runner at spawn, zero progress."""
        if seed is not None:
            self.rng.seed(seed)
        self.runner.reset()
        self.course.reset()
        self.state = RunState.ACTIVE
        self.impact = None
        self.progress = 0.0
        self.camera_x = 0.0
        self.frames = 0
        logger.info(
            "Run reset: %d columns (%d hazards)",
            len(self.course), self.course.count(ColumnTag.HAZARD),
        )

    def tick(self, dt: float, signals: InputSignals = InputSignals()) -> CollisionResult:
        """Advance one frame.

        Args:
            dt: Wall-clock time since the previous frame (s). Clamped to max_dt.
            signals: This frame's input.

        Returns:
            The collision verdict for the frame (empty when not ACTIVE).
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        dt = min(dt, self.config.max_dt)

        runner = self.runner
        if not self.active:
            runner.update_particles(dt)
            return CollisionResult()

        runner.advance(dt, signals.pressed_edge, signals.held)
        self.frames += 1

        self.camera_x = max(0.0, runner.x - self.config.screen_width * self.config.camera_lead)
        colliders = self.course.active_colliders(self.camera_x, self.config.screen_width)
        result = resolve(runner, runner.prev_y, colliders, self.config.collision)

        if result.landed:
            runner.land_on(result.ground_y)

        if not result.fatal and runner.y > self.config.screen_height:
            result = CollisionResult(landed=result.landed, ground_y=result.ground_y,
                                     fatal=True, impact=Impact.FALL)

        if result.fatal:
            self._die(result.impact)
        elif result.landed and signals.held:
            runner.jump()

        self.progress = runner.x
        if self.active and runner.x >= self.course.total_width:
            self.state = RunState.COMPLETE
            logger.info("Course complete after %d frames", self.frames)

        return result

    def _die(self, impact: Optional[Impact]) -> None:
        self.state = RunState.DEAD
        self.impact = impact
        self.runner.kill()
        self.runner.spawn_burst()
        logger.info(
            "Runner died (%s) at x=%.1f, progress %.0f%%",
            impact.value if impact else "unknown", self.runner.x, self.progress_fraction * 100,
        )

    def snapshot(self) -> FrameSnapshot:
        runner = self.runner
        return FrameSnapshot(
            x=runner.x,
            y=runner.y,
            angle=runner.angle,
            size=runner.width,
            vx=runner.vx,
            vy=runner.vy,
            grounded=runner.grounded,
            state=self.state,
            impact=self.impact,
            camera_x=self.camera_x,
            ground_y=self.course.ground_y,
            progress=self.progress_fraction,
            status=self.status_text,
            obstacles=tuple(self.course.active_colliders(self.camera_x, self.config.screen_width)),
            particles=tuple(runner.trail) + tuple(runner.burst),
        )
