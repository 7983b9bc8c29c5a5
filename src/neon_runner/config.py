"""Configuration system for the auto-runner.

Every tunable number of the simulation lives in one of four dataclass groups:
- RunnerConfig: the body (size, forward speed, gravity, jump launch, spin)
- CourseConfig: the obstacle generator (column count, gap/platform/hazard odds)
- CollisionConfig: death box shrink and landing tolerances
- GameConfig: the composition of the above plus display and frame clamp

Defaults reproduce the reference feel of the game; derived values are exposed
as properties so they never drift from the parameters they depend on.
"""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Any, ClassVar
import math


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


def _check_range(name: str, value: Tuple[int, int]) -> None:
    low, high = value
    if low < 0 or high < low:
        raise ValueError(f"{name} must be an ordered non-negative (low, high) pair, got {value}")


@dataclass
class RunnerConfig:
    """Body attributes for the player-controlled runner.

    Coordinates are screen-space: x grows to the right, y grows downward, so
    gravity is positive and the jump launch speed is negative.
    """

    tile_size: float = 64.0  # Grid unit shared with the course (px)
    size_ratio: float = 0.9  # Body edge length as a fraction of tile_size

    run_speed: float = 300.0  # Constant forward speed while alive (px/s)
    gravity: float = 1800.0  # Downward acceleration (px/s^2)
    jump_speed: float = -700.0  # Vertical launch velocity (px/s), negative = up
    spin_rate: float = math.pi / 2  # Airborne rotation rate (rad/s)

    spawn: Tuple[float, float] = (100.0, 200.0)  # Top-left corner at reset, starts airborne

    # Trail and death-burst particles (cosmetic only)
    trail_lifetime: float = 0.33
    trail_max: int = 30
    burst_count: int = 20

    def __post_init__(self):
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.run_speed < 0:
            raise ValueError(f"run_speed must be non-negative, got {self.run_speed}")
        if self.jump_speed >= 0:
            raise ValueError(f"jump_speed must be negative (upward), got {self.jump_speed}")

    @property
    def size(self) -> float:
        """Edge length of the (square) body in pixels."""
        return self.tile_size * self.size_ratio

    @property
    def apex_height(self) -> float:
        """Height gained by a jump from rest under constant gravity: v0^2 / 2g."""
        return self.jump_speed ** 2 / (2 * self.gravity)

    @property
    def airtime(self) -> float:
        """Time from launch back to launch height: 2 * |v0| / g."""
        return 2 * abs(self.jump_speed) / self.gravity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tile_size": self.tile_size,
            "size_ratio": self.size_ratio,
            "run_speed": self.run_speed,
            "gravity": self.gravity,
            "jump_speed": self.jump_speed,
            "spin_rate": self.spin_rate,
            "spawn": list(self.spawn),
            "trail_lifetime": self.trail_lifetime,
            "trail_max": self.trail_max,
            "burst_count": self.burst_count,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RunnerConfig":
        """Create from dictionary. Missing keys use defaults."""
        defaults = cls()
        return cls(
            tile_size=d.get("tile_size", defaults.tile_size),
            size_ratio=d.get("size_ratio", defaults.size_ratio),
            run_speed=d.get("run_speed", defaults.run_speed),
            gravity=d.get("gravity", defaults.gravity),
            jump_speed=d.get("jump_speed", defaults.jump_speed),
            spin_rate=d.get("spin_rate", defaults.spin_rate),
            spawn=tuple(d.get("spawn", defaults.spawn)),
            trail_lifetime=d.get("trail_lifetime", defaults.trail_lifetime),
            trail_max=d.get("trail_max", defaults.trail_max),
            burst_count=d.get("burst_count", defaults.burst_count),
        )


@dataclass
class CourseConfig:
    """Obstacle course generation parameters.

    The course is a row of tile-wide columns. Generation alternates random
    gaps and platform runs; some platform columns become hazards.
    """

    tile_size: float = 64.0
    column_count: int = 160
    safe_columns: int = 6  # Leading columns forced SOLID

    gap_chance: float = 0.25  # Probability a gap precedes each platform run
    gap_length: Tuple[int, int] = (1, 3)  # Inclusive range of EMPTY columns per gap
    platform_length: Tuple[int, int] = (1, 4)  # Inclusive range of columns per run
    hazard_chance: float = 0.08  # Per-column probability within a run

    # Hazard footprint relative to one tile
    hazard_inset: float = 0.15
    hazard_width: float = 0.7
    hazard_height: float = 0.45

    # Columns of padding on each side of the queried view window
    query_margin: int = 2

    PROBABILITY_FIELDS: ClassVar[Tuple[str, ...]] = ("gap_chance", "hazard_chance")

    def __post_init__(self):
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.column_count < self.safe_columns:
            raise ValueError(
                f"column_count ({self.column_count}) must cover safe_columns ({self.safe_columns})"
            )
        for name in self.PROBABILITY_FIELDS:
            _check_probability(name, getattr(self, name))
        _check_range("gap_length", self.gap_length)
        _check_range("platform_length", self.platform_length)
        if self.platform_length[0] < 1:
            raise ValueError("platform_length must place at least one column")

    @property
    def total_width(self) -> float:
        """Horizontal extent of the whole course in pixels."""
        return self.column_count * self.tile_size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tile_size": self.tile_size,
            "column_count": self.column_count,
            "safe_columns": self.safe_columns,
            "gap_chance": self.gap_chance,
            "gap_length": list(self.gap_length),
            "platform_length": list(self.platform_length),
            "hazard_chance": self.hazard_chance,
            "hazard_inset": self.hazard_inset,
            "hazard_width": self.hazard_width,
            "hazard_height": self.hazard_height,
            "query_margin": self.query_margin,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CourseConfig":
        """Create from dictionary. Missing keys use defaults."""
        defaults = cls()
        return cls(
            tile_size=d.get("tile_size", defaults.tile_size),
            column_count=d.get("column_count", defaults.column_count),
            safe_columns=d.get("safe_columns", defaults.safe_columns),
            gap_chance=d.get("gap_chance", defaults.gap_chance),
            gap_length=tuple(d.get("gap_length", defaults.gap_length)),
            platform_length=tuple(d.get("platform_length", defaults.platform_length)),
            hazard_chance=d.get("hazard_chance", defaults.hazard_chance),
            hazard_inset=d.get("hazard_inset", defaults.hazard_inset),
            hazard_width=d.get("hazard_width", defaults.hazard_width),
            hazard_height=d.get("hazard_height", defaults.hazard_height),
            query_margin=d.get("query_margin", defaults.query_margin),
        )


@dataclass
class CollisionConfig:
    """Collision classification tolerances."""

    death_box_shrink: float = 0.20  # Fraction removed from each axis of the visual box
    landing_tolerance: float = 4.0  # Slack on "previous bottom was above block top" (px)
    upward_tolerance: float = 50.0  # Max upward speed still accepted as a landing (px/s)

    def __post_init__(self):
        if not 0.0 <= self.death_box_shrink < 1.0:
            raise ValueError(f"death_box_shrink must be within [0, 1), got {self.death_box_shrink}")
        if self.landing_tolerance < 0 or self.upward_tolerance < 0:
            raise ValueError("collision tolerances must be non-negative")

    def to_dict(self) -> Dict[str, float]:
        return {
            "death_box_shrink": self.death_box_shrink,
            "landing_tolerance": self.landing_tolerance,
            "upward_tolerance": self.upward_tolerance,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "CollisionConfig":
        """Create from dictionary. Missing keys use defaults."""
        defaults = cls()
        return cls(
            death_box_shrink=d.get("death_box_shrink", defaults.death_box_shrink),
            landing_tolerance=d.get("landing_tolerance", defaults.landing_tolerance),
            upward_tolerance=d.get("upward_tolerance", defaults.upward_tolerance),
        )


@dataclass
class GameConfig:
    """Complete game configuration combining all parameter groups."""
    runner: RunnerConfig = field(default_factory=RunnerConfig)
    course: CourseConfig = field(default_factory=CourseConfig)
    collision: CollisionConfig = field(default_factory=CollisionConfig)

    # Display settings (also define the collider query window and baseline)
    screen_width: int = 1280
    screen_height: int = 720
    fps: int = 60

    ground_ratio: float = 0.82  # Baseline as a fraction of screen height
    camera_lead: float = 0.25  # Runner held at this fraction of the view width
    max_dt: float = 0.03  # Frame time ceiling (s)

    def __post_init__(self):
        if self.runner.tile_size != self.course.tile_size:
            raise ValueError(
                f"runner and course must share a tile size "
                f"({self.runner.tile_size} != {self.course.tile_size})"
            )
        if self.max_dt <= 0:
            raise ValueError(f"max_dt must be positive, got {self.max_dt}")

    @property
    def ground_y(self) -> float:
        """Shared baseline every obstacle rests on."""
        return self.screen_height * self.ground_ratio

    @property
    def progress_span(self) -> float:
        """Distance that maps to a full progress bar."""
        return max(1.0, self.course.total_width - self.screen_width * self.camera_lead)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "runner": self.runner.to_dict(),
            "course": self.course.to_dict(),
            "collision": self.collision.to_dict(),
            "screen_width": self.screen_width,
            "screen_height": self.screen_height,
            "fps": self.fps,
            "ground_ratio": self.ground_ratio,
            "camera_lead": self.camera_lead,
            "max_dt": self.max_dt,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameConfig":
        """Create from nested dictionary. Missing keys use defaults."""
        defaults = cls()
        return cls(
            runner=RunnerConfig.from_dict(d.get("runner", {})),
            course=CourseConfig.from_dict(d.get("course", {})),
            collision=CollisionConfig.from_dict(d.get("collision", {})),
            screen_width=d.get("screen_width", defaults.screen_width),
            screen_height=d.get("screen_height", defaults.screen_height),
            fps=d.get("fps", defaults.fps),
            ground_ratio=d.get("ground_ratio", defaults.ground_ratio),
            camera_lead=d.get("camera_lead", defaults.camera_lead),
            max_dt=d.get("max_dt", defaults.max_dt),
        )
