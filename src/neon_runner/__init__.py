"""neon-runner: auto-scrolling one-button platformer.

The runner moves forward at constant speed across a procedurally generated
row of blocks, gaps and hazards; the only control is jump. The simulation
core (course generation, body kinematics, collision classification and the
run controller) is independent of pygame, which is used only for the
interactive window and rendering. A Gymnasium environment exposes the same
core to agents.
"""

from .config import RunnerConfig, CourseConfig, CollisionConfig, GameConfig
from .course import ColumnTag, Obstacle, CourseGenerator, Course
from .body import Runner, Particle, normalize_angle
from .collision import Box, Contact, Impact, CollisionResult, classify_contact, resolve
from .input import InputLatch, InputSignals
from .run import RunController, RunState, FrameSnapshot

__all__ = [
    "RunnerConfig",
    "CourseConfig",
    "CollisionConfig",
    "GameConfig",
    "ColumnTag",
    "Obstacle",
    "CourseGenerator",
    "Course",
    "Runner",
    "Particle",
    "normalize_angle",
    "Box",
    "Contact",
    "Impact",
    "CollisionResult",
    "classify_contact",
    "resolve",
    "InputLatch",
    "InputSignals",
    "RunController",
    "RunState",
    "FrameSnapshot",
]
