"""Per-frame collision classification between the runner and course obstacles.

There is no swept test. Each overlap between the runner's death box and an
obstacle is classified from the current frame plus one remembered value, the
runner's previous-frame y:

1. HAZARD obstacle: fatal, whatever the direction or depth of the overlap.
2. Landing: the death box's bottom edge last frame was at or above the block top
   (within ``landing_tolerance``) and it is not moving meaningfully upward
   (``vy >= -upward_tolerance``). This check outranks the axis comparison, so
   a diagonal drop into a freshly revealed column is a landing, not a side hit.
3. Otherwise a solid overlap is fatal: a ceiling hit when the vertical
   penetration is no larger than the horizontal one, a side hit when it is.

The resolver is pure. It reports what happened and the run controller applies
the landing snap or the kill.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Tuple, TYPE_CHECKING

from .config import CollisionConfig
from .course import Obstacle

if TYPE_CHECKING:
    from .body import Runner


class Contact(Enum):
    """Outcome of a single runner/obstacle pair."""
    NONE = auto()
    LANDING = auto()
    FATAL = auto()


class Impact(Enum):
    """Why a run ended in death."""
    HAZARD = "hazard"
    CEILING = "ceiling"
    SIDE = "side"
    FALL = "fall"


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle, top-left anchored, y down."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def penetration(self, other: Obstacle) -> Tuple[float, float]:
        """Signed overlap (x, y). Either value <= 0 means no contact."""
        overlap_x = min(self.right, other.right) - max(self.left, other.left)
        overlap_y = min(self.bottom, other.bottom) - max(self.top, other.top)
        return overlap_x, overlap_y


@dataclass
class CollisionResult:
    """Verdict for one frame.

    Attributes:
        landed: A landing was found on some candidate.
        ground_y: Top edge of the surface to snap onto when landed.
        fatal: The frame ends the run.
        impact: Cause of death when fatal.
        obstacle: The obstacle responsible for the fatal verdict.
    """
    landed: bool = False
    ground_y: Optional[float] = None
    fatal: bool = False
    impact: Optional[Impact] = None
    obstacle: Optional[Obstacle] = None


def classify_contact(
    box: Box,
    obstacle: Obstacle,
    prev_bottom: float,
    vy: float,
    config: Optional[CollisionConfig] = None,
) -> Tuple[Contact, Optional[Impact]]:
    """Classify one death box / obstacle pair.

    Args:
        box: The runner's death box this frame.
        obstacle: Candidate obstacle.
        prev_bottom: Bottom edge of the runner's death box in the previous frame.
        vy: Current vertical velocity (positive = falling).
        config: Tolerances. Uses defaults if None.

    Returns:
        (contact, impact) where impact is set only for FATAL contacts.
    """
    config = config or CollisionConfig()
    overlap_x, overlap_y = box.penetration(obstacle)
    if overlap_x <= 0 or overlap_y <= 0:
        return Contact.NONE, None

    if obstacle.is_hazard:
        return Contact.FATAL, Impact.HAZARD

    was_above = prev_bottom <= obstacle.top + config.landing_tolerance
    not_rising = vy >= -config.upward_tolerance
    if was_above and not_rising:
        return Contact.LANDING, None

    if overlap_y <= overlap_x:
        return Contact.FATAL, Impact.CEILING
    return Contact.FATAL, Impact.SIDE


def resolve(
    runner: "Runner",
    prev_y: float,
    candidates: Iterable[Obstacle],
    config: Optional[CollisionConfig] = None,
) -> CollisionResult:
    """Classify every candidate overlap for this frame.

    Candidates are visited in order. The first fatal contact ends the scan.
    A landing never ends it, so a later hazard or wall still kills; the first
    landing found is the one reported.
    """
    config = config or CollisionConfig()
    box = Box(*runner.death_box(config.death_box_shrink))
    # Same box as the overlap test, shifted back to last frame's y.
    prev_bottom = box.bottom - runner.y + prev_y

    result = CollisionResult()
    for obstacle in candidates:
        contact, impact = classify_contact(box, obstacle, prev_bottom, runner.vy, config)
        if contact is Contact.FATAL:
            result.fatal = True
            result.impact = impact
            result.obstacle = obstacle
            break
        if contact is Contact.LANDING and not result.landed:
            result.landed = True
            result.ground_y = obstacle.top
    return result
