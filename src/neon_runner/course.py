"""Procedural obstacle course: a row of tile-wide columns.

Each column is tagged EMPTY, SOLID or HAZARD. Generation walks the row
left to right, alternating optional gaps with short platform runs, and
forces the leading columns SOLID so every run starts on safe ground. There
is no playability guarantee beyond the safe start.

Geometry is never stored. Obstacle rectangles are projected on demand from a
column's tag and index plus the shared baseline, so a query only costs the
columns inside the requested window.
"""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .config import CourseConfig, GameConfig

logger = logging.getLogger(__name__)


class ColumnTag(Enum):
    """Contents of one course column."""
    EMPTY = 0
    SOLID = 1
    HAZARD = 2


@dataclass(frozen=True)
class Obstacle:
    """Axis-aligned rectangle for one non-empty column, in world pixels.

    (x, y) is the top-left corner; y grows downward.
    """
    column: int
    tag: ColumnTag
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

    @property
    def is_hazard(self) -> bool:
        return self.tag is ColumnTag.HAZARD


class CourseGenerator:
    """Draws column layouts from a CourseConfig.

    Args:
        config: Generation parameters. Uses defaults if None.
        rng: Random source. A fresh unseeded one is created if None.
    """

    def __init__(self, config: Optional[CourseConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or CourseConfig()
        self.rng = rng or random.Random()

    def generate(self) -> List[ColumnTag]:
        """Produce a full layout of exactly ``column_count`` tags."""
        cfg = self.config
        rng = self.rng
        columns = [ColumnTag.EMPTY] * cfg.column_count

        i = 0
        while i < cfg.column_count:
            if rng.random() < cfg.gap_chance:
                i += rng.randint(*cfg.gap_length)
                if i >= cfg.column_count:
                    break
            run = rng.randint(*cfg.platform_length)
            for _ in range(run):
                if i >= cfg.column_count:
                    break
                columns[i] = ColumnTag.HAZARD if rng.random() < cfg.hazard_chance else ColumnTag.SOLID
                i += 1

        for j in range(cfg.safe_columns):
            columns[j] = ColumnTag.SOLID

        return columns


class Course:
    """The static obstacle layout for one run plus its collider query.

    Args:
        config: Course parameters. Uses defaults if None.
        ground_y: Baseline every obstacle rests on (world y of the floor line).
            Defaults to the GameConfig baseline.
        rng: Random source shared with the generator.
    """

    def __init__(
        self,
        config: Optional[CourseConfig] = None,
        ground_y: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or CourseConfig()
        self.ground_y = GameConfig().ground_y if ground_y is None else ground_y
        self.generator = CourseGenerator(self.config, rng)
        self.columns: Sequence[ColumnTag] = ()
        self.reset()

    def reset(self) -> None:
        """Discard the current layout and generate a fresh one."""
        self.columns = tuple(self.generator.generate())
        logger.debug(
            "Generated course: %d columns, %d solid, %d hazard",
            len(self.columns),
            self.count(ColumnTag.SOLID),
            self.count(ColumnTag.HAZARD),
        )

    def __len__(self) -> int:
        return len(self.columns)

    def count(self, tag: ColumnTag) -> int:
        return sum(1 for c in self.columns if c is tag)

    @property
    def tile(self) -> float:
        return self.config.tile_size

    @property
    def total_width(self) -> float:
        return len(self.columns) * self.tile

    def column_at(self, x: float) -> ColumnTag:
        """Tag of the column under world x. Outside the course reads as EMPTY."""
        col = math.floor(x / self.tile)
        if 0 <= col < len(self.columns):
            return self.columns[col]
        return ColumnTag.EMPTY

    def obstacle_for(self, col: int) -> Optional[Obstacle]:
        """Project one column into its collision rectangle, or None if EMPTY."""
        tag = self.columns[col]
        tile = self.tile
        if tag is ColumnTag.SOLID:
            return Obstacle(col, tag, col * tile, self.ground_y - tile, tile, tile)
        if tag is ColumnTag.HAZARD:
            cfg = self.config
            height = tile * cfg.hazard_height
            return Obstacle(
                col,
                tag,
                col * tile + tile * cfg.hazard_inset,
                self.ground_y - height,
                tile * cfg.hazard_width,
                height,
            )
        return None

    def active_colliders(self, view_start: float, view_width: float) -> List[Obstacle]:
        """Obstacles whose column lies within the view window padded by the query margin.

        Returned in column order. Windows beyond the course yield an empty list.
        """
        margin = self.config.query_margin
        start_col = max(0, math.floor(view_start / self.tile) - margin)
        end_col = min(len(self.columns) - 1, math.ceil((view_start + view_width) / self.tile) + margin)

        colliders = []
        for col in range(start_col, end_col + 1):
            obstacle = self.obstacle_for(col)
            if obstacle is not None:
                colliders.append(obstacle)
        return colliders
