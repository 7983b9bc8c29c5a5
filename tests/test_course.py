"""Tests for course generation and the collider query."""

import random

import pytest

from neon_runner.config import CourseConfig, GameConfig
from neon_runner.course import ColumnTag, Course, CourseGenerator, Obstacle


GROUND_Y = 590.4


class TestCourseGenerator:
    @pytest.mark.parametrize("seed", range(25))
    def test_course_invariants(self, seed):
        columns = CourseGenerator(rng=random.Random(seed)).generate()
        assert len(columns) == 160
        assert all(tag is ColumnTag.SOLID for tag in columns[:6])
        assert all(isinstance(tag, ColumnTag) for tag in columns)

    def test_same_seed_same_layout(self):
        first = CourseGenerator(rng=random.Random(7)).generate()
        second = CourseGenerator(rng=random.Random(7)).generate()
        assert first == second

    def test_different_seeds_differ(self):
        first = CourseGenerator(rng=random.Random(1)).generate()
        second = CourseGenerator(rng=random.Random(2)).generate()
        assert first != second

    def test_no_gaps_no_hazards_is_all_solid(self):
        config = CourseConfig(gap_chance=0.0, hazard_chance=0.0)
        columns = CourseGenerator(config, random.Random(0)).generate()
        assert set(columns) == {ColumnTag.SOLID}

    def test_certain_hazards_fill_after_safe_start(self):
        config = CourseConfig(gap_chance=0.0, hazard_chance=1.0)
        columns = CourseGenerator(config, random.Random(0)).generate()
        assert all(tag is ColumnTag.SOLID for tag in columns[:6])
        assert all(tag is ColumnTag.HAZARD for tag in columns[6:])

    def test_certain_gaps_leave_empty_columns(self):
        config = CourseConfig(gap_chance=1.0, hazard_chance=0.0)
        columns = CourseGenerator(config, random.Random(0)).generate()
        assert ColumnTag.EMPTY in columns[6:]
        assert len(columns) == 160

    def test_gap_past_the_end_stops_generation(self):
        config = CourseConfig(column_count=10, safe_columns=0, gap_chance=1.0, gap_length=(10, 10))
        columns = CourseGenerator(config, random.Random(0)).generate()
        assert columns == [ColumnTag.EMPTY] * 10

    def test_gaps_respect_length_range(self):
        config = CourseConfig(gap_chance=1.0, gap_length=(2, 2), platform_length=(1, 1), hazard_chance=0.0)
        columns = CourseGenerator(config, random.Random(0)).generate()
        # gap, gap, block repeating; the safe start overwrites the first cycles
        assert columns[6:12] == [
            ColumnTag.EMPTY, ColumnTag.EMPTY, ColumnTag.SOLID,
            ColumnTag.EMPTY, ColumnTag.EMPTY, ColumnTag.SOLID,
        ]


class TestObstacleGeometry:
    def _course(self, columns):
        course = Course(ground_y=GROUND_Y, rng=random.Random(0))
        course.columns = tuple(columns)
        return course

    def test_solid_is_full_tile_on_baseline(self):
        course = self._course([ColumnTag.SOLID] * 4)
        obs = course.obstacle_for(3)
        assert obs.x == pytest.approx(192.0)
        assert obs.width == pytest.approx(64.0)
        assert obs.height == pytest.approx(64.0)
        assert obs.bottom == pytest.approx(GROUND_Y)
        assert obs.top == pytest.approx(GROUND_Y - 64.0)
        assert not obs.is_hazard

    def test_hazard_is_narrower_and_shorter(self):
        course = self._course([ColumnTag.SOLID, ColumnTag.SOLID, ColumnTag.HAZARD])
        obs = course.obstacle_for(2)
        assert obs.is_hazard
        assert obs.x == pytest.approx(128.0 + 9.6)
        assert obs.width == pytest.approx(44.8)
        assert obs.height == pytest.approx(28.8)
        assert obs.bottom == pytest.approx(GROUND_Y)

    def test_empty_has_no_geometry(self):
        course = self._course([ColumnTag.EMPTY])
        assert course.obstacle_for(0) is None

    def test_edges(self):
        obs = Obstacle(column=0, tag=ColumnTag.SOLID, x=10.0, y=20.0, width=30.0, height=40.0)
        assert (obs.left, obs.top, obs.right, obs.bottom) == (10.0, 20.0, 40.0, 60.0)


class TestActiveColliders:
    def _course(self, columns):
        course = Course(ground_y=GROUND_Y, rng=random.Random(0))
        course.columns = tuple(columns)
        return course

    def test_window_is_padded_by_two_tiles(self):
        course = self._course([ColumnTag.SOLID] * 160)
        colliders = course.active_colliders(640.0, 640.0)
        # view covers columns 10..20, padded to 8..22
        assert [c.column for c in colliders] == list(range(8, 23))

    def test_clipped_at_course_start(self):
        course = self._course([ColumnTag.SOLID] * 160)
        colliders = course.active_colliders(0.0, 640.0)
        assert [c.column for c in colliders] == list(range(0, 13))

    def test_clipped_at_course_end(self):
        course = self._course([ColumnTag.SOLID] * 160)
        colliders = course.active_colliders(150 * 64.0, 1280.0)
        assert colliders[-1].column == 159

    def test_skips_empty_columns_in_column_order(self):
        pattern = [ColumnTag.SOLID, ColumnTag.EMPTY, ColumnTag.HAZARD, ColumnTag.EMPTY, ColumnTag.SOLID]
        course = self._course(pattern * 32)
        colliders = course.active_colliders(0.0, 128.0)
        assert [c.column for c in colliders] == [0, 2, 4]
        assert [c.tag for c in colliders] == [ColumnTag.SOLID, ColumnTag.HAZARD, ColumnTag.SOLID]

    def test_window_beyond_course_is_empty(self):
        course = self._course([ColumnTag.SOLID] * 160)
        assert course.active_colliders(20000.0, 1280.0) == []

    def test_window_before_course_is_empty(self):
        course = self._course([ColumnTag.SOLID] * 160)
        assert course.active_colliders(-1000.0, 500.0) == []

    def test_query_has_no_side_effects(self):
        course = self._course([ColumnTag.SOLID] * 160)
        before = course.columns
        course.active_colliders(0.0, 1280.0)
        assert course.columns == before


class TestCourse:
    def test_reset_regenerates(self):
        course = Course(rng=random.Random(3))
        first = course.columns
        course.reset()
        assert course.columns != first
        assert len(course) == 160

    def test_total_width(self):
        assert Course(rng=random.Random(0)).total_width == 160 * 64.0

    def test_default_baseline_follows_game_config(self):
        assert Course(rng=random.Random(0)).ground_y == GameConfig().ground_y
        assert Course(ground_y=400.0, rng=random.Random(0)).ground_y == 400.0

    def test_column_at(self):
        course = Course(rng=random.Random(0))
        assert course.column_at(10.0) is ColumnTag.SOLID
        assert course.column_at(-5.0) is ColumnTag.EMPTY
        assert course.column_at(1e6) is ColumnTag.EMPTY

    def test_count(self):
        course = Course(rng=random.Random(0))
        total = sum(course.count(tag) for tag in ColumnTag)
        assert total == 160
