"""Tests for configuration dataclasses."""

import math

import pytest

from neon_runner.config import (
    RunnerConfig,
    CourseConfig,
    CollisionConfig,
    GameConfig,
)


class TestRunnerConfig:
    def test_defaults(self):
        config = RunnerConfig()
        assert config.tile_size == 64.0
        assert config.run_speed == 300.0
        assert config.gravity == 1800.0
        assert config.jump_speed == -700.0
        assert config.spin_rate == pytest.approx(math.pi / 2)
        assert config.spawn == (100.0, 200.0)

    def test_size_is_fraction_of_tile(self):
        assert RunnerConfig().size == pytest.approx(57.6)
        assert RunnerConfig(tile_size=32.0).size == pytest.approx(28.8)

    def test_derived_jump_shape(self):
        config = RunnerConfig()
        # h = v0^2 / 2g = 490000 / 3600
        assert config.apex_height == pytest.approx(136.11, rel=1e-3)
        # t = 2 * v0 / g = 1400 / 1800
        assert config.airtime == pytest.approx(0.7778, rel=1e-3)

    def test_rejects_downward_jump(self):
        with pytest.raises(ValueError):
            RunnerConfig(jump_speed=100.0)

    def test_rejects_non_positive_tile(self):
        with pytest.raises(ValueError):
            RunnerConfig(tile_size=0.0)

    def test_dict_round_trip(self):
        config = RunnerConfig(run_speed=250.0, gravity=2000.0, spawn=(50.0, 100.0))
        restored = RunnerConfig.from_dict(config.to_dict())
        assert restored == config

    def test_from_partial_dict_uses_defaults(self):
        config = RunnerConfig.from_dict({"run_speed": 400.0})
        assert config.run_speed == 400.0
        assert config.gravity == 1800.0


class TestCourseConfig:
    def test_defaults(self):
        config = CourseConfig()
        assert config.column_count == 160
        assert config.safe_columns == 6
        assert config.gap_chance == 0.25
        assert config.gap_length == (1, 3)
        assert config.platform_length == (1, 4)
        assert config.hazard_chance == 0.08

    def test_total_width(self):
        assert CourseConfig().total_width == 160 * 64.0

    @pytest.mark.parametrize("field", ["gap_chance", "hazard_chance"])
    def test_rejects_bad_probability(self, field):
        with pytest.raises(ValueError):
            CourseConfig(**{field: 1.5})

    def test_rejects_inverted_range(self):
        with pytest.raises(ValueError):
            CourseConfig(gap_length=(3, 1))

    def test_rejects_empty_platform_run(self):
        with pytest.raises(ValueError):
            CourseConfig(platform_length=(0, 2))

    def test_rejects_course_shorter_than_safe_start(self):
        with pytest.raises(ValueError):
            CourseConfig(column_count=4, safe_columns=6)

    def test_dict_round_trip(self):
        config = CourseConfig(column_count=40, gap_length=(2, 2), hazard_chance=0.2)
        restored = CourseConfig.from_dict(config.to_dict())
        assert restored == config


class TestCollisionConfig:
    def test_defaults(self):
        config = CollisionConfig()
        assert config.death_box_shrink == 0.20
        assert config.landing_tolerance == 4.0
        assert config.upward_tolerance == 50.0

    def test_dict_round_trip(self):
        config = CollisionConfig(death_box_shrink=0.1, landing_tolerance=2.0)
        assert CollisionConfig.from_dict(config.to_dict()) == config

    def test_rejects_full_shrink(self):
        with pytest.raises(ValueError):
            CollisionConfig(death_box_shrink=1.0)


class TestGameConfig:
    def test_ground_baseline(self):
        config = GameConfig()
        assert config.ground_y == pytest.approx(720 * 0.82)

    def test_progress_span(self):
        config = GameConfig()
        assert config.progress_span == pytest.approx(160 * 64 - 1280 * 0.25)

    def test_tile_sizes_must_match(self):
        with pytest.raises(ValueError):
            GameConfig(runner=RunnerConfig(tile_size=32.0))

    def test_frame_clamp_default(self):
        assert GameConfig().max_dt == 0.03

    def test_dict_round_trip(self):
        config = GameConfig(screen_width=800, screen_height=600, fps=30)
        restored = GameConfig.from_dict(config.to_dict())
        assert restored.screen_width == 800
        assert restored.screen_height == 600
        assert restored.fps == 30
        assert restored.runner == config.runner
        assert restored.course == config.course

    def test_dict_round_trip_keeps_every_field(self):
        config = GameConfig(
            runner=RunnerConfig(trail_lifetime=0.5, trail_max=12, burst_count=5),
            course=CourseConfig(hazard_inset=0.1, hazard_width=0.8, hazard_height=0.6, query_margin=4),
            collision=CollisionConfig(death_box_shrink=0.3, landing_tolerance=6.0, upward_tolerance=20.0),
            ground_ratio=0.7,
            camera_lead=0.4,
            max_dt=0.02,
        )
        assert GameConfig.from_dict(config.to_dict()) == config

    def test_from_empty_dict_is_default(self):
        assert GameConfig.from_dict({}) == GameConfig()
