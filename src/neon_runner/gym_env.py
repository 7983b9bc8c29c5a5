"""Gymnasium environment wrapper for the runner.

Provides the standard Gym API for agents and automated play-testing.
Observations include both RGB frames and a structured state vector.
"""

import numpy as np
import gymnasium
from gymnasium import spaces
from typing import Optional, Dict, Tuple

import pygame

from .config import GameConfig
from .course import ColumnTag
from .input import InputLatch
from .render import Renderer
from .run import RunController, RunState


STATE_SIZE = 12


class RunnerEnv(gymnasium.Env):
    """Gymnasium wrapper for the runner.

    Observation space (Dict):
        'rgb': uint8 array of shape (H, W, 3) - rendered frame
        'state': float32 array of shape (12,) - state vector containing:
            [0-1] runner position (x, y)
            [2-3] runner velocity (vx, vy)
            [4]   rotation angle (rad)
            [5]   grounded (0/1)
            [6]   course progress fraction
            [7]   dead (0/1)
            [8]   course complete (0/1)
            [9]   episode progress (steps / max_steps)
            [10]  distance from the runner's front edge to the next non-solid column (px)
            [11]  tag of that column (0 empty, 2 hazard, -1 none within view)

    Action space:
        Discrete(2) - 1 while the jump button is held, 0 while released.
        A 0 -> 1 transition is the press edge that starts a jump.

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        progress: delta_x (pixels advanced this step)
        complete: 1.0 when the end of the course is reached
        death:    1.0 when the runner dies
        step:     1.0 every step
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        obs_resolution: Tuple[int, int] = (128, 256),
        max_episode_steps: int = 3000,
        reward_weights: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        self.config = config or GameConfig()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        self.render_mode = render_mode
        self.obs_height, self.obs_width = obs_resolution
        self.max_episode_steps = max_episode_steps

        self.reward_weights = reward_weights or {
            "complete": 100.0,
            "progress": 0.01,
            "death": -50.0,
            "step": 0.0,
        }

        self.action_space = spaces.Discrete(2)
        self.observation_space = spaces.Dict({
            "rgb": spaces.Box(
                low=0, high=255,
                shape=(self.obs_height, self.obs_width, 3),
                dtype=np.uint8,
            ),
            "state": spaces.Box(
                low=-np.inf, high=np.inf,
                shape=(STATE_SIZE,),
                dtype=np.float32,
            ),
        })

        # Caller sets SDL_VIDEODRIVER for headless use
        if not pygame.get_init():
            pygame.init()

        self._display = None
        if render_mode == "human":
            self._display = pygame.display.set_mode(
                (self.config.screen_width, self.config.screen_height)
            )
            pygame.display.set_caption("RunnerEnv")
        self._renderer = Renderer(self.config)

        self._controller: Optional[RunController] = None
        self._input = InputLatch()
        self._episode_steps = 0
        self._prev_x = 0.0
        self._course_seed = 0
        self._dt = 1.0 / self.config.fps

    @property
    def controller(self) -> Optional[RunController]:
        return self._controller

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        course_seed = int(self.np_random.integers(0, 2**31))
        if self._controller is None:
            self._controller = RunController(self.config, seed=course_seed)
        self._controller.reset(seed=course_seed)
        self._course_seed = course_seed

        self._input.clear()
        self._episode_steps = 0
        self._prev_x = self._controller.runner.x

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self._controller is not None, "Must call reset() before step()"
        held = self._parse_action(action)

        self._input.set_held(held)
        self._controller.tick(self._dt, self._input.sample())
        self._episode_steps += 1

        reward_signals = self._compute_rewards()
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        terminated = not self._controller.active
        truncated = self._episode_steps >= self.max_episode_steps

        obs = self._get_obs()
        info = self._get_info()
        info["reward_signals"] = reward_signals

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    def _parse_action(self, action) -> bool:
        if isinstance(action, np.ndarray):
            action = action.item()
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action}")
        return bool(action)

    # ------------------------------------------------------------------
    # Reward computation
    # ------------------------------------------------------------------

    def _compute_rewards(self):
        ctrl = self._controller
        x = ctrl.runner.x
        signals = {
            "progress": x - self._prev_x,
            "complete": 1.0 if ctrl.state is RunState.COMPLETE else 0.0,
            "death": 1.0 if ctrl.state is RunState.DEAD else 0.0,
            "step": 1.0,
        }
        self._prev_x = x
        return signals

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    def _get_obs(self):
        # Rendering is the dominant cost; skip it unless frames are wanted.
        if self.render_mode in ("rgb_array", "human"):
            rgb = self._render_frame()
        else:
            rgb = np.zeros((self.obs_height, self.obs_width, 3), dtype=np.uint8)
        return {"rgb": rgb, "state": self._get_state_vector()}

    def _next_gap(self) -> Tuple[float, float]:
        """Distance to and tag of the next non-solid column ahead of the runner."""
        ctrl = self._controller
        course = ctrl.course
        runner = ctrl.runner
        front = runner.x + runner.width
        tile = course.tile
        horizon = min(front + self.config.screen_width, course.total_width)
        x = (front // tile) * tile
        while x < horizon:
            tag = course.column_at(x)
            if tag is not ColumnTag.SOLID:
                return max(0.0, x - front), float(tag.value)
            x += tile
        return float(self.config.screen_width), -1.0

    def _get_state_vector(self):
        state = np.zeros(STATE_SIZE, dtype=np.float32)
        ctrl = self._controller
        runner = ctrl.runner

        state[0] = runner.x
        state[1] = runner.y
        state[2] = runner.vx
        state[3] = runner.vy
        state[4] = runner.angle
        state[5] = float(runner.grounded)
        state[6] = ctrl.progress_fraction
        state[7] = float(ctrl.state is RunState.DEAD)
        state[8] = float(ctrl.state is RunState.COMPLETE)
        state[9] = float(self._episode_steps) / max(self.max_episode_steps, 1)
        state[10], state[11] = self._next_gap()
        return state

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_frame(self):
        """Render current state to numpy array (H, W, 3) uint8."""
        self._renderer.draw(self._controller.snapshot())
        return self._renderer.to_array((self.obs_height, self.obs_width))

    def render(self):
        if self._controller is None:
            return None
        if self.render_mode == "rgb_array":
            return self._render_frame()
        elif self.render_mode == "human" and self._display:
            surface = self._renderer.draw(self._controller.snapshot())
            self._display.blit(surface, (0, 0))
            pygame.display.flip()
        return None

    def _get_info(self):
        ctrl = self._controller
        return {
            "episode_steps": self._episode_steps,
            "state": ctrl.state.value,
            "impact": ctrl.impact.value if ctrl.impact else None,
            "progress": ctrl.progress_fraction,
            "runner_position": ctrl.runner.position,
            "course_seed": self._course_seed,
            "course_columns": [tag.value for tag in ctrl.course.columns],
        }

    def close(self):
        if self._display:
            pygame.display.quit()
            self._display = None
