"""Scripted policies for automated play.

Each policy takes an observation and returns an action compatible with
RunnerEnv's Discrete(2) action space (1 = button held).
"""

import numpy as np
from typing import Dict, Optional


class BasePolicy:
    """Base class for scripted policies."""

    name: str = "base"

    def __call__(self, obs: Dict[str, np.ndarray]) -> int:
        return self.act(obs)

    def act(self, obs: Dict[str, np.ndarray]) -> int:
        raise NotImplementedError

    def reset(self):
        """Called at the start of each episode."""
        pass


class RandomPolicy(BasePolicy):
    """Random taps: each step starts or ends a press with fixed odds.

    Broad state coverage, many deaths, good baseline.
    """

    name = "random"

    def __init__(self, press_chance: float = 0.05, rng: Optional[np.random.Generator] = None):
        self.press_chance = press_chance
        self.rng = rng or np.random.default_rng()
        self._held = 0

    def reset(self):
        self._held = 0

    def act(self, obs):
        if self._held:
            self._held = 0
        elif self.rng.random() < self.press_chance:
            self._held = 1
        return self._held


class HoldPolicy(BasePolicy):
    """Holds the button for the whole run, hopping on every landing."""

    name = "hold"

    def act(self, obs):
        return 1


class LookaheadPolicy(BasePolicy):
    """Jumps when a gap or hazard column is within reach ahead.

    Holds the button while the next non-solid column is closer than
    ``trigger_distance`` so the jump fires on the next landing, and releases
    otherwise so the following press produces a fresh edge.
    """

    name = "lookahead"

    def __init__(self, trigger_distance: float = 24.0):
        self.trigger_distance = trigger_distance

    def act(self, obs):
        state = obs["state"]
        distance = state[10]
        tag = state[11]
        if tag >= 0 and distance <= self.trigger_distance:
            return 1
        return 0


POLICIES = {
    "random": RandomPolicy,
    "hold": HoldPolicy,
    "lookahead": LookaheadPolicy,
}
