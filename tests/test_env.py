import gymnasium as gym
import numpy as np

import block_stack.env  # noqa: F401
from block_stack.env.block_stack_env import ENV_ACTIONS, BlockStackEnv
from block_stack.game import Action, GameConfig


def test_reset_observation_shows_falling_piece():
    env = BlockStackEnv(GameConfig(random_seed=0))
    obs, info = env.reset(seed=5)
    assert obs.shape == (20, 10)
    assert obs.dtype == np.int8
    assert (obs < 0).sum() == 4
    assert info["score"] == 0
    assert env.observation_space.contains(obs)


def test_repeated_hard_drops_terminate():
    env = BlockStackEnv(GameConfig(random_seed=0))
    env.reset(seed=1)
    hard_drop = ENV_ACTIONS.index(Action.HARD_DROP)
    terminated = False
    for _ in range(100):
        obs, reward, terminated, truncated, info = env.step(hard_drop)
        assert reward == 0.0
        if terminated:
            break
    assert terminated


def test_truncates_after_step_limit():
    env = BlockStackEnv(GameConfig(random_seed=0), gravity_every=0, max_episode_steps=3)
    env.reset()
    noop = ENV_ACTIONS.index(Action.NONE)
    results = [env.step(noop) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_registered_env_renders_rgb():
    env = gym.make("BlockStack-v0", render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (240, 120, 3)
    assert img.dtype == np.uint8
    env.close()
