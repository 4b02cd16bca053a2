"""Gymnasium environment for Block Stack."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="BlockStack-v0",
    entry_point="block_stack.env.block_stack_env:BlockStackEnv",
)

__all__ = ["BlockStack-v0"]
