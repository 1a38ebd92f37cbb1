"""Gymnasium environments for Blockfall."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .tetris_env import FallingBlocksEnv

register(
    id="Blockfall-10x20-v0",
    entry_point="blockfall.env.tetris_env:FallingBlocksEnv",
)

__all__ = ["FallingBlocksEnv"]
