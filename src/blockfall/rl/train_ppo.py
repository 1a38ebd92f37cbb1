from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

import gymnasium as gym

# Ensure envs are registered
import blockfall.env  # noqa: F401


ENV_ID = "Blockfall-10x20-v0"


def make_env(seed: int | None = None, frame_seconds: float = 1.0 / 60.0) -> gym.Env:
    env = gym.make(ENV_ID, frame_seconds=frame_seconds)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--timesteps", type=int, default=200_000)
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_blockfall.zip")
    p.add_argument("--n_envs", type=int, default=4)
    p.add_argument("--frame_seconds", type=float, default=1.0 / 15.0,
                   help="Game time advanced per env step; coarser frames shorten episodes")
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    from stable_baselines3 import PPO
    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    def make_env_idx(i: int):
        def thunk():
            return make_env(seed=i, frame_seconds=args.frame_seconds)
        return thunk

    vec_env = SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)])
    vec_env = VecMonitor(vec_env)
    model = PPO(
        policy="MultiInputPolicy",
        env=vec_env,
        verbose=1,
        tensorboard_log=args.logdir,
    )

    os.makedirs(os.path.dirname(args.save_path) or ".", exist_ok=True)
    model.learn(total_timesteps=args.timesteps)
    model.save(args.save_path)


if __name__ == "__main__":  # pragma: no cover
    main()
