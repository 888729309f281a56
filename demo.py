#!/usr/bin/env python3
"""Watch random reveals play through the boards of a run."""
import logging
import os
import time

import numpy as np

from minegrid import BoardSettings, GridConfig, GridEnv, get_scaled_board_config, get_total_boards


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, difficulty: str = "normal", seed: int = 0):
    """Play each board of a run with uniformly random reveals."""
    rng = np.random.default_rng(seed)
    settings = BoardSettings(difficulty=difficulty)
    cleared = 0

    for number in range(1, get_total_boards() + 1):
        board = get_scaled_board_config(number, settings)
        config = GridConfig(board.width, board.height, board.mines)
        env = GridEnv(config=config, render_mode="ansi")
        obs, _ = env.reset(seed=int(rng.integers(0, 2**31 - 1)))

        done = False
        step = 0
        info = {}
        while not done:
            action = int(rng.choice(np.flatnonzero(env.get_action_mask())))
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Board {number} ({board.name}) | Step {step} ===")
            print(f"{board.width}x{board.height}, {board.mines} mines")
            print(f"Revealed {info['revealed']}/{info['total_safe']}\n")
            print(env.render())
            time.sleep(delay)

        if info.get("complete"):
            cleared += 1
            print("\n*** BOARD CLEARED ***")
        else:
            print("\n*** HIT A MINE ***")
            break
        time.sleep(1.0)  # Pause between boards

    print(f"\n=== Final: {cleared}/{get_total_boards()} boards cleared ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--difficulty", default="normal", choices=["easy", "normal", "hard"])
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--debug", action="store_true", help="Show engine debug logs")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    demo(delay=args.delay, difficulty=args.difficulty, seed=args.seed)
