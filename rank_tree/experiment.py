from __future__ import annotations

import logging
import time
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
from numpy.random import Generator, default_rng

from .avl import AVLTree

logger = logging.getLogger(__name__)

DEFAULT_SIZES: Tuple[int, ...] = tuple(1000 * 2 ** i for i in range(1, 6))
DEFAULT_SEED: Optional[int] = None
DEFAULT_REPEAT: int = 3


def build_tree(keys: Iterable[int]) -> AVLTree:
    tree = AVLTree()
    for k in keys:
        tree.insert(int(k), str(k))
    return tree


def insert_delete_costs(n: int, rng: Generator) -> Tuple[float, float]:
    """Mean rebalancing cost of inserting, then deleting, `n` random keys."""
    tree = AVLTree()

    insert_ops = np.array([tree.insert(int(k), str(k)) for k in rng.permutation(n)])
    delete_ops = np.array([tree.delete(int(k)) for k in rng.permutation(n)])

    assert tree.empty()
    return float(insert_ops.mean()), float(delete_ops.mean())


def _split_summary(tree: AVLTree, key: int) -> Tuple[float, int]:
    _, _, costs = tree.split_with_costs(key)
    if len(costs) == 0:
        return 0.0, 0
    return float(np.mean(costs)), int(max(costs))


def split_costs(n: int, rng: Generator) -> Dict[str, Tuple[float, int]]:
    """Mean and maximum join cost of splitting a tree of `n` random keys.

    Two splits are measured: at a key chosen uniformly at random, and at the
    largest key of the root's left subtree, which forces the longest chain of
    joins.
    """
    keys = rng.permutation(n)
    ret = {}

    ret["random"] = _split_summary(build_tree(keys), int(rng.choice(keys)))

    tree = build_tree(keys)
    root = tree.get_root()
    worst = root
    if root.left.is_real:
        worst = root.left
        while worst.right.is_real:
            worst = worst.right
    worst_key = worst.key
    ret["left max"] = _split_summary(tree, worst_key)

    return ret


def run(
    sizes: Iterable[int] = DEFAULT_SIZES,
    seed: Optional[int] = DEFAULT_SEED,
    repeat: int = DEFAULT_REPEAT,
):
    """Print one row per size; each row averages `repeat` independent runs
    (split maxima are the worst seen over those runs).
    """
    assert repeat > 0, "repeat must be positive"
    rng = default_rng(seed)

    print(
        "{:>8s} {:>10s} {:>10s} {:>12s} {:>10s} {:>14s} {:>12s}".format(
            "n",
            "insert",
            "delete",
            "split avg",
            "split max",
            "left-max avg",
            "left-max max",
        )
    )

    for n in sizes:
        start_time = time.perf_counter()
        costs = np.array([insert_delete_costs(n, rng) for _ in range(repeat)])
        splits = [split_costs(n, rng) for _ in range(repeat)]
        end_time = time.perf_counter()

        ins, dels = costs.mean(axis=0)
        random_avg = np.mean([s["random"][0] for s in splits])
        random_max = max(s["random"][1] for s in splits)
        left_avg = np.mean([s["left max"][0] for s in splits])
        left_max = max(s["left max"][1] for s in splits)

        print(
            "{:8d} {:10.3f} {:10.3f} {:12.3f} {:10d} {:14.3f} {:12d}".format(
                n, ins, dels, random_avg, random_max, left_avg, left_max
            ),
            flush=True,
        )
        logger.info(
            "n=%d measured %d times in %.2fs", n, repeat, end_time - start_time
        )


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s"
    )
    run()
