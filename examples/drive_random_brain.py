# examples/drive_random_brain.py

import logging
import math
import os
import sys

import numpy as np

# Make sure we can import mazebrain when running this file directly
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.append(ROOT)

from mazebrain.config import BrainParams
from mazebrain.errors import InsufficientGenomeError
from mazebrain.genetics.chromosome import Chromosome
from mazebrain.genetics.decoder import estimate_chromosome
from mazebrain.sim.controller import BugController
from mazebrain.utils.logger import TickLogger

GENE_BITS = 16
ARENA = 100.0


def clamp_to_arena(x, y, vector):
    """Stand-in for the maze: keep the bug inside a square box."""
    nx = min(max(x + vector[0], 0.0), ARENA)
    ny = min(max(y + vector[1], 0.0), ARENA)
    return nx, ny


def fake_sensors(tick):
    """distance, bearing, type, bias"""
    return [
        0.5 + 0.5 * math.sin(tick / 10.0),
        math.cos(tick / 7.0),
        float(tick % 3 - 1),
        1.0,
    ]


def drive(controller, ticks):
    for tick in range(ticks):
        controller.set_inputs(fake_sensors(tick))
        controller.step(clamp_to_arena)
    return controller.x, controller.y


def main():
    logging.basicConfig(level=logging.ERROR)
    rng = np.random.default_rng(7)

    params = BrainParams(
        input_classes=[0, 1, 2, 2],
        hidden_width=7,
        hidden_layers=5,
        output_classes=[1, 0],
    )
    genes = estimate_chromosome(params.input_size, params.hidden_width, params.hidden_layers)
    print(f"Genes per brain: {genes}")

    mother = Chromosome.random_chromosome(genes, GENE_BITS, rng)
    father = Chromosome.random_chromosome(genes, GENE_BITS, rng)
    child = mother.crossover(father, 3, rng).mutate(rng)

    dense = child.to_dense()
    assert Chromosome.from_dense(dense) == child
    print(f"Plain form: {len(child.to_plain())} chars, dense form: {len(dense)} chars")

    for name, dna in [("mother", mother), ("father", father), ("child", child)]:
        logger = TickLogger()
        bug = BugController(dna, params, x=ARENA / 2, y=ARENA / 2, logger=logger)
        x, y = drive(bug, 200)
        print(
            f"{name:>6}: ended at ({x:6.2f}, {y:6.2f}) | "
            f"last outputs = {[round(v, 4) for v in logger.last_outputs()]} | "
            f"weight anomalies = {logger.total_anomalies}"
        )

    try:
        BugController(Chromosome.random_chromosome(genes - 1, GENE_BITS, rng), params)
    except InsufficientGenomeError as exc:
        print(f"Short genome rejected: {exc}")


if __name__ == "__main__":
    main()
