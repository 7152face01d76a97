# mazebrain/sim/controller.py

import math
from typing import Callable, Sequence

from .tick_engine import TickEngine
from ..config import OUTPUTS, BrainParams
from ..errors import GenomeError, InsufficientGenomeError
from ..genetics.chromosome import Chromosome
from ..genetics.decoder import decode_network
from ..utils.logger import TickLogger

VEL = 0     # output index: velocity scale
DELTA = 1   # output index: turn delta

# (x, y, (dx, dy)) -> feasible (x, y); supplied by the maze
MoveFn = Callable[[float, float, Sequence[float]], Sequence[float]]


class BugController:
    """
    A brain decoded from a chromosome plus the heading/position state it
    steers. Geometry stays outside: every move is passed through a clamping
    function supplied by the caller.
    """

    def __init__(
        self,
        chromosome: Chromosome,
        params: BrainParams,
        x: float = 0.0,
        y: float = 0.0,
        direction: float = 0.0,
        velocity: float = 0.0,
        rotate_mult: float = 1.0,
        speed_mult: float = 1.0,
        logger: TickLogger | None = None,
    ):
        if params.output_size != OUTPUTS:
            raise GenomeError(f"a bug brain needs {OUTPUTS} outputs, got {params.output_size}")

        self.chromosome = chromosome
        self.params = params
        self.x = x
        self.y = y
        self.direction = direction      # degrees
        self.velocity = velocity
        self.rotate_mult = rotate_mult
        self.speed_mult = speed_mult
        self.true_vector = (0.0, 0.0)

        try:
            self.brain = decode_network(chromosome, params)
        except InsufficientGenomeError:
            if logger is not None:
                logger.log_lobotomy()
            raise

        self.engine = TickEngine(self.brain, logger)
        self.inputs = [0.0] * params.input_size
        self.outputs = [0.0] * OUTPUTS

    def set_input(self, index: int, value: float):
        if not 0 <= index < len(self.inputs):
            raise IndexError(f"input index {index} out of range [0, {len(self.inputs)})")
        self.inputs[index] = float(value)

    def set_inputs(self, values):
        values = [float(v) for v in values]
        if len(values) != len(self.inputs):
            raise ValueError(f"expected {len(self.inputs)} inputs, got {len(values)}")
        self.inputs = values

    def vector(self) -> tuple[float, float]:
        """Intended displacement for the current heading and velocity."""
        heading = math.radians(self.direction * self.rotate_mult)
        speed = self.velocity * self.speed_mult
        return speed * math.cos(heading), speed * math.sin(heading)

    @property
    def true_velocity(self) -> float:
        return math.hypot(*self.true_vector)

    def step(self, move: MoveFn) -> tuple[float, float]:
        """
        Tick the brain, update velocity and heading from its outputs, and
        move as far as `move` allows. Returns the new position.
        """
        self.outputs = self.engine.step(self.inputs)

        self.velocity = self.outputs[VEL]
        # one output stands in for the left and right turn rates
        self.direction = (self.direction + 2.0 * self.outputs[DELTA]) % 360.0

        new_x, new_y = move(self.x, self.y, self.vector())
        self.true_vector = (new_x - self.x, new_y - self.y)
        self.x, self.y = float(new_x), float(new_y)
        return self.x, self.y
