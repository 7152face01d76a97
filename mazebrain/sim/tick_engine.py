# mazebrain/sim/tick_engine.py

from tqdm import tqdm

from ..core.network import NeuralNetwork
from ..utils.logger import TickLogger


class TickEngine:
    """
    Drives one NeuralNetwork through time. Each tick is a full synchronous
    sweep: set_inputs -> step -> get_outputs.
    """

    def __init__(self, network: NeuralNetwork, logger: TickLogger | None = None):
        self.network = network
        self.logger = logger
        self.tick = 0

    def reset(self):
        """Restart the tick counter. Learned weights are kept."""
        self.tick = 0

    def step(self, inputs) -> list[float]:
        """
        One temporal step:
        inputs: sensor values, one per network input
        returns: output vector
        """
        self.network.set_inputs(inputs)
        anomalies = self.network.step()
        outputs = self.network.get_outputs()
        if self.logger is not None:
            self.logger.log_tick(self.tick, outputs, anomalies)
        self.tick += 1
        return outputs

    def run(self, frames, progress: bool = False) -> list[list[float]]:
        """
        Step once per sensor frame and collect every output vector.
        progress: show a tqdm bar
        """
        iterator = tqdm(frames, desc="ticks", leave=False) if progress else frames
        return [self.step(frame) for frame in iterator]
