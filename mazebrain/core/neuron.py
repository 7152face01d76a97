# mazebrain/core/neuron.py

import logging

import numpy as np

from .activation import ActivationFunction, LINEAR
from ..config import NeuronParams

log = logging.getLogger(__name__)


def hebbian_delta(weights, pre, post: float, alpha: float, phi: float, max_weight: float) -> np.ndarray:
    """
    Per-weight Hebbian update with forgetting:
      dw = alpha * x * y - phi * y * w
    When dw pushes w further from zero (same sign), it is scaled by
      ((1 + cos(w * pi / max_weight)) / 2) ** 0.75
    which fades to 0 as |w| approaches max_weight. Corrections toward zero
    are applied unscaled.
    weights, pre: arrays of equal length (one entry per input)
    post: this neuron's new output
    """
    weights = np.asarray(weights, dtype=np.float64)
    pre = np.asarray(pre, dtype=np.float64)

    delta = alpha * pre * post - phi * post * weights
    taper = ((1.0 + np.cos(weights * np.pi / max_weight)) / 2.0) ** 0.75
    same_sign = np.sign(delta) == np.sign(weights)
    return np.where(same_sign, delta * taper, delta)


class Neuron:
    """
    One unit with a fixed number of input and output slots.

    Inputs are (source, weight) pairs and outputs are consumers; both are
    indices into the owning network's neuron arena, never neuron objects.
    The weight of an edge lives with the consumer. Slots are filled by
    add_input/add_output and never grow.
    """

    def __init__(
        self,
        input_capacity: int,
        output_capacity: int,
        alpha: float,
        phi: float,
        theta: float,
        activation: ActivationFunction,
        params: NeuronParams | None = None,
    ):
        self.input_capacity = input_capacity
        self.output_capacity = output_capacity
        self.alpha = alpha
        self.phi = phi
        self.theta = theta
        self.activation = activation
        self.params = params or NeuronParams()

        self.sources = np.zeros(input_capacity, dtype=np.intp)
        self.weights = np.zeros(input_capacity, dtype=np.float64)
        self.input_values = np.zeros(input_capacity, dtype=np.float64)
        self.consumers: list[int] = []
        self.in_count = 0
        self.output = 0.0

    @property
    def out_count(self) -> int:
        return len(self.consumers)

    @property
    def in_weights(self) -> np.ndarray:
        """View of the bound input weights."""
        return self.weights[:self.in_count]

    def add_input(self, source: int, weight: float) -> bool:
        if self.in_count >= self.input_capacity:
            log.debug("input slots full (%d), rejecting source %d", self.input_capacity, source)
            return False
        self.sources[self.in_count] = source
        self.weights[self.in_count] = weight
        self.in_count += 1
        return True

    def add_output(self, consumer: int) -> bool:
        if len(self.consumers) >= self.output_capacity:
            log.debug("output slots full (%d), rejecting consumer %d", self.output_capacity, consumer)
            return False
        self.consumers.append(consumer)
        return True

    def step(self, values) -> int:
        """
        values: current outputs of every neuron in the arena
        Computes the new output, then learns. Returns how many weights ended
        up outside +/- max_weight.
        """
        n = self.in_count
        x = np.asarray(values, dtype=np.float64)[self.sources[:n]]
        self.input_values[:n] = x
        self.output = self.activation(x, self.weights[:n], self.theta)
        return self.learn()

    def learn(self) -> int:
        n = self.in_count
        if n == 0:
            return 0

        max_weight = self.params.max_weight
        w = self.weights[:n]
        w += hebbian_delta(w, self.input_values[:n], self.output, self.alpha, self.phi, max_weight)

        out_of_bounds = np.flatnonzero(np.abs(w) > max_weight)
        for i in out_of_bounds:
            log.warning("weight %d out of bounds: %.6g (max %.6g)", i, w[i], max_weight)
        if self.params.clamp_weights and out_of_bounds.size:
            np.clip(w, -max_weight, max_weight, out=w)
        return int(out_of_bounds.size)

    def __str__(self):
        weights = ",".join(repr(float(w)) for w in self.in_weights)
        return f"<{weights}>[{self.theta!r}]"


class SensorNeuron(Neuron):
    """
    Pass-through feeding one input neuron. Callers push raw values with
    set_value(); it is never stepped and never learns.
    """

    def __init__(self):
        super().__init__(0, 1, 0.0, 0.0, 0.0, LINEAR)

    def set_value(self, value: float):
        self.output = float(value)

    def step(self, values) -> int:
        return 0
