"""
mazebrain/core/network.py
---------------------------------
Why this exists
- Holds one feed-forward brain: an input layer, zero or more equally wide
  hidden layers and an output layer, assembled one neuron at a time in a
  fixed order so a chromosome can be decoded straight into it.

How it works
- Every neuron lives in a single arena (self.neurons) and its current output
  in a parallel numpy buffer (self.values). Edges are arena indices stored on
  the consuming neuron together with the weight.
- Arena layout, fixed at construction:
    [sensors | inputs | hidden layer 0 | ... | hidden layer H-1 | outputs]
  Sensors are pass-through neurons that external code writes with
  set_inputs(); each feeds exactly one input neuron.
- Construction is a small state machine. add_input, add_hidden and add_output
  are only accepted in their own state and advance it once their layer is
  full. A rejected call changes nothing.
- step() runs inputs, then hidden layers in order, then outputs, writing each
  output into the buffer before the next neuron reads it, so one call moves
  a signal from the sensors to the outputs in a single tick.
"""

# mazebrain/core/network.py

import logging
from enum import Enum

import numpy as np

from .activation import ActivationFunction
from .neuron import Neuron, SensorNeuron
from ..config import NetworkParams
from ..errors import MazeBrainError

log = logging.getLogger(__name__)


class ConstructionState(Enum):
    DEFINING_INPUTS = "defining_inputs"
    DEFINING_HIDDEN = "defining_hidden"
    DEFINING_OUTPUTS = "defining_outputs"
    COMPLETE = "complete"


class NeuralNetwork:

    def __init__(self, params: NetworkParams):
        self.params = params
        self.alpha = params.learning_rate
        self.phi = params.forgetting_rate

        n_in = params.input_size
        n_out = params.output_size
        self.has_hidden = params.has_hidden
        self.n_hidden = params.hidden_layers if self.has_hidden else 0
        self.width = params.hidden_width if self.has_hidden else 0

        self._sensor_base = 0
        self._input_base = n_in
        self._hidden_base = 2 * n_in
        self._output_base = self._hidden_base + self.n_hidden * self.width
        size = self._output_base + n_out

        self.neurons: list[Neuron | None] = [None] * size
        self.values = np.zeros(size, dtype=np.float64)

        self.sensor_indices = list(range(self._sensor_base, self._sensor_base + n_in))
        self.input_indices = list(range(self._input_base, self._input_base + n_in))
        self.hidden_indices = [
            list(range(self._hidden_base + l * self.width, self._hidden_base + (l + 1) * self.width))
            for l in range(self.n_hidden)
        ]
        self.explicit_output_indices = list(range(self._output_base, size))

        if n_out > 0:
            self.output_indices = self.explicit_output_indices
        elif self.has_hidden:
            self.output_indices = self.hidden_indices[-1]
        else:
            self.output_indices = self.input_indices

        self._step_order = self.input_indices + [i for layer in self.hidden_indices for i in layer] + self.explicit_output_indices

        self._inputs_added = 0
        self._layer = 0
        self._position = 0
        self._outputs_added = 0
        self.state = ConstructionState.DEFINING_INPUTS
        self._advance()

    # ---------------------------------------------------------------
    # construction
    # ---------------------------------------------------------------

    def _advance(self):
        if self.state is ConstructionState.DEFINING_INPUTS and self._inputs_added >= self.params.input_size:
            self.state = ConstructionState.DEFINING_HIDDEN if self.has_hidden else ConstructionState.DEFINING_OUTPUTS
        if self.state is ConstructionState.DEFINING_HIDDEN and self._layer >= self.n_hidden:
            self.state = ConstructionState.DEFINING_OUTPUTS
        if self.state is ConstructionState.DEFINING_OUTPUTS and self._outputs_added >= self.params.output_size:
            self.state = ConstructionState.COMPLETE

    def _fan_out(self, layer: int) -> int:
        """Output slots of a neuron in hidden layer `layer` (-1 = input layer)."""
        if layer + 1 < self.n_hidden:
            return self.width
        return self.params.output_size

    def _new_neuron(self, inputs: int, outputs: int, theta: float, activation: ActivationFunction) -> Neuron:
        return Neuron(inputs, outputs, self.alpha, self.phi, theta, activation, self.params.neuron)

    def _previous_layer(self) -> list[int]:
        if self.state is ConstructionState.DEFINING_HIDDEN:
            return self.input_indices if self._layer == 0 else self.hidden_indices[self._layer - 1]
        return self.hidden_indices[-1] if self.has_hidden else self.input_indices

    def _wire(self, index: int, neuron: Neuron, weights) -> bool:
        previous = self._previous_layer()
        if len(weights) != len(previous):
            log.debug("weight vector has %d entries, previous layer has %d", len(weights), len(previous))
            return False
        full = [p for p in previous if self.neurons[p].out_count >= self.neurons[p].output_capacity]
        if full:
            log.debug("previous-layer neurons %s have no free output slots", full)
            return False

        self.neurons[index] = neuron
        for source, weight in zip(previous, weights):
            self.neurons[source].add_output(index)
            neuron.add_input(source, float(weight))
        return True

    def add_input(self, weight: float, theta: float, activation: ActivationFunction) -> bool:
        """
        weight: sensor -> input neuron weight
        theta: activation threshold of the input neuron
        """
        if self.state is not ConstructionState.DEFINING_INPUTS:
            log.debug("add_input rejected in state %s", self.state.value)
            return False

        k = self._inputs_added
        sensor_index = self.sensor_indices[k]
        input_index = self.input_indices[k]

        sensor = SensorNeuron()
        neuron = self._new_neuron(1, self._fan_out(-1), theta, activation)
        sensor.add_output(input_index)
        neuron.add_input(sensor_index, float(weight))
        self.neurons[sensor_index] = sensor
        self.neurons[input_index] = neuron

        self._inputs_added += 1
        self._advance()
        return True

    def add_hidden(self, weights, theta: float, activation: ActivationFunction) -> bool:
        """weights: one per neuron of the previous layer"""
        if self.state is not ConstructionState.DEFINING_HIDDEN:
            log.debug("add_hidden rejected in state %s", self.state.value)
            return False

        fan_in = len(self._previous_layer())
        neuron = self._new_neuron(fan_in, self._fan_out(self._layer), theta, activation)
        index = self.hidden_indices[self._layer][self._position]
        if not self._wire(index, neuron, weights):
            return False

        self._position += 1
        if self._position >= self.width:
            self._layer += 1
            self._position = 0
        self._advance()
        return True

    def add_output(self, weights, theta: float, activation: ActivationFunction) -> bool:
        """weights: one per neuron of the last hidden layer (or input layer)"""
        if self.state is not ConstructionState.DEFINING_OUTPUTS:
            log.debug("add_output rejected in state %s", self.state.value)
            return False

        neuron = self._new_neuron(len(self._previous_layer()), 0, theta, activation)
        index = self.explicit_output_indices[self._outputs_added]
        if not self._wire(index, neuron, weights):
            return False

        self._outputs_added += 1
        self._advance()
        return True

    @property
    def complete(self) -> bool:
        return self.state is ConstructionState.COMPLETE

    # ---------------------------------------------------------------
    # running
    # ---------------------------------------------------------------

    def set_inputs(self, values):
        values = list(values)
        if len(values) != len(self.sensor_indices):
            raise ValueError(f"expected {len(self.sensor_indices)} inputs, got {len(values)}")
        if not self.complete:
            raise MazeBrainError(f"network is not assembled (state: {self.state.value})")
        for index, value in zip(self.sensor_indices, values):
            self.neurons[index].set_value(value)
            self.values[index] = self.neurons[index].output

    def step(self) -> int:
        """
        One synchronous sweep over every neuron. Returns the number of
        weights found outside +/- max_weight after learning.
        """
        if not self.complete:
            raise MazeBrainError(f"network is not assembled (state: {self.state.value})")
        anomalies = 0
        for index in self._step_order:
            neuron = self.neurons[index]
            anomalies += neuron.step(self.values)
            self.values[index] = neuron.output
        return anomalies

    def get_outputs(self) -> list[float]:
        return [float(self.values[i]) for i in self.output_indices]

    # ---------------------------------------------------------------
    # introspection
    # ---------------------------------------------------------------

    def layer(self, indices) -> list[Neuron]:
        return [self.neurons[i] for i in indices]

    def network_factors(self) -> np.ndarray:
        """alpha, phi, then every neuron's input weights followed by its theta."""
        factors = [self.alpha, self.phi]
        for index in self._step_order:
            neuron = self.neurons[index]
            if neuron is None:
                continue
            factors.extend(float(w) for w in neuron.in_weights)
            factors.append(neuron.theta)
        return np.asarray(factors, dtype=np.float64)

    def describe_construction(self) -> str:
        lines = ["Input:"]
        lines += [f"      {n}" for n in self.layer(self.input_indices) if n is not None]
        for l, layer in enumerate(self.hidden_indices):
            lines.append(f"Hidden {l}:")
            lines += [f"      {n}" for n in self.layer(layer) if n is not None]
        lines.append("Output:")
        lines += [f"      {n}" for n in self.layer(self.explicit_output_indices) if n is not None]
        return "\n".join(lines)

    def describe_outputs(self) -> str:
        def row(indices):
            return "  ".join(f"{self.values[i]:.6g}" for i in indices)

        lines = [f"Input: {row(self.input_indices)}"]
        for l, layer in enumerate(self.hidden_indices):
            lines.append(f"Hidden {l}: {row(layer)}")
        lines.append(f"Output: {row(self.explicit_output_indices)}")
        return "\n".join(lines)
