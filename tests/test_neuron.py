"""
Tests for Neuron wiring, stepping and Hebbian learning.
"""

import logging
import math
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest

from mazebrain.config import NeuronParams
from mazebrain.core.activation import LINEAR
from mazebrain.core.neuron import Neuron, SensorNeuron, hebbian_delta


def test_input_and_output_capacity_is_fixed():
    neuron = Neuron(2, 1, 0.0, 0.0, 0.0, LINEAR)
    assert neuron.add_input(0, 1.0)
    assert neuron.add_input(1, 1.0)
    assert not neuron.add_input(2, 1.0)
    assert neuron.in_count == 2

    assert neuron.add_output(5)
    assert not neuron.add_output(6)
    assert neuron.consumers == [5]


def test_hebbian_delta_opposite_sign_is_unscaled():
    # w = 0 has no sign, so growth away from zero is not tapered
    assert hebbian_delta([0.0], [1.0], 1.0, 0.1, 0.0, 10.0)[0] == pytest.approx(0.1)
    # pure forgetting pulls a positive weight down at full speed
    assert hebbian_delta([2.0], [0.0], 1.0, 0.0, 0.5, 10.0)[0] == pytest.approx(-1.0)
    assert hebbian_delta([-5.0], [1.0], 1.0, 0.1, 0.0, 10.0)[0] == pytest.approx(0.1)


def test_hebbian_delta_same_sign_is_tapered():
    delta = hebbian_delta([5.0], [1.0], 1.0, 0.1, 0.0, 10.0)[0]
    assert delta == pytest.approx(0.1 * 0.5 ** 0.75)
    # at the bound the taper stops growth entirely
    assert hebbian_delta([10.0], [1.0], 1.0, 0.1, 0.0, 10.0)[0] == pytest.approx(0.0)


def test_step_uses_current_values_and_threshold():
    neuron = Neuron(2, 0, 0.0, 0.0, 1.0, LINEAR)
    neuron.add_input(0, 1.0)
    neuron.add_input(1, 0.5)
    anomalies = neuron.step(np.array([2.0, 3.0]))
    assert anomalies == 0
    assert neuron.output == pytest.approx(2.5)
    assert neuron.input_values.tolist() == [2.0, 3.0]
    # no learning without alpha/phi
    assert neuron.in_weights.tolist() == [1.0, 0.5]


def test_step_learns():
    neuron = Neuron(1, 0, 0.1, 0.0, 0.0, LINEAR)
    neuron.add_input(0, 0.5)
    neuron.step(np.array([1.0]))
    assert neuron.output == pytest.approx(0.5)
    taper = ((1.0 + math.cos(0.5 * math.pi / 10.0)) / 2.0) ** 0.75
    assert neuron.in_weights[0] == pytest.approx(0.5 + 0.05 * taper)


def test_unbound_neuron_outputs_activation_of_minus_theta():
    neuron = Neuron(3, 0, 0.1, 0.1, 0.25, LINEAR)
    assert neuron.step(np.zeros(4)) == 0
    assert neuron.output == pytest.approx(-0.25)


def test_weight_beyond_bound_is_reported_not_clamped(caplog):
    neuron = Neuron(1, 0, 1.0, 0.0, 0.0, LINEAR)
    neuron.add_input(0, 1.0)
    with caplog.at_level(logging.WARNING, logger="mazebrain.core.neuron"):
        anomalies = neuron.step(np.array([20.0]))
    assert anomalies == 1
    assert neuron.in_weights[0] > 10.0
    assert "out of bounds" in caplog.text


def test_weight_clamp_is_opt_in():
    neuron = Neuron(1, 0, 1.0, 0.0, 0.0, LINEAR, NeuronParams(clamp_weights=True))
    neuron.add_input(0, 1.0)
    assert neuron.step(np.array([20.0])) == 1
    assert neuron.in_weights[0] == 10.0


def test_custom_max_weight():
    neuron = Neuron(1, 0, 1.0, 0.0, 0.0, LINEAR, NeuronParams(max_weight=2.0))
    neuron.add_input(0, 1.0)
    assert neuron.step(np.array([3.0])) == 1


def test_sensor_is_a_pass_through():
    sensor = SensorNeuron()
    sensor.set_value(0.75)
    assert sensor.step(np.zeros(1)) == 0
    assert sensor.output == 0.75
    assert sensor.add_output(3)
    assert not sensor.add_output(4)
    assert not sensor.add_input(0, 1.0)


def test_str_lists_weights_then_threshold():
    neuron = Neuron(2, 0, 0.0, 0.0, 0.25, LINEAR)
    neuron.add_input(0, 1.0)
    neuron.add_input(1, 0.5)
    assert str(neuron) == "<1.0,0.5>[0.25]"
