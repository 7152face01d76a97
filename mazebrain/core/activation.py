# mazebrain/core/activation.py

import math
from dataclasses import dataclass

import numpy as np


def weighted_sum(inputs, weights, theta: float) -> float:
    """
    X = sum(input_i * weight_i) - theta
    inputs: upstream outputs, one per bound input
    weights: matching input weights
    """
    return float(np.dot(inputs, weights)) - theta


def _logistic(x: float) -> float:
    # split on sign so exp never overflows
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


class ActivationFunction:
    """
    Transfer function of a neuron. Subclasses only define shape(); the
    weighted sum and threshold are shared. Instances hold no mutable state
    and can be used by any number of neurons at once.
    """

    name = "activation"

    def shape(self, x: float) -> float:
        raise NotImplementedError

    def __call__(self, inputs, weights, theta: float) -> float:
        return self.shape(weighted_sum(inputs, weights, theta))


@dataclass(frozen=True)
class Sigmoid(ActivationFunction):
    """Output in (0, 1)."""

    name = "sigmoid"

    def shape(self, x: float) -> float:
        return _logistic(x)


@dataclass(frozen=True)
class ModifiedSigmoid(ActivationFunction):
    """Sigmoid stretched to (-1, 1)."""

    name = "modified_sigmoid"

    def shape(self, x: float) -> float:
        return 2.0 * _logistic(x) - 1.0


@dataclass(frozen=True)
class Tanh(ActivationFunction):
    """
    a * tanh(b*x/2), written as 2a / (1 + e^(-b*x)) - a.
    Output in (-a, a).
    """

    a: float = 1.716
    b: float = 0.667
    name = "tanh"

    def shape(self, x: float) -> float:
        return 2.0 * self.a * _logistic(self.b * x) - self.a


@dataclass(frozen=True)
class Step(ActivationFunction):
    name = "step"

    def shape(self, x: float) -> float:
        return 1.0 if x >= 0.0 else 0.0


@dataclass(frozen=True)
class Sign(ActivationFunction):
    name = "sign"

    def shape(self, x: float) -> float:
        return 1.0 if x >= 0.0 else -1.0


@dataclass(frozen=True)
class Linear(ActivationFunction):
    name = "linear"

    def shape(self, x: float) -> float:
        return x


# shared defaults
SIGMOID = Sigmoid()
MODIFIED_SIGMOID = ModifiedSigmoid()
TANH = Tanh()
STEP = Step()
SIGN = Sign()
LINEAR = Linear()
