# mazebrain/__init__.py

__all__ = ["config", "core", "genetics", "io", "sim", "utils", "errors"]

from . import config
from mazebrain.core.activation import (
    ActivationFunction, Sigmoid, ModifiedSigmoid, Tanh, Step, Sign, Linear,
    SIGMOID, MODIFIED_SIGMOID, TANH, STEP, SIGN, LINEAR,
)
from mazebrain.core.neuron import Neuron, SensorNeuron
from mazebrain.core.network import NeuralNetwork, ConstructionState
from mazebrain.genetics.gene import Gene
from mazebrain.genetics.chromosome import Chromosome
from mazebrain.genetics.decoder import (
    InputClass, OutputClass, estimate_chromosome, decode_network,
)
from mazebrain.sim.tick_engine import TickEngine
from mazebrain.sim.controller import BugController
