"""
mazebrain/genetics/decoder.py
---------------------------------
Why this exists
- Turns a Chromosome into a NeuralNetwork of a requested shape. This is the
  only place that knows which gene means what.

How it works
- Every gene decodes to a value in [0, 1). One of three transforms maps it
  into the range a parameter needs:
    fit(x) = x - 0.5   -> [-0.5, 0.5)   weights, hidden/output thresholds
    mid(x) = x * 0.5   -> [0, 0.5)      learning and forgetting rates
    tin(x) = x * 0.1   -> [0, 0.1)
- Input thresholds use the transform chosen by each input's InputClass;
  output activations are chosen by each output's OutputClass.
- Genes are read in one fixed order:
    alpha, phi,
    per input:          weight, threshold
    per hidden neuron:  one weight per previous-layer neuron, threshold
    per output neuron:  one weight per previous-layer neuron, threshold
  Hidden neurons are read layer by layer, neuron by neuron.
- A chromosome shorter than estimate_chromosome() is rejected before any
  network is built, so callers never see a half-wired brain.
"""

# mazebrain/genetics/decoder.py

import logging
from enum import IntEnum

from .chromosome import Chromosome
from ..config import OUTPUTS, BrainParams, NetworkParams
from ..core.activation import SIGMOID, TANH
from ..core.network import NeuralNetwork
from ..errors import GenomeError, InsufficientGenomeError

log = logging.getLogger(__name__)


def fit(x: float) -> float:
    return x - 0.5


def unfit(x: float) -> float:
    return x + 0.5


def mid(x: float) -> float:
    return x * 0.5


def unmid(x: float) -> float:
    return x / 0.5


def tin(x: float) -> float:
    return x * 0.1


def untin(x: float) -> float:
    return x / 0.1


class InputClass(IntEnum):
    MID = 0
    FIT = 1
    TIN = 2


class OutputClass(IntEnum):
    TANH = 0
    SIGMOID = 1


INPUT_TRANSFORMS = {
    InputClass.MID: mid,
    InputClass.FIT: fit,
    InputClass.TIN: tin,
}

OUTPUT_ACTIVATIONS = {
    OutputClass.TANH: TANH,
    OutputClass.SIGMOID: SIGMOID,
}


def estimate_chromosome(input_count: int, hidden_width: int, hidden_layers: int, output_count: int = OUTPUTS) -> int:
    """Number of genes needed to decode a brain of this shape."""
    genes = 2                           # alpha, phi
    genes += 2 * input_count            # weight + threshold per input
    if hidden_layers > 0 and hidden_width > 0:
        genes += hidden_width * (input_count + 1)
        genes += (hidden_layers - 1) * hidden_width * (hidden_width + 1)
        genes += output_count * (hidden_width + 1)
    else:
        genes += output_count * (input_count + 1)
    return genes


class _GeneReader:
    """Walks a chromosome front to back, one gene per call."""

    def __init__(self, chromosome: Chromosome):
        self.chromosome = chromosome
        self.position = 0

    def read(self, transform) -> float:
        if self.position >= self.chromosome.num_genes():
            raise GenomeError(
                f"decoder consumed gene {self.position} of a {self.chromosome.num_genes()}-gene chromosome"
            )
        value = transform(self.chromosome.get_gene(self.position).to_double())
        self.position += 1
        return value

    def read_many(self, count: int, transform) -> list[float]:
        return [self.read(transform) for _ in range(count)]


def decode_network(chromosome: Chromosome, params: BrainParams) -> NeuralNetwork:
    """
    Build the brain described by `params` from `chromosome`.
    Raises InsufficientGenomeError when the chromosome is too short and
    GenomeError if assembly is rejected at any point.
    """
    required = estimate_chromosome(params.input_size, params.hidden_width, params.hidden_layers, params.output_size)
    if chromosome.num_genes() < required:
        log.warning("lobotomy: need %d genes, chromosome has %d", required, chromosome.num_genes())
        raise InsufficientGenomeError(required, chromosome.num_genes())

    reader = _GeneReader(chromosome)
    alpha = reader.read(mid)
    phi = reader.read(mid)

    network = NeuralNetwork(NetworkParams(
        input_size=params.input_size,
        hidden_layers=params.hidden_layers,
        hidden_width=params.hidden_width,
        output_size=params.output_size,
        learning_rate=alpha,
        forgetting_rate=phi,
        neuron=params.neuron,
    ))

    for n, input_class in enumerate(params.input_classes):
        weight = reader.read(fit)
        theta = reader.read(INPUT_TRANSFORMS[input_class])
        if not network.add_input(weight, theta, TANH):
            raise GenomeError(f"input {n} was rejected during assembly")

    for layer in range(network.n_hidden):
        fan_in = params.input_size if layer == 0 else network.width
        for position in range(network.width):
            weights = reader.read_many(fan_in, fit)
            theta = reader.read(fit)
            if not network.add_hidden(weights, theta, TANH):
                raise GenomeError(f"hidden neuron <{layer},{position}> was rejected during assembly")

    fan_in = network.width if network.has_hidden else params.input_size
    for n, output_class in enumerate(params.output_classes):
        weights = reader.read_many(fan_in, fit)
        theta = reader.read(fit)
        if not network.add_output(weights, theta, OUTPUT_ACTIVATIONS[output_class]):
            raise GenomeError(f"output {n} was rejected during assembly")

    if reader.position > chromosome.num_genes() or not network.complete:
        raise GenomeError(f"decoding ended in an inconsistent state after {reader.position} genes")
    return network
