"""
Tests for decoding chromosomes into networks.
"""

import logging
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest

from mazebrain.config import BrainParams
from mazebrain.core.activation import SIGMOID, TANH
from mazebrain.errors import InsufficientGenomeError
from mazebrain.genetics.chromosome import Chromosome
from mazebrain.genetics.decoder import (
    InputClass, OutputClass, decode_network, estimate_chromosome,
    fit, mid, tin, unfit, unmid, untin,
)
from mazebrain.genetics.gene import Gene


def sixteenths(*numerators):
    return Chromosome(Gene.from_double(n / 16.0, 4) for n in numerators)


def test_estimate_chromosome():
    assert estimate_chromosome(4, 7, 5) == 285
    assert estimate_chromosome(3, 0, 0) == 2 + 6 + 2 * 4
    # width without layers (or the reverse) means no hidden layer at all
    assert estimate_chromosome(3, 5, 0) == estimate_chromosome(3, 0, 4) == 16
    assert estimate_chromosome(1, 1, 1, output_count=2) == 10


def test_transforms():
    assert fit(0.0) == -0.5
    assert mid(0.5) == 0.25
    assert tin(0.5) == pytest.approx(0.05)
    for x in (0.0, 0.125, 0.7):
        assert unfit(fit(x)) == pytest.approx(x)
        assert unmid(mid(x)) == pytest.approx(x)
        assert untin(tin(x)) == pytest.approx(x)


def test_exact_gene_count_decodes():
    params = BrainParams([0, 1, 2, 0], 7, 5, [0, 1])
    dna = Chromosome.random_chromosome(285, 16, np.random.default_rng(0))
    net = decode_network(dna, params)
    assert net.complete
    assert len(net.network_factors()) == 285


def test_one_gene_short_is_a_lobotomy(caplog):
    params = BrainParams([0, 1, 2, 0], 7, 5, [0, 1])
    dna = Chromosome.random_chromosome(284, 16, np.random.default_rng(0))
    with caplog.at_level(logging.WARNING, logger="mazebrain.genetics.decoder"):
        with pytest.raises(InsufficientGenomeError) as info:
            decode_network(dna, params)
    assert info.value.required == 285
    assert info.value.available == 284
    assert "lobotomy" in caplog.text


def test_extra_genes_are_ignored():
    params = BrainParams([0], 1, 1, [0, 1])
    exact = sixteenths(*range(1, 11))
    padded = sixteenths(*range(1, 16))
    assert decode_network(exact, params).network_factors().tolist() == \
        decode_network(padded, params).network_factors().tolist()


def test_gene_order():
    params = BrainParams([InputClass.MID], 1, 1, [OutputClass.TANH, OutputClass.SIGMOID])
    net = decode_network(sixteenths(*range(1, 11)), params)
    expected = [
        mid(1 / 16), mid(2 / 16),           # alpha, phi
        fit(3 / 16), mid(4 / 16),           # input weight, threshold
        fit(5 / 16), fit(6 / 16),           # hidden weight, threshold
        fit(7 / 16), fit(8 / 16),           # output 0
        fit(9 / 16), fit(10 / 16),          # output 1
    ]
    assert net.network_factors().tolist() == pytest.approx(expected)
    assert net.alpha == pytest.approx(1 / 32)
    assert net.phi == pytest.approx(1 / 16)


def test_activation_choices():
    params = BrainParams([0, 1], 2, 1, [OutputClass.TANH, OutputClass.SIGMOID])
    net = decode_network(Chromosome.random_chromosome(estimate_chromosome(2, 2, 1), 8), params)
    assert all(n.activation == TANH for n in net.layer(net.input_indices))
    assert all(n.activation == TANH for n in net.layer(net.hidden_indices[0]))
    outputs = net.layer(net.explicit_output_indices)
    assert outputs[0].activation == TANH
    assert outputs[1].activation == SIGMOID


@pytest.mark.parametrize("input_class, transform", [
    (InputClass.MID, mid), (InputClass.FIT, fit), (InputClass.TIN, tin),
])
def test_input_threshold_transform(input_class, transform):
    params = BrainParams([input_class], 0, 0, [0])
    net = decode_network(sixteenths(1, 2, 3, 12, 5, 6), params)
    assert net.neurons[net.input_indices[0]].theta == pytest.approx(transform(12 / 16))


def test_no_hidden_layer_wires_outputs_to_inputs():
    params = BrainParams([0, 0, 0], 0, 0, [0, 1])
    dna = Chromosome.random_chromosome(16, 10, np.random.default_rng(1))
    net = decode_network(dna, params)
    assert net.complete
    assert net.n_hidden == 0
    for n in net.layer(net.explicit_output_indices):
        assert n.in_count == 3


@pytest.mark.parametrize("tag", [3, -1])
def test_unknown_input_class_is_rejected(tag):
    with pytest.raises(ValueError):
        BrainParams([0, tag], 1, 1, [0, 1])


def test_unknown_output_class_is_rejected():
    with pytest.raises(ValueError):
        BrainParams([0], 1, 1, [0, 2])


def test_decoding_is_deterministic():
    params = BrainParams([0, 1, 2], 3, 2, [0, 1])
    dna = Chromosome.random_chromosome(estimate_chromosome(3, 3, 2), 12, np.random.default_rng(2))
    a = decode_network(dna, params)
    b = decode_network(dna, params)
    assert a.network_factors().tolist() == b.network_factors().tolist()
    for net in (a, b):
        net.set_inputs([0.2, -0.4, 0.9])
        net.step()
    assert a.get_outputs() == b.get_outputs()
