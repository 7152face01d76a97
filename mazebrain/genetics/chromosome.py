"""
mazebrain/genetics/chromosome.py
---------------------------------
Why this exists
- A Chromosome is the genome of one candidate brain: an ordered list of
  Genes that the decoder reads front to back.

How it works
- Chromosomes own their genes. Every operator that produces a new
  chromosome (clone, crossover, mutate) deep-copies the genes it takes, so
  parents are never modified.
- crossover draws k cut points over the shared prefix, walks the genes and
  toggles the supplying parent at each cut point. Past the shorter parent the
  longer one supplies the rest.
- Two text forms: plain "[0101][1100]" (any gene lengths) and dense
  "[byteSize][bitLength]..." (uniform gene length only, see io/encoding.py).
"""

# mazebrain/genetics/chromosome.py

import numpy as np

from .gene import Gene, _rng
from ..errors import ChromosomeFormatError, ChromosomeIntegrityError
from ..io.encoding import split_dense, split_plain, string_to_bits


class Chromosome:

    def __init__(self, genes=None):
        self.genes: list[Gene] = []
        for gene in genes or []:
            self.add_gene(gene)

    @classmethod
    def random_chromosome(cls, gene_count: int, gene_bits: int, rng: np.random.Generator | None = None):
        rng = _rng(rng)
        return cls(Gene.random(gene_bits, rng) for _ in range(gene_count))

    def add_gene(self, gene: Gene | None) -> bool:
        if gene is None:
            return False
        self.genes.append(gene)
        return True

    def get_gene(self, index: int) -> Gene:
        if not 0 <= index < len(self.genes):
            raise IndexError(f"gene index {index} out of range [0, {len(self.genes)})")
        return self.genes[index]

    def num_genes(self) -> int:
        return len(self.genes)

    def __len__(self):
        return len(self.genes)

    def __iter__(self):
        return iter(self.genes)

    def __eq__(self, other):
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self.genes == other.genes

    __hash__ = None

    # ---------------------------------------------------------------
    # genetic operators
    # ---------------------------------------------------------------

    def crossover(self, other: "Chromosome", k: int, rng: np.random.Generator | None = None) -> "Chromosome":
        """
        k-point crossover. The child is as long as the longer parent.
        Repeated cut points each toggle the parent, so a pair cancels out.
        """
        if k < 1:
            raise ValueError(f"crossover needs at least one cut point, got {k}")
        rng = _rng(rng)

        self_longer = len(self) >= len(other)
        shared = min(len(self), len(other))
        longest = max(len(self), len(other))

        cuts = np.sort(rng.integers(0, shared, size=k)) if shared > 0 else np.array([], dtype=int)
        use_self = bool(rng.integers(2))

        child = Chromosome()
        j = 0
        for i in range(longest):
            while j < len(cuts) and cuts[j] == i:
                use_self = not use_self
                j += 1
            if i >= shared:
                use_self = self_longer
            source = self if use_self else other
            child.add_gene(source.genes[i].clone())
        return child

    def clone(self) -> "Chromosome":
        copy = Chromosome(gene.clone() for gene in self.genes)
        if len(self.genes) and not len(copy.genes):
            raise ChromosomeIntegrityError(
                f"clone of a {len(self.genes)}-gene chromosome came out empty"
            )
        return copy

    def mutate(self, rng: np.random.Generator | None = None) -> "Chromosome":
        """Return a copy with exactly one bit flipped in one random gene."""
        if not self.genes:
            raise ValueError("cannot mutate an empty chromosome")
        rng = _rng(rng)
        point = int(rng.integers(len(self.genes)))
        mutant = self.clone()
        mutant.genes[point].mutate(rng)
        return mutant

    # ---------------------------------------------------------------
    # text forms
    # ---------------------------------------------------------------

    def to_plain(self) -> str:
        return "".join(f"[{gene}]" for gene in self.genes)

    __str__ = to_plain

    def __repr__(self):
        return f"Chromosome({len(self.genes)} genes)"

    def to_double_string(self) -> str:
        return "".join(f"[{gene.to_double()}]" for gene in self.genes)

    def to_dense(self) -> str:
        if not self.genes:
            raise ValueError("cannot dense-encode an empty chromosome")
        bit_length = self.genes[0].bit_length
        for i, gene in enumerate(self.genes):
            if gene.bit_length != bit_length:
                raise ValueError(
                    f"dense encoding needs a uniform gene length: gene 0 has {bit_length} bits, "
                    f"gene {i} has {gene.bit_length}"
                )
        header = f"[{self.genes[0].dense_byte_size}][{bit_length}]"
        return header + "".join(gene.to_dense() for gene in self.genes)

    @classmethod
    def from_plain(cls, text: str) -> "Chromosome":
        chromosome = cls()
        for index, (body, pos) in enumerate(split_plain(text)):
            chromosome.add_gene(Gene(string_to_bits(body, gene_index=index, offset=pos)))
        return chromosome

    @classmethod
    def from_dense(cls, text: str) -> "Chromosome":
        if not text:
            return cls()
        encoder, pieces = split_dense(text)
        chromosome = cls()
        for index, (body, pos) in enumerate(pieces):
            chromosome.add_gene(Gene(encoder.decode(body, gene_index=index, offset=pos)))
        if len(chromosome) != len(pieces):
            raise ChromosomeFormatError("decoded gene count does not match the dense body")
        return chromosome
