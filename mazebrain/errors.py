# mazebrain/errors.py


class MazeBrainError(Exception):
    """Base class for every error raised by mazebrain."""


class GenomeError(MazeBrainError):
    """A chromosome could not be turned into a working network."""


class InsufficientGenomeError(GenomeError):
    """
    The chromosome holds fewer genes than the requested topology needs
    (a "lobotomy"). The genome should be discarded or regenerated.
    """

    def __init__(self, required: int, available: int):
        super().__init__(
            f"insufficient genome: topology needs {required} genes, chromosome has {available}"
        )
        self.required = required
        self.available = available


class ChromosomeIntegrityError(MazeBrainError):
    """A genetic operator produced a chromosome that lost its genes."""


class ChromosomeFormatError(MazeBrainError, ValueError):
    """Serialized chromosome text could not be parsed."""

    def __init__(self, message: str, gene_index: int | None = None, position: int | None = None):
        where = []
        if gene_index is not None:
            where.append(f"gene {gene_index}")
        if position is not None:
            where.append(f"position {position}")
        if where:
            message = f"{message} ({', '.join(where)})"
        super().__init__(message)
        self.gene_index = gene_index
        self.position = position
