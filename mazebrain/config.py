# mazebrain/config.py

from dataclasses import dataclass, field

MAX_WEIGHT = 10.0   # advisory bound on any learned weight
OUTPUTS = 2         # velocity, turn delta


@dataclass
class NeuronParams:
    max_weight: float = MAX_WEIGHT   # cosine taper reaches zero here
    clamp_weights: bool = False      # hard-clip weights to +/- max_weight after learning


@dataclass
class NetworkParams:
    input_size: int
    hidden_layers: int = 0
    hidden_width: int = 0
    output_size: int = 0
    learning_rate: float = 0.0      # alpha
    forgetting_rate: float = 0.0    # phi
    neuron: NeuronParams = field(default_factory=NeuronParams)

    def __post_init__(self):
        for name in ("input_size", "hidden_layers", "hidden_width", "output_size"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    @property
    def has_hidden(self) -> bool:
        return self.hidden_layers > 0 and self.hidden_width > 0


@dataclass
class BrainParams:
    input_classes: list
    hidden_width: int
    hidden_layers: int
    output_classes: list
    neuron: NeuronParams = field(default_factory=NeuronParams)

    def __post_init__(self):
        # deferred import: decoder imports this module
        from .genetics.decoder import InputClass, OutputClass

        self.input_classes = [InputClass(c) for c in self.input_classes]
        self.output_classes = [OutputClass(c) for c in self.output_classes]
        if self.hidden_width < 0 or self.hidden_layers < 0:
            raise ValueError("hidden_width and hidden_layers must be non-negative")

    @property
    def input_size(self) -> int:
        return len(self.input_classes)

    @property
    def output_size(self) -> int:
        return len(self.output_classes)
