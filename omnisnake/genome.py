"""Genome data structures for neuroevolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class LayerType(IntEnum):
    INPUT = 0
    OUTPUT = 1
    HIDDEN = 2


@dataclass
class NeuronGene:
    layer: LayerType
    neuron_id: int
    bias: float


@dataclass(frozen=True)
class LinkId:
    input_id: int
    output_id: int


@dataclass
class LinkGene:
    link_id: LinkId
    weight: float
    is_enabled: bool


@dataclass
class Genome:
    genome_id: int
    num_inputs: int
    num_outputs: int
    neurons: list[NeuronGene] = field(default_factory=list)
    links: list[LinkGene] = field(default_factory=list)


@dataclass
class Individual:
    genome: Genome
    fitness: float = 0.0


@dataclass
class Indexer:
    """Hands out increasing integer identifiers."""

    index: int = 0

    def next(self) -> int:
        value = self.index
        self.index += 1
        return value


def format_individual(individual: Individual) -> str:
    """Human-readable dump of an individual and its genome."""
    genome = individual.genome
    parts = [
        f"Fitness: {individual.fitness:g}\n\n",
        f"Genome ID: {genome.genome_id}\n",
        f"Genome Inputs: {genome.num_inputs}\n",
        f"Genome Outputs: {genome.num_outputs}\n",
        "\nNeurons:\n",
    ]
    parts.extend(
        f"Neuron ID: {n.neuron_id} Neuron Layer: {int(n.layer)} Neuron Bias: {n.bias:g}\n"
        for n in genome.neurons
    )
    parts.append("\nLinks:\n")
    parts.extend(
        f"Link ID: {link.link_id.input_id}->{link.link_id.output_id}"
        f" Link Weight: {link.weight:g}"
        f" Link Enabled: {int(link.is_enabled)}\n"
        for link in genome.links
    )
    parts.append("\n\n")
    return "".join(parts)


def print_individual(individual: Individual) -> None:
    """Print an individual to standard output."""
    print(format_individual(individual), end="")