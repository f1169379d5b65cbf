"""Feed-forward neural networks built from genomes."""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from os import PathLike
from typing import Any

from omnisnake.genome import Genome, LinkGene

_ARCHIVE_KEY = "value0"


def sigmoid(x: float) -> float:
    """Logistic function, safe against overflow for large magnitudes."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


@dataclass
class NeuronInput:
    input_id: int
    weight: float


@dataclass
class Neuron:
    layer: int
    neuron_id: int
    bias: float
    inputs: list[NeuronInput] = field(default_factory=list)


def _assign_depths(links: Sequence[LinkGene], outputs: set[int], inputs: Iterable[int]) -> dict[int, int]:
    """Longest-path depth of every non-output neuron reachable from the inputs."""
    successors: dict[int, list[int]] = {}
    for link in links:
        successors.setdefault(link.link_id.input_id, []).append(link.link_id.output_id)

    depths: dict[int, int] = {}

    def visit(node: int, depth: int) -> None:
        if node in outputs:
            return
        if node in depths and depths[node] >= depth:
            return
        depths[node] = depth
        for successor in successors.get(node, ()):
            visit(successor, depth + 1)

    for input_id in inputs:
        visit(input_id, 0)
    return depths


def partition_layers(
    inputs: Sequence[int], outputs: Sequence[int], links: Sequence[LinkGene]
) -> list[list[int]]:
    """Group neuron ids into layers; the outputs always form the last layer."""
    depths = _assign_depths(links, set(outputs), inputs)
    if not depths:
        raise ValueError("network has no input neurons to layer from")

    layers: list[list[int]] = [[] for _ in range(max(depths.values()) + 1)]
    for neuron_id in sorted(depths):
        layers[depths[neuron_id]].append(neuron_id)
    layers.append(list(outputs))
    return layers


@dataclass
class FeedForwardNeuralNetwork:
    """A layered network evaluated neuron by neuron in layer order."""

    input_ids: list[int] = field(default_factory=list)
    output_ids: list[int] = field(default_factory=list)
    neurons: list[Neuron] = field(default_factory=list)
    num_layers: int = 0

    @classmethod
    def create_from_genome(cls, genome: Genome) -> FeedForwardNeuralNetwork:
        """Build the network described by a genome's genes."""
        inputs = list(range(genome.num_inputs))
        outputs = list(range(genome.num_inputs, genome.num_inputs + genome.num_outputs))
        layers = partition_layers(inputs, outputs, genome.links)
        biases = {gene.neuron_id: gene.bias for gene in genome.neurons}

        neurons = []
        for layer_index, layer in enumerate(layers):
            for neuron_id in layer:
                if neuron_id not in biases:
                    raise ValueError(f"genome has no gene for neuron {neuron_id}")
                neuron_inputs = [
                    NeuronInput(link.link_id.input_id, link.weight)
                    for link in genome.links
                    if link.is_enabled and link.link_id.output_id == neuron_id
                ]
                neurons.append(Neuron(layer_index, neuron_id, biases[neuron_id], neuron_inputs))

        return cls(inputs, outputs, neurons, len(layers))

    def activate(self, inputs: Sequence[float]) -> list[float]:
        """Feed ``inputs`` through the network and return the output values."""
        if len(inputs) > len(self.input_ids):
            raise ValueError(
                f"expected at most {len(self.input_ids)} inputs, got {len(inputs)}"
            )
        values: dict[int, float] = dict(zip(self.input_ids, inputs))
        for output_id in self.output_ids:
            values[output_id] = 0.0

        input_set = set(self.input_ids)
        for neuron in self.neurons:
            if neuron.neuron_id in input_set:
                continue
            total = sum(values.get(i.input_id, 0.0) * i.weight for i in neuron.inputs)
            values[neuron.neuron_id] = sigmoid(total + neuron.bias)

        return [values[output_id] for output_id in self.output_ids]

    def describe(self) -> str:
        """Human-readable listing of the neurons and their inputs."""
        parts = ["\nNeurons:\n\n"]
        for neuron in self.neurons:
            parts.append(f"Neuron ID: {neuron.neuron_id} Neuron Bias: {neuron.bias:g}\n")
            parts.append("Inputs:\n")
            parts.extend(
                f"Input ID: {i.input_id} Input Weight: {i.weight:g}\n" for i in neuron.inputs
            )
            parts.append("\n")
        parts.append("\n\n")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form of the network."""
        return {
            "input_ids": list(self.input_ids),
            "num_layers": self.num_layers,
            "output_ids": list(self.output_ids),
            "neurons": [
                {
                    "layer": n.layer,
                    "neuron_id": n.neuron_id,
                    "bias": n.bias,
                    "inputs": [{"input_id": i.input_id, "weight": i.weight} for i in n.inputs],
                }
                for n in self.neurons
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FeedForwardNeuralNetwork:
        """Rebuild a network from the form produced by :meth:`to_dict`."""
        try:
            neurons = [
                Neuron(
                    int(n["layer"]),
                    int(n["neuron_id"]),
                    float(n["bias"]),
                    [NeuronInput(int(i["input_id"]), float(i["weight"])) for i in n["inputs"]],
                )
                for n in data["neurons"]
            ]
            return cls(
                [int(x) for x in data["input_ids"]],
                [int(x) for x in data["output_ids"]],
                neurons,
                int(data["num_layers"]),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed network data: {exc}") from exc

    def save_to_json(self, filename: str | PathLike[str]) -> None:
        """Write the network to a JSON file."""
        with open(filename, "w", encoding="utf-8") as fh:
            json.dump({_ARCHIVE_KEY: self.to_dict()}, fh, indent=4)

    @classmethod
    def load_from_json(cls, filename: str | PathLike[str]) -> FeedForwardNeuralNetwork:
        """Read a network written by :meth:`save_to_json`."""
        with open(filename, encoding="utf-8") as fh:
            data = json.load(fh)
        if isinstance(data, dict) and _ARCHIVE_KEY in data:
            data = data[_ARCHIVE_KEY]
        return cls.from_dict(data)