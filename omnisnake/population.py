"""Evolution of a population of genomes."""

from __future__ import annotations

import math
import struct
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace

from omnisnake import config, rng
from omnisnake.genome import (
    Genome,
    Indexer,
    Individual,
    LayerType,
    LinkGene,
    LinkId,
    NeuronGene,
)
from omnisnake.mutation import mutate


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


@dataclass
class Population:
    """Creates, breeds and selects genomes across generations."""

    genome_indexer: Indexer = field(default_factory=Indexer)
    neuron_indexer: Indexer = field(default_factory=Indexer)

    def crossover_neuron(self, a: NeuronGene, b: NeuronGene) -> NeuronGene:
        """Combine two versions of the same neuron gene."""
        return NeuronGene(a.layer, a.neuron_id, rng.choose(0.5, a.bias, b.bias))

    def crossover_link(self, a: LinkGene, b: LinkGene) -> LinkGene:
        """Combine two versions of the same link gene."""
        weight = rng.choose(0.5, a.weight, b.weight)
        is_enabled = rng.choose(0.5, a.is_enabled, b.is_enabled)
        return LinkGene(a.link_id, weight, is_enabled)

    def crossover(self, a: Individual, b: Individual) -> Genome:
        """Breed an offspring whose genes follow the fitter parent."""
        dominant, recessive = (a, b) if a.fitness > b.fitness else (b, a)
        offspring = Genome(
            self.genome_indexer.next(),
            dominant.genome.num_inputs,
            dominant.genome.num_outputs,
        )

        recessive_neurons: dict[int, NeuronGene] = {}
        for neuron in recessive.genome.neurons:
            recessive_neurons.setdefault(neuron.neuron_id, neuron)
        for neuron in dominant.genome.neurons:
            other = recessive_neurons.get(neuron.neuron_id)
            offspring.neurons.append(
                replace(neuron) if other is None else self.crossover_neuron(neuron, other)
            )

        recessive_links: dict[LinkId, LinkGene] = {}
        for link in recessive.genome.links:
            recessive_links.setdefault(link.link_id, link)
        for link in dominant.genome.links:
            other = recessive_links.get(link.link_id)
            offspring.links.append(
                replace(link) if other is None else self.crossover_link(link, other)
            )

        return offspring

    def new_genome(self, num_inputs: int, num_outputs: int) -> Genome:
        """A fully connected genome with random output biases and weights."""
        genome = Genome(self.genome_indexer.next(), num_inputs, num_outputs)
        output_ids = range(num_inputs, num_inputs + num_outputs)

        genome.neurons.extend(NeuronGene(LayerType.INPUT, i, 0.0) for i in range(num_inputs))
        genome.neurons.extend(
            NeuronGene(LayerType.OUTPUT, o, rng.gaussian(0.0, 1.0)) for o in output_ids
        )
        genome.links.extend(
            LinkGene(LinkId(i, o), rng.gaussian(0.0, 1.0), True)
            for i in range(num_inputs)
            for o in output_ids
        )
        return genome

    def run(
        self,
        num_generations: int,
        num_inputs: int,
        num_outputs: int,
        compute_fitness: Callable[[list[Individual]], None],
    ) -> Individual:
        """Evolve for ``num_generations`` and return the best individual."""
        self.neuron_indexer.index = num_inputs + num_outputs
        individuals = [
            Individual(self.new_genome(num_inputs, num_outputs), 0.0)
            for _ in range(config.POPULATION_SIZE)
        ]

        for generation in range(1, num_generations + 1):
            compute_fitness(individuals)
            individuals = self.reproduce(individuals)
            print(f"Generation: {generation}, Best Fitness: {individuals[0].fitness:g}")

        return self.sort_individuals_by_fitness(individuals)[0]

    def sort_individuals_by_fitness(self, individuals: Sequence[Individual]) -> list[Individual]:
        """A new list ordered from fittest to least fit."""
        return sorted(individuals, key=lambda individual: individual.fitness, reverse=True)

    def reproduce(self, individuals: Sequence[Individual]) -> list[Individual]:
        """Keep the fittest survivors and fill up with mutated offspring."""
        survivors = self.sort_individuals_by_fitness(individuals)
        cutoff = math.ceil(_f32(config.SURVIVAL_THRESHOLD * len(survivors)))
        survivors = survivors[:cutoff]

        new_generation = list(survivors)
        spawn_size = config.POPULATION_SIZE - len(new_generation)
        for _ in range(spawn_size + 1):
            parent1 = rng.choice(survivors)
            parent2 = rng.choice(survivors)
            offspring = self.crossover(parent1, parent2)
            mutate(offspring, self.neuron_indexer)
            new_generation.append(Individual(offspring, 0.0))

        return new_generation