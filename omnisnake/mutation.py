"""Structural and numeric mutations of genomes."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from omnisnake import rng
from omnisnake.config import LINK_CONFIG, NEURON_CONFIG, MutationConfig
from omnisnake.genome import Genome, Indexer, LayerType, LinkGene, LinkId, NeuronGene


def _has_cycle(adjacency: dict[int, list[int]]) -> bool:
    visited: set[int] = set()
    on_stack: set[int] = set()

    def visit(node: int) -> bool:
        visited.add(node)
        on_stack.add(node)
        for neighbour in adjacency.get(node, ()):
            if neighbour in on_stack:
                return True
            if neighbour not in visited and visit(neighbour):
                return True
        on_stack.discard(node)
        return False

    return any(node not in visited and visit(node) for node in list(adjacency))


def would_be_cyclic(links: Iterable[LinkGene], input_id: int, output_id: int) -> bool:
    """Whether adding a link input_id -> output_id would create a cycle."""
    adjacency: dict[int, list[int]] = defaultdict(list)
    for link in links:
        adjacency[link.link_id.input_id].append(link.link_id.output_id)
    adjacency[input_id].append(output_id)
    return _has_cycle(adjacency)


def choose_random_by_layer(neurons: list[NeuronGene], layers: Iterable[LayerType]) -> NeuronGene:
    """Pick a random neuron whose layer is among ``layers``."""
    wanted = set(layers)
    return rng.choice([n for n in neurons if n.layer in wanted])


def mutate_add_link(genome: Genome) -> None:
    """Add a random forward link, or re-enable it if it already exists."""
    input_id = choose_random_by_layer(genome.neurons, {LayerType.INPUT, LayerType.HIDDEN}).neuron_id
    output_id = choose_random_by_layer(genome.neurons, {LayerType.OUTPUT, LayerType.HIDDEN}).neuron_id
    link_id = LinkId(input_id, output_id)

    for link in genome.links:
        if link.link_id == link_id:
            link.is_enabled = True
            return

    if would_be_cyclic(genome.links, input_id, output_id):
        return

    genome.links.append(LinkGene(link_id, rng.gaussian(0.0, 1.0), True))


def mutate_remove_link(genome: Genome) -> None:
    """Remove a random link, if there is one."""
    if not genome.links:
        return
    del genome.links[int(rng.random() * len(genome.links))]


def mutate_add_neuron(genome: Genome, neuron_indexer: Indexer) -> None:
    """Split a random link with a new hidden neuron."""
    if not genome.links:
        return

    link_to_split = rng.choice(genome.links)
    link_to_split.is_enabled = False

    new_neuron = NeuronGene(LayerType.HIDDEN, neuron_indexer.next(), rng.gaussian(0.0, 1.0))
    genome.neurons.append(new_neuron)

    link_id = link_to_split.link_id
    genome.links.append(LinkGene(LinkId(link_id.input_id, new_neuron.neuron_id), 1.0, True))
    genome.links.append(
        LinkGene(LinkId(new_neuron.neuron_id, link_id.output_id), link_to_split.weight, True)
    )


def mutate_remove_neuron(genome: Genome) -> None:
    """Remove a random hidden neuron together with its links."""
    if not any(n.layer == LayerType.HIDDEN for n in genome.neurons):
        return

    neuron = choose_random_by_layer(genome.neurons, {LayerType.HIDDEN})
    neuron_id = neuron.neuron_id

    genome.links = [
        link
        for link in genome.links
        if link.link_id.input_id != neuron_id and link.link_id.output_id != neuron_id
    ]
    genome.neurons = [n for n in genome.neurons if n is not neuron]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def mutate_delta(value: float, config: MutationConfig) -> float:
    """Nudge ``value`` by a clamped gaussian step, staying within the limits."""
    delta = _clamp(rng.gaussian(0.0, config.mutation_power), config.min_value, config.max_value)
    return _clamp(value + delta, config.min_value, config.max_value)


def mutate_double(value: float, config: MutationConfig) -> float:
    """Perturb, replace or keep ``value`` according to the config's rates."""
    outcome = rng.choose_3(config.mutation_rate, config.replace_rate)
    if outcome == 0:
        return mutate_delta(value, config)
    if outcome == 1:
        return rng.gaussian(0.0, 1.0)
    return value


def mutate(genome: Genome, neuron_indexer: Indexer) -> None:
    """Apply structural mutations, then mutate every bias and weight."""
    if rng.coin_flip(NEURON_CONFIG.add_rate):
        mutate_add_neuron(genome, neuron_indexer)
    if rng.coin_flip(NEURON_CONFIG.remove_rate):
        mutate_remove_neuron(genome)
    if rng.coin_flip(LINK_CONFIG.add_rate):
        mutate_add_link(genome)
    if rng.coin_flip(LINK_CONFIG.remove_rate):
        mutate_remove_link(genome)

    for neuron in genome.neurons:
        neuron.bias = mutate_double(neuron.bias, NEURON_CONFIG)
    for link in genome.links:
        link.weight = mutate_double(link.weight, LINK_CONFIG)