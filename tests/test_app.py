import pygame
import pytest

from omnisnake import rng
from omnisnake.app import compute_fitness, main, process_events
from omnisnake.controller import AIController
from omnisnake.genome import Genome, Individual, LayerType, NeuronGene
from omnisnake.network import FeedForwardNeuralNetwork
from omnisnake.snake import Action, Snake, SnakeEngine


def sprint_genome():
    """A genome whose network always sprints and never turns."""
    neurons = [NeuronGene(LayerType.INPUT, i, 0.0) for i in range(5)]
    neurons += [
        NeuronGene(LayerType.OUTPUT, 5, -10.0),
        NeuronGene(LayerType.OUTPUT, 6, -10.0),
        NeuronGene(LayerType.OUTPUT, 7, 10.0),
    ]
    return Genome(0, 5, 3, neurons=neurons, links=[])


@pytest.fixture
def video(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.display.init()
    pygame.display.set_mode((10, 10))
    yield
    pygame.quit()


def test_compute_fitness_sums_lengths_over_rounds():
    rng.seed(7)
    individual = Individual(sprint_genome(), 999.0)
    compute_fitness([individual])
    base = Snake.STARTING_SEGMENT_COUNT * 3
    assert individual.fitness >= base
    assert (individual.fitness - base) % Snake.INCREMENT_AMOUNT == 0


def test_compute_fitness_scores_every_individual():
    rng.seed(3)
    individuals = [Individual(sprint_genome(), -1.0) for _ in range(2)]
    compute_fitness(individuals)
    assert all(ind.fitness >= Snake.STARTING_SEGMENT_COUNT * 3 for ind in individuals)


def test_process_events_collects_controller_actions(video):
    engine = SnakeEngine()
    network = FeedForwardNeuralNetwork.create_from_genome(sprint_genome())
    controller = AIController(network, engine)
    pygame.event.clear()
    assert process_events(engine, controller) is True
    assert controller.get_actions() == {Action.SPRINT}


def test_process_events_quit_stops(video):
    engine = SnakeEngine()
    controller = AIController(FeedForwardNeuralNetwork.create_from_genome(sprint_genome()), engine)
    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert process_events(engine, controller) is False


def test_process_events_escape_stops(video):
    engine = SnakeEngine()
    controller = AIController(FeedForwardNeuralNetwork.create_from_genome(sprint_genome()), engine)
    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    assert process_events(engine, controller) is False


def test_process_events_space_resets_engine(video):
    engine = SnakeEngine()
    for _ in range(5):
        engine.process({Action.SPRINT})
    assert engine.snake.head != Snake.STARTING_POSITION
    controller = AIController(FeedForwardNeuralNetwork.create_from_genome(sprint_genome()), engine)
    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE))
    assert process_events(engine, controller) is True
    assert engine.snake.head == Snake.STARTING_POSITION


def test_main_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        main(["--mode", "load", "--file", str(tmp_path / "absent.json")])


def test_main_load_runs_limited_frames(video, tmp_path):
    path = tmp_path / "best.json"
    FeedForwardNeuralNetwork.create_from_genome(sprint_genome()).save_to_json(path)
    assert main(["--mode", "load", "--file", str(path), "--max-frames", "2"]) == 0


def test_main_play_runs_limited_frames(video):
    assert main(["--mode", "play", "--max-frames", "2"]) == 0


def test_main_rejects_unknown_mode():
    with pytest.raises(SystemExit):
        main(["--mode", "fly"])