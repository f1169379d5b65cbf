"""Command-line entry point: play, train or watch a trained snake."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

import pygame

from omnisnake import config
from omnisnake.controller import AIController, Controller, KeyboardController
from omnisnake.genome import Individual, print_individual
from omnisnake.network import FeedForwardNeuralNetwork
from omnisnake.population import Population
from omnisnake.renderer import GameRenderer, NeuralNetworkRenderer
from omnisnake.snake import SnakeEngine

INPUTS = 5
OUTPUTS = 3
MAX_FRAMES = 10_000
MAX_ROUNDS = 3
NETWORK_PANEL_WIDTH = config.WINDOW_SIZE[0] + 400


class Mode(Enum):
    """What the program does once started."""

    PLAY = "play"
    TRAIN = "train"
    LOAD = "load"


def compute_fitness(individuals: list[Individual]) -> None:
    """Score each individual by the snake lengths its network reaches over several rounds."""
    for individual in individuals:
        network = FeedForwardNeuralNetwork.create_from_genome(individual.genome)
        engine = SnakeEngine()
        controller = AIController(network, engine)

        frames = 0
        individual.fitness = 0.0
        for _ in range(MAX_ROUNDS):
            while engine.snake.alive and frames < MAX_FRAMES:
                controller.check_inputs()
                engine.process(controller.get_actions())
                frames += 1
            individual.fitness += engine.snake.segment_count
            engine.reset(False)


def process_events(engine: SnakeEngine, controller: Controller) -> bool:
    """Poll the controller and the window; return False once the window should close."""
    controller.check_inputs()

    running = True
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                running = False
            if event.key == pygame.K_SPACE:
                engine.reset(False)
    return running


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="omnisnake", description="Snake driven by evolved networks.")
    parser.add_argument("--mode", choices=[mode.value for mode in Mode], default=Mode.LOAD.value)
    parser.add_argument("--file", default="data/best.json", help="network to load in load mode")
    parser.add_argument("--save", default="data/recent.json", help="where training saves the best network")
    parser.add_argument("--generations", type=int, default=2)
    parser.add_argument("--max-frames", type=int, default=None, help="stop after this many frames")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game window in the chosen mode."""
    args = _parse_args(argv)
    mode = Mode(args.mode)

    engine = SnakeEngine()
    network: FeedForwardNeuralNetwork | None = None
    controller: Controller

    if mode is Mode.TRAIN:
        best = Population().run(args.generations, INPUTS, OUTPUTS, compute_fitness)
        print_individual(best)
        network = FeedForwardNeuralNetwork.create_from_genome(best.genome)
        save_path = Path(args.save)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        network.save_to_json(save_path)
    elif mode is Mode.LOAD:
        network = FeedForwardNeuralNetwork.load_from_json(args.file)

    if network is None:
        controller = KeyboardController()
    else:
        controller = AIController(network, engine)

    pygame.display.init()
    pygame.font.init()
    try:
        game_width, height = config.WINDOW_SIZE
        total_width = game_width + (NETWORK_PANEL_WIDTH if network is not None else 0)
        screen = pygame.display.set_mode((total_width, height))
        pygame.display.set_caption("Omni Snake")

        renderer = GameRenderer(screen.subsurface((0, 0, game_width, height)), engine)
        network_renderer = None
        if network is not None:
            panel = screen.subsurface((game_width, 0, NETWORK_PANEL_WIDTH, height))
            network_renderer = NeuralNetworkRenderer(panel, network)

        clock = pygame.time.Clock()
        frames = 0
        while process_events(engine, controller):
            engine.process(controller.get_actions())
            renderer.draw()
            if network_renderer is not None:
                network_renderer.draw()
            pygame.display.flip()
            clock.tick(config.MAX_FRAMERATE)

            frames += 1
            if args.max_frames is not None and frames >= args.max_frames:
                break
    finally:
        pygame.quit()
    return 0