"""Sources of snake actions: nobody, a keyboard, or a neural network."""

from __future__ import annotations

from collections.abc import Callable

import pygame

from omnisnake.network import FeedForwardNeuralNetwork
from omnisnake.snake import Action, SnakeEngine

KeyCheck = Callable[[int], bool]


class Controller:
    """Collects actions between frames; the base controller produces none."""

    def __init__(self) -> None:
        self._next_actions: set[Action] = set()

    def get_actions(self) -> set[Action]:
        """Return the collected actions and start a fresh collection."""
        actions, self._next_actions = self._next_actions, set()
        return actions

    def check_inputs(self) -> None:
        """Gather actions for the next frame."""


def _current_key_state() -> KeyCheck:
    pressed = pygame.key.get_pressed()
    return lambda key: bool(pressed[key])


class KeyboardController(Controller):
    """Turns with A and D, sprints with W or left shift."""

    def __init__(self, is_pressed: KeyCheck | None = None) -> None:
        super().__init__()
        self._is_pressed = is_pressed

    def check_inputs(self) -> None:
        is_pressed = self._is_pressed or _current_key_state()
        if is_pressed(pygame.K_a):
            self._next_actions.add(Action.TURN_LEFT)
        if is_pressed(pygame.K_d):
            self._next_actions.add(Action.TURN_RIGHT)
        if is_pressed(pygame.K_LSHIFT) or is_pressed(pygame.K_w):
            self._next_actions.add(Action.SPRINT)


class AIController(Controller):
    """Chooses actions by feeding the engine's sensors through a network."""

    def __init__(self, neural_network: FeedForwardNeuralNetwork, engine: SnakeEngine) -> None:
        super().__init__()
        self.neural_network = neural_network
        self.engine = engine

    def check_inputs(self) -> None:
        outputs = self.neural_network.activate(self.engine.nn_inputs())
        if outputs[0] > 0.5:
            self._next_actions.add(Action.TURN_LEFT)
        if outputs[1] > 0.5:
            self._next_actions.add(Action.TURN_RIGHT)
        if outputs[2] > 0.5:
            self._next_actions.add(Action.SPRINT)