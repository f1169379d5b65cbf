"""Drawing of the snake arena and of a network's structure onto pygame surfaces."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable
from typing import ClassVar

import pygame

from omnisnake import config
from omnisnake.geometry import Vec2
from omnisnake.network import FeedForwardNeuralNetwork
from omnisnake.snake import Snake, SnakeEngine

Color = tuple[int, int, int]
PointLike = Vec2 | tuple[float, float]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
MAGENTA: Color = (255, 0, 255)
CYAN: Color = (0, 255, 255)

_RAY_ANGLES = (-math.pi / 4.0, 0.0, math.pi / 4.0)


def _point(p: Iterable[float]) -> tuple[float, float]:
    x, y = p
    return float(x), float(y)


def draw_line(
    surface: pygame.Surface,
    start: PointLike,
    end: PointLike,
    thickness: float,
    color: Color,
) -> pygame.Rect:
    """Draw a straight band of the given thickness from ``start`` to ``end``."""
    sx, sy = _point(start)
    ex, ey = _point(end)
    dx, dy = ex - sx, ey - sy
    size = math.hypot(dx, dy)
    if size == 0:
        return pygame.Rect(round(sx), round(sy), 0, 0)

    half = thickness / 2.0
    nx, ny = -dy / size * half, dx / size * half
    corners = [
        (sx + nx, sy + ny),
        (ex + nx, ey + ny),
        (ex - nx, ey - ny),
        (sx - nx, sy - ny),
    ]
    return pygame.draw.polygon(surface, color, corners)


class Renderer:
    """Something that paints onto a surface once per frame."""

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface

    def draw(self) -> None:
        """Paint one frame; the base renderer paints nothing."""


class GameRenderer(Renderer):
    """Paints the arena: apples, borders, the snake and optional sensor rays."""

    EYE_RADIUS: ClassVar[float] = 3.5
    EYE_ANGLE: ClassVar[float] = math.pi / 2.0
    EYE_DISTANCE: ClassVar[float] = 5.5
    PUPIL_RADIUS: ClassVar[float] = 3.0
    PUPIL_ANGLE: ClassVar[float] = -math.pi / 2.0 + 0.25
    PUPIL_DISTANCE: ClassVar[float] = 1.0
    COLOR: ClassVar[Color] = (242, 149, 69)

    def __init__(self, surface: pygame.Surface, engine: SnakeEngine) -> None:
        super().__init__(surface)
        self.engine = engine
        self.draw_info = True

    def draw(self) -> None:
        surface = self.surface
        surface.fill(BLACK)

        for apple in self.engine.apples:
            pygame.draw.circle(surface, RED, _point(apple), config.APPLE_RADIUS)

        width, height = config.WINDOW_SIZE
        border = config.BORDER
        for rect in (
            (0, 0, width, border),
            (0, height - border, width, border),
            (0, 0, border, height),
            (width - border, 0, border, height),
        ):
            pygame.draw.rect(surface, config.BORDER_COLOR, rect)

        self._draw_snake()

        if self.draw_info:
            for start, end in self.engine.walls:
                draw_line(surface, start, end, 3.0, MAGENTA)
            head = self.engine.snake.head
            for angle in _RAY_ANGLES:
                hit = self.engine.ray_intersect(angle)[1]
                draw_line(surface, head, hit, 3.0, MAGENTA)

    def toggle_draw_info(self) -> None:
        """Switch the display of walls and sensor rays on or off."""
        self.draw_info = not self.draw_info

    def _draw_snake(self) -> None:
        surface = self.surface
        snake = self.engine.snake
        head = snake.head
        direction = snake.direction
        points = snake.points
        radius = Snake.SEGMENT_RADIUS

        for point, following in zip(points, points[1:]):
            pygame.draw.circle(surface, self.COLOR, _point(point), radius)
            draw_line(surface, point, following, radius * 2, self.COLOR)

        draw_line(surface, points[-1], head, radius * 2, self.COLOR)
        pygame.draw.circle(surface, self.COLOR, _point(head), radius)

        eyes = [
            head + Vec2(math.cos(angle) * self.EYE_DISTANCE, math.sin(angle) * self.EYE_DISTANCE)
            for angle in (direction - self.EYE_ANGLE, direction + self.EYE_ANGLE)
        ]
        for eye in eyes:
            pygame.draw.circle(surface, WHITE, _point(eye), self.EYE_RADIUS)

        pupil_angles = (direction - self.PUPIL_ANGLE, direction + self.PUPIL_ANGLE)
        for eye, angle in zip(eyes, pupil_angles):
            pupil = eye + Vec2(
                math.cos(angle) * self.PUPIL_DISTANCE, math.sin(angle) * self.PUPIL_DISTANCE
            )
            pygame.draw.circle(surface, BLACK, _point(pupil), self.PUPIL_RADIUS)


class NeuralNetworkRenderer(Renderer):
    """Paints a network as columns of neurons joined by their links."""

    NEURON_RADIUS: ClassVar[float] = 20.0
    NEURON_GAP: ClassVar[float] = 80.0
    LAYER_GAP: ClassVar[float] = 100.0
    FONT_SIZE: ClassVar[int] = 25

    INPUT_NAMES: ClassVar[tuple[str, ...]] = (
        "Length",
        "Apple Angle",
        "Ray 1",
        "Ray 2",
        "Ray 3",
    )
    OUTPUT_NAMES: ClassVar[tuple[str, ...]] = ("Turn Left", "Turn Right", "Sprint")

    def __init__(
        self,
        surface: pygame.Surface,
        network: FeedForwardNeuralNetwork,
        font: pygame.font.Font | None = None,
    ) -> None:
        super().__init__(surface)
        self.network = network
        self._font = font
        self.neuron_positions: dict[int, Vec2] = self._layout()

    def _layout(self) -> dict[int, Vec2]:
        neurons = self.network.neurons
        counts = Counter(neuron.layer for neuron in neurons)
        if not counts:
            return {}

        step = self.NEURON_RADIUS * 2.0 + self.NEURON_GAP
        max_layer_height = max(counts.values()) * step - self.NEURON_GAP
        layout_width = (self.network.num_layers - 1) * self.LAYER_GAP

        width, height = self.surface.get_size()
        offset_x = (width - layout_width) / 2.0
        offset_y = (height - max_layer_height) / 2.0

        placed: Counter[int] = Counter()
        positions: dict[int, Vec2] = {}
        for neuron in neurons:
            layer = neuron.layer
            index = placed[layer]
            placed[layer] += 1
            layer_height = counts[layer] * step - self.NEURON_GAP
            layer_offset = (max_layer_height - layer_height) / 2.0
            positions[neuron.neuron_id] = Vec2(
                layer * self.LAYER_GAP + offset_x,
                layer_offset + index * step + offset_y,
            )
        return positions

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, self.FONT_SIZE)
        return self._font

    def _label(self, text: str, position: Vec2) -> None:
        rendered = self._get_font().render(text, True, WHITE)
        self.surface.blit(rendered, _point(position))

    def draw(self) -> None:
        surface = self.surface
        surface.fill(BLACK)

        neurons = self.network.neurons
        positions = self.neuron_positions
        origin = Vec2(0.0, 0.0)

        for neuron in neurons:
            end = positions.get(neuron.neuron_id, origin)
            for link in neuron.inputs:
                draw_line(surface, positions.get(link.input_id, origin), end, 1.0, CYAN)

        last_layer = self.network.num_layers - 1
        for index, neuron in enumerate(neurons):
            position = positions.get(neuron.neuron_id, origin)

            if neuron.layer == 0 and index < len(self.INPUT_NAMES):
                self._label(self.INPUT_NAMES[index], position + Vec2(-200.0, -15.0))

            if neuron.layer == last_layer:
                name_index = index - len(neurons) + len(self.OUTPUT_NAMES)
                if 0 <= name_index < len(self.OUTPUT_NAMES):
                    self._label(self.OUTPUT_NAMES[name_index], position + Vec2(40.0, -15.0))

            pygame.draw.circle(surface, WHITE, _point(position), self.NEURON_RADIUS)