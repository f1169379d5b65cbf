"""The snake, its arena and the sensors an agent uses to play."""

from __future__ import annotations

import math
from collections.abc import Collection
from enum import IntEnum
from typing import ClassVar

from omnisnake import config, rng
from omnisnake.geometry import (
    Vec2,
    angle_between,
    bound_angle,
    distance,
    normalize,
    rotate,
    segment_intersection,
)

# Distance reported by a ray that hits nothing (largest single-precision value).
_NO_HIT = 3.4028234663852886e38
_RAY_LENGTH = 1200.0
_RAY_ANGLES = (-math.pi / 4.0, 0.0, math.pi / 4.0)


class Action(IntEnum):
    """What a controller can ask the snake to do in one frame."""

    TURN_LEFT = 0
    TURN_RIGHT = 1
    SPRINT = 2


class Snake:
    """A snake made of a head and a trail of points spaced one segment apart."""

    STARTING_POSITION: ClassVar[Vec2] = Vec2(100.0, 100.0)
    STARTING_SEGMENT_COUNT: ClassVar[int] = 15

    NORMAL_SPEED: ClassVar[float] = 2.5
    SPRINT_SPEED: ClassVar[float] = 7.5
    TURN_SPEED: ClassVar[float] = 0.09

    SEGMENT_LENGTH: ClassVar[float] = 10.0
    SEGMENT_RADIUS: ClassVar[float] = 7.0
    INCREMENT_AMOUNT: ClassVar[int] = 5
    IGNORED_SEGMENTS: ClassVar[int] = 3

    def __init__(self) -> None:
        self.head: Vec2 = self.STARTING_POSITION
        self.speed: float = self.NORMAL_SPEED
        self.direction: float = 0.0
        self.points: list[Vec2] = [self.head, self.head]
        self.segment_count: int = self.STARTING_SEGMENT_COUNT
        self.alive: bool = True

    def process(self, actions: Collection[Action]) -> None:
        """Advance the snake by one frame according to ``actions``."""
        if not self.alive:
            return

        turn = 0.0
        if Action.TURN_RIGHT in actions:
            turn += self.TURN_SPEED
        if Action.TURN_LEFT in actions:
            turn -= self.TURN_SPEED
        self.speed = self.SPRINT_SPEED if Action.SPRINT in actions else self.NORMAL_SPEED

        self.direction = bound_angle(self.direction + turn)
        self.head = self.head + Vec2(
            math.cos(self.direction) * self.speed, math.sin(self.direction) * self.speed
        )

        last = self.points[-1]
        if distance(self.head, last) >= self.SEGMENT_LENGTH:
            self.points.append(normalize(self.head - last) * self.SEGMENT_LENGTH + last)

        if len(self.points) > self.segment_count:
            del self.points[0]
        if len(self.points) == self.segment_count:
            tail_gap = self.points[1] - self.points[0]
            if tail_gap != Vec2(0.0, 0.0):
                self.points[0] = self.points[0] + normalize(tail_gap) * self.speed

        self.alive = not self.check_collision()

    def increment_length(self) -> None:
        """Grow the snake by a fixed number of segments."""
        self.segment_count += self.INCREMENT_AMOUNT

    def check_collision(self) -> bool:
        """Whether the head touches the body or the arena border."""
        body = self.points[: max(len(self.points) - self.IGNORED_SEGMENTS, 0)]
        if any(distance(point, self.head) <= self.SEGMENT_RADIUS * 2 for point in body):
            return True

        width, height = config.WINDOW_SIZE
        x, y = self.head
        if x - self.SEGMENT_RADIUS < config.BORDER or x + self.SEGMENT_RADIUS > width - config.BORDER:
            return True
        if y - self.SEGMENT_LENGTH < config.BORDER or y + self.SEGMENT_RADIUS > height - config.BORDER:
            return True
        return False

    def reset(self, randomized: bool) -> None:
        """Return to the starting state, optionally facing a random direction."""
        self.head = self.STARTING_POSITION
        self.segment_count = self.STARTING_SEGMENT_COUNT
        self.direction = 0.0
        self.points = [self.head, self.head]
        self.alive = True
        if randomized:
            self.direction = rng.random() * math.tau


class SnakeEngine:
    """The game world: one snake, apples to eat and four walls."""

    def __init__(self) -> None:
        self.snake = Snake()
        self.apples: list[Vec2] = [self.create_apple()]
        width, height = (float(v) for v in config.WINDOW_SIZE)
        border = float(config.BORDER)
        self.walls: list[tuple[Vec2, Vec2]] = [
            (Vec2(0.0, border), Vec2(width, border)),
            (Vec2(border, 0.0), Vec2(border, height)),
            (Vec2(0.0, height - border), Vec2(width, height - border)),
            (Vec2(width - border, 0.0), Vec2(width - border, height)),
        ]

    def process(self, actions: Collection[Action]) -> None:
        """Let the snake eat any apple it reaches, then move it one frame."""
        reach = config.APPLE_RADIUS + config.TOLERANCE + Snake.SEGMENT_RADIUS
        for index, apple in enumerate(self.apples):
            if distance(self.snake.head, apple) <= reach:
                self.apples[index] = self.create_apple()
                self.snake.increment_length()
        self.snake.process(actions)

    def reset(self, randomized: bool) -> None:
        """Start a new round with a fresh apple."""
        self.apples = [self.create_apple()]
        self.snake.reset(randomized)

    def create_apple(self) -> Vec2:
        """A random apple position away from the edges."""
        width, height = config.WINDOW_SIZE
        zone = config.DEAD_ZONE
        x = rng.random() * (width - zone * 2) + zone
        y = rng.random() * (height - zone * 2) + zone
        return Vec2(x, y)

    def nn_inputs(self) -> list[float]:
        """Sensor readings: length, angle to the apple and three ray distances."""
        inputs = [float(self.snake.segment_count), self.angle_to_apple()]
        inputs.extend(self.ray_intersect(angle)[0] for angle in _RAY_ANGLES)
        return inputs

    def angle_to_apple(self) -> float:
        """Angle from the heading to the first apple, scaled to [-1, 1]."""
        angle = angle_between(self.snake.head, self.apples[0])
        difference = angle - self.snake.direction
        if difference > math.pi:
            difference -= math.tau
        if difference < -math.pi:
            difference += math.tau
        return difference / math.pi

    def ray_intersect(self, angle: float) -> tuple[float, Vec2]:
        """Cast a ray relative to the heading; return scaled distance and hit point."""
        head = self.snake.head
        ray_end = head + rotate(Vec2(_RAY_LENGTH, 0.0), self.snake.direction + angle)
        points = self.snake.points

        min_distance = _NO_HIT
        closest = Vec2(0.0, 0.0)
        obstacles = [*self.walls, *zip(points, points[1:])]
        for start, end in obstacles:
            hit = segment_intersection(head, ray_end, start, end)
            if hit is None:
                continue
            hit_distance = distance(head, hit)
            if hit_distance < min_distance:
                min_distance = hit_distance
                closest = hit

        return min_distance / config.WINDOW_HYPOT, closest