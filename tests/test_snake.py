import math

import pytest

from omnisnake import config, rng
from omnisnake.geometry import Vec2, distance
from omnisnake.snake import Action, Snake, SnakeEngine


def test_initial_state():
    snake = Snake()
    assert snake.head == Snake.STARTING_POSITION
    assert snake.points == [Snake.STARTING_POSITION, Snake.STARTING_POSITION]
    assert snake.segment_count == Snake.STARTING_SEGMENT_COUNT
    assert snake.alive


def test_actions_from_values_drive_snake():
    right = Snake()
    right.process({Action(1)})
    assert right.direction == pytest.approx(Snake.TURN_SPEED)

    left = Snake()
    left.process({Action(0)})
    assert left.direction == pytest.approx(math.tau - Snake.TURN_SPEED)

    sprinting = Snake()
    sprinting.process({Action(2)})
    assert sprinting.speed == Snake.SPRINT_SPEED


def test_straight_move_advances_by_normal_speed():
    snake = Snake()
    snake.process(set())
    expected = Snake.STARTING_POSITION + Vec2(Snake.NORMAL_SPEED, 0.0)
    assert tuple(snake.head) == pytest.approx(tuple(expected))
    assert snake.speed == Snake.NORMAL_SPEED


def test_sprint_sets_speed():
    snake = Snake()
    snake.process({Action.SPRINT})
    assert snake.speed == Snake.SPRINT_SPEED
    assert distance(Snake.STARTING_POSITION, snake.head) == pytest.approx(Snake.SPRINT_SPEED)


def test_turn_right_and_left():
    right = Snake()
    right.process({Action.TURN_RIGHT})
    assert right.direction == pytest.approx(Snake.TURN_SPEED)

    left = Snake()
    left.process({Action.TURN_LEFT})
    assert left.direction == pytest.approx(math.tau - Snake.TURN_SPEED)


def test_both_turns_cancel():
    snake = Snake()
    snake.process({Action.TURN_LEFT, Action.TURN_RIGHT})
    assert snake.direction == pytest.approx(0.0)


def test_new_point_added_after_one_segment():
    snake = Snake()
    steps = int(Snake.SEGMENT_LENGTH / Snake.NORMAL_SPEED)
    for _ in range(steps):
        snake.process(set())
    assert len(snake.points) == 3
    expected = Snake.STARTING_POSITION + Vec2(Snake.SEGMENT_LENGTH, 0.0)
    assert tuple(snake.points[-1]) == pytest.approx(tuple(expected))


def test_points_never_exceed_segment_count():
    snake = Snake()
    for _ in range(200):
        snake.process(set())
        assert len(snake.points) <= snake.segment_count
    assert snake.alive
    assert len(snake.points) == snake.segment_count
    for a, b in zip(snake.points[1:], snake.points[2:]):
        assert distance(a, b) == pytest.approx(Snake.SEGMENT_LENGTH)


def test_dies_at_right_wall_and_stops():
    snake = Snake()
    frames = 0
    while snake.alive and frames < 1000:
        snake.process(set())
        frames += 1
    assert not snake.alive
    assert snake.head.x + Snake.SEGMENT_RADIUS > config.WINDOW_SIZE[0] - config.BORDER
    frozen = snake.head
    snake.process({Action.SPRINT})
    assert snake.head == frozen


def test_self_collision():
    snake = Snake()
    snake.points = [Vec2(200, 200), Vec2(300, 300), Vec2(310, 300), Vec2(320, 300), Vec2(330, 300)]
    snake.head = Vec2(205, 200)
    assert snake.check_collision() is True


def test_recent_segments_ignored():
    snake = Snake()
    snake.points = [Vec2(200, 200), Vec2(300, 300), Vec2(310, 300), Vec2(320, 300), Vec2(330, 300)]
    snake.head = Vec2(331, 300)
    assert snake.check_collision() is False


def test_top_border_collision():
    snake = Snake()
    snake.points = [Vec2(400, 400), Vec2(400, 400)]
    snake.head = Vec2(100, config.BORDER + Snake.SEGMENT_LENGTH - 1)
    assert snake.check_collision() is True


def test_increment_length():
    snake = Snake()
    snake.increment_length()
    assert snake.segment_count == Snake.STARTING_SEGMENT_COUNT + Snake.INCREMENT_AMOUNT


def test_reset_restores_start():
    snake = Snake()
    snake.increment_length()
    for _ in range(20):
        snake.process({Action.TURN_RIGHT})
    snake.reset(False)
    assert snake.head == Snake.STARTING_POSITION
    assert snake.direction == 0.0
    assert snake.points == [Snake.STARTING_POSITION, Snake.STARTING_POSITION]
    assert snake.segment_count == Snake.STARTING_SEGMENT_COUNT
    assert snake.alive


def test_randomized_reset_direction_in_range():
    rng.seed(7)
    snake = Snake()
    for _ in range(20):
        snake.reset(True)
        assert 0.0 <= snake.direction < math.tau


def test_engine_walls_and_apple_bounds():
    rng.seed(1)
    engine = SnakeEngine()
    assert len(engine.walls) == 4
    assert len(engine.apples) == 1
    for _ in range(100):
        apple = engine.create_apple()
        assert config.DEAD_ZONE <= apple.x <= config.WINDOW_SIZE[0] - config.DEAD_ZONE
        assert config.DEAD_ZONE <= apple.y <= config.WINDOW_SIZE[1] - config.DEAD_ZONE


def test_engine_eats_apple():
    rng.seed(2)
    engine = SnakeEngine()
    engine.apples = [engine.snake.head]
    engine.process(set())
    assert engine.snake.segment_count == Snake.STARTING_SEGMENT_COUNT + Snake.INCREMENT_AMOUNT
    assert len(engine.apples) == 1
    assert config.DEAD_ZONE <= engine.apples[0].x <= config.WINDOW_SIZE[0] - config.DEAD_ZONE


def test_engine_reset():
    rng.seed(3)
    engine = SnakeEngine()
    engine.snake.increment_length()
    engine.apples = [Vec2(1, 1), Vec2(2, 2)]
    engine.reset(False)
    assert len(engine.apples) == 1
    assert engine.snake.segment_count == Snake.STARTING_SEGMENT_COUNT


def test_angle_to_apple():
    engine = SnakeEngine()
    head = engine.snake.head
    engine.apples = [head + Vec2(100, 0)]
    assert engine.angle_to_apple() == pytest.approx(0.0)
    engine.apples = [head + Vec2(-50, 0)]
    assert engine.angle_to_apple() == pytest.approx(1.0)
    engine.apples = [head + Vec2(0, 50)]
    assert engine.angle_to_apple() == pytest.approx(0.5)


def test_angle_to_apple_stays_in_unit_range():
    rng.seed(4)
    engine = SnakeEngine()
    for _ in range(50):
        engine.snake.reset(True)
        engine.apples = [engine.create_apple()]
        assert -1.0 <= engine.angle_to_apple() <= 1.0


def test_forward_ray_hits_right_wall():
    engine = SnakeEngine()
    ratio, point = engine.ray_intersect(0.0)
    wall_x = config.WINDOW_SIZE[0] - config.BORDER
    assert tuple(point) == pytest.approx((wall_x, Snake.STARTING_POSITION.y))
    assert ratio * config.WINDOW_HYPOT == pytest.approx(wall_x - Snake.STARTING_POSITION.x)


def test_diagonal_ray_hits_top_wall():
    engine = SnakeEngine()
    _, point = engine.ray_intersect(-math.pi / 4)
    head = engine.snake.head
    assert point.y == pytest.approx(config.BORDER)
    assert point.x - head.x == pytest.approx(head.y - point.y)


def test_ray_blocked_by_body():
    engine = SnakeEngine()
    engine.snake.points = [Vec2(150, 50), Vec2(150, 150)]
    ratio, point = engine.ray_intersect(0.0)
    assert tuple(point) == pytest.approx((150, 100))
    assert ratio * config.WINDOW_HYPOT == pytest.approx(50)


def test_nn_inputs_shape():
    rng.seed(5)
    engine = SnakeEngine()
    inputs = engine.nn_inputs()
    assert len(inputs) == 5
    assert inputs[0] == float(Snake.STARTING_SEGMENT_COUNT)
    assert inputs[1] == pytest.approx(engine.angle_to_apple())
    for ray in inputs[2:]:
        assert 0.0 < ray <= 1.0