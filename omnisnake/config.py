"""Game and evolution settings."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass


def _f32(value: float) -> float:
    """Round a value to single precision, as the settings are stored."""
    return struct.unpack("f", struct.pack("f", value))[0]


# Window
WINDOW_SIZE = (800, 800)
WINDOW_HYPOT = math.hypot(*WINDOW_SIZE)
MAX_FRAMERATE = 60
DT = 1.0 / MAX_FRAMERATE

# Apples
APPLE_RADIUS = 10.0
MAX_APPLES = 1
TOLERANCE = 5
DEAD_ZONE = 40

# Arena border
BORDER = 15
BORDER_COLOR = (150, 150, 150)


@dataclass(frozen=True)
class MutationConfig:
    """Rates and limits that govern how one kind of gene mutates."""

    add_rate: float
    remove_rate: float
    mutation_rate: float
    replace_rate: float
    mutation_power: float
    min_value: float
    max_value: float


NEURON_CONFIG = MutationConfig(
    add_rate=_f32(0.4),
    remove_rate=_f32(0.001),
    mutation_rate=_f32(0.8),
    replace_rate=_f32(0.05),
    mutation_power=_f32(0.2),
    min_value=-30.0,
    max_value=30.0,
)

LINK_CONFIG = MutationConfig(
    add_rate=_f32(0.6),
    remove_rate=_f32(0.01),
    mutation_rate=_f32(0.5),
    replace_rate=_f32(0.1),
    mutation_power=_f32(0.5),
    min_value=-20.0,
    max_value=20.0,
)

SURVIVAL_THRESHOLD = _f32(0.15)
POPULATION_SIZE = 20