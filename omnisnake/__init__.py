"""Free-moving snake game with NEAT-evolved neural network players."""

__version__ = "0.1.0"