# omnisnake

A snake game without a grid. The snake moves freely, steers left or right and
can sprint. You can play it from the keyboard, or let a small feed-forward
neural network drive it. The networks are evolved with NEAT (NeuroEvolution of
Augmenting Topologies).

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Running the game

```
omnisnake --help
```

Options:

- `--mode {play,train,load}`: what to do. The default is `load`.
- `--file PATH`: the network that `load` mode reads. The default is `data/best.json`.
- `--save PATH`: where `train` mode writes the best network. The default is
  `data/recent.json`. Missing parent directories are created.
- `--generations N`: the number of generations `train` mode evolves. The default is 2.
- `--max-frames N`: stop after this many frames. Without it the game runs
  until the window is closed.

The modes (see `omnisnake.app.Mode`):

- **play**: you steer the snake. `A` turns left, `D` turns right, and `W` or
  left `Shift` sprints.
- **train**: evolves a population of 20 networks and prints the best fitness
  of each generation. It then prints the best individual's genome, saves its
  network as JSON and shows it playing.
- **load**: reads a saved network from JSON and shows it playing.

In every mode, `Space` restarts the round. `Escape` or closing the window
quits. When a network drives the snake, a panel to the right of the arena
shows its neurons and links.

## What the network sees

Each frame, `SnakeEngine.nn_inputs()` gives the network five numbers:

1. the snake's segment count,
2. the angle from the snake's heading to the apple, scaled to -1..1,
3. three ray distances (45° left, straight ahead, 45° right) to the nearest
   wall or body segment, divided by the window diagonal.

The three outputs are turn left, turn right and sprint. An output above 0.5
triggers that action.

`omnisnake.app.compute_fitness` plays each network for up to three rounds
within a shared budget of 10,000 frames. The fitness is the sum of the
snake's segment counts at the end of each round.

## Using the library

```python
from omnisnake import rng
from omnisnake.app import compute_fitness
from omnisnake.network import FeedForwardNeuralNetwork
from omnisnake.population import Population

rng.seed(1)
best = Population().run(10, 5, 3, compute_fitness)
network = FeedForwardNeuralNetwork.create_from_genome(best.genome)
network.save_to_json("best.json")

again = FeedForwardNeuralNetwork.load_from_json("best.json")
print(again.activate([15.0, 0.1, 0.5, 0.4, 0.3]))
```

Modules:

- `omnisnake.genome`: neuron and link genes, `Genome`, `Individual`,
  `Indexer`, and `format_individual` / `print_individual`.
- `omnisnake.mutation`: adds and removes neurons and links, and perturbs
  biases and weights. Links that would form a cycle are never added.
- `omnisnake.population`: `Population`, which handles crossover,
  reproduction and the generation loop (`run`).
- `omnisnake.network`: `FeedForwardNeuralNetwork`, which builds a layered
  network from a genome. Use `activate` to run it, `describe` for a text
  listing, `to_dict` / `from_dict` for plain data, and `save_to_json` /
  `load_from_json` for files.
- `omnisnake.snake`: the game: `Snake`, `SnakeEngine` and `Action`.
- `omnisnake.controller`: `KeyboardController` and `AIController`.
- `omnisnake.renderer`: pygame drawing of the arena (`GameRenderer`) and of
  a network (`NeuralNetworkRenderer`).
- `omnisnake.geometry`: `Vec2` and 2D helpers such as `segment_intersection`.
- `omnisnake.config`: window, apple and border settings, and the mutation
  rates (`NEURON_CONFIG`, `LINK_CONFIG`).
- `omnisnake.rng`: the shared random source. Call `rng.seed(...)` to make
  runs repeatable.

## What it does not do

No trained network comes with the package. `load` mode needs a JSON file
written by `save_to_json`, for example from an earlier `train` run. Training
runs in the foreground before the window opens, and it has no progress view
other than the lines printed per generation. Networks are stored as JSON
files only. The network panel uses pygame's default font.