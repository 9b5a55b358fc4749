"""Supervised training of the network on minimax moves, with Adam."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

import numpy as np

from tictactoe_rl.cell import Player
from tictactoe_rl.dataset import TicTacToeBatch, batches, dataset
from tictactoe_rl.network import TicTacToeNetwork, TicTacToeNetworkConfig

_log = logging.getLogger(__name__)

_SHUFFLE_SEED = 42


@dataclass(frozen=True)
class AdamConfig:
    """Settings of the Adam optimiser."""

    beta_1: float = 0.9
    beta_2: float = 0.999
    epsilon: float = 1e-5
    weight_decay: float | None = None

    def init(self) -> Adam:
        return Adam(self)


class Adam:
    """Adam optimiser holding first and second moments per parameter."""

    def __init__(self, config: AdamConfig | None = None):
        self.config = config or AdamConfig()
        self._time = 0
        self._moment_1: dict[str, np.ndarray] = {}
        self._moment_2: dict[str, np.ndarray] = {}

    def step(
        self,
        parameters: dict[str, np.ndarray],
        gradients: dict[str, np.ndarray],
        learning_rate: float,
    ) -> None:
        """Update the parameter arrays in place."""
        cfg = self.config
        self._time += 1
        correction_1 = 1.0 - cfg.beta_1 ** self._time
        correction_2 = 1.0 - cfg.beta_2 ** self._time
        for name, grad in gradients.items():
            param = parameters[name]
            grad = np.asarray(grad, dtype=np.float64)
            if cfg.weight_decay is not None:
                grad = grad + cfg.weight_decay * param
            m = cfg.beta_1 * self._moment_1.get(name, 0.0) + (1.0 - cfg.beta_1) * grad
            v = cfg.beta_2 * self._moment_2.get(name, 0.0) + (1.0 - cfg.beta_2) * grad**2
            self._moment_1[name] = m
            self._moment_2[name] = v
            update = learning_rate * (m / correction_1) / (np.sqrt(v / correction_2) + cfg.epsilon)
            param -= update.astype(param.dtype)


@dataclass(frozen=True)
class TrainingConfig:
    """Everything that decides a training run."""

    model: TicTacToeNetworkConfig = field(default_factory=TicTacToeNetworkConfig)
    optimizer: AdamConfig = field(default_factory=AdamConfig)
    player: Player = Player.X
    num_epochs: int = 10
    batch_size: int = 64
    num_workers: int = 4
    seed: int = 42
    learning_rate: float = 1.0e-4

    def to_dict(self) -> dict:
        return {
            "model": {},
            "optimizer": asdict(self.optimizer),
            "num_epochs": self.num_epochs,
            "batch_size": self.batch_size,
            "num_workers": self.num_workers,
            "seed": self.seed,
            "learning_rate": self.learning_rate,
            "player": self.player.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TrainingConfig:
        defaults = cls()
        return cls(
            model=TicTacToeNetworkConfig(),
            optimizer=AdamConfig(**data.get("optimizer", {})),
            player=Player(data.get("player", defaults.player.value)),
            num_epochs=int(data.get("num_epochs", defaults.num_epochs)),
            batch_size=int(data.get("batch_size", defaults.batch_size)),
            num_workers=int(data.get("num_workers", defaults.num_workers)),
            seed=int(data.get("seed", defaults.seed)),
            learning_rate=float(data.get("learning_rate", defaults.learning_rate)),
        )

    def save(self, path: str | os.PathLike) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: str | os.PathLike) -> TrainingConfig:
        return cls.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))


@dataclass(frozen=True)
class EpochMetrics:
    """Mean loss and accuracy of one epoch on training and validation data."""

    epoch: int
    train_loss: float
    train_accuracy: float
    valid_loss: float
    valid_accuracy: float


def _run(network: TicTacToeNetwork, loader, optimizer: Adam | None, learning_rate: float):
    total_loss = 0.0
    correct = 0
    count = 0
    for item in loader:
        item: TicTacToeBatch
        if optimizer is None:
            loss, output, classes = network.forward_track_cross_entropy_loss(
                item.inputs, item.targets
            )
        else:
            output = network.forward(item.inputs)
            classes = item.targets.argmax(axis=1)
            loss, gradients = network.loss_and_gradients(item.inputs, item.targets)
            optimizer.step(network.parameters(), gradients, learning_rate)
        total_loss += loss * len(item)
        correct += int((output.argmax(axis=1) == classes).sum())
        count += len(item)
    return total_loss / count, correct / count


def train(
    artifact_path: str | os.PathLike, config: TrainingConfig
) -> tuple[TicTacToeNetwork, list[EpochMetrics]]:
    """Train, writing config.json and model.npz into artifact_path."""
    artifacts = Path(artifact_path)
    artifacts.mkdir(parents=True, exist_ok=True)
    config.save(artifacts / "config.json")

    items = dataset(config.player)
    shuffle_rng = np.random.default_rng(_SHUFFLE_SEED)
    network = config.model.init(config.seed)
    optimizer = config.optimizer.init()

    history = []
    for epoch in range(1, config.num_epochs + 1):
        train_loss, train_accuracy = _run(
            network,
            batches(items, config.batch_size, shuffle_rng),
            optimizer,
            config.learning_rate,
        )
        valid_loss, valid_accuracy = _run(
            network, batches(items, config.batch_size), None, config.learning_rate
        )
        metrics = EpochMetrics(epoch, train_loss, train_accuracy, valid_loss, valid_accuracy)
        history.append(metrics)
        _log.info(
            "epoch %d/%d: train loss %.4f acc %.3f, valid loss %.4f acc %.3f",
            epoch, config.num_epochs, train_loss, train_accuracy, valid_loss, valid_accuracy,
        )

    network.save(artifacts / "model.npz")
    return network, history