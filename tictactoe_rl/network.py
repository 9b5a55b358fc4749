"""A small fully connected network that scores every square of the board."""

from __future__ import annotations

import os
from dataclasses import dataclass

import numpy as np

from tictactoe_rl.cell import COLUMN_COUNT, ROW_COUNT

_CHANNEL_COUNT = 1
_INPUT_SIZE = _CHANNEL_COUNT * ROW_COUNT * COLUMN_COUNT
_HIDDEN_SIZE = 64
_OUTPUT_SIZE = ROW_COUNT * COLUMN_COUNT
_LAYERS = (
    ("input", _INPUT_SIZE, _HIDDEN_SIZE),
    ("hidden", _HIDDEN_SIZE, _HIDDEN_SIZE),
    ("output", _HIDDEN_SIZE, _OUTPUT_SIZE),
)
_PARAMETER_NAMES = tuple(
    f"{layer}.{kind}" for layer, _, _ in _LAYERS for kind in ("weight", "bias")
)


def _relu(x: np.ndarray) -> np.ndarray:
    return np.maximum(x, 0.0)


def _log_softmax(logits: np.ndarray) -> np.ndarray:
    shifted = logits - logits.max(axis=1, keepdims=True)
    return shifted - np.log(np.exp(shifted).sum(axis=1, keepdims=True))


@dataclass(frozen=True)
class TicTacToeNetworkConfig:
    """Configuration of the network; the layer sizes are fixed."""

    def init(self, rng=None) -> TicTacToeNetwork:
        """Freshly initialised network."""
        return TicTacToeNetwork.init(rng)


class TicTacToeNetwork:
    """Three linear layers with ReLU between them: 9 inputs, 64, 64, 9 outputs."""

    def __init__(self, parameters: dict[str, np.ndarray]):
        missing = set(_PARAMETER_NAMES) - set(parameters)
        if missing:
            raise ValueError(f"missing parameters: {', '.join(sorted(missing))}")
        self._parameters = {
            name: np.array(parameters[name], dtype=np.float32) for name in _PARAMETER_NAMES
        }
        for layer, fan_in, fan_out in _LAYERS:
            if self._parameters[f"{layer}.weight"].shape != (fan_in, fan_out):
                raise ValueError(f"{layer}.weight must have shape {(fan_in, fan_out)}")
            if self._parameters[f"{layer}.bias"].shape != (fan_out,):
                raise ValueError(f"{layer}.bias must have shape {(fan_out,)}")

    @classmethod
    def init(cls, rng=None) -> TicTacToeNetwork:
        """Network with weights and biases drawn uniformly from +-1/sqrt(fan_in)."""
        generator = np.random.default_rng(rng)
        parameters = {}
        for layer, fan_in, fan_out in _LAYERS:
            bound = 1.0 / np.sqrt(fan_in)
            parameters[f"{layer}.weight"] = generator.uniform(-bound, bound, (fan_in, fan_out))
            parameters[f"{layer}.bias"] = generator.uniform(-bound, bound, (fan_out,))
        return cls(parameters)

    def parameters(self) -> dict[str, np.ndarray]:
        """The live parameter arrays by name; changing them changes the network."""
        return self._parameters

    def _forward_with_activations(self, x) -> tuple[np.ndarray, ...]:
        x = np.asarray(x, dtype=np.float32)
        if x.ndim != 3 or x.shape[1:] != (ROW_COUNT, COLUMN_COUNT):
            raise ValueError(
                f"input must have shape (batch, {ROW_COUNT}, {COLUMN_COUNT}), got {x.shape}"
            )
        p = self._parameters
        flat = x.reshape(x.shape[0], ROW_COUNT * COLUMN_COUNT)
        z1 = flat @ p["input.weight"] + p["input.bias"]
        a1 = _relu(z1)
        z2 = a1 @ p["hidden.weight"] + p["hidden.bias"]
        a2 = _relu(z2)
        out = a2 @ p["output.weight"] + p["output.bias"]
        return flat, z1, a1, z2, a2, out

    def forward(self, x) -> np.ndarray:
        """Scores of shape (batch, 9) for boards of shape (batch, 3, 3)."""
        return self._forward_with_activations(x)[-1]

    @staticmethod
    def _target_classes(targets, batch_size: int) -> np.ndarray:
        targets = np.asarray(targets)
        if targets.shape != (batch_size, _OUTPUT_SIZE):
            raise ValueError(f"targets must have shape ({batch_size}, {_OUTPUT_SIZE})")
        return targets.argmax(axis=1)

    def forward_track_cross_entropy_loss(self, inputs, targets):
        """(mean cross-entropy loss, scores, target classes) for one-hot targets."""
        output = self.forward(inputs)
        classes = self._target_classes(targets, output.shape[0])
        log_probs = _log_softmax(output)
        loss = float(-log_probs[np.arange(len(classes)), classes].mean())
        return loss, output, classes

    def loss_and_gradients(self, inputs, targets) -> tuple[float, dict[str, np.ndarray]]:
        """Mean cross-entropy loss and its gradient for every parameter."""
        flat, z1, a1, z2, a2, out = self._forward_with_activations(inputs)
        batch_size = out.shape[0]
        classes = self._target_classes(targets, batch_size)
        rows = np.arange(batch_size)
        log_probs = _log_softmax(out)
        loss = float(-log_probs[rows, classes].mean())

        p = self._parameters
        d_out = np.exp(log_probs)
        d_out[rows, classes] -= 1.0
        d_out /= batch_size
        d_z2 = (d_out @ p["output.weight"].T) * (z2 > 0)
        d_z1 = (d_z2 @ p["hidden.weight"].T) * (z1 > 0)
        gradients = {
            "output.weight": a2.T @ d_out,
            "output.bias": d_out.sum(axis=0),
            "hidden.weight": a1.T @ d_z2,
            "hidden.bias": d_z2.sum(axis=0),
            "input.weight": flat.T @ d_z1,
            "input.bias": d_z1.sum(axis=0),
        }
        return loss, {name: g.astype(np.float32) for name, g in gradients.items()}

    def save(self, path: str | os.PathLike) -> None:
        """Write the parameters to an .npz archive at exactly this path."""
        with open(path, "wb") as handle:
            np.savez(handle, **self._parameters)

    @classmethod
    def load(cls, path: str | os.PathLike) -> TicTacToeNetwork:
        """Read a network written by save."""
        with np.load(path) as data:
            return cls({name: data[name] for name in data.files})