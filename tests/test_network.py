import math

import numpy as np
import pytest

from tictactoe_rl.network import TicTacToeNetwork, TicTacToeNetworkConfig


def _inputs(batch_size=4, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(-1, 2, size=(batch_size, 3, 3)).astype(np.float32)


def _targets(classes):
    targets = np.zeros((len(classes), 9), dtype=np.float32)
    targets[np.arange(len(classes)), classes] = 1.0
    return targets


def test_forward_shape():
    network = TicTacToeNetworkConfig().init(0)
    assert network.forward(_inputs(5)).shape == (5, 9)


def test_same_seed_same_network():
    a = TicTacToeNetwork.init(7).forward(_inputs())
    b = TicTacToeNetwork.init(7).forward(_inputs())
    assert np.array_equal(a, b)


def test_weights_within_init_bound():
    params = TicTacToeNetwork.init(1).parameters()
    assert np.abs(params["input.weight"]).max() <= 1.0 / 3.0
    assert params["hidden.weight"].shape == (64, 64)


def test_wrong_input_shape_raises():
    network = TicTacToeNetwork.init(0)
    with pytest.raises(ValueError):
        network.forward(np.zeros((2, 9), dtype=np.float32))


def test_uniform_scores_give_log_nine_loss():
    network = TicTacToeNetwork.init(0)
    params = network.parameters()
    params["output.weight"][...] = 0.0
    params["output.bias"][...] = 0.0
    loss, output, classes = network.forward_track_cross_entropy_loss(
        _inputs(3), _targets([0, 4, 8])
    )
    assert loss == pytest.approx(math.log(9), rel=1e-5)
    assert list(classes) == [0, 4, 8]
    assert output.shape == (3, 9)


def test_gradients_match_parameters_and_loss():
    network = TicTacToeNetwork.init(3)
    inputs, targets = _inputs(6), _targets([0, 1, 2, 3, 4, 5])
    loss, gradients = network.loss_and_gradients(inputs, targets)
    tracked, _, _ = network.forward_track_cross_entropy_loss(inputs, targets)
    assert loss == pytest.approx(tracked)
    assert {k: g.shape for k, g in gradients.items()} == {
        k: p.shape for k, p in network.parameters().items()
    }


def test_step_against_gradient_reduces_loss():
    network = TicTacToeNetwork.init(4)
    inputs, targets = _inputs(8), _targets([0, 1, 2, 3, 4, 5, 6, 7])
    before, gradients = network.loss_and_gradients(inputs, targets)
    for name, param in network.parameters().items():
        param -= 0.05 * gradients[name]
    after, _ = network.loss_and_gradients(inputs, targets)
    assert after < before


def test_save_load_round_trip(tmp_path):
    network = TicTacToeNetwork.init(5)
    path = tmp_path / "model"
    network.save(path)
    loaded = TicTacToeNetwork.load(path)
    assert np.array_equal(loaded.forward(_inputs()), network.forward(_inputs()))


def test_missing_parameter_raises():
    params = dict(TicTacToeNetwork.init(0).parameters())
    del params["hidden.bias"]
    with pytest.raises(ValueError):
        TicTacToeNetwork(params)