import numpy as np
import pytest

from tictactoe_rl.cell import Player
from tictactoe_rl.network import TicTacToeNetwork, TicTacToeNetworkConfig
from tictactoe_rl.train import Adam, AdamConfig, EpochMetrics, TrainingConfig, train


@pytest.fixture(scope="module")
def trained(tmp_path_factory):
    path = tmp_path_factory.mktemp("artifacts")
    config = TrainingConfig(
        TicTacToeNetworkConfig(),
        AdamConfig(),
        Player.X,
        num_epochs=3,
        batch_size=256,
        learning_rate=1e-3,
    )
    network, history = train(path, config)
    return path, config, network, history


def test_train_tic_tac_toe_model(trained):
    path, config, network, history = trained
    assert len(history) == 3
    assert [m.epoch for m in history] == [1, 2, 3]
    assert history[-1].valid_loss < history[0].valid_loss
    assert all(0.0 <= m.train_accuracy <= 1.0 for m in history)


def test_train_writes_artifacts(trained):
    path, config, network, _ = trained
    assert TrainingConfig.load(path / "config.json") == config
    loaded = TicTacToeNetwork.load(path / "model.npz")
    inputs = np.zeros((2, 3, 3), dtype=np.float32)
    assert np.array_equal(loaded.forward(inputs), network.forward(inputs))


def test_training_config_defaults():
    config = TrainingConfig(TicTacToeNetworkConfig(), AdamConfig(), Player.O)
    assert (config.num_epochs, config.batch_size, config.num_workers, config.seed) == (
        10, 64, 4, 42,
    )
    assert config.learning_rate == 1.0e-4


def test_training_config_dict_round_trip():
    config = TrainingConfig(player=Player.O, num_epochs=1000, optimizer=AdamConfig(beta_1=0.8))
    data = config.to_dict()
    assert data["player"] == "O"
    assert TrainingConfig.from_dict(data) == config


def test_training_config_file_round_trip(tmp_path):
    config = TrainingConfig(batch_size=16, seed=7)
    config.save(tmp_path / "config.json")
    assert TrainingConfig.load(tmp_path / "config.json") == config


def test_adam_first_step_has_learning_rate_size():
    params = {"w": np.array([1.0, -2.0, 3.0])}
    Adam().step(params, {"w": np.array([0.5, -4.0, 10.0])}, 0.01)
    assert np.allclose(params["w"], [0.99, -1.99, 2.99], atol=1e-6)


def test_adam_minimises_quadratic():
    params = {"w": np.array([3.0, -2.0])}
    optimizer = AdamConfig().init()
    for _ in range(2000):
        optimizer.step(params, {"w": 2.0 * params["w"]}, 0.05)
    assert np.abs(params["w"]).max() < 0.05


def test_epoch_metrics_fields():
    metrics = EpochMetrics(1, 2.0, 0.5, 1.5, 0.6)
    assert (metrics.epoch, metrics.valid_accuracy) == (1, 0.6)