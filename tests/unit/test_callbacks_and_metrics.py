import pytest

from scratchnets.training.callbacks import EarlyStopping, chain
from scratchnets.training.metrics import compute_metrics, default_metrics


def test_early_stopping_on_threshold():
    stopper = EarlyStopping(min_loss=0.1)
    assert not stopper(1, 0.5)
    assert not stopper(2, 0.2)
    assert stopper(3, 0.05)
    assert stopper.stopped_epoch == 3
    assert stopper.best_epoch == 3


def test_early_stopping_on_patience():
    stopper = EarlyStopping(patience=2)
    assert not stopper(1, 1.0)
    assert not stopper(2, 0.9)
    assert not stopper(3, 0.95)
    assert stopper(4, 0.91)
    assert stopper.best_loss == pytest.approx(0.9)
    with pytest.raises(ValueError):
        EarlyStopping(patience=0)


def test_chain_calls_everything_and_ors_results():
    seen = []
    combined = chain(
        lambda e, l: seen.append(("a", e)),
        None,
        lambda e, l: l < 0.5,
        lambda e, l: seen.append(("c", e)),
    )
    assert not combined(1, 0.9)
    assert combined(2, 0.1)
    assert seen == [("a", 1), ("c", 1), ("a", 2), ("c", 2)]


def test_default_metrics():
    assert default_metrics("regression") == ["mae", "rmse", "r2"]
    assert default_metrics("classification") == ["accuracy"]
    with pytest.raises(ValueError):
        default_metrics("ranking")


def test_regression_metrics():
    preds = [[1.0, 0.0], [0.0, 1.0]]
    targs = [[1.0, 0.0], [0.0, 0.0]]
    metrics = compute_metrics(["mae", "rmse", "r2"], preds, targs)
    assert metrics["mae"] == pytest.approx(0.25)
    assert metrics["rmse"] == pytest.approx(0.5)
    assert metrics["r2"] < 1.0


def test_accuracy_for_labels_and_vectors():
    assert compute_metrics(["accuracy"], ["a", "b", "b"], ["a", "b", "a"])["accuracy"] == pytest.approx(2 / 3)
    vectors = compute_metrics(["accuracy"], [[0.1, 0.9], [0.8, 0.2]], [[0, 1], [0, 1]])
    assert vectors["accuracy"] == pytest.approx(0.5)
    with pytest.raises(KeyError):
        compute_metrics(["auc"], [1.0], [1.0])
    with pytest.raises(ValueError):
        compute_metrics(["mae"], [1.0], [1.0, 2.0])
