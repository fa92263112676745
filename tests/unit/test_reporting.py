import csv
import json
from pathlib import Path

import pytest

from scratchnets.core.types import EpochResult, Neighbor
from scratchnets.data import get_dataset
from scratchnets.reporting import (
    CsvEpochLog,
    JsonlEpochLog,
    plot_loss_curve,
    summarize_neighbors,
    summarize_training,
    write_manifest,
    write_summary,
)


def _history(*losses):
    return [EpochResult(epoch=i, loss=loss) for i, loss in enumerate(losses, start=1)]


def test_jsonl_log_records_loss_delta_and_seed(tmp_path):
    log = JsonlEpochLog(tmp_path / "m.jsonl", seed=3)
    assert log(1, 0.5) is None
    log(2, 0.25)
    records = [json.loads(line) for line in log.path.read_text().splitlines()]
    assert records == [
        {"epoch": 1, "loss": 0.5, "delta": 0.0, "seed": 3},
        {"epoch": 2, "loss": 0.25, "delta": -0.25, "seed": 3},
    ]


def test_logs_truncate_previous_runs(tmp_path):
    JsonlEpochLog(tmp_path / "m.jsonl")(1, 1.0)
    fresh = JsonlEpochLog(tmp_path / "m.jsonl")
    assert fresh.path.read_text() == ""


def test_csv_log_has_fixed_header(tmp_path):
    log = CsvEpochLog(tmp_path / "m.csv")
    log(1, 0.5)
    log(2, 0.75)
    with log.path.open() as handle:
        rows = list(csv.DictReader(handle))
    assert list(rows[0]) == ["epoch", "loss", "delta"]
    assert [row["epoch"] for row in rows] == ["1", "2"]
    assert float(rows[1]["delta"]) == pytest.approx(0.25)


def test_summarize_training_describes_the_curve():
    summary = summarize_training(_history(1.0, 0.5, 0.25, 0.3), tail=3)
    assert summary["kind"] == "mlp"
    assert summary["epochs"] == 4
    assert summary["history"] == [1.0, 0.5, 0.25, 0.3]
    assert summary["tail_window"] == 3
    loss = summary["loss"]
    assert loss["first"] == 1.0
    assert loss["last"] == 0.3
    assert loss["min"] == 0.25
    assert loss["best_epoch"] == 3
    assert loss["tail_mean"] == pytest.approx(0.35)
    # least-squares slope through (0, 0.5), (1, 0.25), (2, 0.3)
    assert loss["tail_slope"] == pytest.approx(-0.1)


def test_summarize_training_without_epochs():
    assert summarize_training([]) == {"kind": "mlp", "epochs": 0, "history": [], "loss": {}}
    single = summarize_training(_history(0.4))
    assert single["loss"]["tail_slope"] == 0.0


def test_summarize_neighbors_reports_distances_and_vote_share():
    found = [
        [Neighbor(0, [0.0], 1.0, "a"), Neighbor(1, [1.0], 3.0, "a")],
        [Neighbor(2, [2.0], 2.0, "a"), Neighbor(3, [3.0], 4.0, "b")],
    ]
    summary = summarize_neighbors(found, k=2, votes=[2, 1])
    assert summary["queries"] == 2
    assert summary["distance"] == {
        "min": 1.0,
        "max": 4.0,
        "mean": 2.5,
        "median": 2.5,
        "nearest_mean": 1.5,
    }
    assert summary["vote_share"] == {"mean": 0.75, "min": 0.5, "unanimous": 1}

    regression = summarize_neighbors(found, k=2)
    assert "vote_share" not in regression
    assert summarize_neighbors([], k=3) == {"kind": "knn", "k": 3, "queries": 0}


def test_write_summary_and_manifest(tmp_path):
    out = write_summary(tmp_path / "nested" / "summary.json", {"b": 1, "a": 2})
    assert Path(out).read_text().index('"a"') < Path(out).read_text().index('"b"')

    manifest_path = write_manifest(
        tmp_path / "manifest.json", config={"a": 1}, dataset=get_dataset("points")
    )
    manifest = json.loads(Path(manifest_path).read_text())
    assert manifest["config"] == {"a": 1}
    assert manifest["dataset"]["name"] == "points"
    assert manifest["dataset"]["task_type"] == "regression"
    assert manifest["dataset"]["examples"] == 4
    assert manifest["dataset"]["queries"] == 1
    assert "git_sha" in manifest
    assert "numpy" in manifest["environment"]


def test_plot_loss_curve_headless(tmp_path):
    path = plot_loss_curve(_history(1.0, 0.5), tmp_path / "plots" / "loss.png", threshold=0.6)
    assert path == tmp_path / "plots" / "loss.png"
    assert path.exists()
    assert plot_loss_curve([], tmp_path / "empty.png") is None
    assert not (tmp_path / "empty.png").exists()
