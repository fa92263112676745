"""Preset-driven runs for the network and neighbour predictors."""

from __future__ import annotations

import json
import time
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .core.types import RunResult
from .data import DatasetSpec, get_dataset
from .neighbors import KNNClassifier
from .reporting.artifacts import write_manifest
from .reporting.epochs import CsvEpochLog, JsonlEpochLog
from .reporting.plots import plot_loss_curve
from .reporting.summary import summarize_neighbors, summarize_training, write_summary
from .training.callbacks import EarlyStopping, chain
from .training.metrics import compute_metrics, default_metrics
from .training.network import MultiLayerPerceptron

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor-mlp": {
        "data": {"name": "xor", "options": {}},
        "model": {
            "kind": "mlp",
            "layer_sizes": [[2, 2], [4, 2], [4, 4], [2, 4]],
            "activation": "sigmoid",
            "loss": "mse",
        },
        "train": {
            "epochs": 2000,
            "lr": 0.5,
            "seed": 7,
            "min_loss": 0.01,
            "run_dir": "runs/xor-mlp",
            "enable_plots": False,
        },
    },
    "iris-knn": {
        "data": {"name": "iris-mini", "options": {}},
        "model": {"kind": "knn", "k": 3, "normalization": True, "metric": "euclidean"},
        "train": {"run_dir": "runs/iris-knn"},
    },
    "points-knn-regression": {
        "data": {"name": "points", "options": {}},
        "model": {"kind": "knn", "k": 3, "normalization": True, "metric": "euclidean"},
        "train": {"run_dir": "runs/points-knn-regression"},
    },
}

_PRESET_DIR = Path(__file__).resolve().parents[1] / "configs" / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None


def _read_preset_file(path: Path) -> Mapping[str, object]:
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        import yaml

        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported preset file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Preset {path.name} must decode to a mapping")
    return data


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        found: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                data = _read_preset_file(file)
                missing = {"data", "model", "train"} - set(data)
                if missing:
                    missing_str = ", ".join(sorted(missing))
                    raise KeyError(
                        f"Preset {file.name} is missing required sections: {missing_str}"
                    )
                found[file.stem] = json.loads(json.dumps(data))
        _FILE_PRESETS_CACHE = found
    return {name: deepcopy(cfg) for name, cfg in _FILE_PRESETS_CACHE.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Dict[str, Any]:
    file_overrides = _file_presets()
    if name in file_overrides:
        return dict(file_overrides[name])
    try:
        return deepcopy(dict(_PRESETS[name]))
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def run_pipeline(config: Mapping[str, Any]) -> RunResult:
    """Build the data set and predictor described by ``config`` and run it."""

    missing = {"data", "model", "train"} - set(config)
    if missing:
        raise KeyError(f"Config is missing required sections: {', '.join(sorted(missing))}")
    data_cfg = dict(config["data"])
    model_cfg = dict(config["model"])
    train_cfg = dict(config["train"])

    dataset = get_dataset(str(data_cfg["name"]), **dict(data_cfg.get("options") or {}))
    run_dir = _resolve_run_dir(train_cfg, dataset.name, str(model_cfg.get("kind", "mlp")))
    run_dir.mkdir(parents=True, exist_ok=True)

    kind = str(model_cfg.get("kind", "mlp"))
    if kind == "mlp":
        return _run_mlp(config, dataset, model_cfg, train_cfg, run_dir)
    if kind == "knn":
        return _run_knn(config, dataset, model_cfg, train_cfg, run_dir)
    raise ValueError(f"Unknown model kind: {kind!r} (expected 'mlp' or 'knn')")


def _run_mlp(
    config: Mapping[str, Any],
    dataset: DatasetSpec,
    model_cfg: Mapping[str, Any],
    train_cfg: Mapping[str, Any],
    run_dir: Path,
) -> RunResult:
    seed = int(train_cfg.get("seed", 0))
    epochs = int(train_cfg.get("epochs", 1))
    layer_sizes = [tuple(int(v) for v in pair) for pair in model_cfg["layer_sizes"]]
    model = MultiLayerPerceptron(
        layer_sizes,
        activation=model_cfg.get("activation"),
        loss=model_cfg.get("loss"),
        learning_rate=train_cfg.get("lr"),
        seed=seed,
    )

    _print_startup_summary(
        kind="mlp",
        dataset_name=dataset.name,
        details={
            "Layers": [list(pair) for pair in layer_sizes],
            "Activation": model_cfg.get("activation") or "relu",
            "Loss": model_cfg.get("loss") or "mse",
            "Learning rate": model.learning_rate,
            "Epochs": epochs,
            "Parameters": model.parameter_count(),
        },
    )

    jsonl = JsonlEpochLog(run_dir / "metrics_train.jsonl", seed=seed)
    csv_log = CsvEpochLog(run_dir / "metrics_train.csv")
    min_loss = train_cfg.get("min_loss")
    patience = train_cfg.get("patience")
    stopper = None
    if min_loss is not None or patience is not None:
        stopper = EarlyStopping(
            min_loss=float(min_loss) if min_loss is not None else None,
            patience=int(patience) if patience is not None else None,
        )

    history = model.train(dataset.samples(), epochs, on_epoch=chain(jsonl, csv_log, stopper))
    if train_cfg.get("enable_plots", False):
        plot_loss_curve(
            history,
            run_dir / "loss.png",
            threshold=float(min_loss) if min_loss is not None else None,
        )

    fitted = [model.predict(x) for x in dataset.features]
    targets = [sample.targets for sample in dataset.samples()]
    final = {"loss": model.evaluate(dataset.samples())}
    final.update(compute_metrics(default_metrics(dataset.task_type), fitted, targets))
    (run_dir / "metrics_final.json").write_text(json.dumps(final, indent=2, sort_keys=True))

    queries = dataset.queries or dataset.features
    predictions = [{"query": list(q), "prediction": model.predict(q)} for q in queries]
    predictions_path = run_dir / "predictions.json"
    predictions_path.write_text(json.dumps(predictions, indent=2))

    return _finish(
        config,
        dataset,
        run_dir,
        kind="mlp",
        epochs=len(history),
        metrics_path=jsonl.path,
        predictions_path=predictions_path,
        model_info={"parameters": model.parameter_count(), "stopped_epoch": len(history)},
        summary=summarize_training(history, tail=int(train_cfg.get("summary_tail", 32))),
    )


def _build_knn(model_cfg: Mapping[str, Any], regression: bool) -> KNNClassifier:
    return (
        KNNClassifier(int(model_cfg.get("k", 1)))
        .with_distance_metric(model_cfg.get("metric"))
        .with_normalization(bool(model_cfg.get("normalization", False)))
        .with_regression(regression)
    )


def _leave_one_out(
    model_cfg: Mapping[str, Any], dataset: DatasetSpec, regression: bool
) -> Dict[str, float]:
    """Score every stored example with a predictor trained on all the others."""

    features, labels = list(dataset.features), list(dataset.targets)
    if len(features) < 2:
        return {"scored": 0}
    fitted: List[Any] = []
    for i, held_out in enumerate(features):
        knn = _build_knn(model_cfg, regression)
        knn.train(features[:i] + features[i + 1 :], labels[:i] + labels[i + 1 :])
        result = knn.predict(held_out)
        fitted.append(result if regression else result.label)
    final: Dict[str, float] = {"scored": len(features)}
    final.update(compute_metrics(default_metrics(dataset.task_type), fitted, labels))
    return final


def _run_knn(
    config: Mapping[str, Any],
    dataset: DatasetSpec,
    model_cfg: Mapping[str, Any],
    train_cfg: Mapping[str, Any],
    run_dir: Path,
) -> RunResult:
    regression = dataset.task_type == "regression"
    knn = _build_knn(model_cfg, regression)

    _print_startup_summary(
        kind="knn",
        dataset_name=dataset.name,
        details={
            "k": knn.k,
            "Metric": model_cfg.get("metric") or "euclidean",
            "Normalization": knn.normalization,
            "Task": dataset.task_type,
            "Points": len(dataset.features),
        },
    )

    knn.train(dataset.features, dataset.targets)

    predictions: List[Dict[str, Any]] = []
    neighbor_sets = []
    votes: List[int] = []
    for query in dataset.queries:
        neighbor_sets.append(knn.kneighbors(query))
        result = knn.predict(query)
        if regression:
            predictions.append({"query": list(query), "prediction": result})
        else:
            votes.append(result.votes)
            predictions.append(
                {"query": list(query), "prediction": result.label, "votes": result.votes}
            )
    predictions_path = run_dir / "predictions.json"
    predictions_path.write_text(json.dumps(predictions, indent=2))

    final = _leave_one_out(model_cfg, dataset, regression)
    metrics_path = run_dir / "metrics_final.json"
    metrics_path.write_text(json.dumps(final, indent=2, sort_keys=True))

    return _finish(
        config,
        dataset,
        run_dir,
        kind="knn",
        epochs=0,
        metrics_path=metrics_path,
        predictions_path=predictions_path,
        model_info={"k": knn.k, "normalization": knn.normalization, "points": len(knn)},
        summary=summarize_neighbors(neighbor_sets, k=knn.k, votes=None if regression else votes),
    )


def _finish(
    config: Mapping[str, Any],
    dataset: DatasetSpec,
    run_dir: Path,
    *,
    kind: str,
    epochs: int,
    metrics_path: Path,
    predictions_path: Path,
    model_info: Mapping[str, Any],
    summary: Dict[str, Any],
) -> RunResult:
    safe = json.loads(json.dumps(config))
    (run_dir / "config.json").write_text(json.dumps(safe, indent=2))
    manifest = write_manifest(
        run_dir / "manifest.json",
        config=safe,
        dataset=dataset,
        model=model_info,
    )
    summary_path = write_summary(run_dir / "summary.json", summary)
    return RunResult(
        kind=kind,
        epochs=epochs,
        metrics_path=str(metrics_path),
        manifest_path=manifest,
        summary_path=summary_path,
        predictions_path=str(predictions_path),
    )


def _resolve_run_dir(train_cfg: Mapping[str, Any], dataset: str, kind: str) -> Path:
    if train_cfg.get("run_dir"):
        return Path(train_cfg["run_dir"])
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / dataset / kind


def _print_startup_summary(
    *, kind: str, dataset_name: str, details: Mapping[str, object]
) -> None:
    print("=== scratchnets run ===")
    print(f"{'Model':<14}: {kind}")
    print(f"{'Dataset':<14}: {dataset_name}")
    for label, value in details.items():
        print(f"{label:<14}: {value}")
    print("=======================")


def merge_config(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into ``base`` and return ``base``."""

    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), Mapping):
            base[key] = merge_config(dict(base[key]), value)
        else:
            base[key] = value
    return base


__all__ = ["load_preset", "merge_config", "presets", "run_pipeline"]
