import pytest

from scratchnets.data import available_datasets, get_dataset


def test_builtin_datasets_registered():
    assert {"xor", "iris-mini", "points", "csv"} <= set(available_datasets())
    xor = get_dataset("xor")
    assert xor.d_in == 2
    assert [s.targets for s in xor.samples()] == xor.targets
    points = get_dataset("points")
    assert [s.targets for s in points.samples()] == [[5.0], [10.0], [7.0], [12.0]]


def test_unknown_dataset():
    with pytest.raises(KeyError, match="Available datasets"):
        get_dataset("mnist")


def test_csv_loader(tmp_path):
    path = tmp_path / "flowers.csv"
    path.write_text("width,height,target\n1.0,2.0,a\n3.5,4.0,b\n")
    queries = tmp_path / "queries.csv"
    queries.write_text("width,height\n2.0,2.0\n")
    spec = get_dataset("csv", csv_path=path, query_path=queries)
    assert spec.features == [[1.0, 2.0], [3.5, 4.0]]
    assert spec.targets == ["a", "b"]
    assert spec.queries == [[2.0, 2.0]]
    assert spec.name == "flowers"

    numeric = tmp_path / "prices.csv"
    numeric.write_text("rooms,price\n2,100\n3,150\n")
    regression = get_dataset("csv", csv_path=numeric, target_col="price", task_type="regression")
    assert regression.features == [[2.0], [3.0]]
    assert regression.targets == [100.0, 150.0]


def test_csv_loader_errors(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("x,label\nfoo,a\n")
    with pytest.raises(KeyError):
        get_dataset("csv", csv_path=path, target_col="missing")
    with pytest.raises(ValueError, match="non-numeric"):
        get_dataset("csv", csv_path=path, target_col="label")


def test_csv_loader_reports_short_rows(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text("a,b,target\n1,2,x\n3\n")
    with pytest.raises(ValueError, match=r"short\.csv:3"):
        get_dataset("csv", csv_path=path)

    gap = tmp_path / "gap.csv"
    gap.write_text("a,b,target\n1,2,x\n3,,y\n")
    with pytest.raises(ValueError, match=r"gap\.csv:3: missing or non-numeric feature"):
        get_dataset("csv", csv_path=gap)


def test_csv_loader_rejects_text_regression_targets(tmp_path):
    path = tmp_path / "prices.csv"
    path.write_text("rooms,price\n2,100\n3,cheap\n")
    with pytest.raises(ValueError, match=r"prices\.csv:3"):
        get_dataset("csv", csv_path=path, target_col="price", task_type="regression")


def test_csv_query_file_uses_training_columns(tmp_path):
    path = tmp_path / "flowers.csv"
    path.write_text("width,height,target\n1.0,2.0,a\n")
    queries = tmp_path / "queries.csv"
    queries.write_text("height,extra,width\n5.0,9.0,4.0\n")
    spec = get_dataset("csv", csv_path=path, query_path=queries)
    assert spec.queries == [[4.0, 5.0]]
    assert spec.provenance["columns"] == ["width", "height"]
