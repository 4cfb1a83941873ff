import pytest

from keydelta import data


def _delta() -> data.Delta[int, str]:
    return data.Delta({
        "a": data.insert(1),
        "b": data.update(2, 20),
        "c": data.delete(3),
        "d": data.insert(4),
    })


def test_empty():
    delta = data.Delta.empty()

    assert delta.is_empty()
    assert len(delta) == 0
    assert dict(delta.operations) == {}
    assert delta.summary() == data.DeltaSummary(rows_added=0, rows_updated=0, rows_deleted=0)


def test_get():
    delta = _delta()

    assert delta.get("b") == data.update(2, 20)
    assert delta.get("z") is None

    with pytest.raises(data.InvalidArgument):
        delta.get(None)  # type: ignore


def test_container_protocol():
    delta = _delta()

    assert len(delta) == 4
    assert "a" in delta
    assert "z" not in delta
    assert sorted(delta) == ["a", "b", "c", "d"]


def test_kind_views():
    delta = _delta()

    assert delta.inserts() == {"a": data.insert(1), "d": data.insert(4)}
    assert delta.updates() == {"b": data.update(2, 20)}
    assert delta.deletes() == {"c": data.delete(3)}
    assert delta.inserted() == {"a": 1, "d": 4}
    assert delta.updated() == {"b": (2, 20)}
    assert delta.deleted() == {"c": 3}


def test_summary():
    summary = _delta().summary()

    assert summary == data.DeltaSummary(rows_added=2, rows_updated=1, rows_deleted=1)
    assert summary.rows_changed == 4
    assert str(summary) == "There were 2 rows added, 1 updated, and 1 rows deleted."


def test_operations_are_read_only():
    delta = _delta()

    with pytest.raises(TypeError):
        delta.operations["z"] = data.insert(26)  # type: ignore

    assert "z" not in delta


def test_constructor_copies_its_argument():
    operations = {"a": data.insert(1)}
    delta = data.Delta(operations)

    operations["b"] = data.insert(2)

    assert list(delta) == ["a"]


def test_constructor_rejects_bad_entries():
    with pytest.raises(data.InvalidArgument):
        data.Delta({None: data.insert(1)})

    with pytest.raises(data.InvalidArgument):
        data.Delta({"a": 1})  # type: ignore

    with pytest.raises(data.InvalidArgument, match="does not change anything"):
        data.Delta({"a": data.update(1, 1)})

    with pytest.raises(data.InvalidArgument):
        data.Delta({}, None)  # type: ignore


def test_constructor_checks_updates_with_given_equivalence():
    same_magnitude = lambda left, right: abs(left) == abs(right)  # noqa: E731

    with pytest.raises(data.InvalidArgument):
        data.Delta({"a": data.update(1, -1)}, same_magnitude)

    assert data.Delta({"a": data.update(1, -1)}).get("a") == data.update(1, -1)


def test_equality_and_hash():
    assert _delta() == _delta()
    assert hash(_delta()) == hash(_delta())
    assert _delta() != data.Delta.empty()
    assert _delta() != "not a delta"


def test_repr():
    assert repr(data.Delta({"a": data.insert(1)})) == "Delta({'a': Insert(new=1)})"
