import pydantic
import pytest
from frozendict import frozendict

from keydelta import data


def test_natural_key_is_a_hashable_frozendict():
    key = data.RowSpec(key_cols=("first_name", "last_name")).natural_key()

    k1 = key({"first_name": "Steve", "last_name": "Smith", "age": 28})
    k2 = key({"last_name": "Smith", "age": None, "first_name": "Steve"})

    assert k1 == frozendict({"first_name": "Steve", "last_name": "Smith"})
    assert k1 == k2
    assert hash(k1) == hash(k2)
    assert len({k1, k2}) == 1


def test_row_without_key_values_has_no_key():
    key = data.RowSpec(key_cols=("id",)).natural_key()

    assert key({"id": None, "name": "x"}) is None
    assert key({"name": "x"}) is None


def test_equivalence_compares_whole_row_by_default():
    equivalent = data.RowSpec(key_cols=("id",)).equivalence()

    assert equivalent({"id": 1, "name": "x"}, {"id": 1, "name": "x"})
    assert not equivalent({"id": 1, "name": "x"}, {"id": 1, "name": "y"})


def test_equivalence_only_compares_compare_cols(customer_spec_fixture: data.RowSpec):
    equivalent = customer_spec_fixture.equivalence()

    steve = {"customer_id": 1, "first_name": "Steve", "last_name": "Smith", "purchases": 10}

    assert equivalent(steve, {**steve, "purchases": 99})
    assert not equivalent(steve, {**steve, "last_name": "Smyth"})


def test_key_cols_are_required():
    with pytest.raises(pydantic.ValidationError):
        data.RowSpec(key_cols=())


def test_key_cols_must_be_unique():
    with pytest.raises(pydantic.ValidationError):
        data.RowSpec(key_cols=("id", "id"))


def test_compare_cols_must_not_be_empty():
    with pytest.raises(pydantic.ValidationError):
        data.RowSpec(key_cols=("id",), compare_cols=frozenset())
