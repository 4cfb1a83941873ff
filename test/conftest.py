import typing

import pytest
from loguru import logger

from keydelta import data


@pytest.fixture(scope="function")
def log_messages_fixture() -> typing.Generator[list[str], None, None]:
    messages: list[str] = []
    logger.enable("keydelta")
    handler_id = logger.add(messages.append, format="{message}", level="DEBUG")
    yield messages
    logger.remove(handler_id)
    logger.disable("keydelta")


@pytest.fixture(scope="function")
def before_rows_fixture() -> list[dict[str, typing.Hashable]]:
    return [
        {"k": "a", "v": 1},
        {"k": "b", "v": 2},
    ]


@pytest.fixture(scope="function")
def after_rows_fixture() -> list[dict[str, typing.Hashable]]:
    return [
        {"k": "a", "v": 1},
        {"k": "b", "v": 99},
        {"k": "c", "v": 3},
    ]


@pytest.fixture(scope="function")
def row_key_fixture() -> typing.Callable[[dict[str, typing.Hashable]], typing.Hashable]:
    return lambda row: row["k"]


@pytest.fixture(scope="function")
def customer_spec_fixture() -> data.RowSpec:
    return data.RowSpec(key_cols=("customer_id",), compare_cols=frozenset({"first_name", "last_name"}))
