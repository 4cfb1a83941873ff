import datetime
import functools
import typing

from loguru import logger

from keydelta import data

__all__ = ("apply_delta", "combine_deltas", "compare_rows")


def compare_rows(
    *,
    before_rows: typing.Iterable[data.Row],
    after_rows: typing.Iterable[data.Row],
    spec: data.RowSpec,
) -> data.Delta[data.Row, data.RowKey]:
    start = datetime.datetime.now()

    delta: data.Delta[data.Row, data.RowKey] = data.Delta.diff(
        before_rows,
        after_rows,
        spec.natural_key(),
        spec.equivalence(),
    )

    execution_millis = int((datetime.datetime.now() - start).total_seconds() * 1000)
    logger.info(f"Compared rows on {', '.join(spec.key_cols)} in {execution_millis} ms. {delta.summary()}")

    return delta


def combine_deltas(
    deltas: typing.Iterable[data.Delta[typing.Any, typing.Any]],
    /,
    equivalence: data.Equivalence[typing.Any] = data.default_equivalence,
) -> data.Delta[typing.Any, typing.Any]:
    """Reduce a history of deltas, oldest first, to a single delta."""
    combined = functools.reduce(
        lambda left, right: left.combine(right, equivalence),
        deltas,
        data.Delta.empty(),
    )
    logger.info(f"Combined deltas. {combined.summary()}")
    return combined


def apply_delta(
    *,
    delta: data.Delta[data.Row, data.RowKey],
    rows: typing.Iterable[data.Row],
    spec: data.RowSpec,
) -> tuple[data.Row, ...]:
    if delta.is_empty():
        logger.info("The delta is empty, so the rows will be unchanged.")

    result = delta.apply(rows, spec.natural_key())

    logger.info(f"Applied delta to rows. {delta.summary()} There are now {len(result)} rows.")

    return result
