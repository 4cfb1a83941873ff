from loguru import logger

from keydelta import data, service
from keydelta.data import (
    Delete,
    Delta,
    DeltaSummary,
    DuplicateKey,
    Equivalence,
    Insert,
    InvalidArgument,
    InvalidCombination,
    KeyDeltaError,
    MissingKey,
    NaturalKey,
    OpType,
    Operation,
    RowSpec,
    Update,
    combine_operations,
    default_equivalence,
    essence,
)
from keydelta.service import apply_delta, combine_deltas, compare_rows

__all__ = (
    "Delete",
    "Delta",
    "DeltaSummary",
    "DuplicateKey",
    "Equivalence",
    "Insert",
    "InvalidArgument",
    "InvalidCombination",
    "KeyDeltaError",
    "MissingKey",
    "NaturalKey",
    "OpType",
    "Operation",
    "RowSpec",
    "Update",
    "apply_delta",
    "combine_deltas",
    "combine_operations",
    "compare_rows",
    "data",
    "default_equivalence",
    "essence",
    "service",
)

__version__ = "0.1.0"

logger.disable("keydelta")
