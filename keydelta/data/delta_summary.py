import pydantic

__all__ = ("DeltaSummary",)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=pydantic.ConfigDict(strict=True))
class DeltaSummary:
    rows_added: pydantic.NonNegativeInt
    rows_updated: pydantic.NonNegativeInt
    rows_deleted: pydantic.NonNegativeInt

    @property
    def rows_changed(self) -> int:
        return self.rows_added + self.rows_updated + self.rows_deleted

    def __str__(self) -> str:
        return (
            f"There were {self.rows_added} rows added, {self.rows_updated} updated, "
            f"and {self.rows_deleted} rows deleted."
        )
