import enum

__all__ = ("OpType",)


class OpType(enum.Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"

    def __repr__(self) -> str:
        return f"OpType.{self.name}"

    def __str__(self) -> str:
        return self.value
