from typing import Any, NamedTuple

from errors import PayloadError


class Cell(NamedTuple):
    """
    One grid coordinate, in provider order.

    Attributes:
        x : Row index (0 = top).
        y : Column index (0 = left).

    The provider serialises cells as {"x": row, "y": col}, so the names are
    kept as-is rather than renamed to row/col.  Being a tuple, a Cell is
    hashable and can key the path-order index directly.
    """

    x: int
    y: int

    @classmethod
    def from_dict(cls, data: Any, field: str = "cell") -> "Cell":
        if not isinstance(data, dict):
            raise PayloadError(field, f"expected an object with x/y, got {type(data).__name__}")
        x, y = data.get("x"), data.get("y")
        # bool is an int subclass; true/false is not a coordinate
        for name, v in (("x", x), ("y", y)):
            if not isinstance(v, int) or isinstance(v, bool):
                raise PayloadError(f"{field}.{name}", f"expected an integer, got {v!r}")
        return cls(x, y)
