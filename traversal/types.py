from __future__ import annotations

import enum
from typing import Union

__all__ = ("Order",)


class Order(enum.Enum):
    """The order in which a walk visits related nodes."""

    DEPTH_FIRST = "depth_first"
    BREADTH_FIRST = "breadth_first"

    @classmethod
    def parse(cls, value: Union[Order, str]) -> Order:
        """Get an Order from a member or its (case-insensitive) name.

        Dashes, spaces and underscores are interchangeable, so
        ``"Breadth-First"`` resolves to :py:attr:`Order.BREADTH_FIRST`.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"{value!r} is not a valid {cls.__name__}. "
                f"Expected one of: {', '.join(m.value for m in cls)}."
            ) from None
