from __future__ import annotations

import os
from typing import Any, Callable, Dict, Mapping, Type, TypeVar

from traversal import constants
from traversal.errors import EnvironmentValueError
from traversal.types import Order

_ET = TypeVar("_ET")


__all__ = (
    "Environ",
    "EnvironmentValueError",
    "environ",
    "tobool",
)


def tobool(value: Any) -> bool:
    """Coerce an environment value to a bool, rejecting anything ambiguous."""
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in constants.TRUTHY:
        return True
    if normalized in constants.FALSY:
        return False
    raise EnvironmentValueError(f"Can't coerce {value!r} to a boolean.")


def toorder(value: Any) -> Order:
    try:
        return Order.parse(value)
    except ValueError as e:
        raise EnvironmentValueError(str(e)) from None


class Environ:
    """A proxy for the os.environ which allows for getting/setting typed values."""

    def __init__(self):
        self.coercers: Dict[type, Callable[[Any], Any]] = {}
        self.register(bool, tobool)
        self.register(Order, toorder)

    def __contains__(self, item: str):
        return os.environ.__contains__(item)

    def __getitem__(self, item: str):
        return os.environ.__getitem__(item)

    def __setitem__(self, key: str, value):
        return self.setenv(key, value)

    def register(self, t: Type[_ET], coercer: Callable[[Any], _ET]):
        """Register a coercer for values fetched for the target type `t`."""
        self.coercers[t] = coercer
        return coercer

    def getenv(
        self,
        var: str,
        default: Any = constants.empty,
        *aliases: str,
        t: Type[_ET] | type[constants.empty] = constants.empty,
        ci: bool = True,
    ) -> Any:
        """Get the value of an Environment Variable.

        Args:
            var: The environment variable to fetch.
            default: Provide a default value if `var` is not found.
            *aliases: Any potential aliases to search for if `var` is not found.

        Keyword Args:
            t: If provided, the type to coerce the value to.
            ci: Whether the variable should be considered case-insensitive.
        """
        names: set[str] = {*aliases}
        environ: Mapping[str, str] = os.environ
        # If we should do a case-insensitive search, casefold everything first.
        if ci:
            var = var.lower()
            names = {v.lower() for v in aliases}
            environ = {k.lower(): value for k, value in os.environ.items()}
        value = environ.get(var, constants.empty)
        # If we have alternate names to search, do so.
        if value is constants.empty and names:
            value = next(
                (environ[k] for k in sorted(environ.keys() & names)), constants.empty
            )
        if value is constants.empty:
            return None if default is constants.empty else default
        # Short-circuit for no type given.
        if t is constants.empty:
            return value
        coercer = self.coercers.get(t)  # type: ignore[arg-type]
        if coercer is None:
            raise EnvironmentValueError(
                f"No coercer registered for {t!r}, can't fetch {var!r}."
            )
        return coercer(value)

    @staticmethod
    def setenv(var: str, value: Any):
        """Set the value of an environment variable, serializing it to a string."""
        if isinstance(value, bool):
            value = str(value).lower()
        elif isinstance(value, Order):
            value = value.value
        os.environ[var] = str(value)


environ = Environ()
