from __future__ import annotations

import collections
import dataclasses
import functools
import typing
from typing import Any, Mapping, Optional, Type, TypeVar

from traversal import constants
from traversal.env import environ, tobool
from traversal.types import Order

__all__ = (
    "Settings",
    "configure",
    "get_settings",
    "reset_settings",
    "settings",
)

_ClsT = TypeVar("_ClsT")


def settings(
    _klass=None,
    *,
    prefix: str = "",
    case_sensitive: bool = False,
    frozen: bool = True,
    aliases: Mapping = None,
):
    """Create a dataclass which fetches its defaults from env vars.

    The resolution order of values is `default(s) -> env value(s) -> passed value(s)`.

    Parameters
    ----------
    prefix
        The prefix to strip from you env variables, i.e., `APP_`
    case_sensitive
        Whether your variables are case-sensitive. Defaults to `False`.
    frozen
        Whether to generate a frozen dataclass. Defaults to `True`
    aliases
        An optional mapping of potential aliases for your dataclass's fields.
        `{'other_foo': 'foo'}` will locate the env var `OTHER_FOO` and place it
        on the `Bar.foo` attribute.
    """
    aliases = aliases or {}

    def settings_wrapper(_cls):
        _resolve_from_env(_cls, prefix, case_sensitive, aliases)
        return dataclasses.dataclass(_cls, frozen=frozen)

    return settings_wrapper(_klass) if _klass is not None else settings_wrapper


def _resolve_from_env(
    cls: Type[_ClsT],
    prefix: str,
    case_sensitive: bool,
    aliases: Mapping[str, str],
) -> Type[_ClsT]:
    fields = typing.get_type_hints(cls)
    attr_to_aliases = collections.defaultdict(set)
    for alias, attr in aliases.items():
        attr_to_aliases[attr].add(alias)

    sentinel = object()
    for attr, typ in fields.items():
        name = f"{prefix}{attr}"
        names = {f"{prefix}{a}" for a in attr_to_aliases[attr]}
        field = getattr(cls, attr, sentinel)
        if field is sentinel:
            field = dataclasses.field()
        elif not isinstance(field, dataclasses.Field):
            field = dataclasses.field(default=field)
        if field.default_factory is not dataclasses.MISSING:
            continue

        default: Any = constants.empty
        if field.default is not dataclasses.MISSING:
            default = field.default
            field.default = dataclasses.MISSING

        field.default_factory = functools.partial(  # type: ignore[assignment]
            environ.getenv,
            name,
            default,
            *names,
            t=typ,
            ci=not case_sensitive,
        )
        setattr(cls, attr, field)

    return cls


@settings(prefix=constants.ENV_PREFIX)
class Settings:
    """Library-wide defaults, read from ``TRAVERSAL_*`` environment variables.

    Attributes:
        order: The order new descriptions start with.
        unique: Whether new descriptions track uniqueness.
        warn_unbounded: Whether to warn when a walk starts which may never end.
    """

    order: Order = Order.DEPTH_FIRST
    unique: bool = True
    warn_unbounded: bool = True


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the active settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(**overrides: Any) -> Settings:
    """Replace the active settings.

    Any field not overridden is resolved as usual: from the environment,
    falling back to the library default.

    Examples
    --------
    >>> from traversal import settings
    >>> settings.configure(order="breadth_first").order
    <Order.BREADTH_FIRST: 'breadth_first'>
    >>> _ = settings.reset_settings()
    """
    global _settings
    if "order" in overrides:
        overrides["order"] = Order.parse(overrides["order"])
    for flag in ("unique", "warn_unbounded"):
        if flag in overrides:
            overrides[flag] = tobool(overrides[flag])
    _settings = Settings(**overrides)
    return _settings


def reset_settings() -> None:
    """Drop the active settings, so the environment is read again on next use."""
    global _settings
    _settings = None
