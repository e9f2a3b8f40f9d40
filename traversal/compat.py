# flake8: noqa
# pragma: nocover
from __future__ import annotations

import sys
from typing import Literal

PYTHON_VERSION = sys.version_info

if PYTHON_VERSION >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self  # type: ignore[assignment]


__all__ = (
    "Literal",
    "PYTHON_VERSION",
    "Self",
)
