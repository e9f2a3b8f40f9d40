# flake8: noqa
from .__about__ import __version__
from .conditions import AnyOf, Attribute, Condition, Kind, attr
from .description import Description
from .errors import *
from .iterator import Iterator
from .settings import Settings, configure, get_settings, reset_settings
from .traversable import Traversable, acts_as_traversable, traversable, traverse
from .types import Order

DEPTH_FIRST = Order.DEPTH_FIRST
BREADTH_FIRST = Order.BREADTH_FIRST
