"""
The entire public API is available at root level::

    from shopify_api import Config, Session, execute, orders, products, ...
"""

from . import clients, http, resources
from .__about__ import __author__, __description__, __version__  # noqa
from .address import *  # noqa
from .clients import *  # noqa
from .errors import *  # noqa
from .http import *  # noqa
from .query import *  # noqa
from .resource import *  # noqa
from .resources import *  # noqa
from .session import *  # noqa

__all__ = ["clients", "http", "resources"]
