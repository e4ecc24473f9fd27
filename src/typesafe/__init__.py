"""Ordered collections that only admit elements of the types they allow.

Types are defined in their own modules and then imported here for a single
unified namespace.
"""

# __init__ files, used strictly for re-exporting, are the exception to the
# "import modules only" style used in typesafe.

from ._version import version as __version__
from ._version import version_tuple as __version_tuple__
from .collection import OrderedCollection
from .errors import CollectionError
from .errors import ConfigurationError
from .errors import InvalidElementError
from .guarded import GuardedCollection
from .guarded import guarded_collection_type
from .options import CollectionConfig
from .options import Policy
from .ordered_map import OrderedMap
from .validation import TypeCheck
from .validation import Validator

__all__ = (
    "OrderedCollection",
    "OrderedMap",
    "GuardedCollection",
    "guarded_collection_type",
    "CollectionConfig",
    "Policy",
    "TypeCheck",
    "Validator",
    "CollectionError",
    "ConfigurationError",
    "InvalidElementError",
)
