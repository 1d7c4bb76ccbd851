"""Enumeration domains and the ordinal mapping shared by the containers."""

import logging

from enum_core import domains as _domains
from enum_core import errors as _errors
from enum_core import ordinal as _ordinal
from enum_core.domains import *
from enum_core.errors import *
from enum_core.ordinal import *

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = []
__all__ += [name for name in _domains.__all__ if not name.startswith("_")]
__all__ += _errors.__all__
__all__ += _ordinal.__all__
