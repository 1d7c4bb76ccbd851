"""Fixed-capacity containers indexed by enum value."""

import logging

from enum_containers import array as _array
from enum_containers import bitset as _bitset
from enum_containers import enum_set as _enum_set
from enum_containers.array import *
from enum_containers.bitset import *
from enum_containers.enum_set import *

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = []
__all__ += _array.__all__
__all__ += _bitset.__all__
__all__ += _enum_set.__all__
