__copyright__ = 'shay 2020-present'
__version__ = '1.0.0'

import logging

from . import abc as abc, utils as utils
from .utils import Object as Object
from .channel import *
from .client import *
from .enums import *
from .errors import *
from .guild import *
from .invite import *
from .override import *
from .permissions import *
from .role import *
from .user import *

logging.getLogger(__name__).addHandler(logging.NullHandler())
