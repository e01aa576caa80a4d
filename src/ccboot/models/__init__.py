"""Value enumerations shared by the codec and the session API."""

from .status import Status, status_name
from .memory import ReadWriteType, read_write_type_name
from .ccfg import CCFGFieldID
