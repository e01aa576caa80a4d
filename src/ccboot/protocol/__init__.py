"""Protocol layer: packet framing, command builders, and reply parsing."""

from .framing import Packet, build_packet, parse_packet
from .commands import Command, CommandType, build_command, parse_command
