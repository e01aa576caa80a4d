"""Transport layer: byte channel contract, link protocol, serial adapter."""

from .base import Transport
from .link import ACK, NACK, LinkLayer
