"""APT method protocol: message model, wire codec and output writer."""

from .message import Message, MessageType
from .writer import MessageWriter

__all__ = ["Message", "MessageType", "MessageWriter"]
