# Generator package

# Makes generate/ importable and exposes key interfaces.

from .generator import ChatGenerator, parse_turns
from .pipeline import assemble
from .types import ChatResponse, Message
from .clients.echo_dev_client import EchoDevClient

__all__ = ["ChatGenerator", "ChatResponse", "EchoDevClient", "Message", "assemble", "parse_turns"]
