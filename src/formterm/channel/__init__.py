"""Channel layer: correlated question/answer exchanges over a message channel."""

from formterm.channel.asker import ChannelAsker, ChannelQuestion
from formterm.channel.codec import Codec, Inbound, JsonRpcCodec, PlainCodec, get_codec
from formterm.channel.correlation import Correlator
from formterm.channel.session import run_session
from formterm.channel.transport import Channel, MemoryChannel, StreamChannel

__all__ = [
    "Channel",
    "MemoryChannel",
    "StreamChannel",
    "Codec",
    "Inbound",
    "PlainCodec",
    "JsonRpcCodec",
    "get_codec",
    "Correlator",
    "ChannelAsker",
    "ChannelQuestion",
    "run_session",
]
