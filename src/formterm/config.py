from __future__ import annotations

from dataclasses import dataclass

PROTOCOLS = ("plain", "jsonrpc")

DEFAULT_MAX_MESSAGE_BYTES = 4 * 1024 * 1024


@dataclass(frozen=True)
class FormtermConfig:
    show_description: bool = False  # print title/description before each prompt
    host: str = "127.0.0.1"
    port: int = 3000
    protocol: str = "plain"  # "plain" or "jsonrpc" message framing
    max_message_bytes: int = DEFAULT_MAX_MESSAGE_BYTES  # longer lines are skipped
