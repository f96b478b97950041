"""Message framing for the ask/cancel/answer protocol.

Two framings carry the same three operations:

    plain     {"type": "ask", "id", "config"} / {"type": "cancel", "id"}
              {"type": "answer", "id", "answer"}
    jsonrpc   {"jsonrpc": "2.0", "id", "method", "params"}
              {"jsonrpc": "2.0", "id", "result", "error"?}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from formterm.errors import ProtocolError

JSONRPC_VERSION = "2.0"


@dataclass(frozen=True)
class Inbound:
    """A decoded peer-to-engine message.

    *error* is set when the peer refused to answer (jsonrpc error
    response); *answer* is the untyped payload otherwise.
    """

    id: str
    answer: Any = None
    error: ProtocolError | None = None


class Codec(Protocol):
    name: str

    def encode_ask(self, id: str, config: dict[str, Any]) -> dict[str, Any]: ...

    def encode_cancel(self, id: str) -> dict[str, Any]: ...

    def encode_answer(self, id: str, answer: Any) -> dict[str, Any]: ...

    def decode(self, message: Mapping[str, Any]) -> Inbound | None: ...


class PlainCodec:
    name = "plain"

    def encode_ask(self, id: str, config: dict[str, Any]) -> dict[str, Any]:
        return {"type": "ask", "id": id, "config": config}

    def encode_cancel(self, id: str) -> dict[str, Any]:
        return {"type": "cancel", "id": id}

    def encode_answer(self, id: str, answer: Any) -> dict[str, Any]:
        return {"type": "answer", "id": id, "answer": answer}

    def decode(self, message: Mapping[str, Any]) -> Inbound | None:
        """Return the answer carried by *message*, or None if it is not one."""
        if message.get("type") != "answer" or not isinstance(message.get("id"), str):
            return None
        return Inbound(id=message["id"], answer=message.get("answer"))


class JsonRpcCodec:
    """Legacy request/response envelope.

    Engine requests use method ``ask`` or ``cancel``; the peer's answer
    is the ``result`` of the response whose ``id`` matches the ask.
    """

    name = "jsonrpc"

    def encode_ask(self, id: str, config: dict[str, Any]) -> dict[str, Any]:
        return {
            "jsonrpc": JSONRPC_VERSION,
            "id": id,
            "method": "ask",
            "params": {"id": id, "config": config},
        }

    def encode_cancel(self, id: str) -> dict[str, Any]:
        return {
            "jsonrpc": JSONRPC_VERSION,
            "id": id,
            "method": "cancel",
            "params": {"id": id},
        }

    def encode_answer(self, id: str, answer: Any) -> dict[str, Any]:
        return {"jsonrpc": JSONRPC_VERSION, "id": id, "result": answer}

    def decode(self, message: Mapping[str, Any]) -> Inbound | None:
        if message.get("jsonrpc") != JSONRPC_VERSION or "method" in message:
            return None
        if not isinstance(message.get("id"), str):
            return None
        error = message.get("error")
        if error is not None:
            if not isinstance(error, Mapping):
                error = {"message": str(error)}
            return Inbound(
                id=message["id"],
                error=ProtocolError(
                    str(error.get("message", "peer returned an error")),
                    code=error.get("code"),
                    data=error.get("data"),
                ),
            )
        return Inbound(id=message["id"], answer=message.get("result"))


CODECS: dict[str, type] = {
    PlainCodec.name: PlainCodec,
    JsonRpcCodec.name: JsonRpcCodec,
}


def get_codec(name: str) -> Codec:
    try:
        return CODECS[name]()
    except KeyError:
        raise ProtocolError(f"unknown protocol {name!r}; expected one of {sorted(CODECS)}") from None
