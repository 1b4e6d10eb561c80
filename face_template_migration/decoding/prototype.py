"""
Prototype wrappers around legacy templates

A wrapper is a JSON or AMF3 value whose ``proto`` field holds the next
inner layer, either as raw bytes or as a base64 string.
"""

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any

from ..commons.errors import Base64DecodeError, MalformedPrototypeError
from .amf3 import decode_root

PROTO_FIELD = "proto"


@dataclass(frozen=True)
class Prototype:
    proto: bytes

    @classmethod
    def from_value(cls, value: Any) -> "Prototype":
        """
        Build a prototype from a decoded JSON or AMF3 value

        Args:
            value: An object carrying a ``proto`` field, or a bare string
                or byte value standing for the field itself

        Returns:
            Prototype with the inner layer as bytes
        """
        if isinstance(value, dict):
            if PROTO_FIELD not in value:
                raise MalformedPrototypeError("Prototype has no 'proto' field")
            value = value[PROTO_FIELD]

        if isinstance(value, (bytes, bytearray)):
            return cls(bytes(value))
        if isinstance(value, str):
            return cls(decode_base64(value))
        raise MalformedPrototypeError(
            f"Expected bytes or base64 string for 'proto', got {type(value).__name__}"
        )

    @classmethod
    def from_json(cls, data: bytes) -> "Prototype":
        try:
            value = json.loads(data)
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            raise MalformedPrototypeError(f"Invalid JSON prototype: {e}") from e
        return cls.from_value(value)

    @classmethod
    def from_amf3(cls, data: bytes) -> "Prototype":
        return cls.from_value(decode_root(data))


def decode_base64(text: str) -> bytes:
    """Strict base64 decode; surrounding whitespace is tolerated"""
    try:
        return base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise Base64DecodeError() from e
