"""
Minimal AMF3 reader for legacy template wrappers

Only the shapes the legacy serializer emits are understood: a root object,
string or byte array, objects with inline traits (sealed and dynamic
members), and member values that are strings, byte arrays or null.
"""

from typing import Any, Dict, List, Tuple, Union

from ..commons.errors import (
    BadReferenceError,
    TruncatedDataError,
    UnsupportedMarkerError,
    UnsupportedTraitReferenceError,
)

AMF3Value = Union[Dict[str, Any], str, bytes, None]

NULL_MARKER = 0x01
STRING_MARKER = 0x06
OBJECT_MARKER = 0x0A
BYTE_ARRAY_MARKER = 0x0C

TRAIT_INLINE = 0x01
TRAIT_DESCRIBED = 0x02
TRAIT_DYNAMIC = 0x08

_SKIP = object()


def read_u29(data: bytes, offset: int) -> Tuple[int, int]:
    """
    Read an AMF3 U29 variable-length integer

    Args:
        data: Buffer to read from
        offset: Position of the first byte

    Returns:
        Tuple of (value, offset after the last byte consumed)
    """
    value = 0
    for _ in range(3):
        if offset >= len(data):
            raise TruncatedDataError("AMF3 integer")
        b = data[offset]
        offset += 1
        if not b & 0x80:
            return (value << 7) | b, offset
        value = (value << 7) | (b & 0x7F)

    if offset >= len(data):
        raise TruncatedDataError("AMF3 integer")
    # 4th byte carries a full 8 bits
    return (value << 8) | data[offset], offset + 1


class AMF3Reader:
    """Single-use AMF3 reader with its own string and byte-array reference tables"""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0
        self.string_refs: List[str] = []
        self.byte_array_refs: List[bytes] = []

    def read_root(self) -> AMF3Value:
        marker = self._read_marker()
        if marker == OBJECT_MARKER:
            return self.read_object()
        if marker == STRING_MARKER:
            return self.read_string()
        if marker == BYTE_ARRAY_MARKER:
            return self.read_byte_array()
        raise UnsupportedMarkerError(marker)

    def read_object(self) -> Dict[str, Any]:
        trait = self._read_u29()
        if not trait & TRAIT_INLINE:
            raise UnsupportedTraitReferenceError()
        described = bool(trait & TRAIT_DESCRIBED)
        dynamic = bool(trait & TRAIT_DYNAMIC)
        sealed_count = trait >> 4

        self.read_string()  # class name

        members: Dict[str, Any] = {}
        if described and sealed_count > 0:
            names = [self.read_string() for _ in range(sealed_count)]
            for name in names:
                self._read_member(members, name)

        if dynamic:
            while True:
                name = self.read_string()
                if not name:
                    break
                self._read_member(members, name)

        return members

    def read_string(self) -> str:
        """Read a string (or member name) whose marker has already been consumed"""
        ref = self._read_u29()
        if not ref & 1:
            index = ref >> 1
            if index >= len(self.string_refs):
                raise BadReferenceError("string", index)
            return self.string_refs[index]

        raw = self._read_bytes(ref >> 1, "AMF3 string")
        if not raw:
            return ""
        value = raw.decode("utf-8", errors="replace")
        self.string_refs.append(value)
        return value

    def read_byte_array(self) -> bytes:
        ref = self._read_u29()
        if not ref & 1:
            index = ref >> 1
            if index >= len(self.byte_array_refs):
                raise BadReferenceError("byte array", index)
            return self.byte_array_refs[index]

        value = self._read_bytes(ref >> 1, "AMF3 byte array")
        self.byte_array_refs.append(value)
        return value

    def _read_member(self, members: Dict[str, Any], name: str) -> None:
        value = self._read_supported_value()
        if value is _SKIP:
            self._skip_value()
        else:
            members[name] = value

    def _read_supported_value(self) -> Any:
        marker = self._read_marker()
        if marker == STRING_MARKER:
            return self.read_string()
        if marker == BYTE_ARRAY_MARKER:
            return self.read_byte_array()
        if marker == NULL_MARKER:
            return None
        # leave the marker for the skipper
        self.offset -= 1
        return _SKIP

    def _skip_value(self) -> None:
        marker = self._read_marker()
        if marker == STRING_MARKER:
            self.read_string()
        elif marker == BYTE_ARRAY_MARKER:
            self.read_byte_array()
        elif marker != NULL_MARKER:
            raise UnsupportedMarkerError(marker)

    def _read_marker(self) -> int:
        if self.offset >= len(self.data):
            raise TruncatedDataError("AMF3 data")
        marker = self.data[self.offset]
        self.offset += 1
        return marker

    def _read_u29(self) -> int:
        value, self.offset = read_u29(self.data, self.offset)
        return value

    def _read_bytes(self, length: int, what: str) -> bytes:
        end = self.offset + length
        if end > len(self.data):
            raise TruncatedDataError(what)
        raw = self.data[self.offset:end]
        self.offset = end
        return raw


def decode_root(data: bytes) -> AMF3Value:
    """Decode the root value of an AMF3 buffer"""
    return AMF3Reader(data).read_root()
