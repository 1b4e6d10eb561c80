"""
Format sniffing and recursive unwrapping of legacy template blobs
"""

import zlib

from ..commons.errors import DecompressionFailedError, EmptyTemplateDataError, NestingLimitExceededError
from ..commons.logger import Logger
from .prototype import Prototype

logger = Logger()

DEFAULT_MAX_DECOMPRESSION_ROUNDS = 8
DEFAULT_MAX_UNWRAP_DEPTH = 16

RAW_PROTOTYPE_MASK = 0xEC


def is_compressed(data: bytes) -> bool:
    """True when the buffer starts with a zlib stream header"""
    if len(data) < 2:
        return False
    return (data[0] & 0x0F) == 8 and (data[0] * 256 + data[1]) % 31 == 0


def is_raw_prototype(data: bytes) -> bool:
    """
    Heuristic test for an FPVC payload

    Legacy payloads carry no explicit tag, so the header bytes are checked
    for either the 132 byte short form or a plausible general header.
    """
    if len(data) < 4:
        return False
    p0, p1, p2, p3 = data[0], data[1], data[2], data[3]
    if len(data) == 132 and 16 < p0 < 120 and p1 == 1:
        return True
    return p0 != 0 and p2 != 0 and (p2 & RAW_PROTOTYPE_MASK) == 0 and p3 in (1, 2)


def decompress(data: bytes) -> bytes:
    """Inflate a complete zlib stream"""
    if not data:
        raise EmptyTemplateDataError()
    inflater = zlib.decompressobj()
    try:
        out = inflater.decompress(data)
        out += inflater.flush()
    except zlib.error as e:
        raise DecompressionFailedError(str(e)) from e
    if not inflater.eof:
        raise DecompressionFailedError("premature end of stream")
    return out


def raw_bytes(blob: bytes,
              max_decompression_rounds: int = DEFAULT_MAX_DECOMPRESSION_ROUNDS,
              max_unwrap_depth: int = DEFAULT_MAX_UNWRAP_DEPTH) -> bytes:
    """
    Strip compression and prototype wrappers until raw FPVC bytes remain

    Args:
        blob: Legacy template as stored
        max_decompression_rounds: Inflate passes allowed per wrapper level
        max_unwrap_depth: JSON/AMF3 wrapper levels allowed

    Returns:
        Unwrapped template bytes
    """
    data = bytes(blob)
    for _ in range(max_unwrap_depth + 1):
        rounds = 0
        while is_compressed(data):
            if rounds >= max_decompression_rounds:
                raise NestingLimitExceededError("decompression rounds", max_decompression_rounds)
            data = decompress(data)
            rounds += 1
            logger.debug(f"Inflated template layer to {len(data)} bytes")

        if not data or is_raw_prototype(data):
            return data

        first = data[0]
        if first in b'{"':
            logger.debug("Unwrapping JSON prototype")
            data = Prototype.from_json(data).proto
        elif first < 0x20:
            logger.debug("Unwrapping AMF3 prototype")
            data = Prototype.from_amf3(data).proto
        else:
            return data

    raise NestingLimitExceededError("wrapper levels", max_unwrap_depth)
