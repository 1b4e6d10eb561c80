"""
FPVC compressed vector decoding

A legacy template body is a 4 byte header (format version, element count,
encoding type, vector count) followed by a little-endian float32 scale and
the quantized codes. Three encodings exist:

- 0x10: one byte per element, dequantized through ``DECOMPRESS_TABLE``
- 0x11: two 12-bit signed values packed into every 3 bytes
- 0x12: raw little-endian int16 values

A short 132 byte form carries 128 int8 values with a bfloat16 scale in the
header instead.
"""

import struct
from dataclasses import dataclass

import numpy as np

from ..commons.errors import VectorDeserializationError
from ..commons.logger import Logger

logger = Logger()

TYPE_TABLE_CODED = 0x10
TYPE_PACKED_12 = 0x11
TYPE_RAW_16 = 0x12

HEADER_SIZE = 4
SHORT_FORM_SIZE = 132
SHORT_FORM_ELEMENTS = 128

# Symmetric piecewise-linear dequantization curve for 8-bit codes
DECOMPRESS_TABLE = np.array([
    0, 1, 4, 8, 16, 24, 32, 40,
    48, 56, 64, 72, 80, 88, 96, 104,
    113, 122, 131, 140, 149, 158, 167, 176,
    185, 194, 204, 214, 224, 234, 244, 254,
    264, 274, 285, 296, 307, 318, 329, 340,
    352, 364, 376, 388, 400, 413, 426, 439,
    452, 466, 480, 494, 509, 524, 540, 556,
    572, 588, 604, 620, 636, 652, 668, 684,
    700, 716, 732, 748, 764, 780, 796, 812,
    828, 844, 860, 876, 892, 908, 924, 940,
    956, 972, 988, 1004, 1020, 1036, 1052, 1068,
    1084, 1100, 1116, 1132, 1148, 1164, 1180, 1196,
    1212, 1228, 1244, 1260, 1276, 1292, 1308, 1324,
    1340, 1356, 1372, 1388, 1404, 1420, 1436, 1452,
    1468, 1484, 1500, 1516, 1532, 1548, 1564, 1580,
    1596, 1612, 1628, 1644, 1660, 1676, 1692, 1708,
    -1708, -1692, -1676, -1660, -1644, -1628, -1612, -1596,
    -1580, -1564, -1548, -1532, -1516, -1500, -1484, -1468,
    -1452, -1436, -1420, -1404, -1388, -1372, -1356, -1340,
    -1324, -1308, -1292, -1276, -1260, -1244, -1228, -1212,
    -1196, -1180, -1164, -1148, -1132, -1116, -1100, -1084,
    -1068, -1052, -1036, -1020, -1004, -988, -972, -956,
    -940, -924, -908, -892, -876, -860, -844, -828,
    -812, -796, -780, -764, -748, -732, -716, -700,
    -684, -668, -652, -636, -620, -604, -588, -572,
    -556, -540, -524, -509, -494, -480, -466, -452,
    -439, -426, -413, -400, -388, -376, -364, -352,
    -340, -329, -318, -307, -296, -285, -274, -264,
    -254, -244, -234, -224, -214, -204, -194, -185,
    -176, -167, -158, -149, -140, -131, -122, -113,
    -104, -96, -88, -80, -72, -64, -56, -48,
    -40, -32, -24, -16, -8, -4, -1, 0,
], dtype=np.int16)
DECOMPRESS_TABLE.flags.writeable = False


@dataclass(frozen=True, eq=False)
class DecodedVector:
    """Quantized vector: ``values * scale`` approximates the original floats"""
    scale: float
    values: np.ndarray

    def __len__(self) -> int:
        return len(self.values)


def _round_up_4(n: int) -> int:
    return (n + 3) & ~3


def table_coded_size(nels: int) -> int:
    return 4 + _round_up_4(nels)


def packed_12_size(nels: int) -> int:
    # 3 bytes per pair, 2 bytes for an odd tail
    data_bytes = (nels // 2) * 3 + (nels & 1) * 2
    return 4 + _round_up_4(data_bytes)


def raw_16_size(nels: int) -> int:
    return 4 + 2 * nels + (nels & 1) * 2


def bfloat16_to_float(bits: int) -> float:
    """Expand the upper 16 bits of an IEEE-754 float32"""
    return struct.unpack("<f", struct.pack("<I", (bits & 0xFFFF) << 16))[0]


def _read_scale(body: bytes) -> float:
    scale = struct.unpack_from("<f", body, 0)[0]
    # also rejects NaN
    if not scale >= 0:
        raise VectorDeserializationError(f"invalid scale {scale}")
    return scale


def decode_table_coded(body: bytes, nels: int) -> DecodedVector:
    """Decode a type 0x10 body (scale followed by 8-bit codes)"""
    if len(body) < 4 + nels:
        raise VectorDeserializationError("not enough code bytes")
    scale = _read_scale(body)
    codes = np.frombuffer(body, dtype=np.uint8, count=nels, offset=4)
    return DecodedVector(scale, DECOMPRESS_TABLE[codes])


def decode_packed_12(body: bytes, nels: int) -> DecodedVector:
    """
    Decode a type 0x11 body

    Every 3 bytes ``b0 b1 b2`` hold two sign-extended 12-bit values:
    ``(b1 << 12 | b0 << 4) >> 4`` and ``(b2 << 8 | b1) >> 4``, both shifts
    arithmetic on 16 bits. An odd trailing element only uses the first
    formula.
    """
    pairs = nels // 2
    tail = nels & 1
    if len(body) < 4 + pairs * 3 + tail * 2:
        raise VectorDeserializationError("not enough packed bytes")
    scale = _read_scale(body)

    count = pairs * 3 + tail * 3
    packed = np.zeros(count, dtype=np.uint16)
    available = min(count, len(body) - 4)
    packed[:available] = np.frombuffer(body, dtype=np.uint8, count=available, offset=4)
    triplets = packed.reshape(-1, 3)

    first = ((triplets[:, 1] << 12) | (triplets[:, 0] << 4)).view(np.int16) >> 4
    second = ((triplets[:, 2] << 8) | triplets[:, 1]).view(np.int16) >> 4

    values = np.empty(nels, dtype=np.int16)
    values[0::2] = first[:pairs + tail]
    values[1::2] = second[:pairs]
    return DecodedVector(scale, values)


def decode_raw_16(body: bytes, nels: int) -> DecodedVector:
    """Decode a type 0x12 body (scale followed by little-endian int16 values)"""
    if len(body) < 4 + 2 * nels:
        raise VectorDeserializationError("not enough value bytes")
    scale = _read_scale(body)
    values = np.frombuffer(body, dtype="<i2", count=nels, offset=4).astype(np.int16)
    return DecodedVector(scale, values)


_BODY_DECODERS = {
    TYPE_TABLE_CODED: (table_coded_size, decode_table_coded),
    TYPE_PACKED_12: (packed_12_size, decode_packed_12),
    TYPE_RAW_16: (raw_16_size, decode_raw_16),
}


def _decode_short_form(data: bytes) -> DecodedVector:
    scale = bfloat16_to_float(struct.unpack_from("<H", data, 2)[0])
    if not scale >= 0:
        raise VectorDeserializationError(f"invalid scale {scale}")
    values = np.frombuffer(data, dtype=np.int8, count=SHORT_FORM_ELEMENTS, offset=HEADER_SIZE)
    return DecodedVector(scale, values.astype(np.int16))


def deserialize(data: bytes) -> DecodedVector:
    """
    Decode an FPVC vector

    Args:
        data: Fully unwrapped template bytes, header included

    Returns:
        DecodedVector with exactly the declared number of elements

    Raises:
        VectorDeserializationError: On any structural violation
    """
    data = bytes(data)
    if len(data) < HEADER_SIZE:
        raise VectorDeserializationError("header truncated")

    nels_head = data[1]
    if nels_head == 1 and len(data) >= SHORT_FORM_SIZE:
        logger.debug("FPVC short form: 128 x int8 with bfloat16 scale")
        return _decode_short_form(data)

    vec_type = data[2]
    nvecs = data[3]
    if nvecs != 1:
        raise VectorDeserializationError(f"expected 1 vector, found {nvecs}")

    offset = HEADER_SIZE
    nels = nels_head
    if nels == 0:
        if len(data) < offset + 4:
            raise VectorDeserializationError("element count truncated")
        nels = struct.unpack_from("<I", data, offset)[0]
        if nels == 0:
            raise VectorDeserializationError("zero element count")
        offset += 4

    if vec_type not in _BODY_DECODERS:
        raise VectorDeserializationError(f"unknown vector type 0x{vec_type:02X}")
    body_size, decode_body = _BODY_DECODERS[vec_type]

    n_bytes = body_size(nels)
    remaining = len(data) - offset
    if remaining < n_bytes:
        raise VectorDeserializationError(
            f"type 0x{vec_type:02X} needs {n_bytes} bytes for {nels} elements, {remaining} available"
        )

    logger.debug(f"FPVC type 0x{vec_type:02X} with {nels} elements")
    result = decode_body(data[offset:offset + n_bytes], nels)
    if len(result) != nels:
        raise VectorDeserializationError(f"decoded {len(result)} of {nels} elements")

    if remaining > n_bytes:
        logger.debug(f"Ignoring {remaining - n_bytes} trailing bytes after FPVC vector")
    return result
