"""
Decoding package for Face Template Migration
"""

from .amf3 import AMF3Reader, decode_root, read_u29
from .fpvc import DECOMPRESS_TABLE, DecodedVector, deserialize
from .prototype import Prototype
from .unwrap import decompress, is_compressed, is_raw_prototype, raw_bytes

__all__ = [
    'AMF3Reader',
    'decode_root',
    'read_u29',
    'DECOMPRESS_TABLE',
    'DecodedVector',
    'deserialize',
    'Prototype',
    'decompress',
    'is_compressed',
    'is_raw_prototype',
    'raw_bytes',
]
