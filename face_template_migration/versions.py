"""
Known legacy face template versions
"""

from enum import IntEnum
from typing import Callable, Dict

from .commons.errors import UnsupportedVersionError
from .decoding import fpvc


class TemplateVersion(IntEnum):
    """Version tag stored in the first byte of an unwrapped template"""
    V16 = 16  # dlib family
    V24 = 24  # ArcFace family


# Order in which versions are tried when the caller does not name one
PREFERENCE_ORDER = (TemplateVersion.V16, TemplateVersion.V24)

VERSION_DECODERS: Dict[TemplateVersion, Callable[[bytes], fpvc.DecodedVector]] = {
    TemplateVersion.V16: fpvc.deserialize,
    TemplateVersion.V24: fpvc.deserialize,
}


def resolve_version(version: int) -> TemplateVersion:
    try:
        return TemplateVersion(int(version))
    except (TypeError, ValueError) as e:
        raise UnsupportedVersionError(version) from e
