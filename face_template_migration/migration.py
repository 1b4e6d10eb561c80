"""
Face Template Migration - Main Interface
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import numpy as np

from .commons.errors import EmptyTemplateDataError, TemplateMigrationError, VectorDeserializationError, VersionMismatchError
from .commons.logger import Logger
from .decoding.unwrap import DEFAULT_MAX_DECOMPRESSION_ROUNDS, DEFAULT_MAX_UNWRAP_DEPTH, raw_bytes
from .versions import PREFERENCE_ORDER, VERSION_DECODERS, TemplateVersion, resolve_version

logger = Logger()

T = TypeVar("T")


@dataclass(frozen=True, eq=False)
class FaceTemplate:
    """Migrated template: a version tag and a unit-length float32 vector"""
    version: TemplateVersion
    vector: np.ndarray

    def __len__(self) -> int:
        return len(self.vector)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": int(self.version),
            "vector": self.vector.tolist(),
            "length": len(self.vector),
        }


def normalize(vector: np.ndarray) -> np.ndarray:
    """
    L2-normalize a vector

    Args:
        vector: Input vector

    Returns:
        float32 copy scaled to unit length, or the unscaled copy when the
        norm is zero
    """
    vec = np.array(vector, dtype=np.float32)
    norm = np.linalg.norm(vec)
    if norm > 0:
        vec /= norm
    return vec


class FaceTemplateMigration:
    """
    Converts legacy face templates into normalized float vectors
    """

    def __init__(self,
                 max_decompression_rounds: int = DEFAULT_MAX_DECOMPRESSION_ROUNDS,
                 max_unwrap_depth: int = DEFAULT_MAX_UNWRAP_DEPTH,
                 workers: int = 1):
        """
        Initialize the migration

        Args:
            max_decompression_rounds: zlib layers allowed per wrapper level
            max_unwrap_depth: JSON/AMF3 wrapper levels allowed
            workers: Threads used by the batch conversions (1 = sequential)
        """
        self.max_decompression_rounds = max_decompression_rounds
        self.max_unwrap_depth = max_unwrap_depth
        self.workers = max(1, int(workers))

    def raw_bytes(self, template: bytes) -> bytes:
        """Unwrap a legacy template down to its FPVC bytes"""
        return raw_bytes(template,
                         max_decompression_rounds=self.max_decompression_rounds,
                         max_unwrap_depth=self.max_unwrap_depth)

    def detect_version(self, template: bytes) -> int:
        """
        Read the version tag of a legacy template

        Args:
            template: Legacy template blob

        Returns:
            First byte of the unwrapped template
        """
        data = self.raw_bytes(template)
        if not data:
            raise EmptyTemplateDataError()
        return data[0]

    def convert(self, template: bytes, version: int) -> FaceTemplate:
        """
        Convert a legacy template of a given version

        Args:
            template: Legacy template blob
            version: Version the template is expected to carry

        Returns:
            FaceTemplate with a unit-length vector
        """
        return self._convert_raw(self.raw_bytes(template), version)

    def convert_one_any(self, template: bytes) -> FaceTemplate:
        """Convert a template trying every known version in preference order"""
        data = self.raw_bytes(template)
        last_error: Optional[TemplateMigrationError] = None
        for version in PREFERENCE_ORDER:
            try:
                return self._convert_raw(data, version)
            except TemplateMigrationError as e:
                logger.debug(f"Template is not version {int(version)}: {e}")
                last_error = e
        raise last_error

    def convert_matching(self, template: bytes, version: int) -> Optional[FaceTemplate]:
        """
        Convert a template only if it carries the given version

        Returns:
            FaceTemplate, or None when the template has another version
        """
        target = resolve_version(version)
        data = self.raw_bytes(template)
        if not data:
            raise EmptyTemplateDataError()
        if data[0] != target:
            return None
        return self._convert_raw(data, target)

    def convert_any(self, templates: Iterable[bytes]) -> List[FaceTemplate]:
        """
        Convert templates of mixed versions

        Args:
            templates: Legacy template blobs

        Returns:
            One FaceTemplate per input, in input order
        """
        converted = self._map(self.convert_one_any, list(templates))
        logger.info(f"Converted {len(converted)} legacy face templates")
        return converted

    def convert_by_version(self, templates: Iterable[bytes], version: int) -> List[FaceTemplate]:
        """
        Convert only the templates carrying a given version

        Args:
            templates: Legacy template blobs
            version: Version to keep

        Returns:
            FaceTemplates for the matching inputs, in input order
        """
        target = resolve_version(version)
        results = self._map(lambda t: self.convert_matching(t, target), list(templates))
        converted = [r for r in results if r is not None]
        logger.info(f"Converted {len(converted)} of {len(results)} templates as version {int(target)}")
        return converted

    def _convert_raw(self, data: bytes, version: int) -> FaceTemplate:
        if not data:
            raise EmptyTemplateDataError()
        target = resolve_version(version)
        actual = data[0]
        if actual != target:
            raise VersionMismatchError(int(target), actual)

        decoded = VERSION_DECODERS[target](data)
        if len(decoded) == 0:
            raise VectorDeserializationError("empty vector")

        floats = decoded.values.astype(np.float32) * np.float32(decoded.scale)
        vector = normalize(floats)
        vector.flags.writeable = False
        return FaceTemplate(version=target, vector=vector)

    def _map(self, func: Callable[[bytes], T], templates: List[bytes]) -> List[T]:
        if self.workers == 1 or len(templates) < 2:
            return [func(t) for t in templates]
        # Executor.map yields results in input order
        with ThreadPoolExecutor(max_workers=self.workers) as ex:
            return list(ex.map(func, templates))


default = FaceTemplateMigration()
