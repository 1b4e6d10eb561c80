"""
Errors raised while migrating legacy face templates.

Every decode failure derives from ``TemplateMigrationError`` (itself a
``ValueError``) so callers can catch a single type when they want to skip a
bad template and keep going with a batch.
"""


class TemplateMigrationError(ValueError):
    """Base class for all legacy template decode failures"""


class TruncatedDataError(TemplateMigrationError):
    """Fewer bytes remain than the structure being read requires"""

    def __init__(self, what: str = "data"):
        super().__init__(f"Truncated {what}")
        self.what = what


class UnsupportedMarkerError(TemplateMigrationError):
    """AMF3 type marker outside the supported set"""

    def __init__(self, marker: int):
        super().__init__(f"AMF3 unsupported marker 0x{marker:02X}")
        self.marker = marker


class UnsupportedTraitReferenceError(TemplateMigrationError):
    """AMF3 object uses a trait reference instead of inline traits"""

    def __init__(self):
        super().__init__("AMF3 trait reference not supported")


class BadReferenceError(TemplateMigrationError):
    """Out-of-range AMF3 string or byte-array back-reference"""

    def __init__(self, kind: str, index: int):
        super().__init__(f"AMF3 bad {kind} reference {index}")
        self.kind = kind
        self.index = index


class EmptyTemplateDataError(TemplateMigrationError):
    def __init__(self):
        super().__init__("Face template data is empty")


class DecompressionFailedError(TemplateMigrationError):
    def __init__(self, reason: str = ""):
        message = "Face template data decompression failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class Base64DecodeError(TemplateMigrationError):
    def __init__(self, where: str = ""):
        message = "Failed to decode base64 string"
        if where:
            message = f"{message} ({where})"
        super().__init__(message)


class MalformedPrototypeError(TemplateMigrationError):
    """Wrapper could not be parsed or carries no usable ``proto`` field"""


class VectorDeserializationError(TemplateMigrationError):
    def __init__(self, reason: str = ""):
        message = "Failed to deserialize vector"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class VersionMismatchError(TemplateMigrationError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected version {expected} template but got version {actual}")
        self.expected = expected
        self.actual = actual


class UnsupportedVersionError(TemplateMigrationError):
    def __init__(self, version: int):
        super().__init__(f"Unsupported face template version {version}")
        self.version = version


class NestingLimitExceededError(TemplateMigrationError):
    """Too many compression rounds or wrapper levels in one template"""

    def __init__(self, what: str, limit: int):
        super().__init__(f"Exceeded {limit} {what} while unwrapping face template")
        self.what = what
        self.limit = limit
