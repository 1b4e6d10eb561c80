"""
Template loading utilities for Face Template Migration
"""

from pathlib import Path
from typing import List, Union

from .errors import Base64DecodeError
from ..decoding.prototype import decode_base64

TemplateSource = Union[bytes, bytearray, str, Path]


def _looks_like_base64(raw: bytes) -> bool:
    try:
        text = raw.decode("ascii").strip()
    except UnicodeDecodeError:
        return False
    if not text:
        return False
    try:
        decode_base64(text)
    except Base64DecodeError:
        return False
    return True


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:  # e.g. a long base64 string is not a valid file name
        return False


def _looks_like_path(text: str) -> bool:
    # '.' and '\' are outside the base64 alphabet
    return "." in text or "\\" in text


def load_template(source: TemplateSource) -> bytes:
    """
    Load a legacy template from bytes, a base64 string or a file

    Args:
        source: Template bytes, base64 text, or a path to a file holding
            either raw bytes or base64 text

    Returns:
        Template bytes
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)

    if isinstance(source, str):
        path = Path(source)
        if not _is_file(path) and not _looks_like_path(source):
            return decode_base64(source)
    elif isinstance(source, Path):
        path = source
    else:
        raise ValueError("source must be bytes, base64 string or path")

    if not _is_file(path):
        raise FileNotFoundError(f"Template not found: {source}")

    raw = path.read_bytes()
    if _looks_like_base64(raw):
        return decode_base64(raw.decode("ascii"))
    return raw


def load_templates(path: Union[str, Path]) -> List[bytes]:
    """
    Load many templates

    Args:
        path: A text file with one base64 template per line, or a directory
            of template files

    Returns:
        Template bytes in file (or line) order
    """
    path_obj = Path(path)
    if path_obj.is_dir():
        return [load_template(p) for p in sorted(path_obj.iterdir()) if p.is_file()]
    if not path_obj.is_file():
        raise FileNotFoundError(f"Templates not found: {path}")

    templates = []
    for line_no, line in enumerate(path_obj.read_text(encoding="utf-8").splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            templates.append(decode_base64(line))
        except Base64DecodeError as e:
            raise Base64DecodeError(f"line {line_no} of {path}") from e
    return templates
