"""
File Upload Utility - validate and store alumni photos / certificates.

Limits:
- Photo: JPEG / JPG / PNG, max 1MB
- Certificate: PDF, max 2MB

Files land in <upload_dir>/photos/ or <upload_dir>/certificates/ under a
random uuid4 name that keeps the original extension.
"""

import logging
import os
import uuid
from dataclasses import dataclass
from typing import BinaryIO, FrozenSet, Optional

from alumni_api.core.errors import ValidationError
from alumni_api.schemas.schemas import FileKind

logger = logging.getLogger(__name__)

MB = 1024 * 1024


@dataclass(frozen=True)
class UploadRule:
    subdir: str
    max_bytes: int
    allowed_types: FrozenSet[str]
    type_message: str

    @property
    def max_mb(self) -> int:
        return self.max_bytes // MB


UPLOAD_RULES = {
    FileKind.photo: UploadRule(
        subdir="photos",
        max_bytes=1 * MB,
        allowed_types=frozenset({"image/jpeg", "image/png", "image/jpg"}),
        type_message="Photo must be JPEG, JPG or PNG",
    ),
    FileKind.certificate: UploadRule(
        subdir="certificates",
        max_bytes=2 * MB,
        allowed_types=frozenset({"application/pdf"}),
        type_message="Certificate must be a PDF",
    ),
}


def get_file_extension(filename: str) -> str:
    """Get file extension (with the dot), '' when there is none."""
    return os.path.splitext(filename or "")[1]


def validate_upload(kind: FileKind, size: int, content_type: Optional[str]) -> UploadRule:
    """Check size and MIME type against the rule for ``kind``."""
    rule = UPLOAD_RULES[kind]
    if size > rule.max_bytes:
        raise ValidationError(f"File too large. Maximum size: {rule.max_mb}MB")
    if content_type not in rule.allowed_types:
        raise ValidationError(rule.type_message)
    return rule


def read_upload(stream: BinaryIO, kind: FileKind) -> bytes:
    """Read at most one byte past the limit, enough for validate_upload to reject oversize files."""
    return stream.read(UPLOAD_RULES[kind].max_bytes + 1)


def unique_filename(original: str) -> str:
    return uuid.uuid4().hex + get_file_extension(original)


def save_file(upload_dir: str, rule: UploadRule, filename: str, content: bytes) -> str:
    """Write ``content`` and return its path. OSError propagates."""
    directory = os.path.join(upload_dir, rule.subdir)
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, filename)
    with open(path, "wb") as f:
        f.write(content)
    return path


def remove_file(path: str) -> bool:
    """Best-effort delete. Returns False (and logs) when the file could not be removed."""
    try:
        os.remove(path)
        return True
    except OSError as e:
        logger.warning("Could not remove file %s: %s", path, e)
        return False
