"""Archive models: package content, either inline or referenced by URL.

An archive is a tagged union.  A ``literal`` archive embeds the file bytes;
a ``url`` archive points at content held by the storage service and is
content-addressed by a SHA-256 checksum.
"""

from __future__ import annotations

import base64
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator, model_validator


class ArchiveType(str, Enum):
    """How the archive content is carried."""

    LITERAL = "literal"
    URL = "url"


class ChecksumType(str, Enum):
    """Supported checksum algorithms."""

    SHA256 = "sha256"


class Checksum(BaseModel):
    """Digest of archive content; ``sum`` is lowercase hex."""

    model_config = ConfigDict(frozen=True)

    type: ChecksumType = ChecksumType.SHA256
    sum: str


class Archive(BaseModel):
    """Package content descriptor.

    Exactly one representation is populated: ``literal`` bytes for a
    ``literal`` archive, ``url`` plus ``checksum`` for a ``url`` archive.
    On the wire ``literal`` is base64 text.
    """

    model_config = ConfigDict(frozen=True)

    type: ArchiveType
    literal: bytes | None = None
    url: str = ""
    checksum: Checksum | None = None

    @field_validator("literal", mode="before")
    @classmethod
    def decode_literal(cls, value: object) -> object:
        if isinstance(value, str):
            return base64.b64decode(value)
        return value

    @field_validator("checksum", mode="before")
    @classmethod
    def drop_empty_checksum(cls, value: object) -> object:
        # The controller always emits a checksum object, zero-valued for literals.
        if isinstance(value, dict) and not value.get("sum"):
            return None
        return value

    @field_serializer("literal", when_used="json")
    def encode_literal(self, value: bytes | None) -> str | None:
        if value is None:
            return None
        return base64.b64encode(value).decode("ascii")

    @model_validator(mode="after")
    def check_representation(self) -> Archive:
        if self.type == ArchiveType.LITERAL:
            if self.literal is None:
                raise ValueError("literal archive requires literal content")
            if self.url or self.checksum is not None:
                raise ValueError("literal archive must not carry a url or checksum")
        else:
            if not self.url:
                raise ValueError("url archive requires a url")
            if self.checksum is None:
                raise ValueError("url archive requires a checksum")
            if self.literal is not None:
                raise ValueError("url archive must not carry literal content")
        return self

    @classmethod
    def from_literal(cls, data: bytes) -> Archive:
        return cls(type=ArchiveType.LITERAL, literal=data)

    @classmethod
    def from_url(cls, url: str, sha256_sum: str) -> Archive:
        return cls(
            type=ArchiveType.URL,
            url=url,
            checksum=Checksum(type=ChecksumType.SHA256, sum=sha256_sum),
        )

    @property
    def size_hint(self) -> int | None:
        """Byte length for literal archives, ``None`` when stored remotely."""
        return len(self.literal) if self.literal is not None else None
