"""Payload encoding, decoding, and inline-vs-cache placement.

Entries are serialized as compact JSON, gzip-compressed, and encoded with the
URL-safe base64 alphabet so they can travel inside a query descriptor.  When
the encoded string is longer than INLINE_PAYLOAD_LIMIT it is stored in the
overflow cache under its SHA-256 hex digest, and the digest travels instead.
"""

import base64
import binascii
import gzip
import hashlib
import json
import logging
import zlib

from inline_table.config import INLINE_PAYLOAD_LIMIT
from inline_table.errors import CompressionFailure, PayloadDecodeError, ReferenceNotFoundError, SerializationFailure
from inline_table.table.cache import OverflowCache
from inline_table.table.patterns import SHA256_HEX_RE

logger = logging.getLogger(__name__)


# ─── Encoding ────────────────────────────────────────────────────────────────


def encode_entries(entries: list[dict]) -> str:
    """Serialize, compress, and base64url-encode *entries*."""
    try:
        entries_json = json.dumps(entries, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise SerializationFailure("Failed to serialize the table.") from exc
    logger.debug("Built the entries JSON: %s", entries_json)

    try:
        # mtime=0 keeps the gzip header, and so the digest, identical across builds
        compressed = gzip.compress(entries_json.encode("utf-8"), mtime=0)
    except (OSError, ValueError, zlib.error) as exc:
        raise CompressionFailure("Failed to compress the table entries.") from exc

    encoded = base64.urlsafe_b64encode(compressed).decode("ascii")
    logger.debug("Compressed and encoded the entries JSON as base64 (%d chars)", len(encoded))
    return encoded


def place_payload(encoded: str, cache: OverflowCache, limit: int = INLINE_PAYLOAD_LIMIT) -> str:
    """Return the payload reference: *encoded* itself, or its digest once stored in *cache*."""
    if len(encoded) <= limit:
        return encoded
    digest = hashlib.sha256(encoded.encode("ascii")).hexdigest()
    logger.debug("Payload is longer than %d characters, storing in cache under %s", limit, digest)
    cache.set(digest, encoded)
    return digest


def encode_payload(entries: list[dict], cache: OverflowCache, limit: int = INLINE_PAYLOAD_LIMIT) -> str:
    """Encode *entries* and return their payload reference."""
    return place_payload(encode_entries(entries), cache, limit)


# ─── Decoding ────────────────────────────────────────────────────────────────


def is_cache_reference(reference: str) -> bool:
    """True if *reference* is a SHA-256 digest rather than an inline payload."""
    return bool(SHA256_HEX_RE.match(reference))


def resolve_reference(reference: str, cache: OverflowCache) -> str:
    """Return the encoded payload a reference stands for."""
    if not is_cache_reference(reference):
        return reference
    encoded = cache.get(reference)
    if encoded is None:
        raise ReferenceNotFoundError(reference)
    return encoded


def decode_entries(encoded: str) -> list[dict]:
    """Inverse of encode_entries."""
    try:
        compressed = base64.urlsafe_b64decode(encoded.encode("ascii"))
        entries = json.loads(gzip.decompress(compressed).decode("utf-8"))
    except (binascii.Error, EOFError, OSError, UnicodeError, ValueError, zlib.error) as exc:
        raise PayloadDecodeError("Failed to decode the table entries.") from exc

    if not isinstance(entries, list) or not all(isinstance(entry, dict) for entry in entries):
        raise PayloadDecodeError("Decoded payload is not a list of entries.")
    return entries
