"""
Helpers for turning player input into 32-byte run seeds and back.
"""

import secrets
import string

from .errors import ConfigurationError
from .procgen.streams import SEED_SIZE

SEED_ALPHABET = string.ascii_letters + string.digits
PAD_BYTE = b" "


def seed_from_text(text: str) -> bytes:
    """Encode typed seed text: UTF-8, truncated to 32 bytes, left-padded with spaces."""

    raw = text.encode("utf-8")[:SEED_SIZE]
    return raw.rjust(SEED_SIZE, PAD_BYTE)


def seed_from_int(value: int) -> bytes:
    """Big-endian 32-byte encoding of a non-negative integer."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"Integer seed expected, got {value!r}")
    if not 0 <= value < 1 << (8 * SEED_SIZE):
        raise ConfigurationError(f"Integer seed out of range: {value}")
    return value.to_bytes(SEED_SIZE, "big")


def random_seed() -> bytes:
    """32 random alphanumeric bytes, printable so the player can share them."""
    return "".join(secrets.choice(SEED_ALPHABET) for _ in range(SEED_SIZE)).encode("ascii")


def seed_to_text(seed: bytes) -> str:
    """Display form of a seed; hex when the bytes are not readable text."""

    try:
        text = seed.decode("utf-8")
    except UnicodeDecodeError:
        return seed.hex()

    stripped = text.lstrip(PAD_BYTE.decode("ascii"))
    if not stripped or not stripped.isprintable():
        return seed.hex()
    return stripped
