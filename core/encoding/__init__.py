"""Encoding module for exported QR regions."""

from core.encoding.base64_encoder import (
    BASE64_ALPHABET,
    PNG_MIME_TYPE,
    EncodedRegion,
    encodeBase64,
    encodeRegion,
    toDataUri
)

__all__ = [
    'BASE64_ALPHABET',
    'PNG_MIME_TYPE',
    'EncodedRegion',
    'encodeBase64',
    'encodeRegion',
    'toDataUri'
]
