"""
Base64 Encoder Module.

Standard RFC 4648 base64 (alphabet A-Z a-z 0-9 + /, '=' padding,
no line wrapping) and data URI construction for exported PNG regions.
"""

from dataclasses import dataclass


BASE64_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789+/"
)

PNG_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class EncodedRegion:
    """
    PNG image of an extracted region in its exportable forms.

    Attributes:
        pngBytes: Raw PNG file content.
        base64: Base64 text of pngBytes.
        dataUri: "data:image/png;base64,<base64>".
    """
    pngBytes: bytes
    base64: str
    dataUri: str


def encodeBase64(data: bytes) -> str:
    """
    Encode bytes as standard base64 text.

    Input is consumed in 3-byte groups, each producing 4 characters.
    A trailing group of 1 byte ends with "==", of 2 bytes with "=".

    Args:
        data: Bytes to encode.

    Returns:
        str: Base64 text.
    """
    data = bytes(data)
    chars = []
    fullLength = len(data) - len(data) % 3

    for i in range(0, fullLength, 3):
        group = (data[i] << 16) | (data[i + 1] << 8) | data[i + 2]
        chars.append(BASE64_ALPHABET[(group >> 18) & 0x3F])
        chars.append(BASE64_ALPHABET[(group >> 12) & 0x3F])
        chars.append(BASE64_ALPHABET[(group >> 6) & 0x3F])
        chars.append(BASE64_ALPHABET[group & 0x3F])

    remainder = len(data) - fullLength
    if remainder == 1:
        group = data[fullLength] << 16
        chars.append(BASE64_ALPHABET[(group >> 18) & 0x3F])
        chars.append(BASE64_ALPHABET[(group >> 12) & 0x3F])
        chars.append("==")
    elif remainder == 2:
        group = (data[fullLength] << 16) | (data[fullLength + 1] << 8)
        chars.append(BASE64_ALPHABET[(group >> 18) & 0x3F])
        chars.append(BASE64_ALPHABET[(group >> 12) & 0x3F])
        chars.append(BASE64_ALPHABET[(group >> 6) & 0x3F])
        chars.append("=")

    return "".join(chars)


def toDataUri(payload: str, mimeType: str = PNG_MIME_TYPE) -> str:
    """Build a base64 data URI from already-encoded text."""
    return f"data:{mimeType};base64,{payload}"


def encodeRegion(pngBytes: bytes) -> EncodedRegion:
    """
    Wrap PNG bytes into an EncodedRegion.

    Args:
        pngBytes: PNG file content of the cropped region.

    Returns:
        EncodedRegion with base64 text and data URI.
    """
    text = encodeBase64(pngBytes)
    return EncodedRegion(pngBytes=bytes(pngBytes), base64=text, dataUri=toDataUri(text))
