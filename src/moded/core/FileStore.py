# moded/core/FileStore.py
"""moded.core.FileStore
======================

Reading documents from disk and writing them back.

Files are read as bytes and decoded explicitly so line separators reach the
`LineBuffer` untouched. Decoding order:

1. strict UTF-8;
2. the encoding `chardet` guesses, when its confidence is at least
   `CHARDET_MIN_CONFIDENCE`;
3. latin-1, which accepts any byte sequence.

The encoding that succeeded is returned to the caller and reused on save.
"""

import logging
import os
from typing import Optional

import chardet

from moded.core.LineBuffer import LineBuffer
from moded.core.exceptions import LoadFailure, SaveFailure

DEFAULT_ENCODING = "utf-8"
FALLBACK_ENCODING = "latin-1"
CHARDET_MIN_CONFIDENCE = 0.75
CHARDET_SAMPLE_SIZE = 1024 * 20


def _read_bytes(path: str) -> bytes:
    if os.path.isdir(path):
        raise LoadFailure(path, "is a directory")
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        raise LoadFailure(path, "no such file") from None
    except PermissionError:
        raise LoadFailure(path, "permission denied") from None
    except OSError as e:
        raise LoadFailure(path, e.strerror or str(e)) from e


def _guess_encoding(raw: bytes) -> Optional[str]:
    result = chardet.detect(raw[:CHARDET_SAMPLE_SIZE])
    encoding_guess = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    logging.debug(
        f"Chardet detected encoding '{encoding_guess}' with confidence {confidence:.2f}"
    )
    if encoding_guess and confidence >= CHARDET_MIN_CONFIDENCE:
        return encoding_guess
    return None


def decode_bytes(raw: bytes) -> tuple[str, str]:
    """Decode *raw* and return ``(text, encoding)``. Never raises."""
    try:
        return raw.decode(DEFAULT_ENCODING), DEFAULT_ENCODING
    except UnicodeDecodeError:
        logging.debug("Content is not valid UTF-8, asking chardet")

    guess = _guess_encoding(raw)
    if guess:
        try:
            return raw.decode(guess), guess
        except (UnicodeDecodeError, LookupError) as e:
            logging.warning(f"Decoding with guessed encoding '{guess}' failed: {e}")

    return raw.decode(FALLBACK_ENCODING), FALLBACK_ENCODING


def read_text(path: str) -> tuple[str, str]:
    """Read the file at *path*.

    Returns:
        tuple[str, str]: The decoded text and the encoding used.

    Raises:
        LoadFailure: The path is missing, a directory, or unreadable.
    """
    raw = _read_bytes(path)
    text, encoding = decode_bytes(raw)
    logging.info(f"Read '{path}' ({len(raw)} bytes) using encoding '{encoding}'")
    return text, encoding


def load_buffer(path: str) -> tuple[LineBuffer, str]:
    """Read *path* into a new `LineBuffer`. Raises `LoadFailure`."""
    text, encoding = read_text(path)
    return LineBuffer.load(text), encoding


def write_text(path: str, text: str, encoding: str = DEFAULT_ENCODING) -> int:
    """Overwrite *path* with *text* encoded as *encoding*.

    Returns:
        int: Number of bytes written.

    Raises:
        SaveFailure: The text cannot be encoded or the file cannot be written.
    """
    if os.path.isdir(path):
        raise SaveFailure(path, "is a directory")
    try:
        data = text.encode(encoding)
    except (UnicodeEncodeError, LookupError) as e:
        raise SaveFailure(path, f"cannot encode as {encoding}: {e}") from e

    try:
        with open(path, "wb") as f:
            f.write(data)
    except PermissionError:
        raise SaveFailure(path, "permission denied") from None
    except OSError as e:
        raise SaveFailure(path, e.strerror or str(e)) from e

    logging.debug(f"Wrote {len(data)} bytes to '{path}' with encoding '{encoding}'")
    return len(data)
