# textshift.py
# TextShift — Base Library
# Base64 / ROT13 / Caesar (code-point) text transforms behind one encrypt/decrypt dispatch.
#
# NOTE: This is NOT encryption. These are classical, reversible obfuscation schemes.
#
# Algorithms:
#   base64 => UTF-8 bytes <-> standard Base64 (padded)
#   rot13  => Latin letters rotated by 13 within their case (self-inverse)
#   caesar => every code point shifted by +shift / -shift (no alphabet wrap)

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

log = logging.getLogger(__name__)


# ============================================================
# Errors
# ============================================================

class TextShiftError(Exception):
    """Base exception for all TextShift failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptyInputError(TextShiftError):
    """Text missing or empty."""


class UnknownAlgorithmError(TextShiftError):
    """Algorithm is not one of the registered names."""


class InvalidShiftError(TextShiftError, ValueError):
    """Caesar shift missing or not an integer."""


class DecodeError(TextShiftError, ValueError):
    """Base64 input malformed, or decoded bytes are not UTF-8."""


class GenericFailure(TextShiftError):
    """Unexpected fault while transforming; reported with a generic message."""


# ============================================================
# Request / Result
# ============================================================

ENCRYPT = "encrypt"
DECRYPT = "decrypt"


@dataclass(frozen=True)
class TransformRequest:
    text: Optional[str]
    algorithm: Optional[str]
    shift: Union[str, int, float, None] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransformRequest":
        # Form data shape: {"text": ..., "algorithm": ..., "shift": ...}
        return cls(
            text=data.get("text"),
            algorithm=data.get("algorithm"),
            shift=data.get("shift"),
        )


@dataclass(frozen=True)
class TransformResult:
    """Outcome of one encrypt/decrypt call.

    Exactly one of ``result`` / ``error`` is set. ``error_type`` carries the
    error class name (e.g. ``"DecodeError"``) alongside ``error``.
    """

    result: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("TransformResult needs exactly one of result / error.")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str) -> "TransformResult":
        return cls(result=text)

    @classmethod
    def failure(cls, exc: TextShiftError) -> "TransformResult":
        return cls(error=exc.message, error_type=type(exc).__name__)


# ============================================================
# Base64 codec
# ============================================================

_B64_WS = re.compile(r"\s+")
_B64_URLSAFE = str.maketrans("-_", "+/")


def base64_encode(text: str) -> str:
    """UTF-8 bytes -> standard Base64 (with '=' padding)."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def base64_decode(text: str) -> str:
    """Standard Base64 -> UTF-8 text.

    Tolerates whitespace, missing padding and the URL-safe alphabet; anything
    else that is not Base64 raises DecodeError. Decoded bytes must be valid
    UTF-8 (no replacement characters).
    """
    s = _B64_WS.sub("", text).translate(_B64_URLSAFE)
    s = s.rstrip("=")
    if len(s) % 4 == 1:
        raise DecodeError("Invalid Base64 input.")
    s += "=" * (-len(s) % 4)

    try:
        raw = base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError("Invalid Base64 input.") from e

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError("Decoded data is not valid UTF-8 text.") from e


# ============================================================
# ROT13
# ============================================================

def _rot13_char(ch: str) -> str:
    if "a" <= ch <= "z":
        return chr((ord(ch) - 97 + 13) % 26 + 97)
    if "A" <= ch <= "Z":
        return chr((ord(ch) - 65 + 13) % 26 + 65)
    return ch


def rot13(text: str) -> str:
    # Self-inverse: the same call encrypts and decrypts.
    return "".join(_rot13_char(c) for c in text)


# ============================================================
# Caesar (code-point shift)
# ============================================================

# Python str holds code points in [0, 0x110000); shifting wraps over that whole
# range so every integer shift stays invertible.
CODE_POINT_LIMIT = 0x110000

_SHIFT_RE = re.compile(r"[+-]?[0-9]+")

# int() refuses digit strings past sys.get_int_max_str_digits() (4300 by default)
_MAX_EXACT_DIGITS = 1000


def _reduce_digits(s: str) -> int:
    # Only the shift modulo CODE_POINT_LIMIT matters to caesar().
    sign = -1 if s[0] == "-" else 1
    acc = 0
    for d in s.lstrip("+-"):
        acc = (acc * 10 + ord(d) - 48) % CODE_POINT_LIMIT
    return sign * acc


def parse_shift(value: Union[str, int, float, None]) -> int:
    if isinstance(value, bool):
        raise InvalidShiftError("Invalid shift value for Caesar cipher.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        # gr.Number(precision=0) still hands back floats on some versions
        return int(value)
    if isinstance(value, str):
        s = value.strip()
        if _SHIFT_RE.fullmatch(s):
            if len(s) > _MAX_EXACT_DIGITS:
                return _reduce_digits(s)
            return int(s)
    raise InvalidShiftError("Invalid shift value for Caesar cipher.")


def caesar(text: str, shift: int, inverse: bool = False) -> str:
    full = -shift if inverse else shift
    return "".join(chr((ord(c) + full) % CODE_POINT_LIMIT) for c in text)


# ============================================================
# Dispatch
# ============================================================

Codec = Callable[[str, int], str]

# name -> (encrypt, decrypt); shift is ignored by base64/rot13
ALGORITHMS: Dict[str, Tuple[Codec, Codec]] = {
    "base64": (lambda t, _s: base64_encode(t), lambda t, _s: base64_decode(t)),
    "rot13": (lambda t, _s: rot13(t), lambda t, _s: rot13(t)),
    "caesar": (lambda t, s: caesar(t, s), lambda t, s: caesar(t, s, inverse=True)),
}

_GENERIC_MESSAGES = {
    ENCRYPT: "Encryption failed.",
    DECRYPT: "Decryption failed. The provided text might be invalid or not correctly encoded.",
}


def _as_request(request: Union[TransformRequest, Mapping[str, Any]]) -> TransformRequest:
    if isinstance(request, TransformRequest):
        return request
    return TransformRequest.from_mapping(request)


def _run(req: TransformRequest, direction: str) -> str:
    if not req.text:
        raise EmptyInputError(f"Please provide text to {direction}.")

    codecs = ALGORITHMS.get(req.algorithm) if isinstance(req.algorithm, str) else None
    if codecs is None:
        noun = "encryption" if direction == ENCRYPT else "decryption"
        raise UnknownAlgorithmError(f"Invalid {noun} algorithm.")

    shift = parse_shift(req.shift) if req.algorithm == "caesar" else 0

    log.debug("textshift: %s %s (%d chars)", direction, req.algorithm, len(req.text))
    fn = codecs[0] if direction == ENCRYPT else codecs[1]
    return fn(req.text, shift)


def transform(request: Union[TransformRequest, Mapping[str, Any]], direction: str) -> TransformResult:
    if direction not in (ENCRYPT, DECRYPT):
        raise ValueError(f"Unknown direction {direction!r}")

    try:
        req = _as_request(request)
        return TransformResult.success(_run(req, direction))
    except TextShiftError as e:
        log.debug("textshift: %s rejected: %s: %s", direction, type(e).__name__, e.message)
        return TransformResult.failure(e)
    except Exception:
        log.exception("textshift: unexpected failure during %s", direction)
        return TransformResult.failure(GenericFailure(_GENERIC_MESSAGES[direction]))


def encrypt(request: Union[TransformRequest, Mapping[str, Any]]) -> TransformResult:
    return transform(request, ENCRYPT)


def decrypt(request: Union[TransformRequest, Mapping[str, Any]]) -> TransformResult:
    return transform(request, DECRYPT)
