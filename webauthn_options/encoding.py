# Copyright (c) 2018 Yubico AB
# All rights reserved.
#
#   Redistribution and use in source and binary forms, with or
#   without modification, are permitted provided that the following
#   conditions are met:
#
#    1. Redistributions of source code must retain the above copyright
#       notice, this list of conditions and the following disclaimer.
#    2. Redistributions in binary form must reproduce the above
#       copyright notice, this list of conditions and the following
#       disclaimer in the documentation and/or other materials provided
#       with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE
# COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT
# LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN
# ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

from __future__ import annotations

import base64
from enum import Enum
from typing import Any, Callable, Dict

from fido2.utils import websafe_encode

from .errors import ValidationError

BASE64URL = "base64url"
BASE64 = "base64"


def _standard_encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


_ENCODERS: Dict[str, Callable[[bytes], str]] = {
    BASE64URL: websafe_encode,
    BASE64: _standard_encode,
}

ENCODINGS = tuple(_ENCODERS)


def check_encoding(encoding: Any) -> str:
    """Return the canonical encoding name, or raise ValidationError."""
    if isinstance(encoding, Enum):
        encoding = encoding.value
    if encoding not in _ENCODERS:
        raise ValidationError(
            f'Unsupported encoding "{encoding}", use one of {", ".join(ENCODINGS)}'
        )
    return encoding


def encode_binary(value: Any, encoding: str = BASE64URL) -> Any:
    """Encode binary values as text, leaving already encoded strings alone.

    base64url output carries no padding.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _ENCODERS[check_encoding(encoding)](bytes(value))
    return value


__all__ = ["BASE64", "BASE64URL", "ENCODINGS", "check_encoding", "encode_binary"]
