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

import os
from typing import Callable

from .errors import InsufficientEntropy, ValidationError

DEFAULT_CHALLENGE_LENGTH = 32
MIN_CHALLENGE_LENGTH = 16


class ChallengeGenerator:
    """Produces random challenges for WebAuthn ceremonies.

    :param source: A function returning the requested number of random bytes.
        Must be a cryptographically secure source.
    """

    def __init__(self, source: Callable[[int], bytes] = os.urandom):
        self._source = source

    def generate(self, length: int = DEFAULT_CHALLENGE_LENGTH) -> bytes:
        """Generate a fresh challenge.

        :param length: Number of random bytes, at least 16.
        :return: The challenge bytes.
        """
        if isinstance(length, bool) or not isinstance(length, int):
            raise ValidationError("Challenge length must be an integer")
        if length < MIN_CHALLENGE_LENGTH:
            raise ValidationError(
                f"Challenge length must be at least {MIN_CHALLENGE_LENGTH} bytes"
            )

        try:
            data = self._source(length)
        except (OSError, NotImplementedError) as e:
            raise InsufficientEntropy("Random source unavailable") from e

        received = len(data) if isinstance(data, bytes) else 0
        if received != length:
            raise InsufficientEntropy(
                f"Random source returned {received} of {length} bytes"
            )
        return data


def validate_challenge(challenge: bytes) -> bytes:
    """Check a caller supplied challenge before it is used."""
    if not isinstance(challenge, (bytes, bytearray)):
        raise ValidationError("Challenge must be bytes")
    if len(challenge) < MIN_CHALLENGE_LENGTH:
        raise ValidationError(
            f"Challenge must be at least {MIN_CHALLENGE_LENGTH} bytes long"
        )
    return bytes(challenge)


_generator = ChallengeGenerator()


def generate_challenge(length: int = DEFAULT_CHALLENGE_LENGTH) -> bytes:
    """Generate a challenge using the operating system random source."""
    return _generator.generate(length)


__all__ = [
    "ChallengeGenerator",
    "DEFAULT_CHALLENGE_LENGTH",
    "MIN_CHALLENGE_LENGTH",
    "generate_challenge",
    "validate_challenge",
]
