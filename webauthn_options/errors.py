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

from typing import Any


class WebAuthnOptionsError(Exception):
    """Base exception for errors raised while assembling ceremony options."""


class ValidationError(WebAuthnOptionsError, ValueError):
    """A required value is missing or a given value is malformed."""


class MissingUser(ValidationError):
    """Creation options were requested without a complete user entity."""

    def __init__(self, field: str = "user"):
        super().__init__(
            "User information is required"
            if field == "user"
            else f'User "{field}" is required'
        )
        self.field = field


class MissingCredentialId(ValidationError):
    """A structured credential descriptor has no id."""

    def __init__(self, descriptor: Any = None):
        super().__init__("Credential descriptor is missing an id")
        self.descriptor = descriptor


class ResolutionError(WebAuthnOptionsError, LookupError):
    """A symbolic value could not be resolved."""


class UnknownAlgorithm(ResolutionError):
    """The algorithm name or COSE identifier is not registered."""

    def __init__(self, algorithm: Any):
        super().__init__(f'Unknown COSE algorithm "{algorithm}"')
        self.algorithm = algorithm


class EntropyError(WebAuthnOptionsError):
    """The random source failed."""


class InsufficientEntropy(EntropyError):
    """The operating system could not supply enough random bytes."""


__all__ = [
    "WebAuthnOptionsError",
    "ValidationError",
    "MissingUser",
    "MissingCredentialId",
    "ResolutionError",
    "UnknownAlgorithm",
    "EntropyError",
    "InsufficientEntropy",
]
