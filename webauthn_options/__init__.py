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

from typing import Optional

from .config import Configuration
from .cose import AlgorithmEntry, AlgorithmRegistry
from .creation_options import CreationOptions
from .entities import (
    AuthenticatorSelection,
    CredentialDescriptor,
    PublicKeyCredentialParameters,
    RelyingParty,
    User,
    normalize_descriptors,
)
from .errors import (
    EntropyError,
    InsufficientEntropy,
    MissingCredentialId,
    MissingUser,
    ResolutionError,
    UnknownAlgorithm,
    ValidationError,
    WebAuthnOptionsError,
)
from .options import Options
from .request_options import RequestOptions

__version__ = "1.0.0"


def create_options(encoding: Optional[str] = None, **kwargs) -> CreationOptions:
    """Build options for ``navigator.credentials.create()``."""
    return CreationOptions(encoding=encoding, **kwargs)


def get_options(encoding: Optional[str] = None, **kwargs) -> RequestOptions:
    """Build options for ``navigator.credentials.get()``."""
    return RequestOptions(encoding=encoding, **kwargs)


__all__ = [
    "AlgorithmEntry",
    "AlgorithmRegistry",
    "AuthenticatorSelection",
    "Configuration",
    "CreationOptions",
    "CredentialDescriptor",
    "EntropyError",
    "InsufficientEntropy",
    "MissingCredentialId",
    "MissingUser",
    "Options",
    "PublicKeyCredentialParameters",
    "RelyingParty",
    "RequestOptions",
    "ResolutionError",
    "UnknownAlgorithm",
    "User",
    "ValidationError",
    "WebAuthnOptionsError",
    "create_options",
    "get_options",
    "normalize_descriptors",
]
