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

from enum import Enum
from typing import Any, Dict, Mapping

from .encoding import encode_binary

# Attribute name -> WebAuthn JSON member name, for every structure we render.
WIRE_NAMES: Mapping[str, str] = {
    # Options
    "challenge": "challenge",
    "timeout": "timeout",
    "extensions": "extensions",
    "rp": "rp",
    "relying_party": "rp",
    "user": "user",
    "pub_key_cred_params": "pubKeyCredParams",
    "exclude_credentials": "excludeCredentials",
    "authenticator_selection": "authenticatorSelection",
    "attestation": "attestation",
    "rp_id": "rpId",
    "allow_credentials": "allowCredentials",
    "user_verification": "userVerification",
    # Entities
    "id": "id",
    "name": "name",
    "icon": "icon",
    "display_name": "displayName",
    "type": "type",
    "alg": "alg",
    "transports": "transports",
    "authenticator_attachment": "authenticatorAttachment",
    "resident_key": "residentKey",
    "require_resident_key": "requireResidentKey",
}

_KNOWN_WIRE_NAMES = frozenset(WIRE_NAMES.values())


def wire_name(name: str) -> str:
    """Get the JSON member name for an attribute.

    Names that already are JSON member names map to themselves, so
    applying this twice gives the same result as applying it once.
    """
    if name in WIRE_NAMES:
        return WIRE_NAMES[name]
    if name in _KNOWN_WIRE_NAMES:
        return name
    raise KeyError(f"No wire name for {name!r}")


def plain(value: Any) -> Any:
    """Turn enum members into their plain values."""
    if isinstance(value, Enum):
        return value.value
    return value


def render(value: Any, encoding: str) -> Any:
    """Render an entity, mapping, list or scalar as plain JSON-compatible data.

    Entities list their members in ``WIRE_FIELDS``, members set
    to None are left out. Mapping keys are kept as given. Binary values
    are encoded as text using ``encoding``.
    """
    if hasattr(type(value), "WIRE_FIELDS"):
        result: Dict[str, Any] = {}
        for name in value.WIRE_FIELDS:
            member = getattr(value, name)
            if member is not None:
                result[wire_name(name)] = render(member, encoding)
        return result
    if isinstance(value, Mapping):
        return {key: render(item, encoding) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [render(item, encoding) for item in value]
    if isinstance(value, (bytes, bytearray, memoryview)):
        return encode_binary(value, encoding)
    return plain(value)


__all__ = ["WIRE_NAMES", "plain", "render", "wire_name"]
