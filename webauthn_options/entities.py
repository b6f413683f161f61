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

import dataclasses
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, List, Mapping, Optional, Sequence, Union

from fido2.webauthn import PublicKeyCredentialType

from .errors import MissingCredentialId, MissingUser, ValidationError
from .wire import WIRE_NAMES, plain

PUBLIC_KEY: str = PublicKeyCredentialType.PUBLIC_KEY.value

BinaryId = Union[bytes, str]

_BINARY_TYPES = (bytes, bytearray, memoryview)


@dataclass
class RelyingParty:
    """The relying party entity, ``rp`` in creation options."""

    WIRE_FIELDS: ClassVar[Sequence[str]] = ("id", "name", "icon")

    id: Optional[str] = None
    name: Optional[str] = None
    icon: Optional[str] = None


@dataclass
class User:
    """The user account entity of a registration ceremony.

    :param id: Opaque user handle, unique per user. Bytes are encoded on
        output, strings are sent as given.
    :param name: Account name, such as an email address.
    :param display_name: Human friendly name.
    :param icon: Optional icon URL.
    """

    WIRE_FIELDS: ClassVar[Sequence[str]] = ("id", "name", "display_name", "icon")

    id: BinaryId
    name: str
    display_name: str
    icon: Optional[str] = None


@dataclass
class PublicKeyCredentialParameters:
    WIRE_FIELDS: ClassVar[Sequence[str]] = ("type", "alg")

    alg: int
    type: str = PUBLIC_KEY


@dataclass
class CredentialDescriptor:
    """A reference to a registered credential.

    ``transports`` is left out of the output entirely when not known.
    """

    WIRE_FIELDS: ClassVar[Sequence[str]] = ("type", "id", "transports")

    id: BinaryId
    type: str = PUBLIC_KEY
    transports: Optional[List[str]] = None


@dataclass
class AuthenticatorSelection:
    WIRE_FIELDS: ClassVar[Sequence[str]] = (
        "authenticator_attachment",
        "resident_key",
        "require_resident_key",
        "user_verification",
    )

    authenticator_attachment: Optional[str] = None
    resident_key: Optional[str] = None
    user_verification: Optional[str] = None
    require_resident_key: Optional[bool] = None


def _get(value: Any, name: str) -> Any:
    """Read a member from a mapping or an object.

    Mappings may use either attribute names or JSON member names, which
    covers plain dicts as well as the ``fido2.webauthn`` data classes.
    """
    if isinstance(value, Mapping) and not dataclasses.is_dataclass(value):
        if name in value:
            return value[name]
        return value.get(WIRE_NAMES.get(name, name))
    return getattr(value, name, None)


def _is_structured(value: Any) -> bool:
    return isinstance(value, Mapping) or hasattr(value, "id")


def _is_scalar_id(value: Any) -> bool:
    return isinstance(value, (str,) + _BINARY_TYPES)


def _binary_id(value: Any) -> BinaryId:
    if isinstance(value, _BINARY_TYPES):
        return bytes(value)
    return value


def coerce_relying_party(
    value: Any, default_id: Optional[str] = None, default_name: Optional[str] = None
) -> RelyingParty:
    """Build the relying party entity, filling blanks from the defaults."""
    if value is None:
        value = {}
    return RelyingParty(
        id=_get(value, "id") or default_id,
        name=_get(value, "name") or default_name,
        icon=_get(value, "icon"),
    )


def coerce_user(value: Any) -> User:
    """Build the user entity, raising MissingUser if anything required is absent."""
    if value is None:
        raise MissingUser()

    user_id = _get(value, "id")
    if user_id is None or (_is_scalar_id(user_id) and len(user_id) == 0):
        raise MissingUser("id")
    if not _is_scalar_id(user_id):
        raise ValidationError("User id must be bytes or a string")
    name = _get(value, "name")
    if not name:
        raise MissingUser("name")
    display_name = _get(value, "display_name")
    if not display_name:
        raise MissingUser("display_name")

    return User(
        id=_binary_id(user_id),
        name=name,
        display_name=display_name,
        icon=_get(value, "icon"),
    )


def coerce_descriptor(value: Any) -> CredentialDescriptor:
    """Build a credential descriptor from a scalar id or a structured value."""
    if _is_scalar_id(value):
        credential_id, type_, transports = value, None, None
    else:
        credential_id = _get(value, "id")
        type_ = _get(value, "type")
        transports = _get(value, "transports")
        if isinstance(transports, str):
            transports = [transports]

    if credential_id is None or (
        _is_scalar_id(credential_id) and len(credential_id) == 0
    ):
        raise MissingCredentialId(value)
    if not _is_scalar_id(credential_id):
        raise ValidationError("Credential id must be bytes or a string")

    return CredentialDescriptor(
        id=_binary_id(credential_id),
        type=plain(type_) or PUBLIC_KEY,
        transports=None if transports is None else [plain(t) for t in transports],
    )


def normalize_descriptors(value: Any) -> List[CredentialDescriptor]:
    """Expand credential shorthand into a list of descriptors.

    ``None`` gives an empty list, a single id gives one descriptor, a
    sequence gives one descriptor per element in the same order.
    Structured elements keep their ``type`` (default ``"public-key"``)
    and ``transports``.

    :param value: A credential id, a descriptor, or a sequence of either.
    :return: A new list of descriptors.
    """
    if value is None:
        return []
    if _is_scalar_id(value) or _is_structured(value):
        return [coerce_descriptor(value)]
    if not isinstance(value, Iterable):
        raise ValidationError(f"Cannot use {type(value).__name__} as credentials")
    return [coerce_descriptor(item) for item in value]


def coerce_parameters(value: Any) -> List[PublicKeyCredentialParameters]:
    """Copy an explicit list of ``{type, alg}`` parameters."""
    params = []
    for item in value:
        alg = _get(item, "alg")
        if isinstance(alg, bool) or not isinstance(alg, int):
            raise ValidationError(f"Invalid credential parameter {item!r}")
        params.append(
            PublicKeyCredentialParameters(
                alg=alg, type=plain(_get(item, "type")) or PUBLIC_KEY
            )
        )
    return params


def coerce_authenticator_selection(value: Any) -> Optional[AuthenticatorSelection]:
    if value is None:
        return None
    return AuthenticatorSelection(
        authenticator_attachment=plain(_get(value, "authenticator_attachment")),
        resident_key=plain(_get(value, "resident_key")),
        user_verification=plain(_get(value, "user_verification")),
        require_resident_key=_get(value, "require_resident_key"),
    )


__all__ = [
    "AuthenticatorSelection",
    "CredentialDescriptor",
    "PUBLIC_KEY",
    "PublicKeyCredentialParameters",
    "RelyingParty",
    "User",
    "coerce_authenticator_selection",
    "coerce_descriptor",
    "coerce_parameters",
    "coerce_relying_party",
    "coerce_user",
    "normalize_descriptors",
]
