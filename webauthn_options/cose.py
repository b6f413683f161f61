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

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, List, Sequence

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from .errors import UnknownAlgorithm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlgorithmEntry:
    """A COSE signature algorithm.

    :param name: The algorithm name as listed in the COSE registry.
    :param identifier: The COSE identifier of the algorithm.
    """

    name: str
    identifier: int


# COSE algorithm numbering, see the IANA "COSE Algorithms" registry.
BUILTIN_ALGORITHMS: Sequence[AlgorithmEntry] = (
    AlgorithmEntry("ES256", -7),
    AlgorithmEntry("EdDSA", -8),
    AlgorithmEntry("ES384", -35),
    AlgorithmEntry("ES512", -36),
    AlgorithmEntry("PS256", -37),
    AlgorithmEntry("PS384", -38),
    AlgorithmEntry("PS512", -39),
    AlgorithmEntry("ES256K", -47),
    AlgorithmEntry("ML-DSA-44", -48),
    AlgorithmEntry("ML-DSA-65", -49),
    AlgorithmEntry("ML-DSA-87", -50),
    AlgorithmEntry("RS256", -257),
    AlgorithmEntry("RS384", -258),
    AlgorithmEntry("RS512", -259),
    AlgorithmEntry("RS1", -65535),
)

DEFAULT_ALGORITHMS: Sequence[str] = ("ES256", "PS256", "RS256")

_PSS_ALGORITHMS = frozenset(["PS256"])


@lru_cache(maxsize=1)
def pss_supported() -> bool:
    """Check if the cryptography backend can handle RSASSA-PSS signatures."""
    backend = default_backend()
    check = getattr(backend, "rsa_padding_supported", None)
    if check is None:
        return hasattr(padding, "PSS")
    return bool(
        check(
            padding.PSS(
                mgf=padding.MGF1(hashes.SHA256()), salt_length=padding.PSS.MAX_LENGTH
            )
        )
    )


class AlgorithmRegistry:
    """Maps COSE algorithm names and identifiers to each other.

    :param entries: The algorithms to register initially.
    :param pss_probe: Capability check deciding if PS256 is part of the
        default set.
    """

    def __init__(
        self,
        entries: Iterable[AlgorithmEntry] = BUILTIN_ALGORITHMS,
        pss_probe: Callable[[], bool] = pss_supported,
    ):
        self._by_name: Dict[str, AlgorithmEntry] = {}
        self._by_identifier: Dict[int, AlgorithmEntry] = {}
        self.pss_probe = pss_probe
        for entry in entries:
            self.register(entry.name, entry.identifier)

    def register(self, name: str, identifier: int) -> AlgorithmEntry:
        """Add an algorithm to the registry.

        Registering the same pair twice is a no-op.

        :param name: The algorithm name.
        :param identifier: The COSE identifier of the algorithm.
        :return: The registered entry.
        """
        if not isinstance(name, str) or not name:
            raise TypeError("Algorithm name must be a non-empty string")
        if isinstance(identifier, bool) or not isinstance(identifier, int):
            raise TypeError("Algorithm identifier must be an integer")

        entry = AlgorithmEntry(name, identifier)
        for existing in (
            self._by_name.get(name),
            self._by_identifier.get(identifier),
        ):
            if existing is not None and existing != entry:
                raise ValueError(
                    f"Cannot register {name} ({identifier}), "
                    f"conflicts with {existing.name} ({existing.identifier})"
                )
        self._by_name[name] = entry
        self._by_identifier[identifier] = entry
        return entry

    def by_name(self, name: str) -> AlgorithmEntry:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownAlgorithm(name) from None

    def by_identifier(self, identifier: int) -> AlgorithmEntry:
        try:
            return self._by_identifier[identifier]
        except KeyError:
            raise UnknownAlgorithm(identifier) from None

    def lookup(self, value: Any) -> AlgorithmEntry:
        """Resolve a single name, identifier or entry."""
        if isinstance(value, AlgorithmEntry):
            entry = self.by_identifier(value.identifier)
            if entry != value:
                raise UnknownAlgorithm(value)
            return entry
        if isinstance(value, str):
            return self.by_name(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return self.by_identifier(value)
        raise UnknownAlgorithm(value)

    def resolve(self, value: Any) -> List[AlgorithmEntry]:
        """Resolve algorithm shorthand into an ordered list of entries.

        A single name or identifier gives a one element list. Sequences
        are resolved element-wise, keeping the first occurrence of each
        identifier.

        :param value: A name, an identifier, or a sequence of either.
        :return: The resolved entries, in input order.
        """
        if isinstance(value, (str, int, AlgorithmEntry)):
            return [self.lookup(value)]
        if isinstance(value, (bytes, bytearray)) or not isinstance(value, Iterable):
            raise UnknownAlgorithm(value)

        entries: List[AlgorithmEntry] = []
        seen = set()
        for item in value:
            entry = self.lookup(item)
            if entry.identifier not in seen:
                seen.add(entry.identifier)
                entries.append(entry)
        return entries

    def default_names(self) -> List[str]:
        """Get the names of the algorithms offered when nothing is configured."""
        names = []
        for name in DEFAULT_ALGORITHMS:
            if name in _PSS_ALGORITHMS and not self.pss_probe():
                logger.debug("RSA-PSS is not supported, omitting %s", name)
                continue
            names.append(name)
        return names

    def default_entries(self) -> List[AlgorithmEntry]:
        return self.resolve(self.default_names())

    def __contains__(self, value: Any) -> bool:
        try:
            self.lookup(value)
        except UnknownAlgorithm:
            return False
        return True


DEFAULT_REGISTRY = AlgorithmRegistry()


def resolve(value: Any) -> List[AlgorithmEntry]:
    """Resolve algorithm shorthand using the default registry."""
    return DEFAULT_REGISTRY.resolve(value)


def default_algorithm_names() -> List[str]:
    """Get the default algorithm names from the default registry."""
    return DEFAULT_REGISTRY.default_names()


__all__ = [
    "AlgorithmEntry",
    "AlgorithmRegistry",
    "BUILTIN_ALGORITHMS",
    "DEFAULT_ALGORITHMS",
    "DEFAULT_REGISTRY",
    "default_algorithm_names",
    "pss_supported",
    "resolve",
]
