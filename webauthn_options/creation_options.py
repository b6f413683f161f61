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
from functools import cached_property
from typing import Any, List, Optional

from .cose import DEFAULT_REGISTRY, AlgorithmRegistry
from .entities import (
    CredentialDescriptor,
    PublicKeyCredentialParameters,
    coerce_authenticator_selection,
    coerce_parameters,
    coerce_relying_party,
    coerce_user,
    normalize_descriptors,
)
from .options import Options
from .wire import plain

logger = logging.getLogger(__name__)


class CreationOptions(Options):
    """Options for a registration ceremony, ``PublicKeyCredentialCreationOptions``.

    Credential parameters and excluded credentials can be given in full
    or as shorthand:

    * ``algs``: an algorithm name or COSE identifier, or a list of them.
      Without it the configured algorithms are offered.
    * ``exclude``: a credential id or a list of them.

    An explicit ``pub_key_cred_params`` or ``exclude_credentials`` always
    wins over the shorthand, including an explicitly empty list.

    :param user: The user entity, a mapping or an object with ``id``,
        ``name`` and ``display_name``.
    :param rp: The relying party entity. Missing ``id`` and ``name`` are
        taken from the configuration.
    :param registry: Resolves ``algs`` and the configured algorithm names
        to COSE identifiers. It does not choose which algorithms are
        offered: without ``algs`` that is the configuration's
        ``algorithms`` list, as captured when the configuration was made.
        Build the configuration with ``registry.default_names()`` to
        offer a custom registry's default set.
    """

    ATTRIBUTES = (
        "challenge",
        "rp",
        "user",
        "pub_key_cred_params",
        "timeout",
        "exclude_credentials",
        "authenticator_selection",
        "attestation",
        "extensions",
    )

    def __init__(
        self,
        user: Any = None,
        rp: Any = None,
        pub_key_cred_params: Any = None,
        algs: Any = None,
        exclude_credentials: Any = None,
        exclude: Any = None,
        authenticator_selection: Any = None,
        attestation: Optional[str] = None,
        registry: Optional[AlgorithmRegistry] = None,
        **kwargs,
    ):
        self.user = coerce_user(user)
        super().__init__(**kwargs)

        self.rp = coerce_relying_party(
            rp,
            self.configuration.relying_party_id,
            self.configuration.relying_party_name,
        )
        self.algs = algs
        self.exclude = exclude
        self.authenticator_selection = coerce_authenticator_selection(
            authenticator_selection
        )
        self.attestation = plain(attestation)
        self.registry = registry if registry is not None else DEFAULT_REGISTRY

        self._pub_key_cred_params = (
            coerce_parameters(pub_key_cred_params)
            if pub_key_cred_params is not None
            else None
        )
        self._exclude_credentials = (
            normalize_descriptors(exclude_credentials)
            if exclude_credentials is not None
            else None
        )

    @cached_property
    def pub_key_cred_params(self) -> List[PublicKeyCredentialParameters]:
        if self._pub_key_cred_params is not None:
            return self._pub_key_cred_params

        if self.algs is not None:
            source = self.algs
        else:
            source = list(self.configuration.algorithms)
            logger.debug("Offering configured algorithms %s", source)
        return [
            PublicKeyCredentialParameters(alg=entry.identifier)
            for entry in self.registry.resolve(source)
        ]

    @cached_property
    def exclude_credentials(self) -> Optional[List[CredentialDescriptor]]:
        if self._exclude_credentials is not None:
            return self._exclude_credentials
        if self.exclude is None:
            return None
        logger.debug("Expanding exclude shorthand into credential descriptors")
        return normalize_descriptors(self.exclude)


__all__ = ["CreationOptions"]
