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

from .entities import CredentialDescriptor, normalize_descriptors
from .options import Options
from .wire import plain

logger = logging.getLogger(__name__)


class RequestOptions(Options):
    """Options for an authentication ceremony, ``PublicKeyCredentialRequestOptions``.

    ``allow`` takes a credential id or a list of them. An explicit
    ``allow_credentials`` list wins over it. With neither, the list is
    empty and any discoverable credential may be used.
    """

    ATTRIBUTES = (
        "challenge",
        "rp_id",
        "allow_credentials",
        "user_verification",
        "timeout",
        "extensions",
    )

    def __init__(
        self,
        rp_id: Optional[str] = None,
        allow_credentials: Any = None,
        allow: Any = None,
        user_verification: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)

        self.rp_id = rp_id or self.configuration.relying_party_id
        self.allow = allow
        self.user_verification = plain(user_verification)
        self._allow_credentials = (
            normalize_descriptors(allow_credentials)
            if allow_credentials is not None
            else None
        )

    @cached_property
    def allow_credentials(self) -> List[CredentialDescriptor]:
        if self._allow_credentials is not None:
            return self._allow_credentials
        if self.allow is not None:
            logger.debug("Expanding allow shorthand into credential descriptors")
        return normalize_descriptors(self.allow)


__all__ = ["RequestOptions"]
