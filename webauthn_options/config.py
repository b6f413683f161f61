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

"""Process-wide defaults consumed when building ceremony options."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from .challenge import DEFAULT_CHALLENGE_LENGTH, MIN_CHALLENGE_LENGTH
from .cose import default_algorithm_names
from .encoding import BASE64URL, check_encoding
from .errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120000

ENV_PREFIX = "FIDO_SERVER_"


@dataclass
class Configuration:
    """Relying party defaults shared by all options built with it.

    The options read this object, they never modify it. Changes to
    ``algorithms`` are seen by options whose credential parameters have
    not been read yet.
    """

    relying_party_id: Optional[str] = None
    relying_party_name: Optional[str] = None
    default_timeout_ms: Optional[int] = DEFAULT_TIMEOUT
    algorithms: List[Union[str, int]] = field(default_factory=default_algorithm_names)
    encoding: str = BASE64URL
    challenge_length: int = DEFAULT_CHALLENGE_LENGTH

    def __post_init__(self):
        self.encoding = check_encoding(self.encoding)
        if isinstance(self.challenge_length, bool) or not isinstance(
            self.challenge_length, int
        ):
            raise ValidationError(
                f"Challenge length must be an integer, got {self.challenge_length!r}"
            )
        if self.challenge_length < MIN_CHALLENGE_LENGTH:
            raise ValidationError(
                f"Challenge length must be at least {MIN_CHALLENGE_LENGTH} bytes"
            )

    @property
    def timeout(self) -> int:
        """The configured timeout, or the protocol default when unset."""
        if self.default_timeout_ms is None:
            return DEFAULT_TIMEOUT
        return self.default_timeout_ms

    @classmethod
    def from_mapping(
        cls, config: Mapping[str, Any], prefix: str = ENV_PREFIX
    ) -> Configuration:
        """Create a configuration from ``FIDO_SERVER_*`` style keys.

        Works with ``os.environ`` as well as a Flask ``app.config``. Keys
        that are missing or blank keep their defaults.
        """
        kwargs: dict = {}

        rp_id = _clean(config.get(prefix + "RP_ID"))
        if rp_id is not None:
            kwargs["relying_party_id"] = rp_id
        rp_name = _clean(config.get(prefix + "RP_NAME"))
        if rp_name is not None:
            kwargs["relying_party_name"] = rp_name

        timeout = _parse_int(prefix + "TIMEOUT", config.get(prefix + "TIMEOUT"))
        if timeout is not None:
            kwargs["default_timeout_ms"] = timeout
        length = _parse_int(
            prefix + "CHALLENGE_LENGTH", config.get(prefix + "CHALLENGE_LENGTH")
        )
        if length is not None:
            kwargs["challenge_length"] = length

        algorithms = _parse_algorithms(config.get(prefix + "ALGORITHMS"))
        if algorithms is not None:
            kwargs["algorithms"] = algorithms
        encoding = _clean(config.get(prefix + "ENCODING"))
        if encoding is not None:
            kwargs["encoding"] = encoding.lower()

        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Configuration:
        """Create a configuration from the process environment."""
        configuration = cls.from_mapping(os.environ if environ is None else environ)
        logger.debug(
            "Loaded relying party configuration from environment (rp_id=%s)",
            configuration.relying_party_id,
        )
        return configuration


def _clean(raw_value: Any) -> Optional[str]:
    if raw_value is None:
        return None
    value = str(raw_value).strip()
    return value or None


def _parse_int(name: str, raw_value: Any) -> Optional[int]:
    if isinstance(raw_value, int) and not isinstance(raw_value, bool):
        return raw_value
    value = _clean(raw_value)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got {value!r}") from None


def _parse_algorithms(raw_value: Any) -> Optional[List[Union[str, int]]]:
    """Normalise a comma or newline separated list of algorithms."""
    if raw_value is None:
        return None
    if isinstance(raw_value, str):
        components = [c.strip() for c in re.split(r"[,;\n]+", raw_value)]
    else:
        components = list(raw_value)

    algorithms: List[Union[str, int]] = []
    for component in components:
        if isinstance(component, str):
            if not component:
                continue
            if re.fullmatch(r"-?\d+", component):
                algorithms.append(int(component))
                continue
        algorithms.append(component)
    if not algorithms:
        return None
    return algorithms


__all__ = ["Configuration", "DEFAULT_TIMEOUT", "ENV_PREFIX"]
