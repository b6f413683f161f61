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

import json
import threading
from typing import Any, ClassVar, Dict, Mapping, Optional, Sequence

from .challenge import ChallengeGenerator, validate_challenge
from .config import Configuration
from .encoding import check_encoding
from .errors import ValidationError
from .wire import render, wire_name

_default_generator = ChallengeGenerator()


class Options:
    """Parameters shared by the registration and authentication ceremonies.

    :param timeout: Client timeout in milliseconds, defaults to the
        configured timeout.
    :param extensions: Client extension inputs. Binary values in them are
        encoded like every other binary value.
    :param encoding: Text encoding of binary values, ``"base64url"`` or
        ``"base64"``. Defaults to the configured encoding.
    :param challenge: Optional caller-chosen challenge, at least 16 bytes.
        A random one is generated on first access otherwise.
    :param configuration: The relying party defaults to read from.
    :param challenge_generator: Source of random challenges.
    """

    ATTRIBUTES: ClassVar[Sequence[str]] = ("challenge", "timeout", "extensions")

    def __init__(
        self,
        timeout: Optional[int] = None,
        extensions: Optional[Mapping[str, Any]] = None,
        encoding: Optional[str] = None,
        challenge: Optional[bytes] = None,
        configuration: Optional[Configuration] = None,
        challenge_generator: Optional[ChallengeGenerator] = None,
    ):
        self.configuration = (
            configuration if configuration is not None else Configuration()
        )
        self.encoding = check_encoding(
            encoding if encoding is not None else self.configuration.encoding
        )

        if timeout is None:
            timeout = self.configuration.timeout
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise ValidationError(f"Timeout must be a positive integer, got {timeout!r}")
        self.timeout = timeout

        self.extensions = dict(extensions) if extensions is not None else None
        self._challenge = validate_challenge(challenge) if challenge is not None else None
        self._challenge_generator = challenge_generator or _default_generator
        self._challenge_lock = threading.Lock()

    @property
    def challenge(self) -> bytes:
        """The raw challenge, generated once on first access."""
        if self._challenge is None:
            with self._challenge_lock:
                if self._challenge is None:
                    self._challenge = self._challenge_generator.generate(
                        self.configuration.challenge_length
                    )
        return self._challenge

    def to_wire(self) -> Dict[str, Any]:
        """Render the options as the WebAuthn JSON structure.

        Members without a value are left out, binary values are encoded
        using this instance's encoding.
        """
        result: Dict[str, Any] = {}
        for name in self.ATTRIBUTES:
            value = getattr(self, name)
            if value is not None:
                result[wire_name(name)] = render(value, self.encoding)
        return result

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_wire(), **kwargs)

    def __repr__(self):
        return f"{type(self).__name__}(timeout={self.timeout}, encoding={self.encoding!r})"


__all__ = ["Options"]
