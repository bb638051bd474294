"""Connection settings for the HarperDB client."""

import base64
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .exceptions import ConfigurationError
from .utils import UNSET

MISSING_AUTH_MESSAGE = (
    "Either a set of username and password or a token is required "
    "to authenticate with HarperDB."
)
PARTIAL_CREDENTIALS_MESSAGE = (
    "Both username and password are required to authenticate with HarperDB."
)


@dataclass(frozen=True)
class ClientConfig:
    """Endpoint and credentials used for every request.

    Either ``token`` or both ``username`` and ``password`` must be given.
    When a token is given it takes precedence over the credentials. ``None``
    and ``""`` count as not given.

    Args:
        url: The HarperDB operations endpoint, e.g. "http://localhost:9925".
        username: HarperDB user name.
        password: Password of ``username``.
        token: Pre-encoded Basic auth token, sent verbatim.

    Raises:
        ConfigurationError: If no auth was supplied, or only one of
            ``username``/``password``.
    """

    url: str
    username: str = UNSET
    password: str = field(default=UNSET, repr=False)
    token: str = field(default=UNSET, repr=False)

    def __post_init__(self) -> None:
        for name in ("username", "password", "token"):
            if getattr(self, name) in (None, ""):
                object.__setattr__(self, name, UNSET)

        if not self.token and not self.username and not self.password:
            raise ConfigurationError(MISSING_AUTH_MESSAGE)
        if bool(self.username) != bool(self.password):
            raise ConfigurationError(PARTIAL_CREDENTIALS_MESSAGE)

    @property
    def uses_token(self) -> bool:
        return bool(self.token)

    @property
    def basic_token(self) -> str:
        """The token for the ``Authorization: Basic`` header.

        Recomputed on each access: the explicit token if there is one,
        otherwise base64 of ``username:password``.
        """
        if self.uses_token:
            return self.token
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    @classmethod
    def from_env(
        cls,
        prefix: str = "HARPERDB_",
        environ: Mapping[str, str] | None = None,
    ) -> "ClientConfig":
        """Build a config from ``<prefix>URL``, ``USERNAME``, ``PASSWORD`` and ``TOKEN``.

        Args:
            prefix: Prefix of the environment variable names.
            environ: Mapping to read instead of ``os.environ``.
        """
        env = os.environ if environ is None else environ
        url = env.get(f"{prefix}URL")
        if not url:
            raise ConfigurationError(f"{prefix}URL is not set")
        return cls(
            url=url,
            username=env.get(f"{prefix}USERNAME"),
            password=env.get(f"{prefix}PASSWORD"),
            token=env.get(f"{prefix}TOKEN"),
        )
