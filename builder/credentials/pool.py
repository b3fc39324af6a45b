"""Credential pool for the primary generation provider."""

from collections.abc import Mapping
from dataclasses import dataclass
import os

from ..config.constants import Credentials


@dataclass(frozen=True)
class Credential:
    """A pool secret together with its 1-based pool position."""

    secret: str
    index: int


class CredentialPool:
    """Ordered, 1-based pool of API keys.

    Index 1 is the primary key; index n is the n-th configured key. The pool
    ends at the first missing index, so keys must be numbered without gaps.
    """

    def __init__(self, secrets: list[str]):
        self._secrets = list(secrets) or [""]

    @classmethod
    def from_environ(
        cls,
        primary: str | None = None,
        prefix: str = Credentials.POOL_ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
    ) -> "CredentialPool":
        environ = os.environ if environ is None else environ
        secrets = [primary if primary is not None else environ.get(prefix, "")]
        index = 2
        while environ.get(f"{prefix}_{index}"):
            secrets.append(environ[f"{prefix}_{index}"])
            index += 1
        return cls(secrets)

    def __len__(self) -> int:
        return len(self._secrets)

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and 1 <= index <= len(self._secrets)

    def first(self) -> Credential:
        return Credential(secret=self._secrets[0], index=1)

    def resolve(self, index: int) -> Credential:
        """Credential at ``index``, or the first one if the index is out of range."""
        if index not in self:
            return self.first()
        return Credential(secret=self._secrets[index - 1], index=index)

    def next_index(self, index: int) -> int:
        """Position after ``index``, wrapping to 1 past the end of the pool."""
        following = index + 1
        return following if following in self else 1
