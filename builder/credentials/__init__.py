"""API key pool and rotation."""

from .pool import Credential, CredentialPool
from .rotator import CredentialRotator

__all__ = ["Credential", "CredentialPool", "CredentialRotator"]
