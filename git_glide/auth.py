"""
Transport credentials for fetch and push.

The core only needs one capability: a credential usable for a given
remote URL. Three providers satisfy it, tried in order: a running SSH
agent, an on-disk SSH key, and git's HTTPS credential helper. Each
credential is expressed as environment overrides for the git process,
so git's own transports do the actual authentication.
"""

from __future__ import annotations

import os
import re
import shlex
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

SCP_LIKE_URL_RE = re.compile(r"^[\w.-]+@[\w.-]+:")

DEFAULT_KEY_NAMES = ("id_ed25519", "id_rsa", "id_ecdsa")


def is_ssh_url(url: str) -> bool:
    return url.startswith("ssh://") or bool(SCP_LIKE_URL_RE.match(url))


def is_https_url(url: str) -> bool:
    return url.startswith("https://") or url.startswith("http://")


@dataclass(frozen=True)
class TransportCredential:
    """Environment overrides that let git authenticate against a remote."""

    method: str
    env: Dict[str, str] = field(default_factory=dict)


class CredentialProvider(ABC):
    """Produces a credential for a remote URL, or None if it does not apply."""

    @abstractmethod
    def credential_for(self, url: str) -> Optional[TransportCredential]:
        """Return a credential for `url` or None."""


class SshAgentProvider(CredentialProvider):
    def __init__(self, environ=None):
        self._environ = os.environ if environ is None else environ

    def credential_for(self, url):
        if not is_ssh_url(url) or not self._environ.get("SSH_AUTH_SOCK"):
            return None
        return TransportCredential("ssh-agent", {"GIT_TERMINAL_PROMPT": "0"})


class SshKeyProvider(CredentialProvider):
    """Falls back to the first default key found under ~/.ssh."""

    def __init__(self, home: Optional[str] = None, key_names: Sequence[str] = DEFAULT_KEY_NAMES):
        self.home = Path(home) if home else Path.home()
        self.key_names = tuple(key_names)

    def credential_for(self, url):
        if not is_ssh_url(url):
            return None
        for key_name in self.key_names:
            key_path = self.home / ".ssh" / key_name
            if key_path.exists():
                command = f"ssh -i {shlex.quote(str(key_path))} -o IdentitiesOnly=yes"
                return TransportCredential(
                    "ssh-key",
                    {"GIT_SSH_COMMAND": command, "GIT_TERMINAL_PROMPT": "0"},
                )
        return None


class CredentialHelperProvider(CredentialProvider):
    def credential_for(self, url):
        if not is_https_url(url):
            return None
        # git consults credential.helper itself; never block on a tty prompt.
        return TransportCredential("credential-helper", {"GIT_TERMINAL_PROMPT": "0"})


def default_providers() -> list:
    return [SshAgentProvider(), SshKeyProvider(), CredentialHelperProvider()]


def resolve_credential(
    url: Optional[str], providers: Optional[Iterable[CredentialProvider]] = None
) -> TransportCredential:
    """
    Return the first credential a provider offers for `url`.

    Local paths and file:// remotes need none; they get an empty
    credential so callers can treat every remote uniformly.
    """
    if url:
        for provider in providers if providers is not None else default_providers():
            credential = provider.credential_for(url)
            if credential is not None:
                return credential
    return TransportCredential("none")
