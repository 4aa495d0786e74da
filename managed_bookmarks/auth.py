"""Bearer token providers for the Chrome Policy API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import google.auth
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from .config import POLICY_SCOPE

if TYPE_CHECKING:  # pragma: no cover
    from google.auth.credentials import Credentials

    from .config import PolicyConfig

LOGGER = logging.getLogger(__name__)


class TokenProvider(Protocol):
    """Anything able to hand out an OAuth bearer token."""

    def get_token(self) -> str:
        """Return a currently valid access token."""
        ...


class StaticTokenProvider:
    """Provider returning a token obtained elsewhere (e.g. ``gcloud auth print-access-token``)."""

    def __init__(self, token: str) -> None:
        """Store the token."""
        self._token = token

    def get_token(self) -> str:
        """Return the stored token."""
        return self._token


class GoogleTokenProvider:
    """Provider backed by ``google.auth`` credentials, refreshed on demand."""

    def __init__(self, credentials: Credentials) -> None:
        """Wrap the given credentials."""
        self._credentials = credentials

    def get_token(self) -> str:
        """Refresh the credentials when needed and return their token."""
        if not self._credentials.valid:
            LOGGER.debug("Refreshing Google credentials")
            self._credentials.refresh(Request())
        token = self._credentials.token
        if not token:
            msg = "Google credentials did not yield an access token"
            raise RefreshError(msg)
        return str(token)


def load_token_provider(config: PolicyConfig) -> TokenProvider:
    """Pick a token provider from the configuration.

    Order: explicit static token, service account key file (optionally
    impersonating ``admin_subject``), application default credentials.
    """
    if config.static_token:
        LOGGER.debug("Using static bearer token from configuration")
        return StaticTokenProvider(config.static_token)

    if config.credentials_file:
        LOGGER.debug("Loading service account credentials from %s", config.credentials_file)
        credentials = service_account.Credentials.from_service_account_file(
            config.credentials_file,
            scopes=[POLICY_SCOPE],
        )
        if config.admin_subject:
            credentials = credentials.with_subject(config.admin_subject)
        return GoogleTokenProvider(credentials)

    LOGGER.debug("Falling back to application default credentials")
    credentials, _project = google.auth.default(scopes=[POLICY_SCOPE])
    return GoogleTokenProvider(credentials)
