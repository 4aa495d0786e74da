"""Configuration for publishing managed bookmarks."""

from __future__ import annotations

import os

from attrs import evolve, field, frozen, validators

DEFAULT_ORG_UNIT_ID: str = "orgunits/my_customer"
DEFAULT_CUSTOMER_ID: str = "my_customer"
DEFAULT_TOPLEVEL_NAME: str = "Company Bookmarks"

# Separator used in the path column (e.g. "HR > Benefits").
DEFAULT_PATH_SEPARATOR: str = " > "

DEFAULT_POLICY_SCHEMA: str = "chrome.users.ManagedBookmarks"
DEFAULT_POLICY_ENDPOINT: str = (
    "https://chromepolicy.googleapis.com/v1/customers/{customer}/policies/orgunits:batchModify"
)
DEFAULT_TIMEOUT: float = 30.0

POLICY_SCOPE: str = "https://www.googleapis.com/auth/chrome.management.policy"

# Number of characters of the payload echoed by the preview mode.
PREVIEW_CHARS: int = 500


@frozen
class PolicyConfig:
    """Immutable settings shared by the builder, the client and the CLI."""

    org_unit_id: str = DEFAULT_ORG_UNIT_ID
    customer_id: str = DEFAULT_CUSTOMER_ID
    toplevel_name: str = DEFAULT_TOPLEVEL_NAME
    path_separator: str = field(default=DEFAULT_PATH_SEPARATOR, validator=validators.min_len(1))
    policy_schema: str = DEFAULT_POLICY_SCHEMA
    endpoint: str = DEFAULT_POLICY_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    credentials_file: str | None = None
    admin_subject: str | None = None
    static_token: str | None = None

    @classmethod
    def from_env(cls) -> PolicyConfig:
        """Load settings from environment variables, falling back to defaults."""
        return cls(
            org_unit_id=os.getenv("CHROME_ORG_UNIT_ID", DEFAULT_ORG_UNIT_ID),
            customer_id=os.getenv("CHROME_CUSTOMER_ID", DEFAULT_CUSTOMER_ID),
            toplevel_name=os.getenv("MANAGED_BOOKMARKS_TOPLEVEL_NAME", DEFAULT_TOPLEVEL_NAME),
            path_separator=os.getenv("MANAGED_BOOKMARKS_PATH_SEPARATOR") or DEFAULT_PATH_SEPARATOR,
            policy_schema=os.getenv("CHROME_POLICY_SCHEMA", DEFAULT_POLICY_SCHEMA),
            endpoint=os.getenv("CHROME_POLICY_ENDPOINT", DEFAULT_POLICY_ENDPOINT),
            timeout=float(os.getenv("CHROME_POLICY_TIMEOUT", str(DEFAULT_TIMEOUT))),
            credentials_file=os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or None,
            admin_subject=os.getenv("CHROME_ADMIN_SUBJECT") or None,
            static_token=os.getenv("CHROME_POLICY_TOKEN") or None,
        )

    def with_overrides(self, **overrides: object) -> PolicyConfig:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return evolve(self, **changes)

    @property
    def batch_modify_url(self) -> str:
        """Fully resolved batchModify endpoint for the configured customer."""
        return self.endpoint.format(customer=self.customer_id)
