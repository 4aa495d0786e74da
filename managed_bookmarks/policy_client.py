"""Chrome Policy API client that pushes the managed bookmarks policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import requests
from google.auth.exceptions import GoogleAuthError
from pydantic import BaseModel, ConfigDict, Field

from .auth import load_token_provider

if TYPE_CHECKING:  # pragma: no cover
    from .auth import TokenProvider
    from .config import PolicyConfig

LOGGER = logging.getLogger(__name__)

MANAGED_BOOKMARKS_FIELD = "managedBookmarks"
_ORG_UNIT_PREFIX = "orgunits/"


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PolicyTargetKey(_ApiModel):
    """Resource the policy is applied to."""

    target_resource: str = Field(alias="targetResource")


class PolicyValue(_ApiModel):
    """Schema name plus the policy value."""

    policy_schema: str = Field(alias="policySchema")
    value: dict[str, Any]


class UpdateMask(_ApiModel):
    """Fields of the policy being overwritten."""

    paths: str


class ModifyOrgUnitPolicyRequest(_ApiModel):
    """Single entry of a batchModify call."""

    policy_target_key: PolicyTargetKey = Field(alias="policyTargetKey")
    policy_value: PolicyValue = Field(alias="policyValue")
    update_mask: UpdateMask = Field(alias="updateMask")


class BatchModifyRequest(_ApiModel):
    """Body of ``policies/orgunits:batchModify``."""

    requests: list[ModifyOrgUnitPolicyRequest]


@dataclass(slots=True)
class SubmitResult:
    """Outcome of a push; ``status_code`` is 0 when no response was received."""

    success: bool
    status_code: int
    body_text: str


def normalise_org_unit(org_unit: str) -> str:
    """Return ``org_unit`` in ``orgunits/<id>`` form."""
    org_unit = org_unit.strip()
    if org_unit.startswith(_ORG_UNIT_PREFIX):
        return org_unit
    return f"{_ORG_UNIT_PREFIX}{org_unit}"


def build_request_body(
    envelope: list[dict[str, Any]],
    org_unit: str,
    config: PolicyConfig,
) -> dict[str, Any]:
    """Build the JSON body overwriting the managed bookmarks of ``org_unit``."""
    body = BatchModifyRequest(
        requests=[
            ModifyOrgUnitPolicyRequest(
                policy_target_key=PolicyTargetKey(target_resource=normalise_org_unit(org_unit)),
                policy_value=PolicyValue(
                    policy_schema=config.policy_schema,
                    value={MANAGED_BOOKMARKS_FIELD: envelope},
                ),
                update_mask=UpdateMask(paths=MANAGED_BOOKMARKS_FIELD),
            ),
        ],
    )
    return body.model_dump(by_alias=True)


class PolicyClient:
    """Pushes managed bookmarks to the Chrome Policy API.

    The token provider is resolved lazily so credential problems surface as a
    failed ``SubmitResult`` like any other push failure.
    """

    def __init__(
        self,
        config: PolicyConfig,
        token_provider: TokenProvider | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialise the client.

        Args:
            config: Endpoint, customer, schema and timeout settings.
            token_provider: Source of bearer tokens; loaded from ``config`` when None.
            session: HTTP session; a fresh ``requests.Session`` when None.

        """
        self._config = config
        self._token_provider = token_provider
        self._session = session or requests.Session()

    def submit(self, envelope: list[dict[str, Any]], org_unit: str) -> SubmitResult:
        """Overwrite the managed bookmarks policy of ``org_unit`` with ``envelope``."""
        url = self._config.batch_modify_url
        try:
            body = build_request_body(envelope, org_unit, self._config)
            token = self._resolve_token_provider().get_token()
            LOGGER.info("Pushing managed bookmarks to %s", normalise_org_unit(org_unit))
            response = self._session.post(
                url,
                json=body,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._config.timeout,
            )
        except (requests.RequestException, GoogleAuthError, OSError, TypeError, ValueError) as exc:
            LOGGER.warning("Push to %s failed: %s", url, exc)
            return SubmitResult(success=False, status_code=0, body_text=str(exc))

        if response.status_code == requests.codes.ok:
            LOGGER.info("Managed bookmarks updated (HTTP %d)", response.status_code)
            return SubmitResult(
                success=True, status_code=response.status_code, body_text=response.text,
            )

        LOGGER.warning("Chrome Policy API returned HTTP %d", response.status_code)
        return SubmitResult(
            success=False, status_code=response.status_code, body_text=response.text,
        )

    def _resolve_token_provider(self) -> TokenProvider:
        if self._token_provider is None:
            self._token_provider = load_token_provider(self._config)
        return self._token_provider
