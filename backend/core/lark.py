"""Client for the Lark open platform: app auth and Base (Bitable) records."""

import json
from typing import Any

import httpx

from core.config import LarkConfig
from core.errors import UpstreamAuthError, UpstreamFetchError
from core.logging import logger
from core.token_cache import TokenCache


PAGE_SIZE = 100


class LarkClient:
    """Reads Base records on behalf of the configured Lark app."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        config: LarkConfig,
        token_cache: TokenCache,
    ) -> None:
        self.http = http
        self.config = config
        self.token_cache = token_cache

    async def get_access_token(self) -> str:
        return await self.token_cache.get_access_token(self._exchange_app_token)

    async def _exchange_app_token(self) -> str:
        """Exchange the app id and secret for an app access token."""
        url = f"{self.config.open_api_url}/auth/v3/app_access_token/internal"
        try:
            response = await self.http.post(
                url,
                json={
                    "app_id": self.config.app_id,
                    "app_secret": self.config.app_secret,
                },
                headers={"Content-Type": "application/json; charset=utf-8"},
            )
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamAuthError("Failed to get app access token.") from e

        if not isinstance(result, dict) or result.get("code") != 0:
            msg = result.get("msg") if isinstance(result, dict) else None
            raise UpstreamAuthError(msg or "Failed to get app access token.")

        token = result.get("app_access_token")
        if not token or not isinstance(token, str):
            raise UpstreamAuthError("Auth response did not include a token.")
        return token

    async def fetch_records(
        self, app_token: str, table_id: str, field_name: str
    ) -> list[dict[str, Any]]:
        """Read one page of records from a Base table, limited to one field.

        Returns an empty list when the upstream answers with an error code or
        without items.

        Raises:
            UpstreamAuthError: If no access token could be obtained.
            UpstreamFetchError: On transport failure or a non-JSON response.
        """
        access_token = await self.get_access_token()
        url = (
            f"{self.config.open_api_url}/bitable/v1/apps/{app_token}"
            f"/tables/{table_id}/records"
        )
        params = {
            "page_size": str(PAGE_SIZE),
            "field_names": json.dumps([field_name]),
        }

        try:
            response = await self.http.get(
                url,
                params=params,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Content-Type": "application/json",
                },
            )
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamFetchError("Failed to get records from Lark Base.") from e

        items = None
        if isinstance(result, dict) and result.get("code") == 0:
            data = result.get("data")
            if isinstance(data, dict):
                items = data.get("items")

        if not isinstance(items, list):
            logger.warning("No items found or unexpected response: %s", result)
            return []
        return items
