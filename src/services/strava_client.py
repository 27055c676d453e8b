"""HTTP client for the Strava OAuth and activities APIs."""

import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from src.config import get_settings

logger = logging.getLogger(__name__)


class StravaClient:
    """Thin async wrapper around the Strava endpoints the app uses."""

    AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"
    TOKEN_URL = "https://www.strava.com/oauth/token"  # noqa: S105
    API_BASE_URL = "https://www.strava.com/api/v3"
    SCOPE = "read,activity:read_all"

    def __init__(self) -> None:
        self.settings = get_settings()
        self.client_id = self.settings.strava_client_id
        self.client_secret = self.settings.strava_client_secret
        self.redirect_uri = self.settings.strava_redirect_uri
        self.timeout = self.settings.strava_timeout_seconds

    def authorization_url(self, state: str) -> str:
        """Build the URL the user is sent to in order to grant access."""
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": self.redirect_uri,
            "scope": self.SCOPE,
            "state": state,
        }
        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def _post_token(self, payload: dict[str, Any]) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.TOKEN_URL,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    **payload,
                },
            )
            response.raise_for_status()
            return response.json()

    async def exchange_code(self, code: str) -> dict[str, Any]:
        """Exchange an authorization code for tokens and the athlete profile.

        Returns the Strava token response: access_token, refresh_token,
        expires_at (epoch seconds) and athlete.
        """
        return await self._post_token({"code": code, "grant_type": "authorization_code"})

    async def refresh_access_token(self, refresh_token: str) -> dict[str, Any]:
        """Trade a refresh token for a new access/refresh token pair."""
        return await self._post_token(
            {"refresh_token": refresh_token, "grant_type": "refresh_token"}
        )

    async def list_activities(
        self, access_token: str, page: int = 1, per_page: int = 200
    ) -> list[dict[str, Any]]:
        """Fetch the athlete's activities, most recent first."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.API_BASE_URL}/athlete/activities",
                headers={"Authorization": f"Bearer {access_token}"},
                params={"page": page, "per_page": per_page},
            )
            response.raise_for_status()
            return response.json()


def get_strava_client() -> StravaClient:
    """Get a Strava client instance."""
    return StravaClient()
