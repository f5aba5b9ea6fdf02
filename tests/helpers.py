"""
Common testing utilities.

Provides a fake genetic data provider served by aiohttp's TestServer, settings pointing
at it, and helpers for inspecting the encrypted session cookie.
"""

import json
from typing import Any, Dict, List, Optional

from aiohttp import ClientResponse, web
from aiohttp.test_utils import TestServer
from cryptography.fernet import Fernet

from bonestrength.app.config import Settings

TEST_CLIENT_ID = "test-client"
TEST_CLIENT_SECRET = "test-secret"
TEST_REDIRECT_URI = "http://localhost:5000/receive_code/"
TEST_ACCESS_TOKEN = "test-access-token"


class FakeProvider:
    """In-process stand-in for the provider's token endpoint and data API.

    Responses can be changed per test; every request is recorded.
    """

    def __init__(self) -> None:
        self.token_status = 200
        self.token_body: str = json.dumps(
            {
                "access_token": TEST_ACCESS_TOKEN,
                "token_type": "bearer",
                "expires_in": 86400,
                "refresh_token": "test-refresh-token",
                "scope": "basic names",
            }
        )
        self.statuses: Dict[str, int] = {"user": 200, "names": 200, "genotype": 200}
        self.bodies: Dict[str, Any] = {
            "user": {
                "id": "account-1",
                "profiles": [
                    {"id": "profile-1", "genotyped": True},
                    {"id": "profile-2", "genotyped": True},
                ],
            },
            "names": {
                "id": "account-1",
                "first_name": "Ada",
                "last_name": "Lovelace",
                "profiles": [
                    {"id": "profile-1", "first_name": "Ada", "last_name": "Lovelace"},
                ],
            },
            "genotype": [
                {
                    "id": "profile-1",
                    "rs9525638": "TT",
                    "rs2908004": "GG",
                    "rs2707466": "CC",
                    "rs7776725": "CC",
                },
                {
                    "id": "profile-2",
                    "rs9525638": "AA",
                    "rs2908004": "AA",
                    "rs2707466": "AA",
                    "rs7776725": "AA",
                },
            ],
        }
        self.token_requests: List[Dict[str, str]] = []
        self.data_requests: List[Dict[str, Optional[str]]] = []
        self.server: Optional[TestServer] = None

    @property
    def api_uri(self) -> str:
        assert self.server is not None
        return str(self.server.make_url(""))

    async def handle_token(self, request: web.Request) -> web.Response:
        form = await request.post()
        self.token_requests.append({k: str(v) for k, v in form.items()})
        return web.Response(
            status=self.token_status,
            text=self.token_body,
            content_type="application/json",
        )

    def data_handler(self, name: str):
        async def handler(request: web.Request) -> web.Response:
            self.data_requests.append(
                {
                    "name": name,
                    "authorization": request.headers.get("Authorization"),
                    "locations": request.query.get("locations"),
                }
            )
            body = self.bodies[name]
            return web.Response(
                status=self.statuses[name],
                text=body if isinstance(body, str) else json.dumps(body),
                content_type="application/json",
            )

        return handler

    def make_app(self) -> web.Application:
        app = web.Application()
        app.add_routes(
            [
                web.post("/token/", self.handle_token),
                web.get("/1/user/", self.data_handler("user")),
                web.get("/1/names/", self.data_handler("names")),
                web.get("/1/genotype/", self.data_handler("genotype")),
            ]
        )
        return app


def make_settings(api_uri: str, **overrides: Any) -> Settings:
    values: Dict[str, Any] = dict(
        client_id=TEST_CLIENT_ID,
        client_secret=TEST_CLIENT_SECRET,
        redirect_uri=TEST_REDIRECT_URI,
        api_uri=api_uri,
        cookie_secret=Fernet.generate_key().decode("ascii"),
        metrics_backend="none",
    )
    values.update(overrides)
    return Settings(**values)  # type: ignore


def session_data(response: ClientResponse, settings: Settings) -> Optional[Dict[str, Any]]:
    """Decrypt the session cookie set by a response.

    Returns None when the response did not touch the session, and an empty dict when it
    deleted the cookie.
    """
    morsel = response.cookies.get(settings.session_name)
    if morsel is None:
        return None
    if not morsel.value:
        return {}
    payload = settings.cookie_secret.decrypt(morsel.value.encode("utf-8"))
    return json.loads(payload)["session"]

