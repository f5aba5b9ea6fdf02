"""
Unit tests for bonestrength.model.token
"""

import json

import pytest
from pydantic import ValidationError

from bonestrength.model.token import TokenResponse


class TestTokenResponse:
    def test_round_trip_preserves_access_token(self):
        original = TokenResponse(
            access_token="abc123",
            token_type="bearer",
            expires_in=86400,
            refresh_token="refresh456",
            scope="basic names rs9525638",
        )

        decoded = TokenResponse.model_validate_json(original.model_dump_json())

        assert decoded.access_token == "abc123"
        assert decoded == original

    def test_decodes_provider_body(self):
        body = json.dumps(
            {
                "access_token": "abc123",
                "token_type": "bearer",
                "expires_in": 86400,
                "refresh_token": "refresh456",
                "scope": "basic names",
                "unexpected": "ignored",
            }
        )

        token = TokenResponse.model_validate_json(body)

        assert token.access_token == "abc123"
        assert token.expires_in == 86400
        assert token.scope == "basic names"

    def test_only_access_token_required(self):
        token = TokenResponse.model_validate_json('{"access_token": "abc123"}')

        assert token.token_type == ""
        assert token.expires_in == 0

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            "",
            "{}",
            '{"access_token": ""}',
            '{"access_token": "abc", "expires_in": "soon"}',
            "[]",
        ],
    )
    def test_invalid_bodies_fail_validation(self, body):
        with pytest.raises(ValidationError):
            TokenResponse.model_validate_json(body)

    def test_null_optional_fields_use_defaults(self):
        token = TokenResponse.model_validate_json(
            '{"access_token": "abc", "token_type": "bearer", "expires_in": null, '
            '"refresh_token": null, "scope": null}'
        )

        assert token.access_token == "abc"
        assert token.token_type == "bearer"
        assert token.expires_in == 0
        assert token.refresh_token == ""
        assert token.scope == ""

    def test_null_access_token_fails_validation(self):
        with pytest.raises(ValidationError):
            TokenResponse.model_validate_json('{"access_token": null}')

    def test_repr_hides_credentials(self):
        token = TokenResponse(access_token="secret-token", refresh_token="secret-refresh")

        assert "secret-token" not in repr(token)
        assert "secret-refresh" not in repr(token)
        assert "secret-token" not in str(token)
