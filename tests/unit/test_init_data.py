import json
from urllib.parse import urlencode

import pytest

from nutrition_admin.backend.auth.telegram import (
    InitDataError,
    parse_authorization_header,
    sign_init_data,
    validate_init_data,
)

BOT_TOKEN = "5768337691:AAH5YkoiEuPk8-FZa32hStHTqXiLPtAEhx8"
NOW = 1_700_000_000


def build(fields: dict, token: str = BOT_TOKEN) -> str:
    fields = dict(fields)
    fields["hash"] = sign_init_data(fields, token)
    return urlencode(fields)


@pytest.fixture
def fields():
    return {
        "query_id": "AAHdF6IQAAAAAN0XohDhrOrc",
        "user": json.dumps({"id": 279058397, "first_name": "Vladislav", "last_name": "K", "username": "vdkfrost", "language_code": "ru"}),
        "auth_date": str(NOW - 60),
    }


class TestValidateInitData:
    def test_valid_payload_returns_parsed_data(self, fields):
        init_data = validate_init_data(build(fields), BOT_TOKEN, expires_in=3600, now=NOW)

        assert init_data.auth_date == NOW - 60
        assert init_data.query_id == "AAHdF6IQAAAAAN0XohDhrOrc"
        assert init_data.user is not None
        assert init_data.user.id == 279058397
        assert init_data.user.username == "vdkfrost"
        assert "hash" not in init_data.raw

    def test_user_is_optional(self, fields):
        del fields["user"]

        init_data = validate_init_data(build(fields), BOT_TOKEN, now=NOW)

        assert init_data.user is None

    def test_tampered_field_is_rejected(self, fields):
        raw = build(fields).replace("vdkfrost", "someone")

        with pytest.raises(InitDataError):
            validate_init_data(raw, BOT_TOKEN, now=NOW)

    def test_foreign_bot_token_is_rejected(self, fields):
        with pytest.raises(InitDataError):
            validate_init_data(build(fields, token="1:OTHER"), BOT_TOKEN, now=NOW)

    def test_missing_hash(self, fields):
        with pytest.raises(InitDataError, match="hash"):
            validate_init_data(urlencode(fields), BOT_TOKEN, now=NOW)

    def test_empty_payload(self):
        with pytest.raises(InitDataError):
            validate_init_data("", BOT_TOKEN, now=NOW)

    def test_expired_payload(self, fields):
        fields["auth_date"] = str(NOW - 3601)

        with pytest.raises(InitDataError, match="устарела"):
            validate_init_data(build(fields), BOT_TOKEN, expires_in=3600, now=NOW)

    def test_zero_expiry_disables_age_check(self, fields):
        fields["auth_date"] = str(NOW - 365 * 86400)

        init_data = validate_init_data(build(fields), BOT_TOKEN, expires_in=0, now=NOW)

        assert init_data.auth_date == NOW - 365 * 86400

    def test_auth_date_is_required(self, fields):
        del fields["auth_date"]

        with pytest.raises(InitDataError, match="auth_date"):
            validate_init_data(build(fields), BOT_TOKEN, now=NOW)

    def test_non_numeric_auth_date(self, fields):
        fields["auth_date"] = "yesterday"

        with pytest.raises(InitDataError, match="auth_date"):
            validate_init_data(build(fields), BOT_TOKEN, now=NOW)

    def test_broken_user_json(self, fields):
        fields["user"] = "{not json"

        with pytest.raises(InitDataError, match="user"):
            validate_init_data(build(fields), BOT_TOKEN, now=NOW)


class TestParseAuthorizationHeader:
    def test_extracts_payload(self):
        assert parse_authorization_header("tma query_id=1&hash=abc") == "query_id=1&hash=abc"

    @pytest.mark.parametrize("header", [None, "", "tma", "tma ", "Bearer token", "TMA data"])
    def test_rejects_other_schemes_and_empty_payloads(self, header):
        assert parse_authorization_header(header) is None
