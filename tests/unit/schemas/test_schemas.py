"""Test credential, request and response schemas."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from ecobank_express.schemas import ApiResponse, Credentials, RequestEnvelope


class TestCredentials:
    """Test Credentials schema."""

    def test_secrets_are_masked(self):
        creds = Credentials(user_id="user", password="pw", shared_secret="lab")

        assert "pw" not in repr(creds)
        assert "lab" not in repr(creds)
        assert creds.shared_secret.get_secret_value() == "lab"

    def test_token_request_body(self):
        creds = Credentials(user_id="user", password="pw", shared_secret="lab")

        assert creds.token_request_body() == {"userId": "user", "password": "pw"}

    def test_secrets_keep_surrounding_whitespace(self):
        creds = Credentials(user_id="  user ", password=" pw ", shared_secret=" K1 ")

        assert creds.user_id == "user"
        assert creds.password.get_secret_value() == " pw "
        assert creds.shared_secret.get_secret_value() == " K1 "

    def test_blank_user_id(self):
        with pytest.raises(PydanticValidationError):
            Credentials(user_id="   ", password="pw", shared_secret="lab")

    def test_frozen(self):
        creds = Credentials(user_id="user", password="pw", shared_secret="lab")

        with pytest.raises(PydanticValidationError):
            creds.user_id = "other"

    @pytest.mark.parametrize(
        "values",
        [
            {"user_id": "", "password": "pw", "shared_secret": "lab"},
            {"user_id": "user", "password": "", "shared_secret": "lab"},
            {"user_id": "user", "password": "pw", "shared_secret": ""},
            {"user_id": "user", "password": "pw", "shared_secret": "lab", "extra": "x"},
        ],
    )
    def test_invalid(self, values):
        with pytest.raises(PydanticValidationError):
            Credentials(**values)


class TestRequestEnvelope:
    """Test RequestEnvelope schema."""

    def test_preserves_body_order(self):
        envelope = RequestEnvelope(path="/x", body={"b": 1, "a": 2})

        assert list(envelope.body) == ["b", "a"]

    def test_adds_leading_slash(self):
        assert RequestEnvelope(path="corporateapi/merchant/qr").path == "/corporateapi/merchant/qr"


class TestApiResponse:
    """Test ApiResponse schema."""

    def test_sentinel(self):
        sentinel = ApiResponse.timeout_sentinel(attempts=3)

        assert sentinel.is_sentinel is True
        assert sentinel.payload == {"msg": "Timeout"}
        assert sentinel["msg"] == "Timeout"
        assert sentinel.ok is False
        assert sentinel.is_forbidden is False

    def test_genuine_timeout_payload_is_not_sentinel(self):
        """Test an upstream body that happens to look like the sentinel stays distinguishable."""
        response = ApiResponse(status_code=200, payload={"msg": "Timeout"})

        assert response.is_sentinel is False
        assert response.ok is True

    @pytest.mark.parametrize(
        "payload,expected",
        [
            ({"error": "Forbidden access"}, True),
            ({"error": "403 Forbidden"}, True),
            ({"error": "forbidden"}, False),
            ({"error": "Unauthorized"}, False),
            ({"message": "Forbidden"}, False),
            (["Forbidden"], False),
            (None, False),
        ],
    )
    def test_is_forbidden(self, payload, expected):
        assert ApiResponse(status_code=403, payload=payload).is_forbidden is expected

    def test_get(self):
        response = ApiResponse(status_code=200, payload={"token": "t"})

        assert response.get("token") == "t"
        assert response.get("missing", "d") == "d"
        assert ApiResponse(payload=[1]).get("token") is None

    def test_getitem_non_dict(self):
        with pytest.raises(KeyError):
            ApiResponse(payload=None)["token"]
