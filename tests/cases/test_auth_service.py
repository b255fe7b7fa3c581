"""Unit tests for BearerAuthService covering HS256 verification, claim mapping and the known-user check.

Tokens are generated with PyJWT through TokenFactory.
"""

import pytest

from api.services.auth import BearerAuthService
from application.settings import Settings
from integration.repositories import InMemoryUserDirectory
from tests.fixtures.factories import TokenFactory


@pytest.fixture()
def auth_service(user_directory: InMemoryUserDirectory) -> BearerAuthService:
    return BearerAuthService(user_directory)


@pytest.mark.auth
class TestBearerAuthService:
    @pytest.mark.asyncio
    async def test_valid_token_for_known_user(self, auth_service: BearerAuthService) -> None:
        user = await auth_service.authenticate_async(TokenFactory.create("alice", roles=["admin"]))

        assert user is not None
        assert user["user_id"] == "alice"
        assert user["name"] == "Alice"
        assert user["email"] == "alice@example.com"
        assert user["roles"] == ["admin"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("claim", ["userId", "user_id", "sub"])
    async def test_user_id_claim_variants(self, auth_service: BearerAuthService, claim: str) -> None:
        user = await auth_service.authenticate_async(TokenFactory.create("bob", claim=claim))

        assert user is not None
        assert user["user_id"] == "bob"

    @pytest.mark.asyncio
    async def test_wrong_secret_is_rejected(self, auth_service: BearerAuthService) -> None:
        token = TokenFactory.create("alice", secret="some-other-secret-that-is-long-enough")

        assert await auth_service.authenticate_async(token) is None

    @pytest.mark.asyncio
    async def test_expired_token_is_rejected(self, auth_service: BearerAuthService) -> None:
        assert await auth_service.authenticate_async(TokenFactory.create("alice", expires_in=-60)) is None

    @pytest.mark.asyncio
    async def test_garbage_and_missing_tokens_are_rejected(self, auth_service: BearerAuthService) -> None:
        assert await auth_service.authenticate_async("not-a-jwt") is None
        assert await auth_service.authenticate_async(None) is None

    @pytest.mark.asyncio
    async def test_token_without_user_id_is_rejected(self, auth_service: BearerAuthService) -> None:
        token = TokenFactory.create("", claim="userId")

        assert await auth_service.authenticate_async(token) is None

    @pytest.mark.asyncio
    async def test_unknown_user_is_rejected(self, auth_service: BearerAuthService) -> None:
        assert await auth_service.authenticate_async(TokenFactory.create("mallory")) is None

    @pytest.mark.asyncio
    async def test_unknown_user_allowed_when_directory_check_disabled(self, user_directory: InMemoryUserDirectory) -> None:
        service = BearerAuthService(user_directory, Settings(auth_require_known_user=False))

        user = await service.authenticate_async(TokenFactory.create("mallory", name="Mallory"))

        assert user is not None
        assert user["user_id"] == "mallory"
        assert user["name"] == "Mallory"
