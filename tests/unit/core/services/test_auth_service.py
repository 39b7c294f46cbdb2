"""Unit tests for AuthService with an in-memory credential store."""

import asyncio
import uuid
from datetime import datetime, timezone

import pytest

from notekeep.core.errors import AppError, ErrorKind
from notekeep.core.services.auth_service import AuthService
from notekeep.core.services.username_generator import UsernameGenerator
from notekeep.security.jwt import TokenKind
from notekeep.security.password import PasswordHasher
from notekeep.security.password_policy import PasswordPolicy

PASSWORD = "Sup3r$ecretPw"


class DummyUser:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


class FakeUserRepo:
    """Mimics the unique constraints of the users table."""

    def __init__(self):
        self.users = {}

    async def create_user(self, email, username, password_hash):
        # yield so concurrent signups interleave like real DB round trips
        await asyncio.sleep(0)
        if any(u.email == email or u.username == username for u in self.users.values()):
            raise AppError.conflict("User already exists")
        now = datetime.now(timezone.utc)
        user = DummyUser(
            id=uuid.uuid4(),
            email=email,
            username=username,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        return user

    async def get_by_id(self, user_id):
        return self.users.get(user_id)

    async def get_by_email(self, email):
        email = email.strip().lower()
        return next((u for u in self.users.values() if u.email == email), None)

    async def email_exists(self, email):
        return await self.get_by_email(email) is not None

    async def username_exists(self, username):
        return any(u.username == username for u in self.users.values())

    async def update_password_hash(self, user_id, password_hash):
        user = self.users[user_id]
        user.password_hash = password_hash
        return user


@pytest.fixture
def repo():
    return FakeUserRepo()


@pytest.fixture
def auth_service(repo, token_service, password_policy):
    return AuthService(repo, token_service, password_policy)


class TestSignUp:
    @pytest.mark.asyncio
    async def test_sign_up_success(self, auth_service, repo):
        user = await auth_service.sign_up("  Jane.Doe@Mail.com ", PASSWORD)

        assert user.email == "jane.doe@mail.com"
        assert user.username.startswith("janedoe")
        stored = repo.users[user.id]
        assert stored.password_hash != PASSWORD
        assert "password_hash" not in user.model_dump()

    @pytest.mark.asyncio
    async def test_stored_hash_verifies(self, auth_service, repo, password_policy):
        user = await auth_service.sign_up("jane@mail.com", PASSWORD)

        assert password_policy.verify(PASSWORD, repo.users[user.id].password_hash)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email, password", [("", PASSWORD), ("a@mail.com", ""), (None, None)])
    async def test_missing_fields(self, auth_service, email, password):
        with pytest.raises(AppError) as exc_info:
            await auth_service.sign_up(email, password)
        assert exc_info.value.kind is ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_weak_password(self, auth_service, repo):
        with pytest.raises(AppError) as exc_info:
            await auth_service.sign_up("jane@mail.com", "password")

        assert exc_info.value.kind is ErrorKind.WEAK_PASSWORD
        assert repo.users == {}

    @pytest.mark.asyncio
    async def test_blocked_domain(self, auth_service):
        with pytest.raises(AppError) as exc_info:
            await auth_service.sign_up("someone@mailinator.com", PASSWORD)

        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert exc_info.value.message == "Email domain not allowed"

    @pytest.mark.asyncio
    async def test_extra_blocked_domain(self, repo, token_service, password_policy):
        service = AuthService(
            repo, token_service, password_policy, blocked_email_domains={"Corp-Spam.io"}
        )
        with pytest.raises(AppError):
            await service.sign_up("a@corp-spam.io", PASSWORD)

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, auth_service):
        await auth_service.sign_up("jane@mail.com", PASSWORD)

        with pytest.raises(AppError) as exc_info:
            await auth_service.sign_up("JANE@mail.com", PASSWORD)

        assert exc_info.value.kind is ErrorKind.CONFLICT
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_signup_one_wins(self, auth_service, repo):
        results = await asyncio.gather(
            auth_service.sign_up("race@mail.com", PASSWORD),
            auth_service.sign_up("race@mail.com", PASSWORD),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], AppError)
        assert failures[0].kind is ErrorKind.CONFLICT
        assert len(repo.users) == 1

    @pytest.mark.asyncio
    async def test_username_exhaustion_propagates(self, repo, token_service, password_policy):
        async def always_taken(name):
            return True

        service = AuthService(
            repo,
            token_service,
            password_policy,
            usernames=UsernameGenerator(always_taken, max_attempts=2),
        )
        with pytest.raises(AppError) as exc_info:
            await service.sign_up("jane@mail.com", PASSWORD)

        assert exc_info.value.kind is ErrorKind.GENERATION_EXHAUSTED
        assert repo.users == {}


class TestSignIn:
    @pytest.mark.asyncio
    async def test_sign_in_success(self, auth_service, token_service):
        created = await auth_service.sign_up("jane@mail.com", PASSWORD)

        result = await auth_service.sign_in("Jane@Mail.com", PASSWORD)

        assert result.user.id == created.id
        assert result.token_type == "bearer"
        assert result.expires_in == token_service.access_expires_in
        assert token_service.verify(result.access_token, TokenKind.ACCESS).user_id == created.id
        assert token_service.verify(result.refresh_token, TokenKind.REFRESH).user_id == created.id

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_the_same(self, auth_service):
        await auth_service.sign_up("jane@mail.com", PASSWORD)

        with pytest.raises(AppError) as unknown:
            await auth_service.sign_in("nobody@mail.com", PASSWORD)
        with pytest.raises(AppError) as wrong:
            await auth_service.sign_in("jane@mail.com", "Wr0ng$Password")

        assert unknown.value.kind is wrong.value.kind is ErrorKind.AUTHENTICATION
        assert unknown.value.message == wrong.value.message == "Invalid credentials"
        assert unknown.value.details == wrong.value.details

    @pytest.mark.asyncio
    async def test_unknown_email_runs_dummy_verify(self, auth_service, password_policy, monkeypatch):
        calls = []

        async def fake_dummy():
            calls.append(True)

        monkeypatch.setattr(password_policy, "dummy_verify_async", fake_dummy)

        with pytest.raises(AppError):
            await auth_service.sign_in("nobody@mail.com", PASSWORD)

        assert calls == [True]

    @pytest.mark.asyncio
    async def test_missing_fields(self, auth_service):
        with pytest.raises(AppError) as exc_info:
            await auth_service.sign_in("", "")
        assert exc_info.value.kind is ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_rehash_on_cost_change(self, repo, token_service, hasher):
        old_policy = PasswordPolicy(hasher=hasher)
        await AuthService(repo, token_service, old_policy).sign_up("jane@mail.com", PASSWORD)
        user = next(iter(repo.users.values()))
        old_hash = user.password_hash

        new_policy = PasswordPolicy(hasher=PasswordHasher(rounds=11))
        await AuthService(repo, token_service, new_policy).sign_in("jane@mail.com", PASSWORD)

        assert user.password_hash != old_hash
        assert user.password_hash.startswith("$2b$11$")
        assert new_policy.verify(PASSWORD, user.password_hash)


class TestRefreshAndValidate:
    @pytest.mark.asyncio
    async def test_refresh_token_issues_access_token(self, auth_service, token_service):
        user = await auth_service.sign_up("jane@mail.com", PASSWORD)

        access = await auth_service.refresh_token(user.id)

        assert token_service.verify(access, TokenKind.ACCESS).user_id == user.id

    @pytest.mark.asyncio
    async def test_refresh_token_requires_user_id(self, auth_service):
        with pytest.raises(AppError) as exc_info:
            await auth_service.refresh_token(None)
        assert exc_info.value.kind is ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_refresh_token_unknown_user(self, auth_service):
        with pytest.raises(AppError) as exc_info:
            await auth_service.refresh_token(uuid.uuid4())
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_validate_user(self, auth_service):
        user = await auth_service.sign_up("jane@mail.com", PASSWORD)

        validated = await auth_service.validate_user(user.id)

        assert validated.id == user.id
        assert validated.username == user.username

    @pytest.mark.asyncio
    async def test_validate_user_errors(self, auth_service):
        with pytest.raises(AppError) as missing:
            await auth_service.validate_user(None)
        with pytest.raises(AppError) as unknown:
            await auth_service.validate_user(uuid.uuid4())

        assert missing.value.kind is ErrorKind.VALIDATION
        assert unknown.value.kind is ErrorKind.NOT_FOUND
