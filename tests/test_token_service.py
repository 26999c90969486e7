from datetime import timedelta

import jwt

from app.config.settings import TokenSettings
from app.core.security.jwt_handler import REFRESH_TOKEN_TYPE, JWTManager
from app.repositories.user import UserRepository
from app.services.auth import TokenService, hash_refresh_token
from app.services.base import ErrorCode


def test_issue_pair_stores_refresh_digest(token_service, make_user, db_session):
    user = make_user()

    pair = token_service.issue_token_pair(user.id).unwrap()

    db_session.expire_all()
    stored = UserRepository(db_session).find_by_id(user.id)
    assert stored.refresh_token_hash == hash_refresh_token(pair.refresh_token)
    assert stored.refresh_token_hash != pair.refresh_token
    assert pair.token_type == "bearer"


def test_issue_pair_for_unknown_user(token_service):
    result = token_service.issue_token_pair("missing-user")

    assert not result
    assert result.error.code == ErrorCode.NOT_FOUND


def test_verify_access_returns_subject(token_service, make_user):
    user = make_user()
    pair = token_service.issue_token_pair(user.id).unwrap()

    assert token_service.verify_access(pair.access_token) == user.id


def test_verify_access_rejects_refresh_token_and_garbage(token_service, make_user):
    user = make_user()
    pair = token_service.issue_token_pair(user.id).unwrap()

    assert token_service.verify_access(pair.refresh_token) is None
    assert token_service.verify_access("not-a-jwt") is None
    assert token_service.verify_access("") is None


def test_verify_access_rejects_expired_token(db_session, make_user, token_settings):
    user = make_user()
    expired = TokenSettings(
        access_secret=token_settings.access_secret,
        refresh_secret=token_settings.refresh_secret,
        algorithm=token_settings.algorithm,
        access_ttl=timedelta(seconds=-10),
        refresh_ttl=token_settings.refresh_ttl,
    )
    token = JWTManager(expired).create_access_token(user.id)

    service = TokenService(UserRepository(db_session), db_session, token_settings)
    assert service.verify_access(token) is None


def test_access_and_refresh_use_distinct_secrets(token_settings, make_user):
    user = make_user()
    token = JWTManager(token_settings).create_refresh_token(user.id)

    try:
        jwt.decode(token, token_settings.access_secret, algorithms=[token_settings.algorithm])
    except jwt.InvalidSignatureError:
        pass
    else:
        raise AssertionError("refresh token verified with the access secret")


def test_rotation_replaces_token_and_blocks_replay(token_service, make_user):
    user = make_user()
    first = token_service.issue_token_pair(user.id).unwrap()

    second = token_service.rotate_refresh(first.refresh_token).unwrap()
    assert second.refresh_token != first.refresh_token

    replay = token_service.rotate_refresh(first.refresh_token)
    assert not replay
    assert replay.error.code == ErrorCode.UNAUTHORIZED

    # the newest token still works
    assert token_service.rotate_refresh(second.refresh_token)


def test_rotation_rejects_well_signed_token_that_is_not_current(token_service, token_settings, make_user):
    user = make_user()
    token_service.issue_token_pair(user.id).unwrap()
    forged = JWTManager(token_settings).create_refresh_token(user.id)

    result = token_service.rotate_refresh(forged)

    assert result.error.code == ErrorCode.UNAUTHORIZED
    assert result.error.message == "Invalid refresh token"


def test_rotation_rejects_access_token(token_service, make_user):
    user = make_user()
    pair = token_service.issue_token_pair(user.id).unwrap()

    result = token_service.rotate_refresh(pair.access_token)

    assert result.error.code == ErrorCode.UNAUTHORIZED
    assert result.error.message == "Invalid or expired refresh token"


def test_revoke_invalidates_refresh_token(token_service, make_user):
    user = make_user()
    pair = token_service.issue_token_pair(user.id).unwrap()

    assert token_service.revoke(user.id)

    assert not token_service.rotate_refresh(pair.refresh_token)


def test_new_login_supersedes_previous_refresh_token(token_service, make_user):
    user = make_user()
    old = token_service.issue_token_pair(user.id).unwrap()
    token_service.issue_token_pair(user.id).unwrap()

    assert not token_service.rotate_refresh(old.refresh_token)


def test_refresh_tokens_are_unique_per_issue(token_settings, make_user):
    user = make_user()
    manager = JWTManager(token_settings)

    a = manager.create_refresh_token(user.id)
    b = manager.create_refresh_token(user.id)

    assert a != b
    assert manager.get_user_id(a, REFRESH_TOKEN_TYPE) == user.id
