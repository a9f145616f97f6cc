"""
Tests for the stored login session
"""
from eventhub.auth import Session, SessionStore
from eventhub.models import LoginResponse, User
from eventhub.storage import StorageKeys


def _login(sample_user, role="user"):
    return LoginResponse.model_validate(
        {"message": "Login successful", "access_token": "tok-1", "user": {**sample_user, "role": role}}
    )


def test_no_session(memory_storage):
    session = SessionStore(memory_storage).load()

    assert not session.is_logged_in
    assert not session.is_admin
    assert session.landing_path == "/"


def test_save_and_load(memory_storage, sample_user):
    sessions = SessionStore(memory_storage)
    sessions.save(_login(sample_user))

    session = sessions.load()
    assert session.is_logged_in
    assert session.user.email == "jane@example.com"
    assert session.access_token == "tok-1"
    assert sessions.access_token() == "tok-1"
    assert memory_storage.get(StorageKeys.ACCESS_TOKEN) == "tok-1"


def test_admin_lands_on_dashboard(memory_storage, sample_user):
    session = SessionStore(memory_storage).save(_login(sample_user, role="admin"))

    assert session.is_admin
    assert session.landing_path == "/dashboard"


def test_corrupted_user_is_logged_out(memory_storage):
    memory_storage.set(StorageKeys.ACCESS_TOKEN, "tok-1")
    memory_storage.set(StorageKeys.USER, "{not json")

    session = SessionStore(memory_storage).load()

    assert session.user is None
    assert not session.is_logged_in


def test_user_with_wrong_shape_is_logged_out(memory_storage):
    memory_storage.set(StorageKeys.ACCESS_TOKEN, "tok-1")
    memory_storage.set(StorageKeys.USER, '{"name": "no id"}')

    assert not SessionStore(memory_storage).load().is_logged_in


def test_token_without_user_is_not_logged_in(sample_user):
    assert not Session(user=None, access_token="tok-1").is_logged_in
    assert not Session(user=User.model_validate(sample_user), access_token=None).is_logged_in


def test_clear(memory_storage, sample_user):
    sessions = SessionStore(memory_storage)
    sessions.save(_login(sample_user))
    sessions.clear()

    assert memory_storage.get(StorageKeys.ACCESS_TOKEN) is None
    assert memory_storage.get(StorageKeys.USER) is None
    assert not sessions.load().is_logged_in
