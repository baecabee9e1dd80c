from core.db.admin import ADMIN_SESSION_KEY, AdminSession
from core.db.base import MemoryStorage


def test_starts_logged_out(session):
    assert session.is_authenticated() is False


def test_wrong_password_keeps_flag_false(session):
    assert session.authenticate("wrong") is False
    assert session.is_authenticated() is False


def test_correct_password_sets_flag(session):
    assert session.authenticate("s3cret") is True
    assert session.is_authenticated() is True


def test_flag_survives_a_new_session_over_same_storage():
    storage = MemoryStorage()
    AdminSession(storage, "pw").authenticate("pw")

    reloaded = AdminSession(storage, "pw")
    assert reloaded.is_authenticated() is True
    assert storage.get_item(ADMIN_SESSION_KEY) == "true"


def test_only_literal_true_counts():
    storage = MemoryStorage()
    storage.set_item(ADMIN_SESSION_KEY, "yes")
    assert AdminSession(storage, "pw").is_authenticated() is False


def test_logout_clears_flag_unconditionally(session):
    session.logout()  # already logged out: no error
    session.authenticate("s3cret")
    session.logout()
    assert session.is_authenticated() is False


def test_empty_password_never_matches():
    session = AdminSession(MemoryStorage(), "pw")
    assert session.authenticate("") is False
    assert session.authenticate(None) is False
