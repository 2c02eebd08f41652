import pytest

from backend.core.errors import ConflictOrInconsistency, Forbidden, Unauthenticated
from backend.services import accounts
from tests.factories import DEFAULT_PASSWORD, make_admin, make_user


def test_register_user_normalizes_email_and_hashes_password(db_session) -> None:
    user = accounts.register_user(db_session, name='Ada', email=' Ada@Example.COM ', password='hunter22')

    assert user.email == 'ada@example.com'
    assert user.hashed_password != 'hunter22'
    assert user.role == 'user'


def test_register_user_rejects_duplicate_email(db_session) -> None:
    make_user(db_session, email='ada@example.com')

    with pytest.raises(ConflictOrInconsistency):
        accounts.register_user(db_session, name='Ada', email='ADA@example.com', password='hunter22')


def test_authenticate_records_last_login(db_session) -> None:
    user = make_user(db_session)
    assert user.last_login is None

    authenticated = accounts.authenticate(db_session, user.email, DEFAULT_PASSWORD)

    assert authenticated.last_login is not None


def test_authenticate_rejects_wrong_password(db_session) -> None:
    user = make_user(db_session)

    with pytest.raises(Unauthenticated):
        accounts.authenticate(db_session, user.email, 'wrong-password')


def test_authenticate_rejects_inactive_account(db_session) -> None:
    user = make_user(db_session, is_active=False)

    with pytest.raises(Forbidden):
        accounts.authenticate(db_session, user.email, DEFAULT_PASSWORD)


def test_authenticate_requiring_admin_rejects_regular_user(db_session) -> None:
    user = make_user(db_session)
    admin = make_admin(db_session)

    with pytest.raises(Forbidden):
        accounts.authenticate(db_session, user.email, DEFAULT_PASSWORD, require_admin=True)
    assert accounts.authenticate(db_session, admin.email, DEFAULT_PASSWORD, require_admin=True).id == admin.id


def test_update_profile_leaves_absent_fields_untouched(db_session) -> None:
    user = make_user(db_session, name='Original', nationality='Kenyan')

    updated = accounts.update_profile(db_session, user.id, {'phone': '123'})

    assert updated.phone == '123'
    assert updated.name == 'Original'
    assert updated.email == 'student@example.com'
    assert updated.nationality == 'Kenyan'
