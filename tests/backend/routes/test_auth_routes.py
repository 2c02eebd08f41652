from backend.auth.jwt_handler import TokenKind
from tests.factories import DEFAULT_PASSWORD, bearer_for, make_admin, make_user


def test_register_creates_account_and_sets_user_cookie(client) -> None:
    response = client.post(
        '/api/auth/register',
        json={'name': 'Ada', 'email': 'Ada@Example.com', 'password': 'hunter22'},
    )

    assert response.status_code == 201
    body = response.json()
    assert body['success'] is True
    assert body['data']['user']['email'] == 'ada@example.com'
    assert 'hashed_password' not in body['data']['user']
    assert response.cookies.get('token') == body['data']['token']


def test_register_rejects_duplicate_email(client, db_session) -> None:
    make_user(db_session, email='ada@example.com')

    response = client.post(
        '/api/auth/register',
        json={'name': 'Ada', 'email': 'ada@example.com', 'password': 'hunter22'},
    )

    assert response.status_code == 409
    assert response.json() == {'success': False, 'message': 'A user with this email already exists'}


def test_register_rejects_short_password_with_envelope(client) -> None:
    response = client.post(
        '/api/auth/register',
        json={'name': 'Ada', 'email': 'ada@example.com', 'password': '123'},
    )

    assert response.status_code == 400
    assert response.json()['success'] is False
    assert 'Password must be at least' in response.json()['message']


def test_login_with_wrong_password_returns_401(client, db_session) -> None:
    user = make_user(db_session)

    response = client.post('/api/auth/login', json={'email': user.email, 'password': 'nope-nope'})

    assert response.status_code == 401
    assert response.json() == {'success': False, 'message': 'Invalid email or password'}


def test_login_then_me_uses_cookie(client, db_session) -> None:
    user = make_user(db_session)

    login = client.post('/api/auth/login', json={'email': user.email, 'password': DEFAULT_PASSWORD})
    me = client.get('/api/auth/me')

    assert login.status_code == 200
    assert me.status_code == 200
    assert me.json()['data']['email'] == user.email


def test_logout_clears_user_cookie(client, db_session) -> None:
    user = make_user(db_session)
    client.post('/api/auth/login', json={'email': user.email, 'password': DEFAULT_PASSWORD})

    response = client.post('/api/auth/logout')

    assert response.status_code == 200
    assert 'token=' in response.headers['set-cookie']
    assert 'Max-Age=0' in response.headers['set-cookie']
    assert client.get('/api/auth/me').status_code == 401


def test_admin_login_rejects_regular_user(client, db_session) -> None:
    user = make_user(db_session)

    response = client.post('/api/admin/auth/login', json={'email': user.email, 'password': DEFAULT_PASSWORD})

    assert response.status_code == 403
    assert response.json()['success'] is False


def test_admin_login_sets_admin_cookie(client, db_session) -> None:
    admin = make_admin(db_session)

    response = client.post('/api/admin/auth/login', json={'email': admin.email, 'password': DEFAULT_PASSWORD})

    assert response.status_code == 200
    assert response.cookies.get('adminToken')
    assert response.cookies.get('token') is None


def test_admin_me_rejects_user_token_for_admin_account(client, db_session) -> None:
    admin = make_admin(db_session)

    response = client.get('/api/admin/auth/me', headers=bearer_for(admin, TokenKind.USER))

    assert response.status_code == 401
    assert response.json() == {'success': False, 'message': 'Invalid token. Access denied.'}
