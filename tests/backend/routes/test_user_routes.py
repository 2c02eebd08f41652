import pytest

from backend.auth.jwt_handler import TokenKind
from backend.models.course import Course
from tests.factories import bearer_for, make_admin, make_course, make_user


@pytest.fixture
def student(db_session):
    return make_user(db_session, name='Student', phone='555-0100', nationality='Indian')


@pytest.mark.parametrize(
    ('method', 'path'),
    [
        ('get', '/api/user/dashboard'),
        ('get', '/api/user/bookmarks'),
        ('get', '/api/user/profile'),
        ('put', '/api/user/profile'),
        ('delete', '/api/user/profile'),
        ('post', '/api/user/bookmark/1'),
        ('get', '/api/user/bookmark-status/1'),
        ('delete', '/api/user/bookmark/1'),
        ('get', '/api/admin/stats'),
        ('get', '/api/admin/users'),
        ('delete', '/api/admin/courses/1'),
    ],
)
def test_expired_token_returns_401_envelope_on_every_guarded_route(client, student, method, path) -> None:
    kind = TokenKind.ADMIN if path.startswith('/api/admin') else TokenKind.USER
    headers = bearer_for(student, kind, expires_minutes=-1)

    response = client.request(method.upper(), path, headers=headers, json={})

    assert response.status_code == 401
    assert response.json()['success'] is False


def test_bookmark_toggle_status_and_admin_delete_scenario(client, db_session, student) -> None:
    course = make_course(db_session)
    admin = make_admin(db_session)
    user_headers = bearer_for(student)

    toggled = client.post(f'/api/user/bookmark/{course.id}', headers=user_headers)
    assert toggled.status_code == 200
    assert toggled.json()['success'] is True
    assert toggled.json()['bookmarked'] is True

    status = client.get(f'/api/user/bookmark-status/{course.id}', headers=user_headers)
    assert status.json() == {'success': True, 'data': {'bookmarked': True}}

    deleted = client.delete(f'/api/admin/users/{student.id}', headers=bearer_for(admin, TokenKind.ADMIN))
    assert deleted.status_code == 200

    db_session.expire_all()
    assert db_session.get(Course, course.id).bookmarked_by == []


def test_toggle_twice_unbookmarks(client, db_session, student) -> None:
    course = make_course(db_session)
    headers = bearer_for(student)

    first = client.post(f'/api/user/bookmark/{course.id}', headers=headers)
    second = client.post(f'/api/user/bookmark/{course.id}', headers=headers)

    assert first.json()['bookmarked'] is True
    assert second.json()['bookmarked'] is False
    assert client.get('/api/user/bookmarks', headers=headers).json()['data'] == {'bookmarked_courses': []}


def test_toggle_unknown_course_returns_404(client, student) -> None:
    response = client.post('/api/user/bookmark/999', headers=bearer_for(student))

    assert response.status_code == 404
    assert response.json() == {'success': False, 'message': 'Course not found'}


def test_remove_bookmark_is_idempotent(client, db_session, student) -> None:
    course = make_course(db_session)
    headers = bearer_for(student)
    client.post(f'/api/user/bookmark/{course.id}', headers=headers)

    first = client.delete(f'/api/user/bookmark/{course.id}', headers=headers)
    second = client.delete(f'/api/user/bookmark/{course.id}', headers=headers)

    assert first.status_code == 200
    assert second.status_code == 200
    assert client.get(f'/api/user/bookmark-status/{course.id}', headers=headers).json()['data']['bookmarked'] is False


def test_update_profile_with_only_phone_keeps_other_fields(client, student) -> None:
    response = client.put('/api/user/profile', headers=bearer_for(student), json={'phone': '123'})

    assert response.status_code == 200
    data = response.json()['data']
    assert data['phone'] == '123'
    assert data['name'] == 'Student'
    assert data['email'] == 'student@example.com'
    assert data['nationality'] == 'Indian'


def test_update_profile_maps_profile_picture(client, student) -> None:
    response = client.put('/api/user/profile', headers=bearer_for(student), json={'profilePicture': 'me.png'})

    assert response.json()['data']['profile_image'] == 'me.png'
    assert response.json()['data']['profile_picture'] == 'me.png'


def test_dashboard_reports_bookmark_totals(client, db_session, student) -> None:
    course = make_course(db_session)
    headers = bearer_for(student)
    client.post(f'/api/user/bookmark/{course.id}', headers=headers)

    response = client.get('/api/user/dashboard', headers=headers)

    data = response.json()['data']
    assert data['dashboard_stats']['total_bookmarks'] == 1
    assert [c['id'] for c in data['bookmarked_courses']] == [course.id]


def test_delete_profile_cleans_bookmarks_and_clears_cookie(client, db_session, student) -> None:
    course = make_course(db_session)
    headers = bearer_for(student)
    client.post(f'/api/user/bookmark/{course.id}', headers=headers)

    response = client.delete('/api/user/profile', headers=headers)

    assert response.status_code == 200
    assert 'Max-Age=0' in response.headers['set-cookie']
    db_session.expire_all()
    assert db_session.get(Course, course.id).bookmarked_by == []


def test_admin_token_is_not_accepted_on_user_routes(client, db_session) -> None:
    admin = make_admin(db_session)

    response = client.get('/api/user/profile', headers=bearer_for(admin, TokenKind.ADMIN))

    assert response.status_code == 401
