import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from school_api.main import app
from school_api.repositories import ResourceRepository

client = TestClient(app)


def _teacher(name='Ada', department='CS'):
    r = client.post('/teachers', json={'name': name, 'department': department})
    assert r.status_code == 201
    return r.json()


def _course(teacher_id, title='Algo'):
    r = client.post('/courses', json={'title': title, 'description': '...', 'TeacherId': teacher_id})
    assert r.status_code == 201
    return r.json()


def test_create_teacher_returns_record_with_generated_id():
    body = _teacher()
    assert isinstance(body['id'], int)
    assert body['name'] == 'Ada'
    assert body['department'] == 'CS'
    assert body['createdAt']
    assert body['updatedAt']


def test_create_course_and_student():
    t = _teacher()
    c = _course(t['id'])
    assert c['TeacherId'] == t['id']
    assert c['title'] == 'Algo'
    s = client.post('/students', json={'name': 'Bob', 'email': 'bob@example.com'})
    assert s.status_code == 201
    assert s.json()['email'] == 'bob@example.com'


@pytest.mark.parametrize('resource,payload,column', [
    ('teachers', {'name': 'Ada'}, 'teacher.department'),
    ('students', {'email': 'x@example.com'}, 'student.name'),
    ('courses', {'title': 'Algo', 'description': '...'}, 'course.teacher_id'),
])
def test_create_missing_required_field_is_store_error(resource, payload, column):
    r = client.post(f'/{resource}', json=payload)
    assert r.status_code == 500
    assert 'NOT NULL constraint failed' in r.json()['error']
    assert column in r.json()['error']


def test_create_without_body_is_store_error():
    r = client.post('/students')
    assert r.status_code == 500
    assert 'error' in r.json()


def test_create_course_with_unknown_teacher_is_store_error():
    r = client.post('/courses', json={'title': 'Algo', 'description': '...', 'TeacherId': 9999})
    assert r.status_code == 500
    assert 'FOREIGN KEY constraint failed' in r.json()['error']


def test_create_ignores_unknown_and_read_only_keys():
    r = client.post('/teachers', json={'name': 'Ada', 'department': 'CS', 'id': 777, 'nickname': 'A'})
    assert r.status_code == 201
    body = r.json()
    assert body['id'] != 777
    assert 'nickname' not in body


@pytest.mark.parametrize('resource', ['courses', 'students', 'teachers'])
@pytest.mark.parametrize('record_id', ['12345', 'abc', '1.5', '99999999999999999999999'])
def test_missing_record_is_404_for_get_update_delete(resource, record_id):
    for r in (
        client.get(f'/{resource}/{record_id}'),
        client.put(f'/{resource}/{record_id}', json={'name': 'x'}),
        client.delete(f'/{resource}/{record_id}'),
    ):
        assert r.status_code == 404
        assert r.json() == {'message': 'Not found'}


def test_get_by_id():
    t = _teacher()
    r = client.get(f"/teachers/{t['id']}")
    assert r.status_code == 200
    assert r.json()['name'] == 'Ada'
    assert 'Courses' not in r.json()


def test_update_is_partial():
    t = _teacher()
    r = client.put(f"/teachers/{t['id']}", json={'department': 'Math'})
    assert r.status_code == 200
    body = r.json()
    assert body['department'] == 'Math'
    assert body['name'] == 'Ada'
    assert body['createdAt'] == t['createdAt']
    fetched = client.get(f"/teachers/{t['id']}").json()
    assert fetched['department'] == 'Math'
    assert fetched['name'] == 'Ada'


def test_update_with_empty_body_leaves_record_unchanged():
    s = client.post('/students', json={'name': 'Bob', 'email': 'bob@example.com'}).json()
    r = client.put(f"/students/{s['id']}", json={})
    assert r.status_code == 200
    assert r.json()['name'] == 'Bob'
    assert r.json()['email'] == 'bob@example.com'


def test_update_rejected_by_store_is_500():
    t = _teacher()
    c = _course(t['id'])
    r = client.put(f"/courses/{c['id']}", json={'TeacherId': 4242})
    assert r.status_code == 500
    assert 'FOREIGN KEY constraint failed' in r.json()['error']
    r = client.put(f"/courses/{c['id']}", json={'title': None})
    assert r.status_code == 500
    assert client.get(f"/courses/{c['id']}").json()['title'] == 'Algo'


def test_delete_then_get_is_404():
    s = client.post('/students', json={'name': 'Bob', 'email': 'bob@example.com'}).json()
    r = client.delete(f"/students/{s['id']}")
    assert r.status_code == 200
    assert r.json() == {'message': 'Deleted'}
    assert client.get(f"/students/{s['id']}").status_code == 404


def test_delete_teacher_with_courses_is_store_error():
    t = _teacher()
    _course(t['id'])
    r = client.delete(f"/teachers/{t['id']}")
    assert r.status_code == 500
    assert 'error' in r.json()
    assert client.get(f"/teachers/{t['id']}").status_code == 200


def test_list_store_failure_passes_message_through(monkeypatch):
    def boom(self, query):
        raise OperationalError('SELECT', {}, Exception('database is locked'))

    monkeypatch.setattr(ResourceRepository, 'find_page', boom)
    r = client.get('/students')
    assert r.status_code == 500
    assert r.json() == {'error': 'database is locked'}


def test_create_with_out_of_range_integer_is_store_error():
    r = client.post('/students', json={'name': 10 ** 30, 'email': 'b'})
    assert r.status_code == 500
    assert 'too large' in r.json()['error']
    assert client.get('/students').json()['total'] == 0


def test_update_with_out_of_range_integer_is_store_error():
    t = _teacher()
    r = client.put(f"/teachers/{t['id']}", json={'name': 10 ** 30})
    assert r.status_code == 500
    assert 'too large' in r.json()['error']
    assert client.get(f"/teachers/{t['id']}").json()['name'] == 'Ada'


def _locked(*_args, **_kwargs):
    raise OperationalError('SELECT', {}, Exception('database is locked'))


@pytest.mark.parametrize('method', ['get', 'put', 'delete'])
def test_lookup_store_failure_passes_message_through(monkeypatch, method):
    t = _teacher()
    monkeypatch.setattr(ResourceRepository, 'get', _locked)
    kwargs = {'json': {'name': 'x'}} if method == 'put' else {}
    r = client.request(method.upper(), f"/teachers/{t['id']}", **kwargs)
    assert r.status_code == 500
    assert r.json() == {'error': 'database is locked'}


def test_delete_store_failure_passes_message_through(monkeypatch):
    t = _teacher()
    monkeypatch.setattr(ResourceRepository, 'delete', _locked)
    r = client.delete(f"/teachers/{t['id']}")
    assert r.status_code == 500
    assert r.json() == {'error': 'database is locked'}
