import io

import pytest

import config
from rate_limiter import limiter

from security import create_access_token


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()['status'] == 'ok'
    assert 'X-Request-ID' in response.headers


def test_api_test(client):
    assert client.get("/api/test").json() == {'message': 'RootnSpace API is running'}


def test_request_id_is_echoed(client):
    response = client.get("/api/test", headers={'X-Request-ID': 'abc12345'})

    assert response.headers['X-Request-ID'] == 'abc12345'


def test_unknown_route(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {'detail': 'Route not found'}


def test_validation_error_format(client):
    response = client.post("/api/auth/login", json={'email': 'not-an-email'})

    assert response.status_code == 400
    body = response.json()
    assert isinstance(body['detail'], str)
    assert {e['field'] for e in body['errors']} == {'email', 'password'}


def test_missing_token(client):
    response = client.get("/api/tenants")

    assert response.status_code == 401
    assert response.json()['detail'] == 'Not authorized, no token'


def test_bad_token(client):
    response = client.get("/api/tenants", headers={'Authorization': 'Bearer not.a.jwt'})

    assert response.status_code == 401
    assert response.json()['detail'] == 'Not authorized, token failed'


def test_expired_token(client, staff):
    token = create_access_token(staff.id, expires_days=-1)

    response = client.get("/api/tenants", headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 401


def test_wrong_role(client, tenant_headers):
    response = client.get("/api/tenants", headers=tenant_headers)

    assert response.status_code == 403
    assert response.json()['detail'] == 'Staff access required'


def test_upload_file(client, tenant_headers):
    response = client.post(
        "/api/uploads",
        files={'file': ('aadhaar.jpg', io.BytesIO(b'\xff\xd8\xff fake jpeg'), 'image/jpeg')},
        data={'category': 'identity'},
        headers=tenant_headers,
    )

    assert response.status_code == 201
    url = response.json()['url']
    assert url.startswith('/uploads/identity/')
    assert url.endswith('.jpg')

    served = client.get(url)
    assert served.status_code == 200
    assert served.content == b'\xff\xd8\xff fake jpeg'


def test_upload_rejects_other_file_types(client, tenant_headers):
    response = client.post(
        "/api/uploads",
        files={'file': ('script.exe', io.BytesIO(b'MZ'), 'application/octet-stream')},
        headers=tenant_headers,
    )

    assert response.status_code == 400
    assert response.json()['detail'] == 'Only images (jpg, jpeg, png, webp) and PDF files are allowed'


@pytest.fixture
def rate_limits(monkeypatch):
    """Switch the limiter on with empty buckets"""
    monkeypatch.setattr(limiter, 'enabled', True)
    limiter.reset()
    yield limiter
    limiter.reset()


def _budget(limit: str) -> int:
    return int(limit.split('/')[0])


def test_auth_routes_share_a_rate_limit(client, rate_limits):
    credentials = {'email': 'ghost@example.com', 'password': 'Wrong@1234'}
    for _ in range(_budget(config.AUTH_RATE_LIMIT)):
        assert client.post("/api/auth/login", json=credentials).status_code == 400

    response = client.post("/api/auth/forgot-password", json={'email': 'ghost@example.com'})

    assert response.status_code == 429
    assert response.json() == {'detail': 'Too many requests, please try again later.'}
    assert 'Retry-After' in response.headers


def test_sms_routes_are_rate_limited(client, admin_headers, outbound, rate_limits):
    body = {'phone': '9876543210', 'message': 'Water supply off tonight'}
    for _ in range(_budget(config.SMS_RATE_LIMIT)):
        assert client.post("/api/tenants/send-manual-sms", json=body, headers=admin_headers).status_code == 200

    response = client.post("/api/tenants/send-manual-sms", json=body, headers=admin_headers)

    assert response.status_code == 429
    assert len(outbound['sms']) == _budget(config.SMS_RATE_LIMIT)
