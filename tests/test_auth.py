from datetime import timedelta

from models import Role, User
from models.base import utcnow
from security import verify_password
from tests.conftest import TEST_PASSWORD, auth_header, fake, make_user


def _register_body(**overrides):
    body = {
        'name': fake.name(),
        'email': fake.unique.email(),
        'phone': '9876543210',
        'password': 'Str0ng@Pass',
    }
    body.update(overrides)
    return body


def test_register_creates_tenant_account(client):
    response = client.post("/api/auth/register", json=_register_body(email='Priya@Example.com'))

    assert response.status_code == 201
    data = response.json()
    assert data['email'] == 'priya@example.com'
    assert data['role'] == 'tenant'
    assert data['token']
    assert data['requires_onboarding'] is True
    assert 'password' not in data


def test_register_with_hostel_code(client, hostel):
    response = client.post(
        "/api/auth/register",
        json=_register_body(organizational_code=hostel.organizational_code),
    )

    assert response.status_code == 201
    assert response.json()['property_id'] == hostel.id


def test_register_with_admin_code(client, db_session, admin, hostel):
    admin.generate_org_code()
    db_session.commit()

    response = client.post("/api/auth/register", json=_register_body(organizational_code=admin.organizational_code))

    assert response.status_code == 201
    assert response.json()['property_id'] == hostel.id


def test_register_with_unknown_code(client):
    response = client.post("/api/auth/register", json=_register_body(organizational_code='ORG-NOPE'))

    assert response.status_code == 400
    assert response.json()['detail'] == 'Invalid organizational code'


def test_register_duplicate_email(client):
    body = _register_body()
    client.post("/api/auth/register", json=body)

    response = client.post("/api/auth/register", json=body)

    assert response.status_code == 400
    assert response.json()['detail'] == 'User already exists'


def test_register_weak_password(client):
    response = client.post("/api/auth/register", json=_register_body(password='password'))

    assert response.status_code == 400
    assert response.json()['detail'] == 'Password must contain at least one uppercase letter'


def test_login(client, admin):
    response = client.post("/api/auth/login", json={'email': admin.email.upper(), 'password': TEST_PASSWORD})

    assert response.status_code == 200
    data = response.json()
    assert data['id'] == admin.id
    assert data['role'] == 'admin'
    assert data['requires_onboarding'] is False

    profile = client.get("/api/auth/profile", headers={'Authorization': f"Bearer {data['token']}"})
    assert profile.status_code == 200
    assert profile.json()['email'] == admin.email


def test_login_wrong_password(client, admin):
    response = client.post("/api/auth/login", json={'email': admin.email, 'password': 'Wrong@1234'})

    assert response.status_code == 400
    assert response.json()['detail'] == 'Invalid credentials'


def test_login_unknown_email_same_message(client):
    response = client.post("/api/auth/login", json={'email': 'ghost@example.com', 'password': 'Wrong@1234'})

    assert response.status_code == 400
    assert response.json()['detail'] == 'Invalid credentials'


def test_profile_update(client, staff, staff_headers):
    response = client.put("/api/auth/profile", json={'name': 'Kavya R', 'phone': '9123456789'}, headers=staff_headers)

    assert response.status_code == 200
    assert response.json()['name'] == 'Kavya R'
    assert response.json()['phone'] == '9123456789'


def test_profile_email_taken(client, admin, staff_headers):
    response = client.put("/api/auth/profile", json={'email': admin.email}, headers=staff_headers)

    assert response.status_code == 400
    assert response.json()['detail'] == 'Email already in use'


def test_settings_are_merged(client, staff_headers):
    response = client.put(
        "/api/auth/settings",
        json={'notifications': {'email_notifications': {'system_updates': True}}},
        headers=staff_headers,
    )

    assert response.status_code == 200
    email_prefs = response.json()['settings']['notifications']['email_notifications']
    assert email_prefs['system_updates'] is True
    assert email_prefs['new_tenants'] is True


def test_change_password(client, db_session, staff, staff_headers):
    wrong = client.put(
        "/api/auth/change-password",
        json={'current_password': 'Nope@1234', 'new_password': 'N3w@Password'},
        headers=staff_headers,
    )
    assert wrong.status_code == 400
    assert wrong.json()['detail'] == 'Current password is incorrect'

    response = client.put(
        "/api/auth/change-password",
        json={'current_password': TEST_PASSWORD, 'new_password': 'N3w@Password'},
        headers=staff_headers,
    )
    assert response.status_code == 200
    db_session.expire_all()
    assert verify_password('N3w@Password', db_session.get(User, staff.id).password)


def test_forgot_and_reset_password(client, db_session, staff, outbound):
    response = client.post("/api/auth/forgot-password", json={'email': staff.email})

    assert response.status_code == 200
    reset_url = response.json()['reset_url']
    assert reset_url.startswith('http://testserver/reset-password/')
    assert outbound['email'][0]['to'] == staff.email

    token = reset_url.rsplit('/', 1)[-1]
    reset = client.post("/api/auth/reset-password", json={'token': token, 'password': 'Fresh@Pass1'})
    assert reset.status_code == 200

    login = client.post("/api/auth/login", json={'email': staff.email, 'password': 'Fresh@Pass1'})
    assert login.status_code == 200

    reused = client.post("/api/auth/reset-password", json={'token': token, 'password': 'Other@Pass1'})
    assert reused.status_code == 400
    assert reused.json()['detail'] == 'Invalid or expired reset token'


def test_forgot_password_unknown_email(client):
    response = client.post("/api/auth/forgot-password", json={'email': 'nobody@example.com'})

    assert response.status_code == 404


def test_expired_reset_token(client, db_session, staff):
    response = client.post("/api/auth/forgot-password", json={'email': staff.email})
    token = response.json()['reset_url'].rsplit('/', 1)[-1]
    user = db_session.get(User, staff.id)
    user.reset_password_expire = utcnow() - timedelta(minutes=1)
    db_session.commit()

    reset = client.post("/api/auth/reset-password", json={'token': token, 'password': 'Fresh@Pass1'})

    assert reset.status_code == 400


def test_onboarded_tenant_does_not_require_onboarding(client, db_session, hostel, tenant_factory):
    tenant = tenant_factory()
    user = make_user(db_session, Role.TENANT, property_id=hostel.id, email=tenant.email)
    user.tenant_id = tenant.id
    db_session.commit()

    response = client.post("/api/auth/login", json={'email': user.email, 'password': TEST_PASSWORD})

    assert response.json()['requires_onboarding'] is False
    assert response.json()['tenant_id'] == tenant.id


def test_profile_requires_token(client):
    assert client.get("/api/auth/profile").status_code == 401


def test_token_for_deleted_user(client, db_session, staff):
    headers = auth_header(staff)
    db_session.delete(staff)
    db_session.commit()

    response = client.get("/api/auth/profile", headers=headers)

    assert response.status_code == 401
    assert response.json()['detail'] == 'Not authorized, user not found'
