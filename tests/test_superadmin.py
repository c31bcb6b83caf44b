import io

from models import ApprovalStatus, Payment, Property, Room, Tenant, User
from tests.conftest import fake


def test_routes_require_superadmin(client, admin_headers):
    response = client.get("/api/superadmin/stats", headers=admin_headers)

    assert response.status_code == 403
    assert response.json()['detail'] == 'Super Admin access required'


def test_platform_stats(client, superadmin_headers, admin, other_hostel, room_factory, tenant_factory):
    room = room_factory(capacity=2, occupancy=1)
    tenant_factory(room=room, approval_status=ApprovalStatus.APPROVED, active=True)
    tenant_factory()

    data = client.get("/api/superadmin/stats", headers=superadmin_headers).json()

    assert data['total_hostels'] == 2
    assert data['verified_hostels'] == 1
    assert data['pending_hostels'] == 1
    assert data['total_admins'] == 1
    assert data['total_tenants'] == 2
    assert data['active_tenants'] == 1
    assert data['total_rooms'] == 1
    assert data['available_rooms'] == 1


def test_create_hostel_issues_code(client, superadmin_headers):
    response = client.post(
        "/api/superadmin/hostels",
        json={'name': 'Green Nest PG', 'address': '12 Anna Salai, Chennai', 'owner_full_name': 'S. Lakshmi'},
        headers=superadmin_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data['organizational_code'].startswith('ORG-')
    assert data['verification_status'] == 'pending'
    assert data['owner_id'] is None


def test_create_hostel_with_owner(client, db_session, superadmin_headers):
    owner = client.post(
        "/api/superadmin/admins",
        json={'name': 'Ravi Shankar', 'email': fake.unique.email(), 'phone': '9876501234', 'password': 'Admin@1234'},
        headers=superadmin_headers,
    ).json()

    response = client.post(
        "/api/superadmin/hostels",
        json={'name': 'Sunrise Hostel', 'address': 'Madurai', 'owner_id': owner['id']},
        headers=superadmin_headers,
    )

    assert response.status_code == 201
    assert response.json()['owner']['id'] == owner['id']
    db_session.expire_all()
    assert db_session.get(User, owner['id']).property_id == response.json()['id']


def test_create_hostel_owner_must_be_admin(client, superadmin_headers, staff):
    response = client.post(
        "/api/superadmin/hostels",
        json={'name': 'Bad Owner PG', 'address': 'Trichy', 'owner_id': staff.id},
        headers=superadmin_headers,
    )

    assert response.status_code == 400
    assert response.json()['detail'] == 'Owner must be an existing admin'


def test_list_hostels_with_stats(client, superadmin_headers, hostel, other_hostel, room_factory, tenant_factory):
    room_factory()
    tenant_factory()

    data = client.get("/api/superadmin/hostels", headers=superadmin_headers).json()
    pending = client.get("/api/superadmin/hostels", params={'status': 'pending'}, headers=superadmin_headers).json()

    assert data['total'] == 2
    stats = {h['id']: h['stats'] for h in data['hostels']}
    assert stats[hostel.id]['total_rooms'] == 1
    assert stats[hostel.id]['pending_tenants'] == 1
    assert stats[other_hostel.id]['total_tenants'] == 0
    assert [h['id'] for h in pending['hostels']] == [other_hostel.id]


def test_unassigned_hostels(client, superadmin_headers, admin, other_hostel):
    response = client.get("/api/superadmin/hostels-unassigned", headers=superadmin_headers)

    assert [h['id'] for h in response.json()] == [other_hostel.id]


def test_hostel_detail(client, superadmin_headers, hostel, admin, staff, room_factory, tenant_factory):
    room_factory()
    tenant_factory()

    response = client.get(f"/api/superadmin/hostels/{hostel.id}", headers=superadmin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data['hostel']['id'] == hostel.id
    assert len(data['rooms']) == 1
    assert len(data['tenants']) == 1
    assert {a['id'] for a in data['admins']} == {admin.id, staff.id}


def test_missing_hostel(client, superadmin_headers):
    response = client.get("/api/superadmin/hostels/999", headers=superadmin_headers)

    assert response.status_code == 404
    assert response.json()['detail'] == 'Hostel not found'


def test_verify_hostel_verifies_owner(client, db_session, superadmin, superadmin_headers, other_hostel):
    owner = User(name='Owner', email=fake.unique.email(), phone='9000000001', password='x', role='admin',
                 property_id=other_hostel.id, verification_status='pending')
    db_session.add(owner)
    db_session.flush()
    other_hostel.owner_id = owner.id
    db_session.commit()

    response = client.put(
        f"/api/superadmin/hostels/{other_hostel.id}/verify",
        json={'action': 'verify'},
        headers=superadmin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data['message'] == 'Hostel verified successfully'
    assert data['hostel']['verification_status'] == 'verified'
    assert data['hostel']['verified_by'] == superadmin.id
    db_session.expire_all()
    assert db_session.get(User, owner.id).verification_status == 'verified'


def test_reject_hostel(client, superadmin_headers, other_hostel):
    response = client.put(
        f"/api/superadmin/hostels/{other_hostel.id}/verify",
        json={'action': 'reject', 'reason': 'Fire NOC missing'},
        headers=superadmin_headers,
    )

    assert response.json()['message'] == 'Hostel rejected successfully'
    assert response.json()['hostel']['rejection_reason'] == 'Fire NOC missing'


def test_verify_hostel_invalid_action(client, superadmin_headers, other_hostel):
    response = client.put(
        f"/api/superadmin/hostels/{other_hostel.id}/verify",
        json={'action': 'approve'},
        headers=superadmin_headers,
    )

    assert response.status_code == 400
    assert response.json()['detail'] == "Invalid action. Use 'verify' or 'reject'."


def test_upload_compliance_document(client, superadmin_headers, other_hostel):
    response = client.put(
        f"/api/superadmin/hostels/{other_hostel.id}/documents/trade_license",
        files={'file': ('license.pdf', io.BytesIO(b'%PDF-1.4 test'), 'application/pdf')},
        headers=superadmin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data['trade_license'].startswith(f"/uploads/compliance/{other_hostel.id}/")
    assert data['verification_status'] == 'under_review'


def test_upload_unknown_document(client, superadmin_headers, other_hostel):
    response = client.put(
        f"/api/superadmin/hostels/{other_hostel.id}/documents/passport_photo",
        files={'file': ('photo.png', io.BytesIO(b'png'), 'image/png')},
        headers=superadmin_headers,
    )

    assert response.status_code == 400
    assert response.json()['detail'] == 'Unknown document type'


def test_delete_hostel_removes_everything(client, db_session, superadmin_headers, admin, hostel, room_factory, tenant_factory):
    room = room_factory(capacity=1, occupancy=1, status='occupied')
    tenant = tenant_factory(room=room, approval_status=ApprovalStatus.APPROVED, active=True)
    db_session.add(Payment(tenant_id=tenant.id, property_id=hostel.id, amount=6500))
    db_session.commit()

    hostel_id = hostel.id

    response = client.delete(f"/api/superadmin/hostels/{hostel_id}", headers=superadmin_headers)

    assert response.status_code == 200
    db_session.expire_all()
    assert db_session.get(Property, hostel_id) is None
    assert db_session.query(Room).count() == 0
    assert db_session.query(Tenant).count() == 0
    assert db_session.query(Payment).count() == 0
    assert db_session.get(User, admin.id).property_id is None


def test_create_admin_for_unowned_hostel(client, db_session, superadmin_headers, other_hostel):
    response = client.post(
        "/api/superadmin/admins",
        json={
            'name': 'Anitha M',
            'email': 'Anitha@Example.com',
            'phone': '9876512345',
            'password': 'Admin@1234',
            'property_id': other_hostel.id,
        },
        headers=superadmin_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data['role'] == 'admin'
    assert data['email'] == 'anitha@example.com'
    assert data['verification_status'] == 'pending'
    assert data['organizational_code'].startswith('ORG-')
    db_session.expire_all()
    assert db_session.get(Property, other_hostel.id).owner_id == data['id']


def test_create_admin_duplicate_email(client, superadmin_headers, staff):
    response = client.post(
        "/api/superadmin/admins",
        json={'name': 'Dup', 'email': staff.email, 'phone': '9876512345', 'password': 'Admin@1234'},
        headers=superadmin_headers,
    )

    assert response.status_code == 400
    assert response.json()['detail'] == 'User already exists'


def test_list_and_update_admins(client, superadmin_headers, admin, other_hostel):
    listed = client.get("/api/superadmin/admins", headers=superadmin_headers).json()
    assert [a['id'] for a in listed['admins']] == [admin.id]
    assert listed['admins'][0]['property']['id'] == admin.property_id

    response = client.put(
        f"/api/superadmin/admins/{admin.id}",
        json={'property_id': other_hostel.id, 'verification_status': 'verified'},
        headers=superadmin_headers,
    )

    assert response.status_code == 200
    assert response.json()['property']['id'] == other_hostel.id
    assert response.json()['verification_status'] == 'verified'


def test_delete_admin_unassigns_hostel(client, db_session, superadmin_headers, admin, hostel):
    response = client.delete(f"/api/superadmin/admins/{admin.id}", headers=superadmin_headers)

    assert response.status_code == 200
    db_session.expire_all()
    assert db_session.get(User, admin.id) is None
    assert db_session.get(Property, hostel.id).owner_id is None


def test_superadmin_cannot_be_deleted_or_demoted(client, superadmin, superadmin_headers):
    deleted = client.delete(f"/api/superadmin/admins/{superadmin.id}", headers=superadmin_headers)
    demoted = client.put(f"/api/superadmin/admins/{superadmin.id}/role", json={'role': 'staff'}, headers=superadmin_headers)

    assert deleted.status_code == 403
    assert deleted.json()['detail'] == 'Cannot delete superadmin'
    assert demoted.status_code == 403
    assert demoted.json()['detail'] == 'Cannot change superadmin role'


def test_promote_to_admin_issues_code(client, superadmin_headers, staff):
    response = client.put(f"/api/superadmin/admins/{staff.id}/role", json={'role': 'admin'}, headers=superadmin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data['message'] == 'User role updated to admin'
    assert data['user']['role'] == 'admin'
    assert data['user']['organizational_code'].startswith('ORG-')


def test_invalid_role(client, superadmin_headers, staff):
    response = client.put(f"/api/superadmin/admins/{staff.id}/role", json={'role': 'superadmin'}, headers=superadmin_headers)

    assert response.status_code == 400
    assert response.json()['detail'] == 'Invalid role'
