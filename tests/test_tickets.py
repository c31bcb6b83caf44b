from models import ApprovalStatus, Ticket


def _onboarded(db_session, tenant_user, room_factory, tenant_factory):
    room = room_factory(capacity=1, occupancy=1, status='occupied')
    tenant = tenant_factory(room=room, approval_status=ApprovalStatus.APPROVED, active=True, email=tenant_user.email)
    tenant_user.tenant_id = tenant.id
    db_session.commit()
    return tenant


def test_tenant_raises_ticket(client, db_session, tenant_user, tenant_headers, room_factory, tenant_factory):
    tenant = _onboarded(db_session, tenant_user, room_factory, tenant_factory)

    response = client.post(
        "/api/tickets",
        json={'title': 'Geyser not heating', 'category': 'maintenance', 'priority': 'high'},
        headers=tenant_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data['tenant_id'] == tenant.id
    assert data['room_id'] == tenant.room_id
    assert data['property_id'] == tenant.property_id
    assert data['status'] == 'open'
    assert data['created_by'] == tenant_user.id


def test_ticket_requires_onboarding(client, tenant_headers):
    response = client.post("/api/tickets", json={'title': 'Noise at night'}, headers=tenant_headers)

    assert response.status_code == 400
    assert response.json()['detail'] == 'Complete onboarding before raising tickets'


def test_ticket_title_required(client, staff_headers):
    response = client.post("/api/tickets", json={'title': '   '}, headers=staff_headers)

    assert response.status_code == 400
    assert response.json()['detail'] == 'Title is required'


def test_staff_raises_ticket_for_tenant(client, staff_headers, tenant_factory):
    tenant = tenant_factory()

    response = client.post(
        "/api/tickets",
        json={'title': 'Broken window', 'tenant_id': tenant.id},
        headers=staff_headers,
    )

    assert response.status_code == 201
    assert response.json()['tenant_id'] == tenant.id


def test_resolving_stamps_resolved_at(client, staff_headers, tenant_factory):
    tenant = tenant_factory()
    ticket = client.post("/api/tickets", json={'title': 'Leak', 'tenant_id': tenant.id}, headers=staff_headers).json()

    resolved = client.put(
        f"/api/tickets/{ticket['id']}",
        json={'status': 'resolved', 'resolution_notes': 'Plumber fixed the joint'},
        headers=staff_headers,
    ).json()
    reopened = client.put(f"/api/tickets/{ticket['id']}", json={'status': 'open'}, headers=staff_headers).json()

    assert resolved['status'] == 'resolved'
    assert resolved['resolved_at'] is not None
    assert reopened['resolved_at'] is None


def test_tenant_cannot_change_status(client, db_session, tenant_user, tenant_headers, room_factory, tenant_factory):
    _onboarded(db_session, tenant_user, room_factory, tenant_factory)
    ticket = client.post("/api/tickets", json={'title': 'Wifi down'}, headers=tenant_headers).json()

    response = client.put(f"/api/tickets/{ticket['id']}", json={'status': 'closed'}, headers=tenant_headers)
    reworded = client.put(f"/api/tickets/{ticket['id']}", json={'title': 'Wifi down on 2nd floor'}, headers=tenant_headers)

    assert response.status_code == 403
    assert reworded.status_code == 200
    assert reworded.json()['title'] == 'Wifi down on 2nd floor'


def test_tenant_cannot_edit_handled_ticket(client, db_session, tenant_user, tenant_headers, room_factory, tenant_factory):
    tenant = _onboarded(db_session, tenant_user, room_factory, tenant_factory)
    ticket = Ticket(tenant_id=tenant.id, property_id=tenant.property_id, title='Lock jammed', status='in_progress')
    db_session.add(ticket)
    db_session.commit()

    response = client.put(f"/api/tickets/{ticket.id}", json={'title': 'Lock still jammed'}, headers=tenant_headers)

    assert response.status_code == 400
    assert response.json()['detail'] == 'Only open tickets can be edited'


def test_ticket_visibility(client, db_session, tenant_user, tenant_headers, staff_headers, other_hostel, room_factory, tenant_factory):
    own = _onboarded(db_session, tenant_user, room_factory, tenant_factory)
    neighbour = tenant_factory()
    foreign = tenant_factory(property_id=other_hostel.id)
    db_session.add_all([
        Ticket(tenant_id=own.id, property_id=own.property_id, title='Mine'),
        Ticket(tenant_id=neighbour.id, property_id=neighbour.property_id, title='Neighbour'),
        Ticket(tenant_id=foreign.id, property_id=other_hostel.id, title='Elsewhere'),
    ])
    db_session.commit()

    mine = client.get("/api/tickets", headers=tenant_headers).json()
    hostel_wide = client.get("/api/tickets", headers=staff_headers).json()

    assert [t['title'] for t in mine['tickets']] == ['Mine']
    assert hostel_wide['total'] == 2


def test_delete_ticket_is_admin_only(client, staff_headers, admin_headers, tenant_factory):
    tenant = tenant_factory()
    ticket = client.post("/api/tickets", json={'title': 'Leak', 'tenant_id': tenant.id}, headers=staff_headers).json()

    assert client.delete(f"/api/tickets/{ticket['id']}", headers=staff_headers).status_code == 403
    response = client.delete(f"/api/tickets/{ticket['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert client.get(f"/api/tickets/{ticket['id']}", headers=admin_headers).status_code == 404
