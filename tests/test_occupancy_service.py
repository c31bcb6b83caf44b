import pytest

from exceptions import ConflictError, NotFoundError
from models import Room
from services import occupancy_service


def test_reserve_seat_increments_occupancy(db_session, room_factory):
    room = room_factory(capacity=3, occupancy=1)

    occupancy_service.reserve_seat(db_session, room.id)
    db_session.commit()
    db_session.expire_all()

    room = db_session.get(Room, room.id)
    assert room.occupancy == 2
    assert room.status == 'available'


def test_reserve_last_seat_marks_room_occupied(db_session, room_factory):
    room = room_factory(capacity=2, occupancy=1)

    occupancy_service.reserve_seat(db_session, room.id)
    db_session.commit()
    db_session.expire_all()

    room = db_session.get(Room, room.id)
    assert room.occupancy == 2
    assert room.status == 'occupied'


def test_reserve_seat_in_full_room_is_refused(db_session, room_factory):
    room = room_factory(capacity=1, occupancy=1, status='occupied')

    with pytest.raises(ConflictError) as exc:
        occupancy_service.reserve_seat(db_session, room.id)
    assert exc.value.message == 'Room is fully occupied'

    db_session.expire_all()
    assert db_session.get(Room, room.id).occupancy == 1


def test_reserve_seat_missing_room(db_session):
    with pytest.raises(NotFoundError):
        occupancy_service.reserve_seat(db_session, 9999)


def test_repeated_reservations_never_exceed_capacity(db_session, room_factory):
    room = room_factory(capacity=3)

    granted = 0
    for _ in range(5):
        try:
            occupancy_service.reserve_seat(db_session, room.id)
            granted += 1
        except ConflictError:
            pass
    db_session.commit()
    db_session.expire_all()

    room = db_session.get(Room, room.id)
    assert granted == 3
    assert room.occupancy == room.capacity == 3


def test_release_seat_reopens_room(db_session, room_factory):
    room = room_factory(capacity=2, occupancy=2, status='occupied')

    occupancy_service.release_seat(db_session, room.id)
    db_session.commit()
    db_session.expire_all()

    room = db_session.get(Room, room.id)
    assert room.occupancy == 1
    assert room.status == 'available'


def test_release_seat_never_goes_negative(db_session, room_factory):
    room = room_factory(capacity=2, occupancy=0)

    occupancy_service.release_seat(db_session, room.id)
    db_session.commit()
    db_session.expire_all()

    assert db_session.get(Room, room.id).occupancy == 0


def test_release_keeps_maintenance_status(db_session, room_factory):
    room = room_factory(capacity=2, occupancy=2, status='maintenance')

    occupancy_service.release_seat(db_session, room.id)
    db_session.commit()
    db_session.expire_all()

    room = db_session.get(Room, room.id)
    assert room.occupancy == 1
    assert room.status == 'maintenance'


def test_ensure_room_has_space(db_session, room_factory):
    open_room = room_factory(capacity=2, occupancy=1)
    full_room = room_factory(capacity=1, occupancy=1, status='occupied')

    assert occupancy_service.ensure_room_has_space(db_session, open_room.id).id == open_room.id
    with pytest.raises(ConflictError):
        occupancy_service.ensure_room_has_space(db_session, full_room.id)


@pytest.mark.parametrize(
    'status,occupancy,capacity,expected',
    [
        ('available', 0, 2, 'available'),
        ('available', 2, 2, 'occupied'),
        ('occupied', 1, 2, 'available'),
        ('maintenance', 2, 2, 'maintenance'),
    ],
)
def test_status_for(status, occupancy, capacity, expected):
    room = Room(status=status, occupancy=occupancy, capacity=capacity)
    assert occupancy_service.status_for(room) == expected
