import config
from models import Property, Role, User
from security import verify_password
from services.seed_service import seed_defaults


def test_seed_creates_superadmin_and_default_hostel(db_session):
    assert seed_defaults(db_session) is True

    superadmin = db_session.query(User).filter(User.role == Role.SUPERADMIN.value).one()
    assert superadmin.email == config.SUPERADMIN_EMAIL
    assert verify_password(config.SUPERADMIN_PASSWORD, superadmin.password)

    hostel = db_session.query(Property).one()
    assert hostel.name == config.DEFAULT_HOSTEL_NAME
    assert hostel.verification_status == 'verified'
    assert hostel.organizational_code.startswith('ORG-')


def test_seed_is_idempotent(db_session):
    seed_defaults(db_session)
    seed_defaults(db_session)

    assert db_session.query(User).count() == 1
    assert db_session.query(Property).count() == 1


def test_seed_keeps_existing_hostels(db_session, hostel, superadmin):
    seed_defaults(db_session)

    assert db_session.query(Property).count() == 1
    assert db_session.query(User).filter(User.role == Role.SUPERADMIN.value).count() == 1
