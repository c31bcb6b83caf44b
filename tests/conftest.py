"""
RootnSpace API - Test Configuration and Fixtures
"""
import os
import tempfile
from decimal import Decimal
from typing import Generator

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# Set testing environment before the app modules read it
_tmp_dir = tempfile.mkdtemp(prefix="rootnspace-tests-")
os.environ['JWT_SECRET'] = 'test-jwt-secret-for-testing-only'
os.environ['DATABASE_URL'] = f"sqlite:///{os.path.join(_tmp_dir, 'app.db')}"
os.environ['UPLOAD_DIR'] = os.path.join(_tmp_dir, 'uploads')
os.environ['SEED_DEFAULTS'] = 'false'
os.environ['RESET_URL_IN_RESPONSE'] = 'true'
os.environ['FRONTEND_URL'] = 'http://testserver'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
for _name in ('TWILIO_ACCOUNT_SID', 'TWILIO_AUTH_TOKEN', 'TWILIO_PHONE_NUMBER', 'BREVO_API_KEY', 'AZURE_STORAGE_ACCOUNT'):
    os.environ.pop(_name, None)

from main import app  # noqa: E402
from database import get_session  # noqa: E402
from models import (  # noqa: E402
    ApprovalStatus,
    Base,
    HostelVerificationStatus,
    Property,
    Role,
    Room,
    Tenant,
    User,
    VerificationStatus,
)
from models.user import default_settings  # noqa: E402
from security import create_access_token, hash_password  # noqa: E402
from utils import email as mailer  # noqa: E402
from utils import sms  # noqa: E402

fake = Faker()

# Unpatched gateway functions, for the tests that exercise them directly
real_send_sms = sms.send_sms
real_send_email = mailer.send_email

TEST_PASSWORD = 'Test@1234'


def _phone() -> str:
    return fake.numerify('9#########')


@pytest.fixture(scope='function')
def db_session(tmp_path) -> Generator[Session, None, None]:
    """Fresh SQLite database file for each test"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={'check_same_thread': False},
    )
    Base.metadata.create_all(bind=engine)
    TestSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client sharing the test session with the app"""
    def override_get_session():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def outbound(monkeypatch):
    """Capture SMS and email instead of calling Twilio/Brevo"""
    sent = {'sms': [], 'email': []}

    def fake_send_sms(phone, body, purpose='general'):
        sent['sms'].append({'phone': phone, 'body': body, 'purpose': purpose})
        if not phone:
            return sms.SmsResult(success=False, error='No phone number')
        return sms.SmsResult(success=True, sid=f"SM{len(sent['sms']):04d}")

    def fake_send_email(to_email, subject, html):
        sent['email'].append({'to': to_email, 'subject': subject, 'html': html})
        return True

    monkeypatch.setattr(sms, 'send_sms', fake_send_sms)
    monkeypatch.setattr(mailer, 'send_email', fake_send_email)
    return sent


def make_user(db: Session, role: Role, property_id=None, **overrides) -> User:
    user = User(
        name=overrides.pop('name', fake.name()),
        email=overrides.pop('email', fake.unique.email()),
        phone=overrides.pop('phone', _phone()),
        password=hash_password(overrides.pop('password', TEST_PASSWORD)),
        role=role.value,
        property_id=property_id,
        verification_status=overrides.pop('verification_status', VerificationStatus.VERIFIED.value),
        settings=default_settings(),
        **overrides,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_header(user: User) -> dict:
    return {'Authorization': f'Bearer {create_access_token(user.id)}'}


@pytest.fixture
def hostel(db_session: Session) -> Property:
    """Verified hostel the admin/staff fixtures belong to"""
    prop = Property(
        name=f"{fake.last_name()} PG",
        address=fake.address(),
        verification_status=HostelVerificationStatus.VERIFIED.value,
        organizational_code=f"ORG-{fake.unique.hexify('^^^^^^^^').upper()}",
    )
    db_session.add(prop)
    db_session.commit()
    db_session.refresh(prop)
    return prop


@pytest.fixture
def other_hostel(db_session: Session) -> Property:
    prop = Property(
        name=f"{fake.last_name()} Residency",
        address=fake.address(),
        verification_status=HostelVerificationStatus.PENDING.value,
        organizational_code=f"ORG-{fake.unique.hexify('^^^^^^^^').upper()}",
    )
    db_session.add(prop)
    db_session.commit()
    db_session.refresh(prop)
    return prop


@pytest.fixture
def superadmin(db_session: Session) -> User:
    return make_user(db_session, Role.SUPERADMIN)


@pytest.fixture
def admin(db_session: Session, hostel: Property) -> User:
    user = make_user(db_session, Role.ADMIN, property_id=hostel.id)
    hostel.owner_id = user.id
    db_session.commit()
    return user


@pytest.fixture
def staff(db_session: Session, hostel: Property) -> User:
    return make_user(db_session, Role.STAFF, property_id=hostel.id)


@pytest.fixture
def tenant_user(db_session: Session, hostel: Property) -> User:
    """Registered tenant account that has not onboarded yet"""
    return make_user(db_session, Role.TENANT, property_id=hostel.id, verification_status=VerificationStatus.UNVERIFIED.value)


@pytest.fixture
def superadmin_headers(superadmin: User) -> dict:
    return auth_header(superadmin)


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return auth_header(admin)


@pytest.fixture
def staff_headers(staff: User) -> dict:
    return auth_header(staff)


@pytest.fixture
def tenant_headers(tenant_user: User) -> dict:
    return auth_header(tenant_user)


@pytest.fixture
def room_factory(db_session: Session, hostel: Property):
    """Create rooms in the default test hostel"""
    counter = {'n': 100}

    def _make(capacity=1, occupancy=0, status='available', property_id=None, rent=6500, **overrides) -> Room:
        counter['n'] += 1
        room = Room(
            property_id=property_id or hostel.id,
            number=overrides.pop('number', str(counter['n'])),
            type=overrides.pop('type', 'single' if capacity == 1 else 'shared'),
            rent=Decimal(str(rent)),
            capacity=capacity,
            occupancy=occupancy,
            status=status,
            active=overrides.pop('active', True),
        )
        db_session.add(room)
        db_session.commit()
        db_session.refresh(room)
        return room

    return _make


@pytest.fixture
def tenant_factory(db_session: Session, hostel: Property):
    """
    Create tenant records directly. Approved+active tenants are expected to
    be counted in the room's occupancy by the caller (room_factory occupancy).
    """
    def _make(room=None, approval_status=ApprovalStatus.PENDING, active=False, property_id=None, **overrides) -> Tenant:
        tenant = Tenant(
            property_id=property_id or (room.property_id if room is not None else hostel.id),
            first_name=overrides.pop('first_name', fake.first_name()),
            last_name=overrides.pop('last_name', fake.last_name()),
            email=overrides.pop('email', fake.unique.email()),
            phone=overrides.pop('phone', _phone()),
            room_id=room.id if room is not None else None,
            approval_status=approval_status.value,
            active=active,
            terms_accepted=True,
            **overrides,
        )
        db_session.add(tenant)
        db_session.commit()
        db_session.refresh(tenant)
        return tenant

    return _make
