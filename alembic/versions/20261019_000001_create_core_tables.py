"""Create users, properties, rooms and tenants tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

users and properties reference each other, so the users -> properties and
users -> tenants foreign keys are added after all four tables exist.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DOCUMENT_COLUMNS = (
    'owner_government_id',
    'trade_license',
    'fire_safety_certificate',
    'noc',
    'proof_of_address',
    'gst_certificate',
    'building_occupancy_certificate',
    'lease_agreement',
    'insurance_certificate',
    'health_sanitation_certificate',
)


def upgrade() -> None:
    """Create the core tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='tenant'),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('email_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('phone_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('tenant_id', sa.Integer(), nullable=True),
        sa.Column('verification_status', sa.String(20), nullable=False, server_default='unverified'),
        sa.Column('verified_at', sa.DateTime(), nullable=True),
        sa.Column('organizational_code', sa.String(50), nullable=True),
        sa.Column('qr_code', sa.String(500), nullable=True),
        sa.Column('reset_password_token', sa.String(64), nullable=True),
        sa.Column('reset_password_expire', sa.DateTime(), nullable=True),
        sa.Column('profile_image', sa.String(500), nullable=True),
        sa.Column('settings', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('organizational_code', name='uq_users_organizational_code'),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_property_id', 'users', ['property_id'])
    op.create_index('ix_users_verification_status', 'users', ['verification_status'])
    op.create_index('ix_users_reset_password_token', 'users', ['reset_password_token'])

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=True),
        sa.Column('owner_full_name', sa.String(200), nullable=True),
        sa.Column('owner_pan', sa.String(20), nullable=True),
        sa.Column('owner_business_phone', sa.String(20), nullable=True),
        sa.Column('owner_business_email', sa.String(255), nullable=True),
        sa.Column('owner_personal_phone', sa.String(20), nullable=True),
        sa.Column('owner_personal_email', sa.String(255), nullable=True),
        sa.Column('owner_government_id_type', sa.String(20), nullable=True),
        *[sa.Column(name, sa.String(500), nullable=True) for name in DOCUMENT_COLUMNS],
        sa.Column('verification_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('verified_at', sa.DateTime(), nullable=True),
        sa.Column('verified_by', sa.Integer(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('organizational_code', sa.String(50), nullable=True),
        sa.Column('qr_code', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_properties_owner_id', ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['verified_by'], ['users.id'], name='fk_properties_verified_by', ondelete='NO ACTION'),
        sa.UniqueConstraint('organizational_code', name='uq_properties_organizational_code'),
    )
    op.create_index('ix_properties_owner_id', 'properties', ['owner_id'])
    op.create_index('ix_properties_verification_status', 'properties', ['verification_status'])

    op.create_table(
        'rooms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('number', sa.String(50), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='single'),
        sa.Column('rent', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('occupancy', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(20), nullable=False, server_default='available'),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_rooms_property_id', ondelete='CASCADE'),
        sa.UniqueConstraint('property_id', 'number', name='uq_rooms_property_number'),
        sa.CheckConstraint('occupancy >= 0 AND occupancy <= capacity', name='ck_rooms_occupancy_bounds'),
    )
    op.create_index('ix_rooms_property_id', 'rooms', ['property_id'])
    op.create_index('ix_rooms_status', 'rooms', ['status'])
    op.create_index('ix_rooms_active', 'rooms', ['active'])
    op.create_index('ix_rooms_property_status', 'rooms', ['property_id', 'status'])
    op.create_index('ix_rooms_type_status', 'rooms', ['type', 'status'])

    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(10), nullable=True),
        sa.Column('occupation', sa.String(255), nullable=True),
        sa.Column('native_place', sa.String(255), nullable=True),
        sa.Column('aadhar_number', sa.String(12), nullable=True),
        sa.Column('identity_proof', sa.String(500), nullable=True),
        sa.Column('photo', sa.String(500), nullable=True),
        sa.Column('room_id', sa.Integer(), nullable=True),
        sa.Column('room_category', sa.String(50), nullable=True),
        sa.Column('move_in_date', sa.Date(), nullable=True),
        sa.Column('expected_duration', sa.String(50), nullable=True),
        sa.Column('security_deposit', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('vacated_at', sa.DateTime(), nullable=True),
        sa.Column('emergency_contact_name', sa.String(200), nullable=True),
        sa.Column('emergency_contact_relationship', sa.String(100), nullable=True),
        sa.Column('emergency_contact_phone', sa.String(20), nullable=True),
        sa.Column('blood_group', sa.String(3), nullable=True, server_default=''),
        sa.Column('medical_condition', sa.Text(), nullable=True),
        sa.Column('terms_accepted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('terms_accepted_at', sa.DateTime(), nullable=True),
        sa.Column('digital_signature', sa.Text(), nullable=True),
        sa.Column('organizational_code', sa.String(50), nullable=True),
        sa.Column('approval_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('approved_by', sa.Integer(), nullable=True),
        sa.Column('approval_date', sa.DateTime(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_tenants_property_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], name='fk_tenants_room_id', ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['approved_by'], ['users.id'], name='fk_tenants_approved_by', ondelete='NO ACTION'),
        sa.UniqueConstraint('email', name='uq_tenants_email'),
    )
    op.create_index('ix_tenants_email', 'tenants', ['email'])
    op.create_index('ix_tenants_property_id', 'tenants', ['property_id'])
    op.create_index('ix_tenants_room_id', 'tenants', ['room_id'])
    op.create_index('ix_tenants_approval_status', 'tenants', ['approval_status'])
    op.create_index('ix_tenants_active', 'tenants', ['active'])
    op.create_index('ix_tenants_created_at', 'tenants', ['created_at'])
    op.create_index('ix_tenants_organizational_code', 'tenants', ['organizational_code'])

    with op.batch_alter_table('users') as batch:
        batch.create_foreign_key(
            'fk_users_property_id', 'properties', ['property_id'], ['id'], ondelete='SET NULL'
        )
        batch.create_foreign_key('fk_users_tenant_id', 'tenants', ['tenant_id'], ['id'], ondelete='SET NULL')


def downgrade() -> None:
    """Drop the core tables."""
    with op.batch_alter_table('users') as batch:
        batch.drop_constraint('fk_users_tenant_id', type_='foreignkey')
        batch.drop_constraint('fk_users_property_id', type_='foreignkey')
    op.drop_table('tenants')
    op.drop_table('rooms')
    op.drop_table('properties')
    op.drop_table('users')
