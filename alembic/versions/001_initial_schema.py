"""initial_schema

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _base_columns():
    return [
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    userrole = sa.Enum('STUDENT', 'ADMIN', 'MASTER', name='userrole')

    op.create_table('users',
        *_base_columns(),
        sa.Column('external_id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('role', userrole, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('qr_code', sa.Text(), nullable=True),
        sa.Column('qr_code_data', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_external_id', 'users', ['external_id'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('students',
        *_base_columns(),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('registration_number', sa.String(length=50), nullable=False),
        sa.Column('department', sa.String(length=255), nullable=True),
        sa.Column('program', sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
        sa.UniqueConstraint('registration_number')
    )
    op.create_index('ix_students_id', 'students', ['id'])

    op.create_table('events',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(length=20), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('mode', sa.String(length=20), nullable=True),
        sa.Column('poster_url', sa.String(length=500), nullable=True),
        sa.Column('organizer_name', sa.String(length=255), nullable=True),
        sa.Column('created_by_id', sa.String(length=36), nullable=False),
        sa.Column('qr_code', sa.Text(), nullable=True),
        sa.Column('qr_code_data', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_events_id', 'events', ['id'])

    op.create_table('event_registrations',
        *_base_columns(),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('attended', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('checked_in_by', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'event_id', name='uq_event_registration_user_event')
    )
    op.create_index('ix_event_registrations_id', 'event_registrations', ['id'])
    op.create_index('ix_event_registrations_user_id', 'event_registrations', ['user_id'])
    op.create_index('ix_event_registrations_event_id', 'event_registrations', ['event_id'])

    op.create_table('hackathons',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('mode', sa.String(length=20), nullable=True),
        sa.Column('poster_url', sa.String(length=500), nullable=True),
        sa.Column('organizer_name', sa.String(length=255), nullable=True),
        sa.Column('qr_code', sa.Text(), nullable=True),
        sa.Column('qr_code_data', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_hackathons_id', 'hackathons', ['id'])

    op.create_table('hackathon_teams',
        *_base_columns(),
        sa.Column('hackathon_id', sa.String(length=36), nullable=False),
        sa.Column('team_name', sa.String(length=255), nullable=False),
        sa.Column('disqualified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(['hackathon_id'], ['hackathons.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_hackathon_teams_id', 'hackathon_teams', ['id'])
    op.create_index('ix_hackathon_teams_hackathon_id', 'hackathon_teams', ['hackathon_id'])

    op.create_table('hackathon_team_members',
        *_base_columns(),
        sa.Column('team_id', sa.String(length=36), nullable=False),
        sa.Column('student_id', sa.String(length=36), nullable=False),
        sa.Column('is_leader', sa.Boolean(), nullable=True),
        sa.Column('qr_code', sa.Text(), nullable=True),
        sa.Column('qr_code_data', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['team_id'], ['hackathon_teams.id']),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('team_id', 'student_id', name='uq_team_member_team_student')
    )
    op.create_index('ix_hackathon_team_members_id', 'hackathon_team_members', ['id'])
    op.create_index('ix_hackathon_team_members_team_id', 'hackathon_team_members', ['team_id'])
    op.create_index('ix_hackathon_team_members_student_id', 'hackathon_team_members', ['student_id'])

    op.create_table('hackathon_attendance_schedules',
        *_base_columns(),
        sa.Column('hackathon_id', sa.String(length=36), nullable=False),
        sa.Column('day', sa.Integer(), nullable=False),
        sa.Column('check_in_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['hackathon_id'], ['hackathons.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_hackathon_attendance_schedules_id', 'hackathon_attendance_schedules', ['id'])
    op.create_index('ix_hackathon_attendance_schedules_hackathon_id', 'hackathon_attendance_schedules', ['hackathon_id'])

    op.create_table('hackathon_attendance',
        *_base_columns(),
        sa.Column('attendance_schedule_id', sa.String(length=36), nullable=False),
        sa.Column('team_member_id', sa.String(length=36), nullable=False),
        sa.Column('is_present', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('checked_in_by', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['attendance_schedule_id'], ['hackathon_attendance_schedules.id']),
        sa.ForeignKeyConstraint(['team_member_id'], ['hackathon_team_members.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('attendance_schedule_id', 'team_member_id', name='uq_attendance_schedule_member')
    )
    op.create_index('ix_hackathon_attendance_id', 'hackathon_attendance', ['id'])
    op.create_index('ix_hackathon_attendance_attendance_schedule_id', 'hackathon_attendance', ['attendance_schedule_id'])
    op.create_index('ix_hackathon_attendance_team_member_id', 'hackathon_attendance', ['team_member_id'])


def downgrade() -> None:
    op.drop_table('hackathon_attendance')
    op.drop_table('hackathon_attendance_schedules')
    op.drop_table('hackathon_team_members')
    op.drop_table('hackathon_teams')
    op.drop_table('hackathons')
    op.drop_table('event_registrations')
    op.drop_table('events')
    op.drop_table('students')
    op.drop_table('users')
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
