"""Create participant and collaboration lifecycle tables

This migration adds:
1. users, brand_profiles, influencer_profiles, campaigns
2. collaborations (one per campaign/influencer pair)
3. deliverables
4. payments (escrow)
5. disputes
6. notifications

Revision ID: collaboration_lifecycle_001
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = 'collaboration_lifecycle_001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    ]


def upgrade():
    # 1. Participants (owned by the profile/campaign side, read by the lifecycle)
    op.create_table('users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255)),
        sa.Column('user_type', sa.Enum('brand', 'influencer', 'admin', name='usertype')),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('brand_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text),
        sa.Column('website', sa.String(500)),
        sa.Column('industry', sa.String(255)),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    op.create_table('influencer_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('display_name', sa.String(100), nullable=False),
        sa.Column('bio', sa.Text),
        sa.Column('instagram_handle', sa.String(100)),
        sa.Column('tiktok_handle', sa.String(100)),
        sa.Column('youtube_handle', sa.String(100)),
        sa.Column('follower_count', sa.Integer),
        sa.Column('category', sa.String(100)),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    op.create_table('campaigns',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('brand_id', sa.String(36), sa.ForeignKey('brand_profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text),
        sa.Column('budget', sa.Numeric(12, 2)),
        sa.Column('deliverable_requirements', sa.Text),
        sa.Column('start_date', sa.Date),
        sa.Column('end_date', sa.Date),
        sa.Column('status', sa.Enum('draft', 'active', 'paused', 'completed', 'cancelled', name='campaignstatus')),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    # 2. Collaborations
    op.create_table('collaborations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('campaign_id', sa.String(36), sa.ForeignKey('campaigns.id'), nullable=False),
        sa.Column('influencer_id', sa.String(36), sa.ForeignKey('influencer_profiles.id'), nullable=False),
        sa.Column('agreed_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.Enum(
            'pending', 'accepted', 'declined', 'in_progress', 'completed', 'cancelled',
            name='collaborationstatus'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('campaign_id', 'influencer_id', name='uq_collaboration_campaign_influencer'),
    )
    op.create_index('ix_collaborations_campaign_id', 'collaborations', ['campaign_id'])
    op.create_index('ix_collaborations_influencer_id', 'collaborations', ['influencer_id'])

    # 3. Deliverables
    op.create_table('deliverables',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('collaboration_id', sa.String(36), sa.ForeignKey('collaborations.id'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text),
        sa.Column('file_url', sa.String(500)),
        sa.Column('status', sa.Enum(
            'pending', 'submitted', 'approved', 'revision_requested', 'rejected',
            name='deliverablestatus'), nullable=False),
        sa.Column('feedback', sa.Text),
        sa.Column('submitted_at', sa.DateTime),
        *_timestamps(),
    )
    op.create_index('ix_deliverables_collaboration_id', 'deliverables', ['collaboration_id'])

    # 4. Payments
    op.create_table('payments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('collaboration_id', sa.String(36), sa.ForeignKey('collaborations.id'), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('platform_commission', sa.Numeric(12, 2), nullable=False),
        sa.Column('influencer_payout', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.Enum('pending', 'in_escrow', 'released', 'refunded', name='paymentstatus'), nullable=False),
        sa.Column('transaction_id', sa.String(255)),
        *_timestamps(),
    )
    op.create_index('ix_payments_collaboration_id', 'payments', ['collaboration_id'])

    # 5. Disputes
    op.create_table('disputes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('collaboration_id', sa.String(36), sa.ForeignKey('collaborations.id'), nullable=False),
        sa.Column('initiated_by', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('status', sa.Enum('open', 'in_review', 'resolved', 'closed', name='disputestatus'), nullable=False),
        sa.Column('resolution', sa.Text),
        sa.Column('resolved_at', sa.DateTime),
        *_timestamps(),
    )
    op.create_index('ix_disputes_collaboration_id', 'disputes', ['collaboration_id'])

    # 6. Notifications
    op.create_table('notifications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('message', sa.Text),
        sa.Column('data', sa.JSON),
        sa.Column('is_read', sa.Boolean),
        sa.Column('read_at', sa.DateTime),
        sa.Column('created_at', sa.DateTime),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])


def downgrade():
    for table in ('notifications', 'disputes', 'payments', 'deliverables', 'collaborations',
                  'campaigns', 'influencer_profiles', 'brand_profiles', 'users'):
        op.drop_table(table)

    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for enum_name in ('disputestatus', 'paymentstatus', 'deliverablestatus',
                          'collaborationstatus', 'campaignstatus', 'usertype'):
            op.execute(f"DROP TYPE IF EXISTS {enum_name}")
