"""Create document_submission table

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create document_submission table with per-category storage paths."""

    op.create_table(
        'document_submission',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('company_name', sa.Text(), nullable=False),
        # {category key: [storage path, ...]}, all twelve keys present
        sa.Column('document_paths', postgresql.JSONB(), nullable=False),
        sa.Column('uploaded_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    # Review listing is newest first
    op.create_index(
        'ix_document_submission_uploaded_at',
        'document_submission',
        [sa.text('uploaded_at DESC')],
    )


def downgrade():
    """Drop document_submission table."""

    op.drop_index('ix_document_submission_uploaded_at', table_name='document_submission')
    op.drop_table('document_submission')
