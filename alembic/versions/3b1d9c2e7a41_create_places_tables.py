"""create_places_tables

Revision ID: 3b1d9c2e7a41
Revises:
Create Date: 2022-01-01 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1d9c2e7a41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('places',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index(op.f('ix_places_id'), 'places', ['id'], unique=False)

    # place_id is not a foreign key; photos may reference any id
    op.create_table('place_photos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('place_id', sa.Integer(), nullable=False),
        sa.Column('photo_upload_url', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index(op.f('ix_place_photos_id'), 'place_photos', ['id'], unique=False)
    op.create_index(op.f('ix_place_photos_place_id'), 'place_photos', ['place_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_place_photos_place_id'), table_name='place_photos')
    op.drop_index(op.f('ix_place_photos_id'), table_name='place_photos')
    op.drop_table('place_photos')

    op.drop_index(op.f('ix_places_id'), table_name='places')
    op.drop_table('places')
