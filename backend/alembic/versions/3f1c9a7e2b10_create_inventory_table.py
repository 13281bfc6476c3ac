"""Create inventory table

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2025-11-02 10:14:03.512904

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '3f1c9a7e2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'Final_Tic_Jum_Inventory',
        sa.Column('Tic_Jum_ID_Product', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('Tic_Jum_Name', sa.String(length=255), nullable=False),
        sa.Column('Tic_jum_Price_Unit', sa.Float(precision=53), nullable=True),
        sa.Column('Tic_Jum_Qty_Stock', sa.Integer(), nullable=True),
        sa.Column('Tic_Jum_Img_Path', sa.String(length=512), nullable=True),
        sa.PrimaryKeyConstraint('Tic_Jum_ID_Product'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('Final_Tic_Jum_Inventory')
