"""Create catalog_brands, catalog_types and catalog_items tables.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create catalog tables."""
    # Brands table
    op.create_table(
        'catalog_brands',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('brand', sa.String(100), nullable=False),
        sa.UniqueConstraint('brand', name='uq_catalog_brands_brand'),
    )

    # Types table
    op.create_table(
        'catalog_types',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('type', sa.String(100), nullable=False),
        sa.UniqueConstraint('type', name='uq_catalog_types_type'),
    )

    # Items table
    op.create_table(
        'catalog_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False, index=True),
        sa.Column('description', sa.String(1000), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('picture_file_name', sa.String(255), nullable=True),
        sa.Column('catalog_type_id', sa.Integer(),
                  sa.ForeignKey('catalog_types.id', ondelete='RESTRICT'), nullable=False, index=True),
        sa.Column('catalog_brand_id', sa.Integer(),
                  sa.ForeignKey('catalog_brands.id', ondelete='RESTRICT'), nullable=False, index=True),
        sa.Column('available_stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('restock_threshold', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('max_stock_threshold', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('on_reorder', sa.Boolean(), nullable=False, server_default='false'),
        sa.CheckConstraint('price >= 0', name='ck_catalog_items_price_non_negative'),
    )


def downgrade() -> None:
    """Drop catalog tables."""
    op.drop_table('catalog_items')
    op.drop_table('catalog_types')
    op.drop_table('catalog_brands')
