"""initial wiki schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-18 09:00:00.000000

Creates users, subjects, persons, characters and the revision log tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1a2b3c4d5e6f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column('id', sa.BigInteger().with_variant(sa.Integer(), 'sqlite'), nullable=False)


def _mono_columns() -> list[sa.Column]:
    return [
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('infobox', sa.Text(), nullable=False),
        sa.Column('summary', sa.Text(), nullable=False),
        sa.Column('img', sa.String(length=255), nullable=False),
        sa.Column('locked', sa.Boolean(), nullable=False),
        sa.Column('redirect', sa.Integer(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table('users',
        _id_column(),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('nickname', sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users'))
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    op.create_table('subjects',
        _id_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('name_cn', sa.String(length=255), nullable=False),
        sa.Column('type_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_subjects'))
    )

    op.create_table('persons',
        _id_column(),
        *_mono_columns(),
        sa.Column('type_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_persons'))
    )
    op.create_index(op.f('ix_persons_redirect'), 'persons', ['redirect'], unique=False)

    op.create_table('characters',
        _id_column(),
        *_mono_columns(),
        sa.Column('role', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_characters'))
    )
    op.create_index(op.f('ix_characters_redirect'), 'characters', ['redirect'], unique=False)

    op.create_table('revision_history',
        _id_column(),
        sa.Column('type', sa.Integer(), nullable=False),
        sa.Column('target_id', sa.BigInteger(), nullable=False),
        sa.Column('creator_id', sa.BigInteger(), nullable=False),
        sa.Column('text_id', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.Column('commit_message', sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_revision_history'))
    )
    op.create_index('ix_revision_history_target_type', 'revision_history', ['target_id', 'type'], unique=False)
    op.create_index(op.f('ix_revision_history_creator_id'), 'revision_history', ['creator_id'], unique=False)

    op.create_table('revision_text',
        _id_column(),
        sa.Column('blob', sa.LargeBinary(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_revision_text'))
    )


def downgrade() -> None:
    op.drop_table('revision_text')
    op.drop_index(op.f('ix_revision_history_creator_id'), table_name='revision_history')
    op.drop_index('ix_revision_history_target_type', table_name='revision_history')
    op.drop_table('revision_history')
    op.drop_index(op.f('ix_characters_redirect'), table_name='characters')
    op.drop_table('characters')
    op.drop_index(op.f('ix_persons_redirect'), table_name='persons')
    op.drop_table('persons')
    op.drop_table('subjects')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
