"""Initial migration: create all tables

Revision ID: initial
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
import sqlmodel

# revision identifiers, used by Alembic.
revision = 'initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create folder table
    op.create_table(
        'folder',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('color', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Create category table
    op.create_table(
        'category',
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('name')
    )

    # Create exercise table
    op.create_table(
        'exercise',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('expected_answer', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('alternative_answers', sa.JSON(), nullable=False),
        sa.Column('hints', sa.JSON(), nullable=False),
        sa.Column('difficulty', sa.Integer(), nullable=False),
        sa.Column('category', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('folder_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['folder_id'], ['folder.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_exercise_category'), 'exercise', ['category'], unique=False)
    op.create_index(op.f('ix_exercise_folder_id'), 'exercise', ['folder_id'], unique=False)

    # Create progress table
    op.create_table(
        'progress',
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('total_solved', sa.Integer(), nullable=False),
        sa.Column('current_level', sa.Integer(), nullable=False),
        sa.Column('last_activity_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('user_id')
    )

    # Create solved_exercise table
    op.create_table(
        'solved_exercise',
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('exercise_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('solved_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['progress.user_id'], ),
        sa.PrimaryKeyConstraint('user_id', 'exercise_id')
    )

    # Create daily_activity table
    op.create_table(
        'daily_activity',
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('activity_date', sa.Date(), nullable=False),
        sa.Column('exercises_solved', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['progress.user_id'], ),
        sa.PrimaryKeyConstraint('user_id', 'activity_date')
    )

    # Create practice_settings table
    op.create_table(
        'practice_settings',
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('normalize_quotes', sa.Boolean(), nullable=False),
        sa.Column('normalize_spaces', sa.Boolean(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('user_id')
    )


def downgrade() -> None:
    op.drop_table('practice_settings')
    op.drop_table('daily_activity')
    op.drop_table('solved_exercise')
    op.drop_table('progress')
    op.drop_index(op.f('ix_exercise_folder_id'), table_name='exercise')
    op.drop_index(op.f('ix_exercise_category'), table_name='exercise')
    op.drop_table('exercise')
    op.drop_table('category')
    op.drop_table('folder')
