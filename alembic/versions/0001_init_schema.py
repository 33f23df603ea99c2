from alembic import op
import sqlalchemy as sa

revision = '0001_init_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('email', sa.String, nullable=False),
        sa.Column('password_hash', sa.String, nullable=False),
        sa.Column('nombre', sa.String, nullable=False),
        sa.Column('role', sa.String, nullable=False, server_default=sa.text("'professional'")),
        sa.Column('activo', sa.Boolean, nullable=False, server_default=sa.text('true')),
        sa.Column('creado_en', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('actualizado_en', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'questionnaires',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String, nullable=False),
        sa.Column('personal_info', sa.Text, nullable=False),
        sa.Column('answers', sa.Text, nullable=False),
        sa.Column('status', sa.String, nullable=False, server_default=sa.text("'pending'")),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("type IN ('pareja', 'personalidad')", name='ck_questionnaires_type'),
        sa.CheckConstraint("status IN ('pending', 'completed')", name='ck_questionnaires_status'),
    )
    op.create_index('ix_questionnaires_id', 'questionnaires', ['id'])
    op.create_index('ix_questionnaires_user_id', 'questionnaires', ['user_id'])
    op.create_index('ix_questionnaires_type', 'questionnaires', ['type'])
    op.create_index('ix_questionnaires_status', 'questionnaires', ['status'])

    op.create_table(
        'contact_messages',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('nombre', sa.String(100), nullable=False),
        sa.Column('email', sa.String, nullable=False),
        sa.Column('asunto', sa.String(200), nullable=True),
        sa.Column('mensaje', sa.Text, nullable=False),
        sa.Column('status', sa.String, nullable=False, server_default=sa.text("'unread'")),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_contact_messages_id', 'contact_messages', ['id'])
    op.create_index('ix_contact_messages_status', 'contact_messages', ['status'])

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('accion', sa.String, nullable=False),
        sa.Column('recurso', sa.String, nullable=False),
        sa.Column('recurso_id', sa.Integer, nullable=True),
        sa.Column('payload', sa.JSON, nullable=True),
        sa.Column('ip', sa.String, nullable=True),
        sa.Column('ua', sa.Text, nullable=True),
        sa.Column('creado_en', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_audit_logs_user_id', 'audit_logs', ['user_id'])


def downgrade():
    op.drop_table('audit_logs')
    op.drop_table('contact_messages')
    op.drop_table('questionnaires')
    op.drop_table('users')
