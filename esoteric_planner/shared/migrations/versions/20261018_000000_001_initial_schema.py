# pylint: skip-file
# ruff: noqa
"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00

Tables created:
- users: Accounts, subscription state and generation counters
- password_reset_tokens: Hashed one-time reset tokens
- content_strategies: Saved content plans (posts as JSONB)
- archetype_results: Archetype quiz results
- voice_posts: Dictated posts and their refined text
- case_studies: Client reviews and generated case texts
- sales_trainer_samples: Curated few-shot examples for the money trainer
- sales_trainer_sessions: User's trainer history
- promocodes / promocode_usages: Bonus-day codes and who used them
- payments: Prodamus orders

Tiers, goals and payment statuses are stored as plain strings, so no
PostgreSQL enum types are created.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True)


def _user_id_column() -> sa.Column:
    return sa.Column(
        "user_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def _created_at_column() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def _updated_at_column() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def _owned_indexes(table: str) -> None:
    op.create_index(f"ix_{table}_user_id", table, ["user_id"])
    op.create_index(f"ix_{table}_created_at", table, ["created_at"])


def upgrade() -> None:
    # ═══════════════════════════════════════════════════════════════════════════
    # USERS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_admin", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("nickname", sa.String(255), nullable=True),
        sa.Column("profile_image_url", sa.Text(), nullable=True),
        sa.Column("subscription_tier", sa.String(20), server_default="trial", nullable=True),
        sa.Column("trial_ends_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("subscription_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("generations_used", sa.Integer(), server_default="0", nullable=False),
        sa.Column("generations_limit", sa.Integer(), server_default="50", nullable=False),
        sa.Column("daily_generations_used", sa.Integer(), server_default="0", nullable=False),
        sa.Column("last_generation_date", sa.String(10), nullable=True),
        _created_at_column(),
        _updated_at_column(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_created_at", "users", ["created_at"])

    op.create_table(
        "password_reset_tokens",
        _id_column(),
        _user_id_column(),
        sa.Column("token_hash", sa.Text(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        _created_at_column(),
    )
    _owned_indexes("password_reset_tokens")

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "content_strategies",
        _id_column(),
        _user_id_column(),
        sa.Column("topic", sa.Text(), nullable=False),
        sa.Column("goal", sa.String(20), nullable=True),
        sa.Column("days", sa.Integer(), server_default="7", nullable=False),
        sa.Column("posts", postgresql.JSONB(), server_default="[]", nullable=False),
        _created_at_column(),
    )
    _owned_indexes("content_strategies")

    op.create_table(
        "archetype_results",
        _id_column(),
        _user_id_column(),
        sa.Column("archetype_name", sa.Text(), nullable=False),
        sa.Column("archetype_description", sa.Text(), nullable=False),
        sa.Column("answers", postgresql.JSONB(), server_default="[]", nullable=False),
        sa.Column("recommendations", postgresql.JSONB(), server_default="[]", nullable=False),
        sa.Column("brand_colors", postgresql.JSONB(), nullable=True),
        sa.Column("brand_fonts", postgresql.JSONB(), nullable=True),
        sa.Column("content_style", postgresql.JSONB(), nullable=True),
        sa.Column("trigger_words", postgresql.JSONB(), nullable=True),
        _created_at_column(),
    )
    _owned_indexes("archetype_results")

    op.create_table(
        "voice_posts",
        _id_column(),
        _user_id_column(),
        sa.Column("original_text", sa.Text(), nullable=False),
        sa.Column("refined_text", sa.Text(), nullable=True),
        sa.Column("tone", sa.String(100), nullable=True),
        _created_at_column(),
    )
    _owned_indexes("voice_posts")

    op.create_table(
        "case_studies",
        _id_column(),
        _user_id_column(),
        sa.Column("review_text", sa.Text(), nullable=False),
        sa.Column("before", sa.Text(), nullable=True),
        sa.Column("action", sa.Text(), nullable=True),
        sa.Column("after", sa.Text(), nullable=True),
        sa.Column("tags", postgresql.JSONB(), server_default="[]", nullable=False),
        sa.Column("generated_headlines", postgresql.JSONB(), server_default="[]", nullable=False),
        sa.Column("generated_quote", sa.Text(), nullable=True),
        sa.Column("generated_body", sa.Text(), nullable=True),
        _created_at_column(),
    )
    _owned_indexes("case_studies")

    # ═══════════════════════════════════════════════════════════════════════════
    # MONEY TRAINER
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "sales_trainer_samples",
        _id_column(),
        sa.Column("client_question", sa.Text(), nullable=False),
        sa.Column("expert_draft", sa.Text(), nullable=True),
        sa.Column("improved_answer", sa.Text(), nullable=False),
        sa.Column("coach_feedback", sa.Text(), nullable=True),
        sa.Column("pain_type", sa.String(100), nullable=True),
        sa.Column("tags", postgresql.JSONB(), server_default="[]", nullable=False),
        _created_at_column(),
    )
    op.create_index("ix_sales_trainer_samples_pain_type", "sales_trainer_samples", ["pain_type"])
    op.create_index("ix_sales_trainer_samples_created_at", "sales_trainer_samples", ["created_at"])

    op.create_table(
        "sales_trainer_sessions",
        _id_column(),
        _user_id_column(),
        sa.Column("client_question", sa.Text(), nullable=False),
        sa.Column("expert_draft", sa.Text(), nullable=False),
        sa.Column("improved_answer", sa.Text(), nullable=False),
        sa.Column("pain_type", sa.String(100), nullable=True),
        sa.Column("offer_type", sa.String(100), nullable=True),
        _created_at_column(),
    )
    _owned_indexes("sales_trainer_sessions")

    # ═══════════════════════════════════════════════════════════════════════════
    # BILLING
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "promocodes",
        _id_column(),
        sa.Column("code", sa.String(64), nullable=False),
        sa.Column("bonus_days", sa.Integer(), server_default="30", nullable=False),
        sa.Column("max_uses", sa.Integer(), server_default="1", nullable=False),
        sa.Column("used_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        _created_at_column(),
    )
    op.create_index("ix_promocodes_code", "promocodes", ["code"], unique=True)
    op.create_index("ix_promocodes_created_at", "promocodes", ["created_at"])

    op.create_table(
        "promocode_usages",
        _id_column(),
        sa.Column(
            "promocode_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("promocodes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _user_id_column(),
        _created_at_column(),
        sa.UniqueConstraint("promocode_id", "user_id", name="uq_promocode_usage_user"),
    )
    op.create_index("ix_promocode_usages_promocode_id", "promocode_usages", ["promocode_id"])
    _owned_indexes("promocode_usages")

    op.create_table(
        "payments",
        _id_column(),
        _user_id_column(),
        sa.Column("order_id", sa.String(100), nullable=False),
        sa.Column("amount", sa.String(32), nullable=False),
        sa.Column("plan_type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), server_default="pending", nullable=False),
        sa.Column("provider_data", postgresql.JSONB(), nullable=True),
        _created_at_column(),
        _updated_at_column(),
    )
    op.create_index("ix_payments_order_id", "payments", ["order_id"], unique=True)
    _owned_indexes("payments")


def downgrade() -> None:
    op.drop_table("payments")
    op.drop_table("promocode_usages")
    op.drop_table("promocodes")
    op.drop_table("sales_trainer_sessions")
    op.drop_table("sales_trainer_samples")
    op.drop_table("case_studies")
    op.drop_table("voice_posts")
    op.drop_table("archetype_results")
    op.drop_table("content_strategies")
    op.drop_table("password_reset_tokens")
    op.drop_table("users")
