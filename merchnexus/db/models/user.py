import uuid

import sqlalchemy as sa

from merchnexus.db.base import Base, utcnow
from merchnexus.utils.types import SubscriptionTier


class User(Base):
    __tablename__ = "users"

    id = sa.Column(sa.UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = sa.Column(sa.String(255), nullable=False, unique=True, index=True)
    full_name = sa.Column(sa.Text, nullable=True)
    avatar_url = sa.Column(sa.Text, nullable=True)

    subscription_tier = sa.Column(
        sa.Enum(
            SubscriptionTier,
            name="subscription_tier",
            values_callable=lambda tiers: [tier.value for tier in tiers],
        ),
        nullable=False,
        default=SubscriptionTier.FREE,
        server_default=SubscriptionTier.FREE.value,
    )

    created_at = sa.Column(sa.DateTime(timezone=True), default=utcnow, server_default=sa.func.now(), nullable=False)
    updated_at = sa.Column(
        sa.DateTime(timezone=True), default=utcnow, server_default=sa.func.now(), onupdate=utcnow, nullable=False
    )
