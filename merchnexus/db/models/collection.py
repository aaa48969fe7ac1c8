import uuid

import sqlalchemy as sa

from merchnexus.db.base import Base, utcnow


class Collection(Base):
    __tablename__ = "collections"

    id = sa.Column(sa.UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = sa.Column(
        sa.UUID(as_uuid=True),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = sa.Column(sa.Text, nullable=False)
    description = sa.Column(sa.Text, nullable=True)
    color = sa.Column(sa.String(32), nullable=True)

    created_at = sa.Column(sa.DateTime(timezone=True), default=utcnow, server_default=sa.func.now(), nullable=False)
    updated_at = sa.Column(
        sa.DateTime(timezone=True), default=utcnow, server_default=sa.func.now(), onupdate=utcnow, nullable=False
    )
