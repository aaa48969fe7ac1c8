import uuid

import sqlalchemy as sa

from merchnexus.db.base import Base, utcnow


class SavedProduct(Base):
    __tablename__ = "saved_products"

    id = sa.Column(sa.UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id = sa.Column(
        sa.UUID(as_uuid=True),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    product_id = sa.Column(
        sa.UUID(as_uuid=True),
        sa.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Must point at a collection owned by user_id; checked by SavedProductService.
    collection_id = sa.Column(
        sa.UUID(as_uuid=True),
        sa.ForeignKey("collections.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    notes = sa.Column(sa.Text, nullable=True)
    tags = sa.Column(sa.JSON, nullable=False, default=list, server_default=sa.text("'[]'"))

    created_at = sa.Column(sa.DateTime(timezone=True), default=utcnow, server_default=sa.func.now(), nullable=False)
    updated_at = sa.Column(
        sa.DateTime(timezone=True), default=utcnow, server_default=sa.func.now(), onupdate=utcnow, nullable=False
    )
