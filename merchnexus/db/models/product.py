import uuid

import sqlalchemy as sa
from sqlalchemy import event

from merchnexus.db.base import Base, utcnow
from merchnexus.utils.types import CompetitionLevel


class Product(Base):
    __tablename__ = "products"

    id = sa.Column(sa.UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asin = sa.Column(sa.String(32), nullable=False, unique=True, index=True)

    title = sa.Column(sa.Text, nullable=False)
    brand = sa.Column(sa.Text, nullable=True)
    category = sa.Column(sa.Text, nullable=False, index=True)
    subcategory = sa.Column(sa.Text, nullable=True)

    price = sa.Column(sa.Numeric(10, 2), nullable=False)
    sales_rank = sa.Column(sa.Integer, nullable=True)
    rating = sa.Column(sa.Numeric(3, 2), nullable=True)
    review_count = sa.Column(sa.Integer, nullable=True)
    image_url = sa.Column(sa.Text, nullable=True)

    keywords = sa.Column(sa.JSON, nullable=False, default=list, server_default=sa.text("'[]'"))

    estimated_monthly_sales = sa.Column(sa.Integer, nullable=True)
    competition_level = sa.Column(
        sa.Enum(
            CompetitionLevel,
            name="competition_level",
            values_callable=lambda levels: [level.value for level in levels],
        ),
        nullable=True,
    )

    created_at = sa.Column(
        sa.DateTime(timezone=True), default=utcnow, server_default=sa.func.now(), nullable=False, index=True
    )
    updated_at = sa.Column(
        sa.DateTime(timezone=True), default=utcnow, server_default=sa.func.now(), onupdate=utcnow, nullable=False
    )

    # Insertion order; breaks ties between products ingested with the same created_at.
    seq = sa.Column(sa.BigInteger, sa.Identity(), nullable=True, unique=True)


# SQLite has no identity columns, so seq is filled from the rowid instead.
event.listen(
    Product.__table__,
    "after_create",
    sa.DDL(
        "CREATE TRIGGER products_seq AFTER INSERT ON products WHEN NEW.seq IS NULL "
        "BEGIN UPDATE products SET seq = NEW.rowid WHERE rowid = NEW.rowid; END"
    ).execute_if(dialect="sqlite"),
)
