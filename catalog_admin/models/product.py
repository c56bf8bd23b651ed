"""
Product model
"""
from sqlalchemy import Column, Integer, String, Numeric, JSON, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from catalog_admin.database import Base
from catalog_admin.utils.db_compat import text_search_vector


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False, index=True)  # filtered on
    tags = Column(JSON, nullable=True, default=list)
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at = Column(DateTime, default=datetime.utcnow, index=True)  # default sort
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    category = relationship("Category", back_populates="products")


# Full-text search on name; only PostgreSQL has tsvector / GIN
Index(
    "products_name_gin_index",
    text_search_vector(Product.name),
    postgresql_using="gin",
).ddl_if(dialect="postgresql")
