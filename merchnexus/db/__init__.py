from .base import Base
from .models import user, product, collection, saved_product

__all__ = ["Base", "user", "product", "collection", "saved_product"]
