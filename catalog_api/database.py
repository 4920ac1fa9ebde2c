import threading
from typing import Iterable, List, Optional

from .models import Product

# Seed catalog; the store returns to this set on restart or reset().
SEED_PRODUCTS: List[Product] = [
    Product(
        id="1",
        name="Laptop",
        description="High-performance laptop with 16GB RAM",
        price=1200,
        category="electronics",
        in_stock=True,
    ),
    Product(
        id="2",
        name="Smartphone",
        description="Latest model with 128GB storage",
        price=800,
        category="electronics",
        in_stock=True,
    ),
    Product(
        id="3",
        name="Coffee Maker",
        description="Programmable coffee maker with timer",
        price=50,
        category="kitchen",
        in_stock=False,
    ),
]


class CatalogStore:
    """Process-wide product list. Every operation runs under one lock."""

    def __init__(self, seed: Optional[Iterable[Product]] = None):
        self._seed: List[Product] = list(SEED_PRODUCTS if seed is None else seed)
        self._lock = threading.RLock()
        self._products: List[Product] = list(self._seed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def list(self) -> List[Product]:
        """Snapshot of all records in insertion order."""
        with self._lock:
            return self._products.copy()

    def find_by_id(self, product_id: str) -> Optional[Product]:
        with self._lock:
            for p in self._products:
                if p.id == product_id:
                    return p
            return None

    def insert(self, product: Product) -> None:
        with self._lock:
            self._products.append(product)

    def replace(self, product_id: str, product: Product) -> bool:
        with self._lock:
            index = self._index_of(product_id)
            if index is None:
                return False
            self._products[index] = product
            return True

    def remove(self, product_id: str) -> bool:
        with self._lock:
            index = self._index_of(product_id)
            if index is None:
                return False
            del self._products[index]
            return True

    def reset(self) -> None:
        with self._lock:
            self._products = list(self._seed)

    def _index_of(self, product_id: str) -> Optional[int]:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return None
