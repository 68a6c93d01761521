from sqlalchemy.orm import Session
from typing import List

from ..models import Product, User
from ..schemas import ProductCreate


class ProductService:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: ProductCreate, creator: User) -> Product:
        product = Product(title=data.title, price=data.price, creator=creator)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def list(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()
