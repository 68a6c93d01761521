from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Numeric, Enum
from sqlalchemy.orm import relationship

from .db import Base
from .roles import Role


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Always stored lower-cased
    email = Column(String, unique=True, index=True, nullable=False)
    # Password hash, never the plaintext
    password = Column(String, nullable=False)
    role = Column(Enum(Role, name="user_role"), nullable=False, default=Role.USER)

    products = relationship("Product", back_populates="creator")


class Product(Base):
    __tablename__ = "products"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    creator_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    creator = relationship("User", back_populates="products", lazy="joined")
