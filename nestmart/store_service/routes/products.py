"""
Products Router - public catalog, admin-only creation.
"""
from fastapi import APIRouter, Depends, status
from typing import List

from ..dependencies import get_identity_user, get_product_service, get_user_service, require_roles
from ..roles import Role
from ..schemas import AuthenticatedIdentity, ProductCreate, ProductOut
from ..services.products import ProductService
from ..services.users import UserService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(products: ProductService = Depends(get_product_service)):
    return products.list()


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    identity: AuthenticatedIdentity = Depends(require_roles(Role.ADMIN)),
    users: UserService = Depends(get_user_service),
    products: ProductService = Depends(get_product_service),
):
    creator = get_identity_user(identity, users)
    return products.create(payload, creator)
