"""Cart router - FastAPI endpoints for the shopping cart and checkout"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import CartItemAdd, CartItemUpdate, CartResponse, CheckoutResponse, PaymentDetails
from .service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    """Dependency injection for CartService"""
    return CartService(db)


@router.get("", response_model=CartResponse)
async def get_cart(
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    return service.get_cart(current_user)


@router.post("/items", response_model=CartResponse, status_code=201)
async def add_cart_item(
    data: CartItemAdd,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    """Add a product or a service slot to the cart"""
    return service.add_item(current_user, data)


@router.patch("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: int,
    data: CartItemUpdate,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    return service.update_quantity(current_user, item_id, data.quantity)


@router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    return service.remove_item(current_user, item_id)


@router.delete("", response_model=CartResponse)
async def clear_cart(
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    return service.clear_cart(current_user)


@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(
    payment: PaymentDetails,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    """Pay for the whole cart with the simulated card"""
    return service.checkout(current_user, payment)
