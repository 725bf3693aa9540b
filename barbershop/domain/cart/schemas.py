"""Cart domain schemas - Pydantic models for the cart and checkout"""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel


class CartItemAdd(BaseModel):
    """Schema for adding a product or a service slot to the cart"""

    type: Literal["product", "service"]
    productId: Optional[int] = None
    serviceId: Optional[int] = None
    quantity: int = 1
    date: Optional[str] = None  # service items, YYYY-MM-DD
    time: Optional[str] = None  # service items, HH:MM


class CartItemUpdate(BaseModel):
    quantity: int


class CartItemResponse(BaseModel):
    id: int
    type: str
    itemId: int
    name: str
    price: float
    quantity: int
    lineTotal: float
    image: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None


class CartResponse(BaseModel):
    items: list[CartItemResponse]
    totalItems: int
    totalPrice: float


class PaymentDetails(BaseModel):
    """Simulated card details; checked by the checkout service"""

    cardName: Optional[str] = None
    cardNumber: Optional[str] = None
    cardExpiry: Optional[str] = None  # MM/YY
    cardCVC: Optional[str] = None


class CheckoutResponse(BaseModel):
    success: bool
    message: str
    total: float
    itemCount: int
    appointmentIds: list[int]
    cardLast4: str
