"""Cart service - Cart management and simulated checkout"""

import logging
from datetime import datetime
from typing import Callable

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import AppointmentStatus, CartItem, User
from ...shared.validators import (
    validate_card_cvc,
    validate_card_expiry,
    validate_card_number,
    validate_cardholder_name,
)
from ..appointments.repository import AppointmentRepository
from ..appointments.service import SLOT_TAKEN, AppointmentService
from ..catalog.repository import CatalogRepository
from .repository import CartRepository
from .schemas import (
    CartItemAdd,
    CartItemResponse,
    CartResponse,
    CheckoutResponse,
    PaymentDetails,
)

logger = logging.getLogger(__name__)


def _line_view(item: CartItem) -> CartItemResponse:
    source = item.product if item.item_type == "product" else item.service
    price = float(source.price)
    return CartItemResponse(
        id=item.id,
        type=item.item_type,
        itemId=source.id,
        name=source.name,
        price=price,
        quantity=item.quantity,
        lineTotal=round(price * item.quantity, 2),
        image=source.image,
        date=item.date,
        time=item.time,
    )


def validate_payment(payment: PaymentDetails) -> str:
    """Check the simulated card and return its last four digits"""
    try:
        validate_cardholder_name(payment.cardName)
        number = validate_card_number(payment.cardNumber)
        validate_card_cvc(payment.cardCVC)
        validate_card_expiry(payment.cardExpiry)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return number[-4:]


class CartService:
    """Service layer for the shopping cart"""

    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.now):
        self.db = db
        self.repo = CartRepository()
        self.catalog = CatalogRepository()
        self.appointments = AppointmentService(db, clock=clock)

    def get_cart(self, user: User) -> CartResponse:
        items = [_line_view(i) for i in self.repo.get_items(self.db, user.id)]
        return CartResponse(
            items=items,
            totalItems=sum(i.quantity for i in items),
            totalPrice=round(sum(i.lineTotal for i in items), 2),
        )

    def add_item(self, user: User, data: CartItemAdd) -> CartResponse:
        """Add a product (merging quantities) or a service slot to the cart"""
        if data.type == "product":
            self._add_product(user, data)
        else:
            self._add_service(user, data)
        return self.get_cart(user)

    def _add_product(self, user: User, data: CartItemAdd) -> None:
        if not data.productId:
            raise HTTPException(status_code=400, detail="productId is required")
        if data.quantity < 1:
            raise HTTPException(status_code=400, detail="Quantity must be at least 1")

        product = self.catalog.get_product_by_id(self.db, data.productId)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")

        line = self.repo.find_product_line(self.db, user.id, product.id)
        wanted = data.quantity + (line.quantity if line else 0)
        if wanted > product.quantity:
            raise HTTPException(
                status_code=400, detail=f'Sorry, there is not enough stock for "{product.name}".'
            )

        if line:
            self.repo.set_quantity(self.db, line, wanted)
        else:
            self.repo.add_item(
                self.db, user.id, item_type="product", product_id=product.id, quantity=wanted
            )

    def _add_service(self, user: User, data: CartItemAdd) -> None:
        if not data.serviceId or not data.date or not data.time:
            raise HTTPException(
                status_code=400, detail="serviceId, date and time are required for services"
            )

        service = self.catalog.get_service_by_id(self.db, data.serviceId)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")

        day, label = self.appointments.validate_slot(data.date, data.time)
        if self.repo.find_slot_line(self.db, user.id, day, label):
            raise HTTPException(status_code=409, detail="This time slot is already in your cart")

        self.repo.add_item(
            self.db,
            user.id,
            item_type="service",
            service_id=service.id,
            quantity=1,
            date=day,
            time=label,
        )

    def update_quantity(self, user: User, item_id: int, quantity: int) -> CartResponse:
        """Change a line's quantity; zero or less removes the line"""
        item = self.repo.get_item(self.db, item_id, user.id)
        if not item:
            raise HTTPException(status_code=404, detail="Cart item not found")

        if quantity <= 0:
            self.repo.delete_item(self.db, item)
        elif item.item_type == "service":
            if quantity != 1:
                raise HTTPException(
                    status_code=400, detail="A booked service slot always has quantity 1"
                )
        else:
            if quantity > item.product.quantity:
                raise HTTPException(
                    status_code=400,
                    detail=f'Sorry, there is not enough stock for "{item.product.name}".',
                )
            self.repo.set_quantity(self.db, item, quantity)

        return self.get_cart(user)

    def remove_item(self, user: User, item_id: int) -> CartResponse:
        item = self.repo.get_item(self.db, item_id, user.id)
        if not item:
            raise HTTPException(status_code=404, detail="Cart item not found")
        self.repo.delete_item(self.db, item)
        return self.get_cart(user)

    def clear_cart(self, user: User) -> CartResponse:
        self.repo.clear(self.db, user.id)
        return self.get_cart(user)

    def checkout(self, user: User, payment: PaymentDetails) -> CheckoutResponse:
        """
        Pay for the cart and fulfil it in a single transaction.

        Service lines become scheduled appointments after the booking checks,
        product lines decrement stock. Any failure rolls back every line.
        """
        items = self.repo.get_items(self.db, user.id)
        if not items:
            raise HTTPException(status_code=400, detail="Your cart is empty.")

        card_last4 = validate_payment(payment)
        logger.info(f"🛒 Checkout started for user {user.id} with {len(items)} line(s)")

        total = 0.0
        item_count = 0
        appointment_ids = []
        try:
            for item in items:
                if item.item_type == "service":
                    appointment_ids.append(self._fulfil_service(user, item))
                    total += float(item.service.price)
                else:
                    total += self._fulfil_product(item)
                item_count += item.quantity

            self.repo.clear(self.db, user.id, commit=False)
            self.db.commit()
        except HTTPException as e:
            self.db.rollback()
            logger.warning(f"⚠️ Checkout failed for user {user.id}: {e.detail}")
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Checkout lost a slot race for user {user.id}")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Checkout failed for user {user.id}: {e}")
            raise HTTPException(status_code=500, detail="Checkout failed") from e

        logger.info(f"✅ Checkout complete for user {user.id}: total={total:.2f}")
        return CheckoutResponse(
            success=True,
            message="Payment approved. Thank you for your order!",
            total=round(total, 2),
            itemCount=item_count,
            appointmentIds=appointment_ids,
            cardLast4=card_last4,
        )

    def _fulfil_service(self, user: User, item: CartItem) -> int:
        day, label = self.appointments.validate_slot(item.date.isoformat(), item.time)
        appointment = AppointmentRepository.create(
            self.db,
            commit=False,
            user_id=user.id,
            service_id=item.service_id,
            date=day,
            time=label,
            status=AppointmentStatus.SCHEDULED,
        )
        return appointment.id

    def _fulfil_product(self, item: CartItem) -> float:
        product = self.repo.get_product_for_update(self.db, item.product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        if product.quantity < item.quantity:
            raise HTTPException(
                status_code=400,
                detail=f'Sorry, there is not enough stock for "{product.name}".',
            )

        product.quantity -= item.quantity
        product.sold_quantity = (product.sold_quantity or 0) + item.quantity
        return float(product.price) * item.quantity
