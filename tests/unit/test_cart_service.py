"""Tests for the cart and checkout service."""
import pytest
from fastapi import HTTPException

from barbershop.domain.appointments.schemas import BookingCreate
from barbershop.domain.appointments.service import AppointmentService
from barbershop.domain.cart.schemas import CartItemAdd, PaymentDetails
from barbershop.domain.cart.service import CartService
from barbershop.models import Appointment, AppointmentStatus, CartItem, Product


def _add_product(cart, user, product, quantity=1):
    return cart.add_item(user, CartItemAdd(type="product", productId=product.id, quantity=quantity))


def _add_slot(cart, user, service, day="2025-06-10", time="10:00"):
    return cart.add_item(
        user, CartItemAdd(type="service", serviceId=service.id, date=day, time=time)
    )


class TestCartLines:
    def test_product_lines_merge(self, db, user, pomade, early_clock):
        cart = CartService(db, clock=early_clock)

        _add_product(cart, user, pomade, 2)
        result = _add_product(cart, user, pomade, 1)

        assert len(result.items) == 1
        assert result.items[0].quantity == 3
        assert result.totalItems == 3
        assert result.totalPrice == 37.5

    def test_cannot_exceed_stock(self, db, user, pomade, early_clock):
        cart = CartService(db, clock=early_clock)
        _add_product(cart, user, pomade, 4)

        with pytest.raises(HTTPException) as exc:
            _add_product(cart, user, pomade, 2)
        assert exc.value.status_code == 400
        assert "not enough stock" in exc.value.detail

    def test_unknown_product(self, db, user, early_clock):
        cart = CartService(db, clock=early_clock)

        with pytest.raises(HTTPException) as exc:
            cart.add_item(user, CartItemAdd(type="product", productId=42))
        assert exc.value.status_code == 404

    def test_service_line_needs_a_slot(self, db, user, haircut, early_clock):
        cart = CartService(db, clock=early_clock)

        with pytest.raises(HTTPException) as exc:
            cart.add_item(user, CartItemAdd(type="service", serviceId=haircut.id, date="2025-06-10"))
        assert exc.value.status_code == 400

    def test_service_line_runs_booking_checks(self, db, user, other_user, haircut, early_clock):
        AppointmentService(db, clock=early_clock).book_appointment(
            BookingCreate(serviceId=haircut.id, date="2025-06-10", time="10:00"), other_user
        )
        cart = CartService(db, clock=early_clock)

        with pytest.raises(HTTPException) as exc:
            _add_slot(cart, user, haircut)
        assert exc.value.status_code == 409

    def test_same_slot_twice_in_cart(self, db, user, haircut, shave, early_clock):
        cart = CartService(db, clock=early_clock)
        _add_slot(cart, user, haircut)

        with pytest.raises(HTTPException) as exc:
            _add_slot(cart, user, shave)
        assert exc.value.status_code == 409

    def test_update_quantity_and_remove(self, db, user, pomade, early_clock):
        cart = CartService(db, clock=early_clock)
        line_id = _add_product(cart, user, pomade, 1).items[0].id

        assert cart.update_quantity(user, line_id, 4).items[0].quantity == 4
        assert cart.update_quantity(user, line_id, 0).items == []

    def test_service_quantity_is_fixed(self, db, user, haircut, early_clock):
        cart = CartService(db, clock=early_clock)
        line_id = _add_slot(cart, user, haircut).items[0].id

        with pytest.raises(HTTPException) as exc:
            cart.update_quantity(user, line_id, 2)
        assert exc.value.status_code == 400

    def test_lines_of_other_users_are_not_found(self, db, user, other_user, pomade, early_clock):
        cart = CartService(db, clock=early_clock)
        line_id = _add_product(cart, user, pomade).items[0].id

        with pytest.raises(HTTPException) as exc:
            cart.remove_item(other_user, line_id)
        assert exc.value.status_code == 404

    def test_clear(self, db, user, pomade, haircut, early_clock):
        cart = CartService(db, clock=early_clock)
        _add_product(cart, user, pomade)
        _add_slot(cart, user, haircut)

        assert cart.clear_cart(user).items == []


class TestCheckout:
    def test_checkout_books_slots_and_takes_stock(self, db, user, pomade, haircut, card, early_clock):
        cart = CartService(db, clock=early_clock)
        _add_product(cart, user, pomade, 2)
        _add_slot(cart, user, haircut)

        receipt = cart.checkout(user, PaymentDetails(**card))

        assert receipt.success is True
        assert receipt.total == 50.0
        assert receipt.itemCount == 3
        assert receipt.cardLast4 == "4242"
        assert len(receipt.appointmentIds) == 1

        appointment = db.query(Appointment).one()
        assert appointment.status == AppointmentStatus.SCHEDULED
        assert appointment.time == "10:00"

        product = db.query(Product).filter(Product.id == pomade.id).one()
        assert product.quantity == 3
        assert product.sold_quantity == 2
        assert db.query(CartItem).count() == 0

    def test_empty_cart(self, db, user, card, early_clock):
        with pytest.raises(HTTPException) as exc:
            CartService(db, clock=early_clock).checkout(user, PaymentDetails(**card))
        assert exc.value.status_code == 400

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("cardName", "", "Cardholder name is required."),
            ("cardName", "R2D2", "Name should not contain numbers."),
            ("cardNumber", "4242", "Card number must be 16 digits."),
            ("cardCVC", "12", "CVC must be 3 digits."),
            ("cardExpiry", "1235", "Invalid format. Use MM/YY."),
            ("cardExpiry", "13/35", "Invalid month."),
            ("cardExpiry", "01/20", "Card has expired."),
        ],
    )
    def test_bad_card_changes_nothing(self, db, user, pomade, card, early_clock, field, value, message):
        cart = CartService(db, clock=early_clock)
        _add_product(cart, user, pomade)
        card[field] = value

        with pytest.raises(HTTPException) as exc:
            cart.checkout(user, PaymentDetails(**card))

        assert exc.value.status_code == 400
        assert exc.value.detail == message
        assert db.query(CartItem).count() == 1

    def test_slot_taken_after_adding_rolls_back_everything(
        self, db, user, other_user, pomade, haircut, card, early_clock
    ):
        cart = CartService(db, clock=early_clock)
        _add_product(cart, user, pomade, 2)
        _add_slot(cart, user, haircut)
        AppointmentService(db, clock=early_clock).book_appointment(
            BookingCreate(serviceId=haircut.id, date="2025-06-10", time="10:00"), other_user
        )

        with pytest.raises(HTTPException) as exc:
            cart.checkout(user, PaymentDetails(**card))

        assert exc.value.status_code == 409
        assert db.query(Appointment).count() == 1
        assert db.query(Product).filter(Product.id == pomade.id).one().quantity == 5
        assert db.query(CartItem).count() == 2

    def test_stock_sold_out_after_adding(self, db, user, pomade, haircut, card, early_clock):
        cart = CartService(db, clock=early_clock)
        _add_slot(cart, user, haircut)
        _add_product(cart, user, pomade, 3)
        pomade.quantity = 1
        db.commit()

        with pytest.raises(HTTPException) as exc:
            cart.checkout(user, PaymentDetails(**card))

        assert exc.value.status_code == 400
        assert db.query(Appointment).count() == 0
        assert db.query(CartItem).count() == 2
