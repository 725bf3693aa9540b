"""Catalog domain schemas - Pydantic models for services and products"""

from typing import Optional

from pydantic import BaseModel, field_validator


def _positive_price(v):
    if v is not None and v < 0:
        raise ValueError("Price cannot be negative")
    return v


class ServiceCreate(BaseModel):
    """Schema for creating a service"""

    name: str
    description: str
    price: float
    duration: int
    image: str
    icon: Optional[str] = None

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        return _positive_price(v)

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v):
        if v <= 0:
            raise ValueError("Duration must be greater than 0 minutes")
        return v


class ServiceUpdate(BaseModel):
    """Schema for updating a service"""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    duration: Optional[int] = None
    image: Optional[str] = None
    icon: Optional[str] = None

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        return _positive_price(v)

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Duration must be greater than 0 minutes")
        return v


class ServiceResponse(BaseModel):
    """Schema for service response"""

    id: int
    name: str
    description: str
    price: float
    duration: int
    image: str
    icon: Optional[str] = None

    class Config:
        from_attributes = True


class ProductCreate(BaseModel):
    """Schema for creating a product"""

    name: str
    description: str
    price: float
    image: str
    quantity: int = 0

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        return _positive_price(v)

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v):
        if v < 0:
            raise ValueError("Stock quantity cannot be negative")
        return v


class ProductUpdate(BaseModel):
    """Schema for updating a product"""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image: Optional[str] = None
    quantity: Optional[int] = None

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        return _positive_price(v)

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v):
        if v is not None and v < 0:
            raise ValueError("Stock quantity cannot be negative")
        return v


class ProductResponse(BaseModel):
    """Schema for product response"""

    id: int
    name: str
    description: str
    price: float
    image: str
    quantity: int
    soldQuantity: int
    type: str = "product"
