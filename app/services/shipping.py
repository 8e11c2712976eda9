import logging
import re
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel

from app.core.exceptions import InvalidPostalCodeError, UnsupportedCountryError, ValidationError
from app.models.cart import Cart

logger = logging.getLogger(__name__)

SUPPORTED_COUNTRIES = ("United States", "Canada")
CANADIAN_POSTAL_CODE = re.compile(r"^[A-Z][0-9][A-Z][0-9][A-Z][0-9]$")


class ShippingOption(BaseModel):
    service: str
    name: str
    cost: Decimal
    min_days: int
    max_days: int


class ShippingEstimate(BaseModel):
    success: bool = True
    country: str
    zip_code: str
    options: List[ShippingOption]


# Flat rates, no carrier lookup
SHIPPING_OPTIONS = [
    ShippingOption(service="standard", name="Standard Shipping", cost=Decimal("5.99"), min_days=5, max_days=7),
    ShippingOption(service="expedited", name="Expedited Shipping", cost=Decimal("15.99"), min_days=2, max_days=3),
]


class ShippingService:
    def validate(self, zip_code: Optional[str], country: Optional[str]) -> str:
        """Check a destination and return the normalized postal code."""
        zip_code = (zip_code or "").strip()
        country = (country or "").strip()

        if not zip_code:
            raise ValidationError("ZIP/postal code is required", {"zip_code": "ZIP/postal code is required"})
        if not country:
            raise ValidationError("Country is required", {"country": "Country is required"})
        if country not in SUPPORTED_COUNTRIES:
            raise UnsupportedCountryError(country)

        if country == "United States":
            if "X" in zip_code:
                raise InvalidPostalCodeError(zip_code, country, "Invalid ZIP code format")
            if len(zip_code) < 5:
                raise InvalidPostalCodeError(zip_code, country, "ZIP code must be at least 5 digits")
            return zip_code

        postal_code = zip_code.replace(" ", "").upper()
        if not CANADIAN_POSTAL_CODE.match(postal_code):
            raise InvalidPostalCodeError(zip_code, country, "Invalid Canadian postal code format")
        return postal_code

    def estimate(self, zip_code: Optional[str], country: Optional[str], cart: Optional[Cart] = None) -> ShippingEstimate:
        cart_context = {
            "items_count": len(cart.items) if cart else 0,
            "total": str(cart.total) if cart else "0",
        }
        try:
            normalized = self.validate(zip_code, country)
        except (ValidationError, UnsupportedCountryError, InvalidPostalCodeError) as e:
            logger.warning("Shipping estimation failed", extra={
                "reason": e.message,
                "zip_code": zip_code,
                "country": country,
                "cart_context": cart_context,
            })
            raise

        country = country.strip()
        logger.info("Shipping estimation successful", extra={
            "zip_code": normalized,
            "country": country,
            "cart_context": cart_context,
        })
        return ShippingEstimate(country=country, zip_code=normalized, options=SHIPPING_OPTIONS)
