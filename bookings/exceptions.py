"""
Errors raised while deriving booking prices and parsing money input.

They subclass Django's ValidationError so the admin form and the API can
attach them to fields without translating them first.
"""
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


class PricingError(ValidationError):
    default_message = _("Unable to compute the booking price.")
    default_code = 'pricing_error'

    def __init__(self, message=None, code=None, params=None):
        super().__init__(
            message or self.default_message,
            code=code or self.default_code,
            params=params,
        )


class HotelNotFound(PricingError):
    default_message = _("Hotel %(hotel)s does not exist.")
    default_code = 'hotel_not_found'

    def __init__(self, hotel, message=None):
        self.hotel = hotel
        super().__init__(message, params={'hotel': hotel})


class InvalidNumericInput(PricingError):
    default_message = _("Enter a valid number.")
    default_code = 'invalid_number'


class InvalidDateRange(PricingError):
    default_message = _("Check-out date must be after check-in date.")
    default_code = 'invalid_date_range'
