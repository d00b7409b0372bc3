"""
Derived booking values: nights, nightly rate and total price.

The admin form (through the recalculate endpoint) and the API call into
PricingCalculator whenever the hotel, one of the dates or the room count
changes. Every call takes the current form values and returns only the fields
that should be updated, so the same inputs always give the same updates.
"""
import datetime
from decimal import Decimal

from django.utils.dateparse import parse_date

from .exceptions import HotelNotFound, InvalidDateRange, InvalidNumericInput
from .money import MoneyFormatter, get_display_scale, quantize_amount, to_decimal

HOTEL_FIELDS = ('hotel', 'hotel_id')
DATE_FIELDS = ('check_in_date', 'check_out_date')
ROOMS_FIELD = 'number_of_rooms'

# Format used by the admin date pickers, accepted alongside ISO dates.
DISPLAY_DATE_FORMAT = '%d-%m-%Y'


def hotel_rate_lookup(hotel_id):
    """Returns the base nightly rate of a hotel, raising HotelNotFound."""
    from hotels.models import Hotel # Local import, hotels must not depend on bookings at import time

    try:
        return Hotel.objects.values_list('price_per_night', flat=True).get(pk=hotel_id)
    except (Hotel.DoesNotExist, ValueError, TypeError):
        raise HotelNotFound(hotel_id)


def parse_booking_date(value):
    if value in (None, ''):
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value

    value = str(value).strip()
    try:
        parsed = parse_date(value)
        if parsed is None:
            parsed = datetime.datetime.strptime(value, DISPLAY_DATE_FORMAT).date()
    except ValueError:
        raise InvalidDateRange("Enter a valid date.", code='invalid_date')
    return parsed


def parse_room_count(value, field_label="Number of rooms"):
    """Room and night counts come from text inputs; blanks count as zero."""
    if value in (None, ''):
        return 0
    if isinstance(value, bool):
        raise InvalidNumericInput()
    try:
        number = to_decimal(value)
    except InvalidNumericInput as exc:
        if exc.code == 'too_large':
            raise
        raise InvalidNumericInput(f"{field_label} must be a whole number.")
    if number != number.to_integral_value():
        raise InvalidNumericInput(f"{field_label} must be a whole number.")
    rooms = int(number)
    if rooms < 0:
        raise InvalidNumericInput(f"{field_label} cannot be negative.")
    return rooms


class PricingCalculator:
    def __init__(self, rate_lookup=None, display_scale=None, formatter=None):
        self.rate_lookup = rate_lookup or hotel_rate_lookup
        self.display_scale = Decimal(display_scale) if display_scale is not None else get_display_scale()
        self.formatter = formatter or MoneyFormatter(display_scale=display_scale)

    # --- Formulas ---
    def compute_nights(self, check_in, check_out):
        return abs((check_out - check_in).days)

    def compute_display_nightly_rate(self, base_rate):
        return quantize_amount(to_decimal(base_rate) * self.display_scale)

    def compute_display_total_price(self, rooms, nights, base_rate):
        """
        rooms x nights x base rate, in display scale. Returns None while any
        input is missing or zero, meaning the current total stays as it is.
        """
        if not rooms or not nights or not base_rate:
            return None
        return quantize_amount(Decimal(rooms) * Decimal(nights) * to_decimal(base_rate) * self.display_scale)

    def lookup_rate(self, hotel):
        if hasattr(hotel, 'price_per_night'):
            return hotel.price_per_night
        return self.rate_lookup(hotel)

    # --- Form state helpers ---
    def _hotel_ref(self, state):
        for name in HOTEL_FIELDS:
            if state.get(name) not in (None, ''):
                return state[name]
        return None

    def _rate(self, state):
        hotel = self._hotel_ref(state)
        if hotel is None:
            return None
        return self.lookup_rate(hotel)

    def _nights(self, state):
        check_in = parse_booking_date(state.get('check_in_date'))
        check_out = parse_booking_date(state.get('check_out_date'))
        if check_in and check_out:
            return self.compute_nights(check_in, check_out)
        return parse_room_count(state.get('total_nights'), field_label="Total nights")

    def _total_update(self, rooms, nights, state):
        if not rooms or not nights:
            return {}
        total = self.compute_display_total_price(rooms, nights, self._rate(state))
        if total is None:
            return {}
        return {'total_price': self.formatter.format_display(total)}

    # --- Hooks ---
    def handle_field_change(self, field_name, new_value, form_state=None):
        """
        Field-change hook. Returns a mapping of field name to new value for
        the fields affected by `field_name` changing to `new_value`.
        """
        state = dict(form_state or {})
        if field_name in HOTEL_FIELDS:
            for name in HOTEL_FIELDS:
                state[name] = new_value
            return self._on_hotel_change(state)

        state[field_name] = new_value
        if field_name in DATE_FIELDS:
            return self._on_dates_change(state)
        if field_name == ROOMS_FIELD:
            return self._on_rooms_change(state)
        return {}

    def _on_hotel_change(self, state):
        hotel = self._hotel_ref(state)
        if hotel is None:
            return {}
        rate = self.lookup_rate(hotel)
        updates = {
            'price_per_night': self.formatter.format_display(self.compute_display_nightly_rate(rate)),
        }
        rooms = parse_room_count(state.get(ROOMS_FIELD))
        total = self.compute_display_total_price(rooms, self._nights(state), rate)
        if total is not None:
            updates['total_price'] = self.formatter.format_display(total)
        return updates

    def _on_dates_change(self, state):
        check_in = parse_booking_date(state.get('check_in_date'))
        check_out = parse_booking_date(state.get('check_out_date'))
        nights = self.compute_nights(check_in, check_out) if check_in and check_out else 0

        updates = {'total_nights': nights}
        updates.update(self._total_update(parse_room_count(state.get(ROOMS_FIELD)), nights, state))
        return updates

    def _on_rooms_change(self, state):
        rooms = parse_room_count(state.get(ROOMS_FIELD))
        return self._total_update(rooms, self._nights(state), state)

    def hydrate(self, booking):
        """Display values for a booking loaded into the form."""
        values = {}
        if booking.hotel_id:
            rate = self.lookup_rate(booking.hotel_id)
            values['price_per_night'] = self.formatter.format_display(self.compute_display_nightly_rate(rate))
        if booking.check_in_date and booking.check_out_date:
            values['total_nights'] = self.compute_nights(booking.check_in_date, booking.check_out_date)
        if booking.total_price is not None:
            values['total_price'] = self.formatter.to_display(booking.total_price)
        return values

    def display_values(self, hotel, check_in, check_out, rooms):
        """Nights and both amounts in display scale, as the form shows them."""
        rate = self.lookup_rate(hotel)
        nights = self.compute_nights(check_in, check_out)
        total = self.compute_display_total_price(rooms, nights, rate)
        return {
            'total_nights': nights,
            'price_per_night': self.compute_display_nightly_rate(rate),
            'total_price': total if total is not None else Decimal('0.00'),
        }

    def to_stored(self, display_values):
        """Maps display values back to stored units with MoneyFormatter.to_storage."""
        return {
            'total_nights': display_values['total_nights'],
            'price_per_night': self.formatter.to_storage(display_values['price_per_night']),
            'total_price': self.formatter.to_storage(display_values['total_price']),
        }
