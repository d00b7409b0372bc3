"""
Money formatting for booking amounts.

Amounts are stored in thousands of the booking currency (the same unit as
Hotel.price_per_night). The admin shows them multiplied by the display scale,
using '.' to group thousands and ',' for decimals, e.g. a stored 3000 is
shown as "3.000.000,00".
"""
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.conf import settings
from django.utils import formats, numberformat, translation

from .exceptions import InvalidNumericInput

DISPLAY_DECIMAL_SEPARATOR = ','
DISPLAY_THOUSAND_SEPARATOR = '.'
DISPLAY_GROUPING = 3

TWO_PLACES = Decimal('0.01')

# Amounts and counts with more integer digits than the default decimal
# context carries are rejected before any arithmetic.
MAX_INTEGER_DIGITS = 28

# Everything except digits, separators and the sign is formatting noise
# (currency symbols, spaces, non-breaking spaces).
NON_NUMERIC_RE = re.compile(r'[^\d,.\-]')

# "1500.50": a lone '.' followed by exactly two digits is a decimal point.
PLAIN_DECIMAL_RE = re.compile(r'^-?\d+\.\d{2}$')


def get_display_scale():
    return Decimal(getattr(settings, 'BOOKING_DISPLAY_SCALE', 1000))


def get_persistence_scale():
    return Decimal(getattr(settings, 'BOOKING_PERSISTENCE_SCALE', get_display_scale()))


def get_min_total_price():
    return Decimal(getattr(settings, 'BOOKING_MIN_TOTAL_PRICE', 100))


def quantize_amount(value):
    try:
        return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Too many digits to keep two decimal places
        raise InvalidNumericInput("Amount is too large.", code='too_large')


def check_magnitude(number):
    if not number.is_finite():
        raise InvalidNumericInput()
    if number and number.adjusted() >= MAX_INTEGER_DIGITS:
        raise InvalidNumericInput("Number is too large.", code='too_large')
    return number


def to_decimal(value):
    """Coerces a plain number (or numeric string) to Decimal."""
    if isinstance(value, bool) or value is None:
        raise InvalidNumericInput()
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(str(value))
    else:
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidNumericInput()
    return check_magnitude(number)


class MoneyFormatter:
    def __init__(self, locale=None, currency=None, display_scale=None, persistence_scale=None):
        self.locale = locale or getattr(settings, 'BOOKING_LOCALE', 'id_ID')
        self.currency = currency or getattr(settings, 'BOOKING_CURRENCY', 'IDR')
        self.display_scale = Decimal(display_scale) if display_scale is not None else get_display_scale()
        if persistence_scale is not None:
            self.persistence_scale = Decimal(persistence_scale)
        elif display_scale is not None:
            self.persistence_scale = self.display_scale
        else:
            self.persistence_scale = get_persistence_scale()

    @staticmethod
    def strip_formatting(value):
        return NON_NUMERIC_RE.sub('', str(value))

    def parse_display(self, display):
        """
        Reads a display string ("Rp 3.000.000,00") back into a Decimal.
        Plain numbers pass through unchanged.

        '.' groups thousands, so "1.500" is 1500. The one exception is a
        string without ',' whose only '.' is followed by exactly two digits:
        "1500.50" is read as a plain decimal.
        """
        if not isinstance(display, str):
            return to_decimal(display)

        cleaned = self.strip_formatting(display)
        if not any(ch.isdigit() for ch in cleaned):
            raise InvalidNumericInput()

        if PLAIN_DECIMAL_RE.match(cleaned):
            normalized = cleaned
        else:
            normalized = cleaned.replace(DISPLAY_THOUSAND_SEPARATOR, '').replace(DISPLAY_DECIMAL_SEPARATOR, '.')
        try:
            number = Decimal(normalized)
        except InvalidOperation:
            raise InvalidNumericInput()
        return check_magnitude(number)

    def format_display(self, amount):
        """Renders an amount that is already in display scale."""
        return numberformat.format(
            quantize_amount(to_decimal(amount)),
            DISPLAY_DECIMAL_SEPARATOR,
            decimal_pos=2,
            grouping=DISPLAY_GROUPING,
            thousand_sep=DISPLAY_THOUSAND_SEPARATOR,
            force_grouping=True,
        )

    def stored_amount(self, stored):
        # DB values arrive as Decimal; strings may be plain ("1500.00") or
        # already carry display formatting ("1.500,00").
        if isinstance(stored, str):
            cleaned = self.strip_formatting(stored)
            if DISPLAY_DECIMAL_SEPARATOR in cleaned:
                return self.parse_display(cleaned)
            return to_decimal(cleaned)
        return to_decimal(stored)

    def to_display(self, stored):
        return self.format_display(self.stored_amount(stored) * self.display_scale)

    def to_storage(self, display_value):
        """Maps a display amount (string or number) back to the stored unit."""
        amount = self.parse_display(display_value)
        return quantize_amount(amount / self.persistence_scale)

    def to_currency_label(self, stored, locale=None):
        """
        Read-only currency label for list views, e.g. "Rp 1.500.000,00".
        Number separators follow Django's format module for the locale.
        """
        amount = quantize_amount(self.stored_amount(stored) * self.display_scale)
        language = translation.to_language(locale or self.locale)
        with translation.override(language):
            number = formats.number_format(amount, decimal_pos=2, use_l10n=True, force_grouping=True)
        symbols = getattr(settings, 'BOOKING_CURRENCY_SYMBOLS', {})
        symbol = symbols.get(self.currency, self.currency)
        return f"{symbol}\xa0{number}"
