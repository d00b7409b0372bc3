import logging
from django import forms
from django.core.exceptions import ValidationError
from django.urls import reverse
from django.utils.translation import gettext_lazy as _

from .exceptions import InvalidDateRange, PricingError
from .models import Booking
from .money import get_min_total_price
from .pricing import PricingCalculator

logger = logging.getLogger(__name__)

READONLY_ATTRS = {'readonly': 'readonly'}


class BookingAdminForm(forms.ModelForm):
    """
    Create/edit form for bookings.

    The derived fields (total nights, price/night, total price) are read-only
    inputs kept up to date in the browser through the recalculate endpoint.
    Whatever they contain on submit, the stored values are recomputed here
    from the hotel, the dates and the room count.
    """
    total_nights = forms.IntegerField(
        label=_("Total nights"), required=False,
        widget=forms.TextInput(attrs=READONLY_ATTRS),
    )
    price_per_night = forms.CharField(
        label=_("Price/Night"), required=False,
        widget=forms.TextInput(attrs={**READONLY_ATTRS, 'class': 'vTextField'}),
    )
    total_price = forms.CharField(
        label=_("Total Price"), required=False,
        widget=forms.TextInput(attrs={**READONLY_ATTRS, 'class': 'vTextField'}),
    )

    class Meta:
        model = Booking
        fields = (
            'user', 'hotel', 'check_in_date', 'check_out_date', 'total_nights',
            'number_of_rooms', 'price_per_night', 'total_price', 'status',
        )
        labels = {
            'user': _("Customer"),
            'hotel': _("Hotel"),
            'check_in_date': _("Check-In Date"),
            'check_out_date': _("Check-Out Date"),
            'number_of_rooms': _("Number of Rooms"),
            'status': _("Status"),
        }

    def __init__(self, *args, calculator=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.calculator = calculator or PricingCalculator()
        self.formatter = self.calculator.formatter

        if self.instance.pk:
            self.initial.update(self.calculator.hydrate(self.instance))
        else:
            # Nothing to derive until a hotel and dates are picked
            self.initial['price_per_night'] = ''
            self.initial['total_price'] = ''

        self.fields['total_price'].widget.attrs['data-recalculate-url'] = reverse('booking-recalculate')

    def _dehydrate(self, name):
        value = self.cleaned_data.get(name)
        if value in (None, ''):
            return None
        return self.formatter.to_storage(value)

    def clean_price_per_night(self):
        return self._dehydrate('price_per_night')

    def clean_total_price(self):
        return self._dehydrate('total_price')

    def clean(self):
        cleaned_data = super().clean()
        hotel = cleaned_data.get('hotel')
        check_in_date = cleaned_data.get('check_in_date')
        check_out_date = cleaned_data.get('check_out_date')
        number_of_rooms = cleaned_data.get('number_of_rooms')

        if check_in_date and check_out_date and check_out_date <= check_in_date:
            self.add_error('check_out_date', InvalidDateRange())
            return cleaned_data

        # Missing inputs are already reported by their own fields
        if not (hotel and check_in_date and check_out_date and number_of_rooms):
            return cleaned_data

        try:
            display = self.calculator.display_values(hotel, check_in_date, check_out_date, number_of_rooms)
        except PricingError as exc:
            self.add_error('number_of_rooms', exc)
            return cleaned_data

        minimum = get_min_total_price()
        if display['total_price'] < minimum:
            self.add_error('total_price', forms.ValidationError(
                _("Total price must be at least %(minimum)s."),
                code='min_value',
                params={'minimum': self.formatter.format_display(minimum)},
            ))
            return cleaned_data

        values = self.calculator.to_stored(display)
        try:
            Booking.check_amounts(values)
        except ValidationError as exc:
            self.add_error(None, exc)
            return cleaned_data

        submitted_total = cleaned_data.get('total_price')
        if submitted_total is not None and submitted_total != values['total_price']:
            logger.info(
                "Submitted total %s for booking %s replaced by recomputed %s",
                submitted_total, self.instance.pk or '(new)', values['total_price'],
            )

        cleaned_data.update(values)
        return cleaned_data
