from decimal import Decimal
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _


class Hotel(models.Model):
    name = models.CharField(max_length=255, unique=True)
    address = models.TextField(blank=True, null=True)
    # Base nightly rate in stored units (thousands of the booking currency).
    # The booking form scales it by BOOKING_DISPLAY_SCALE for display.
    price_per_night = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name

    def clean(self):
        if self.price_per_night is not None and self.price_per_night < 0:
            raise ValidationError({'price_per_night': _("Price per night cannot be negative.")})
