from decimal import Decimal
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .exceptions import InvalidDateRange


class BookingQuerySet(models.QuerySet):
    def alive(self):
        return self.filter(deleted_at__isnull=True)

    def dead(self):
        return self.filter(deleted_at__isnull=False)

    def delete(self):
        # Soft delete: rows stay in the table but drop out of Booking.objects
        return self.update(deleted_at=timezone.now())

    def hard_delete(self):
        return super().delete()


class BookingManager(models.Manager.from_queryset(BookingQuerySet)):
    def __init__(self, *args, alive_only=True, **kwargs):
        self.alive_only = alive_only
        super().__init__(*args, **kwargs)

    def get_queryset(self):
        queryset = super().get_queryset()
        return queryset.alive() if self.alive_only else queryset


class Booking(models.Model):
    class BookingStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT, # Keep booking history if someone tries to remove the customer
        related_name="bookings",
        verbose_name=_("customer"),
    )
    hotel = models.ForeignKey('hotels.Hotel', on_delete=models.PROTECT, related_name="bookings")
    check_in_date = models.DateField(_("check-in date"))
    check_out_date = models.DateField(_("check-out date"))
    total_nights = models.PositiveIntegerField(default=0)
    number_of_rooms = models.PositiveIntegerField(_("number of rooms"), default=1, validators=[MinValueValidator(1)])

    # Both amounts are in stored units (see bookings.money); the admin shows
    # them multiplied by BOOKING_DISPLAY_SCALE.
    price_per_night = models.DecimalField(_("price/night"), max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_price = models.DecimalField(_("total price"), max_digits=12, decimal_places=2, default=Decimal('0.00'))

    status = models.CharField(
        max_length=20,
        choices=BookingStatus.choices,
        default=BookingStatus.PENDING,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, editable=False, db_index=True)

    objects = BookingManager()
    all_objects = BookingManager(alive_only=False)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"Booking #{self.pk} for {self.user} at {self.hotel} ({self.check_in_date} to {self.check_out_date})"

    def clean(self):
        if self.check_in_date and self.check_out_date and self.check_out_date <= self.check_in_date:
            raise InvalidDateRange()

    def save(self, *args, **kwargs):
        if self.check_in_date and self.check_out_date:
            self.total_nights = abs((self.check_out_date - self.check_in_date).days)
        super().save(*args, **kwargs)

    @classmethod
    def check_amounts(cls, values):
        """Runs the amount fields' validators (max_digits) over derived values."""
        errors = {}
        for name in ('price_per_night', 'total_price'):
            try:
                cls._meta.get_field(name).run_validators(values[name])
            except ValidationError as exc:
                errors[name] = exc.error_list
        if errors:
            raise ValidationError(errors)

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def delete(self, using=None, keep_parents=False):
        self.deleted_at = timezone.now()
        self.save(update_fields=['deleted_at'])

    def hard_delete(self, using=None, keep_parents=False):
        return super().delete(using=using, keep_parents=keep_parents)

    def restore(self):
        self.deleted_at = None
        self.save(update_fields=['deleted_at'])
