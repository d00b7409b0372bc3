import logging
from django.contrib import admin
from django.utils import dateformat
from django.utils.html import format_html

from .forms import BookingAdminForm
from .models import Booking
from .money import MoneyFormatter

logger = logging.getLogger(__name__)

LIST_DATE_FORMAT = 'l, d F Y'

STATUS_COLORS = {
    Booking.BookingStatus.PENDING: '#d97706',   # warning
    Booking.BookingStatus.CONFIRMED: '#16a34a', # success
    Booking.BookingStatus.CANCELLED: '#dc2626', # danger
}


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    form = BookingAdminForm
    list_display = (
        'booked_by', 'hotel_name', 'check_in', 'check_out', 'number_of_rooms',
        'total_price_label', 'status_badge',
    )
    list_filter = ('status', 'hotel', 'check_in_date')
    search_fields = ('user__name', 'user__username', 'hotel__name')
    list_select_related = ('user', 'hotel')
    autocomplete_fields = ('user', 'hotel')
    radio_fields = {'status': admin.HORIZONTAL}
    ordering = ('-created_at',)
    date_hierarchy = 'check_in_date'

    fieldsets = (
        ('Customer Details', {
            'fields': ('user', 'hotel'),
        }),
        ('Order Details', {
            'fields': (
                ('check_in_date', 'check_out_date'),
                ('total_nights', 'number_of_rooms'),
                'price_per_night',
                'total_price',
            ),
        }),
        ('Status', {
            'fields': ('status',),
            'classes': ('collapse',), # Make this section collapsible
        }),
    )

    class Media:
        js = ('admin/js/jquery.init.js', 'bookings/js/booking_form.js')

    @admin.display(description='Booked by', ordering='user__name')
    def booked_by(self, obj):
        return obj.user.name or obj.user.username

    @admin.display(description='Hotel', ordering='hotel__name')
    def hotel_name(self, obj):
        return obj.hotel.name

    @admin.display(description='Check-in date', ordering='check_in_date')
    def check_in(self, obj):
        return dateformat.format(obj.check_in_date, LIST_DATE_FORMAT)

    @admin.display(description='Check-out date', ordering='check_out_date')
    def check_out(self, obj):
        return dateformat.format(obj.check_out_date, LIST_DATE_FORMAT)

    @admin.display(description='Total price', ordering='total_price')
    def total_price_label(self, obj):
        return MoneyFormatter().to_currency_label(obj.total_price)

    @admin.display(description='Status', ordering='status')
    def status_badge(self, obj):
        return format_html(
            '<span class="booking-status booking-status-{}" style="padding:2px 8px;border-radius:8px;'
            'color:#fff;background-color:{}">{}</span>',
            obj.status,
            STATUS_COLORS.get(obj.status, '#6b7280'),
            obj.get_status_display(),
        )

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        logger.info(
            "Booking %s %s by %s (total %s)",
            obj.pk, 'updated' if change else 'created', request.user, obj.total_price,
        )

    def delete_model(self, request, obj):
        obj.delete()
        logger.info("Booking %s soft-deleted by %s", obj.pk, request.user)

    def delete_queryset(self, request, queryset):
        count = queryset.delete()
        logger.info("%s bookings soft-deleted by %s", count, request.user)
