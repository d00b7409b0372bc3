from django.contrib import admin
from .models import Hotel

@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ('name', 'price_per_night', 'address')
    search_fields = ('name',) # Required for autocomplete on the booking form
    ordering = ('name',)
