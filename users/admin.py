from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import CustomUser

@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'name', 'email', 'is_staff')
    search_fields = ('username', 'name', 'email') # Needed by the booking form's customer autocomplete
    fieldsets = UserAdmin.fieldsets + (
        ('Display', {'fields': ('name',)}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Display', {'fields': ('name',)}),
    )
