from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from hotels.models import Hotel
from .exceptions import HotelNotFound, PricingError
from .models import Booking
from .money import MoneyFormatter, get_min_total_price
from .pricing import PricingCalculator


class BookingSerializer(serializers.ModelSerializer):
    user = serializers.StringRelatedField(read_only=True)
    user_id = serializers.PrimaryKeyRelatedField(
        queryset=get_user_model().objects.all(), source='user', write_only=True
    )
    hotel = serializers.StringRelatedField(read_only=True)
    hotel_id = serializers.PrimaryKeyRelatedField(
        queryset=Hotel.objects.all(), source='hotel', write_only=True
    )

    # Derived values are computed from hotel, dates and rooms, never written directly
    total_nights = serializers.IntegerField(read_only=True)
    price_per_night = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    price_per_night_display = serializers.SerializerMethodField()
    total_price_display = serializers.SerializerMethodField()
    total_price_label = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = (
            'id', 'user', 'user_id', 'hotel', 'hotel_id',
            'check_in_date', 'check_out_date', 'total_nights', 'number_of_rooms',
            'price_per_night', 'price_per_night_display',
            'total_price', 'total_price_display', 'total_price_label',
            'status', 'created_at', 'updated_at',
        )
        read_only_fields = ('created_at', 'updated_at')

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.formatter = MoneyFormatter()

    def get_price_per_night_display(self, obj):
        return self.formatter.to_display(obj.price_per_night)

    def get_total_price_display(self, obj):
        return self.formatter.to_display(obj.total_price)

    def get_total_price_label(self, obj):
        return self.formatter.to_currency_label(obj.total_price)

    def validate_number_of_rooms(self, value):
        if value < 1:
            raise serializers.ValidationError("Number of rooms must be at least 1.")
        return value

    def validate(self, data):
        """
        Check that check-out is after check-in, then derive nights and both
        amounts the same way the admin form does.
        """
        # Fall back to instance values for partial updates
        hotel = data.get('hotel', getattr(self.instance, 'hotel', None))
        check_in_date = data.get('check_in_date', getattr(self.instance, 'check_in_date', None))
        check_out_date = data.get('check_out_date', getattr(self.instance, 'check_out_date', None))
        number_of_rooms = data.get('number_of_rooms', getattr(self.instance, 'number_of_rooms', 1))

        if not (check_in_date and check_out_date):
            raise serializers.ValidationError({"dates": "Both check-in and check-out dates are required."})
        if check_out_date <= check_in_date:
            raise serializers.ValidationError({"check_out_date": "Check-out date must be after check-in date."})

        calculator = PricingCalculator(formatter=self.formatter)
        try:
            display = calculator.display_values(hotel, check_in_date, check_out_date, number_of_rooms)
        except HotelNotFound as exc:
            raise serializers.ValidationError({"hotel_id": exc.messages})
        except PricingError as exc:
            raise serializers.ValidationError({"number_of_rooms": exc.messages})

        minimum = get_min_total_price()
        if display['total_price'] < minimum:
            raise serializers.ValidationError(
                {"total_price": f"Total price must be at least {self.formatter.format_display(minimum)}."}
            )

        values = calculator.to_stored(display)
        try:
            Booking.check_amounts(values)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.message_dict)

        data.update(values)
        return data


class RecalculateSerializer(serializers.Serializer):
    """Body of a field-change event sent by the booking form."""
    field = serializers.CharField()
    value = serializers.JSONField(required=False, allow_null=True)
    state = serializers.DictField(required=False, default=dict)
