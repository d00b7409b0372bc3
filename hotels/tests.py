from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from decimal import Decimal

from .models import Hotel
from users.models import CustomUser


class HotelTests(TestCase):
    def setUp(self):
        self.hotel = Hotel.objects.create(name="Hotel Indonesia", price_per_night=Decimal("500.00"))

    def test_str(self):
        self.assertEqual(str(self.hotel), "Hotel Indonesia")

    def test_negative_rate_is_rejected(self):
        self.hotel.price_per_night = Decimal("-1.00")
        with self.assertRaises(ValidationError) as ctx:
            self.hotel.full_clean()
        self.assertIn('price_per_night', ctx.exception.message_dict)

    def test_hotel_autocomplete_for_booking_form(self):
        # The booking form picks hotels through the admin autocomplete view
        admin_user = CustomUser.objects.create_superuser('admin_h', 'admin_h@example.com', 'password123')
        self.client.force_login(admin_user)
        Hotel.objects.create(name="Grand Bali", price_per_night=Decimal("800.00"))
        response = self.client.get(reverse('admin:autocomplete'), {
            'term': 'Bali',
            'app_label': 'bookings',
            'model_name': 'booking',
            'field_name': 'hotel',
        })
        self.assertEqual(response.status_code, 200)
        results = response.json()['results']
        self.assertEqual([r['text'] for r in results], ["Grand Bali"])
