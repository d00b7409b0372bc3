from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APITestCase
from rest_framework import status
from decimal import Decimal
import datetime

from .exceptions import HotelNotFound, InvalidDateRange, InvalidNumericInput
from .forms import BookingAdminForm
from .models import Booking
from .money import MoneyFormatter
from .pricing import PricingCalculator, hotel_rate_lookup
from hotels.models import Hotel
from users.models import CustomUser

RATES = {1: Decimal("500.00"), 2: Decimal("250.50")}


def fake_rate_lookup(hotel_id):
    try:
        return RATES[int(hotel_id)]
    except (KeyError, ValueError):
        raise HotelNotFound(hotel_id)


class PricingCalculatorTests(SimpleTestCase):
    def setUp(self):
        self.calculator = PricingCalculator(rate_lookup=fake_rate_lookup, display_scale=1000)
        self.state = {
            'hotel': '1',
            'check_in_date': '2024-01-01',
            'check_out_date': '2024-01-04',
            'number_of_rooms': '2',
        }

    # --- Formulas ---
    def test_compute_nights(self):
        self.assertEqual(self.calculator.compute_nights(datetime.date(2024, 1, 1), datetime.date(2024, 1, 4)), 3)

    def test_compute_nights_is_symmetric(self):
        a, b = datetime.date(2024, 3, 30), datetime.date(2024, 2, 26)
        self.assertEqual(self.calculator.compute_nights(a, b), self.calculator.compute_nights(b, a))
        self.assertEqual(self.calculator.compute_nights(a, b), 33)

    def test_display_nightly_rate(self):
        self.assertEqual(self.calculator.compute_display_nightly_rate(Decimal("250.5")), Decimal("250500.00"))

    def test_display_total_price(self):
        total = self.calculator.compute_display_total_price(2, 3, Decimal("500"))
        self.assertEqual(total, Decimal("3000000.00"))
        self.assertEqual(self.calculator.formatter.format_display(total), "3.000.000,00")

    def test_display_total_price_matches_formula(self):
        for rooms, nights, rate in [(1, 1, Decimal("0.01")), (3, 7, Decimal("250.50")), (10, 30, Decimal("1.234"))]:
            expected = (Decimal(rooms) * nights * rate * 1000).quantize(Decimal("0.01"))
            self.assertEqual(self.calculator.compute_display_total_price(rooms, nights, rate), expected)

    def test_display_total_price_skips_partial_inputs(self):
        self.assertIsNone(self.calculator.compute_display_total_price(0, 3, Decimal("500")))
        self.assertIsNone(self.calculator.compute_display_total_price(2, 0, Decimal("500")))
        self.assertIsNone(self.calculator.compute_display_total_price(2, 3, None))

    # --- Field-change hook ---
    def test_hotel_change_updates_rate_and_total(self):
        updates = self.calculator.handle_field_change('hotel', '1', self.state)
        self.assertEqual(updates, {'price_per_night': '500.000,00', 'total_price': '3.000.000,00'})

    def test_hotel_change_without_dates_only_updates_rate(self):
        updates = self.calculator.handle_field_change('hotel_id', 2, {'number_of_rooms': '1'})
        self.assertEqual(updates, {'price_per_night': '250.500,00'})

    def test_hotel_cleared_emits_nothing(self):
        self.assertEqual(self.calculator.handle_field_change('hotel', '', self.state), {})

    def test_unknown_hotel_raises(self):
        with self.assertRaises(HotelNotFound):
            self.calculator.handle_field_change('hotel', '99', self.state)

    def test_check_out_change_updates_nights_and_total(self):
        updates = self.calculator.handle_field_change('check_out_date', '2024-01-04', self.state)
        self.assertEqual(updates, {'total_nights': 3, 'total_price': '3.000.000,00'})

    def test_check_in_change_recomputes_nights(self):
        updates = self.calculator.handle_field_change('check_in_date', '2024-01-03', self.state)
        self.assertEqual(updates, {'total_nights': 1, 'total_price': '1.000.000,00'})

    def test_display_date_format_is_accepted(self):
        updates = self.calculator.handle_field_change('check_out_date', '04-01-2024', self.state)
        self.assertEqual(updates['total_nights'], 3)

    def test_cleared_check_out_resets_nights(self):
        updates = self.calculator.handle_field_change('check_out_date', None, self.state)
        self.assertEqual(updates, {'total_nights': 0})

    def test_invalid_date_raises(self):
        with self.assertRaises(InvalidDateRange):
            self.calculator.handle_field_change('check_out_date', '2024-02-30', self.state)

    def test_rooms_change_updates_total(self):
        updates = self.calculator.handle_field_change('number_of_rooms', '4', self.state)
        self.assertEqual(updates, {'total_price': '6.000.000,00'})

    def test_zero_rooms_leaves_total_unchanged(self):
        self.assertEqual(self.calculator.handle_field_change('number_of_rooms', '0', self.state), {})

    def test_rooms_without_dates_uses_total_nights(self):
        state = {'hotel': '1', 'total_nights': '2'}
        updates = self.calculator.handle_field_change('number_of_rooms', 1, state)
        self.assertEqual(updates, {'total_price': '1.000.000,00'})

    def test_non_numeric_rooms_raise(self):
        with self.assertRaises(InvalidNumericInput):
            self.calculator.handle_field_change('number_of_rooms', 'two', self.state)
        with self.assertRaises(InvalidNumericInput):
            self.calculator.handle_field_change('number_of_rooms', '1.5', self.state)

    def test_oversized_rooms_raise(self):
        # Room counts this large overflow the two-decimal total
        for value in (str(10 ** 25), 10 ** 25, '9' * 40):
            with self.assertRaises(InvalidNumericInput):
                self.calculator.handle_field_change('number_of_rooms', value, self.state)

    def test_oversized_rate_raises(self):
        with self.assertRaises(InvalidNumericInput):
            self.calculator.compute_display_nightly_rate(Decimal("1E+30"))
        with self.assertRaises(InvalidNumericInput):
            self.calculator.compute_display_total_price(10 ** 20, 3, Decimal("500"))

    def test_state_is_not_mutated(self):
        original = dict(self.state)
        self.calculator.handle_field_change('number_of_rooms', '5', self.state)
        self.calculator.handle_field_change('hotel', '2', self.state)
        self.assertEqual(self.state, original)

    def test_same_inputs_same_updates(self):
        first = self.calculator.handle_field_change('check_out_date', '2024-01-10', self.state)
        second = self.calculator.handle_field_change('check_out_date', '2024-01-10', self.state)
        self.assertEqual(first, second)

    def test_unrelated_field_emits_nothing(self):
        self.assertEqual(self.calculator.handle_field_change('status', 'confirmed', self.state), {})

    def test_errors_are_validation_errors(self):
        try:
            self.calculator.handle_field_change('hotel', '99', self.state)
        except HotelNotFound as exc:
            self.assertEqual(exc.code, 'hotel_not_found')
            self.assertEqual(exc.messages, ["Hotel 99 does not exist."])


class MoneyFormatterTests(SimpleTestCase):
    def setUp(self):
        self.formatter = MoneyFormatter(locale='id_ID', currency='IDR', display_scale=1000)

    def test_to_display_scales_and_groups(self):
        self.assertEqual(self.formatter.to_display(Decimal("3000")), "3.000.000,00")
        self.assertEqual(self.formatter.to_display("1500.00"), "1.500.000,00")
        self.assertEqual(self.formatter.to_display(Decimal("0.5")), "500,00")

    def test_to_display_strips_formatting(self):
        self.assertEqual(self.formatter.to_display("Rp 1.500,00"), "1.500.000,00")

    def test_parse_display(self):
        self.assertEqual(self.formatter.parse_display("3.000.000,00"), Decimal("3000000.00"))
        self.assertEqual(self.formatter.parse_display("Rp\xa01.500.000,00"), Decimal("1500000.00"))
        self.assertEqual(self.formatter.parse_display("-12,50"), Decimal("-12.50"))

    def test_parse_display_rejects_non_numeric(self):
        for value in ("", "abc", "Rp", "1-2"):
            with self.assertRaises(InvalidNumericInput):
                self.formatter.parse_display(value)

    def test_negative_amount_formatting(self):
        self.assertEqual(self.formatter.format_display(Decimal("-1234.5")), "-1.234,50")

    def test_storage_round_trip(self):
        for value in ("0.00", "1.50", "1500.00", "123456.78"):
            amount = Decimal(value)
            display = self.formatter.to_display(amount)
            self.assertEqual(self.formatter.to_storage(self.formatter.parse_display(display)), amount)

    def test_to_storage_accepts_display_strings(self):
        self.assertEqual(self.formatter.to_storage("3.000.000,00"), Decimal("3000.00"))

    def test_distinct_persistence_scale(self):
        formatter = MoneyFormatter(display_scale=1000, persistence_scale=100000)
        self.assertEqual(formatter.to_storage("3.000.000,00"), Decimal("30.00"))

    def test_currency_label(self):
        self.assertEqual(self.formatter.to_currency_label(1500, 'id_ID'), "Rp\xa01.500.000,00")

    def test_oversized_amounts_are_rejected(self):
        for value in ('9' * 40, '9' * 40 + ',00', Decimal('9' * 30)):
            with self.assertRaises(InvalidNumericInput):
                self.formatter.to_storage(value)
        with self.assertRaises(InvalidNumericInput):
            self.formatter.format_display(Decimal('9' * 27))

    def test_plain_decimal_point(self):
        self.assertEqual(self.formatter.parse_display("1500.50"), Decimal("1500.50"))
        self.assertEqual(self.formatter.parse_display("1.500"), Decimal("1500"))
        self.assertEqual(self.formatter.to_storage("3000000.00"), Decimal("3000.00"))

    @override_settings(BOOKING_DISPLAY_SCALE=1, BOOKING_PERSISTENCE_SCALE=1)
    def test_scale_comes_from_settings(self):
        formatter = MoneyFormatter()
        self.assertEqual(formatter.to_display(1500), "1.500,00")
        self.assertEqual(formatter.to_storage("1.500,00"), Decimal("1500.00"))


class BookingTestData:
    def create_fixtures(self):
        self.customer = CustomUser.objects.create_user('budi', 'budi@example.com', 'password123', name="Budi Santoso")
        self.hotel = Hotel.objects.create(name="Hotel Indonesia", price_per_night=Decimal("500.00"))
        self.check_in = datetime.date(2024, 1, 1)
        self.check_out = datetime.date(2024, 1, 4)

    def create_booking(self, **kwargs):
        data = {
            'user': self.customer,
            'hotel': self.hotel,
            'check_in_date': self.check_in,
            'check_out_date': self.check_out,
            'number_of_rooms': 2,
        }
        data.update(kwargs)
        booking = Booking(**data)
        calculator = PricingCalculator()
        display = calculator.display_values(booking.hotel, booking.check_in_date, booking.check_out_date, booking.number_of_rooms)
        for field, value in calculator.to_stored(display).items():
            setattr(booking, field, value)
        booking.save()
        return booking


class BookingModelTests(BookingTestData, TestCase):
    def setUp(self):
        self.create_fixtures()

    def test_derived_values_are_stored_in_base_units(self):
        booking = self.create_booking()
        self.assertEqual(booking.total_nights, 3)
        self.assertEqual(booking.price_per_night, Decimal("500.00"))
        self.assertEqual(booking.total_price, Decimal("3000.00"))

    def test_check_amounts_enforces_field_digits(self):
        Booking.check_amounts({'price_per_night': Decimal("500.00"), 'total_price': Decimal("3000.00")})
        with self.assertRaises(ValidationError) as ctx:
            Booking.check_amounts({'price_per_night': Decimal("500.00"), 'total_price': Decimal("1500000000000.00")})
        self.assertIn('total_price', ctx.exception.message_dict)
        self.assertNotIn('price_per_night', ctx.exception.message_dict)

    def test_save_recomputes_nights(self):
        booking = self.create_booking()
        booking.check_out_date = datetime.date(2024, 1, 11)
        booking.save()
        booking.refresh_from_db()
        self.assertEqual(booking.total_nights, 10)

    def test_clean_rejects_check_out_before_check_in(self):
        booking = Booking(user=self.customer, hotel=self.hotel, check_in_date=self.check_out, check_out_date=self.check_in)
        with self.assertRaises(InvalidDateRange):
            booking.clean()

    def test_soft_delete_and_restore(self):
        booking = self.create_booking()
        booking.delete()
        self.assertTrue(booking.is_deleted)
        self.assertEqual(Booking.objects.count(), 0)
        self.assertEqual(Booking.all_objects.count(), 1)

        booking.restore()
        self.assertEqual(Booking.objects.count(), 1)

    def test_queryset_delete_is_soft(self):
        self.create_booking()
        self.create_booking(number_of_rooms=1)
        Booking.objects.all().delete()
        self.assertEqual(Booking.objects.count(), 0)
        self.assertEqual(Booking.all_objects.dead().count(), 2)

        Booking.all_objects.all().hard_delete()
        self.assertEqual(Booking.all_objects.count(), 0)

    def test_default_rate_lookup(self):
        self.assertEqual(hotel_rate_lookup(self.hotel.pk), Decimal("500.00"))
        with self.assertRaises(HotelNotFound):
            hotel_rate_lookup(self.hotel.pk + 100)
        with self.assertRaises(HotelNotFound):
            hotel_rate_lookup("not-an-id")


class BookingAdminFormTests(BookingTestData, TestCase):
    def setUp(self):
        self.create_fixtures()

    def _form_data(self, **kwargs):
        data = {
            'user': self.customer.pk,
            'hotel': self.hotel.pk,
            'check_in_date': '2024-01-01',
            'check_out_date': '2024-01-04',
            'number_of_rooms': 2,
            'status': Booking.BookingStatus.PENDING,
            'total_nights': '',
            'price_per_night': '',
            'total_price': '',
        }
        data.update(kwargs)
        return data

    def test_valid_form_saves_recomputed_values(self):
        # The submitted total is ignored in favour of the recomputed one
        form = BookingAdminForm(data=self._form_data(total_price="1,00", price_per_night="500.000,00"))
        self.assertTrue(form.is_valid(), form.errors)
        booking = form.save()
        self.assertEqual(booking.total_nights, 3)
        self.assertEqual(booking.price_per_night, Decimal("500.00"))
        self.assertEqual(booking.total_price, Decimal("3000.00"))

    def test_check_out_must_follow_check_in(self):
        form = BookingAdminForm(data=self._form_data(check_out_date='2024-01-01'))
        self.assertFalse(form.is_valid())
        self.assertIn('check_out_date', form.errors)

    def test_non_numeric_price_is_rejected(self):
        form = BookingAdminForm(data=self._form_data(total_price="abc"))
        self.assertFalse(form.is_valid())
        self.assertIn('total_price', form.errors)

    def test_minimum_total_price(self):
        cheap = Hotel.objects.create(name="Losmen Murah", price_per_night=Decimal("0.01"))
        form = BookingAdminForm(data=self._form_data(hotel=cheap.pk, check_out_date='2024-01-02', number_of_rooms=1))
        self.assertFalse(form.is_valid())
        self.assertIn('total_price', form.errors)

    @override_settings(BOOKING_PERSISTENCE_SCALE=100000)
    def test_minimum_total_is_checked_on_display_amount(self):
        # 5.000,00 clears the minimum even though it is stored as 0.05
        small = Hotel.objects.create(name="Losmen Kecil", price_per_night=Decimal("5.00"))
        form = BookingAdminForm(data=self._form_data(hotel=small.pk, check_out_date='2024-01-02', number_of_rooms=1))
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['total_price'], Decimal("0.05"))

    def test_oversized_submitted_total_is_a_field_error(self):
        form = BookingAdminForm(data=self._form_data(total_price='9' * 40))
        self.assertFalse(form.is_valid())
        self.assertIn('total_price', form.errors)

    def test_total_must_fit_the_model_field(self):
        form = BookingAdminForm(data=self._form_data(number_of_rooms=10 ** 9))
        self.assertFalse(form.is_valid())
        self.assertIn('total_price', form.errors)

    def test_hydration_formats_display_values(self):
        booking = self.create_booking()
        form = BookingAdminForm(instance=booking)
        self.assertEqual(form.initial['price_per_night'], "500.000,00")
        self.assertEqual(form.initial['total_price'], "3.000.000,00")
        self.assertEqual(form.initial['total_nights'], 3)

    def test_recalculate_url_is_exposed_to_the_widget(self):
        form = BookingAdminForm()
        self.assertEqual(form.fields['total_price'].widget.attrs['data-recalculate-url'], reverse('booking-recalculate'))


class BookingAdminTests(BookingTestData, TestCase):
    def setUp(self):
        self.create_fixtures()
        self.admin_user = CustomUser.objects.create_superuser('admin', 'admin@example.com', 'password123')
        self.client.force_login(self.admin_user)
        self.changelist_url = reverse('admin:bookings_booking_changelist')

    def test_changelist_renders_labels(self):
        self.create_booking(status=Booking.BookingStatus.CONFIRMED)
        response = self.client.get(self.changelist_url)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Rp\xa03.000.000,00")
        self.assertContains(response, "Monday, 01 January 2024")
        self.assertContains(response, "booking-status-confirmed")
        self.assertContains(response, "Budi Santoso")

    def test_changelist_hides_timestamps(self):
        self.create_booking()
        response = self.client.get(self.changelist_url)
        self.assertContains(response, 'column-total_price_label')
        self.assertNotContains(response, 'column-created_at')
        self.assertNotContains(response, 'column-updated_at')

    def test_changelist_search(self):
        self.create_booking()
        other_hotel = Hotel.objects.create(name="Grand Bali", price_per_night=Decimal("800.00"))
        self.create_booking(hotel=other_hotel)
        response = self.client.get(self.changelist_url, {'q': 'Bali'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['cl'].result_count, 1)

    def test_add_booking_through_admin(self):
        response = self.client.post(reverse('admin:bookings_booking_add'), {
            'user': self.customer.pk,
            'hotel': self.hotel.pk,
            'check_in_date': '2024-01-01',
            'check_out_date': '2024-01-04',
            'number_of_rooms': 2,
            'status': Booking.BookingStatus.PENDING,
            'total_nights': '3',
            'price_per_night': '500.000,00',
            'total_price': '3.000.000,00',
            '_save': 'Save',
        })
        self.assertEqual(response.status_code, 302)
        booking = Booking.objects.get()
        self.assertEqual(booking.total_price, Decimal("3000.00"))
        self.assertEqual(booking.total_nights, 3)

    def test_change_view_shows_hydrated_values(self):
        booking = self.create_booking()
        response = self.client.get(reverse('admin:bookings_booking_change', args=[booking.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'value="3.000.000,00"')
        self.assertContains(response, 'value="500.000,00"')

    def test_bulk_delete_is_soft(self):
        booking = self.create_booking()
        response = self.client.post(self.changelist_url, {
            'action': 'delete_selected',
            '_selected_action': [booking.pk],
            'post': 'yes',
        })
        self.assertEqual(response.status_code, 302)
        self.assertEqual(Booking.objects.count(), 0)
        self.assertEqual(Booking.all_objects.count(), 1)


class BookingAPITests(BookingTestData, APITestCase):
    def setUp(self):
        self.create_fixtures()
        self.staff_user = CustomUser.objects.create_user('staff', 'staff@example.com', 'password123', is_staff=True)
        self.client.force_authenticate(user=self.staff_user)
        self.list_url = reverse('booking-list')
        self.recalculate_url = reverse('booking-recalculate')

    def test_recalculate_rooms_change(self):
        response = self.client.post(self.recalculate_url, {
            'field': 'number_of_rooms',
            'value': 2,
            'state': {'hotel': self.hotel.pk, 'check_in_date': '2024-01-01', 'check_out_date': '2024-01-04'},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data['updates'], {'total_price': '3.000.000,00'})

    def test_recalculate_hotel_change(self):
        response = self.client.post(self.recalculate_url, {
            'field': 'hotel',
            'value': self.hotel.pk,
            'state': {'number_of_rooms': '1', 'total_nights': '2'},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data['updates'], {'price_per_night': '500.000,00', 'total_price': '1.000.000,00'})

    def test_recalculate_unknown_hotel(self):
        response = self.client.post(self.recalculate_url, {
            'field': 'hotel', 'value': self.hotel.pk + 100, 'state': {},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('hotel', response.data)

    def test_recalculate_non_numeric_rooms(self):
        response = self.client.post(self.recalculate_url, {
            'field': 'number_of_rooms', 'value': 'many', 'state': {},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('number_of_rooms', response.data)

    def test_recalculate_oversized_rooms(self):
        response = self.client.post(self.recalculate_url, {
            'field': 'number_of_rooms',
            'value': 10 ** 25,
            'state': {'hotel': self.hotel.pk, 'check_in_date': '2024-01-01', 'check_out_date': '2024-01-04'},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('number_of_rooms', response.data)

    def test_create_booking_with_oversized_total_is_rejected(self):
        data = {
            'user_id': self.customer.pk,
            'hotel_id': self.hotel.pk,
            'check_in_date': '2024-01-01',
            'check_out_date': '2024-01-04',
            'number_of_rooms': 10 ** 9,
        }
        response = self.client.post(self.list_url, data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('total_price', response.data)
        self.assertEqual(Booking.all_objects.count(), 0)

    @override_settings(BOOKING_PERSISTENCE_SCALE=100000)
    def test_minimum_total_uses_display_amount(self):
        small = Hotel.objects.create(name="Losmen Kecil", price_per_night=Decimal("5.00"))
        data = {
            'user_id': self.customer.pk,
            'hotel_id': small.pk,
            'check_in_date': '2024-01-01',
            'check_out_date': '2024-01-02',
            'number_of_rooms': 1,
        }
        response = self.client.post(self.list_url, data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Booking.objects.get().total_price, Decimal("0.05"))

    def test_create_booking_derives_prices(self):
        data = {
            'user_id': self.customer.pk,
            'hotel_id': self.hotel.pk,
            'check_in_date': '2024-01-01',
            'check_out_date': '2024-01-04',
            'number_of_rooms': 2,
            'status': Booking.BookingStatus.CONFIRMED,
            'total_price': '1.00', # Read-only, ignored
        }
        response = self.client.post(self.list_url, data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data['total_nights'], 3)
        self.assertEqual(response.data['total_price'], '3000.00')
        self.assertEqual(response.data['total_price_display'], '3.000.000,00')
        self.assertEqual(response.data['total_price_label'], "Rp\xa03.000.000,00")
        self.assertEqual(Booking.objects.get().total_price, Decimal("3000.00"))

    def test_create_booking_invalid_dates(self):
        data = {
            'user_id': self.customer.pk,
            'hotel_id': self.hotel.pk,
            'check_in_date': '2024-01-04',
            'check_out_date': '2024-01-01',
            'number_of_rooms': 1,
        }
        response = self.client.post(self.list_url, data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('check_out_date', response.data)

    def test_partial_update_recomputes_total(self):
        booking = self.create_booking()
        url = reverse('booking-detail', kwargs={'pk': booking.pk})
        response = self.client.patch(url, {'number_of_rooms': 3}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.total_price, Decimal("4500.00"))

    def test_destroy_is_soft(self):
        booking = self.create_booking()
        response = self.client.delete(reverse('booking-detail', kwargs={'pk': booking.pk}))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Booking.objects.filter(pk=booking.pk).exists())
        self.assertTrue(Booking.all_objects.filter(pk=booking.pk).exists())

        response = self.client.get(self.list_url)
        self.assertEqual(len(response.data['results']), 0)

    def test_restore_soft_deleted_booking(self):
        booking = self.create_booking()
        booking.delete()
        url = reverse('booking-restore', kwargs={'pk': booking.pk})

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(Booking.objects.filter(pk=booking.pk).exists())

        # Bookings that are not deleted cannot be restored
        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_filters_and_search(self):
        self.create_booking(status=Booking.BookingStatus.CONFIRMED)
        bali = Hotel.objects.create(name="Grand Bali", price_per_night=Decimal("800.00"))
        self.create_booking(hotel=bali)

        response = self.client.get(self.list_url, {'status': Booking.BookingStatus.CONFIRMED})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['results']), 1)

        response = self.client.get(self.list_url, {'search': 'Bali'})
        self.assertEqual(len(response.data['results']), 1)
        self.assertEqual(response.data['results'][0]['hotel'], "Grand Bali")

    def test_non_staff_is_forbidden(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
