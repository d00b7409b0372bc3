from django.test import TestCase

from .models import CustomUser


class CustomUserTests(TestCase):
    def test_name_defaults_to_full_name(self):
        user = CustomUser.objects.create_user('budi', 'budi@example.com', 'password123', first_name="Budi", last_name="Santoso")
        self.assertEqual(user.name, "Budi Santoso")
        self.assertEqual(str(user), "Budi Santoso")

    def test_name_defaults_to_username(self):
        user = CustomUser.objects.create_user('sari', 'sari@example.com', 'password123')
        self.assertEqual(user.name, "sari")

    def test_explicit_name_is_kept(self):
        user = CustomUser.objects.create_user('rina', 'rina@example.com', 'password123', name="Rina W.")
        self.assertEqual(str(user), "Rina W.")
