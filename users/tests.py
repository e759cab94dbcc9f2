from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from .models import User
from .permissions import IsManager, IsManagerOrReadOnly


class UserModelTests(TestCase):
    def test_new_users_are_customers_with_default_settings(self):
        user = User.objects.create_user(username='ana', password='secret123')
        self.assertEqual(user.role, 'customer')
        self.assertFalse(user.is_manager)
        self.assertEqual(user.settings['language'], 'en')

    def test_display_name_falls_back_to_username(self):
        user = User.objects.create_user(username='ana', password='secret123')
        self.assertEqual(user.display_name, 'ana')
        user.first_name, user.last_name = 'Ana', 'Souza'
        self.assertEqual(user.display_name, 'Ana Souza')


class PermissionTests(TestCase):
    class FakeRequest:
        def __init__(self, user, method='GET'):
            self.user = user
            self.method = method

    def setUp(self):
        self.manager = User.objects.create_user(username='boss', password='x', role='manager')
        self.customer = User.objects.create_user(username='client', password='x')

    def test_is_manager(self):
        permission = IsManager()
        self.assertTrue(permission.has_permission(self.FakeRequest(self.manager), None))
        self.assertFalse(permission.has_permission(self.FakeRequest(self.customer), None))

    def test_customers_may_only_read(self):
        permission = IsManagerOrReadOnly()
        self.assertTrue(permission.has_permission(self.FakeRequest(self.customer, 'GET'), None))
        self.assertFalse(permission.has_permission(self.FakeRequest(self.customer, 'POST'), None))
        self.assertTrue(permission.has_permission(self.FakeRequest(self.manager, 'DELETE'), None))


class AuthApiTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='manager', password='secret123', email='m@example.com', role='manager'
        )

    def test_login_returns_tokens_and_profile(self):
        response = self.client.post(
            reverse('user-login'), {'username': 'manager', 'password': 'secret123'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['user']['role'], 'manager')

    def test_login_with_wrong_password_is_unauthorized(self):
        response = self.client.post(
            reverse('user-login'), {'username': 'manager', 'password': 'nope'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_profile_requires_authentication(self):
        response = self.client.get(reverse('user-profile'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_profile_update_merges_settings(self):
        self.client.force_authenticate(self.user)
        response = self.client.patch(
            reverse('user-profile'),
            {'company_name': 'BRL Logistics', 'settings': {'language': 'pt'}},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.user.refresh_from_db()
        self.assertEqual(self.user.company_name, 'BRL Logistics')
        self.assertEqual(self.user.settings['language'], 'pt')
        self.assertTrue(self.user.settings['email_notifications'])

    def test_unknown_setting_is_rejected(self):
        self.client.force_authenticate(self.user)
        response = self.client.patch(
            reverse('user-profile'), {'settings': {'theme': 'dark'}}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
