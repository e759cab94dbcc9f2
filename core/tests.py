from decimal import Decimal

from django.db import DatabaseError
from django.test import SimpleTestCase, override_settings
from rest_framework import status

from .conf import freightdesk_setting
from .exceptions import CostLineNotFound, InvalidTransition, api_exception_handler
from .serializers import to_plain


class ExceptionHandlerTests(SimpleTestCase):
    def test_database_error_becomes_persistence_error(self):
        response = api_exception_handler(DatabaseError('disk I/O error'), {'view': None})
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertIn('disk I/O error', response.data['detail'])

    def test_invalid_transition_reports_action_and_status(self):
        response = api_exception_handler(InvalidTransition('accept', 'draft'), {'view': None})
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['action'], 'accept')
        self.assertEqual(response.data['status'], 'draft')
        self.assertEqual(response.data['detail'], "Cannot accept a quote with status 'draft'")

    def test_cost_line_not_found_is_404(self):
        response = api_exception_handler(CostLineNotFound(index=3, size=1), {'view': None})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['detail'], 'No cost line at index 3 (1 line present)')


class SettingsTests(SimpleTestCase):
    @override_settings(FREIGHTDESK={'QUOTE_VALIDITY_DAYS': 15})
    def test_missing_keys_fall_back_to_defaults(self):
        self.assertEqual(freightdesk_setting('QUOTE_VALIDITY_DAYS'), 15)
        self.assertEqual(freightdesk_setting('DEFAULT_CURRENCY'), 'USD')


class ToPlainTests(SimpleTestCase):
    def test_nested_decimals_become_strings(self):
        self.assertEqual(
            to_plain({'lines': [{'amount': Decimal('1.50')}]}),
            {'lines': [{'amount': '1.50'}]}
        )
