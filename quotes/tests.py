from datetime import timedelta
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import serializers, status
from rest_framework.test import APITestCase

from core.exceptions import CostLineNotFound, InvalidTransition
from masterdata.models import Customer, Port
from users.models import User
from . import workflow
from .costs import CostLine, CostLineRegistry, format_money, recompute_totals
from .models import Quote

SCENARIO_COSTS = [
    {'category': 'freight', 'amount': 500, 'quantity': 1},
    {'category': 'origin', 'amount': 150, 'quantity': 2},
]


class TotalsTests(SimpleTestCase):
    def test_subtotal_tax_and_total(self):
        totals = recompute_totals(SCENARIO_COSTS, 10)
        self.assertEqual(totals.subtotal, Decimal('800'))
        self.assertEqual(totals.tax_amount, Decimal('80'))
        self.assertEqual(totals.total, Decimal('880'))
        self.assertEqual(totals.as_display('USD'), {
            'subtotal': 'USD 800.00',
            'tax_amount': 'USD 80.00',
            'total': 'USD 880.00',
        })

    def test_total_is_always_subtotal_plus_tax(self):
        lines = [
            {'category': 'customs', 'amount': '33.333', 'quantity': 3},
            {'category': 'additional', 'amount': '0.005'},
        ]
        for rate in ('0', '7.5', '12.25', '100'):
            totals = recompute_totals(lines, rate)
            self.assertEqual(totals.total, totals.subtotal + totals.tax_amount)

    def test_zero_quantity_counts_as_one(self):
        line = CostLine(category='origin', amount=Decimal('40'), quantity=0)
        self.assertEqual(line.line_total, Decimal('40'))

    def test_recompute_is_idempotent(self):
        self.assertEqual(recompute_totals(SCENARIO_COSTS, 10), recompute_totals(SCENARIO_COSTS, 10))

    def test_empty_lines(self):
        totals = recompute_totals([], 10)
        self.assertEqual(totals.total, Decimal('0'))

    def test_rounding_only_at_display(self):
        totals = recompute_totals([{'category': 'freight', 'amount': '0.125'}], 0)
        self.assertEqual(totals.total, Decimal('0.125'))
        self.assertEqual(format_money(totals.total), 'USD 0.13')


class RegistryTests(SimpleTestCase):
    def test_add_line_defaults(self):
        registry = CostLineRegistry()
        line = registry.add_line('origin')
        self.assertEqual(line.quantity, 1)
        self.assertEqual(line.amount, Decimal('0'))
        self.assertFalse(line.mandatory)
        self.assertTrue(registry.add_line('freight').mandatory)

    def test_add_line_from_preset(self):
        line = CostLineRegistry().add_line('origin', 'VGM Fee')
        self.assertEqual(line.description, 'VGM Fee')
        self.assertEqual(line.unit, 'per_container')

    def test_invalid_category_or_preset(self):
        registry = CostLineRegistry()
        with self.assertRaises(serializers.ValidationError):
            registry.add_line('handling')
        with self.assertRaises(serializers.ValidationError):
            registry.add_line('customs', 'VGM Fee')
        self.assertEqual(registry.lines, [])

    def test_remove_line_out_of_range_leaves_lines(self):
        registry = CostLineRegistry.from_documents(SCENARIO_COSTS)
        with self.assertRaises(CostLineNotFound):
            registry.remove_line(2)
        self.assertEqual(len(registry.lines), 2)

        removed = registry.remove_line(0)
        self.assertEqual(removed.category, 'freight')
        self.assertEqual(registry.totals().subtotal, Decimal('300'))

    def test_grouped_keeps_catalog_order_and_indexes(self):
        registry = CostLineRegistry.from_documents([
            {'category': 'customs', 'amount': 1},
            {'category': 'freight', 'amount': 2},
            {'category': 'customs', 'amount': 3},
        ])
        groups = registry.grouped()
        self.assertEqual(list(groups), ['freight', 'origin', 'destination', 'customs', 'additional'])
        self.assertEqual([index for index, _ in groups['customs']], [0, 2])


class WorkflowTests(TestCase):
    def make_quote(self, **kwargs):
        quote = Quote(costs=SCENARIO_COSTS, tax_rate=Decimal('10'), **kwargs)
        quote.save()
        return quote

    def test_new_quote_defaults(self):
        quote = self.make_quote()
        self.assertEqual(quote.status, 'draft')
        self.assertTrue(quote.reference.startswith('BRL-Q-'))
        self.assertEqual(quote.total, Decimal('880'))
        self.assertEqual(len(quote.terms), 5)
        self.assertEqual((quote.valid_until - quote.issued_date).days, 30)

    def test_stored_totals_keep_full_precision(self):
        costs = [{'category': 'freight', 'amount': '0.01'}]
        quote = Quote(costs=costs, tax_rate=Decimal('0.1234'))
        quote.save()
        quote.refresh_from_db()

        expected = recompute_totals(costs, Decimal('0.1234'))
        self.assertEqual(quote.tax_amount, expected.tax_amount)
        self.assertEqual(quote.total, expected.total)
        self.assertEqual(quote.total, Decimal('0.01001234'))
        self.assertEqual(quote.total, quote.subtotal + quote.tax_amount)

    def test_send_then_send_again(self):
        quote = self.make_quote()
        workflow.send(quote)
        self.assertEqual(quote.status, 'sent')
        self.assertIsNotNone(quote.sent_at)

        sent_at = quote.sent_at
        with self.assertRaises(InvalidTransition):
            workflow.send(quote)
        self.assertEqual(quote.status, 'sent')
        self.assertEqual(quote.sent_at, sent_at)

    def test_accept_requires_sent(self):
        quote = self.make_quote()
        with self.assertRaises(InvalidTransition):
            workflow.accept(quote)
        self.assertEqual(quote.status, 'draft')
        self.assertIsNone(quote.accepted_at)

    def test_reject_after_send(self):
        quote = self.make_quote()
        workflow.send(quote)
        workflow.reject(quote)
        self.assertEqual(quote.status, 'rejected')
        self.assertIsNotNone(quote.rejected_at)
        self.assertEqual(workflow.allowed_actions(quote), [])

    def test_edit_only_in_draft(self):
        quote = self.make_quote()
        workflow.edit(quote, {'notes': 'Fragile'})
        self.assertEqual(quote.notes, 'Fragile')

        workflow.send(quote)
        with self.assertRaises(InvalidTransition):
            workflow.edit(quote, {'notes': 'Changed'})
        self.assertEqual(quote.notes, 'Fragile')

    def test_expired_is_read_time_only(self):
        quote = self.make_quote()
        workflow.send(quote)
        later = quote.valid_until + timedelta(days=1)
        self.assertEqual(workflow.effective_status(quote, later), 'expired')
        self.assertEqual(quote.status, 'sent')

        # Drafts never expire
        draft = self.make_quote()
        self.assertEqual(workflow.effective_status(draft, later), 'draft')

    def test_expired_quote_can_still_be_accepted(self):
        quote = self.make_quote()
        workflow.send(quote)
        later = quote.valid_until + timedelta(days=1)
        self.assertTrue(workflow.is_expired(quote, later))

        workflow.accept(quote, later)
        self.assertEqual(quote.status, 'accepted')
        self.assertEqual(workflow.effective_status(quote, later), 'accepted')


class QuoteApiTests(APITestCase):
    def setUp(self):
        self.manager = User.objects.create_user(username='boss', password='x', role='manager')
        self.client.force_authenticate(self.manager)
        self.shipper = Customer.objects.create(name='Acme Exports', company='Acme Ltd', customer_type='shipper')
        self.consignee = Customer.objects.create(name='Beta Imports', company='Beta SA', customer_type='consignee')
        Port.objects.create(name='Port of Santos', code='BRSSZ', city='Santos', country='Brazil')

    def create_quote(self, **extra):
        payload = {
            'quote_type': 'ocean',
            'shipper': {'id': self.shipper.pk},
            'consignee': {'id': self.consignee.pk},
            'origin': {'code': 'BRSSZ'},
            'costs': SCENARIO_COSTS,
            'tax_rate': '10',
        }
        payload.update(extra)
        return self.client.post(reverse('quote-list'), payload, format='json')

    def test_create_quote_computes_totals_and_snapshots(self):
        response = self.create_quote()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'draft')
        self.assertEqual(response.data['totals_display']['total'], 'USD 880.00')
        self.assertEqual(response.data['shipper']['company'], 'Acme Ltd')
        self.assertEqual(response.data['origin']['name'], 'Port of Santos')
        self.assertEqual(response.data['freight_condition'], 'Port to Port')
        self.assertEqual(response.data['created_by']['id'], self.manager.pk)

    def test_client_total_is_ignored(self):
        response = self.create_quote(total='1.00')
        self.assertEqual(Decimal(response.data['total']), Decimal('880'))

    def test_missing_consignee_is_rejected(self):
        response = self.create_quote(consignee=None)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_air_quote_uses_airport_condition(self):
        response = self.create_quote(quote_type='air', origin={})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['freight_condition'], 'Airport to Airport')

        response = self.create_quote(quote_type='air', origin={}, freight_condition='Port to Port')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_workflow_endpoints(self):
        quote_id = self.create_quote().data['id']

        response = self.client.post(reverse('quote-accept', kwargs={'pk': quote_id}))
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['status'], 'draft')

        response = self.client.post(reverse('quote-send', kwargs={'pk': quote_id}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['new_status'], 'sent')

        response = self.client.post(reverse('quote-send', kwargs={'pk': quote_id}))
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

        response = self.client.patch(
            reverse('quote-detail', kwargs={'pk': quote_id}), {'notes': 'late edit'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

        response = self.client.post(reverse('quote-accept', kwargs={'pk': quote_id}))
        self.assertEqual(Quote.objects.get(pk=quote_id).status, 'accepted')

    def test_edit_draft_recomputes_totals(self):
        quote_id = self.create_quote().data['id']
        response = self.client.patch(
            reverse('quote-detail', kwargs={'pk': quote_id}),
            {'costs': [{'category': 'freight', 'amount': '100'}], 'tax_rate': '0'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Quote.objects.get(pk=quote_id).total, Decimal('100'))

    def test_add_and_remove_cost_lines(self):
        quote_id = self.create_quote().data['id']

        response = self.client.post(
            reverse('quote-cost-add', kwargs={'pk': quote_id}),
            {'category': 'destination', 'preset': 'Container Cleaning'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['index'], 2)
        self.assertEqual(response.data['line']['unit'], 'per_container')

        response = self.client.delete(reverse('quote-cost-remove', kwargs={'pk': quote_id, 'index': 7}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(len(Quote.objects.get(pk=quote_id).costs), 3)

        response = self.client.delete(reverse('quote-cost-remove', kwargs={'pk': quote_id, 'index': 0}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        quote = Quote.objects.get(pk=quote_id)
        self.assertEqual(len(quote.costs), 2)
        self.assertEqual(quote.total, Decimal('330'))

    def test_totals_preview(self):
        response = self.client.post(
            reverse('quote-totals'), {'costs': SCENARIO_COSTS, 'tax_rate': '10'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['display']['total'], 'USD 880.00')
        self.assertEqual(len(response.data['groups']['origin']), 1)

    def test_expired_filter(self):
        quote_id = self.create_quote().data['id']
        self.client.post(reverse('quote-send', kwargs={'pk': quote_id}))
        Quote.objects.filter(pk=quote_id).update(valid_until=timezone.now() - timedelta(days=1))

        response = self.client.get(reverse('quote-list'), {'status': 'expired'})
        self.assertEqual([item['id'] for item in response.data['results']], [quote_id])
        self.assertEqual(response.data['results'][0]['effective_status'], 'expired')

        response = self.client.get(reverse('quote-list'), {'status': 'sent'})
        self.assertEqual(response.data['results'], [])

    def test_search_by_company(self):
        self.create_quote()
        response = self.client.get(reverse('quote-list'), {'search': 'acme'})
        self.assertEqual(response.data['count'], 1)
        response = self.client.get(reverse('quote-list'), {'search': 'nobody'})
        self.assertEqual(response.data['count'], 0)

    def test_customers_cannot_reach_quotes(self):
        customer = User.objects.create_user(username='client', password='x')
        self.client.force_authenticate(customer)
        response = self.client.get(reverse('quote-list'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_catalog(self):
        response = self.client.get(reverse('quote-catalog'))
        self.assertIn('Airport to Airport', response.data['freight_conditions']['air'])
        self.assertEqual(len(response.data['categories']), 5)
