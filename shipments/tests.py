import copy
from datetime import datetime
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import serializers, status
from rest_framework.test import APITestCase

from masterdata.models import Customer, Port
from users.models import User
from . import tracking
from .models import Shipment


class TrackingLogTests(TestCase):
    def test_record_event_appends_and_sets_status(self):
        shipment = Shipment(tracking_history=[])
        tracking.record_event(shipment, 'in-transit', 'Departed origin port')

        self.assertEqual(shipment.status, 'in-transit')
        self.assertEqual(len(shipment.tracking_history), 1)
        event = shipment.tracking_history[0]
        self.assertEqual(event['status'], 'in-transit')
        self.assertEqual(event['description'], 'Departed origin port')
        self.assertNotIn('location', event)
        self.assertIsInstance(datetime.fromisoformat(event['timestamp']), datetime)

    def test_history_is_append_only(self):
        shipment = Shipment(tracking_history=[])
        for new_status in ('in-transit', 'delayed', 'in-transit', 'arrived'):
            before = copy.deepcopy(shipment.tracking_history)
            tracking.record_event(shipment, new_status, f'Now {new_status}', location='Santos')
            self.assertEqual(shipment.tracking_history[:len(before)], before)

        self.assertEqual(len(shipment.tracking_history), 4)
        self.assertEqual(shipment.status, 'arrived')

    def test_unknown_status_is_rejected(self):
        shipment = Shipment(tracking_history=[])
        with self.assertRaises(serializers.ValidationError):
            tracking.record_event(shipment, 'lost', 'Nobody knows')
        self.assertEqual(shipment.tracking_history, [])
        self.assertEqual(shipment.status, 'booked')

    def test_status_change_records_only_real_changes(self):
        shipment = Shipment(tracking_history=[])
        self.assertIsNone(tracking.record_status_change(shipment, 'booked'))
        tracking.record_status_change(shipment, 'delayed')
        self.assertEqual(shipment.tracking_history[0]['description'], 'Status changed from booked to delayed')

    def test_save_generates_reference_and_charge_total(self):
        shipment = Shipment(
            shipment_type='airfreight',
            awb_number=' 123-4567 ',
            charges=[{'category': 'freight', 'amount': '250', 'quantity': 2}]
        )
        shipment.save()
        self.assertTrue(shipment.brl_reference.startswith('BRL'))
        self.assertEqual(shipment.awb_number, '123-4567')
        self.assertEqual(shipment.carrier_number, '123-4567')
        self.assertEqual(shipment.charges_total, Decimal('500'))


class ShipmentApiTests(APITestCase):
    def setUp(self):
        self.manager = User.objects.create_user(username='boss', password='x', role='manager')
        self.customer_user = User.objects.create_user(username='client', password='x')
        self.other_customer = User.objects.create_user(username='other', password='x')
        self.client.force_authenticate(self.manager)

        self.shipper = Customer.objects.create(name='Acme Exports', customer_type='shipper')
        self.consignee = Customer.objects.create(name='Beta Imports', customer_type='consignee')
        Port.objects.create(name='Port of Santos', code='BRSSZ', city='Santos', country='Brazil')

    def create_shipment(self, **extra):
        payload = {
            'shipment_type': 'ocean',
            'bl_number': 'msku1234567',
            'shipper': {'id': self.shipper.pk},
            'consignee': {'id': self.consignee.pk},
            'customer': self.customer_user.pk,
            'origin': {'code': 'BRSSZ'},
            'containers': [{'type': '40HC', 'number': 'MSKU1234567'}],
        }
        payload.update(extra)
        return self.client.post(reverse('shipment-list'), payload, format='json')

    def test_create_records_initial_event(self):
        response = self.create_shipment()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'booked')
        self.assertEqual(response.data['bl_number'], 'MSKU1234567')
        self.assertEqual(response.data['origin']['name'], 'Port of Santos')
        self.assertEqual(response.data['manager']['id'], self.manager.pk)

        history = response.data['tracking_history']
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0]['description'], 'Ocean shipment created')

    def test_status_update_appends_one_event(self):
        shipment_id = self.create_shipment().data['id']
        url = reverse('shipment-detail', kwargs={'pk': shipment_id})

        response = self.client.patch(url, {'status': 'in-transit'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['tracking_history']), 2)

        # No status change, no new event
        response = self.client.patch(url, {'customs_status': 'Cleared'}, format='json')
        self.assertEqual(len(response.data['tracking_history']), 2)

    def test_unknown_status_is_rejected(self):
        shipment_id = self.create_shipment().data['id']
        response = self.client.patch(
            reverse('shipment-detail', kwargs={'pk': shipment_id}), {'status': 'lost'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Shipment.objects.get(pk=shipment_id).status, 'booked')

    def test_events_endpoint(self):
        shipment_id = self.create_shipment().data['id']
        url = reverse('shipment-events', kwargs={'pk': shipment_id})

        response = self.client.post(
            url, {'status': 'in-transit', 'description': 'Departed origin port', 'location': 'Santos'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['event']['location'], 'Santos')

        response = self.client.get(url)
        self.assertEqual([event['status'] for event in response.data], ['booked', 'in-transit'])
        self.assertEqual(Shipment.objects.get(pk=shipment_id).status, 'in-transit')

    def test_customers_only_see_their_shipments(self):
        self.create_shipment()
        self.create_shipment(bl_number='OTHER1', customer=self.other_customer.pk)

        self.client.force_authenticate(self.customer_user)
        response = self.client.get(reverse('shipment-list'))
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['carrier_number'], 'MSKU1234567')

        response = self.client.post(reverse('shipment-list'), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_track_by_number(self):
        self.create_shipment()
        self.create_shipment(shipment_type='truck', bl_number='', crt_number='CRT-99', origin={'city': 'Curitiba'})

        self.client.force_authenticate(self.customer_user)
        response = self.client.get(reverse('shipment-track', kwargs={'number': 'msku1234567'}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['tracking_summary']['current_status'], 'booked')

        response = self.client.get(reverse('shipment-track', kwargs={'number': 'crt-99'}))
        self.assertEqual(response.data['shipment']['shipment_type'], 'truck')

        response = self.client.get(reverse('shipment-track', kwargs={'number': 'NOPE'}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_track_hides_other_customers_shipments(self):
        self.create_shipment(customer=self.other_customer.pk)
        self.client.force_authenticate(self.customer_user)
        response = self.client.get(reverse('shipment-track', kwargs={'number': 'MSKU1234567'}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_search_and_filter(self):
        self.create_shipment()
        self.create_shipment(shipment_type='airfreight', bl_number='', awb_number='176-1111', origin={})

        response = self.client.get(reverse('shipment-list'), {'search': 'acme'})
        self.assertEqual(response.data['count'], 2)
        response = self.client.get(reverse('shipment-list'), {'search': '176-1111'})
        self.assertEqual(response.data['count'], 1)
        response = self.client.get(reverse('shipment-list'), {'shipment_type': 'ocean'})
        self.assertEqual(response.data['count'], 1)

    def test_delete_is_hard(self):
        shipment_id = self.create_shipment().data['id']
        response = self.client.delete(reverse('shipment-detail', kwargs={'pk': shipment_id}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Shipment.objects.filter(pk=shipment_id).exists())
