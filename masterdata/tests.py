from django.test import TestCase
from django.urls import reverse
from rest_framework import serializers, status
from rest_framework.test import APITestCase

from users.models import User
from .models import Airport, Customer, FreightForwarder, Port
from .snapshots import party_snapshot, resolve_customer, resolve_location, resolve_parties


class SnapshotTests(TestCase):
    def setUp(self):
        self.shipper = Customer.objects.create(
            name='Acme Exports', company='Acme Ltd', email='ops@acme.test', customer_type='shipper'
        )
        self.consignee = Customer.objects.create(
            name='Beta Imports', company='Beta SA', customer_type='consignee'
        )
        self.agent = FreightForwarder.objects.create(name='Global Agents', company='GA Inc')
        Port.objects.create(name='Port of Santos', code='BRSSZ', city='Santos', country='Brazil')
        Airport.objects.create(name='Guarulhos', code='GRU', city='Sao Paulo', country='Brazil')

    def test_party_snapshot_copies_contact_fields(self):
        self.assertEqual(party_snapshot(self.shipper), {
            'id': self.shipper.pk,
            'name': 'Acme Exports',
            'company': 'Acme Ltd',
            'email': 'ops@acme.test',
            'phone': '',
        })

    def test_resolve_parties_builds_all_snapshots(self):
        parties = resolve_parties(
            {'id': self.shipper.pk}, {'id': self.consignee.pk}, {'id': self.agent.pk}
        )
        self.assertEqual(parties['shipper']['company'], 'Acme Ltd')
        self.assertEqual(parties['consignee']['name'], 'Beta Imports')
        self.assertEqual(parties['agent']['company'], 'GA Inc')

    def test_missing_consignee_is_rejected(self):
        with self.assertRaisesMessage(serializers.ValidationError, 'Please select both shipper and consignee'):
            resolve_parties({'id': self.shipper.pk}, None)

    def test_customer_role_is_enforced(self):
        with self.assertRaises(serializers.ValidationError):
            resolve_customer({'id': self.consignee.pk}, 'shipper')
        self.assertEqual(resolve_customer(self.shipper.pk, 'shipper'), self.shipper)

    def test_unknown_agent_is_rejected(self):
        with self.assertRaises(serializers.ValidationError):
            resolve_parties({'id': self.shipper.pk}, {'id': self.consignee.pk}, {'id': 9999})

    def test_locations_resolve_by_mode(self):
        port = resolve_location({'code': 'brssz'}, 'ocean', 'origin')
        self.assertEqual(port, {'name': 'Port of Santos', 'city': 'Santos', 'country': 'Brazil', 'code': 'BRSSZ'})

        airport = resolve_location({'code': 'GRU'}, 'air', 'origin')
        self.assertEqual(airport['name'], 'Guarulhos')

        with self.assertRaises(serializers.ValidationError):
            resolve_location({'code': 'GRU'}, 'ocean', 'origin')

    def test_location_without_code_is_kept(self):
        location = {'city': 'Campinas', 'country': 'Brazil'}
        self.assertEqual(resolve_location(location, 'ocean', 'origin'), location)


class MasterDataApiTests(APITestCase):
    def setUp(self):
        self.manager = User.objects.create_user(username='boss', password='x', role='manager')
        self.customer_user = User.objects.create_user(username='client', password='x')
        self.client.force_authenticate(self.manager)

    def test_create_and_list_ports_ordered_by_name(self):
        url = reverse('entity-list', kwargs={'collection': 'ports'})
        for name, code in (('Port of Santos', 'brssz'), ('Port of Itajai', 'BRITJ')):
            response = self.client.post(url, {'name': name, 'code': code, 'city': 'X'}, format='json')
            self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.get(url)
        names = [item['name'] for item in response.data['results']]
        self.assertEqual(names, ['Port of Itajai', 'Port of Santos'])
        self.assertEqual(Port.objects.get(name='Port of Santos').code, 'BRSSZ')

    def test_duplicate_code_in_other_case_is_rejected(self):
        url = reverse('entity-list', kwargs={'collection': 'ports'})
        response = self.client.post(url, {'name': 'Port of Santos', 'code': 'BRSSZ', 'city': 'Santos'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.post(url, {'name': 'Santos Again', 'code': 'brssz', 'city': 'Santos'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('code', response.data)
        self.assertEqual(Port.objects.count(), 1)

    def test_update_keeps_own_code(self):
        port = Port.objects.create(name='Port of Santos', code='BRSSZ', city='Santos')
        url = reverse('entity-detail', kwargs={'collection': 'ports', 'pk': port.pk})
        response = self.client.patch(url, {'code': 'brssz', 'city': 'Santos SP'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        port.refresh_from_db()
        self.assertEqual(port.city, 'Santos SP')

    def test_customer_contacts_are_embedded(self):
        url = reverse('entity-list', kwargs={'collection': 'customers'})
        response = self.client.post(url, {
            'name': 'Acme Exports',
            'customer_type': 'shipper',
            'contacts': [{'name': 'Joana', 'email': 'joana@acme.test'}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        customer = Customer.objects.get(name='Acme Exports')
        self.assertEqual(customer.contacts[0]['name'], 'Joana')

    def test_delete_is_hard(self):
        port = Port.objects.create(name='Port of Santos', code='BRSSZ', city='Santos')
        url = reverse('entity-detail', kwargs={'collection': 'ports', 'pk': port.pk})
        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Port.objects.filter(pk=port.pk).exists())

    def test_unknown_collection_is_not_found(self):
        response = self.client.get(reverse('entity-list', kwargs={'collection': 'planets'}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_customers_cannot_write(self):
        self.client.force_authenticate(self.customer_user)
        url = reverse('entity-list', kwargs={'collection': 'ports'})
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)
        response = self.client.post(url, {'name': 'Port', 'code': 'XX', 'city': 'Y'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
