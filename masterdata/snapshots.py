"""
Copy master-data fields into the documents that reference them.

Quotes and shipments keep a snapshot of each party and location at the time
they are saved; later edits to the master data do not rewrite them.
"""
from rest_framework import serializers

from .models import Airport, Customer, FreightForwarder, Port


def party_snapshot(entity):
    return {
        'id': entity.pk,
        'name': entity.name,
        'company': getattr(entity, 'company', '') or '',
        'email': getattr(entity, 'email', '') or '',
        'phone': getattr(entity, 'phone', '') or '',
    }


def location_snapshot(entity):
    return {
        'name': entity.name,
        'city': entity.city,
        'country': entity.country,
        'code': entity.code,
    }


def user_snapshot(user):
    return {
        'id': user.pk,
        'name': user.display_name,
        'email': user.email,
    }


def _lookup_id(party):
    if not party:
        return None
    if isinstance(party, dict):
        return party.get('id') or None
    return party


def resolve_customer(party, role):
    """
    Look up the customer referenced by ``party`` for the given role.

    ``role`` is ``'shipper'`` or ``'consignee'``. Returns ``None`` when no id
    was supplied or the id does not exist.
    """
    customer_id = _lookup_id(party)
    if customer_id is None:
        return None

    customer = Customer.objects.filter(pk=customer_id).first()
    if customer is None:
        return None

    allowed = customer.can_ship() if role == 'shipper' else customer.can_receive()
    if not allowed:
        raise serializers.ValidationError({
            role: f"Customer '{customer.name}' cannot act as {role}"
        })
    return customer


def resolve_parties(shipper, consignee, agent=None):
    """
    Build shipper/consignee/agent snapshots from submitted ids
    """
    shipper_entity = resolve_customer(shipper, 'shipper')
    consignee_entity = resolve_customer(consignee, 'consignee')

    if shipper_entity is None or consignee_entity is None:
        raise serializers.ValidationError('Please select both shipper and consignee')

    agent_snapshot = None
    agent_id = _lookup_id(agent)
    if agent_id is not None:
        forwarder = FreightForwarder.objects.filter(pk=agent_id).first()
        if forwarder is None:
            raise serializers.ValidationError({'agent': 'Selected agent does not exist'})
        agent_snapshot = party_snapshot(forwarder)

    return {
        'shipper': party_snapshot(shipper_entity),
        'consignee': party_snapshot(consignee_entity),
        'agent': agent_snapshot,
    }


def resolve_location(location, mode, field_name):
    """
    Fill a location snapshot from its port or airport code.

    Air documents resolve against airports, everything else against ports.
    A location without a code is kept as submitted.
    """
    location = dict(location or {})
    code = (location.get('code') or '').strip().upper()
    if not code:
        return location

    model = Airport if mode in ('air', 'airfreight') else Port
    entity = model.objects.filter(code=code).first()
    if entity is None:
        raise serializers.ValidationError({
            field_name: f"Unknown {model._meta.verbose_name} code: {code}"
        })
    return location_snapshot(entity)
