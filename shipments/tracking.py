"""
Append-only tracking history of a shipment.

Each status change adds one ``{timestamp, status, description[, location]}``
entry to ``shipment.tracking_history``. Entries are never edited or removed.
"""
import logging

from django.utils import timezone
from rest_framework import serializers

from .models import Shipment

logger = logging.getLogger(__name__)

STATUS_KEYS = [key for key, _ in Shipment.STATUS_CHOICES]

CREATED_DESCRIPTIONS = {
    'ocean': 'Ocean shipment created',
    'airfreight': 'Air shipment created',
    'truck': 'Truck shipment created',
}


def record_event(shipment, new_status, description, location='', now=None):
    """
    Append a tracking event and move the shipment to ``new_status``.

    The history list is replaced rather than appended in place so a
    previously read copy of it stays as it was.
    """
    if new_status not in STATUS_KEYS:
        raise serializers.ValidationError({'status': f"Unknown shipment status: {new_status}"})

    now = now or timezone.now()
    event = {
        'timestamp': now.isoformat(),
        'status': new_status,
        'description': description,
    }
    if location:
        event['location'] = location

    shipment.tracking_history = list(shipment.tracking_history or []) + [event]
    shipment.status = new_status
    shipment.updated_at = now

    logger.info(
        "Shipment %s: %s (%s)",
        shipment.brl_reference or 'new', new_status, description
    )
    return event


def record_created(shipment, now=None):
    description = CREATED_DESCRIPTIONS.get(shipment.shipment_type, 'Shipment created')
    return record_event(shipment, shipment.status or 'booked', description, now=now)


def record_status_change(shipment, new_status, now=None):
    """Record an event only when ``new_status`` differs from the current one."""
    if new_status == shipment.status:
        return None
    description = f"Status changed from {shipment.status} to {new_status}"
    return record_event(shipment, new_status, description, now=now)
