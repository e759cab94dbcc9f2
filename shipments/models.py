import uuid

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from django.utils import timezone

from quotes.costs import recompute_totals


class Shipment(models.Model):
    SHIPMENT_TYPE = [
        ('ocean', 'Ocean Freight'),
        ('airfreight', 'Air Freight'),
        ('truck', 'Truck Freight'),
    ]

    STATUS_CHOICES = [
        ('booked', 'Booked'),
        ('in-transit', 'In Transit'),
        ('arrived', 'Arrived'),
        ('delayed', 'Delayed'),
    ]

    # Carrier document number field per shipment type
    CARRIER_NUMBER_FIELDS = {
        'ocean': 'bl_number',
        'airfreight': 'awb_number',
        'truck': 'crt_number',
    }

    shipment_type = models.CharField(max_length=20, choices=SHIPMENT_TYPE, default='ocean')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='booked')

    # References
    brl_reference = models.CharField(max_length=50, unique=True)
    shipper_reference = models.CharField(max_length=100, blank=True)
    consignee_reference = models.CharField(max_length=100, blank=True)
    agent_reference = models.CharField(max_length=100, blank=True)
    bl_number = models.CharField(max_length=50, blank=True, db_index=True)
    awb_number = models.CharField(max_length=50, blank=True, db_index=True)
    crt_number = models.CharField(max_length=50, blank=True, db_index=True)

    # Parties
    shipper = models.JSONField(default=dict, encoder=DjangoJSONEncoder)
    consignee = models.JSONField(default=dict, encoder=DjangoJSONEncoder)
    agent = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder)
    manager = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='shipments'
    )

    origin = models.JSONField(default=dict, encoder=DjangoJSONEncoder)
    destination = models.JSONField(default=dict, encoder=DjangoJSONEncoder)

    # Schedule
    estimated_departure = models.DateTimeField(null=True, blank=True)
    actual_departure = models.DateTimeField(null=True, blank=True)
    estimated_arrival = models.DateTimeField(null=True, blank=True)
    actual_arrival = models.DateTimeField(null=True, blank=True)

    cargo_details = models.JSONField(default=list, blank=True, encoder=DjangoJSONEncoder)
    containers = models.JSONField(default=list, blank=True, encoder=DjangoJSONEncoder)
    charges = models.JSONField(default=list, blank=True, encoder=DjangoJSONEncoder)
    charges_total = models.DecimalField(max_digits=24, decimal_places=8, default=0)
    currency = models.CharField(max_length=3, default='USD')
    customs_status = models.CharField(max_length=100, blank=True)
    special_instructions = models.TextField(blank=True)

    # Truck details
    vehicle = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)
    route = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)
    load_details = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)

    active = models.BooleanField(default=True)
    tracking_history = models.JSONField(default=list, blank=True, encoder=DjangoJSONEncoder)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shipments'
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        if not self.brl_reference:
            self.brl_reference = f"BRL{timezone.now().strftime('%Y%m%d')}{uuid.uuid4().hex[:6].upper()}"
        for name in ('brl_reference', 'bl_number', 'awb_number', 'crt_number'):
            setattr(self, name, (getattr(self, name) or '').strip().upper())
        self.charges_total = recompute_totals(self.charges or []).total
        super().save(*args, **kwargs)

    @property
    def carrier_number(self):
        return getattr(self, self.CARRIER_NUMBER_FIELDS[self.shipment_type], '')

    @property
    def last_event(self):
        return self.tracking_history[-1] if self.tracking_history else None

    def __str__(self):
        return f"{self.brl_reference} - {self.status}"
