from datetime import timedelta
import uuid

from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from django.utils import timezone

from core.conf import freightdesk_setting
from . import catalog, workflow
from .costs import recompute_totals


def default_terms():
    return list(catalog.DEFAULT_TERMS)


def default_currency():
    return freightdesk_setting('DEFAULT_CURRENCY')


def default_tax_rate():
    return freightdesk_setting('DEFAULT_TAX_RATE')


class Quote(models.Model):
    TYPE_CHOICES = [
        ('ocean', 'Ocean Freight'),
        ('air', 'Air Freight'),
    ]

    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('sent', 'Sent'),
        ('accepted', 'Accepted'),
        ('rejected', 'Rejected'),
    ]

    CURRENCY_CHOICES = [(code, code) for code in catalog.CURRENCIES]

    reference = models.CharField(max_length=50, unique=True)
    quote_type = models.CharField(max_length=10, choices=TYPE_CHOICES, default='ocean')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='draft')

    # Party and location snapshots copied from master data
    shipper = models.JSONField(default=dict, encoder=DjangoJSONEncoder)
    consignee = models.JSONField(default=dict, encoder=DjangoJSONEncoder)
    agent = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder)
    agent_reference = models.CharField(max_length=100, blank=True)
    freight_condition = models.CharField(max_length=50, default=catalog.DEFAULT_FREIGHT_CONDITION)
    incoterm = models.CharField(max_length=60, default=catalog.DEFAULT_INCOTERM)
    origin = models.JSONField(default=dict, encoder=DjangoJSONEncoder)
    destination = models.JSONField(default=dict, encoder=DjangoJSONEncoder)

    cargo_details = models.JSONField(default=list, blank=True, encoder=DjangoJSONEncoder)
    costs = models.JSONField(default=list, blank=True, encoder=DjangoJSONEncoder)

    # Derived from costs and tax_rate on every save
    tax_rate = models.DecimalField(max_digits=7, decimal_places=4, default=default_tax_rate)
    subtotal = models.DecimalField(max_digits=24, decimal_places=8, default=0)
    tax_amount = models.DecimalField(max_digits=24, decimal_places=8, default=0)
    total = models.DecimalField(max_digits=24, decimal_places=8, default=0)
    currency = models.CharField(max_length=3, choices=CURRENCY_CHOICES, default=default_currency)

    issued_date = models.DateTimeField(default=timezone.now)
    valid_until = models.DateTimeField(null=True, blank=True)
    terms = models.JSONField(default=default_terms, blank=True)
    notes = models.TextField(blank=True)

    created_by = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    accepted_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'quotes'
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        if not self.reference:
            self.reference = self.generate_reference()
        if self.valid_until is None:
            days = freightdesk_setting('QUOTE_VALIDITY_DAYS')
            self.valid_until = (self.issued_date or timezone.now()) + timedelta(days=days)
        self.apply_totals()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_reference():
        prefix = freightdesk_setting('QUOTE_REFERENCE_PREFIX')
        return f"{prefix}-{timezone.now().year}-{uuid.uuid4().hex[:6].upper()}"

    def compute_totals(self):
        return recompute_totals(self.costs or [], self.tax_rate or 0)

    def apply_totals(self):
        totals = self.compute_totals()
        self.tax_rate = totals.tax_rate
        self.subtotal = totals.subtotal
        self.tax_amount = totals.tax_amount
        self.total = totals.total
        return totals

    @property
    def effective_status(self):
        return workflow.effective_status(self)

    @property
    def is_expired(self):
        return workflow.is_expired(self)

    def __str__(self):
        return f"{self.reference} - {self.status}"
