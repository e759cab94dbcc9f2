from django.db import models


def default_personnel():
    return {
        'directors': [],
        'managers': [],
        'accounting': [],
        'operations': [],
    }


class BaseEntity(models.Model):
    name = models.CharField(max_length=200)
    country = models.CharField(max_length=100, blank=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['name']

    def __str__(self):
        return self.name


class Customer(BaseEntity):
    TYPE_CHOICES = [
        ('shipper', 'Shipper'),
        ('consignee', 'Consignee'),
        ('both', 'Shipper & Consignee'),
    ]

    customer_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='both')
    company = models.CharField(max_length=200, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    tax_id = models.CharField(max_length=50, blank=True)
    address = models.JSONField(default=dict, blank=True)
    website = models.CharField(max_length=200, blank=True)
    industry = models.CharField(max_length=100, blank=True)
    contacts = models.JSONField(default=list, blank=True)
    credit_terms = models.CharField(max_length=100, blank=True)
    payment_terms = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)

    class Meta(BaseEntity.Meta):
        db_table = 'customers'

    def can_ship(self):
        return self.customer_type in ('shipper', 'both')

    def can_receive(self):
        return self.customer_type in ('consignee', 'both')


class Airport(BaseEntity):
    TYPE_CHOICES = [
        ('international', 'International'),
        ('domestic', 'Domestic'),
    ]

    code = models.CharField(max_length=10, unique=True)
    city = models.CharField(max_length=100)
    terminals = models.JSONField(default=list, blank=True)
    airport_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='international')
    contacts = models.JSONField(default=list, blank=True)

    class Meta(BaseEntity.Meta):
        db_table = 'airports'


class Port(BaseEntity):
    TYPE_CHOICES = [
        ('seaport', 'Seaport'),
        ('river', 'River Port'),
    ]

    code = models.CharField(max_length=10, unique=True)
    city = models.CharField(max_length=100)
    terminals = models.JSONField(default=list, blank=True)
    port_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='seaport')
    contacts = models.JSONField(default=list, blank=True)

    class Meta(BaseEntity.Meta):
        db_table = 'ports'


class Airline(BaseEntity):
    code = models.CharField(max_length=10, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    contacts = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True)

    class Meta(BaseEntity.Meta):
        db_table = 'airlines'


class ShippingLine(BaseEntity):
    office = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    account_executive = models.JSONField(default=dict, blank=True)
    notes = models.TextField(blank=True)

    class Meta(BaseEntity.Meta):
        db_table = 'shipping_lines'


class FreightForwarder(BaseEntity):
    company = models.CharField(max_length=200, blank=True)
    email = models.EmailField(blank=True)
    office = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    personnel = models.JSONField(default=default_personnel, blank=True)
    notes = models.TextField(blank=True)

    class Meta(BaseEntity.Meta):
        db_table = 'freight_forwarders'


class Terminal(BaseEntity):
    code = models.CharField(max_length=20, blank=True)
    city = models.CharField(max_length=100, blank=True)
    port_code = models.CharField(max_length=10, blank=True)
    notes = models.TextField(blank=True)

    class Meta(BaseEntity.Meta):
        db_table = 'terminals'


class CustomsBroker(BaseEntity):
    office = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)
    license_number = models.CharField(max_length=50, blank=True)
    contacts = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True)

    class Meta(BaseEntity.Meta):
        db_table = 'customs_brokers'


class Trucker(BaseEntity):
    office = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)
    contacts = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True)

    class Meta(BaseEntity.Meta):
        db_table = 'truckers'
