import masterdata.models
from django.db import migrations, models


def base_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("name", models.CharField(max_length=200)),
        ("country", models.CharField(blank=True, max_length=100)),
        ("active", models.BooleanField(default=True)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=base_fields() + [
                (
                    "customer_type",
                    models.CharField(
                        choices=[("shipper", "Shipper"), ("consignee", "Consignee"), ("both", "Shipper & Consignee")],
                        default="both",
                        max_length=20,
                    ),
                ),
                ("company", models.CharField(blank=True, max_length=200)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("tax_id", models.CharField(blank=True, max_length=50)),
                ("address", models.JSONField(blank=True, default=dict)),
                ("website", models.CharField(blank=True, max_length=200)),
                ("industry", models.CharField(blank=True, max_length=100)),
                ("contacts", models.JSONField(blank=True, default=list)),
                ("credit_terms", models.CharField(blank=True, max_length=100)),
                ("payment_terms", models.CharField(blank=True, max_length=100)),
                ("notes", models.TextField(blank=True)),
            ],
            options={"db_table": "customers", "ordering": ["name"], "abstract": False},
        ),
        migrations.CreateModel(
            name="Airport",
            fields=base_fields() + [
                ("code", models.CharField(max_length=10, unique=True)),
                ("city", models.CharField(max_length=100)),
                ("terminals", models.JSONField(blank=True, default=list)),
                (
                    "airport_type",
                    models.CharField(
                        choices=[("international", "International"), ("domestic", "Domestic")],
                        default="international",
                        max_length=20,
                    ),
                ),
                ("contacts", models.JSONField(blank=True, default=list)),
            ],
            options={"db_table": "airports", "ordering": ["name"], "abstract": False},
        ),
        migrations.CreateModel(
            name="Port",
            fields=base_fields() + [
                ("code", models.CharField(max_length=10, unique=True)),
                ("city", models.CharField(max_length=100)),
                ("terminals", models.JSONField(blank=True, default=list)),
                (
                    "port_type",
                    models.CharField(
                        choices=[("seaport", "Seaport"), ("river", "River Port")], default="seaport", max_length=20
                    ),
                ),
                ("contacts", models.JSONField(blank=True, default=list)),
            ],
            options={"db_table": "ports", "ordering": ["name"], "abstract": False},
        ),
        migrations.CreateModel(
            name="Airline",
            fields=base_fields() + [
                ("code", models.CharField(blank=True, max_length=10)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("contacts", models.JSONField(blank=True, default=list)),
                ("notes", models.TextField(blank=True)),
            ],
            options={"db_table": "airlines", "ordering": ["name"], "abstract": False},
        ),
        migrations.CreateModel(
            name="ShippingLine",
            fields=base_fields() + [
                ("office", models.CharField(blank=True, max_length=200)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("account_executive", models.JSONField(blank=True, default=dict)),
                ("notes", models.TextField(blank=True)),
            ],
            options={"db_table": "shipping_lines", "ordering": ["name"], "abstract": False},
        ),
        migrations.CreateModel(
            name="FreightForwarder",
            fields=base_fields() + [
                ("company", models.CharField(blank=True, max_length=200)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("office", models.CharField(blank=True, max_length=200)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("personnel", models.JSONField(blank=True, default=masterdata.models.default_personnel)),
                ("notes", models.TextField(blank=True)),
            ],
            options={"db_table": "freight_forwarders", "ordering": ["name"], "abstract": False},
        ),
        migrations.CreateModel(
            name="Terminal",
            fields=base_fields() + [
                ("code", models.CharField(blank=True, max_length=20)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("port_code", models.CharField(blank=True, max_length=10)),
                ("notes", models.TextField(blank=True)),
            ],
            options={"db_table": "terminals", "ordering": ["name"], "abstract": False},
        ),
        migrations.CreateModel(
            name="CustomsBroker",
            fields=base_fields() + [
                ("office", models.CharField(blank=True, max_length=200)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("license_number", models.CharField(blank=True, max_length=50)),
                ("contacts", models.JSONField(blank=True, default=list)),
                ("notes", models.TextField(blank=True)),
            ],
            options={"db_table": "customs_brokers", "ordering": ["name"], "abstract": False},
        ),
        migrations.CreateModel(
            name="Trucker",
            fields=base_fields() + [
                ("office", models.CharField(blank=True, max_length=200)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("contacts", models.JSONField(blank=True, default=list)),
                ("notes", models.TextField(blank=True)),
            ],
            options={"db_table": "truckers", "ordering": ["name"], "abstract": False},
        ),
    ]
