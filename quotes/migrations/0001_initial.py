import django.core.serializers.json
import django.utils.timezone
import quotes.models
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Quote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reference", models.CharField(max_length=50, unique=True)),
                (
                    "quote_type",
                    models.CharField(
                        choices=[("ocean", "Ocean Freight"), ("air", "Air Freight")], default="ocean", max_length=10
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("sent", "Sent"),
                            ("accepted", "Accepted"),
                            ("rejected", "Rejected"),
                        ],
                        default="draft",
                        max_length=20,
                    ),
                ),
                (
                    "shipper",
                    models.JSONField(default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder),
                ),
                (
                    "consignee",
                    models.JSONField(default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder),
                ),
                (
                    "agent",
                    models.JSONField(
                        blank=True, null=True, encoder=django.core.serializers.json.DjangoJSONEncoder
                    ),
                ),
                ("agent_reference", models.CharField(blank=True, max_length=100)),
                ("freight_condition", models.CharField(default="Port to Port", max_length=50)),
                ("incoterm", models.CharField(default="FOB - Free on Board", max_length=60)),
                (
                    "origin",
                    models.JSONField(default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder),
                ),
                (
                    "destination",
                    models.JSONField(default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder),
                ),
                (
                    "cargo_details",
                    models.JSONField(
                        blank=True, default=list, encoder=django.core.serializers.json.DjangoJSONEncoder
                    ),
                ),
                (
                    "costs",
                    models.JSONField(
                        blank=True, default=list, encoder=django.core.serializers.json.DjangoJSONEncoder
                    ),
                ),
                (
                    "tax_rate",
                    models.DecimalField(decimal_places=4, default=quotes.models.default_tax_rate, max_digits=7),
                ),
                ("subtotal", models.DecimalField(decimal_places=8, default=0, max_digits=24)),
                ("tax_amount", models.DecimalField(decimal_places=8, default=0, max_digits=24)),
                ("total", models.DecimalField(decimal_places=8, default=0, max_digits=24)),
                (
                    "currency",
                    models.CharField(
                        choices=[("USD", "USD"), ("EUR", "EUR"), ("BRL", "BRL")],
                        default=quotes.models.default_currency,
                        max_length=3,
                    ),
                ),
                ("issued_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("valid_until", models.DateTimeField(blank=True, null=True)),
                ("terms", models.JSONField(blank=True, default=quotes.models.default_terms)),
                ("notes", models.TextField(blank=True)),
                (
                    "created_by",
                    models.JSONField(
                        blank=True, default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("sent_at", models.DateTimeField(blank=True, null=True)),
                ("accepted_at", models.DateTimeField(blank=True, null=True)),
                ("rejected_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={"db_table": "quotes", "ordering": ["-created_at"]},
        ),
    ]
