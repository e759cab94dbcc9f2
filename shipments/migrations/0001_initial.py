import django.core.serializers.json
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def json_field(default, **kwargs):
    return models.JSONField(
        default=default, encoder=django.core.serializers.json.DjangoJSONEncoder, **kwargs
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Shipment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "shipment_type",
                    models.CharField(
                        choices=[("ocean", "Ocean Freight"), ("airfreight", "Air Freight"), ("truck", "Truck Freight")],
                        default="ocean",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("booked", "Booked"),
                            ("in-transit", "In Transit"),
                            ("arrived", "Arrived"),
                            ("delayed", "Delayed"),
                        ],
                        default="booked",
                        max_length=20,
                    ),
                ),
                ("brl_reference", models.CharField(max_length=50, unique=True)),
                ("shipper_reference", models.CharField(blank=True, max_length=100)),
                ("consignee_reference", models.CharField(blank=True, max_length=100)),
                ("agent_reference", models.CharField(blank=True, max_length=100)),
                ("bl_number", models.CharField(blank=True, db_index=True, max_length=50)),
                ("awb_number", models.CharField(blank=True, db_index=True, max_length=50)),
                ("crt_number", models.CharField(blank=True, db_index=True, max_length=50)),
                ("shipper", json_field(dict)),
                ("consignee", json_field(dict)),
                (
                    "agent",
                    models.JSONField(blank=True, null=True, encoder=django.core.serializers.json.DjangoJSONEncoder),
                ),
                ("manager", json_field(dict, blank=True)),
                ("origin", json_field(dict)),
                ("destination", json_field(dict)),
                ("estimated_departure", models.DateTimeField(blank=True, null=True)),
                ("actual_departure", models.DateTimeField(blank=True, null=True)),
                ("estimated_arrival", models.DateTimeField(blank=True, null=True)),
                ("actual_arrival", models.DateTimeField(blank=True, null=True)),
                ("cargo_details", json_field(list, blank=True)),
                ("containers", json_field(list, blank=True)),
                ("charges", json_field(list, blank=True)),
                ("charges_total", models.DecimalField(decimal_places=8, default=0, max_digits=24)),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("customs_status", models.CharField(blank=True, max_length=100)),
                ("special_instructions", models.TextField(blank=True)),
                ("vehicle", json_field(dict, blank=True)),
                ("route", json_field(dict, blank=True)),
                ("load_details", json_field(dict, blank=True)),
                ("active", models.BooleanField(default=True)),
                ("tracking_history", json_field(list, blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="shipments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={"db_table": "shipments", "ordering": ["-created_at"]},
        ),
    ]
