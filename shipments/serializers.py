from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import serializers

from core.serializers import DocumentSerializer
from masterdata.snapshots import resolve_location, resolve_parties
from quotes import catalog
from quotes.costs import CostLineRegistry
from quotes.serializers import (
    CargoItemSerializer, CostLineSerializer,
    LocationSerializer, PartySelectionSerializer
)
from . import tracking
from .models import Shipment

User = get_user_model()

CONTAINER_TYPES = [
    ('20GP', "20' General Purpose"),
    ('40GP', "40' General Purpose"),
    ('40HC', "40' High Cube"),
    ('45HC', "45' High Cube"),
    ('20RF', "20' Reefer"),
    ('40RF', "40' Reefer"),
]

CONTAINER_STATUSES = [
    'To be retrieved',
    'Positioned for loading',
    'Ready to pick up',
    'Deposited 3rd yard',
    'Delivered to terminal',
]

class ContainerSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=CONTAINER_TYPES, default='20GP')
    number = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    seal_number = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    tare = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True, default=None
    )
    vgm = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True, default=None
    )
    status = serializers.ChoiceField(choices=CONTAINER_STATUSES, default=CONTAINER_STATUSES[0])

class TrackingEventSerializer(serializers.Serializer):
    """
    One entry of a shipment's tracking history
    """
    timestamp = serializers.CharField(read_only=True)
    status = serializers.ChoiceField(choices=Shipment.STATUS_CHOICES)
    description = serializers.CharField(max_length=500)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')

class ShipmentSerializer(DocumentSerializer):
    """
    Full shipment document. The tracking history is read-only; it grows
    through status changes and the events endpoint.
    """
    shipper = PartySelectionSerializer(required=False)
    consignee = PartySelectionSerializer(required=False)
    agent = PartySelectionSerializer(required=False, allow_null=True)
    customer = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(role='customer'), required=False, allow_null=True
    )
    origin = LocationSerializer(required=False)
    destination = LocationSerializer(required=False)
    cargo_details = CargoItemSerializer(many=True, required=False)
    containers = ContainerSerializer(many=True, required=False)
    charges = CostLineSerializer(many=True, required=False)
    currency = serializers.ChoiceField(choices=catalog.CURRENCIES, required=False)
    vehicle = serializers.DictField(required=False)
    route = serializers.DictField(required=False)
    load_details = serializers.DictField(required=False)
    tracking_history = TrackingEventSerializer(many=True, read_only=True)

    shipment_type_display = serializers.CharField(source='get_shipment_type_display', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    carrier_number = serializers.CharField(read_only=True)

    class Meta:
        model = Shipment
        fields = [
            'id', 'shipment_type', 'shipment_type_display', 'status', 'status_display',

            # References
            'brl_reference', 'shipper_reference', 'consignee_reference', 'agent_reference',
            'bl_number', 'awb_number', 'crt_number', 'carrier_number',

            # Parties and route
            'shipper', 'consignee', 'agent', 'manager', 'customer',
            'origin', 'destination',

            # Schedule
            'estimated_departure', 'actual_departure',
            'estimated_arrival', 'actual_arrival',

            # Cargo and charges
            'cargo_details', 'containers', 'charges', 'charges_total', 'currency',
            'customs_status', 'special_instructions',

            # Truck details
            'vehicle', 'route', 'load_details',

            # System fields
            'active', 'tracking_history', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'manager', 'charges_total', 'created_at', 'updated_at']
        extra_kwargs = {
            'brl_reference': {'required': False, 'allow_blank': True},
        }

    def validate_brl_reference(self, value):
        value = (value or '').strip().upper()
        if value:
            queryset = Shipment.objects.filter(brl_reference=value)
            if self.instance is not None:
                queryset = queryset.exclude(pk=self.instance.pk)
            if queryset.exists():
                raise serializers.ValidationError('A shipment with this BRL reference already exists')
        return value

    def validate(self, attrs):
        instance = self.instance
        shipment_type = attrs.get('shipment_type', instance.shipment_type if instance else 'ocean')

        # Resolve parties against master data
        party_fields = ('shipper', 'consignee', 'agent')
        if instance is None or any(name in attrs for name in party_fields):
            shipper = attrs.get('shipper', instance.shipper if instance else None)
            consignee = attrs.get('consignee', instance.consignee if instance else None)
            agent = attrs.get('agent', instance.agent if instance else None)
            attrs.update(resolve_parties(shipper, consignee, agent))

        # Truck routes are free addresses; ocean and air resolve port/airport codes
        if shipment_type != 'truck':
            for name in ('origin', 'destination'):
                if name in attrs:
                    attrs[name] = resolve_location(attrs[name], shipment_type, name)

        departure = attrs.get('estimated_departure', instance.estimated_departure if instance else None)
        arrival = attrs.get('estimated_arrival', instance.estimated_arrival if instance else None)
        if departure and arrival and arrival < departure:
            raise serializers.ValidationError({
                'estimated_arrival': 'Estimated arrival cannot be before estimated departure'
            })

        return attrs

    def to_document(self, validated_data):
        if 'charges' in validated_data:
            registry = CostLineRegistry.from_documents(validated_data['charges'])
            validated_data['charges'] = registry.to_documents()
        return super().to_document(validated_data)

    def create(self, validated_data):
        document = self.to_document(validated_data)
        instance = Shipment(**document)
        tracking.record_created(instance)
        instance.save()
        return instance

    def update(self, instance, validated_data):
        document = self.to_document(validated_data)
        new_status = document.pop('status', instance.status)
        for attr, value in document.items():
            setattr(instance, attr, value)
        tracking.record_status_change(instance, new_status)
        instance.save()
        return instance

class ShipmentListSerializer(serializers.ModelSerializer):
    """
    Lightweight serializer for the shipment tables
    """
    shipper_name = serializers.SerializerMethodField()
    consignee_name = serializers.SerializerMethodField()
    carrier_number = serializers.CharField(read_only=True)

    class Meta:
        model = Shipment
        fields = [
            'id', 'shipment_type', 'status', 'brl_reference', 'carrier_number',
            'shipper_name', 'consignee_name', 'origin', 'destination',
            'estimated_departure', 'estimated_arrival', 'active', 'created_at'
        ]

    def get_shipper_name(self, obj):
        return (obj.shipper or {}).get('name', '')

    def get_consignee_name(self, obj):
        return (obj.consignee or {}).get('name', '')
