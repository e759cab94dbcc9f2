from decimal import Decimal

from rest_framework import serializers

from core.serializers import DocumentSerializer
from masterdata.snapshots import resolve_location, resolve_parties
from . import catalog, workflow
from .costs import CostLineRegistry, recompute_totals
from .models import Quote

class CostLineSerializer(serializers.Serializer):
    """
    One charge line embedded in a quote or shipment
    """
    category = serializers.ChoiceField(choices=catalog.COST_CATEGORIES)
    description = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    unit = serializers.ChoiceField(choices=catalog.COST_UNITS, default=catalog.DEFAULT_UNIT)
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0'))
    mandatory = serializers.BooleanField(required=False, default=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')

class CargoItemSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=200)
    quantity = serializers.IntegerField(min_value=1, default=1)
    package_type = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    weight = serializers.DecimalField(
        max_digits=12, decimal_places=3, min_value=Decimal('0'), required=False, default=Decimal('0')
    )
    volume = serializers.DecimalField(
        max_digits=12, decimal_places=3, min_value=Decimal('0'), required=False, default=Decimal('0')
    )
    dimensions = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')

class PartySelectionSerializer(serializers.Serializer):
    """
    A party picked from master data; only the id is read on input
    """
    id = serializers.IntegerField(required=False, allow_null=True)
    name = serializers.CharField(read_only=True)
    company = serializers.CharField(read_only=True)
    email = serializers.CharField(read_only=True)
    phone = serializers.CharField(read_only=True)

class LocationSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    city = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    country = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    code = serializers.CharField(max_length=10, required=False, allow_blank=True, default='')

class QuoteSerializer(DocumentSerializer):
    """
    Full quote document. Totals, status and timestamps are read-only: totals
    are recomputed from the cost lines and status moves through the
    workflow actions only.
    """
    shipper = PartySelectionSerializer(required=False)
    consignee = PartySelectionSerializer(required=False)
    agent = PartySelectionSerializer(required=False, allow_null=True)
    origin = LocationSerializer(required=False)
    destination = LocationSerializer(required=False)
    cargo_details = CargoItemSerializer(many=True, required=False)
    costs = CostLineSerializer(many=True, required=False)
    terms = serializers.ListField(
        child=serializers.CharField(max_length=500), required=False
    )
    tax_rate = serializers.DecimalField(
        max_digits=7, decimal_places=4, min_value=Decimal('0'), max_value=Decimal('100'), required=False
    )

    quote_type_display = serializers.CharField(source='get_quote_type_display', read_only=True)
    effective_status = serializers.CharField(read_only=True)
    is_expired = serializers.BooleanField(read_only=True)
    allowed_actions = serializers.SerializerMethodField()
    totals_display = serializers.SerializerMethodField()

    class Meta:
        model = Quote
        fields = [
            'id', 'reference', 'quote_type', 'quote_type_display',
            'status', 'effective_status', 'is_expired', 'allowed_actions',

            # Parties and route
            'shipper', 'consignee', 'agent', 'agent_reference',
            'freight_condition', 'incoterm', 'origin', 'destination',

            # Cargo and costs
            'cargo_details', 'costs', 'tax_rate', 'subtotal', 'tax_amount',
            'total', 'currency', 'totals_display',

            # Validity and terms
            'issued_date', 'valid_until', 'terms', 'notes',

            # System fields
            'created_by', 'created_at', 'updated_at',
            'sent_at', 'accepted_at', 'rejected_at',
        ]
        read_only_fields = [
            'id', 'reference', 'status', 'subtotal', 'tax_amount', 'total',
            'created_by', 'created_at', 'updated_at',
            'sent_at', 'accepted_at', 'rejected_at',
        ]

    def get_allowed_actions(self, obj):
        return workflow.allowed_actions(obj)

    def get_totals_display(self, obj):
        return obj.compute_totals().as_display(obj.currency)

    def validate_freight_condition(self, value):
        if value not in catalog.FREIGHT_CONDITIONS:
            raise serializers.ValidationError(f"Unknown freight condition: {value}")
        return value

    def validate_incoterm(self, value):
        if value not in catalog.INCOTERMS:
            raise serializers.ValidationError(f"Unknown incoterm: {value}")
        return value

    def validate(self, attrs):
        instance = self.instance
        quote_type = attrs.get('quote_type', instance.quote_type if instance else 'ocean')

        # Freight condition must match the transport mode
        if instance is not None:
            default_condition = instance.freight_condition
        elif quote_type == 'air':
            default_condition = catalog.DEFAULT_AIR_FREIGHT_CONDITION
        else:
            default_condition = catalog.DEFAULT_FREIGHT_CONDITION
        condition = attrs.get('freight_condition', default_condition)
        if condition not in catalog.freight_conditions_for(quote_type):
            raise serializers.ValidationError({
                'freight_condition': f"'{condition}' is not available for {quote_type} quotes"
            })
        if 'freight_condition' in attrs or instance is None:
            attrs['freight_condition'] = condition

        # Resolve parties against master data
        party_fields = ('shipper', 'consignee', 'agent')
        if instance is None or any(name in attrs for name in party_fields):
            shipper = attrs.get('shipper', instance.shipper if instance else None)
            consignee = attrs.get('consignee', instance.consignee if instance else None)
            agent = attrs.get('agent', instance.agent if instance else None)
            attrs.update(resolve_parties(shipper, consignee, agent))

        # Locations follow the quote type: ports for ocean, airports for air
        for name in ('origin', 'destination'):
            if name in attrs or (instance is not None and 'quote_type' in attrs):
                location = attrs.get(name, getattr(instance, name, None))
                attrs[name] = resolve_location(location, quote_type, name)

        issued = attrs.get('issued_date', instance.issued_date if instance else None)
        valid_until = attrs.get('valid_until', instance.valid_until if instance else None)
        if issued and valid_until and valid_until <= issued:
            raise serializers.ValidationError({
                'valid_until': 'Valid until must be after the issue date'
            })

        return attrs

    def to_document(self, validated_data):
        if 'costs' in validated_data:
            registry = CostLineRegistry.from_documents(validated_data['costs'])
            validated_data['costs'] = registry.to_documents()
        return super().to_document(validated_data)

    def update(self, instance, validated_data):
        workflow.edit(instance, self.to_document(validated_data))
        instance.save()
        return instance

class QuoteListSerializer(serializers.ModelSerializer):
    """
    Lightweight serializer for the quote dashboard
    """
    shipper_company = serializers.SerializerMethodField()
    consignee_company = serializers.SerializerMethodField()
    effective_status = serializers.CharField(read_only=True)

    class Meta:
        model = Quote
        fields = [
            'id', 'reference', 'quote_type', 'status', 'effective_status',
            'shipper_company', 'consignee_company', 'origin', 'destination',
            'total', 'currency', 'valid_until', 'created_at'
        ]

    def get_shipper_company(self, obj):
        return (obj.shipper or {}).get('company', '')

    def get_consignee_company(self, obj):
        return (obj.consignee or {}).get('company', '')

class AddCostLineSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=catalog.COST_CATEGORIES)
    preset = serializers.CharField(max_length=200, required=False, allow_blank=True)

class TotalsPreviewSerializer(serializers.Serializer):
    """
    Totals for an unsaved set of cost lines
    """
    costs = CostLineSerializer(many=True)
    tax_rate = serializers.DecimalField(
        max_digits=7, decimal_places=4, min_value=Decimal('0'), max_value=Decimal('100'), default=Decimal('0')
    )
    currency = serializers.ChoiceField(choices=catalog.CURRENCIES, default='USD')

    def calculate(self):
        data = self.validated_data
        registry = CostLineRegistry.from_documents(data['costs'])
        totals = recompute_totals(registry.lines, data['tax_rate'])
        groups = registry.grouped()
        return {
            'subtotal': str(totals.subtotal),
            'tax_rate': str(totals.tax_rate),
            'tax_amount': str(totals.tax_amount),
            'total': str(totals.total),
            'display': totals.as_display(data['currency']),
            'groups': {
                category: [
                    {'index': index, 'description': line.description, 'line_total': str(line.line_total)}
                    for index, line in lines
                ]
                for category, lines in groups.items()
            },
        }
