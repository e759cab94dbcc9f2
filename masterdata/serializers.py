from rest_framework import serializers
from core.serializers import ContactPersonSerializer, DocumentSerializer
from .models import (
    Customer, Airport, Port, Airline, ShippingLine,
    FreightForwarder, Terminal, CustomsBroker, Trucker
)

ENTITY_READ_ONLY = ['id', 'created_at', 'updated_at']

class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(required=False, allow_blank=True, default='')
    city = serializers.CharField(required=False, allow_blank=True, default='')
    state = serializers.CharField(required=False, allow_blank=True, default='')
    country = serializers.CharField(required=False, allow_blank=True, default='')
    postal_code = serializers.CharField(required=False, allow_blank=True, default='')

class PersonnelSerializer(serializers.Serializer):
    directors = ContactPersonSerializer(many=True, required=False, default=list)
    managers = ContactPersonSerializer(many=True, required=False, default=list)
    accounting = ContactPersonSerializer(many=True, required=False, default=list)
    operations = ContactPersonSerializer(many=True, required=False, default=list)

class CustomerSerializer(DocumentSerializer):
    address = AddressSerializer(required=False)
    contacts = ContactPersonSerializer(many=True, required=False)

    class Meta:
        model = Customer
        fields = '__all__'
        read_only_fields = ENTITY_READ_ONLY

class LocationEntitySerializer(DocumentSerializer):
    """
    Shared validation for ports and airports
    """
    terminals = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False
    )
    contacts = ContactPersonSerializer(many=True, required=False)

    def validate_code(self, value):
        value = value.strip().upper()
        if not value:
            raise serializers.ValidationError("Code is required")

        # Codes are stored uppercased, so compare on the normalised value
        queryset = self.Meta.model.objects.filter(code=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError(
                f"A {self.Meta.model._meta.verbose_name} with code {value} already exists"
            )
        return value

class AirportSerializer(LocationEntitySerializer):
    class Meta:
        model = Airport
        fields = '__all__'
        read_only_fields = ENTITY_READ_ONLY

class PortSerializer(LocationEntitySerializer):
    class Meta:
        model = Port
        fields = '__all__'
        read_only_fields = ENTITY_READ_ONLY

class AirlineSerializer(DocumentSerializer):
    contacts = ContactPersonSerializer(many=True, required=False)

    class Meta:
        model = Airline
        fields = '__all__'
        read_only_fields = ENTITY_READ_ONLY

class ShippingLineSerializer(DocumentSerializer):
    account_executive = ContactPersonSerializer(required=False)

    class Meta:
        model = ShippingLine
        fields = '__all__'
        read_only_fields = ENTITY_READ_ONLY

class FreightForwarderSerializer(DocumentSerializer):
    personnel = PersonnelSerializer(required=False)

    class Meta:
        model = FreightForwarder
        fields = '__all__'
        read_only_fields = ENTITY_READ_ONLY

class TerminalSerializer(DocumentSerializer):
    class Meta:
        model = Terminal
        fields = '__all__'
        read_only_fields = ENTITY_READ_ONLY

class CustomsBrokerSerializer(DocumentSerializer):
    contacts = ContactPersonSerializer(many=True, required=False)

    class Meta:
        model = CustomsBroker
        fields = '__all__'
        read_only_fields = ENTITY_READ_ONLY

class TruckerSerializer(DocumentSerializer):
    contacts = ContactPersonSerializer(many=True, required=False)

    class Meta:
        model = Trucker
        fields = '__all__'
        read_only_fields = ENTITY_READ_ONLY

# Collection name -> (model, serializer)
COLLECTIONS = {
    'customers': (Customer, CustomerSerializer),
    'airports': (Airport, AirportSerializer),
    'ports': (Port, PortSerializer),
    'airlines': (Airline, AirlineSerializer),
    'shipping-lines': (ShippingLine, ShippingLineSerializer),
    'freight-forwarders': (FreightForwarder, FreightForwarderSerializer),
    'terminals': (Terminal, TerminalSerializer),
    'customs-brokers': (CustomsBroker, CustomsBrokerSerializer),
    'truckers': (Trucker, TruckerSerializer),
}
