from django.contrib import admin
from .models import Shipment

@admin.register(Shipment)
class ShipmentAdmin(admin.ModelAdmin):
    list_display = ('brl_reference', 'shipment_type', 'status', 'carrier_number', 'customer', 'created_at')
    list_filter = ('status', 'shipment_type', 'active')
    search_fields = ('brl_reference', 'bl_number', 'awb_number', 'crt_number')
    readonly_fields = ('tracking_history', 'charges_total', 'created_at', 'updated_at')
