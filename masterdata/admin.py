from django.contrib import admin
from .models import (
    Customer, Airport, Port, Airline, ShippingLine,
    FreightForwarder, Terminal, CustomsBroker, Trucker
)

@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ('name', 'company', 'customer_type', 'country', 'active')
    list_filter = ('customer_type', 'active', 'country')
    search_fields = ('name', 'company', 'email', 'tax_id')

@admin.register(Airport, Port)
class LocationAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'city', 'country', 'active')
    list_filter = ('active', 'country')
    search_fields = ('code', 'name', 'city')

@admin.register(Airline, ShippingLine, FreightForwarder, Terminal, CustomsBroker, Trucker)
class EntityAdmin(admin.ModelAdmin):
    list_display = ('name', 'country', 'active', 'updated_at')
    list_filter = ('active', 'country')
    search_fields = ('name',)
