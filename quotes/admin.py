from django.contrib import admin
from .models import Quote

@admin.register(Quote)
class QuoteAdmin(admin.ModelAdmin):
    list_display = ('reference', 'quote_type', 'status', 'total', 'currency', 'valid_until', 'created_at')
    list_filter = ('status', 'quote_type', 'currency')
    search_fields = ('reference',)
    readonly_fields = ('subtotal', 'tax_amount', 'total', 'sent_at', 'accepted_at', 'rejected_at')
