from django.conf import settings

DEFAULTS = {
    'QUOTE_REFERENCE_PREFIX': 'BRL-Q',
    'QUOTE_VALIDITY_DAYS': 30,
    'DEFAULT_CURRENCY': 'USD',
    'DEFAULT_TAX_RATE': 0,
}


def freightdesk_setting(name):
    """Read a value from the FREIGHTDESK settings dict, falling back to DEFAULTS."""
    return getattr(settings, 'FREIGHTDESK', {}).get(name, DEFAULTS[name])
