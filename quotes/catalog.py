"""
Static lookup tables for quotes: cost categories, charge presets, units,
freight conditions, incoterms and default terms.
"""

COST_CATEGORIES = [
    ('freight', 'Freight Charges'),
    ('origin', 'Origin Charges'),
    ('destination', 'Destination Charges'),
    ('customs', 'Customs Charges'),
    ('additional', 'Additional Charges'),
]

COST_UNITS = [
    ('per_shipment', 'Per Shipment'),
    ('per_container', 'Per Container'),
    ('per_cbm', 'Per CBM'),
    ('per_kg', 'Per KG'),
    ('per_document', 'Per Document'),
    ('per_day', 'Per Day'),
    ('per_container_day', 'Per Container/Day'),
]

DEFAULT_UNIT = 'per_shipment'

# Category -> [(charge name, unit)]
CHARGE_PRESETS = {
    'freight': [
        ('Ocean/Air Freight', 'per_shipment'),
        ('Fuel Surcharge (BAF/FSC)', 'per_shipment'),
        ('Security Fee', 'per_shipment'),
        ('Carrier Service Fee', 'per_shipment'),
    ],
    'origin': [
        ('Terminal Handling Charge (THC)', 'per_container'),
        ('Documentation Fee', 'per_document'),
        ('Export Customs Clearance', 'per_shipment'),
        ('Pickup & Transportation', 'per_container'),
        ('Container Seal Fee', 'per_container'),
        ('VGM Fee', 'per_container'),
    ],
    'destination': [
        ('Terminal Handling Charge (THC)', 'per_container'),
        ('Documentation Fee', 'per_document'),
        ('Import Customs Clearance', 'per_shipment'),
        ('Delivery & Transportation', 'per_container'),
        ('Container Cleaning', 'per_container'),
    ],
    'customs': [
        ('Customs Duty', 'per_shipment'),
        ('Import Tax', 'per_shipment'),
        ('VAT', 'per_shipment'),
        ('Customs Inspection', 'per_container'),
    ],
    'additional': [
        ('Insurance', 'per_shipment'),
        ('Warehousing', 'per_day'),
        ('Special Equipment', 'per_shipment'),
        ('Demurrage & Detention', 'per_container_day'),
        ('Fumigation', 'per_container'),
    ],
}

FREIGHT_CONDITIONS = [
    'Door to Door',
    'Door to Port',
    'Port to Door',
    'Port to Port',
    'Airport to Airport',
    'Door to Airport',
    'Airport to Door',
]

INCOTERMS = [
    'EXW - Ex Works',
    'FCA - Free Carrier',
    'CPT - Carriage Paid To',
    'CIP - Carriage and Insurance Paid To',
    'DAP - Delivered at Place',
    'DPU - Delivered at Place Unloaded',
    'DDP - Delivered Duty Paid',
    'FAS - Free Alongside Ship',
    'FOB - Free on Board',
    'CFR - Cost and Freight',
    'CIF - Cost, Insurance and Freight',
]

CURRENCIES = ['USD', 'EUR', 'BRL']

DEFAULT_FREIGHT_CONDITION = 'Port to Port'
DEFAULT_AIR_FREIGHT_CONDITION = 'Airport to Airport'
DEFAULT_INCOTERM = 'FOB - Free on Board'

DEFAULT_TERMS = [
    'Quote validity: 30 days from issue date',
    'Subject to space and equipment availability',
    'Subject to carrier approval',
    'Rates exclude insurance unless specified',
    'Terms and conditions apply',
]

CATEGORY_KEYS = [key for key, _ in COST_CATEGORIES]
UNIT_KEYS = [key for key, _ in COST_UNITS]


def find_preset(category, name):
    for preset_name, unit in CHARGE_PRESETS.get(category, []):
        if preset_name == name:
            return preset_name, unit
    return None


def freight_conditions_for(quote_type):
    """Air quotes use airport conditions; ocean quotes use the rest."""
    if quote_type == 'air':
        return [c for c in FREIGHT_CONDITIONS if 'Airport' in c]
    return [c for c in FREIGHT_CONDITIONS if 'Airport' not in c]


def as_dict():
    return {
        'categories': [{'id': key, 'name': label} for key, label in COST_CATEGORIES],
        'units': [{'id': key, 'name': label} for key, label in COST_UNITS],
        'presets': {
            category: [{'name': name, 'unit': unit} for name, unit in presets]
            for category, presets in CHARGE_PRESETS.items()
        },
        'freight_conditions': {
            'ocean': freight_conditions_for('ocean'),
            'air': freight_conditions_for('air'),
        },
        'incoterms': INCOTERMS,
        'currencies': CURRENCIES,
        'default_terms': DEFAULT_TERMS,
    }
