"""
Cost lines and the totals derived from them.

Amounts are kept as ``Decimal`` at full precision. Rounding to two places
only happens in ``format_money`` and the ``*_display`` serializer fields,
so recomputing from the same lines always gives identical results.
"""
from dataclasses import asdict, dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, List, Optional

from rest_framework import serializers

from core.exceptions import CostLineNotFound
from .catalog import CATEGORY_KEYS, COST_CATEGORIES, DEFAULT_UNIT, UNIT_KEYS, find_preset

ZERO = Decimal('0')
CENT = Decimal('0.01')


def to_decimal(value, field_name='amount') -> Decimal:
    if value is None or value == '':
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise serializers.ValidationError({field_name: f"'{value}' is not a valid number"})


def format_money(amount, currency='USD') -> str:
    """Round half-up to cents for display, e.g. ``USD 880.00``."""
    return f"{currency} {to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"


@dataclass
class CostLine:
    category: str
    description: str = ''
    unit: str = DEFAULT_UNIT
    quantity: int = 1
    amount: Decimal = ZERO
    mandatory: bool = False
    notes: str = ''

    @property
    def effective_quantity(self) -> int:
        return max(self.quantity or 1, 1)

    @property
    def line_total(self) -> Decimal:
        return self.amount * self.effective_quantity

    @classmethod
    def from_dict(cls, data) -> 'CostLine':
        category = data.get('category')
        if category not in CATEGORY_KEYS:
            raise serializers.ValidationError({'category': f"Unknown cost category: {category}"})

        unit = data.get('unit') or DEFAULT_UNIT
        if unit not in UNIT_KEYS:
            raise serializers.ValidationError({'unit': f"Unknown unit: {unit}"})

        return cls(
            category=category,
            description=data.get('description') or '',
            unit=unit,
            quantity=int(data.get('quantity') or 1),
            amount=to_decimal(data.get('amount')),
            mandatory=bool(data.get('mandatory', False)),
            notes=data.get('notes') or '',
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data['amount'] = str(self.amount)
        return data


@dataclass(frozen=True)
class QuoteTotals:
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal

    def as_display(self, currency='USD') -> dict:
        return {
            'subtotal': format_money(self.subtotal, currency),
            'tax_amount': format_money(self.tax_amount, currency),
            'total': format_money(self.total, currency),
        }


def _as_line(line) -> CostLine:
    return line if isinstance(line, CostLine) else CostLine.from_dict(line)


def recompute_totals(lines: Iterable, tax_rate=ZERO) -> QuoteTotals:
    """
    Sum ``amount * max(quantity, 1)`` over ``lines`` and apply ``tax_rate``
    (a percentage). Lines may be ``CostLine`` objects or stored dicts.
    """
    rate = to_decimal(tax_rate, 'tax_rate')
    subtotal = sum((_as_line(line).line_total for line in lines), ZERO)
    tax_amount = subtotal * rate / 100
    return QuoteTotals(
        subtotal=subtotal,
        tax_rate=rate,
        tax_amount=tax_amount,
        total=subtotal + tax_amount,
    )


@dataclass
class CostLineRegistry:
    """
    Ordered cost lines of one quote or shipment.
    """
    lines: List[CostLine] = field(default_factory=list)

    @classmethod
    def from_documents(cls, documents) -> 'CostLineRegistry':
        return cls(lines=[CostLine.from_dict(doc) for doc in documents or []])

    def to_documents(self) -> List[dict]:
        return [line.to_dict() for line in self.lines]

    def add_line(self, category: str, preset: Optional[str] = None) -> CostLine:
        if category not in CATEGORY_KEYS:
            raise serializers.ValidationError({'category': f"Unknown cost category: {category}"})

        description, unit = '', DEFAULT_UNIT
        if preset:
            found = find_preset(category, preset)
            if found is None:
                raise serializers.ValidationError({
                    'preset': f"'{preset}' is not a {category} charge preset"
                })
            description, unit = found

        line = CostLine(
            category=category,
            description=description,
            unit=unit,
            mandatory=category == 'freight',
        )
        self.lines.append(line)
        return line

    def remove_line(self, index: int) -> CostLine:
        if not 0 <= index < len(self.lines):
            raise CostLineNotFound(index=index, size=len(self.lines))
        return self.lines.pop(index)

    def grouped(self) -> dict:
        """
        Lines per category in catalog order, each paired with its index
        """
        groups = {key: [] for key, _ in COST_CATEGORIES}
        for index, line in enumerate(self.lines):
            groups[line.category].append((index, line))
        return groups

    def totals(self, tax_rate=ZERO) -> QuoteTotals:
        return recompute_totals(self.lines, tax_rate)
