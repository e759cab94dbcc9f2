"""
Quote status workflow.

    draft --send--> sent --accept--> accepted
                         --reject--> rejected

Content can only be edited while a quote is a draft. ``expired`` is never
stored: it is how a sent quote reads once ``valid_until`` has passed.
"""
import logging

from django.utils import timezone

from core.exceptions import InvalidTransition

logger = logging.getLogger(__name__)

# action -> (required status, new status, timestamp field)
TRANSITIONS = {
    'send': ('draft', 'sent', 'sent_at'),
    'accept': ('sent', 'accepted', 'accepted_at'),
    'reject': ('sent', 'rejected', 'rejected_at'),
}

EDITABLE_STATUSES = ('draft',)


def allowed_actions(quote):
    actions = [action for action, (source, _, _) in TRANSITIONS.items() if quote.status == source]
    if quote.status in EDITABLE_STATUSES:
        actions.insert(0, 'edit')
    return actions


def ensure_editable(quote):
    if quote.status not in EDITABLE_STATUSES:
        raise InvalidTransition('edit', quote.status)


def apply_action(quote, action, now=None):
    """
    Move ``quote`` along the workflow and stamp the matching timestamp.

    Raises InvalidTransition without touching the quote when the action is
    unknown or not allowed from the current status.
    """
    if action not in TRANSITIONS:
        raise InvalidTransition(action, quote.status)

    source, target, stamp_field = TRANSITIONS[action]
    if quote.status != source:
        raise InvalidTransition(action, quote.status)

    now = now or timezone.now()
    previous = quote.status
    quote.status = target
    setattr(quote, stamp_field, now)
    quote.updated_at = now

    logger.info(
        "Quote %s: %s -> %s (%s)",
        getattr(quote, 'reference', quote.pk), previous, target, action
    )
    return quote


def send(quote, now=None):
    return apply_action(quote, 'send', now)


def accept(quote, now=None):
    return apply_action(quote, 'accept', now)


def reject(quote, now=None):
    return apply_action(quote, 'reject', now)


def edit(quote, changes, now=None):
    """Apply field changes to a draft quote."""
    ensure_editable(quote)
    for attr, value in changes.items():
        setattr(quote, attr, value)
    quote.updated_at = now or timezone.now()
    return quote


def is_expired(quote, now=None):
    if quote.status != 'sent' or quote.valid_until is None:
        return False
    return quote.valid_until < (now or timezone.now())


def effective_status(quote, now=None):
    return 'expired' if is_expired(quote, now) else quote.status
