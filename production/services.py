"""
Glue between the classifier and the database: threshold lookup and
per-quote suggestion.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import DatabaseError

from core.models import Setting

from .classifier import suggest_machine
from .models import Machine

logger = logging.getLogger(__name__)

THRESHOLD_KEY = "machine_threshold"

_last_known_threshold = None


def _default_threshold():
    return Decimal(str(settings.MACHINE_THRESHOLD_DEFAULT))


def _parse_threshold(raw):
    value = Decimal(str(raw).strip().replace(",", "."))
    if not value.is_finite() or value <= 0:
        raise InvalidOperation(raw)
    return value


def get_machine_threshold():
    """
    Current m²-per-panel threshold, read fresh from the Setting table.

    A failed read or an unparsable value falls back to the last value read
    successfully, then to MACHINE_THRESHOLD_DEFAULT.
    """
    global _last_known_threshold

    try:
        raw = Setting.get(THRESHOLD_KEY, None)
    except DatabaseError:
        fallback = _last_known_threshold or _default_threshold()
        logger.warning("Could not read %s, using %s", THRESHOLD_KEY, fallback, exc_info=True)
        return fallback

    if raw is None or str(raw).strip() == "":
        return _default_threshold()

    try:
        value = _parse_threshold(raw)
    except InvalidOperation:
        fallback = _last_known_threshold or _default_threshold()
        logger.warning("Invalid %s value %r, using %s", THRESHOLD_KEY, raw, fallback)
        return fallback

    _last_known_threshold = value
    return value


def set_machine_threshold(value):
    try:
        value = _parse_threshold(value)
    except InvalidOperation:
        raise ValueError("A küszöbnek pozitív számnak kell lennie.")
    Setting.put(THRESHOLD_KEY, value, description="m²/alkatrész határ a gépjavaslathoz")
    logger.info("Machine threshold set to %s", value)
    return value


def suggest_for_quote(quote, threshold=None):
    if threshold is None:
        threshold = get_machine_threshold()
    return suggest_machine(
        quote.panels.all(),
        quote.pricing_rows.all(),
        Machine.objects.filter(is_active=True),
        threshold,
    )
