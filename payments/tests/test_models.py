"""Tests for QuotePayment and the quote's payment status."""

from decimal import Decimal

import pytest

from payments.models import PaymentMethod, PaymentStatus, QuotePayment
from quotes.models import QuoteStatus


@pytest.fixture
def order(quote, fee_type, sales_user):
    # 20 × 5000 net + 27% VAT = 127000 gross
    quote.add_fee(fee_type, quantity=20)
    quote.create_order(sales_user)
    return quote


@pytest.mark.django_db
class TestQuotePayment:
    def test_partial_then_paid(self, order, sales_user):
        assert order.final_total_rounded == 127000

        QuotePayment.record(order, 50000, PaymentMethod.CASH, created_by=sales_user)
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PARTIAL
        assert order.remaining_balance == 77000

        QuotePayment.record(order, 77000, PaymentMethod.CARD, created_by=sales_user)
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PAID
        assert order.total_paid == Decimal("127000")

    def test_overpayment_rejected(self, order, sales_user):
        with pytest.raises(ValueError):
            QuotePayment.record(order, 127002, PaymentMethod.CASH, created_by=sales_user)
        assert not order.payments.exists()

    def test_draft_quote_cannot_take_payment(self, quote, fee_type, sales_user):
        quote.add_fee(fee_type)
        with pytest.raises(ValueError, match="Árajánlatra"):
            QuotePayment.record(quote, 1000, PaymentMethod.CASH, created_by=sales_user)

    def test_cancelled_order_only_takes_refunds(self, order, sales_user):
        QuotePayment.record(order, 10000, PaymentMethod.CASH, created_by=sales_user)
        order.refresh_from_db()
        order.transition_to(QuoteStatus.CANCELLED, changed_by=sales_user)

        with pytest.raises(ValueError, match="visszatérítés"):
            QuotePayment.record(order, 1000, PaymentMethod.CASH, created_by=sales_user)

        QuotePayment.record(order, -10000, PaymentMethod.CASH, created_by=sales_user)
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.NOT_PAID
