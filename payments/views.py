"""Payment endpoints for the order screen's payment modal."""

import logging

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.mixins import role_required
from accounts.models import Role
from pricing.rounding import round_half_up, to_decimal
from quotes.models import Quote

from .forms import PaymentForm
from .models import QuotePayment
from .status import preview_payment

logger = logging.getLogger(__name__)


def _payment_json(payment):
    return {
        "id": payment.pk,
        "amount": round_half_up(payment.amount),
        "method": payment.method,
        "method_display": payment.get_method_display(),
        "comment": payment.comment,
        "created_by": str(payment.created_by),
        "created_at": payment.created_at.isoformat(),
    }


def _balance_json(quote):
    return {
        "final_total": quote.final_total_rounded,
        "total_paid": round_half_up(quote.total_paid),
        "remaining_balance": quote.remaining_balance,
        "payment_status": quote.payment_status,
    }


@login_required
def payment_list(request, quote_id):
    quote = get_object_or_404(Quote, pk=quote_id)
    payments = quote.payments.select_related("created_by")
    return JsonResponse({"payments": [_payment_json(p) for p in payments], **_balance_json(quote)})


@login_required
def payment_preview(request, quote_id):
    """Live feedback while the amount is being typed."""
    quote = get_object_or_404(Quote, pk=quote_id)
    try:
        amount = to_decimal(request.GET.get("amount", "0").replace(",", ".").replace(" ", ""))
    except ArithmeticError:
        return JsonResponse({"error": "Érvénytelen összeg."}, status=400)
    if not amount.is_finite():
        return JsonResponse({"error": "Érvénytelen összeg."}, status=400)
    preview = preview_payment(quote.final_total, quote.total_paid, amount)
    return JsonResponse(preview.as_dict())


@role_required(Role.SALES, Role.ACCOUNTANT)
@require_POST
def payment_add(request, quote_id):
    quote = get_object_or_404(Quote, pk=quote_id)
    form = PaymentForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors_as_json()}, status=400)

    try:
        payment = QuotePayment.record(
            quote,
            form.cleaned_data["amount"],
            form.cleaned_data["method"],
            created_by=request.user,
            comment=form.cleaned_data["comment"],
        )
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)

    logger.info("Payment %s Ft recorded on %s by %s", payment.amount, quote, request.user)
    quote.refresh_from_db()
    return JsonResponse({"payment": _payment_json(payment), **_balance_json(quote)}, status=201)
