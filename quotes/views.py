"""
Quote / order endpoints.

Every mutating endpoint returns the refreshed quote summary so the detail
screen can redraw its totals panel without a second request.
"""

import logging

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.mixins import role_required
from accounts.models import Role
from catalog.models import Material
from pricing.display import display_unit_price
from pricing.rounding import round_half_up

from .forms import (
    AccessoryLineForm,
    CreateOrderForm,
    DiscountForm,
    FeeLineForm,
    MaterialPricingForm,
    PanelForm,
    QuoteCreateForm,
    StatusChangeForm,
)
from .models import Quote, QuoteAccessory, QuoteFee, QuotePanel, QuoteStatus

logger = logging.getLogger(__name__)


def _line_json(line):
    return {
        "id": line.pk,
        "name": line.name,
        "quantity": line.quantity,
        "unit_price_net": line.unit_price_net,
        "vat_percent": line.vat_percent,
        **line.total.as_dict(),
    }


def quote_summary_json(quote):
    return {
        "id": quote.pk,
        "quote_number": quote.quote_number,
        "order_number": quote.order_number,
        "customer": {"id": quote.customer_id, "name": quote.customer.name},
        "status": quote.status,
        "status_display": quote.get_status_display(),
        "payment_status": quote.payment_status,
        "is_locked": quote.is_locked,
        "discount_percent": quote.discount_percent,
        "materials": {"net": quote.materials_net, "vat": quote.materials_vat, "gross": quote.materials_gross},
        "fees": {"net": quote.fees_net, "vat": quote.fees_vat, "gross": quote.fees_gross},
        "accessories": {"net": quote.accessories_net, "vat": quote.accessories_vat, "gross": quote.accessories_gross},
        "subtotal": quote.subtotal,
        "discount_amount": quote.discount_amount,
        "final_total": quote.final_total_rounded,
        "total_paid": round_half_up(quote.total_paid),
        "remaining_balance": quote.remaining_balance,
        "fee_lines": [_line_json(f) for f in quote.fees.all()],
        "accessory_lines": [_line_json(a) for a in quote.accessories.all()],
        "panels": [
            {
                "id": p.pk,
                "material_id": p.material_id,
                "length_mm": p.length_mm,
                "width_mm": p.width_mm,
                "quantity": p.quantity,
                "label": p.label,
            }
            for p in quote.panels.all()
        ],
        "pricing_rows": [
            {
                "id": row.pk,
                "material_id": row.material_id,
                "material_name": row.material_name,
                "boards_used": row.boards_used,
                "usage_percentage": row.usage_percentage,
                "charged_sqm": row.charged_sqm,
                "material_gross": row.material_gross,
                "cutting_gross": row.cutting_gross,
                **row.total.as_dict(),
            }
            for row in quote.pricing_rows.all()
        ],
        "production": {
            "machine_id": quote.production_machine_id,
            "date": quote.production_date.isoformat() if quote.production_date else None,
            "barcode": quote.barcode,
        },
    }


def _get_quote(pk):
    return get_object_or_404(Quote.objects.select_related("customer"), pk=pk)


def _form_errors(form):
    return JsonResponse({"errors": form.errors_as_json()}, status=400)


@login_required
def quote_detail(request, pk):
    return JsonResponse(quote_summary_json(_get_quote(pk)))


@role_required(Role.SALES)
@require_POST
def quote_create(request):
    form = QuoteCreateForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    customer = form.cleaned_data["customer"]
    quote = Quote.objects.create(
        customer=customer,
        discount_percent=customer.default_discount_percent,
        comment=form.cleaned_data["comment"],
        created_by=request.user,
    )
    return JsonResponse(quote_summary_json(quote), status=201)


@role_required(Role.SALES)
@require_POST
def pricing_row_set(request, pk, material_id):
    quote = _get_quote(pk)
    material = get_object_or_404(Material.objects.select_related("vat"), pk=material_id)
    form = MaterialPricingForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    data = form.cleaned_data
    try:
        quote.price_material(
            material,
            boards_used=data["boards_used"],
            usage_percentage=data["usage_percentage"],
            charged_sqm=data["charged_sqm"],
            cutting_length_m=data["cutting_length_m"] or 0,
            cutting_fee_per_m=data["cutting_fee_per_m"] or 0,
        )
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote))


@role_required(Role.SALES)
@require_POST
def fee_add(request, pk):
    quote = _get_quote(pk)
    form = FeeLineForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    try:
        quote.add_fee(
            form.cleaned_data["fee_type"],
            quantity=form.cleaned_data["quantity"],
            unit_price_net=form.cleaned_data["unit_price_net"],
            comment=form.cleaned_data["comment"],
        )
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote), status=201)


@role_required(Role.SALES)
@require_POST
def fee_delete(request, pk, fee_id):
    quote = _get_quote(pk)
    fee = get_object_or_404(QuoteFee, pk=fee_id, quote=quote)
    try:
        quote.remove_line(fee)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote))


@role_required(Role.SALES)
@require_POST
def accessory_add(request, pk):
    quote = _get_quote(pk)
    form = AccessoryLineForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    try:
        quote.add_accessory(form.cleaned_data["accessory"], quantity=form.cleaned_data["quantity"])
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote), status=201)


@role_required(Role.SALES)
@require_POST
def accessory_delete(request, pk, line_id):
    quote = _get_quote(pk)
    line = get_object_or_404(QuoteAccessory, pk=line_id, quote=quote)
    try:
        quote.remove_line(line)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote))


@role_required(Role.SALES)
@require_POST
def panel_add(request, pk):
    quote = _get_quote(pk)
    form = PanelForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    try:
        quote.add_panel(**form.cleaned_data)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote), status=201)


@role_required(Role.SALES)
@require_POST
def panel_delete(request, pk, panel_id):
    quote = _get_quote(pk)
    panel = get_object_or_404(QuotePanel, pk=panel_id, quote=quote)
    try:
        quote.remove_panel(panel)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote))


@role_required(Role.SALES)
@require_POST
def discount_update(request, pk):
    quote = _get_quote(pk)
    form = DiscountForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    try:
        quote.set_discount(form.cleaned_data["discount_percent"])
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote))


@role_required(Role.SALES)
@require_POST
def order_create(request, pk):
    quote = _get_quote(pk)
    form = CreateOrderForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    try:
        quote.create_order(
            request.user,
            initial_payment=form.cleaned_data["initial_payment"],
            payment_method=form.cleaned_data["payment_method"],
            comment=form.cleaned_data["comment"],
        )
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote))


@role_required(Role.SALES, Role.OPERATOR)
@require_POST
def status_change(request, pk):
    """
    Generic status move. Ordering and production assignment have their own
    endpoints because they carry extra data.
    """
    quote = _get_quote(pk)
    form = StatusChangeForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    new_status = form.cleaned_data["status"]
    note = form.cleaned_data["note"]
    try:
        if quote.status == QuoteStatus.DRAFT and new_status == QuoteStatus.ORDERED:
            quote.create_order(request.user)
        elif quote.status == QuoteStatus.IN_PRODUCTION and new_status == QuoteStatus.ORDERED:
            quote.clear_production(changed_by=request.user)
        elif quote.status == QuoteStatus.ORDERED and new_status == QuoteStatus.IN_PRODUCTION:
            raise ValueError("Gyártásba adáshoz válasszon gépet, dátumot és vonalkódot.")
        else:
            quote.transition_to(new_status, changed_by=request.user, note=note)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    logger.info("%s moved to %s by %s", quote, new_status, request.user)
    return JsonResponse(quote_summary_json(quote))


@login_required
def status_history(request, pk):
    quote = _get_quote(pk)
    entries = quote.status_history.select_related("changed_by")
    return JsonResponse(
        [
            {
                "from_status": h.from_status,
                "to_status": h.to_status,
                "changed_by": str(h.changed_by) if h.changed_by else None,
                "note": h.note,
                "changed_at": h.changed_at.isoformat(),
            }
            for h in entries
        ],
        safe=False,
    )


def _display_json(name, line, unit):
    return {
        "name": name,
        "unit": unit,
        "quantity": line.quantity,
        "unit_price": line.unit_price,
        "total_gross": line.total_gross,
        "total_net": line.total_net,
    }


@login_required
def cost_breakdown(request, pk):
    """
    Rows for the printed cost breakdown. Each unit price is rounded to 2
    decimals and the row total rebuilt from it.
    """
    quote = _get_quote(pk)
    rows = []
    for row in quote.pricing_rows.all():
        rows.append(_display_json(
            row.material_name,
            display_unit_price(row.material_gross, row.material_net, row.billed_sqm),
            "m²",
        ))
        if row.cutting_gross:
            rows.append(_display_json(
                f"{row.material_name} vágás",
                display_unit_price(row.cutting_gross, row.cutting_net, row.cutting_length_m),
                "m",
            ))
    for fee in quote.fees.all():
        rows.append(_display_json(fee.name, display_unit_price(fee.gross_total, fee.net_total, fee.quantity), "db"))
    for acc in quote.accessories.all():
        rows.append(_display_json(acc.name, display_unit_price(acc.gross_total, acc.net_total, acc.quantity), "db"))

    return JsonResponse({
        "quote": str(quote),
        "rows": rows,
        "subtotal": quote.subtotal,
        "discount_percent": quote.discount_percent,
        "discount_amount": quote.discount_amount,
        "final_total": quote.final_total_rounded,
    })
