"""Catalog endpoints used by the quote editor and the price maintenance screen."""

import logging

from django.contrib.auth.decorators import login_required
from django.db import transaction
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.mixins import role_required
from accounts.models import Role

from .forms import PiecePriceForm
from .inventory import stock_summary
from .models import Accessory, FeeType, LinearMaterial, Material

logger = logging.getLogger(__name__)


def _material_json(material):
    return {
        "id": material.pk,
        "name": material.name,
        "base_price": str(material.base_price),
        "multiplier": str(material.multiplier),
        "board_area_m2": str(material.board_area_m2),
        "price_per_sqm": material.price_per_sqm,
        "gross_price_per_sqm": material.gross_price_per_sqm,
        "board_purchase_price": material.board_purchase_price,
        "board_selling_price": material.board_selling_price,
    }


def _linear_material_json(item):
    return {
        "id": item.pk,
        "name": item.name,
        "base_price": str(item.base_price),
        "multiplier": str(item.multiplier),
        "price_per_m": item.price_per_m,
        "piece_purchase_price": item.piece_purchase_price,
        "piece_selling_price": item.piece_selling_price,
    }


@login_required
def accessory_search(request):
    q = request.GET.get("q", "").strip()
    items = Accessory.objects.filter(is_active=True)
    if q:
        items = items.filter(name__icontains=q)
    return JsonResponse(
        [
            {"id": a.pk, "name": a.name, "net_price": a.net_price, "gross_price": a.gross_price,
             "vat_percent": str(a.vat_percent)}
            for a in items.select_related("vat")[:20]
        ],
        safe=False,
    )


@login_required
def fee_type_list(request):
    fees = FeeType.objects.filter(is_active=True).select_related("vat")
    return JsonResponse(
        [
            {"id": f.pk, "name": f.name, "net_price": str(f.net_price), "gross_price": f.gross_price,
             "vat_percent": str(f.vat_percent), "unit": f.unit}
            for f in fees
        ],
        safe=False,
    )


@role_required(Role.WAREHOUSE)
@require_POST
def material_update_prices(request, pk):
    """
    Set a board's purchase and/or selling price from whole-board values.

    The purchase price is applied first, so a selling price sent together with
    it derives the multiplier from the new purchase price.
    """
    form = PiecePriceForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors_as_json()}, status=400)

    with transaction.atomic():
        material = get_object_or_404(Material.objects.select_for_update().select_related("vat"), pk=pk)
        try:
            if form.cleaned_data["purchase_price"] is not None:
                material.set_board_purchase_price(form.cleaned_data["purchase_price"])
            if form.cleaned_data["selling_price"] is not None:
                material.set_board_selling_price(form.cleaned_data["selling_price"])
        except ValueError as e:
            return JsonResponse({"error": str(e)}, status=400)
        material.save(changed_by=request.user)

    logger.info("Material %s repriced by %s: base %s, multiplier %s",
                material.pk, request.user, material.base_price, material.multiplier)
    return JsonResponse(_material_json(material))


@role_required(Role.WAREHOUSE)
@require_POST
def linear_material_update_prices(request, pk):
    form = PiecePriceForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors_as_json()}, status=400)

    item = get_object_or_404(LinearMaterial.objects.select_related("vat"), pk=pk)
    try:
        if form.cleaned_data["purchase_price"] is not None:
            item.set_piece_purchase_price(form.cleaned_data["purchase_price"])
        if form.cleaned_data["selling_price"] is not None:
            item.set_piece_selling_price(form.cleaned_data["selling_price"])
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    item.save()
    return JsonResponse(_linear_material_json(item))


def _transaction_json(t):
    return {
        "type": t.transaction_type,
        "quantity": float(t.quantity),
        "unit_price": float(t.unit_price) if t.unit_price is not None else None,
        "reference_type": t.reference_type,
        "reference_id": t.reference_id,
        "comment": t.comment,
        "created_at": t.created_at.isoformat(),
    }


@login_required
def material_stock(request, pk):
    material = get_object_or_404(Material.objects.select_related("vat"), pk=pk)
    transactions = material.inventory_transactions.all()[:50]
    return JsonResponse({
        "id": material.pk,
        "name": material.name,
        **stock_summary(material).as_dict(),
        "transactions": [_transaction_json(t) for t in transactions],
    })


@role_required(Role.WAREHOUSE, Role.ACCOUNTANT)
def stock_valuation(request):
    """Average-cost value of every active board on stock."""
    rows = []
    total = 0
    for material in Material.objects.filter(is_active=True).select_related("vat"):
        summary = stock_summary(material)
        total += summary.stock_value
        rows.append({"id": material.pk, "name": material.name, **summary.as_dict()})
    return JsonResponse({"materials": rows, "total_value": total})
