"""Shipment receiving endpoints for the warehouse."""

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.mixins import role_required
from accounts.models import Role

from .forms import ShipmentForm, ShipmentItemForm, ShipmentItemUpdateForm
from .models import Shipment, ShipmentItem


def _shipment_json(shipment):
    return {
        "id": shipment.pk,
        "shipment_number": shipment.shipment_number,
        "supplier_name": shipment.supplier_name,
        "status": shipment.status,
        "received_at": shipment.received_at.isoformat() if shipment.received_at else None,
        "items": [
            {
                "id": item.pk,
                "description": item.description,
                "quantity_received": item.quantity_received,
                "net_price": item.net_price,
                "vat_percent": item.vat_percent,
                "net_total": item.net_total,
                "vat_amount": item.vat_amount,
                "gross_total": item.gross_total,
            }
            for item in shipment.items.all()
        ],
        "totals": shipment.totals.as_dict(),
    }


@login_required
def shipment_detail(request, pk):
    return JsonResponse(_shipment_json(get_object_or_404(Shipment, pk=pk)))


@role_required(Role.WAREHOUSE)
@require_POST
def shipment_create(request):
    form = ShipmentForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors_as_json()}, status=400)
    shipment = form.save(commit=False)
    shipment.created_by = request.user
    shipment.save()
    return JsonResponse(_shipment_json(shipment), status=201)


@role_required(Role.WAREHOUSE)
@require_POST
def item_add(request, pk):
    shipment = get_object_or_404(Shipment, pk=pk)
    form = ShipmentItemForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors_as_json()}, status=400)
    item = form.save(commit=False)
    item.shipment = shipment
    try:
        item.save()
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(_shipment_json(shipment), status=201)


@role_required(Role.WAREHOUSE)
@require_POST
def item_update(request, pk, item_id):
    """Correct the counted quantity or the invoiced price of one line."""
    shipment = get_object_or_404(Shipment, pk=pk)
    item = get_object_or_404(ShipmentItem, pk=item_id, shipment=shipment)
    form = ShipmentItemUpdateForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors_as_json()}, status=400)
    item.quantity_received = form.cleaned_data["quantity_received"]
    item.net_price = form.cleaned_data["net_price"]
    try:
        item.save()
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(_shipment_json(shipment))


@role_required(Role.WAREHOUSE)
@require_POST
def shipment_receive(request, pk):
    shipment = get_object_or_404(Shipment, pk=pk)
    try:
        shipment.receive(request.user)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(_shipment_json(shipment))
