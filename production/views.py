"""Production endpoints: machine suggestion, assignment and the threshold setting."""

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.mixins import role_required
from accounts.models import Role
from quotes.models import Quote, QuoteStatus
from quotes.views import quote_summary_json

from .forms import ProductionAssignForm, ThresholdForm
from .models import Machine
from .services import get_machine_threshold, set_machine_threshold, suggest_for_quote

UNASSIGNED = "Nincs gép"


@login_required
def machine_list(request):
    machines = Machine.objects.filter(is_active=True)
    return JsonResponse(
        [
            {"id": m.pk, "name": m.name, "role": m.role, "usage_limit_per_day": m.usage_limit_per_day}
            for m in machines
        ],
        safe=False,
    )


@login_required
def machine_suggestion(request, quote_id):
    """
    Suggested machine for the production modal. `suggestion` is null when the
    order lacks panels or pricing rows, or fewer than three machines exist.
    """
    quote = get_object_or_404(Quote, pk=quote_id)
    threshold = get_machine_threshold()
    suggestion = suggest_for_quote(quote, threshold)
    return JsonResponse({
        "threshold": float(threshold),
        "suggestion": suggestion.as_dict() if suggestion else None,
    })


@role_required(Role.SALES, Role.OPERATOR)
@require_POST
def assign_production(request, quote_id):
    quote = get_object_or_404(Quote.objects.select_related("customer"), pk=quote_id)
    form = ProductionAssignForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors_as_json()}, status=400)
    try:
        quote.assign_production(
            form.cleaned_data["machine"],
            form.cleaned_data["production_date"],
            form.cleaned_data["barcode"],
            changed_by=request.user,
        )
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote))


@role_required(Role.SALES, Role.OPERATOR)
@require_POST
def clear_production(request, quote_id):
    quote = get_object_or_404(Quote.objects.select_related("customer"), pk=quote_id)
    try:
        quote.clear_production(changed_by=request.user)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse(quote_summary_json(quote))


@login_required
def production_queue(request):
    """
    Orders in production, grouped by machine, oldest production date first.
    Orders left without a machine (e.g. edited in the admin) are listed
    under UNASSIGNED.
    """
    quotes = (
        Quote.objects.filter(status=QuoteStatus.IN_PRODUCTION)
        .select_related("customer", "production_machine")
        .order_by("production_date", "pk")
    )
    queue = {}
    for quote in quotes:
        machine = quote.production_machine
        production_date = quote.production_date
        queue.setdefault(machine.name if machine else UNASSIGNED, []).append({
            "id": quote.pk,
            "order_number": quote.order_number,
            "customer": quote.customer.name,
            "production_date": production_date.isoformat() if production_date else None,
            "barcode": quote.barcode,
        })
    return JsonResponse(queue)


@login_required
def threshold(request):
    """GET: current value. POST (owner only): update it."""
    if request.method == "POST":
        return _update_threshold(request)
    return JsonResponse({"threshold": float(get_machine_threshold())})


@role_required(Role.OWNER)
def _update_threshold(request):
    form = ThresholdForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors_as_json()}, status=400)
    try:
        value = set_machine_threshold(form.cleaned_data["threshold"])
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse({"threshold": float(value)})
