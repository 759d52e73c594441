"""Customer lookup endpoints used by the quote modals."""

from django.contrib.auth.decorators import login_required
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.mixins import role_required
from accounts.models import Role

from .models import Customer


def _customer_json(customer):
    return {
        "id": customer.pk,
        "name": customer.name,
        "email": customer.email,
        "phone": customer.phone,
        "tax_number": customer.tax_number,
        "billing_address": customer.billing_address,
        "default_discount_percent": str(customer.default_discount_percent),
    }


@login_required
def customer_autocomplete(request):
    """JSON endpoint for the customer select-autocomplete widget."""
    q = request.GET.get("q", "").strip()
    if len(q) < 1:
        return JsonResponse([], safe=False)
    customers = (
        Customer.objects.filter(
            Q(name__icontains=q) | Q(phone__icontains=q) | Q(email__icontains=q),
            is_active=True,
        )
        .values("id", "name", "phone")[:12]
    )
    return JsonResponse(list(customers), safe=False)


@login_required
def customer_detail(request, pk):
    customer = get_object_or_404(Customer, pk=pk)
    return JsonResponse(_customer_json(customer))


@role_required(Role.SALES)
@require_POST
def customer_create(request):
    from .forms import CustomerForm

    form = CustomerForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors_as_json()}, status=400)
    customer = form.save()
    return JsonResponse(_customer_json(customer), status=201)
