from django.urls import path

from . import views

app_name = "customers"

urlpatterns = [
    path("new/", views.customer_create, name="create"),
    path("<int:pk>/", views.customer_detail, name="detail"),
    path("autocomplete/", views.customer_autocomplete, name="autocomplete"),
]
