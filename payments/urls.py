from django.urls import path

from . import views

app_name = "payments"

urlpatterns = [
    path("quote/<int:quote_id>/", views.payment_list, name="list"),
    path("quote/<int:quote_id>/preview/", views.payment_preview, name="preview"),
    path("quote/<int:quote_id>/add/", views.payment_add, name="add"),
]
