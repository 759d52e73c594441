from django.urls import path

from . import views

app_name = "shipments"

urlpatterns = [
    path("new/", views.shipment_create, name="create"),
    path("<int:pk>/", views.shipment_detail, name="detail"),
    path("<int:pk>/items/", views.item_add, name="item_add"),
    path("<int:pk>/items/<int:item_id>/", views.item_update, name="item_update"),
    path("<int:pk>/receive/", views.shipment_receive, name="receive"),
]
