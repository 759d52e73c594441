from django.urls import path

from . import views

app_name = "quotes"

urlpatterns = [
    path("new/", views.quote_create, name="create"),
    path("<int:pk>/", views.quote_detail, name="detail"),
    path("<int:pk>/materials/<int:material_id>/", views.pricing_row_set, name="pricing_row"),
    path("<int:pk>/fees/", views.fee_add, name="fee_add"),
    path("<int:pk>/fees/<int:fee_id>/delete/", views.fee_delete, name="fee_delete"),
    path("<int:pk>/accessories/", views.accessory_add, name="accessory_add"),
    path("<int:pk>/accessories/<int:line_id>/delete/", views.accessory_delete, name="accessory_delete"),
    path("<int:pk>/panels/", views.panel_add, name="panel_add"),
    path("<int:pk>/panels/<int:panel_id>/delete/", views.panel_delete, name="panel_delete"),
    path("<int:pk>/discount/", views.discount_update, name="discount"),
    path("<int:pk>/order/", views.order_create, name="order_create"),
    path("<int:pk>/status/", views.status_change, name="status"),
    path("<int:pk>/history/", views.status_history, name="history"),
    path("<int:pk>/cost-breakdown/", views.cost_breakdown, name="cost_breakdown"),
]
