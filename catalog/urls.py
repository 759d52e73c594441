from django.urls import path

from . import views

app_name = "catalog"

urlpatterns = [
    path("accessories/search/", views.accessory_search, name="accessory_search"),
    path("fees/", views.fee_type_list, name="fee_types"),
    path("materials/<int:pk>/prices/", views.material_update_prices, name="material_prices"),
    path("linear-materials/<int:pk>/prices/", views.linear_material_update_prices, name="linear_material_prices"),
    path("materials/<int:pk>/stock/", views.material_stock, name="material_stock"),
    path("stock/", views.stock_valuation, name="stock_valuation"),
]
