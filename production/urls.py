from django.urls import path

from . import views

app_name = "production"

urlpatterns = [
    path("machines/", views.machine_list, name="machines"),
    path("queue/", views.production_queue, name="queue"),
    path("threshold/", views.threshold, name="threshold"),
    path("quote/<int:quote_id>/suggestion/", views.machine_suggestion, name="suggestion"),
    path("quote/<int:quote_id>/assign/", views.assign_production, name="assign"),
    path("quote/<int:quote_id>/clear/", views.clear_production, name="clear"),
]
