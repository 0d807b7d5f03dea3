from django.urls import path

from modules.core.views import api_root, health_check

urlpatterns = [
    path("", api_root, name="api_root"),
    path("health", health_check, name="health_check"),
]
