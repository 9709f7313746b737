# formsight/urls.py
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),

    # Surveys App
    path("surveys/", include("surveys.urls")),
]
