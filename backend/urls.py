"""
Routes racine du backend
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/sign/", include("signature.urls")),
]
