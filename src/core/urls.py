from django.contrib import admin
from django.urls import path

from src.catalog.api import api, build_product_router
from src.catalog.container import product_controller

api.add_router("/api", build_product_router(product_controller))

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", api.urls),
]
