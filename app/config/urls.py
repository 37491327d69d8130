"""
URL configuration for the back office.

URL Structure:
    /admin/   - Django admin (tenants, parties, invoices, payments, ledgers)
    /health/  - Health check endpoint (for load balancers, Docker)
"""

from django.contrib import admin
from django.urls import path

from core.views import health_check

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health/", health_check, name="health_check"),
]

admin.site.site_header = "Back Office Admin"
admin.site.site_title = "Back Office"
admin.site.index_title = "Ledgers and payments"
