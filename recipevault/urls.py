"""
RecipeVault URL Configuration.

Usable directly as ROOT_URLCONF, or include its API part:

    path('api/', include('recipevault.api.urls')),

The JSON 404/500 handlers only take effect from the root URLconf.
"""

from django.urls import include, path

from recipevault.views import health

urlpatterns = [
    path("", health, name="health"),
    path("api/", include("recipevault.api.urls")),
]

handler404 = "recipevault.views.route_not_found"
handler500 = "recipevault.views.server_error"
