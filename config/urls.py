from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),  # admin

    path('users/', include('users.urls')),  # login, logout, webhook del proveedor
    path('settings/', include('siteconfig.urls')),  # marca y contraseña de acceso
    path('', include('tickets.urls')),  # generador, listado, escáner, verificación
]

# Archivos subidos (logos) en modo debug
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
