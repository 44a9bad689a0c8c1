from django.contrib import admin
from .models import SiteConfig


@admin.register(SiteConfig)
class SiteConfigAdmin(admin.ModelAdmin):
    list_display = ('company_name', 'primary_color', 'secondary_color', 'updated_at')
    readonly_fields = ('created_at', 'updated_at')

    def has_add_permission(self, request):
        # una sola fila
        return not SiteConfig.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
