from django.contrib import admin
from .models import Ticket


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ('id', 'customer_name', 'customer_email', 'status', 'created_at', 'paid_at', 'paid_by')
    list_filter = ('status', 'created_at', 'paid_at')
    search_fields = ('id', 'customer_name', 'customer_email', 'customer_phone')
    # el cobro pasa por la pantalla de verificación (contraseña de acceso)
    readonly_fields = ('id', 'qr_code', 'status', 'created_at', 'updated_at', 'paid_by', 'paid_at')

    def has_add_permission(self, request):
        # los tickets salen del generador
        return False

    def has_delete_permission(self, request, obj=None):
        return False
