from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    fieldsets = DjangoUserAdmin.fieldsets + (
        ("Proveedor de identidad", {"fields": ("external_id", "name", "image_url")}),
    )
    list_display = ("username", "email", "name", "external_id", "is_staff", "is_active")
    list_filter = ("is_staff", "is_active")
    search_fields = ("username", "email", "name", "external_id")
    readonly_fields = ("external_id",)
