from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Espejo local de una identidad del proveedor externo."""
    # id del usuario en el proveedor de identidad; vacío para cuentas locales
    external_id = models.CharField(
        "ID externo", max_length=64, unique=True, blank=True, null=True
    )
    name = models.CharField("Nombre", max_length=255, blank=True)
    image_url = models.URLField("Imagen", max_length=500, blank=True, null=True)

    class Meta:
        verbose_name = "Usuario"
        verbose_name_plural = "Usuarios"

    def __str__(self):
        return self.username

    @property
    def display_name(self):
        return self.name or self.get_full_name() or self.username

    @property
    def created_at(self):
        return self.date_joined
