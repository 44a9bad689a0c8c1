"""
Configuración global: marca del ticket y contraseña de acceso
"""
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.db import models

SINGLETON_PK = 1

hex_color_validator = RegexValidator(
    regex=r'^#[0-9a-fA-F]{6}$',
    message='Usá un color hexadecimal, por ejemplo #06b6d4.',
)

DEFAULTS = {
    'logo': None,
    'primary_color': '#06b6d4',
    'secondary_color': '#ec4899',
    'company_name': 'Buffa-Bikes',
    'company_address': 'Dirección del Local',
    'company_phone': '+54 11 1234-5678',
    'access_password': 'admin123',
}


class SiteConfig(models.Model):
    """Registro único con la marca del ticket y la contraseña de cobro"""

    # URL pública armada con SITE_URL; puede ser un host de la red local (http://buffa-pc:8000)
    logo = models.CharField('Logo', max_length=500, blank=True, null=True)
    primary_color = models.CharField(
        'Color primario', max_length=7,
        default=DEFAULTS['primary_color'], validators=[hex_color_validator]
    )
    secondary_color = models.CharField(
        'Color secundario', max_length=7,
        default=DEFAULTS['secondary_color'], validators=[hex_color_validator]
    )
    company_name = models.CharField('Nombre del local', max_length=200, default=DEFAULTS['company_name'])
    company_address = models.CharField(
        'Dirección', max_length=255, blank=True, null=True, default=DEFAULTS['company_address']
    )
    company_phone = models.CharField(
        'Teléfono', max_length=32, blank=True, null=True, default=DEFAULTS['company_phone']
    )
    # Texto plano: se compara tal cual contra lo que ingresa el operador
    access_password = models.CharField(
        'Contraseña de acceso', max_length=128, default=DEFAULTS['access_password'],
        help_text='Se pide para confirmar el pago de un ticket'
    )

    created_at = models.DateTimeField('Creado', auto_now_add=True)
    updated_at = models.DateTimeField('Actualizado', auto_now=True)

    class Meta:
        db_table = 'config'
        verbose_name = 'Configuración'
        verbose_name_plural = 'Configuración'

    def __str__(self):
        return f"Configuración de {self.company_name}"

    def save(self, *args, **kwargs):
        """Siempre la misma fila"""
        self.pk = SINGLETON_PK
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError('La configuración no se puede eliminar')

    @property
    def monogram(self):
        # iniciales para el encabezado cuando no hay logo
        words = [w for w in (self.company_name or '').replace('-', ' ').split() if w]
        initials = ''.join(w[0] for w in words[:2]).upper()
        return initials or 'BB'

    @classmethod
    def load(cls):
        """
        Devuelve la fila guardada o, si todavía no existe, una instancia con los
        valores por defecto SIN guardarla.
        """
        obj = cls.objects.filter(pk=SINGLETON_PK).first()
        if obj is None:
            obj = cls(pk=SINGLETON_PK, **DEFAULTS)
        return obj
