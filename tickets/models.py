# tickets/models.py
import secrets
import string
import time

from django.conf import settings
from django.db import models

TICKET_ID_PREFIX = 'TKT'
_SUFFIX_ALPHABET = string.digits + string.ascii_uppercase


class Ticket(models.Model):
    class Status(models.TextChoices):
        AWAITING_PAYMENT = 'por_atender', 'Por atender'
        PAID = 'pagado', 'Pagado'

    id = models.CharField('Ticket ID', max_length=40, primary_key=True)
    customer_name = models.CharField('Cliente', max_length=200)
    customer_email = models.EmailField('Email')
    customer_phone = models.CharField('Teléfono', max_length=32)

    status = models.CharField(
        'Estado', max_length=20, choices=Status.choices,
        default=Status.AWAITING_PAYMENT, db_index=True
    )
    # contenido del QR: el propio id del ticket
    qr_code = models.CharField('Código QR', max_length=40)

    created_at = models.DateTimeField('Creado', auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField('Actualizado', auto_now=True)

    # quién confirmó el cobro (null si se confirmó sin sesión)
    paid_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='paid_tickets',
        verbose_name='Cobrado por',
    )
    paid_at = models.DateTimeField('Pagado el', null=True, blank=True)

    class Meta:
        db_table = 'tickets'
        ordering = ['-created_at']
        verbose_name = 'Ticket'
        verbose_name_plural = 'Tickets'

    def __str__(self):
        return f'{self.id} ({self.get_status_display()})'

    @property
    def is_paid(self) -> bool:
        return self.status == self.Status.PAID

    @property
    def payer(self):
        """Datos de quien cobró el ticket (join con users), o None."""
        if self.paid_by is None:
            return None
        return {
            'name': self.paid_by.display_name,
            'email': self.paid_by.email,
            'image_url': self.paid_by.image_url,
        }

    @staticmethod
    def make_id():
        # TKT-<epoch ms>-<9 caracteres base36>
        suffix = ''.join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(9))
        return f'{TICKET_ID_PREFIX}-{int(time.time() * 1000)}-{suffix}'
