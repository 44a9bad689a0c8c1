# tickets/services.py
import logging
from typing import Optional

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count, Q
from django.utils import timezone
from django.utils.crypto import constant_time_compare

from siteconfig.services import get_config
from .models import Ticket

logger = logging.getLogger('tickets')


class AccessDenied(PermissionError):
    """Contraseña de acceso incorrecta."""


class TicketNotFound(ValueError):
    pass


class TicketAlreadyPaid(ValueError):
    def __init__(self, ticket: Ticket):
        self.ticket = ticket
        super().__init__(f"El ticket {ticket.id} ya está pagado.")


class TicketStoreError(Exception):
    """La base rechazó la operación (restricción, conexión, etc.)."""


def create_ticket(customer_name: str, customer_email: str, customer_phone: str) -> Ticket:
    """
    Genera un ticket nuevo en estado «por atender».
    Los tres datos del cliente son obligatorios (los valida el formulario).
    """
    ticket_id = Ticket.make_id()
    try:
        with transaction.atomic():
            ticket = Ticket.objects.create(
                id=ticket_id,
                customer_name=customer_name,
                customer_email=customer_email,
                customer_phone=customer_phone,
                qr_code=ticket_id,
                status=Ticket.Status.AWAITING_PAYMENT,
            )
    except (IntegrityError, DatabaseError) as e:
        logger.exception("Error creating ticket %s", ticket_id)
        raise TicketStoreError("No se pudo generar el ticket.") from e

    logger.info("Ticket creado: %s cliente=%s", ticket.id, ticket.customer_name)
    # devolvemos la fila tal como quedó guardada
    ticket.refresh_from_db()
    return ticket


def mark_ticket_as_paid(ticket_id: str, user, access_password: str) -> Ticket:
    """
    Confirma el cobro de un ticket.
    1) valida la contraseña de acceso contra la configuración;
    2) bloquea la fila y solo permite la transición por_atender -> pagado.
    Con contraseña incorrecta no se modifica nada.
    """
    config = get_config()
    if not config.access_password or not constant_time_compare(access_password or '', config.access_password):
        logger.warning("Contraseña incorrecta al cobrar el ticket %s", ticket_id)
        raise AccessDenied("Contraseña de acceso incorrecta")

    try:
        with transaction.atomic():
            ticket = (Ticket.objects
                      .select_for_update()
                      .filter(pk=ticket_id)
                      .first())
            if ticket is None:
                raise TicketNotFound(f"Ticket {ticket_id} no encontrado.")
            if ticket.status != Ticket.Status.AWAITING_PAYMENT:
                raise TicketAlreadyPaid(ticket)

            ticket.status = Ticket.Status.PAID
            ticket.paid_by = user
            ticket.paid_at = timezone.now()
            ticket.save(update_fields=['status', 'paid_by', 'paid_at', 'updated_at'])
    except DatabaseError as e:
        logger.exception("Error marking ticket %s as paid", ticket_id)
        raise TicketStoreError("No se pudo actualizar el ticket.") from e

    logger.info("Ticket pagado: %s por=%s", ticket.id, getattr(user, 'pk', None))
    return ticket


def get_ticket_stats() -> dict:
    """Totales por estado; total == awaiting_payment + paid."""
    return Ticket.objects.aggregate(
        total=Count('id'),
        awaiting_payment=Count('id', filter=Q(status=Ticket.Status.AWAITING_PAYMENT)),
        paid=Count('id', filter=Q(status=Ticket.Status.PAID)),
    )


def list_tickets(search: Optional[str] = None):
    """Tickets del más nuevo al más viejo, con el usuario que cobró."""
    qs = Ticket.objects.select_related('paid_by').order_by('-created_at')
    term = (search or '').strip()
    if term:
        qs = qs.filter(
            Q(id__icontains=term)
            | Q(customer_name__icontains=term)
            | Q(customer_email__icontains=term)
            | Q(customer_phone__icontains=term)
        )
    return qs


def get_ticket_by_id(ticket_id: str) -> Optional[Ticket]:
    """None si no existe (no es un error)."""
    return (Ticket.objects
            .select_related('paid_by')
            .filter(pk=(ticket_id or '').strip())
            .first())
