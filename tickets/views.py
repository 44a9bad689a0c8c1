import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.http import Http404, HttpResponse
from django.shortcuts import redirect, render
from django.urls import reverse

from siteconfig.services import get_config
from .forms import PaymentForm, TicketForm, TicketLookupForm
from .services import (
    AccessDenied, TicketAlreadyPaid, TicketNotFound, TicketStoreError,
    create_ticket, get_ticket_by_id, get_ticket_stats, list_tickets, mark_ticket_as_paid,
)
from .utils import TicketExportError, build_ticket_pdf, build_verify_url, render_ticket_png

logger = logging.getLogger('tickets')

LAST_TICKET_SESSION_KEY = 'last_ticket_id'


def _current_user(request):
    # sin sesión el cobro queda sin atribuir
    return request.user if request.user.is_authenticated else None


def _get_ticket_or_404(ticket_id):
    ticket = get_ticket_by_id(ticket_id)
    if ticket is None:
        raise Http404("Ticket no encontrado")
    return ticket


def _confirm_payment(request, ticket, form):
    """
    Intenta cobrar el ticket con la contraseña del formulario.
    Devuelve el ticket actualizado o None; los errores quedan en el form / messages.
    """
    try:
        return mark_ticket_as_paid(ticket.id, _current_user(request), form.cleaned_data['access_password'])
    except AccessDenied as e:
        form.add_error('access_password', str(e))
    except TicketAlreadyPaid as e:
        messages.info(request, "El ticket ya estaba pagado.")
        return e.ticket
    except TicketNotFound:
        raise Http404("Ticket no encontrado")
    except TicketStoreError:
        messages.error(request, "Error al procesar el ticket.")
    return None


@login_required
def generate(request):
    """Formulario para generar tickets + resumen de estados."""
    if request.method == 'POST':
        form = TicketForm(request.POST)
        if form.is_valid():
            try:
                ticket = create_ticket(**form.cleaned_data)
            except TicketStoreError:
                messages.error(request, "Error al generar el ticket.")
            else:
                request.session[LAST_TICKET_SESSION_KEY] = ticket.id
                messages.success(request, "Ticket generado exitosamente.")
                return redirect('tickets:generate')
    else:
        form = TicketForm()

    last_ticket = None
    last_id = request.session.get(LAST_TICKET_SESSION_KEY)
    if last_id:
        last_ticket = get_ticket_by_id(last_id)

    return render(request, 'tickets/generate.html', {
        'form': form,
        'stats': get_ticket_stats(),
        'last_ticket': last_ticket,
    })


@login_required
def ticket_list(request):
    q = (request.GET.get('q') or '').strip()
    paginator = Paginator(list_tickets(q), settings.TICKETS_PER_PAGE)
    page = paginator.get_page(request.GET.get('page'))
    return render(request, 'tickets/list.html', {
        'page_obj': page,
        'tickets': page.object_list,
        'q': q,
        'stats': get_ticket_stats(),
    })


@login_required
def ticket_pdf(request, pk: str):
    ticket = _get_ticket_or_404(pk)
    try:
        pdf_bytes = build_ticket_pdf(ticket, get_config())
    except TicketExportError:
        logger.exception("PDF build failed for ticket %s", ticket.id)
        messages.error(request, "Error al descargar el PDF. Intenta nuevamente.")
        return redirect('tickets:list')

    response = HttpResponse(pdf_bytes, content_type="application/pdf")
    response["Content-Disposition"] = f'attachment; filename="ticket-{ticket.id}.pdf"'
    return response


@login_required
def ticket_image(request, pk: str):
    ticket = _get_ticket_or_404(pk)
    try:
        png = render_ticket_png(ticket, get_config())
    except TicketExportError:
        logger.exception("Image render failed for ticket %s", ticket.id)
        return HttpResponse(status=500)
    return HttpResponse(png, content_type="image/png")


@login_required
def scan_ticket(request):
    """
    Escáner: sin decodificación por cámara, se ingresa el ID a mano
    (o llega por ?ticket_id= desde un lector externo).
    """
    ctx = {'result': None, 'lookup_form': TicketLookupForm(), 'payment_form': PaymentForm()}

    if request.method == 'POST':
        action = request.POST.get('action', 'check')  # check | pay
        lookup = TicketLookupForm(request.POST)
        ctx['lookup_form'] = lookup
        if not lookup.is_valid():
            return render(request, 'tickets/scan.html', ctx)

        ticket = get_ticket_by_id(lookup.cleaned_data['ticket_id'])
        if ticket is None:
            messages.error(request, "Ticket no encontrado. Verifica el ID e intenta nuevamente.")
            return render(request, 'tickets/scan.html', ctx)

        if action == 'pay' and not ticket.is_paid:
            form = PaymentForm(request.POST)
            ctx['payment_form'] = form
            if form.is_valid():
                paid = _confirm_payment(request, ticket, form)
                if paid is not None:
                    ticket = paid
                    messages.success(request, "Ticket marcado como pagado exitosamente.")
        ctx['result'] = ticket
    elif request.GET.get('ticket_id'):
        ctx['lookup_form'] = TicketLookupForm(initial={'ticket_id': request.GET['ticket_id']})
        ctx['result'] = get_ticket_by_id(request.GET['ticket_id'])
        if ctx['result'] is None:
            messages.error(request, "Ticket no encontrado. Verifica el ID e intenta nuevamente.")

    return render(request, 'tickets/scan.html', ctx)


def verify_ticket(request, ticket_id: str):
    """
    Destino del QR. Muestra el ticket y, si está por atender, pide la
    contraseña de acceso para confirmar el pago. Si ya está pagado muestra
    la confirmación.
    """
    ticket = get_ticket_by_id(ticket_id)
    if ticket is None:
        return render(request, 'tickets/verify_error.html',
                      {'error': "Ticket no encontrado"}, status=404)

    if ticket.is_paid:
        return render(request, 'tickets/verify_success.html', {'ticket': ticket})

    status = 200
    if request.method == 'POST':
        form = PaymentForm(request.POST)
        if form.is_valid():
            paid = _confirm_payment(request, ticket, form)
            if paid is not None:
                return redirect(reverse('tickets:verify', args=[ticket.id]))
            # contraseña rechazada o falla de la base
            status = 403 if form.has_error('access_password') else 503
        else:
            status = 400
    else:
        form = PaymentForm()

    return render(request, 'tickets/verify.html', {
        'ticket': ticket,
        'form': form,
        'verify_url': build_verify_url(ticket.id),
    }, status=status)
