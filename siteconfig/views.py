import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpResponse
from django.shortcuts import redirect, render

from tickets.utils import TicketExportError, preview_ticket, render_ticket_png
from .forms import SiteConfigForm
from .services import delete_logo, get_config, save_config, upload_logo

logger = logging.getLogger('siteconfig')


@login_required
def settings_view(request):
    """Editor de la marca del ticket y de la contraseña de acceso."""
    config = get_config()

    if request.method == "POST":
        form = SiteConfigForm(request.POST, request.FILES, instance=config)
        if form.is_valid():
            fields = form.config_fields()
            old_logo = config.logo
            new_logo = None
            try:
                if form.cleaned_data.get("logo_file"):
                    new_logo = fields["logo"] = upload_logo(form.cleaned_data["logo_file"])
                elif form.cleaned_data.get("remove_logo"):
                    fields["logo"] = None

                save_config(**fields)
            except (OSError, DatabaseError, ValidationError):
                logger.exception("No se pudo guardar la configuración")
                # el logo recién subido no quedó referenciado
                if new_logo:
                    try:
                        delete_logo(new_logo)
                    except OSError:
                        logger.exception("No se pudo borrar el logo huérfano %s", new_logo)
                messages.error(request, "Error al guardar la configuración.")
                return render(request, "siteconfig/settings.html", {"form": form, "config": config})

            # el logo anterior se borra recién cuando la nueva configuración quedó guardada
            if old_logo and "logo" in fields and fields["logo"] != old_logo:
                try:
                    delete_logo(old_logo)
                    messages.info(request, "Logo eliminado.")
                except OSError:
                    logger.exception("No se pudo borrar el logo anterior %s", old_logo)
                    messages.warning(request, "Error al eliminar el logo anterior.")

            messages.success(request, "Configuración guardada exitosamente.")
            return redirect("siteconfig:settings")
    else:
        form = SiteConfigForm(instance=config)

    return render(request, "siteconfig/settings.html", {"form": form, "config": config})


@login_required
def preview_png(request):
    """Vista previa del ticket con datos de ejemplo y la configuración actual."""
    try:
        png = render_ticket_png(preview_ticket(), get_config())
    except TicketExportError:
        logger.exception("No se pudo generar la vista previa")
        return HttpResponse(status=500)
    return HttpResponse(png, content_type="image/png")
