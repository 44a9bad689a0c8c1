from .services import get_config


def site_config(request):
    # colores y nombre del local para el layout base
    return {'site_config': get_config()}
