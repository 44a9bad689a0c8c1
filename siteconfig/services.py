# siteconfig/services.py
import logging
import time
from urllib.parse import unquote, urljoin, urlparse

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage

from .models import DEFAULTS, SiteConfig

logger = logging.getLogger('siteconfig')

CONFIG_FIELDS = tuple(DEFAULTS.keys())


class LogoValidationError(ValidationError):
    pass


def get_config() -> SiteConfig:
    """Configuración vigente; si no hay fila guardada, los valores por defecto (sin escribir)."""
    return SiteConfig.load()


def save_config(**fields) -> SiteConfig:
    """
    Actualiza la configuración única o la crea si todavía no existe.
    Acepta solo los campos editables (logo, colores, datos del local, contraseña).
    """
    unknown = set(fields) - set(CONFIG_FIELDS)
    if unknown:
        raise TypeError(f"Campos de configuración desconocidos: {', '.join(sorted(unknown))}")

    config = SiteConfig.load()
    for name, value in fields.items():
        setattr(config, name, value)
    config.full_clean()
    config.save()
    logger.info("Configuración guardada: %s", ", ".join(sorted(fields)) or "sin cambios")
    return config


def validate_logo(file) -> None:
    content_type = getattr(file, 'content_type', '') or ''
    if not content_type.startswith('image/'):
        raise LogoValidationError('Solo se permiten imágenes.')
    if file.size > settings.LOGO_MAX_UPLOAD_SIZE:
        raise LogoValidationError('El archivo es muy grande. Máximo 2MB.')


def upload_logo(file) -> str:
    """
    Guarda el logo con un nombre único por fecha (no pisa logos anteriores)
    y devuelve la URL pública.
    """
    validate_logo(file)

    ext = file.name.rsplit('.', 1)[-1].lower() if '.' in file.name else 'png'
    name = f"{settings.LOGO_UPLOAD_DIR}/logo-{int(time.time() * 1000)}.{ext}"
    saved = default_storage.save(name, file)

    url = urljoin(settings.SITE_URL, default_storage.url(saved))
    logger.info("Logo subido: %s", url)
    return url


def _logo_file_name(url: str) -> str:
    # storage.url() codifica los caracteres no ASCII
    return unquote(urlparse(url or '').path.split('/')[-1])


def delete_logo(url: str) -> None:
    """Borra el objeto cuyo nombre es el último segmento de la URL."""
    file_name = _logo_file_name(url)
    if not file_name:
        return
    default_storage.delete(f"{settings.LOGO_UPLOAD_DIR}/{file_name}")
    logger.info("Logo eliminado: %s", file_name)


def open_logo(url: str):
    """Abre el archivo del logo en el storage (para renderizar el ticket)."""
    file_name = _logo_file_name(url)
    if not file_name:
        raise FileNotFoundError(url)
    return default_storage.open(f"{settings.LOGO_UPLOAD_DIR}/{file_name}", 'rb')
