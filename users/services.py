# users/services.py
import logging
from dataclasses import dataclass
from typing import Optional

from django.db import transaction

from .models import User

logger = logging.getLogger('users')

DEFAULT_DISPLAY_NAME = "Usuario"


@dataclass(frozen=True)
class ExternalIdentity:
    """Usuario tal como lo entrega el proveedor de identidad."""
    id: str
    email: str = ""
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    image_url: str = ""

    @classmethod
    def from_payload(cls, data: dict) -> "ExternalIdentity":
        """
        Construye la identidad a partir del objeto usuario del proveedor
        (formato de webhook: email_addresses, first_name, image_url, ...).
        """
        if not isinstance(data, dict):
            raise ValueError("El usuario externo no es un objeto.")
        if not data.get("id"):
            raise ValueError("El usuario externo no tiene id.")
        emails = data.get("email_addresses") or []
        if not isinstance(emails, list):
            raise ValueError("email_addresses debe ser una lista.")
        email = ""
        if emails:
            first = emails[0] or {}
            if not isinstance(first, dict):
                raise ValueError("email_addresses debe contener objetos.")
            email = first.get("email_address") or ""
        return cls(
            id=str(data["id"]),
            email=email,
            username=data.get("username") or "",
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            image_url=data.get("image_url") or "",
        )

    @property
    def display_name(self) -> str:
        full = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full or self.username or DEFAULT_DISPLAY_NAME

    @property
    def local_username(self) -> str:
        if self.username:
            return self.username
        if self.email:
            return self.email.split("@")[0]
        return f"user_{self.id[:8]}"


def _unique_username(base: str, exclude_pk=None) -> str:
    # username es único en AbstractUser: si otro usuario ya lo usa, agregamos sufijo
    username = base
    n = 2
    qs = User.objects.all()
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    while qs.filter(username=username).exists():
        username = f"{base}-{n}"
        n += 1
    return username


@transaction.atomic
def sync_user(identity: ExternalIdentity) -> int:
    """
    Crea o actualiza el usuario local que corresponde a la identidad externa.
    Devuelve el id local. Llamarlo varias veces con la misma identidad nunca
    duplica filas y deja los campos del perfil con los últimos valores.
    """
    user = (User.objects
            .select_for_update()
            .filter(external_id=identity.id)
            .first())

    profile = {
        "email": identity.email or "",
        "name": identity.display_name,
        "image_url": identity.image_url or None,
    }

    if user is not None:
        user.username = _unique_username(identity.local_username, exclude_pk=user.pk)
        for field, value in profile.items():
            setattr(user, field, value)
        user.save(update_fields=["username", *profile.keys()])
        logger.info("Usuario sincronizado: external_id=%s local_id=%s", identity.id, user.pk)
        return user.pk

    user = User(
        external_id=identity.id,
        username=_unique_username(identity.local_username),
        **profile,
    )
    user.set_unusable_password()
    user.save()
    logger.info("Usuario creado desde el proveedor: external_id=%s local_id=%s", identity.id, user.pk)
    return user.pk


def get_local_user_id(external_id: str) -> Optional[int]:
    """Id local del usuario con ese id externo, o None si nunca se sincronizó."""
    return (User.objects
            .filter(external_id=external_id)
            .values_list("pk", flat=True)
            .first())
