# users/views.py
import hashlib
import hmac
import json
import logging

from django.conf import settings
from django.http import HttpResponse, HttpResponseBadRequest, HttpResponseForbidden
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .services import ExternalIdentity, sync_user

logger = logging.getLogger('users')

SIGNATURE_HEADER = 'HTTP_X_IDENTITY_SIGNATURE'
SYNC_EVENTS = {'user.created', 'user.updated'}


def _valid_signature(request) -> bool:
    secret = settings.IDENTITY_WEBHOOK_SECRET
    if not secret:
        return False
    got = request.META.get(SIGNATURE_HEADER, '')
    expected = hmac.new(secret.encode('utf-8'), request.body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(got, expected)


@csrf_exempt
@require_POST
def identity_webhook(request):
    """
    Webhook del proveedor de identidad: mantiene el espejo local de usuarios.
    El cuerpo va firmado con HMAC-SHA256 (hex) en X-Identity-Signature.
    """
    if not _valid_signature(request):
        logger.warning("Webhook de identidad con firma inválida")
        return HttpResponseForbidden('Invalid signature')

    try:
        payload = json.loads(request.body.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return HttpResponseBadRequest('Bad JSON')
    if not isinstance(payload, dict):
        return HttpResponseBadRequest('Bad JSON')

    event_type = payload.get('type', '')
    if event_type not in SYNC_EVENTS:
        return HttpResponse('ignored')

    try:
        identity = ExternalIdentity.from_payload(payload.get('data') or {})
    except ValueError as e:
        return HttpResponseBadRequest(str(e))

    local_id = sync_user(identity)
    return HttpResponse(str(local_id))
