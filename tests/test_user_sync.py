import hashlib
import hmac
import json

import pytest
from django.urls import reverse

from users.models import User
from users.services import ExternalIdentity, get_local_user_id, sync_user

pytestmark = pytest.mark.django_db


def provider_user(**overrides):
    data = {
        "id": "user_2abcDEFghiJKL",
        "username": "marta",
        "first_name": "Marta",
        "last_name": "Gómez",
        "image_url": "https://img.example.com/marta.png",
        "email_addresses": [{"email_address": "marta@example.com"}],
    }
    data.update(overrides)
    return data


def test_sync_is_idempotent():
    identity = ExternalIdentity.from_payload(provider_user())

    first = sync_user(identity)
    second = sync_user(identity)

    assert first == second
    assert User.objects.filter(external_id=identity.id).count() == 1
    user = User.objects.get(pk=first)
    assert user.username == "marta"
    assert user.name == "Marta Gómez"
    assert user.email == "marta@example.com"
    assert user.image_url == "https://img.example.com/marta.png"
    assert not user.has_usable_password()


def test_sync_overwrites_profile_fields():
    local_id = sync_user(ExternalIdentity.from_payload(provider_user()))

    again = sync_user(ExternalIdentity.from_payload(provider_user(
        username="marta.g", last_name="Gómez Paz", image_url=None,
        email_addresses=[{"email_address": "mg@example.com"}],
    )))

    assert again == local_id
    user = User.objects.get(pk=local_id)
    assert user.username == "marta.g"
    assert user.name == "Marta Gómez Paz"
    assert user.email == "mg@example.com"
    assert user.image_url is None


def test_name_and_username_fallbacks():
    identity = ExternalIdentity(id="user_9876543210", email="pepe@example.com")
    assert identity.display_name == "Usuario"
    assert identity.local_username == "pepe"

    bare = ExternalIdentity(id="user_9876543210")
    assert bare.local_username == "user_user_987"

    only_username = ExternalIdentity(id="x", username="pepe")
    assert only_username.display_name == "pepe"


def test_username_collision_gets_suffix(django_user_model):
    django_user_model.objects.create_user(username="marta", password="x")

    local_id = sync_user(ExternalIdentity.from_payload(provider_user()))

    assert User.objects.get(pk=local_id).username == "marta-2"


def test_get_local_user_id():
    assert get_local_user_id("user_2abcDEFghiJKL") is None
    local_id = sync_user(ExternalIdentity.from_payload(provider_user()))
    assert get_local_user_id("user_2abcDEFghiJKL") == local_id


def test_from_payload_requires_id():
    with pytest.raises(ValueError):
        ExternalIdentity.from_payload({"username": "sin-id"})


def _signed_post(client, payload, secret="whsec"):
    body = json.dumps(payload).encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return client.post(
        reverse("users:identity_webhook"), data=body, content_type="application/json",
        HTTP_X_IDENTITY_SIGNATURE=signature,
    )


def test_webhook_syncs_user(client, settings):
    settings.IDENTITY_WEBHOOK_SECRET = "whsec"

    response = _signed_post(client, {"type": "user.created", "data": provider_user()})

    assert response.status_code == 200
    assert int(response.content) == get_local_user_id("user_2abcDEFghiJKL")


def test_webhook_rejects_bad_signature(client, settings):
    settings.IDENTITY_WEBHOOK_SECRET = "whsec"

    response = _signed_post(client, {"type": "user.created", "data": provider_user()}, secret="otro")

    assert response.status_code == 403
    assert User.objects.count() == 0


def test_webhook_disabled_without_secret(client, settings):
    settings.IDENTITY_WEBHOOK_SECRET = ""
    response = _signed_post(client, {"type": "user.created", "data": provider_user()}, secret="")
    assert response.status_code == 403


def test_webhook_ignores_other_events(client, settings):
    settings.IDENTITY_WEBHOOK_SECRET = "whsec"
    response = _signed_post(client, {"type": "session.created", "data": {}})
    assert response.content == b"ignored"


@pytest.mark.parametrize("data", [
    "user_2abcDEFghiJKL",
    {"id": "user_2abcDEFghiJKL", "email_addresses": ["marta@example.com"]},
    {"id": "user_2abcDEFghiJKL", "email_addresses": "marta@example.com"},
])
def test_from_payload_rejects_malformed_user(data):
    with pytest.raises(ValueError):
        ExternalIdentity.from_payload(data)


def test_webhook_rejects_malformed_user(client, settings):
    settings.IDENTITY_WEBHOOK_SECRET = "whsec"

    response = _signed_post(client, {
        "type": "user.created",
        "data": provider_user(email_addresses=["marta@example.com"]),
    })

    assert response.status_code == 400
    assert User.objects.count() == 0
