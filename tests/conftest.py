import io

import pytest
from PIL import Image
from django.core.files.uploadedfile import SimpleUploadedFile

from tickets.services import create_ticket


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    settings.SITE_URL = "https://tickets.example.com"
    return tmp_path


@pytest.fixture
def staff(django_user_model):
    return django_user_model.objects.create_user(
        username="operador", password="s3cret-pass", email="op@example.com", name="Operador Uno"
    )


@pytest.fixture
def staff_client(client, staff):
    client.force_login(staff)
    return client


@pytest.fixture
def ticket(db):
    return create_ticket("Ana Díaz", "ana@x.com", "+54 11 555-1111")


def make_png(size=(64, 32), color=(6, 182, 212)):
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_upload():
    return SimpleUploadedFile("logo.png", make_png(), content_type="image/png")


@pytest.fixture
def png_bytes():
    return make_png
