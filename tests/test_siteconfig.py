import pytest
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile

from siteconfig.forms import SiteConfigForm
from siteconfig.models import SiteConfig
from siteconfig.services import (
    LogoValidationError, delete_logo, get_config, open_logo, save_config, upload_logo,
)

pytestmark = pytest.mark.django_db


def test_get_config_returns_defaults_without_writing():
    config = get_config()

    assert config.logo is None
    assert config.primary_color == "#06b6d4"
    assert config.secondary_color == "#ec4899"
    assert config.company_name == "Buffa-Bikes"
    assert config.company_address == "Dirección del Local"
    assert config.company_phone == "+54 11 1234-5678"
    assert config.access_password == "admin123"
    assert SiteConfig.objects.count() == 0


def test_save_config_upserts_single_row():
    save_config(company_name="Taller Sur")
    save_config(primary_color="#111111", access_password="nueva")

    assert SiteConfig.objects.count() == 1
    config = get_config()
    assert config.pk == 1
    assert config.company_name == "Taller Sur"
    assert config.primary_color == "#111111"
    assert config.access_password == "nueva"


def test_save_config_rejects_bad_values():
    with pytest.raises(ValidationError):
        save_config(primary_color="cyan")
    with pytest.raises(TypeError):
        save_config(favorite_color="#000000")
    assert SiteConfig.objects.count() == 0


def test_config_cannot_be_deleted():
    config = save_config(company_name="Taller Sur")
    with pytest.raises(ValidationError):
        config.delete()


def test_monogram():
    assert get_config().monogram == "BB"
    assert save_config(company_name="taller").monogram == "T"


def test_logo_round_trip(media_root, png_upload):
    url = upload_logo(png_upload)

    assert url.startswith("https://tickets.example.com/media/logos/logo-")
    assert url.endswith(".png")
    stored = list((media_root / "logos").iterdir())
    assert len(stored) == 1

    save_config(logo=url)
    assert get_config().logo == url

    delete_logo(url)
    save_config(logo=None)
    assert get_config().logo is None
    assert list((media_root / "logos").iterdir()) == []


def test_upload_does_not_overwrite_previous_logo(media_root, png_bytes):
    first = upload_logo(SimpleUploadedFile("a.png", png_bytes(), content_type="image/png"))
    second = upload_logo(SimpleUploadedFile("a.png", png_bytes(), content_type="image/png"))

    assert first != second
    assert len(list((media_root / "logos").iterdir())) == 2


def test_upload_rejects_non_image(media_root):
    file = SimpleUploadedFile("notes.txt", b"hola", content_type="text/plain")
    with pytest.raises(LogoValidationError):
        upload_logo(file)
    assert not (media_root / "logos").exists()


def test_upload_rejects_oversized(media_root, settings):
    settings.LOGO_MAX_UPLOAD_SIZE = 10
    file = SimpleUploadedFile("big.png", b"x" * 11, content_type="image/png")
    with pytest.raises(LogoValidationError):
        upload_logo(file)


def test_delete_logo_without_file_name_is_noop(media_root):
    delete_logo("https://tickets.example.com/media/logos/")
    delete_logo("")


def test_form_validates_logo_before_upload(settings):
    settings.LOGO_MAX_UPLOAD_SIZE = 10
    data = {
        "primary_color": "#06b6d4",
        "secondary_color": "#ec4899",
        "company_name": "Buffa-Bikes",
        "company_address": "",
        "company_phone": "",
        "access_password": "admin123",
    }
    files = {"logo_file": SimpleUploadedFile("big.png", b"x" * 11, content_type="image/png")}

    form = SiteConfigForm(data, files, instance=get_config())

    assert not form.is_valid()
    assert "Máximo 2MB" in form.errors["logo_file"][0]


def test_logo_with_non_ascii_name(media_root, png_bytes):
    url = upload_logo(SimpleUploadedFile("logo.ñ", png_bytes(), content_type="image/png"))
    assert "%C3%B1" in url

    with open_logo(url) as fh:
        assert fh.read(8) == b"\x89PNG\r\n\x1a\n"

    delete_logo(url)
    assert list((media_root / "logos").iterdir()) == []


def test_save_config_accepts_lan_host_logo():
    config = save_config(logo="http://buffa-pc:8000/media/logos/logo-1.png")
    assert config.logo == "http://buffa-pc:8000/media/logos/logo-1.png"
