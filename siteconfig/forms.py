from django import forms

from .models import SiteConfig
from .services import LogoValidationError, validate_logo


class SiteConfigForm(forms.ModelForm):
    logo_file = forms.FileField(
        label="Logo", required=False,
        widget=forms.ClearableFileInput(attrs={"accept": "image/*"}),
    )
    remove_logo = forms.BooleanField(label="Quitar logo", required=False)

    class Meta:
        model = SiteConfig
        fields = (
            "primary_color",
            "secondary_color",
            "company_name",
            "company_address",
            "company_phone",
            "access_password",
        )
        widgets = {
            "primary_color": forms.TextInput(attrs={"type": "color"}),
            "secondary_color": forms.TextInput(attrs={"type": "color"}),
            "access_password": forms.TextInput(attrs={"autocomplete": "off"}),
        }

    def clean_logo_file(self):
        # se valida antes de tocar el storage
        file = self.cleaned_data.get("logo_file")
        if file:
            try:
                validate_logo(file)
            except LogoValidationError as e:
                raise forms.ValidationError(e.messages)
        return file

    def clean_company_name(self):
        return self.cleaned_data["company_name"].strip()

    def config_fields(self):
        """Campos para save_config (sin los del logo)."""
        return {name: self.cleaned_data[name] for name in self.Meta.fields}
