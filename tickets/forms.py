from django import forms

from .models import Ticket


class TicketForm(forms.ModelForm):
    class Meta:
        model = Ticket
        fields = ["customer_name", "customer_email", "customer_phone"]
        labels = {
            "customer_name": "Nombre del cliente",
            "customer_email": "Email",
            "customer_phone": "Teléfono",
        }
        widgets = {
            "customer_name": forms.TextInput(attrs={"placeholder": "Juan Pérez"}),
            "customer_email": forms.EmailInput(attrs={"placeholder": "juan@ejemplo.com"}),
            "customer_phone": forms.TextInput(attrs={"type": "tel", "placeholder": "+54 11 1234-5678"}),
        }


class TicketLookupForm(forms.Form):
    ticket_id = forms.CharField(
        label="ID del ticket", max_length=40,
        error_messages={"required": "Por favor ingresa un ID de ticket"},
        widget=forms.TextInput(attrs={"placeholder": "TKT-..."}),
    )

    def clean_ticket_id(self):
        return self.cleaned_data["ticket_id"].strip()


class PaymentForm(forms.Form):
    access_password = forms.CharField(
        label="Contraseña de acceso", max_length=128, strip=False,
        error_messages={"required": "Por favor ingresa la contraseña"},
        widget=forms.PasswordInput(attrs={"placeholder": "Ingresa la contraseña"}),
    )

    def clean_access_password(self):
        value = self.cleaned_data["access_password"]
        if not value.strip():
            raise forms.ValidationError("Por favor ingresa la contraseña")
        return value
