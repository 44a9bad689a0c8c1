import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SiteConfig',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('logo', models.CharField(blank=True, max_length=500, null=True, verbose_name='Logo')),
                ('primary_color', models.CharField(default='#06b6d4', max_length=7, validators=[django.core.validators.RegexValidator(message='Usá un color hexadecimal, por ejemplo #06b6d4.', regex='^#[0-9a-fA-F]{6}$')], verbose_name='Color primario')),
                ('secondary_color', models.CharField(default='#ec4899', max_length=7, validators=[django.core.validators.RegexValidator(message='Usá un color hexadecimal, por ejemplo #06b6d4.', regex='^#[0-9a-fA-F]{6}$')], verbose_name='Color secundario')),
                ('company_name', models.CharField(default='Buffa-Bikes', max_length=200, verbose_name='Nombre del local')),
                ('company_address', models.CharField(blank=True, default='Dirección del Local', max_length=255, null=True, verbose_name='Dirección')),
                ('company_phone', models.CharField(blank=True, default='+54 11 1234-5678', max_length=32, null=True, verbose_name='Teléfono')),
                ('access_password', models.CharField(default='admin123', help_text='Se pide para confirmar el pago de un ticket', max_length=128, verbose_name='Contraseña de acceso')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Creado')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Actualizado')),
            ],
            options={
                'verbose_name': 'Configuración',
                'verbose_name_plural': 'Configuración',
                'db_table': 'config',
            },
        ),
    ]
