import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Ticket',
            fields=[
                ('id', models.CharField(max_length=40, primary_key=True, serialize=False, verbose_name='Ticket ID')),
                ('customer_name', models.CharField(max_length=200, verbose_name='Cliente')),
                ('customer_email', models.EmailField(max_length=254, verbose_name='Email')),
                ('customer_phone', models.CharField(max_length=32, verbose_name='Teléfono')),
                ('status', models.CharField(choices=[('por_atender', 'Por atender'), ('pagado', 'Pagado')], db_index=True, default='por_atender', max_length=20, verbose_name='Estado')),
                ('qr_code', models.CharField(max_length=40, verbose_name='Código QR')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Creado')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Actualizado')),
                ('paid_at', models.DateTimeField(blank=True, null=True, verbose_name='Pagado el')),
                ('paid_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='paid_tickets', to=settings.AUTH_USER_MODEL, verbose_name='Cobrado por')),
            ],
            options={
                'verbose_name': 'Ticket',
                'verbose_name_plural': 'Tickets',
                'db_table': 'tickets',
                'ordering': ['-created_at'],
            },
        ),
    ]
