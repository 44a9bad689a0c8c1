from django.urls import path
from . import views

app_name = 'tickets'

urlpatterns = [
    path('', views.generate, name='generate'),
    path('tickets/', views.ticket_list, name='list'),
    path('tickets/<str:pk>/pdf/', views.ticket_pdf, name='ticket_pdf'),
    path('tickets/<str:pk>/image.png', views.ticket_image, name='ticket_image'),

    # escáner (ingreso manual) y destino del QR
    path('tickets/scan/', views.scan_ticket, name='scan'),
    path('verify/<str:ticket_id>', views.verify_ticket, name='verify'),
]
