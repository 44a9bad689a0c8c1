from django.urls import path
from django.contrib.auth import views as auth_views
from . import views

app_name = 'users'

urlpatterns = [
    # sesión del personal
    path('login/', auth_views.LoginView.as_view(template_name='users/login.html'), name='login'),
    path('logout/', auth_views.LogoutView.as_view(), name='logout'),

    # sincronización desde el proveedor de identidad
    path('webhooks/identity/', views.identity_webhook, name='identity_webhook'),
]
