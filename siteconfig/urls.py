from django.urls import path
from . import views

app_name = 'siteconfig'

urlpatterns = [
    path('', views.settings_view, name='settings'),
    path('preview.png', views.preview_png, name='preview'),
]
