from pathlib import Path
import os
from dotenv import load_dotenv

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# === env ===
load_dotenv(BASE_DIR / ".env")
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
DEBUG = os.getenv("DEBUG", "True") == "True"
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "127.0.0.1,localhost,testserver").split(",")


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'users',
    'siteconfig',
    'tickets',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'siteconfig.context_processors.site_config',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'


# Database
# https://docs.djangoproject.com/en/5.2/ref/settings/#databases

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}


# Password validation
# https://docs.djangoproject.com/en/5.2/ref/settings/#auth-password-validators

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]


# Internationalization
# https://docs.djangoproject.com/en/5.2/topics/i18n/

MEDIA_URL = '/media/'
MEDIA_ROOT = BASE_DIR / 'media'

LANGUAGE_CODE = 'es-ar'
TIME_ZONE = 'America/Argentina/Buenos_Aires'
USE_I18N = True
USE_TZ = True

# --- Datos del sitio para plantillas y el QR ---
SITE_NAME = os.getenv('SITE_NAME', 'Buffa-Bikes')
# Base de la URL de verificación codificada en el QR: <SITE_URL>/verify/<id>
SITE_URL = os.getenv('SITE_URL', 'http://localhost:8000')

# --- Tickets ---
TICKETS_PER_PAGE = int(os.getenv('TICKETS_PER_PAGE', '10'))
# Fuente TTF opcional para el ticket renderizado (si no existe, se usa la de Pillow)
TICKET_FONT_PATH = os.getenv('TICKET_FONT_PATH', str(BASE_DIR / 'fonts' / 'DejaVuSans.ttf'))
TICKET_FONT_BOLD_PATH = os.getenv('TICKET_FONT_BOLD_PATH', str(BASE_DIR / 'fonts' / 'DejaVuSans-Bold.ttf'))

# --- Logo ---
LOGO_UPLOAD_DIR = 'logos'
LOGO_MAX_UPLOAD_SIZE = 2 * 1024 * 1024  # 2 MB

# --- Proveedor de identidad (webhook de usuarios) ---
IDENTITY_WEBHOOK_SECRET = os.getenv('IDENTITY_WEBHOOK_SECRET', '')

# --- Logging ---
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
    },
    'handlers': {'console': {'class': 'logging.StreamHandler', 'formatter': 'simple'}},
    'loggers': {
        'tickets': {'handlers': ['console'], 'level': 'INFO'},
        'siteconfig': {'handlers': ['console'], 'level': 'INFO'},
        'users': {'handlers': ['console'], 'level': 'INFO'},
    },
}


# Static files (CSS, JavaScript, Images)
# https://docs.djangoproject.com/en/5.2/howto/static-files/

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'  # collectstatic en producción
# Default primary key field type
# https://docs.djangoproject.com/en/5.2/ref/settings/#default-auto-field

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# usuario propio (espejo del proveedor de identidad)
AUTH_USER_MODEL = 'users.User'

# === Redirecciones de login/logout ===
LOGIN_REDIRECT_URL = 'tickets:generate'
LOGOUT_REDIRECT_URL = 'users:login'
LOGIN_URL = 'users:login'
