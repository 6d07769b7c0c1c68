# settings.py
import os
from pathlib import Path
import environ
from datetime import timedelta

# --- Core Paths and Environment Setup ---
BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    GITMESH_STORE_PRIVATE_KEYS=(bool, True),
    USER_KEY_SIZE=(int, 2048),
    Q_SYNC=(bool, False),
)

environ.Env.read_env(
    env_file=os.path.join(BASE_DIR, '.env')
)

# --- Security and Core Django Settings ---
SECRET_KEY = env('SECRET_KEY')
DEBUG = env('DEBUG')
ALLOWED_HOSTS = env.list('ALLOWED_HOSTS', default=['localhost', '127.0.0.1'])


# --- Application Definition ---
INSTALLED_APPS = [
    # ASGI runserver for the websocket relay
    'daphne',

    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # DRF
    'rest_framework',

    # Channels
    'channels',

    # django-q
    'django_q',

    # drf-yasg
    'drf_yasg',

    # CORS
    'corsheaders',

    # Your custom apps
    'apps.users',
    'apps.repositories',
    'apps.network',
    'apps.activities',
    # Development tools
    'django_extensions',
]

# --- Middleware Configuration ---
MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

# --- URL, Template, WSGI and ASGI Configuration ---
ROOT_URLCONF = 'GitMesh.urls'
WSGI_APPLICATION = 'GitMesh.wsgi.application'
ASGI_APPLICATION = 'GitMesh.asgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

# --- Database Configuration ---
DATABASES = {
    'default': env.db('DATABASE_URL', default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}

# --- Authentication and User Model ---
AUTH_USER_MODEL = 'users.User'

AUTHENTICATION_BACKENDS = [
    'django.contrib.auth.backends.ModelBackend',
]

# Registration enforces its own length rules; these apply to admin-created users.
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
]

# --- Internationalization ---
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# --- Static Files ---
STATIC_URL = 'static/'

# --- Default Primary Key ---
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# -----------------------------------------------------------------------------
# GITMESH SETTINGS
# -----------------------------------------------------------------------------

# Root directory that holds one placeholder directory per repository.
REPOSITORY_STORAGE_ROOT = Path(env('REPOSITORY_STORAGE_ROOT', default=str(BASE_DIR / 'data')))

# Peers seen within this window count as active.
PEER_ACTIVE_WINDOW = timedelta(minutes=10)

# RSA modulus size for the key pair generated at registration.
USER_KEY_SIZE = env('USER_KEY_SIZE')

# When False only the public half of the generated key pair is persisted.
GITMESH_STORE_PRIVATE_KEYS = env('GITMESH_STORE_PRIVATE_KEYS')


# -----------------------------------------------------------------------------
# THIRD-PARTY LIBRARIES CONFIGURATION
# -----------------------------------------------------------------------------

# --- django-cors-headers Settings ---
CORS_ALLOWED_ORIGINS = env.list('CORS_ALLOWED_ORIGINS', default=[
    'http://localhost:3000',
    'http://localhost:5000',
])
CORS_ALLOW_CREDENTIALS = True

# --- djangorestframework (DRF) Settings ---
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'apps.users.authentication.SessionCookieAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticatedOrReadOnly',
    ],
}

# --- django-channels Settings ---
# The relay keeps its own in-process connection registry, so no channel layer is needed.
CHANNEL_LAYERS = {}

# --- django-q Settings ---
Q_CLUSTER = {
    'name': 'gitmesh',
    'workers': 2,
    'timeout': 60,
    'retry': 120,
    'orm': 'default',
    'sync': env('Q_SYNC'),
}

# -----------------------------------------------------------------------------
# LOGGING CONFIGURATION
# -----------------------------------------------------------------------------

LOG_DIR = BASE_DIR / 'logs'
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'level': 'DEBUG' if DEBUG else 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
        'file': {
            'level': 'DEBUG' if DEBUG else 'INFO',
            'class': 'logging.handlers.TimedRotatingFileHandler',
            'filename': LOG_DIR / 'gitmesh.log',
            'when': 'D',  # rotate at midnight
            'interval': 1,
            'backupCount': 30,
            'formatter': 'verbose',
            'encoding': 'utf-8',
        },
    },
    'root': {
        'handlers': ['console', 'file'],
        'level': 'DEBUG' if DEBUG else 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
            'propagate': False,
        },
        'django.db.backends': {
            'handlers': ['console'],
            'level': 'DEBUG' if DEBUG else 'WARNING',
            'propagate': False,
        },
        # Your app's logger
        'apps': {
            'handlers': ['console', 'file'],
            'level': 'DEBUG',
            'propagate': False,
        },
    },
}
