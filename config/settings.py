"""
Django settings for cutshopmgr.

Uses django-environ for 12-factor configuration via .env file.
"""

from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, ["localhost", "127.0.0.1"]),
    LOG_LEVEL=(str, "INFO"),
    MACHINE_THRESHOLD_DEFAULT=(float, 0.35),
)

# Read .env file if it exists (dev convenience)
environ.Env.read_env(BASE_DIR / ".env")

SECRET_KEY = env("SECRET_KEY", default="django-insecure-cutshopmgr-dev-only")
DEBUG = env("DEBUG")
ALLOWED_HOSTS = env("ALLOWED_HOSTS")

INSTALLED_APPS = [
    # django-unfold must come before django.contrib.admin
    "unfold",
    "unfold.contrib.filters",
    "unfold.contrib.forms",
    # Django built-ins
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Local apps
    "accounts",
    "core",
    "customers",
    "catalog",
    "quotes",
    "payments",
    "production",
    "shipments",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# Database: PostgreSQL in production (order numbering relies on SELECT FOR UPDATE).
# SQLite default is for local development only.
DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}")
}

# Custom User model (must be set before first migration)
AUTH_USER_MODEL = "accounts.User"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Internationalisation: Hungarian locale, amounts in whole forint
LANGUAGE_CODE = "hu"
TIME_ZONE = "Europe/Budapest"
USE_I18N = True
USE_TZ = True

# Static files
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Login / logout
LOGIN_URL = "/accounts/login/"
LOGIN_REDIRECT_URL = "/admin/"
LOGOUT_REDIRECT_URL = "/accounts/login/"

# Fallback for the machine suggestion threshold (m² per panel) when the
# "machine_threshold" Setting is missing or unreadable.
MACHINE_THRESHOLD_DEFAULT = env("MACHINE_THRESHOLD_DEFAULT")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": env("LOG_LEVEL")},
}

# django-unfold Admin customisation
UNFOLD = {
    "SITE_TITLE": "Cut Shop Manager",
    "SITE_HEADER": "Lapszabászat ügyviteli rendszer",
    "SITE_SYMBOL": "carpenter",
    "SHOW_HISTORY": True,
    "SHOW_VIEW_ON_SITE": False,
    "SIDEBAR": {
        "show_search": True,
        "navigation": [
            {
                "title": "Értékesítés",
                "items": [
                    {"title": "Ajánlatok és megrendelések", "link": "/admin/quotes/quote/"},
                    {"title": "Ügyfelek", "link": "/admin/customers/customer/"},
                    {"title": "Fizetések", "link": "/admin/payments/quotepayment/"},
                ],
            },
            {
                "title": "Törzsadatok",
                "items": [
                    {"title": "Táblás anyagok", "link": "/admin/catalog/material/"},
                    {"title": "Szálas anyagok", "link": "/admin/catalog/linearmaterial/"},
                    {"title": "Kiegészítők", "link": "/admin/catalog/accessory/"},
                    {"title": "Díjtípusok", "link": "/admin/catalog/feetype/"},
                    {"title": "ÁFA kulcsok", "link": "/admin/catalog/vatrate/"},
                ],
            },
            {
                "title": "Gyártás és raktár",
                "items": [
                    {"title": "Gépek", "link": "/admin/production/machine/"},
                    {"title": "Szállítmányok", "link": "/admin/shipments/shipment/"},
                ],
            },
            {
                "title": "Rendszer",
                "items": [
                    {"title": "Felhasználók", "link": "/admin/accounts/user/"},
                    {"title": "Beállítások", "link": "/admin/core/setting/"},
                ],
            },
        ],
    },
}

if DEBUG:
    INSTALLED_APPS += ["debug_toolbar"]
    MIDDLEWARE.insert(0, "debug_toolbar.middleware.DebugToolbarMiddleware")
    INTERNAL_IPS = ["127.0.0.1"]
