"""Minimal Django settings for testing channels-xmlrpc."""

SECRET_KEY = "test-secret-key-for-channels-xmlrpc-testing"

INSTALLED_APPS = [
    "channels",
    "channels_xmlrpc",
]

# Database configuration for testing
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Channel layers configuration for testing
CHANNEL_LAYERS = {"default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}}

ASGI_APPLICATION = None  # Set per test if needed

CHANNELS_XMLRPC = {
    "NAMING_CONVENTION": "flat",
}

# Logging configuration for tests
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
        },
    },
    "loggers": {
        "channels_xmlrpc": {
            "handlers": ["console"],
            "level": "DEBUG",
        },
    },
}
