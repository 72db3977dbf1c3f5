"""Settings used by the pytest suite.

In-memory SQLite, the locmem email backend (``django.core.mail.outbox``),
eager Celery and plain propagating loggers so ``caplog`` sees every record.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "loggers": {
        "apps": {"level": "DEBUG", "propagate": True},
        "shared": {"level": "DEBUG", "propagate": True},
    },
}
