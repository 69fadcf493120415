"""
Deprecation notices for the elements app.

Notices go through a ``Deprecation`` sink so callers (and tests) can pass
their own. The default sink follows the ``ELEMENTS_DEPRECATION_BEHAVIOR``
setting.
"""
import logging
import warnings

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

BEHAVIORS = ("log", "warn", "raise", "silence")


class ElementsDeprecationWarning(DeprecationWarning):
    pass


class Deprecation:
    def __init__(self, behavior="log", logger=logger):
        if behavior not in BEHAVIORS:
            raise ImproperlyConfigured(
                f"Unknown deprecation behavior '{behavior}'. "
                f"Choose one of: {', '.join(BEHAVIORS)}"
            )
        self.behavior = behavior
        self.logger = logger

    def warn(self, message):
        message = message.strip()
        if self.behavior == "log":
            self.logger.warning(f"DEPRECATION WARNING: {message}")
        elif self.behavior == "warn":
            warnings.warn(message, ElementsDeprecationWarning, stacklevel=3)
        elif self.behavior == "raise":
            raise ElementsDeprecationWarning(message)


def get_deprecation():
    """Return a sink configured from settings."""
    return Deprecation(getattr(settings, "ELEMENTS_DEPRECATION_BEHAVIOR", "log"))
