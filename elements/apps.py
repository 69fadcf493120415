from django.apps import AppConfig


class ElementsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'elements'
    verbose_name = "Elements"
