from django.apps import AppConfig


class EquationsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'equations'
    verbose_name = 'Brans-Dicke field equations'
