from django.apps import AppConfig


class DjangoActiveWindowConfig(AppConfig):
    name = "django_activewindow"
    verbose_name = "Active Window"
    default_auto_field = "django.db.models.BigAutoField"
