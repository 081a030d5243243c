from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "src.catalog"
    label = "catalog"

    def ready(self):
        import src.catalog.signals  # noqa: F401
