from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.catalog"
    label = "catalog"

    def ready(self) -> None:
        from modules.catalog.exceptions import (
            CategoryDoesNotExist,
            ProductNotFound,
        )
        from modules.core.errors import ForeignKeyError, NotFoundError, error_classifier

        error_classifier.register(ProductNotFound, NotFoundError)
        error_classifier.register(CategoryDoesNotExist, ForeignKeyError, label="Bad Request")
