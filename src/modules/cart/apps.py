from django.apps import AppConfig


class CartConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.cart"
    label = "cart"

    def ready(self) -> None:
        from modules.cart.exceptions import (
            CartItemLimitExceeded,
            CartItemNotFound,
            InsufficientStock,
        )
        from modules.core.errors import (
            InsufficientStockError,
            NotFoundError,
            ValidationError,
            error_classifier,
        )

        error_classifier.register(CartItemNotFound, NotFoundError)
        error_classifier.register(InsufficientStock, InsufficientStockError)
        error_classifier.register(CartItemLimitExceeded, ValidationError)
