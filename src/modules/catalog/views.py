"""Catalog API views.

Expose the catalog services via HTTP using DRF ViewSets.  Views only
translate between the wire format and DTOs; domain exceptions propagate
to ``modules.core.exceptions.api_exception_handler``.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.cart.repositories.django_repository import CartDjangoRepository
from modules.catalog.deletion import ProductDeletionService
from modules.catalog.dtos import (
    CreateCategoryDTO,
    CreateProductDTO,
    ProductQueryDTO,
    UpdateProductDTO,
)
from modules.catalog.queries import ProductQueryService
from modules.catalog.repositories.django_repository import (
    CategoryDjangoRepository,
    ProductDjangoRepository,
)
from modules.catalog.serializers import (
    CategoryInputSerializer,
    CategorySerializer,
    ProductDetailSerializer,
    ProductIdSerializer,
    ProductInputSerializer,
    ProductQuerySerializer,
    ProductSerializer,
)
from modules.catalog.services import CategoryService, ProductService
from modules.core.responses import confirmation, success

# Wire (camelCase) -> DTO (snake_case) field names.
_PRODUCT_FIELDS = {
    "title": "title",
    "description": "description",
    "price": "price",
    "stock": "stock",
    "categoryId": "category_id",
}


def _to_dto_kwargs(validated: dict) -> dict:
    return {_PRODUCT_FIELDS[key]: value for key, value in validated.items()}


def _product_id(pk: str | None) -> str:
    path = ProductIdSerializer(data={"id": pk})
    path.is_valid(raise_exception=True)
    return str(path.validated_data["id"])


class ProductViewSet(GenericViewSet):
    """ViewSet for Product operations.

    Wires the catalog services to Django ORM repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        products = ProductDjangoRepository()
        categories = CategoryDjangoRepository()
        self._service = ProductService(
            product_repository=products, category_repository=categories
        )
        self._queries = ProductQueryService(repository=products)
        self._deletion = ProductDeletionService(
            product_repository=products, cart_repository=CartDjangoRepository()
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/products?search=&categoryId=&page=&limit="""
        params = ProductQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data

        page = self._queries.list_products(
            ProductQueryDTO(
                search=data.get("search"),
                category_id=data.get("categoryId"),
                page=data["page"],
                limit=data["limit"],
            )
        )
        return success(
            {
                "items": ProductSerializer(page.items, many=True).data,
                "pagination": page.pagination.as_camel_dict(),
            }
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        product = self._service.get_product(_product_id(pk))
        return success(ProductDetailSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/products"""
        body = ProductInputSerializer(data=request.data)
        body.is_valid(raise_exception=True)

        product = self._service.create_product(
            CreateProductDTO(**_to_dto_kwargs(body.validated_data))
        )
        return success(ProductSerializer(product).data, status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/products/{pk}: only supplied fields change."""
        body = ProductInputSerializer(data=request.data, partial=True)
        body.is_valid(raise_exception=True)

        product = self._service.update_product(
            _product_id(pk), UpdateProductDTO(**_to_dto_kwargs(body.validated_data))
        )
        return success(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/products/{pk}: removes cart lines, then the product."""
        self._deletion.delete_product(_product_id(pk))
        return confirmation("Product deleted successfully")


class CategoryViewSet(GenericViewSet):
    """ViewSet for Category listing and creation."""

    serializer_class = CategorySerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CategoryService(repository=CategoryDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/categories"""
        categories = self._service.list_categories()
        return success(CategorySerializer(categories, many=True).data)

    def create(self, request: Request) -> Response:
        """POST /api/categories"""
        body = CategoryInputSerializer(data=request.data)
        body.is_valid(raise_exception=True)

        category = self._service.create_category(CreateCategoryDTO(**body.validated_data))
        return success(CategorySerializer(category).data, status.HTTP_201_CREATED)
