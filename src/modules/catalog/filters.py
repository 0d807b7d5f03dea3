import django_filters

from modules.catalog.models import Product


class ProductFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(field_name="title", lookup_expr="icontains")
    category_id = django_filters.UUIDFilter(field_name="category_id", lookup_expr="exact")

    class Meta:
        model = Product
        fields = ["search", "category_id"]
