from django.contrib import admin

from src.catalog.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "is_deleted", "created_at")
    list_filter = ("is_deleted",)
    search_fields = ("name",)

    def get_queryset(self, request):
        # soft-deleted rows stay visible to staff
        return Product.all_objects.all()
