from decimal import Decimal

from rest_framework import serializers
from .models import Category, Product


class CategorySerializer(serializers.ModelSerializer):
    products_count = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = [
            'id', 'name', 'description', 'is_active', 'image_url', 'products_count',
            'created_at', 'updated_at', 'created_by', 'updated_by'
        ]
        read_only_fields = ['created_at', 'updated_at', 'created_by', 'updated_by', 'products_count']
        extra_kwargs = {
            # case-insensitive uniqueness is checked by the editor and reported as a conflict
            'name': {'validators': []},
        }

    def get_products_count(self, obj):
        # list views annotate the count; single records fall back to a query
        count = getattr(obj, 'products_count', None)
        return obj.products.count() if count is None else count


class ProductSerializer(serializers.ModelSerializer):
    category_id = serializers.UUIDField(read_only=True, allow_null=True)
    category = serializers.CharField(source='category_display', read_only=True)
    availability = serializers.CharField(source='availability_label', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description', 'price', 'category', 'category_id', 'image_url',
            'is_available', 'availability', 'is_vegetarian', 'is_vegan', 'is_gluten_free',
            'is_dairy_free', 'is_spicy', 'is_new', 'is_popular',
            'created_at', 'updated_at', 'created_by', 'updated_by'
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.ModelSerializer):
    """Product draft; the category is given by name and resolved by the editor"""
    category = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=120)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))

    class Meta:
        model = Product
        fields = [
            'name', 'description', 'price', 'category', 'image_url', 'is_available',
            'is_vegetarian', 'is_vegan', 'is_gluten_free', 'is_dairy_free',
            'is_spicy', 'is_new', 'is_popular'
        ]
        extra_kwargs = {
            'description': {'required': False, 'allow_blank': True},
            'image_url': {'required': False, 'allow_blank': True, 'allow_null': True},
        }
