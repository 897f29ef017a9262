"""
Editing rules for menu categories and products.

Editors are plain objects built once per request; the category editor gets
its image bucket injected so tests and other deployments can swap it.
Every failure is raised as one of the API exceptions in
``authentication.exceptions`` (or DRF's ``ValidationError``) and is turned
into a JSON error by the API or into a flash message by the dashboard.
"""
import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.db.models import Q
from rest_framework.exceptions import ValidationError

from authentication.exceptions import ConflictError, backend_errors
from content.uploads import category_images
from .models import Category, Product, TAG_FIELDS

logger = logging.getLogger(__name__)


def clean_name(value, field='name'):
    name = (value or '').strip()
    if not name:
        raise ValidationError({field: ['This field is required.']})
    return name


def clean_price(value):
    try:
        price = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError({'price': ['Price must be a number.']})
    if not price.is_finite() or price <= 0:
        raise ValidationError({'price': ['Price must be greater than zero.']})
    return price.quantize(Decimal('0.01'))


def filter_categories(categories, search=''):
    """Substring search on name/description, then active first and alphabetical"""
    term = (search or '').strip().lower()
    if term:
        categories = [
            c for c in categories
            if term in c.name.lower() or term in (c.description or '').lower()
        ]
    return sorted(categories, key=lambda c: (not c.is_active, c.name.lower()))


class CategoryEditor:
    def __init__(self, images=None):
        self.images = images or category_images()

    def list(self, search=''):
        with backend_errors('listing categories'):
            categories = list(Category.objects.order_by('-created_at'))
        return filter_categories(categories, search)

    def ensure_unique_name(self, name, exclude_id=None):
        queryset = Category.objects.filter(name__iexact=name)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        if queryset.exists():
            raise ConflictError('A category with this name already exists.')

    def create(self, data, image=None, user=None):
        name = clean_name(data.get('name'))
        self.ensure_unique_name(name)

        category = Category(
            name=name,
            description=data.get('description') or '',
            is_active=data.get('is_active', True),
            image_url=data.get('image_url') or None,
            created_by=user,
            updated_by=user,
        )
        if image is not None:
            category.image_url = self.images.upload(image, owner_id=category.id)

        try:
            with backend_errors('creating category'):
                category.save()
        except Exception:
            if image is not None:
                self.images.delete(category.image_url)
            raise

        logger.info(f"Category created: {category.name} ({category.id})")
        return category

    def update(self, category, data, image=None, user=None):
        """Merge a partial patch into ``category``"""
        if 'name' in data:
            name = clean_name(data.get('name'))
            self.ensure_unique_name(name, exclude_id=category.id)
            category.name = name
        if 'description' in data:
            category.description = data.get('description') or ''
        if 'is_active' in data:
            category.is_active = data['is_active']

        previous_image = category.image_url
        if image is not None:
            category.image_url = self.images.upload(image, owner_id=category.id)
        elif 'image_url' in data:
            category.image_url = data.get('image_url') or None

        category.updated_by = user
        with backend_errors('updating category'):
            category.save()

        if previous_image and previous_image != category.image_url:
            self.images.delete(previous_image)
        logger.info(f"Category updated: {category.name} ({category.id})")
        return category

    def toggle_status(self, category, user=None):
        category.is_active = not category.is_active
        category.updated_by = user
        with backend_errors('toggling category status'):
            category.save(update_fields=['is_active', 'updated_at', 'updated_by'])
        logger.info(f"Category {category.id} is_active={category.is_active}")
        return category

    def delete(self, category, user=None):
        """Soft delete; refused while any product still points at the category"""
        if category.products.exists():
            raise ConflictError('You cannot delete a category that still has products.')

        category.is_active = False
        category.updated_by = user
        with backend_errors('deleting category'):
            category.save(update_fields=['is_active', 'updated_at', 'updated_by'])
        logger.info(f"Category soft-deleted: {category.name} ({category.id})")
        return category


class ProductEditor:
    def __init__(self, categories=None):
        self.categories = categories or CategoryEditor()

    def list(self, search=''):
        queryset = Product.objects.select_related('category').order_by('name')
        term = (search or '').strip()
        if term:
            queryset = queryset.filter(
                Q(name__icontains=term) |
                Q(description__icontains=term) |
                Q(category__name__icontains=term)
            )
        with backend_errors('listing products'):
            return list(queryset)

    def resolve_category(self, name, user=None):
        """Find a category by its name, creating it when no such category exists yet"""
        name = (name or '').strip()
        if not name:
            return None
        category = (
            Category.objects.filter(name=name).first()
            or Category.objects.filter(name__iexact=name).first()
        )
        if category is None:
            category = self.categories.create({'name': name, 'is_active': True}, user=user)
        return category

    def add_category(self, name, user=None):
        return self.categories.create({'name': clean_name(name), 'is_active': True}, user=user)

    def _apply(self, product, data, user):
        if 'name' in data:
            product.name = clean_name(data.get('name'))
        if 'price' in data:
            product.price = clean_price(data.get('price'))
        if 'description' in data:
            product.description = data.get('description') or ''
        if 'image_url' in data:
            product.image_url = data.get('image_url') or None
        if 'is_available' in data:
            product.is_available = data['is_available']
        for tag in TAG_FIELDS:
            if tag in data:
                setattr(product, tag, bool(data[tag]))
        if 'category' in data:
            product.category = self.resolve_category(data.get('category'), user=user)
        product.updated_by = user

    def create(self, data, user=None):
        clean_name(data.get('name'))
        clean_price(data.get('price'))

        product = Product(created_by=user)
        with backend_errors('creating product'), transaction.atomic():
            self._apply(product, data, user)
            product.save()
        logger.info(f"Product created: {product.name} ({product.id})")
        return product

    def update(self, product, data, user=None):
        with backend_errors('updating product'), transaction.atomic():
            self._apply(product, data, user)
            product.save()
        logger.info(f"Product updated: {product.name} ({product.id})")
        return product

    def delete(self, product):
        product_id = product.id
        with backend_errors('deleting product'):
            product.delete()
        logger.info(f"Product deleted: {product_id}")
