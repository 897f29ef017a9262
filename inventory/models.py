from django.core.validators import MinValueValidator
from django.db import models
from django.db.models.functions import Lower
from authentication.models import AuditedModel
import uuid

NO_CATEGORY_LABEL = 'No category'

TAG_FIELDS = (
    'is_vegetarian', 'is_vegan', 'is_gluten_free', 'is_dairy_free',
    'is_spicy', 'is_new', 'is_popular',
)


class Category(AuditedModel):
    """Menu category; retired by switching is_active off, never removed while products use it"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=120)
    description = models.TextField(blank=True, default='')
    image_url = models.CharField(max_length=500, blank=True, null=True)
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return str(self.name)

    class Meta:
        db_table = 'categories'
        ordering = ['-created_at']
        verbose_name_plural = "Categories"
        constraints = [
            models.UniqueConstraint(Lower('name'), name='unique_category_name_ci'),
        ]


class Product(AuditedModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    category = models.ForeignKey(
        Category, on_delete=models.PROTECT, related_name="products", null=True, blank=True
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    image_url = models.CharField(max_length=500, blank=True, null=True)
    is_available = models.BooleanField(default=True)

    # Dietary and promotional tags, independent of each other
    is_vegetarian = models.BooleanField(default=False)
    is_vegan = models.BooleanField(default=False)
    is_gluten_free = models.BooleanField(default=False)
    is_dairy_free = models.BooleanField(default=False)
    is_spicy = models.BooleanField(default=False)
    is_new = models.BooleanField(default=False)
    is_popular = models.BooleanField(default=False)

    def __str__(self):
        return self.name

    @property
    def category_display(self):
        return self.category.name if self.category_id else NO_CATEGORY_LABEL

    @property
    def availability_label(self):
        return 'In stock' if self.is_available else 'Out of stock'

    class Meta:
        db_table = 'products'
        ordering = ['name']
