from django.core.validators import MinValueValidator
from django.db import models
from django.urls import reverse
from authentication.models import AuditedModel
from inventory.models import Category
import uuid


class Event(AuditedModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    date = models.DateField()
    time = models.TimeField()
    location = models.CharField(max_length=255)
    image = models.CharField(max_length=500, blank=True, null=True)
    capacity = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(0)])
    contact_phone = models.CharField(max_length=30, blank=True, null=True)
    contact_email = models.EmailField(blank=True, null=True)
    is_featured = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return self.title

    class Meta:
        db_table = 'events'
        ordering = ['date', 'time']


class HomeSection(AuditedModel):
    """Promotional block on the home page, rendered in display_order"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField()
    image_url = models.CharField(max_length=500, blank=True, null=True)
    link_url = models.CharField(max_length=500, blank=True, null=True)
    link_text = models.CharField(max_length=100, blank=True, null=True)

    # Deep link into the menu filtered by this category
    category = models.ForeignKey(
        Category, on_delete=models.SET_NULL, null=True, blank=True, related_name='home_sections'
    )
    is_active = models.BooleanField(default=True)
    display_order = models.PositiveIntegerField(default=0)

    def __str__(self):
        return self.title

    @property
    def menu_link(self):
        if self.category_id:
            return f"{reverse('menu')}?category={self.category_id}"
        return self.link_url

    class Meta:
        db_table = 'home_sections'
        ordering = ['display_order', 'created_at']
