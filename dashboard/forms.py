from django import forms
from django.forms.models import model_to_dict

from inventory.models import Category, TAG_FIELDS


def initial_from(instance, fields):
    """Form initial data for editing an existing record"""
    return model_to_dict(instance, fields=fields)


class CategoryForm(forms.Form):
    name = forms.CharField(
        max_length=120,
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "Category name"})
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 3})
    )
    is_active = forms.BooleanField(
        required=False, initial=True,
        widget=forms.CheckboxInput(attrs={"class": "form-check-input"})
    )
    image = forms.FileField(
        required=False,
        widget=forms.ClearableFileInput(attrs={"class": "form-control", "accept": "image/*"})
    )

    FIELDS = ['name', 'description', 'is_active']


class ProductForm(forms.Form):
    name = forms.CharField(
        max_length=255,
        widget=forms.TextInput(attrs={"class": "form-control"})
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 3})
    )
    price = forms.DecimalField(
        max_digits=10, decimal_places=2,
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01"})
    )
    # free text; an unknown name creates the category on save
    category = forms.CharField(
        required=False, max_length=120,
        widget=forms.TextInput(attrs={"class": "form-control", "list": "category-names"})
    )
    image_url = forms.CharField(
        required=False, max_length=500,
        widget=forms.URLInput(attrs={"class": "form-control"})
    )
    is_available = forms.BooleanField(
        required=False, initial=True,
        widget=forms.CheckboxInput(attrs={"class": "form-check-input"})
    )
    is_vegetarian = forms.BooleanField(required=False, widget=forms.CheckboxInput(attrs={"class": "form-check-input"}))
    is_vegan = forms.BooleanField(required=False, widget=forms.CheckboxInput(attrs={"class": "form-check-input"}))
    is_gluten_free = forms.BooleanField(required=False, widget=forms.CheckboxInput(attrs={"class": "form-check-input"}))
    is_dairy_free = forms.BooleanField(required=False, widget=forms.CheckboxInput(attrs={"class": "form-check-input"}))
    is_spicy = forms.BooleanField(required=False, widget=forms.CheckboxInput(attrs={"class": "form-check-input"}))
    is_new = forms.BooleanField(required=False, widget=forms.CheckboxInput(attrs={"class": "form-check-input"}))
    is_popular = forms.BooleanField(required=False, widget=forms.CheckboxInput(attrs={"class": "form-check-input"}))

    FIELDS = ['name', 'description', 'price', 'image_url', 'is_available', *TAG_FIELDS]

    @classmethod
    def initial_for(cls, product):
        initial = initial_from(product, cls.FIELDS)
        initial['category'] = product.category.name if product.category else ''
        return initial

    def tag_fields(self):
        return [self[tag] for tag in TAG_FIELDS]


class AddCategoryForm(forms.Form):
    name = forms.CharField(
        max_length=120,
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "New category"})
    )


class EventForm(forms.Form):
    title = forms.CharField(max_length=255, widget=forms.TextInput(attrs={"class": "form-control"}))
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 3})
    )
    date = forms.DateField(widget=forms.DateInput(attrs={"class": "form-control", "type": "date"}))
    time = forms.TimeField(widget=forms.TimeInput(attrs={"class": "form-control", "type": "time"}))
    location = forms.CharField(max_length=255, widget=forms.TextInput(attrs={"class": "form-control"}))
    capacity = forms.IntegerField(
        required=False, min_value=0,
        widget=forms.NumberInput(attrs={"class": "form-control"})
    )
    contact_phone = forms.CharField(
        required=False, max_length=30,
        widget=forms.TextInput(attrs={"class": "form-control"})
    )
    contact_email = forms.EmailField(
        required=False,
        widget=forms.EmailInput(attrs={"class": "form-control"})
    )
    is_featured = forms.BooleanField(required=False, widget=forms.CheckboxInput(attrs={"class": "form-check-input"}))
    is_active = forms.BooleanField(
        required=False, initial=True,
        widget=forms.CheckboxInput(attrs={"class": "form-check-input"})
    )
    image = forms.FileField(
        required=False,
        widget=forms.ClearableFileInput(attrs={"class": "form-control", "accept": "image/*"})
    )

    FIELDS = [
        'title', 'description', 'date', 'time', 'location', 'capacity',
        'contact_phone', 'contact_email', 'is_featured', 'is_active',
    ]

    def clean_contact_email(self):
        return self.cleaned_data['contact_email'] or None

    def clean_contact_phone(self):
        return self.cleaned_data['contact_phone'] or None


class HomeSectionForm(forms.Form):
    title = forms.CharField(max_length=255, widget=forms.TextInput(attrs={"class": "form-control"}))
    description = forms.CharField(widget=forms.Textarea(attrs={"class": "form-control", "rows": 3}))
    category = forms.ModelChoiceField(
        queryset=Category.objects.order_by('name'),
        required=False,
        empty_label='No category link',
        widget=forms.Select(attrs={"class": "form-control"})
    )
    link_url = forms.CharField(
        required=False, max_length=500,
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "/events/"})
    )
    link_text = forms.CharField(
        required=False, max_length=100,
        widget=forms.TextInput(attrs={"class": "form-control"})
    )
    is_active = forms.BooleanField(
        required=False, initial=True,
        widget=forms.CheckboxInput(attrs={"class": "form-check-input"})
    )
    image = forms.FileField(
        required=False,
        widget=forms.ClearableFileInput(attrs={"class": "form-control", "accept": "image/*"})
    )

    FIELDS = ['title', 'description', 'category', 'link_url', 'link_text', 'is_active']

    def clean(self):
        cleaned_data = super().clean()
        link_url = (cleaned_data.get("link_url") or '').strip()
        link_text = (cleaned_data.get("link_text") or '').strip()
        if bool(link_url) != bool(link_text):
            raise forms.ValidationError("Provide both the link and its text, or neither.")
        cleaned_data["link_url"] = link_url or None
        cleaned_data["link_text"] = link_text or None
        return cleaned_data
