"""Read side of the public pages: the filtered, grouped menu."""
from django.db.models import Prefetch, Q

from inventory.models import Category, Product

# query parameter -> product flag
MENU_TAGS = {
    'vegetarian': 'is_vegetarian',
    'vegan': 'is_vegan',
    'gluten_free': 'is_gluten_free',
    'spicy': 'is_spicy',
    'popular': 'is_popular',
}


def filter_menu_items(products, search='', tags=(), category_id=None):
    """Narrow an available-products queryset by text, tag flags (all must hold) and category"""
    term = (search or '').strip()
    if term:
        products = products.filter(Q(name__icontains=term) | Q(description__icontains=term))
    for tag in tags:
        products = products.filter(**{MENU_TAGS[tag]: True})
    if category_id:
        products = products.filter(category_id=category_id)
    return products


def menu_groups(search='', tags=(), category_id=None):
    """
    Active categories by name, each with its matching available products by name.

    Categories left without products after filtering are dropped.
    """
    products = filter_menu_items(
        Product.objects.filter(is_available=True).order_by('name'),
        search=search, tags=tags, category_id=category_id,
    )
    categories = (
        Category.objects.filter(is_active=True)
        .order_by('name')
        .prefetch_related(Prefetch('products', queryset=products, to_attr='menu_items'))
    )
    if category_id:
        categories = categories.filter(id=category_id)
    return [category for category in categories if category.menu_items]
