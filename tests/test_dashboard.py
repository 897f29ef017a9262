from decimal import Decimal

import pytest
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from content.models import Event, HomeSection
from content.services import HomeSectionEditor
from inventory.models import Category, Product

pytestmark = pytest.mark.django_db


def flashed(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


def test_overview_counts(admin_client):
    Category.objects.create(name='Coffee')
    Category.objects.create(name='Tea', is_active=False)

    response = admin_client.get(reverse('dashboard'))

    assert response.status_code == 200
    assert response.context['categories_count'] == 2
    assert response.context['active_categories_count'] == 1


def test_add_category(admin_client, admin_account):
    response = admin_client.post(reverse('add_category'), {'name': 'Coffee', 'is_active': 'on'})

    assert response.status_code == 302
    category = Category.objects.get(name='Coffee')
    assert category.created_by == admin_account


def test_duplicate_category_shows_an_error(admin_client):
    Category.objects.create(name='Coffee')

    response = admin_client.post(reverse('add_category'), {'name': 'coffee'})

    assert response.status_code == 200
    assert 'A category with this name already exists.' in flashed(response)
    assert Category.objects.count() == 1


def test_category_search(admin_client):
    Category.objects.create(name='Coffee')
    Category.objects.create(name='Bakery')

    response = admin_client.get(reverse('list_categories'), {'q': 'cof'})

    assert [c.name for c in response.context['categories']] == ['Coffee']


def test_delete_category_in_use_is_refused(admin_client):
    category = Category.objects.create(name='Coffee')
    Product.objects.create(name='Latte', price=Decimal('10'), category=category)

    response = admin_client.post(reverse('delete_category', args=[category.id]))

    assert response.url == reverse('list_categories')
    assert 'You cannot delete a category that still has products.' in flashed(response)
    assert Category.objects.get(id=category.id).is_active is True


def test_delete_needs_post(admin_client):
    category = Category.objects.create(name='Coffee')
    assert admin_client.get(reverse('delete_category', args=[category.id])).status_code == 405


def test_toggle_category(admin_client):
    category = Category.objects.create(name='Coffee')

    admin_client.post(reverse('toggle_category', args=[category.id]))

    assert Category.objects.get(id=category.id).is_active is False


def test_add_product_creates_missing_category(admin_client):
    response = admin_client.post(reverse('add_product'), {
        'name': 'Cortado',
        'price': '11.00',
        'category': 'Espresso Specials',
        'is_available': 'on',
        'is_vegetarian': 'on',
    })

    assert response.status_code == 302
    product = Product.objects.get(name='Cortado')
    assert product.category.name == 'Espresso Specials'
    assert product.is_vegetarian is True
    assert product.is_vegan is False


def test_edit_product_form_is_prefilled(admin_client):
    category = Category.objects.create(name='Coffee')
    product = Product.objects.create(name='Latte', price=Decimal('10'), category=category)

    response = admin_client.get(reverse('edit_product', args=[product.id]))

    assert response.context['form'].initial['category'] == 'Coffee'
    assert response.context['form'].initial['name'] == 'Latte'


def test_inline_add_category_returns_to_the_form(admin_client):
    response = admin_client.post(
        reverse('add_product_category'), {'name': 'Tea', 'next': reverse('add_product')}
    )

    assert response.url == reverse('add_product')
    assert Category.objects.filter(name='Tea').exists()


def test_add_event_with_image(admin_client):
    image = SimpleUploadedFile('poster.jpg', b'\xff' * 256, content_type='image/jpeg')
    response = admin_client.post(reverse('add_event'), {
        'title': 'Jazz night',
        'date': '2026-11-20',
        'time': '20:00',
        'location': 'Terrace',
        'is_active': 'on',
        'image': image,
    })

    assert response.status_code == 302
    event = Event.objects.get()
    assert event.image.startswith('/media/event-images/events/')
    assert event.contact_email is None


def test_move_home_section(admin_client):
    editor = HomeSectionEditor()
    first = editor.create({'title': 'First', 'description': 'a'})
    second = editor.create({'title': 'Second', 'description': 'b'})

    response = admin_client.post(reverse('move_home_section', args=[second.id, 'up']))

    assert response.url == reverse('list_home_sections')
    assert list(HomeSection.objects.order_by('display_order').values_list('id', flat=True)) == [second.id, first.id]


def test_home_section_with_half_a_link_is_rejected(admin_client):
    response = admin_client.post(reverse('add_home_section'), {
        'title': 'Events', 'description': 'Join us', 'link_url': '/events/',
    })

    assert response.status_code == 200
    assert not HomeSection.objects.exists()
