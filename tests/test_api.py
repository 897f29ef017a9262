import uuid
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from inventory.models import Category, Product

from .conftest import PASSWORD

pytestmark = pytest.mark.django_db

CATEGORIES = '/api/admin/categories/'
PRODUCTS = '/api/admin/products/'


def test_anonymous_requests_get_401_with_error_body(api_client):
    response = api_client.get(CATEGORIES)

    assert response.status_code == 401
    assert 'error' in response.json()


def test_non_admin_gets_403(api_client, plain_account):
    api_client.force_authenticate(user=plain_account)
    response = api_client.get(CATEGORIES)

    assert response.status_code == 403
    assert response.json()['error'] == 'Admin access required.'


def test_create_category_returns_201(admin_api, admin_account):
    response = admin_api.post(CATEGORIES, {'name': 'Coffee', 'description': 'Hot'}, format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['name'] == 'Coffee'
    assert body['is_active'] is True
    assert body['products_count'] == 0
    assert body['created_by'] == str(admin_account.id)


def test_create_category_with_multipart_image(admin_api):
    image = SimpleUploadedFile('cup.png', b'\x89PNG' + b'\x00' * 64, content_type='image/png')
    response = admin_api.post(CATEGORIES, {'name': 'Coffee', 'image': image}, format='multipart')

    assert response.status_code == 201
    assert response.json()['image_url'].startswith('/media/category-images/categories/')


def test_duplicate_category_name_is_a_400_conflict(admin_api):
    admin_api.post(CATEGORIES, {'name': 'Coffee'}, format='json')
    response = admin_api.post(CATEGORIES, {'name': 'COFFEE'}, format='json')

    assert response.status_code == 400
    assert response.json()['error'] == 'A category with this name already exists.'
    assert Category.objects.count() == 1


def test_validation_errors_carry_details(admin_api):
    response = admin_api.post(CATEGORIES, {'description': 'no name'}, format='json')

    assert response.status_code == 400
    assert 'name' in response.json()['details']


def test_unknown_category_id_is_404(admin_api):
    response = admin_api.get(f'{CATEGORIES}{uuid.uuid4()}/')

    assert response.status_code == 404
    assert 'error' in response.json()


def test_patch_category(admin_api):
    category = Category.objects.create(name='Coffee')
    response = admin_api.patch(f'{CATEGORIES}{category.id}/', {'description': 'Espresso'}, format='json')

    assert response.status_code == 200
    assert response.json()['description'] == 'Espresso'
    assert response.json()['name'] == 'Coffee'


def test_toggle_status_endpoint(admin_api):
    category = Category.objects.create(name='Coffee')
    response = admin_api.post(reverse('category-toggle-status', args=[category.id]))

    assert response.status_code == 200
    assert response.json()['is_active'] is False


def test_delete_category_in_use_is_refused(admin_api):
    category = Category.objects.create(name='Coffee')
    Product.objects.create(name='Latte', price=Decimal('10.00'), category=category)

    response = admin_api.delete(f'{CATEGORIES}{category.id}/')

    assert response.status_code == 400
    assert response.json()['error'] == 'You cannot delete a category that still has products.'


def test_delete_unused_category_is_a_soft_delete(admin_api):
    category = Category.objects.create(name='Coffee')

    response = admin_api.delete(f'{CATEGORIES}{category.id}/')

    assert response.status_code == 200
    assert response.json() == {'message': 'Category deleted successfully'}
    assert Category.objects.get(id=category.id).is_active is False


def test_full_update_without_the_flag_keeps_a_deleted_category_inactive(admin_api):
    category = Category.objects.create(name='Coffee')
    admin_api.delete(f'{CATEGORIES}{category.id}/')

    response = admin_api.put(
        f'{CATEGORIES}{category.id}/', {'name': 'Coffee', 'description': 'Beans'}, format='json'
    )

    assert response.status_code == 200
    assert response.json()['is_active'] is False
    category.refresh_from_db()
    assert category.is_active is False
    assert category.description == 'Beans'


def test_multipart_create_without_the_flag_is_active(admin_api):
    response = admin_api.post(CATEGORIES, {'name': 'Coffee'}, format='multipart')

    assert response.status_code == 201
    assert response.json()['is_active'] is True


def test_category_list_is_sorted_by_name(admin_api):
    for name in ('Tea', 'Bakery', 'Coffee'):
        Category.objects.create(name=name)

    response = admin_api.get(CATEGORIES)

    assert [c['name'] for c in response.json()] == ['Bakery', 'Coffee', 'Tea']


def test_category_list_counts_products_in_one_query(admin_api, django_assert_max_num_queries):
    for index, name in enumerate(('Bakery', 'Coffee', 'Tea')):
        category = Category.objects.create(name=name)
        for n in range(index):
            Product.objects.create(name=f'{name} {n}', price=Decimal('5.00'), category=category)

    with django_assert_max_num_queries(1):
        response = admin_api.get(CATEGORIES)

    assert [c['products_count'] for c in response.json()] == [0, 1, 2]


def test_create_product_with_category_name(admin_api):
    payload = {'name': 'Cortado', 'price': '11.00', 'category': 'Espresso Specials', 'is_popular': True}
    response = admin_api.post(PRODUCTS, payload, format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['category'] == 'Espresso Specials'
    assert body['availability'] == 'In stock'
    assert body['is_popular'] is True
    assert Category.objects.filter(name='Espresso Specials').exists()


def test_product_price_must_be_positive(admin_api):
    response = admin_api.post(PRODUCTS, {'name': 'Free coffee', 'price': '0'}, format='json')

    assert response.status_code == 400
    assert 'price' in response.json()['details']


def test_update_and_delete_product(admin_api):
    product = Product.objects.create(name='Latte', price=Decimal('10.00'))

    response = admin_api.patch(f'{PRODUCTS}{product.id}/', {'price': '12.00'}, format='json')
    assert response.status_code == 200
    assert response.json()['price'] == '12.00'
    assert response.json()['category'] == 'No category'

    response = admin_api.delete(f'{PRODUCTS}{product.id}/')
    assert response.status_code == 200
    assert not Product.objects.exists()


def test_product_list_search(admin_api):
    Product.objects.create(name='Latte', price=Decimal('10.00'))
    Product.objects.create(name='Croissant', price=Decimal('6.00'))

    response = admin_api.get(PRODUCTS, {'search': 'latte'})

    assert [p['name'] for p in response.json()] == ['Latte']


def test_jwt_login_for_admins(api_client, admin_account):
    response = api_client.post(
        reverse('token_obtain_pair'), {'email': admin_account.email, 'password': PASSWORD}, format='json'
    )

    assert response.status_code == 200
    token = response.json()['access']
    assert response.json()['user']['role'] == 'admin'

    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    assert api_client.get(CATEGORIES).status_code == 200


def test_jwt_login_refused_for_non_admins(api_client, plain_account):
    response = api_client.post(
        reverse('token_obtain_pair'), {'email': plain_account.email, 'password': PASSWORD}, format='json'
    )

    assert response.status_code == 400
    assert response.json()['error'] == 'Admin access required.'
