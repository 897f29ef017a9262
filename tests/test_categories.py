from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.files.storage import storages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from authentication.exceptions import ConflictError, UploadError
from inventory.models import Category, Product
from inventory.services import CategoryEditor, filter_categories

pytestmark = pytest.mark.django_db


def jpeg(name='photo.jpg', size=1024):
    return SimpleUploadedFile(name, b'\xff' * size, content_type='image/jpeg')


def test_create_trims_name_and_records_author(admin_account):
    category = CategoryEditor().create({'name': '  Coffee  ', 'description': 'Hot drinks'}, user=admin_account)

    assert category.name == 'Coffee'
    assert category.is_active is True
    assert category.created_by == admin_account
    assert Category.objects.count() == 1


def test_create_requires_name():
    with pytest.raises(ValidationError):
        CategoryEditor().create({'name': '   '})
    assert Category.objects.count() == 0


def test_duplicate_name_is_rejected_case_insensitively():
    editor = CategoryEditor()
    editor.create({'name': 'Coffee'})

    with pytest.raises(ConflictError) as exc:
        editor.create({'name': 'coffee'})

    assert str(exc.value.detail) == 'A category with this name already exists.'
    assert Category.objects.count() == 1


def test_update_may_keep_its_own_name():
    editor = CategoryEditor()
    category = editor.create({'name': 'Coffee'})

    updated = editor.update(category, {'name': 'COFFEE', 'description': 'Espresso based'})

    assert updated.name == 'COFFEE'
    assert Category.objects.get(id=category.id).description == 'Espresso based'


def test_update_to_another_categorys_name_conflicts():
    editor = CategoryEditor()
    editor.create({'name': 'Coffee'})
    tea = editor.create({'name': 'Tea'})

    with pytest.raises(ConflictError):
        editor.update(tea, {'name': 'coffee'})
    assert Category.objects.get(id=tea.id).name == 'Tea'


def test_toggle_status_writes_only_the_flag():
    category = CategoryEditor().create({'name': 'Coffee', 'description': 'first draft'})
    earlier = timezone.now() - timedelta(minutes=5)
    Category.objects.filter(id=category.id).update(updated_at=earlier)
    stale = Category.objects.get(id=category.id)
    Category.objects.filter(id=category.id).update(description='changed elsewhere')

    CategoryEditor().toggle_status(stale)

    fresh = Category.objects.get(id=category.id)
    assert fresh.is_active is False
    assert fresh.description == 'changed elsewhere'
    assert fresh.updated_at > earlier


def test_delete_is_refused_while_products_use_the_category():
    editor = CategoryEditor()
    coffee = editor.create({'name': 'Coffee'})
    drinks = editor.create({'name': 'Drinks'})
    product = Product.objects.create(name='Latte', price=Decimal('12.50'), category=coffee)

    with pytest.raises(ConflictError):
        editor.delete(coffee)
    assert Category.objects.get(id=coffee.id).is_active is True

    product.category = drinks
    product.save()
    editor.delete(coffee)

    assert Category.objects.get(id=coffee.id).is_active is False


def test_filter_categories_puts_active_first_then_alphabetical():
    editor = CategoryEditor()
    editor.create({'name': 'tea'})
    editor.create({'name': 'Bakery', 'is_active': False})
    editor.create({'name': 'Coffee'})

    names = [c.name for c in editor.list()]
    assert names == ['Coffee', 'tea', 'Bakery']

    assert [c.name for c in filter_categories(editor.list(), 'OFF')] == ['Coffee']


def test_create_with_image_stores_it_in_the_category_bucket():
    category = CategoryEditor().create({'name': 'Coffee'}, image=jpeg())

    assert category.image_url.startswith(f'/media/category-images/categories/{category.id}_')
    filename = category.image_url.rsplit('/', 1)[-1]
    assert storages['category-images'].exists(f'categories/{filename}')


def test_create_with_non_image_file_is_rejected():
    text = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')

    with pytest.raises(UploadError):
        CategoryEditor().create({'name': 'Coffee'}, image=text)
    assert Category.objects.count() == 0


def test_replacing_the_image_deletes_the_previous_one():
    editor = CategoryEditor()
    category = editor.create({'name': 'Coffee'}, image=jpeg('first.jpg'))
    old = category.image_url.rsplit('/', 1)[-1]

    editor.update(category, {}, image=jpeg('second.jpg'))

    bucket = storages['category-images']
    assert not bucket.exists(f'categories/{old}')
    assert bucket.exists(f"categories/{category.image_url.rsplit('/', 1)[-1]}")
