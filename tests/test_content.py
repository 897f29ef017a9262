import datetime

import pytest
from django.core.files.storage import storages
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.exceptions import ValidationError

from content.models import Event, HomeSection
from content.services import EventEditor, HomeSectionEditor
from inventory.services import CategoryEditor

pytestmark = pytest.mark.django_db


def jpeg(name='photo.jpg'):
    return SimpleUploadedFile(name, b'\xff' * 512, content_type='image/jpeg')


def event_data(**overrides):
    data = {
        'title': 'Latte art workshop',
        'description': 'Learn to pour a rosetta',
        'date': datetime.date(2026, 11, 20),
        'time': datetime.time(18, 30),
        'location': 'Main room',
    }
    data.update(overrides)
    return data


def make_sections(count):
    editor = HomeSectionEditor()
    return [editor.create({'title': f'Section {i}', 'description': 'Text'}) for i in range(count)]


def orders():
    return [(s.title, s.display_order) for s in HomeSection.objects.order_by('display_order')]


# =============== EVENTS ===============

@pytest.mark.parametrize('missing', ['title', 'date', 'time', 'location'])
def test_event_requires_its_core_fields(missing):
    with pytest.raises(ValidationError) as exc:
        EventEditor().create(event_data(**{missing: None}))
    assert missing in exc.value.detail
    assert not Event.objects.exists()


def test_event_with_image_keeps_the_uploaded_url(admin_account):
    event = EventEditor().create(event_data(), image=jpeg(), user=admin_account)

    assert event.image.startswith(f'/media/event-images/events/{event.id}_')
    assert event.created_by == admin_account


def test_replacing_an_event_image_deletes_the_old_one():
    editor = EventEditor()
    event = editor.create(event_data(), image=jpeg('first.jpg'))
    old = event.image.rsplit('/', 1)[-1]

    editor.update(event, {'title': 'Cupping session'}, image=jpeg('second.jpg'))

    bucket = storages['event-images']
    assert not bucket.exists(f'events/{old}')
    assert Event.objects.get(id=event.id).title == 'Cupping session'


def test_deleting_an_event_removes_its_image():
    editor = EventEditor()
    event = editor.create(event_data(), image=jpeg())
    filename = event.image.rsplit('/', 1)[-1]

    editor.delete(event)

    assert not Event.objects.exists()
    assert not storages['event-images'].exists(f'events/{filename}')


def test_events_list_by_date():
    editor = EventEditor()
    editor.create(event_data(title='Later', date=datetime.date(2026, 12, 1)))
    editor.create(event_data(title='Sooner', date=datetime.date(2026, 11, 1)))

    assert [e.title for e in editor.list()] == ['Sooner', 'Later']
    assert [e.title for e in editor.list('later')] == ['Later']


# =============== HOME SECTIONS ===============

def test_new_sections_are_appended_to_the_ranking():
    make_sections(3)
    assert orders() == [('Section 0', 0), ('Section 1', 1), ('Section 2', 2)]


@pytest.mark.parametrize('position', [1, 2, 3])
def test_move_up_swaps_with_the_previous_section_and_stays_contiguous(position):
    sections = make_sections(4)

    HomeSectionEditor().move(sections[position], 'up')

    ranking = orders()
    assert [order for _, order in ranking] == [0, 1, 2, 3]
    assert ranking[position - 1][0] == f'Section {position}'
    assert ranking[position][0] == f'Section {position - 1}'


def test_move_down_swaps_with_the_next_section():
    sections = make_sections(3)

    HomeSectionEditor().move(sections[0], 'down')

    assert orders() == [('Section 1', 0), ('Section 0', 1), ('Section 2', 2)]


def test_moving_past_the_edges_changes_nothing():
    sections = make_sections(2)
    editor = HomeSectionEditor()

    editor.move(sections[0], 'up')
    editor.move(sections[1], 'down')

    assert orders() == [('Section 0', 0), ('Section 1', 1)]


def test_unknown_direction_is_rejected():
    section = make_sections(1)[0]
    with pytest.raises(ValidationError):
        HomeSectionEditor().move(section, 'sideways')


def test_delete_compacts_the_ranking():
    sections = make_sections(3)

    HomeSectionEditor().delete(sections[1])

    assert orders() == [('Section 0', 0), ('Section 2', 1)]


def test_link_needs_both_url_and_text():
    with pytest.raises(ValidationError):
        HomeSectionEditor().create({'title': 'Events', 'description': 'Join us', 'link_url': '/events/'})
    assert not HomeSection.objects.exists()


def test_section_with_category_links_into_the_menu():
    coffee = CategoryEditor().create({'name': 'Coffee'})
    section = HomeSectionEditor().create({'title': 'Our coffee', 'description': 'Fresh', 'category': coffee})

    assert section.menu_link == f'/menu/?category={coffee.id}'
