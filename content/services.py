import logging

from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from authentication.exceptions import backend_errors
from .models import Event, HomeSection
from .uploads import event_images, home_images

logger = logging.getLogger(__name__)

EVENT_FIELDS = (
    'title', 'description', 'date', 'time', 'location', 'image', 'capacity',
    'contact_phone', 'contact_email', 'is_featured', 'is_active',
)
SECTION_FIELDS = (
    'title', 'description', 'image_url', 'link_url', 'link_text', 'category', 'is_active',
)


def require(data, fields):
    missing = {}
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing[field] = ['This field is required.']
    if missing:
        raise ValidationError(missing)


def apply_fields(instance, data, fields):
    for field in fields:
        if field in data:
            value = data[field]
            if isinstance(value, str):
                value = value.strip()
            setattr(instance, field, value)


class EventEditor:
    required_fields = ('title', 'date', 'time', 'location')

    def __init__(self, images=None):
        self.images = images or event_images()

    def list(self, search=''):
        queryset = Event.objects.order_by('date', 'time')
        term = (search or '').strip()
        if term:
            queryset = queryset.filter(
                Q(title__icontains=term) |
                Q(description__icontains=term) |
                Q(location__icontains=term)
            )
        with backend_errors('listing events'):
            return list(queryset)

    def create(self, data, image=None, user=None):
        require(data, self.required_fields)
        event = Event(created_by=user, updated_by=user)
        apply_fields(event, data, EVENT_FIELDS)
        if image is not None:
            event.image = self.images.upload(image, owner_id=event.id)

        try:
            with backend_errors('creating event'):
                event.save()
        except Exception:
            if image is not None:
                self.images.delete(event.image)
            raise
        logger.info(f"Event created: {event.title} ({event.id})")
        return event

    def update(self, event, data, image=None, user=None):
        previous_image = event.image
        apply_fields(event, data, EVENT_FIELDS)
        require({field: getattr(event, field) for field in self.required_fields}, self.required_fields)
        if image is not None:
            event.image = self.images.upload(image, owner_id=event.id)
        event.updated_by = user

        with backend_errors('updating event'):
            event.save()

        if previous_image and previous_image != event.image:
            self.images.delete(previous_image)
        logger.info(f"Event updated: {event.title} ({event.id})")
        return event

    def delete(self, event):
        image, event_id = event.image, event.id
        with backend_errors('deleting event'):
            event.delete()
        if image:
            self.images.delete(image)
        logger.info(f"Event deleted: {event_id}")


class HomeSectionEditor:
    required_fields = ('title', 'description')

    def __init__(self, images=None):
        self.images = images or home_images()

    def list(self, search=''):
        queryset = HomeSection.objects.select_related('category').order_by('display_order', 'created_at')
        term = (search or '').strip()
        if term:
            queryset = queryset.filter(Q(title__icontains=term) | Q(description__icontains=term))
        with backend_errors('listing home sections'):
            return list(queryset)

    def _check_link(self, section):
        if bool(section.link_url) != bool(section.link_text):
            raise ValidationError({'link_text': ['Provide both the link and its text, or neither.']})

    def create(self, data, image=None, user=None):
        require(data, self.required_fields)
        section = HomeSection(created_by=user, updated_by=user)
        apply_fields(section, data, SECTION_FIELDS)
        self._check_link(section)
        if image is not None:
            section.image_url = self.images.upload(image, owner_id=section.id)

        try:
            with backend_errors('creating home section'), transaction.atomic():
                # new sections go to the end of the ranking
                section.display_order = HomeSection.objects.count()
                section.save()
        except Exception:
            if image is not None:
                self.images.delete(section.image_url)
            raise
        logger.info(f"Home section created: {section.title} at {section.display_order}")
        return section

    def update(self, section, data, image=None, user=None):
        previous_image = section.image_url
        apply_fields(section, data, SECTION_FIELDS)
        require({field: getattr(section, field) for field in self.required_fields}, self.required_fields)
        self._check_link(section)
        if image is not None:
            section.image_url = self.images.upload(image, owner_id=section.id)
        section.updated_by = user

        with backend_errors('updating home section'):
            section.save()

        if previous_image and previous_image != section.image_url:
            self.images.delete(previous_image)
        logger.info(f"Home section updated: {section.title} ({section.id})")
        return section

    def _renumber(self, sections):
        now = timezone.now()
        for position, section in enumerate(sections):
            section.display_order = position
            section.updated_at = now
        HomeSection.objects.bulk_update(sections, ['display_order', 'updated_at'])

    def move(self, section, direction):
        """Swap a section with its neighbour and rewrite the whole ranking as 0..N-1"""
        if direction not in ('up', 'down'):
            raise ValidationError({'direction': ['Direction must be "up" or "down".']})

        with backend_errors('reordering home sections'), transaction.atomic():
            sections = list(
                HomeSection.objects.select_for_update().order_by('display_order', 'created_at')
            )
            index = next((i for i, s in enumerate(sections) if s.id == section.id), None)
            if index is None:
                raise NotFound("Home section not found.")
            target = index - 1 if direction == 'up' else index + 1
            if 0 <= target < len(sections):
                sections[index], sections[target] = sections[target], sections[index]
                self._renumber(sections)
                logger.info(f"Home section {section.id} moved {direction} to {target}")
        return sections

    def delete(self, section):
        image, section_id = section.image_url, section.id
        with backend_errors('deleting home section'), transaction.atomic():
            section.delete()
            self._renumber(list(HomeSection.objects.order_by('display_order', 'created_at')))
        if image:
            self.images.delete(image)
        logger.info(f"Home section deleted: {section_id}")
