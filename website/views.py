import logging
import uuid

from django.conf import settings
from django.contrib import messages
from django.core.mail import send_mail
from django.shortcuts import redirect, render
from django.utils import timezone

from content.models import Event, HomeSection
from inventory.models import Category

from .forms import ContactForm
from .services import MENU_TAGS, menu_groups

logger = logging.getLogger(__name__)


def parse_uuid(value):
    try:
        return uuid.UUID(value)
    except (TypeError, ValueError):
        return None


def home(request):
    sections = HomeSection.objects.filter(is_active=True).select_related('category').order_by('display_order', 'created_at')
    return render(request, "website/home.html", {"sections": sections})


def menu(request):
    search = request.GET.get("q", "")
    tags = [tag for tag in MENU_TAGS if request.GET.get(tag)]
    category_id = parse_uuid(request.GET.get("category"))

    context = {
        "groups": menu_groups(search=search, tags=tags, category_id=category_id),
        "categories": Category.objects.filter(is_active=True).order_by('name'),
        "search": search,
        "tags": tags,
        "tag_choices": [(tag, tag.replace("_", " ").capitalize()) for tag in MENU_TAGS],
        "active_category": category_id,
    }
    return render(request, "website/menu.html", context)


def events(request):
    upcoming = Event.objects.filter(is_active=True).order_by('date', 'time')
    context = {
        "events": upcoming,
        "today": timezone.localdate(),
    }
    return render(request, "website/events.html", context)


def contact(request):
    form = ContactForm(request.POST or None)
    if request.method == "POST":
        if form.is_valid():
            data = form.cleaned_data
            body = (
                f"From: {data['name']} <{data['email']}>\n"
                f"Phone: {data['phone'] or '-'}\n\n"
                f"{data['message']}"
            )
            try:
                send_mail(
                    subject=f"[Contact] {data['subject']}",
                    message=body,
                    from_email=settings.DEFAULT_FROM_EMAIL,
                    recipient_list=settings.CONTACT_RECIPIENTS,
                    fail_silently=False,
                )
            except OSError as e:
                logger.error(f"Contact message from {data['email']} could not be sent: {e}")
                messages.error(request, "Your message could not be sent. Please try again later.")
            else:
                logger.info(f"Contact message sent by {data['email']}")
                messages.success(request, "Thank you! Your message has been sent.")
                return redirect("contact")
        else:
            messages.error(request, "Please correct the errors below.")

    return render(request, "website/contact.html", {"form": form})
