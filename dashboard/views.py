from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST
from rest_framework.exceptions import APIException

from authentication.exceptions import error_message
from content.models import Event, HomeSection
from content.services import EventEditor, HomeSectionEditor
from inventory.models import Category, Product
from inventory.services import CategoryEditor, ProductEditor

from .decorators import admin_access
from .forms import (
    AddCategoryForm, CategoryForm, EventForm, HomeSectionForm, ProductForm, initial_from,
)


def form_data(form):
    return {field: form.cleaned_data.get(field) for field in form.FIELDS}


def load(loader, search=''):
    """Run an editor list call; on failure the page shows an error with a retry link"""
    try:
        return loader(search), None
    except APIException as e:
        return [], error_message(e.detail)


@admin_access
def dashboard(request):
    """Back-office overview"""
    today = timezone.localdate()
    context = {
        "categories_count": Category.objects.count(),
        "active_categories_count": Category.objects.filter(is_active=True).count(),
        "products_count": Product.objects.count(),
        "available_products_count": Product.objects.filter(is_available=True).count(),
        "upcoming_events_count": Event.objects.filter(is_active=True, date__gte=today).count(),
        "home_sections_count": HomeSection.objects.count(),
    }
    return render(request, 'dashboard/index.html', context)


# =============== CATEGORIES ===============

@admin_access
def list_categories(request):
    search = request.GET.get('q', '')
    categories, load_error = load(CategoryEditor().list, search)
    context = {
        "categories": categories,
        "search": search,
        "load_error": load_error,
    }
    return render(request, 'dashboard/categories/list.html', context)


@admin_access
def add_category(request):
    form = CategoryForm(request.POST or None, request.FILES or None)
    if request.method == "POST":
        if form.is_valid():
            try:
                CategoryEditor().create(
                    form_data(form), image=form.cleaned_data.get('image'), user=request.user
                )
            except APIException as e:
                messages.error(request, error_message(e.detail))
            else:
                messages.success(request, "Category added successfully")
                return redirect("list_categories")
        else:
            messages.error(request, "Please correct the errors below.")

    return render(request, 'dashboard/categories/form.html', {"form": form})


@admin_access
def edit_category(request, pk):
    category = get_object_or_404(Category, id=pk)
    if request.method == "POST":
        form = CategoryForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                CategoryEditor().update(
                    category, form_data(form), image=form.cleaned_data.get('image'), user=request.user
                )
            except APIException as e:
                messages.error(request, error_message(e.detail))
            else:
                messages.success(request, "Category updated successfully")
                return redirect("list_categories")
        else:
            messages.error(request, "Please correct the errors below.")
    else:
        form = CategoryForm(initial=initial_from(category, CategoryForm.FIELDS))

    context = {
        "form": form,
        "category": category,
    }
    return render(request, 'dashboard/categories/form.html', context)


@admin_access
@require_POST
def toggle_category(request, pk):
    category = get_object_or_404(Category, id=pk)
    try:
        category = CategoryEditor().toggle_status(category, user=request.user)
    except APIException as e:
        messages.error(request, error_message(e.detail))
    else:
        state = "activated" if category.is_active else "deactivated"
        messages.success(request, f"Category {state}")
    return redirect("list_categories")


@admin_access
@require_POST
def delete_category(request, pk):
    category = get_object_or_404(Category, id=pk)
    try:
        CategoryEditor().delete(category, user=request.user)
    except APIException as e:
        messages.error(request, error_message(e.detail))
    else:
        messages.success(request, "Category deleted")
    return redirect("list_categories")


# =============== PRODUCTS ===============

def product_form_context(form, product=None):
    return {
        "form": form,
        "product": product,
        "category_form": AddCategoryForm(),
        "category_names": Category.objects.filter(is_active=True).order_by('name').values_list('name', flat=True),
    }


@admin_access
def list_products(request):
    search = request.GET.get('q', '')
    products, load_error = load(ProductEditor().list, search)
    context = {
        "products": products,
        "search": search,
        "load_error": load_error,
    }
    return render(request, 'dashboard/products/list.html', context)


@admin_access
def add_product(request):
    form = ProductForm(request.POST or None)
    if request.method == "POST":
        if form.is_valid():
            data = form_data(form)
            data['category'] = form.cleaned_data.get('category')
            try:
                ProductEditor().create(data, user=request.user)
            except APIException as e:
                messages.error(request, error_message(e.detail))
            else:
                messages.success(request, "Product added successfully")
                return redirect("list_products")
        else:
            messages.error(request, "Please correct the errors below.")

    return render(request, 'dashboard/products/form.html', product_form_context(form))


@admin_access
def edit_product(request, pk):
    product = get_object_or_404(Product.objects.select_related('category'), id=pk)
    if request.method == "POST":
        form = ProductForm(request.POST)
        if form.is_valid():
            data = form_data(form)
            data['category'] = form.cleaned_data.get('category')
            try:
                ProductEditor().update(product, data, user=request.user)
            except APIException as e:
                messages.error(request, error_message(e.detail))
            else:
                messages.success(request, "Product updated successfully")
                return redirect("list_products")
        else:
            messages.error(request, "Please correct the errors below.")
    else:
        form = ProductForm(initial=ProductForm.initial_for(product))

    return render(request, 'dashboard/products/form.html', product_form_context(form, product))


@admin_access
@require_POST
def delete_product(request, pk):
    product = get_object_or_404(Product, id=pk)
    try:
        ProductEditor().delete(product)
    except APIException as e:
        messages.error(request, error_message(e.detail))
    else:
        messages.success(request, "Product deleted")
    return redirect("list_products")


@admin_access
@require_POST
def add_product_category(request):
    """Inline 'new category' from the product form; goes back to where it was posted from"""
    form = AddCategoryForm(request.POST)
    if form.is_valid():
        try:
            category = ProductEditor().add_category(form.cleaned_data['name'], user=request.user)
        except APIException as e:
            messages.error(request, error_message(e.detail))
        else:
            messages.success(request, f"Category '{category.name}' added")
    else:
        messages.error(request, "Category name is required.")

    next_url = request.POST.get('next')
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        return redirect(next_url)
    return redirect("add_product")


# =============== EVENTS ===============

@admin_access
def list_events(request):
    search = request.GET.get('q', '')
    events, load_error = load(EventEditor().list, search)
    context = {
        "events": events,
        "search": search,
        "load_error": load_error,
    }
    return render(request, 'dashboard/events/list.html', context)


@admin_access
def add_event(request):
    form = EventForm(request.POST or None, request.FILES or None)
    if request.method == "POST":
        if form.is_valid():
            try:
                EventEditor().create(form_data(form), image=form.cleaned_data.get('image'), user=request.user)
            except APIException as e:
                messages.error(request, error_message(e.detail))
            else:
                messages.success(request, "Event added successfully")
                return redirect("list_events")
        else:
            messages.error(request, "Please correct the errors below.")

    return render(request, 'dashboard/events/form.html', {"form": form})


@admin_access
def edit_event(request, pk):
    event = get_object_or_404(Event, id=pk)
    if request.method == "POST":
        form = EventForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                EventEditor().update(
                    event, form_data(form), image=form.cleaned_data.get('image'), user=request.user
                )
            except APIException as e:
                messages.error(request, error_message(e.detail))
            else:
                messages.success(request, "Event updated successfully")
                return redirect("list_events")
        else:
            messages.error(request, "Please correct the errors below.")
    else:
        form = EventForm(initial=initial_from(event, EventForm.FIELDS))

    context = {
        "form": form,
        "event": event,
    }
    return render(request, 'dashboard/events/form.html', context)


@admin_access
@require_POST
def delete_event(request, pk):
    event = get_object_or_404(Event, id=pk)
    try:
        EventEditor().delete(event)
    except APIException as e:
        messages.error(request, error_message(e.detail))
    else:
        messages.success(request, "Event deleted")
    return redirect("list_events")


# =============== HOME SECTIONS ===============

@admin_access
def list_home_sections(request):
    search = request.GET.get('q', '')
    sections, load_error = load(HomeSectionEditor().list, search)
    context = {
        "sections": sections,
        "search": search,
        "load_error": load_error,
    }
    return render(request, 'dashboard/home_sections/list.html', context)


@admin_access
def add_home_section(request):
    form = HomeSectionForm(request.POST or None, request.FILES or None)
    if request.method == "POST":
        if form.is_valid():
            try:
                HomeSectionEditor().create(
                    form_data(form), image=form.cleaned_data.get('image'), user=request.user
                )
            except APIException as e:
                messages.error(request, error_message(e.detail))
            else:
                messages.success(request, "Home section added successfully")
                return redirect("list_home_sections")
        else:
            messages.error(request, "Please correct the errors below.")

    return render(request, 'dashboard/home_sections/form.html', {"form": form})


@admin_access
def edit_home_section(request, pk):
    section = get_object_or_404(HomeSection, id=pk)
    if request.method == "POST":
        form = HomeSectionForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                HomeSectionEditor().update(
                    section, form_data(form), image=form.cleaned_data.get('image'), user=request.user
                )
            except APIException as e:
                messages.error(request, error_message(e.detail))
            else:
                messages.success(request, "Home section updated successfully")
                return redirect("list_home_sections")
        else:
            messages.error(request, "Please correct the errors below.")
    else:
        form = HomeSectionForm(initial=initial_from(section, HomeSectionForm.FIELDS))

    context = {
        "form": form,
        "section": section,
    }
    return render(request, 'dashboard/home_sections/form.html', context)


@admin_access
@require_POST
def move_home_section(request, pk, direction):
    section = get_object_or_404(HomeSection, id=pk)
    try:
        HomeSectionEditor().move(section, direction)
    except APIException as e:
        # the list is re-read from the database on redirect
        messages.error(request, error_message(e.detail))
    return redirect("list_home_sections")


@admin_access
@require_POST
def delete_home_section(request, pk):
    section = get_object_or_404(HomeSection, id=pk)
    try:
        HomeSectionEditor().delete(section)
    except APIException as e:
        messages.error(request, error_message(e.detail))
    else:
        messages.success(request, "Home section deleted")
    return redirect("list_home_sections")
