from django import forms
from django.core.validators import MinLengthValidator, RegexValidator

phone_validator = RegexValidator(
    regex=r'^[0-9+\-\s()]*$',
    message='Phone number may contain only digits, spaces and + - ( ).',
)


class ContactForm(forms.Form):
    name = forms.CharField(
        max_length=100,
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "Your name"})
    )
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={"class": "form-control", "placeholder": "Email"})
    )
    phone = forms.CharField(
        required=False, max_length=30,
        validators=[phone_validator],
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "Phone (optional)"})
    )
    subject = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "Subject"})
    )
    message = forms.CharField(
        validators=[MinLengthValidator(10, 'The message must be at least 10 characters long.')],
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 5})
    )
