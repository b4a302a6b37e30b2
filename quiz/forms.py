from django import forms

from .catalog import format_media_list, parse_media_list
from .models import AuthorizedUser, OfficialTestSettings, Species


class SpeciesForm(forms.ModelForm):
    # Seznamy fotografií se zadávají jako text oddělený čárkami
    media_practice_text = forms.CharField(
        required=False,
        label="Slike za vežbanje",
        help_text="Nazivi fajlova bez ekstenzije, odvojeni zarezom",
        widget=forms.Textarea(attrs={"rows": 2, "placeholder": "JNA_Parus_major_1, BO_Parus_major_2"}),
    )
    media_test_text = forms.CharField(
        required=False,
        label="Slike za test",
        help_text="Nazivi fajlova bez ekstenzije, odvojeni zarezom",
        widget=forms.Textarea(attrs={"rows": 2}),
    )

    class Meta:
        model = Species
        fields = ["name_local", "name_latin", "group"]
        widgets = {
            "name_local": forms.TextInput(attrs={
                "class": "form-control",
                "placeholder": "Velika senica",
            }),
            "name_latin": forms.TextInput(attrs={
                "class": "form-control",
                "placeholder": "Parus major",
            }),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.media_practice or self.instance.media_test:
            self.fields["media_practice_text"].initial = format_media_list(self.instance.media_practice)
            self.fields["media_test_text"].initial = format_media_list(self.instance.media_test)

    def clean_name_local(self):
        value = self.cleaned_data["name_local"].strip()
        if not value:
            raise forms.ValidationError("Naziv na srpskom je obavezan.")
        return value

    def clean_name_latin(self):
        value = self.cleaned_data["name_latin"].strip()
        if not value:
            raise forms.ValidationError("Naziv na latinskom je obavezan.")
        return value

    def save(self, commit=True):
        species = super().save(commit=False)
        species.media_practice = parse_media_list(self.cleaned_data.get("media_practice_text"))
        species.media_test = parse_media_list(self.cleaned_data.get("media_test_text"))
        if commit:
            species.save()
        return species


class OfficialTestSettingsForm(forms.ModelForm):
    class Meta:
        model = OfficialTestSettings
        fields = ["active", "start", "end"]
        widgets = {
            "start": forms.DateTimeInput(attrs={"type": "datetime-local"}, format="%Y-%m-%dT%H:%M"),
            "end": forms.DateTimeInput(attrs={"type": "datetime-local"}, format="%Y-%m-%dT%H:%M"),
        }

    def clean(self):
        cleaned_data = super().clean()
        start, end = cleaned_data.get("start"), cleaned_data.get("end")
        if start and end and end < start:
            raise forms.ValidationError("Kraj mora biti posle početka.")
        return cleaned_data


class AuthorizedUserForm(forms.ModelForm):
    class Meta:
        model = AuthorizedUser
        fields = ["email", "role"]
        widgets = {
            "email": forms.EmailInput(attrs={"placeholder": "ime.prezime@gmail.com"}),
        }

    def clean_email(self):
        email = self.cleaned_data["email"].strip().lower()
        if "@" not in email:
            raise forms.ValidationError("Neispravna email adresa.")
        if AuthorizedUser.objects.filter(email__iexact=email).exclude(pk=self.instance.pk).exists():
            raise forms.ValidationError("Korisnik sa ovom email adresom je već na listi.")
        return email
