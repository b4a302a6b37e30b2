"""
Modely kvízové aplikace „Ptice Srbije“.

Obsahuje:
 - katalog ptáků s fotografiemi pro procvičování a pro oficiální test (Species),
 - seznam povolených uživatelů a jejich roli (AuthorizedUser),
 - nastavení časového okna oficiálního testu (OfficialTestSettings),
 - uložené výsledky dokončených kvízů (QuizResult).
"""

from django.db import models
from django.utils import timezone

from .constants import QUIZ_TYPE_AUDIO, QUIZ_TYPE_IMAGE
from .domain import SpeciesRecord
from .scoring import success_rate


class QuizType(models.TextChoices):
    AUDIO = QUIZ_TYPE_AUDIO, "Oglašavanje"
    IMAGE = QUIZ_TYPE_IMAGE, "Izgled"


class Species(models.Model):
    """
    Model reprezentující ptáka v katalogu.

    Zobrazovaný (srbský) název je to, co uživatel vybírá v kvízu, latinský
    název slouží i jako název souboru s nahrávkou hlasu. Fotografie se ukládají
    jako seznamy názvů souborů bez přípony.
    """
    name_local = models.CharField(max_length=120, verbose_name="Naziv na srpskom")
    name_latin = models.CharField(max_length=120, unique=True, verbose_name="Naziv na latinskom")
    group = models.PositiveIntegerField(default=1, db_index=True, verbose_name="Grupa")
    media_practice = models.JSONField(default=list, blank=True, verbose_name="Slike za vežbanje")
    media_test = models.JSONField(default=list, blank=True, verbose_name="Slike za test")

    class Meta:
        verbose_name = "Ptica"
        verbose_name_plural = "Ptice"
        ordering = ["id"]

    def __str__(self):
        return f"{self.name_local} ({self.name_latin})"

    def to_record(self):
        """Neměnný snímek pro generátor otázek."""
        return SpeciesRecord(
            id=self.id,
            name_local=self.name_local,
            name_latin=self.name_latin,
            group=self.group,
            media_practice=tuple(self.media_practice or ()),
            media_test=tuple(self.media_test or ()),
        )

    @property
    def thumbnail_key(self):
        """První fotografie pro procvičování, jinak první testovací, jinak None."""
        return next(iter(self.media_practice or self.media_test or []), None)

    @property
    def image_count(self):
        return len(self.media_practice or []) + len(self.media_test or [])


class AuthorizedUser(models.Model):
    """
    Povolený uživatel aplikace.

    Přihlásit se může kdokoli (Google účet), ale kvíz uvidí jen ten,
    jehož email je na tomto seznamu. Role „admin“ zpřístupní administraci.
    """
    ROLE_USER = "user"
    ROLE_ADMIN = "admin"
    ROLE_CHOICES = [
        (ROLE_USER, "Korisnik"),
        (ROLE_ADMIN, "Administrator"),
    ]

    email = models.EmailField(unique=True, verbose_name="Email")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER, verbose_name="Uloga")
    created_at = models.DateTimeField(default=timezone.now, verbose_name="Dodat")

    class Meta:
        verbose_name = "Dozvoljeni korisnik"
        verbose_name_plural = "Dozvoljeni korisnici"
        ordering = ["-created_at"]  # Nejnovější první

    def __str__(self):
        return self.email

    def save(self, *args, **kwargs):
        """Email se vždy ukládá malými písmeny, aby porovnání nezáviselo na velikosti."""
        self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN


class OfficialTestSettings(models.Model):
    """
    Nastavení oficiálního testu (jediný řádek v tabulce).

    Test je dostupný, pokud je explicitně aktivní, nebo pokud je nastaven
    alespoň jeden z okrajů okna a aktuální čas do okna spadá.
    """
    active = models.BooleanField(default=False, verbose_name="Zvanični test aktivan")
    start = models.DateTimeField(null=True, blank=True, verbose_name="Početak",
                                 help_text="Ako nije postavljeno, test je aktivan odmah")
    end = models.DateTimeField(null=True, blank=True, verbose_name="Kraj",
                               help_text="Ako nije postavljeno, test je aktivan beskonačno")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="Ažurirano")

    class Meta:
        verbose_name = "Podešavanje zvaničnog testa"
        verbose_name_plural = "Podešavanja zvaničnog testa"

    def __str__(self):
        return "Zvanični test: " + ("aktivan" if self.active else "neaktivan")

    def save(self, *args, **kwargs):
        # Vždy jen jeden řádek
        self.pk = 1
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        """Vrátí (případně vytvoří) jediné nastavení."""
        settings_row, _ = cls.objects.get_or_create(pk=1)
        return settings_row

    def is_available(self, now=None):
        """Je oficiální test právě teď dostupný?"""
        if self.active:
            return True
        if self.start is None and self.end is None:
            return False
        now = now or timezone.now()
        if self.start is not None and now < self.start:
            return False
        if self.end is not None and now > self.end:
            return False
        return True


class QuizResultQuerySet(models.QuerySet):
    def for_user(self, email):
        return self.filter(user_email__iexact=email)

    def official(self):
        return self.filter(is_official=True)

    def has_official_attempt(self, email, quiz_type):
        """Uživatel smí oficiální test každého typu absolvovat jen jednou."""
        return self.for_user(email).official().filter(quiz_type=quiz_type).exists()


class QuizResult(models.Model):
    """
    Uložený výsledek dokončeného kvízu.

    Vzniká jednou při dokončení kvízu a už se nemění. ``breakdown`` obsahuje
    rozpis po otázkách: správná odpověď, odpověď uživatele a body.
    """
    user_email = models.EmailField(db_index=True, verbose_name="Korisnik")
    question_count = models.PositiveIntegerField(verbose_name="Broj pitanja")
    total_points = models.IntegerField(verbose_name="Poeni")
    is_official = models.BooleanField(default=False, db_index=True, verbose_name="Zvanični test")
    quiz_type = models.CharField(max_length=20, choices=QuizType.choices, default=QuizType.AUDIO, verbose_name="Tip testa")
    breakdown = models.JSONField(default=list, blank=True, verbose_name="Rezultat")
    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name="Vreme")

    objects = QuizResultQuerySet.as_manager()

    class Meta:
        verbose_name = "Rezultat kviza"
        verbose_name_plural = "Rezultati kviza"
        ordering = ["-created_at"]  # Nejnovější první

    def __str__(self):
        return f"{self.user_email}: {self.total_points}/{self.question_count}"

    @property
    def success_rate(self):
        """Úspěšnost v procentech, záporné body = 0 %."""
        return success_rate(self.total_points, self.question_count)
