# Generated manually
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Species",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name_local", models.CharField(max_length=120, verbose_name="Naziv na srpskom")),
                ("name_latin", models.CharField(max_length=120, unique=True, verbose_name="Naziv na latinskom")),
                ("group", models.PositiveIntegerField(db_index=True, default=1, verbose_name="Grupa")),
                ("media_practice", models.JSONField(blank=True, default=list, verbose_name="Slike za vežbanje")),
                ("media_test", models.JSONField(blank=True, default=list, verbose_name="Slike za test")),
            ],
            options={
                "verbose_name": "Ptica",
                "verbose_name_plural": "Ptice",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="AuthorizedUser",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("email", models.EmailField(max_length=254, unique=True, verbose_name="Email")),
                ("role", models.CharField(choices=[("user", "Korisnik"), ("admin", "Administrator")], default="user", max_length=20, verbose_name="Uloga")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, verbose_name="Dodat")),
            ],
            options={
                "verbose_name": "Dozvoljeni korisnik",
                "verbose_name_plural": "Dozvoljeni korisnici",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="OfficialTestSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("active", models.BooleanField(default=False, verbose_name="Zvanični test aktivan")),
                ("start", models.DateTimeField(blank=True, help_text="Ako nije postavljeno, test je aktivan odmah", null=True, verbose_name="Početak")),
                ("end", models.DateTimeField(blank=True, help_text="Ako nije postavljeno, test je aktivan beskonačno", null=True, verbose_name="Kraj")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Ažurirano")),
            ],
            options={
                "verbose_name": "Podešavanje zvaničnog testa",
                "verbose_name_plural": "Podešavanja zvaničnog testa",
            },
        ),
        migrations.CreateModel(
            name="QuizResult",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_email", models.EmailField(db_index=True, max_length=254, verbose_name="Korisnik")),
                ("question_count", models.PositiveIntegerField(verbose_name="Broj pitanja")),
                ("total_points", models.IntegerField(verbose_name="Poeni")),
                ("is_official", models.BooleanField(db_index=True, default=False, verbose_name="Zvanični test")),
                ("quiz_type", models.CharField(choices=[("oglasavanje", "Oglašavanje"), ("slike", "Izgled")], default="oglasavanje", max_length=20, verbose_name="Tip testa")),
                ("breakdown", models.JSONField(blank=True, default=list, verbose_name="Rezultat")),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name="Vreme")),
            ],
            options={
                "verbose_name": "Rezultat kviza",
                "verbose_name_plural": "Rezultati kviza",
                "ordering": ["-created_at"],
            },
        ),
    ]
