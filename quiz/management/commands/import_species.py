"""
Management command pro načtení katalogu ptáků z CSV souboru.

Použití:
    python manage.py import_species ptice.csv
    python manage.py import_species ptice.csv --dry-run

Očekávané sloupce:
    naziv_srpskom, naziv_latinskom, grupa, slike_vezbanje, slike_test

Seznamy fotografií mohou být oddělené znakem „|“ nebo čárkou. Existující
ptáci se hledají podle latinského názvu a jejich údaje se přepíší.
"""
import csv

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from quiz.catalog import parse_media_list
from quiz.models import Species

REQUIRED_COLUMNS = ("naziv_srpskom", "naziv_latinskom")


class Command(BaseCommand):
    help = "Načte katalog ptáků z CSV souboru"

    def add_arguments(self, parser):
        parser.add_argument("path", help="Cesta k CSV souboru")
        parser.add_argument("--delimiter", default=",", help="Oddělovač sloupců (výchozí čárka)")
        parser.add_argument("--dry-run", action="store_true", help="Jen zkontroluje soubor, nic neuloží")

    def handle(self, *args, **options):
        try:
            with open(options["path"], newline="", encoding="utf-8-sig") as handle:
                rows = list(csv.DictReader(handle, delimiter=options["delimiter"]))
        except OSError as exc:
            raise CommandError(f"Soubor nelze načíst: {exc}") from exc

        if rows:
            missing = [c for c in REQUIRED_COLUMNS if c not in rows[0]]
            if missing:
                raise CommandError(f"V souboru chybí sloupce: {', '.join(missing)}")

        created = updated = skipped = 0
        with transaction.atomic():
            for line, row in enumerate(rows, start=2):
                name_local = (row.get("naziv_srpskom") or "").strip()
                name_latin = (row.get("naziv_latinskom") or "").strip()
                if not name_local or not name_latin:
                    self.stdout.write(self.style.WARNING(f"Řádek {line}: chybí název, přeskočeno."))
                    skipped += 1
                    continue
                try:
                    group = int(row.get("grupa") or 1)
                except ValueError:
                    self.stdout.write(self.style.WARNING(f"Řádek {line}: neplatná skupina, přeskočeno."))
                    skipped += 1
                    continue

                _, was_created = Species.objects.update_or_create(
                    name_latin=name_latin,
                    defaults={
                        "name_local": name_local,
                        "group": max(1, group),
                        "media_practice": parse_media_list(row.get("slike_vezbanje"), separators="|,"),
                        "media_test": parse_media_list(row.get("slike_test"), separators="|,"),
                    },
                )
                if was_created:
                    created += 1
                else:
                    updated += 1

            if options["dry_run"]:
                transaction.set_rollback(True)

        prefix = "[dry-run] " if options["dry_run"] else ""
        self.stdout.write(self.style.SUCCESS(
            f"{prefix}Přidáno: {created}, aktualizováno: {updated}, přeskočeno: {skipped}."
        ))
