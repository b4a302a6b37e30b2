"""
Hlavní view funkce aplikace „Ptice Srbije“.

Sem patří:
 - úvodní obrazovka s výběrem typu kvízu a počtu otázek,
 - stránka kvízu (samotný běh obstarává Socket.IO server),
 - historie výsledků přihlášeného uživatele,
 - katalog ptáků (prohlížení pro všechny, úpravy pro administrátora),
 - administrace: oficiální test, seznam povolených uživatelů, statistiky a export.
"""

import csv

from django.conf import settings
from django.contrib import messages
from django.core.paginator import Paginator
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST

from .analytics import summarize_results
from .catalog import media_locator, search_species
from .constants import (
    CATALOG_PAGE_SIZE,
    DONT_KNOW,
    NOT_ANSWERED,
    OFFICIAL_TEST_SIZE,
    QUIZ_SIZES,
    QUIZ_TYPES,
    SUCCESS_THRESHOLD,
)
from .exceptions import MediaUnavailableError
from .forms import AuthorizedUserForm, OfficialTestSettingsForm, SpeciesForm
from .models import AuthorizedUser, OfficialTestSettings, QuizResult, QuizType, Species
from .roles import (
    admin_required,
    authorized_required,
    may_start_official_test,
    unauthorized_message,
    user_is_admin,
    user_is_authorized,
)


# ===== HELPER FUNKCE =====

def _official_status(user):
    """
    Stav tlačítka oficiálního testu pro každý typ kvízu.

    Returns:
        Seznam slovníků s klíči value, label, available, attempted
    """
    window_open = OfficialTestSettings.load().is_available()
    rows = []
    for value, label in QuizType.choices:
        rows.append({
            "value": value,
            "label": label,
            "available": may_start_official_test(user, value),
            "attempted": QuizResult.objects.has_official_attempt(user.email, value),
            "window_open": window_open,
        })
    return rows


def _thumbnail_url(species, locator):
    """URL náhledu ptáka, nebo None pokud nemá žádnou fotografii."""
    key = species.thumbnail_key
    if not key:
        return None
    try:
        return locator.image_url(key)
    except MediaUnavailableError:
        return None


def _breakdown_rows(result):
    """Rozpis výsledku pro šablonu; nezodpovězené otázky mají „Nije odgovoreno“."""
    return [{
        "question": row.get("question"),
        "user_answer": row.get("user_answer") or NOT_ANSWERED,
        "correct_answer": row.get("correct_answer"),
        "points": row.get("points", 0),
    } for row in result.breakdown or []]


def _can_view_result(user, result):
    return user_is_admin(user) or result.user_email.lower() == (user.email or "").lower()


# ===== VIEW FUNKCE =====

def landing(request):
    """Úvodní obrazovka: přihlášení, nebo výběr kvízu."""
    if not request.user.is_authenticated:
        return render(request, "landing.html", {})
    if not user_is_authorized(request.user):
        return redirect("unauthorized")
    return render(request, "landing.html", {
        "quiz_types": QuizType.choices,
        "quiz_sizes": QUIZ_SIZES,
        "official_size": OFFICIAL_TEST_SIZE,
        "official": _official_status(request.user),
        "is_admin": user_is_admin(request.user),
    })


def unauthorized(request):
    """Stránka pro přihlášeného uživatele, který není na seznamu povolených."""
    if request.user.is_authenticated and user_is_authorized(request.user):
        return redirect("landing")
    return render(request, "quiz/unauthorized.html", {
        "message": unauthorized_message(request.user),
    }, status=403)


@authorized_required
def quiz_play(request):
    """
    Stránka s během kvízu.

    Parametry se jen zkontrolují a předají klientovi; otázky generuje
    a odpočet řídí Socket.IO server.
    """
    quiz_type = request.GET.get("type", "")
    if quiz_type not in QUIZ_TYPES:
        messages.error(request, "Nepoznat tip kviza.")
        return redirect("landing")

    official = request.GET.get("official") == "1"
    if official:
        if not may_start_official_test(request.user, quiz_type):
            messages.error(request, "Zvanični test trenutno nije dostupan.")
            return redirect("landing")
        size = OFFICIAL_TEST_SIZE
    else:
        try:
            size = int(request.GET.get("size", QUIZ_SIZES[0]))
        except ValueError:
            size = 0
        if size not in QUIZ_SIZES:
            messages.error(request, "Nepoznat broj pitanja.")
            return redirect("landing")

    return render(request, "quiz/play.html", {
        "quiz_config": {
            "quiz_type": quiz_type,
            "size": size,
            "official": official,
            "socketio_url": settings.PTICE_SOCKETIO_URL,
            "success_threshold": SUCCESS_THRESHOLD,
        },
        "quiz_type_label": QuizType(quiz_type).label,
        "official": official,
        "size": size,
        "dont_know_label": DONT_KNOW,
    })


@authorized_required
def history(request):
    """Historie výsledků přihlášeného uživatele (nejnovější první)."""
    results = QuizResult.objects.for_user(request.user.email)
    return render(request, "quiz/history.html", {
        "results": results,
        "success_threshold": SUCCESS_THRESHOLD,
    })


@authorized_required
def history_detail(request, result_id):
    """Rozpis jednoho výsledku po otázkách."""
    result = get_object_or_404(QuizResult, id=result_id)
    if not _can_view_result(request.user, result):
        return HttpResponse(status=403)
    return render(request, "quiz/history_detail.html", {
        "result": result,
        "rows": _breakdown_rows(result),
        "success_threshold": SUCCESS_THRESHOLD,
    })


@authorized_required
def catalog_list(request):
    """Katalog ptáků s vyhledáváním a stránkováním po 10 řádcích."""
    term = request.GET.get("q", "").strip()
    paginator = Paginator(search_species(term), CATALOG_PAGE_SIZE)
    page = paginator.get_page(request.GET.get("page"))
    locator = media_locator()
    rows = [{"species": s, "thumbnail": _thumbnail_url(s, locator)} for s in page.object_list]
    return render(request, "quiz/catalog_list.html", {
        "page": page,
        "rows": rows,
        "term": term,
        "is_admin": user_is_admin(request.user),
    })


@admin_required
def catalog_add(request):
    """Přidání ptáka do katalogu."""
    form = SpeciesForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        species = form.save()
        messages.success(request, f"Ptica '{species.name_local}' je dodata.")
        return redirect("catalog_list")
    return render(request, "quiz/catalog_form.html", {"form": form, "species": None})


@admin_required
def catalog_edit(request, species_id):
    """Úprava ptáka v katalogu."""
    species = get_object_or_404(Species, id=species_id)
    form = SpeciesForm(request.POST or None, instance=species)
    if request.method == "POST" and form.is_valid():
        form.save()
        messages.success(request, f"Ptica '{species.name_local}' je izmenjena.")
        return redirect("catalog_list")
    return render(request, "quiz/catalog_form.html", {"form": form, "species": species})


@admin_required
def admin_panel(request):
    """
    Administrace: nastavení oficiálního testu a seznam povolených uživatelů.

    Oba formuláře jsou na jedné stránce; který byl odeslán, určuje
    skryté pole ``action``.
    """
    test_settings = OfficialTestSettings.load()
    settings_form = OfficialTestSettingsForm(instance=test_settings)
    user_form = AuthorizedUserForm()

    if request.method == "POST":
        action = request.POST.get("action")
        if action == "settings":
            settings_form = OfficialTestSettingsForm(request.POST, instance=test_settings)
            if settings_form.is_valid():
                settings_form.save()
                messages.success(request, "Podešavanja zvaničnog testa su sačuvana.")
                return redirect("admin_panel")
        elif action == "add_user":
            user_form = AuthorizedUserForm(request.POST)
            if user_form.is_valid():
                authorized = user_form.save()
                messages.success(request, f"Korisnik {authorized.email} je dodat.")
                return redirect("admin_panel")
        else:
            messages.error(request, "Nepoznata akcija.")
            return redirect("admin_panel")

    return render(request, "quiz/admin_panel.html", {
        "settings_form": settings_form,
        "user_form": user_form,
        "official_available": test_settings.is_available(),
        "authorized_users": AuthorizedUser.objects.all(),
    })


@admin_required
@require_POST
def authorized_user_remove(request, user_id):
    """Odebrání uživatele ze seznamu povolených."""
    authorized = get_object_or_404(AuthorizedUser, id=user_id)
    authorized.delete()
    messages.success(request, f"Korisnik {authorized.email} je uklonjen.")
    return redirect("admin_panel")


@admin_required
def admin_stats(request):
    """Souhrnné statistiky všech výsledků."""
    return render(request, "quiz/admin_stats.html", {
        "summary": summarize_results(),
        "recent_results": QuizResult.objects.all()[:20],
    })


@admin_required
def results_csv(request):
    """
    Export všech výsledků do CSV souboru.

    CSV obsahuje:
    - Email uživatele
    - Typ kvízu a zda šlo o oficiální test (1/0)
    - Počet otázek, body a úspěšnost v procentech
    - Čas dokončení
    """
    response = HttpResponse(content_type="text/csv")
    stamp = timezone.localtime().strftime("%Y%m%d")
    response["Content-Disposition"] = f"attachment; filename=rezultati_{stamp}.csv"
    writer = csv.writer(response)

    writer.writerow(["user_email", "quiz_type", "is_official", "question_count", "total_points", "success_rate", "created_at"])

    for r in QuizResult.objects.all():
        writer.writerow([
            r.user_email,
            r.quiz_type,
            "1" if r.is_official else "0",
            r.question_count,
            r.total_points,
            r.success_rate,
            timezone.localtime(r.created_at).isoformat(timespec="seconds"),
        ])

    return response
