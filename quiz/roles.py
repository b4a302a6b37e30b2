"""
Role a oprávnění v aplikaci.

Obsahuje logiku pro:
 - rozpoznání povoleného uživatele (email na seznamu AuthorizedUser),
 - rozpoznání administrátora,
 - pravidla pro spuštění oficiálního testu,
 - dekorátor pro views, které vyžadují povoleného uživatele.
"""
import functools

from django.contrib.auth.decorators import login_required
from django.contrib.auth.models import User
from django.shortcuts import redirect

from .models import AuthorizedUser, OfficialTestSettings, QuizResult

# Název skupiny pro administrátory v Django
# Skupina se vytváří po migraci (viz signals.py)
ADMIN_GROUP = "Admin"


def get_authorization(user):
    """Vrátí záznam AuthorizedUser pro přihlášeného uživatele, nebo None."""
    if not user or not user.is_authenticated or not user.email:
        return None
    return AuthorizedUser.objects.filter(email__iexact=user.email.strip()).first()


def user_is_authorized(user: User) -> bool:
    """
    Zkontroluje, zda uživatel smí používat aplikaci.

    Povolený je uživatel, jehož email je na seznamu, nebo člen Django
    administrace (aby se správce nemohl sám zamknout).
    """
    if not user or not user.is_authenticated:
        return False
    return user.is_superuser or user.is_staff or get_authorization(user) is not None


def user_is_admin(user: User) -> bool:
    """
    Zkontroluje, zda je uživatel administrátor.

    Administrátor je buď:
    - na seznamu povolených s rolí „admin“,
    - člen skupiny "Admin", nebo
    - má příznak is_staff (Django admin přístup)
    """
    if not user or not user.is_authenticated:
        return False
    if user.is_staff or user.groups.filter(name=ADMIN_GROUP).exists():
        return True
    authorization = get_authorization(user)
    return authorization is not None and authorization.is_admin


def unauthorized_message(user):
    if not user or not user.is_authenticated:
        return None
    return (
        f"Vaša email adresa ({user.email}) nije na listi dozvoljenih korisnika. "
        "Kontaktirajte administratora za pristup."
    )


def may_start_official_test(user, quiz_type, now=None):
    """
    Smí uživatel spustit oficiální test daného typu?

    Administrátor smí vždy. Ostatní jen když je test dostupný
    a daný typ testu ještě neabsolvovali.
    """
    if user_is_admin(user):
        return True
    if not OfficialTestSettings.load().is_available(now):
        return False
    return not QuizResult.objects.has_official_attempt(user.email, quiz_type)


def authorized_required(view_func):
    """Dekorátor: přihlášený uživatel, jehož email je na seznamu povolených."""
    @login_required
    @functools.wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not user_is_authorized(request.user):
            return redirect("unauthorized")
        return view_func(request, *args, **kwargs)
    return wrapper


def admin_required(view_func):
    """Dekorátor: pouze administrátor."""
    @authorized_required
    @functools.wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not user_is_admin(request.user):
            return redirect("landing")
        return view_func(request, *args, **kwargs)
    return wrapper
