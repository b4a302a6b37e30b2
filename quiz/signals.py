"""Signály pro správu administrátorské role."""
import logging

from django.contrib.auth.models import Group, Permission
from django.contrib.contenttypes.models import ContentType
from django.db.models.signals import post_migrate
from django.dispatch import receiver

from allauth.account.signals import user_logged_in, user_signed_up

from .roles import ADMIN_GROUP, get_authorization

logger = logging.getLogger(__name__)

ADMIN_PERMISSIONS = {
    "species": {"add_species", "change_species", "delete_species", "view_species"},
    "authorizeduser": {"add_authorizeduser", "change_authorizeduser", "delete_authorizeduser", "view_authorizeduser"},
    "officialtestsettings": {"change_officialtestsettings", "view_officialtestsettings"},
    "quizresult": {"view_quizresult"},
}


def ensure_admin_group_exists():
    """Vytvoří skupinu Admin, pokud neexistuje."""
    group, _ = Group.objects.get_or_create(name=ADMIN_GROUP)
    return group


def assign_admin_permissions():
    """Přiřadí oprávnění ke quiz modelům skupině Admin."""
    admin_group = ensure_admin_group_exists()
    for ct in ContentType.objects.filter(app_label="quiz", model__in=ADMIN_PERMISSIONS.keys()):
        wanted_codenames = ADMIN_PERMISSIONS.get(ct.model, set())
        perms = Permission.objects.filter(content_type=ct, codename__in=wanted_codenames)
        admin_group.permissions.add(*perms)


def sync_admin_group(user):
    """Uživatel s rolí „admin“ na seznamu povolených patří do skupiny Admin."""
    authorization = get_authorization(user)
    if authorization is not None and authorization.is_admin:
        user.groups.add(ensure_admin_group_exists())


@receiver(post_migrate)
def create_default_groups(sender, **kwargs):
    """Vytvoří skupinu Admin a přiřadí oprávnění po migraci."""
    assign_admin_permissions()


@receiver(user_signed_up)
def assign_admin_group_on_signup(request, user, **kwargs):
    """Při registraci zařadí administrátora do skupiny Admin."""
    sync_admin_group(user)


@receiver(user_logged_in)
def check_authorization_on_login(request, user, **kwargs):
    """Při přihlášení zaloguje neautorizovaný přístup a srovná roli."""
    if get_authorization(user) is None and not user.is_staff:
        logger.warning("Přihlášení uživatele mimo seznam povolených: %s", user.email)
        return
    sync_admin_group(user)
