"""
Vlastní template tagy pro Django šablony.

Umožňuje použití speciálních funkcí přímo v HTML šablonách.
"""
from django import template

from quiz.constants import SUCCESS_THRESHOLD
from quiz.roles import user_is_admin

register = template.Library()


@register.filter
def is_admin(user):
    """
    Template filter pro kontrolu, zda je uživatel administrátor.

    Použití v šabloně: {% if user|is_admin %}
    """
    return user_is_admin(user)


@register.filter
def is_successful(rate):
    """Úspěšnost nad prahem 40 %. Použití: {% if result.success_rate|is_successful %}"""
    return rate is not None and rate >= SUCCESS_THRESHOLD
