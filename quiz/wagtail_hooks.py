"""Katalog ptáků jako snippet ve Wagtail administraci."""
from wagtail.admin.panels import FieldPanel
from wagtail.snippets.models import register_snippet
from wagtail.snippets.views.snippets import SnippetViewSet

from .models import Species


class SpeciesViewSet(SnippetViewSet):
    model = Species
    icon = "site"
    menu_label = "Ptice"
    menu_order = 200
    add_to_admin_menu = True
    list_display = ["name_local", "name_latin", "group"]
    list_filter = ["group"]
    panels = [
        FieldPanel("name_local"),
        FieldPanel("name_latin"),
        FieldPanel("group"),
        FieldPanel("media_practice"),
        FieldPanel("media_test"),
    ]


register_snippet(SpeciesViewSet)
