"""
Hlavní URL konfigurace pro Django aplikaci.

Definuje všechny URL cesty pro:
- Kvíz (úvodní obrazovka, běh kvízu, historie výsledků)
- Katalog ptáků (prohlížení, přidání, úprava)
- Administraci (oficiální test, povolení uživatelé, statistiky, export)
- Autentizaci (allauth)
- Admin rozhraní (Django admin a Wagtail)
"""
from django.conf import settings
from django.contrib import admin
from django.urls import include, path

from wagtail.admin import urls as wagtailadmin_urls
from wagtail.documents import urls as wagtaildocs_urls

from quiz import views as quiz_views

urlpatterns = [
    # Hlavní stránka
    path("", quiz_views.landing, name="landing"),
    path("nedozvoljeno/", quiz_views.unauthorized, name="unauthorized"),

    # Admin rozhraní
    path("django-admin/", admin.site.urls),  # Django admin
    path("cms/", include(wagtailadmin_urls)),  # Wagtail admin (katalog jako snippet)
    path("documents/", include(wagtaildocs_urls)),  # Wagtail dokumenty

    # Autentizace (přihlášení, Google OAuth)
    path("accounts/", include("allauth.urls")),

    # Kvíz
    path("kviz/", quiz_views.quiz_play, name="quiz_play"),
    path("istorija/", quiz_views.history, name="history"),
    path("istorija/<int:result_id>/", quiz_views.history_detail, name="history_detail"),

    # Katalog ptáků
    path("katalog/", quiz_views.catalog_list, name="catalog_list"),
    path("katalog/dodaj/", quiz_views.catalog_add, name="catalog_add"),
    path("katalog/<int:species_id>/izmeni/", quiz_views.catalog_edit, name="catalog_edit"),

    # Administrace
    path("admin-panel/", quiz_views.admin_panel, name="admin_panel"),
    path("admin-panel/korisnici/<int:user_id>/ukloni/", quiz_views.authorized_user_remove, name="authorized_user_remove"),
    path("admin-panel/statistika/", quiz_views.admin_stats, name="admin_stats"),
    path("admin-panel/rezultati.csv", quiz_views.results_csv, name="results_csv"),
]

# V DEBUG režimu přidáme podporu pro statické soubory a média
if settings.DEBUG:
    from django.conf.urls.static import static
    from django.contrib.staticfiles.urls import staticfiles_urlpatterns

    # Statické soubory (CSS, JS, obrázky)
    urlpatterns += staticfiles_urlpatterns()
    # Média (lokálně uložené nahrávky a fotografie)
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
