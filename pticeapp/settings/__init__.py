"""
Balíček pro Django settings konfiguraci.

Obsahuje:
- base.py: Základní nastavení společná pro všechny prostředí
- dev.py: Vývojové nastavení (DEBUG=True)
- production.py: Produkční nastavení (DEBUG=False, optimalizace)
- test.py: Nastavení pro pytest (SQLite v paměti)
- local.py: Lokální nastavení (volitelné, pro přepsání v konkrétním prostředí)
"""

