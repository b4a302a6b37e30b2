"""
Konstanty sdílené generátorem otázek, stavovým automatem kvízu a views.
"""

# Typy kvízu (hodnoty odpovídají uloženým výsledkům)
QUIZ_TYPE_AUDIO = "oglasavanje"
QUIZ_TYPE_IMAGE = "slike"
QUIZ_TYPES = (QUIZ_TYPE_AUDIO, QUIZ_TYPE_IMAGE)

# Počet možností u jedné otázky podle typu kvízu
OPTION_COUNT = {
    QUIZ_TYPE_AUDIO: 4,
    QUIZ_TYPE_IMAGE: 5,
}

# Nejmenší katalog, ze kterého lze sestavit otázku s rozumnými možnostmi
MIN_CATALOG_SIZE = 4

# Rozdělení špatných možností (distraktorů)
SAME_GROUP_DISTRACTORS = 2
OTHER_GROUP_DISTRACTORS = 2

# Časování (v sekundách)
QUESTION_TIME_SECONDS = 30
TICK_SECONDS = 1
SETTLE_DELAY_SECONDS = 2.5

# Nabízené délky kvízu a délka oficiálního testu
QUIZ_SIZES = (10, 30, 60)
OFFICIAL_TEST_SIZE = 60

# Hranice úspěšnosti (v procentech) pro „uspěl / neuspěl“
SUCCESS_THRESHOLD = 40

# Volba „nevím“ - nikdy není správná, hodnotí se 0 body
DONT_KNOW = "Ne znam"
NOT_ANSWERED = "Nije odgovoreno"

# Autoři fotografií podle prefixu názvu souboru (např. „BO_Parus_major_1“)
AUTHOR_CODES = {
    "JNA": "Jelena Nikolić Antonijević",
    "BO": "Boris Okanović",
    "MM": "Miroslav Mareš",
    "EK": "Ekaterina Krasnova",
    "ZN": "Zorana Nikodijević",
    "DS": "Dragan Stanojević",
    "MR": "Mirjana Rankov",
}

# Složky v úložišti médií
AUDIO_FOLDER = "zvuk"
IMAGE_FOLDER = "slike"
AUDIO_EXTENSION = "mp3"
IMAGE_EXTENSION = "jpg"

# Stránkování katalogu
CATALOG_PAGE_SIZE = 10
