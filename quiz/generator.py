"""
Generátor otázek kvízu.

Z katalogu ptáků vybere ptáky pro otázky tak, aby se střídaly taxonomické
skupiny, a ke každému sestaví sadu možností:
 - až 2 ptáci ze stejné skupiny (snadno zaměnitelní),
 - až 2 ptáci z jiných skupin,
 - případné doplnění náhodnými ptáky z celého katalogu.

Výsledek je záměrně náhodný, testy proto ověřují vlastnosti výsledku,
ne konkrétní hodnoty.
"""
import logging
import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .constants import (
    MIN_CATALOG_SIZE,
    OPTION_COUNT,
    OTHER_GROUP_DISTRACTORS,
    QUIZ_TYPE_AUDIO,
    SAME_GROUP_DISTRACTORS,
)
from .domain import Question, SpeciesRecord
from .exceptions import CatalogInsufficientError, MediaUnavailableError
from .media import MediaLocator, author_for

logger = logging.getLogger(__name__)


class _OptionSet:
    """Možnosti jedné otázky, bez duplicit podle id i podle názvu."""

    def __init__(self, correct: SpeciesRecord, target: int):
        self.target = target
        self.items: List[SpeciesRecord] = [correct]
        self._ids = {correct.id}
        self._names = {correct.name_local}

    @property
    def full(self) -> bool:
        return len(self.items) >= self.target

    def add(self, species: SpeciesRecord) -> bool:
        if self.full or species.id in self._ids or species.name_local in self._names:
            return False
        self.items.append(species)
        self._ids.add(species.id)
        self._names.add(species.name_local)
        return True

    def take(self, candidates: Iterable[SpeciesRecord], limit: int) -> int:
        """Přidá nejvýše ``limit`` kandidátů v zadaném pořadí."""
        added = 0
        for candidate in candidates:
            if added >= limit or self.full:
                break
            if self.add(candidate):
                added += 1
        return added


def _group_species(species: Iterable[SpeciesRecord]) -> Dict[int, List[SpeciesRecord]]:
    groups: Dict[int, List[SpeciesRecord]] = {}
    for bird in species:
        groups.setdefault(bird.group, []).append(bird)
    return groups


def _shuffled(items: Iterable, rng: random.Random) -> list:
    result = list(items)
    rng.shuffle(result)
    return result


def _pick_question_species(
    species: Sequence[SpeciesRecord],
    groups: Dict[int, List[SpeciesRecord]],
    size: int,
    rng: random.Random,
) -> List[SpeciesRecord]:
    """
    Vybere ptáky, na které se budou otázky ptát.

    Nejprve jeden pták z každé skupiny (skupiny v náhodném pořadí), pak
    doplnění náhodnými nepoužitými ptáky. Pořadí výsledku je znovu zamícháno.
    """
    selected: List[SpeciesRecord] = []
    used_ids = set()

    for group_id in _shuffled(groups, rng):
        if len(selected) >= size:
            break
        selected_bird = rng.choice(groups[group_id])
        selected.append(selected_bird)
        used_ids.add(selected_bird.id)

    missing = size - len(selected)
    if missing > 0:
        remaining = [bird for bird in species if bird.id not in used_ids]
        selected.extend(rng.sample(remaining, min(missing, len(remaining))))

    rng.shuffle(selected)
    return selected


def _build_options(
    correct: SpeciesRecord,
    species: Sequence[SpeciesRecord],
    groups: Dict[int, List[SpeciesRecord]],
    target: int,
    rng: random.Random,
) -> Tuple[SpeciesRecord, ...]:
    options = _OptionSet(correct, target)

    same_group = [bird for bird in groups[correct.group] if bird.id != correct.id]
    options.take(_shuffled(same_group, rng), SAME_GROUP_DISTRACTORS)

    # Z jiných skupin bereme po jednom ptákovi z náhodně zvolených skupin
    other_limit = min(OTHER_GROUP_DISTRACTORS, target - len(options.items))
    other_groups = [group_id for group_id in groups if group_id != correct.group]
    added = 0
    for group_id in _shuffled(other_groups, rng):
        if added >= other_limit:
            break
        added += options.take(_shuffled(groups[group_id], rng), 1)
    if added < other_limit:
        others = [bird for bird in species if bird.group != correct.group]
        options.take(_shuffled(others, rng), other_limit - added)

    # Doplnění z celého katalogu; malý katalog může dát méně možností
    options.take(_shuffled(species, rng), target)

    return tuple(_shuffled(options.items, rng))


def _resolve_media(
    correct: SpeciesRecord,
    quiz_type: str,
    official: bool,
    media: MediaLocator,
    rng: random.Random,
) -> Tuple[str, str, Optional[str]]:
    """Vrátí (adresa, klíč souboru, autor) pro médium otázky."""
    if quiz_type == QUIZ_TYPE_AUDIO:
        try:
            return media.audio_url(correct.name_latin), correct.name_latin, None
        except MediaUnavailableError:
            logger.warning("Pták %s nemá latinský název, zvuk se nezobrazí.", correct.id)
            return "", "", None

    pool = correct.media_pool(official)
    key = rng.choice(pool) if pool else ""
    try:
        url = media.image_url(key)
    except MediaUnavailableError:
        logger.warning(
            "Pták %s nemá fotografie (%s), zobrazí se zástupný text.",
            correct.id,
            "test" if official else "procvičování",
        )
        return "", "", None
    return url, key, author_for(key)


def generate_questions(
    species: Iterable[SpeciesRecord],
    size: int,
    quiz_type: str = QUIZ_TYPE_AUDIO,
    official: bool = False,
    media: Optional[MediaLocator] = None,
    rng: Optional[random.Random] = None,
) -> List[Question]:
    """
    Vygeneruje otázky kvízu.

    Args:
        species: Katalog ptáků
        size: Požadovaný počet otázek
        quiz_type: QUIZ_TYPE_AUDIO (4 možnosti) nebo QUIZ_TYPE_IMAGE (5 možností)
        official: Použít fotografie pro oficiální test místo fotografií pro procvičování
        media: Převod klíčů médií na adresy
        rng: Zdroj náhody (pro testy)

    Returns:
        Seznam ``min(size, počet různých ptáků)`` otázek

    Raises:
        CatalogInsufficientError: V katalogu jsou méně než 4 různí ptáci
    """
    if quiz_type not in OPTION_COUNT:
        raise ValueError(f"Neznámý typ kvízu: {quiz_type!r}")
    if size < 0:
        raise ValueError("Počet otázek nesmí být záporný.")

    rng = rng or random.Random()
    media = media or MediaLocator("")

    # Každý pták jen jednou (podle id)
    unique = list({bird.id: bird for bird in species}.values())
    if len(unique) < MIN_CATALOG_SIZE:
        raise CatalogInsufficientError(len(unique), MIN_CATALOG_SIZE)

    groups = _group_species(unique)
    target = OPTION_COUNT[quiz_type]

    questions = []
    for correct in _pick_question_species(unique, groups, size, rng):
        media_url, media_key, author = _resolve_media(correct, quiz_type, official, media, rng)
        questions.append(Question(
            correct=correct,
            options=_build_options(correct, unique, groups, target, rng),
            media_url=media_url,
            media_key=media_key,
            author=author,
        ))

    logger.debug("Vygenerováno %s otázek (%s, oficiální=%s).", len(questions), quiz_type, official)
    return questions
