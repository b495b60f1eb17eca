"""
Theme catalog
Predefined word lists keyed by theme name
"""

import logging
import random
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from impostor.core.config import settings

logger = logging.getLogger(__name__)


FOOTBALL_PLAYERS = [
    "Lionel Messi", "Cristiano Ronaldo", "Kylian Mbappé", "Erling Haaland",
    "Neymar", "Luka Modrić", "Kevin De Bruyne", "Mohamed Salah",
    "Robert Lewandowski", "Virgil van Dijk", "Zinedine Zidane", "Ronaldinho",
    "Andrés Iniesta", "Xavi Hernández", "Diego Maradona", "Pelé",
    "Johan Cruyff", "Thierry Henry", "Sergio Ramos", "Vinícius Júnior",
]

FAMOUS_MOVIES = [
    "Titanic", "The Godfather", "Star Wars", "Jurassic Park", "The Matrix",
    "Inception", "Avatar", "Toy Story", "The Lion King", "Pulp Fiction",
    "Forrest Gump", "Gladiator", "Interstellar", "Shrek", "Back to the Future",
    "Jaws", "Frozen", "Casablanca", "The Dark Knight", "Finding Nemo",
]

UNIVERSITY_MAJORS = [
    "Medicine", "Law", "Architecture", "Psychology", "Computer Science",
    "Economics", "Mechanical Engineering", "Philosophy", "Biology",
    "Chemistry", "Mathematics", "Journalism", "History", "Nursing",
    "Fine Arts", "Physics", "Civil Engineering", "Marketing", "Music",
    "Veterinary Medicine",
]

DEFAULT_THEMES: Dict[str, List[str]] = {
    "Football Players": FOOTBALL_PLAYERS,
    "Famous Movies": FAMOUS_MOVIES,
    "University Majors": UNIVERSITY_MAJORS,
}


class ThemeCatalog:
    """Read-only lookup of predefined word lists"""

    def __init__(self, themes: Mapping[str, Sequence[str]], default_key: str):
        if not themes:
            raise ValueError("Theme catalog needs at least one theme")
        for name, words in themes.items():
            if not words:
                raise ValueError(f"Theme {name!r} has no words")
        if default_key not in themes:
            raise ValueError(f"Default theme {default_key!r} is not in the catalog")

        self._themes = {name: tuple(words) for name, words in themes.items()}
        self.default_key = default_key

    def names(self) -> List[str]:
        return list(self._themes)

    def lookup(self, key: str) -> Optional[Tuple[str, ...]]:
        return self._themes.get(key)

    @property
    def default_words(self) -> Tuple[str, ...]:
        return self._themes[self.default_key]

    def pick_word(self, key: str, rng: random.Random) -> Tuple[str, bool]:
        """
        Draw one word uniformly from the named list.

        Unknown keys fall back to the default list. Returns the word and
        whether the fallback was used.
        """
        words = self.lookup(key)
        fell_back = words is None
        if fell_back:
            logger.warning(f"Unknown predefined theme {key!r}, using {self.default_key!r}")
            words = self.default_words
        return rng.choice(words), fell_back


# Global catalog instance
theme_catalog = ThemeCatalog(DEFAULT_THEMES, settings.DEFAULT_THEME)
