"""
Role assignment service
Picks the secret word and deals IMPOSTOR / CREWMATE / SPECTATOR roles
"""

import logging
import random
from typing import Sequence, Tuple, Union

from impostor.schemas.room import CustomTheme, PredefinedTheme, PlayerRole
from impostor.schemas.assignment import PlayerAssignment, RoleAssignment
from impostor.services.theme_catalog import ThemeCatalog

logger = logging.getLogger(__name__)


class RoleAssigner:
    """Computes a role and word for every player of a room"""

    def __init__(self, catalog: ThemeCatalog, rng: random.Random):
        self.catalog = catalog
        self.rng = rng

    def resolve_word(self, theme: Union[CustomTheme, PredefinedTheme]) -> Tuple[str, bool]:
        """Secret word for this game and whether the catalog fallback was used"""
        if isinstance(theme, CustomTheme):
            return theme.value, False
        if isinstance(theme, PredefinedTheme):
            return self.catalog.pick_word(theme.value, self.rng)
        raise TypeError(f"Unsupported theme: {theme!r}")

    def assign(self, players: Sequence, impostor_count: int,
               theme: Union[CustomTheme, PredefinedTheme]) -> RoleAssignment:
        """
        Deal roles for one game.

        ``players`` only needs ``id`` and ``is_host`` attributes. With a
        non-blank custom word the host wrote the word, so they sit out as
        SPECTATOR and see it. Everyone else is shuffled; the first
        ``impostor_count`` become IMPOSTOR (no word), the rest CREWMATE.
        """
        word, used_fallback = self.resolve_word(theme)

        pool = list(players)
        assignments = []
        spectator_id = None

        if isinstance(theme, CustomTheme) and not theme.is_blank:
            host = next((p for p in pool if p.is_host), None)
            if host is not None:
                pool = [p for p in pool if p is not host]
                spectator_id = host.id
                assignments.append(PlayerAssignment(
                    player_id=host.id,
                    role=PlayerRole.SPECTATOR,
                    word=word,
                ))

        # Random.shuffle is Fisher-Yates: every ordering equally likely
        self.rng.shuffle(pool)

        for i, player in enumerate(pool):
            if i < impostor_count:
                assignments.append(PlayerAssignment(player_id=player.id, role=PlayerRole.IMPOSTOR))
            else:
                assignments.append(PlayerAssignment(player_id=player.id, role=PlayerRole.CREWMATE, word=word))

        logger.debug(
            f"Assigned {min(impostor_count, len(pool))} impostors among {len(pool)} players"
            f"{' with host spectating' if spectator_id else ''}"
        )

        return RoleAssignment(
            word=word,
            assignments=assignments,
            spectator_id=spectator_id,
            used_fallback=used_fallback,
        )
