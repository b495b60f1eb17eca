"""
Role assignment tests
"""

import random
from collections import Counter
from types import SimpleNamespace

import pytest
from hypothesis import given, strategies as st, settings

from impostor.schemas.room import CustomTheme, PredefinedTheme, PlayerRole
from impostor.services.role_assigner import RoleAssigner
from impostor.services.theme_catalog import ThemeCatalog, DEFAULT_THEMES, FOOTBALL_PLAYERS, FAMOUS_MOVIES


def make_players(count, with_host=True):
    return [
        SimpleNamespace(id=f"P-{i}", is_host=(with_host and i == 0))
        for i in range(count)
    ]


def make_assigner(seed=0):
    return RoleAssigner(ThemeCatalog(DEFAULT_THEMES, "Football Players"), random.Random(seed))


class TestPredefinedTheme:
    """Predefined themes: everyone is shuffled, word drawn from the list"""

    @given(
        player_count=st.integers(min_value=0, max_value=12),
        impostor_count=st.integers(min_value=0, max_value=14),
        seed=st.integers(min_value=0, max_value=1000000)
    )
    @settings(max_examples=200)
    def test_role_counts_and_shared_word(self, player_count, impostor_count, seed):
        players = make_players(player_count)
        result = make_assigner(seed).assign(players, impostor_count, PredefinedTheme(value="Famous Movies"))

        assert result.word in FAMOUS_MOVIES
        assert result.spectator_id is None
        assert result.used_fallback is False
        assert sorted(a.player_id for a in result.assignments) == sorted(p.id for p in players)

        impostors = result.with_role(PlayerRole.IMPOSTOR)
        crewmates = result.with_role(PlayerRole.CREWMATE)
        expected_impostors = min(impostor_count, player_count)

        assert len(impostors) == expected_impostors
        assert len(crewmates) == player_count - expected_impostors
        assert all(a.word is None for a in impostors)
        assert {a.word for a in crewmates} <= {result.word}

    def test_host_is_shuffled_with_everyone(self):
        players = make_players(4)
        assigner = make_assigner(7)

        host_roles = Counter(
            assigner.assign(players, 1, PredefinedTheme(value="Famous Movies")).by_player()["P-0"].role
            for _ in range(400)
        )

        assert PlayerRole.SPECTATOR not in host_roles
        assert host_roles[PlayerRole.IMPOSTOR] > 0
        assert host_roles[PlayerRole.CREWMATE] > 0

    def test_unknown_theme_falls_back_to_default_list(self):
        result = make_assigner(3).assign(make_players(5), 1, PredefinedTheme(value="Board Games"))

        assert result.used_fallback is True
        assert result.word in FOOTBALL_PLAYERS
        assert len(result.with_role(PlayerRole.CREWMATE)) == 4

    def test_same_seed_same_deal(self):
        players = make_players(6)
        theme = PredefinedTheme(value="University Majors")

        first = make_assigner(42).assign(players, 2, theme)
        second = make_assigner(42).assign(players, 2, theme)

        assert first == second


class TestCustomTheme:
    """Custom themes: the author of the word sits out"""

    @given(
        player_count=st.integers(min_value=1, max_value=10),
        impostor_count=st.integers(min_value=0, max_value=10),
        seed=st.integers(min_value=0, max_value=1000000)
    )
    @settings(max_examples=150)
    def test_host_spectates_with_the_word(self, player_count, impostor_count, seed):
        players = make_players(player_count)
        result = make_assigner(seed).assign(players, impostor_count, CustomTheme(value="Lighthouse"))

        by_player = result.by_player()
        assert result.word == "Lighthouse"
        assert result.spectator_id == "P-0"
        assert by_player["P-0"].role == PlayerRole.SPECTATOR
        assert by_player["P-0"].word == "Lighthouse"

        guests = player_count - 1
        expected_impostors = min(impostor_count, guests)
        assert len(result.with_role(PlayerRole.IMPOSTOR)) == expected_impostors
        assert len(result.with_role(PlayerRole.CREWMATE)) == guests - expected_impostors
        assert len(result.with_role(PlayerRole.SPECTATOR)) == 1

    def test_word_is_used_verbatim(self):
        result = make_assigner().assign(make_players(4), 1, CustomTheme(value="  Tea pot "))

        assert result.word == "  Tea pot "
        assert {a.word for a in result.with_role(PlayerRole.CREWMATE)} == {"  Tea pot "}

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_blank_word_keeps_host_in_play(self, value):
        result = make_assigner(5).assign(make_players(4), 1, CustomTheme(value=value))

        assert result.spectator_id is None
        assert result.with_role(PlayerRole.SPECTATOR) == []
        assert len(result.with_role(PlayerRole.IMPOSTOR)) == 1
        assert len(result.with_role(PlayerRole.CREWMATE)) == 3

    def test_no_host_means_no_spectator(self):
        result = make_assigner().assign(make_players(3, with_host=False), 1, CustomTheme(value="Moon"))

        assert result.spectator_id is None
        assert len(result.with_role(PlayerRole.IMPOSTOR)) == 1

    def test_host_only_pool_is_not_an_error(self):
        result = make_assigner().assign(make_players(1), 3, CustomTheme(value="Moon"))

        assert [a.role for a in result.assignments] == [PlayerRole.SPECTATOR]
        assert result.with_role(PlayerRole.IMPOSTOR) == []


class TestShuffleFairness:
    """Every player is equally likely to be picked"""

    def test_impostor_frequency_is_uniform(self):
        trials = 100_000
        players = make_players(5, with_host=False)
        assigner = make_assigner(2024)
        theme = CustomTheme(value="")

        picks = Counter()
        for _ in range(trials):
            result = assigner.assign(players, 2, theme)
            picks.update(a.player_id for a in result.with_role(PlayerRole.IMPOSTOR))

        expected = trials * 2 / 5
        for player in players:
            assert abs(picks[player.id] - expected) / trials < 0.01

    def test_every_pair_can_be_drawn(self):
        players = make_players(5, with_host=False)
        assigner = make_assigner(99)
        theme = PredefinedTheme(value="Famous Movies")

        pairs = {
            frozenset(a.player_id for a in assigner.assign(players, 2, theme).with_role(PlayerRole.IMPOSTOR))
            for _ in range(2000)
        }

        assert len(pairs) == 10
