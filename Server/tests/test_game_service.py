from dataclasses import asdict

import pytest

from youguess.config.game_settings import ALPHABET, FALLBACK_WORDS, MAX_FAILS
from youguess.models.game import WordEntry
from youguess.services.game_service import GameService

FALLBACK_SET = {entry["word"] for entry in FALLBACK_WORDS}


@pytest.fixture
def game_id(game_service):
    game_id = game_service.create_new_game()
    game_service.start_round(game_id)
    return game_id


def play(game_service, game_id, letters):
    return [game_service.make_guess(game_id, letter) for letter in letters]


def test_new_game_is_on_landing(game_service):
    game_id = game_service.create_new_game()
    state = game_service.get_game_state(game_id)

    assert state.status == "landing"
    assert state.round_number == 0
    assert state.slots == []
    assert state.enabled_letters == []
    assert set(state.letter_status.values()) == {"UNUSED"}
    assert state.word is None


def test_start_round_hides_the_word(game_service, game_id):
    state = game_service.get_game_state(game_id)

    assert state.status == "playing"
    assert state.round_number == 1
    assert state.word_length == 4
    assert state.slots == [None, None, None, None]
    assert state.enabled_letters == ALPHABET
    assert state.max_fails == MAX_FAILS
    assert state.word is None
    assert state.definition is None
    assert "GAME" not in str(asdict(state))


def test_guesses_reveal_slots_and_mark_keyboard(game_service, game_id):
    (state, accepted), = play(game_service, game_id, ["a"])
    assert accepted is True
    assert state.slots == [None, "A", None, None]
    assert state.letter_status["A"] == "HIT"
    assert state.last_guessed_letter == "A"

    (state, accepted), = play(game_service, game_id, ["Z"])
    assert state.fails == ["Z"]
    assert state.fails_count == 1
    assert state.letter_status["Z"] == "MISS"
    assert "A" not in state.enabled_letters
    assert "Z" not in state.enabled_letters
    assert len(state.enabled_letters) == 24


def test_winning_reveals_word_and_definition(game_service, game_id):
    state, accepted = play(game_service, game_id, "GAXME")[-1]

    assert accepted is True
    assert state.status == "won"
    assert state.fails == ["X"]
    assert state.slots == ["G", "A", "M", "E"]
    assert state.word == "GAME"
    assert state.definition == "Definition of GAME."
    assert state.enabled_letters == []


def test_losing_reveals_every_letter(game_service, game_id):
    state, _ = play(game_service, game_id, "GBCDFHIJK")[-1]

    assert state.status == "lost"
    assert state.fails_count == MAX_FAILS
    assert state.slots == ["G", "A", "M", "E"]
    assert state.guessed_letters == ["G"]
    assert state.word == "GAME"


def test_duplicate_guess_is_not_accepted(game_service, game_id):
    play(game_service, game_id, "X")
    state, accepted = game_service.make_guess(game_id, "X")
    assert accepted is False
    assert state.fails == ["X"]


@pytest.mark.parametrize("letter, error", [
    ("", "Letter is required"),
    ("  ", "Letter is required"),
    (None, "Letter is required"),
    ("AB", "Letter must be a single character A-Z"),
    ("7", "Letter must be a single character A-Z"),
])
def test_malformed_letters_are_invalid(game_service, game_id, letter, error):
    assert game_service.is_valid_guess(game_id, letter) == (False, error)
    assert game_service.make_guess(game_id, letter) is None


def test_unknown_game(game_service):
    assert game_service.is_valid_guess("missing", "A") == (False, "Game not found")
    assert game_service.make_guess("missing", "A") is None
    assert game_service.get_game_state("missing") is None
    assert game_service.start_round("missing") is None


def test_background_round_is_loading_until_resolved(provider, deferred):
    service = GameService(provider, dispatcher=deferred)
    game_id = service.create_new_game()

    state = service.start_round(game_id)
    assert state.status == "loading"
    assert state.enabled_letters == []

    state, accepted = service.make_guess(game_id, "G")
    assert accepted is False
    assert state.status == "loading"

    deferred.run_all()
    assert service.get_game_state(game_id).status == "playing"


def test_restart_clears_previous_round(make_provider, deferred):
    service = GameService(make_provider("GAME", "BIRD"), dispatcher=deferred)
    game_id = service.create_new_game()
    service.start_round(game_id)
    deferred.run_all()
    play(service, game_id, "GQ")

    state = service.start_round(game_id)
    assert state.status == "loading"
    assert state.fails == []
    assert state.guessed_letters == []
    assert state.slots == []
    assert state.last_guessed_letter is None

    deferred.run_all()
    state = service.get_game_state(game_id)
    assert state.round_number == 2
    assert state.fails == []


def test_listeners_see_loading_then_ready(provider, deferred):
    service = GameService(provider, dispatcher=deferred)
    seen = []
    service.add_round_listener(lambda game_id, state: seen.append((game_id, state.status)))

    game_id = service.create_new_game()
    service.start_round(game_id)
    assert seen == [(game_id, "loading")]

    deferred.run_all()
    assert seen == [(game_id, "loading"), (game_id, "playing")]


def test_only_latest_round_survives_out_of_order_resolution(make_provider, deferred):
    provider = make_provider("GAME", "BIRD")
    service = GameService(provider, dispatcher=deferred)
    seen = []
    service.add_round_listener(lambda game_id, state: seen.append((state.round_number, state.status)))

    game_id = service.create_new_game()
    service.start_round(game_id)
    service.start_round(game_id)

    # Newer round resolves first and gets GAME; the older one gets BIRD late
    deferred.run(1)
    deferred.run(0)

    engine = service.games[game_id]["engine"]
    assert provider.calls == 2
    assert engine.state.target_word == "GAME"
    assert seen == [(1, "loading"), (2, "loading"), (2, "playing")]


def test_round_resolving_after_delete_is_dropped(provider, deferred):
    service = GameService(provider, dispatcher=deferred)
    seen = []
    service.add_round_listener(lambda game_id, state: seen.append(state.status))

    game_id = service.create_new_game()
    service.start_round(game_id)
    assert service.delete_game(game_id) is True

    deferred.run_all()
    assert seen == ["loading"]
    assert game_id not in service.games


def test_delete_game(game_service, game_id):
    assert game_service.delete_game(game_id) is True
    assert game_service.delete_game(game_id) is False


def test_cleanup_expired_games(game_service):
    idle = game_service.create_new_game()
    active = game_service.create_new_game()
    game_service.games[idle]["last_activity"] -= 120
    now = game_service.games[active]["last_activity"]

    assert game_service.cleanup_expired_games(60, now=now) == [idle]
    assert list(game_service.games) == [active]


def test_guess_refreshes_activity(game_service, game_id):
    game_service.games[game_id]["last_activity"] -= 120
    game_service.make_guess(game_id, "G")
    assert game_service.cleanup_expired_games(60) == []


class FailingProvider:
    mode = 'failing'

    def get_word(self):
        raise ConnectionError("provider unreachable")


class UnplayableProvider:
    mode = 'unplayable'

    def get_word(self):
        return WordEntry("AB", "Too short to play.")


@pytest.mark.parametrize("broken", [FailingProvider(), UnplayableProvider()])
def test_broken_provider_still_yields_a_playable_round(broken, caplog):
    service = GameService(broken)
    game_id = service.create_new_game()

    with caplog.at_level("INFO", logger="youguess"):
        state = service.start_round(game_id)

    assert state.status == "playing"
    assert service.games[game_id]["engine"].state.target_word in FALLBACK_SET
    assert "round_failed" in caplog.text


def test_broken_provider_in_background_round_reaches_listeners(deferred):
    service = GameService(FailingProvider(), dispatcher=deferred)
    seen = []
    service.add_round_listener(lambda game_id, state: seen.append(state.status))

    game_id = service.create_new_game()
    service.start_round(game_id)
    deferred.run_all()

    assert seen == ["loading", "playing"]
    assert service.get_game_state(game_id).status == "playing"


def test_broken_provider_does_not_revive_superseded_round(make_provider, deferred):
    service = GameService(FailingProvider(), dispatcher=deferred)
    game_id = service.create_new_game()
    service.start_round(game_id)
    service.start_round(game_id)

    service.word_provider = make_provider("WIND")
    deferred.run(1)
    service.word_provider = FailingProvider()
    deferred.run(0)

    assert service.games[game_id]["engine"].state.target_word == "WIND"


def test_loading_snapshot_has_no_enabled_letters(provider, deferred):
    service = GameService(provider, dispatcher=deferred)
    game_id = service.create_new_game()
    service.start_round(game_id)
    deferred.run_all()
    play(service, game_id, "GZ")

    state = service.start_round(game_id)

    assert state.status == "loading"
    assert state.enabled_letters == []
    assert set(state.letter_status.values()) == {"UNUSED"}
