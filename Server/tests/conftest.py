import pytest

from youguess import create_app
from youguess.config import TestingConfig
from youguess.models.game import WordEntry
from youguess.services.game_service import GameService
from youguess.utils.game_logger import game_logger


class ScriptedWordProvider:
    """Returns the given words in order, repeating the last one."""

    mode = 'scripted'

    def __init__(self, *words):
        self.entries = [WordEntry(word, f"Definition of {word}.") for word in words]
        self.calls = 0

    def get_word(self):
        entry = self.entries[min(self.calls, len(self.entries) - 1)]
        self.calls += 1
        return entry


class DeferredDispatcher:
    """Holds round resolutions until the test runs them."""

    def __init__(self):
        self.pending = []

    def __call__(self, func, *args):
        self.pending.append((func, args))

    def run(self, index=0):
        func, args = self.pending.pop(index)
        func(*args)

    def run_all(self):
        while self.pending:
            self.run()


@pytest.fixture(autouse=True)
def configure_logging(tmp_path):
    game_logger.configure(str(tmp_path / 'logs'), 'INFO')
    yield
    for handler in list(game_logger.logger.handlers):
        game_logger.logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def make_provider():
    return ScriptedWordProvider


@pytest.fixture
def provider():
    return ScriptedWordProvider('GAME')


@pytest.fixture
def deferred():
    return DeferredDispatcher()


@pytest.fixture
def game_service(provider):
    return GameService(provider)


@pytest.fixture
def testing_config(tmp_path):
    class Config(TestingConfig):
        LOG_DIR = str(tmp_path / 'logs')

    return Config


@pytest.fixture
def app(testing_config, game_service):
    app, _ = create_app(testing_config, game_service)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app):
    client = app.socketio.test_client(app)
    yield client
    if client.is_connected():
        client.disconnect()
