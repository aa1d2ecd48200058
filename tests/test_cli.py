"""Tests for the growl command line tool."""

import io

import pytest

from growl import GrowlError, cli


class FakeClient:
    """Client double recording calls made by the command line tool."""

    instances = []

    def __init__(self, host, session):
        self.host = host
        self.session = session
        self.calls = []
        self.closed = False
        FakeClient.instances.append(self)

    def register(self):
        self.calls.append(("register",))

    def notify(self, name, title, text=None, priority=0, sticky=False):
        self.calls.append(("notify", name, title, text, priority, sticky))

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class FailingClient(FakeClient):
    def register(self):
        raise GrowlError("not authorized")


@pytest.fixture
def clients(monkeypatch):
    FakeClient.instances = []
    monkeypatch.setattr(cli, "TextClient", FakeClient)
    monkeypatch.setattr(cli, "BinaryClient", FailingClient)
    return FakeClient.instances


def test_main(clients) -> None:
    """Test sending a notification over GNTP."""
    code = cli.main(["-H", "growl.local", "-t", "title", "-m", "message", "-P", "secret", "--priority", "1", "-s"])

    assert code == 0
    client = clients[0]
    assert client.host == "growl.local"
    assert client.session.application_name == "growl-client"
    assert client.session.password == "secret"
    assert client.session.notification_names == ["growl-client Notification"]
    assert client.calls == [
        ("register",),
        ("notify", "growl-client Notification", "title", "message", 1, True),
    ]
    assert client.closed


def test_main_stdin(clients, monkeypatch) -> None:
    """Test the message is read from STDIN when -m is omitted."""
    monkeypatch.setattr("sys.stdin", io.StringIO("from stdin"))

    code = cli.main(["-H", "growl.local", "-n", "app", "-y", "build"])

    assert code == 0
    assert clients[0].session.application_name == "app"
    assert clients[0].calls[1] == ("notify", "build", "", "from stdin", 0, False)


def test_main_udp_error(clients) -> None:
    """Test --udp selects the UDP client and errors give a non-zero exit."""
    code = cli.main(["-H", "growl.local", "-m", "message", "--udp"])

    assert code == 1
    assert isinstance(clients[0], FailingClient)
    assert clients[0].closed


def test_main_requires_host() -> None:
    """Test the host is required."""
    with pytest.raises(SystemExit):
        cli.main(["-m", "message"])


def test_parser_defaults() -> None:
    """Test default option values."""
    args = cli.build_parser().parse_args(["-H", "host"])

    assert args.priority == 0
    assert not args.sticky
    assert not args.udp
    assert args.message is None
