from remotefonts.util.http import DEFAULT_USER_AGENT, TimeoutHTTPAdapter, create_session


def test_session_never_retries():
    session = create_session()
    for prefix in ("http://cdn.test/", "https://cdn.test/"):
        adapter = session.get_adapter(prefix)
        assert isinstance(adapter, TimeoutHTTPAdapter)
        assert adapter.max_retries.total == 0
        assert not adapter.max_retries.status_forcelist
    assert session.headers["User-Agent"] == DEFAULT_USER_AGENT
    session.close()


def test_session_timeout_defaults_to_transport():
    with create_session("agent/2", timeout=None) as session:
        assert session.get_adapter("https://cdn.test/").timeout is None
        assert session.headers["User-Agent"] == "agent/2"
