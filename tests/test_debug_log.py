import logging

from debug_log import DebugLogger


def test_writes_context_to_file(tmp_path):
    log_file = tmp_path / "log" / "requests.log"
    logger = DebugLogger(level="debug", log_file=str(log_file), name="test-debug-log")
    try:
        logger.debug("Request URL", url="http://registry.test/v2/_catalog")
    finally:
        logger.close()
    content = log_file.read_text()
    assert "Request URL | url=http://registry.test/v2/_catalog" in content


def test_level_filters_messages(tmp_path):
    log_file = tmp_path / "app.log"
    logger = DebugLogger(level="WARNING", log_file=str(log_file), name="test-debug-level")
    try:
        logger.debug("hidden")
        logger.error("Fetch failed", error="timed out")
    finally:
        logger.close()
    content = log_file.read_text()
    assert "hidden" not in content
    assert "Fetch failed | error=timed out" in content


def test_masks_credentials(tmp_path):
    log_file = tmp_path / "app.log"
    logger = DebugLogger(level="INFO", log_file=str(log_file), name="test-debug-mask")
    try:
        logger.info("Auth", password="hunter2", user="me")
    finally:
        logger.close()
    content = log_file.read_text()
    assert "hunter2" not in content
    assert "password=[REDACTED]" in content


def test_unknown_level_falls_back_to_warning():
    logger = DebugLogger(level="chatty", log_file=None, name="test-debug-fallback")
    assert logger.level == logging.WARNING
    assert DebugLogger(level="10", log_file=None, name="test-debug-numeric").level == logging.DEBUG


def test_verbose_routes_http_library_logs_to_file(tmp_path):
    import httpx

    from registry_client import RegistryClient

    log_file = tmp_path / "verbose.log"
    logger = DebugLogger(level="DEBUG", log_file=str(log_file), verbose=True, name="test-debug-verbose")
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"repositories": ["alpine"]}))
    try:
        with RegistryClient("http://registry.test", transport=transport, debug_logger=logger) as client:
            assert client.fetch_catalog() == ["alpine"]
    finally:
        logger.close()
    content = log_file.read_text()
    assert "HTTP Request" in content
    assert "Request URL | url=http://registry.test/v2/_catalog" in content
    assert logger.handler is None
    assert not logging.getLogger("httpx").handlers


def test_http_library_loggers_untouched_without_verbose(tmp_path):
    logger = DebugLogger(level="DEBUG", log_file=str(tmp_path / "quiet.log"), name="test-debug-quiet")
    try:
        for library in ("httpx", "httpcore"):
            assert logging.getLogger(library).level == logging.NOTSET
            assert not logging.getLogger(library).handlers
    finally:
        logger.close()


def test_same_name_and_file_share_one_handler(tmp_path):
    log_file = tmp_path / "shared.log"
    first = DebugLogger(level="INFO", log_file=str(log_file), name="test-debug-shared")
    second = DebugLogger(level="INFO", log_file=str(log_file), name="test-debug-shared")
    try:
        assert len(logging.getLogger("test-debug-shared").handlers) == 1
        second.info("Fetched", count=3)
    finally:
        second.close()
        first.close()
    assert log_file.read_text().count("Fetched | count=3") == 1
    assert not logging.getLogger("test-debug-shared").handlers
