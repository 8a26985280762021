from pngmask.settings import Settings


def test_defaults(monkeypatch):
    for key in ("PNGMASK_LOG_LEVEL", "PNGMASK_HTTP_TIMEOUT", "PNGMASK_LOAD_WORKERS", "PNGMASK_APPEARANCE"):
        monkeypatch.delenv(key, raising=False)
    s = Settings()
    assert s.LOG_LEVEL == "INFO"
    assert s.HTTP_TIMEOUT == 10.0
    assert s.LOAD_WORKERS == 4
    assert s.APPEARANCE == "system"


def test_env_overrides_and_bad_values(monkeypatch):
    monkeypatch.setenv("PNGMASK_LOG_LEVEL", "debug")
    monkeypatch.setenv("PNGMASK_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("PNGMASK_LOAD_WORKERS", "lots")
    s = Settings()
    assert s.LOG_LEVEL == "DEBUG"
    assert s.HTTP_TIMEOUT == 2.5
    assert s.LOAD_WORKERS == 4


def test_load_workers_at_least_one(monkeypatch):
    monkeypatch.setenv("PNGMASK_LOAD_WORKERS", "0")
    assert Settings().LOAD_WORKERS == 1
