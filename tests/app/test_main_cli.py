from __future__ import annotations

import pytest

from arrsync import main as main_module
from arrsync.config import MissingConfigurationError
from arrsync.domain.errors import FetchError


def test_main_cli_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(main_module, "sync_indexers", fake_sync)

    main_module.main([])

    assert captured == {"dry_run": False}


def test_main_cli_dry_run(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(main_module, "sync_indexers", fake_sync)

    main_module.main(["--dry-run", "--verbose"])

    assert captured == {"dry_run": True}


def test_main_cli_exits_when_source_catalog_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_sync(**_: object) -> None:
        raise FetchError("Jackett", "Couldn't get indexers", status=502)

    monkeypatch.setattr(main_module, "sync_indexers", fake_sync)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([])

    assert excinfo.value.code == 1


def test_main_cli_exits_on_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_sync(**_: object) -> None:
        raise MissingConfigurationError("Missing configuration for: JACKETT_URL")

    monkeypatch.setattr(main_module, "sync_indexers", fake_sync)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([])

    assert excinfo.value.code == 2


def test_main_cli_rejects_unknown_flags() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--bogus"])

    assert excinfo.value.code == 2
