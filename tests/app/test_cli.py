from __future__ import annotations

import threading
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from routeplanner import main as main_module
from routeplanner.domain.ingest_pipeline import ImportSummary
from routeplanner.domain.routing import RouteSuggestion, SuggestionResult
from routeplanner.jobs import ImportJobService

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from routeplanner.jobs import ProgressLog

SUMMARY = ImportSummary(
    city_count=2,
    company_count=2,
    city_company_link_count=2,
    cargo_type_count=2,
    rule_count=3,
    unmapped_company_count=0,
)


def _service_factory(
    outcome: BaseException | None = None, paths: list[Path | None] | None = None
) -> Callable[..., ImportJobService]:
    def run_import(
        path: Path | None = None,
        *,
        cancel: threading.Event | None = None,
        progress: ProgressLog | None = None,
    ) -> ImportSummary:
        _ = cancel
        if paths is not None:
            paths.append(path)
        if progress is not None:
            progress.log("Reading feeds")
        if outcome is not None:
            raise outcome
        return SUMMARY

    def build(**_: object) -> ImportJobService:
        return ImportJobService(run_import=run_import, clear_store=lambda: None)

    return build


def test_suggest_prints_hauls(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fake_suggest(start: str, target: str) -> SuggestionResult:
        assert (start, target) == ("Rostock", "Berlin")
        return SuggestionResult(
            suggestions=[RouteSuggestion("Stahlwerk Depot", "steel", "bau_mart")],
            start_city="Rostock",
            target_city="Berlin",
        )

    monkeypatch.setattr(main_module, "suggest_routes", fake_suggest)

    main_module.main(["suggest", "Rostock", "Berlin"])

    assert capsys.readouterr().out == "Stahlwerk Depot -> steel -> bau_mart\n"


def test_suggest_prints_hints_for_unknown_city(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(
        main_module,
        "suggest_routes",
        lambda start, target: SuggestionResult(
            start_hints=["Rostock", "Berlin"], target_city="Berlin"
        ),
    )

    main_module.main(["suggest", "Rostokc", "Berlin"])

    assert capsys.readouterr().out == "Unknown start city. Did you mean: Rostock, Berlin\n"


def test_suggest_without_hauls(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(
        main_module,
        "suggest_routes",
        lambda start, target: SuggestionResult(start_city="Kiel", target_city="Berlin"),
    )

    main_module.main(["suggest", "Kiel", "Berlin"])

    assert capsys.readouterr().out == "No hauls from Kiel to Berlin.\n"


def test_map_resolves_target_then_applies(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    target_id = uuid4()
    captured: dict[str, object] = {}

    def fake_apply(alias_key: str, target: object) -> None:
        captured.update(alias_key=alias_key, target=target)

    monkeypatch.setattr(main_module, "resolve_company_id", lambda reference: target_id)
    monkeypatch.setattr(main_module, "apply_mapping", fake_apply)

    main_module.main(["map", " bau_markt ", "bau_mart"])

    assert captured == {"alias_key": "bau_markt", "target": target_id}
    assert "Mapped bau_markt onto bau_mart." in capsys.readouterr().out


def test_map_rejects_blank_alias(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "apply_mapping", lambda *_: None)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["map", "  ", "bau_mart"])

    assert excinfo.value.code == 2


def test_import_rejects_non_positive_poll_interval() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["import", "--poll-interval", "0"])

    assert excinfo.value.code == 2


def test_import_streams_progress_and_prints_summary(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    paths: list[Path | None] = []
    monkeypatch.setattr(
        main_module, "build_import_job_service", _service_factory(paths=paths)
    )

    main_module.main(["import", "--path", str(tmp_path), "--poll-interval", "0.01"])

    out = capsys.readouterr().out
    assert "Queued full import" in out
    assert "Reading feeds" in out
    assert "city_count: 2" in out
    assert "rule_count: 3" in out
    assert paths == [tmp_path]


def test_import_failure_exits_with_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        main_module,
        "build_import_job_service",
        _service_factory(outcome=RuntimeError("definitions.json missing")),
    )

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["import", "--poll-interval", "0.01"])

    assert excinfo.value.code == 1


def test_clear_uses_job_service(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(main_module, "build_import_job_service", _service_factory())

    main_module.main(["clear"])

    assert capsys.readouterr().out == "Store cleared.\n"


def test_unmapped_with_nothing_to_map(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(main_module, "list_unmapped_suggestions", list)

    main_module.main(["unmapped"])

    assert capsys.readouterr().out == "No unmapped companies.\n"


def test_missing_command_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main([])

    assert excinfo.value.code == 2


def test_unknown_log_level_exits_with_validation_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROUTEPLANNER_LOG_LEVEL", "chatty")

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["unmapped"])

    assert excinfo.value.code == 2
