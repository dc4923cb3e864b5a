"""
TranslationOrchestrator: end-to-end entry processing with fake backends
"""

import asyncio
import logging

import pytest

from ai_translate.graph import OrchestratorConfig, TranslationOrchestrator
from ai_translate.graph.nodes import merge_node
from ai_translate.models import LocalizationGroup, TranslationOutcome

from tests.conftest import by_language


def orchestrator_for(service, progress=None, **config):
    reported = progress if progress is not None else []
    return TranslationOrchestrator(service, OrchestratorConfig(**config), on_progress=reported.append)


def unit_dict(catalog, key, lang):
    return catalog.strings[key].localizations[lang].string_unit.model_dump()


@pytest.mark.asyncio
async def test_hello_de_succeeds_fr_fails(fake_service_factory, make_catalog):
    catalog = make_catalog({"Hello": {}})
    service = fake_service_factory(by_language({"de": "Hallo"}, fail=("fr",)))

    metrics = await orchestrator_for(service, languages=["de", "fr"]).run(catalog)

    assert unit_dict(catalog, "Hello", "de") == {"state": "translated", "value": "Hallo"}
    assert unit_dict(catalog, "Hello", "fr") == {"state": "error", "value": ""}
    assert metrics.translated == 1
    assert metrics.failed == 1
    assert metrics.entries == 1


@pytest.mark.asyncio
async def test_whitespace_only_key_passes_through(fake_service_factory, make_catalog):
    catalog = make_catalog({"   ": {}})
    service = fake_service_factory()

    await orchestrator_for(service, languages=["de"]).run(catalog)

    assert unit_dict(catalog, "   ", "de") == {"state": "translated", "value": "   "}
    assert service.calls == []


@pytest.mark.asyncio
async def test_units_outside_work_set_are_untouched(fake_service_factory, make_catalog):
    catalog = make_catalog({
        "Hello": {
            "localizations": {
                "en": {"stringUnit": {"state": "translated", "value": "Hello!"}},
                "ja": {"stringUnit": {"state": "translated", "value": "こんにちは"}},
                "es": {"variations": {"device": {"mac": {"stringUnit": {"state": "new", "value": ""}}}}},
            }
        }
    })
    before = catalog.strings["Hello"].model_dump()
    service = fake_service_factory(lambda prompt, fallback: "Hallo")

    await orchestrator_for(service, languages=["de"]).run(catalog)

    after = catalog.strings["Hello"].model_dump()
    for lang in ("en", "ja", "es"):
        assert after["localizations"][lang] == before["localizations"][lang]
    assert unit_dict(catalog, "Hello", "de") == {"state": "translated", "value": "Hallo"}
    assert service.calls[0]["fallback"] == "Hello!"


@pytest.mark.asyncio
async def test_completed_entry_never_touches_gate_or_service(fake_service_factory, make_catalog):
    catalog = make_catalog({
        "Hello": {"localizations": {"de": {"stringUnit": {"state": "translated", "value": "Hallo"}}}}
    })
    service = fake_service_factory()
    orchestrator = orchestrator_for(service, languages=["de"])

    metrics = await orchestrator.run(catalog)

    assert service.calls == []
    assert metrics.skipped == 1
    assert unit_dict(catalog, "Hello", "de") == {"state": "translated", "value": "Hallo"}


@pytest.mark.asyncio
async def test_force_retranslates(fake_service_factory, make_catalog):
    catalog = make_catalog({
        "Hello": {"localizations": {"de": {"stringUnit": {"state": "translated", "value": "Tag"}}}}
    })
    service = fake_service_factory(lambda prompt, fallback: "Hallo")

    await orchestrator_for(service, languages=["de"], force=True).run(catalog)

    assert unit_dict(catalog, "Hello", "de") == {"state": "translated", "value": "Hallo"}


@pytest.mark.asyncio
async def test_unsupported_unit_is_preserved_and_warned(fake_service_factory, make_catalog, caplog):
    plural = {"variations": {"plural": {"other": {"stringUnit": {"state": "new", "value": ""}}}}}
    catalog = make_catalog({"%lld items": {"localizations": {"de": plural}}})
    service = fake_service_factory()

    with caplog.at_level(logging.WARNING):
        metrics = await orchestrator_for(service, languages=["de"], force=True).run(catalog)

    assert catalog.to_json_dict()["strings"]["%lld items"]["localizations"]["de"] == plural
    assert service.calls == []
    assert metrics.unsupported == 1
    assert "[⚠️] Unsupported format in entry with key: %lld items" in caplog.messages


@pytest.mark.asyncio
async def test_failure_logging(fake_service_factory, make_catalog, caplog):
    catalog = make_catalog({"Hello": {}})
    service = fake_service_factory(by_language({}, fail=("fr",)))

    with caplog.at_level(logging.ERROR):
        await orchestrator_for(service, languages=["fr"], verbose=True).run(catalog)

    assert "[❌] Failed to translate Hello into fr" in caplog.messages
    assert "[💥] backend unavailable for fr" in caplog.messages


@pytest.mark.asyncio
async def test_progress_ten_entries_two_languages(fake_service_factory, make_catalog):
    catalog = make_catalog({f"key {i}": {} for i in range(10)})
    reported = []

    await orchestrator_for(fake_service_factory(), reported, languages=["de", "fr"]).run(catalog)

    assert reported == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


@pytest.mark.asyncio
async def test_progress_reports_every_crossed_threshold_once(fake_service_factory, make_catalog):
    catalog = make_catalog({"a": {}, "b": {}, "c": {}})
    reported = []

    await orchestrator_for(fake_service_factory(), reported, languages=["de"]).run(catalog)

    assert reported == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


@pytest.mark.asyncio
async def test_progress_counts_skipped_languages(fake_service_factory, make_catalog):
    done = {"de": {"stringUnit": {"state": "translated", "value": "x"}}}
    catalog = make_catalog({"a": {"localizations": done}, "b": {"localizations": done}})
    reported = []
    service = fake_service_factory()

    await orchestrator_for(service, reported, languages=["de"]).run(catalog)

    assert reported == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]
    assert service.calls == []


@pytest.mark.asyncio
async def test_empty_catalog_reports_nothing(fake_service_factory, make_catalog):
    reported = []

    metrics = await orchestrator_for(fake_service_factory(), reported, languages=["de"]).run(make_catalog({}))

    assert reported == []
    assert metrics.entries == 0


@pytest.mark.asyncio
async def test_in_flight_translations_bounded_by_max_parallel(fake_service_factory, make_catalog):
    catalog = make_catalog({"Hello": {}, "Bye": {}})
    service = fake_service_factory(delay=0.01)
    orchestrator = orchestrator_for(service, languages=["de", "fr", "ja", "ko", "es"], max_parallel=2)

    metrics = await orchestrator.run(catalog)

    assert service.max_in_flight == 2
    assert metrics.translated == 10
    assert orchestrator.gate.available == 2


@pytest.mark.asyncio
async def test_max_parallel_below_one_runs_serially(fake_service_factory, make_catalog):
    service = fake_service_factory(delay=0.005)
    orchestrator = orchestrator_for(service, languages=["de", "fr", "ja"], max_parallel=0)

    await orchestrator.run(make_catalog({"Hello": {}}))

    assert orchestrator.gate.limit == 1
    assert service.max_in_flight == 1


@pytest.mark.asyncio
async def test_failures_do_not_leak_permits(fake_service_factory, make_catalog):
    def always_fail(prompt, fallback):
        raise TimeoutError()

    catalog = make_catalog({f"k{i}": {} for i in range(4)})
    orchestrator = orchestrator_for(fake_service_factory(always_fail), languages=["de", "fr", "ja"], max_parallel=2)

    metrics = await orchestrator.run(catalog)

    assert metrics.failed == 12
    assert orchestrator.gate.available == 2
    assert orchestrator.gate.waiting == 0
    assert all(
        unit.string_unit.state == "error"
        for _, group in catalog.entries()
        for unit in group.localizations.values()
    )


@pytest.mark.asyncio
async def test_entries_processed_one_after_another(fake_service_factory, make_catalog):
    catalog = make_catalog({"First": {}, "Second": {}, "Third": {}})
    service = fake_service_factory(delay=0.001)

    await orchestrator_for(service, languages=["de", "fr", "ja"], max_parallel=4).run(catalog)

    fallbacks = [call["fallback"] for call in service.calls]
    assert fallbacks == ["First"] * 3 + ["Second"] * 3 + ["Third"] * 3


@pytest.mark.asyncio
async def test_comment_and_app_context_reach_prompt(fake_service_factory, make_catalog):
    catalog = make_catalog({"Save": {"comment": "Button title"}})
    service = fake_service_factory()

    await orchestrator_for(service, languages=["de"], app_context="A notes app").run(catalog)

    assert "The context is Button title\nA notes app." in service.calls[0]["prompt"]


@pytest.mark.asyncio
async def test_cancelled_run_leaves_gate_consistent(fake_service_factory, make_catalog):
    service = fake_service_factory(delay=10)
    orchestrator = orchestrator_for(service, languages=["de", "fr", "ja"], max_parallel=2)

    run = asyncio.create_task(orchestrator.run(make_catalog({"Hello": {}})))
    await asyncio.sleep(0.05)
    assert service.in_flight == 2

    run.cancel()
    with pytest.raises(asyncio.CancelledError):
        await run

    assert orchestrator.gate.available == 2
    assert orchestrator.gate.waiting == 0


def test_merge_replaces_mapping_and_keeps_other_languages():
    group = LocalizationGroup.model_validate(
        {"localizations": {"ja": {"stringUnit": {"state": "translated", "value": "やあ"}}}}
    )
    original = group.localizations

    updated = merge_node(group, [
        TranslationOutcome(language="de", translation="Hallo"),
        TranslationOutcome(language="fr", translation=None, error="timeout"),
    ])

    assert group.localizations is updated
    assert updated is not original
    assert set(original) == {"ja"}
    assert updated["ja"].string_unit.value == "やあ"
    assert updated["de"].string_unit.state == "translated"
    assert updated["fr"].string_unit.state == "error"
