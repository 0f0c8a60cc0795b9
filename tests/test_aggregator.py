"""
Tests for the real-time aggregator and prompt rendering.
"""
import threading
import time
from datetime import datetime, timezone

import pytest
import requests

from civic_chat.realtime import (
    NOTE_WITH_RESULTS,
    NOTE_WITHOUT_RESULTS,
    RealTimeAggregator,
    needs_augmentation,
    render_bundle_context,
)
from civic_chat.realtime.sources import planalto_act_range

FIXED_NOW = datetime(2026, 10, 18, 14, 5, tzinfo=timezone.utc)


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    """requests.Session stand-in routing by URL fragment."""

    def __init__(self, routes=None, delays=None, error=None):
        self.routes = routes or {}
        self.delays = delays or {}
        self.error = error
        self.calls = []
        self._lock = threading.Lock()
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        with self._lock:
            self.calls.append(url)
        for fragment, delay in self.delays.items():
            if fragment in url:
                time.sleep(delay)
        if self.error is not None:
            raise self.error
        for fragment, response in self.routes.items():
            if fragment in url:
                return response
        return FakeResponse(404)

    def close(self):
        self.closed = True


def camara_body(count):
    return {"dados": [{"siglaTipo": "PL", "numero": i, "ano": 2026} for i in range(count)]}


def deputies_body(count):
    return {"dados": [{"nome": f"Deputado {i}", "siglaPartido": "ABC"} for i in range(count)]}


def senado_body(count):
    return {"ListaParlamentarEmExercicio": {"Parlamentares": {"Parlamentar": [
        {"IdentificacaoParlamentar": {"NomeParlamentar": f"Senador {i}",
                                      "SiglaPartidoParlamentar": "XYZ"}}
        for i in range(count)
    ]}}}


@pytest.fixture
def make_aggregator():
    created = []

    def factory(session, timeout_seconds=1.0):
        aggregator = RealTimeAggregator(
            http_session=session,
            timeout_seconds=timeout_seconds,
            clock=lambda: FIXED_NOW,
        )
        created.append(aggregator)
        return aggregator

    yield factory
    for aggregator in created:
        aggregator.close()


class TestKeywordGate:

    @pytest.mark.parametrize("text", [
        "Quais projetos estão em tramitação?",
        "Quem são os SENADORES?",
        "Como está a inflação hoje",
    ])
    def test_triggers(self, text):
        assert needs_augmentation(text)

    def test_plain_question_does_not_trigger(self):
        assert not needs_augmentation("Qual é a capital da França?")

    def test_unmatched_query_makes_no_calls(self, make_aggregator):
        session = FakeSession()
        bundle = make_aggregator(session).fetch("Qual é a capital da França?")

        assert session.calls == []
        assert bundle.result_count == 0
        assert bundle.note == NOTE_WITHOUT_RESULTS


class TestFetch:

    def test_senator_query_calls_only_senado(self, make_aggregator):
        session = FakeSession(routes={"/senador/lista/atual": FakeResponse(200, senado_body(3))})
        bundle = make_aggregator(session).fetch("Quem é o senador mais jovem?")

        assert len(session.calls) == 1
        assert session.calls[0].endswith("/senador/lista/atual")
        assert [r.source for r in bundle.results] == ["Senado Federal"]
        assert bundle.note == NOTE_WITH_RESULTS
        assert bundle.generated_at == "2026-10-18T14:05:00+00:00"

    def test_item_caps(self, make_aggregator):
        session = FakeSession(routes={
            "/proposicoes": FakeResponse(200, camara_body(8)),
            "/senador/": FakeResponse(200, senado_body(15)),
        })
        bundle = make_aggregator(session).fetch("projeto no senado")

        assert [len(r.payload) for r in bundle.results] == [5, 10]

    def test_all_sources_time_out(self, make_aggregator):
        session = FakeSession(error=requests.Timeout("slow"))
        bundle = make_aggregator(session).fetch("projeto do deputado no senado")

        assert len(session.calls) == 3
        assert bundle.result_count == 0
        assert bundle.note == NOTE_WITHOUT_RESULTS
        assert render_bundle_context(bundle) == ""

    def test_bad_status_and_bad_json_dropped(self, make_aggregator):
        session = FakeSession(routes={
            "/proposicoes": FakeResponse(500),
            "/deputados": FakeResponse(200, ValueError("not json")),
            "/senador/": FakeResponse(200, senado_body(2)),
        })
        bundle = make_aggregator(session).fetch("projeto do deputado no senado")

        assert [r.kind for r in bundle.results] == ["senadores"]

    def test_empty_upstream_list_contributes_nothing(self, make_aggregator):
        session = FakeSession(routes={"/deputados": FakeResponse(200, {"dados": []})})
        bundle = make_aggregator(session).fetch("deputados")

        assert bundle.result_count == 0

    def test_order_kept_when_completion_is_out_of_order(self, make_aggregator):
        session = FakeSession(
            routes={
                "/proposicoes": FakeResponse(200, camara_body(2)),
                "/deputados": FakeResponse(200, deputies_body(2)),
                "/senador/": FakeResponse(200, senado_body(2)),
            },
            delays={"/proposicoes": 0.3, "/deputados": 0.15},
        )
        bundle = make_aggregator(session).fetch("projeto do deputado no senado")

        assert [r.kind for r in bundle.results] == ["proposições", "deputados", "senadores"]

    def test_slow_source_skipped(self, make_aggregator):
        session = FakeSession(
            routes={
                "/proposicoes": FakeResponse(200, camara_body(2)),
                "/senador/": FakeResponse(200, senado_body(2)),
            },
            delays={"/proposicoes": 1.5},
        )
        bundle = make_aggregator(session, timeout_seconds=0.1).fetch("projeto no senado")

        assert [r.kind for r in bundle.results] == ["senadores"]

    def test_concurrent_fetches_each_get_full_timeout(self, make_aggregator):
        session = FakeSession(
            routes={"/senador/": FakeResponse(200, senado_body(2))},
            delays={"/senador/": 0.8},
        )
        aggregator = make_aggregator(session, timeout_seconds=1.0)
        counts = []
        lock = threading.Lock()

        def ask():
            bundle = aggregator.fetch("senado")
            with lock:
                counts.append(bundle.result_count)

        threads = [threading.Thread(target=ask) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counts == [1] * 8
        assert len(session.calls) == 8

    def test_static_sources(self, make_aggregator):
        session = FakeSession()
        bundle = make_aggregator(session).fetch("novo decreto e votação")

        assert session.calls == []
        assert [r.source for r in bundle.results] == [
            "TSE - Tribunal Superior Eleitoral",
            "Planalto",
        ]
        assert "_ato2025-2030/2026/" in bundle.results[1].note

    def test_close_closes_session(self):
        session = FakeSession()
        RealTimeAggregator(http_session=session).close()
        assert session.closed


class TestPlanaltoRange:

    @pytest.mark.parametrize("year,expected", [
        (2012, "2011-2018"), (2019, "2019-2024"), (2024, "2019-2024"), (2026, "2025-2030"),
    ])
    def test_range(self, year, expected):
        assert planalto_act_range(year) == expected


class TestRenderBundleContext:

    def test_renders_items_and_notes(self, make_aggregator):
        session = FakeSession(routes={
            "/proposicoes": FakeResponse(200, camara_body(5)),
            "/senador/": FakeResponse(200, senado_body(1)),
        })
        bundle = make_aggregator(session).fetch("projeto no senado")
        text = render_bundle_context(bundle)

        assert "[INFORMAÇÕES EM TEMPO REAL - Buscadas agora]" in text
        assert "Última atualização: 18 de outubro de 2026 às 14:05" in text
        assert "1. Câmara dos Deputados - proposições" in text
        assert "   - PL 2" in text
        assert "   - PL 3" not in text
        assert "2. Senado Federal - senadores" in text
        assert "   - Senador 0 (XYZ)" in text
        assert f"Observação: {NOTE_WITH_RESULTS}" in text

    def test_none_bundle(self):
        assert render_bundle_context(None) == ""
