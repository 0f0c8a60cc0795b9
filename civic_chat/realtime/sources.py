"""
Public data sources consulted for real-time augmentation.

Each source is gated by its own keywords. Network sources call an open
government API; static sources only add an informational note with the
official site to check. SOURCES is listed in the order results appear
in a bundle.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from civic_chat.realtime.models import RealTimeResult

# Any of these in a message triggers a real-time lookup
REALTIME_KEYWORDS: Tuple[str, ...] = (
    "eleições", "resultados", "votação", "candidatos", "tse",
    "tramitação", "projetos", "projeto", "proposição", "proposições",
    "leis", "lei", "decreto", "decretos", "sanção", "sancionado", "sancionou",
    "câmara", "senado", "deputado", "deputados", "senador", "senadores",
    "atual", "recente", "hoje", "agora", "último", "última", "últimos",
    "plenário", "comissão", "sessão", "reunião", "aprovação", "aprovado",
    "orçamento", "pib", "inflação", "economia", "política", "governo",
    "presidente", "ministro", "ministério", "pasta",
)

CAMARA_API = "https://dadosabertos.camara.leg.br/api/v2"
SENADO_API = "https://legis.senado.leg.br/dadosabertos"


def needs_augmentation(text: str) -> bool:
    """True if the text mentions any real-time keyword (case-insensitive)."""
    lowered = text.lower()
    return any(keyword in lowered for keyword in REALTIME_KEYWORDS)


def _mentions(lowered: str, keywords: Tuple[str, ...]) -> bool:
    return any(keyword in lowered for keyword in keywords)


@dataclass(frozen=True)
class NetworkSource:
    """A source backed by an HTTP GET returning JSON."""
    name: str
    source: str
    kind: str
    keywords: Tuple[str, ...]
    reference_url: str
    max_items: int
    build_url: Callable[[datetime], str]
    extract_items: Callable[[Any], Optional[List[Dict[str, Any]]]]

    def matches(self, lowered_query: str) -> bool:
        return _mentions(lowered_query, self.keywords)

    def build_result(self, items: List[Dict[str, Any]]) -> RealTimeResult:
        return RealTimeResult(
            source=self.source,
            kind=self.kind,
            payload=list(items[:self.max_items]),
            reference_url=self.reference_url,
        )


@dataclass(frozen=True)
class StaticSource:
    """A source that contributes a fixed note instead of a network call."""
    name: str
    source: str
    kind: str
    keywords: Tuple[str, ...]
    reference_url: str
    build_note: Callable[[datetime], str]

    def matches(self, lowered_query: str) -> bool:
        return _mentions(lowered_query, self.keywords)

    def build_result(self, now: datetime) -> RealTimeResult:
        return RealTimeResult(
            source=self.source,
            kind=self.kind,
            note=self.build_note(now),
            reference_url=self.reference_url,
        )


def _camara_items(body: Any) -> Optional[List[Dict[str, Any]]]:
    if not isinstance(body, dict):
        return None
    items = body.get("dados")
    if isinstance(items, list):
        return [item for item in items if isinstance(item, dict)]
    return None


def _senado_items(body: Any) -> Optional[List[Dict[str, Any]]]:
    if not isinstance(body, dict):
        return None
    listing = body.get("ListaParlamentarEmExercicio")
    if not isinstance(listing, dict):
        return None

    members = listing.get("Parlamentares", listing.get("Parlamentar"))
    if isinstance(members, dict):
        members = members.get("Parlamentar")
    if isinstance(members, list):
        return [item for item in members if isinstance(item, dict)]
    return None


def planalto_act_range(year: int) -> str:
    """Path segment of the legislation portal for a given year."""
    if year >= 2025:
        return "2025-2030"
    if year >= 2019:
        return "2019-2024"
    return "2011-2018"


def _planalto_note(now: datetime) -> str:
    year = now.year
    return (
        f"Para leis e decretos de {year}, consulte: "
        f"https://www.planalto.gov.br/ccivil_03/_ato{planalto_act_range(year)}/{year}/"
    )


CAMARA_PROPOSALS = NetworkSource(
    name="camara_proposals",
    source="Câmara dos Deputados",
    kind="proposições",
    keywords=("projeto", "tramitação", "proposição"),
    reference_url="https://www.camara.leg.br/",
    max_items=5,
    build_url=lambda now: (
        f"{CAMARA_API}/proposicoes?ano={now.year}&itens=10&ordem=ASC&ordenarPor=id"
    ),
    extract_items=_camara_items,
)

CAMARA_DEPUTIES = NetworkSource(
    name="camara_deputies",
    source="Câmara dos Deputados",
    kind="deputados",
    keywords=("deputado",),
    reference_url="https://www.camara.leg.br/",
    max_items=5,
    build_url=lambda now: f"{CAMARA_API}/deputados?itens=10&ordem=ASC&ordenarPor=nome",
    extract_items=_camara_items,
)

SENADO_SENATORS = NetworkSource(
    name="senado_senators",
    source="Senado Federal",
    kind="senadores",
    keywords=("senado", "senador"),
    reference_url="https://www25.senado.leg.br/",
    max_items=10,
    build_url=lambda now: f"{SENADO_API}/senador/lista/atual",
    extract_items=_senado_items,
)

TSE_ELECTIONS = StaticSource(
    name="tse_elections",
    source="TSE - Tribunal Superior Eleitoral",
    kind="informações eleitorais",
    keywords=("eleições", "tse", "candidato", "votação"),
    reference_url="https://www.tse.jus.br/",
    build_note=lambda now: "Para dados eleitorais atualizados, consulte: https://www.tse.jus.br/",
)

PLANALTO_LEGISLATION = StaticSource(
    name="planalto_legislation",
    source="Planalto",
    kind="legislação",
    keywords=("lei", "decreto", "sanção", "sancionado"),
    reference_url="https://www.planalto.gov.br/",
    build_note=_planalto_note,
)

SOURCES = (
    CAMARA_PROPOSALS,
    CAMARA_DEPUTIES,
    SENADO_SENATORS,
    TSE_ELECTIONS,
    PLANALTO_LEGISLATION,
)


# Catalogue served by GET /api/sources
OFFICIAL_SOURCES: Dict[str, List[Dict[str, str]]] = {
    "oficiais": [
        {"nome": "Tribunal Superior Eleitoral (TSE)", "url": "https://www.tse.jus.br/",
         "descricao": "Dados eleitorais, candidatos e resultados"},
        {"nome": "Câmara dos Deputados", "url": "https://www.camara.leg.br/",
         "descricao": "Projetos de lei, tramitação e deputados"},
        {"nome": "Senado Federal", "url": "https://www25.senado.leg.br/",
         "descricao": "Proposições, senadores e tramitação"},
        {"nome": "Presidência da República", "url": "https://www.planalto.gov.br/",
         "descricao": "Leis, decretos e atos normativos"},
        {"nome": "Conselho Nacional de Justiça (CNJ)", "url": "https://www.cnj.jus.br/",
         "descricao": "Normas judiciais e jurisprudência"},
    ],
    "apis": [
        {"nome": "Dados Abertos - Câmara", "url": "https://dadosabertos.camara.leg.br/",
         "descricao": "API para dados da Câmara dos Deputados"},
        {"nome": "Dados Abertos - Senado", "url": "https://legis.senado.leg.br/dadosabertos/",
         "descricao": "API para dados do Senado Federal"},
    ],
    "verificacao": [
        {"nome": "Agência Lupa", "url": "https://piaui.folha.uol.com.br/lupa/",
         "descricao": "Verificação de fatos e checagem"},
        {"nome": "Aos Fatos", "url": "https://www.aosfatos.org/",
         "descricao": "Verificação de informações"},
    ],
}
