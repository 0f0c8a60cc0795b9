"""
Render a RealTimeBundle as text appended to the user's message.

Only the first few items of each result are listed, using the fields
the public APIs expose (nome/sigla for people and parties, siglaTipo/
numero for bills).
"""
from typing import Any, Dict, List, Optional

from civic_chat.realtime.models import RealTimeBundle

ITEMS_PER_RESULT = 3


def _describe_item(item: Dict[str, Any]) -> Optional[str]:
    name = item.get("nome")
    if not name:
        identification = item.get("IdentificacaoParlamentar")
        if isinstance(identification, dict):
            name = identification.get("NomeParlamentar")
            party = identification.get("SiglaPartidoParlamentar")
            if isinstance(name, str) and name:
                return f"{name} ({party})" if isinstance(party, str) and party else name

    if isinstance(name, str) and name:
        acronym = item.get("sigla") or item.get("siglaPartido")
        if isinstance(acronym, str) and acronym:
            return f"{name} ({acronym})"
        return name

    bill_type = item.get("siglaTipo")
    if isinstance(bill_type, str) and bill_type:
        number = item.get("numero")
        if isinstance(number, (int, float)) and not isinstance(number, bool):
            return f"{bill_type} {number:.0f}"
        return bill_type

    return None


def render_bundle_context(bundle: Optional[RealTimeBundle]) -> str:
    """
    Format the bundle for the prompt.

    Returns:
        The text block, or an empty string when the bundle has no results
    """
    if bundle is None or not bundle.results:
        return ""

    lines: List[str] = [
        "",
        "",
        "[INFORMAÇÕES EM TEMPO REAL - Buscadas agora]",
        f"Última atualização: {bundle.generated_at_display}",
        "",
    ]

    for position, result in enumerate(bundle.results, start=1):
        lines.append("")
        lines.append(f"{position}. {result.source} - {result.kind}")

        for item in (result.payload or [])[:ITEMS_PER_RESULT]:
            description = _describe_item(item)
            if description:
                lines.append(f"   - {description}")

        if result.note:
            lines.append(f"   Nota: {result.note}")
        if result.reference_url:
            lines.append(f"   URL: {result.reference_url}")

    if bundle.note:
        lines.append("")
        lines.append(f"Observação: {bundle.note}")

    lines.append("")
    lines.append("Use essas informações em tempo real para complementar sua resposta quando relevante.")

    return "\n".join(lines) + "\n"
