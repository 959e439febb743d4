from __future__ import annotations

import html
import logging
from typing import Dict, List, Sequence

import streamlit as st

from regiondex.config import configure_logging, load_settings
from regiondex.errors import CatalogError, user_message
from regiondex.evolution import EvolutionChain, EvolutionTreeResolver
from regiondex.history import SearchHistory
from regiondex.models import DEFAULT_TYPE_COLOR, TYPE_COLORS, Record
from regiondex.pokeapi_live import PokeApiClient
from regiondex.regions import DEFAULT_REGION, region_keys, region_label
from regiondex.session import BrowsingSession, Mode

logger = logging.getLogger(__name__)

CARDS_PER_ROW = 4
MAX_MOVES_SHOWN = 10
MAX_BASE_STAT = 255

COLOR_PALETTE: Dict[str, str] = {
    "red": "#ff0000",
    "blue": "#3b4cca",
    "yellow": "#ffde00",
    "gold": "#b3a125",
}


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def build_type_chips_html(types: Sequence[str] | None) -> str:
    spans: List[str] = []
    for t in types or []:
        label = str(t)
        color = TYPE_COLORS.get(label.lower(), DEFAULT_TYPE_COLOR)
        spans.append(
            f'<span class="type-chip" style="background-color:{color};">{html.escape(label.title())}</span>'
        )
    return "".join(spans)


def render_card_html(record: Record) -> str:
    name = html.escape(record.display_name)
    image = html.escape(record.image_url or "", quote=True)
    image_html = f'<img src="{image}" alt="{html.escape(record.name)}" />' if image else ""
    return (
        f'<div class="poke-card" style="background:{record.color};">'
        '<div class="card-header">'
        f'<span class="name">{name}</span>'
        f'<span class="number">{record.number_label}</span>'
        "</div>"
        f'<div class="card-image">{image_html}</div>'
        f'<div class="card-types">{build_type_chips_html(record.types)}</div>'
        "</div>"
    )


def render_about_html(record: Record) -> str:
    abilities = ", ".join(
        capitalize_first(a.name) + (" (Hidden)" if a.is_hidden else "") for a in record.abilities
    )
    rows = [
        ("Species", capitalize_first(record.species_name or "Unknown")),
        ("Height", f"{record.height / 10:.1f} m" if record.height is not None else "Unknown"),
        ("Weight", f"{record.weight / 10:.1f} kg" if record.weight is not None else "Unknown"),
        ("Abilities", abilities or "Unknown"),
        ("Base Experience", str(record.base_experience or "Unknown")),
    ]
    items = "".join(
        f"<dt>{html.escape(label)}</dt><dd>{html.escape(value)}</dd>" for label, value in rows
    )
    return f'<dl class="about-section">{items}</dl>'


def _stat_bar_class(base_stat: int) -> str:
    percentage = base_stat / MAX_BASE_STAT * 100
    if percentage > 60:
        return "high"
    if percentage > 40:
        return "medium"
    return "low"


def render_stats_html(record: Record) -> str:
    rows: List[str] = []
    for stat in record.stats:
        width = min(100.0, stat.base_stat / MAX_BASE_STAT * 100)
        rows.append(
            '<div class="stat-item">'
            f'<span class="stat-name">{html.escape(capitalize_first(stat.name))}</span>'
            f'<div class="stat-bar"><div class="stat-bar-fill {_stat_bar_class(stat.base_stat)}" style="width:{width:.0f}%"></div></div>'
            f'<span class="stat-value">{stat.base_stat}</span>'
            "</div>"
        )
    rows.append(
        '<div class="stat-item total"><span class="stat-name">Total</span>'
        f'<span class="stat-value">{record.total_stats}</span></div>'
    )
    return f'<div class="stats-container">{"".join(rows)}</div>'


def render_moves_html(record: Record) -> str:
    items: List[str] = []
    for move in record.moves[:MAX_MOVES_SHOWN]:
        level = f"Level {move.level_learned_at}" if move.level_learned_at else "Level Unknown"
        items.append(f"<dt>{html.escape(capitalize_first(move.name))}</dt><dd>{level}</dd>")
    if not items:
        return '<p class="muted">No moves listed.</p>'
    return f'<dl class="about-section">{"".join(items)}</dl>'


def render_evolution_html(chain: EvolutionChain) -> str:
    if chain.is_empty:
        return '<div class="evo-error">Could not load evolution chain</div>'
    if chain.does_not_evolve:
        return '<div class="evo-single">This Pokemon does not evolve</div>'
    current_ids = {stage.record.id for stage in chain.stages if stage.is_current}
    rows: List[str] = []
    for path in chain.paths():
        segments: List[str] = []
        for idx, node in enumerate(path):
            current = " current" if node.record.id in current_ids else ""
            image = html.escape(node.record.image_url or "", quote=True)
            segments.append(
                f'<div class="evo-node{current}">'
                f'<img src="{image}" alt="{html.escape(node.record.name)}" />'
                f'<div class="evo-name">{html.escape(node.record.display_name)}</div>'
                f'<div class="evo-number">{node.record.number_label}</div>'
                "</div>"
            )
            if idx < len(path) - 1:
                segments.append('<div class="evo-arrow">➜</div>')
        rows.append(f'<div class="evo-path">{"".join(segments)}</div>')
    return '<div class="evo-wrapper">' + "".join(rows) + "</div>"


def inject_css() -> None:
    colors = COLOR_PALETTE
    st.markdown(
        f"""
    <style>
      :root {{
        --poke-red: {colors["red"]};
        --poke-blue: {colors["blue"]};
        --poke-yellow: {colors["yellow"]};
        --poke-gold: {colors["gold"]};
      }}
      .poke-card {{
        border-radius: 18px;
        padding: 0.9rem;
        margin-bottom: 0.4rem;
        color: #ffffff;
        box-shadow: 0 8px 20px rgba(0, 0, 0, 0.12);
      }}
      .poke-card .card-header {{
        display: flex;
        justify-content: space-between;
        font-weight: 700;
      }}
      .poke-card .card-image img {{
        width: 100%;
        max-height: 140px;
        object-fit: contain;
      }}
      .type-chip {{
        display: inline-block;
        padding: 0.15rem 0.6rem;
        margin-right: 0.3rem;
        border-radius: 999px;
        border: 1px solid rgba(255,255,255,0.6);
        color: #ffffff;
        font-size: 0.8rem;
      }}
      .about-section dt {{ font-weight: 600; color: var(--poke-blue); }}
      .about-section dd {{ margin: 0 0 0.5rem 0; }}
      .stat-item {{
        display: grid;
        grid-template-columns: 140px 1fr 48px;
        align-items: center;
        gap: 0.6rem;
      }}
      .stat-bar {{ background: rgba(0,0,0,0.08); border-radius: 6px; height: 8px; }}
      .stat-bar-fill {{ height: 8px; border-radius: 6px; }}
      .stat-bar-fill.low {{ background: var(--poke-red); }}
      .stat-bar-fill.medium {{ background: var(--poke-yellow); }}
      .stat-bar-fill.high {{ background: #4caf50; }}
      .evo-path {{ display: flex; align-items: center; gap: 0.6rem; flex-wrap: wrap; }}
      .evo-node {{ text-align: center; padding: 0.4rem; border-radius: 12px; }}
      .evo-node.current {{ outline: 2px solid var(--poke-blue); }}
      .evo-node img {{ width: 96px; height: 96px; object-fit: contain; }}
      .evo-arrow {{ font-size: 1.4rem; color: var(--poke-gold); }}
      .footer-bar {{
        margin-top: 2rem;
        padding-top: 0.8rem;
        border-top: 1px solid rgba(0, 0, 0, 0.1);
        font-size: 0.8rem;
        color: rgba(0, 0, 0, 0.6);
      }}
    </style>
    """,
        unsafe_allow_html=True,
    )


@st.cache_resource(show_spinner=False)
def get_client() -> PokeApiClient:
    return PokeApiClient(load_settings())


def ensure_state() -> None:
    settings = load_settings()
    if "catalog" not in st.session_state:
        session = BrowsingSession(get_client(), DEFAULT_REGION, settings.page_size)
        st.session_state["catalog"] = session
        st.session_state["catalog_started"] = False
    if "history" not in st.session_state:
        st.session_state["history"] = SearchHistory(settings.max_history)
    if "search_feedback" not in st.session_state:
        st.session_state["search_feedback"] = ""
    if "search_query_input" not in st.session_state:
        st.session_state["search_query_input"] = ""
    if "search_prefill" not in st.session_state:
        st.session_state["search_prefill"] = None
    if "detail" not in st.session_state:
        st.session_state["detail"] = None
    if "evolution" not in st.session_state:
        st.session_state["evolution"] = {}


def _report(exc: CatalogError, context: str) -> None:
    logger.error("Error in %s: %s", context, exc)
    st.session_state["search_feedback"] = user_message(exc)


def _select_region(session: BrowsingSession, region: str) -> None:
    st.session_state["detail"] = None
    st.session_state["search_feedback"] = ""
    with st.spinner(f"Loading {region_label(region)}..."):
        try:
            session.select_region(region)
        except CatalogError as exc:
            _report(exc, "select_region")


def _run_search(session: BrowsingSession, query: str) -> None:
    st.session_state["search_feedback"] = ""
    st.session_state["detail"] = None
    if not query:
        try:
            session.exit_search_mode()
        except CatalogError as exc:
            _report(exc, "exit_search_mode")
        return
    with st.spinner(f'Searching "{query}"...'):
        try:
            outcome = session.search(query)
        except CatalogError as exc:
            _report(exc, "search")
            return
    st.session_state["history"].add(outcome.query)


def _load_more(session: BrowsingSession) -> None:
    with st.spinner("Loading Pokemon..."):
        try:
            session.load_next_page()
        except CatalogError as exc:
            _report(exc, "load_next_page")


def _evolution_for(record: Record) -> EvolutionChain:
    cache: Dict[int, EvolutionChain] = st.session_state["evolution"]
    if record.id not in cache:
        with st.spinner("Loading evolution chain..."):
            cache.clear()
            cache[record.id] = EvolutionTreeResolver(get_client()).resolve(record)
    return cache[record.id]


def render_grid(session: BrowsingSession) -> None:
    records = session.displayed_records
    if session.mode is Mode.SEARCHING and session.search_outcome is not None:
        st.caption(f'{len(records)} result(s) for "{session.search_outcome.query}"')
    cols = st.columns(CARDS_PER_ROW)
    for idx, record in enumerate(records):
        with cols[idx % CARDS_PER_ROW]:
            st.markdown(render_card_html(record), unsafe_allow_html=True)
            if st.button("Details", key=f"open_{record.id}", width="stretch"):
                st.session_state["detail"] = session.open_detail(record)
                st.rerun()
    if session.mode is Mode.LISTING and session.has_more:
        if st.button("Load More Pokemon", key="load_more"):
            _load_more(session)
            st.rerun()


def render_detail() -> None:
    navigator = st.session_state["detail"]
    record = navigator.current
    nav_cols = st.columns([1, 1, 3, 1])
    with nav_cols[0]:
        if st.button("‹ Prev", key="detail_prev", width="stretch"):
            navigator.navigate(-1)
            st.rerun()
    with nav_cols[1]:
        if st.button("Next ›", key="detail_next", width="stretch"):
            navigator.navigate(1)
            st.rerun()
    with nav_cols[2]:
        st.caption(navigator.position_label)
    with nav_cols[3]:
        if st.button("Close", key="detail_close", width="stretch"):
            st.session_state["detail"] = None
            st.rerun()

    st.markdown(render_card_html(record), unsafe_allow_html=True)
    about_tab, stats_tab, evolution_tab, moves_tab = st.tabs(["About", "Stats", "Evolution", "Moves"])
    with about_tab:
        st.markdown(render_about_html(record), unsafe_allow_html=True)
    with stats_tab:
        st.markdown(render_stats_html(record), unsafe_allow_html=True)
    with evolution_tab:
        st.markdown(render_evolution_html(_evolution_for(record)), unsafe_allow_html=True)
    with moves_tab:
        st.markdown(render_moves_html(record), unsafe_allow_html=True)


def main() -> None:
    configure_logging(load_settings().log_level)
    st.set_page_config(page_title="RegionDex", page_icon="⚡️", layout="wide")
    inject_css()
    ensure_state()
    session: BrowsingSession = st.session_state["catalog"]
    history: SearchHistory = st.session_state["history"]

    if not st.session_state["catalog_started"]:
        st.session_state["catalog_started"] = True
        _select_region(session, session.region)

    left_col, right_col = st.columns([1, 3], gap="large")

    with left_col:
        st.markdown("## RegionDex")
        keys = region_keys()
        region_choice = st.selectbox(
            "Region",
            keys,
            index=keys.index(session.region),
            format_func=region_label,
            key="region_select",
        )
        if region_choice != session.region:
            _select_region(session, region_choice)
            st.rerun()

        if st.session_state["search_prefill"] is not None:
            st.session_state["search_query_input"] = st.session_state["search_prefill"]
            st.session_state["search_prefill"] = None
        query = st.text_input(
            "Search the Pokédex",
            placeholder="Search Pokémon or #",
            key="search_query_input",
        )
        search_cols = st.columns(2)
        with search_cols[0]:
            search_clicked = st.button("Search", key="search_submit", width="stretch")
        with search_cols[1]:
            clear_clicked = st.button(
                "Clear",
                key="clear_search",
                width="stretch",
                disabled=session.mode is Mode.LISTING and not query,
            )
        if clear_clicked:
            st.session_state["search_prefill"] = ""
            _run_search(session, "")
            st.rerun()
        if search_clicked:
            _run_search(session, query.strip())
            st.rerun()
        if msg := st.session_state.get("search_feedback"):
            st.warning(msg)

        history_placeholder = "__history_placeholder__"
        history_clear = "__history_clear__"
        history_tokens: List[str] = [history_placeholder, *history.entries]
        if len(history):
            history_tokens.append(history_clear)
        if st.session_state.pop("history_reset", False):
            st.session_state["history_select"] = history_placeholder
        history_choice = st.selectbox(
            "Search History",
            history_tokens,
            format_func=lambda token: {
                history_placeholder: "" if len(history) else "(no history)",
                history_clear: "Clear history",
            }.get(token, token),
            key="history_select",
        )
        if history_choice == history_clear:
            history.clear()
            st.session_state["history_reset"] = True
            st.rerun()
        elif history_choice != history_placeholder:
            st.session_state["search_prefill"] = history_choice
            st.session_state["history_reset"] = True
            _run_search(session, history_choice)
            st.rerun()

    with right_col:
        if st.session_state["detail"] is not None:
            render_detail()
        else:
            render_grid(session)

    st.markdown(
        '<div class="footer-bar">Pokémon and Pokémon character names are trademarks of Nintendo, '
        "Creatures, and GAME FREAK. Data from PokéAPI.</div>",
        unsafe_allow_html=True,
    )


if __name__ == "__main__":
    main()
