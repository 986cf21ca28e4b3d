import streamlit as st

from canslim_india.analysts.canslim import analyze_stock
from canslim_india.analysts.config import get_discovery_screens
from canslim_india.analysts.models import StockAnalysis
from canslim_india.llm.models import LLMConfig, build_llm
from canslim_india.utils.charts import create_eps_chart
from canslim_india.utils.errors import AnalysisError, ConfigurationError
from canslim_india.utils.formatting import escape_markdown, markdown_link, score_color, status_badge
from canslim_india.utils.logging_config import logger

# --- Streamlit App Configuration ---
st.set_page_config(page_title="CANSLIM.in | Indian Stock Analyzer", page_icon="📈", layout="wide")


@st.cache_resource
def get_llm():
    """Config and model are built once per server process and reused by every action."""
    config = LLMConfig.from_env()
    return build_llm(config)


def init_state():
    defaults = {
        "query": "",
        "pending": None,       # (kind, value) of the action currently in flight
        "analysis": None,
        "discovery": None,
        "discovery_label": None,
        "error": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def request_action(kind: str, value: str | None = None):
    """Button callback: record the action; it runs on the rerun that follows."""
    if kind == "analyze" and value:
        st.session_state.query = value # Sync input when clicked from discovery
    st.session_state.pending = (kind, value)


def run_pending_action(llm, screens):
    kind, value = st.session_state.pending
    try:
        if kind == "discover":
            label, discover = screens[value]
            st.session_state.discovery = None
            st.session_state.discovery_label = label
            with st.spinner(f"{label}: searching NSE/BSE..."):
                st.session_state.discovery = discover(llm)
        elif kind == "analyze":
            symbol = value or st.session_state.query
            st.session_state.error = None
            st.session_state.analysis = None
            with st.spinner(
                f"Analyzing {symbol.strip().upper()}... scanning quarterly reports, chart patterns "
                "and institutional data. This may take up to 20 seconds."
            ):
                st.session_state.analysis = analyze_stock(symbol, llm)
    except AnalysisError as e:
        logger.error(f"Analysis failed: {e}")
        st.session_state.error = e.user_message
    finally:
        # Controls are re-enabled whatever happened above
        st.session_state.pending = None
    st.rerun()


# --- Result Rendering ---

def render_criterion(criterion):
    with st.container(border=True):
        st.markdown(f"### {criterion.letter} · {criterion.name}")
        st.markdown(status_badge(criterion.status))
        st.markdown(escape_markdown(criterion.finding))
        for point in criterion.data_points:
            st.markdown(f"- {escape_markdown(point)}")
        st.caption(criterion.description)


def render_analysis(analysis: StockAnalysis):
    header_col, chart_col = st.columns([2, 1])

    with header_col:
        with st.container(border=True):
            name_col, score_col = st.columns([3, 1])
            with name_col:
                st.header(escape_markdown(analysis.company_name))
                st.markdown(f"**{escape_markdown(analysis.symbol)}** • {escape_markdown(analysis.current_price)}")
            with score_col:
                st.caption("CANSLIM SCORE")
                color = score_color(analysis.canslim_score)
                st.markdown(
                    f"<span style='font-size:2.5rem;font-weight:900;color:{color}'>{analysis.canslim_score}/100</span>",
                    unsafe_allow_html=True,
                )
            st.caption("AI SUMMARY")
            st.markdown(escape_markdown(analysis.summary))

    with chart_col:
        with st.container(border=True):
            st.caption("RECENT EPS GROWTH %")
            fig = create_eps_chart(analysis.eps_trend)
            if fig is not None:
                st.plotly_chart(fig, use_container_width=True)
            else:
                st.info("No growth data available")

    criteria = list(analysis.criteria.values())
    for row_start in range(0, len(criteria), 4):
        columns = st.columns(4)
        for column, criterion in zip(columns, criteria[row_start:row_start + 4]):
            with column:
                render_criterion(criterion)
    # 7 cards leave one slot on the last row
    with columns[-1]:
        with st.container(border=True):
            st.caption("Remember: CANSLIM is a growth strategy. Always verify with your own research.")

    if analysis.sources:
        st.markdown("---")
        st.caption("DATA SOURCES")
        st.markdown(" · ".join(markdown_link(source.title, source.uri) for source in analysis.sources))


def render_discovery(busy: bool):
    discovery = st.session_state.discovery
    if discovery is None:
        return
    st.caption(f"Discovery Results ({st.session_state.discovery_label}):")
    if not discovery.candidates:
        st.info("No candidates found right now. Try again in a moment.")
        return
    columns = st.columns(3)
    for idx, candidate in enumerate(discovery.candidates):
        with columns[idx % 3]:
            st.button(
                f"**{escape_markdown(candidate.symbol)}**",
                key=f"candidate_{idx}_{candidate.symbol}",
                help=escape_markdown(candidate.reason) or None,
                disabled=busy,
                on_click=request_action,
                args=("analyze", candidate.symbol),
                use_container_width=True,
            )
            st.caption(escape_markdown(candidate.reason))


# --- Main ---

init_state()

try:
    llm = get_llm()
except ConfigurationError as e:
    st.error(str(e))
    st.stop()

screens = get_discovery_screens()
busy = st.session_state.pending is not None
pending_kind, pending_value = st.session_state.pending or (None, None)

st.title("📈 CANSLIM.in")
st.markdown("Indian Stock Analyzer: William J. O'Neil's CANSLIM rules, checked by an AI agent with live web search.")

# --- Discovery ---
st.sidebar.header("Discover")
for key, (label, _) in screens.items():
    in_flight = pending_kind == "discover" and pending_value == key
    st.sidebar.button(
        f"⏳ {label}" if in_flight else label,
        key=f"discover_{key}",
        disabled=busy,
        on_click=request_action,
        args=("discover", key),
        use_container_width=True,
    )

# --- Search ---
input_col, button_col = st.columns([5, 1])
with input_col:
    st.text_input(
        "Stock symbol",
        key="query",
        placeholder="Enter stock symbol (e.g., RELIANCE, TCS, ZOMATO)",
        label_visibility="collapsed",
        disabled=busy,
    )
with button_col:
    st.button(
        "Analyzing..." if pending_kind == "analyze" else "Scan",
        key="scan",
        disabled=busy or not st.session_state.query.strip(),
        on_click=request_action,
        args=("analyze", None),
        use_container_width=True,
    )

render_discovery(busy)

if busy:
    run_pending_action(llm, screens)

if st.session_state.error:
    st.error(escape_markdown(st.session_state.error))

if st.session_state.analysis is not None:
    st.markdown("---")
    render_analysis(st.session_state.analysis)

# --- Footer ---
st.sidebar.markdown("---")
st.sidebar.info("Analysis is generated by an AI model and may be wrong. Not investment advice.")

# --- How to Run ---
# In your terminal, navigate to the project root directory and run:
# streamlit run src/canslim_india/streamlit_app.py
