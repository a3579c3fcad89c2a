"""
Streamlit analytics page for carbon footprint submissions.

Run with `streamlit run carbon_dashboard/main.py`. The page shows:
- A sign-in form until a session token is available
- A period selector (Last Week, Last Month, All Time)
- Four stat cards, the emission trend, the latest breakdown and category averages
"""

from typing import List

import streamlit as st
from loguru import logger

from carbon_dashboard.api import APIError, FootprintAPIClient, Period
from carbon_dashboard.charts import (
    create_category_average_chart,
    create_category_breakdown_chart,
    create_emission_trend_chart,
)
from carbon_dashboard.config import get_settings
from carbon_dashboard.services import SubmissionFeed, ViewState
from carbon_dashboard.utils.logging import setup_logging
from carbon_dashboard.views import (
    ICON_CALENDAR,
    ICON_TARGET,
    ICON_TRENDING_DOWN,
    ICON_TRENDING_UP,
    PERIOD_OPTIONS,
    StatCard,
    build_stat_cards,
    period_label,
)

ICONS = {
    ICON_TARGET: "🎯",
    ICON_CALENDAR: "📅",
    ICON_TRENDING_UP: "📈",
    ICON_TRENDING_DOWN: "📉",
}

BADGE_COLORS = {
    "default": "green",
    "secondary": "orange",
    "destructive": "red",
}


def setup_page_config() -> None:
    """Configure Streamlit page settings."""
    st.set_page_config(
        page_title="Carbon Analytics",
        page_icon="🌱",
        layout="wide",
        initial_sidebar_state="expanded"
    )


@st.cache_resource
def init_logging() -> bool:
    setup_logging()
    return True


def initialize_session_state() -> None:
    """Initialize Streamlit session state variables."""
    settings = get_settings()

    if 'api_client' not in st.session_state:
        st.session_state.api_client = FootprintAPIClient(
            base_url=settings.api_base_url,
            timeout=settings.api_timeout,
            token=settings.api_token
        )

    if 'feed' not in st.session_state:
        st.session_state.feed = SubmissionFeed(Period(settings.default_period))


def render_sidebar() -> None:
    """Render connection status and the sign-in / sign-out controls."""
    client: FootprintAPIClient = st.session_state.api_client

    st.sidebar.title("🌱 Carbon Tracker")

    st.sidebar.markdown("### 🔗 Connection Status")
    try:
        client.health_check()
        st.sidebar.success("✅ API Connected")
    except APIError:
        st.sidebar.error("❌ API Error")

    st.sidebar.markdown("### 🔑 Account")
    if client.is_authenticated:
        if st.sidebar.button("Sign out"):
            client.sign_out()
            st.session_state.feed = SubmissionFeed(st.session_state.feed.period)
            st.rerun()
        return

    with st.sidebar.form("sign_in"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        try:
            client.sign_in(email, password)
        except APIError as e:
            logger.warning(f"Sign-in failed: {e.message}")
            st.sidebar.error("Invalid email or password" if e.status_code == 401 else "Sign-in failed")
        else:
            st.session_state.feed = SubmissionFeed(st.session_state.feed.period)
            st.rerun()


def render_period_selector(feed: SubmissionFeed) -> Period:
    periods = [period for period, _ in PERIOD_OPTIONS]
    return st.selectbox(
        "Period",
        options=periods,
        index=periods.index(feed.period),
        format_func=period_label,
        key="period"
    )


def render_skeleton() -> None:
    """Placeholder cards shown while submissions load."""
    st.caption("Loading your carbon footprint analytics...")
    for col in st.columns(4):
        with col:
            with st.container(border=True):
                st.markdown("░░░░░░░░")
                st.markdown("### ░░░░")


def render_stat_card(card: StatCard) -> None:
    with st.container(border=True):
        st.markdown(f"{ICONS.get(card.icon, '')} **{card.title}**")
        if card.badge_variant is not None:
            st.markdown(f"### :{BADGE_COLORS[card.badge_variant.value]}[{card.value}]")
        else:
            st.markdown(f"### {card.value}")
        if card.description:
            if card.trend_color:
                st.markdown(f":{card.trend_color}[{card.description}]")
            else:
                st.caption(card.description)


def render_stat_cards(cards: List[StatCard]) -> None:
    for col, card in zip(st.columns(len(cards)), cards):
        with col:
            render_stat_card(card)


def render_ready(feed: SubmissionFeed) -> None:
    summary = feed.summary()

    render_stat_cards(build_stat_cards(summary))

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(create_emission_trend_chart(feed.records), use_container_width=True)
    with col2:
        st.plotly_chart(create_category_breakdown_chart(summary.latest), use_container_width=True)

    st.markdown("### Category Performance")
    st.caption("Average emissions by category over the selected period")
    st.plotly_chart(create_category_average_chart(summary.category_data), use_container_width=True)


def main() -> None:
    """Main dashboard application."""
    setup_page_config()
    init_logging()
    initialize_session_state()

    render_sidebar()

    client: FootprintAPIClient = st.session_state.api_client
    feed: SubmissionFeed = st.session_state.feed

    header, selector = st.columns([3, 1])
    with header:
        st.title("Analytics")
        st.markdown("Detailed insights into your carbon footprint")
    with selector:
        selected = render_period_selector(feed)

    if not client.is_authenticated:
        st.info("Sign in from the sidebar to see your analytics.")
        return

    if not feed.has_fetched or selected != feed.period:
        placeholder = st.empty()
        with placeholder.container():
            render_skeleton()
        feed.refresh(client, selected)
        placeholder.empty()

    if feed.state is ViewState.READY:
        render_ready(feed)

    st.markdown("---")
    st.markdown("*Carbon Tracker Dashboard*")


if __name__ == "__main__":
    main()
