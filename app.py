"""
PatternHub - Design Patterns Learning Hub

Streamlit application for learning software design patterns through
lessons and gamified challenges.

Usage:
    streamlit run app.py
"""

from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent
load_dotenv(PROJECT_ROOT / ".env")

from patternhub.classroom import (
    ProgressContext,
    ProgressUpdateError,
    progress_provider,
    use_progress,
)
from patternhub.config import configure_logging, load_settings
from patternhub.schemas import Category
from patternhub.viewer import (
    get_progress_css,
    render_stats_grid,
    render_pattern_progress,
    render_achievements,
    render_challenge_card,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Design Patterns Learning Hub",
    page_icon="🧩",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "progress_context" not in st.session_state:
        settings = load_settings()
        configure_logging(settings)
        st.session_state.progress_context = ProgressContext.create(settings)

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "home"  # home, pattern, progress

    if "current_pattern_id" not in st.session_state:
        st.session_state.current_pattern_id = None


# -----------------------------------------------------------------------------
# Sidebar: Pattern Navigation
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with pattern navigation and progress."""
    ctx = use_progress()
    st.sidebar.title("🧩 Pattern Hub")

    # Progress summary
    stats = ctx.statistics.summary(ctx.user_progress)
    st.sidebar.markdown(f"""
    **Progress:** {stats['patterns_completed']}/{stats['total_patterns']} patterns ({stats['completion_percent']}%)
    **Points:** {stats['total_points']}
    """)
    st.sidebar.progress(stats['completion_percent'] / 100)

    st.sidebar.divider()

    if st.sidebar.button("🏠 Home", use_container_width=True):
        show_view("home")
    if st.sidebar.button("🏆 Progress", use_container_width=True):
        show_view("progress")

    st.sidebar.divider()

    for category in Category:
        with st.sidebar.expander(category.value.title(), expanded=is_category_expanded(category)):
            for pattern in ctx.catalog.patterns_in_category(category):
                mastery = ctx.statistics.pattern_mastery_percent(ctx.user_progress, pattern.id)
                indicator = "✅" if pattern.id in ctx.user_progress.patterns_completed else f"{mastery}%"
                if st.button(
                    f"{pattern.name} ({indicator})",
                    key=f"pattern_{pattern.id}",
                    use_container_width=True,
                ):
                    select_pattern(pattern.id)


def is_category_expanded(category: Category) -> bool:
    """Check if a category should be expanded (contains current pattern)."""
    current_id = st.session_state.current_pattern_id
    if not current_id:
        return category == Category.CREATIONAL
    pattern = use_progress().catalog.get_pattern(current_id)
    return pattern is not None and pattern.category == category


def show_view(view_mode: str):
    st.session_state.view_mode = view_mode
    st.rerun()


def select_pattern(pattern_id: str):
    """Select a pattern and switch to its page."""
    st.session_state.current_pattern_id = pattern_id
    show_view("pattern")


# -----------------------------------------------------------------------------
# Main Content: Home View
# -----------------------------------------------------------------------------

def render_home_view():
    """Render the landing page with the catalog overview."""
    ctx = use_progress()
    st.title("Design Patterns Learning Hub")
    st.markdown("Learn the Gang of Four patterns through lessons and hands-on challenges.")

    st.markdown(get_progress_css(), unsafe_allow_html=True)
    st.markdown(render_stats_grid(ctx.statistics.summary(ctx.user_progress)), unsafe_allow_html=True)

    columns = st.columns(len(Category))
    for column, category in zip(columns, Category):
        with column:
            st.subheader(category.value.title())
            for pattern in ctx.catalog.patterns_in_category(category):
                st.markdown(f"**{pattern.name}** · {pattern.difficulty.value}")
                st.caption(pattern.description)


# -----------------------------------------------------------------------------
# Main Content: Pattern View
# -----------------------------------------------------------------------------

def render_pattern_view():
    """Render a pattern's lesson and challenges."""
    ctx = use_progress()
    pattern_id = st.session_state.current_pattern_id
    pattern = ctx.catalog.get_pattern(pattern_id) if pattern_id else None
    if not pattern:
        st.info("Select a pattern from the sidebar to begin.")
        return

    st.title(pattern.name)
    st.caption(f"{pattern.category.value} · {pattern.difficulty.value}")
    st.markdown(pattern.description)

    tab1, tab2 = st.tabs(["Lesson", "Challenges"])

    with tab1:
        lesson = ctx.load_lesson(pattern.id)
        if lesson:
            st.markdown(lesson)
        else:
            st.info("The lesson for this pattern is not available yet.")

    with tab2:
        render_challenges(pattern.id)


def render_challenges(pattern_id: str):
    """Render challenge cards with session and completion controls."""
    ctx = use_progress()
    pattern = ctx.catalog.get_pattern(pattern_id)
    completed = set(ctx.user_progress.challenges_completed)
    session = ctx.current_session

    st.markdown(get_progress_css(), unsafe_allow_html=True)
    for challenge in pattern.challenges:
        done = challenge.id in completed
        st.markdown(render_challenge_card(challenge, done), unsafe_allow_html=True)

        if challenge.hints:
            with st.expander("Show hints"):
                for hint in challenge.hints:
                    st.markdown(f"- {hint}")

        if done:
            continue

        active = session is not None and session.challenge_id == challenge.id and not session.completed
        col1, col2 = st.columns(2)
        with col1:
            if not active and st.button("Start challenge", key=f"start_{challenge.id}"):
                ctx.start_session(pattern.id, challenge.id)
                st.rerun()
        with col2:
            if st.button("Mark as complete", key=f"complete_{challenge.id}", type="primary"):
                complete_challenge(pattern.id, challenge.id, challenge.points)


def complete_challenge(pattern_id: str, challenge_id: str, points: int):
    ctx = use_progress()
    try:
        ctx.update_progress(pattern_id, challenge_id, points)
    except ProgressUpdateError as e:
        st.error(str(e))
        return
    st.rerun()


# -----------------------------------------------------------------------------
# Progress View
# -----------------------------------------------------------------------------

def render_progress_view():
    """Render the progress page: stats, mastery and achievements."""
    ctx = use_progress()
    progress = ctx.user_progress

    st.title("🏆 Your Progress")
    st.markdown("Track your learning journey through design patterns")

    st.markdown(get_progress_css(), unsafe_allow_html=True)
    st.markdown(render_stats_grid(ctx.statistics.summary(progress)), unsafe_allow_html=True)

    st.subheader("Pattern Mastery")
    st.markdown(render_pattern_progress(ctx.statistics.pattern_progress(progress)), unsafe_allow_html=True)

    st.subheader("🏅 Achievements")
    st.markdown(render_achievements(ctx.achievement_status()), unsafe_allow_html=True)

    st.divider()
    if st.button("Reset all progress"):
        ctx.reset_progress()
        st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()

    with progress_provider(st.session_state.progress_context):
        render_sidebar()

        # Main content based on view mode
        if st.session_state.view_mode == "home":
            render_home_view()
        elif st.session_state.view_mode == "pattern":
            render_pattern_view()
        elif st.session_state.view_mode == "progress":
            render_progress_view()


if __name__ == "__main__":
    main()
