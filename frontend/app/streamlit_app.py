import sys
from pathlib import Path
import streamlit as st

# Ensure imports work
frontend_root = Path(__file__).parent.parent.resolve()
if str(frontend_root) not in sys.path:
    sys.path.append(str(frontend_root))

from api_clients.trial_api import get_statuses, search_trials  # Import from api_clients
from app.ui.results_panel import render_results
from app.ui.search_bar import render_search_bar

# ============================================
# Streamlit Page Config
# ============================================
st.set_page_config(
    page_title="Clinical Trial Finder",
    layout="wide",
    initial_sidebar_state="expanded"
)

SORT_LABELS = {
    "startDate": "Start Date",
    "endDate": "End Date",
    "title": "Title",
    "sponsor": "Sponsor",
    "status": "Status",
}
COMPARISONS = [">=", "<="]


# ============================================
# Session State
# ============================================
if "page_num" not in st.session_state:
    st.session_state.page_num = 1

if "statuses" not in st.session_state:
    st.session_state.statuses = get_statuses()


def reset_page():
    st.session_state.page_num = 1


st.title("Clinical Trial Finder")

# ============================================
# Free-text search
# ============================================
phrases, match_all, synonym_expansion = render_search_bar(on_change=reset_page)

# ============================================
# Sorting
# ============================================
sort_col, dir_col = st.columns([3, 1])
with sort_col:
    sort_by = st.selectbox(
        "Sort by",
        options=list(SORT_LABELS),
        format_func=SORT_LABELS.get,
        on_change=reset_page,
    )
with dir_col:
    sort_dir = st.radio("Direction", ["asc", "desc"], horizontal=True, on_change=reset_page)

# ============================================
# Column filters
# ============================================
f1, f2, f3, f4, f5 = st.columns(5)
with f1.popover("Title"):
    title_filter = st.text_input("Title contains", on_change=reset_page)
with f2.popover("Sponsor"):
    sponsor_filter = st.text_input("Sponsor contains", on_change=reset_page)
with f3.popover("Status"):
    status_filter = st.selectbox(
        "Status", [""] + st.session_state.statuses, on_change=reset_page
    )
with f4.popover("Start Date"):
    start_comparison = st.selectbox("Start comparison", COMPARISONS, index=0, on_change=reset_page)
    start_date = st.date_input("Start date", value=None, on_change=reset_page)
with f5.popover("End Date"):
    end_comparison = st.selectbox("End comparison", COMPARISONS, index=1, on_change=reset_page)
    end_date = st.date_input("End date", value=None, on_change=reset_page)

payload = {
    "filters": phrases,
    "matchAll": match_all,
    "synonymExpansion": synonym_expansion,
    "page": st.session_state.page_num,
    "sortBy": sort_by,
    "sortDir": sort_dir,
    "titleFilter": title_filter,
    "sponsorFilter": sponsor_filter,
    "statusFilter": status_filter,
    "startDateFilter": start_date.isoformat() if start_date else "",
    "startComparison": start_comparison,
    "endDateFilter": end_date.isoformat() if end_date else "",
    "endComparison": end_comparison,
}

# ============================================
# Results + pagination
# ============================================
with st.spinner("Searching trials…"):
    data = search_trials(payload)

if data is None:
    st.error("Search failed. Check that the backend is running.")
    st.stop()

total = data.get("total", 0)
size = data.get("size") or 10
page = data.get("page", st.session_state.page_num)
page_count = max(1, -(-total // size))

render_results(data.get("results", []), total, page, size)

prev_col, info_col, next_col = st.columns([1, 2, 1])
with prev_col:
    if st.button("← Previous", disabled=page <= 1):
        st.session_state.page_num = page - 1
        st.rerun()
with info_col:
    st.markdown(f"Page **{page}** of **{page_count}**")
with next_col:
    if st.button("Next →", disabled=page >= page_count):
        st.session_state.page_num = page + 1
        st.rerun()
