import streamlit as st

def render_search_bar(on_change=None):
    """
    Free-text phrases plus match mode / synonym toggles.
    `on_change` fires whenever any of them changes (e.g. to go back to page 1).
    Returns (phrases, match_all, synonym_expansion).
    """
    st.subheader("Search Terms")
    raw = st.text_input(
        "Optional Free-Text Query (comma-separated phrases)",
        placeholder="e.g. NSCLC, immunotherapy, lung",
        on_change=on_change,
    )
    col1, col2 = st.columns(2)
    with col1:
        match_all = st.toggle("Match all phrases", value=False, on_change=on_change)
    with col2:
        synonym_expansion = st.toggle("Expand synonyms", value=False, on_change=on_change)

    phrases = [p.strip() for p in raw.split(",") if p.strip()]
    return phrases, match_all, synonym_expansion
