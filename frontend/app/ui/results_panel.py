import streamlit as st

COLUMNS = ["id", "title", "sponsor", "status", "startDate", "endDate", "conditions", "interventions"]


def _row(trial):
    row = {col: trial.get(col) for col in COLUMNS}
    row["conditions"] = ", ".join(trial.get("conditions") or [])
    row["interventions"] = ", ".join(trial.get("interventions") or [])
    row["url"] = trial.get("url")
    return row


def render_results(results, total, page, size):
    if not results:
        if total > 0:
            st.info(f"Page {page} is past the end of the {total} matching trials.")
        else:
            st.info("No trials match the current filters.")
        return

    first = (page - 1) * size + 1
    st.caption(f"Showing {first}–{first + len(results) - 1} of {total} trials")

    st.dataframe(
        [_row(trial) for trial in results],
        use_container_width=True,
        hide_index=True,
        column_config={
            "url": st.column_config.LinkColumn("Link", display_text="View"),
        },
    )
