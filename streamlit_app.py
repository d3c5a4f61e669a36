# streamlit run streamlit_app.py
import os
import sys

from mealrank.user_interface import handle_recipe_url

def _is_streamlit_runtime() -> bool:
    try:
        import streamlit.runtime as rt  # type: ignore
        return getattr(rt, "exists", lambda: False)()
    except Exception:
        return any(k in os.environ for k in ["STREAMLIT_SERVER_PORT", "STREAMLIT_BROWSER_GATHER_USAGE_STATS"])

if not _is_streamlit_runtime():
    sys.stderr.write(
        "This script must be run with Streamlit.\n"
        "Try:  streamlit run streamlit_app.py\n"
    )
    sys.exit(1)

import streamlit as st

# ---------- Initialize session_state ----------
st.session_state.setdefault("page", "home")          # "home" | "waiting" | "results"
st.session_state.setdefault("url", "")
st.session_state.setdefault("result", None)

# ---------- Page Setting ----------
st.set_page_config(page_title="Recipe Import", page_icon="🥗", layout="centered")

# ---------- Helpers ----------
def _fmt_amount(amount: float, unit: str) -> str:
    if not amount:
        return "" if unit == "unit" else unit
    return f"{amount:g} {unit}" if unit != "unit" else f"{amount:g}"

def _go_waiting_then_parse():
    url = st.session_state["url"].strip()
    if not url:
        st.warning("Please paste a recipe URL.")
        return
    st.session_state["page"] = "waiting"
    st.session_state["result"] = None
    st.rerun()

# ---------- HOME ----------
if st.session_state["page"] == "home":
    st.title("🥗 Recipe Import")

    st.session_state["url"] = st.text_input(
        "Paste a recipe link",
        value=st.session_state["url"],
        placeholder="https://www.example.com/recipes/pancakes",
    )

    if st.button("Parse", type="primary"):
        _go_waiting_then_parse()

# ---------- WAITING ----------
elif st.session_state["page"] == "waiting":
    st.title("⏳ Reading recipe page")
    st.caption("We fetch the page once, read its structured data and estimate ingredient macros.")
    with st.spinner("Working..."):
        st.session_state["result"] = handle_recipe_url(st.session_state["url"])

    st.session_state["page"] = "results"
    st.rerun()

# ---------- RESULTS ----------
elif st.session_state["page"] == "results":
    cols = st.columns([1, 3])
    with cols[0]:
        if st.button("← Back", use_container_width=True):
            st.session_state["page"] = "home"
            st.rerun()

    result = st.session_state["result"] or {}

    if not result.get("ok"):
        st.title("Could not import recipe")
        st.error(result.get("message", "Unknown error."))
    else:
        rec = result["recipe"]
        st.title(rec.get("name", "(untitled)"))
        st.caption(f"Source: {st.session_state['url']}")

        images = rec.get("images") or []
        if images:
            st.image(images[0], use_container_width=True)

        nutrition = rec.get("nutrition") or {}
        c1, c2, c3, c4, c5 = st.columns(5)
        c1.metric("Servings", rec.get("servings", "?"))
        c2.metric("kcal", nutrition.get("calories", "N/A"))
        c3.metric("Protein", nutrition.get("protein", "N/A"))
        c4.metric("Carbs", nutrition.get("carbs", "N/A"))
        c5.metric("Fat", nutrition.get("fat", "N/A"))

        ingredients = rec.get("ingredients") or []
        if ingredients:
            st.subheader("Ingredients")
            st.dataframe(
                [
                    {
                        "ingredient": it["name"],
                        "amount": _fmt_amount(it["amount"], it["unit"]),
                        "kcal": it["calories"],
                        "protein (g)": it["protein"],
                        "carbs (g)": it["carbs"],
                        "fat (g)": it["fat"],
                    }
                    for it in ingredients
                ],
                use_container_width=True,
                hide_index=True,
            )
            st.caption(f"Estimated ingredient total: {sum(it['calories'] for it in ingredients)} kcal")

        if rec.get("instructions"):
            with st.expander("Instructions", expanded=True):
                for step in rec["instructions"].split("\n\n"):
                    st.write(step)
