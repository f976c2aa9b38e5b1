import sys, os
sys.path.append(os.path.dirname(__file__))

import streamlit as st
import matplotlib.pyplot as plt
import numpy as np

from karnaugh.formula import format_term
from karnaugh.kmap_engine import KMap
from karnaugh.logic import (
    format_expression,
    reference_expression,
    variable_symbols,
    verify_formula,
)

# ------------------------------- Page setup -------------------------------

COLOR_PALETTE = [
    "#e53935", "#1e88e5", "#43a047", "#f39c12",
    "#8e24aa", "#009688", "#6d4c41", "#2e86c1",
]

EXAMPLE_TABLE = """A B C
0 0 0 0
0 0 1 0
0 1 0 0
0 1 1 1
1 0 0 0
1 0 1 1
1 1 0 1
1 1 1 1
"""

st.set_page_config(page_title="K-Map Minimizer", layout="wide")
st.title("🧮 K-Map Minimizer")
st.markdown("---")

uploaded = st.file_uploader("Truth table file (optional):", type=["txt"])
default_text = uploaded.getvalue().decode("utf-8") if uploaded else EXAMPLE_TABLE
raw_table = st.text_area(
    "Truth table (variables on the first line, then one row per assignment):",
    default_text,
    height=260,
)
form = st.radio("Form:", ["SOP", "POS"], horizontal=True)


def axis_label(var_map):
    """Label a map row/column as e.g. ``AB=01``."""
    if not var_map:
        return ""
    names = "".join(var_map)
    bits = "".join(str(int(bit)) for bit in var_map.values())
    return f"{names}={bits}"


# ------------------------------- Solve -------------------------------
if st.button("Minimize 🚀"):
    try:
        kmap = KMap.from_text(raw_table)
        if kmap.empty():
            raise ValueError("The truth table declares no variables.")

        v = form == "SOP"
        formula = kmap.get_formula_string(v)
        groups = kmap.get_filtered_groups(v)
        terms = kmap.get_formula(v)

        symbols_ = variable_symbols(kmap)
        reference = reference_expression(kmap, v)
        reference_text = format_expression(reference, symbols_, "dnf" if v else "cnf")
        correct, errors = verify_formula(kmap, v)

        st.success(f"**{form}:**  \nF = {formula or '(no groups)'}")
        st.info(f"**SymPy {form}:**  \nF = {reference_text}")
        if correct:
            st.caption("The minimized formula matches every row of the table.")
        else:
            st.warning("Mismatches:\n" + "\n".join(errors))

        steps = (
            f"• variables: {' '.join(kmap.variables)}\n"
            f"• horizontal: {' '.join(kmap.horizontal) or '—'}\n"
            f"• vertical: {' '.join(kmap.vertical) or '—'}\n"
            f"• rows loaded: {len(kmap.cells)} of {kmap.size()}\n"
            f"• groups: {len(groups)}"
        )
        st.text_area("Details:", steps, height=150)

        # =============== Karnaugh map drawing ===============
        with st.container():
            st.markdown("### 🗺️ Karnaugh map")

            ncols, nrows = kmap.size_x(), kmap.size_y()
            fig, ax = plt.subplots(figsize=(1.3 * ncols + 1.2, 1.3 * nrows + 1.2))

            ax.set_xlim(-0.6, ncols)
            ax.set_ylim(-0.6, nrows)
            ax.set_xticks(np.arange(0, ncols + 1))
            ax.set_yticks(np.arange(0, nrows + 1))
            ax.set_xticklabels([])
            ax.set_yticklabels([])
            ax.grid(True, color="#888", linewidth=1)
            ax.invert_yaxis()
            ax.set_facecolor("#fafafa")

            # ---- labels ----
            for x in range(ncols):
                ax.text(x + 0.5, -0.25, axis_label(kmap.var_map_for_x(x)),
                        ha="center", va="center", fontsize=10, color="#333")
            for y in range(nrows):
                ax.text(-0.05, y + 0.5, axis_label(kmap.var_map_for_y(y)),
                        ha="right", va="center", fontsize=10, color="#333")

            # ---- cell values ----
            for y, row in enumerate(kmap.grid()):
                for x, value in enumerate(row):
                    if value is None:
                        val, color = "·", "#ff8c32"
                    elif value:
                        val, color = "1", "#1f3c88"
                    else:
                        val, color = "0", "#9aa7b7"
                    ax.text(x + 0.5, y + 0.5, val, color=color,
                            fontsize=13, ha="center", va="center", weight="bold")

            # ---- groups ----
            for i, (g, term) in enumerate(zip(groups, terms)):
                color = COLOR_PALETTE[i % len(COLOR_PALETTE)]
                inset = 0.06 + 0.04 * (i % 3)
                rect = plt.Rectangle(
                    (g.start.x + inset, g.start.y + inset),
                    g.width - 2 * inset, g.height - 2 * inset,
                    fill=False, color=color, lw=2.5, ls='-'
                )
                ax.add_patch(rect)
                ax.text(
                    g.start.x + g.width / 2,
                    g.start.y + g.height - 0.15,
                    format_term(term, v),
                    color=color,
                    fontsize=9,
                    ha="center",
                    va="center",
                    weight="bold",
                )

            st.pyplot(fig)

    except Exception as e:
        st.error(f"Could not minimize the table:\n{e}")
