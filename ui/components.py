from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st


def money(value: Optional[float], currency: str) -> str:
    if value is None:
        return "-"
    return f"{value:,.2f} {currency}"


def metric_row(metrics: List[Dict[str, Any]]):
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        col.metric(m["label"], m["value"])


def render_table(title: str, data: List[Dict[str, Any]], columns: List[str]):
    st.markdown(f"**{title}**")
    if not data:
        st.info("No records")
        return
    df = pd.DataFrame(data)
    st.dataframe(df[columns], use_container_width=True, hide_index=True)


def price_breakdown(quote: Dict[str, Any]):
    """Live price calculator panel for the item form."""
    currency = quote.get("currency", "EUR")
    with st.container(border=True):
        st.markdown("**Price Calculator**")
        metric_row(
            [
                {"label": "Material", "value": money(quote.get("material_cost"), currency)},
                {"label": "Labor", "value": money(quote.get("labor_cost"), currency)},
                {"label": "Electricity", "value": money(quote.get("electricity_cost"), currency)},
                {"label": "Build price", "value": money(quote.get("build_price"), currency)},
            ]
        )
        st.metric(
            f"Final price ({quote.get('profit_margin', 0):g}% margin)",
            money(quote.get("final_price"), currency),
        )


def success(msg: str):
    st.success(msg)


def error(msg: str):
    st.error(msg)


def warning(msg: str):
    st.warning(msg)


def info(msg: str):
    st.info(msg)
