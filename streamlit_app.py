from datetime import date
from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st

from ui import components as ui
from ui.api_client import delete as api_delete
from ui.api_client import download as api_download
from ui.api_client import get as api_get
from ui.api_client import post as api_post
from ui.api_client import put as api_put
from ui.texts_en import (
    APP_TITLE,
    BTN_DELETE,
    BTN_DOWNLOAD_REPORT,
    BTN_SAVE_FILAMENT,
    BTN_SAVE_ITEM,
    BTN_SAVE_NOTE,
    BTN_SAVE_ORDER,
    BTN_SAVE_SETTINGS,
    ERR_COLOR_REQUIRED,
    ERR_NAME_REQUIRED,
    ERR_PRICE_REQUIRED,
    ERR_TITLE_REQUIRED,
    MSG_DELETED,
    MSG_FILAMENT_IN_USE,
    MSG_NEED_ITEM,
    MSG_REPORT_FAILED,
    MSG_SELECT_FILAMENT,
    MSG_SUCCESS_FILAMENT,
    MSG_SUCCESS_ITEM,
    MSG_SUCCESS_NOTE,
    MSG_SUCCESS_ORDER,
    MSG_SUCCESS_SETTINGS,
    PAGE_FILAMENTS,
    PAGE_ITEMS,
    PAGE_NOTES,
    PAGE_ORDERS,
    PAGE_SETTINGS,
    PAGE_SUMMARY,
)

st.set_page_config(page_title=APP_TITLE, layout="wide")


def load(path: str, label: str, fallback: Any) -> Any:
    try:
        return api_get(path)
    except Exception as exc:
        ui.error(f"Could not load {label}: {exc}")
        return fallback


def flash(message: str, kind: str = "success"):
    st.session_state["flash_message"] = message
    st.session_state["flash_type"] = kind
    st.rerun()


def summary_tab(settings: Dict[str, Any]):
    st.header(PAGE_SUMMARY)
    currency = settings.get("currency", "EUR")
    summary = load("/api/summary", "summary", {})
    if not summary:
        return

    ui.metric_row(
        [
            {"label": "Revenue", "value": ui.money(summary.get("total_revenue"), currency)},
            {"label": "Profit (excl. labor)", "value": ui.money(summary.get("profit_excluding_labor"), currency)},
            {"label": "Profit (incl. labor)", "value": ui.money(summary.get("profit_including_labor"), currency)},
            {"label": "Orders", "value": summary.get("total_orders", 0)},
            {"label": "Items sold", "value": summary.get("total_items_sold", 0)},
        ]
    )
    ui.metric_row(
        [
            {"label": "Material cost", "value": ui.money(summary.get("total_material_cost"), currency)},
            {"label": "Electricity cost", "value": ui.money(summary.get("total_electricity_cost"), currency)},
            {"label": "Labor cost", "value": ui.money(summary.get("total_labor_cost"), currency)},
            {"label": "Labor hours", "value": f"{summary.get('total_labor_hours', 0):.1f} h"},
        ]
    )

    report = api_download("/api/summary/excel")
    if report:
        st.download_button(
            label=BTN_DOWNLOAD_REPORT,
            data=report,
            file_name=f"summary_{date.today().isoformat()}.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            key="summary_excel_download",
        )
    else:
        ui.warning(MSG_REPORT_FAILED)


def item_form(filaments: List[Dict[str, Any]], settings: Dict[str, Any]):
    st.subheader("New Item")
    name = st.text_input("Name", key="item_name")
    color = st.text_input("Color (optional)", key="item_color")
    filament_options = {f"{f['color_name']} - {f['brand']} ({f['material']})": f for f in filaments}
    filament_label = st.selectbox("Filament", ["-"] + list(filament_options.keys()), key="item_filament")
    filament = filament_options.get(filament_label)

    cols = st.columns(3)
    grams_used = cols[0].number_input("Grams used", min_value=0.0, value=None, key="item_grams")
    print_time_hours = cols[1].number_input("Print time (h)", min_value=0.0, value=None, key="item_hours")
    electricity_kw = cols[2].number_input("Electricity (kWh)", min_value=0.0, value=None, key="item_kw")
    cols = st.columns(2)
    hourly_rate = cols[0].number_input(
        "Hourly rate", min_value=0.0, value=float(settings.get("default_hourly_rate", 1.0)), key="item_rate"
    )
    profit_margin = cols[1].number_input(
        "Profit margin (%)", value=float(settings.get("default_profit_margin", 50.0)), key="item_margin"
    )

    payload = {
        "name": name.strip(),
        "color": color.strip() or None,
        "filament_id": filament["id"] if filament else None,
        "grams_used": grams_used,
        "print_time_hours": print_time_hours,
        "hourly_rate": hourly_rate,
        "electricity_kw": electricity_kw,
        "profit_margin": profit_margin,
    }

    quote = None
    try:
        quote = api_post("/api/pricing/quote", {k: v for k, v in payload.items() if k not in ("name", "color")})
        if electricity_kw is None and quote.get("suggested_electricity_kw") is not None:
            # Field left empty: fill it from the average printer power, as the form default
            payload["electricity_kw"] = quote["suggested_electricity_kw"]
            st.caption(f"Electricity suggested from printer power: {payload['electricity_kw']:.3f} kWh")
            quote = api_post("/api/pricing/quote", {k: v for k, v in payload.items() if k not in ("name", "color")})
    except Exception as exc:
        ui.error(f"Price preview unavailable: {exc}")

    if quote:
        ui.price_breakdown(quote)
    if grams_used and not filament:
        ui.warning(MSG_SELECT_FILAMENT)

    if st.button(BTN_SAVE_ITEM, type="primary", key="item_save"):
        if not payload["name"]:
            ui.error(ERR_NAME_REQUIRED)
            return
        try:
            api_post("/api/items", payload)
        except Exception as exc:
            ui.error(f"Item could not be saved: {exc}")
        else:
            flash(MSG_SUCCESS_ITEM)


def items_tab(items: List[Dict[str, Any]], filaments: List[Dict[str, Any]], settings: Dict[str, Any]):
    st.header(PAGE_ITEMS)
    currency = settings.get("currency", "EUR")
    left, right = st.columns([3, 2])
    with left:
        rows = [
            {
                "ID": i["id"],
                "Name": i["name"],
                "Filament": i.get("filament_color") or "-",
                "Grams": i.get("grams_used"),
                "Hours": i.get("print_time_hours"),
                "Build price": ui.money(i.get("build_price"), currency),
                "Final price": ui.money(i.get("final_price"), currency),
            }
            for i in items
        ]
        ui.render_table("Items", rows, ["ID", "Name", "Filament", "Grams", "Hours", "Build price", "Final price"])
        if items:
            labels = {f"{i['name']} (#{i['id']})": i for i in items}
            selected = st.selectbox("Delete item (also deletes its orders)", list(labels.keys()), key="item_delete_select")
            if st.button(BTN_DELETE, key="item_delete"):
                try:
                    api_delete(f"/api/items/{labels[selected]['id']}")
                except Exception as exc:
                    ui.error(str(exc))
                else:
                    flash(MSG_DELETED)
    with right:
        item_form(filaments, settings)


def order_form(items: List[Dict[str, Any]], existing: Optional[Dict[str, Any]] = None, key: str = "new"):
    labels = {f"{i['name']} (#{i['id']})": i for i in items}
    label_list = list(labels.keys())
    index = 0
    if existing:
        index = next((n for n, i in enumerate(items) if i["id"] == existing["item_id"]), 0)
    item_label = st.selectbox("Item", label_list, index=index, key=f"order_item_{key}")
    item = labels[item_label]
    cols = st.columns(3)
    quantity = cols[0].number_input(
        "Quantity", min_value=1, value=int(existing["quantity"]) if existing else 1, key=f"order_qty_{key}"
    )
    sale_price = cols[1].number_input(
        "Sale price (per unit)",
        min_value=0.0,
        value=float(existing["sale_price"]) if existing else float(item.get("final_price") or 0.0),
        key=f"order_price_{key}",
    )
    sale_date = cols[2].date_input(
        "Sale date",
        value=date.fromisoformat(existing["sale_date"]) if existing else date.today(),
        key=f"order_date_{key}",
    )
    notes = st.text_input("Notes", value=(existing or {}).get("notes") or "", key=f"order_notes_{key}")
    cols = st.columns(2)
    paid = cols[0].checkbox("Paid", value=bool((existing or {}).get("paid")), key=f"order_paid_{key}")
    delivered = cols[1].checkbox("Delivered", value=bool((existing or {}).get("delivered")), key=f"order_delivered_{key}")

    if st.button(BTN_SAVE_ORDER, type="primary", key=f"order_save_{key}"):
        payload = {
            "item_id": item["id"],
            "quantity": int(quantity),
            "sale_price": sale_price,
            "sale_date": sale_date.isoformat(),
            "notes": notes or None,
            "paid": paid,
            "delivered": delivered,
        }
        try:
            if existing:
                api_put(f"/api/orders/{existing['id']}", payload)
            else:
                api_post("/api/orders", payload)
        except Exception as exc:
            ui.error(f"Order could not be saved: {exc}")
        else:
            flash(MSG_SUCCESS_ORDER)


def orders_tab(orders: List[Dict[str, Any]], items: List[Dict[str, Any]], settings: Dict[str, Any]):
    st.header(PAGE_ORDERS)
    currency = settings.get("currency", "EUR")
    if orders:
        rows = [
            {
                "ID": o["id"],
                "Date": o["sale_date"],
                "Item": o["item_name"],
                "Qty": o["quantity"],
                "Total": ui.money(o.get("total_paid"), currency),
                "Profit (incl. labor)": ui.money(o.get("profit_with_labor"), currency),
                "Profit (excl. labor)": ui.money(o.get("profit_without_labor"), currency),
                "Paid": "✓" if o.get("paid") else "✗",
                "Delivered": "✓" if o.get("delivered") else "✗",
            }
            for o in orders
        ]
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    else:
        ui.info("No orders yet.")

    if not items:
        ui.warning(MSG_NEED_ITEM)
        return

    st.subheader("New Order")
    order_form(items)

    if orders:
        st.markdown("---")
        st.subheader("Edit Order")
        labels = {f"#{o['id']} {o['item_name']} ({o['sale_date']})": o for o in orders}
        selected = labels[st.selectbox("Order", list(labels.keys()), key="order_edit_select")]
        order_form(items, existing=selected, key=f"edit_{selected['id']}")
        if st.button(BTN_DELETE, key=f"order_delete_{selected['id']}"):
            try:
                api_delete(f"/api/orders/{selected['id']}")
            except Exception as exc:
                ui.error(str(exc))
            else:
                flash(MSG_DELETED)


def filaments_tab(filaments: List[Dict[str, Any]]):
    st.header(PAGE_FILAMENTS)
    rows = [
        {
            "ID": f["id"],
            "Color": f["color_name"],
            "Brand": f["brand"],
            "Material": f["material"],
            "Diameter": f["diameter_mm"],
            "Price/kg": f["price_per_kg"],
            "Cost/g": f"{f['cost_per_gram']:.4f}",
        }
        for f in filaments
    ]
    ui.render_table("Filaments", rows, ["ID", "Color", "Brand", "Material", "Diameter", "Price/kg", "Cost/g"])

    st.subheader("Add / Edit Filament")
    labels = {f"{f['color_name']} (#{f['id']})": f for f in filaments}
    choice = st.selectbox("Filament", ["New filament"] + list(labels.keys()), key="filament_edit_select")
    existing = labels.get(choice, {})
    suffix = existing.get("id", "new")

    color_name = st.text_input("Color name", value=existing.get("color_name", ""), key=f"fil_color_{suffix}")
    cols = st.columns(3)
    brand = cols[0].text_input("Brand", value=existing.get("brand", "Bambu Lab"), key=f"fil_brand_{suffix}")
    material = cols[1].text_input("Material", value=existing.get("material", "PLA"), key=f"fil_material_{suffix}")
    diameter_mm = cols[2].number_input(
        "Diameter (mm)", min_value=0.1, value=float(existing.get("diameter_mm", 1.75)), key=f"fil_diameter_{suffix}"
    )
    price_per_kg = st.number_input(
        "Price per kg", min_value=0.0, value=float(existing.get("price_per_kg", 0.0)), key=f"fil_price_{suffix}"
    )
    st.caption(f"Cost per gram: {price_per_kg / 1000:.4f}")
    notes = st.text_input("Notes", value=existing.get("notes") or "", key=f"fil_notes_{suffix}")

    cols = st.columns(2)
    if cols[0].button(BTN_SAVE_FILAMENT, type="primary", key=f"fil_save_{suffix}"):
        if not color_name.strip():
            ui.error(ERR_COLOR_REQUIRED)
            return
        if price_per_kg <= 0:
            ui.error(ERR_PRICE_REQUIRED)
            return
        payload = {
            "color_name": color_name.strip(),
            "brand": brand,
            "material": material,
            "diameter_mm": diameter_mm,
            "price_per_kg": price_per_kg,
            "notes": notes or None,
        }
        try:
            if existing:
                api_put(f"/api/filaments/{existing['id']}", payload)
            else:
                api_post("/api/filaments", payload)
        except Exception as exc:
            ui.error(f"Filament could not be saved: {exc}")
        else:
            flash(MSG_SUCCESS_FILAMENT)
    if existing and cols[1].button(BTN_DELETE, key=f"fil_delete_{suffix}"):
        try:
            api_delete(f"/api/filaments/{existing['id']}")
        except Exception:
            ui.error(MSG_FILAMENT_IN_USE)
        else:
            flash(MSG_DELETED)


def settings_tab(settings: Dict[str, Any]):
    st.header(PAGE_SETTINGS)
    cols = st.columns(2)
    hourly = cols[0].number_input("Default hourly rate", min_value=0.0, value=float(settings.get("default_hourly_rate", 1.0)))
    kwh = cols[1].number_input(
        "Electricity cost per kWh", min_value=0.0, value=float(settings.get("electricity_cost_per_kwh", 0.25))
    )
    cols = st.columns(2)
    power = cols[0].number_input(
        "Average printer power (W)", min_value=0.0, value=float(settings.get("average_printer_power_w", 250.0))
    )
    margin = cols[1].number_input("Default profit margin (%)", value=float(settings.get("default_profit_margin", 50.0)))
    currency = st.text_input("Currency", value=settings.get("currency", "EUR"))

    if st.button(BTN_SAVE_SETTINGS, type="primary"):
        try:
            api_put(
                "/api/settings",
                {
                    "default_hourly_rate": hourly,
                    "electricity_cost_per_kwh": kwh,
                    "average_printer_power_w": power,
                    "default_profit_margin": margin,
                    "currency": currency.strip() or "EUR",
                },
            )
        except Exception as exc:
            ui.error(f"Settings could not be saved: {exc}")
        else:
            flash(MSG_SUCCESS_SETTINGS)


def notes_tab(notes: List[Dict[str, Any]]):
    st.header(PAGE_NOTES)
    labels = {f"{n['title']} (#{n['id']})": n for n in notes}
    choice = st.selectbox("Note", ["New note"] + list(labels.keys()), key="note_select")
    existing = labels.get(choice, {})
    suffix = existing.get("id", "new")
    title = st.text_input("Title", value=existing.get("title", ""), key=f"note_title_{suffix}")
    content = st.text_area("Content", value=existing.get("content", ""), height=240, key=f"note_content_{suffix}")

    cols = st.columns(2)
    if cols[0].button(BTN_SAVE_NOTE, type="primary", key=f"note_save_{suffix}"):
        if not title.strip():
            ui.error(ERR_TITLE_REQUIRED)
            return
        payload = {"title": title.strip(), "content": content or ""}
        try:
            if existing:
                api_put(f"/api/notes/{existing['id']}", payload)
            else:
                api_post("/api/notes", payload)
        except Exception as exc:
            ui.error(f"Note could not be saved: {exc}")
        else:
            flash(MSG_SUCCESS_NOTE)
    if existing and cols[1].button(BTN_DELETE, key=f"note_delete_{suffix}"):
        try:
            api_delete(f"/api/notes/{existing['id']}")
        except Exception as exc:
            ui.error(str(exc))
        else:
            flash(MSG_DELETED)


def main():
    flash_msg = st.session_state.pop("flash_message", None)
    flash_type = st.session_state.pop("flash_type", None)
    if flash_msg:
        if flash_type == "success":
            ui.success(flash_msg)
        elif flash_type == "warning":
            ui.warning(flash_msg)
        else:
            ui.info(flash_msg)

    st.title(APP_TITLE)
    settings = load("/api/settings", "settings", {})
    filaments = load("/api/filaments", "filaments", [])
    items = load("/api/items", "items", [])
    orders = load("/api/orders", "orders", [])
    notes = load("/api/notes", "notes", [])

    tabs = st.tabs([PAGE_SUMMARY, PAGE_ITEMS, PAGE_ORDERS, PAGE_FILAMENTS, PAGE_SETTINGS, PAGE_NOTES])
    with tabs[0]:
        summary_tab(settings)
    with tabs[1]:
        items_tab(items, filaments, settings)
    with tabs[2]:
        orders_tab(orders, items, settings)
    with tabs[3]:
        filaments_tab(filaments)
    with tabs[4]:
        settings_tab(settings)
    with tabs[5]:
        notes_tab(notes)


if __name__ == "__main__":
    main()
