"""Tkinter desktop application for the expense ledger."""

from __future__ import annotations

import argparse
import logging
import tkinter as tk
from decimal import Decimal, InvalidOperation
from tkinter import messagebox, ttk
from typing import Iterable, List, Optional

from ledger.exceptions import RecordNotFoundError, ValidationError
from ledger.services import TransactionService
from ledger.store import TransactionStore
from ledger.validators import CATEGORIES


PRIMARY_BG = "#0f172a"
SECONDARY_BG = "#1e293b"
ACCENT_BG = "#1d4ed8"
ACCENT_ACTIVE_BG = "#2563eb"
MATCH_BG = "#14532d"
TEXT_PRIMARY = "#e2e8f0"
TEXT_MUTED = "#94a3b8"

ANY_CATEGORY = "(any)"

logger = logging.getLogger(__name__)


def sanitize_amount_input(raw: str) -> str:
    if raw is None:
        return ""
    return raw.replace(",", "").strip()


def format_amount_display(value: Decimal | str) -> str:
    if isinstance(value, Decimal):
        return f"{value:,.2f}"
    sanitized = sanitize_amount_input(value)
    if not sanitized:
        return ""
    try:
        amount = Decimal(sanitized)
    except InvalidOperation:
        return value.strip()
    return f"{amount:,.2f}"


class TransactionTable:
    """Table of stored transactions; matched rows are highlighted.

    Registered with the store as an observer, so it redraws itself on every
    change regardless of which part of the UI caused it. It wraps a frame
    rather than subclassing one so its ``update`` leaves ``Misc.update`` alone.
    """

    def __init__(self, master: tk.Misc) -> None:
        self.frame = ttk.Frame(master, style="Panel.TFrame")
        self.frame.columnconfigure(0, weight=1)
        self.frame.rowconfigure(0, weight=1)

        columns = ("index", "date", "category", "amount")
        self.tree = ttk.Treeview(
            self.frame,
            columns=columns,
            show="headings",
            height=12,
            style="App.Treeview",
        )
        headings = {
            "index": "#",
            "date": "Date",
            "category": "Category",
            "amount": "Amount",
        }
        for key, label in headings.items():
            width = 60 if key == "index" else 160
            self.tree.heading(key, text=label, anchor="w")
            self.tree.column(key, width=width, anchor="w")
        self.tree.tag_configure("matched", background=MATCH_BG)

        vsb = ttk.Scrollbar(self.frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscroll=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")

    def update(self, store: TransactionStore) -> None:
        matched = set(store.get_matched_filter_indices())
        self.tree.delete(*self.tree.get_children())
        for index, transaction in enumerate(store.get_transactions()):
            data = transaction.to_dict()
            values = (
                index,
                data["timestamp"].replace("T", " ").rstrip("Z"),
                data["category"],
                format_amount_display(transaction.amount),
            )
            tags = ("matched",) if index in matched else ()
            self.tree.insert("", "end", iid=str(index), values=values, tags=tags)

    def selected_indices(self) -> List[int]:
        return sorted((int(item_id) for item_id in self.tree.selection()), reverse=True)


class LedgerTab(ttk.Frame):
    """Add form, filter controls and the transaction table."""

    def __init__(self, master: tk.Misc, service: TransactionService) -> None:
        super().__init__(master, padding=16, style="Panel.TFrame")
        self.service = service

        self.amount_var = tk.StringVar()
        self.category_var = tk.StringVar(value=sorted(CATEGORIES)[0])
        self.filter_category_var = tk.StringVar(value=ANY_CATEGORY)
        self.filter_min_var = tk.StringVar()
        self.filter_max_var = tk.StringVar()

        self._build_form()
        self._build_filters()
        self.table = TransactionTable(self)
        self.table.frame.grid(row=2, column=0, sticky="nsew")
        self._build_actions()

        self.columnconfigure(0, weight=1)
        self.rowconfigure(2, weight=1)

    def _build_form(self) -> None:
        form = ttk.LabelFrame(self, text="Add Transaction", style="Card.TLabelframe")
        form.grid(row=0, column=0, sticky="ew", padx=4, pady=(0, 12))
        form.columnconfigure((0, 1), weight=1)

        ttk.Label(form, text="Amount", style="FormLabel.TLabel").grid(
            column=0, row=0, sticky="w", padx=4, pady=4
        )
        amount_entry = ttk.Entry(form, textvariable=self.amount_var, style="App.TEntry")
        amount_entry.grid(column=0, row=1, sticky="ew", padx=4, pady=(0, 8))
        amount_entry.bind("<FocusOut>", self._handle_amount_focus_out)

        ttk.Label(form, text="Category", style="FormLabel.TLabel").grid(
            column=1, row=0, sticky="w", padx=4, pady=4
        )
        ttk.Combobox(
            form,
            textvariable=self.category_var,
            values=sorted(CATEGORIES),
            state="readonly",
            style="App.TCombobox",
        ).grid(column=1, row=1, sticky="ew", padx=4, pady=(0, 8))

        ttk.Button(
            form,
            text="Add Transaction",
            command=self.submit,
            style="Primary.TButton",
        ).grid(column=1, row=2, sticky="e", padx=4, pady=4)

    def _build_filters(self) -> None:
        panel = ttk.LabelFrame(self, text="Filter", style="Card.TLabelframe")
        panel.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 12))
        panel.columnconfigure((0, 1, 2), weight=1)

        for column, label in enumerate(("Category", "Min Amount", "Max Amount")):
            ttk.Label(panel, text=label, style="FormLabel.TLabel").grid(
                column=column, row=0, sticky="w", padx=4, pady=4
            )
        ttk.Combobox(
            panel,
            textvariable=self.filter_category_var,
            values=[ANY_CATEGORY, *sorted(CATEGORIES)],
            state="readonly",
            style="App.TCombobox",
        ).grid(column=0, row=1, sticky="ew", padx=4, pady=(0, 8))
        ttk.Entry(panel, textvariable=self.filter_min_var, style="App.TEntry").grid(
            column=1, row=1, sticky="ew", padx=4, pady=(0, 8)
        )
        ttk.Entry(panel, textvariable=self.filter_max_var, style="App.TEntry").grid(
            column=2, row=1, sticky="ew", padx=4, pady=(0, 8)
        )

        button_row = ttk.Frame(panel, style="Panel.TFrame")
        button_row.grid(column=0, row=2, columnspan=3, sticky="e", padx=4, pady=4)
        ttk.Button(
            button_row,
            text="Clear",
            command=self.clear_filter,
            style="Secondary.TButton",
        ).grid(column=0, row=0, padx=4)
        ttk.Button(
            button_row,
            text="Apply Filter",
            command=self.apply_filter,
            style="Primary.TButton",
        ).grid(column=1, row=0, padx=4)

    def _build_actions(self) -> None:
        button_bar = ttk.Frame(self, style="Panel.TFrame")
        button_bar.grid(row=3, column=0, sticky="e", pady=8)
        ttk.Button(
            button_bar,
            text="Remove Selected",
            command=self.remove_selected,
            style="Secondary.TButton",
        ).grid(row=0, column=0, padx=4)

    def submit(self) -> None:
        payload = {
            "amount": sanitize_amount_input(self.amount_var.get()),
            "category": self.category_var.get(),
        }
        try:
            self.service.add(payload)
        except ValidationError as exc:
            messagebox.showerror("Invalid Transaction", str(exc), parent=self)
            return
        self.amount_var.set("")

    def apply_filter(self) -> None:
        category = self.filter_category_var.get()
        try:
            self.service.apply_filter(
                category=None if category == ANY_CATEGORY else category,
                min_amount=sanitize_amount_input(self.filter_min_var.get()) or None,
                max_amount=sanitize_amount_input(self.filter_max_var.get()) or None,
            )
        except ValidationError as exc:
            messagebox.showerror("Invalid Filter", str(exc), parent=self)

    def clear_filter(self) -> None:
        self.filter_category_var.set(ANY_CATEGORY)
        self.filter_min_var.set("")
        self.filter_max_var.set("")
        self.service.clear_filter()

    def remove_selected(self) -> None:
        indices = self.table.selected_indices()
        if not indices:
            messagebox.showinfo("No selection", "Please select a transaction to remove.", parent=self)
            return
        # Highest index first so earlier positions stay valid.
        for index in indices:
            try:
                self.service.remove(index)
            except RecordNotFoundError as exc:
                messagebox.showwarning("Not Found", str(exc), parent=self)

    def _handle_amount_focus_out(self, _event: object) -> None:
        self.amount_var.set(format_amount_display(self.amount_var.get()))


class SummaryObserver:
    """Keeps the summary strip in step with the store."""

    def __init__(self, app: "ExpenseTrackerApp") -> None:
        self.app = app

    def update(self, store: TransactionStore) -> None:
        self.app.refresh_summary()


class ExpenseTrackerApp(tk.Tk):
    """Main application window."""

    def __init__(self, service: Optional[TransactionService] = None) -> None:
        super().__init__()
        self.title("Expense Tracker")
        self.geometry("820x640")
        self.minsize(720, 560)
        self.configure(bg=PRIMARY_BG)

        self._configure_styles()

        self.service = service if service is not None else TransactionService()

        self.total_var = tk.StringVar(value="0.00")
        self.matched_total_var = tk.StringVar(value="0.00")
        self.count_var = tk.StringVar(value="0")

        self._build_layout()

        self.summary_observer = SummaryObserver(self)
        self.service.register(self.ledger_tab.table)
        self.service.register(self.summary_observer)
        self.protocol("WM_DELETE_WINDOW", self.close)

        self.ledger_tab.table.update(self.service.store)
        self.refresh_summary()

    def _configure_styles(self) -> None:
        style = ttk.Style(self)
        if "clam" in style.theme_names():
            style.theme_use("clam")

        panel = {"background": SECONDARY_BG}
        field = {**panel, "fieldbackground": SECONDARY_BG, "foreground": TEXT_PRIMARY}
        styles = {
            "TFrame": {"background": PRIMARY_BG},
            "Panel.TFrame": panel,
            "Card.TLabelframe": {**panel, "foreground": TEXT_PRIMARY},
            "Card.TLabelframe.Label": {**panel, "foreground": TEXT_PRIMARY},
            "Header.TLabel": {"background": PRIMARY_BG, "foreground": TEXT_PRIMARY, "font": ("Segoe UI", 20, "bold")},
            "FormLabel.TLabel": {**panel, "foreground": TEXT_MUTED, "font": ("Segoe UI", 9)},
            "MetricLabel.TLabel": {**panel, "foreground": TEXT_MUTED, "font": ("Segoe UI", 9, "bold")},
            "MetricValue.TLabel": {**panel, "foreground": TEXT_PRIMARY, "font": ("Segoe UI", 16, "bold")},
            "App.TEntry": {**field, "insertcolor": TEXT_PRIMARY},
            "App.TCombobox": {**field, "arrowcolor": TEXT_PRIMARY},
            "App.Treeview": {**field, "rowheight": 28},
            "App.Treeview.Heading": {**panel, "foreground": TEXT_MUTED, "relief": "flat"},
            "Primary.TButton": {"background": ACCENT_BG, "foreground": TEXT_PRIMARY, "padding": (18, 6)},
            "Secondary.TButton": {**panel, "foreground": TEXT_PRIMARY, "padding": (14, 6)},
        }
        for name, options in styles.items():
            style.configure(name, **options)

        style.map("App.TCombobox", fieldbackground=[("readonly", SECONDARY_BG)])
        style.map("App.Treeview", background=[("selected", ACCENT_BG)])
        style.map("Primary.TButton", background=[("active", ACCENT_ACTIVE_BG)])
        style.map("Secondary.TButton", background=[("active", ACCENT_BG)])

    def _build_layout(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(2, weight=1)

        header = ttk.Frame(self, padding=20)
        header.grid(row=0, column=0, sticky="ew")
        ttk.Label(header, text="Expense Tracker", style="Header.TLabel").grid(row=0, column=0, sticky="w")

        summary = ttk.Frame(self, padding=(20, 10), style="Panel.TFrame")
        summary.grid(row=1, column=0, sticky="ew")
        summary.columnconfigure((0, 1, 2), weight=1)

        def build_metric(column: int, label: str, var: tk.StringVar) -> None:
            container = ttk.Frame(summary, style="Panel.TFrame", padding=(16, 12))
            container.grid(row=0, column=column, sticky="ew", padx=6)
            ttk.Label(container, text=label, style="MetricLabel.TLabel").grid(row=0, column=0, sticky="w")
            ttk.Label(container, textvariable=var, style="MetricValue.TLabel").grid(row=1, column=0, sticky="w")

        build_metric(0, "Total", self.total_var)
        build_metric(1, "Filtered Total", self.matched_total_var)
        build_metric(2, "Transactions", self.count_var)

        self.ledger_tab = LedgerTab(self, self.service)
        self.ledger_tab.grid(row=2, column=0, sticky="nsew")

    def refresh_summary(self) -> None:
        data = self.service.summary()
        self.total_var.set(format_amount_display(data["total"]))
        self.matched_total_var.set(format_amount_display(data["matched_total"]))
        self.count_var.set(str(data["count"]))

    def close(self) -> None:
        self.service.unregister(self.ledger_tab.table)
        self.service.unregister(self.summary_observer)
        self.destroy()


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Tkinter desktop app for the expense tracker")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = ExpenseTrackerApp()
    logger.info("Starting desktop client")
    app.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
