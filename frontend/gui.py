#!/usr/bin/env python3
"""
Calculator GUI

A four-function pocket calculator window (Tkinter). The window owns one
CalculatorEngine and redraws both displays after every button press:

- Upper display: the running total.
- Lower display: the number being typed.
- Caption under the displays: the last operation applied.
- Status line: transient error messages (the failed press is ignored).
- History overlay listing every operation applied so far.

All arithmetic lives in backend.engine; this module only wires buttons and
keys to frontend.keypad.press.
"""

import logging
import tkinter as tk
from pathlib import Path
from typing import Optional

from backend.engine import CalculatorEngine, CalculatorError, format_number
from backend.storage import save_engine
from frontend.keypad import KEY_BINDINGS, KEYPAD, press

logger = logging.getLogger(__name__)


# -------------------------
# Visual theme / constants
# -------------------------
WINDOW_WIDTH = 320
WINDOW_HEIGHT = 440

BG = "#0f1113"          # main app background
PANEL_BG = "#17181A"    # panels / container background
BTN_BG = "#2b2d30"      # digit tile background
OP_BG = "#3a3d41"       # operator tile background
FG = "#E6EEF3"          # foreground text (light)
MUTED = "#8a9196"       # secondary text
ERROR_FG = "#ff8a80"    # status line errors

TITLE_FONT = ("Segoe UI", 13, "bold")
TOTAL_FONT = ("Consolas", 14)
DISPLAY_FONT = ("Consolas", 22)
CAPTION_FONT = ("Segoe UI", 9)

STATUS_TIMEOUT_MS = 2500
HISTORY_LIMIT = 200


# -------------------------
# Main application class
# -------------------------
class CalculatorGUI(tk.Tk):
    def __init__(self, engine: Optional[CalculatorEngine] = None, state_path: Optional[Path] = None):
        super().__init__()

        # Window setup
        self.title("Calculator")
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(260, 360)
        self.configure(bg=BG)

        # Backend engine instance; state_path=None disables saving on close
        self.engine = engine if engine is not None else CalculatorEngine()
        self.state_path = state_path

        self.history_window: Optional[tk.Toplevel] = None
        self._status_job: Optional[str] = None

        self._build_header()
        self._build_display()
        self._build_keypad()
        self._refresh()

        self.bind("<Key>", self._on_key, add="+")
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # -------------------------
    # Layout
    # -------------------------
    def _build_header(self):
        """Top header with title and history button."""
        header = tk.Frame(self, bg=PANEL_BG, height=44)
        header.pack(fill="x", side="top")

        tk.Label(header, text="Calculator", bg=PANEL_BG, fg=FG, font=TITLE_FONT).pack(side="left", padx=10, pady=6)

        # Spacer to push the History button to the right
        tk.Frame(header, bg=PANEL_BG).pack(side="left", expand=True)

        self.history_btn = tk.Button(header, text="History", bg=PANEL_BG, fg=FG, relief="flat", command=self.toggle_history)
        self.history_btn.pack(side="right", padx=8, pady=6)

    def _build_display(self):
        """Two right-aligned registers plus the last-operation caption and status line."""
        disp = tk.Frame(self, bg=PANEL_BG)
        disp.pack(fill="x", padx=8, pady=(8, 0))

        self.total_var = tk.StringVar()
        self.current_var = tk.StringVar()
        self.operation_var = tk.StringVar()
        self.status_var = tk.StringVar()

        tk.Label(disp, textvariable=self.total_var, bg=PANEL_BG, fg=MUTED,
                 anchor="e", font=TOTAL_FONT).pack(fill="x", padx=6, pady=(6, 0))
        tk.Label(disp, textvariable=self.current_var, bg=PANEL_BG, fg=FG,
                 anchor="e", font=DISPLAY_FONT).pack(fill="x", padx=6)

        row = tk.Frame(disp, bg=PANEL_BG)
        row.pack(fill="x", padx=6, pady=(0, 6))
        tk.Label(row, textvariable=self.status_var, bg=PANEL_BG, fg=ERROR_FG,
                 anchor="w", font=CAPTION_FONT).pack(side="left")
        tk.Label(row, textvariable=self.operation_var, bg=PANEL_BG, fg=MUTED,
                 anchor="e", font=CAPTION_FONT).pack(side="right")

    def _build_keypad(self):
        """Equal-sized tiles; operators get a slightly lighter background."""
        tiles = tk.Frame(self, bg=PANEL_BG)
        tiles.pack(fill="both", expand=True, padx=8, pady=8)
        for r, row in enumerate(KEYPAD):
            for c, label in enumerate(row):
                bg = BTN_BG if label.isdigit() or label == "." else OP_BG
                btn = tk.Button(tiles, text=label, bg=bg, fg=FG, relief="flat",
                                command=lambda l=label: self._on_press(l))
                btn.grid(row=r, column=c, sticky="nsew", padx=3, pady=3)
                tiles.grid_columnconfigure(c, weight=1)
            tiles.grid_rowconfigure(r, weight=1)

    # -------------------------
    # Input handling
    # -------------------------
    def _on_press(self, label: str):
        """Forward one button to the engine; a rejected press leaves the displays as they were."""
        try:
            press(self.engine, label)
        except CalculatorError as e:
            logger.warning("Ignored %r: %s", label, e)
            self._show_status(f"Error: {e}")
        self._refresh()

    def _on_key(self, event):
        label = KEY_BINDINGS.get(event.keysym)
        if label is None:
            return None
        self._on_press(label)
        return "break"

    def _refresh(self):
        """Redraw the displays from the engine registers."""
        self.total_var.set(format_number(self.engine.total))
        self.current_var.set(format_number(self.engine.current))
        last = self.engine.last_operation
        self.operation_var.set(str(last) if last is not None else "")
        if self.history_window is not None:
            self._fill_history(self.history_list)

    def _show_status(self, message: str):
        """Show a message in the status line and clear it after a short delay."""
        if self._status_job is not None:
            self.after_cancel(self._status_job)
        self.status_var.set(message)
        self._status_job = self.after(STATUS_TIMEOUT_MS, self._clear_status)

    def _clear_status(self):
        self._status_job = None
        self.status_var.set("")

    # -------------------------
    # History overlay
    # -------------------------
    def toggle_history(self):
        """Open or close the operation-log overlay (bottom anchored)."""
        if self.history_window is not None and self.history_window.winfo_exists():
            self._close_history()
            return
        win = tk.Toplevel(self)
        win.title("History")
        win.geometry(f"{self.winfo_width()}x180+{self.winfo_rootx()}+{self.winfo_rooty() + self.winfo_height() - 180}")
        win.transient(self)
        win.protocol("WM_DELETE_WINDOW", self._close_history)
        self.history_window = win

        frm = tk.Frame(win, bg="#0e0f10")
        frm.pack(fill="both", expand=True)
        self.history_list = tk.Listbox(frm, bg="#0e0f10", fg=FG)
        self.history_list.pack(side="left", fill="both", expand=True, padx=6, pady=6)

        scrollbar = tk.Scrollbar(frm, command=self.history_list.yview)
        self.history_list.config(yscrollcommand=scrollbar.set)
        scrollbar.pack(side="right", fill="y")

        self._fill_history(self.history_list)

    def _fill_history(self, listbox: tk.Listbox):
        """Show the most recent operations, newest last."""
        history = self.engine.history
        listbox.delete(0, "end")
        start = max(len(history) - HISTORY_LIMIT, 0)
        for i, operation in enumerate(history[start:], start=start + 1):
            listbox.insert("end", f"{i:>4}  {operation}")
        listbox.see("end")

    def _close_history(self):
        """Close the history window if open."""
        if self.history_window is not None:
            self.history_window.destroy()
            self.history_window = None

    # -------------------------
    # Shutdown
    # -------------------------
    def _on_close(self):
        """Persist the snapshot (when enabled) and close the window."""
        if self.state_path is not None:
            try:
                save_engine(self.engine, self.state_path)
            except OSError as e:
                logger.error("Could not save state to %s: %s", self.state_path, e)
        self.destroy()


# -------------------------
# Run the application
# -------------------------
def main():
    app = CalculatorGUI()
    app.mainloop()


if __name__ == "__main__":
    main()
