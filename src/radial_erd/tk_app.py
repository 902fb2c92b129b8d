from __future__ import annotations

import logging
import tkinter as tk
from contextlib import contextmanager
from tkinter import messagebox, simpledialog, ttk
from typing import Any, Iterator

from .interaction import InteractionController
from .styles import FONT_SIZES, STROKE_WIDTHS
from .surface import Point2D
from .theme import DEFAULTS, DiagramColors, resolve_palette
from .types import DiagramOptions

logger = logging.getLogger(__name__)

DIAGRAM_TAG = "diagram"


class TkCanvasSurface:
    """Drawing surface backed by a tkinter Canvas (or anything with its API)."""

    def __init__(
        self,
        canvas: Any,
        width: float,
        height: float,
        colors: DiagramColors | None = None,
        font_family: str = "Segoe UI",
    ) -> None:
        self.canvas = canvas
        self.width = width
        self.height = height
        self.palette = resolve_palette(
            colors or DiagramColors(bg=DEFAULTS["bg"], fg=DEFAULTS["fg"])
        )
        self.font = (font_family, FONT_SIZES["node_label"])

    def clear(self) -> None:
        self.canvas.delete("all")

    def stroke_circle(self, x: float, y: float, radius: float) -> None:
        self.canvas.create_oval(
            x - radius, y - radius, x + radius, y + radius,
            outline=self.palette["node_stroke"],
            width=STROKE_WIDTHS["node"],
            tags=(DIAGRAM_TAG,),
        )

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        self.canvas.create_oval(
            x - radius, y - radius, x + radius, y + radius,
            fill=self.palette["node_fill"],
            outline="",
            tags=(DIAGRAM_TAG,),
        )

    def draw_text(self, x: float, y: float, text: str) -> None:
        self.canvas.create_text(
            x, y,
            text=text,
            anchor="center",
            font=self.font,
            fill=self.palette["text"],
            tags=(DIAGRAM_TAG,),
        )

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.canvas.create_line(
            x1, y1, x2, y2,
            fill=self.palette["line"],
            width=STROKE_WIDTHS["edge"],
            tags=(DIAGRAM_TAG,),
        )

    def fill_triangle(self, a: Point2D, b: Point2D, c: Point2D) -> None:
        self.canvas.create_polygon(
            a[0], a[1], b[0], b[1], c[0], c[1],
            fill=self.palette["arrow"],
            outline="",
            tags=(DIAGRAM_TAG,),
        )

    @contextmanager
    def scaled(self, factor: float) -> Iterator[None]:
        # Tk has no transform stack: draw at 1:1, then scale the drawn items
        yield
        if factor != 1:
            self.canvas.scale(DIAGRAM_TAG, 0, 0, factor, factor)


class ErdApp(ttk.Frame):
    """DDL text box + Generate button + interactive diagram canvas."""

    def __init__(
        self,
        parent: tk.Misc,
        *,
        initial_sql: str = "",
        colors: DiagramColors | None = None,
        options: DiagramOptions | None = None,
    ) -> None:
        super().__init__(parent, padding=8)
        self.status_var = tk.StringVar(value="Paste CREATE TABLE statements and press Generate.")

        self.columnconfigure(0, weight=3)
        self.columnconfigure(1, weight=1)
        self.rowconfigure(0, weight=1)

        palette = resolve_palette(colors or DiagramColors(bg=DEFAULTS["bg"], fg=DEFAULTS["fg"]))
        self.canvas = tk.Canvas(self, background=palette["bg"], highlightthickness=0)
        self.canvas.grid(row=0, column=0, sticky="nsew", padx=(0, 8))

        editor = ttk.LabelFrame(self, text="SQL", padding=8)
        editor.grid(row=0, column=1, sticky="nsew")
        editor.rowconfigure(0, weight=1)
        editor.columnconfigure(0, weight=1)
        self.sql_text = tk.Text(editor, width=40, wrap="none", font=("Consolas", 10))
        self.sql_text.grid(row=0, column=0, sticky="nsew")
        self.sql_text.insert("1.0", initial_sql)
        ttk.Button(editor, text="Generate", command=self._generate).grid(
            row=1, column=0, sticky="ew", pady=(8, 0)
        )

        ttk.Label(self, textvariable=self.status_var).grid(
            row=1, column=0, columnspan=2, sticky="w", pady=(8, 0)
        )

        self.surface = TkCanvasSurface(self.canvas, 800, 600, colors)
        self.controller = InteractionController(
            self.surface,
            confirm=self._confirm,
            prompt=self._prompt,
            text_source=lambda: self.sql_text.get("1.0", "end-1c"),
            options=options,
        )

        self.canvas.bind("<Configure>", self._on_configure)
        self.canvas.bind("<ButtonPress-1>", self._on_press)
        self.canvas.bind("<B1-Motion>", self._on_motion)
        self.canvas.bind("<ButtonRelease-1>", lambda _event: self.controller.release())
        self.canvas.bind("<Double-Button-1>", self._on_double_click)
        self.canvas.bind("<Button-3>", self._on_secondary)
        self.canvas.bind("<Control-MouseWheel>", self._on_zoom_wheel)
        # X11 reports wheel notches as buttons 4 (up) and 5 (down)
        self.canvas.bind("<Control-Button-4>", lambda _event: self._zoom(-1))
        self.canvas.bind("<Control-Button-5>", lambda _event: self._zoom(1))

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def _confirm(self, message: str) -> bool:
        return bool(messagebox.askyesno("Delete node", message, parent=self))

    def _prompt(self, message: str, default: str) -> str | None:
        return simpledialog.askstring("Rename node", message, initialvalue=default, parent=self)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _generate(self) -> None:
        model = self.controller.generate()
        self.status_var.set(f"Rendered {len(model.entities)} tables.")

    def _on_configure(self, event: tk.Event) -> None:
        self.controller.resize(event.width, event.height)

    def _on_press(self, event: tk.Event) -> None:
        self.controller.press(float(event.x), float(event.y))

    def _on_motion(self, event: tk.Event) -> None:
        self.controller.move(float(event.x), float(event.y))

    def _on_double_click(self, event: tk.Event) -> None:
        self.controller.rename_at(float(event.x), float(event.y))
        # The dialog swallows the button release
        self.controller.release()

    def _on_secondary(self, event: tk.Event) -> None:
        self.controller.delete_at(float(event.x), float(event.y))

    def _on_zoom_wheel(self, event: tk.Event) -> None:
        # Tk's delta is positive when scrolling up, the opposite of a browser's deltaY
        self._zoom(-event.delta)

    def _zoom(self, delta_y: float) -> None:
        zoom = self.controller.wheel(delta_y, modifier=True)
        self.status_var.set(f"Zoom {zoom:.0%}")


def run_app(
    initial_sql: str = "",
    colors: DiagramColors | None = None,
    options: DiagramOptions | None = None,
) -> None:
    root = tk.Tk()
    root.title("Radial ERD")
    root.geometry("1200x800")
    ttk.Style().theme_use("clam")
    app = ErdApp(root, initial_sql=initial_sql, colors=colors, options=options)
    app.pack(fill="both", expand=True)
    logger.info("Diagram window opened")
    root.mainloop()
