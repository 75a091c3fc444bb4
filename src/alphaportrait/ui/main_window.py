from __future__ import annotations

import logging
import os
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from alphaportrait.app.controller import SessionController
from alphaportrait.app.export import DEFAULT_EXPORT_NAME
from alphaportrait.app.state import AppState
from alphaportrait.app.timers import TkScheduler
from alphaportrait.core.config import EnhancerConfig
from alphaportrait.core.errors import ConfigError, EncodingError
from alphaportrait.core.models import Phase, StatusStep
from alphaportrait.enhance.client import EnhancementClient
from alphaportrait.ui.image_canvas import ImageCanvas

logger = logging.getLogger(__name__)

IMAGE_FILETYPES = [
    ("Image files", "*.jpg *.jpeg *.png *.webp *.heic *.heif *.bmp *.gif"),
    ("All files", "*.*"),
]

HINTS = {
    Phase.READY: "Upload a reference portrait.",
    Phase.RESULT: "Enhancement complete. Save the result or restart.",
}


class AlphaPortraitApp(ttk.Frame):
    """Upload -> render -> compare wizard. Reads AppState, writes only through the controller."""

    def __init__(self, master: tk.Tk, client: EnhancementClient):
        super().__init__(master)
        self.master = master
        self.controller = SessionController(
            client,
            AppState(),
            post=lambda fn: self.master.after(0, fn),
            scheduler=TkScheduler(master),
        )

        self._build_style()
        self._build_layout()
        self._bind_shortcuts()

        self.controller.subscribe(self.render)
        self.render(self.controller.state)

    @property
    def state(self) -> AppState:
        return self.controller.state

    # ---------- UI construction ----------

    def _build_style(self) -> None:
        style = ttk.Style(self.master)
        if "clam" in style.theme_names():
            style.theme_use("clam")
        style.configure("Error.TLabel", foreground="#d9534f")

    def _build_layout(self) -> None:
        self.pack(fill="both", expand=True)

        toolbar = ttk.Frame(self, padding=(10, 8))
        toolbar.pack(side="top", fill="x")

        self.btn_upload = ttk.Button(toolbar, text="Upload", command=self.on_upload)
        self.btn_render = ttk.Button(toolbar, text="Render Enhancement", command=self.on_render)
        self.btn_clear = ttk.Button(toolbar, text="Clear Selection", command=self.controller.clear_selection)
        self.btn_save = ttk.Button(toolbar, text="Save Enhanced", command=self.on_save)
        self.btn_restart = ttk.Button(toolbar, text="Restart", command=self.controller.reset)

        self.btn_upload.pack(side="left")
        ttk.Separator(toolbar, orient="vertical").pack(side="left", fill="y", padx=8)
        self.btn_render.pack(side="left")
        self.btn_clear.pack(side="left", padx=(6, 0))
        self.btn_save.pack(side="left", padx=(6, 0))
        self.btn_restart.pack(side="left", padx=(12, 0))

        self.progress = ttk.Progressbar(toolbar, mode="indeterminate", length=120)
        self.progress.pack(side="right")

        main = ttk.PanedWindow(self, orient="horizontal")
        main.pack(side="top", fill="both", expand=True, padx=10, pady=(0, 10))

        lf_orig = ttk.LabelFrame(main, text="Original", padding=8)
        main.add(lf_orig, weight=1)
        self.original_canvas = ImageCanvas(lf_orig, placeholder="Drop reference portrait")
        self.original_canvas.pack(fill="both", expand=True)
        self.original_meta = ttk.Label(lf_orig, text="No file loaded.")
        self.original_meta.pack(side="bottom", anchor="w", pady=(6, 0))

        lf_enh = ttk.LabelFrame(main, text="Sony A1 Render", padding=8)
        main.add(lf_enh, weight=1)
        self.enhanced_canvas = ImageCanvas(lf_enh, placeholder="Not rendered yet")
        self.enhanced_canvas.pack(fill="both", expand=True)
        self.enhanced_meta = ttk.Label(lf_enh, text="85mm f1.6 · ISO 100 · 1/200s")
        self.enhanced_meta.pack(side="bottom", anchor="w", pady=(6, 0))

        status = ttk.Frame(self, padding=(10, 6))
        status.pack(side="bottom", fill="x")
        self.status_var = tk.StringVar(value="")
        self.status_label = ttk.Label(status, textvariable=self.status_var)
        self.status_label.pack(side="left")

    def _bind_shortcuts(self) -> None:
        for mod in ("Control", "Command"):
            self.master.bind_all(f"<{mod}-o>", lambda e: self.on_upload())
            self.master.bind_all(f"<{mod}-r>", lambda e: self.on_render())
            self.master.bind_all(f"<{mod}-s>", lambda e: self.on_save())

    # ---------- Rendering ----------

    @staticmethod
    def _enable(btn: ttk.Button, enabled: bool) -> None:
        btn.state(["!disabled"] if enabled else ["disabled"])

    def render(self, state: AppState) -> None:
        phase = state.phase
        processing = phase is Phase.PROCESSING

        self._enable(self.btn_upload, phase is Phase.READY)
        self._enable(self.btn_render, state.can_start)
        self._enable(self.btn_clear, phase is Phase.READY and state.selected_input is not None)
        self._enable(self.btn_save, phase is Phase.RESULT)
        self._enable(self.btn_restart, not processing)

        if processing:
            self.progress.start(12)
        else:
            self.progress.stop()

        if state.result is not None:
            self.original_canvas.set_data_uri(state.result.original_encoding)
            self.enhanced_canvas.set_data_uri(state.result.enhanced_encoding)
        else:
            self.original_canvas.set_data_uri(state.preview_encoding)
            self.enhanced_canvas.clear()

        sel = state.selected_input
        if sel is None:
            self.original_meta.configure(text="No file loaded.")
        else:
            self.original_meta.configure(text=f"File: {os.path.basename(sel.path)}   Type: {sel.mime_type}")

        is_error = state.status.step is StatusStep.ERROR
        self.status_label.configure(style="Error.TLabel" if is_error else "TLabel")
        if processing or is_error:
            self.status_var.set(state.status.message)
        elif phase is Phase.READY and state.can_start:
            self.status_var.set("Portrait loaded. Ready to render.")
        else:
            self.status_var.set(HINTS.get(phase, ""))

    # ---------- Actions ----------

    def on_upload(self) -> None:
        if self.state.phase is not Phase.READY:
            return
        path = filedialog.askopenfilename(title="Select a portrait", filetypes=IMAGE_FILETYPES)
        if path:
            self.controller.select_file(path)

    def on_render(self) -> None:
        if not self.controller.start_enhancement():
            logger.debug("Render ignored in phase %s", self.state.phase.value)

    def on_save(self) -> None:
        if self.state.phase is not Phase.RESULT:
            return
        path = filedialog.asksaveasfilename(
            title="Save enhanced portrait",
            initialfile=DEFAULT_EXPORT_NAME,
            defaultextension=".png",
            filetypes=[("PNG", "*.png"), ("JPEG", "*.jpg *.jpeg"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            out = self.controller.save_result(path)
        except (EncodingError, OSError) as e:
            logger.exception("Saving enhanced portrait failed")
            messagebox.showerror("Save failed", f"Could not save the image.\n\n{e}")
            return
        self.status_var.set(f"Saved {os.path.basename(out)}.")


def run() -> None:
    try:
        config = EnhancerConfig.from_env()
    except ConfigError as e:
        # Tk is needed to show the dialog even though the app will not start
        root = tk.Tk()
        root.withdraw()
        messagebox.showerror("AlphaPortrait", str(e))
        root.destroy()
        raise SystemExit(2) from e

    root = tk.Tk()
    root.title("AlphaPortrait · Sony A1 Enhancement")
    root.geometry("1100x700")
    root.minsize(900, 600)

    AlphaPortraitApp(root, EnhancementClient(config))

    root.mainloop()
