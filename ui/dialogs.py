# ============================================================
# ui/dialogs.py — Mode Selection Dialog
# ============================================================

import tkinter as tk
from typing import Optional


def show_mode_dialog() -> Optional[str]:
    """Select Generator or Detector mode. Returns 'generate', 'detect', or None."""
    chosen = {"value": None}

    root = tk.Tk()
    root.title("ArUco Marker Console")
    root.resizable(False, False)
    root.geometry("450x230")
    root.configure(bg="#1e1e2e")

    root.update_idletasks()
    x = (root.winfo_screenwidth()  - 450) // 2
    y = (root.winfo_screenheight() - 230) // 2
    root.geometry(f"+{x}+{y}")

    tk.Label(
        root, text="Choose Mode",
        font=("Segoe UI", 16, "bold"),
        fg="white", bg="#1e1e2e"
    ).pack(pady=(24, 4))

    tk.Label(
        root, text="Generate printable markers or detect them live:",
        font=("Segoe UI", 10),
        fg="#aaa", bg="#1e1e2e"
    ).pack(pady=(0, 20))

    btn_frame = tk.Frame(root, bg="#1e1e2e")
    btn_frame.pack()

    def pick(mode):
        chosen["value"] = mode
        root.destroy()

    gen_btn = tk.Button(
        btn_frame, text="🔲 Generator\n(Design & save markers)",
        font=("Segoe UI", 11, "bold"),
        bg="#00c853", fg="white", relief="flat",
        activebackground="#00a043", cursor="hand2",
        width=18, height=3, command=lambda: pick("generate")
    )
    gen_btn.grid(row=0, column=0, padx=12)

    det_btn = tk.Button(
        btn_frame, text="📷 Detector\n(Find markers on camera)",
        font=("Segoe UI", 11, "bold"),
        bg="#ff6f00", fg="white", relief="flat",
        activebackground="#e65100", cursor="hand2",
        width=18, height=3, command=lambda: pick("detect")
    )
    det_btn.grid(row=0, column=1, padx=12)

    root.protocol("WM_DELETE_WINDOW", root.destroy)
    root.mainloop()

    return chosen["value"]
