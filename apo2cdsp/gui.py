import tkinter as tk
from tkinter import ttk
from tkinterdnd2 import DND_FILES, TkinterDnD
from apo2cdsp.parser import truncate_middle
from apo2cdsp.main import (
    load_config, get_default_export_dir, save_window_position,
    load_from_path, load_file, choose_dir, export_json, on_drop
)


def launch_gui():
    root = TkinterDnD.Tk()
    root.title("APO to cDSP")

    config = load_config()
    if all(config.get(k) is not None for k in ("window_x", "window_y", "window_width", "window_height")):
        geom = f"{int(config['window_width'])}x{int(config['window_height'])}+{int(config['window_x'])}+{int(config['window_y'])}"
        root.geometry(geom)

    status_var = tk.StringVar(value="Drop an EqualizerAPO ParametricEq export here")
    current_file = tk.StringVar(value=config.get("last_file", ""))
    file_name = tk.StringVar(value=config.get("last_file_name"))
    default_path = config.get("export_dir") or get_default_export_dir()
    save_dir = tk.StringVar(value=default_path)
    override_name = tk.BooleanVar(value=config.get("override_name", True))

    status_label = ttk.Label(root, textvariable=status_var, anchor="w")
    status_label.pack(side=tk.BOTTOM, fill=tk.X)

    frame = ttk.Frame(root, padding=10)
    frame.pack(fill=tk.BOTH, expand=True)

    load_frame = ttk.Frame(frame)
    load_frame.pack(fill=tk.X)

    name_entry = ttk.Entry(load_frame, textvariable=file_name, width=60)
    name_entry.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=(0, 5))

    load_btn = ttk.Button(load_frame, text="Load APO File", command=lambda: load_file(state))
    load_btn.pack(side=tk.RIGHT)

    override_checkbox = ttk.Checkbutton(load_frame, text="Name from file", variable=override_name)
    override_checkbox.pack(side=tk.RIGHT, padx=(0, 5))

    export_frame = ttk.Frame(frame)
    export_frame.pack(pady=5, fill=tk.X)

    path_label = ttk.Label(export_frame, text=truncate_middle(default_path), anchor="w")
    path_label.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=(0, 5))
    export_btn = ttk.Button(export_frame, text="Export", command=lambda: export_json(state))
    export_btn.pack(side=tk.RIGHT)
    dir_btn = ttk.Button(export_frame, text="Dir for .json", command=lambda: choose_dir(state))
    dir_btn.pack(side=tk.RIGHT, padx=(5, 0))

    columns = ('Frequency', 'Gain', 'Q')
    tree = ttk.Treeview(frame, columns=columns, show='headings', height=10)
    for col in columns:
        tree.heading(col, text=col)
        tree.column(col, anchor='center')
    tree.pack(fill=tk.BOTH, expand=True)

    state = dict(
        root=root,
        status_var=status_var,
        current_file=current_file,
        file_name=file_name,
        save_dir=save_dir,
        override_name=override_name,
        tree=tree,
        path_label=path_label,
        result=None,
    )

    path_label.bind('<Configure>', lambda e: path_label.config(text=truncate_middle(save_dir.get(), path_label.winfo_width() // 7)))
    root.drop_target_register(DND_FILES)
    root.dnd_bind('<<Drop>>', lambda event: on_drop(event, state))

    def on_close():
        save_window_position(root, state)
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_close)

    if current_file.get():
        load_from_path(current_file.get(), False, state)
    root.mainloop()


def main():
    launch_gui()
