import tkinter as tk
from tkinter import filedialog
from pathlib import Path
import json
import logging

from apo2cdsp.errors import FileAccessError, ParseError
from apo2cdsp.file_utils import read_file, validate_file_access, write_file
from apo2cdsp.parser import parse_filters, read_preamp, strip_preamp, to_json, truncate_middle

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".apo2cdsp"
CONFIG_PATH = CONFIG_DIR / "config.json"

DEFAULT_CONFIG = {
    "last_file": "",
    "export_dir": "",
    "last_file_name": "cdsp_settings",
    "override_name": True,
    "window_x": None,
    "window_y": None,
    "window_width": None,
    "window_height": None,
}


def load_config():
    config = dict(DEFAULT_CONFIG)
    if CONFIG_PATH.exists():
        try:
            with open(CONFIG_PATH, 'r', encoding='utf-8') as f:
                config.update(json.load(f))
        except (OSError, ValueError) as e:
            logger.error("Error reading config: %s", e)
    return config


def save_config(state):
    """
    Persist the window state into config.json.

    Values in state may be tk variables or plain values.
    """
    config = load_config()

    def get_val(key, default=None):
        v = state.get(key)
        if hasattr(v, 'get'):
            return v.get()
        return v if v is not None else default

    config.update({
        "last_file": get_val("current_file", ""),
        "export_dir": get_val("save_dir", ""),
        "last_file_name": get_val("file_name", DEFAULT_CONFIG["last_file_name"]),
        "override_name": get_val("override_name", True),
    })
    for key in ("window_x", "window_y", "window_width", "window_height"):
        if key in state:
            config[key] = state[key]

    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_PATH, 'w', encoding='utf-8') as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
    except OSError as e:
        logger.error("Error saving config: %s", e)


def get_default_export_dir():
    return str(Path.home())


def load_from_path(path, update_file_name, state):
    try:
        validate_file_access(path)
        content = read_file(path)
        result = parse_filters(strip_preamp(content))
    except (ParseError, FileAccessError, OSError) as e:
        state['result'] = None
        state['status_var'].set(f"Error loading file: {e}")
        return

    state['result'] = result
    tree = state['tree']
    for row in tree.get_children():
        tree.delete(row)
    for record in result.records:
        tree.insert('', tk.END, values=(record.center_frequency_hz, record.gain_db, record.q_factor))

    state['current_file'].set(str(path))
    if state['override_name'].get():
        state['file_name'].set(Path(path).stem)

    status = f"Loaded {result.filter_count} filters from {path}"
    preamp = read_preamp(content)
    if preamp is not None:
        status += f" (preamp {preamp} dB not exported)"
    state['status_var'].set(status)

    if update_file_name:
        save_config(state)


def load_file(state):
    current = state['current_file'].get()
    file_path = filedialog.askopenfilename(
        filetypes=[("Text files", "*.txt")],
        initialdir=Path(current).parent if current else None
    )
    if file_path:
        load_from_path(file_path, True, state)


def choose_dir(state):
    dir_path = filedialog.askdirectory(initialdir=state['save_dir'].get())
    if dir_path:
        state['save_dir'].set(str(dir_path))
        state['path_label'].config(text=truncate_middle(dir_path))
        save_config(state)


def export_json(state):
    result = state.get('result')
    if result is None:
        state['status_var'].set("No filters to export.")
        return
    filename = state['file_name'].get().strip()
    directory = state['save_dir'].get().strip()
    if not filename:
        state['status_var'].set("Filename is empty")
        return
    if not directory:
        state['status_var'].set("Directory not selected")
        return
    output_path = Path(directory) / f"{filename}.json"
    try:
        write_file(output_path, to_json(result.data))
    except OSError as e:
        state['status_var'].set(f"Error saving file: {e}")
        return
    state['status_var'].set(f"Saved to {output_path}")
    save_config(state)


def on_drop(event, state):
    paths = state['root'].tk.splitlist(event.data)
    if not paths:
        return
    path = paths[0]
    if path.lower().endswith(".txt"):
        load_from_path(path, True, state)
    else:
        state['status_var'].set(f"Not a .txt file: {path}")


def save_window_position(root, state):
    state['window_x'] = root.winfo_x()
    state['window_y'] = root.winfo_y()
    state['window_width'] = root.winfo_width()
    state['window_height'] = root.winfo_height()
    save_config(state)
