"""Executable Textual app that hosts the grid engine."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use grid_engine.adapters.textual.app"
    ) from exc

from rich.text import Text

from grid_engine.config.settings import EngineSettings, load_settings
from grid_engine.grid.snapshot import JsonFileStore
from grid_engine.runtime import telemetry
from grid_engine.runtime.telemetry import TelemetryConfig
from grid_engine.session import EditorSession, open_session

from .controller import TextualGridAdapter, TextualUIHooks

TICK_INTERVAL = 1 / 60


@dataclass
class UIState:
    status_text: str = ""
    event_text: str = ""


class GridView(Static, can_focus=True):
    """Focusable surface forwarding mouse and key input to the adapter."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__("", **kwargs)
        self.adapter: TextualGridAdapter | None = None

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.width, event.size.height)

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if not self.adapter:
            return
        self.capture_mouse()
        self.adapter.handle_mouse_down(
            event.x, event.y, button=event.button, shift=event.shift, ctrl=event.ctrl
        )
        event.stop()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if not self.adapter:
            return
        self.adapter.handle_mouse_move(
            event.x,
            event.y,
            button=event.button,
            shift=event.shift,
            ctrl=event.ctrl,
            delta_x=event.delta_x,
            delta_y=event.delta_y,
        )

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if not self.adapter:
            return
        self.release_mouse()
        self.adapter.handle_mouse_up(
            event.x, event.y, button=event.button, shift=event.shift, ctrl=event.ctrl
        )
        event.stop()

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        if self.adapter:
            self.adapter.handle_scroll(1)
        event.stop()

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        if self.adapter:
            self.adapter.handle_scroll(-1)
        event.stop()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = _normalize_key(event)
        if normalized is None:
            return
        key, character, modifiers = normalized
        self.adapter.handle_textual_key(key, character=character, modifiers=modifiers)
        event.prevent_default()
        event.stop()


class GridEditorApp(App[None]):
    """Minimal Textual UI embedding the grid engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#grid-view {
		height: 1fr;
		overflow: hidden;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#event-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, settings: EngineSettings | None = None) -> None:
        super().__init__()
        self.settings = settings or load_settings()
        self._state = UIState()
        self.session: EditorSession | None = None
        self.adapter: TextualGridAdapter | None = None
        self._grid_widget: GridView | None = None
        self._status_widget: Static | None = None
        self._event_widget: Static | None = None
        self.logger = telemetry.get_logger("grid_engine.app")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._grid_widget = GridView(id="grid-view")
        self._status_widget = Static("", id="status-line")
        self._event_widget = Static("", id="event-line")
        yield self._grid_widget
        yield self._status_widget
        yield self._event_widget
        yield Footer()

    def on_mount(self) -> None:
        store = JsonFileStore(self.settings.store_path, key=self.settings.store_key)
        self.session = open_session(store, settings=self.settings)
        hooks = TextualUIHooks(
            render=self._render_grid,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        size = (80, 24)
        if self._grid_widget is not None:
            size = (self._grid_widget.size.width or 80, self._grid_widget.size.height or 24)
        self.adapter = TextualGridAdapter(self.session, hooks, size=size)
        if self._grid_widget is not None:
            self._grid_widget.adapter = self.adapter
            self._grid_widget.focus()
        self.set_interval(TICK_INTERVAL, self._tick)

    def on_unmount(self) -> None:
        if self.session:
            self.session.close()

    def _tick(self) -> None:
        if self.adapter:
            self.adapter.tick()

    def _render_grid(self, frame: Text) -> None:
        if self._grid_widget:
            self._grid_widget.update(frame)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        text = name if payload is None else f"{name}: {payload}"
        self._state.event_text = text
        if self._event_widget:
            self._event_widget.update(text)

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _normalize_key(
    event: events.Key,
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    key = event.key
    if key == "ctrl+q":
        return None
    parts = key.split("+")
    modifiers = tuple(part for part in parts[:-1] if part in {"ctrl", "alt", "shift"})
    name = parts[-1] if modifiers else key
    character = event.character if event.is_printable else None
    return (name, character, modifiers)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the grid editor Textual app.")
    parser.add_argument(
        "--store",
        default=None,
        help="JSON file holding the saved grid (default: GRID_ENGINE_STORE_PATH)",
    )
    parser.add_argument("--rows", type=int, default=None, help="Grid rows")
    parser.add_argument("--cols", type=int, default=None, help="Grid columns")
    parser.add_argument(
        "--log-file",
        default=os.environ.get("GRID_ENGINE_LOG_FILE", ""),
        help="Write engine logs to this file (the terminal is owned by the UI)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("GRID_ENGINE_LOG_LEVEL", "INFO"),
        help="Minimum log level (default: INFO)",
    )
    return parser.parse_args(argv)


def _apply_overrides(settings: EngineSettings, args: argparse.Namespace) -> EngineSettings:
    overrides = {
        "store_path": args.store,
        "rows": args.rows,
        "cols": args.cols,
    }
    return replace(settings, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(
        config=TelemetryConfig(
            min_level=args.log_level.upper(),
            console=False,
            log_file=args.log_file,
        )
    )
    settings = _apply_overrides(load_settings(), args)
    app = GridEditorApp(settings=settings)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
