import logging
import threading
import pystray
from PIL import Image, ImageDraw

from .config import LOGGER_NAME


class TrayController:
    def __init__(self, title: str, on_show, on_quit, logger: logging.Logger | None = None):
        self._title = title
        self._on_show = on_show
        self._on_quit = on_quit
        self._logger = logger or logging.getLogger(LOGGER_NAME)

        self._icon = None
        self._thread = None
        self._running = False

    def _make_icon_image(self) -> Image.Image:
        img = Image.new("RGB", (64, 64), color=(18, 18, 18))
        draw = ImageDraw.Draw(img)
        # tomato with a stem
        draw.ellipse((10, 14, 54, 56), fill=(214, 64, 52))
        draw.rectangle((29, 6, 35, 18), fill=(3, 218, 198))
        return img

    def ensure_running(self) -> None:
        if self._icon is not None and self._running:
            return

        def on_show(icon, item):
            self._on_show()

        def on_quit(icon, item):
            self._on_quit()

        menu = pystray.Menu(
            pystray.MenuItem("Show", on_show, default=True),
            pystray.MenuItem("Quit", on_quit),
        )

        self._icon = pystray.Icon("PomodoroCalendar", self._make_icon_image(), self._title, menu)

        def run_icon():
            self._running = True
            try:
                self._icon.run()
            except Exception:
                self._logger.exception("Tray icon loop failed")
            finally:
                self._running = False

        self._thread = threading.Thread(target=run_icon, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._icon is None:
            return
        try:
            self._icon.stop()
        except Exception:
            self._logger.exception("Tray icon stop failed")
        self._icon = None
