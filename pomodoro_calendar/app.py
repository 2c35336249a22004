import customtkinter as ctk

from .config import APP_TITLE, APPDATA_DIR, DATA_FILE, CALENDAR_WEEKS
from .utils import ensure_dir, seconds_to_mmss
from .logging_setup import setup_logger
from .audio import SoundPlayer
from .history_store import HistoryStore
from .counter import DailyCounter
from .timer_engine import Mode, TimerEngine
from .calendar_view import WEEKDAY_HEADERS, month_title
from .controller import PomodoroController
from .tray import TrayController


ctk.set_appearance_mode("Dark")
ctk.set_default_color_theme("blue")

PRIMARY = "#bb86fc"
PRIMARY_HOVER = "#9a67ea"
SECONDARY = "#03dac6"
SECONDARY_HOVER = "#33e1d1"
BACKGROUND = "#121212"
SURFACE = "#1e1e1e"
TODAY_BG = "#4a3766"


class PomodoroApp:
    def __init__(self):
        ensure_dir(APPDATA_DIR)

        self.logger = setup_logger()
        self.logger.info("App start")

        self.root = ctk.CTk(fg_color=BACKGROUND)
        self.root.title(APP_TITLE)
        self.root.geometry("480x760")
        self.root.minsize(480, 760)
        self.root.protocol("WM_DELETE_WINDOW", self.hide_to_tray)

        self.counter = DailyCounter(HistoryStore(DATA_FILE), self.logger)
        self.counter.load()

        self.controller = PomodoroController(
            engine=TimerEngine(),
            counter=self.counter,
            sound=SoundPlayer(self.logger),
            schedule=self.root.after,
            cancel=self.root.after_cancel,
            logger=self.logger,
        )

        self.tray = TrayController(
            title=APP_TITLE,
            on_show=self.show_from_tray,
            on_quit=self.quit_app,
            logger=self.logger,
        )

        self._build_ui()
        self.controller.add_listener(self._refresh)
        self._refresh()
        self.controller.start_ticking()

    # UI
    def _build_ui(self) -> None:
        self.frame_modes = ctk.CTkFrame(self.root, fg_color="transparent")
        self.frame_modes.pack(padx=18, pady=(24, 8), fill="x")

        self.mode_buttons: dict[Mode, ctk.CTkButton] = {}
        for col, mode in enumerate(Mode):
            btn = ctk.CTkButton(
                self.frame_modes,
                text=mode.label,
                fg_color=PRIMARY,
                hover_color=PRIMARY_HOVER,
                text_color="black",
                corner_radius=8,
                command=lambda m=mode: self.controller.select_mode(m),
            )
            btn.grid(row=0, column=col, padx=6, sticky="ew")
            self.frame_modes.grid_columnconfigure(col, weight=1)
            self.mode_buttons[mode] = btn

        self.time_label = ctk.CTkLabel(self.root, text="00:00", font=("Roboto", 80, "bold"))
        self.time_label.pack(pady=(28, 6))

        self.daily_label = ctk.CTkLabel(self.root, text="Daily Pomodoros: 0", font=("Arial", 18))
        self.daily_label.pack(pady=(0, 20))

        self.frame_control = ctk.CTkFrame(self.root, fg_color="transparent")
        self.frame_control.pack(padx=18, pady=(0, 24), fill="x")

        self.start_btn = self._control_button("Start", self.controller.start, 0)
        self.stop_btn = self._control_button("Stop", self.controller.stop, 1)
        self.reset_btn = self._control_button("Reset", self.controller.reset, 2)

        self.frame_calendar = ctk.CTkFrame(self.root, fg_color="transparent")
        self.frame_calendar.pack(padx=18, pady=(6, 12), fill="both", expand=True)

        nav = ctk.CTkFrame(self.frame_calendar, fg_color="transparent")
        nav.pack(fill="x", pady=(0, 10))
        ctk.CTkButton(
            nav, text="< Prev", width=80, fg_color=SURFACE,
            command=lambda: self.controller.navigate_month(-1),
        ).pack(side="left")
        ctk.CTkButton(
            nav, text="Next >", width=80, fg_color=SURFACE,
            command=lambda: self.controller.navigate_month(1),
        ).pack(side="right")
        self.month_label = ctk.CTkLabel(nav, text="", font=("Arial", 20, "bold"))
        self.month_label.pack(side="top", expand=True)
        # click the title to jump back to the current month
        self.month_label.bind("<Button-1>", lambda _e: self.controller.go_to_today())

        grid = ctk.CTkFrame(self.frame_calendar, fg_color="transparent")
        grid.pack(fill="both", expand=True)
        for col, name in enumerate(WEEKDAY_HEADERS):
            ctk.CTkLabel(grid, text=name, font=("Arial", 13, "bold")).grid(row=0, column=col, padx=2, pady=(0, 4))
            grid.grid_columnconfigure(col, weight=1)

        self.day_cells: list[ctk.CTkLabel] = []
        for i in range(CALENDAR_WEEKS * 7):
            cell = ctk.CTkLabel(
                grid, text="", width=52, height=44, corner_radius=8,
                fg_color=SURFACE, font=("Arial", 12),
            )
            cell.grid(row=1 + i // 7, column=i % 7, padx=2, pady=2, sticky="nsew")
            self.day_cells.append(cell)

        self.footer = ctk.CTkLabel(
            self.root,
            text='Tip: Click "X" to hide to tray. Use tray menu to show or quit.',
            text_color="gray",
        )
        self.footer.pack(pady=(0, 12))

    def _control_button(self, text: str, command, col: int) -> ctk.CTkButton:
        btn = ctk.CTkButton(
            self.frame_control,
            text=text,
            fg_color=SECONDARY,
            hover_color=SECONDARY_HOVER,
            text_color="black",
            corner_radius=8,
            command=command,
        )
        btn.grid(row=0, column=col, padx=6, sticky="ew")
        self.frame_control.grid_columnconfigure(col, weight=1)
        return btn

    def _refresh(self) -> None:
        st = self.controller.state
        self.time_label.configure(text=seconds_to_mmss(st.remaining_sec))
        self.daily_label.configure(text=f"Daily Pomodoros: {self.controller.today_count()}")
        self.root.title(f"{seconds_to_mmss(st.remaining_sec)} | {st.mode.label} | {APP_TITLE}")

        for mode, btn in self.mode_buttons.items():
            btn.configure(border_width=2 if mode is st.mode else 0, border_color="white")
        self.start_btn.configure(state="disabled" if st.is_running else "normal")
        self.stop_btn.configure(state="normal" if st.is_running else "disabled")

        year, month = self.controller.displayed_month
        self.month_label.configure(text=month_title(year, month))
        for label, cell in zip(self.day_cells, self.controller.month_grid()):
            if cell.is_empty:
                label.configure(text="", fg_color="transparent")
                continue
            text = str(cell.day) if cell.count <= 0 else f"{cell.day}\n{cell.count}"
            label.configure(text=text, fg_color=TODAY_BG if cell.is_today else SURFACE)

    # Tray
    def hide_to_tray(self) -> None:
        self.logger.info("Hide to tray")
        self.tray.ensure_running()
        self.root.withdraw()

    def show_from_tray(self) -> None:
        self.logger.info("Show from tray")

        def _do():
            self.root.deiconify()
            self.root.lift()
            self.root.focus_force()

        self.root.after(0, _do)

    def quit_app(self) -> None:
        self.logger.info("Quit requested")

        def _do():
            self.controller.shutdown()
            self.tray.stop()
            self.root.destroy()

        self.root.after(0, _do)

    def run(self) -> None:
        self.root.mainloop()
        self.logger.info("App stopped")
